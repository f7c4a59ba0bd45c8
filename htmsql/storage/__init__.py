"""Persistence layer: the database blob and the in-memory content store."""
