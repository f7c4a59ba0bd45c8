"""Seed content catalogue."""
