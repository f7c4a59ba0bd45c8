"""HTMSQL marketing site: SQLite-backed content blocks rendered to HTML."""

__version__ = "0.1.0"
