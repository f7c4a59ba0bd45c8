"""SQLAlchemy ORM models for the HTMSQL content store."""

from htmsql.models.base import Base
from htmsql.models.block import Block
from htmsql.models.page import GLOBAL_SLUG, Page

__all__ = [
    "GLOBAL_SLUG",
    "Base",
    "Block",
    "Page",
]
