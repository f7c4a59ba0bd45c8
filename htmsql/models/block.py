"""Content block model."""

from __future__ import annotations

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from htmsql.models.base import Base


class Block(Base):
    """One renderable unit of a page (or of the global scope).

    ``page_slug`` refers to ``pages.slug`` by convention only; the global nav
    and footer live under ``global``, which has no page row.
    """

    __tablename__ = "blocks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    page_slug: Mapped[str] = mapped_column(Text, nullable=False)
    block_order: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
