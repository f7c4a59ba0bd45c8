"""Page model."""

from __future__ import annotations

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from htmsql.models.base import Base

GLOBAL_SLUG = "global"


class Page(Base):
    """A routable page. The reserved ``global`` slug owns no row."""

    __tablename__ = "pages"

    slug: Mapped[str] = mapped_column(Text, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
