"""
Term model - one value in a taxonomy (a category, a tag), optionally nested.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Term(Base):
    """Taxonomy term. parent == 0 means top level (no FK: 0 is a sentinel, not a row)."""

    __tablename__ = "terms"
    __table_args__ = (UniqueConstraint("taxonomy", "slug", name="uq_terms_taxonomy_slug"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    taxonomy: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    parent: Mapped[int] = mapped_column(nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Term(id={self.id}, taxonomy={self.taxonomy}, slug={self.slug})>"
