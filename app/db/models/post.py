"""
Post model - searchable content record (posts, pages, custom types).
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.db.models.term import Term


# Many-to-many: which terms a post is filed under
post_terms = Table(
    "post_terms",
    Base.metadata,
    Column("post_id", ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("term_id", ForeignKey("terms.id", ondelete="CASCADE"), primary_key=True),
)


class Post(Base):
    """Content entity. Indexed into Elasticsearch when published."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    slug: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    excerpt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    post_type: Mapped[str] = mapped_column(String(20), nullable=False, default="post", index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="publish")
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    terms: Mapped[list["Term"]] = relationship("Term", secondary=post_terms, lazy="selectin")

    @property
    def is_published(self) -> bool:
        return self.status == "publish"

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, slug={self.slug}, type={self.post_type})>"
