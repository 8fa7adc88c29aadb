"""Initial schema: posts, terms and post_terms

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=False),
        sa.Column("post_type", sa.String(20), nullable=False, server_default="post"),
        sa.Column("status", sa.String(20), nullable=False, server_default="publish"),
        sa.Column("date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("modified", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_posts_slug", "posts", ["slug"], unique=False)
    op.create_index("ix_posts_post_type", "posts", ["post_type"], unique=False)

    op.create_table(
        "terms",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(200), nullable=False),
        sa.Column("taxonomy", sa.String(32), nullable=False),
        sa.Column("parent", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("taxonomy", "slug", name="uq_terms_taxonomy_slug"),
    )
    op.create_index("ix_terms_taxonomy", "terms", ["taxonomy"], unique=False)

    op.create_table(
        "post_terms",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("term_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["term_id"], ["terms.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "term_id"),
    )


def downgrade() -> None:
    op.drop_table("post_terms")
    op.drop_index("ix_terms_taxonomy", "terms")
    op.drop_table("terms")
    op.drop_index("ix_posts_post_type", "posts")
    op.drop_index("ix_posts_slug", "posts")
    op.drop_table("posts")
