"""Initial schema: users, communities, posts, likes, transactions, stores, themes

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*, updated: bool = False) -> list[sa.Column]:
    cols = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=True)]
    if updated:
        cols.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True))
    return cols


def upgrade() -> None:
    # ─── Accounts ────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_seller", sa.Boolean(), nullable=False),
        sa.Column("img", sa.Text(), nullable=True),
        sa.Column("country", sa.String(100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("phone", name="uq_users_phone"),
    )

    # ─── Community ───────────────────────────────────────
    op.create_table(
        "communities",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("name", name="uq_communities_name"),
    )
    op.create_table(
        "community_posts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "community_id", sa.Uuid(), sa.ForeignKey("communities.id"), nullable=False
        ),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("link", sa.Text(), nullable=False),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("video", sa.Text(), nullable=False),
        sa.Column("audio", sa.Text(), nullable=False),
        *_timestamps(updated=True),
    )
    op.create_index(
        "idx_community_posts_community", "community_posts", ["community_id", "created_at"]
    )
    op.create_index("idx_community_posts_user", "community_posts", ["user_id"])
    op.create_table(
        "post_likes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "post_id",
            sa.Uuid(),
            sa.ForeignKey("community_posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
    )

    # ─── Ledger ──────────────────────────────────────────
    op.create_table(
        "transactions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_transactions_user", "transactions", ["user_id", "created_at"])

    # ─── Stores ──────────────────────────────────────────
    op.create_table(
        "stores",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("name", name="uq_stores_name"),
        sa.UniqueConstraint("owner_id", name="uq_stores_owner"),
    )
    op.create_table(
        "theme_customizations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "store_id",
            sa.Uuid(),
            sa.ForeignKey("stores.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("theme", sa.String(50), nullable=False),
        sa.Column("font_family", sa.String(100), nullable=True),
        sa.Column("font_size", sa.String(20), nullable=True),
        sa.Column("font_color", sa.String(30), nullable=True),
        sa.Column("heading_font_family", sa.String(100), nullable=True),
        sa.Column("heading_font_size", sa.String(20), nullable=True),
        sa.Column("heading_font_color", sa.String(30), nullable=True),
        sa.Column("background_color", sa.String(30), nullable=True),
        sa.Column("text_color", sa.String(30), nullable=True),
        sa.Column("accent_color", sa.String(30), nullable=True),
        sa.Column("border_color", sa.String(30), nullable=True),
        sa.Column("button_color", sa.String(30), nullable=True),
        sa.Column("button_text_color", sa.String(30), nullable=True),
        sa.Column("nav_bar_color", sa.String(30), nullable=True),
        sa.Column("nav_bar_text_color", sa.String(30), nullable=True),
        sa.Column("link_color", sa.String(30), nullable=True),
        sa.Column("border_radius", sa.String(20), nullable=True),
        sa.Column("product_grid_layout", sa.String(30), nullable=True),
        sa.Column("container_width", sa.String(20), nullable=True),
        sa.Column("banner_text", sa.Text(), nullable=True),
        sa.Column("footer_text", sa.Text(), nullable=True),
        sa.Column("banner_image", sa.Text(), nullable=False),
        sa.Column("logo_image", sa.Text(), nullable=False),
        sa.Column("favicon", sa.Text(), nullable=False),
        *_timestamps(updated=True),
        sa.UniqueConstraint("store_id", name="uq_theme_customizations_store"),
    )


def downgrade() -> None:
    op.drop_table("theme_customizations")
    op.drop_table("stores")
    op.drop_index("idx_transactions_user", table_name="transactions")
    op.drop_table("transactions")
    op.drop_table("post_likes")
    op.drop_index("idx_community_posts_user", table_name="community_posts")
    op.drop_index("idx_community_posts_community", table_name="community_posts")
    op.drop_table("community_posts")
    op.drop_table("communities")
    op.drop_table("users")
