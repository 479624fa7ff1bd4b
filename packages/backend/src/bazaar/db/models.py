"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Alembic migrations mirror what is declared here.

Key concepts:
- UUID primary keys via the portable `Uuid` type (native on PostgreSQL,
  CHAR(32) on SQLite, which the test suite runs on)
- Every unique constraint is named. Repository uses the names to report
  which field group a write collided with.
- Ownership columns (`user_id`, `owner_id`, `store_id`) are set once at
  creation; no service ever writes them afterwards.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


# ══════════════════════════════════════════════════════════════
# Accounts
# ══════════════════════════════════════════════════════════════


class User(Base):
    """A marketplace account. Sellers can open a store."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("phone", name="uq_users_phone"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_seller: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    img: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


# ══════════════════════════════════════════════════════════════
# Community
# ══════════════════════════════════════════════════════════════


class Community(Base):
    __tablename__ = "communities"
    __table_args__ = (UniqueConstraint("name", name="uq_communities_name"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


class CommunityPost(Base):
    """A post inside a community. Media fields hold already-hosted URLs."""

    __tablename__ = "community_posts"
    __table_args__ = (
        Index("idx_community_posts_community", "community_id", "created_at"),
        Index("idx_community_posts_user", "user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    community_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("communities.id"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    link: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    video: Mapped[str] = mapped_column(Text, nullable=False, default="")
    audio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class PostLike(Base):
    """Join row between a post and a user who liked it.

    Learn: the compound unique constraint is what makes "like" idempotent.
    Two concurrent like requests both try to INSERT; exactly one wins and
    the loser gets an IntegrityError, which the service reports as
    "Already liked" instead of an error.
    """

    __tablename__ = "post_likes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("community_posts.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


# ══════════════════════════════════════════════════════════════
# Ledger
# ══════════════════════════════════════════════════════════════


class Transaction(Base):
    """A personal ledger entry. Private to its owner for reads and writes."""

    __tablename__ = "transactions"
    __table_args__ = (Index("idx_transactions_user", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)  # credit, debit, ...
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


# ══════════════════════════════════════════════════════════════
# Stores
# ══════════════════════════════════════════════════════════════


class Store(Base):
    """A seller storefront. One per owner; names are globally unique."""

    __tablename__ = "stores"
    __table_args__ = (
        UniqueConstraint("name", name="uq_stores_name"),
        UniqueConstraint("owner_id", name="uq_stores_owner"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


class ThemeCustomization(Base):
    """Storefront styling, 1:1 with a store.

    Learn: there is no user column here. Ownership is indirect — the
    requester owns the customization iff they own the store it hangs off.
    """

    __tablename__ = "theme_customizations"
    __table_args__ = (
        UniqueConstraint("store_id", name="uq_theme_customizations_store"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    store_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False
    )
    theme: Mapped[str] = mapped_column(String(50), nullable=False, default="default")

    # Typography
    font_family: Mapped[Optional[str]] = mapped_column(String(100))
    font_size: Mapped[Optional[str]] = mapped_column(String(20))
    font_color: Mapped[Optional[str]] = mapped_column(String(30))
    heading_font_family: Mapped[Optional[str]] = mapped_column(String(100))
    heading_font_size: Mapped[Optional[str]] = mapped_column(String(20))
    heading_font_color: Mapped[Optional[str]] = mapped_column(String(30))

    # Colors
    background_color: Mapped[Optional[str]] = mapped_column(String(30))
    text_color: Mapped[Optional[str]] = mapped_column(String(30))
    accent_color: Mapped[Optional[str]] = mapped_column(String(30))
    border_color: Mapped[Optional[str]] = mapped_column(String(30))
    button_color: Mapped[Optional[str]] = mapped_column(String(30))
    button_text_color: Mapped[Optional[str]] = mapped_column(String(30))
    button_hover_color: Mapped[Optional[str]] = mapped_column(String(30))
    button_hover_text_color: Mapped[Optional[str]] = mapped_column(String(30))
    card_background_color: Mapped[Optional[str]] = mapped_column(String(30))
    nav_bar_color: Mapped[Optional[str]] = mapped_column(String(30))
    nav_bar_text_color: Mapped[Optional[str]] = mapped_column(String(30))
    nav_bar_hover_color: Mapped[Optional[str]] = mapped_column(String(30))
    link_color: Mapped[Optional[str]] = mapped_column(String(30))
    link_hover_color: Mapped[Optional[str]] = mapped_column(String(30))
    success_color: Mapped[Optional[str]] = mapped_column(String(30))
    warning_color: Mapped[Optional[str]] = mapped_column(String(30))
    error_color: Mapped[Optional[str]] = mapped_column(String(30))

    # Layout
    border_radius: Mapped[Optional[str]] = mapped_column(String(20))
    button_border_radius: Mapped[Optional[str]] = mapped_column(String(20))
    product_grid_layout: Mapped[Optional[str]] = mapped_column(String(30))
    container_width: Mapped[Optional[str]] = mapped_column(String(20))

    # Content (images are hosted URLs)
    banner_text: Mapped[Optional[str]] = mapped_column(Text)
    footer_text: Mapped[Optional[str]] = mapped_column(Text)
    banner_image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    logo_image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    favicon: Mapped[str] = mapped_column(Text, nullable=False, default="")
    about_image: Mapped[Optional[str]] = mapped_column(Text)
    footer_image: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
