############################################################
#
# blogcms - Blog and Content Management Service
#
# models.py: SQLAlchemy ORM models for all database entities
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""SQLAlchemy database models for blogcms."""

from datetime import datetime
from enum import Enum as PyEnum
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blogcms.app.db.base import Base, TimestampMixin

# Use enum values (lowercase) for database storage, not enum names (uppercase)
_enum_values = lambda obj: [e.value for e in obj]


# Enums
class ContentStatus(str, PyEnum):
    """Publishing state of a post or page."""
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"


# Shared by posts and pages so both map onto one native enum type
content_status_type = Enum(
    ContentStatus,
    name="content_status",
    values_callable=_enum_values,
)


# User and Authentication Models
class User(Base, TimestampMixin):
    """Admin user account."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class ContentMixin(TimestampMixin):
    """Columns shared by posts and pages."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ContentStatus] = mapped_column(
        content_status_type, nullable=False, default=ContentStatus.DRAFT
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    scheduled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # SEO metadata
    seo_title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    seo_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    seo_keywords: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Open Graph metadata
    og_title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    og_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    og_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    og_type: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    og_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


# Content Models
class Post(Base, ContentMixin):
    """Blog post."""

    __tablename__ = "posts"

    excerpt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships; rows are removed by the FK's ON DELETE CASCADE
    comments: Mapped[List["Comment"]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_posts_status_published", "status", "published_at"),
    )


class Page(Base, ContentMixin):
    """Standalone page (about, contact, ...)."""

    __tablename__ = "pages"

    __table_args__ = (
        Index("ix_pages_status_updated", "status", "updated_at"),
    )


class Comment(Base, TimestampMixin):
    """Reader comment on a post, hidden until approved."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    )
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    author_email: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    post: Mapped["Post"] = relationship("Post", back_populates="comments")

    __table_args__ = (
        Index("ix_comments_post_approved", "post_id", "is_approved"),
    )


# Content models addressable by kind
CONTENT_MODELS = {
    "post": Post,
    "page": Page,
}
