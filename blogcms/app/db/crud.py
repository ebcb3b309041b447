############################################################
#
# blogcms - Blog and Content Management Service
#
# crud.py: Database CRUD operations for all entities
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Database CRUD operations for blogcms."""

from datetime import datetime, timezone
from typing import List, Optional, Type, Union

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.db.models import Comment, ContentStatus, Page, Post, User

ContentModel = Union[Type[Post], Type[Page]]


def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware (SQLite returns naive datetimes)."""
    if dt is not None and dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


# User CRUD
async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    """Get user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    """Get user by username."""
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
    is_admin: bool = False,
) -> User:
    """Create a new user."""
    user = User(
        username=username,
        email=email,
        password_hash=password_hash,
        is_admin=is_admin,
    )
    db.add(user)
    await db.flush()
    return user


# Post / Page CRUD
async def get_content_by_id(
    db: AsyncSession, model: ContentModel, content_id: int
) -> Optional[Union[Post, Page]]:
    """Get a post or page by ID, any status."""
    result = await db.execute(select(model).where(model.id == content_id))
    return result.scalar_one_or_none()


async def get_content_by_slug(
    db: AsyncSession,
    model: ContentModel,
    slug: str,
    published_only: bool = False,
) -> Optional[Union[Post, Page]]:
    """Get a post or page by slug."""
    query = select(model).where(model.slug == slug)
    if published_only:
        query = query.where(model.status == ContentStatus.PUBLISHED)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def slug_exists(
    db: AsyncSession,
    model: ContentModel,
    slug: str,
    exclude_id: Optional[int] = None,
) -> bool:
    """Check whether another row of the same kind already uses a slug."""
    query = select(func.count(model.id)).where(model.slug == slug)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    result = await db.execute(query)
    return result.scalar_one() > 0


async def get_all_content(db: AsyncSession, model: ContentModel) -> List[Union[Post, Page]]:
    """Get every post or page regardless of status, newest first."""
    result = await db.execute(
        select(model).order_by(model.created_at.desc(), model.id.desc())
    )
    return list(result.scalars().all())


async def get_published_posts(db: AsyncSession) -> List[Post]:
    """Get published posts, most recently published first."""
    result = await db.execute(
        select(Post)
        .where(Post.status == ContentStatus.PUBLISHED)
        .order_by(Post.published_at.desc(), Post.id.desc())
    )
    return list(result.scalars().all())


async def get_published_pages(db: AsyncSession) -> List[Page]:
    """Get published pages ordered by title."""
    result = await db.execute(
        select(Page)
        .where(Page.status == ContentStatus.PUBLISHED)
        .order_by(Page.title.asc(), Page.id.asc())
    )
    return list(result.scalars().all())


async def delete_content(db: AsyncSession, item: Union[Post, Page]) -> None:
    """Delete a post or page; a post's comments go with it."""
    await db.delete(item)
    await db.flush()


# Comment CRUD
async def get_comment_by_id(db: AsyncSession, comment_id: int) -> Optional[Comment]:
    """Get comment by ID."""
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    return result.scalar_one_or_none()


async def create_comment(
    db: AsyncSession,
    post_id: int,
    author_name: str,
    author_email: str,
    content: str,
) -> Comment:
    """Create a comment awaiting moderation."""
    comment = Comment(
        post_id=post_id,
        author_name=author_name,
        author_email=author_email,
        content=content,
        is_approved=False,
    )
    db.add(comment)
    await db.flush()
    return comment


async def get_post_comments(
    db: AsyncSession, post_id: int, approved_only: bool = True
) -> List[Comment]:
    """Get comments for a post, oldest first."""
    query = select(Comment).where(Comment.post_id == post_id)
    if approved_only:
        query = query.where(Comment.is_approved.is_(True))
    result = await db.execute(query.order_by(Comment.created_at.asc(), Comment.id.asc()))
    return list(result.scalars().all())


async def get_comments(
    db: AsyncSession, is_approved: Optional[bool] = None
) -> List[Comment]:
    """Get all comments, optionally filtered by approval state."""
    query = select(Comment)
    if is_approved is not None:
        query = query.where(Comment.is_approved.is_(is_approved))
    result = await db.execute(query.order_by(Comment.created_at.desc(), Comment.id.desc()))
    return list(result.scalars().all())


async def count_content(db: AsyncSession, model: ContentModel) -> int:
    """Count posts or pages."""
    result = await db.execute(select(func.count(model.id)))
    return result.scalar_one()
