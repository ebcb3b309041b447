############################################################
#
# blogcms - Blog and Content Management Service
#
# comments.py: Comment creation and moderation
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Comment creation and moderation."""

from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.core.errors import NotFoundError
from blogcms.app.db import crud
from blogcms.app.db.base import utcnow
from blogcms.app.db.models import Comment, Post
from blogcms.app.logging_config import get_logger
from blogcms.app.metrics import COMMENT_ACTIONS

logger = get_logger(__name__)


async def _require_post(db: AsyncSession, post_id: int) -> Post:
    post = await crud.get_content_by_id(db, Post, post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    return post


async def create_comment(
    db: AsyncSession,
    post_id: int,
    author_name: str,
    author_email: str,
    content: str,
) -> Comment:
    """Create a comment on an existing post; it starts unapproved."""
    await _require_post(db, post_id)
    comment = await crud.create_comment(
        db,
        post_id=post_id,
        author_name=author_name,
        author_email=author_email,
        content=content,
    )
    COMMENT_ACTIONS.labels(action="create").inc()
    logger.info("comment_created", comment_id=comment.id, post_id=post_id)
    return comment


async def update_comment_status(db: AsyncSession, comment_id: int, is_approved: bool) -> Comment:
    """Approve or un-approve a comment."""
    comment = await crud.get_comment_by_id(db, comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)

    comment.is_approved = is_approved
    comment.updated_at = utcnow()
    await db.flush()

    COMMENT_ACTIONS.labels(action="approve" if is_approved else "unapprove").inc()
    logger.info("comment_status_updated", comment_id=comment_id, is_approved=is_approved)
    return comment


async def delete_comment(db: AsyncSession, comment_id: int) -> Dict[str, bool]:
    """Delete a comment."""
    comment = await crud.get_comment_by_id(db, comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)

    await db.delete(comment)
    await db.flush()

    COMMENT_ACTIONS.labels(action="delete").inc()
    logger.info("comment_deleted", comment_id=comment_id)
    return {"success": True}


async def get_post_comments(db: AsyncSession, post_id: int) -> List[Comment]:
    """Approved comments for a post (public view)."""
    await _require_post(db, post_id)
    return await crud.get_post_comments(db, post_id, approved_only=True)


async def get_all_comments(db: AsyncSession) -> List[Comment]:
    """Every comment, approved or pending."""
    return await crud.get_comments(db)


async def get_pending_comments(db: AsyncSession) -> List[Comment]:
    """Comments awaiting moderation."""
    return await crud.get_comments(db, is_approved=False)
