############################################################
#
# blogcms - Blog and Content Management Service
#
# admin_comments.py: Admin comment moderation endpoints
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Comment moderation endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.api.deps import RequestContext, require_admin
from blogcms.app.api.schemas import CommentResponse, CommentStatusRequest, SuccessResponse
from blogcms.app.core import comments
from blogcms.app.db.session import get_async_db

router = APIRouter()


@router.get("", response_model=List[CommentResponse])
async def list_comments(
    ctx: RequestContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """All comments, approved and pending."""
    return await comments.get_all_comments(db)


@router.get("/pending", response_model=List[CommentResponse])
async def list_pending_comments(
    ctx: RequestContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Comments awaiting moderation."""
    return await comments.get_pending_comments(db)


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment_status(
    comment_id: int,
    request: CommentStatusRequest,
    ctx: RequestContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Approve or reject a comment."""
    comment = await comments.update_comment_status(db, comment_id, request.is_approved)
    await db.commit()
    return comment


@router.delete("/{comment_id}", response_model=SuccessResponse)
async def delete_comment(
    comment_id: int,
    ctx: RequestContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Delete a comment."""
    result = await comments.delete_comment(db, comment_id)
    await db.commit()
    return result
