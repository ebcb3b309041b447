############################################################
#
# blogcms - Blog and Content Management Service
#
# blog.py: Public blog endpoints (reading, comments, search)
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Public blog endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.api.schemas import (
    CommentCreateRequest,
    CommentResponse,
    PageResponse,
    PostResponse,
    SearchResponse,
    SearchScope,
)
from blogcms.app.core import comments, content, search
from blogcms.app.db.session import get_async_db

router = APIRouter()


@router.get("/posts", response_model=List[PostResponse])
async def list_posts(db: AsyncSession = Depends(get_async_db)):
    """Published posts, newest first."""
    return await content.list_published(db, "post")


@router.get("/posts/{slug}", response_model=Optional[PostResponse])
async def get_post(slug: str, db: AsyncSession = Depends(get_async_db)):
    """A published post by slug, or null."""
    return await content.get_published_by_slug(db, "post", slug)


@router.get("/pages", response_model=List[PageResponse])
async def list_pages(db: AsyncSession = Depends(get_async_db)):
    """Published pages by title."""
    return await content.list_published(db, "page")


@router.get("/pages/{slug}", response_model=Optional[PageResponse])
async def get_page(slug: str, db: AsyncSession = Depends(get_async_db)):
    """A published page by slug, or null."""
    return await content.get_published_by_slug(db, "page", slug)


@router.get("/posts/{post_id}/comments", response_model=List[CommentResponse])
async def get_post_comments(post_id: int, db: AsyncSession = Depends(get_async_db)):
    """Approved comments on a post."""
    return await comments.get_post_comments(db, post_id)


@router.post("/comments", response_model=CommentResponse, status_code=201)
async def create_comment(
    request: CommentCreateRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """Submit a comment; it stays hidden until a moderator approves it."""
    comment = await comments.create_comment(
        db,
        post_id=request.post_id,
        author_name=request.author_name,
        author_email=request.author_email,
        content=request.content,
    )
    await db.commit()
    return comment


@router.get("/search", response_model=SearchResponse)
async def search_content(
    query: str = Query(..., min_length=1),
    type: SearchScope = Query("all"),
    db: AsyncSession = Depends(get_async_db),
):
    """Substring search over published posts and pages."""
    result = await search.search_content(db, query, type)
    return SearchResponse(
        posts=[PostResponse.model_validate(p) for p in result.posts],
        pages=[PageResponse.model_validate(p) for p in result.pages],
        total=result.total,
    )
