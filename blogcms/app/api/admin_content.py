############################################################
#
# blogcms - Blog and Content Management Service
#
# admin_content.py: Admin endpoints for posts and pages
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Admin post and page management.

Posts and pages expose the same operations, so one builder produces
both routers.
"""

from typing import List, Optional, Type

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.api.deps import RequestContext, require_admin
from blogcms.app.api.schemas import (
    PageCreateRequest,
    PageResponse,
    PageUpdateRequest,
    PostCreateRequest,
    PostResponse,
    PostUpdateRequest,
    SuccessResponse,
)
from blogcms.app.core import content, search
from blogcms.app.db.session import get_async_db
from blogcms.app.logging_config import get_logger

logger = get_logger(__name__)


def build_content_router(
    kind: str,
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    response_model: Type[BaseModel],
) -> APIRouter:
    """Build the admin router for one content kind ("post" or "page")."""
    router = APIRouter()
    search_items = search.search_posts if kind == "post" else search.search_pages

    @router.get("", response_model=List[response_model])
    async def list_items(
        ctx: RequestContext = Depends(require_admin),
        db: AsyncSession = Depends(get_async_db),
    ):
        """Every item in any status, newest first."""
        return await content.list_all(db, kind)

    @router.get("/search", response_model=List[response_model])
    async def search_published(
        query: str = Query(..., min_length=1),
        ctx: RequestContext = Depends(require_admin),
        db: AsyncSession = Depends(get_async_db),
    ):
        """Substring search over published items."""
        return await search_items(db, query)

    @router.get("/{content_id}", response_model=Optional[response_model])
    async def get_item(
        content_id: int,
        ctx: RequestContext = Depends(require_admin),
        db: AsyncSession = Depends(get_async_db),
    ):
        """One item in any status, or null."""
        return await content.get_by_id(db, kind, content_id)

    @router.post("", response_model=response_model, status_code=201)
    async def create_item(
        request: create_model,
        ctx: RequestContext = Depends(require_admin),
        db: AsyncSession = Depends(get_async_db),
    ):
        """Create an item; the slug is derived from the title."""
        item = await content.create_content(db, kind, request.model_dump())
        await db.commit()
        logger.info(f"{kind}_created_by_admin", admin_id=ctx.user.id, content_id=item.id)
        return item

    @router.patch("/{content_id}", response_model=response_model)
    async def update_item(
        content_id: int,
        request: update_model,
        ctx: RequestContext = Depends(require_admin),
        db: AsyncSession = Depends(get_async_db),
    ):
        """Partial update. Only provided fields are changed."""
        item = await content.update_content(
            db, kind, content_id, request.model_dump(exclude_unset=True)
        )
        await db.commit()
        return item

    @router.delete("/{content_id}", response_model=SuccessResponse)
    async def delete_item(
        content_id: int,
        ctx: RequestContext = Depends(require_admin),
        db: AsyncSession = Depends(get_async_db),
    ):
        """Delete an item."""
        result = await content.delete_content(db, kind, content_id)
        await db.commit()
        logger.info(f"{kind}_deleted_by_admin", admin_id=ctx.user.id, content_id=content_id)
        return result

    @router.post("/{content_id}/publish", response_model=response_model)
    async def publish_item(
        content_id: int,
        ctx: RequestContext = Depends(require_admin),
        db: AsyncSession = Depends(get_async_db),
    ):
        """Publish now."""
        item = await content.publish_content(db, kind, content_id)
        await db.commit()
        return item

    @router.post("/{content_id}/unpublish", response_model=response_model)
    async def unpublish_item(
        content_id: int,
        ctx: RequestContext = Depends(require_admin),
        db: AsyncSession = Depends(get_async_db),
    ):
        """Take offline and clear the publish date."""
        item = await content.unpublish_content(db, kind, content_id)
        await db.commit()
        return item

    return router


posts_router = build_content_router("post", PostCreateRequest, PostUpdateRequest, PostResponse)
pages_router = build_content_router("page", PageCreateRequest, PageUpdateRequest, PageResponse)
