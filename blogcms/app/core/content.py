############################################################
#
# blogcms - Blog and Content Management Service
#
# content.py: Post and page management
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Create, update, publish and delete posts and pages.

Posts and pages share one code path keyed by ``kind`` ("post" or
"page"). Functions flush but never commit; the request handler owns the
transaction.
"""

from typing import Any, Dict, List, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.core import lifecycle
from blogcms.app.core.errors import NotFoundError, UniquenessConflictError
from blogcms.app.core.slugs import (
    PAGE_FALLBACK_SLUG,
    POST_FALLBACK_SLUG,
    ensure_unique_slug,
    generate_slug,
)
from blogcms.app.db import crud
from blogcms.app.db.base import utcnow
from blogcms.app.db.models import CONTENT_MODELS, ContentStatus, Page, Post
from blogcms.app.logging_config import get_logger
from blogcms.app.metrics import CONTENT_MUTATIONS, SLUG_CONFLICTS
from blogcms.app.settings import get_settings

logger = get_logger(__name__)

Content = Union[Post, Page]

FALLBACK_SLUGS = {
    "post": POST_FALLBACK_SLUG,
    "page": PAGE_FALLBACK_SLUG,
}

# Plain columns a caller may set directly; title and status have side effects
_COMMON_FIELDS = (
    "content",
    "scheduled_at",
    "seo_title",
    "seo_description",
    "seo_keywords",
    "og_title",
    "og_description",
    "og_image_url",
    "og_type",
    "og_url",
)
WRITABLE_FIELDS = {
    "post": _COMMON_FIELDS + ("excerpt",),
    "page": _COMMON_FIELDS,
}


def _model_for(kind: str):
    try:
        return CONTENT_MODELS[kind]
    except KeyError:
        raise ValueError(f"Unknown content kind: {kind}") from None


def _base_slug(kind: str, title: str) -> str:
    settings = get_settings()
    return generate_slug(
        title, fallback=FALLBACK_SLUGS[kind], max_length=settings.slug_max_length
    )


def _pick_fields(kind: str, data: Dict[str, Any]) -> Dict[str, Any]:
    allowed = WRITABLE_FIELDS[kind]
    return {k: v for k, v in data.items() if k in allowed}


async def get_content_or_404(db: AsyncSession, kind: str, content_id: int) -> Content:
    """Fetch a post or page by ID, raising NotFoundError if absent."""
    item = await crud.get_content_by_id(db, _model_for(kind), content_id)
    if item is None:
        raise NotFoundError(kind.capitalize(), content_id)
    return item


async def create_content(db: AsyncSession, kind: str, data: Dict[str, Any]) -> Content:
    """
    Create a post or page with a unique slug derived from its title.

    Args:
        db: Database session
        kind: "post" or "page"
        data: Validated input; ``title`` required, ``status`` defaults to draft

    Returns:
        The flushed post or page

    Raises:
        ValidationError: If scheduled without ``scheduled_at``
        SlugGenerationError: If no free slug exists within the attempt budget
        UniquenessConflictError: If concurrent writers keep taking the slug
    """
    model = _model_for(kind)
    settings = get_settings()
    title = data["title"]
    status = data.get("status") or ContentStatus.DRAFT
    fields = _pick_fields(kind, data)
    base_slug = _base_slug(kind, title)

    slug = base_slug
    for attempt in range(settings.slug_conflict_retries + 1):
        slug = await ensure_unique_slug(
            db, model, base_slug, max_attempts=settings.slug_max_attempts
        )
        item = model(title=title, slug=slug, **fields)
        lifecycle.apply_status(item, ContentStatus(status))
        item.created_at = item.updated_at
        try:
            async with db.begin_nested():
                db.add(item)
                await db.flush()
        except IntegrityError:
            SLUG_CONFLICTS.labels(kind=kind).inc()
            logger.warning("slug_conflict_retry", kind=kind, slug=slug, attempt=attempt + 1)
            continue

        CONTENT_MUTATIONS.labels(kind=kind, action="create").inc()
        logger.info(
            f"{kind}_created",
            content_id=item.id,
            slug=item.slug,
            status=item.status.value,
        )
        return item

    raise UniquenessConflictError(slug, settings.slug_conflict_retries)


async def update_content(
    db: AsyncSession, kind: str, content_id: int, changes: Dict[str, Any]
) -> Content:
    """
    Apply a partial update to a post or page.

    Only keys present in ``changes`` are touched. A changed title
    regenerates the slug, ignoring the row's own current slug.

    Raises:
        NotFoundError: If the row does not exist
        ValidationError: If scheduled without ``scheduled_at``
        SlugGenerationError: If no free slug exists within the attempt budget
        UniquenessConflictError: If concurrent writers keep taking the slug
    """
    model = _model_for(kind)
    settings = get_settings()
    item = await get_content_or_404(db, kind, content_id)

    fields = _pick_fields(kind, changes)
    status = changes.get("status")
    new_title = changes.get("title")
    title_changed = new_title is not None and new_title != item.title

    slug = item.slug
    for attempt in range(settings.slug_conflict_retries + 1):
        if title_changed:
            slug = await ensure_unique_slug(
                db,
                model,
                _base_slug(kind, new_title),
                exclude_id=item.id,
                max_attempts=settings.slug_max_attempts,
            )
        try:
            async with db.begin_nested():
                for name, value in fields.items():
                    setattr(item, name, value)
                if title_changed:
                    item.title = new_title
                    item.slug = slug
                if status is not None:
                    lifecycle.apply_status(item, ContentStatus(status))
                elif item.status == ContentStatus.SCHEDULED:
                    # Field changes alone must not leave a scheduled item without a date
                    lifecycle.apply_status(item, ContentStatus.SCHEDULED)
                else:
                    item.updated_at = utcnow()
                await db.flush()
        except IntegrityError:
            SLUG_CONFLICTS.labels(kind=kind).inc()
            logger.warning(
                "slug_conflict_retry",
                kind=kind,
                content_id=content_id,
                slug=slug,
                attempt=attempt + 1,
            )
            # Savepoint rollback expired the row; reload before reapplying
            await db.refresh(item)
            continue

        CONTENT_MUTATIONS.labels(kind=kind, action="update").inc()
        logger.info(
            f"{kind}_updated",
            content_id=item.id,
            slug=item.slug,
            status=item.status.value,
            fields=sorted(changes),
        )
        return item

    raise UniquenessConflictError(slug, settings.slug_conflict_retries)


async def delete_content(db: AsyncSession, kind: str, content_id: int) -> Dict[str, bool]:
    """Delete a post (with its comments) or a page."""
    item = await get_content_or_404(db, kind, content_id)
    await crud.delete_content(db, item)
    CONTENT_MUTATIONS.labels(kind=kind, action="delete").inc()
    logger.info(f"{kind}_deleted", content_id=content_id)
    return {"success": True}


async def publish_content(db: AsyncSession, kind: str, content_id: int) -> Content:
    """Publish now, stamping ``published_at`` with the current time."""
    item = await get_content_or_404(db, kind, content_id)
    lifecycle.publish(item)
    await db.flush()
    CONTENT_MUTATIONS.labels(kind=kind, action="publish").inc()
    logger.info(f"{kind}_published", content_id=content_id, slug=item.slug)
    return item


async def unpublish_content(db: AsyncSession, kind: str, content_id: int) -> Content:
    """Withdraw from the public site, clearing ``published_at``."""
    item = await get_content_or_404(db, kind, content_id)
    lifecycle.unpublish(item)
    await db.flush()
    CONTENT_MUTATIONS.labels(kind=kind, action="unpublish").inc()
    logger.info(f"{kind}_unpublished", content_id=content_id, slug=item.slug)
    return item


async def get_published_by_slug(db: AsyncSession, kind: str, slug: str) -> Optional[Content]:
    """Public lookup; drafts and unpublished items are invisible."""
    return await crud.get_content_by_slug(db, _model_for(kind), slug, published_only=True)


async def get_by_id(db: AsyncSession, kind: str, content_id: int) -> Optional[Content]:
    """Admin lookup in any status."""
    return await crud.get_content_by_id(db, _model_for(kind), content_id)


async def list_all(db: AsyncSession, kind: str) -> List[Content]:
    """Admin listing in any status."""
    return await crud.get_all_content(db, _model_for(kind))


async def list_published(db: AsyncSession, kind: str) -> List[Content]:
    """Public listing."""
    if kind == "post":
        return await crud.get_published_posts(db)
    return await crud.get_published_pages(db)
