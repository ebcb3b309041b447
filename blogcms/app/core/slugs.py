############################################################
#
# blogcms - Blog and Content Management Service
#
# slugs.py: Slug generation and uniqueness resolution
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""URL slug generation and uniqueness resolution.

``generate_slug`` is pure. ``ensure_unique_slug`` probes the store and is
only a fast path: the unique constraint on the slug column is what
actually guarantees uniqueness, see ``blogcms.app.core.content``.
"""

import re
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.core.errors import SlugGenerationError
from blogcms.app.db import crud
from blogcms.app.db.crud import ContentModel
from blogcms.app.logging_config import get_logger

logger = get_logger(__name__)

POST_FALLBACK_SLUG = "post"
PAGE_FALLBACK_SLUG = "page"
DEFAULT_MAX_ATTEMPTS = 100

# Any Unicode whitespace (NBSP, ideographic space, ...) separates words
_WHITESPACE_RE = re.compile(r"\s+")
_STRIP_RE = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATOR_RE = re.compile(r"[\s_-]+", re.ASCII)


def generate_slug(
    title: str,
    fallback: str = POST_FALLBACK_SLUG,
    max_length: Optional[int] = None,
) -> str:
    """Generate a URL slug from a title.

    Args:
        title: Arbitrary title text
        fallback: Returned when nothing URL-safe survives
        max_length: Optional cap on slug length

    Returns:
        Slug made only of ``[a-z0-9-]``, never empty
    """
    slug = _WHITESPACE_RE.sub(" ", title.lower()).strip()
    slug = _STRIP_RE.sub("", slug)
    slug = _SEPARATOR_RE.sub("-", slug)
    slug = slug.strip("-")
    if max_length is not None and len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    return slug or fallback


async def ensure_unique_slug(
    db: AsyncSession,
    model: ContentModel,
    base_slug: str,
    exclude_id: Optional[int] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """
    Find the first free slug among base, base-1, base-2, ...

    Args:
        db: Database session
        model: Post or Page; uniqueness is scoped to that table
        base_slug: Slug derived from the title
        exclude_id: Row being updated, whose own slug does not count
        max_attempts: Total candidates to try before giving up

    Returns:
        A slug not currently used by another row

    Raises:
        SlugGenerationError: If every candidate is taken
    """
    candidate = base_slug
    for counter in range(max_attempts):
        if counter:
            candidate = f"{base_slug}-{counter}"
        if not await crud.slug_exists(db, model, candidate, exclude_id=exclude_id):
            if counter:
                logger.debug(
                    "slug_suffixed",
                    table=model.__tablename__,
                    base_slug=base_slug,
                    slug=candidate,
                )
            return candidate

    logger.warning(
        "slug_attempts_exhausted",
        table=model.__tablename__,
        base_slug=base_slug,
        attempts=max_attempts,
    )
    raise SlugGenerationError(base_slug, max_attempts)
