############################################################
#
# blogcms - Blog and Content Management Service
#
# search.py: Substring search over published posts and pages
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Case-insensitive substring search across published content."""

from dataclasses import dataclass, field
from typing import List

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.db.models import ContentStatus, Page, Post
from blogcms.app.logging_config import get_logger

logger = get_logger(__name__)

SEARCH_SCOPES = ("posts", "pages", "all")


@dataclass
class SearchResult:
    """Matches grouped by content kind."""
    posts: List[Post] = field(default_factory=list)
    pages: List[Page] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.posts) + len(self.pages)


def _matches(columns, query: str):
    # autoescape makes % and _ in the query literal
    return or_(*[col.icontains(query, autoescape=True) for col in columns])


async def search_posts(db: AsyncSession, query: str) -> List[Post]:
    """Published posts whose title, content, excerpt or SEO fields contain ``query``."""
    columns = [
        Post.title,
        Post.content,
        Post.excerpt,
        Post.seo_title,
        Post.seo_description,
        Post.seo_keywords,
    ]
    # NOTE: ascending published_at puts the oldest first; kept as-is, see DESIGN.md
    stmt = (
        select(Post)
        .where(and_(Post.status == ContentStatus.PUBLISHED, _matches(columns, query)))
        .order_by(Post.published_at.asc(), Post.id.asc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def search_pages(db: AsyncSession, query: str) -> List[Page]:
    """Published pages whose title, content or SEO fields contain ``query``."""
    columns = [
        Page.title,
        Page.content,
        Page.seo_title,
        Page.seo_description,
        Page.seo_keywords,
    ]
    stmt = (
        select(Page)
        .where(and_(Page.status == ContentStatus.PUBLISHED, _matches(columns, query)))
        .order_by(Page.updated_at.asc(), Page.id.asc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def search_content(db: AsyncSession, query: str, scope: str = "all") -> SearchResult:
    """
    Search posts, pages or both.

    Args:
        db: Database session
        query: Non-empty substring to look for
        scope: "posts", "pages" or "all"

    Returns:
        SearchResult with ``total == len(posts) + len(pages)``
    """
    if scope not in SEARCH_SCOPES:
        raise ValueError(f"Unknown search scope: {scope}")

    result = SearchResult()
    if scope in ("posts", "all"):
        result.posts = await search_posts(db, query)
    if scope in ("pages", "all"):
        result.pages = await search_pages(db, query)

    logger.debug("content_searched", query=query, scope=scope, total=result.total)
    return result
