############################################################
#
# blogcms - Blog and Content Management Service
#
# test_content.py: Integration tests for post and page management
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Integration tests for content creation, updates and slug uniqueness."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select

from blogcms.app.core import comments, content
from blogcms.app.core.errors import (
    NotFoundError,
    SlugGenerationError,
    UniquenessConflictError,
    ValidationError,
)
from blogcms.app.core.slugs import ensure_unique_slug
from blogcms.app.db.models import Comment, ContentStatus, Page, Post


async def _create_post(db, title="Hello World", **kwargs):
    data = {"title": title, "content": "Body", **kwargs}
    return await content.create_content(db, "post", data)


class TestCreateContent:
    """Tests for creating posts and pages."""

    @pytest.mark.asyncio
    async def test_slug_from_title(self, db):
        post = await _create_post(db, "Hello World! This is a Test Post #1")
        assert post.id is not None
        assert post.slug == "hello-world-this-is-a-test-post-1"
        assert post.status == ContentStatus.DRAFT
        assert post.published_at is None

    @pytest.mark.asyncio
    async def test_duplicate_titles_get_suffixes(self, db):
        slugs = [(await _create_post(db, "Same Title")).slug for _ in range(3)]
        assert slugs == ["same-title", "same-title-1", "same-title-2"]

    @pytest.mark.asyncio
    async def test_duplicate_page_titles(self, db):
        first = await content.create_content(
            db, "page", {"title": "Duplicate Page Title", "content": "A"}
        )
        second = await content.create_content(
            db, "page", {"title": "Duplicate Page Title", "content": "B"}
        )
        assert first.slug == "duplicate-page-title"
        assert second.slug == "duplicate-page-title-1"

    @pytest.mark.asyncio
    async def test_posts_and_pages_have_separate_slug_spaces(self, db):
        post = await _create_post(db, "About")
        page = await content.create_content(db, "page", {"title": "About", "content": "x"})
        assert post.slug == "about"
        assert page.slug == "about"

    @pytest.mark.asyncio
    async def test_fallback_slugs(self, db):
        post = await _create_post(db, "!!!")
        page = await content.create_content(db, "page", {"title": "   ", "content": "x"})
        assert post.slug == "post"
        assert page.slug == "page"

    @pytest.mark.asyncio
    async def test_long_title_truncated(self, db, settings, monkeypatch):
        monkeypatch.setattr(settings, "slug_max_length", 10)
        post = await _create_post(db, "A very long title indeed")
        assert len(post.slug) <= 10
        assert not post.slug.endswith("-")

    @pytest.mark.asyncio
    async def test_create_published_stamps_now(self, db):
        before = datetime.now(timezone.utc)
        post = await _create_post(db, status=ContentStatus.PUBLISHED)
        assert post.status == ContentStatus.PUBLISHED
        assert post.published_at >= before

    @pytest.mark.asyncio
    async def test_create_scheduled_requires_scheduled_at(self, db):
        with pytest.raises(ValidationError):
            await _create_post(db, status=ContentStatus.SCHEDULED)

    @pytest.mark.asyncio
    async def test_create_scheduled(self, db):
        when = datetime.now(timezone.utc) + timedelta(days=2)
        post = await _create_post(db, status=ContentStatus.SCHEDULED, scheduled_at=when)
        assert post.status == ContentStatus.SCHEDULED
        assert post.published_at is None

    @pytest.mark.asyncio
    async def test_excerpt_only_on_posts(self, db):
        post = await _create_post(db, excerpt="Short")
        page = await content.create_content(
            db, "page", {"title": "P", "content": "x", "excerpt": "ignored"}
        )
        assert post.excerpt == "Short"
        assert not hasattr(page, "excerpt")

    @pytest.mark.asyncio
    async def test_unknown_kind(self, db):
        with pytest.raises(ValueError):
            await content.create_content(db, "video", {"title": "x", "content": "y"})


class TestUniqueSlug:
    """Tests for the bounded unique-slug search."""

    @pytest.mark.asyncio
    async def test_free_base_returned(self, db):
        assert await ensure_unique_slug(db, Post, "fresh") == "fresh"

    @pytest.mark.asyncio
    async def test_excluded_row_does_not_count(self, db):
        post = await _create_post(db, "Mine")
        assert await ensure_unique_slug(db, Post, "mine", exclude_id=post.id) == "mine"
        assert await ensure_unique_slug(db, Post, "mine") == "mine-1"

    @pytest.mark.asyncio
    async def test_attempts_exhausted(self, db, settings, monkeypatch):
        monkeypatch.setattr(settings, "slug_max_attempts", 3)
        for _ in range(3):
            await _create_post(db, "Crowded")
        with pytest.raises(SlugGenerationError) as exc_info:
            await _create_post(db, "Crowded")
        assert exc_info.value.base_slug == "crowded"
        assert exc_info.value.attempts == 3

    @pytest.mark.asyncio
    async def test_concurrent_writer_is_retried(self, db):
        await _create_post(db, "Race")
        # Simulate a writer that took "race" between the check and the insert
        racing = AsyncMock(side_effect=["race", "race-1"])
        with patch("blogcms.app.core.content.ensure_unique_slug", racing):
            post = await _create_post(db, "Race")
        assert post.slug == "race-1"
        assert racing.await_count == 2
        total = await db.scalar(select(func.count()).select_from(Post))
        assert total == 2

    @pytest.mark.asyncio
    async def test_concurrent_writer_retries_exhausted(self, db, settings):
        await _create_post(db, "Race")
        racing = AsyncMock(return_value="race")
        with patch("blogcms.app.core.content.ensure_unique_slug", racing):
            with pytest.raises(UniquenessConflictError):
                await _create_post(db, "Race")
        assert racing.await_count == settings.slug_conflict_retries + 1


class TestUpdateContent:
    """Tests for partial updates."""

    @pytest.mark.asyncio
    async def test_title_change_regenerates_slug(self, db):
        post = await _create_post(db, "Old Title")
        updated = await content.update_content(db, "post", post.id, {"title": "New Title"})
        assert updated.slug == "new-title"

    @pytest.mark.asyncio
    async def test_same_title_keeps_slug(self, db):
        post = await _create_post(db, "Stable")
        await _create_post(db, "Stable")
        updated = await content.update_content(db, "post", post.id, {"title": "Stable"})
        assert updated.slug == "stable"

    @pytest.mark.asyncio
    async def test_title_change_ignores_own_slug(self, db):
        post = await _create_post(db, "Hello")
        updated = await content.update_content(db, "post", post.id, {"title": "HELLO"})
        assert updated.title == "HELLO"
        assert updated.slug == "hello"

    @pytest.mark.asyncio
    async def test_title_change_to_taken_slug(self, db):
        await _create_post(db, "Taken")
        other = await _create_post(db, "Other")
        updated = await content.update_content(db, "post", other.id, {"title": "Taken"})
        assert updated.slug == "taken-1"

    @pytest.mark.asyncio
    async def test_untouched_fields_preserved(self, db):
        post = await _create_post(db, excerpt="Keep me", seo_title="SEO")
        updated = await content.update_content(db, "post", post.id, {"content": "New body"})
        assert updated.content == "New body"
        assert updated.excerpt == "Keep me"
        assert updated.seo_title == "SEO"
        assert updated.title == "Hello World"

    @pytest.mark.asyncio
    async def test_update_keeping_published_preserves_stamp(self, db):
        post = await _create_post(db, status=ContentStatus.PUBLISHED)
        stamp = post.published_at
        updated = await content.update_content(
            db, "post", post.id, {"status": ContentStatus.PUBLISHED, "content": "Edited"}
        )
        assert updated.published_at == stamp

    @pytest.mark.asyncio
    async def test_update_to_unpublished_clears_stamp(self, db):
        post = await _create_post(db, status=ContentStatus.PUBLISHED)
        updated = await content.update_content(
            db, "post", post.id, {"status": ContentStatus.UNPUBLISHED}
        )
        assert updated.published_at is None

    @pytest.mark.asyncio
    async def test_update_to_scheduled_without_date(self, db):
        post = await _create_post(db)
        with pytest.raises(ValidationError):
            await content.update_content(
                db, "post", post.id, {"status": ContentStatus.SCHEDULED}
            )

    @pytest.mark.asyncio
    async def test_update_to_scheduled_with_date_in_same_change(self, db):
        post = await _create_post(db)
        when = datetime.now(timezone.utc) + timedelta(hours=3)
        updated = await content.update_content(
            db, "post", post.id, {"status": ContentStatus.SCHEDULED, "scheduled_at": when}
        )
        assert updated.status == ContentStatus.SCHEDULED

    @pytest.mark.asyncio
    async def test_clearing_scheduled_at_on_scheduled_item_rejected(self, db):
        when = datetime.now(timezone.utc) + timedelta(days=1)
        post = await _create_post(db, status=ContentStatus.SCHEDULED, scheduled_at=when)
        with pytest.raises(ValidationError) as exc_info:
            await content.update_content(db, "post", post.id, {"scheduled_at": None})
        assert exc_info.value.field == "scheduled_at"

        reloaded = await content.get_by_id(db, "post", post.id)
        await db.refresh(reloaded)
        assert reloaded.status == ContentStatus.SCHEDULED
        assert reloaded.scheduled_at is not None

    @pytest.mark.asyncio
    async def test_field_update_on_scheduled_item_keeps_schedule(self, db):
        when = datetime.now(timezone.utc) + timedelta(days=1)
        post = await _create_post(db, status=ContentStatus.SCHEDULED, scheduled_at=when)
        updated = await content.update_content(db, "post", post.id, {"excerpt": "Soon"})
        assert updated.status == ContentStatus.SCHEDULED
        assert updated.excerpt == "Soon"
        assert updated.published_at is None

    @pytest.mark.asyncio
    async def test_update_missing(self, db):
        with pytest.raises(NotFoundError):
            await content.update_content(db, "page", 999, {"title": "x"})

    @pytest.mark.asyncio
    async def test_concurrent_writer_on_update(self, db):
        await _create_post(db, "First")
        second = await _create_post(db, "Second")
        racing = AsyncMock(side_effect=["first", "first-1"])
        with patch("blogcms.app.core.content.ensure_unique_slug", racing):
            updated = await content.update_content(db, "post", second.id, {"title": "First"})
        assert updated.slug == "first-1"
        assert updated.title == "First"


class TestPublishDelete:
    """Tests for publish, unpublish and delete actions."""

    @pytest.mark.asyncio
    async def test_publish_restamps(self, db):
        post = await _create_post(db, status=ContentStatus.PUBLISHED)
        first_stamp = post.published_at
        published = await content.publish_content(db, "post", post.id)
        assert published.status == ContentStatus.PUBLISHED
        assert published.published_at >= first_stamp

    @pytest.mark.asyncio
    async def test_unpublish(self, db):
        post = await _create_post(db, status=ContentStatus.PUBLISHED)
        item = await content.unpublish_content(db, "post", post.id)
        assert item.status == ContentStatus.UNPUBLISHED
        assert item.published_at is None

    @pytest.mark.asyncio
    async def test_publish_missing(self, db):
        with pytest.raises(NotFoundError) as exc_info:
            await content.publish_content(db, "post", 404)
        assert exc_info.value.message == "Post 404 not found"

    @pytest.mark.asyncio
    async def test_delete_page(self, db):
        page = await content.create_content(db, "page", {"title": "Gone", "content": "x"})
        assert await content.delete_content(db, "page", page.id) == {"success": True}
        assert await content.get_by_id(db, "page", page.id) is None

    @pytest.mark.asyncio
    async def test_delete_post_removes_comments(self, db):
        post = await _create_post(db)
        await comments.create_comment(db, post.id, "Ada", "ada@example.com", "Hi")
        await comments.create_comment(db, post.id, "Bob", "bob@example.com", "Yo")
        await content.delete_content(db, "post", post.id)
        remaining = await db.scalar(select(func.count()).select_from(Comment))
        assert remaining == 0

    @pytest.mark.asyncio
    async def test_delete_missing(self, db):
        with pytest.raises(NotFoundError):
            await content.delete_content(db, "post", 12345)


class TestListing:
    """Tests for public and admin listings."""

    @pytest.mark.asyncio
    async def test_published_posts_newest_first(self, db):
        old = await _create_post(db, "Old", status=ContentStatus.PUBLISHED)
        new = await _create_post(db, "New", status=ContentStatus.PUBLISHED)
        old.published_at = datetime(2020, 1, 1, tzinfo=timezone.utc)
        await db.flush()
        await _create_post(db, "Draft")
        listed = await content.list_published(db, "post")
        assert [p.id for p in listed] == [new.id, old.id]

    @pytest.mark.asyncio
    async def test_published_pages_by_title(self, db):
        for title in ("Zeta", "Alpha", "Mid"):
            await content.create_content(
                db, "page", {"title": title, "content": "x", "status": ContentStatus.PUBLISHED}
            )
        await content.create_content(db, "page", {"title": "Hidden", "content": "x"})
        listed = await content.list_published(db, "page")
        assert [p.title for p in listed] == ["Alpha", "Mid", "Zeta"]

    @pytest.mark.asyncio
    async def test_admin_list_includes_drafts(self, db):
        await _create_post(db, "Draft")
        await _create_post(db, "Live", status=ContentStatus.PUBLISHED)
        listed = await content.list_all(db, "post")
        assert {p.title for p in listed} == {"Draft", "Live"}

    @pytest.mark.asyncio
    async def test_public_lookup_hides_drafts(self, db):
        await _create_post(db, "Secret")
        live = await _create_post(db, "Live", status=ContentStatus.PUBLISHED)
        assert await content.get_published_by_slug(db, "post", "secret") is None
        found = await content.get_published_by_slug(db, "post", "live")
        assert found.id == live.id

    @pytest.mark.asyncio
    async def test_page_lookup_by_slug(self, db):
        page = await content.create_content(
            db, "page", {"title": "About Us", "content": "x", "status": ContentStatus.PUBLISHED}
        )
        found = await content.get_published_by_slug(db, "page", "about-us")
        assert isinstance(found, Page)
        assert found.id == page.id
