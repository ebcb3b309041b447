############################################################
#
# blogcms - Blog and Content Management Service
#
# lifecycle.py: Publishing state machine for posts and pages
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Content lifecycle: draft, scheduled, published, unpublished.

Transitions mutate the ORM object in place; persisting is the caller's
job. ``published_at`` rules:

- create with ``published`` stamps now
- explicit publish action always stamps now
- update into ``published`` from another state stamps now
- update that keeps ``published`` preserves the existing stamp
- ``unpublished`` and ``scheduled`` clear it
- ``draft`` leaves it untouched
"""

from datetime import datetime
from typing import Optional, Union

from blogcms.app.core.errors import ValidationError
from blogcms.app.db.base import utcnow
from blogcms.app.db.models import ContentStatus, Page, Post

Content = Union[Post, Page]


def apply_status(
    item: Content,
    status: ContentStatus,
    now: Optional[datetime] = None,
    force_stamp: bool = False,
) -> Content:
    """
    Move a post or page into ``status`` and derive ``published_at``.

    Args:
        item: Post or page, new or persistent
        status: Target status
        now: Timestamp to use (defaults to current UTC time)
        force_stamp: Re-stamp ``published_at`` even if already published

    Returns:
        The same item

    Raises:
        ValidationError: If scheduling without a ``scheduled_at``
    """
    now = now or utcnow()
    previous = item.status

    if status == ContentStatus.PUBLISHED:
        if force_stamp or previous != ContentStatus.PUBLISHED or item.published_at is None:
            item.published_at = now
    elif status == ContentStatus.UNPUBLISHED:
        item.published_at = None
    elif status == ContentStatus.SCHEDULED:
        if item.scheduled_at is None:
            raise ValidationError(
                "scheduled_at is required when status is 'scheduled'",
                field="scheduled_at",
            )
        item.published_at = None

    item.status = status
    item.updated_at = now
    return item


def publish(item: Content, now: Optional[datetime] = None) -> Content:
    """Explicit publish action; always stamps ``published_at``."""
    return apply_status(item, ContentStatus.PUBLISHED, now=now, force_stamp=True)


def unpublish(item: Content, now: Optional[datetime] = None) -> Content:
    """Explicit unpublish action; clears ``published_at``."""
    return apply_status(item, ContentStatus.UNPUBLISHED, now=now)
