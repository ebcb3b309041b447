############################################################
#
# blogcms - Blog and Content Management Service
#
# errors.py: Domain error taxonomy for content operations
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Errors raised by the content core.

The API layer maps each error type to an HTTP status; core functions
only raise them.
"""

from typing import Any, Dict, Optional


class BlogError(Exception):
    """Base class for all blogcms domain errors."""

    error_type = "blog_error"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to the JSON error body."""
        body: Dict[str, Any] = {"message": self.message, "type": self.error_type}
        if self.details:
            body["details"] = self.details
        return body


class NotFoundError(BlogError):
    """A referenced entity does not exist."""

    error_type = "not_found"

    def __init__(self, entity: str, entity_id: Optional[Any] = None):
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} {entity_id} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(BlogError):
    """Input violates a rule enforced by the core itself."""

    error_type = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, **({"field": field} if field else {}))
        self.field = field


class SlugGenerationError(BlogError):
    """No free slug was found within the attempt budget."""

    error_type = "slug_generation_error"

    def __init__(self, base_slug: str, attempts: int):
        super().__init__(
            f"Could not find a unique slug for '{base_slug}' after {attempts} attempts",
            base_slug=base_slug,
            attempts=attempts,
        )
        self.base_slug = base_slug
        self.attempts = attempts


class UniquenessConflictError(BlogError):
    """The store rejected a slug as duplicate more times than allowed."""

    error_type = "uniqueness_conflict"

    def __init__(self, slug: str, retries: int):
        super().__init__(
            f"Slug '{slug}' kept colliding with concurrent writes after {retries} retries",
            slug=slug,
            retries=retries,
        )
        self.slug = slug
        self.retries = retries


class AuthenticationError(BlogError):
    """Credentials or token were rejected."""

    error_type = "authentication_error"
