############################################################
#
# blogcms - Blog and Content Management Service
#
# schemas.py: Request validation and response models
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Pydantic request/response models.

Request models are the validation boundary: anything that reaches the
core has a non-empty title, a well-formed email, http(s) Open Graph URLs
and a known status.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)

from blogcms.app.db.crud import ensure_aware
from blogcms.app.db.models import ContentStatus

_http_url = TypeAdapter(HttpUrl)

# Columns that cannot be NULL; an update may omit them but not null them
_NON_NULLABLE = ("title", "content", "status")


def _check_url(value: Optional[str]) -> Optional[str]:
    """Validate URL shape but keep the caller's exact string."""
    if value is None:
        return value
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be an http(s) URL") from None
    return value


# Auth
class LoginRequest(BaseModel):
    """Admin login credentials."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


class UserResponse(BaseModel):
    """User information (never includes the password hash)."""
    id: int
    username: str
    email: str
    is_admin: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Successful login."""
    user: UserResponse
    token: str


# Posts and pages
class _ContentInput(BaseModel):
    """Fields shared by post and page input."""
    scheduled_at: Optional[datetime] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image_url: Optional[str] = None
    og_type: Optional[str] = None
    og_url: Optional[str] = None

    @field_validator("og_image_url", "og_url")
    @classmethod
    def validate_urls(cls, v):
        return _check_url(v)


class PageCreateRequest(_ContentInput):
    """Request to create a page."""
    title: str = Field(..., min_length=1)
    content: str
    status: ContentStatus = ContentStatus.DRAFT


class PostCreateRequest(PageCreateRequest):
    """Request to create a post."""
    excerpt: Optional[str] = None


class PageUpdateRequest(_ContentInput):
    """Request to update a page. Only provided fields are changed."""
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    status: Optional[ContentStatus] = None

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in _NON_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class PostUpdateRequest(PageUpdateRequest):
    """Request to update a post. Only provided fields are changed."""
    excerpt: Optional[str] = None


class PageResponse(BaseModel):
    """Page as stored."""
    id: int
    title: str
    slug: str
    content: str
    status: ContentStatus
    published_at: Optional[datetime]
    scheduled_at: Optional[datetime]
    seo_title: Optional[str]
    seo_description: Optional[str]
    seo_keywords: Optional[str]
    og_title: Optional[str]
    og_description: Optional[str]
    og_image_url: Optional[str]
    og_type: Optional[str]
    og_url: Optional[str]
    created_at: datetime
    updated_at: datetime

    @field_validator("published_at", "scheduled_at", "created_at", "updated_at", mode="before")
    @classmethod
    def make_aware(cls, v):
        """Stores without timezone support hand back naive UTC."""
        return ensure_aware(v) if isinstance(v, datetime) else v

    class Config:
        from_attributes = True


class PostResponse(PageResponse):
    """Post as stored."""
    excerpt: Optional[str]


# Comments
class CommentCreateRequest(BaseModel):
    """Public comment submission."""
    post_id: int
    author_name: str = Field(..., min_length=1)
    author_email: EmailStr
    content: str = Field(..., min_length=1)


class CommentStatusRequest(BaseModel):
    """Moderation decision."""
    is_approved: bool


class CommentResponse(BaseModel):
    """Comment as stored."""
    id: int
    post_id: int
    author_name: str
    author_email: str
    content: str
    is_approved: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def make_aware(cls, v):
        return ensure_aware(v) if isinstance(v, datetime) else v

    class Config:
        from_attributes = True


# Search
SearchScope = Literal["posts", "pages", "all"]


class SearchResponse(BaseModel):
    """Search matches grouped by kind."""
    posts: List[PostResponse]
    pages: List[PageResponse]
    total: int


class SuccessResponse(BaseModel):
    """Outcome of a delete."""
    success: bool
