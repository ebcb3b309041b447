############################################################
#
# blogcms - Blog and Content Management Service
#
# deps.py: Request-scoped context and auth dependencies
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""FastAPI dependencies: request context and admin guard."""

import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.core import auth
from blogcms.app.db.models import User
from blogcms.app.db.session import get_async_db
from blogcms.app.logging_config import bind_request_context, get_logger

logger = get_logger(__name__)

# Security scheme
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class RequestContext:
    """Everything a handler may know about the caller."""
    request_id: str
    user: Optional[User] = None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Extract the bearer token, if any."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return None


async def get_request_context(
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    token: Optional[str] = Depends(get_bearer_token),
) -> RequestContext:
    """Build the request context; anonymous when no valid token is sent."""
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    user = await auth.get_current_user(db, token) if token else None
    if user is not None:
        bind_request_context(user_id=user.id)
    return RequestContext(request_id=request_id, user=user)


async def require_admin(
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
) -> RequestContext:
    """Dependency that requires an authenticated admin."""
    if ctx.user is None:
        logger.warning("missing_or_invalid_token", path=request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required. Provide 'Authorization: Bearer <token>'",
        )
    if not ctx.user.is_admin:
        logger.warning("admin_required", path=request.url.path, user_id=ctx.user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return ctx
