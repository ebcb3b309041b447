############################################################
#
# blogcms - Blog and Content Management Service
#
# auth.py: Login and current-user endpoints
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Authentication endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.api.deps import RequestContext, get_request_context
from blogcms.app.api.schemas import LoginRequest, LoginResponse, UserResponse
from blogcms.app.core import auth
from blogcms.app.db.session import get_async_db

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """Exchange username and password for a bearer token."""
    user, token = await auth.login(db, request.username, request.password)
    await db.commit()
    return LoginResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/me", response_model=Optional[UserResponse])
async def current_user(ctx: RequestContext = Depends(get_request_context)):
    """
    Get the user behind the bearer token.

    Returns null for a missing, expired or forged token.
    """
    return ctx.user
