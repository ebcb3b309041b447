############################################################
#
# blogcms - Blog and Content Management Service
#
# auth.py: Admin login and token resolution
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Admin login and token resolution."""

from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.core.errors import AuthenticationError
from blogcms.app.db import crud
from blogcms.app.db.models import User
from blogcms.app.logging_config import get_logger
from blogcms.app.security import hash_password, issue_token, needs_rehash, read_token, verify_password

logger = get_logger(__name__)


async def login(db: AsyncSession, username: str, password: str) -> Tuple[User, str]:
    """
    Verify credentials and issue a token.

    Raises:
        AuthenticationError: Unknown user or wrong password (same message for both)
    """
    user = await crud.get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("login_failed", username=username)
        raise AuthenticationError("Invalid username or password")

    if needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        await db.flush()

    logger.info("login_succeeded", user_id=user.id)
    return user, issue_token(user.id)


async def get_current_user(db: AsyncSession, token: str) -> Optional[User]:
    """Resolve a token to its user, or None."""
    user_id = read_token(token)
    if user_id is None:
        return None
    return await crud.get_user_by_id(db, user_id)
