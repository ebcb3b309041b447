############################################################
#
# blogcms - Blog and Content Management Service
#
# tokens.py: Signed, time-limited authentication tokens
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Auth tokens: the user id signed with the application secret."""

from typing import Optional

from itsdangerous import BadSignature, URLSafeTimedSerializer

from blogcms.app.settings import get_settings


def _get_token_serializer() -> URLSafeTimedSerializer:
    """Get a timed serializer for auth tokens."""
    settings = get_settings()
    return URLSafeTimedSerializer(settings.secret_key, salt=settings.token_salt)


def issue_token(user_id: int) -> str:
    """Create a token identifying ``user_id``."""
    return _get_token_serializer().dumps(user_id)


def read_token(token: str) -> Optional[int]:
    """Return the user id in a token, or None if forged, expired or malformed."""
    settings = get_settings()
    try:
        user_id = _get_token_serializer().loads(token, max_age=settings.token_max_age_seconds)
    except BadSignature:
        return None
    try:
        return int(user_id)
    except (TypeError, ValueError):
        return None
