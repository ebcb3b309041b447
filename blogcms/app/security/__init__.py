############################################################
#
# blogcms - Blog and Content Management Service
#
# __init__.py: Security utilities package exports
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Security utilities for blogcms."""

from blogcms.app.security.password_hash import hash_password, needs_rehash, verify_password
from blogcms.app.security.tokens import issue_token, read_token

__all__ = [
    "hash_password",
    "needs_rehash",
    "verify_password",
    "issue_token",
    "read_token",
]
