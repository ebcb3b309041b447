############################################################
#
# blogcms - Blog and Content Management Service
#
# password_hash.py: Argon2 password hashing for admin accounts
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Admin password hashing."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

# Argon2id; defaults of argon2-cffi's RFC 9106 low-memory profile
_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password; the result embeds salt and parameters."""
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(password_hash: str) -> bool:
    """True if the stored hash was made with outdated parameters."""
    return _hasher.check_needs_rehash(password_hash)
