############################################################
#
# blogcms - Blog and Content Management Service
#
# test_security.py: Unit tests for password hashing and tokens
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Unit tests for password hashing and auth tokens."""

from blogcms.app.security import (
    hash_password,
    issue_token,
    needs_rehash,
    read_token,
    verify_password,
)


class TestPasswordHash:
    """Tests for argon2 password hashing."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("correct horse")
        assert hashed != "correct horse"
        assert hashed.startswith("$argon2")

    def test_verify_correct_password(self):
        hashed = hash_password("correct horse")
        assert verify_password("correct horse", hashed)

    def test_verify_wrong_password(self):
        hashed = hash_password("correct horse")
        assert not verify_password("battery staple", hashed)

    def test_verify_garbage_hash(self):
        assert not verify_password("anything", "not-a-hash")

    def test_fresh_hash_needs_no_rehash(self):
        assert not needs_rehash(hash_password("pw123456"))


class TestTokens:
    """Tests for signed auth tokens."""

    def test_round_trip(self):
        token = issue_token(42)
        assert read_token(token) == 42

    def test_tampered_token_rejected(self):
        token = issue_token(42)
        assert read_token(token[:-2] + "xx") is None

    def test_garbage_rejected(self):
        assert read_token("not.a.token") is None

    def test_other_secret_rejected(self, settings, monkeypatch):
        token = issue_token(42)
        monkeypatch.setattr(settings, "secret_key", "some-other-secret")
        assert read_token(token) is None

    def test_expired_token_rejected(self, settings, monkeypatch):
        token = issue_token(42)
        monkeypatch.setattr(settings, "token_max_age_seconds", -1)
        assert read_token(token) is None
