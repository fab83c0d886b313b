"""
Tests for storefront/services/security.py (hasla i tokeny sesji)
"""
from unittest.mock import patch

from storefront.services.security import (
    hash_password,
    issue_session_token,
    new_reset_token,
    read_session_token,
    verify_password,
)


class TestPasswords:

    def test_hash_verifies(self):
        stored = hash_password("dogs123")
        assert stored.startswith("pbkdf2_sha256$")
        assert verify_password("dogs123", stored)

    def test_wrong_password_rejected(self):
        assert not verify_password("cats", hash_password("dogs123"))

    def test_same_password_hashes_differently(self):
        assert hash_password("dogs123") != hash_password("dogs123")

    def test_malformed_hash_rejected(self):
        assert not verify_password("dogs123", "plaintext")


class TestSessionToken:

    def test_round_trip(self):
        token = issue_session_token(42, secret="s3cret")
        assert read_session_token(token, secret="s3cret") == 42

    def test_tampered_user_id_rejected(self):
        token = issue_session_token(42, secret="s3cret")
        _, expires_at, signature = token.split(".")
        assert read_session_token(f"1.{expires_at}.{signature}", secret="s3cret") is None

    def test_other_secret_rejected(self):
        token = issue_session_token(42, secret="s3cret")
        assert read_session_token(token, secret="other") is None

    def test_expired_token_rejected(self):
        with patch("storefront.services.security.time.time", return_value=1_000):
            token = issue_session_token(42, secret="s3cret", max_age=10)
        with patch("storefront.services.security.time.time", return_value=2_000):
            assert read_session_token(token, secret="s3cret") is None

    def test_missing_or_garbage_token(self):
        assert read_session_token(None) is None
        assert read_session_token("") is None
        assert read_session_token("not-a-token") is None
        # znaki spoza ASCII w ciasteczku (latin-1 z naglowka)
        assert read_session_token("1.9999999999.\xe9\xe9", secret="s3cret") is None
        assert read_session_token("\xe9.9999999999.abc", secret="s3cret") is None


def test_reset_token_is_40_hex_chars():
    token = new_reset_token()
    assert len(token) == 40
    int(token, 16)
