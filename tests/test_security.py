"""
Tests for password hashing and token signing.
"""
from datetime import timedelta

from app.utils.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_hash_is_salted(self):
        first = hash_password("password1")
        second = hash_password("password1")
        assert first != second
        assert "password1" not in first

    def test_verify_accepts_correct_password(self):
        hashed = hash_password("password1")
        assert verify_password("password1", hashed) is True

    def test_verify_rejects_wrong_password(self):
        hashed = hash_password("password1")
        assert verify_password("password2", hashed) is False

    def test_verify_rejects_malformed_hash(self):
        assert verify_password("password1", "not-a-bcrypt-hash") is False


class TestTokens:
    def test_claims_round_trip(self):
        token = create_access_token({"user": {"user_id": 7, "name": "Alice"}})
        claims = decode_access_token(token)
        assert claims["user"] == {"user_id": 7, "name": "Alice"}
        assert claims["exp"] > claims["iat"]

    def test_default_lifetime_is_three_days(self):
        claims = decode_access_token(create_access_token({"user": {"user_id": 1}}))
        assert claims["exp"] - claims["iat"] == _seconds_in_days(3)

    def test_each_issue_is_unique(self):
        data = {"user": {"user_id": 1}}
        assert create_access_token(data) != create_access_token(data)

    def test_wrong_secret_is_rejected(self):
        token = create_access_token({"user": {"user_id": 1}}, secret="someone-else")
        assert decode_access_token(token) is None

    def test_expired_token_is_rejected(self):
        token = create_access_token({"user": {"user_id": 1}}, expires_delta=timedelta(seconds=-5))
        assert decode_access_token(token) is None

    def test_garbage_is_rejected(self):
        assert decode_access_token("not-a-token") is None


def _seconds_in_days(days: int) -> int:
    return days * 24 * 60 * 60
