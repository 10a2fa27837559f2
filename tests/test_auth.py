"""Tests for JWT tokens and password hashing."""

from datetime import datetime, timedelta

import jwt as pyjwt
import pytest

from tasklens.auth.jwt import (
    JWT_ALGORITHM,
    JWT_SECRET_KEY,
    AccessTokenError,
    ExpiredAccessTokenError,
    create_access_token,
    decode_access_token,
    get_user_id_from_token,
)
from tasklens.auth.passwords import hash_password, verify_password


class TestJwt:
    """Test token lifecycle."""

    def test_round_trip_user_id(self):
        token = create_access_token("user-1")
        assert get_user_id_from_token(token) == "user-1"

    def test_claims_identify_a_session_token(self):
        claims = decode_access_token(create_access_token("user-1"))
        assert claims["iss"] == "tasklens"
        assert claims["typ"] == "access"
        assert claims["exp"] > claims["iat"]

    def test_expired_token_is_rejected(self):
        token = create_access_token("user-1", expires_in=timedelta(seconds=-10))
        with pytest.raises(ExpiredAccessTokenError):
            decode_access_token(token)

    def test_expired_is_an_access_token_error(self):
        token = create_access_token("user-1", expires_in=timedelta(seconds=-10))
        with pytest.raises(AccessTokenError):
            get_user_id_from_token(token)

    def test_garbage_token_is_rejected(self):
        with pytest.raises(AccessTokenError):
            get_user_id_from_token("not-a-jwt")

    def test_wrong_signature_is_rejected(self):
        token = pyjwt.encode(
            {"sub": "user-1", "iss": "tasklens", "typ": "access",
             "iat": datetime.utcnow(), "exp": datetime.utcnow() + timedelta(hours=1)},
            "some-other-secret",
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(AccessTokenError):
            decode_access_token(token)

    def test_token_from_another_issuer_is_rejected(self):
        token = pyjwt.encode(
            {"sub": "user-1", "iss": "elsewhere", "typ": "access",
             "iat": datetime.utcnow(), "exp": datetime.utcnow() + timedelta(hours=1)},
            JWT_SECRET_KEY,
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(AccessTokenError):
            decode_access_token(token)

    def test_non_session_token_is_rejected(self):
        token = pyjwt.encode(
            {"sub": "user-1", "iss": "tasklens", "typ": "refresh",
             "iat": datetime.utcnow(), "exp": datetime.utcnow() + timedelta(hours=1)},
            JWT_SECRET_KEY,
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(AccessTokenError):
            decode_access_token(token)


class TestPasswords:
    """Test password hashing."""

    def test_verify_correct_password(self):
        stored = hash_password("s3cret!")
        assert verify_password("s3cret!", stored) is True

    def test_verify_wrong_password(self):
        stored = hash_password("s3cret!")
        assert verify_password("S3cret!", stored) is False

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_raw_password_not_in_hash(self):
        assert "s3cret!" not in hash_password("s3cret!")

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("anything", "garbage") is False
        assert verify_password("anything", "md5$1$00$00") is False
