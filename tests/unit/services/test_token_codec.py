from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from jose import jwt

from tenantauth.app.services.token_codec import TokenCodec


def test_access_token_round_trip(token_codec):
    user_id = uuid4()

    token = token_codec.issue_access_token(user_id, "user@acme.com")
    result = token_codec.verify_access_token(token)

    assert result.is_ok()
    assert result.value.user_id == user_id
    assert result.value.email == "user@acme.com"
    assert result.value.kind == "access"


def test_refresh_token_round_trip(token_codec):
    user_id = uuid4()

    result = token_codec.verify_refresh_token(token_codec.issue_refresh_token(user_id))

    assert result.is_ok()
    assert result.value.user_id == user_id


def test_refresh_tokens_issued_together_are_distinct(token_codec):
    user_id = uuid4()

    assert token_codec.issue_refresh_token(user_id) != token_codec.issue_refresh_token(user_id)


def test_expired_access_token():
    codec = TokenCodec("access", "refresh", access_ttl=timedelta(seconds=-1))

    result = codec.verify_access_token(codec.issue_access_token(uuid4(), "user@acme.com"))

    assert result.is_err()
    assert result.error.code == "TOKEN_EXPIRED"


def test_refresh_token_rejected_as_access_token(token_codec):
    result = token_codec.verify_access_token(token_codec.issue_refresh_token(uuid4()))

    assert result.is_err()
    assert result.error.code == "TOKEN_INVALID"


def test_access_token_rejected_as_refresh_token(token_codec):
    result = token_codec.verify_refresh_token(
        token_codec.issue_access_token(uuid4(), "user@acme.com")
    )

    assert result.is_err()
    assert result.error.code == "TOKEN_INVALID"


def test_token_signed_with_other_secret(token_codec):
    now = datetime.now(UTC)
    forged = jwt.encode(
        {"sub": str(uuid4()), "type": "access", "iat": now, "exp": now + timedelta(minutes=5)},
        "someone-elses-secret",
        algorithm="HS256",
    )

    result = token_codec.verify_access_token(forged)

    assert result.is_err()
    assert result.error.code == "TOKEN_INVALID"


def test_garbage_token(token_codec):
    result = token_codec.verify_access_token("not.a.jwt")

    assert result.is_err()
    assert result.error.code == "TOKEN_INVALID"


def test_same_secret_for_both_kinds_is_refused():
    with pytest.raises(ValueError):
        TokenCodec("shared", "shared")


def test_expires_in(token_codec):
    assert token_codec.access_token_expires_in == 15 * 60
