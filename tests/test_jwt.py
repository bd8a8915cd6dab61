"""Token codec tests."""

import jwt
import pytest

from assetdesk.auth.jwt import (
    TokenError,
    create_access_token,
    decode_token,
    verify_token,
)
from assetdesk.config import settings


def test_round_trip_claims():
    claims = verify_token(create_access_token(7, 3, True))
    assert claims is not None
    assert (claims.user_id, claims.company_id, claims.is_admin) == (7, 3, True)


def test_payload_uses_wire_claim_names():
    payload = jwt.decode(
        create_access_token(7, 3, False),
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
    )
    assert payload["userId"] == 7
    assert payload["companyId"] == 3
    assert payload["isAdmin"] is False
    assert "iat" in payload
    assert "exp" not in payload


@pytest.mark.parametrize("raw", ["", "garbage", "a.b.c"])
def test_malformed_tokens_verify_to_none(raw):
    assert verify_token(raw) is None


def test_wrong_key_is_rejected():
    forged = jwt.encode(
        {"userId": 1, "companyId": 1, "isAdmin": True},
        "another-secret-that-is-long-enough-0000",
        algorithm="HS256",
    )
    assert verify_token(forged) is None


def test_unsigned_token_is_rejected():
    unsigned = jwt.encode({"userId": 1, "companyId": 1, "isAdmin": True}, None, algorithm="none")
    assert verify_token(unsigned) is None


@pytest.mark.parametrize(
    "payload",
    [
        {"companyId": 1, "isAdmin": False},
        {"userId": "1", "companyId": 1, "isAdmin": False},
        {"userId": 1, "companyId": 1, "isAdmin": "yes"},
        {"userId": True, "companyId": 1, "isAdmin": False},
    ],
)
def test_bad_claim_shapes_raise(payload):
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(TokenError):
        decode_token(token)
    assert verify_token(token) is None
