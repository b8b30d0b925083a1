"""
Tests for login token issuance and validation.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from intentstatus.exceptions import JwtTokenError
from intentstatus.jwt_util import JwtAuthToken, decode_login_token, encode_login_token, is_safe_jwt_algorithm

from tests.test_helpers import CALLER_ADDRESS

SECRET = "test-secret"


def test_token_round_trip():
    issued = encode_login_token(CALLER_ADDRESS, SECRET, timedelta(hours=1))

    decoded = decode_login_token(issued.token, SECRET)

    assert isinstance(issued, JwtAuthToken)
    assert decoded.wallet_address == CALLER_ADDRESS
    assert decoded.valid_until == issued.valid_until


def test_valid_until_is_issue_time_plus_validity():
    now = datetime.now(timezone.utc).replace(microsecond=0)

    issued = encode_login_token(CALLER_ADDRESS, SECRET, timedelta(minutes=5), now=now)

    assert issued.valid_until == now + timedelta(minutes=5)


def test_missing_secret_is_rejected():
    with pytest.raises(JwtTokenError):
        encode_login_token(CALLER_ADDRESS, None, timedelta(hours=1))
    with pytest.raises(JwtTokenError):
        decode_login_token("token", "")


def test_unsafe_algorithm_cannot_be_used_for_issuing():
    with pytest.raises(JwtTokenError):
        encode_login_token(CALLER_ADDRESS, SECRET, timedelta(hours=1), algorithm="none")


@pytest.mark.parametrize("algorithm,safe", [("HS256", True), ("none", False), ("NONE", False), ("", False)])
def test_is_safe_jwt_algorithm(algorithm, safe):
    assert is_safe_jwt_algorithm(algorithm) is safe


def test_none_algorithm_token_is_rejected():
    token = jwt.encode({"sub": "intentstatus", "id": CALLER_ADDRESS}, key=None, algorithm="none")

    with pytest.raises(JwtTokenError):
        decode_login_token(token, SECRET)


def test_expired_token_is_rejected():
    issued = encode_login_token(
        CALLER_ADDRESS, SECRET, timedelta(minutes=1), now=datetime.now(timezone.utc) - timedelta(hours=1)
    )

    with pytest.raises(JwtTokenError, match="expired"):
        decode_login_token(issued.token, SECRET)


def test_wrong_secret_is_rejected():
    issued = encode_login_token(CALLER_ADDRESS, SECRET, timedelta(hours=1))

    with pytest.raises(JwtTokenError):
        decode_login_token(issued.token, "other-secret")


def test_malformed_token_is_rejected():
    with pytest.raises(JwtTokenError):
        decode_login_token("not-a-jwt", SECRET)


def test_token_without_wallet_claim_is_rejected():
    token = jwt.encode({"sub": "intentstatus"}, SECRET, algorithm="HS256")

    with pytest.raises(JwtTokenError, match="format"):
        decode_login_token(token, SECRET)
