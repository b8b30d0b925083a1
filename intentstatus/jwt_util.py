"""
JWT utility functions for the intentstatus SDK.

Login tokens are issued to a wallet after a successful wallet login and
carry the wallet address in the ``id`` claim.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import jwt

from .exceptions import JwtTokenError

logger = logging.getLogger(__name__)

ID_KEY = "id"
JWT_SUBJECT = "intentstatus"

# Unsafe algorithms that should always be rejected
UNSAFE_JWT_ALGORITHMS = ["none", ""]


@dataclass(frozen=True)
class JwtAuthToken:
    token: str
    wallet_address: str
    valid_until: datetime


def is_safe_jwt_algorithm(algorithm: str) -> bool:
    """
    Check if a JWT algorithm is considered safe.

    Args:
        algorithm: JWT algorithm string

    Returns:
        True if the algorithm is considered safe, False otherwise
    """
    return algorithm.lower() not in UNSAFE_JWT_ALGORITHMS


def encode_login_token(
    wallet_address: str,
    secret: Optional[str],
    validity: timedelta,
    algorithm: str = "HS256",
    now: Optional[datetime] = None
) -> JwtAuthToken:
    """
    Issue a login token for a wallet.

    Args:
        wallet_address: Wallet that logged in
        secret: Signing key
        validity: Token lifetime
        algorithm: Signing algorithm
        now: Issue time (defaults to the current UTC time)

    Returns:
        The signed token with its expiry

    Raises:
        JwtTokenError: If no secret is configured or the algorithm is unsafe
    """
    if not secret:
        raise JwtTokenError("JWT secret is not configured")
    if not is_safe_jwt_algorithm(algorithm):
        raise JwtTokenError(f"Unsafe JWT algorithm: {algorithm!r}")

    issued_at = (now or datetime.now(timezone.utc)).replace(microsecond=0)
    valid_until = issued_at + validity
    token = jwt.encode(
        {
            "sub": JWT_SUBJECT,
            ID_KEY: wallet_address,
            "iat": issued_at,
            "exp": valid_until,
        },
        secret,
        algorithm=algorithm
    )
    logger.info(f"Issued login token for wallet {wallet_address}, valid until {valid_until.isoformat()}")

    return JwtAuthToken(token=token, wallet_address=wallet_address, valid_until=valid_until)


def decode_login_token(
    token: str,
    secret: Optional[str],
    allowed_algorithms: Optional[List[str]] = None
) -> JwtAuthToken:
    """
    Validate a login token.

    Args:
        token: JWT token string
        secret: Key the token was signed with
        allowed_algorithms: Accepted algorithms (defaults to HS256)

    Returns:
        The decoded token

    Raises:
        JwtTokenError: If the token is malformed, expired, badly signed,
            uses an unsafe algorithm or lacks the wallet claim
    """
    if not secret:
        raise JwtTokenError("JWT secret is not configured")
    allowed_algorithms = allowed_algorithms or ["HS256"]

    try:
        header = jwt.get_unverified_header(token)
    except jwt.DecodeError:
        raise JwtTokenError("Invalid JWT format - could not decode header")

    algorithm = header.get("alg", "")
    if not is_safe_jwt_algorithm(algorithm):
        logger.warning(f"Unsafe JWT algorithm: {algorithm}. Rejecting token.")
        raise JwtTokenError(f"Unsafe JWT algorithm: {algorithm!r}")

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[a for a in allowed_algorithms if is_safe_jwt_algorithm(a)],
            options={"verify_signature": True, "verify_exp": True}
        )
    except jwt.ExpiredSignatureError:
        raise JwtTokenError("JWT token expired")
    except jwt.InvalidTokenError as e:
        logger.debug(f"JWT token validation failed: {e}")
        raise JwtTokenError("Could not validate JWT token")

    wallet_address = claims.get(ID_KEY)
    if claims.get("sub") != JWT_SUBJECT or not isinstance(wallet_address, str):
        raise JwtTokenError("Invalid JWT token format")

    return JwtAuthToken(
        token=token,
        wallet_address=wallet_address,
        valid_until=datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
    )
