"""
Password hashing and token helpers.

Passwords are stored as salted PBKDF2-SHA256 hashes in the form
``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``. Access and e-mail
verification tokens are HS256 JWTs signed with ``JWT_SECRET``.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import jwt

from sassify.server.core.config import SecurityConfig, settings

PASSWORD_SCHEME = "pbkdf2_sha256"
PASSWORD_ITERATIONS = 260_000

ACCESS_TOKEN_TYPE = "access"
VERIFICATION_TOKEN_TYPE = "verification"


class TokenError(Exception):
    """Raised when a JWT is malformed, expired, or of the wrong type."""


def hash_password(password: str, iterations: int = PASSWORD_ITERATIONS) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return f"{PASSWORD_SCHEME}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash. Unknown formats never match."""
    try:
        scheme, iterations, salt, expected = password_hash.split("$", 3)
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False
    if scheme != PASSWORD_SCHEME:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), rounds)
    return hmac.compare_digest(digest.hex(), expected)


def _encode(claims: Dict[str, Any], ttl: timedelta, config: SecurityConfig) -> str:
    now = datetime.now(timezone.utc)
    payload = {**claims, "iat": now, "exp": now + ttl}
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def create_access_token(user_id: int, roles: List[str], config: Optional[SecurityConfig] = None) -> str:
    """Issue a bearer token identifying ``user_id`` with its roles."""
    config = config or settings.security
    return _encode(
        {"sub": str(user_id), "roles": roles, "type": ACCESS_TOKEN_TYPE},
        timedelta(minutes=config.access_token_ttl_minutes),
        config,
    )


def create_verification_token(user_id: int, config: Optional[SecurityConfig] = None) -> str:
    """Issue the token e-mailed to a new user to confirm their address."""
    config = config or settings.security
    return _encode(
        {"user_id": user_id, "type": VERIFICATION_TOKEN_TYPE},
        timedelta(hours=config.verification_token_ttl_hours),
        config,
    )


def decode_token(token: str, expected_type: str, config: Optional[SecurityConfig] = None) -> Dict[str, Any]:
    """Decode and validate a token.

    Raises:
        TokenError: if the signature is invalid, the token expired, or it is not of ``expected_type``
    """
    config = config or settings.security
    try:
        claims = jwt.decode(
            token,
            config.jwt_secret,
            algorithms=[config.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}") from e

    if claims.get("type") != expected_type:
        raise TokenError(f"Expected a {expected_type} token")
    return claims
