"""Password hashing and access tokens.

Passwords are hashed with Argon2 through pwdlib. Access tokens are HS256 JWTs
whose ``sub`` claim is the username; there are no refresh tokens, clients log
in again when a token expires.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from pwdlib import PasswordHash

from tonswap.core.config import settings

password_hash = PasswordHash.recommended()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return password_hash.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return password_hash.hash(password)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a signed access token.

    Args:
        data: Claims to encode, at least ``{"sub": username}``
        expires_delta: Lifetime; defaults to ``ACCESS_TOKEN_EXPIRE_MINUTES``

    Returns:
        The encoded JWT
    """
    issued_at = datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {**data, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a JWT.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, forged or expired
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def get_token_subject(token: str) -> str | None:
    """Return the username a token was issued to, or None if it is not usable."""
    try:
        subject = decode_token(token).get("sub")
    except jwt.InvalidTokenError:
        return None
    return subject if isinstance(subject, str) and subject else None
