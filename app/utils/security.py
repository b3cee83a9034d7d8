"""
Password hashing and signed access tokens.

Passwords are hashed with bcrypt (random salt embedded in the hash).
Tokens are HS256 JWTs; the signing secret comes from ``settings.SECRET_KEY``.
"""
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from app.config import settings

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), hashed_password.encode())
    except (ValueError, TypeError):
        return False


def create_access_token(
    data: dict,
    secret: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign ``data`` into a token valid for ``expires_delta`` (default TOKEN_EXPIRE_DAYS)."""
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.TOKEN_EXPIRE_DAYS)

    to_encode = data.copy()
    to_encode.update({
        "iat": int(now.timestamp()),
        "exp": now + expires_delta,
        "jti": uuid.uuid4().hex,
    })
    return jwt.encode(to_encode, secret or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, secret: str | None = None) -> dict | None:
    """Return the token's claims, or None if the signature or format is bad."""
    try:
        return jwt.decode(token, secret or settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
