"""
Registration, login/logout and profile access.

A token is only accepted while it matches the token stored on its user and
that user's ``token_expire_at`` lies in the future. The store, not the JWT's
own ``exp``, decides freshness, which is what lets ``logout`` invalidate a
token whose signature is still good.
"""
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import (
    DuplicateEmail,
    InternalFailure,
    InvalidCredentials,
    InvalidToken,
    NoFieldsProvided,
    ServiceError,
    ValidationError,
)
from app.models.user import User
from app.services import store
from app.services.store import storage_errors
from app.utils.security import (
    MAX_PASSWORD_BYTES,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

# Applied on logout so the stored expiry is strictly in the past.
INVALIDATION_OFFSET = timedelta(seconds=10)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; everything we store is UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def public_profile(user: User) -> dict:
    return {"user_id": user.user_id, "name": user.name, "email": user.email}


def _issue_token(user: User) -> tuple[str, datetime]:
    lifetime = timedelta(days=settings.TOKEN_EXPIRE_DAYS)
    token = create_access_token({"user": public_profile(user)}, expires_delta=lifetime)
    return token, _utcnow() + lifetime


async def register(db: AsyncSession, name: str, email: str, password: str) -> str:
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    try:
        if await store.find_user_by_email(db, email):
            raise DuplicateEmail()

        user_id = await store.insert_user(
            db,
            name=name,
            email=email,
            hashed_password=hash_password(password),
            token="",
            token_expire_at=None,
        )
        user = await store.find_user_by_id(db, user_id)
        token, expire_at = _issue_token(user)
        await store.update_user(db, user_id, token=token, token_expire_at=expire_at)
        await db.commit()
    except ServiceError:
        await db.rollback()
        raise
    except IntegrityError:
        # lost a race against another registration with the same email
        await db.rollback()
        raise DuplicateEmail()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Registration failed")
        raise InternalFailure()

    logger.info("Registered user %s (%s)", name, user_id)
    return token


async def login(db: AsyncSession, email: str, password: str) -> str:
    async with storage_errors(db, "look up a user"):
        user = await store.find_user_by_email(db, email)

    if user is None or not verify_password(password, user.hashed_password):
        logger.warning("Failed login attempt")
        raise InvalidCredentials()

    token, expire_at = _issue_token(user)
    async with storage_errors(db, "store a login token"):
        await store.update_user(db, user.user_id, token=token, token_expire_at=expire_at)
        await db.commit()

    logger.info("Login: %s (%s)", user.name, user.user_id)
    return token


async def check_token_valid(db: AsyncSession, token: str) -> User:
    claims = decode_access_token(token)
    if claims is None:
        raise InvalidToken()

    async with storage_errors(db, "look up a token"):
        user = await store.find_user_by_token(db, token)

    if user is None:
        raise InvalidToken()

    claimed_id = (claims.get("user") or {}).get("user_id")
    if claimed_id != user.user_id:
        raise InvalidToken()

    expire_at = _as_utc(user.token_expire_at)
    if expire_at is None or expire_at <= _utcnow():
        raise InvalidToken()

    return user


async def logout(db: AsyncSession, token: str) -> None:
    user = await check_token_valid(db, token)
    async with storage_errors(db, "invalidate a token"):
        await store.update_user(
            db, user.user_id, token_expire_at=_utcnow() - INVALIDATION_OFFSET
        )
        await db.commit()
    logger.info("Logout: user %s", user.user_id)


async def get_profile(db: AsyncSession, token: str) -> dict:
    user = await check_token_valid(db, token)
    return public_profile(user)


async def edit_profile(
    db: AsyncSession,
    token: str,
    name: str | None = None,
    email: str | None = None,
) -> dict:
    """Change name and/or email. The current token stays valid."""
    user = await check_token_valid(db, token)

    if name is None and email is None:
        raise NoFieldsProvided("Either name or email is required")

    fields = {}
    if name is not None:
        fields["name"] = name
    if email is not None and email != user.email:
        async with storage_errors(db, "look up a user"):
            existing = await store.find_user_by_email(db, email)
        if existing is not None:
            raise DuplicateEmail()
        fields["email"] = email

    if fields:
        try:
            await store.update_user(db, user.user_id, **fields)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise DuplicateEmail()
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("Profile update failed for user %s", user.user_id)
            raise InternalFailure()

    async with storage_errors(db, "reload a profile"):
        updated = await store.find_user_by_id(db, user.user_id)
    return public_profile(updated)
