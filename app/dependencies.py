from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db as db_session
from app.config import settings
from app.exceptions import InvalidToken
from app.models.user import User as UserModel
from app.services import identity

# Login takes a JSON body, so the docs advertise a plain bearer token
# rather than an OAuth2 password form.
bearer_scheme = HTTPBearer(auto_error=False)

def get_db(db: AsyncSession = Depends(db_session)):
    return db

def get_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)
) -> str:
    token = credentials.credentials if credentials else None
    # Browsers that logged in through the API carry the token as a cookie
    token = token or request.cookies.get(settings.TOKEN_COOKIE_NAME)
    if not token:
        raise InvalidToken()
    return token

async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token: str = Depends(get_token)
) -> UserModel:
    return await identity.check_token_valid(db, token)
