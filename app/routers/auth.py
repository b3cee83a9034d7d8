from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.dependencies import get_db, get_token
from app.schemas.user import Token, UserCreate, UserLogin
from app.services import identity

router = APIRouter(tags=["auth"])


def _set_token_cookie(response: Response, token: str):
    response.set_cookie(
        settings.TOKEN_COOKIE_NAME,
        token,
        max_age=settings.TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
    )


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, response: Response, db: AsyncSession = Depends(get_db)):
    token = await identity.register(db, user.name, user.email, user.password)
    _set_token_cookie(response, token)
    return Token(access_token=token)


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, response: Response, db: AsyncSession = Depends(get_db)):
    token = await identity.login(db, credentials.email, credentials.password)
    _set_token_cookie(response, token)
    return Token(access_token=token)


@router.post("/logout")
async def logout(
    response: Response,
    db: AsyncSession = Depends(get_db),
    token: str = Depends(get_token),
):
    await identity.logout(db, token)
    response.delete_cookie(settings.TOKEN_COOKIE_NAME)
    return {"message": "success"}
