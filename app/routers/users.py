from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.dependencies import get_db, get_token
from app.schemas.user import UserResponse, UserUpdate
from app.services import identity
from app.utils.case import to_camel_case

router = APIRouter(prefix="/user", tags=["users"])

@router.get("")
async def get_me(db: AsyncSession = Depends(get_db), token: str = Depends(get_token)):
    profile = await identity.get_profile(db, token)
    return to_camel_case(UserResponse(**profile).model_dump(mode="json"))

@router.patch("")
async def update_me(
    user_update: UserUpdate,
    db: AsyncSession = Depends(get_db),
    token: str = Depends(get_token),
):
    profile = await identity.edit_profile(db, token, name=user_update.name, email=user_update.email)
    return to_camel_case(UserResponse(**profile).model_dump(mode="json"))
