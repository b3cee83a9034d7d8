from pydantic import BaseModel, EmailStr, Field, field_validator
from app.utils.sanitization import sanitize_string


class UserBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=30)
    email: EmailStr

    @field_validator("name", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=3, max_length=30)
    email: EmailStr | None = None

    @field_validator("name", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class UserResponse(UserBase):
    user_id: int

    class Config:
        from_attributes = True
