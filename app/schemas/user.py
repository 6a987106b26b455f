from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.models.user import UserRole


class UserBase(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.USER
    avatar: Optional[str] = None

    @field_validator("role")
    @classmethod
    def role_must_not_be_admin(cls, value: UserRole) -> UserRole:
        if value == UserRole.ADMIN:
            raise ValueError("Admin accounts cannot be created through signup")
        return value


class UserProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=6)


class UserAdminUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    is_verified: Optional[bool] = None
    is_banned: Optional[bool] = None


class UserInDB(UserBase):
    id: int
    role: UserRole
    avatar: Optional[str] = ""
    is_verified: bool = False
    is_banned: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class UserResponse(UserInDB):
    booking_ids: List[int] = []


class SignupResponse(BaseModel):
    message: str
    user_id: int


class OTPVerify(BaseModel):
    user_id: int
    otp: str = Field(..., min_length=6, max_length=6)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

    class Config:
        json_schema_extra = {
            "example": {"access_token": "eyJhbGciOi...", "token_type": "bearer"}
        }
