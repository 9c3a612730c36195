from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

RegistrableRole = Literal["educator", "student", "ta", "industry_expert"]


class UserCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    role: RegistrableRole


class UserRead(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: EmailStr
    role: str
    profile_picture: str | None = ""
    bio: str | None = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    bio: str | None = Field(default=None, max_length=500)
    profile_picture: str | None = None


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(max_length=72)
