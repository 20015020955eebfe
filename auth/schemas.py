from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal
from uuid import UUID
from datetime import datetime


class RegisterModel(BaseModel):
    name: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=255)


class UserCreateModel(RegisterModel):
    role: Literal["user", "admin", "officer", "superadmin"] = "user"
    unit_work_id: Optional[str] = Field(None, max_length=255)
    image: Optional[str] = None


class LoginModel(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: UUID
    user_id: int
    name: str
    email: str
    role: str
    image: Optional[str] = None
    unit_work_id: Optional[UUID] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
