# File: app/schemas/user.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    # Already checked by the identity provider; stored and echoed as given
    email: str


class UserRead(UserBase):
    user_id: int
    firebase_uid: str
    name: Optional[str] = None
    age: Optional[int] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    gender: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # Pydantic v2: replaces orm_mode


class RegisterRequest(BaseModel):
    """Optional profile sent by the app right after Firebase sign-up."""

    name: Optional[str] = None
    age: Optional[int] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    gender: str = "male"


class ProfileUpdate(BaseModel):
    # Full overwrite: anything left out is stored as null
    name: Optional[str] = None
    age: Optional[int] = None
    weight: Optional[float] = None
    height: Optional[float] = None


class VerifyFirebaseRequest(BaseModel):
    firebase_token: str = Field(..., alias="firebaseToken", min_length=1)


class UserResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    user: UserRead


class VerifyFirebaseResponse(BaseModel):
    success: bool = True
    token: str
    user: UserRead


class MessageResponse(BaseModel):
    success: bool = True
    message: str
