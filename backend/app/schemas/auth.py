from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class UserRegister(BaseModel):
    # Presence is checked by the service so clients get the platform's message
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    institution: Optional[str] = None
    research_field: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None


class AuthPayload(BaseModel):
    user: UserPublic
    token: str


class UserProfile(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    institution: Optional[str] = None
    research_field: Optional[str] = None
    created_at: Optional[datetime] = None
