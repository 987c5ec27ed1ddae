# File: app/schemas/auth.py

from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from app.schemas.issue import CamelModel

class RegisterIn(CamelModel):
    name: str = Field(min_length=2, max_length=120)
    email: EmailStr
    password: str = Field(min_length=8, max_length=512)
    phone: str = Field(min_length=5, max_length=30)
    city: str = Field(min_length=2, max_length=120)
    municipality_type: str

class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=512)

class AuthorityOut(CamelModel):
    id: int
    name: str
    email: EmailStr
    phone: str
    city: str
    municipality_type: str

class AuthResponse(BaseModel):
    message: str
    token: str
    user: AuthorityOut

class Actor(BaseModel):
    """Caller identity handed to the lifecycle engine for attribution."""
    user_id: Optional[int] = None
    email: Optional[str] = None
