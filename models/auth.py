# models/auth.py

from typing import Optional

from pydantic import BaseModel, Field

from models.enums import Role


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    role: Role = Role.tenant


class LogoutResponse(BaseModel):
    success: bool = True
    message: Optional[str] = "Logged out"
