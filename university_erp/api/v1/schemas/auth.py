"""Schemas for registration, login and token refresh"""

import re
import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field, field_validator

from university_erp.api.v1.schemas.common import CamelModel

Role = Literal["admin", "faculty", "student", "staff", "librarian", "accountant", "hr"]


def check_password_strength(password: str) -> str:
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")
    if not re.search(r"[A-Z]", password):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        raise ValueError("Password must contain at least one number")
    if not re.search(r"[^A-Za-z0-9]", password):
        raise ValueError("Password must contain at least one special character")
    return password


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: Role = "student"

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        return check_password_strength(value)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class UserSchema(CamelModel):
    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class TokenPair(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"


class AuthPayload(CamelModel):
    user: UserSchema
    tokens: TokenPair


class MeSchema(CamelModel):
    id: str
    email: str
    role: str
    permissions: list
