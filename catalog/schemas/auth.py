from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from catalog.enums import AccountRole
from catalog.schemas.common import CamelModel

MIN_PASSWORD_LENGTH = 8


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class PasswordResetRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class AccountRead(CamelModel):
    id: UUID
    name: str
    email: str
    role: AccountRole
    created_at: Optional[datetime] = None


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: int
    account: AccountRead
