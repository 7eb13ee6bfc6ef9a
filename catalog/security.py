"""Password hashing, access tokens and role gating for the catalog API."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Header
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from catalog.core import Settings, get_settings
from catalog.core.exceptions import ForbiddenRoleError, InvalidTokenError, MissingTokenError
from catalog.enums import AccountRole, TokenType

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class TokenPayload(BaseModel):
    sub: str
    jti: str
    role: AccountRole
    type: TokenType
    exp: int
    iat: int

    @property
    def account_id(self) -> uuid.UUID:
        return uuid.UUID(self.sub)

    @property
    def is_admin(self) -> bool:
        return self.role is AccountRole.ADMIN


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(
    *,
    account_id: uuid.UUID,
    role: AccountRole,
    settings: Settings,
) -> tuple[str, int]:
    """Return ``(token, exp)`` where ``exp`` is a unix timestamp."""
    now = now_utc()
    expires_at = now + timedelta(minutes=settings.access_token_exp_minutes)
    payload = {
        "sub": str(account_id),
        "role": role.value,
        "jti": uuid.uuid4().hex,
        "type": TokenType.ACCESS.value,
        "exp": int(expires_at.timestamp()),
        "iat": int(now.timestamp()),
        "nbf": int(now.timestamp()),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return token, payload["exp"]


def decode_access_token(token: str, settings: Settings) -> TokenPayload:
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
        payload = TokenPayload.model_validate(claims)
    except (JWTError, ValidationError) as exc:
        raise InvalidTokenError() from exc

    if payload.type is not TokenType.ACCESS:
        raise InvalidTokenError("Token type mismatch")
    return payload


async def access_token_dependency(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> TokenPayload:
    if not authorization:
        raise MissingTokenError()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise InvalidTokenError("Invalid authorization format")
    return decode_access_token(token, settings)


async def require_admin(
    payload: TokenPayload = Depends(access_token_dependency),
) -> TokenPayload:
    if not payload.is_admin:
        raise ForbiddenRoleError(AccountRole.ADMIN.value)
    return payload
