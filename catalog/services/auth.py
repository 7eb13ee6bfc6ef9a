from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core import Settings
from catalog.core.exceptions import (
    AdminRegistrationDisabledError,
    EmailAlreadyRegisteredError,
    EntityNotFoundError,
    InvalidCredentialsError,
    InvalidPasswordError,
)
from catalog.enums import AccountRole
from catalog.models import Account
from catalog.repositories import AccountRepository
from catalog.schemas import (
    AccountRead,
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    TokenResponse,
)
from catalog.security import create_access_token, hash_password, now_utc, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: AsyncSession, settings: Settings):
        self.session = session
        self.settings = settings
        self.repo = AccountRepository(session)

    async def register(
        self,
        payload: RegisterRequest,
        *,
        role: AccountRole = AccountRole.USER,
    ) -> TokenResponse:
        if role is AccountRole.ADMIN and not self.settings.admin_registration_enabled:
            raise AdminRegistrationDisabledError()
        account = await self.create_account(payload, role=role)
        return self._issue(account)

    async def create_account(self, payload: RegisterRequest, *, role: AccountRole) -> Account:
        if await self.repo.get_by_email(payload.email) is not None:
            raise EmailAlreadyRegisteredError(payload.email)

        try:
            account = await self.repo.add(
                Account(
                    name=payload.name,
                    email=payload.email,
                    password_hash=hash_password(payload.password),
                    role=role,
                )
            )
            await self.session.commit()
        except IntegrityError as exc:
            # concurrent registration won the unique(email) race
            await self.session.rollback()
            raise EmailAlreadyRegisteredError(payload.email) from exc
        logger.info(
            "Account registered",
            extra={"account_id": str(account.id), "role": role.value},
        )
        return account

    async def login(self, payload: LoginRequest) -> TokenResponse:
        account = await self.repo.get_by_email(payload.email)
        if account is None or not verify_password(payload.password, account.password_hash):
            logger.info("Login rejected", extra={"reason": "invalid_credentials"})
            raise InvalidCredentialsError()
        logger.info("Login succeeded", extra={"account_id": str(account.id)})
        return self._issue(account)

    async def get_account(self, account_id: UUID) -> AccountRead:
        return AccountRead.model_validate(await self._require(account_id))

    async def reset_password(self, account_id: UUID, payload: PasswordResetRequest) -> None:
        account = await self._require(account_id)
        if not verify_password(payload.current_password, account.password_hash):
            raise InvalidPasswordError("Current password is incorrect")
        if payload.current_password == payload.new_password:
            raise InvalidPasswordError("New password must differ from the current one")

        account.password_hash = hash_password(payload.new_password)
        account.password_changed_at = now_utc()
        await self.session.commit()
        logger.info("Password reset", extra={"account_id": str(account_id)})

    async def _require(self, account_id: UUID) -> Account:
        account = await self.repo.get(account_id)
        if account is None:
            raise EntityNotFoundError("Account", account_id)
        return account

    def _issue(self, account: Account) -> TokenResponse:
        token, expires_at = create_access_token(
            account_id=account.id,
            role=account.role,
            settings=self.settings,
        )
        return TokenResponse(
            access_token=token,
            expires_at=expires_at,
            account=AccountRead.model_validate(account),
        )
