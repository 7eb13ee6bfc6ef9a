"""Unit tests for AuthService account creation."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from catalog.core.exceptions import EmailAlreadyRegisteredError
from catalog.enums import AccountRole
from catalog.schemas import RegisterRequest
from catalog.services.auth import AuthService


def _payload() -> RegisterRequest:
    return RegisterRequest(name="Shopper", email="shopper@example.com", password="s3cret-pass")


class TestCreateAccount:
    @pytest.mark.asyncio
    async def test_unique_violation_on_commit_is_duplicate_email(self, mock_session, settings):
        """동시 가입으로 unique 제약에 걸리면 500 대신 중복 이메일 오류."""
        service = AuthService(mock_session, settings)
        service.repo = MagicMock(
            get_by_email=AsyncMock(return_value=None),
            add=AsyncMock(side_effect=lambda account: account),
        )
        mock_session.commit.side_effect = IntegrityError(
            "INSERT INTO accounts", {}, Exception("duplicate key value violates unique constraint")
        )

        with pytest.raises(EmailAlreadyRegisteredError) as exc_info:
            await service.create_account(_payload(), role=AccountRole.USER)

        assert exc_info.value.email == "shopper@example.com"
        mock_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unique_violation_on_flush_is_duplicate_email(self, mock_session, settings):
        service = AuthService(mock_session, settings)
        service.repo = MagicMock(
            get_by_email=AsyncMock(return_value=None),
            add=AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("unique"))),
        )

        with pytest.raises(EmailAlreadyRegisteredError):
            await service.create_account(_payload(), role=AccountRole.USER)

        mock_session.commit.assert_not_awaited()
