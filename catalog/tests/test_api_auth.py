"""E2E tests for authentication endpoints."""

import pytest

from catalog.core import get_settings

REGISTER = "/api/v1/auth/register"
LOGIN = "/api/v1/auth/login"


async def _register(client, email="shopper@example.com", password="s3cret-pass") -> dict:
    response = await client.post(
        REGISTER, json={"name": "Shopper", "email": email, "password": password}
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestRegisterAndLogin:
    """회원가입/로그인 플로우."""

    @pytest.mark.asyncio
    async def test_register_returns_user_token(self, async_client):
        data = await _register(async_client, email="Shopper@Example.com")

        assert data["tokenType"] == "bearer"
        assert data["account"]["email"] == "shopper@example.com"
        assert data["account"]["role"] == "user"
        assert "password" not in data["account"]

    @pytest.mark.asyncio
    async def test_duplicate_email_is_400(self, async_client):
        await _register(async_client)

        response = await async_client.post(
            REGISTER,
            json={"name": "Again", "email": "shopper@example.com", "password": "another-pass"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_short_password_is_400(self, async_client):
        response = await async_client.post(
            REGISTER, json={"name": "Shopper", "email": "a@example.com", "password": "short"}
        )
        assert response.status_code == 400
        assert response.json()["field"] == "password"

    @pytest.mark.asyncio
    async def test_login_and_me(self, async_client):
        await _register(async_client)

        login = await async_client.post(
            LOGIN, json={"email": "shopper@example.com", "password": "s3cret-pass"}
        )
        token = login.json()["data"]["accessToken"]
        me = await async_client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert login.status_code == 200
        assert me.status_code == 200
        assert me.json()["data"]["email"] == "shopper@example.com"

    @pytest.mark.asyncio
    async def test_wrong_password_is_401(self, async_client):
        await _register(async_client)

        response = await async_client.post(
            LOGIN, json={"email": "shopper@example.com", "password": "not-the-password"}
        )

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_user_token_cannot_create_category(self, async_client):
        data = await _register(async_client)

        response = await async_client.post(
            "/api/v1/categories",
            json={"name": "Curtains"},
            headers={"Authorization": f"Bearer {data['accessToken']}"},
        )

        assert response.status_code == 403


class TestAdminRegistration:
    @pytest.mark.asyncio
    async def test_disabled_by_default(self, async_client):
        response = await async_client.post(
            "/api/v1/auth/admin/register",
            json={"name": "Admin", "email": "admin@example.com", "password": "admin-pass"},
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_enabled_issues_admin_token(self, app, async_client):
        enabled = get_settings().model_copy(update={"admin_registration_enabled": True})
        app.dependency_overrides[get_settings] = lambda: enabled

        response = await async_client.post(
            "/api/v1/auth/admin/register",
            json={"name": "Admin", "email": "admin@example.com", "password": "admin-pass"},
        )

        assert response.status_code == 201
        assert response.json()["data"]["account"]["role"] == "admin"


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_reset_then_login_with_new_password(self, async_client):
        data = await _register(async_client)
        headers = {"Authorization": f"Bearer {data['accessToken']}"}

        reset = await async_client.post(
            "/api/v1/auth/password/reset",
            json={"currentPassword": "s3cret-pass", "newPassword": "brand-new-pass"},
            headers=headers,
        )
        old_login = await async_client.post(
            LOGIN, json={"email": "shopper@example.com", "password": "s3cret-pass"}
        )
        new_login = await async_client.post(
            LOGIN, json={"email": "shopper@example.com", "password": "brand-new-pass"}
        )

        assert reset.status_code == 200
        assert old_login.status_code == 401
        assert new_login.status_code == 200

    @pytest.mark.asyncio
    async def test_wrong_current_password_is_400(self, async_client):
        data = await _register(async_client)

        response = await async_client.post(
            "/api/v1/auth/password/reset",
            json={"currentPassword": "guess-pass", "newPassword": "brand-new-pass"},
            headers={"Authorization": f"Bearer {data['accessToken']}"},
        )

        assert response.status_code == 400
