"""E2E tests for banner endpoints."""

import pytest
import pytest_asyncio

from conftest import make_image

BANNERS = "/api/v1/banners"


@pytest_asyncio.fixture
async def category(async_client, admin_headers):
    response = await async_client.post(
        "/api/v1/categories", json={"name": "Seasonal"}, headers=admin_headers
    )
    return response.json()["data"]


def _image(name: str = "hero.jpg") -> dict:
    return {"image": (name, make_image("JPEG", size=(120, 40)), "image/jpeg")}


class TestBanners:
    """배너 생성/수정/삭제."""

    @pytest.mark.asyncio
    async def test_create_with_single_image(self, async_client, admin_headers, category, fake_s3):
        response = await async_client.post(
            BANNERS,
            data={"title": "Summer sale", "subtitle": "Up to 40%", "categoryId": category["id"]},
            files=_image(),
            headers=admin_headers,
        )

        assert response.status_code == 201, response.text
        data = response.json()["data"]
        assert data["image"]["storageKey"].startswith("banners/")
        assert data["image"]["url"].endswith(data["image"]["storageKey"])
        assert data["category"]["name"] == "Seasonal"
        assert list(fake_s3.objects) == [data["image"]["storageKey"]]

    @pytest.mark.asyncio
    async def test_create_without_image_is_400(self, async_client, admin_headers, category):
        response = await async_client.post(
            BANNERS,
            data={"title": "No picture", "categoryId": category["id"]},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_replace_image_deletes_previous(
        self, async_client, admin_headers, category, fake_s3
    ):
        created = await async_client.post(
            BANNERS,
            data={"title": "Summer sale", "categoryId": category["id"]},
            files=_image(),
            headers=admin_headers,
        )
        banner = created.json()["data"]
        old_key = banner["image"]["storageKey"]

        updated = await async_client.patch(
            f"{BANNERS}/{banner['id']}",
            data={"isActive": "false"},
            files=_image("autumn.jpg"),
            headers=admin_headers,
        )

        assert updated.status_code == 200, updated.text
        data = updated.json()["data"]
        assert data["isActive"] is False
        assert data["image"]["storageKey"] != old_key
        assert fake_s3.delete_calls == [old_key]
        assert list(fake_s3.objects) == [data["image"]["storageKey"]]

    @pytest.mark.asyncio
    async def test_list_active_filter_and_delete(
        self, async_client, admin_headers, category, fake_s3
    ):
        for title, active in (("Live", "true"), ("Draft", "false")):
            await async_client.post(
                BANNERS,
                data={"title": title, "categoryId": category["id"], "isActive": active},
                files=_image(),
                headers=admin_headers,
            )

        listing = await async_client.get(BANNERS, params={"active": "true"})
        body = listing.json()
        assert [banner["title"] for banner in body["data"]] == ["Live"]
        assert body["pagination"]["totalBanners"] == 1

        banner_id = body["data"][0]["id"]
        deleted = await async_client.delete(f"{BANNERS}/{banner_id}", headers=admin_headers)
        assert deleted.status_code == 200
        assert len(fake_s3.objects) == 1
