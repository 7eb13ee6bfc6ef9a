"""App wiring: probes, metrics and error envelope."""

import pytest

from catalog.metrics import METRICS_PATH


class TestProbes:
    @pytest.mark.asyncio
    async def test_health(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "catalog-api"}

    @pytest.mark.asyncio
    async def test_ready_checks_database(self, async_client):
        response = await async_client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"


class TestMetrics:
    @pytest.mark.asyncio
    async def test_metrics_exposes_upload_counters(self, async_client):
        response = await async_client.get(METRICS_PATH)

        assert response.status_code == 200
        assert "catalog_image_uploads_total" in response.text
        assert "catalog_compensating_deletes_total" in response.text


class TestErrorEnvelope:
    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, async_client):
        response = await async_client.get("/api/v1/nope")

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_invalid_uuid_path_is_400(self, async_client):
        response = await async_client.get("/api/v1/products/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
