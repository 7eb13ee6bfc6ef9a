"""Catalog Prometheus metrics."""

from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, generate_latest

REGISTRY = CollectorRegistry(auto_describe=True)
METRICS_PATH = "/metrics/status"

IMAGE_UPLOADS = Counter(
    "catalog_image_uploads_total",
    "Images uploaded to object storage",
    ["namespace", "outcome"],
    registry=REGISTRY,
)

COMPENSATING_DELETES = Counter(
    "catalog_compensating_deletes_total",
    "Deletes issued to undo uploads after a later step failed",
    ["outcome"],
    registry=REGISTRY,
)


def register_metrics(app: FastAPI) -> None:
    """Expose the Prometheus registry."""

    @app.get(METRICS_PATH, include_in_schema=False)
    async def metrics_endpoint() -> Response:
        return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)
