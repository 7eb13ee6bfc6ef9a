import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.api.errors import register_exception_handlers
from catalog.api.v1.routers import api_router, health_router
from catalog.core import get_settings
from catalog.core.constants import SERVICE_NAME, SERVICE_VERSION
from catalog.core.logging import configure_logging
from catalog.core.tracing import configure_tracing, instrument_fastapi, shutdown_tracing
from catalog.database.base import Base
from catalog.database.session import engine
from catalog.metrics import register_metrics
from catalog.services.storage import create_s3_client

logger = logging.getLogger(__name__)

_settings = get_settings()

# 구조화된 로깅 설정 (ECS JSON 포맷)
configure_logging(_settings)

# OpenTelemetry 분산 트레이싱 설정
configure_tracing(
    service_name=SERVICE_NAME,
    service_version=SERVICE_VERSION,
    environment=_settings.environment,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if settings.create_schema_on_startup:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    # one boto3 client for the process; thread-safe for put/delete
    app.state.s3_client = create_s3_client(settings)
    logger.info("Catalog API started", extra={"bucket": settings.s3_bucket})

    yield

    await engine.dispose()
    shutdown_tracing()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Product, category and banner catalog with image uploads",
        version=SERVICE_VERSION,
        docs_url=f"{settings.api_v1_prefix}/docs",
        openapi_url=f"{settings.api_v1_prefix}/openapi.json",
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # OpenTelemetry FastAPI instrumentation
    instrument_fastapi(app)

    # 예외 핸들러 등록
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.api_v1_prefix)
    register_metrics(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
