"""Pytest fixtures for catalog tests.

E2E 테스트는 in-memory aiosqlite DB 와 dict 기반 fake S3 를 사용합니다.

Run:
    pytest catalog/tests -v
"""

from __future__ import annotations

import io
import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from botocore.exceptions import ClientError
from PIL import Image

# Environment setup (before any catalog import reads settings)
os.environ["OTEL_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ["CATALOG_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CATALOG_S3_BUCKET"] = "test-bucket"
os.environ["CATALOG_CDN_DOMAIN"] = "https://cdn.test.com"
os.environ["CATALOG_JWT_SECRET_KEY"] = "test-secret"


class FakeS3Client:
    """boto3-shaped S3 client keeping objects in a dict."""

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.put_calls: list[str] = []
        self.delete_calls: list[str] = []
        self.fail_put_on: set[int] = set()  # 1-based put call numbers
        self.fail_deletes = False

    def put_object(self, *, Bucket: str, Key: str, Body: bytes, ContentType: str) -> dict:
        self.put_calls.append(Key)
        if len(self.put_calls) in self.fail_put_on:
            raise ClientError(
                {"Error": {"Code": "InternalError", "Message": "simulated failure"}},
                "PutObject",
            )
        self.objects[Key] = (Body, ContentType)
        return {"ETag": '"fake"'}

    def delete_object(self, *, Bucket: str, Key: str) -> dict:
        self.delete_calls.append(Key)
        if self.fail_deletes:
            raise ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "simulated failure"}},
                "DeleteObject",
            )
        self.objects.pop(Key, None)
        return {}


def make_image(fmt: str = "PNG", size: tuple[int, int] = (32, 32), color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def settings():
    from catalog.core import get_settings

    return get_settings()


@pytest.fixture
def fake_s3():
    return FakeS3Client()


@pytest.fixture
def storage(fake_s3, settings):
    from catalog.services.storage import StorageAdapter

    return StorageAdapter(fake_s3, settings)


@pytest.fixture
def passthrough_compressor():
    """Compressor stub returning the input bytes unchanged."""
    compressor = MagicMock()
    compressor.compress = MagicMock(side_effect=lambda data, content_type, filename=None: data)
    return compressor


@pytest.fixture
def pipeline(storage, passthrough_compressor, settings):
    from catalog.services.upload import UploadConstraints, UploadPipeline

    return UploadPipeline(
        storage,
        passthrough_compressor,
        UploadConstraints.from_settings(settings),
    )


@pytest.fixture
def mock_session():
    """Mock AsyncSession for service tests."""
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def png_bytes():
    return make_image("PNG")


@pytest.fixture
def jpeg_bytes():
    return make_image("JPEG")


@pytest_asyncio.fixture
async def db_engine():
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    import catalog.models  # noqa: F401
    from catalog.database.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def app(db_engine, storage):
    """FastAPI app wired to the test database and fake S3."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from catalog.api.dependencies import get_storage_adapter
    from catalog.database.session import get_db_session
    from catalog.main import create_app

    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_session():
        async with session_factory() as session:
            yield session

    test_app = create_app()
    test_app.dependency_overrides[get_db_session] = override_session
    test_app.dependency_overrides[get_storage_adapter] = lambda: storage
    yield test_app
    test_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    """Async HTTP client for E2E tests."""
    from httpx import ASGITransport, AsyncClient

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


def _bearer(role, settings) -> dict[str, str]:
    from uuid import uuid4

    from catalog.security import create_access_token

    token, _ = create_access_token(account_id=uuid4(), role=role, settings=settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(settings):
    from catalog.enums import AccountRole

    return _bearer(AccountRole.ADMIN, settings)


@pytest.fixture
def user_headers(settings):
    from catalog.enums import AccountRole

    return _bearer(AccountRole.USER, settings)
