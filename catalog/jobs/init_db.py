"""Create the catalog tables (accounts, categories, products, banners)."""

from __future__ import annotations

import asyncio
import sys
import traceback

from sqlalchemy.ext.asyncio import create_async_engine

from catalog.core import get_settings
from catalog.database.base import Base
from catalog.models import Account, Banner, Category, Product  # noqa: F401


async def init_db(database_url: str | None = None) -> int:
    """Create all tables; return a process exit code."""
    url = database_url or get_settings().database_url
    # Remove user/password from logs for security
    db_host = url.split("@")[1] if "@" in url else "database"
    print(f"🔗 Connecting to database: {db_host}")

    engine = create_async_engine(url, echo=False)
    try:
        async with engine.begin() as conn:
            print("📦 Creating database tables...")
            await conn.run_sync(Base.metadata.create_all)
        print("✅ Catalog tables created successfully!\n")
        return 0
    except Exception as exc:
        print(f"❌ Error creating database tables: {exc}")
        traceback.print_exc()
        return 1
    finally:
        await engine.dispose()


def main() -> None:
    """Entry point for database initialization."""
    sys.exit(asyncio.run(init_db()))


if __name__ == "__main__":
    main()
