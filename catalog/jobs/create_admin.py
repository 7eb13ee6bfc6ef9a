"""Bootstrap an admin account.

Usage:
    python -m catalog.jobs.create_admin --email admin@example.com --name Admin

The password is read from ``--password`` or prompted for when omitted.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from typing import Sequence

from pydantic import ValidationError

from catalog.core import get_settings
from catalog.core.exceptions import EmailAlreadyRegisteredError
from catalog.database.session import async_session_factory, engine
from catalog.enums import AccountRole
from catalog.schemas import RegisterRequest
from catalog.services.auth import AuthService


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a catalog admin account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--password", help="Prompted for when omitted")
    return parser.parse_args(argv)


async def create_admin(email: str, name: str, password: str) -> int:
    try:
        payload = RegisterRequest(name=name, email=email, password=password)
    except ValidationError as exc:
        print(f"❌ Invalid admin details: {exc.errors()[0]['msg']}")
        return 1

    try:
        async with async_session_factory() as session:
            service = AuthService(session, get_settings())
            account = await service.create_account(payload, role=AccountRole.ADMIN)
    except EmailAlreadyRegisteredError as exc:
        print(f"⚠️  {exc.message}")
        return 1
    finally:
        await engine.dispose()

    print(f"✅ Admin account created: {account.email} ({account.id})")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Admin password: ")
    sys.exit(asyncio.run(create_admin(args.email, args.name, password)))


if __name__ == "__main__":
    main()
