"""
Initialize a local PostgreSQL database for development.

Runs Alembic migrations and, with --seed, inserts a handful of sample
fines and one pending digest subscription so the API has data to serve.

Usage:
    python scripts/init_local_db.py
    python scripts/init_local_db.py --seed
"""

import argparse
import asyncio
import sys
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import Iterable
from uuid import uuid4

from dotenv import load_dotenv
from alembic.config import Config
from alembic import command
from sqlalchemy import create_engine, inspect
from sqlalchemy.dialects.postgresql import insert


PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def load_environment(files: Iterable[Path]) -> None:
    """Load environment variables from .env files if present."""
    for env_file in files:
        if env_file.exists():
            load_dotenv(env_file, override=False)


# Ensure baseline environment before importing settings
load_environment((PROJECT_ROOT / ".env.local", PROJECT_ROOT / ".env"))

from fca_fines.config import settings
from fca_fines.db.models import DigestSubscriptionModel, FcaFineModel
from fca_fines.db.session import Database


SAMPLE_FINES = [
    ("Barclays Bank UK PLC", Decimal("72069400.00"), date(2015, 11, 26), ["Financial Crime", "AML"]),
    ("Starling Bank Limited", Decimal("28959426.00"), date(2024, 10, 2), ["AML", "Financial Crime"]),
    ("Metro Bank PLC", Decimal("16676200.00"), date(2024, 11, 12), ["AML"]),
    ("Monzo Bank Limited", Decimal("21091300.00"), date(2025, 7, 8), ["Financial Crime"]),
    ("Barclays Bank UK PLC", Decimal("39314700.00"), date(2025, 7, 16), ["Financial Crime", "Systems and Controls"]),
]


def _mask_connection(url: str) -> str:
    """Mask connection string credentials for safe logging."""
    if "@" not in url:
        return url
    prefix, suffix = url.split("@", 1)
    if ":" in prefix:
        prefix = prefix.rsplit(":", 1)[0]
    return f"{prefix}:***@{suffix}"


def run_migrations() -> bool:
    """Execute Alembic migrations against the configured database."""
    print("FCA Fines Database Initialization")
    print("=" * 70)

    connection_string = settings.db.sync_connection_string
    print(f"\nConnection: {_mask_connection(connection_string)}")

    alembic_ini = PROJECT_ROOT / "alembic.ini"
    if not alembic_ini.exists():
        print(f"Error: alembic.ini not found at {alembic_ini}")
        return False

    print("\nRunning Alembic migrations...")
    alembic_cfg = Config(str(alembic_ini))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))

    try:
        command.upgrade(alembic_cfg, "head")
    except Exception as exc:  # pragma: no cover - CLI feedback path
        print(f"\nMigration failed: {exc}")
        return False

    tables = sorted(inspect(create_engine(connection_string)).get_table_names())
    print(f"\nTables provisioned ({len(tables)}):")
    for table in tables:
        print(f"  - {table}")

    return True


async def seed_sample_data(create_all: bool = False) -> None:
    """Insert sample fines and a pending subscription. Existing rows are left alone."""
    db = Database(settings.db)
    await db.initialize()
    if create_all:
        await db.create_tables()

    fine_rows = [
        {
            "firm_individual": firm,
            "final_notice_url": f"https://www.fca.org.uk/publication/final-notices/sample-{index}.pdf",
            "summary": f"Sample final notice for {firm}",
            "breach_type": categories[0],
            "breach_categories": categories,
            "amount": amount,
            "date_issued": issued,
            "year_issued": issued.year,
            "month_issued": issued.month,
        }
        for index, (firm, amount, issued, categories) in enumerate(SAMPLE_FINES, start=1)
    ]

    token = uuid4().hex
    try:
        async with db.session() as session:
            await session.execute(insert(FcaFineModel).values(fine_rows).on_conflict_do_nothing())
            await session.execute(
                insert(DigestSubscriptionModel)
                .values(
                    email="reader@example.com",
                    frequency="weekly",
                    verification_token=token,
                    verification_expires_at=datetime.now(timezone.utc)
                    + timedelta(hours=settings.app.verification_token_ttl_hours),
                )
                .on_conflict_do_nothing()
            )
    finally:
        await db.close()

    print(f"\nSeeded {len(fine_rows)} sample fines")
    print(f"Verify link: http://localhost:{settings.app.api_port}/api/digest/verify/{token}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the local FCA fines database")
    parser.add_argument("--seed", action="store_true", help="Insert sample data after migrating")
    parser.add_argument(
        "--create-all",
        action="store_true",
        help="Create tables from the ORM metadata instead of running migrations"
    )
    args = parser.parse_args()

    if args.create_all:
        asyncio.run(seed_sample_data(create_all=True))
        sys.exit(0)
    if not run_migrations():
        sys.exit(1)
    if args.seed:
        asyncio.run(seed_sample_data())
    sys.exit(0)
