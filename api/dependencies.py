"""
FastAPI dependencies shared by the v1 endpoints.

Settings and the Database live on app.state (see api.main.create_app), so
handlers never read module globals and tests can swap any of these through
app.dependency_overrides.

Responsibility: Request-scoped settings, sessions, repositories and clock
"""

from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fca_fines.config import Settings
from fca_fines.content import ContentCatalog, get_catalog
from fca_fines.db.repositories import FineRepository, SubscriptionRepository
from fca_fines.db.session import Database


def get_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency"""
    db: Database = request.app.state.db
    if not db.initialized:
        await db.initialize()
    async with db.session() as session:
        yield session


def get_fine_repository(session: AsyncSession = Depends(get_db)) -> FineRepository:
    return FineRepository(session)


def get_subscription_repository(session: AsyncSession = Depends(get_db)) -> SubscriptionRepository:
    return SubscriptionRepository(session)


def get_content_catalog() -> ContentCatalog:
    return get_catalog()


def get_now() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)
