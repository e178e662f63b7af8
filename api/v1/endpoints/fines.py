"""
FCA fines API endpoints.

Read-only views over the fines table used by the dashboard, year hubs,
firm, breach and sector pages.

Responsibility: Fines list, stats, year, firm, hub, trend and notification
endpoints for API v1
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from api.dependencies import get_fine_repository, get_now
from api.v1.schemas.fines import (
    FineListEnvelope,
    FineStatsEnvelope,
    FineStatsResponse,
    YearListEnvelope,
    YearSummaryResponse,
    FirmListEnvelope,
    FirmSummaryResponse,
    FirmDetailsEnvelope,
    FirmDetailsResponse,
    CategoryListEnvelope,
    CategorySummaryResponse,
    BreachDetailsEnvelope,
    BreachDetailsResponse,
    TrendListEnvelope,
    TrendPointResponse,
    NotificationListEnvelope,
    NotificationResponse,
)
from fca_fines.db.repositories import FineRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fca-fines", tags=["fines"])

YEARS_CACHE_CONTROL = "public, max-age=0, s-maxage=300, stale-while-revalidate=86400"
HUB_LIMIT_MAX = 50


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _failure(message: str) -> JSONResponse:
    return _error(500, message)


@router.get("/list", response_model=FineListEnvelope)
async def list_fines(
    year: int = Query(0, ge=0, description="Calendar year, 0 for all years"),
    limit: int = Query(500, description="Maximum results, clamped to 1-5000"),
    repo: FineRepository = Depends(get_fine_repository),
):
    """
    List fines, newest first.

    Args:
        year: Restrict to one calendar year (0 = all)
        limit: Maximum results; out-of-range values are clamped
        repo: Fine repository

    Returns:
        FineListEnvelope with matching records
    """
    try:
        records = await repo.list_fines(year=year, limit=limit)
    except Exception as e:
        logger.error(f"Fines list error: {e}", exc_info=True)
        return _failure("Failed to fetch fines")

    return FineListEnvelope.from_records(records)


@router.get("/stats", response_model=FineStatsEnvelope)
async def get_fine_stats(
    year: Optional[int] = Query(None, ge=0, description="Calendar year (default: current year), 0 for all years"),
    repo: FineRepository = Depends(get_fine_repository),
    now: datetime = Depends(get_now),
):
    """Summary statistics for one year or all years."""
    try:
        stats = await repo.get_stats(year=now.year if year is None else year)
    except Exception as e:
        logger.error(f"Fines stats error: {e}", exc_info=True)
        return _failure("Failed to fetch stats")

    return FineStatsEnvelope(data=FineStatsResponse.model_validate(stats.model_dump()))


@router.get("/years", response_model=YearListEnvelope)
async def list_years(
    response: Response,
    repo: FineRepository = Depends(get_fine_repository),
):
    """Per-year fine counts and totals, newest first."""
    try:
        years = await repo.list_years()
    except Exception as e:
        logger.error(f"Years endpoint error: {e}", exc_info=True)
        return _failure("Failed to fetch years")

    response.headers["Cache-Control"] = YEARS_CACHE_CONTROL
    return YearListEnvelope(
        data=[YearSummaryResponse.model_validate(year.model_dump()) for year in years]
    )


# MARK: Firms -----------------------------------------------------------------


@router.get("/firms", response_model=FirmListEnvelope)
async def list_firms(
    response: Response,
    limit: int = Query(100, description="Maximum firms, clamped to 1-1000"),
    repo: FineRepository = Depends(get_fine_repository),
):
    """Firms ranked by total penalties."""
    try:
        firms = await repo.list_top_firms(limit=limit)
    except Exception as e:
        logger.error(f"Firms endpoint error: {e}", exc_info=True)
        return _failure("Failed to fetch firms")

    response.headers["Cache-Control"] = YEARS_CACHE_CONTROL
    return FirmListEnvelope(
        data=[FirmSummaryResponse.model_validate(firm.model_dump()) for firm in firms]
    )


async def _firm_response(repo: FineRepository, slug: str, limit: int):
    try:
        firm_name = await repo.find_firm_name(slug)
        details = await repo.get_firm_details(firm_name, limit=limit) if firm_name else None
    except Exception as e:
        logger.error(f"Firm endpoint error: {e}", exc_info=True)
        return _failure("Failed to fetch firm details")

    if details is None:
        return _error(404, "Firm not found")

    return FirmDetailsEnvelope(data=FirmDetailsResponse.model_validate(details.model_dump()))


@router.get("/firm", response_model=FirmDetailsEnvelope)
async def get_firm_by_query(
    slug: Optional[str] = Query(None),
    limit: int = Query(200, description="Maximum records, clamped to 1-5000"),
    repo: FineRepository = Depends(get_fine_repository),
):
    """Penalty history for one firm, addressed as ?slug=."""
    if not slug:
        return _error(400, "Missing slug")
    return await _firm_response(repo, slug, limit)


@router.get("/firms/{slug}", response_model=FirmDetailsEnvelope)
async def get_firm(
    slug: str,
    limit: int = Query(200, description="Maximum records, clamped to 1-5000"),
    repo: FineRepository = Depends(get_fine_repository),
):
    """
    Penalty history for one firm.

    Returns 404 {"success": false, "error": "Firm not found"} for an
    unknown slug.
    """
    return await _firm_response(repo, slug, limit)


# MARK: Hubs ------------------------------------------------------------------


@router.get("/categories", response_model=CategoryListEnvelope)
async def list_breach_categories(
    response: Response,
    repo: FineRepository = Depends(get_fine_repository),
):
    """Breach categories ranked by total penalties."""
    try:
        categories = await repo.list_breach_categories()
    except Exception as e:
        logger.error(f"Categories endpoint error: {e}", exc_info=True)
        return _failure("Failed to fetch breach categories")

    response.headers["Cache-Control"] = YEARS_CACHE_CONTROL
    return CategoryListEnvelope(
        data=[CategorySummaryResponse.model_validate(c.model_dump()) for c in categories]
    )


@router.get("/breach", response_model=BreachDetailsEnvelope)
async def get_breach(
    response: Response,
    slug: Optional[str] = Query(None),
    limit_penalties: int = Query(10, alias="limitPenalties"),
    limit_firms: int = Query(10, alias="limitFirms"),
    repo: FineRepository = Depends(get_fine_repository),
):
    """
    Breach category hub.

    Both limits are clamped to 1-50. Missing slug gives 400, an unknown
    one 404.
    """
    if not slug:
        return _error(400, "Missing slug")

    try:
        details = await repo.get_breach_details(
            slug,
            limit_penalties=max(1, min(limit_penalties, HUB_LIMIT_MAX)),
            limit_firms=max(1, min(limit_firms, HUB_LIMIT_MAX)),
        )
    except Exception as e:
        logger.error(f"Breach endpoint error: {e}", exc_info=True)
        return _failure("Failed to fetch breach details")

    if details is None:
        return _error(404, "Breach not found")

    response.headers["Cache-Control"] = YEARS_CACHE_CONTROL
    return BreachDetailsEnvelope(data=BreachDetailsResponse.model_validate(details.model_dump()))


@router.get("/sectors", response_model=CategoryListEnvelope)
async def list_sectors(
    response: Response,
    repo: FineRepository = Depends(get_fine_repository),
):
    """Firm sectors ranked by total penalties."""
    try:
        sectors = await repo.list_sectors()
    except Exception as e:
        logger.error(f"Sectors endpoint error: {e}", exc_info=True)
        return _failure("Failed to fetch sectors")

    response.headers["Cache-Control"] = YEARS_CACHE_CONTROL
    return CategoryListEnvelope(
        data=[CategorySummaryResponse.model_validate(s.model_dump()) for s in sectors]
    )


# MARK: Dashboard -------------------------------------------------------------


@router.get("/trends", response_model=TrendListEnvelope)
async def get_trends(
    period: str = Query("month", description="month, quarter or year"),
    year: int = Query(0, description="Calendar year, 0 for the latest periods"),
    limit: int = Query(12, description="Number of periods, clamped to 1-120"),
    repo: FineRepository = Depends(get_fine_repository),
):
    """Fine counts and totals per period, oldest first."""
    try:
        points = await repo.get_trends(period=period.lower(), year=year, limit=limit)
    except Exception as e:
        logger.error(f"Trends endpoint error: {e}", exc_info=True)
        return _failure("Failed to fetch trends")

    return TrendListEnvelope(
        data=[TrendPointResponse.model_validate(point.model_dump()) for point in points]
    )


@router.get("/notifications", response_model=NotificationListEnvelope)
async def get_notifications(
    repo: FineRepository = Depends(get_fine_repository),
):
    """The six most recent final notices as notification items."""
    try:
        notifications = await repo.get_notifications(limit=6)
    except Exception as e:
        logger.error(f"Notifications endpoint error: {e}", exc_info=True)
        return _failure("Failed to fetch notifications")

    return NotificationListEnvelope(
        data=[NotificationResponse.model_validate(n.model_dump()) for n in notifications]
    )
