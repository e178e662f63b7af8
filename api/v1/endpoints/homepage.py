"""Homepage endpoints for aggregate statistics."""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from api.dependencies import get_fine_repository, get_now
from api.v1.schemas.homepage import HomepageStatsResponse
from fca_fines.db.repositories import FineRepository
from fca_fines.services.homepage_stats import build_homepage_stats

logger = logging.getLogger(__name__)

router = APIRouter()

# Browsers 5 minutes, shared caches 10 minutes
CACHE_CONTROL = "public, max-age=300, s-maxage=600"


# MARK: Routes ---------------------------------------------------------------

@router.get(
    "/homepage/stats",
    response_model=HomepageStatsResponse,
    summary="Get homepage statistics",
    tags=["homepage"],
)
async def get_homepage_stats(
    response: Response,
    repo: FineRepository = Depends(get_fine_repository),
    now: datetime = Depends(get_now),
):
    """Return totals, the ten latest fines and the year-over-year change."""

    try:
        stats = await build_homepage_stats(repo, current_year=now.year)
    except Exception as e:
        logger.error(f"Homepage stats error: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch homepage stats"})

    response.headers["Cache-Control"] = CACHE_CONTROL
    return HomepageStatsResponse.from_stats(stats)


@router.api_route(
    "/homepage/stats",
    methods=["POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False,
)
async def homepage_stats_method_not_allowed():
    """Reject non-GET requests before any database work."""
    return JSONResponse(
        status_code=405,
        content={"error": "Method not allowed"},
        headers={"Allow": "GET"},
    )
