"""
Homepage statistics service.

Combines three independent reads over fca_fines into the summary shown on
the homepage: overall totals, the latest notices and a year-over-year
change in total penalties.

Responsibility: Aggregate and derive homepage statistics
"""

import logging
from typing import Iterable, List, Optional, Protocol
from pydantic import BaseModel

from fca_fines.models.fine import FineRecord, FineTotals, YearTotal

logger = logging.getLogger(__name__)

LATEST_FINES_LIMIT = 10


class FineReader(Protocol):
    """Subset of FineRepository needed for homepage stats."""

    async def get_totals(self) -> FineTotals: ...

    async def get_latest(self, limit: int = 10) -> List[FineRecord]: ...

    async def get_year_totals(self, from_year: int) -> List[YearTotal]: ...


class HomepageStats(BaseModel):
    """Derived homepage summary."""

    total_fines: int
    total_amount: float
    years_covered: Optional[int]
    earliest_year: Optional[int]
    latest_year: Optional[int]
    yoy_change: Optional[str]
    latest_fines: List[FineRecord]


def years_covered(earliest_year: Optional[int], latest_year: Optional[int]) -> Optional[int]:
    """
    Inclusive span of years between the earliest and latest fine.

    This is a span, not a count of years that have fines: a gap year
    inside the range is still counted. None when the table is empty.
    """
    if earliest_year is None or latest_year is None:
        return None
    return latest_year - earliest_year + 1


def compute_yoy_change(year_totals: Iterable[YearTotal], current_year: int) -> Optional[str]:
    """
    Percentage change in total penalties from last year to this year.

    Args:
        year_totals: Per-year totals (any order)
        current_year: Calendar year treated as "this year"

    Returns:
        Change rounded to one decimal as a string (e.g. "50.0"), or None
        when either year is missing or last year's total is zero
    """
    by_year = {total.year: total for total in year_totals}
    this_year = by_year.get(current_year)
    last_year = by_year.get(current_year - 1)

    if this_year is None or last_year is None:
        return None
    if last_year.total_amount == 0:
        logger.warning(f"No penalties recorded for {current_year - 1}; year-over-year change undefined")
        return None

    change = (this_year.total_amount - last_year.total_amount) / last_year.total_amount * 100
    return f"{change:.1f}"


async def build_homepage_stats(repo: FineReader, current_year: int) -> HomepageStats:
    """
    Run the homepage queries and derive the summary.

    The reads are issued one after another without a transaction; a fine
    inserted between them only affects one of the figures.

    Args:
        repo: Fine reader (FineRepository)
        current_year: Calendar year used for the year-over-year change

    Returns:
        HomepageStats
    """
    totals = await repo.get_totals()
    latest = await repo.get_latest(limit=LATEST_FINES_LIMIT)
    year_totals = await repo.get_year_totals(from_year=current_year - 1)

    return HomepageStats(
        total_fines=totals.total_fines,
        total_amount=totals.total_amount,
        years_covered=years_covered(totals.earliest_year, totals.latest_year),
        earliest_year=totals.earliest_year,
        latest_year=totals.latest_year,
        yoy_change=compute_yoy_change(year_totals, current_year),
        latest_fines=latest,
    )
