"""
Repository for FCA fine database operations.

Read-only queries over the fca_fines table: whole-table aggregates,
latest notices, per-year totals, per-firm summaries, breach and
sector hubs, trends and notification items.

Responsibility: Data access layer for fca_fines table
"""

import logging
from typing import List, Optional
from sqlalchemy import select, func, desc, text
from sqlalchemy.ext.asyncio import AsyncSession

from fca_fines.db.models import FcaFineModel
from fca_fines.models.fine import (
    FineRecord,
    FineTotals,
    YearTotal,
    FineStats,
    FirmSummary,
    FirmDetails,
    CategorySummary,
    BreachDetails,
    TrendPoint,
    FineNotification,
)
from fca_fines.utils.formatting import format_gbp, format_short_date
from fca_fines.utils.slugify import firm_slug, hub_slug

logger = logging.getLogger(__name__)


LIST_LIMIT_MAX = 5000

_BREACH_CATEGORIES_SQL = text(
    """
    SELECT cat.category AS category,
           COUNT(*) AS fine_count,
           COALESCE(SUM(f.amount), 0) AS total_amount
    FROM fca_fines f
    CROSS JOIN LATERAL jsonb_array_elements_text(f.breach_categories) AS cat(category)
    GROUP BY cat.category
    ORDER BY total_amount DESC, fine_count DESC, cat.category ASC
    """
)

_DOMINANT_BREACH_SQL = text(
    """
    SELECT category, COUNT(*) AS category_count
    FROM fca_fines, jsonb_array_elements_text(breach_categories) AS category
    WHERE (:year = 0 OR year_issued = :year)
    GROUP BY category
    ORDER BY category_count DESC, category ASC
    LIMIT 1
    """
)


_TREND_PERIODS = {
    "month": lambda: FcaFineModel.month_issued,
    "quarter": lambda: (FcaFineModel.month_issued + 2) // 3,
    "year": lambda: FcaFineModel.year_issued,
}


class FineRepository:
    """Repository for fine read operations."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: Async database session
        """
        self.session = session

    def _year_filter(self, query, year: int):
        """Restrict a query to one calendar year; 0 means all years."""
        if year > 0:
            return query.where(FcaFineModel.year_issued == year)
        return query

    async def get_totals(self) -> FineTotals:
        """
        Count, total amount and year range over all fines.

        Returns:
            FineTotals (zero totals and null years when the table is empty)
        """
        result = await self.session.execute(
            select(
                func.count(FcaFineModel.id),
                func.coalesce(func.sum(FcaFineModel.amount), 0),
                func.min(FcaFineModel.year_issued),
                func.max(FcaFineModel.year_issued),
            )
        )
        total_fines, total_amount, earliest_year, latest_year = result.one()
        return FineTotals(
            total_fines=int(total_fines or 0),
            total_amount=float(total_amount or 0),
            earliest_year=earliest_year,
            latest_year=latest_year,
        )

    async def get_latest(self, limit: int = 10) -> List[FineRecord]:
        """
        Most recent fines by issue date.

        Args:
            limit: Maximum number of records

        Returns:
            List of FineRecord, newest first
        """
        result = await self.session.execute(
            select(FcaFineModel)
            .order_by(desc(FcaFineModel.date_issued))
            .limit(limit)
        )
        return [FineRecord.model_validate(row) for row in result.scalars().all()]

    async def get_year_totals(self, from_year: int) -> List[YearTotal]:
        """
        Per-year count and amount for every year >= from_year.

        Args:
            from_year: First year to include

        Returns:
            List of YearTotal ordered by year descending
        """
        result = await self.session.execute(
            select(
                FcaFineModel.year_issued,
                func.count(FcaFineModel.id),
                func.coalesce(func.sum(FcaFineModel.amount), 0),
            )
            .where(FcaFineModel.year_issued >= from_year)
            .group_by(FcaFineModel.year_issued)
            .order_by(desc(FcaFineModel.year_issued))
        )
        return [
            YearTotal(year=year, fine_count=int(count), total_amount=float(amount))
            for year, count, amount in result.all()
        ]

    async def list_years(self) -> List[YearTotal]:
        """All years with at least one fine, newest first."""
        return await self.get_year_totals(from_year=0)

    async def list_fines(self, year: int, limit: int) -> List[FineRecord]:
        """
        Fines issued in a year (0 = all years), newest first.

        Args:
            year: Calendar year or 0
            limit: Maximum number of records (clamped to 1..5000)

        Returns:
            List of FineRecord
        """
        clamped = max(1, min(limit, LIST_LIMIT_MAX))
        query = self._year_filter(select(FcaFineModel), year)
        result = await self.session.execute(
            query.order_by(desc(FcaFineModel.date_issued)).limit(clamped)
        )
        return [FineRecord.model_validate(row) for row in result.scalars().all()]

    async def get_stats(self, year: int) -> FineStats:
        """
        Summary statistics for a year (0 = all years).

        Args:
            year: Calendar year or 0

        Returns:
            FineStats including the largest fine's firm and the most
            frequent breach category
        """
        aggregate = self._year_filter(
            select(
                func.count(FcaFineModel.id),
                func.coalesce(func.sum(FcaFineModel.amount), 0),
                func.coalesce(func.avg(FcaFineModel.amount), 0),
                func.coalesce(func.max(FcaFineModel.amount), 0),
            ),
            year,
        )
        total_fines, total_amount, avg_amount, max_fine = (
            await self.session.execute(aggregate)
        ).one()

        largest = self._year_filter(select(FcaFineModel.firm_individual), year)
        max_firm_name = (
            await self.session.execute(
                largest.order_by(desc(FcaFineModel.amount)).limit(1)
            )
        ).scalar_one_or_none()

        breach_row = (
            await self.session.execute(_DOMINANT_BREACH_SQL, {"year": year})
        ).first()

        return FineStats(
            total_fines=int(total_fines or 0),
            total_amount=float(total_amount or 0),
            avg_amount=float(avg_amount or 0),
            max_fine=float(max_fine or 0),
            max_firm_name=max_firm_name,
            dominant_breach=breach_row[0] if breach_row else None,
        )

    async def list_top_firms(self, limit: int = 100) -> List[FirmSummary]:
        """
        Firms ranked by total penalties.

        Args:
            limit: Maximum number of firms (clamped to 1..1000)

        Returns:
            List of FirmSummary
        """
        clamped = max(1, min(limit, 1000))
        result = await self.session.execute(
            select(
                FcaFineModel.firm_individual,
                func.count(FcaFineModel.id).label("fine_count"),
                func.coalesce(func.sum(FcaFineModel.amount), 0).label("total_amount"),
                func.max(FcaFineModel.date_issued),
            )
            .group_by(FcaFineModel.firm_individual)
            .order_by(
                desc("total_amount"),
                desc("fine_count"),
                FcaFineModel.firm_individual,
            )
            .limit(clamped)
        )
        return [
            FirmSummary(
                name=name,
                slug=firm_slug(name),
                fine_count=int(count),
                total_amount=float(amount),
                latest_date=latest_date,
            )
            for name, count, amount, latest_date in result.all()
        ]

    async def find_firm_name(self, slug: str) -> Optional[str]:
        """
        Resolve a firm slug back to the stored firm name.

        Firm slugs embed a hash of the name, so every distinct name is
        slugified and compared.
        """
        result = await self.session.execute(
            select(FcaFineModel.firm_individual).distinct()
        )
        for name in result.scalars().all():
            if firm_slug(name) == slug:
                return name
        return None

    async def get_firm_details(self, firm_name: str, limit: int = 200) -> FirmDetails:
        """
        Totals and individual records for one firm.

        Args:
            firm_name: Exact firm_individual value
            limit: Maximum number of records (clamped to 1..5000)

        Returns:
            FirmDetails
        """
        summary = (
            await self.session.execute(
                select(
                    func.count(FcaFineModel.id),
                    func.coalesce(func.sum(FcaFineModel.amount), 0),
                    func.coalesce(func.max(FcaFineModel.amount), 0),
                    func.min(FcaFineModel.date_issued),
                    func.max(FcaFineModel.date_issued),
                ).where(FcaFineModel.firm_individual == firm_name)
            )
        ).one()
        fine_count, total_amount, max_fine, earliest_date, latest_date = summary

        clamped = max(1, min(limit, 5000))
        records = await self.session.execute(
            select(FcaFineModel)
            .where(FcaFineModel.firm_individual == firm_name)
            .order_by(desc(FcaFineModel.date_issued), desc(FcaFineModel.amount))
            .limit(clamped)
        )

        return FirmDetails(
            name=firm_name,
            slug=firm_slug(firm_name),
            fine_count=int(fine_count or 0),
            total_amount=float(total_amount or 0),
            max_fine=float(max_fine or 0),
            earliest_date=earliest_date,
            latest_date=latest_date,
            records=[FineRecord.model_validate(row) for row in records.scalars().all()],
        )

    # MARK: Hubs ------------------------------------------------------------

    async def list_breach_categories(self) -> List[CategorySummary]:
        """
        Breach categories ranked by total penalties.

        A fine tagged with several categories counts towards each of them.
        """
        result = await self.session.execute(_BREACH_CATEGORIES_SQL)
        return [
            CategorySummary(
                name=str(category),
                slug=hub_slug(str(category)),
                fine_count=int(count),
                total_amount=float(amount),
            )
            for category, count, amount in result.all()
        ]

    async def get_breach_details(
        self,
        slug: str,
        limit_penalties: int = 10,
        limit_firms: int = 10,
    ) -> Optional[BreachDetails]:
        """
        Totals, largest penalties and most-fined firms for one breach category.

        Args:
            slug: hub_slug() of the category name
            limit_penalties: Number of largest penalties (clamped to 1..50)
            limit_firms: Number of firms (clamped to 1..50)

        Returns:
            BreachDetails, or None if no category has this slug
        """
        categories = await self.list_breach_categories()
        category = next((c for c in categories if c.slug == slug), None)
        if category is None:
            return None

        in_category = FcaFineModel.breach_categories.contains([category.name])

        max_fine = (
            await self.session.execute(
                select(func.coalesce(func.max(FcaFineModel.amount), 0)).where(in_category)
            )
        ).scalar_one()

        penalties = await self.session.execute(
            select(FcaFineModel)
            .where(in_category)
            .order_by(desc(FcaFineModel.amount), desc(FcaFineModel.date_issued))
            .limit(max(1, min(limit_penalties, 50)))
        )

        firms = await self.session.execute(
            select(
                FcaFineModel.firm_individual,
                func.count(FcaFineModel.id).label("fine_count"),
                func.coalesce(func.sum(FcaFineModel.amount), 0).label("total_amount"),
                func.max(FcaFineModel.date_issued),
            )
            .where(in_category)
            .group_by(FcaFineModel.firm_individual)
            .order_by(desc("total_amount"), desc("fine_count"), FcaFineModel.firm_individual)
            .limit(max(1, min(limit_firms, 50)))
        )

        return BreachDetails(
            **category.model_dump(),
            max_fine=float(max_fine or 0),
            top_penalties=[FineRecord.model_validate(row) for row in penalties.scalars().all()],
            top_firms=[
                FirmSummary(
                    name=name,
                    slug=firm_slug(name),
                    fine_count=int(count),
                    total_amount=float(amount),
                    latest_date=latest_date,
                )
                for name, count, amount, latest_date in firms.all()
            ],
        )

    async def list_sectors(self) -> List[CategorySummary]:
        """Firm sectors ranked by total penalties. Fines without a sector are skipped."""
        total_amount = func.coalesce(func.sum(FcaFineModel.amount), 0).label("total_amount")
        fine_count = func.count(FcaFineModel.id).label("fine_count")
        result = await self.session.execute(
            select(FcaFineModel.firm_category, fine_count, total_amount)
            .where(FcaFineModel.firm_category.is_not(None), FcaFineModel.firm_category != "")
            .group_by(FcaFineModel.firm_category)
            .order_by(desc("total_amount"), desc("fine_count"), FcaFineModel.firm_category)
        )
        return [
            CategorySummary(
                name=sector,
                slug=hub_slug(sector),
                fine_count=int(count),
                total_amount=float(amount),
            )
            for sector, count, amount in result.all()
        ]

    # MARK: Dashboard -------------------------------------------------------

    async def get_trends(self, period: str, year: int, limit: int = 12) -> List[TrendPoint]:
        """
        Fine counts and amounts per month, quarter or year.

        Args:
            period: "month", "quarter" or "year"
            year: Restrict to one calendar year (all its periods); 0 for the
                latest `limit` periods across all years
            limit: Number of periods when year is 0 (clamped to 1..120)

        Returns:
            TrendPoints in chronological order; empty for an unknown period
        """
        period = period.lower()
        if period not in _TREND_PERIODS:
            logger.warning(f"Unknown trend period: {period}")
            return []

        period_value = _TREND_PERIODS[period]().label("period_value")
        query = (
            select(
                FcaFineModel.year_issued,
                period_value,
                func.count(FcaFineModel.id),
                func.coalesce(func.sum(FcaFineModel.amount), 0),
                func.coalesce(func.avg(FcaFineModel.amount), 0),
            )
            .group_by(FcaFineModel.year_issued, period_value)
        )

        if year > 0:
            query = query.where(FcaFineModel.year_issued == year).order_by(period_value)
        else:
            query = query.order_by(desc(FcaFineModel.year_issued), desc(period_value)).limit(
                max(1, min(limit, 120))
            )

        rows = (await self.session.execute(query)).all()
        points = [
            TrendPoint(
                period_type=period,
                year=row_year,
                period_value=int(value),
                fine_count=int(count),
                total_fines=float(total),
                average_fine=float(average),
            )
            for row_year, value, count, total, average in rows
        ]
        return points if year > 0 else list(reversed(points))

    async def get_notifications(self, limit: int = 6) -> List[FineNotification]:
        """Latest final notices as notification items, newest first."""
        result = await self.session.execute(
            select(
                FcaFineModel.id,
                FcaFineModel.firm_individual,
                FcaFineModel.breach_type,
                FcaFineModel.amount,
                FcaFineModel.date_issued,
            )
            .order_by(desc(FcaFineModel.date_issued), desc(FcaFineModel.amount))
            .limit(limit)
        )
        notifications = []
        for fine_id, firm, breach_type, amount, issued in result.all():
            detail = format_gbp(amount)
            if breach_type:
                detail = f"{detail} • {breach_type}"
            notifications.append(
                FineNotification(
                    id=str(fine_id),
                    title=f"{firm} final notice",
                    detail=detail,
                    time=format_short_date(issued),
                )
            )
        return notifications
