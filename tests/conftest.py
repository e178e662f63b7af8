"""Shared fixtures: in-memory repositories and an app wired to them."""

from collections import defaultdict
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_fine_repository, get_now, get_settings, get_subscription_repository
from api.main import create_app
from fca_fines.config import AppConfig, DatabaseConfig, Settings
from fca_fines.models.fine import (
    BreachDetails,
    CategorySummary,
    FineNotification,
    FineRecord,
    FineStats,
    FineTotals,
    FirmDetails,
    FirmSummary,
    TrendPoint,
    YearTotal,
)
from fca_fines.models.subscription import DigestSubscription, SubscriptionStatus
from fca_fines.utils.formatting import format_gbp, format_short_date
from fca_fines.utils.slugify import firm_slug, hub_slug

BASE_URL = "https://fines.example.test"
NOW = datetime(2021, 6, 1, 12, 0, tzinfo=UTC)


def make_fine(
    firm: str,
    amount: int,
    issued: date,
    categories: Optional[List[str]] = None,
    sector: Optional[str] = None,
) -> FineRecord:
    """Helper to create a FineRecord with consistent year/month fields."""
    return FineRecord(
        firm_individual=firm,
        firm_category=sector,
        final_notice_url=f"https://www.fca.org.uk/final-notices/{firm_slug(firm)}-{issued.isoformat()}.pdf",
        breach_type=(categories or [None])[0],
        breach_categories=categories or [],
        amount=Decimal(amount),
        date_issued=issued,
        year_issued=issued.year,
        month_issued=issued.month,
    )


class FakeFineRepository:
    """FineRepository over a list of records."""

    def __init__(self, fines: Optional[List[FineRecord]] = None, fail: bool = False):
        self.fines = list(fines or [])
        self.fail = fail
        self.calls: List[str] = []
        self.limits: Dict[str, object] = {}

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if self.fail:
            raise RuntimeError("connection refused")

    def _newest_first(self, fines: List[FineRecord]) -> List[FineRecord]:
        return sorted(fines, key=lambda fine: fine.date_issued, reverse=True)

    def _for_year(self, year: int) -> List[FineRecord]:
        return [fine for fine in self.fines if year == 0 or fine.year_issued == year]

    async def get_totals(self) -> FineTotals:
        self._check("get_totals")
        years = [fine.year_issued for fine in self.fines]
        return FineTotals(
            total_fines=len(self.fines),
            total_amount=float(sum(fine.amount for fine in self.fines)),
            earliest_year=min(years) if years else None,
            latest_year=max(years) if years else None,
        )

    async def get_latest(self, limit: int = 10) -> List[FineRecord]:
        self._check("get_latest")
        return self._newest_first(self.fines)[:limit]

    async def get_year_totals(self, from_year: int) -> List[YearTotal]:
        self._check("get_year_totals")
        counts: Dict[int, int] = defaultdict(int)
        amounts: Dict[int, Decimal] = defaultdict(Decimal)
        for fine in self.fines:
            if fine.year_issued >= from_year:
                counts[fine.year_issued] += 1
                amounts[fine.year_issued] += fine.amount
        return [
            YearTotal(year=year, fine_count=counts[year], total_amount=float(amounts[year]))
            for year in sorted(counts, reverse=True)
        ]

    async def list_years(self) -> List[YearTotal]:
        return await self.get_year_totals(from_year=0)

    async def list_fines(self, year: int, limit: int) -> List[FineRecord]:
        self._check("list_fines")
        self.limits["list_fines"] = limit
        return self._newest_first(self._for_year(year))[: max(1, min(limit, 5000))]

    async def get_stats(self, year: int) -> FineStats:
        self._check("get_stats")
        fines = self._for_year(year)
        if not fines:
            return FineStats()
        largest = max(fines, key=lambda fine: fine.amount)
        categories: Dict[str, int] = defaultdict(int)
        for fine in fines:
            for category in fine.breach_categories:
                categories[category] += 1
        dominant = min(categories, key=lambda c: (-categories[c], c)) if categories else None
        total = float(sum(fine.amount for fine in fines))
        return FineStats(
            total_fines=len(fines),
            total_amount=total,
            avg_amount=total / len(fines),
            max_fine=float(largest.amount),
            max_firm_name=largest.firm_individual,
            dominant_breach=dominant,
        )

    async def list_top_firms(self, limit: int = 100) -> List[FirmSummary]:
        self._check("list_top_firms")
        self.limits["list_top_firms"] = limit
        names = {fine.firm_individual for fine in self.fines}
        firms = [self._summary(name) for name in names]
        firms.sort(key=lambda firm: (-firm.total_amount, -firm.fine_count, firm.name))
        return firms[: max(1, min(limit, 1000))]

    async def find_firm_name(self, slug: str) -> Optional[str]:
        self._check("find_firm_name")
        for fine in self.fines:
            if firm_slug(fine.firm_individual) == slug:
                return fine.firm_individual
        return None

    async def get_firm_details(self, firm_name: str, limit: int = 200) -> FirmDetails:
        self._check("get_firm_details")
        self.limits["get_firm_details"] = limit
        records = self._newest_first([f for f in self.fines if f.firm_individual == firm_name])
        summary = self._summary(firm_name)
        return FirmDetails(
            **summary.model_dump(),
            max_fine=float(max(record.amount for record in records)),
            earliest_date=min(record.date_issued for record in records),
            records=records[:limit],
        )

    def _ranked(self, groups: Dict[str, List[FineRecord]]) -> List[CategorySummary]:
        summaries = [
            CategorySummary(
                name=name,
                slug=hub_slug(name),
                fine_count=len(fines),
                total_amount=float(sum(fine.amount for fine in fines)),
            )
            for name, fines in groups.items()
        ]
        summaries.sort(key=lambda s: (-s.total_amount, -s.fine_count, s.name))
        return summaries

    async def list_breach_categories(self) -> List[CategorySummary]:
        self._check("list_breach_categories")
        groups: Dict[str, List[FineRecord]] = defaultdict(list)
        for fine in self.fines:
            for category in fine.breach_categories:
                groups[category].append(fine)
        return self._ranked(groups)

    async def get_breach_details(
        self, slug: str, limit_penalties: int = 10, limit_firms: int = 10
    ) -> Optional[BreachDetails]:
        self.limits["get_breach_details"] = (limit_penalties, limit_firms)
        category = next((c for c in await self.list_breach_categories() if c.slug == slug), None)
        if category is None:
            return None
        fines = [fine for fine in self.fines if category.name in fine.breach_categories]
        names = {fine.firm_individual for fine in fines}
        firms = [self._summary(name, fines) for name in names]
        firms.sort(key=lambda firm: (-firm.total_amount, -firm.fine_count, firm.name))
        return BreachDetails(
            **category.model_dump(),
            max_fine=float(max(fine.amount for fine in fines)),
            top_penalties=sorted(fines, key=lambda fine: fine.amount, reverse=True)[:limit_penalties],
            top_firms=firms[:limit_firms],
        )

    async def list_sectors(self) -> List[CategorySummary]:
        self._check("list_sectors")
        groups: Dict[str, List[FineRecord]] = defaultdict(list)
        for fine in self.fines:
            if fine.firm_category:
                groups[fine.firm_category].append(fine)
        return self._ranked(groups)

    async def get_trends(self, period: str, year: int, limit: int = 12) -> List[TrendPoint]:
        self._check("get_trends")
        self.limits["get_trends"] = (period, year, limit)
        value_of = {
            "month": lambda fine: fine.month_issued,
            "quarter": lambda fine: (fine.month_issued + 2) // 3,
            "year": lambda fine: fine.year_issued,
        }.get(period)
        if value_of is None:
            return []
        groups: Dict[tuple, List[FineRecord]] = defaultdict(list)
        for fine in self._for_year(year):
            groups[(fine.year_issued, value_of(fine))].append(fine)
        keys = sorted(groups)
        if year == 0:
            keys = keys[-max(1, min(limit, 120)):]
        points = []
        for key in keys:
            total = float(sum(fine.amount for fine in groups[key]))
            points.append(TrendPoint(
                period_type=period,
                year=key[0],
                period_value=key[1],
                fine_count=len(groups[key]),
                total_fines=total,
                average_fine=total / len(groups[key]),
            ))
        return points

    async def get_notifications(self, limit: int = 6) -> List[FineNotification]:
        self._check("get_notifications")
        latest = sorted(self.fines, key=lambda fine: (fine.date_issued, fine.amount), reverse=True)
        return [
            FineNotification(
                id=str(index),
                title=f"{fine.firm_individual} final notice",
                detail=format_gbp(fine.amount) + (f" • {fine.breach_type}" if fine.breach_type else ""),
                time=format_short_date(fine.date_issued),
            )
            for index, fine in enumerate(latest[:limit], start=1)
        ]

    def _summary(self, name: str, fines: Optional[List[FineRecord]] = None) -> FirmSummary:
        fines = [fine for fine in (self.fines if fines is None else fines) if fine.firm_individual == name]
        return FirmSummary(
            name=name,
            slug=firm_slug(name),
            fine_count=len(fines),
            total_amount=float(sum(fine.amount for fine in fines)),
            latest_date=max(fine.date_issued for fine in fines),
        )


class FakeSubscriptionStore:
    """SubscriptionRepository over a dict, with the same conditional updates."""

    def __init__(self, subscriptions: Optional[List[DigestSubscription]] = None, fail: bool = False):
        self.rows: Dict[int, DigestSubscription] = {sub.id: sub for sub in subscriptions or []}
        self.fail = fail

    async def activate_pending(self, token: str, now: datetime) -> Optional[DigestSubscription]:
        if self.fail:
            raise RuntimeError("connection refused")
        for row in self.rows.values():
            if (
                row.verification_token == token
                and row.status == SubscriptionStatus.PENDING
                and row.verification_expires_at is not None
                and row.verification_expires_at > now
            ):
                activated = row.model_copy(update={
                    "email_verified": True,
                    "status": SubscriptionStatus.ACTIVE,
                    "verification_token": None,
                    "verification_expires_at": None,
                })
                self.rows[row.id] = activated
                return activated
        return None

    async def find_pending(self, token: str) -> Optional[DigestSubscription]:
        for row in self.rows.values():
            if row.verification_token == token and row.status == SubscriptionStatus.PENDING:
                return row
        return None

    async def unsubscribe(self, token: str) -> Optional[DigestSubscription]:
        if self.fail:
            raise RuntimeError("connection refused")
        for row in self.rows.values():
            if row.unsubscribe_token == token and row.status != SubscriptionStatus.UNSUBSCRIBED:
                updated = row.model_copy(update={"status": SubscriptionStatus.UNSUBSCRIBED})
                self.rows[row.id] = updated
                return updated
        return None


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        app=AppConfig(base_url=f"{BASE_URL}/"),
        db=DatabaseConfig(database_url="postgresql://unused@localhost/fca_fines_test"),
    )


@pytest.fixture
def fine_repo() -> FakeFineRepository:
    return FakeFineRepository()


@pytest.fixture
def subscription_store() -> FakeSubscriptionStore:
    return FakeSubscriptionStore()


@pytest.fixture
def app(test_settings, fine_repo, subscription_store):
    app = create_app(test_settings)
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_fine_repository] = lambda: fine_repo
    app.dependency_overrides[get_subscription_repository] = lambda: subscription_store
    app.dependency_overrides[get_now] = lambda: NOW
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
