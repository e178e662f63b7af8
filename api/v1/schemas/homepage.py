"""
Pydantic schemas for homepage API responses.

The homepage payload is consumed directly by the front end, so fields are
serialized in camelCase.

Responsibility: Homepage response schemas
"""

import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from fca_fines.models.fine import FineRecord
from fca_fines.services.homepage_stats import HomepageStats


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LatestFineResponse(_CamelModel):
    """One recent enforcement notice."""

    firm: str
    amount: float
    date: datetime.date
    breach_type: Optional[str] = None
    notice_url: str

    @classmethod
    def from_record(cls, record: FineRecord) -> "LatestFineResponse":
        return cls(
            firm=record.firm_individual,
            amount=float(record.amount),
            date=record.date_issued,
            breach_type=record.breach_type,
            notice_url=record.final_notice_url,
        )


class HomepageStatsResponse(_CamelModel):
    """Aggregate statistics for the homepage hero and latest-notices panel."""

    total_fines: int
    total_amount: float
    years_covered: Optional[int] = None
    earliest_year: Optional[int] = None
    latest_year: Optional[int] = None
    yoy_change: Optional[str] = None
    latest_fines: List[LatestFineResponse]

    @classmethod
    def from_stats(cls, stats: HomepageStats) -> "HomepageStatsResponse":
        return cls(
            total_fines=stats.total_fines,
            total_amount=stats.total_amount,
            years_covered=stats.years_covered,
            earliest_year=stats.earliest_year,
            latest_year=stats.latest_year,
            yoy_change=stats.yoy_change,
            latest_fines=[LatestFineResponse.from_record(fine) for fine in stats.latest_fines],
        )
