"""
Pydantic schemas for FCA fines API responses.

Every fines endpoint wraps its payload as {"success": true, "data": ...}.
Summaries are camelCase; raw records keep their column names.

Responsibility: Fines response schemas
"""

import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from fca_fines.models.fine import FineRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class FineRecordResponse(BaseModel):
    """A single fine as stored."""

    model_config = ConfigDict(from_attributes=True)

    fine_reference: Optional[str] = None
    firm_individual: str
    firm_category: Optional[str] = None
    regulator: str
    final_notice_url: str
    summary: str
    breach_type: Optional[str] = None
    breach_categories: List[str]
    amount: float
    date_issued: datetime.date
    year_issued: int
    month_issued: int


class FineStatsResponse(_CamelModel):
    total_fines: int
    total_amount: float
    avg_amount: float
    max_fine: float
    max_firm_name: Optional[str] = None
    dominant_breach: Optional[str] = None


class YearSummaryResponse(_CamelModel):
    year: int
    fine_count: int
    total_amount: float


class FirmSummaryResponse(_CamelModel):
    name: str
    slug: str
    fine_count: int
    total_amount: float
    latest_date: Optional[datetime.date] = None


class FirmDetailsResponse(FirmSummaryResponse):
    max_fine: float
    earliest_date: Optional[datetime.date] = None
    records: List[FineRecordResponse]


class FineListEnvelope(BaseModel):
    success: bool = True
    data: List[FineRecordResponse]

    @classmethod
    def from_records(cls, records: List[FineRecord]) -> "FineListEnvelope":
        return cls(data=[FineRecordResponse.model_validate(record) for record in records])


class FineStatsEnvelope(BaseModel):
    success: bool = True
    data: FineStatsResponse


class YearListEnvelope(BaseModel):
    success: bool = True
    data: List[YearSummaryResponse]


class FirmListEnvelope(BaseModel):
    success: bool = True
    data: List[FirmSummaryResponse]


class FirmDetailsEnvelope(BaseModel):
    success: bool = True
    data: FirmDetailsResponse


class CategorySummaryResponse(_CamelModel):
    name: str
    slug: str
    fine_count: int
    total_amount: float


class BreachDetailsResponse(CategorySummaryResponse):
    max_fine: float
    top_penalties: List[FineRecordResponse]
    top_firms: List[FirmSummaryResponse]


class TrendPointResponse(BaseModel):
    """One trend period; keys match the trend table columns."""

    period_type: str
    year: int
    period_value: int
    fine_count: int
    total_fines: float
    average_fine: float


class NotificationResponse(BaseModel):
    id: str
    title: str
    detail: str
    time: str
    read: bool


class CategoryListEnvelope(BaseModel):
    success: bool = True
    data: List[CategorySummaryResponse]


class BreachDetailsEnvelope(BaseModel):
    success: bool = True
    data: BreachDetailsResponse


class TrendListEnvelope(BaseModel):
    success: bool = True
    data: List[TrendPointResponse]


class NotificationListEnvelope(BaseModel):
    success: bool = True
    data: List[NotificationResponse]
