"""
Fine domain models.

Represents FCA enforcement records and the aggregates derived from them.

Responsibility: Single fine entity plus per-year, per-firm and overall summaries
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, model_validator


class FineRecord(BaseModel):
    """
    A single FCA final notice with its penalty.

    Natural key: final_notice_url
    Example: ("Barclays Bank Plc", £284,432,000, 2015-11-20)
    """

    model_config = ConfigDict(from_attributes=True)

    # MARK: - Identity
    fine_reference: Optional[str] = Field(
        default=None,
        description="FCA reference number, when published"
    )
    firm_individual: str = Field(
        min_length=1,
        description="Fined firm or individual"
    )
    firm_category: Optional[str] = Field(
        default=None,
        description="Sector of the firm (e.g., 'Banking', 'Insurance')"
    )
    regulator: str = Field(default="FCA")

    # MARK: - Notice
    final_notice_url: str = Field(description="Link to the final notice")
    summary: str = Field(default="")
    breach_type: Optional[str] = Field(default=None)
    breach_categories: List[str] = Field(default_factory=list)

    # MARK: - Penalty
    amount: Decimal = Field(ge=0, description="Penalty in whole GBP")
    date_issued: date
    year_issued: int
    month_issued: int = Field(ge=1, le=12)

    @model_validator(mode="after")
    def check_issue_date_consistency(self) -> "FineRecord":
        """year_issued and month_issued are stored redundantly with date_issued."""
        if self.year_issued != self.date_issued.year:
            raise ValueError(
                f"year_issued {self.year_issued} does not match date_issued {self.date_issued}"
            )
        if self.month_issued != self.date_issued.month:
            raise ValueError(
                f"month_issued {self.month_issued} does not match date_issued {self.date_issued}"
            )
        return self


class FineTotals(BaseModel):
    """COUNT/SUM/MIN/MAX over the whole fines table."""

    total_fines: int = 0
    total_amount: float = 0.0
    earliest_year: Optional[int] = None
    latest_year: Optional[int] = None


class YearTotal(BaseModel):
    """Fine count and summed amount for one calendar year."""

    year: int
    fine_count: int
    total_amount: float


class FineStats(BaseModel):
    """Summary statistics for one year (or all years)."""

    total_fines: int = 0
    total_amount: float = 0.0
    avg_amount: float = 0.0
    max_fine: float = 0.0
    max_firm_name: Optional[str] = None
    dominant_breach: Optional[str] = None


class FirmSummary(BaseModel):
    """Aggregate penalties for one firm."""

    name: str
    slug: str
    fine_count: int
    total_amount: float
    latest_date: Optional[date] = None


class FirmDetails(FirmSummary):
    """Firm summary with its individual records."""

    max_fine: float = 0.0
    earliest_date: Optional[date] = None
    records: List[FineRecord] = Field(default_factory=list)


class CategorySummary(BaseModel):
    """Aggregate penalties for one breach category or sector."""

    name: str
    slug: str
    fine_count: int
    total_amount: float


class BreachDetails(CategorySummary):
    """Breach category hub: totals, largest penalties and most-fined firms."""

    max_fine: float = 0.0
    top_penalties: List[FineRecord] = Field(default_factory=list)
    top_firms: List[FirmSummary] = Field(default_factory=list)


class TrendPoint(BaseModel):
    """Fines in one month, quarter or year."""

    period_type: str
    year: int
    period_value: int
    fine_count: int
    total_fines: float
    average_fine: float


class FineNotification(BaseModel):
    """Latest-notice item for the dashboard notification bell."""

    id: str
    title: str
    detail: str
    time: str
    read: bool = False
