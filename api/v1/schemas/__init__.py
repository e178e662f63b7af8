"""API v1 response schemas."""

from api.v1.schemas.homepage import (
    LatestFineResponse,
    HomepageStatsResponse
)
from api.v1.schemas.fines import (
    FineRecordResponse,
    FineStatsResponse,
    YearSummaryResponse,
    FirmSummaryResponse,
    FirmDetailsResponse,
    FineListEnvelope,
    FineStatsEnvelope,
    YearListEnvelope,
    FirmListEnvelope,
    FirmDetailsEnvelope,
    CategorySummaryResponse,
    BreachDetailsResponse,
    TrendPointResponse,
    NotificationResponse,
    CategoryListEnvelope,
    BreachDetailsEnvelope,
    TrendListEnvelope,
    NotificationListEnvelope
)
from api.v1.schemas.content import (
    ArticleSummaryResponse,
    ArticleResponse,
    YearlyStatsResponse,
    YearlyReviewSummaryResponse,
    YearlyReviewResponse,
    SitemapEntryResponse
)

__all__ = [
    "LatestFineResponse",
    "HomepageStatsResponse",
    "FineRecordResponse",
    "FineStatsResponse",
    "YearSummaryResponse",
    "FirmSummaryResponse",
    "FirmDetailsResponse",
    "FineListEnvelope",
    "FineStatsEnvelope",
    "YearListEnvelope",
    "FirmListEnvelope",
    "FirmDetailsEnvelope",
    "CategorySummaryResponse",
    "BreachDetailsResponse",
    "TrendPointResponse",
    "NotificationResponse",
    "CategoryListEnvelope",
    "BreachDetailsEnvelope",
    "TrendListEnvelope",
    "NotificationListEnvelope",
    "ArticleSummaryResponse",
    "ArticleResponse",
    "YearlyStatsResponse",
    "YearlyReviewSummaryResponse",
    "YearlyReviewResponse",
    "SitemapEntryResponse",
]
