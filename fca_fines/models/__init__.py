"""
Models package for the FCA Fines API.

This package contains all Pydantic domain models for:
- Fine records and their aggregates
- Digest subscriptions
- Editorial content (blog articles, yearly reviews)
"""

from .fine import (
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
from .subscription import (
    DigestFrequency,
    SubscriptionStatus,
    DigestSubscription,
)
from .content import (
    BlogArticle,
    YearlyStats,
    YearlyReview,
    SitemapEntry,
)

__all__ = [
    "FineRecord",
    "FineTotals",
    "YearTotal",
    "FineStats",
    "FirmSummary",
    "FirmDetails",
    "CategorySummary",
    "BreachDetails",
    "TrendPoint",
    "FineNotification",
    "DigestFrequency",
    "SubscriptionStatus",
    "DigestSubscription",
    "BlogArticle",
    "YearlyStats",
    "YearlyReview",
    "SitemapEntry",
]
