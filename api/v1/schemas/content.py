"""
Pydantic schemas for content catalog responses.

Responsibility: Blog, yearly review and sitemap response schemas
"""

import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ArticleSummaryResponse(_CamelModel):
    """Article card without the body."""

    slug: str
    title: str
    excerpt: str
    category: str
    read_time: str
    date: str
    date_iso: datetime.date
    featured: bool


class ArticleResponse(ArticleSummaryResponse):
    id: str
    seo_title: str
    content: str
    keywords: List[str]


class YearlyStatsResponse(_CamelModel):
    fine_count: Optional[int] = None
    total_amount: Optional[float] = None
    largest_fine: Optional[float] = None
    largest_fine_firm: Optional[str] = None


class YearlyReviewSummaryResponse(_CamelModel):
    year: int
    slug: str
    title: str
    excerpt: str


class YearlyReviewResponse(YearlyReviewSummaryResponse):
    seo_title: str
    executive_summary: str
    regulatory_context: str
    key_enforcement_themes: List[str]
    professional_insight: str
    looking_ahead: str
    keywords: List[str]
    stats: Optional[YearlyStatsResponse] = None
    related_articles: List[ArticleSummaryResponse] = []


class SitemapEntryResponse(_CamelModel):
    slug: str
    date_iso: datetime.date
    type: str
