"""
Content catalog models.

Blog articles and yearly enforcement reviews are hand-maintained editorial
records. They are keyed by slug (and reviews also by year) for routing and
structured-data markup.
"""

import datetime
from typing import Literal, Optional, List
from pydantic import BaseModel, ConfigDict, Field


class BlogArticle(BaseModel):
    """Blog article metadata and markdown body."""

    model_config = ConfigDict(frozen=True)

    id: str
    slug: str = Field(pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    title: str
    seo_title: str
    excerpt: str
    content: str
    category: str
    read_time: str
    date: str = Field(description="Display date, e.g. 'January 15, 2025'")
    date_iso: datetime.date
    featured: bool = False
    keywords: List[str] = Field(default_factory=list)


class YearlyStats(BaseModel):
    """Headline numbers quoted in a yearly review."""

    model_config = ConfigDict(frozen=True)

    fine_count: Optional[int] = Field(default=None, ge=0)
    total_amount: Optional[float] = Field(default=None, ge=0)
    largest_fine: Optional[float] = Field(default=None, ge=0)
    largest_fine_firm: Optional[str] = None


class YearlyReview(BaseModel):
    """Annual enforcement review."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(ge=2000, le=2100)
    slug: str = Field(pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    title: str
    seo_title: str
    excerpt: str
    executive_summary: str
    regulatory_context: str
    key_enforcement_themes: List[str] = Field(default_factory=list)
    professional_insight: str
    looking_ahead: str
    keywords: List[str] = Field(default_factory=list)
    stats: Optional[YearlyStats] = None


class SitemapEntry(BaseModel):
    """One routable article for the sitemap/prerender list."""

    slug: str
    date_iso: datetime.date
    type: Literal["blog", "yearly"]
