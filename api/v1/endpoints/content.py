"""
Content catalog endpoints.

Serves the bundled blog articles and yearly reviews. Nothing here touches
the database.

Responsibility: Blog, yearly review and sitemap endpoints for API v1
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_content_catalog
from api.v1.schemas.content import (
    ArticleSummaryResponse,
    ArticleResponse,
    YearlyReviewSummaryResponse,
    YearlyReviewResponse,
    SitemapEntryResponse,
)
from fca_fines.content import ContentCatalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])


@router.get("/articles", response_model=List[ArticleSummaryResponse])
async def list_articles(
    featured: Optional[bool] = Query(None, description="Only featured articles"),
    catalog: ContentCatalog = Depends(get_content_catalog),
):
    """Article cards. Featured articles are returned newest first."""
    if featured:
        articles = catalog.featured_articles()
    else:
        articles = sorted(catalog.articles, key=lambda article: article.date_iso, reverse=True)
    return [ArticleSummaryResponse.model_validate(article) for article in articles]


@router.get("/articles/{slug}", response_model=ArticleResponse)
async def get_article(
    slug: str,
    catalog: ContentCatalog = Depends(get_content_catalog),
):
    article = catalog.get_article(slug)
    if article is None:
        raise HTTPException(status_code=404, detail=f"Article '{slug}' not found")
    return ArticleResponse.model_validate(article)


@router.get("/yearly-reviews", response_model=List[YearlyReviewSummaryResponse])
async def list_yearly_reviews(catalog: ContentCatalog = Depends(get_content_catalog)):
    """Yearly reviews, newest year first."""
    return [YearlyReviewSummaryResponse.model_validate(review) for review in catalog.yearly_reviews]


@router.get("/yearly-reviews/{year}", response_model=YearlyReviewResponse)
async def get_yearly_review(
    year: int,
    catalog: ContentCatalog = Depends(get_content_catalog),
):
    """
    One yearly review with the articles published that year.

    Raises:
        HTTPException: 404 if there is no review for the year
    """
    review = catalog.get_yearly_review(year)
    if review is None:
        raise HTTPException(status_code=404, detail=f"No yearly review for {year}")

    response = YearlyReviewResponse.model_validate(review)
    response.related_articles = [
        ArticleSummaryResponse.model_validate(article)
        for article in catalog.articles_for_year(year)
    ]
    return response


@router.get("/sitemap", response_model=List[SitemapEntryResponse])
async def get_sitemap(catalog: ContentCatalog = Depends(get_content_catalog)):
    """Every article and review slug with its date."""
    return [SitemapEntryResponse.model_validate(entry) for entry in catalog.all_slugs()]
