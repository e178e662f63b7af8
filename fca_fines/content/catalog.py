"""
Editorial content catalog.

Blog articles and yearly reviews are bundled JSON resources loaded once
and treated as immutable. Slugs are routing keys and years key the yearly
reviews, so both are checked for uniqueness at load time.

Responsibility: Load, validate and query the static content catalog
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple
from pydantic import ValidationError

from fca_fines.models.content import BlogArticle, YearlyReview, SitemapEntry

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
ARTICLES_FILE = "blog_articles.json"
REVIEWS_FILE = "yearly_reviews.json"


class CatalogError(Exception):
    """Raised when the content catalog is missing, malformed or inconsistent."""


class ContentCatalog:
    """
    Immutable catalog of blog articles and yearly reviews.

    Example:
        catalog = ContentCatalog.load()
        article = catalog.get_article("20-biggest-fca-fines-of-all-time")
        review = catalog.get_yearly_review(2024)
    """

    def __init__(self, articles: Iterable[BlogArticle], reviews: Iterable[YearlyReview]):
        """
        Build the catalog and its lookup indexes.

        Raises:
            CatalogError: on duplicate article slugs, duplicate review years,
                or a slug used by both an article and a review
        """
        self._articles: Tuple[BlogArticle, ...] = tuple(articles)
        self._reviews: Tuple[YearlyReview, ...] = tuple(
            sorted(reviews, key=lambda review: review.year, reverse=True)
        )

        self._articles_by_slug: Dict[str, BlogArticle] = {}
        for article in self._articles:
            if article.slug in self._articles_by_slug:
                raise CatalogError(f"Duplicate blog article slug: {article.slug}")
            self._articles_by_slug[article.slug] = article

        self._reviews_by_year: Dict[int, YearlyReview] = {}
        review_slugs = set()
        for review in self._reviews:
            if review.year in self._reviews_by_year:
                raise CatalogError(f"Duplicate yearly review for {review.year}")
            if review.slug in review_slugs:
                raise CatalogError(f"Duplicate yearly review slug: {review.slug}")
            if review.slug in self._articles_by_slug:
                raise CatalogError(f"Slug used by both an article and a yearly review: {review.slug}")
            self._reviews_by_year[review.year] = review
            review_slugs.add(review.slug)

    # MARK: Loading ---------------------------------------------------------

    @classmethod
    def load(cls, data_dir: Path = DATA_DIR) -> "ContentCatalog":
        """
        Load the catalog from JSON files.

        Args:
            data_dir: Directory holding blog_articles.json and yearly_reviews.json

        Returns:
            Validated ContentCatalog

        Raises:
            CatalogError: if a file is missing, not valid JSON, or a record
                fails validation
        """
        articles = _parse(BlogArticle, data_dir / ARTICLES_FILE)
        reviews = _parse(YearlyReview, data_dir / REVIEWS_FILE)

        catalog = cls(articles, reviews)
        logger.info(
            f"Loaded content catalog: {len(catalog.articles)} articles, "
            f"{len(catalog.yearly_reviews)} yearly reviews"
        )
        return catalog

    # MARK: Queries ---------------------------------------------------------

    @property
    def articles(self) -> Tuple[BlogArticle, ...]:
        return self._articles

    @property
    def yearly_reviews(self) -> Tuple[YearlyReview, ...]:
        return self._reviews

    def featured_articles(self) -> List[BlogArticle]:
        """Featured articles, newest first."""
        featured = [article for article in self._articles if article.featured]
        return sorted(featured, key=lambda article: article.date_iso, reverse=True)

    def get_article(self, slug: str) -> Optional[BlogArticle]:
        return self._articles_by_slug.get(slug)

    def articles_for_year(self, year: int) -> List[BlogArticle]:
        """Articles published in a calendar year, newest first."""
        matching = [article for article in self._articles if article.date_iso.year == year]
        return sorted(matching, key=lambda article: article.date_iso, reverse=True)

    def get_yearly_review(self, year: int) -> Optional[YearlyReview]:
        return self._reviews_by_year.get(year)

    def all_slugs(self) -> List[SitemapEntry]:
        """
        Every routable article for the sitemap.

        Yearly reviews are dated on the last day of their year.
        """
        entries = [
            SitemapEntry(slug=article.slug, date_iso=article.date_iso, type="blog")
            for article in self._articles
        ]
        entries.extend(
            SitemapEntry(slug=review.slug, date_iso=f"{review.year}-12-31", type="yearly")
            for review in self._reviews
        )
        return entries


def _read_records(path: Path) -> List[dict]:
    """Read a JSON array of objects."""
    try:
        with path.open(encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise CatalogError(f"Content file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid JSON in {path.name}: {exc}") from exc

    if not isinstance(payload, list):
        raise CatalogError(f"{path.name} must contain a JSON array")
    return payload


def _parse(model, path: Path) -> list:
    """Validate every record in a JSON file against a pydantic model."""
    records = []
    for index, item in enumerate(_read_records(path)):
        try:
            records.append(model.model_validate(item))
        except ValidationError as exc:
            raise CatalogError(f"{path.name}[{index}] is invalid: {exc}") from exc
    return records


@lru_cache(maxsize=1)
def get_catalog() -> ContentCatalog:
    """Process-wide catalog, loaded on first use."""
    return ContentCatalog.load()
