"""
Command-line interface for checking the content catalog.

Loads the bundled blog articles and yearly reviews, runs the same
validation the API does, and prints a summary.

Usage:
    python -m fca_fines.cli.catalog_cli
    python -m fca_fines.cli.catalog_cli --json
    python -m fca_fines.cli.catalog_cli --data-dir ./content --verbose
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..content.catalog import DATA_DIR, CatalogError, ContentCatalog


# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def catalog_summary(catalog: ContentCatalog) -> dict:
    """Summary of a loaded catalog as plain JSON-ready data."""
    return {
        "articles": len(catalog.articles),
        "featured": [article.slug for article in catalog.featured_articles()],
        "yearly_reviews": [review.year for review in catalog.yearly_reviews],
        "sitemap": [entry.model_dump(mode="json") for entry in catalog.all_slugs()],
    }


def print_summary(catalog: ContentCatalog) -> None:
    print("\n" + "="*60)
    print("FCA Fines - Content Catalog")
    print("="*60)
    print(f"Articles: {len(catalog.articles)}")
    print(f"Yearly reviews: {len(catalog.yearly_reviews)}")

    print("\nFeatured (newest first):")
    for article in catalog.featured_articles():
        print(f"  {article.date_iso}  {article.slug}")

    print("\nYearly reviews:")
    for review in catalog.yearly_reviews:
        related = len(catalog.articles_for_year(review.year))
        print(f"  {review.year}  {review.slug} ({related} related articles)")

    print(f"\nSitemap entries: {len(catalog.all_slugs())}")
    print("="*60 + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Validate and summarise the FCA fines content catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate the bundled catalog
  python -m fca_fines.cli.catalog_cli

  # Machine-readable summary
  python -m fca_fines.cli.catalog_cli --json
        """
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DATA_DIR,
        help="Directory holding blog_articles.json and yearly_reviews.json"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the summary as JSON"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    try:
        catalog = ContentCatalog.load(args.data_dir)
    except CatalogError as e:
        logger.error(f"Catalog validation failed: {e}")
        print(f"Catalog invalid: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(catalog_summary(catalog), indent=2))
    else:
        print_summary(catalog)
    return 0


if __name__ == "__main__":
    sys.exit(main())
