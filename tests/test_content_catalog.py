import json
from datetime import date

import pytest

from fca_fines.cli.catalog_cli import main as catalog_main
from fca_fines.content.catalog import ContentCatalog, CatalogError, get_catalog


def _article(slug: str, date_iso: str, featured: bool = False) -> dict:
    return {
        "id": slug,
        "slug": slug,
        "title": slug.replace("-", " ").title(),
        "seo_title": slug,
        "excerpt": "Excerpt",
        "content": "# Body",
        "category": "Analysis",
        "read_time": "5 min read",
        "date": date_iso,
        "date_iso": date_iso,
        "featured": featured,
        "keywords": [],
    }


def _review(year: int, slug: str = "") -> dict:
    return {
        "year": year,
        "slug": slug or f"fca-fines-{year}-annual-review",
        "title": f"FCA Fines {year}",
        "seo_title": f"FCA Fines {year}",
        "excerpt": "Excerpt",
        "executive_summary": "Summary",
        "regulatory_context": "Context",
        "key_enforcement_themes": ["AML"],
        "professional_insight": "Insight",
        "looking_ahead": "Outlook",
        "keywords": [],
    }


def _write_catalog(directory, articles, reviews) -> None:
    (directory / "blog_articles.json").write_text(json.dumps(articles), encoding="utf-8")
    (directory / "yearly_reviews.json").write_text(json.dumps(reviews), encoding="utf-8")


# MARK: Bundled catalog

def test_bundled_catalog_loads() -> None:
    catalog = get_catalog()

    assert len(catalog.articles) == 14
    assert [review.year for review in catalog.yearly_reviews] == list(range(2025, 2012, -1))


def test_featured_articles_newest_first() -> None:
    slugs = [article.slug for article in get_catalog().featured_articles()]

    assert slugs == [
        "fca-fines-march-2026",
        "fca-fines-february-2026",
        "fca-fines-january-2026",
        "fca-fines-2025-complete-list",
        "20-biggest-fca-fines-of-all-time",
        "fca-fines-database-how-to-search",
    ]


def test_lookup_by_slug_and_year() -> None:
    catalog = get_catalog()

    assert catalog.get_article("fca-final-notices-explained").date_iso == date(2024, 10, 25)
    assert catalog.get_article("no-such-article") is None
    assert catalog.get_yearly_review(2024).slug == "fca-fines-2024-annual-review"
    assert catalog.get_yearly_review(1999) is None
    assert [a.slug for a in catalog.articles_for_year(2024)] == [
        "fca-aml-fines-anti-money-laundering",
        "fca-fines-banks-complete-list",
        "fca-final-notices-explained",
        "senior-managers-regime-fca-fines",
    ]


def test_all_slugs_dates_reviews_at_year_end() -> None:
    entries = get_catalog().all_slugs()
    by_slug = {entry.slug: entry for entry in entries}

    assert len(entries) == 27
    assert len(by_slug) == 27
    assert by_slug["fca-fines-2023-annual-review"].date_iso == date(2023, 12, 31)
    assert by_slug["fca-fines-2023-annual-review"].type == "yearly"
    assert by_slug["20-biggest-fca-fines-of-all-time"].type == "blog"


# MARK: Validation

def test_duplicate_article_slug_rejected(tmp_path) -> None:
    _write_catalog(tmp_path, [_article("same", "2024-01-01"), _article("same", "2024-02-01")], [])

    with pytest.raises(CatalogError, match="Duplicate blog article slug"):
        ContentCatalog.load(tmp_path)


def test_duplicate_review_year_rejected(tmp_path) -> None:
    _write_catalog(tmp_path, [], [_review(2024), _review(2024, slug="another-2024")])

    with pytest.raises(CatalogError, match="Duplicate yearly review"):
        ContentCatalog.load(tmp_path)


def test_slug_shared_between_article_and_review_rejected(tmp_path) -> None:
    _write_catalog(tmp_path, [_article("fca-fines-2024-annual-review", "2024-05-01")], [_review(2024)])

    with pytest.raises(CatalogError, match="both an article and a yearly review"):
        ContentCatalog.load(tmp_path)


def test_malformed_files_rejected(tmp_path) -> None:
    (tmp_path / "blog_articles.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "yearly_reviews.json").write_text("[]", encoding="utf-8")

    with pytest.raises(CatalogError, match="Invalid JSON"):
        ContentCatalog.load(tmp_path)

    _write_catalog(tmp_path, [{"slug": "missing-fields"}], [])
    with pytest.raises(CatalogError, match=r"blog_articles.json\[0\] is invalid"):
        ContentCatalog.load(tmp_path)


def test_missing_directory_rejected(tmp_path) -> None:
    with pytest.raises(CatalogError, match="not found"):
        ContentCatalog.load(tmp_path / "nowhere")


# MARK: Endpoints

def test_articles_endpoint(client) -> None:
    everything = client.get("/api/content/articles").json()
    featured = client.get("/api/content/articles", params={"featured": "true"}).json()

    assert len(everything) == 14
    assert everything[0]["slug"] == "fca-fines-insurance-sector"
    assert "content" not in everything[0]
    assert [article["slug"] for article in featured][0] == "fca-fines-march-2026"
    assert all(article["featured"] for article in featured)


def test_article_detail_endpoint(client) -> None:
    response = client.get("/api/content/articles/20-biggest-fca-fines-of-all-time")

    assert response.status_code == 200
    body = response.json()
    assert body["dateIso"] == "2025-01-15"
    assert body["content"]
    assert client.get("/api/content/articles/no-such-article").status_code == 404


def test_yearly_review_endpoints(client) -> None:
    reviews = client.get("/api/content/yearly-reviews").json()
    review = client.get("/api/content/yearly-reviews/2025").json()

    assert [r["year"] for r in reviews] == list(range(2025, 2012, -1))
    assert review["slug"] == "fca-fines-2025-annual-review"
    assert [a["slug"] for a in review["relatedArticles"]] == [
        "fca-fines-2025-complete-list",
        "20-biggest-fca-fines-of-all-time",
        "fca-enforcement-trends-2013-2025",
        "fca-fines-database-how-to-search",
    ]
    assert client.get("/api/content/yearly-reviews/1999").status_code == 404


def test_yearly_review_without_stats_or_articles(client) -> None:
    response = client.get("/api/content/yearly-reviews/2019")

    assert response.status_code == 200
    review = response.json()
    assert review["slug"] == "fca-fines-2019-annual-review"
    assert review["stats"] is None
    assert review["relatedArticles"] == []
    assert get_catalog().get_yearly_review(2013).slug == "fca-fines-2013-annual-review"

def test_sitemap_endpoint(client) -> None:
    entries = client.get("/api/content/sitemap").json()

    assert {"slug": "fca-fines-2020-annual-review", "dateIso": "2020-12-31", "type": "yearly"} in entries


# MARK: CLI

def test_catalog_cli_json_summary(capsys) -> None:
    assert catalog_main(["--json"]) == 0

    summary = json.loads(capsys.readouterr().out)
    assert summary["articles"] == 14
    assert summary["yearly_reviews"] == list(range(2025, 2012, -1))


def test_catalog_cli_reports_invalid_catalog(tmp_path, capsys) -> None:
    _write_catalog(tmp_path, [_article("same", "2024-01-01"), _article("same", "2024-02-01")], [])

    assert catalog_main(["--data-dir", str(tmp_path)]) == 1
    assert "Duplicate blog article slug" in capsys.readouterr().err
