"""
Services package for the FCA Fines API.

Business logic sitting between the HTTP endpoints and the repositories.
"""

from .homepage_stats import (
    HomepageStats,
    build_homepage_stats,
    compute_yoy_change,
    years_covered,
)
from .digest_service import (
    DigestError,
    DigestOutcome,
    verify_digest_token,
    unsubscribe_digest,
    error_redirect_url,
    success_redirect_url,
)

__all__ = [
    "HomepageStats",
    "build_homepage_stats",
    "compute_yoy_change",
    "years_covered",
    "DigestError",
    "DigestOutcome",
    "verify_digest_token",
    "unsubscribe_digest",
    "error_redirect_url",
    "success_redirect_url",
]
