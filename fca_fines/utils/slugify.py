"""Helpers for building stable URL slugs.

Firm names are not unique once slugified ("A & B Ltd" vs "A and B Ltd"), so
firm slugs carry a short content hash of the original name.
"""

from __future__ import annotations

import hashlib
import re

_APOSTROPHES = re.compile(r"['’]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_REPEATED_DASH = re.compile(r"-{2,}")


def slugify(value: str | None) -> str:
    """Lowercase, ASCII-only, dash-separated slug. Never empty."""
    raw = str(value or "").strip()
    if not raw:
        return "item"

    slug = raw.lower().replace("&", " and ")
    slug = _APOSTROPHES.sub("", slug)
    slug = _NON_ALNUM.sub("-", slug)
    slug = _REPEATED_DASH.sub("-", slug).strip("-")
    return slug or "item"


def short_hash(value: str | None) -> str:
    """First six hex characters of the SHA-1 of the value."""
    return hashlib.sha1(str(value or "").encode("utf-8")).hexdigest()[:6]


def firm_slug(firm_name: str) -> str:
    """Stable slug for a firm or individual name."""
    return f"{slugify(firm_name)}-{short_hash(firm_name)}"


def hub_slug(label: str) -> str:
    """Slug for a breach category or sector label (underscores read as spaces)."""
    return slugify(str(label or "").replace("_", " "))
