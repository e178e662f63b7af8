"""
Utilities package for the FCA Fines API.
"""

from .slugify import (
    slugify,
    short_hash,
    firm_slug,
    hub_slug,
)
from .formatting import (
    format_gbp,
    format_short_date,
)

__all__ = [
    "slugify",
    "short_hash",
    "firm_slug",
    "hub_slug",
    "format_gbp",
    "format_short_date",
]
