"""
Static editorial content (blog articles and yearly reviews).
"""

from .catalog import ContentCatalog, CatalogError, get_catalog

__all__ = [
    "ContentCatalog",
    "CatalogError",
    "get_catalog",
]
