"""
Configuration module.

Exports:
    settings: Process-level settings instance
    get_settings: Function to load settings (for dependency injection)
    PRODUCT_CATALOG: Static SKU → CJ search mapping
    lookup: Catalog lookup by SKU
"""

from config.settings import settings, get_settings, Settings
from config.catalog import (
    CatalogEntry,
    PRODUCT_CATALOG,
    lookup,
    display_name,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Catalog
    "CatalogEntry",
    "PRODUCT_CATALOG",
    "lookup",
    "display_name",
]
