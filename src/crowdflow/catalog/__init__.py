"""
Catalog Module
==============

Location catalog loading and validation.
"""

from crowdflow.catalog.loader import (
    DEFAULT_CATALOG_PATH,
    load_catalog,
    parse_catalog,
    validate_catalog,
)

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "load_catalog",
    "parse_catalog",
    "validate_catalog",
]
