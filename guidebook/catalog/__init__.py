"""
Catalog module.

Stores validated guides and answers listing, filtering and search queries.
"""

from guidebook.catalog.base import Catalog, CatalogError, UpsertResult
from guidebook.catalog.memory import InMemoryCatalog
from guidebook.catalog.json_file import JsonFileCatalog

__all__ = [
    "Catalog",
    "CatalogError",
    "UpsertResult",
    "InMemoryCatalog",
    "JsonFileCatalog",
]
