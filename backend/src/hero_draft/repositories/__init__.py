"""Catalog data access."""

from hero_draft.repositories.catalog_repository import (
    CatalogCache,
    CatalogSource,
    CsvCatalogSource,
    DuckDBCatalogSource,
)

__all__ = [
    "CatalogCache",
    "CatalogSource",
    "CsvCatalogSource",
    "DuckDBCatalogSource",
]
