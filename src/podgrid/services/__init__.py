"""Service modules for podgrid."""

from podgrid.services.catalog import CatalogClient

__all__ = ["CatalogClient"]
