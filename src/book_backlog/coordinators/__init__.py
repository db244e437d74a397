"""Coordinators - Orchestration layer connecting the view with the catalog."""

from .catalog_coordinator import CatalogCoordinator
from .catalog_query_engine import CatalogQueryEngine

__all__ = [
    "CatalogCoordinator",
    "CatalogQueryEngine",
]
