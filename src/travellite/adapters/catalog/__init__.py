"""Station and security checklist catalog adapters."""

from travellite.adapters.catalog.in_memory_checklist_catalog import InMemoryChecklistCatalog
from travellite.adapters.catalog.in_memory_station_catalog import InMemoryStationCatalog

__all__ = ["InMemoryChecklistCatalog", "InMemoryStationCatalog"]
