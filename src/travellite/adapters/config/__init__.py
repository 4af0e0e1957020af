"""Configuration adapters."""

from travellite.adapters.config.app_config import AppConfig
from travellite.adapters.config.checklist_loader import ChecklistLoader
from travellite.adapters.config.principal_loader import PrincipalLoader
from travellite.adapters.config.station_catalog_loader import StationCatalogLoader

__all__ = ["AppConfig", "ChecklistLoader", "PrincipalLoader", "StationCatalogLoader"]
