"""Main entry point for the TravelLite booking API."""

import asyncio
import logging
import sys

from starlette.applications import Starlette

from travellite.adapters.auth import StaticTokenAuthenticator
from travellite.adapters.catalog import InMemoryChecklistCatalog, InMemoryStationCatalog
from travellite.adapters.config import (
    AppConfig,
    ChecklistLoader,
    PrincipalLoader,
    StationCatalogLoader,
)
from travellite.adapters.memory import InMemoryBookingRepository, InMemoryImageStore
from travellite.adapters.system import (
    RandomBookingCodeGenerator,
    RandomTransactionIdGenerator,
    SystemClock,
)
from travellite.adapters.web import ApiServices, TravelLiteWebAdapter, create_app
from travellite.application.services import (
    BookingLifecycle,
    ChecklistService,
    PricingConfig,
    PricingEngine,
    QuoteService,
    StationFinder,
)

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=config.log_level_value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_services(config: AppConfig) -> ApiServices:
    """Wire the booking core to in-memory adapters using the TOML configuration.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        ValueError: If stations, principals or the checklist are misconfigured.
    """
    stations = StationCatalogLoader.load(config)
    if not stations:
        raise ValueError("No stations configured. Add [[stations]] tables to the config file.")
    principals = PrincipalLoader.load(config)
    categories, items = ChecklistLoader.load(config)

    catalog = InMemoryStationCatalog(stations)
    checklist = InMemoryChecklistCatalog(categories, items)
    repository = InMemoryBookingRepository()
    clock = SystemClock()
    pricing = PricingEngine(PricingConfig(currency=config.currency))
    lifecycle = BookingLifecycle(
        repository=repository,
        catalog=catalog,
        clock=clock,
        code_generator=RandomBookingCodeGenerator(),
        transaction_ids=RandomTransactionIdGenerator(),
        checklist=checklist,
    )
    return ApiServices(
        lifecycle=lifecycle,
        quotes=QuoteService(catalog, pricing, clock, config.tzinfo),
        pricing=pricing,
        stations=StationFinder(catalog),
        authenticator=StaticTokenAuthenticator(principals),
        images=InMemoryImageStore(config.image_base_url),
        clock=clock,
        checklist=ChecklistService(checklist, repository),
    )


def create_application() -> Starlette:
    """App factory for ``uvicorn --factory`` and auto-reload."""
    config = AppConfig()
    configure_logging(config)
    return create_app(build_services(config), config)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    configure_logging(config)

    try:
        api_services = build_services(config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        logger.error("Copy config.example.toml to config.toml and set CONFIG_FILE to use it.")
        sys.exit(1)

    adapter = TravelLiteWebAdapter(api_services, config)
    try:
        await adapter.start()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        await adapter.stop()


def run() -> None:
    """Synchronous entry point for the server command."""
    config = AppConfig()
    if config.reload:
        import uvicorn

        uvicorn.run(
            "travellite.main:create_application",
            factory=True,
            reload=True,
            host=config.host,
            port=config.port,
        )
        return
    asyncio.run(main())


if __name__ == "__main__":
    run()
