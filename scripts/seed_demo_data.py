#!/usr/bin/env python3
"""
Load a small demo dataset into the configured database.

Countries are created first, then cities through the lifecycle coordinator so
the catalogues and each country's selected cities are filled in the same way
the console does it. Existing records are skipped.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sitecms.application.dto.write_dto import CityDraft, CountryDraft
from sitecms.application.services.city_lifecycle import CityLifecycleCoordinator
from sitecms.application.services.country_reference_cleaner import CountryReferenceCleaner
from sitecms.application.services.country_service import CountryService
from sitecms.application.services.name_catalogue import NameCatalogueService
from sitecms.application.services.slug_guard import SlugUniquenessGuard, derive_slug
from sitecms.config import settings
from sitecms.core.database_init import initialize_database
from sitecms.domain.entities.catalogue import CatalogueList
from sitecms.domain.errors import ErrorKind
from sitecms.infrastructure.external_apis.http_client import close_shared_client
from sitecms.infrastructure.external_apis.revalidation_client import RevalidationNotifier
from sitecms.infrastructure.persistence.db import SessionLocal
from sitecms.infrastructure.persistence.repositories.sqlalchemy_catalogue_repository import (
    SQLAlchemyCatalogueRepository,
)
from sitecms.infrastructure.persistence.repositories.sqlalchemy_city_repository import (
    SQLAlchemyCityRepository,
)
from sitecms.infrastructure.persistence.repositories.sqlalchemy_country_repository import (
    SQLAlchemyCountryRepository,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEMO_DATA = {
    "Germany": ["Berlin", "Munich", "Frankfurt", "Düsseldorf"],
    "France": ["Paris", "Lyon"],
    "Spain": ["Barcelona", "Madrid"],
    "Italy": ["Milan"],
}


async def seed(revalidate: bool) -> int:
    """Create the demo records. Returns the number of failed writes."""
    session = SessionLocal()
    notifier = RevalidationNotifier(settings.revalidate_url, enabled=revalidate)
    city_repo = SQLAlchemyCityRepository(session)
    country_repo = SQLAlchemyCountryRepository(session)
    catalogue = NameCatalogueService(SQLAlchemyCatalogueRepository(session))

    countries = CountryService(country_repo, city_repo, notifier, slug_prefix=settings.SLUG_PREFIX)
    coordinator = CityLifecycleCoordinator(
        city_repository=city_repo,
        country_repository=country_repo,
        guard=SlugUniquenessGuard(city_repo, slug_prefix=settings.SLUG_PREFIX),
        catalogue=catalogue,
        cleaner=CountryReferenceCleaner(country_repo),
        notifier=notifier,
    )

    failures = 0
    try:
        for country_name, city_names in DEMO_DATA.items():
            created = await countries.create_country(CountryDraft(name=country_name))
            if created.ok:
                country_slug = created.data.slug
                await catalogue.add_name(CatalogueList.GLOBAL_COUNTRIES, country_name)
                await catalogue.add_name(CatalogueList.TRADE_SHOW_COUNTRIES, country_name)
            elif created.error.kind is ErrorKind.DUPLICATE_COUNTRY:
                logger.info(f"Country {country_name} already exists, skipping")
                country_slug = derive_slug(country_name, settings.SLUG_PREFIX)
            else:
                logger.error(f"✗ {country_name}: {created.error}")
                failures += 1
                continue

            for city_name in city_names:
                result = await coordinator.create_city(CityDraft(name=city_name, country_slug=country_slug))
                if result.ok:
                    logger.info(f"✓ {city_name} -> {result.data.public_path}")
                    for warning in result.warnings:
                        logger.warning(f"  {warning}")
                elif result.error.kind is ErrorKind.DUPLICATE_CITY:
                    logger.info(f"City {city_name} already exists, skipping")
                else:
                    logger.error(f"✗ {city_name}: {result.error}")
                    failures += 1

        await notifier.drain(timeout=10)
    finally:
        session.close()
        await close_shared_client()

    return failures


def main():
    parser = argparse.ArgumentParser(description='Seed demo countries and cities')
    parser.add_argument('--revalidate', action='store_true',
                        help='Ask the public website to rebuild the seeded pages')
    args = parser.parse_args()

    if not initialize_database():
        logger.error("✗ Database initialization failed")
        sys.exit(1)

    failures = asyncio.run(seed(revalidate=args.revalidate))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
