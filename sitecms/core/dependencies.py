"""Dependency injection for FastAPI routes.

Routes depend on the application services; this module decides which
repository implementation backs them.
"""
from functools import lru_cache

from sitecms.application.services.city_lifecycle import CityLifecycleCoordinator
from sitecms.application.services.country_reference_cleaner import CountryReferenceCleaner
from sitecms.application.services.country_service import CountryService
from sitecms.application.services.name_catalogue import NameCatalogueService
from sitecms.application.services.slug_guard import SlugUniquenessGuard
from sitecms.application.use_cases.city_queries import (
    CheckCityNameUseCase,
    GetCityUseCase,
    ListCitiesUseCase,
)
from sitecms.config import settings
from sitecms.domain.repositories import CatalogueRepository, CityRepository, CountryRepository
from sitecms.infrastructure.external_apis.revalidation_client import RevalidationNotifier
from sitecms.infrastructure.persistence.db import SessionLocal
from sitecms.infrastructure.persistence.repositories.in_memory_catalogue_repository import (
    InMemoryCatalogueRepository,
)
from sitecms.infrastructure.persistence.repositories.in_memory_city_repository import (
    InMemoryCityRepository,
)
from sitecms.infrastructure.persistence.repositories.in_memory_country_repository import (
    InMemoryCountryRepository,
)
from sitecms.infrastructure.persistence.repositories.sqlalchemy_catalogue_repository import (
    SQLAlchemyCatalogueRepository,
)
from sitecms.infrastructure.persistence.repositories.sqlalchemy_city_repository import (
    SQLAlchemyCityRepository,
)
from sitecms.infrastructure.persistence.repositories.sqlalchemy_country_repository import (
    SQLAlchemyCountryRepository,
)


# Config flag for choosing repo implementation
USE_DB_REPOS = settings.USE_DB_REPOS

# One shared session for the DB repos; writes are awaited one at a time
_db_session_singleton = SessionLocal() if USE_DB_REPOS else None


@lru_cache()
def get_city_repository() -> CityRepository:
    """Get city repository instance.

    - Default: in-memory (fast tests/dev)
    - If USE_DB_REPOS=true: SQLAlchemy repositories with shared session
    """
    if USE_DB_REPOS:
        return SQLAlchemyCityRepository(_db_session_singleton)
    return InMemoryCityRepository()


@lru_cache()
def get_country_repository() -> CountryRepository:
    if USE_DB_REPOS:
        return SQLAlchemyCountryRepository(_db_session_singleton)
    return InMemoryCountryRepository()


@lru_cache()
def get_catalogue_repository() -> CatalogueRepository:
    if USE_DB_REPOS:
        return SQLAlchemyCatalogueRepository(_db_session_singleton)
    return InMemoryCatalogueRepository()


@lru_cache()
def get_revalidation_notifier() -> RevalidationNotifier:
    return RevalidationNotifier(
        endpoint_url=settings.revalidate_url,
        enabled=settings.REVALIDATION_ENABLED,
    )


# Service instances
@lru_cache()
def get_slug_guard() -> SlugUniquenessGuard:
    return SlugUniquenessGuard(get_city_repository(), slug_prefix=settings.SLUG_PREFIX)


@lru_cache()
def get_name_catalogue_service() -> NameCatalogueService:
    return NameCatalogueService(get_catalogue_repository())


@lru_cache()
def get_city_lifecycle_coordinator() -> CityLifecycleCoordinator:
    """Get the coordinator wired to the configured repositories."""
    return CityLifecycleCoordinator(
        city_repository=get_city_repository(),
        country_repository=get_country_repository(),
        guard=get_slug_guard(),
        catalogue=get_name_catalogue_service(),
        cleaner=CountryReferenceCleaner(get_country_repository()),
        notifier=get_revalidation_notifier(),
    )


@lru_cache()
def get_country_service() -> CountryService:
    return CountryService(
        country_repository=get_country_repository(),
        city_repository=get_city_repository(),
        notifier=get_revalidation_notifier(),
        slug_prefix=settings.SLUG_PREFIX,
    )


# Use case instances
@lru_cache()
def get_list_cities_use_case() -> ListCitiesUseCase:
    return ListCitiesUseCase(get_city_repository())


@lru_cache()
def get_city_use_case() -> GetCityUseCase:
    return GetCityUseCase(get_city_repository())


@lru_cache()
def get_check_city_name_use_case() -> CheckCityNameUseCase:
    return CheckCityNameUseCase(get_slug_guard())
