"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for:
- Database sessions (in-memory SQLite for fast tests)
- In-memory repositories and a recording revalidation notifier
- FastAPI test client wired to the test database
- Test data factories
"""

import os
from typing import Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from sitecms.main import app
from sitecms.application.ports.revalidation import RevalidationReceipt
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
from sitecms.core import dependencies
from sitecms.core.database_init import seed_singletons
from sitecms.domain.entities.country import Country
from sitecms.infrastructure.persistence import models  # noqa: F401 - registers tables
from sitecms.infrastructure.persistence.db import Base
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

SLUG_PREFIX = "exhibition-stand-builder-"


class RecordingNotifier:
    """Revalidation notifier that remembers paths instead of sending them."""

    def __init__(self, error: Exception = None):
        self.paths: List[str] = []
        self.error = error

    def notify(self, path: str = "/") -> RevalidationReceipt:
        if self.error is not None:
            raise self.error
        self.paths.append(path)
        return RevalidationReceipt(path=path)


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database for testing."""
    # Use in-memory SQLite for fast tests
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Drop all tables after test
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """Create a database session with the singleton rows seeded."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine
    )

    session = TestingSessionLocal()
    seed_singletons(session)

    try:
        yield session
    finally:
        session.rollback()
        session.close()


# ==============================================================================
# SERVICE FIXTURES (in-memory repositories)
# ==============================================================================

@pytest.fixture
def city_repo():
    return InMemoryCityRepository()


@pytest.fixture
def country_repo():
    return InMemoryCountryRepository()


@pytest.fixture
def catalogue_repo():
    return InMemoryCatalogueRepository()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def failing_notifier():
    """Notifier whose every call raises."""
    return RecordingNotifier(error=RuntimeError("website down"))


@pytest.fixture
def guard(city_repo):
    return SlugUniquenessGuard(city_repo, slug_prefix=SLUG_PREFIX)


@pytest.fixture
def catalogue(catalogue_repo):
    return NameCatalogueService(catalogue_repo)


@pytest.fixture
def coordinator(city_repo, country_repo, guard, catalogue, notifier):
    return CityLifecycleCoordinator(
        city_repository=city_repo,
        country_repository=country_repo,
        guard=guard,
        catalogue=catalogue,
        cleaner=CountryReferenceCleaner(country_repo),
        notifier=notifier,
    )


@pytest.fixture
def country_service(country_repo, city_repo, notifier):
    return CountryService(country_repo, city_repo, notifier, slug_prefix=SLUG_PREFIX)


# ==============================================================================
# API FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def api_notifier():
    return RecordingNotifier()


@pytest.fixture(scope="function")
def client(test_db_session, api_notifier) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client backed by the test database."""
    city_repo = SQLAlchemyCityRepository(test_db_session)
    country_repo = SQLAlchemyCountryRepository(test_db_session)
    catalogue = NameCatalogueService(SQLAlchemyCatalogueRepository(test_db_session))
    guard = SlugUniquenessGuard(city_repo, slug_prefix=SLUG_PREFIX)
    coordinator = CityLifecycleCoordinator(
        city_repository=city_repo,
        country_repository=country_repo,
        guard=guard,
        catalogue=catalogue,
        cleaner=CountryReferenceCleaner(country_repo),
        notifier=api_notifier,
    )

    app.dependency_overrides[dependencies.get_city_lifecycle_coordinator] = lambda: coordinator
    app.dependency_overrides[dependencies.get_country_service] = lambda: CountryService(
        country_repo, city_repo, api_notifier, slug_prefix=SLUG_PREFIX
    )
    app.dependency_overrides[dependencies.get_name_catalogue_service] = lambda: catalogue
    app.dependency_overrides[dependencies.get_list_cities_use_case] = lambda: ListCitiesUseCase(city_repo)
    app.dependency_overrides[dependencies.get_city_use_case] = lambda: GetCityUseCase(city_repo)
    app.dependency_overrides[dependencies.get_check_city_name_use_case] = lambda: CheckCityNameUseCase(guard)
    app.dependency_overrides[dependencies.get_revalidation_notifier] = lambda: api_notifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==============================================================================
# TEST DATA FACTORIES
# ==============================================================================

@pytest.fixture
def make_country(country_repo):
    """Insert a country straight into the in-memory store."""
    async def _make(name: str, selected_cities=None) -> Country:
        return await country_repo.create(
            Country(
                id=None,
                slug=f"{SLUG_PREFIX}{name.lower()}",
                name=name,
                selected_cities=list(selected_cities or []),
            )
        )
    return _make


@pytest.fixture
def sample_city_payload():
    """Sample body for POST /api/v1/cities."""
    return {
        "name": "Lyon",
        "country_slug": f"{SLUG_PREFIX}france",
        "content": {"seo_title": "Exhibition stand builder in Lyon"},
    }


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# ==============================================================================
# MARKERS
# ==============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: Mark test as an integration test"
    )
