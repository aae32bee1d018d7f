"""In-memory implementation of CountryRepository for testing."""
from copy import deepcopy
from typing import Optional, List, Dict
from sitecms.domain.entities.country import Country
from sitecms.domain.errors import DuplicateRecordError, RecordNotFoundError
from sitecms.domain.repositories.country_repository import CountryRepository
from sitecms.domain.value_objects.timestamps import utc_now


class InMemoryCountryRepository(CountryRepository):
    """In-memory implementation for testing and local development."""

    def __init__(self):
        self._countries: Dict[int, Country] = {}
        self._next_id = 1

    async def get_by_id(self, country_id: int) -> Optional[Country]:
        country = self._countries.get(country_id)
        return deepcopy(country) if country else None

    async def get_by_slug(self, slug: str) -> Optional[Country]:
        for country in self._countries.values():
            if country.slug == slug:
                return deepcopy(country)
        return None

    async def list_all(self) -> List[Country]:
        countries = sorted(self._countries.values(), key=lambda c: c.name.lower())
        return [deepcopy(c) for c in countries]

    async def create(self, country: Country) -> Country:
        if not country.is_valid():
            raise ValueError("Invalid country")

        if any(c.slug == country.slug for c in self._countries.values()):
            raise DuplicateRecordError(f"Country with slug '{country.slug}' already exists")

        stored = deepcopy(country)
        stored.id = self._next_id
        self._next_id += 1
        now = utc_now()
        stored.created_at = stored.created_at or now
        stored.updated_at = stored.updated_at or now

        self._countries[stored.id] = stored
        return deepcopy(stored)

    async def update(self, country: Country) -> Country:
        if country.id not in self._countries:
            raise RecordNotFoundError(f"Country {country.id} not found")

        stored = deepcopy(country)
        self._countries[country.id] = stored
        return deepcopy(stored)

    async def delete(self, country_id: int) -> None:
        if country_id not in self._countries:
            raise RecordNotFoundError(f"Country {country_id} not found")
        del self._countries[country_id]
