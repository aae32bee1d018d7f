"""In-memory implementation of CityRepository for testing.
Follows Liskov Substitution Principle - can replace any CityRepository."""
from copy import deepcopy
from typing import Optional, List, Dict
from sitecms.domain.entities.city import City, normalize_name
from sitecms.domain.errors import DuplicateRecordError, RecordNotFoundError
from sitecms.domain.repositories.city_repository import CityRepository
from sitecms.domain.value_objects.timestamps import utc_now


class InMemoryCityRepository(CityRepository):
    """In-memory implementation for testing and local development.

    Entities are copied on the way in and out so callers never share state
    with the store, the same as a database round trip.
    """

    def __init__(self):
        self._cities: Dict[int, City] = {}
        self._next_id = 1

    async def get_by_id(self, city_id: int) -> Optional[City]:
        city = self._cities.get(city_id)
        return deepcopy(city) if city else None

    async def get_by_slug(self, city_slug: str) -> Optional[City]:
        for city in self._cities.values():
            if city.city_slug == city_slug:
                return deepcopy(city)
        return None

    async def get_by_name(self, name: str) -> Optional[City]:
        for city in self._cities.values():
            if city.has_name(name):
                return deepcopy(city)
        return None

    async def list_all(self) -> List[City]:
        cities = sorted(self._cities.values(), key=lambda c: normalize_name(c.name))
        return [deepcopy(c) for c in cities]

    async def create(self, city: City) -> City:
        if not city.is_valid():
            raise ValueError("Invalid city")

        if any(c.city_slug == city.city_slug for c in self._cities.values()):
            raise DuplicateRecordError(f"City with slug '{city.city_slug}' already exists")

        stored = deepcopy(city)
        stored.id = self._next_id
        self._next_id += 1
        now = utc_now()
        stored.created_at = stored.created_at or now
        stored.updated_at = stored.updated_at or now

        self._cities[stored.id] = stored
        return deepcopy(stored)

    async def update(self, city: City) -> City:
        if city.id not in self._cities:
            raise RecordNotFoundError(f"City {city.id} not found")

        if any(c.city_slug == city.city_slug and c.id != city.id for c in self._cities.values()):
            raise DuplicateRecordError(f"City with slug '{city.city_slug}' already exists")

        stored = deepcopy(city)
        self._cities[city.id] = stored
        return deepcopy(stored)

    async def delete(self, city_id: int) -> None:
        if city_id not in self._cities:
            raise RecordNotFoundError(f"City {city_id} not found")
        del self._cities[city_id]
