"""Use cases: read cities for the console.

Reads never go through the coordinator; they hit the repositories directly.
"""
from typing import List, Optional

from sitecms.application.services.slug_guard import GuardResult, SlugUniquenessGuard
from sitecms.domain.entities.city import City
from sitecms.domain.repositories.city_repository import CityRepository


class ListCitiesUseCase:
    """List every city ordered by name, optionally only those of one country."""

    def __init__(self, city_repository: CityRepository):
        self._city_repo = city_repository

    async def execute(self, country_slug: Optional[str] = None) -> List[City]:
        cities = await self._city_repo.list_all()
        if country_slug is None:
            return cities
        return [city for city in cities if city.country_slug == country_slug]


class GetCityUseCase:

    def __init__(self, city_repository: CityRepository):
        self._city_repo = city_repository

    async def execute(self, city_id: int) -> Optional[City]:
        """Return the city, or None when no row has that id."""
        return await self._city_repo.get_by_id(city_id)


class CheckCityNameUseCase:
    """Tell the create form whether a name is still free (advisory only)."""

    def __init__(self, guard: SlugUniquenessGuard):
        self._guard = guard

    async def execute(self, name: str, exclude_id: Optional[int] = None) -> GuardResult:
        return await self._guard.can_create_city(name, exclude_id=exclude_id)
