"""Country repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import Optional, List
from sitecms.domain.entities.country import Country


class CountryRepository(ABC):
    """Repository interface for Country entity."""

    @abstractmethod
    async def get_by_id(self, country_id: int) -> Optional[Country]:
        """Get country by ID."""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Country]:
        """Get country by slug."""
        pass

    @abstractmethod
    async def list_all(self) -> List[Country]:
        """List all countries ordered by name."""
        pass

    @abstractmethod
    async def create(self, country: Country) -> Country:
        """Insert a new country."""
        pass

    @abstractmethod
    async def update(self, country: Country) -> Country:
        """Persist every field of an existing country."""
        pass

    @abstractmethod
    async def delete(self, country_id: int) -> None:
        """Delete a country by ID."""
        pass
