"""City repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import Optional, List
from sitecms.domain.entities.city import City


class CityRepository(ABC):
    """Repository interface for City entity.

    Implementations raise ``RecordStoreError`` subclasses on failure.
    """

    @abstractmethod
    async def get_by_id(self, city_id: int) -> Optional[City]:
        """Get city by ID."""
        pass

    @abstractmethod
    async def get_by_slug(self, city_slug: str) -> Optional[City]:
        """Get city by slug."""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[City]:
        """Get city by display name (case-insensitive, trimmed)."""
        pass

    @abstractmethod
    async def list_all(self) -> List[City]:
        """List all cities ordered by name."""
        pass

    @abstractmethod
    async def create(self, city: City) -> City:
        """Insert a new city and return it with its assigned ID."""
        pass

    @abstractmethod
    async def update(self, city: City) -> City:
        """Persist every field of an existing city."""
        pass

    @abstractmethod
    async def delete(self, city_id: int) -> None:
        """Delete a city by ID."""
        pass
