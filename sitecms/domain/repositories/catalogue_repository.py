"""Repository interface for the two singleton catalogue documents."""
from abc import ABC, abstractmethod
from typing import Optional
from sitecms.domain.entities.catalogue import GlobalLocations, TradeShowsPage


class CatalogueRepository(ABC):
    """Access to the GlobalLocations and TradeShowsPage rows.

    There is no concurrency token: saves are last-write-wins.
    """

    @abstractmethod
    async def get_global_locations(self) -> Optional[GlobalLocations]:
        """Get the global locations row, or None if it was never seeded."""
        pass

    @abstractmethod
    async def save_global_locations(self, document: GlobalLocations) -> GlobalLocations:
        """Overwrite the global locations row."""
        pass

    @abstractmethod
    async def get_trade_shows_page(self) -> Optional[TradeShowsPage]:
        """Get the trade shows page row, or None if it was never seeded."""
        pass

    @abstractmethod
    async def save_trade_shows_page(self, document: TradeShowsPage) -> TradeShowsPage:
        """Overwrite the trade shows page row."""
        pass
