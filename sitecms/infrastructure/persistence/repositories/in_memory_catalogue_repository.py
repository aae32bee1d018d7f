"""In-memory implementation of CatalogueRepository for testing."""
from copy import deepcopy
from typing import Optional
from sitecms.domain.entities.catalogue import GlobalLocations, TradeShowsPage
from sitecms.domain.repositories.catalogue_repository import CatalogueRepository


class InMemoryCatalogueRepository(CatalogueRepository):
    """Holds both singleton documents; seeded empty by default."""

    def __init__(
        self,
        global_locations: Optional[GlobalLocations] = None,
        trade_shows_page: Optional[TradeShowsPage] = None,
        seed: bool = True,
    ):
        if seed:
            global_locations = global_locations or GlobalLocations(id=1)
            trade_shows_page = trade_shows_page or TradeShowsPage(id=1)
        self._global_locations = deepcopy(global_locations)
        self._trade_shows_page = deepcopy(trade_shows_page)

    async def get_global_locations(self) -> Optional[GlobalLocations]:
        return deepcopy(self._global_locations)

    async def save_global_locations(self, document: GlobalLocations) -> GlobalLocations:
        self._global_locations = deepcopy(document)
        return deepcopy(document)

    async def get_trade_shows_page(self) -> Optional[TradeShowsPage]:
        return deepcopy(self._trade_shows_page)

    async def save_trade_shows_page(self, document: TradeShowsPage) -> TradeShowsPage:
        self._trade_shows_page = deepcopy(document)
        return deepcopy(document)
