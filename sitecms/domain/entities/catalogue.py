"""Singleton catalogue documents: GlobalLocations and TradeShowsPage.

Both hold raw display names used by selection widgets elsewhere on the site.
They are independent of City/Country records and of each other.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass
class GlobalLocations:
    """Global city/country catalogue (one row)."""
    id: Optional[int]
    cities: List[str] = field(default_factory=list)
    countries: List[str] = field(default_factory=list)
    updated_at: Optional[datetime] = None


@dataclass
class TradeShowsPage:
    """Trade shows landing page content (one row)."""
    id: Optional[int]
    cities: List[str] = field(default_factory=list)
    countries: List[str] = field(default_factory=list)
    is_active: bool = True
    content: Dict[str, Any] = field(default_factory=dict)
    updated_at: Optional[datetime] = None


class CatalogueList(str, Enum):
    """Identifier of one name list inside one singleton document."""
    GLOBAL_CITIES = "global_locations.cities"
    GLOBAL_COUNTRIES = "global_locations.countries"
    TRADE_SHOW_CITIES = "trade_shows_page.cities"
    TRADE_SHOW_COUNTRIES = "trade_shows_page.countries"

    @property
    def document(self) -> str:
        return self.value.split(".", 1)[0]

    @property
    def attribute(self) -> str:
        return self.value.split(".", 1)[1]


# Lists a newly created City's display name is added to
CITY_NAME_LISTS = (CatalogueList.GLOBAL_CITIES, CatalogueList.TRADE_SHOW_CITIES)
