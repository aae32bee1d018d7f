"""Country domain entity."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Country:
    """Country page entity.

    ``selected_cities`` is a denormalized, curated list of City slugs shown on
    the country page. It is expected to agree with each City's
    ``country_slug`` but the store does not enforce it.
    """
    id: Optional[int]
    slug: str
    name: str
    is_active: bool = True
    selected_cities: List[str] = field(default_factory=list)
    content: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_valid(self) -> bool:
        """Validate country business rules."""
        return bool(self.name and self.name.strip() and self.slug and self.slug.strip())

    @property
    def public_path(self) -> str:
        return f"/{self.slug}"

    def references(self, city_slug: str) -> bool:
        return city_slug in self.selected_cities

    def with_city(self, city_slug: str, position: Optional[int] = None) -> List[str]:
        """Selected cities with ``city_slug`` added if absent (new list).

        The slug goes at ``position`` when given, otherwise at the end.
        """
        if city_slug in self.selected_cities:
            return list(self.selected_cities)
        if position is None:
            return [*self.selected_cities, city_slug]
        cities = list(self.selected_cities)
        cities.insert(position, city_slug)
        return cities

    def without_city(self, city_slug: str) -> List[str]:
        """Selected cities with every ``city_slug`` entry removed (new list)."""
        return [slug for slug in self.selected_cities if slug != city_slug]
