"""Input DTOs for city and country writes."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CityDraft:
    """Fields submitted when creating a city. The slug is always derived."""
    name: str
    country_slug: str = ""
    is_active: bool = True
    content: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CityChanges:
    """Partial update of a city; None means "leave unchanged"."""
    name: Optional[str] = None
    country_slug: Optional[str] = None
    is_active: Optional[bool] = None
    content: Optional[Dict[str, Any]] = None


@dataclass
class CountryDraft:
    name: str
    slug: Optional[str] = None
    is_active: bool = True
    selected_cities: List[str] = field(default_factory=list)
    content: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CountryChanges:
    name: Optional[str] = None
    is_active: Optional[bool] = None
    selected_cities: Optional[List[str]] = None
    content: Optional[Dict[str, Any]] = None
