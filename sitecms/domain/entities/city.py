"""City domain entity - pure business logic."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class City:
    """City page entity.

    ``city_slug`` is derived once at creation and never changes afterwards.
    ``country_slug`` points at the owning Country and is the only mutable link.
    """
    id: Optional[int]
    name: str
    city_slug: str
    country_slug: str = ""
    is_active: bool = True
    # SEO, hero and section copy; opaque to the sync logic
    content: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_valid(self) -> bool:
        """Validate city business rules."""
        return bool(
            self.name and
            self.name.strip() and
            self.city_slug and
            self.city_slug.strip()
        )

    @property
    def public_path(self) -> str:
        """Path of the city page on the public website."""
        if self.country_slug:
            return f"/{self.country_slug}/{self.city_slug}"
        return f"/{self.city_slug}"

    def has_name(self, name: str) -> bool:
        """Case-insensitive, whitespace-trimmed name comparison."""
        return normalize_name(self.name) == normalize_name(name)


def normalize_name(name: Optional[str]) -> str:
    """Canonical form used for every display-name comparison."""
    return (name or "").strip().casefold()
