"""Slug derivation and the city name uniqueness guard."""
import re
import unicodedata
from dataclasses import dataclass
from typing import Optional

from sitecms.domain.entities.city import normalize_name
from sitecms.domain.repositories.city_repository import CityRepository


def slugify(value: str) -> str:
    """Lowercase, fold accents, collapse everything else to single hyphens.

    >>> slugify("São Paulo")
    'sao-paulo'
    """
    folded = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", folded.lower()).strip("-")


def derive_slug(name: str, prefix: str = "") -> str:
    """Prefix + slugified name; raises ValueError when nothing usable remains."""
    base = slugify(name)
    if not base:
        raise ValueError(f"Cannot derive a slug from name {name!r}")
    return f"{prefix}{base}"


@dataclass(frozen=True)
class GuardResult:
    ok: bool
    reason: Optional[str] = None
    conflicting_id: Optional[int] = None


class SlugUniquenessGuard:
    """Checks a city name against every existing city before a write.

    The check is optimistic: two creates racing each other can both pass.
    """

    def __init__(self, city_repository: CityRepository, slug_prefix: str = ""):
        self._city_repo = city_repository
        self.slug_prefix = slug_prefix

    def derive_city_slug(self, name: str) -> str:
        return derive_slug(name, self.slug_prefix)

    async def can_create_city(self, name: str, exclude_id: Optional[int] = None) -> GuardResult:
        """Return ok=False when another city already uses ``name`` (any case).

        Store errors propagate to the caller.
        """
        wanted = normalize_name(name)
        if not wanted:
            return GuardResult(ok=False, reason="City name is required")

        for city in await self._city_repo.list_all():
            if city.id == exclude_id:
                continue
            if normalize_name(city.name) == wanted:
                return GuardResult(
                    ok=False,
                    reason=f"A city named '{city.name}' already exists",
                    conflicting_id=city.id,
                )
        return GuardResult(ok=True)
