"""Strips a deleted city's slug from every country that still lists it."""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sitecms.domain.repositories.country_repository import CountryRepository
from sitecms.domain.value_objects.timestamps import utc_now

logger = logging.getLogger(__name__)


@dataclass
class CleanupReport:
    """What a cleanup pass managed to do.

    ``ok`` is False only when the countries could not be listed at all.
    Individual country failures are listed in ``failed`` and leave ``ok`` True.
    """
    city_slug: str
    ok: bool = True
    updated: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.ok and not self.failed


class CountryReferenceCleaner:
    """Best-effort broadcast: one independent update per referencing country.

    Nothing is rolled back. A country left with a dangling slug is tolerated
    by readers, which already resolve unknown slugs to "not found".
    """

    def __init__(self, country_repository: CountryRepository):
        self._country_repo = country_repository

    async def remove_city_slug_from_all_countries(self, city_slug: str) -> CleanupReport:
        report = CleanupReport(city_slug=city_slug)

        try:
            countries = await self._country_repo.list_all()
        except Exception as e:
            logger.error(f"Could not list countries to remove '{city_slug}': {e}")
            report.ok = False
            report.error = str(e)
            return report

        for country in countries:
            if not country.references(city_slug):
                continue

            country.selected_cities = country.without_city(city_slug)
            country.updated_at = utc_now()
            try:
                await self._country_repo.update(country)
            except Exception as e:
                # Continue with other countries even if one fails
                logger.warning(f"Error updating country {country.slug} while removing '{city_slug}': {e}")
                report.failed[country.slug] = str(e)
                continue

            report.updated.append(country.slug)
            logger.info(f"Removed '{city_slug}' from country {country.slug}")

        return report
