"""Country maintenance done directly by an editor.

Every write here is a primary write: store errors surface on the result.
Country pages are revalidated at ``/{slug}`` after a create or update.
"""
import logging
from typing import List, Optional

from sitecms.application.dto.operation_result import OperationResult
from sitecms.application.dto.write_dto import CountryChanges, CountryDraft
from sitecms.application.ports.revalidation import RevalidationPort
from sitecms.application.services.slug_guard import derive_slug, slugify
from sitecms.domain.entities.country import Country
from sitecms.domain.errors import (
    DuplicateRecordError,
    ErrorKind,
    RecordNotFoundError,
    SyncError,
)
from sitecms.domain.repositories.city_repository import CityRepository
from sitecms.domain.repositories.country_repository import CountryRepository
from sitecms.domain.value_objects.timestamps import utc_now

logger = logging.getLogger(__name__)


class CountryService:

    def __init__(
        self,
        country_repository: CountryRepository,
        city_repository: CityRepository,
        notifier: RevalidationPort,
        slug_prefix: str = "",
    ):
        self._countries = country_repository
        self._cities = city_repository
        self._notifier = notifier
        self.slug_prefix = slug_prefix

    async def list_countries(self) -> OperationResult[List[Country]]:
        try:
            return OperationResult.success(await self._countries.list_all())
        except Exception as e:
            logger.error(f"Error fetching countries: {e}")
            return OperationResult.failure(SyncError(ErrorKind.PERSISTENCE_ERROR, str(e)), data=[])

    async def get_country(self, country_id: int) -> OperationResult[Country]:
        try:
            country = await self._countries.get_by_id(country_id)
        except Exception as e:
            logger.error(f"Error fetching country {country_id}: {e}")
            return OperationResult.failure(SyncError(ErrorKind.PERSISTENCE_ERROR, str(e)))
        if country is None:
            return OperationResult.failure(SyncError(ErrorKind.NOT_FOUND, f"Country {country_id} not found"))
        return OperationResult.success(country)

    async def create_country(self, draft: CountryDraft) -> OperationResult[Country]:
        """Insert an active country. The slug is derived from the name unless given."""
        try:
            slug = self._derive_country_slug(draft)
        except ValueError as e:
            return OperationResult.failure(SyncError(ErrorKind.INVALID_INPUT, str(e)))

        rejected = await self._check_selected_cities(slug, [], draft.selected_cities)
        if rejected:
            return OperationResult.failure(rejected)

        country = Country(
            id=None,
            slug=slug,
            name=draft.name.strip(),
            is_active=draft.is_active,
            selected_cities=list(dict.fromkeys(draft.selected_cities)),
            content=dict(draft.content),
        )
        try:
            created = await self._countries.create(country)
        except DuplicateRecordError as e:
            return OperationResult.failure(SyncError(ErrorKind.DUPLICATE_COUNTRY, str(e)))
        except Exception as e:
            logger.error(f"Error creating country {slug}: {e}")
            return OperationResult.failure(SyncError(ErrorKind.PERSISTENCE_ERROR, str(e)))

        logger.info(f"Created country {created.slug} (id={created.id})")
        self._revalidate(created.public_path)
        return OperationResult.success(created)

    async def update_country(self, country_id: int, changes: CountryChanges) -> OperationResult[Country]:
        """Apply field changes; the slug never changes."""
        loaded = await self.get_country(country_id)
        if not loaded.ok:
            return loaded
        country = loaded.data

        if changes.name is not None:
            if not changes.name.strip():
                return OperationResult.failure(SyncError(ErrorKind.INVALID_INPUT, "Country name is required"))
            country.name = changes.name.strip()
        if changes.is_active is not None:
            country.is_active = changes.is_active
        if changes.content is not None:
            country.content = dict(changes.content)
        if changes.selected_cities is not None:
            rejected = await self._check_selected_cities(country.slug, country.selected_cities, changes.selected_cities)
            if rejected:
                return OperationResult.failure(rejected)
            country.selected_cities = list(dict.fromkeys(changes.selected_cities))
        country.updated_at = utc_now()

        try:
            updated = await self._countries.update(country)
        except RecordNotFoundError as e:
            return OperationResult.failure(SyncError(ErrorKind.NOT_FOUND, str(e)))
        except Exception as e:
            logger.error(f"Error updating country {country.slug}: {e}")
            return OperationResult.failure(SyncError(ErrorKind.PERSISTENCE_ERROR, str(e)))

        logger.info(f"Updated country {updated.slug}")
        self._revalidate(updated.public_path)
        return OperationResult.success(updated)

    async def delete_country(self, country_id: int) -> OperationResult[bool]:
        """Delete the row only. Cities that point at it keep their country_slug."""
        try:
            await self._countries.delete(country_id)
        except RecordNotFoundError as e:
            return OperationResult.failure(SyncError(ErrorKind.NOT_FOUND, str(e)), data=False)
        except Exception as e:
            logger.error(f"Error deleting country {country_id}: {e}")
            return OperationResult.failure(SyncError(ErrorKind.PERSISTENCE_ERROR, str(e)), data=False)

        logger.info(f"Deleted country {country_id}")
        return OperationResult.success(True)

    def _derive_country_slug(self, draft: CountryDraft) -> str:
        if not (draft.name or "").strip():
            raise ValueError("Country name is required")
        if draft.slug and draft.slug.strip():
            slug = slugify(draft.slug)
            if not slug:
                raise ValueError(f"Invalid country slug {draft.slug!r}")
            return slug
        return derive_slug(draft.name, self.slug_prefix)

    async def _check_selected_cities(
        self, country_slug: str, current: List[str], proposed: List[str]
    ) -> Optional[SyncError]:
        """Reordering and dropping are free; additions must be cities of this country."""
        added = [slug for slug in proposed if slug not in current]
        for city_slug in added:
            try:
                city = await self._cities.get_by_slug(city_slug)
            except Exception as e:
                return SyncError(ErrorKind.PERSISTENCE_ERROR, f"Could not check city '{city_slug}': {e}")
            if city is None:
                return SyncError(ErrorKind.INVALID_INPUT, f"City '{city_slug}' does not exist")
            if city.country_slug != country_slug:
                return SyncError(
                    ErrorKind.INVALID_INPUT,
                    f"City '{city_slug}' belongs to '{city.country_slug or 'no country'}', not '{country_slug}'",
                )
        return None

    def _revalidate(self, path: str) -> None:
        try:
            self._notifier.notify(path)
        except Exception as e:
            logger.warning(f"{ErrorKind.REVALIDATION_IGNORED.value} for {path}: {e}")
