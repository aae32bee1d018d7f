"""City lifecycle coordinator - keeps cities, countries and catalogues in step.

There is no transaction spanning the four records a city touches, so each
operation runs as a sequence of steps on a ``SyncFlow``:

- primary writes (the city row itself) are HARD_FAIL steps that stop the flow
- fan-out writes (catalogues, other countries) are SOFT_FAIL steps that only
  add a warning
- the one exception is re-parenting: the city's new ``country_slug`` is only
  committed after both countries were reconciled (commit-last, verify-first)
- revalidation is dispatched last and can never change the outcome

Store calls are awaited one at a time so the bookkeeping stays deterministic.
"""
import logging
from typing import Optional

from sitecms.application.dto.operation_result import OperationResult
from sitecms.application.dto.write_dto import CityChanges, CityDraft
from sitecms.application.ports.revalidation import RevalidationPort
from sitecms.application.services.country_reference_cleaner import CountryReferenceCleaner
from sitecms.application.services.name_catalogue import NameCatalogueService
from sitecms.application.services.slug_guard import SlugUniquenessGuard
from sitecms.application.services.sync_flow import FlowState, SyncFlow
from sitecms.domain.entities.catalogue import CITY_NAME_LISTS
from sitecms.domain.entities.city import City, normalize_name
from sitecms.domain.errors import DuplicateRecordError, ErrorKind, RecordNotFoundError
from sitecms.domain.repositories.city_repository import CityRepository
from sitecms.domain.repositories.country_repository import CountryRepository
from sitecms.domain.value_objects.step_outcome import StepOutcome
from sitecms.domain.value_objects.timestamps import utc_now

logger = logging.getLogger(__name__)


class CityLifecycleCoordinator:
    """Create, re-parent and delete cities with cross-record fan-out."""

    def __init__(
        self,
        city_repository: CityRepository,
        country_repository: CountryRepository,
        guard: SlugUniquenessGuard,
        catalogue: NameCatalogueService,
        cleaner: CountryReferenceCleaner,
        notifier: RevalidationPort,
    ):
        self._cities = city_repository
        self._countries = country_repository
        self._guard = guard
        self._catalogue = catalogue
        self._cleaner = cleaner
        self._notifier = notifier

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_city(self, draft: CityDraft) -> OperationResult[City]:
        """Create a city, list its name in the catalogues and link its country.

        Path: IDLE -> GUARD_CHECKED -> PERSISTED -> CATALOGUE_SYNCED
        -> REPARENT_SYNCED -> NOTIFIED_REVALIDATION -> DONE
        """
        flow = SyncFlow("create city", repr(draft.name))

        guarded = await self._check_new_name(draft.name)
        if not flow.advance(FlowState.GUARD_CHECKED, guarded):
            return flow.result()

        inserted = await self._insert_city(draft, city_slug=guarded.value)
        if not flow.advance(FlowState.PERSISTED, inserted):
            return flow.result()
        city: City = inserted.value

        flow.advance(FlowState.CATALOGUE_SYNCED, await self._add_to_catalogues(city.name))

        linked = StepOutcome.ok()
        if city.country_slug:
            linked = await self._attach_to_country(city.country_slug, city.city_slug)
        flow.advance(FlowState.REPARENT_SYNCED, linked)

        paths = [city.public_path]
        if linked.value:
            paths.append(f"/{city.country_slug}")
        flow.advance(FlowState.NOTIFIED_REVALIDATION, self._revalidate(*paths))

        return flow.result(city)

    # ------------------------------------------------------------------
    # Update / re-parent
    # ------------------------------------------------------------------

    async def update_city(self, city_id: int, changes: CityChanges) -> OperationResult[City]:
        """Apply field changes, re-parenting the city when its country changes.

        Path: IDLE -> GUARD_CHECKED -> REPARENT_SYNCED -> PERSISTED
        -> NOTIFIED_REVALIDATION -> DONE
        """
        flow = SyncFlow("update city", str(city_id))

        loaded = await self._load_city(city_id)
        if not flow.check(loaded):
            return flow.result()
        city: City = loaded.value

        if not flow.advance(FlowState.GUARD_CHECKED, await self._check_rename(city, changes.name)):
            return flow.result()

        old_country = city.country_slug or ""
        old_path = city.public_path
        new_country = old_country if changes.country_slug is None else changes.country_slug.strip()
        reparenting = old_country != new_country

        detached = StepOutcome.ok(None)
        attached = StepOutcome.ok(False)
        if reparenting:
            if old_country:
                detached = await self._detach_from_country(old_country, city.city_slug)
                flow.check(detached)
            # Attempt the new side even when the old side failed
            if new_country:
                attached = await self._attach_to_country(new_country, city.city_slug)
                flow.check(attached)

            country_update_success = detached.is_ok and attached.is_ok
            if not country_update_success:
                await self._revert_country_links(flow, city.city_slug, old_country, new_country, detached, attached)
                gate = StepOutcome.hard_fail(
                    ErrorKind.PARTIAL_SYNC_FAILURE,
                    f"Could not sync country relationships for '{city.name}'; the city was not updated",
                )
            else:
                gate = StepOutcome.ok()
            if not flow.advance(FlowState.REPARENT_SYNCED, gate):
                return flow.result()

        persisted = await self._persist_changes(city, changes, new_country)
        if not flow.advance(FlowState.PERSISTED, persisted):
            if reparenting:
                await self._revert_country_links(flow, city.city_slug, old_country, new_country, detached, attached)
            return flow.result()
        updated: City = persisted.value

        paths = [updated.public_path]
        if reparenting:
            paths.append(old_path)
            paths.extend(f"/{slug}" for slug in (old_country, new_country) if slug)
        flow.advance(FlowState.NOTIFIED_REVALIDATION, self._revalidate(*paths))

        return flow.result(updated)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete_city(self, city_id: int) -> OperationResult[bool]:
        """Delete a city and strip its slug from every country.

        Success only means the city row is gone; country cleanup is best effort.
        Path: IDLE -> PERSISTED -> REPARENT_SYNCED -> NOTIFIED_REVALIDATION -> DONE
        """
        flow = SyncFlow("delete city", str(city_id))

        # Capture the slug while the row still exists
        loaded = await self._load_city(city_id)
        if not flow.check(loaded):
            return flow.result(failed_data=False)
        city: City = loaded.value

        if not flow.advance(FlowState.PERSISTED, await self._delete_city_row(city)):
            return flow.result(failed_data=False)

        report = await self._cleaner.remove_city_slug_from_all_countries(city.city_slug)
        if report.complete:
            cleaned = StepOutcome.ok(report)
        elif not report.ok:
            cleaned = StepOutcome.soft_fail(
                ErrorKind.PERSISTENCE_ERROR,
                f"City deleted but countries could not be cleaned up: {report.error}",
            )
        else:
            cleaned = StepOutcome.soft_fail(
                ErrorKind.PERSISTENCE_ERROR,
                f"City deleted but still listed by: {', '.join(sorted(report.failed))}",
            )
        flow.advance(FlowState.REPARENT_SYNCED, cleaned)

        paths = [city.public_path]
        paths.extend(f"/{slug}" for slug in report.updated)
        flow.advance(FlowState.NOTIFIED_REVALIDATION, self._revalidate(*paths))

        return flow.result(True, failed_data=False)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _check_new_name(self, name: str) -> StepOutcome:
        try:
            city_slug = self._guard.derive_city_slug(name)
        except ValueError as e:
            return StepOutcome.hard_fail(ErrorKind.INVALID_INPUT, str(e))

        try:
            verdict = await self._guard.can_create_city(name)
        except Exception as e:
            return StepOutcome.hard_fail(ErrorKind.PERSISTENCE_ERROR, f"Could not check existing cities: {e}")

        if not verdict.ok:
            return StepOutcome.hard_fail(ErrorKind.DUPLICATE_CITY, verdict.reason)
        return StepOutcome.ok(city_slug)

    async def _check_rename(self, city: City, new_name: Optional[str]) -> StepOutcome:
        if new_name is None or city.has_name(new_name):
            return StepOutcome.ok()
        if not normalize_name(new_name):
            return StepOutcome.hard_fail(ErrorKind.INVALID_INPUT, "City name is required")

        try:
            verdict = await self._guard.can_create_city(new_name, exclude_id=city.id)
        except Exception as e:
            return StepOutcome.hard_fail(ErrorKind.PERSISTENCE_ERROR, f"Could not check existing cities: {e}")

        if not verdict.ok:
            return StepOutcome.hard_fail(ErrorKind.DUPLICATE_CITY, verdict.reason)
        return StepOutcome.ok()

    async def _insert_city(self, draft: CityDraft, city_slug: str) -> StepOutcome:
        city = City(
            id=None,
            name=draft.name.strip(),
            city_slug=city_slug,
            country_slug=(draft.country_slug or "").strip(),
            is_active=draft.is_active,
            content=dict(draft.content),
        )
        try:
            created = await self._cities.create(city)
        except DuplicateRecordError as e:
            return StepOutcome.hard_fail(ErrorKind.DUPLICATE_CITY, str(e))
        except Exception as e:
            return StepOutcome.hard_fail(ErrorKind.PERSISTENCE_ERROR, f"Failed to create city: {e}")

        logger.info(f"Created city {created.city_slug} (id={created.id})")
        return StepOutcome.ok(created)

    async def _load_city(self, city_id: int) -> StepOutcome:
        try:
            city = await self._cities.get_by_id(city_id)
        except Exception as e:
            return StepOutcome.hard_fail(ErrorKind.PERSISTENCE_ERROR, f"Failed to fetch city {city_id}: {e}")
        if city is None:
            return StepOutcome.hard_fail(ErrorKind.NOT_FOUND, f"City {city_id} not found")
        return StepOutcome.ok(city)

    async def _persist_changes(self, city: City, changes: CityChanges, country_slug: str) -> StepOutcome:
        if changes.name is not None:
            city.name = changes.name.strip()
        if changes.is_active is not None:
            city.is_active = changes.is_active
        if changes.content is not None:
            city.content = dict(changes.content)
        city.country_slug = country_slug
        city.updated_at = utc_now()

        try:
            updated = await self._cities.update(city)
        except RecordNotFoundError as e:
            return StepOutcome.hard_fail(ErrorKind.NOT_FOUND, str(e))
        except DuplicateRecordError as e:
            return StepOutcome.hard_fail(ErrorKind.DUPLICATE_CITY, str(e))
        except Exception as e:
            return StepOutcome.hard_fail(ErrorKind.PERSISTENCE_ERROR, f"Failed to update city: {e}")

        logger.info(f"Updated city {updated.city_slug}")
        return StepOutcome.ok(updated)

    async def _delete_city_row(self, city: City) -> StepOutcome:
        try:
            await self._cities.delete(city.id)
        except RecordNotFoundError as e:
            return StepOutcome.hard_fail(ErrorKind.NOT_FOUND, str(e))
        except Exception as e:
            return StepOutcome.hard_fail(ErrorKind.PERSISTENCE_ERROR, f"Failed to delete city: {e}")

        logger.info(f"Deleted city {city.city_slug} (id={city.id})")
        return StepOutcome.ok()

    async def _add_to_catalogues(self, name: str) -> StepOutcome:
        failures = []
        for list_id in CITY_NAME_LISTS:
            try:
                await self._catalogue.add_name(list_id, name)
            except Exception as e:
                failures.append(f"{list_id.value} ({e})")

        if failures:
            return StepOutcome.soft_fail(
                ErrorKind.PERSISTENCE_ERROR,
                f"'{name}' could not be added to: {', '.join(failures)}",
            )
        return StepOutcome.ok()

    async def _attach_to_country(
        self, country_slug: str, city_slug: str, position: Optional[int] = None
    ) -> StepOutcome:
        """Add ``city_slug`` to the country's list, at ``position`` or at the end.

        Value: whether a write happened.
        """
        try:
            country = await self._countries.get_by_slug(country_slug)
        except Exception as e:
            return StepOutcome.soft_fail(ErrorKind.PERSISTENCE_ERROR, f"Failed to fetch country '{country_slug}': {e}")
        if country is None:
            return StepOutcome.soft_fail(ErrorKind.NOT_FOUND, f"Country '{country_slug}' not found")
        if country.references(city_slug):
            return StepOutcome.ok(False)

        country.selected_cities = country.with_city(city_slug, position)
        country.updated_at = utc_now()
        try:
            await self._countries.update(country)
        except Exception as e:
            return StepOutcome.soft_fail(ErrorKind.PERSISTENCE_ERROR, f"Failed to update country '{country_slug}': {e}")

        logger.info(f"Added {city_slug} to country {country_slug}")
        return StepOutcome.ok(True)

    async def _detach_from_country(self, country_slug: str, city_slug: str) -> StepOutcome:
        """Remove ``city_slug`` from the country's list.

        Value: the index the slug had, or None when nothing was written.
        """
        try:
            country = await self._countries.get_by_slug(country_slug)
        except Exception as e:
            return StepOutcome.soft_fail(ErrorKind.PERSISTENCE_ERROR, f"Failed to fetch country '{country_slug}': {e}")
        if country is None:
            logger.info(f"Previous country '{country_slug}' no longer exists; nothing to detach")
            return StepOutcome.ok(None)
        if not country.references(city_slug):
            return StepOutcome.ok(None)

        position = country.selected_cities.index(city_slug)
        country.selected_cities = country.without_city(city_slug)
        country.updated_at = utc_now()
        try:
            await self._countries.update(country)
        except Exception as e:
            return StepOutcome.soft_fail(ErrorKind.PERSISTENCE_ERROR, f"Failed to update country '{country_slug}': {e}")

        logger.info(f"Removed {city_slug} from country {country_slug}")
        return StepOutcome.ok(position)

    async def _revert_country_links(
        self,
        flow: SyncFlow,
        city_slug: str,
        old_country: str,
        new_country: str,
        detached: StepOutcome,
        attached: StepOutcome,
    ) -> None:
        """Undo the country writes of an abandoned re-parent, best effort.

        The city keeps its old ``country_slug``, so the old country should list
        it again, at its former position, and the new one should not.
        """
        if detached.is_ok and detached.value is not None:
            undo = await self._attach_to_country(old_country, city_slug, position=detached.value)
            if not undo.is_ok:
                flow.warnings.append(f"Country '{old_country}' may no longer list {city_slug}: {undo.error.message}")
        if attached.is_ok and attached.value:
            undo = await self._detach_from_country(new_country, city_slug)
            if not undo.is_ok:
                flow.warnings.append(f"Country '{new_country}' may still list {city_slug}: {undo.error.message}")

    def _revalidate(self, *paths: str) -> StepOutcome:
        """Dispatch revalidation for each path; failures are logged and dropped."""
        for path in dict.fromkeys(paths):
            try:
                self._notifier.notify(path)
            except Exception as e:
                logger.warning(f"{ErrorKind.REVALIDATION_IGNORED.value} for {path}: {e}")
        return StepOutcome.ok()
