"""Name catalogue maintenance for the GlobalLocations and TradeShowsPage lists.

Both documents hold plain display names and follow the same rules: names are
compared case-insensitively, adding an existing name and removing an absent
one are no-ops, and list helpers never mutate their input. The two documents
are not kept in agreement with each other.
"""
import logging
from typing import Dict, List, Sequence, Union

from sitecms.domain.entities.catalogue import CatalogueList, GlobalLocations, TradeShowsPage
from sitecms.domain.entities.city import normalize_name
from sitecms.domain.errors import RecordNotFoundError
from sitecms.domain.repositories.catalogue_repository import CatalogueRepository

logger = logging.getLogger(__name__)

CatalogueDocument = Union[GlobalLocations, TradeShowsPage]


def contains_name(names: Sequence[str], name: str) -> bool:
    wanted = normalize_name(name)
    return any(normalize_name(existing) == wanted for existing in names)


def add_if_absent(names: Sequence[str], name: str) -> List[str]:
    """Return a new list with ``name`` appended unless present in any case."""
    if contains_name(names, name):
        return list(names)
    return [*names, name.strip()]


def remove_if_present(names: Sequence[str], name: str) -> List[str]:
    """Return a new list without any case-insensitive match of ``name``."""
    wanted = normalize_name(name)
    return [existing for existing in names if normalize_name(existing) != wanted]


class NameCatalogueService:
    """Read-modify-write access to one named list of one singleton document.

    There is no concurrency token; concurrent edits are last-write-wins.
    """

    def __init__(self, catalogue_repository: CatalogueRepository):
        self._repo = catalogue_repository

    async def get_names(self, list_id: CatalogueList) -> List[str]:
        document = await self._load(list_id)
        return list(getattr(document, list_id.attribute))

    async def get_all(self) -> Dict[CatalogueList, List[str]]:
        return {list_id: await self.get_names(list_id) for list_id in CatalogueList}

    async def add_name(self, list_id: CatalogueList, name: str) -> List[str]:
        """Add ``name`` to the list; nothing is written when it is already there."""
        if not normalize_name(name):
            raise ValueError("Name is required")

        document = await self._load(list_id)
        current = getattr(document, list_id.attribute)
        updated = add_if_absent(current, name)
        if len(updated) == len(current):
            logger.debug(f"'{name}' already in {list_id.value}")
            return updated

        setattr(document, list_id.attribute, updated)
        await self._save(list_id, document)
        logger.info(f"Added '{name.strip()}' to {list_id.value}")
        return updated

    async def remove_name(self, list_id: CatalogueList, name: str) -> List[str]:
        """Remove ``name`` from the list; nothing is written when it is absent."""
        document = await self._load(list_id)
        current = getattr(document, list_id.attribute)
        updated = remove_if_present(current, name)
        if len(updated) == len(current):
            logger.debug(f"'{name}' not in {list_id.value}")
            return updated

        setattr(document, list_id.attribute, updated)
        await self._save(list_id, document)
        logger.info(f"Removed '{name}' from {list_id.value}")
        return updated

    async def _load(self, list_id: CatalogueList) -> CatalogueDocument:
        if list_id.document == "global_locations":
            document = await self._repo.get_global_locations()
        else:
            document = await self._repo.get_trade_shows_page()
        if document is None:
            raise RecordNotFoundError(f"{list_id.document} row not found")
        return document

    async def _save(self, list_id: CatalogueList, document: CatalogueDocument) -> None:
        if list_id.document == "global_locations":
            await self._repo.save_global_locations(document)
        else:
            await self._repo.save_trade_shows_page(document)
