"""Catalogue routes: the name lists of GlobalLocations and TradeShowsPage."""
from fastapi import APIRouter, Depends, HTTPException

from sitecms.api.v1.schemas.catalogue_schemas import CatalogueNameSchema, CatalogueNamesSchema
from sitecms.application.services.name_catalogue import NameCatalogueService
from sitecms.core.dependencies import get_name_catalogue_service
from sitecms.domain.entities.catalogue import CatalogueList
from sitecms.domain.errors import RecordNotFoundError

router = APIRouter(prefix="/catalogues", tags=["catalogues"])


def _raise_store_error(list_id: CatalogueList, e: Exception) -> None:
    if isinstance(e, RecordNotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    raise HTTPException(status_code=500, detail=f"Failed to update {list_id.value}: {e}")


@router.get("/{list_id}", response_model=CatalogueNamesSchema)
async def get_catalogue(list_id: CatalogueList, service: NameCatalogueService = Depends(get_name_catalogue_service)):
    try:
        names = await service.get_names(list_id)
    except Exception as e:
        _raise_store_error(list_id, e)
    return CatalogueNamesSchema(list_id=list_id.value, names=names)


@router.post("/{list_id}", response_model=CatalogueNamesSchema)
async def add_catalogue_name(
    list_id: CatalogueList,
    body: CatalogueNameSchema,
    service: NameCatalogueService = Depends(get_name_catalogue_service),
):
    """Add a name; adding one that is already listed (in any case) changes nothing."""
    try:
        names = await service.add_name(list_id, body.name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        _raise_store_error(list_id, e)
    return CatalogueNamesSchema(list_id=list_id.value, names=names)


@router.delete("/{list_id}/{name}", response_model=CatalogueNamesSchema)
async def remove_catalogue_name(
    list_id: CatalogueList,
    name: str,
    service: NameCatalogueService = Depends(get_name_catalogue_service),
):
    """Remove a name; removing one that is not listed changes nothing."""
    try:
        names = await service.remove_name(list_id, name)
    except Exception as e:
        _raise_store_error(list_id, e)
    return CatalogueNamesSchema(list_id=list_id.value, names=names)
