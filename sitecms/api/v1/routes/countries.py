"""Country API routes."""
from typing import List

from fastapi import APIRouter, Depends

from sitecms.api.dependencies import raise_for_result
from sitecms.api.v1.schemas.country_schemas import (
    CountryCreateSchema,
    CountrySchema,
    CountryUpdateSchema,
)
from sitecms.application.dto.write_dto import CountryChanges, CountryDraft
from sitecms.application.services.country_service import CountryService
from sitecms.core.dependencies import get_country_service

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=List[CountrySchema])
async def list_countries(service: CountryService = Depends(get_country_service)):
    """List countries ordered by name."""
    result = await service.list_countries()
    raise_for_result(result)
    return [CountrySchema.model_validate(country) for country in result.data]


@router.get("/{country_id}", response_model=CountrySchema)
async def get_country(country_id: int, service: CountryService = Depends(get_country_service)):
    result = await service.get_country(country_id)
    raise_for_result(result)
    return CountrySchema.model_validate(result.data)


@router.post("", response_model=CountrySchema, status_code=201)
async def create_country(body: CountryCreateSchema, service: CountryService = Depends(get_country_service)):
    """
    Create a country page.

    ``selected_cities`` may only list cities that already belong to the country.
    """
    result = await service.create_country(CountryDraft(**body.model_dump()))
    raise_for_result(result)
    return CountrySchema.model_validate(result.data)


@router.put("/{country_id}", response_model=CountrySchema)
async def update_country(
    country_id: int,
    body: CountryUpdateSchema,
    service: CountryService = Depends(get_country_service),
):
    result = await service.update_country(country_id, CountryChanges(**body.model_dump(exclude_unset=True)))
    raise_for_result(result)
    return CountrySchema.model_validate(result.data)


@router.delete("/{country_id}")
async def delete_country(country_id: int, service: CountryService = Depends(get_country_service)):
    result = await service.delete_country(country_id)
    raise_for_result(result)
    return {"deleted": True}
