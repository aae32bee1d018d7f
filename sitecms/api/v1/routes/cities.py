"""City API routes - thin layer delegating to the coordinator and use cases."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from sitecms.api.dependencies import raise_for_result
from sitecms.api.v1.schemas.city_schemas import (
    CityCreateSchema,
    CityDeleteResponseSchema,
    CityNameAvailabilitySchema,
    CitySchema,
    CityUpdateSchema,
    CityWriteResponseSchema,
)
from sitecms.application.dto.write_dto import CityChanges, CityDraft
from sitecms.application.services.city_lifecycle import CityLifecycleCoordinator
from sitecms.application.use_cases.city_queries import (
    CheckCityNameUseCase,
    GetCityUseCase,
    ListCitiesUseCase,
)
from sitecms.core.dependencies import (
    get_check_city_name_use_case,
    get_city_lifecycle_coordinator,
    get_city_use_case,
    get_list_cities_use_case,
)

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("", response_model=List[CitySchema])
async def list_cities(
    country_slug: Optional[str] = Query(None, description="Only cities of this country"),
    use_case: ListCitiesUseCase = Depends(get_list_cities_use_case),
):
    """List cities ordered by name."""
    cities = await use_case.execute(country_slug)
    return [CitySchema.model_validate(city) for city in cities]


@router.get("/availability", response_model=CityNameAvailabilitySchema)
async def check_city_name(
    name: str = Query(..., min_length=1),
    exclude_id: Optional[int] = Query(None),
    use_case: CheckCityNameUseCase = Depends(get_check_city_name_use_case),
):
    """
    Check whether a city name is free.

    Advisory only: the create endpoint runs the same check again.
    """
    verdict = await use_case.execute(name, exclude_id=exclude_id)
    return CityNameAvailabilitySchema(
        name=name,
        available=verdict.ok,
        reason=verdict.reason,
        conflicting_id=verdict.conflicting_id,
    )


@router.get("/{city_id}", response_model=CitySchema)
async def get_city(
    city_id: int,
    use_case: GetCityUseCase = Depends(get_city_use_case),
):
    city = await use_case.execute(city_id)
    if not city:
        raise HTTPException(status_code=404, detail=f"City {city_id} not found")
    return CitySchema.model_validate(city)


@router.post("", response_model=CityWriteResponseSchema, status_code=201)
async def create_city(
    body: CityCreateSchema,
    coordinator: CityLifecycleCoordinator = Depends(get_city_lifecycle_coordinator),
):
    """
    Create a city.

    The name is added to both city catalogues and the slug to its country's
    selected cities. Failures of those secondary writes come back as warnings.
    """
    result = await coordinator.create_city(CityDraft(**body.model_dump()))
    raise_for_result(result)
    return CityWriteResponseSchema(city=CitySchema.model_validate(result.data), warnings=result.warnings)


@router.put("/{city_id}", response_model=CityWriteResponseSchema)
async def update_city(
    city_id: int,
    body: CityUpdateSchema,
    coordinator: CityLifecycleCoordinator = Depends(get_city_lifecycle_coordinator),
):
    """
    Update a city, moving it to another country when ``country_slug`` changes.

    A move is only saved when both countries were updated (409 otherwise).
    """
    result = await coordinator.update_city(city_id, CityChanges(**body.model_dump(exclude_unset=True)))
    raise_for_result(result)
    return CityWriteResponseSchema(city=CitySchema.model_validate(result.data), warnings=result.warnings)


@router.delete("/{city_id}", response_model=CityDeleteResponseSchema)
async def delete_city(
    city_id: int,
    coordinator: CityLifecycleCoordinator = Depends(get_city_lifecycle_coordinator),
):
    result = await coordinator.delete_city(city_id)
    raise_for_result(result)
    return CityDeleteResponseSchema(deleted=bool(result.data), warnings=result.warnings)
