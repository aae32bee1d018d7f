"""SQLAlchemy implementation of CityRepository."""
from typing import Optional, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from sitecms.domain.entities.city import City as CityEntity, normalize_name
from sitecms.domain.errors import RecordNotFoundError
from sitecms.domain.repositories.city_repository import CityRepository
from sitecms.infrastructure.persistence import models
from sitecms.infrastructure.persistence.db import store_errors
from sitecms.domain.value_objects.timestamps import utc_now


def _to_entity(row: models.City) -> CityEntity:
    return CityEntity(
        id=row.id,
        name=row.name,
        city_slug=row.city_slug,
        country_slug=row.country_slug or "",
        is_active=bool(row.is_active),
        content=dict(row.content or {}),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLAlchemyCityRepository(CityRepository):
    """City repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, city_id: int) -> Optional[CityEntity]:
        with store_errors(self.session, f"Fetch city {city_id}"):
            row = self.session.get(models.City, city_id)
        return _to_entity(row) if row else None

    async def get_by_slug(self, city_slug: str) -> Optional[CityEntity]:
        with store_errors(self.session, f"Fetch city '{city_slug}'"):
            row = (
                self.session.query(models.City)
                .filter(models.City.city_slug == city_slug)
                .first()
            )
        return _to_entity(row) if row else None

    async def get_by_name(self, name: str) -> Optional[CityEntity]:
        with store_errors(self.session, f"Fetch city named '{name}'"):
            row = (
                self.session.query(models.City)
                .filter(func.lower(func.trim(models.City.name)) == normalize_name(name))
                .first()
            )
        return _to_entity(row) if row else None

    async def list_all(self) -> List[CityEntity]:
        with store_errors(self.session, "List cities"):
            rows = self.session.query(models.City).order_by(models.City.name).all()
        return [_to_entity(r) for r in rows]

    async def create(self, city: CityEntity) -> CityEntity:
        if not city.is_valid():
            raise ValueError("Invalid city")

        now = utc_now()
        row = models.City(
            name=city.name,
            city_slug=city.city_slug,
            country_slug=city.country_slug or "",
            is_active=city.is_active,
            content=dict(city.content),
            created_at=city.created_at or now,
            updated_at=city.updated_at or now,
        )
        with store_errors(self.session, f"Insert city '{city.city_slug}'"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        return _to_entity(row)

    async def update(self, city: CityEntity) -> CityEntity:
        with store_errors(self.session, f"Update city {city.id}"):
            row = self.session.get(models.City, city.id)
            if row is None:
                raise RecordNotFoundError(f"City {city.id} not found")
            row.name = city.name
            row.city_slug = city.city_slug
            row.country_slug = city.country_slug or ""
            row.is_active = city.is_active
            row.content = dict(city.content)
            row.updated_at = city.updated_at or utc_now()
            self.session.commit()
            self.session.refresh(row)
        return _to_entity(row)

    async def delete(self, city_id: int) -> None:
        with store_errors(self.session, f"Delete city {city_id}"):
            row = self.session.get(models.City, city_id)
            if row is None:
                raise RecordNotFoundError(f"City {city_id} not found")
            self.session.delete(row)
            self.session.commit()
