"""SQLAlchemy implementation of CountryRepository."""
from typing import Optional, List
from sqlalchemy.orm import Session
from sitecms.domain.entities.country import Country as CountryEntity
from sitecms.domain.errors import RecordNotFoundError
from sitecms.domain.repositories.country_repository import CountryRepository
from sitecms.infrastructure.persistence import models
from sitecms.infrastructure.persistence.db import store_errors
from sitecms.domain.value_objects.timestamps import utc_now


def _to_entity(row: models.Country) -> CountryEntity:
    # Older rows may carry a null or non-list JSON value
    selected = row.selected_cities if isinstance(row.selected_cities, list) else []
    return CountryEntity(
        id=row.id,
        slug=row.slug,
        name=row.name,
        is_active=bool(row.is_active),
        selected_cities=list(selected),
        content=dict(row.content or {}),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLAlchemyCountryRepository(CountryRepository):
    """Country repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, country_id: int) -> Optional[CountryEntity]:
        with store_errors(self.session, f"Fetch country {country_id}"):
            row = self.session.get(models.Country, country_id)
        return _to_entity(row) if row else None

    async def get_by_slug(self, slug: str) -> Optional[CountryEntity]:
        with store_errors(self.session, f"Fetch country '{slug}'"):
            row = (
                self.session.query(models.Country)
                .filter(models.Country.slug == slug)
                .first()
            )
        return _to_entity(row) if row else None

    async def list_all(self) -> List[CountryEntity]:
        with store_errors(self.session, "List countries"):
            rows = self.session.query(models.Country).order_by(models.Country.name).all()
        return [_to_entity(r) for r in rows]

    async def create(self, country: CountryEntity) -> CountryEntity:
        if not country.is_valid():
            raise ValueError("Invalid country")

        now = utc_now()
        row = models.Country(
            slug=country.slug,
            name=country.name,
            is_active=country.is_active,
            selected_cities=list(country.selected_cities),
            content=dict(country.content),
            created_at=country.created_at or now,
            updated_at=country.updated_at or now,
        )
        with store_errors(self.session, f"Insert country '{country.slug}'"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        return _to_entity(row)

    async def update(self, country: CountryEntity) -> CountryEntity:
        with store_errors(self.session, f"Update country {country.id}"):
            row = self.session.get(models.Country, country.id)
            if row is None:
                raise RecordNotFoundError(f"Country {country.id} not found")
            row.name = country.name
            row.is_active = country.is_active
            # Assign a fresh list so the JSON column is flagged dirty
            row.selected_cities = list(country.selected_cities)
            row.content = dict(country.content)
            row.updated_at = country.updated_at or utc_now()
            self.session.commit()
            self.session.refresh(row)
        return _to_entity(row)

    async def delete(self, country_id: int) -> None:
        with store_errors(self.session, f"Delete country {country_id}"):
            row = self.session.get(models.Country, country_id)
            if row is None:
                raise RecordNotFoundError(f"Country {country_id} not found")
            self.session.delete(row)
            self.session.commit()
