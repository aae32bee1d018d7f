"""SQLAlchemy implementation of CatalogueRepository."""
from typing import Optional
from sqlalchemy.orm import Session
from sitecms.domain.entities.catalogue import GlobalLocations, TradeShowsPage
from sitecms.domain.errors import RecordNotFoundError
from sitecms.domain.repositories.catalogue_repository import CatalogueRepository
from sitecms.infrastructure.persistence import models
from sitecms.infrastructure.persistence.db import store_errors
from sitecms.domain.value_objects.timestamps import utc_now


class SQLAlchemyCatalogueRepository(CatalogueRepository):
    """Reads the first row of each singleton table, as the admin console does."""

    def __init__(self, session: Session):
        self.session = session

    async def get_global_locations(self) -> Optional[GlobalLocations]:
        with store_errors(self.session, "Fetch global locations"):
            row = self.session.query(models.GlobalLocations).order_by(models.GlobalLocations.id).first()
        if row is None:
            return None
        return GlobalLocations(
            id=row.id,
            cities=list(row.cities or []),
            countries=list(row.countries or []),
            updated_at=row.updated_at,
        )

    async def save_global_locations(self, document: GlobalLocations) -> GlobalLocations:
        with store_errors(self.session, "Update global locations"):
            row = self.session.get(models.GlobalLocations, document.id)
            if row is None:
                raise RecordNotFoundError(f"Global locations row {document.id} not found")
            row.cities = list(document.cities)
            row.countries = list(document.countries)
            row.updated_at = utc_now()
            self.session.commit()
            self.session.refresh(row)
        document.updated_at = row.updated_at
        return document

    async def get_trade_shows_page(self) -> Optional[TradeShowsPage]:
        with store_errors(self.session, "Fetch trade shows page"):
            row = self.session.query(models.TradeShowsPage).order_by(models.TradeShowsPage.id).first()
        if row is None:
            return None
        return TradeShowsPage(
            id=row.id,
            cities=list(row.cities or []),
            countries=list(row.countries or []),
            is_active=bool(row.is_active),
            content=dict(row.content or {}),
            updated_at=row.updated_at,
        )

    async def save_trade_shows_page(self, document: TradeShowsPage) -> TradeShowsPage:
        with store_errors(self.session, "Update trade shows page"):
            row = self.session.get(models.TradeShowsPage, document.id)
            if row is None:
                raise RecordNotFoundError(f"Trade shows page row {document.id} not found")
            row.cities = list(document.cities)
            row.countries = list(document.countries)
            row.is_active = document.is_active
            row.content = dict(document.content)
            row.updated_at = utc_now()
            self.session.commit()
            self.session.refresh(row)
        document.updated_at = row.updated_at
        return document
