"""Database initialization - runs on backend startup."""
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from sitecms.infrastructure.persistence import models
from sitecms.infrastructure.persistence.db import Base, SessionLocal, engine as default_engine
from sitecms.domain.value_objects.timestamps import utc_now

logger = logging.getLogger(__name__)


def seed_singletons(session: Session) -> None:
    """Insert the GlobalLocations and TradeShowsPage rows when missing."""
    now = utc_now()
    if session.query(models.GlobalLocations).first() is None:
        session.add(models.GlobalLocations(cities=[], countries=[], updated_at=now))
        logger.info("Seeded empty global_locations row")
    if session.query(models.TradeShowsPage).first() is None:
        session.add(models.TradeShowsPage(cities=[], countries=[], is_active=True, content={}, updated_at=now))
        logger.info("Seeded empty trade_shows_page row")
    session.commit()


def initialize_database(engine: Engine = None) -> bool:
    """Create every table and the two singleton rows.

    Safe to run on each startup: existing tables and rows are left alone.
    """
    engine = engine or default_engine
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        return False

    session = SessionLocal(bind=engine)
    try:
        seed_singletons(session)
        logger.info("Database schema initialized successfully")
        return True
    except Exception as e:
        logger.error(f"Error seeding singleton rows: {e}")
        session.rollback()
        return False
    finally:
        session.close()
