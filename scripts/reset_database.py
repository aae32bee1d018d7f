#!/usr/bin/env python3
"""Reset the CMS tables to an empty console."""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sitecms.core.database_init import seed_singletons
from sitecms.infrastructure.persistence.db import SessionLocal
from sitecms.infrastructure.persistence import models
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def reset_database():
    """Delete every city and country and empty the catalogue documents."""
    session = SessionLocal()
    try:
        logger.info("Resetting database...")

        logger.info("Deleting cities...")
        session.query(models.City).delete()

        logger.info("Deleting countries...")
        session.query(models.Country).delete()

        logger.info("Deleting catalogue documents...")
        session.query(models.GlobalLocations).delete()
        session.query(models.TradeShowsPage).delete()

        session.commit()
        seed_singletons(session)
        logger.info("✓ Database reset complete - empty catalogues re-created")

    except Exception as e:
        session.rollback()
        logger.error(f"✗ Failed to reset database: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    confirm = input("⚠️  This will DELETE all cities, countries and catalogues. Continue? (yes/no): ")
    if confirm.lower() == "yes":
        reset_database()
    else:
        logger.info("Reset cancelled")
