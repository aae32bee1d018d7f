"""SQLAlchemy models for the CMS tables."""
from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    DateTime,
    JSON,
)

from sitecms.infrastructure.persistence.db import Base


class City(Base):
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    city_slug = Column(String(255), unique=True, nullable=False, index=True)
    # Soft reference to countries.slug; kept in sync by the coordinator
    country_slug = Column(String(255), nullable=False, default="", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    content = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)


class Country(Base):
    __tablename__ = "countries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    # JSON array of city slugs
    selected_cities = Column(JSON, nullable=False, default=list)
    content = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)


class GlobalLocations(Base):
    __tablename__ = "global_locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    cities = Column(JSON, nullable=False, default=list)
    countries = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime)


class TradeShowsPage(Base):
    __tablename__ = "trade_shows_page"

    id = Column(Integer, primary_key=True, autoincrement=True)
    cities = Column(JSON, nullable=False, default=list)
    countries = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    content = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime)
