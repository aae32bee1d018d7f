"""Repository interfaces."""
from sitecms.domain.repositories.catalogue_repository import CatalogueRepository
from sitecms.domain.repositories.city_repository import CityRepository
from sitecms.domain.repositories.country_repository import CountryRepository

__all__ = [
    "CatalogueRepository",
    "CityRepository",
    "CountryRepository",
]
