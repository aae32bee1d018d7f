"""Tests for removing a deleted city's slug from countries."""
import pytest
from unittest.mock import AsyncMock

from sitecms.application.services.country_reference_cleaner import CountryReferenceCleaner
from sitecms.domain.entities.country import Country
from sitecms.domain.errors import RecordStoreError


def _country(country_id, slug, selected):
    return Country(id=country_id, slug=slug, name=slug.title(), selected_cities=list(selected))


class TestCountryReferenceCleaner:
    """Test the best-effort broadcast cleanup."""

    @pytest.mark.asyncio
    async def test_removes_slug_from_every_referencing_country(self, make_country, country_repo):
        await make_country("France", ["lyon", "paris"])
        await make_country("Belgium", ["lyon"])
        await make_country("Spain", ["madrid"])

        report = await CountryReferenceCleaner(country_repo).remove_city_slug_from_all_countries("lyon")

        assert report.complete
        assert len(report.updated) == 2
        for country in await country_repo.list_all():
            assert "lyon" not in country.selected_cities
        spain = [c for c in await country_repo.list_all() if c.name == "Spain"][0]
        assert spain.selected_cities == ["madrid"]

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_the_others(self):
        repo = AsyncMock()
        repo.list_all.return_value = [
            _country(1, "france", ["lyon"]),
            _country(2, "belgium", ["lyon"]),
            _country(3, "spain", ["lyon"]),
        ]
        repo.update.side_effect = [None, RecordStoreError("timeout"), None]

        report = await CountryReferenceCleaner(repo).remove_city_slug_from_all_countries("lyon")

        assert report.ok
        assert not report.complete
        assert report.updated == ["france", "spain"]
        assert list(report.failed) == ["belgium"]
        assert repo.update.await_count == 3

    @pytest.mark.asyncio
    async def test_list_failure_reports_not_ok(self):
        repo = AsyncMock()
        repo.list_all.side_effect = RecordStoreError("connection refused")

        report = await CountryReferenceCleaner(repo).remove_city_slug_from_all_countries("lyon")

        assert not report.ok
        assert "connection refused" in report.error
        repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_reference_means_no_writes(self):
        repo = AsyncMock()
        repo.list_all.return_value = [_country(1, "spain", ["madrid"])]

        report = await CountryReferenceCleaner(repo).remove_city_slug_from_all_countries("lyon")

        assert report.complete
        assert report.updated == []
        repo.update.assert_not_awaited()
