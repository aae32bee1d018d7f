"""API tests through the FastAPI test client and an in-memory SQLite database."""
import pytest

FRANCE = "exhibition-stand-builder-france"
BELGIUM = "exhibition-stand-builder-belgium"
LYON = "exhibition-stand-builder-lyon"


def create_country(client, name, **extra):
    response = client.post("/api/v1/countries", json={"name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def create_city(client, name, country_slug=""):
    response = client.post("/api/v1/cities", json={"name": name, "country_slug": country_slug})
    assert response.status_code == 201, response.text
    return response.json()["city"]


@pytest.mark.integration
class TestHealth:

    def test_health_endpoints(self, client):
        assert client.get("/health").json() == {"status": "ok"}
        assert client.get("/api/v1/health").json() == {"status": "ok"}


@pytest.mark.integration
class TestCityEndpoints:
    """Test the city routes end to end."""

    def test_create_city_fans_out(self, client, api_notifier, sample_city_payload):
        create_country(client, "France")

        response = client.post("/api/v1/cities", json=sample_city_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["warnings"] == []
        assert body["city"]["city_slug"] == LYON
        assert body["city"]["content"] == sample_city_payload["content"]

        france = client.get("/api/v1/countries").json()[0]
        assert france["selected_cities"] == [LYON]
        names = client.get("/api/v1/catalogues/global_locations.cities").json()["names"]
        assert names == ["Lyon"]
        assert f"/{FRANCE}/{LYON}" in api_notifier.paths

    def test_duplicate_city_is_conflict(self, client):
        create_city(client, "Lyon")

        response = client.post("/api/v1/cities", json={"name": "LYON"})

        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "duplicate_city"

    def test_blank_name_is_unprocessable(self, client):
        assert client.post("/api/v1/cities", json={"name": ""}).status_code == 422
        assert client.post("/api/v1/cities", json={"name": "???"}).status_code == 422

    def test_missing_country_is_reported_as_warning(self, client):
        response = client.post("/api/v1/cities", json={"name": "Lyon", "country_slug": FRANCE})

        assert response.status_code == 201
        assert len(response.json()["warnings"]) == 1

    def test_availability(self, client):
        city = create_city(client, "Lyon")

        taken = client.get("/api/v1/cities/availability", params={"name": "lyon"}).json()
        assert taken["available"] is False
        assert taken["conflicting_id"] == city["id"]

        assert client.get("/api/v1/cities/availability", params={"name": "Paris"}).json()["available"]
        own = client.get("/api/v1/cities/availability", params={"name": "Lyon", "exclude_id": city["id"]})
        assert own.json()["available"]

    def test_list_and_get(self, client):
        create_country(client, "France")
        create_city(client, "Paris", FRANCE)
        lyon = create_city(client, "Lyon", FRANCE)
        create_city(client, "Berlin")

        assert [c["name"] for c in client.get("/api/v1/cities").json()] == ["Berlin", "Lyon", "Paris"]
        french = client.get("/api/v1/cities", params={"country_slug": FRANCE}).json()
        assert [c["name"] for c in french] == ["Lyon", "Paris"]
        assert client.get(f"/api/v1/cities/{lyon['id']}").json()["name"] == "Lyon"
        assert client.get("/api/v1/cities/999").status_code == 404

    def test_reparent(self, client):
        create_country(client, "France")
        create_country(client, "Belgium")
        lyon = create_city(client, "Lyon", FRANCE)

        response = client.put(f"/api/v1/cities/{lyon['id']}", json={"country_slug": BELGIUM})

        assert response.status_code == 200
        assert response.json()["city"]["country_slug"] == BELGIUM
        countries = {c["slug"]: c for c in client.get("/api/v1/countries").json()}
        assert countries[FRANCE]["selected_cities"] == []
        assert countries[BELGIUM]["selected_cities"] == [LYON]

    def test_reparent_to_missing_country_is_conflict(self, client):
        create_country(client, "France")
        lyon = create_city(client, "Lyon", FRANCE)

        response = client.put(f"/api/v1/cities/{lyon['id']}", json={"country_slug": BELGIUM})

        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["kind"] == "partial_sync_failure"
        assert detail["warnings"]
        assert client.get(f"/api/v1/cities/{lyon['id']}").json()["country_slug"] == FRANCE

    def test_update_unknown_city(self, client):
        response = client.put("/api/v1/cities/999", json={"name": "Ghost"})

        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "not_found"

    def test_delete_cleans_up_countries(self, client):
        create_country(client, "France")
        lyon = create_city(client, "Lyon", FRANCE)

        response = client.delete(f"/api/v1/cities/{lyon['id']}")

        assert response.status_code == 200
        assert response.json() == {"deleted": True, "warnings": []}
        assert client.get("/api/v1/countries").json()[0]["selected_cities"] == []
        assert client.delete(f"/api/v1/cities/{lyon['id']}").status_code == 404


@pytest.mark.integration
class TestCountryEndpoints:
    """Test direct country maintenance."""

    def test_create_country_derives_slug_and_revalidates(self, client, api_notifier):
        country = create_country(client, "France")

        assert country["slug"] == FRANCE
        assert country["is_active"] is True
        assert f"/{FRANCE}" in api_notifier.paths

    def test_duplicate_country_is_conflict(self, client):
        create_country(client, "France")

        response = client.post("/api/v1/countries", json={"name": "France"})

        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "duplicate_country"

    def test_update_keeps_slug_and_curates_selected_cities(self, client):
        country = create_country(client, "France")
        create_city(client, "Paris", FRANCE)
        create_city(client, "Lyon", FRANCE)
        paris = "exhibition-stand-builder-paris"

        response = client.put(
            f"/api/v1/countries/{country['id']}",
            json={"name": "République française", "selected_cities": [LYON, paris], "slug": "ignored"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["slug"] == FRANCE
        assert body["name"] == "République française"
        assert body["selected_cities"] == [LYON, paris]

    def test_cannot_add_city_of_another_country(self, client):
        france = create_country(client, "France")
        create_country(client, "Belgium")
        create_city(client, "Brussels", BELGIUM)

        response = client.put(
            f"/api/v1/countries/{france['id']}",
            json={"selected_cities": ["exhibition-stand-builder-brussels"]},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["kind"] == "invalid_input"

    def test_delete_country(self, client):
        country = create_country(client, "France")

        assert client.delete(f"/api/v1/countries/{country['id']}").json() == {"deleted": True}
        assert client.get(f"/api/v1/countries/{country['id']}").status_code == 404
        assert client.delete(f"/api/v1/countries/{country['id']}").status_code == 404


@pytest.mark.integration
class TestCatalogueAndRevalidationEndpoints:

    def test_add_and_remove_names(self, client):
        url = "/api/v1/catalogues/trade_shows_page.countries"

        assert client.post(url, json={"name": "France"}).json()["names"] == ["France"]
        assert client.post(url, json={"name": "FRANCE"}).json()["names"] == ["France"]
        assert client.delete(f"{url}/france").json()["names"] == []
        assert client.delete(f"{url}/france").json()["names"] == []

    def test_unknown_list_is_unprocessable(self, client):
        assert client.get("/api/v1/catalogues/nowhere.cities").status_code == 422

    def test_manual_revalidation_is_accepted(self, client, api_notifier):
        response = client.post("/api/v1/revalidate", json={"path": "/trade-shows"})

        assert response.status_code == 202
        assert response.json() == {"path": "/trade-shows", "success": True}
        assert api_notifier.paths == ["/trade-shows"]
