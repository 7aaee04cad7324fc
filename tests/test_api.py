"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from sportsdeck.api import create_app
from sportsdeck.providers.thesportsdb.constants import TOP_LEAGUES


@pytest.fixture
def seeded(sportsdb):
    for league in TOP_LEAGUES:
        sportsdb.seed_league(league["league"], team_count=8, roster_size=6)
    sportsdb.teams_by_country[("Soccer", "England")] = [
        sportsdb.team(str(100 + i), f"English Team {i}") for i in range(8)
    ]
    return sportsdb


@pytest.fixture
def client(service, seeded):
    with TestClient(create_app(service)) as test_client:
        yield test_client


class TestTeamsEndpoints:
    def test_popular_teams_first_page(self, client):
        response = client.get("/teams")

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "browse"
        assert data["page"] == 1
        assert len(data["items"]) == 6
        assert data["total_pages"] == 2
        assert data["has_next"] is True

    def test_next_and_previous(self, client):
        client.get("/teams")

        data = client.post("/teams/next").json()
        assert data["page"] == 2
        assert [t["id"] for t in data["items"]] == ["106", "107"]

        assert client.post("/teams/next").json()["page"] == 2
        assert client.post("/teams/previous").json()["page"] == 1

    def test_switch_league(self, client):
        client.get("/teams")

        data = client.post("/teams/league", json={"league": "Spanish La Liga"}).json()
        assert {t["league"] for t in data["items"]} == {"Spanish La Liga"}

        data = client.post("/teams/league", json={"league": None}).json()
        assert data["items"][0]["id"] == "100"

    def test_search_and_clear(self, client, seeded):
        seeded.teams_by_name["Arsenal"] = [seeded.team("133604", "Arsenal")]
        client.get("/teams")

        data = client.post("/teams/search", json={"query": "Arsenal"}).json()
        assert data["mode"] == "search"
        assert [t["name"] for t in data["items"]] == ["Arsenal"]

        data = client.post("/teams/search", json={"query": ""}).json()
        assert data["mode"] == "browse"

    def test_unknown_team_is_404(self, client):
        response = client.get("/teams/999999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_team_detail(self, client, seeded):
        seeded.team_details["100"] = seeded.team("100", "English Team 0", strStadium="Ground 0")
        client.get("/teams")

        data = client.get("/teams/100").json()
        assert data["venue"]["name"] == "Ground 0"

    def test_unloaded_team_detail_fetched_once(self, client, seeded):
        seeded.team_details["555"] = seeded.team("555", "Away Side", strStadium="Away Ground")

        data = client.get("/teams/555").json()

        assert data["venue"]["name"] == "Away Ground"
        assert seeded.count("lookupteam.php") == 1

    def test_equipment(self, client, seeded):
        seeded.equipment["100"] = [
            {"idEquipment": "1", "strSeason": "2024-2025", "strEquipment": "https://img.test/1.png", "strType": "Home"},
        ]
        data = client.get("/teams/100/equipment").json()
        assert data[0]["season"] == "2024-2025"
        assert data[0]["kits"][0]["normalized_type"] == "1st"


class TestFavoritesEndpoints:
    def test_toggle_without_login_is_401(self, client, favorites_backend):
        client.get("/teams")

        response = client.post("/teams/100/favorite")

        assert response.status_code == 401
        assert response.json() == {
            "error": "login_required",
            "message": "You must log in to manage favorites",
            "retryable": False,
        }
        assert favorites_backend.requests == []

    def test_toggle_after_login(self, client, favorites_backend):
        client.get("/teams")
        client.post("/session/login", json={"user_id": "u1"})

        response = client.post("/teams/100/favorite")

        assert response.json() == {"entity_type": "team", "entity_id": "100", "is_favorite": True}
        assert client.get("/teams").json()["items"][0]["is_favorite"] is True
        assert favorites_backend.users["u1"]["favorite_teams"][0]["team_id"] == "100"

    def test_toggle_unloaded_entity_is_404(self, client):
        client.post("/session/login", json={"user_id": "u1"})
        assert client.post("/players/nobody/favorite").status_code == 404

    def test_login_returns_favorites(self, client, favorites_backend):
        favorites_backend.users["u1"]["favorite_players"] = [{"player_id": "7"}]

        data = client.post("/session/login", json={"user_id": "u1"}).json()

        assert data["favorites"] == [{"entity_id": "7", "entity_type": "player"}]
        assert client.post("/session/logout").json() == {"status": "logged_out"}


class TestPlayersEndpoints:
    def test_popular_players(self, client):
        data = client.get("/players").json()

        assert data["mode"] == "browse"
        assert 0 < len(data["items"]) <= 6
        assert len({p["league"] for p in data["items"]}) == 1

    def test_search(self, client, seeded):
        seeded.players_by_name["Saka"] = [seeded.player("7", "Bukayo Saka")]

        data = client.post("/players/search", json={"query": "Saka"}).json()

        assert data["mode"] == "search"
        assert data["items"][0]["name"] == "Bukayo Saka"

    def test_unloaded_player_detail_fetched_once(self, client, seeded):
        seeded.player_details["7"] = seeded.player("7", "Bukayo Saka", strHeight="1.78 m")

        data = client.get("/players/7").json()

        assert data["name"] == "Bukayo Saka"
        assert data["height"] == "1.78 m"
        assert seeded.count("lookupplayer.php") == 1


class TestErrors:
    def test_upstream_failure_is_502(self, client, seeded):
        seeded.failures[("search_all_teams.php", None)] = 500

        response = client.get("/teams")

        assert response.status_code == 502
        assert response.json()["retryable"] is True

    def test_network_failure_is_503(self, client, seeded):
        seeded.offline.add("search_all_teams.php")

        response = client.get("/teams")

        assert response.status_code == 503
        assert response.json()["error"] == "network_error"


class TestCacheEndpoints:
    def test_status_and_clear(self, client):
        client.get("/teams")
        assert client.get("/cache/status").json()["entries"] == 1

        assert client.post("/cache/clear").json() == {"status": "cleared"}
        status = client.get("/cache/status").json()
        assert status["entries"] == 0
        assert status["is_valid"] is False


class TestEventsEndpoints:
    def test_lineup(self, client, seeded):
        seeded.lineups["55"] = [
            {"strPlayer": "Saka", "strTeam": "Arsenal", "intSquadNumber": "7", "strSubstitute": "No"},
            {"strPlayer": "Palmer", "strTeam": "Chelsea", "intSquadNumber": "20", "strSubstitute": "No"},
        ]

        data = client.get("/events/55/lineup", params={"home": "Arsenal", "away": "Chelsea"}).json()

        assert [e["name"] for e in data["home"]["starters"]] == ["Saka"]
        assert [e["name"] for e in data["away"]["starters"]] == ["Palmer"]
