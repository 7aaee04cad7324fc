"""Shared fixtures: in-memory TheSportsDB and favorites backends.

Both fakes are served through httpx.MockTransport so the real clients,
retry loop and envelope handling run unchanged.
"""

import json
import random
from collections import defaultdict
from dataclasses import dataclass, field

import httpx
import pytest

from sportsdeck.providers.favorites.client import FavoritesClient
from sportsdeck.providers.thesportsdb.client import SportsDBClient
from sportsdeck.services import create_catalog_service
from sportsdeck.services.catalog import RemoteCatalog
from sportsdeck.utilities.cache import CacheStore

TTL = 1800.0


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakeSportsDB:
    """TheSportsDB stand-in keyed by endpoint and query parameter."""

    players_by_name: dict = field(default_factory=dict)
    player_details: dict = field(default_factory=dict)
    rosters: dict = field(default_factory=dict)
    teams_by_league: dict = field(default_factory=dict)
    teams_by_country: dict = field(default_factory=dict)
    teams_by_name: dict = field(default_factory=dict)
    team_details: dict = field(default_factory=dict)
    equipment: dict = field(default_factory=dict)
    last_events: dict = field(default_factory=dict)
    next_events: dict = field(default_factory=dict)
    lineups: dict = field(default_factory=dict)
    tables: dict = field(default_factory=dict)
    calls: list = field(default_factory=list)
    # (endpoint, param value or None for any) -> HTTP status
    failures: dict = field(default_factory=dict)
    # endpoints whose requests fail at the transport level
    offline: set = field(default_factory=set)

    # Builders

    def player(self, player_id, name, team="Arsenal", position="Forward", sport="Soccer", **extra):
        data = {
            "idPlayer": player_id,
            "strPlayer": name,
            "strTeam": team,
            "strPosition": position,
            "strSport": sport,
        }
        data.update(extra)
        return data

    def team(self, team_id, name, league="English Premier League", **extra):
        data = {"idTeam": team_id, "strTeam": name, "strLeague": league, "strSport": "Soccer"}
        data.update(extra)
        return data

    def seed_league(self, league: str, team_count: int, roster_size: int) -> list[dict]:
        """Fill a league with teams and rosters; ids are unique per league."""
        prefix = league.split()[0][:3].lower()
        teams = []
        for t in range(1, team_count + 1):
            team_id = f"{prefix}-t{t}"
            teams.append(self.team(team_id, f"{league} Team {t}", league=league))
            self.rosters[team_id] = [
                self.player(f"{team_id}-p{n}", f"Player {n} of {team_id}") for n in range(1, roster_size + 1)
            ]
        self.teams_by_league[league] = teams
        return teams

    # Transport

    def count(self, endpoint: str) -> int:
        return sum(1 for name, _ in self.calls if name == endpoint)

    def _lookup(self, endpoint: str, params: dict) -> dict:
        if endpoint == "searchplayers.php":
            return {"player": self.players_by_name.get(params["p"])}
        if endpoint == "lookupplayer.php":
            found = self.player_details.get(params["id"])
            return {"players": [found] if found else None}
        if endpoint == "lookup_all_players.php":
            return {"player": self.rosters.get(params["id"])}
        if endpoint == "search_all_teams.php":
            if "l" in params:
                return {"teams": self.teams_by_league.get(params["l"])}
            return {"teams": self.teams_by_country.get((params.get("s"), params.get("c")))}
        if endpoint == "searchteams.php":
            return {"teams": self.teams_by_name.get(params["t"])}
        if endpoint == "lookupteam.php":
            found = self.team_details.get(params["id"])
            return {"teams": [found] if found else None}
        if endpoint == "lookupequipment.php":
            return {"equipment": self.equipment.get(params["id"])}
        if endpoint == "eventslast.php":
            return {"results": self.last_events.get(params["id"])}
        if endpoint == "eventsnext.php":
            return {"events": self.next_events.get(params["id"])}
        if endpoint == "lookuplineup.php":
            return {"lineup": self.lineups.get(params["id"])}
        if endpoint == "lookuptable.php":
            return {"table": self.tables.get(params["l"])}
        raise AssertionError(f"unexpected endpoint {endpoint}")

    def handler(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.rsplit("/", 1)[-1]
        params = dict(request.url.params)
        self.calls.append((endpoint, params))

        if endpoint in self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        for value in [None, *params.values()]:
            status = self.failures.get((endpoint, value))
            if status:
                return httpx.Response(status, json={"message": f"{endpoint} failed"})
        return httpx.Response(200, json=self._lookup(endpoint, params))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@dataclass
class FakeFavoritesBackend:
    """Favorites REST backend stand-in."""

    users: dict = field(default_factory=lambda: defaultdict(dict))
    requests: list = field(default_factory=list)
    fail_status: int | None = None
    # Called with each mutating request before it is answered
    on_request: object = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.split("/api/", 1)[-1]
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, path, body))
        if self.on_request is not None and request.method != "GET":
            self.on_request(request)
        if self.fail_status:
            return httpx.Response(self.fail_status, json={"message": "favorites backend down"})

        parts = path.split("/")
        user = self.users[parts[1]]
        if request.method == "GET":
            return httpx.Response(200, json={"user_id": parts[1], "mongodb_data": user})

        kind = "favorite_players" if parts[2] == "players" else "favorite_teams"
        id_field = "player_id" if parts[2] == "players" else "team_id"
        favorites = user.setdefault(kind, [])
        if request.method == "PUT":
            favorites[:] = [f for f in favorites if f[id_field] != body[id_field]] + [body]
        elif request.method == "DELETE":
            favorites[:] = [f for f in favorites if f[id_field] != parts[3]]
        return httpx.Response(200, json={"success": True})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_store(clock) -> CacheStore:
    return CacheStore(ttl_seconds=TTL, clock=clock)


@pytest.fixture
def sportsdb() -> FakeSportsDB:
    return FakeSportsDB()


@pytest.fixture
def favorites_backend() -> FakeFavoritesBackend:
    return FakeFavoritesBackend()


@pytest.fixture
def sportsdb_client(sportsdb) -> SportsDBClient:
    return SportsDBClient(api_key="test", base_url="https://sportsdb.test/api/v1/json", retry_count=1, transport=sportsdb.transport())


@pytest.fixture
def favorites_client(favorites_backend) -> FavoritesClient:
    return FavoritesClient(base_url="https://favorites.test/api", transport=favorites_backend.transport())


@pytest.fixture
def catalog(sportsdb_client, cache_store) -> RemoteCatalog:
    return RemoteCatalog(sportsdb_client, cache_store)


@pytest.fixture
def service(sportsdb, favorites_backend, cache_store):
    return create_catalog_service(
        sportsdb_transport=sportsdb.transport(),
        favorites_transport=favorites_backend.transport(),
        cache=cache_store,
        rng=random.Random(7),
        retry_count=1,
    )
