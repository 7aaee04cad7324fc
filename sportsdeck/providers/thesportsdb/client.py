"""TheSportsDB API HTTP client.

Handles raw HTTP requests to TheSportsDB v1 JSON endpoints. Each method
performs exactly one GET and returns the named envelope field as raw
dicts. No caching and no normalization here.

A missing or null envelope field is tolerated and returned as an empty
list (the API answers {"player": null} when nothing matches).

Configuration via environment variables:
    SPORTSDB_BASE_URL: API root (default: https://www.thesportsdb.com/api/v1/json)
    SPORTSDB_API_KEY: API key path segment
    SPORTSDB_TIMEOUT: Request timeout in seconds (default: 15)
    SPORTSDB_RETRY_COUNT: Number of attempts per request (default: 3)
"""

import logging
import os

import httpx

from sportsdeck.providers.thesportsdb import constants as c
from sportsdeck.utilities.http import AsyncJSONClient

logger = logging.getLogger(__name__)

SPORTSDB_BASE_URL = os.environ.get("SPORTSDB_BASE_URL", "https://www.thesportsdb.com/api/v1/json")
SPORTSDB_API_KEY = os.environ.get("SPORTSDB_API_KEY", "3")
SPORTSDB_TIMEOUT = float(os.environ.get("SPORTSDB_TIMEOUT", 15.0))
SPORTSDB_RETRY_COUNT = int(os.environ.get("SPORTSDB_RETRY_COUNT", 3))


def extract_list(data: dict, field: str) -> list[dict]:
    """Pull a list field out of a response envelope, defaulting to []."""
    value = data.get(field)
    if value is None:
        logger.debug("[SPORTSDB] Envelope field '%s' missing or null", field)
        return []
    if not isinstance(value, list):
        logger.warning("[SPORTSDB] Envelope field '%s' is %s, not a list", field, type(value).__name__)
        return []
    return [item for item in value if isinstance(item, dict)]


class SportsDBClient(AsyncJSONClient):
    """Low-level TheSportsDB client."""

    name = "SPORTSDB"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        retry_count: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        root = (base_url or SPORTSDB_BASE_URL).rstrip("/")
        super().__init__(
            f"{root}/{api_key or SPORTSDB_API_KEY}",
            timeout=timeout if timeout is not None else SPORTSDB_TIMEOUT,
            retry_count=retry_count if retry_count is not None else SPORTSDB_RETRY_COUNT,
            transport=transport,
        )

    async def _get_list(self, path: str, params: dict, field: str) -> list[dict]:
        data = await self.get(path, params)
        return extract_list(data, field)

    async def search_players(self, name: str) -> list[dict]:
        return await self._get_list(c.PATH_SEARCH_PLAYERS, {"p": name}, "player")

    async def lookup_roster(self, team_id: str) -> list[dict]:
        return await self._get_list(c.PATH_LOOKUP_ROSTER, {"id": team_id}, "player")

    async def lookup_player(self, player_id: str) -> dict | None:
        players = await self._get_list(c.PATH_LOOKUP_PLAYER, {"id": player_id}, "players")
        return players[0] if players else None

    async def search_teams_by_sport_and_country(self, sport: str, country: str) -> list[dict]:
        return await self._get_list(c.PATH_SEARCH_ALL_TEAMS, {"s": sport, "c": country}, "teams")

    async def search_teams_by_league(self, league: str) -> list[dict]:
        return await self._get_list(c.PATH_SEARCH_ALL_TEAMS, {"l": league}, "teams")

    async def search_teams(self, name: str) -> list[dict]:
        return await self._get_list(c.PATH_SEARCH_TEAMS, {"t": name}, "teams")

    async def lookup_team(self, team_id: str) -> dict | None:
        teams = await self._get_list(c.PATH_LOOKUP_TEAM, {"id": team_id}, "teams")
        return teams[0] if teams else None

    async def lookup_equipment(self, team_id: str) -> list[dict]:
        return await self._get_list(c.PATH_LOOKUP_EQUIPMENT, {"id": team_id}, "equipment")

    async def last_events(self, team_id: str) -> list[dict]:
        return await self._get_list(c.PATH_LAST_EVENTS, {"id": team_id}, "results")

    async def next_events(self, team_id: str) -> list[dict]:
        return await self._get_list(c.PATH_NEXT_EVENTS, {"id": team_id}, "events")

    async def lookup_lineup(self, event_id: str) -> list[dict]:
        return await self._get_list(c.PATH_LOOKUP_LINEUP, {"id": event_id}, "lineup")

    async def lookup_table(self, league_id: str, season: str) -> list[dict]:
        return await self._get_list(c.PATH_LOOKUP_TABLE, {"l": league_id, "s": season}, "table")
