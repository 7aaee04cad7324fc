"""User profile backend client.

Thin async client for the favorites REST service. Request and response
bodies pass through opaquely; callers only need success/failure and the
returned record.

Configuration via environment variables:
    FAVORITES_API_URL: Backend root (default: http://localhost:5001/api)
    FAVORITES_TIMEOUT: Request timeout in seconds (default: 15)
"""

import logging
import os

import httpx

from sportsdeck.utilities.http import AsyncJSONClient

logger = logging.getLogger(__name__)

FAVORITES_API_URL = os.environ.get("FAVORITES_API_URL", "http://localhost:5001/api")
FAVORITES_TIMEOUT = float(os.environ.get("FAVORITES_TIMEOUT", 15.0))


class FavoritesClient(AsyncJSONClient):
    """Favorites backend client keyed by user id."""

    name = "FAVORITES"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        retry_count: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            base_url or FAVORITES_API_URL,
            timeout=timeout if timeout is not None else FAVORITES_TIMEOUT,
            retry_count=retry_count,
            transport=transport,
        )

    async def get_user(self, user_id: str) -> dict:
        return await self.get(f"users/{user_id}")

    async def add_favorite_player(self, user_id: str, player: dict) -> dict:
        """Idempotent upsert of a favorite player."""
        return await self.request("PUT", f"users/{user_id}/players", json=player)

    async def add_favorite_team(self, user_id: str, team: dict) -> dict:
        """Idempotent upsert of a favorite team."""
        return await self.request("PUT", f"users/{user_id}/teams", json=team)

    async def remove_favorite_player(self, user_id: str, player_id: str) -> dict:
        return await self.request("DELETE", f"users/{user_id}/players/{player_id}")

    async def remove_favorite_team(self, user_id: str, team_id: str) -> dict:
        return await self.request("DELETE", f"users/{user_id}/teams/{team_id}")
