"""Favorites synchronization.

Keeps the authenticated user's favorites in memory and mirrors every
successful toggle into all registered listings (browse pages, search
pages and the open detail view).

Membership is a linear scan over the favorites list; user favorites are
small enough that an index by id is not worth keeping in sync.

No optimistic updates: local state changes only after the backend
confirms the add/remove.
"""

import logging
from typing import Protocol

from sportsdeck.core import ENTITY_PLAYER, ENTITY_TEAM, FavoriteConflict, FavoriteRef, Player, Team
from sportsdeck.providers.favorites.client import FavoritesClient
from sportsdeck.providers.thesportsdb import normalizer

logger = logging.getLogger(__name__)


class FavoriteAware(Protocol):
    """Anything holding entities whose favorite flag must follow toggles."""

    def apply_favorite(self, entity_type: str, entity_id: str, value: bool) -> int: ...

    def resync_favorites(self) -> None: ...


def favorite_snapshot(entity: Player | Team) -> dict:
    """Display payload stored by the favorites backend."""
    if entity.entity_type == ENTITY_PLAYER:
        return {
            "player_id": entity.id,
            "player_name": entity.name,
            "team_name": entity.team_name,
            "player_thumb": normalizer.player_thumb_url(entity),
        }
    return {
        "team_id": entity.id,
        "team_name": entity.name,
        "team_badge": normalizer.team_badge_url(entity),
        "team_league": entity.league,
    }


def refs_from_user(record: dict) -> list[FavoriteRef]:
    """Build FavoriteRefs from a backend user record.

    Favorites may sit at the top level or under 'mongodb_data'.
    """
    data = record.get("mongodb_data") or record
    refs = []
    for item in data.get("favorite_players") or []:
        if item.get("player_id"):
            refs.append(FavoriteRef(str(item["player_id"]), ENTITY_PLAYER, dict(item)))
    for item in data.get("favorite_teams") or []:
        if item.get("team_id"):
            refs.append(FavoriteRef(str(item["team_id"]), ENTITY_TEAM, dict(item)))
    return refs


class FavoritesSynchronizer:
    """In-memory favorites of one user plus propagation to listings."""

    def __init__(self, client: FavoritesClient):
        self._client = client
        self._user_id: str | None = None
        self._favorites: list[FavoriteRef] = []
        self._listings: list[FavoriteAware] = []

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def is_authenticated(self) -> bool:
        return self._user_id is not None

    @property
    def favorites(self) -> list[FavoriteRef]:
        return list(self._favorites)

    def register(self, listing: FavoriteAware) -> None:
        if listing not in self._listings:
            self._listings.append(listing)

    def unregister(self, listing: FavoriteAware) -> None:
        if listing in self._listings:
            self._listings.remove(listing)

    def set_user(self, user_id: str, record: dict | None = None) -> None:
        """Adopt an already-fetched user record."""
        self._user_id = user_id
        self._favorites = refs_from_user(record or {})
        self._resync_listings()
        logger.info("[FAVORITES] User %s has %d favorites", user_id, len(self._favorites))

    async def login(self, user_id: str) -> list[FavoriteRef]:
        """Fetch the user's record and load their favorites."""
        record = await self._client.get_user(user_id)
        self.set_user(user_id, record)
        return self.favorites

    def logout(self) -> None:
        self._user_id = None
        self._favorites = []
        self._resync_listings()

    def is_favorite(self, entity_id: str, entity_type: str | None = None) -> bool:
        for ref in self._favorites:
            if ref.entity_id == entity_id and (entity_type is None or ref.entity_type == entity_type):
                return True
        return False

    def annotate(self, entities: list) -> list:
        """Set is_favorite on each entity from the current favorites."""
        for entity in entities:
            entity.is_favorite = self.is_favorite(entity.id, entity.entity_type)
        return entities

    def _resync_listings(self) -> None:
        for listing in self._listings:
            listing.resync_favorites()

    def _propagate(self, entity_type: str, entity_id: str, value: bool) -> int:
        updated = 0
        for listing in self._listings:
            updated += listing.apply_favorite(entity_type, entity_id, value)
        return updated

    async def toggle(self, entity: Player | Team) -> bool:
        """Add or remove an entity from favorites.

        Returns:
            The new favorite state

        Raises:
            FavoriteConflict: no authenticated user (no request is made)
            NetworkError, ApiError: backend failure; local state untouched
        """
        if self._user_id is None:
            raise FavoriteConflict()

        entity_type = entity.entity_type
        currently = self.is_favorite(entity.id, entity_type)

        if currently:
            if entity_type == ENTITY_PLAYER:
                await self._client.remove_favorite_player(self._user_id, entity.id)
            else:
                await self._client.remove_favorite_team(self._user_id, entity.id)
            self._favorites = [
                ref
                for ref in self._favorites
                if not (ref.entity_id == entity.id and ref.entity_type == entity_type)
            ]
        else:
            snapshot = favorite_snapshot(entity)
            if entity_type == ENTITY_PLAYER:
                await self._client.add_favorite_player(self._user_id, snapshot)
            else:
                await self._client.add_favorite_team(self._user_id, snapshot)
            self._favorites.append(FavoriteRef(entity.id, entity_type, snapshot))

        new_state = not currently
        entity.is_favorite = new_state
        updated = self._propagate(entity_type, entity.id, new_state)
        logger.info(
            "[FAVORITES] %s %s %s (%d cached copies updated)",
            "Added" if new_state else "Removed",
            entity_type,
            entity.id,
            updated,
        )
        return new_state

    async def close(self) -> None:
        await self._client.close()
