"""Catalog service.

Owns one CacheStore, the RemoteCatalog on top of it, the popularity
sampler and the favorites synchronizer, and exposes a players session
and a teams session wired to them.
"""

import logging

from sportsdeck.core import ENTITY_PLAYER, ENTITY_TEAM, Player, Team
from sportsdeck.providers.thesportsdb.constants import TARGET_SPORT
from sportsdeck.services.catalog import RemoteCatalog
from sportsdeck.services.favorites import FavoritesSynchronizer
from sportsdeck.services.listing import ListingSession, PageView
from sportsdeck.services.pagination import PAGE_SIZE
from sportsdeck.services.popularity import OFFSET_PER_BATCH, PopularitySampler, SampleResult

logger = logging.getLogger(__name__)

# Players requested from the sampler per load / "load more"
POPULAR_BATCH_SIZE = OFFSET_PER_BATCH

DEFAULT_COUNTRY = "England"


class CatalogService:
    """Players and teams listings sharing one cache and one favorites list."""

    def __init__(
        self,
        catalog: RemoteCatalog,
        sampler: PopularitySampler,
        favorites: FavoritesSynchronizer,
        page_size: int = PAGE_SIZE,
        country: str = DEFAULT_COUNTRY,
    ):
        self.catalog = catalog
        self.sampler = sampler
        self.favorites = favorites
        self._country = country
        self._league: str | None = None

        self.players = ListingSession(
            ENTITY_PLAYER,
            browse_loader=self._load_popular_players,
            search_loader=catalog.search_players,
            favorites=favorites,
            extend_loader=self._extend_popular_players,
            detail_loader=catalog.get_player_details,
            cache=catalog.cache,
            page_size=page_size,
        )
        self.teams = ListingSession(
            ENTITY_TEAM,
            browse_loader=self._load_popular_teams,
            search_loader=catalog.search_teams_by_name,
            favorites=favorites,
            detail_loader=catalog.get_team_details,
            cache=catalog.cache,
            page_size=page_size,
        )

    @property
    def league(self) -> str | None:
        """League currently browsed in the teams listing (None = popular teams)."""
        return self._league

    def session_for(self, entity_type: str) -> ListingSession:
        if entity_type == ENTITY_PLAYER:
            return self.players
        if entity_type == ENTITY_TEAM:
            return self.teams
        raise ValueError(f"Unknown entity type: {entity_type}")

    async def _load_popular_players(self) -> list[Player]:
        result = await self.sampler.get_popular_players(POPULAR_BATCH_SIZE, 0)
        if result.error is not None:
            raise result.error
        return result.players

    async def _extend_popular_players(self, batch: int) -> SampleResult:
        return await self.sampler.get_popular_players(POPULAR_BATCH_SIZE, batch * OFFSET_PER_BATCH)

    async def _load_popular_teams(self) -> list[Team]:
        return await self.catalog.get_popular_teams(TARGET_SPORT, self._country)

    async def show_league(self, league: str | None) -> PageView:
        """Switch the teams browse listing to a league, or back to popular teams."""
        self._league = league
        if league is None:
            return await self.teams.switch_browse(self._load_popular_teams)

        async def load_league() -> list[Team]:
            return await self.catalog.get_teams_by_league(league)

        return await self.teams.switch_browse(load_league)

    async def toggle_favorite(self, entity_type: str, entity_id: str) -> bool:
        """Toggle a loaded entity's favorite state.

        Raises:
            LookupError: the entity is not loaded in the session
            FavoriteConflict, NetworkError, ApiError: see FavoritesSynchronizer.toggle
        """
        entity = self.session_for(entity_type).find(entity_id)
        if entity is None:
            raise LookupError(f"{entity_type} {entity_id} is not loaded")
        return await self.favorites.toggle(entity)

    def clear_cache(self) -> None:
        """Drop cached data and the sampled feed; the league is drawn again on reload."""
        self.catalog.cache.clear()
        self.sampler.reset()
        self.players.reset_browse()

    async def close(self) -> None:
        self.players.close()
        self.teams.close()
        await self.catalog.close()
        await self.favorites.close()
