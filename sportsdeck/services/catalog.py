"""Remote sports catalog.

Cache-aware, normalizing layer over SportsDBClient. Every read checks the
shared CacheStore first, then performs one GET per request, normalizes
the payload and applies the domain filter to every player list.

NetworkError and ApiError from the client propagate unchanged.
"""

import asyncio
import logging

from sportsdeck.core import (
    CatalogError,
    Event,
    Lineup,
    Player,
    SeasonKits,
    TableRow,
    Team,
    TeamStatistics,
)
from sportsdeck.providers.thesportsdb import normalizer
from sportsdeck.providers.thesportsdb.client import SportsDBClient
from sportsdeck.providers.thesportsdb.constants import (
    DEFAULT_SEASON,
    TARGET_SPORT,
    find_top_league,
)
from sportsdeck.services.equipment import organize_kits_by_season
from sportsdeck.services.lineup import organize_lineup
from sportsdeck.services.statistics import calculate_record
from sportsdeck.utilities.cache import CacheStore, make_cache_key

logger = logging.getLogger(__name__)

# Sub-terms shorter than this are not searched on their own
MIN_SUBTERM_LENGTH = 3


def split_search_terms(query: str) -> list[str]:
    """Expand a query into up to three search terms.

    The full query always comes first. Multi-word queries add the leading
    and trailing words when longer than two characters.

    >>> split_search_terms("David Silva")
    ['David Silva', 'David', 'Silva']
    >>> split_search_terms("Jo Silva")
    ['Jo Silva', 'Silva']
    """
    query = query.strip()
    terms = [query]
    words = query.split()
    if len(words) > 1:
        for word in (words[0], words[-1]):
            if len(word) >= MIN_SUBTERM_LENGTH and word not in terms:
                terms.append(word)
    return terms


def merge_unique(batches: list[list], key=lambda item: item.id) -> list:
    """Concatenate batches keeping the first occurrence of each id."""
    seen: set[str] = set()
    merged = []
    for batch in batches:
        for item in batch:
            item_key = key(item)
            if item_key in seen:
                continue
            seen.add(item_key)
            merged.append(item)
    return merged


class RemoteCatalog:
    """Sports catalog backed by TheSportsDB.

    One instance owns one CacheStore; create separate instances for
    isolated tests rather than sharing module state.
    """

    def __init__(
        self,
        client: SportsDBClient,
        cache: CacheStore,
        sport: str = TARGET_SPORT,
    ):
        self._client = client
        self._cache = cache
        self._sport = sport

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def sport(self) -> str:
        return self._sport

    def _relevant(self, players: list[Player]) -> list[Player]:
        return [p for p in players if normalizer.is_relevant_player(p, self._sport)]

    # Players

    async def search_players(self, query: str) -> list[Player]:
        """Search players by name with multi-term fan-out.

        One concurrent request per sub-term; any failing request fails the
        whole search. Results are deduplicated by id, first term wins.
        """
        query = query.strip()
        if not query:
            return []

        cache_key = make_cache_key("player_search", query.lower())
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        terms = split_search_terms(query)
        logger.debug("[SPORTSDB] Player search terms: %s", terms)
        raw_batches = await asyncio.gather(*(self._client.search_players(t) for t in terms))

        batches = [self._relevant(normalizer.parse_players(raw)) for raw in raw_batches]
        players = merge_unique(batches)
        self._cache.set(cache_key, players)
        return players

    async def get_team_roster(self, team_id: str) -> list[Player]:
        cache_key = make_cache_key("roster", team_id)
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        raw = await self._client.lookup_roster(team_id)
        players = self._relevant(normalizer.parse_players(raw))
        self._cache.set(cache_key, players)
        return players

    async def get_player_details(self, player_id: str) -> Player | None:
        """Fetch a player's full profile.

        If the player has a team but no league badge, the league is
        back-filled from a team lookup. Back-fill failures are logged and
        ignored.
        """
        raw = await self._client.lookup_player(player_id)
        if raw is None:
            return None
        player = normalizer.parse_player(raw)
        if player is None:
            return None

        if player.team_name and not player.league_badge_url:
            try:
                teams = await self.search_teams_by_name(player.team_name)
            except CatalogError as e:
                logger.warning("[SPORTSDB] League back-fill failed for %s: %s", player.id, e)
                teams = []
            if teams and teams[0].league:
                player.league = teams[0].league
                top = find_top_league(player.league)
                if top:
                    player.league_badge_url = top["badge"]
                    player.league_id = top["league_id"]

        return player

    # Teams

    async def get_popular_teams(self, sport: str = TARGET_SPORT, country: str = "England") -> list[Team]:
        cache_key = make_cache_key("popular_teams", sport.lower(), country.lower())
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        raw = await self._client.search_teams_by_sport_and_country(sport, country)
        teams = normalizer.parse_teams(raw)
        self._cache.set(cache_key, teams)
        return teams

    async def get_teams_by_league(self, league: str) -> list[Team]:
        cache_key = make_cache_key("league", league)
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        raw = await self._client.search_teams_by_league(league)
        teams = normalizer.parse_teams(raw)
        self._cache.set(cache_key, teams)
        return teams

    async def search_teams_by_name(self, name: str) -> list[Team]:
        name = name.strip()
        if not name:
            return []

        cache_key = make_cache_key("search", name.lower())
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        raw = await self._client.search_teams(name)
        teams = normalizer.parse_teams(raw)
        self._cache.set(cache_key, teams)
        return teams

    async def get_team_details(self, team_id: str) -> Team | None:
        cache_key = make_cache_key("team", team_id)
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        raw = await self._client.lookup_team(team_id)
        team = normalizer.parse_team(raw) if raw else None
        if team:
            self._cache.set(cache_key, team)
        return team

    async def get_team_equipment(self, team_id: str) -> list[SeasonKits]:
        """Team kits grouped by season, newest season first."""
        raw = await self._client.lookup_equipment(team_id)
        kits = [k for k in (normalizer.parse_kit(item) for item in raw) if k]
        return organize_kits_by_season(kits)

    # Events

    async def get_team_events(self, team_id: str) -> list[Event]:
        """Last events of a team, most recent first."""
        cache_key = make_cache_key("events", team_id)
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        raw = await self._client.last_events(team_id)
        events = normalizer.parse_events(raw)
        events.sort(key=lambda e: e.event_date.toordinal() if e.event_date else 0, reverse=True)
        self._cache.set(cache_key, events)
        return events

    async def get_team_next_events(self, team_id: str) -> list[Event]:
        cache_key = make_cache_key("next_events", team_id)
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        raw = await self._client.next_events(team_id)
        events = normalizer.parse_events(raw)
        self._cache.set(cache_key, events)
        return events

    async def get_event_lineup(
        self,
        event_id: str,
        home_team: str | None = None,
        away_team: str | None = None,
    ) -> Lineup:
        cache_key = make_cache_key("lineup", event_id)
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        raw = await self._client.lookup_lineup(event_id)
        lineup = organize_lineup(raw, home_team, away_team)
        self._cache.set(cache_key, lineup)
        return lineup

    # Leagues and statistics

    async def get_league_table(self, league_id: str, season: str = DEFAULT_SEASON) -> list[TableRow]:
        cache_key = make_cache_key("table", league_id, season)
        cached = self._cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        raw = await self._client.lookup_table(league_id, season)
        table = [row for row in (normalizer.parse_table_row(item) for item in raw) if row]
        self._cache.set(cache_key, table)
        return table

    async def get_team_statistics(
        self,
        team_id: str,
        league: str | None = None,
        limit: int = 5,
        season: str = DEFAULT_SEASON,
    ) -> TeamStatistics:
        """Composite statistics for a team.

        Last events, next events and details are loaded concurrently and
        must all succeed. The league table is optional: it is only looked
        up for top leagues and a failure there is logged and tolerated.
        """
        last_events, next_events, team = await asyncio.gather(
            self.get_team_events(team_id),
            self.get_team_next_events(team_id),
            self.get_team_details(team_id),
        )

        table: list[TableRow] = []
        position = None
        top = find_top_league(league or (team.league if team else None))
        if top:
            try:
                table = await self.get_league_table(top["league_id"], season)
            except CatalogError as e:
                logger.warning("[SPORTSDB] League table unavailable for %s: %s", top["league"], e)
            position = next((row for row in table if row.team_id == team_id), None)

        return TeamStatistics(
            team=team,
            record=calculate_record(team_id, last_events),
            last_events=last_events[:limit],
            next_events=next_events[:limit],
            league_table=table,
            table_position=position,
        )

    async def close(self) -> None:
        await self._client.close()
