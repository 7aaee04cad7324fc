"""Popular players feed.

The API has no popularity ranking or offset pagination, so the feed is
synthesized by sampling one of the top leagues and a handful of its team
rosters:

- offset 0: pick a league at random and commit to it for the session,
  then pick 3-5 of its teams at random (without replacement)
- offset > 0: reuse the committed league and walk its teams in fixed
  batches of 5; batch index is offset // 30

Callers must request offsets that are multiples of 30 (the players
listing passes batch number * 30). Arbitrary offsets are not mapped to
anything more precise than the batch index. An offset > 0 without a
committed league (after reset()) reports exhaustion instead of drawing a
new league.

Every call returns a SampleResult instead of raising, so "no more teams"
and "the roster batch failed" are distinguishable.
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field, replace

from sportsdeck.core import CatalogError, Player, Team
from sportsdeck.providers.thesportsdb.constants import TOP_LEAGUES
from sportsdeck.services.catalog import RemoteCatalog, merge_unique

logger = logging.getLogger(__name__)

TEAMS_PER_BATCH = 5
OFFSET_PER_BATCH = 30
MIN_INITIAL_TEAMS = 3
MAX_INITIAL_TEAMS = 5

# Ordering key: SCORE_WEIGHT * score + JITTER_WEIGHT * random()
SCORE_WEIGHT = 0.7
JITTER_WEIGHT = 0.3

SAMPLE_OK = "ok"
SAMPLE_EXHAUSTED = "exhausted"
SAMPLE_ERROR = "error"


@dataclass
class SampleResult:
    """Outcome of one sampling call."""

    status: str
    players: list[Player] = field(default_factory=list)
    league: str | None = None
    error: CatalogError | None = None

    @property
    def ok(self) -> bool:
        return self.status == SAMPLE_OK

    @property
    def exhausted(self) -> bool:
        return self.status == SAMPLE_EXHAUSTED


class PopularitySampler:
    """Builds and extends the popular players feed.

    Results of successive calls accumulate in `players`. Pass a seeded
    random.Random for reproducible league, team and ordering choices.
    """

    def __init__(
        self,
        catalog: RemoteCatalog,
        rng: random.Random | None = None,
        leagues: tuple[dict, ...] = TOP_LEAGUES,
    ):
        self._catalog = catalog
        self._rng = rng or random.Random()
        self._leagues = leagues
        self._league: dict | None = None
        self._players: list[Player] = []

    @property
    def league(self) -> dict | None:
        """League committed to for the current session."""
        return self._league

    @property
    def players(self) -> list[Player]:
        return list(self._players)

    def reset(self) -> None:
        self._league = None
        self._players = []

    def _select_league(self, offset: int) -> dict | None:
        """League for this call; None when extending without a committed league."""
        if offset > 0:
            return self._league
        self._league = self._rng.choice(self._leagues)
        return self._league

    def _select_teams(self, teams: list[Team], offset: int) -> list[Team]:
        if offset > 0:
            processed = (offset // OFFSET_PER_BATCH) * TEAMS_PER_BATCH
            return teams[processed : processed + TEAMS_PER_BATCH]

        count = self._rng.randint(MIN_INITIAL_TEAMS, MAX_INITIAL_TEAMS)
        return self._rng.sample(teams, min(count, len(teams)))

    def _score(self, teams: list[Team], rosters: list[list[Player]], league: dict) -> list[Player]:
        """Tag roster players with team/league data and order by score.

        Earlier roster entries score higher. The jitter keeps the feed from
        showing the same static top-N every session.
        """
        scored = []
        for team, roster in zip(teams, rosters):
            size = len(roster)
            for position, player in enumerate(roster):
                tagged = replace(
                    player,
                    team_name=team.name,
                    team_id=team.id,
                    league=league["league"],
                    league_id=league["league_id"],
                    league_badge_url=league["badge"],
                    popularity_score=float(size - position),
                    is_favorite=False,
                )
                order = SCORE_WEIGHT * tagged.popularity_score + JITTER_WEIGHT * self._rng.random()
                scored.append((order, tagged))

        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [player for _, player in scored]

    async def get_popular_players(self, limit: int = 20, offset: int = 0) -> SampleResult:
        """Return up to `limit` popular players starting at `offset`.

        At offset 0 a still-fresh previous session is served from memory.
        """
        if offset == 0 and self._players and self._catalog.cache.is_valid():
            logger.debug("[POPULAR] Serving %d cached players", len(self._players))
            return SampleResult(
                status=SAMPLE_OK,
                players=self._players[:limit],
                league=self._league["league"] if self._league else None,
            )

        if offset == 0:
            self._players = []

        league = self._select_league(offset)
        if league is None:
            logger.warning("[POPULAR] No committed league for offset %d; start again from offset 0", offset)
            return SampleResult(status=SAMPLE_EXHAUSTED)
        logger.info("[POPULAR] Sampling %s (offset %d)", league["league"], offset)

        try:
            teams = await self._catalog.get_teams_by_league(league["league"])
        except CatalogError as e:
            logger.error("[POPULAR] Failed to load teams for %s: %s", league["league"], e)
            return SampleResult(status=SAMPLE_ERROR, league=league["league"], error=e)

        selected = self._select_teams(teams, offset)
        if not selected:
            logger.info("[POPULAR] %s exhausted at offset %d", league["league"], offset)
            return SampleResult(status=SAMPLE_EXHAUSTED, league=league["league"])

        logger.info("[POPULAR] Selected %d teams", len(selected))
        try:
            rosters = await asyncio.gather(
                *(self._catalog.get_team_roster(team.id) for team in selected)
            )
        except CatalogError as e:
            logger.error("[POPULAR] Roster batch failed for %s: %s", league["league"], e)
            return SampleResult(status=SAMPLE_ERROR, league=league["league"], error=e)

        players = self._score(selected, rosters, league)
        self._players = merge_unique([self._players, players])

        return SampleResult(status=SAMPLE_OK, players=players[:limit], league=league["league"])
