"""Core data types.

Normalized dataclasses for everything the catalog hands out. Providers
translate raw API payloads into these; services and the API layer never
touch provider-specific field names.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

ENTITY_PLAYER = "player"
ENTITY_TEAM = "team"


@dataclass
class Venue:
    """Stadium metadata attached to a team."""

    name: str
    location: str | None = None
    capacity: int | None = None


@dataclass
class Player:
    """A player as shown in listings and the detail view.

    popularity_score is recomputed on every sampling pass and never persisted.
    is_favorite is derived from the user's favorites list; it is a display
    flag, not the source of truth.
    """

    id: str
    name: str
    team_name: str | None = None
    team_id: str | None = None
    position: str | None = None
    sport: str | None = None
    nationality: str | None = None
    thumb_url: str | None = None
    league: str | None = None
    league_id: str | None = None
    league_badge_url: str | None = None
    height: str | None = None
    weight: str | None = None
    birth_date: str | None = None
    description: str | None = None
    popularity_score: float | None = None
    is_favorite: bool = False

    @property
    def entity_type(self) -> str:
        return ENTITY_PLAYER


@dataclass
class Team:
    """A team with league and stadium metadata."""

    id: str
    name: str
    short_name: str | None = None
    badge_url: str | None = None
    league: str | None = None
    league_id: str | None = None
    sport: str | None = None
    country: str | None = None
    formed_year: str | None = None
    website: str | None = None
    venue: Venue | None = None
    # Language code (e.g. 'en', 'es') -> description
    descriptions: dict[str, str] = field(default_factory=dict)
    is_favorite: bool = False

    @property
    def entity_type(self) -> str:
        return ENTITY_TEAM

    def description(self, language: str = "en") -> str | None:
        """Description in the requested language, falling back to English."""
        return self.descriptions.get(language) or self.descriptions.get("en")


@dataclass
class Event:
    """A fixture or result between two teams."""

    id: str
    name: str
    home_team: str | None = None
    away_team: str | None = None
    home_team_id: str | None = None
    away_team_id: str | None = None
    home_score: int | None = None
    away_score: int | None = None
    event_date: date | None = None
    event_time: str | None = None
    league: str | None = None
    season: str | None = None
    venue: str | None = None

    @property
    def is_finished(self) -> bool:
        return self.home_score is not None and self.away_score is not None


@dataclass
class LineupEntry:
    """One player line of a match lineup."""

    player_id: str | None
    name: str
    position: str = ""
    number: str = ""
    team: str = ""
    formation: str = ""
    substitute: bool = False


@dataclass
class TeamLineup:
    starters: list[LineupEntry] = field(default_factory=list)
    substitutes: list[LineupEntry] = field(default_factory=list)


@dataclass
class Lineup:
    """Lineup of an event, split by side."""

    home: TeamLineup = field(default_factory=TeamLineup)
    away: TeamLineup = field(default_factory=TeamLineup)


@dataclass
class Kit:
    """One equipment (kit) image for a season."""

    id: str
    season: str
    image_url: str
    kit_type: str
    normalized_type: str
    date: datetime | None = None


@dataclass
class SeasonKits:
    season: str
    kits: list[Kit] = field(default_factory=list)


@dataclass
class TableRow:
    """A league table standing."""

    team_id: str
    team_name: str
    rank: int | None = None
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0


@dataclass
class TeamRecord:
    """Aggregated results computed from a team's finished events."""

    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against


@dataclass
class TeamStatistics:
    """Composite statistics view for one team."""

    team: Team | None
    record: TeamRecord
    last_events: list[Event] = field(default_factory=list)
    next_events: list[Event] = field(default_factory=list)
    league_table: list[TableRow] = field(default_factory=list)
    table_position: TableRow | None = None


@dataclass
class FavoriteRef:
    """A user's bookmark on a player or team.

    snapshot is the display payload sent to the favorites backend.
    """

    entity_id: str
    entity_type: str
    snapshot: dict = field(default_factory=dict)
