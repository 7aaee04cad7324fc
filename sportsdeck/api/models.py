"""Pydantic models for API requests and responses."""

from datetime import date

from pydantic import BaseModel, ConfigDict

# =============================================================================
# Entities
# =============================================================================


class PlayerModel(BaseModel):
    """A player in a listing or detail view."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    team_name: str | None = None
    team_id: str | None = None
    position: str | None = None
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


class VenueModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    location: str | None = None
    capacity: int | None = None


class TeamModel(BaseModel):
    """A team in a listing or detail view."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    short_name: str | None = None
    badge_url: str | None = None
    league: str | None = None
    league_id: str | None = None
    country: str | None = None
    formed_year: str | None = None
    website: str | None = None
    venue: VenueModel | None = None
    descriptions: dict[str, str] = {}
    is_favorite: bool = False


class EventModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


# =============================================================================
# Pages
# =============================================================================


class PlayerPage(BaseModel):
    """One page of the players listing."""

    model_config = ConfigDict(from_attributes=True)

    mode: str
    page: int
    items: list[PlayerModel]
    total_pages: int
    total_items: int
    has_next: bool
    has_previous: bool
    query: str = ""
    exhausted: bool = False


class TeamPage(BaseModel):
    """One page of the teams listing."""

    model_config = ConfigDict(from_attributes=True)

    mode: str
    page: int
    items: list[TeamModel]
    total_pages: int
    total_items: int
    has_next: bool
    has_previous: bool
    query: str = ""
    exhausted: bool = False


# =============================================================================
# Team extras
# =============================================================================


class LineupEntryModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    player_id: str | None
    name: str
    position: str = ""
    number: str = ""
    team: str = ""
    formation: str = ""
    substitute: bool = False


class TeamLineupModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    starters: list[LineupEntryModel]
    substitutes: list[LineupEntryModel]


class LineupModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    home: TeamLineupModel
    away: TeamLineupModel


class KitModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    image_url: str
    kit_type: str
    normalized_type: str


class SeasonKitsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    season: str
    kits: list[KitModel]


class TableRowModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class TeamRecordModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    played: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    goal_difference: int


class TeamStatisticsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    team: TeamModel | None
    record: TeamRecordModel
    last_events: list[EventModel]
    next_events: list[EventModel]
    league_table: list[TableRowModel]
    table_position: TableRowModel | None = None


# =============================================================================
# Requests
# =============================================================================


class SearchRequest(BaseModel):
    """Free-text search; an empty query returns to the browse listing."""

    query: str = ""


class LeagueRequest(BaseModel):
    """League to browse in the teams listing; None returns to popular teams."""

    league: str | None = None


class LoginRequest(BaseModel):
    user_id: str


# =============================================================================
# Misc responses
# =============================================================================


class FavoriteResponse(BaseModel):
    entity_type: str
    entity_id: str
    is_favorite: bool


class ErrorResponse(BaseModel):
    """Error body; retryable tells the client whether to offer a retry action."""

    error: str
    message: str
    retryable: bool = False
