"""Normalize TheSportsDB payloads into core types.

TheSportsDB uses Hungarian-style keys (idPlayer, strTeam, intHomeScore)
and frequently returns empty strings or nulls for absent values; every
parser here maps those to None.
"""

import logging
from datetime import date, datetime

from sportsdeck.core import (
    Event,
    Kit,
    LineupEntry,
    Player,
    TableRow,
    Team,
    Venue,
)
from sportsdeck.providers.thesportsdb.constants import (
    DEFAULT_PLAYER_THUMB,
    DEFAULT_TEAM_BADGE,
    EXCLUDED_POSITION_TERMS,
    TARGET_SPORT,
)

logger = logging.getLogger(__name__)

# strDescriptionXX suffix -> language code
DESCRIPTION_LANGUAGES = {
    "EN": "en",
    "ES": "es",
    "DE": "de",
    "FR": "fr",
    "IT": "it",
    "PT": "pt",
    "NL": "nl",
}


def _str(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _int(value) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _date(value) -> date | None:
    text = _str(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def is_relevant_player(player: Player, sport: str = TARGET_SPORT) -> bool:
    """Domain filter: keep only playing profiles of the target sport.

    Profiles without a position are dropped; so is any position containing
    an excluded term, and any explicit sport other than the target.
    """
    if not player.position:
        return False

    position = player.position.lower()
    for term in EXCLUDED_POSITION_TERMS:
        if term.lower() in position:
            return False

    if player.sport and player.sport != sport:
        return False

    return True


def parse_player(data: dict) -> Player | None:
    """Parse a player payload. Returns None if it has no id."""
    player_id = _str(data.get("idPlayer"))
    if not player_id:
        logger.debug("[SPORTSDB] Skipping player without id: %s", data.get("strPlayer"))
        return None

    return Player(
        id=player_id,
        name=_str(data.get("strPlayer")) or "",
        team_name=_str(data.get("strTeam")),
        team_id=_str(data.get("idTeam")),
        position=_str(data.get("strPosition")),
        sport=_str(data.get("strSport")),
        nationality=_str(data.get("strNationality")),
        thumb_url=_str(data.get("strThumb")) or _str(data.get("strCutout")),
        league=_str(data.get("strLeague")),
        league_id=_str(data.get("idLeague")),
        league_badge_url=_str(data.get("strLeagueBadge")),
        height=_str(data.get("strHeight")),
        weight=_str(data.get("strWeight")),
        birth_date=_str(data.get("dateBorn")),
        description=_str(data.get("strDescriptionEN")),
    )


def parse_players(items: list[dict]) -> list[Player]:
    players = []
    for item in items:
        player = parse_player(item)
        if player:
            players.append(player)
    return players


def parse_team(data: dict) -> Team | None:
    """Parse a team payload. Returns None if it has no id."""
    team_id = _str(data.get("idTeam"))
    if not team_id:
        return None

    venue = None
    stadium = _str(data.get("strStadium")) or _str(data.get("strVenue"))
    if stadium:
        venue = Venue(
            name=stadium,
            location=_str(data.get("strStadiumLocation")) or _str(data.get("strLocation")),
            capacity=_int(data.get("intStadiumCapacity")),
        )

    descriptions = {}
    for suffix, language in DESCRIPTION_LANGUAGES.items():
        text = _str(data.get(f"strDescription{suffix}"))
        if text:
            descriptions[language] = text

    return Team(
        id=team_id,
        name=_str(data.get("strTeam")) or "",
        short_name=_str(data.get("strTeamShort")),
        badge_url=_str(data.get("strBadge")) or _str(data.get("strTeamBadge")),
        league=_str(data.get("strLeague")),
        league_id=_str(data.get("idLeague")),
        sport=_str(data.get("strSport")),
        country=_str(data.get("strCountry")),
        formed_year=_str(data.get("intFormedYear")),
        website=_str(data.get("strWebsite")),
        venue=venue,
        descriptions=descriptions,
    )


def parse_teams(items: list[dict]) -> list[Team]:
    teams = []
    for item in items:
        team = parse_team(item)
        if team:
            teams.append(team)
    return teams


def parse_event(data: dict) -> Event | None:
    event_id = _str(data.get("idEvent"))
    if not event_id:
        return None

    return Event(
        id=event_id,
        name=_str(data.get("strEvent")) or "",
        home_team=_str(data.get("strHomeTeam")),
        away_team=_str(data.get("strAwayTeam")),
        home_team_id=_str(data.get("idHomeTeam")),
        away_team_id=_str(data.get("idAwayTeam")),
        home_score=_int(data.get("intHomeScore")),
        away_score=_int(data.get("intAwayScore")),
        event_date=_date(data.get("dateEvent")),
        event_time=_str(data.get("strTime")),
        league=_str(data.get("strLeague")),
        season=_str(data.get("strSeason")),
        venue=_str(data.get("strVenue")),
    )


def parse_events(items: list[dict]) -> list[Event]:
    events = []
    for item in items:
        event = parse_event(item)
        if event:
            events.append(event)
    return events


def parse_lineup_entry(data: dict) -> LineupEntry | None:
    """Parse a lineup line. Lines without a player name are skipped."""
    name = _str(data.get("strPlayer"))
    if not name:
        return None

    return LineupEntry(
        player_id=_str(data.get("idPlayer")),
        name=name,
        position=_str(data.get("strPosition")) or "",
        number=_str(data.get("intSquadNumber")) or "",
        team=_str(data.get("strTeam")) or "",
        formation=_str(data.get("strFormation")) or "",
        substitute=data.get("strSubstitute") == "Yes",
    )


def lineup_side(data: dict) -> str | None:
    """Explicit 'home'/'away' side of a lineup line, if the API gave one."""
    for key in ("strTeamSide", "strSide", "strHome"):
        value = _str(data.get(key))
        if value in ("Home", "Yes"):
            return "home"
        if value in ("Away", "No"):
            return "away"
    return None


def parse_kit(data: dict) -> Kit | None:
    """Parse an equipment item. Items without season or image are skipped."""
    image = _str(data.get("strEquipment"))
    if not image or not _str(data.get("strSeason")):
        return None

    kit_type = _str(data.get("strType")) or ""
    kit_date = None
    raw_date = _str(data.get("date"))
    if raw_date:
        try:
            kit_date = datetime.fromisoformat(raw_date)
        except ValueError:
            kit_date = None

    return Kit(
        id=_str(data.get("idEquipment")) or "",
        season=_str(data.get("strSeason")),
        image_url=image,
        kit_type=kit_type,
        normalized_type="1st" if kit_type == "Home" else kit_type,
        date=kit_date,
    )


def parse_table_row(data: dict) -> TableRow | None:
    team_id = _str(data.get("idTeam"))
    if not team_id:
        return None

    return TableRow(
        team_id=team_id,
        team_name=_str(data.get("strTeam")) or "",
        rank=_int(data.get("intRank")),
        played=_int(data.get("intPlayed")) or 0,
        wins=_int(data.get("intWin")) or 0,
        draws=_int(data.get("intDraw")) or 0,
        losses=_int(data.get("intLoss")) or 0,
        goals_for=_int(data.get("intGoalsFor")) or 0,
        goals_against=_int(data.get("intGoalsAgainst")) or 0,
        points=_int(data.get("intPoints")) or 0,
    )


def player_thumb_url(player: Player | None) -> str:
    if not player or not player.thumb_url:
        return DEFAULT_PLAYER_THUMB
    return player.thumb_url


def team_badge_url(team: Team | None) -> str:
    if not team or not team.badge_url:
        return DEFAULT_TEAM_BADGE
    return team.badge_url
