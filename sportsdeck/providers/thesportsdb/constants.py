"""TheSportsDB provider constants."""

# Position/sport terms that mark a non-soccer or non-playing profile.
# Matched case-insensitively as substrings of the player's position.
EXCLUDED_POSITION_TERMS = (
    "Manager",
    "Coach",
    "Assistant",
    "Wrestler",
    "Boxing",
    "Commentator",
    "Gymnastics",
    "American Football",
    "Rugby",
    "Announcer",
    "Presenter",
    "MMA",
    "Baseball",
    "Basketball",
    "Ice Hockey",
    "Tennis",
    "Golf",
    "Cycling",
    "Swimming",
    "Cricket",
    "Volleyball",
    "Racing Driver",
)

TARGET_SPORT = "Soccer"

# Top five leagues sampled by the popular players feed
TOP_LEAGUES = (
    {
        "country": "England",
        "league": "English Premier League",
        "league_id": "4328",
        "badge": "https://www.thesportsdb.com/images/media/league/badge/i6o0kh1549879062.png",
    },
    {
        "country": "Spain",
        "league": "Spanish La Liga",
        "league_id": "4335",
        "badge": "https://www.thesportsdb.com/images/media/league/badge/ja4it51687628717.png",
    },
    {
        "country": "Germany",
        "league": "German Bundesliga",
        "league_id": "4331",
        "badge": "https://www.thesportsdb.com/images/media/league/badge/0j55yv1534764799.png",
    },
    {
        "country": "Italy",
        "league": "Italian Serie A",
        "league_id": "4332",
        "badge": "https://www.thesportsdb.com/images/media/league/badge/67q3q21679951383.png",
    },
    {
        "country": "France",
        "league": "French Ligue 1",
        "league_id": "4334",
        "badge": "https://www.thesportsdb.com/images/media/league/badge/8f5jmf1516458074.png",
    },
)

DEFAULT_PLAYER_THUMB = "https://www.thesportsdb.com/images/media/player/thumb/defaultplayer.png"
DEFAULT_TEAM_BADGE = "https://www.thesportsdb.com/images/media/team/badge/defaultteam.png"

DEFAULT_SEASON = "2024-2025"

# Endpoint paths (relative to base URL + API key)
PATH_SEARCH_PLAYERS = "searchplayers.php"
PATH_LOOKUP_ROSTER = "lookup_all_players.php"
PATH_LOOKUP_PLAYER = "lookupplayer.php"
PATH_SEARCH_ALL_TEAMS = "search_all_teams.php"
PATH_SEARCH_TEAMS = "searchteams.php"
PATH_LOOKUP_TEAM = "lookupteam.php"
PATH_LOOKUP_EQUIPMENT = "lookupequipment.php"
PATH_LAST_EVENTS = "eventslast.php"
PATH_NEXT_EVENTS = "eventsnext.php"
PATH_LOOKUP_LINEUP = "lookuplineup.php"
PATH_LOOKUP_TABLE = "lookuptable.php"


def find_top_league(name: str | None) -> dict | None:
    """Look up a top league by its display name."""
    if not name:
        return None
    for league in TOP_LEAGUES:
        if league["league"] == name:
            return league
    return None
