"""Lineup organization.

Splits a flat lineup into home and away sides, then into starters and
substitutes ordered by squad number.

Side resolution, first match wins:
1. Explicit side field on the line
2. Team name equal to the home or away team (accent/affix insensitive)
3. Fuzzy similarity against both team names
4. Position in the list: first half home, second half away
"""

import logging

from sportsdeck.core import Lineup, LineupEntry, TeamLineup
from sportsdeck.providers.thesportsdb.normalizer import lineup_side, parse_lineup_entry
from sportsdeck.utilities.names import TEAM_MATCH_THRESHOLD, same_team, team_similarity

logger = logging.getLogger(__name__)

# Sort position for lines without a usable squad number
NO_NUMBER = 999


def _number_key(entry: LineupEntry) -> int:
    try:
        return int(entry.number)
    except (TypeError, ValueError):
        return NO_NUMBER


def _split(entries: list[LineupEntry]) -> TeamLineup:
    starters = sorted((e for e in entries if not e.substitute), key=_number_key)
    substitutes = sorted((e for e in entries if e.substitute), key=_number_key)
    return TeamLineup(starters=starters, substitutes=substitutes)


def _is_home(
    raw: dict,
    entry: LineupEntry,
    index: int,
    total: int,
    home_team: str | None,
    away_team: str | None,
) -> bool:
    side = lineup_side(raw)
    if side:
        return side == "home"

    if home_team and away_team and entry.team:
        if same_team(entry.team, home_team):
            return True
        if same_team(entry.team, away_team):
            return False
        home_score = team_similarity(entry.team, home_team)
        away_score = team_similarity(entry.team, away_team)
        return home_score >= TEAM_MATCH_THRESHOLD and home_score >= away_score

    return index < total // 2


def organize_lineup(
    raw_lineup: list[dict],
    home_team: str | None = None,
    away_team: str | None = None,
) -> Lineup:
    """Organize raw lineup lines into a Lineup."""
    if not raw_lineup:
        return Lineup()

    home: list[LineupEntry] = []
    away: list[LineupEntry] = []
    total = len(raw_lineup)

    for index, raw in enumerate(raw_lineup):
        entry = parse_lineup_entry(raw)
        if entry is None:
            continue
        if _is_home(raw, entry, index, total, home_team, away_team):
            home.append(entry)
        else:
            away.append(entry)

    logger.debug("[SPORTSDB] Lineup split: %d home, %d away", len(home), len(away))
    return Lineup(home=_split(home), away=_split(away))
