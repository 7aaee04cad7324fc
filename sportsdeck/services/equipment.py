"""Kit (equipment) organization by season."""

import re

from sportsdeck.core import Kit, SeasonKits

# Display order of kit types; anything else sorts last
KIT_TYPE_ORDER = {"1st": 1, "2nd": 2, "3rd": 3, "4th": 4, "5th": 5}

_SEASON_RANGE = re.compile(r"^\d{4}-\d{4}$")
_SEASON_YEAR = re.compile(r"^\d{4}$")


def season_sort_key(season: str) -> tuple:
    """Sort key placing the most recent season first.

    '2023-2024' sorts by its end year, '2024' by its year; anything else
    falls back to reverse lexical order after the numeric seasons.
    """
    if _SEASON_RANGE.match(season):
        return (0, -int(season.split("-")[1]), "")
    if _SEASON_YEAR.match(season):
        return (0, -int(season), "")
    # Negate each character so plain ascending sort gives reverse lexical order
    return (1, 0, tuple(-ord(ch) for ch in season))


def organize_kits_by_season(items: list[Kit]) -> list[SeasonKits]:
    """Group kits by season.

    Keeps the most recent kit per (season, normalized type). Seasons are
    returned newest first, kits ordered 1st, 2nd, 3rd...
    """
    by_season: dict[str, dict[str, Kit]] = {}

    for kit in items:
        kits = by_season.setdefault(kit.season, {})
        existing = kits.get(kit.normalized_type)
        if existing is None:
            kits[kit.normalized_type] = kit
        elif kit.date and (existing.date is None or kit.date > existing.date):
            kits[kit.normalized_type] = kit

    result = []
    for season in sorted(by_season, key=season_sort_key):
        kits = sorted(
            by_season[season].values(),
            key=lambda k: KIT_TYPE_ORDER.get(k.normalized_type, 99),
        )
        result.append(SeasonKits(season=season, kits=kits))
    return result
