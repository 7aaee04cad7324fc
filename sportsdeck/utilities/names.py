"""Name normalization and matching.

Uses unidecode for accent folding and rapidfuzz for tolerant comparison
of team names coming from different endpoints ("Atlético Madrid" in a
lineup vs "Atletico Madrid" in an event).
"""

import re

from rapidfuzz import fuzz
from unidecode import unidecode

# Club suffixes/prefixes ignored when comparing team names
CLUB_AFFIXES = {"fc", "cf", "sc", "afc", "ac", "ssc", "club", "de"}

# Minimum partial_ratio score to treat two team names as the same team
TEAM_MATCH_THRESHOLD = 90.0


def normalize_name(value: str | None) -> str:
    """Lowercase, accent-fold and collapse whitespace.

    >>> normalize_name("  Atlético   Madrid ")
    'atletico madrid'
    """
    if not value:
        return ""
    folded = unidecode(value).lower()
    return re.sub(r"\s+", " ", folded).strip()


def strip_affixes(name: str) -> str:
    """Drop common club affixes ('FC', 'CF'...) from a normalized name."""
    words = [w for w in name.split(" ") if w not in CLUB_AFFIXES]
    return " ".join(words) or name


def same_team(a: str | None, b: str | None) -> bool:
    """True if two team names refer to the same team."""
    left, right = normalize_name(a), normalize_name(b)
    if not left or not right:
        return False
    if left == right:
        return True
    return strip_affixes(left) == strip_affixes(right)


def team_similarity(a: str | None, b: str | None) -> float:
    """0-100 similarity score between two team names."""
    left, right = normalize_name(a), normalize_name(b)
    if not left or not right:
        return 0.0
    return fuzz.partial_ratio(strip_affixes(left), strip_affixes(right))
