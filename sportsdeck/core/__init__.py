"""Core types and errors."""

from sportsdeck.core.errors import ApiError, CatalogError, FavoriteConflict, NetworkError
from sportsdeck.core.types import (
    ENTITY_PLAYER,
    ENTITY_TEAM,
    Event,
    FavoriteRef,
    Kit,
    Lineup,
    LineupEntry,
    Player,
    SeasonKits,
    TableRow,
    Team,
    TeamLineup,
    TeamRecord,
    TeamStatistics,
    Venue,
)

__all__ = [
    # Errors
    "ApiError",
    "CatalogError",
    "FavoriteConflict",
    "NetworkError",
    # Types
    "ENTITY_PLAYER",
    "ENTITY_TEAM",
    "Event",
    "FavoriteRef",
    "Kit",
    "Lineup",
    "LineupEntry",
    "Player",
    "SeasonKits",
    "TableRow",
    "Team",
    "TeamLineup",
    "TeamRecord",
    "TeamStatistics",
    "Venue",
]
