"""TheSportsDB provider."""

from sportsdeck.providers.thesportsdb.client import SportsDBClient
from sportsdeck.providers.thesportsdb.constants import TOP_LEAGUES

__all__ = ["SportsDBClient", "TOP_LEAGUES"]
