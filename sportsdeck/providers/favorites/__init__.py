"""Favorites backend provider."""

from sportsdeck.providers.favorites.client import FavoritesClient

__all__ = ["FavoritesClient"]
