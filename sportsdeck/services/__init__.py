"""Service layer.

Factory for a fully wired CatalogService.
"""

import random

import httpx

from sportsdeck.providers.favorites.client import FavoritesClient
from sportsdeck.providers.thesportsdb.client import SportsDBClient
from sportsdeck.services.catalog import RemoteCatalog
from sportsdeck.services.catalog_service import CatalogService
from sportsdeck.services.favorites import FavoritesSynchronizer
from sportsdeck.services.listing import ListingSession, PageView
from sportsdeck.services.pagination import PagedList, paginate
from sportsdeck.services.popularity import PopularitySampler, SampleResult
from sportsdeck.utilities.cache import CacheStore


def create_catalog_service(
    sportsdb_transport: httpx.AsyncBaseTransport | None = None,
    favorites_transport: httpx.AsyncBaseTransport | None = None,
    cache: CacheStore | None = None,
    rng: random.Random | None = None,
    retry_count: int | None = None,
) -> CatalogService:
    """Build a CatalogService with its own cache, clients and sampler.

    Transports are injectable for tests (httpx.MockTransport).
    """
    catalog = RemoteCatalog(
        SportsDBClient(transport=sportsdb_transport, retry_count=retry_count),
        cache or CacheStore(),
    )
    favorites = FavoritesSynchronizer(FavoritesClient(transport=favorites_transport))
    return CatalogService(catalog, PopularitySampler(catalog, rng=rng), favorites)


__all__ = [
    "CacheStore",
    "CatalogService",
    "FavoritesSynchronizer",
    "ListingSession",
    "PageView",
    "PagedList",
    "PopularitySampler",
    "RemoteCatalog",
    "SampleResult",
    "create_catalog_service",
    "paginate",
]
