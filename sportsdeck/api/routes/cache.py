"""Cache management endpoints.

- GET /cache/status - TTL cache statistics
- POST /cache/clear - Drop every cached entry
"""

import logging

from fastapi import APIRouter, Depends

from sportsdeck.api.routes import get_service
from sportsdeck.services import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cache", tags=["cache"])


@router.get("/status")
def get_cache_status(service: CatalogService = Depends(get_service)) -> dict:
    """Get cache statistics and freshness."""
    return service.catalog.cache.stats()


@router.post("/clear")
def clear_cache(service: CatalogService = Depends(get_service)) -> dict:
    """Clear the cache. Loaded pages stay until the next refresh."""
    service.clear_cache()
    logger.info("[CACHE] Cleared via API")
    return {"status": "cleared"}
