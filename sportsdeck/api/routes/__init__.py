"""API route modules."""

from fastapi import Request

from sportsdeck.services import CatalogService


def get_service(request: Request) -> CatalogService:
    """FastAPI dependency returning the app's CatalogService."""
    return request.app.state.service
