"""User session endpoints.

Login here only binds an already-authenticated user id and loads their
favorites; authentication itself happens elsewhere.
"""

from fastapi import APIRouter, Depends

from sportsdeck.api.models import LoginRequest
from sportsdeck.api.routes import get_service
from sportsdeck.services import CatalogService

router = APIRouter(prefix="/session", tags=["session"])


@router.post("/login")
async def login(body: LoginRequest, service: CatalogService = Depends(get_service)) -> dict:
    favorites = await service.favorites.login(body.user_id)
    return {
        "user_id": body.user_id,
        "favorites": [
            {"entity_id": ref.entity_id, "entity_type": ref.entity_type} for ref in favorites
        ],
    }


@router.post("/logout")
def logout(service: CatalogService = Depends(get_service)) -> dict:
    service.favorites.logout()
    return {"status": "logged_out"}
