"""Players API endpoints.

Drive the players listing: popular feed with "load more", multi-term
search, detail view and favorite toggles.
"""

from fastapi import APIRouter, Depends

from sportsdeck.api.models import FavoriteResponse, PlayerModel, PlayerPage, SearchRequest
from sportsdeck.api.routes import get_service
from sportsdeck.core import ENTITY_PLAYER
from sportsdeck.services import CatalogService

router = APIRouter(prefix="/players", tags=["players"])


@router.get("", response_model=PlayerPage)
async def get_players(service: CatalogService = Depends(get_service)) -> PlayerPage:
    """Current page, loading the popular feed on first use."""
    view = await service.players.load_browse()
    return PlayerPage.model_validate(view)


@router.post("/search", response_model=PlayerPage)
async def search_players(
    body: SearchRequest,
    service: CatalogService = Depends(get_service),
) -> PlayerPage:
    view = await service.players.search(body.query)
    return PlayerPage.model_validate(view)


@router.post("/next", response_model=PlayerPage)
async def next_page(service: CatalogService = Depends(get_service)) -> PlayerPage:
    view = await service.players.next_page()
    return PlayerPage.model_validate(view)


@router.post("/previous", response_model=PlayerPage)
async def previous_page(service: CatalogService = Depends(get_service)) -> PlayerPage:
    return PlayerPage.model_validate(service.players.previous_page())


@router.post("/refresh", response_model=PlayerPage)
async def refresh(service: CatalogService = Depends(get_service)) -> PlayerPage:
    """Pull-to-refresh: clears the TTL cache and reloads."""
    service.clear_cache()
    view = await service.players.refresh()
    return PlayerPage.model_validate(view)


@router.get("/{player_id}", response_model=PlayerModel)
async def get_player(player_id: str, service: CatalogService = Depends(get_service)) -> PlayerModel:
    """Open a player's detail view."""
    player = service.players.find(player_id)
    if player is not None:
        detail = await service.players.open_detail(player)
    else:
        player = await service.catalog.get_player_details(player_id)
        if player is None:
            raise LookupError(f"player {player_id} not found")
        detail = await service.players.open_detail(player, reload=False)
    return PlayerModel.model_validate(detail)


@router.post("/{player_id}/favorite", response_model=FavoriteResponse)
async def toggle_favorite(
    player_id: str,
    service: CatalogService = Depends(get_service),
) -> FavoriteResponse:
    is_favorite = await service.toggle_favorite(ENTITY_PLAYER, player_id)
    return FavoriteResponse(entity_type=ENTITY_PLAYER, entity_id=player_id, is_favorite=is_favorite)
