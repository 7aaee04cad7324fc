"""Event API endpoints."""

from fastapi import APIRouter, Depends, Query

from sportsdeck.api.models import LineupModel
from sportsdeck.api.routes import get_service
from sportsdeck.services import CatalogService

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/{event_id}/lineup", response_model=LineupModel)
async def get_lineup(
    event_id: str,
    home: str | None = Query(None, description="Home team name"),
    away: str | None = Query(None, description="Away team name"),
    service: CatalogService = Depends(get_service),
) -> LineupModel:
    """Lineup split into home/away starters and substitutes."""
    lineup = await service.catalog.get_event_lineup(event_id, home, away)
    return LineupModel.model_validate(lineup)
