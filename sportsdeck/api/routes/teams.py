"""Teams API endpoints."""

from fastapi import APIRouter, Depends, Query

from sportsdeck.api.models import (
    EventModel,
    FavoriteResponse,
    LeagueRequest,
    SearchRequest,
    SeasonKitsModel,
    TeamModel,
    TeamPage,
    TeamStatisticsModel,
)
from sportsdeck.api.routes import get_service
from sportsdeck.core import ENTITY_TEAM
from sportsdeck.services import CatalogService

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=TeamPage)
async def get_teams(service: CatalogService = Depends(get_service)) -> TeamPage:
    view = await service.teams.load_browse()
    return TeamPage.model_validate(view)


@router.post("/league", response_model=TeamPage)
async def switch_league(
    body: LeagueRequest,
    service: CatalogService = Depends(get_service),
) -> TeamPage:
    """Browse a league's teams, or popular teams when league is null."""
    view = await service.show_league(body.league)
    return TeamPage.model_validate(view)


@router.post("/search", response_model=TeamPage)
async def search_teams(
    body: SearchRequest,
    service: CatalogService = Depends(get_service),
) -> TeamPage:
    view = await service.teams.search(body.query)
    return TeamPage.model_validate(view)


@router.post("/next", response_model=TeamPage)
async def next_page(service: CatalogService = Depends(get_service)) -> TeamPage:
    view = await service.teams.next_page()
    return TeamPage.model_validate(view)


@router.post("/previous", response_model=TeamPage)
async def previous_page(service: CatalogService = Depends(get_service)) -> TeamPage:
    return TeamPage.model_validate(service.teams.previous_page())


@router.post("/refresh", response_model=TeamPage)
async def refresh(service: CatalogService = Depends(get_service)) -> TeamPage:
    view = await service.teams.refresh()
    return TeamPage.model_validate(view)


@router.get("/{team_id}", response_model=TeamModel)
async def get_team(team_id: str, service: CatalogService = Depends(get_service)) -> TeamModel:
    """Open a team's detail view."""
    team = service.teams.find(team_id)
    if team is not None:
        detail = await service.teams.open_detail(team)
    else:
        team = await service.catalog.get_team_details(team_id)
        if team is None:
            raise LookupError(f"team {team_id} not found")
        detail = await service.teams.open_detail(team, reload=False)
    return TeamModel.model_validate(detail)


@router.post("/{team_id}/favorite", response_model=FavoriteResponse)
async def toggle_favorite(
    team_id: str,
    service: CatalogService = Depends(get_service),
) -> FavoriteResponse:
    is_favorite = await service.toggle_favorite(ENTITY_TEAM, team_id)
    return FavoriteResponse(entity_type=ENTITY_TEAM, entity_id=team_id, is_favorite=is_favorite)


@router.get("/{team_id}/statistics", response_model=TeamStatisticsModel)
async def get_statistics(
    team_id: str,
    league: str | None = Query(None, description="League name, used to find the table"),
    limit: int = Query(5, ge=1, le=15, description="Events listed per direction"),
    service: CatalogService = Depends(get_service),
) -> TeamStatisticsModel:
    stats = await service.catalog.get_team_statistics(team_id, league, limit=limit)
    return TeamStatisticsModel.model_validate(stats)


@router.get("/{team_id}/equipment", response_model=list[SeasonKitsModel])
async def get_equipment(
    team_id: str,
    service: CatalogService = Depends(get_service),
) -> list[SeasonKitsModel]:
    seasons = await service.catalog.get_team_equipment(team_id)
    return [SeasonKitsModel.model_validate(s) for s in seasons]


@router.get("/{team_id}/events", response_model=list[EventModel])
async def get_events(
    team_id: str,
    upcoming: bool = Query(False, description="Next events instead of last results"),
    service: CatalogService = Depends(get_service),
) -> list[EventModel]:
    if upcoming:
        events = await service.catalog.get_team_next_events(team_id)
    else:
        events = await service.catalog.get_team_events(team_id)
    return [EventModel.model_validate(e) for e in events]
