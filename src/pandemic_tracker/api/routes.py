"""HTTP routes for the tracker API."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, Field, ValidationError

from pandemic_tracker.api.runtime import ApiState, GameExistsError
from pandemic_tracker.domain import rules_config
from pandemic_tracker.domain.errors import CatalogError, TrackerError
from pandemic_tracker.repository import InvalidGameNameError

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class GameSummary(BaseModel):
    game_name: str
    infection_rate: int
    outbreaks: int
    location_count: int
    city_cards_drawn: int
    city_cards_total: int
    striation_count: int
    infection_discard_size: int


class CreateGameRequest(BaseModel):
    game_name: str = Field(min_length=1)
    shock_markers: int | None = Field(default=None, ge=0)
    infection_rate: int | None = Field(default=None, ge=1)


class CommandRequest(BaseModel):
    command: str = Field(min_length=1)


class CommandResponse(BaseModel):
    success: bool
    message: str
    mutated: bool
    data: dict[str, object]


class LocationRow(BaseModel):
    name: str
    disease: str
    probability: float
    tier: str
    infection_level: int
    quarantined: bool
    can_outbreak: bool


class StriationBandResponse(BaseModel):
    kind: str
    index: int | None
    locations: list[LocationRow]


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="game not found")


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Simple readiness probe."""

    return {"status": "ok"}


@router.get("/rules")
async def rules_overview() -> dict[str, object]:
    """Expose a snapshot of configurable rule constants for clients."""

    deck = rules_config.DEFAULT_RULES.deck
    return {
        "deck": {
            "shock_markers_per_game": deck.shock_markers_per_game,
            "shock_draw_window": deck.shock_draw_window,
            "default_infection_rate": deck.default_infection_rate,
        },
        "probability": {
            "critical_threshold": rules_config.DEFAULT_RULES.probability.critical_threshold,
        },
    }


@router.get("/games", response_model=list[str])
async def list_games(state: ApiStateDep) -> list[str]:
    return await asyncio.to_thread(state.games.list_games)


@router.post("/games", response_model=GameSummary, status_code=status.HTTP_201_CREATED)
async def create_game(request: CreateGameRequest, state: ApiStateDep) -> GameSummary:
    try:
        game = await asyncio.to_thread(
            state.games.create_game,
            request.game_name,
            shock_markers=request.shock_markers,
            infection_rate=request.infection_rate,
        )
    except GameExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except CatalogError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return GameSummary.model_validate(state.games.to_summary_dict(game))


@router.get("/games/{game_name}", response_model=GameSummary)
async def get_game(game_name: str, state: ApiStateDep) -> GameSummary:
    try:
        game = await asyncio.to_thread(state.games.get_game, game_name)
    except (FileNotFoundError, InvalidGameNameError) as exc:
        raise _not_found() from exc
    return GameSummary.model_validate(state.games.to_summary_dict(game))


@router.post("/games/{game_name}/commands", response_model=CommandResponse)
async def run_command(
    game_name: str,
    request: CommandRequest,
    state: ApiStateDep,
) -> CommandResponse:
    try:
        result = await asyncio.to_thread(state.games.run_command, game_name, request.command)
    except (FileNotFoundError, InvalidGameNameError) as exc:
        raise _not_found() from exc
    except ValidationError as exc:  # pragma: no cover - corrupted snapshot on disk
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.message)
    return CommandResponse(
        success=result.success,
        message=result.message,
        mutated=result.mutated,
        data=result.data,
    )


@router.get("/games/{game_name}/locations", response_model=list[LocationRow])
async def list_locations(
    game_name: str,
    state: ApiStateDep,
    names: Annotated[list[str] | None, Query()] = None,
) -> list[LocationRow]:
    try:
        rows = await asyncio.to_thread(state.games.location_report, game_name, names)
    except (FileNotFoundError, InvalidGameNameError) as exc:
        raise _not_found() from exc
    except TrackerError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [LocationRow.model_validate(row, from_attributes=True) for row in rows]


@router.get("/games/{game_name}/striations", response_model=list[StriationBandResponse])
async def list_striations(game_name: str, state: ApiStateDep) -> list[StriationBandResponse]:
    try:
        bands = await asyncio.to_thread(state.games.striation_report, game_name)
    except (FileNotFoundError, InvalidGameNameError) as exc:
        raise _not_found() from exc
    return [StriationBandResponse.model_validate(band, from_attributes=True) for band in bands]
