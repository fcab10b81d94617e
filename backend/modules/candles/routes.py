"""
Candle API endpoints.

Two routers live here: ``router`` for the candle feed and the owner's
actions (mounted at /api/candles), and ``map_router`` for the public
world map (mounted at /api/map).
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.middleware.auth import get_current_user
from api.dependencies import get_candle_service
from shared.models import AuthenticatedUser

from .interfaces import ICandleService
from .models import (
    CandleListResponse,
    CandleType,
    CandleView,
    CreateCandleRequest,
    HomeStats,
    MapBounds,
    MapCandlesResponse,
    MapStats,
    MyCandlesResponse,
)
from .exceptions import (
    CandleNotFoundError,
    CandleAccessDeniedError,
    CandleNotActiveError,
)

router = APIRouter()
map_router = APIRouter()


@router.post("", response_model=CandleView, status_code=201)
async def create_candle(
    request: CreateCandleRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICandleService = Depends(get_candle_service),
) -> CandleView:
    """
    Light a new candle.

    The candle burns for ``duration_hours`` (1, 24 or 168) from now.
    """
    return await service.create_candle(user.id, request)


@router.get("", response_model=CandleListResponse)
async def list_candles(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(default=20, ge=1, le=100, description="Items per page"),
    candle_type: Optional[CandleType] = Query(default=None, description="Filter by type"),
    service: ICandleService = Depends(get_candle_service),
) -> CandleListResponse:
    """
    List burning candles.

    Returns paginated results, most recent first.
    """
    return await service.list_active(page, page_size, candle_type)


@router.get("/mine", response_model=MyCandlesResponse)
async def my_candles(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICandleService = Depends(get_candle_service),
) -> MyCandlesResponse:
    """The caller's candles from the last 30 days plus their counters."""
    return await service.get_my_candles(user.id)


@router.get("/stats", response_model=HomeStats)
async def home_stats(
    service: ICandleService = Depends(get_candle_service),
) -> HomeStats:
    return await service.get_home_stats()


@router.get("/{candle_id}", response_model=CandleView)
async def get_candle(
    candle_id: str,
    service: ICandleService = Depends(get_candle_service),
) -> CandleView:
    try:
        return await service.get_candle(candle_id)
    except CandleNotFoundError:
        raise HTTPException(status_code=404, detail="Candle not found")


@router.post("/{candle_id}/extinguish", response_model=CandleView)
async def extinguish_candle(
    candle_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICandleService = Depends(get_candle_service),
) -> CandleView:
    """
    Put out one of the caller's burning candles.
    """
    try:
        return await service.extinguish_candle(candle_id, user.id)
    except CandleNotFoundError:
        raise HTTPException(status_code=404, detail="Candle not found")
    except CandleAccessDeniedError:
        raise HTTPException(status_code=403, detail="You can only extinguish your own candles")
    except CandleNotActiveError:
        raise HTTPException(status_code=400, detail="Candle is not burning")


# -----------------------------------------------------------------------------
# World map
# -----------------------------------------------------------------------------


@map_router.get("/candles", response_model=MapCandlesResponse)
async def map_candles(
    type: str = Query(default="all", description="Candle type or 'all'"),
    status: Literal["active", "all"] = Query(default="active"),
    bounds: Optional[str] = Query(default=None, description="minLat,minLng,maxLat,maxLng"),
    service: ICandleService = Depends(get_candle_service),
) -> MapCandlesResponse:
    """
    Candles that opted in to the world map.

    Coordinates are anonymized; precise locations are never exposed.
    """
    candle_type = None
    if type != "all":
        try:
            candle_type = CandleType(type)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown candle type: {type}")

    parsed_bounds = None
    if bounds:
        try:
            parsed_bounds = MapBounds.parse(bounds)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail="Invalid bounds. Expected 'minLat,minLng,maxLat,maxLng'",
            )

    candles = await service.get_map_candles(
        candle_type=candle_type,
        active_only=status == "active",
        bounds=parsed_bounds,
    )
    return MapCandlesResponse(candles=candles)


@map_router.get("/stats", response_model=MapStats)
async def map_stats(
    service: ICandleService = Depends(get_candle_service),
) -> MapStats:
    return await service.get_map_stats()
