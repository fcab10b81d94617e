"""
Candles module interface.

The API layer depends on ICandleService for all candle operations.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import (
    CandleListResponse,
    CandleType,
    CandleView,
    CreateCandleRequest,
    HomeStats,
    MapBounds,
    MapCandle,
    MapStats,
    MyCandlesResponse,
)


@runtime_checkable
class ICandleService(Protocol):
    """
    Interface for candle operations.

    Every candle returned through this interface is a CandleView, so the
    effective status and remaining time are computed in one place.
    """

    async def create_candle(self, user_id: str, request: CreateCandleRequest) -> CandleView:
        """
        Light a new candle.

        Args:
            user_id: Owner of the candle
            request: Title, message, type, duration and optional location

        Returns:
            The created candle
        """
        ...

    async def get_candle(self, candle_id: str) -> CandleView:
        """
        Get a candle by ID.

        Raises:
            CandleNotFoundError: If the candle does not exist
        """
        ...

    async def list_active(
        self,
        page: int = 1,
        page_size: int = 20,
        candle_type: Optional[CandleType] = None,
    ) -> CandleListResponse:
        """List burning candles, newest first."""
        ...

    async def extinguish_candle(self, candle_id: str, user_id: str) -> CandleView:
        """
        Put out a burning candle early.

        Raises:
            CandleNotFoundError: If the candle does not exist
            CandleAccessDeniedError: If the user does not own the candle
            CandleNotActiveError: If the candle is already out
        """
        ...

    async def get_my_candles(self, user_id: str) -> MyCandlesResponse:
        """The user's candles from the last 30 days and their counters."""
        ...

    async def get_home_stats(self) -> HomeStats:
        """Counters for the home page."""
        ...

    async def get_map_candles(
        self,
        candle_type: Optional[CandleType] = None,
        active_only: bool = True,
        bounds: Optional[MapBounds] = None,
    ) -> list[MapCandle]:
        """Markers for the world map."""
        ...

    async def get_map_stats(self) -> MapStats:
        """Country and city counters for the world map."""
        ...
