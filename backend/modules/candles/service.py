"""
Candles service implementation.

Business rules for lighting, listing and extinguishing candles. Raw rows
come from CandleRepository; every candle leaving the service is decorated
with the derived fields computed by ``status.py``.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from .interfaces import ICandleService
from .models import (
    Candle,
    CandleListResponse,
    CandleStatus,
    CandleType,
    CandleView,
    CityCount,
    CreateCandleRequest,
    HomeStats,
    LocationType,
    MapBounds,
    MapCandle,
    MapStats,
    MyCandlesResponse,
    PopularType,
    UserCandleStats,
)
from .repository import CandleRepository
from .exceptions import (
    CandleNotFoundError,
    CandleAccessDeniedError,
    CandleNotActiveError,
)
from .status import (
    DEFAULT_LANGUAGE,
    compute_effective_status,
    format_remaining_time,
    format_short_date,
    get_candle_type_meta,
    get_status_label,
)

logger = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=30)
TOP_CITIES_LIMIT = 20


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CandleService(ICandleService):
    """
    Candle service backed by Supabase.

    Implements ICandleService. The clock is injectable so lifecycle
    decisions can be tested against a fixed instant.
    """

    def __init__(
        self,
        repository: CandleRepository,
        language: str = DEFAULT_LANGUAGE,
        map_limit: int = 1000,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._repo = repository
        self._language = language
        self._map_limit = map_limit
        self._clock = clock

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def to_view(self, candle: Candle, now: Optional[datetime] = None) -> CandleView:
        """Decorate a stored candle with its effective status and display fields."""
        now = now or self._clock()
        effective = compute_effective_status(candle, now)
        return CandleView(
            **candle.model_dump(),
            effective_status=effective,
            status_label=get_status_label(effective, self._language),
            remaining_time=format_remaining_time(candle.expires_at, now, self._language),
            created_date=format_short_date(candle.created_at),
            type_meta=get_candle_type_meta(candle.candle_type, self._language),
        )

    # -------------------------------------------------------------------------
    # Candles
    # -------------------------------------------------------------------------

    async def create_candle(self, user_id: str, request: CreateCandleRequest) -> CandleView:
        now = self._clock()
        data: dict[str, Any] = {
            "user_id": user_id,
            "title": request.title,
            "message": request.message,
            "candle_type": request.candle_type.value if request.candle_type else None,
            "duration_hours": request.duration_hours,
            "is_anonymous": request.is_anonymous,
            "status": CandleStatus.ACTIVE.value,
            "expires_at": (now + timedelta(hours=request.duration_hours)).isoformat(),
        }
        data.update(self._location_columns(request))

        candle = self._repo.create_candle(data)
        logger.info(f"Candle {candle.id} lit by {user_id} for {request.duration_hours}h")
        return self.to_view(candle, now)

    async def get_candle(self, candle_id: str) -> CandleView:
        candle = self._repo.get_by_id(candle_id)
        if candle is None:
            raise CandleNotFoundError(candle_id)
        return self.to_view(candle)

    async def list_active(
        self,
        page: int = 1,
        page_size: int = 20,
        candle_type: Optional[CandleType] = None,
    ) -> CandleListResponse:
        now = self._clock()
        candles, total = self._repo.list_active(now.isoformat(), page, page_size, candle_type)
        offset = (page - 1) * page_size

        return CandleListResponse(
            candles=[self.to_view(c, now) for c in candles],
            total=total,
            page=page,
            page_size=page_size,
            has_more=(offset + page_size) < total,
        )

    async def extinguish_candle(self, candle_id: str, user_id: str) -> CandleView:
        candle = self._repo.get_by_id(candle_id)
        if candle is None:
            raise CandleNotFoundError(candle_id)

        if candle.user_id != user_id:
            raise CandleAccessDeniedError(candle_id, user_id)

        now = self._clock()
        effective = compute_effective_status(candle, now)
        if effective != CandleStatus.ACTIVE:
            raise CandleNotActiveError(candle_id, effective.value)

        updated = self._repo.extinguish(candle_id, now.isoformat())
        logger.info(f"Candle {candle_id} extinguished by owner")
        return self.to_view(updated, now)

    async def get_my_candles(self, user_id: str) -> MyCandlesResponse:
        now = self._clock()
        since = (now - RECENT_WINDOW).isoformat()

        candles = self._repo.list_for_user_since(user_id, since)
        stats = UserCandleStats(
            total_candles=self._repo.count_for_user(user_id),
            active_candles=self._repo.count_active_for_user(user_id, now.isoformat()),
            candles_last_30_days=self._repo.count_for_user_since(user_id, since),
        )

        return MyCandlesResponse(
            candles=[self.to_view(c, now) for c in candles],
            stats=stats,
        )

    async def get_home_stats(self) -> HomeStats:
        now = self._clock()
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

        popular = PopularType()
        for candle_type in CandleType:
            count = self._repo.count_by_type(candle_type)
            if count > popular.count:
                popular = PopularType(id=candle_type, count=count)

        return HomeStats(
            active_count=self._repo.count_active(now.isoformat()),
            today_count=self._repo.count_created_since(midnight.isoformat()),
            popular_type=popular,
        )

    # -------------------------------------------------------------------------
    # Map
    # -------------------------------------------------------------------------

    async def get_map_candles(
        self,
        candle_type: Optional[CandleType] = None,
        active_only: bool = True,
        bounds: Optional[MapBounds] = None,
    ) -> list[MapCandle]:
        return self._repo.list_map_candles(
            self._clock().isoformat(),
            active_only=active_only,
            candle_type=candle_type,
            bounds=bounds,
            limit=self._map_limit,
        )

    async def get_map_stats(self) -> MapStats:
        countries = Counter(self._repo.list_map_countries())
        cities = Counter(self._repo.list_map_cities(self._map_limit))

        top_cities = [
            CityCount(city=city, country=country, count=count)
            for (city, country), count in cities.most_common(TOP_CITIES_LIMIT)
        ]

        return MapStats(
            countries=dict(countries),
            top_cities=top_cities,
            total_candles=self._repo.count_map_candles(),
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _location_columns(request: CreateCandleRequest) -> dict[str, Any]:
        """Flatten the optional location into ``location_*`` columns."""
        location = request.location
        if location is None:
            return {"location_type": LocationType.NONE.value}

        if location.city and location.country:
            location_type = LocationType.CITY
        elif location.country:
            location_type = LocationType.COUNTRY
        else:
            location_type = LocationType.PRECISE

        return {
            "location_type": location_type.value,
            "location_latitude": location.latitude,
            "location_longitude": location.longitude,
            "location_country": location.country or None,
            "location_city": location.city or None,
            "location_region": location.region or None,
            "location_address": location.display_name,
            "location_show_on_map": location.show_on_map,
        }
