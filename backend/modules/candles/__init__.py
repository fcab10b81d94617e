"""
Candles module.

Handles lighting, listing and extinguishing candles, plus the world map.

Public API:
- ICandleService: Interface for candle operations
- Candle / CandleView: Stored candle and its display form
- compute_effective_status, format_remaining_time: Temporal state resolution
"""

from .interfaces import ICandleService
from .models import (
    Candle,
    CandleView,
    CandleStatus,
    CandleType,
    CandleTypeMeta,
    CandleLocation,
    LocationType,
    CreateCandleRequest,
    CandleListResponse,
    MyCandlesResponse,
    UserCandleStats,
    HomeStats,
    MapBounds,
    MapCandle,
    MapStats,
)
from .status import (
    compute_effective_status,
    format_remaining_time,
    get_status_label,
    format_short_date,
    get_candle_type_meta,
)
from .exceptions import (
    CandleNotFoundError,
    CandleAccessDeniedError,
    CandleNotActiveError,
)

__all__ = [
    # Interface
    "ICandleService",
    # Models
    "Candle",
    "CandleView",
    "CandleStatus",
    "CandleType",
    "CandleTypeMeta",
    "CandleLocation",
    "LocationType",
    "CreateCandleRequest",
    "CandleListResponse",
    "MyCandlesResponse",
    "UserCandleStats",
    "HomeStats",
    "MapBounds",
    "MapCandle",
    "MapStats",
    # Status resolution
    "compute_effective_status",
    "format_remaining_time",
    "get_status_label",
    "format_short_date",
    "get_candle_type_meta",
    # Exceptions
    "CandleNotFoundError",
    "CandleAccessDeniedError",
    "CandleNotActiveError",
]
