"""
Candles module data models.

These models define the core data structures for CandleTime candles:
the stored record, the request to light a new candle, and the read
models returned by the feed, the dashboard and the world map.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator


MAX_TITLE_LENGTH = 100
MAX_MESSAGE_LENGTH = 500


class CandleStatus(str, Enum):
    """Candle lifecycle status."""

    ACTIVE = "active"              # Burning
    EXPIRED = "expired"            # Burned out (computed, never persisted)
    EXTINGUISHED = "extinguished"  # Put out early by its owner


class CandleType(str, Enum):
    """Symbolic candle types."""

    CALM = "calm"
    SUPPORT = "support"
    MEMORY = "memory"
    GRATITUDE = "gratitude"
    FOCUS = "focus"


class LocationType(str, Enum):
    """Granularity of the location attached to a candle."""

    NONE = "none"
    CITY = "city"
    COUNTRY = "country"
    PRECISE = "precise"


class CandleTypeMeta(BaseModel):
    """Display metadata for a candle type."""

    id: Optional[CandleType] = None
    label: str
    emoji: str

    model_config = {"frozen": True}


class CandleLocation(BaseModel):
    """Location block stored alongside a candle."""

    type: LocationType = Field(default=LocationType.NONE, description="Location granularity")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    country: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    address: Optional[str] = None
    show_on_map: bool = False


class Candle(BaseModel):
    """A user-created symbolic candle as stored in the database."""

    id: str = Field(..., description="Candle ID (UUID)")
    title: str = Field(..., description="Candle title")
    message: Optional[str] = Field(None, description="Optional message")
    created_at: datetime = Field(..., description="Creation time")
    expires_at: datetime = Field(..., description="Expiry time")
    status: CandleStatus = Field(default=CandleStatus.ACTIVE, description="Stored status")
    candle_type: Optional[CandleType] = Field(None, description="Candle type")
    is_anonymous: bool = Field(default=False, description="Hide the author")
    user_id: Optional[str] = Field(None, description="Owner user ID")
    duration_hours: Optional[int] = Field(None, description="Requested burn time")
    location: Optional[CandleLocation] = Field(None, description="Attached location")


class LocationInput(BaseModel):
    """Location picked by the user when lighting a candle."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    country: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    display_name: Optional[str] = None
    show_on_map: bool = True


class CreateCandleRequest(BaseModel):
    """Request to light a new candle."""

    title: str = Field(..., max_length=MAX_TITLE_LENGTH, description="Candle title")
    message: Optional[str] = Field(
        None,
        max_length=MAX_MESSAGE_LENGTH,
        description="Optional message",
    )
    candle_type: Optional[CandleType] = Field(None, description="Candle type")
    duration_hours: Literal[1, 24, 168] = Field(
        default=24,
        description="Burn time in hours (1 hour, 24 hours or 7 days)",
    )
    is_anonymous: bool = Field(default=False, description="Hide the author")
    location: Optional[LocationInput] = Field(None, description="Optional location")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value

    @field_validator("message")
    @classmethod
    def blank_message_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class CandleView(Candle):
    """
    Candle with the derived fields every surface displays.

    ``effective_status`` is computed from the stored status and the
    current time; the stored ``status`` is kept for reference.
    """

    effective_status: CandleStatus
    status_label: str
    remaining_time: str
    created_date: str
    type_meta: CandleTypeMeta


class CandleListResponse(BaseModel):
    """Paginated feed of candles."""

    candles: list[CandleView]
    total: int
    page: int
    page_size: int
    has_more: bool


class UserCandleStats(BaseModel):
    """Per-user counters shown on the profile page."""

    total_candles: int = 0
    active_candles: int = 0
    candles_last_30_days: int = 0


class MyCandlesResponse(BaseModel):
    """The caller's recent candles plus their counters."""

    candles: list[CandleView]
    stats: UserCandleStats


class PopularType(BaseModel):
    """Most lit candle type."""

    id: Optional[CandleType] = None
    count: int = 0


class HomeStats(BaseModel):
    """Counters shown on the home page."""

    active_count: int = 0
    today_count: int = 0
    popular_type: PopularType = Field(default_factory=PopularType)


# -----------------------------------------------------------------------------
# Map
# -----------------------------------------------------------------------------


class MapBounds(BaseModel):
    """Visible map rectangle."""

    min_lat: float
    min_lng: float
    max_lat: float
    max_lng: float

    @classmethod
    def parse(cls, raw: str) -> "MapBounds":
        """
        Parse a ``"minLat,minLng,maxLat,maxLng"`` query value.

        Raises:
            ValueError: If the value does not hold four numbers
        """
        parts = [p.strip() for p in raw.split(",")]
        if len(parts) != 4:
            raise ValueError(f"Expected 4 comma-separated numbers, got {len(parts)}")
        min_lat, min_lng, max_lat, max_lng = (float(p) for p in parts)
        return cls(min_lat=min_lat, min_lng=min_lng, max_lat=max_lat, max_lng=max_lng)


class MapCandle(BaseModel):
    """Marker data for a candle on the world map."""

    id: str
    title: str
    type: Optional[CandleType] = None
    lat: float
    lng: float
    country: Optional[str] = None
    city: Optional[str] = None
    created_at: datetime
    expires_at: datetime
    status: CandleStatus


class MapCandlesResponse(BaseModel):
    """Markers for the world map."""

    candles: list[MapCandle]


class CityCount(BaseModel):
    """Number of candles in a city."""

    city: str
    country: str = ""
    count: int


class MapStats(BaseModel):
    """Aggregated counts for the map sidebar."""

    countries: dict[str, int] = Field(default_factory=dict)
    top_cities: list[CityCount] = Field(default_factory=list)
    total_candles: int = 0
