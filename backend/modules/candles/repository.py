"""
Candle repository for database access.

Encapsulates all Supabase queries and data mapping for the ``candles`` table,
including the location columns used by the world map.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import (
    Candle,
    CandleLocation,
    CandleStatus,
    CandleType,
    LocationType,
    MapBounds,
    MapCandle,
)


CANDLES_TABLE = "candles"

MAP_COLUMNS = (
    "id, title, candle_type, created_at, expires_at, status, "
    "location_anonymized_lat, location_anonymized_lng, location_country, location_city"
)


class CandleRepository(BaseRepository[Candle]):
    """
    Repository for candle data access.

    All methods return Pydantic models mapped from database rows.
    Timestamps are passed in as ISO strings so the service decides what
    "now" means.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership.
    """

    # -------------------------------------------------------------------------
    # CRUD operations
    # -------------------------------------------------------------------------

    def create_candle(self, data: dict[str, Any]) -> Candle:
        """
        Insert a new candle row.

        Args:
            data: Column values (title, expires_at, status, location_* ...)

        Returns:
            Created Candle with generated ID and timestamps.
        """
        result = self._db.table(CANDLES_TABLE).insert(data).execute()
        return self._map_to_candle(result.data[0])

    def get_by_id(self, candle_id: str) -> Optional[Candle]:
        """Get a candle by ID, or None if it does not exist."""
        result = self._db.table(CANDLES_TABLE).select("*").eq("id", candle_id).execute()
        if not result.data:
            return None
        return self._map_to_candle(result.data[0])

    def extinguish(self, candle_id: str, now_iso: str) -> Candle:
        """
        Mark a candle as extinguished and stop its clock.

        Args:
            candle_id: The candle UUID.
            now_iso: Time of extinguishing; becomes the new ``expires_at``.

        Returns:
            The updated Candle.
        """
        result = (
            self._db.table(CANDLES_TABLE)
            .update({"status": CandleStatus.EXTINGUISHED.value, "expires_at": now_iso})
            .eq("id", candle_id)
            .execute()
        )
        return self._map_to_candle(result.data[0])

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    def list_active(
        self,
        now_iso: str,
        page: int = 1,
        page_size: int = 20,
        candle_type: Optional[CandleType] = None,
    ) -> tuple[list[Candle], int]:
        """
        List burning candles, newest first.

        Args:
            now_iso: Reference time; only candles expiring after it are returned.
            page: Page number (1-indexed).
            page_size: Items per page.
            candle_type: Optional type filter.

        Returns:
            Tuple of (candles on the page, total matching candles).
        """
        offset = (page - 1) * page_size

        query = (
            self._db.table(CANDLES_TABLE)
            .select("*", count="exact")
            .eq("status", CandleStatus.ACTIVE.value)
            .gt("expires_at", now_iso)
        )
        if candle_type:
            query = query.eq("candle_type", candle_type.value)

        result = query.order("created_at", desc=True).range(offset, offset + page_size - 1).execute()

        candles = [self._map_to_candle(row) for row in result.data]
        return candles, result.count or 0

    def list_for_user_since(self, user_id: str, since_iso: str) -> list[Candle]:
        """List a user's candles created since the given time, newest first."""
        result = (
            self._db.table(CANDLES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .gte("created_at", since_iso)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_candle(row) for row in result.data]

    # -------------------------------------------------------------------------
    # Counters
    # -------------------------------------------------------------------------

    def count_for_user(self, user_id: str) -> int:
        result = self._db.table(CANDLES_TABLE).select("id", count="exact").eq("user_id", user_id).execute()
        return result.count or 0

    def count_active_for_user(self, user_id: str, now_iso: str) -> int:
        result = (
            self._db.table(CANDLES_TABLE)
            .select("id", count="exact")
            .eq("user_id", user_id)
            .neq("status", CandleStatus.EXTINGUISHED.value)
            .gt("expires_at", now_iso)
            .execute()
        )
        return result.count or 0

    def count_for_user_since(self, user_id: str, since_iso: str) -> int:
        result = (
            self._db.table(CANDLES_TABLE)
            .select("id", count="exact")
            .eq("user_id", user_id)
            .gte("created_at", since_iso)
            .execute()
        )
        return result.count or 0

    def count_active(self, now_iso: str) -> int:
        result = self._db.table(CANDLES_TABLE).select("id", count="exact").gt("expires_at", now_iso).execute()
        return result.count or 0

    def count_created_since(self, since_iso: str) -> int:
        result = self._db.table(CANDLES_TABLE).select("id", count="exact").gte("created_at", since_iso).execute()
        return result.count or 0

    def count_by_type(self, candle_type: CandleType) -> int:
        result = (
            self._db.table(CANDLES_TABLE)
            .select("id", count="exact")
            .eq("candle_type", candle_type.value)
            .execute()
        )
        return result.count or 0

    # -------------------------------------------------------------------------
    # Map queries
    # -------------------------------------------------------------------------

    def list_map_candles(
        self,
        now_iso: str,
        active_only: bool = True,
        candle_type: Optional[CandleType] = None,
        bounds: Optional[MapBounds] = None,
        limit: int = 1000,
    ) -> list[MapCandle]:
        """
        List candles that opted in to the world map.

        Only candles with anonymized coordinates are returned; precise
        coordinates never leave the database.

        Args:
            now_iso: Reference time for the active filter.
            active_only: Only stored-active candles that have not expired.
            candle_type: Optional type filter.
            bounds: Optional visible rectangle.
            limit: Maximum number of markers.

        Returns:
            Map markers.
        """
        query = (
            self._db.table(CANDLES_TABLE)
            .select(MAP_COLUMNS)
            .eq("location_show_on_map", True)
            .neq("location_type", LocationType.NONE.value)
            .not_.is_("location_anonymized_lat", "null")
            .not_.is_("location_anonymized_lng", "null")
        )

        if active_only:
            query = query.gt("expires_at", now_iso).eq("status", CandleStatus.ACTIVE.value)

        if candle_type:
            query = query.eq("candle_type", candle_type.value)

        if bounds:
            query = (
                query.gte("location_anonymized_lat", bounds.min_lat)
                .lte("location_anonymized_lat", bounds.max_lat)
                .gte("location_anonymized_lng", bounds.min_lng)
                .lte("location_anonymized_lng", bounds.max_lng)
            )

        result = query.limit(limit).execute()
        return [self._map_to_map_candle(row) for row in result.data]

    def list_map_countries(self) -> list[str]:
        """Countries of all candles shown on the map (one entry per candle)."""
        result = (
            self._db.table(CANDLES_TABLE)
            .select("location_country")
            .eq("location_show_on_map", True)
            .not_.is_("location_country", "null")
            .execute()
        )
        return [row["location_country"] for row in result.data if row.get("location_country")]

    def list_map_cities(self, limit: int = 1000) -> list[tuple[str, str]]:
        """(city, country) pairs of candles shown on the map."""
        result = (
            self._db.table(CANDLES_TABLE)
            .select("location_city, location_country")
            .eq("location_show_on_map", True)
            .not_.is_("location_city", "null")
            .limit(limit)
            .execute()
        )
        return [
            (row["location_city"], row.get("location_country") or "")
            for row in result.data
            if row.get("location_city")
        ]

    def count_map_candles(self) -> int:
        result = (
            self._db.table(CANDLES_TABLE)
            .select("id", count="exact")
            .eq("location_show_on_map", True)
            .neq("location_type", LocationType.NONE.value)
            .execute()
        )
        return result.count or 0

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_candle(self, data: dict[str, Any]) -> Candle:
        """Map database row to Candle model."""
        location = None
        location_type = data.get("location_type")
        if location_type and location_type != LocationType.NONE.value:
            location = CandleLocation(
                type=LocationType(location_type),
                latitude=data.get("location_latitude"),
                longitude=data.get("location_longitude"),
                country=data.get("location_country"),
                city=data.get("location_city"),
                region=data.get("location_region"),
                address=data.get("location_address"),
                show_on_map=bool(data.get("location_show_on_map")),
            )

        return Candle(
            id=str(data["id"]),
            title=data["title"],
            message=data.get("message"),
            created_at=data["created_at"],
            expires_at=data["expires_at"],
            status=CandleStatus(data.get("status") or CandleStatus.ACTIVE.value),
            candle_type=data.get("candle_type"),
            is_anonymous=bool(data.get("is_anonymous", False)),
            user_id=str(data["user_id"]) if data.get("user_id") else None,
            duration_hours=data.get("duration_hours"),
            location=location,
        )

    def _map_to_map_candle(self, data: dict[str, Any]) -> MapCandle:
        """Map database row to MapCandle marker."""
        return MapCandle(
            id=str(data["id"]),
            title=data["title"],
            type=data.get("candle_type"),
            lat=float(data["location_anonymized_lat"]),
            lng=float(data["location_anonymized_lng"]),
            country=data.get("location_country"),
            city=data.get("location_city"),
            created_at=data["created_at"],
            expires_at=data["expires_at"],
            status=CandleStatus(data["status"]),
        )
