"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the timestamp helpers every table needs.
"""

from datetime import datetime, timezone
from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - ``_now_iso()`` for ``updated_at`` style columns

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally. Repositories never perform
    authorization checks; that is the service layer's job.

    Example:
        class CandleRepository(BaseRepository[Candle]):
            def get_by_id(self, candle_id: str) -> Optional[Candle]:
                result = self._db.table("candles").select("*").eq("id", candle_id).execute()
                if not result.data:
                    return None
                return self._map_to_candle(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _now_iso() -> str:
        """Current UTC time as an ISO-8601 string."""
        return datetime.now(timezone.utc).isoformat()
