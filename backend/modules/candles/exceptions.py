"""
Candles module exceptions.
"""

from shared.exceptions import (
    NotFoundError,
    ValidationError,
    AuthorizationError,
)


class CandleNotFoundError(NotFoundError):
    """Raised when a candle is not found."""

    def __init__(self, candle_id: str):
        super().__init__(
            f"Candle not found: {candle_id}",
            code="CANDLE_NOT_FOUND",
            details={"candle_id": candle_id},
        )


class CandleAccessDeniedError(AuthorizationError):
    """Raised when a user tries to modify someone else's candle."""

    def __init__(self, candle_id: str, user_id: str):
        super().__init__(
            f"Access denied to candle: {candle_id}",
            code="CANDLE_ACCESS_DENIED",
            details={"candle_id": candle_id, "user_id": user_id},
        )


class CandleNotActiveError(ValidationError):
    """Raised when extinguishing a candle that is no longer burning."""

    def __init__(self, candle_id: str, status: str):
        super().__init__(
            f"Candle is not active: {candle_id}",
            code="CANDLE_NOT_ACTIVE",
            details={"candle_id": candle_id, "status": status},
        )

