"""
Error response models.

Standardized error bodies for failures raised outside route handlers.
"""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format (see ``CandleTimeError.to_dict``)."""

    error: str
    message: str
    details: dict[str, Any] = {}
