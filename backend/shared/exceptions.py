"""
Error hierarchy for the CandleTime backend.

Feature modules subclass one of the five bases below (a missing candle is a
``NotFoundError``, a taken article slug a ``ValidationError``, a Gemini
failure an ``ExternalServiceError``). Each base carries the HTTP status the
app-level handler answers with when a route lets the error escape; the body
is ``to_dict()``:

    {"error": "CANDLE_NOT_FOUND", "message": "...", "details": {"candle_id": "..."}}
"""

from typing import Any, ClassVar, Optional


class CandleTimeError(Exception):
    """
    Root of every domain error.

    ``code`` is a stable machine-readable identifier (the class name when not
    given); ``details`` holds the identifiers the client needs to act on.
    """

    status_code: ClassVar[int] = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or type(self).__name__
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, "details": self.details}


class NotFoundError(CandleTimeError):
    """A candle, template, article or import file does not exist."""

    status_code = 404


class ValidationError(CandleTimeError):
    """Request data breaks a domain rule (slug format, topic length, ...)."""

    status_code = 400


class AuthenticationError(CandleTimeError):
    status_code = 401


class AuthorizationError(CandleTimeError):
    """Caller is known but may not touch the resource (not the owner, system template)."""

    status_code = 403


class ExternalServiceError(CandleTimeError):
    """
    Supabase or Gemini failed.

    The service name is copied into ``details["service"]``.
    """

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, {**(details or {}), "service": service})
        self.service = service
