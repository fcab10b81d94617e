"""
JWT claim models.

The request user itself is ``shared.models.AuthenticatedUser``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class TokenPayload(BaseModel):
    """Supabase access token claims."""
    model_config = ConfigDict(extra="ignore")

    sub: str  # User ID
    email: str
    email_confirmed_at: Optional[str] = None
    role: Optional[str] = None
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
