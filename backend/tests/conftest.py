"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
from unittest.mock import MagicMock
from jose import jwt

from api.dependencies import reset_container
from modules.admin.gate import AdminAccessGate
from modules.admin.models import IdentityUser, UserLookup
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

ADMIN_EMAIL = "admin@candletime.test"

# Fixed reference instant for time-dependent tests
NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


class StubIdentityProvider:
    """Identity provider returning a fixed lookup result."""

    def __init__(
        self,
        email: Optional[str] = ADMIN_EMAIL,
        error: Optional[str] = None,
        user_id: str = "admin-1",
    ):
        self.email = email
        self.error = error
        self.user_id = user_id
        self.calls = 0

    async def get_user(self) -> UserLookup:
        self.calls += 1
        if self.error:
            return UserLookup(error=self.error)
        if self.email is None:
            return UserLookup()
        return UserLookup(user=IdentityUser(id=self.user_id, email=self.email))

    async def get_session(self):
        return None


def admin_gate_factory(email: Optional[str] = ADMIN_EMAIL, error: Optional[str] = None):
    """Gate factory for ``get_admin_gate_factory`` overrides."""

    def factory(token: Optional[str]) -> AdminAccessGate:
        return AdminAccessGate(StubIdentityProvider(email=email, error=error), ADMIN_EMAIL)

    return factory


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and client cache around each test."""
    reset_container()
    reset_client_cache()
    yield
    reset_container()
    reset_client_cache()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Bearer header for admin endpoints (the gate itself is stubbed)."""
    return {"Authorization": "Bearer admin-access-token"}


QUERY_METHODS = (
    "select", "insert", "update", "upsert", "delete",
    "eq", "neq", "gt", "gte", "lt", "lte", "is_",
    "order", "range", "limit",
)


def make_query(data: Optional[list] = None, count: Optional[int] = None) -> MagicMock:
    """
    Supabase query builder mock.

    Every builder method returns the same mock, so assertions can be made
    on any call in the chain; ``execute()`` returns ``data`` and ``count``.
    """
    query = MagicMock()
    for name in QUERY_METHODS:
        getattr(query, name).return_value = query
    query.not_ = query
    query.execute.return_value = MagicMock(data=data if data is not None else [], count=count)
    return query


def make_db(query: MagicMock) -> MagicMock:
    """Supabase client mock whose ``table()`` returns the given query."""
    db = MagicMock()
    db.table.return_value = query
    return db
