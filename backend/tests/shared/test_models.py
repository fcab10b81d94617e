"""
Tests for shared models.
"""

import pytest
from pydantic import ValidationError

from shared.models import AuthenticatedUser


class TestAuthenticatedUser:
    def test_defaults(self):
        user = AuthenticatedUser(id="user-123", email="keeper@candletime.app")
        assert user.email_verified is False
        assert user.role == "user"
        assert user.created_at is None

    def test_email_validation(self):
        with pytest.raises(ValidationError):
            AuthenticatedUser(id="user-123", email="not-an-email")

    def test_frozen(self):
        user = AuthenticatedUser(id="user-123", email="keeper@candletime.app")
        with pytest.raises(ValidationError):
            user.role = "admin"

    def test_extra_claims_ignored(self):
        user = AuthenticatedUser(id="user-123", email="keeper@candletime.app", aud="authenticated")
        assert not hasattr(user, "aud")
