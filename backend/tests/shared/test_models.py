"""
Tests for shared models.
"""

import pytest
from types import SimpleNamespace
from pydantic import ValidationError

from shared.models import UserIdentity


class TestUserIdentity:
    """Tests for the UserIdentity model."""

    def test_create_with_required_fields(self):
        """Should create identity with id and email only."""
        user = UserIdentity(id="user-123", email="test@example.com")
        assert user.id == "user-123"
        assert user.name == ""

    def test_is_frozen(self):
        """Identity should be immutable."""
        user = UserIdentity(id="user-123", email="test@example.com")
        with pytest.raises(ValidationError):
            user.name = "Changed"

    def test_ignores_extra_fields(self):
        """Unknown provider fields should be dropped."""
        user = UserIdentity(id="user-123", email="test@example.com", role="authenticated")
        assert not hasattr(user, "role")

    def test_from_provider_user_reads_metadata_name(self):
        """Display name should come from user metadata."""
        provider_user = SimpleNamespace(
            id="abc", email="jane@example.com", user_metadata={"name": "Jane"}
        )
        user = UserIdentity.from_provider_user(provider_user)
        assert user == UserIdentity(id="abc", name="Jane", email="jane@example.com")

    def test_from_provider_user_without_metadata(self):
        """Missing metadata should give an empty name."""
        provider_user = SimpleNamespace(id="abc", email="jane@example.com", user_metadata=None)
        assert UserIdentity.from_provider_user(provider_user).name == ""
