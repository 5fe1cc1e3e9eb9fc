import pytest
from pydantic import ValidationError

from modules.session import AuthState, Route, Session
from shared.models import UserIdentity

USER = UserIdentity(id="user-123", name="Jane", email="jane@example.com")


def _session(**fields):
    session = Session(bootstrap_done=True)
    if fields.pop("signed_in", True):
        session.establish(USER, "acc", "ref")
    for name, value in fields.items():
        setattr(session, name, value)
    return session


class TestSession:
    def test_establish_requires_both_tokens(self):
        """Identity without both tokens should be refused."""
        with pytest.raises(ValueError):
            Session().establish(USER, "acc", "")

    def test_clear_keeps_bootstrap_done(self):
        """Clearing should forget everything but the bootstrap flag."""
        session = _session(biometric_setup_completed=True, show_biometric_login=True)

        session.clear()

        assert session == Session(bootstrap_done=True)


class TestDerivedState:
    @pytest.mark.parametrize(
        "fields,state,route",
        [
            ({"signed_in": False, "bootstrap_done": False}, AuthState.UNBOOTSTRAPPED, Route.SPLASH),
            ({"signed_in": False}, AuthState.UNAUTHENTICATED, Route.WELCOME),
            (
                {"show_biometric_login": True, "biometric_setup_completed": True},
                AuthState.AUTHENTICATED_NEEDS_BIOMETRIC_ROUTE,
                Route.BIOMETRIC_LOGIN,
            ),
            ({}, AuthState.AUTHENTICATED_NEEDS_BIOMETRIC_SETUP, Route.BIOMETRIC_SETUP),
            ({"biometric_setup_completed": True}, AuthState.AUTHENTICATED_READY, Route.MAIN_APP),
            (
                {"just_completed_signup": True},
                AuthState.AUTHENTICATED_NEEDS_BIOMETRIC_SETUP,
                Route.BIOMETRIC_SETUP,
            ),
            (
                {"just_completed_signup": True, "biometric_setup_completed": True},
                AuthState.AUTHENTICATED_READY,
                Route.SIGNUP_COMPLETE,
            ),
            (
                {"signed_in": False, "just_completed_signup": True},
                AuthState.UNAUTHENTICATED,
                Route.BIOMETRIC_SETUP,
            ),
        ],
    )
    def test_state_and_route(self, fields, state, route):
        """State and route should follow from the session fields."""
        snapshot = _session(**fields).snapshot()
        assert snapshot.state is state
        assert snapshot.route is route

    def test_snapshot_is_frozen(self):
        """Snapshots should not be mutable."""
        snapshot = _session().snapshot()
        with pytest.raises(ValidationError):
            snapshot.show_biometric_login = True
