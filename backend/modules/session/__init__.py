"""
Auth session module.

The state machine that owns the single authenticated session and the
routes that expose it to the UI client.

Public API:
- AuthSessionStateMachine: Transitions over the one session
- AppStateChannel / Subscription: App lifecycle notifications
- SessionSnapshot / FlowContext / FlowStep: Models
- AuthFlow / AuthState / Route / AppState: Enums
- InvalidTransitionError: Operation not allowed in the current state
- validate_password / unmet_password_rules: Signup password rules
"""

from .models import (
    AppState,
    AuthFlow,
    AuthState,
    BiometricStatus,
    FlowContext,
    FlowStep,
    Route,
    Session,
    SessionSnapshot,
)
from .exceptions import InvalidTransitionError
from .lifecycle import AppStateChannel, AppStateListener, Subscription
from .passwords import PASSWORD_RULES, unmet_password_rules, validate_password
from .service import AuthSessionStateMachine

__all__ = [
    # Enums
    "AppState",
    "AuthFlow",
    "AuthState",
    "Route",
    # Models
    "BiometricStatus",
    "FlowContext",
    "FlowStep",
    "Session",
    "SessionSnapshot",
    # Exceptions
    "InvalidTransitionError",
    # Lifecycle
    "AppStateChannel",
    "AppStateListener",
    "Subscription",
    # Passwords
    "PASSWORD_RULES",
    "unmet_password_rules",
    "validate_password",
    # State machine
    "AuthSessionStateMachine",
]
