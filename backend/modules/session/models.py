"""
Session module data models.

The authoritative session is the mutable ``Session`` owned by the state
machine. Everything handed out is a frozen ``SessionSnapshot``; the
conceptual state and the screen to show are derived from its fields.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, SecretStr, computed_field

from shared.models import UserIdentity


class AuthFlow(str, Enum):
    """Which path produced (or is producing) the session."""

    LOGIN = "login"
    SIGNUP = "signup"


class AuthState(str, Enum):
    """Conceptual authentication states."""

    UNBOOTSTRAPPED = "unbootstrapped"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_NEEDS_BIOMETRIC_ROUTE = "authenticated_needs_biometric_route"
    AUTHENTICATED_NEEDS_BIOMETRIC_SETUP = "authenticated_needs_biometric_setup"
    AUTHENTICATED_READY = "authenticated_ready"


class Route(str, Enum):
    """Screens the UI can be sent to."""

    SPLASH = "splash"
    WELCOME = "welcome"
    SIGN_IN = "sign_in"
    OTP_VERIFICATION = "otp_verification"
    CREATE_PASSWORD = "create_password"
    BIOMETRIC_SETUP = "biometric_setup"
    SIGNUP_COMPLETE = "signup_complete"
    BIOMETRIC_LOGIN = "biometric_login"
    MAIN_APP = "main_app"


class AppState(str, Enum):
    """App lifecycle states reported by the platform."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    BACKGROUND = "background"


class FlowContext(BaseModel):
    """
    Typed context carried between the steps of one login or signup.

    The login password is needed again after the OTP step for the real,
    session-creating login, so it rides along as a SecretStr.
    """

    flow: AuthFlow
    email: str
    password: Optional[SecretStr] = None

    model_config = {"frozen": True}


class FlowStep(BaseModel):
    """Result of a transition: where to go next and the context to keep."""

    route: Route
    context: Optional[FlowContext] = None


@dataclass
class Session:
    """Mutable session record. Only the state machine touches it."""

    user: Optional[UserIdentity] = None
    access_token: str = ""
    refresh_token: str = ""
    biometric_setup_completed: bool = False
    show_biometric_login: bool = False
    just_completed_signup: bool = False
    bootstrap_done: bool = False

    def establish(self, user: UserIdentity, access_token: str, refresh_token: str) -> None:
        """Set identity and tokens together."""
        if not access_token or not refresh_token:
            raise ValueError("A session needs both tokens")
        self.user = user
        self.access_token = access_token
        self.refresh_token = refresh_token

    def clear(self) -> None:
        """Forget everything except whether bootstrap has finished."""
        self.user = None
        self.access_token = ""
        self.refresh_token = ""
        self.biometric_setup_completed = False
        self.show_biometric_login = False
        self.just_completed_signup = False

    def snapshot(self) -> "SessionSnapshot":
        return SessionSnapshot(
            user=self.user,
            access_token=self.access_token,
            refresh_token=self.refresh_token,
            biometric_setup_completed=self.biometric_setup_completed,
            show_biometric_login=self.show_biometric_login,
            just_completed_signup=self.just_completed_signup,
            bootstrap_done=self.bootstrap_done,
        )


class SessionSnapshot(BaseModel):
    """Immutable view of the session at one instant."""

    user: Optional[UserIdentity] = None
    access_token: str = Field(default="", exclude=True)
    refresh_token: str = Field(default="", exclude=True)
    biometric_setup_completed: bool = False
    show_biometric_login: bool = False
    just_completed_signup: bool = False
    bootstrap_done: bool = False

    model_config = {"frozen": True}

    @computed_field
    @property
    def state(self) -> AuthState:
        if not self.bootstrap_done:
            return AuthState.UNBOOTSTRAPPED
        if self.user is None:
            return AuthState.UNAUTHENTICATED
        if self.show_biometric_login:
            return AuthState.AUTHENTICATED_NEEDS_BIOMETRIC_ROUTE
        if not self.biometric_setup_completed:
            return AuthState.AUTHENTICATED_NEEDS_BIOMETRIC_SETUP
        return AuthState.AUTHENTICATED_READY

    @computed_field
    @property
    def route(self) -> Route:
        state = self.state
        if state is AuthState.UNBOOTSTRAPPED:
            return Route.SPLASH
        # Signup stays on its screens even while confirmation holds the session back.
        if self.just_completed_signup:
            if self.biometric_setup_completed:
                return Route.SIGNUP_COMPLETE
            return Route.BIOMETRIC_SETUP
        if state is AuthState.UNAUTHENTICATED:
            return Route.WELCOME
        if state is AuthState.AUTHENTICATED_NEEDS_BIOMETRIC_ROUTE:
            return Route.BIOMETRIC_LOGIN
        if state is AuthState.AUTHENTICATED_NEEDS_BIOMETRIC_SETUP:
            return Route.BIOMETRIC_SETUP
        return Route.MAIN_APP

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


class BiometricStatus(BaseModel):
    """What the UI needs to label and offer biometric unlock."""

    has_hardware: bool
    is_enrolled: bool
    kind: str
    label: str
    enabled: bool
