"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from settings.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.credentials.interfaces import ICredentialGateway
    from modules.otp.interfaces import IOTPService
    from modules.vault.interfaces import ITokenVault
    from modules.biometric.interfaces import IBiometricGate
    from modules.session.lifecycle import AppStateChannel
    from modules.session.models import FlowContext
    from modules.session.service import AuthSessionStateMachine


class FlowStore:
    """
    Holds the flow context of the login or signup in progress.

    The context (including a login password) stays in the process and is
    never sent to the client. There is one session, so there is at most
    one flow in progress.
    """

    def __init__(self) -> None:
        self._context: "FlowContext | None" = None

    def get(self) -> "FlowContext | None":
        return self._context

    def set(self, context: "FlowContext | None") -> None:
        self._context = context

    def clear(self) -> None:
        self._context = None


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached for the life of
    the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._credentials: "ICredentialGateway | None" = None
        self._otp: "IOTPService | None" = None
        self._vault: "ITokenVault | None" = None
        self._biometric: "IBiometricGate | None" = None
        self._app_state_channel: "AppStateChannel | None" = None
        self._session: "AuthSessionStateMachine | None" = None
        self._flows: Optional[FlowStore] = None

    @property
    def credentials(self) -> "ICredentialGateway":
        """Get the credential gateway instance."""
        if self._credentials is None:
            from modules.credentials import get_credential_gateway
            self._credentials = get_credential_gateway()
        return self._credentials

    @property
    def otp(self) -> "IOTPService":
        """Get the OTP service instance."""
        if self._otp is None:
            from modules.otp import get_otp_service
            self._otp = get_otp_service()
        return self._otp

    @property
    def vault(self) -> "ITokenVault":
        """Get the token vault instance."""
        if self._vault is None:
            from modules.vault import get_token_vault
            self._vault = get_token_vault()
        return self._vault

    @property
    def biometric(self) -> "IBiometricGate":
        """Get the biometric gate instance."""
        if self._biometric is None:
            from modules.biometric import get_biometric_gate
            self._biometric = get_biometric_gate()
        return self._biometric

    @property
    def app_state_channel(self) -> "AppStateChannel":
        """Get the app lifecycle channel."""
        if self._app_state_channel is None:
            from modules.session.lifecycle import AppStateChannel
            self._app_state_channel = AppStateChannel()
        return self._app_state_channel

    @property
    def session(self) -> "AuthSessionStateMachine":
        """Get the session state machine."""
        if self._session is None:
            from modules.session.service import AuthSessionStateMachine
            self._session = AuthSessionStateMachine(
                gateway=self.credentials,
                otp=self.otp,
                vault=self.vault,
                biometric=self.biometric,
                app_state_channel=self.app_state_channel,
                bootstrap_min_duration=get_settings().bootstrap_min_duration_seconds,
            )
        return self._session

    @property
    def flows(self) -> FlowStore:
        """Get the pending flow holder."""
        if self._flows is None:
            self._flows = FlowStore()
        return self._flows

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        if self._session is not None:
            self._session.detach()
        self._credentials = None
        self._otp = None
        self._vault = None
        self._biometric = None
        self._app_state_channel = None
        self._session = None
        self._flows = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_session_machine() -> "AuthSessionStateMachine":
    """FastAPI dependency for the session state machine."""
    return get_container().session


def get_flow_store() -> FlowStore:
    """FastAPI dependency for the pending flow holder."""
    return get_container().flows


def get_app_state_channel() -> "AppStateChannel":
    """FastAPI dependency for the app lifecycle channel."""
    return get_container().app_state_channel
