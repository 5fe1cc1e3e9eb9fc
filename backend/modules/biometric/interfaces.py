"""
Biometric module interfaces.

IBiometricDevice is the thin native layer (sensor queries and the modal
prompt). IBiometricGate is what the session state machine consumes.
"""

from typing import Protocol, runtime_checkable

from .models import AuthenticationType, BiometricAvailability, BiometricKind, BiometricResult


@runtime_checkable
class IBiometricDevice(Protocol):
    """Device-native biometric API."""

    async def has_hardware(self) -> bool:
        ...

    async def is_enrolled(self) -> bool:
        ...

    async def supported_authentication_types(self) -> list[AuthenticationType]:
        ...

    async def authenticate(
        self,
        prompt_message: str,
        cancel_label: str,
        fallback_label: str,
        disable_device_fallback: bool,
    ) -> BiometricResult:
        """Show the modal prompt and block until the user answers it."""
        ...


@runtime_checkable
class IBiometricGate(Protocol):
    """
    Interface for biometric checks.

    Independent of any session state.
    """

    async def is_available(self) -> BiometricAvailability:
        ...

    async def classify(self) -> BiometricKind:
        ...

    async def challenge(self, prompt_text: str) -> BiometricResult:
        """
        Run one prompt. Never retried automatically.
        """
        ...
