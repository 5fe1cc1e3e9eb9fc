"""
Biometric module exceptions.
"""

from typing import Optional

from shared.exceptions import AuthenticationError


class BiometricUnavailableError(AuthenticationError):
    """Raised when the device has no biometric hardware or nothing is enrolled."""

    def __init__(self, has_hardware: bool, is_enrolled: bool):
        super().__init__(
            "Biometric authentication is not available on this device",
            code="BIOMETRIC_UNAVAILABLE",
            details={"has_hardware": has_hardware, "is_enrolled": is_enrolled},
        )


class BiometricFailedError(AuthenticationError):
    """Raised when the prompt was rejected, cancelled or errored."""

    def __init__(self, error: Optional[str] = None):
        super().__init__(
            "Biometric authentication failed",
            code="BIOMETRIC_FAILED",
            details={"error": error} if error else None,
        )
