"""
Biometric gate implementation.
"""

import logging
from typing import Optional

from shared.config import get_settings

from .interfaces import IBiometricDevice, IBiometricGate
from .models import AuthenticationType, BiometricAvailability, BiometricKind, BiometricResult

logger = logging.getLogger(__name__)

CANCEL_LABEL = "Cancel"
FALLBACK_LABEL = "Use Passcode"


class BiometricGate(IBiometricGate):
    """Capability checks and single prompts over an IBiometricDevice."""

    def __init__(self, device: IBiometricDevice):
        self._device = device

    async def is_available(self) -> BiometricAvailability:
        return BiometricAvailability(
            has_hardware=await self._device.has_hardware(),
            is_enrolled=await self._device.is_enrolled(),
        )

    async def classify(self) -> BiometricKind:
        """Pick a display kind from the supported types, face first."""
        try:
            supported = await self._device.supported_authentication_types()
        except Exception as e:
            logger.error(f"Error getting biometric type: {e}")
            return BiometricKind.GENERIC

        if AuthenticationType.FACIAL_RECOGNITION in supported:
            return BiometricKind.FACE_RECOGNITION
        if AuthenticationType.FINGERPRINT in supported:
            return BiometricKind.FINGERPRINT
        if AuthenticationType.IRIS in supported:
            return BiometricKind.IRIS
        return BiometricKind.GENERIC

    async def challenge(self, prompt_text: str) -> BiometricResult:
        """Show one prompt; device errors come back as a failed result."""
        try:
            result = await self._device.authenticate(
                prompt_text,
                cancel_label=CANCEL_LABEL,
                fallback_label=FALLBACK_LABEL,
                disable_device_fallback=False,
            )
        except Exception as e:
            logger.error(f"Biometric verification error: {e}")
            return BiometricResult(success=False, error="Biometric verification failed")

        logger.debug(f"Biometric verification result: {result.success}")
        return result


# Module-level instance getter
_gate_instance: Optional[BiometricGate] = None


def get_biometric_gate() -> BiometricGate:
    """Get the biometric gate singleton for the configured device."""
    global _gate_instance
    if _gate_instance is None:
        settings = get_settings()
        if settings.biometric_device != "simulated":
            raise RuntimeError(
                f"Unsupported biometric device: {settings.biometric_device}. "
                "Set BIOMETRIC_DEVICE=simulated."
            )
        from .device import SimulatedBiometricDevice

        device = SimulatedBiometricDevice(
            supported_types=[AuthenticationType(t) for t in settings.biometric_simulated_types],
            enrolled=settings.biometric_simulated_enrolled,
        )
        _gate_instance = BiometricGate(device)
    return _gate_instance


def reset_biometric_gate() -> None:
    """Reset the biometric gate singleton (for testing)."""
    global _gate_instance
    _gate_instance = None
