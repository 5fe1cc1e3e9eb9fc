"""
Biometric gate module.

Device capability queries, modality classification and single biometric
prompts, independent of any session.

Public API:
- IBiometricGate / IBiometricDevice: Interfaces
- BiometricGate: Gate over a device
- SimulatedBiometricDevice: Scriptable device
- BiometricKind / AuthenticationType / BiometricAvailability / BiometricResult: Models
- BiometricUnavailableError / BiometricFailedError: Exceptions
"""

from .interfaces import IBiometricDevice, IBiometricGate
from .models import (
    AuthenticationType,
    BiometricKind,
    BiometricAvailability,
    BiometricResult,
)
from .exceptions import BiometricUnavailableError, BiometricFailedError
from .device import SimulatedBiometricDevice
from .service import BiometricGate, get_biometric_gate, reset_biometric_gate

__all__ = [
    # Interfaces
    "IBiometricDevice",
    "IBiometricGate",
    # Models
    "AuthenticationType",
    "BiometricKind",
    "BiometricAvailability",
    "BiometricResult",
    # Exceptions
    "BiometricUnavailableError",
    "BiometricFailedError",
    # Implementations
    "SimulatedBiometricDevice",
    "BiometricGate",
    "get_biometric_gate",
    "reset_biometric_gate",
]
