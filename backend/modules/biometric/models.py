"""
Biometric module data models.
"""

from enum import Enum, IntEnum
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticationType(IntEnum):
    """Device-reported authentication types (common mobile numbering)."""

    FINGERPRINT = 1
    FACIAL_RECOGNITION = 2
    IRIS = 3


class BiometricKind(str, Enum):
    """Biometric modality, used only to label prompts and screens."""

    FACE_RECOGNITION = "face_recognition"
    FINGERPRINT = "fingerprint"
    IRIS = "iris"
    GENERIC = "generic"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    BiometricKind.FACE_RECOGNITION: "Face ID",
    BiometricKind.FINGERPRINT: "Touch ID",
    BiometricKind.IRIS: "Iris",
    BiometricKind.GENERIC: "Biometric",
}


class BiometricAvailability(BaseModel):
    """Hardware presence and enrollment as reported by the device."""

    has_hardware: bool = Field(..., description="Device has a biometric sensor")
    is_enrolled: bool = Field(..., description="User enrolled a biometric on the device")

    @property
    def usable(self) -> bool:
        return self.has_hardware and self.is_enrolled


class BiometricResult(BaseModel):
    """Outcome of one biometric prompt."""

    success: bool
    error: Optional[str] = None
