"""
OTP module data models.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class OTPChallenge(BaseModel):
    """
    An outstanding one-time code for an email address.

    At most one challenge exists per email; issuing a new one replaces it.
    """

    email: str = Field(..., description="Email the code was issued for (storage key)")
    code: str = Field(..., min_length=6, max_length=6, description="6-digit code")
    expires_at: datetime = Field(..., description="Instant after which the code is void")
    created_at: datetime = Field(..., description="Issue time")

    def is_expired(self, now: datetime) -> bool:
        """Whether the code is past its expiry at ``now``."""
        return now > self.expires_at


class OTPVerification(BaseModel):
    """Successful verification result."""

    success: bool = True
    email: str
    message: str = "OTP verified successfully"
