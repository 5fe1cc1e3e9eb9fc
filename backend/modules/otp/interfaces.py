"""
OTP module interfaces.

IOTPStorage has one contract for every backend, so callers cannot tell
whether a code lives in Supabase or in process memory.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import OTPChallenge, OTPVerification


@runtime_checkable
class IOTPStorage(Protocol):
    """
    Interface for OTP challenge persistence.

    Keyed by email with upsert semantics.
    """

    async def upsert(self, challenge: OTPChallenge) -> None:
        """
        Store a challenge, replacing any existing one for the same email.

        Raises:
            OTPStorageError: If the backend cannot be written
        """
        ...

    async def get(self, email: str) -> Optional[OTPChallenge]:
        """
        Point lookup by email.

        Returns:
            The stored challenge, expired or not, or None

        Raises:
            OTPStorageError: If the backend cannot be read
        """
        ...

    async def delete(self, email: str) -> None:
        """
        Remove the challenge for an email, if any.

        Raises:
            OTPStorageError: If the backend cannot be written
        """
        ...


@runtime_checkable
class IOTPService(Protocol):
    """Interface for issuing and verifying one-time codes."""

    async def issue(self, email: str) -> None:
        """
        Issue a new code for an email and try to deliver it.

        Success means a verifiable code exists; delivery failures are
        logged, not raised.
        """
        ...

    async def verify(self, email: str, code: str) -> OTPVerification:
        """
        Verify and consume a code.

        Raises:
            InvalidOrExpiredOTPError: If the code is wrong, expired or absent
        """
        ...
