"""
OTP storage backends.

This module implements the IOTPStorage interface with multiple
implementations:
- InMemoryOTPStorage: Process-local map, for tests and demos
- SupabaseOTPStorage: The ``otp_verifications`` table
- FallbackOTPStorage: Tries Supabase first, drops to memory on failure
"""

import logging
from typing import Any, Optional

from supabase import Client

from shared.repository import BaseRepository

from .interfaces import IOTPStorage
from .models import OTPChallenge
from .exceptions import OTPStorageError

logger = logging.getLogger(__name__)


class InMemoryOTPStorage:
    """OTP storage in a dict keyed by email."""

    def __init__(self) -> None:
        self._challenges: dict[str, OTPChallenge] = {}

    async def upsert(self, challenge: OTPChallenge) -> None:
        self._challenges[challenge.email] = challenge

    async def get(self, email: str) -> Optional[OTPChallenge]:
        return self._challenges.get(email)

    async def delete(self, email: str) -> None:
        self._challenges.pop(email, None)

    def __len__(self) -> int:
        return len(self._challenges)


class SupabaseOTPStorage(BaseRepository[OTPChallenge]):
    """
    OTP storage in a Supabase table.

    Schema: {email (primary key), otp, expires_at, created_at}. Every
    provider error is raised as OTPStorageError so FallbackOTPStorage can
    take over.
    """

    def __init__(self, db: Client, table: str = "otp_verifications") -> None:
        super().__init__(db, table)

    async def upsert(self, challenge: OTPChallenge) -> None:
        """Upsert the row for the challenge's email."""
        row = {
            "email": challenge.email,
            "otp": challenge.code,
            "expires_at": challenge.expires_at.isoformat(),
            "created_at": challenge.created_at.isoformat(),
        }
        try:
            self._query().upsert(row, on_conflict="email").execute()
        except Exception as e:
            raise OTPStorageError("upsert", str(e))

    async def get(self, email: str) -> Optional[OTPChallenge]:
        """Select the row for an email."""
        try:
            result = self._query().select("*").eq("email", email).execute()
        except Exception as e:
            raise OTPStorageError("select", str(e))

        if not result.data:
            return None
        return self._map_to_challenge(result.data[0])

    async def delete(self, email: str) -> None:
        """Delete the row for an email."""
        try:
            self._query().delete().eq("email", email).execute()
        except Exception as e:
            raise OTPStorageError("delete", str(e))

    def _map_to_challenge(self, row: dict[str, Any]) -> OTPChallenge:
        return OTPChallenge(
            email=row["email"],
            code=row["otp"],
            expires_at=row["expires_at"],
            created_at=row.get("created_at") or row["expires_at"],
        )


class FallbackOTPStorage:
    """
    Durable storage with an in-memory fallback.

    The first durable failure (for example a missing table) switches this
    instance to the in-memory store for the rest of the process. Staying
    switched keeps issue and verify on the same backend, so a code issued
    in memory is always found again and a consumed code is never read back
    from a durable row that could not be deleted.
    """

    def __init__(
        self,
        primary: IOTPStorage,
        fallback: Optional[IOTPStorage] = None,
    ):
        self._primary = primary
        self._fallback = fallback or InMemoryOTPStorage()
        self._degraded = False

    @property
    def degraded(self) -> bool:
        """Whether the in-memory fallback is in use."""
        return self._degraded

    def _degrade(self, error: OTPStorageError) -> None:
        if not self._degraded:
            logger.warning(
                f"Durable OTP storage unavailable, using in-memory storage: {error.message}"
            )
        self._degraded = True

    async def upsert(self, challenge: OTPChallenge) -> None:
        if not self._degraded:
            try:
                await self._primary.upsert(challenge)
                return
            except OTPStorageError as e:
                self._degrade(e)
        await self._fallback.upsert(challenge)

    async def get(self, email: str) -> Optional[OTPChallenge]:
        if not self._degraded:
            try:
                return await self._primary.get(email)
            except OTPStorageError as e:
                self._degrade(e)
        return await self._fallback.get(email)

    async def delete(self, email: str) -> None:
        if not self._degraded:
            try:
                await self._primary.delete(email)
                return
            except OTPStorageError as e:
                self._degrade(e)
        await self._fallback.delete(email)
