"""
OTP challenge service.

Issues 6-digit codes valid for five minutes, stores them through an
IOTPStorage and emails them through an IEmailSender. Issuing succeeds as
soon as a verifiable code is stored; whether the email arrives only shows
up in the logs.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from shared.config import get_settings
from modules.email import IEmailSender, EmailDeliveryError, create_otp_email, redact_email

from .interfaces import IOTPService, IOTPStorage
from .models import OTPChallenge, OTPVerification
from .exceptions import InvalidOrExpiredOTPError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_otp_code() -> str:
    """Uniformly random code in 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


def normalize_email(email: str) -> str:
    """Storage key for an email address."""
    return email.strip().lower()


class OTPService(IOTPService):
    """
    One-time code issuance and verification.

    The clock is injectable so expiry can be tested without waiting.
    """

    def __init__(
        self,
        storage: IOTPStorage,
        email_sender: IEmailSender,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._storage = storage
        self._email_sender = email_sender
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or _utcnow

    @property
    def storage(self) -> IOTPStorage:
        return self._storage

    async def issue(self, email: str) -> None:
        """Store a fresh code for the email, replacing any earlier one, then email it."""
        key = normalize_email(email)
        now = self._clock()
        code = generate_otp_code()

        await self._storage.upsert(
            OTPChallenge(
                email=key,
                code=code,
                expires_at=now + self._ttl,
                created_at=now,
            )
        )

        message = create_otp_email(key, code, int(self._ttl.total_seconds()))
        try:
            sent = await self._email_sender.send(message)
        except EmailDeliveryError as e:
            logger.error(f"Error sending OTP email to {redact_email(key)}: {e.message}")
            sent = False

        if sent:
            logger.info(f"OTP email sent to {redact_email(key)}")
        else:
            # The code stays valid; surface it so the degraded mode is usable.
            logger.warning(f"OTP for {key}: {code} (email not delivered)")

    async def verify(self, email: str, code: str) -> OTPVerification:
        """Accept the code once if it matches and has not expired."""
        key = normalize_email(email)
        challenge = await self._storage.get(key)

        if challenge is None:
            raise InvalidOrExpiredOTPError(InvalidOrExpiredOTPError.NOT_FOUND)

        if not secrets.compare_digest(challenge.code.encode(), code.strip().encode()):
            raise InvalidOrExpiredOTPError(InvalidOrExpiredOTPError.MISMATCH)

        if challenge.is_expired(self._clock()):
            await self._storage.delete(key)
            raise InvalidOrExpiredOTPError(InvalidOrExpiredOTPError.EXPIRED)

        await self._storage.delete(key)
        return OTPVerification(email=key)


# Module-level instance getter
_service_instance: Optional[OTPService] = None


def get_otp_service() -> OTPService:
    """
    Get the OTP service singleton.

    Uses Supabase with the in-memory fallback when Supabase is configured,
    and memory alone otherwise.
    """
    global _service_instance
    if _service_instance is None:
        from modules.email import get_email_sender
        from .storage import FallbackOTPStorage, InMemoryOTPStorage, SupabaseOTPStorage

        settings = get_settings()
        storage: IOTPStorage
        if settings.supabase_url and settings.supabase_anon_key:
            from shared.database import get_supabase_client

            storage = FallbackOTPStorage(
                SupabaseOTPStorage(get_supabase_client(), settings.otp_table)
            )
        else:
            logger.warning("Supabase not configured, OTP codes are kept in memory")
            storage = InMemoryOTPStorage()

        _service_instance = OTPService(
            storage=storage,
            email_sender=get_email_sender(),
            ttl_seconds=settings.otp_ttl_seconds,
        )
    return _service_instance


def reset_otp_service() -> None:
    """Reset the OTP service singleton (for testing)."""
    global _service_instance
    _service_instance = None
