"""
OTP challenge module.

Issues, stores and verifies single-use 6-digit email codes.

Public API:
- IOTPService / IOTPStorage: Interfaces
- OTPService: Issue and verify codes
- InMemoryOTPStorage / SupabaseOTPStorage / FallbackOTPStorage: Storage backends
- OTPChallenge / OTPVerification: Models
- InvalidOrExpiredOTPError / OTPStorageError: Exceptions
"""

from .interfaces import IOTPService, IOTPStorage
from .models import OTPChallenge, OTPVerification
from .exceptions import InvalidOrExpiredOTPError, OTPStorageError
from .storage import InMemoryOTPStorage, SupabaseOTPStorage, FallbackOTPStorage
from .service import (
    OTPService,
    generate_otp_code,
    normalize_email,
    get_otp_service,
    reset_otp_service,
)

__all__ = [
    # Interfaces
    "IOTPService",
    "IOTPStorage",
    # Models
    "OTPChallenge",
    "OTPVerification",
    # Exceptions
    "InvalidOrExpiredOTPError",
    "OTPStorageError",
    # Storage
    "InMemoryOTPStorage",
    "SupabaseOTPStorage",
    "FallbackOTPStorage",
    # Service
    "OTPService",
    "generate_otp_code",
    "normalize_email",
    "get_otp_service",
    "reset_otp_service",
]
