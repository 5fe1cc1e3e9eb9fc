"""
OTP module exceptions.
"""

from shared.exceptions import ExternalServiceError, ValidationError


class InvalidOrExpiredOTPError(ValidationError):
    """
    Raised when a code cannot be accepted.

    Wrong code, expired code and no code on record all surface as this one
    error. ``details["reason"]`` tells them apart for logs only; every case
    requires a new code.
    """

    NOT_FOUND = "not_found"
    MISMATCH = "mismatch"
    EXPIRED = "expired"

    def __init__(self, reason: str):
        super().__init__(
            "Invalid or expired OTP",
            code="INVALID_OR_EXPIRED_OTP",
            details={"reason": reason},
        )
        self.reason = reason


class OTPStorageError(ExternalServiceError):
    """Raised when the durable OTP store cannot be used."""

    def __init__(self, operation: str, message: str):
        super().__init__(
            f"OTP storage {operation} failed: {message}",
            service="supabase",
            code="OTP_STORAGE_ERROR",
            details={"operation": operation, "error": message},
        )
