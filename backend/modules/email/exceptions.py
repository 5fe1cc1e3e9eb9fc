"""
Email module exceptions.
"""

from shared.exceptions import ExternalServiceError


class EmailDeliveryError(ExternalServiceError):
    """Raised when the email API cannot be reached at all."""

    def __init__(self, provider: str, message: str):
        super().__init__(
            f"Failed to send email via {provider}: {message}",
            service=provider,
            code="EMAIL_DELIVERY_ERROR",
            details={"error": message},
        )
