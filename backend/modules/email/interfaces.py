"""
Email module interface.

The OTP module depends on IEmailSender only; which transactional email API
sits behind it is a configuration choice.
"""

from typing import Protocol, runtime_checkable

from .models import EmailMessage


@runtime_checkable
class IEmailSender(Protocol):
    """Interface for transactional email delivery."""

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        ...

    async def send(self, message: EmailMessage) -> bool:
        """
        Send a message.

        Returns:
            True if the API accepted the message, False if the sender is not
            configured or the API answered with a non-success status

        Raises:
            EmailDeliveryError: If the API could not be reached
        """
        ...
