"""
Transactional email senders.

Two HTTP APIs are supported, selected by ``EMAIL_PROVIDER``:
- SendGridEmailSender: SendGrid v3 mail/send
- ResendEmailSender: Resend emails endpoint

A sender without an API key is a legal degraded mode: send() returns False
without making a request and the caller decides what to log.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from shared.config import get_settings

from .interfaces import IEmailSender
from .models import EmailMessage
from .exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)

PLACEHOLDER_KEYS = {"YOUR_SENDGRID_API_KEY_HERE", "YOUR_RESEND_API_KEY_HERE"}


def redact_email(email: str) -> str:
    """Redact an email address for logging."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class HttpEmailSender(ABC):
    """
    Base class for bearer-key JSON email APIs.

    Subclasses set PROVIDER and API_URL and build the provider payload.
    """

    PROVIDER = "http"
    API_URL = ""

    def __init__(
        self,
        api_key: Optional[str],
        from_address: str,
        from_name: str,
        timeout: float = 10.0,
    ):
        self._api_key = api_key or ""
        self._from_address = from_address
        self._from_name = from_name
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        """Check if a real API key is configured."""
        return bool(self._api_key) and self._api_key not in PLACEHOLDER_KEYS

    @abstractmethod
    def _build_payload(self, message: EmailMessage) -> dict[str, Any]:
        """Provider-specific JSON body for one message."""

    async def send(self, message: EmailMessage) -> bool:
        """Post the message to the provider API."""
        if not self.is_configured:
            logger.warning(f"{self.PROVIDER} API key not configured, email not sent")
            return False

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.API_URL,
                    headers={
                        "Authorization": f"Bearer {self._api_key}",
                        "Content-Type": "application/json",
                    },
                    json=self._build_payload(message),
                    timeout=self._timeout,
                )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(self.PROVIDER, str(e))

        if response.is_success:
            logger.info(f"Email sent via {self.PROVIDER} to {redact_email(message.to)}")
            return True

        logger.error(
            f"{self.PROVIDER} API error: {response.status_code} {response.text}"
        )
        return False


class SendGridEmailSender(HttpEmailSender):
    """Sender for the SendGrid v3 Web API."""

    PROVIDER = "sendgrid"
    API_URL = "https://api.sendgrid.com/v3/mail/send"

    def _build_payload(self, message: EmailMessage) -> dict[str, Any]:
        return {
            "personalizations": [
                {
                    "to": [{"email": message.to}],
                    "subject": message.subject,
                }
            ],
            "from": {"email": self._from_address, "name": self._from_name},
            "content": [
                {"type": "text/plain", "value": message.text},
                {"type": "text/html", "value": message.html},
            ],
        }


class ResendEmailSender(HttpEmailSender):
    """Sender for the Resend API."""

    PROVIDER = "resend"
    API_URL = "https://api.resend.com/emails"

    def _build_payload(self, message: EmailMessage) -> dict[str, Any]:
        return {
            "from": f"{self._from_name} <{self._from_address}>",
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }


# Module-level instance getter
_sender_instance: Optional[IEmailSender] = None


def get_email_sender() -> IEmailSender:
    """Get the configured email sender singleton."""
    global _sender_instance
    if _sender_instance is None:
        settings = get_settings()
        if settings.email_provider == "resend":
            _sender_instance = ResendEmailSender(
                api_key=settings.resend_api_key,
                from_address=settings.email_from_address,
                from_name=settings.email_from_name,
                timeout=settings.email_timeout_seconds,
            )
        else:
            _sender_instance = SendGridEmailSender(
                api_key=settings.sendgrid_api_key,
                from_address=settings.email_from_address,
                from_name=settings.email_from_name,
                timeout=settings.email_timeout_seconds,
            )
    return _sender_instance


def reset_email_sender() -> None:
    """Reset the email sender singleton (for testing)."""
    global _sender_instance
    _sender_instance = None
