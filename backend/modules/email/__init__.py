"""
Email delivery module.

Sends transactional email (the OTP verification code) through an HTTP
email API.

Public API:
- IEmailSender: Interface for email delivery
- EmailMessage: Message model
- SendGridEmailSender / ResendEmailSender: Provider implementations
- create_otp_email: Verification email template
"""

from .interfaces import IEmailSender
from .models import EmailMessage
from .exceptions import EmailDeliveryError
from .templates import create_otp_email, OTP_SUBJECT
from .service import (
    HttpEmailSender,
    SendGridEmailSender,
    ResendEmailSender,
    get_email_sender,
    reset_email_sender,
    redact_email,
)

__all__ = [
    # Interface
    "IEmailSender",
    # Models
    "EmailMessage",
    # Exceptions
    "EmailDeliveryError",
    # Templates
    "create_otp_email",
    "OTP_SUBJECT",
    # Senders
    "HttpEmailSender",
    "SendGridEmailSender",
    "ResendEmailSender",
    "get_email_sender",
    "reset_email_sender",
    "redact_email",
]
