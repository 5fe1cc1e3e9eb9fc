"""
Email templates.
"""

from .models import EmailMessage

OTP_SUBJECT = "Your Axys Verification Code"

_OTP_HTML = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Axys Verification Code</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f5f5f5;">
  <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; padding: 40px 20px;">
    <div style="text-align: center; margin-bottom: 40px;">
      <h1 style="color: #000000; font-size: 32px; margin: 0;">AXYS</h1>
      <p style="color: #666666; font-size: 16px; margin: 10px 0 0 0;">Banking for Neo Thinkers</p>
    </div>
    <div style="text-align: center;">
      <h2 style="color: #000000; font-size: 24px; margin-bottom: 20px;">Verify Your Email</h2>
      <p style="color: #333333; font-size: 16px; line-height: 1.5;">
        Please use the verification code below to continue:
      </p>
      <div style="background-color: #000000; padding: 30px; border-radius: 12px; margin: 30px 0;">
        <h1 style="color: #ffffff; font-size: 36px; letter-spacing: 8px; margin: 0;">{code}</h1>
      </div>
      <p style="color: #666666; font-size: 14px;">
        This code will expire in <strong>{minutes} minutes</strong>.
      </p>
      <p style="color: #666666; font-size: 14px;">
        <strong>Security Tip:</strong> Never share this code with anyone.
      </p>
    </div>
    <div style="text-align: center; margin-top: 40px; padding-top: 20px; border-top: 1px solid #eeeeee;">
      <p style="color: #999999; font-size: 12px; margin: 0;">
        If you didn't request this code, please ignore this email.
      </p>
    </div>
  </div>
</body>
</html>
"""

_OTP_TEXT = """\
AXYS - Banking for Neo Thinkers

Verify Your Email

Verification Code: {code}

This code will expire in {minutes} minutes.

Security Tip: Never share this code with anyone.

If you didn't request this code, please ignore this email.
"""


def create_otp_email(email: str, code: str, ttl_seconds: int = 300) -> EmailMessage:
    """Build the verification email for a one-time code."""
    minutes = max(1, ttl_seconds // 60)
    return EmailMessage(
        to=email,
        subject=OTP_SUBJECT,
        html=_OTP_HTML.format(code=code, minutes=minutes),
        text=_OTP_TEXT.format(code=code, minutes=minutes),
    )
