"""
Password rules for account creation.
"""

import re

from shared.exceptions import ValidationError

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'

PASSWORD_RULES: list[tuple[str, "re.Pattern[str]"]] = [
    ("Minimum 8 characters", re.compile(r".{8,}", re.DOTALL)),
    ("At least one uppercase letter", re.compile(r"[A-Z]")),
    ("At least one lowercase letter", re.compile(r"[a-z]")),
    ("At least one number", re.compile(r"\d")),
    ("At least one special character", re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]")),
]


def unmet_password_rules(password: str) -> list[str]:
    """Descriptions of the rules the password does not meet."""
    return [text for text, pattern in PASSWORD_RULES if not pattern.search(password)]


def validate_password(password: str) -> None:
    """
    Raises:
        ValidationError: Listing every unmet rule
    """
    unmet = unmet_password_rules(password)
    if unmet:
        raise ValidationError(
            "Password does not meet requirements",
            code="WEAK_PASSWORD",
            details={"unmet": unmet},
        )
