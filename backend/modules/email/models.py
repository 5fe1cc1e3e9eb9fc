"""
Email module data models.
"""

from pydantic import BaseModel, Field


class EmailMessage(BaseModel):
    """A transactional email with both HTML and plain-text bodies."""

    to: str = Field(..., description="Recipient address")
    subject: str = Field(..., description="Subject line")
    html: str = Field(..., description="HTML body")
    text: str = Field(..., description="Plain-text body")
