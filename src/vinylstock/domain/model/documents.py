"""Header field rules shared by shipments and sales."""

from __future__ import annotations

from datetime import date

from vinylstock.domain.exceptions import ValidationError

MAX_LINK_LENGTH = 255


def clean_document_link(link: str | None, title: str) -> str:
    """Return the stripped link, or raise if it is missing or too long."""
    if link is None or not link.strip():
        raise ValidationError(f"{title} is required")
    link = link.strip()
    if len(link) > MAX_LINK_LENGTH:
        raise ValidationError(f"{title} must be at most {MAX_LINK_LENGTH} characters")
    return link


def require_date(value: date | None, title: str) -> date:
    if value is None:
        raise ValidationError(f"{title} is required")
    if not isinstance(value, date):
        raise ValidationError(f"{title} must be a date, got {type(value).__name__}")
    return value
