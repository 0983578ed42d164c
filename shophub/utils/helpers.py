from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional
import string

from flask import request

CENTS = Decimal("0.01")


def safe_name(name: str) -> str:
    alphabet = string.ascii_lowercase + string.digits
    stripped = "".join(letter if letter in alphabet else "-" for letter in name.lower())
    return stripped


def slugify(name: str) -> str:
    """URL-safe slug: lowercase letters and digits joined by single dashes."""
    slug = safe_name(name.strip())
    while "--" in slug:
        slug = slug.replace("--", "-")
    slug = slug.strip("-")
    if slug == "":
        raise ValueError("Name not accepted!")
    return slug


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_cents(value: Any) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Any) -> str:
    if value is None:
        return ""
    return f"${to_cents(value):,.2f}"


def wants_json() -> bool:
    """True for API calls and for clients that only accept JSON."""
    if request.blueprint == "api" or request.path.startswith("/api/"):
        return True
    accept = request.accept_mimetypes
    return accept.accept_json and not accept.accept_html
