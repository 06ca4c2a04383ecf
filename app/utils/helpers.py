"""General-purpose utility helpers."""
import re
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

_MONEY_RE = re.compile(r"(\d+(?:\.\d+)?)(?:\s*([kKmM])(?![a-zA-Z]))?")
_MULTIPLIERS = {"k": 1_000, "m": 1_000_000}


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def slugify(text: str) -> str:
    """Convert text to URL-friendly slug: "Jane O'Neil, CFP" -> "jane-o-neil-cfp"."""
    text = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return text.strip("-")


def truncate(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """Truncate text to max_length with suffix."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix


def parse_money_amount(text: str | None) -> float | None:
    """Extract the first amount from free text such as "$250k" or "$100/mo".

    Commas are ignored and a trailing k/m multiplies by a thousand/million.
    Returns None when the text holds no number.
    """
    if not text:
        return None
    match = _MONEY_RE.search(text.replace(",", ""))
    if match is None:
        return None
    amount = float(match.group(1))
    suffix = match.group(2)
    if suffix:
        amount *= _MULTIPLIERS[suffix.lower()]
    return amount


def strip_or_none(value: str | None) -> str | None:
    """Trim whitespace; empty strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


async def unique_slug(
    text: str,
    exists: Callable[[str], Awaitable[bool]],
    fallback: str = "item",
    reserved: frozenset[str] = frozenset(),
) -> str:
    """Slugify ``text`` and append -2, -3 ... until ``exists`` reports the slug free.

    Slugs in ``reserved`` are treated as taken.
    """
    base = slugify(text) or fallback
    candidate = base
    n = 2
    while candidate in reserved or await exists(candidate):
        candidate = f"{base}-{n}"
        n += 1
    return candidate
