import re
from datetime import date, datetime, timezone
from email.utils import format_datetime

from .errors import DateParseError

# Exactly "2025-01-02" in ASCII digits; date.fromisoformat alone also
# accepts "20250102" etc.
ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Locale-independent, unlike strftime("%b")
MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def normalize(raw) -> date:
    """
    Parse a stored "YYYY-MM-DD" string into a date.

    Raises DateParseError for anything that is not a real calendar day.
    """
    if not isinstance(raw, str):
        raise DateParseError(raw)

    if not ISO_DATE_RE.fullmatch(raw):
        raise DateParseError(raw)

    year, month, day = (int(part) for part in raw.split("-"))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise DateParseError(raw) from exc


def display(d: date, reference_year: int) -> str:
    """
    Human label for a post date: "May 11" within reference_year,
    "Dec 25, 2019" otherwise.
    """
    label = f"{MONTH_ABBR[d.month - 1]} {d.day}"
    if d.year == reference_year:
        return label
    return f"{label}, {d.year}"


def rfc822(d: date) -> str:
    """Feed pubDate for a calendar date, pinned to midnight UTC."""
    dt = datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
    return format_datetime(dt, usegmt=True)
