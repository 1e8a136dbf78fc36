"""
Display formatting helpers.

All helpers accept None and return "-" for it, so callers never need to
guard a missing snapshot field before rendering.
"""

from datetime import datetime, timezone
from typing import Optional

DASH = "-"


def format_number(value: Optional[float], decimals: int = 0) -> str:
    """Format with thousands separators."""
    if value is None:
        return DASH
    return f"{value:,.{decimals}f}"


def format_currency(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return DASH
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{decimals}f}"


def format_percent(value: Optional[float], decimals: int = 2) -> str:
    if value is None:
        return DASH
    return f"{value:.{decimals}f}%"


def format_signed_percent(value: Optional[float], decimals: int = 4) -> str:
    """Percentage with an explicit + for non-negative values."""
    if value is None:
        return DASH
    return f"{value:+.{decimals}f}%"


def format_compact_usd(value: Optional[float]) -> str:
    """Short USD form for volumes: $1.23M, $45.6K, $789."""
    if value is None:
        return DASH
    if value >= 1_000_000:
        return f"${value / 1_000_000:.2f}M"
    if value >= 1_000:
        return f"${value / 1_000:.1f}K"
    return f"${value:.0f}"


def parse_timestamp(iso_string: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp as an aware UTC datetime.

    Upstream timestamps are UTC; a missing zone indicator is read as UTC.
    Returns None for empty or unparseable input.
    """
    if not iso_string:
        return None
    try:
        parsed = datetime.fromisoformat(iso_string.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(iso_string: Optional[str]) -> str:
    """Format a snapshot timestamp, e.g. 'Oct 17, 2026, 11:48 AM UTC'."""
    parsed = parse_timestamp(iso_string)
    if parsed is None:
        return DASH
    return f"{parsed:%b} {parsed.day}, {parsed:%Y, %I:%M %p} UTC"


def format_stars(stars: int, total: int = 5) -> str:
    """Render a star count as filled/empty glyphs."""
    filled = max(0, min(total, stars))
    return "★" * filled + "☆" * (total - filled)
