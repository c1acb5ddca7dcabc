"""
Shared utility functions for the signal engine.
"""
from __future__ import annotations

import email.utils
import re
from datetime import datetime, timezone
from typing import Optional

import tldextract
from dateutil import parser as dateparser

from signal_engine.models import Timestamp


# Bundled public suffix snapshot only; no network lookups
_extract_domain = tldextract.TLDExtract(suffix_list_urls=())

_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$"
)


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def normalize_text(text: str | None) -> str:
    """
    Normalize whitespace in text content.

    Args:
        text: Input text string (can be None)

    Returns:
        Normalized text with single spaces and trimmed edges
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """
    Parse a timestamp into an aware UTC datetime.

    Accepts ISO-8601 (NewsAPI, YouTube) and complete RFC-2822 dates (RSS).
    Fragments such as "18" or "Friday" are rejected rather than completed
    from today's date. Naive values are assumed to be UTC. Anything
    unparseable yields None so that callers can treat it as "outside every
    window" instead of failing.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = dateparser.isoparse(value.strip())
        except (ValueError, OverflowError):
            try:
                parsed = email.utils.parsedate_to_datetime(value.strip())
            except (TypeError, ValueError, IndexError):
                return None
            if parsed is None:
                return None
    else:
        return None

    if parsed.tzinfo:
        return parsed.astimezone(timezone.utc)
    return parsed.replace(tzinfo=timezone.utc)


def parse_iso8601_duration(duration: str | None) -> Optional[int]:
    """
    Convert an ISO-8601 duration such as ``PT1H2M3S`` to whole seconds.

    Returns None for missing or malformed values. ``P0D`` (live streams) is zero.
    """
    if not duration:
        return None
    match = _DURATION_RE.match(duration.strip().upper())
    if not match or duration.strip().upper() in ("P", "PT"):
        return None
    parts = {name: float(value) for name, value in match.groupdict().items() if value}
    total = (
        parts.get("days", 0) * 86400
        + parts.get("hours", 0) * 3600
        + parts.get("minutes", 0) * 60
        + parts.get("seconds", 0)
    )
    return int(total)


def extract_domain_from_url(url: str) -> str:
    """
    Extract the registered domain name (without suffix) from a URL.

    Args:
        url: Full URL string

    Returns:
        Lowercase domain label, e.g. "espn" for https://www.espn.com/nfl
    """
    if not url:
        return ""
    extracted = _extract_domain(url)
    return (extracted.domain or "").lower()


def round_half_away(value: float, digits: int) -> float:
    """Round half away from zero; built-in round() rounds half to even."""
    factor = 10 ** digits
    scaled = abs(value) * factor
    rounded = int(scaled + 0.5 + 1e-9) / factor
    if value >= 0 or rounded == 0:
        return rounded
    return -rounded
