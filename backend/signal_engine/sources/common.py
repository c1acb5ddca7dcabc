"""
Common utilities for media source fetchers.
"""
from __future__ import annotations

import html
import re
from typing import Optional

_TAG_RE = re.compile(r"<[^>]+>")


def clean_text(text: Optional[str]) -> str:
    """
    Clean and normalize text content.

    Args:
        text: Raw text string or None

    Returns:
        Cleaned text string, empty string if input is None
    """
    if not text:
        return ""
    return text.strip()


def strip_html(text: Optional[str]) -> str:
    """
    Remove markup and decode entities from feed descriptions.

    Args:
        text: HTML fragment or None

    Returns:
        Plain text with collapsed whitespace
    """
    if not text:
        return ""
    plain = html.unescape(_TAG_RE.sub(" ", text))
    return re.sub(r"\s+", " ", plain).strip()


def name_terms(subject_name: str) -> list[str]:
    """Lowercase name tokens used for loose mention matching in feeds."""
    return [term for term in subject_name.lower().split() if term]
