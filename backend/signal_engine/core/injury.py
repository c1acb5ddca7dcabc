"""
Injury keyword detection and the breaking-injury alert.

Detection is two-tier. A single high-priority term (surgery, torn ACL,
season-ending) flags a text on its own; medium-priority terms (hurt,
questionable) are common in routine coverage, so at least two distinct ones
must appear together. The alert then looks only at flagged articles inside a
recent time window and surfaces the newest one.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import List, Optional, Pattern, Sequence, Tuple

from signal_engine.config import InjuryConfig
from signal_engine.models import AlertArticle, InjuryAlert, ScoredArticle
from signal_engine.utils import now_utc, parse_timestamp

logger = logging.getLogger(__name__)


def compile_keyword(keyword: str) -> Pattern[str]:
    """
    Compile a keyword (or phrase) into a whole-word pattern that also accepts
    simple inflections: s, es, ed, ing.
    """
    body = r"\s+".join(re.escape(part) for part in keyword.lower().split())
    return re.compile(rf"\b{body}(?:s|es|ed|ing)?\b", re.IGNORECASE)


class InjuryKeywordDetector:
    """Flags texts that carry injury language."""

    def __init__(self, config: Optional[InjuryConfig] = None) -> None:
        self.config = config or InjuryConfig()
        self._high: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
            (kw, compile_keyword(kw)) for kw in self.config.high_priority if kw.strip()
        )
        self._medium: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
            (kw, compile_keyword(kw)) for kw in dict.fromkeys(self.config.medium_priority) if kw.strip()
        )

    def high_priority_matches(self, text: str) -> List[str]:
        return [kw for kw, pattern in self._high if pattern.search(text)]

    def medium_priority_matches(self, text: str) -> List[str]:
        """Distinct medium-priority keywords present in the text."""
        return [kw for kw, pattern in self._medium if pattern.search(text)]

    def detect(self, text: Optional[str]) -> bool:
        if not text:
            return False
        if any(pattern.search(text) for _, pattern in self._high):
            return True
        return len(self.medium_priority_matches(text)) >= self.config.medium_min_matches


class BreakingAlertDetector:
    """Surfaces the most recent flagged article inside the alert window."""

    def __init__(self, config: Optional[InjuryConfig] = None) -> None:
        self.config = config or InjuryConfig()
        self.window = timedelta(hours=self.config.window_hours)

    def detect_alert(
        self,
        articles: Sequence[ScoredArticle],
        now: Optional[datetime] = None,
    ) -> Optional[InjuryAlert]:
        """
        Scan scored articles for a breaking injury story.

        Args:
            articles: Scored and classified articles, in caller order
            now: End of the alert window; defaults to the current UTC time

        Returns:
            InjuryAlert, or None when no flagged article falls in
            [now - window, now]
        """
        end = parse_timestamp(now) if now is not None else now_utc()
        if end is None:
            logger.debug("Alert window end %r is not a valid timestamp", now)
            return None
        start = end - self.window

        qualifying: List[ScoredArticle] = [
            article
            for article in articles
            if article.has_injury_keywords
            and article.published_at is not None
            and start <= article.published_at <= end
        ]

        if not qualifying:
            return None

        # max() keeps the first of equal maxima, so ties go to input order
        most_recent = max(qualifying, key=lambda article: article.published_at)
        hours_ago = int((end - most_recent.published_at).total_seconds() // 3600)

        ordered = sorted(qualifying, key=lambda article: article.published_at, reverse=True)

        logger.debug(
            "Injury alert: %d qualifying article(s), newest %dh ago", len(qualifying), hours_ago
        )

        return InjuryAlert(
            count=len(qualifying),
            most_recent=AlertArticle(
                title=most_recent.title,
                source=most_recent.source_name,
                url=most_recent.url,
                published_at=most_recent.published_at,
                hours_ago=max(0, hours_ago),
            ),
            articles=tuple(ordered),
        )


__all__ = ["InjuryKeywordDetector", "BreakingAlertDetector", "compile_keyword"]
