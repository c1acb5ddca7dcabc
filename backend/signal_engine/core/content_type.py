"""
Long-form (podcast / full show) versus short-form (clip) classification.

Independent heuristic signals add to a score:

    duration >= 30 min          +3
    long-form channel            +3
    long-form title pattern      +2
    description mentions podcast +1
    short-form title pattern     -2

An item is long-form discussion content when the score reaches the
threshold (4), i.e. a strong signal plus at least some support.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from signal_engine.config import PodcastConfig
from signal_engine.errors import IncompleteMetadataError
from signal_engine.models import PodcastClassification, RawMediaItem

logger = logging.getLogger(__name__)


class ContentTypeClassifier:
    """Additive heuristic classifier for video/audio metadata."""

    def __init__(self, config: Optional[PodcastConfig] = None) -> None:
        self.config = config or PodcastConfig()

    def classify(self, item: RawMediaItem) -> PodcastClassification:
        """
        Score a media item.

        Args:
            item: Fully detailed media item. Search-result stubs carry no
                duration and must be hydrated first.

        Returns:
            PodcastClassification with the score and the signals that fired

        Raises:
            IncompleteMetadataError: If the item's duration is unknown
        """
        if not item.has_details:
            raise IncompleteMetadataError(item.video_id)

        cfg = self.config
        title = item.title or ""
        description = (item.description or "").lower()

        score = 0
        signals: List[str] = []

        if item.duration_seconds >= cfg.min_duration_seconds:
            score += cfg.duration_weight
            signals.append("duration")

        if item.channel_id and item.channel_id in cfg.long_form_channels:
            score += cfg.channel_weight
            signals.append("channel")

        if any(pattern.search(title) for pattern in cfg.long_form_title_patterns):
            score += cfg.title_weight
            signals.append("title")

        if any(keyword in description for keyword in cfg.description_keywords):
            score += cfg.description_weight
            signals.append("description")

        if any(pattern.search(title) for pattern in cfg.short_form_title_patterns):
            score += cfg.short_form_penalty
            signals.append("short_form")

        logger.debug("Classified %s: score=%d signals=%s", item.video_id, score, signals)

        return PodcastClassification(
            is_podcast=score >= cfg.threshold,
            score=score,
            signals=tuple(signals),
        )


__all__ = ["ContentTypeClassifier"]
