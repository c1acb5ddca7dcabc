"""
Transcript analysis: whole-document sentiment plus per-mention context.

Each sentence that names the subject gets a small window of surrounding
sentences scored on its own. That local score can disagree with the
document score, which is the point: a player can be praised inside an
otherwise gloomy segment.
"""
from __future__ import annotations

import html
import logging
import re
from typing import Iterable, List, Optional, Pattern, Protocol, Tuple

from signal_engine.config import TranscriptConfig
from signal_engine.core.sentiment import SentimentScorer
from signal_engine.models import (
    CaptionSegment,
    MentionContext,
    SubjectContext,
    TranscriptAnalysis,
)
from signal_engine.utils import normalize_text

logger = logging.getLogger(__name__)


class SentenceSplitter(Protocol):
    def split(self, text: str) -> List[str]:
        ...


class PunctuationSentenceSplitter:
    """Splits after '.', '!' or '?' followed by whitespace.

    Abbreviations ("Dr. Smith") and similar cases will split too; swap in a
    stricter splitter if that matters.
    """

    _boundary = re.compile(r"(?<=[.!?])\s+")

    def split(self, text: str) -> List[str]:
        if not text:
            return []
        return [part.strip() for part in self._boundary.split(text.strip()) if part.strip()]


def join_caption_segments(segments: Iterable[CaptionSegment]) -> str:
    """Concatenate caption segments in offset order into one transcript string."""
    ordered = sorted(segments, key=lambda segment: segment.offset)
    texts = (normalize_text(html.unescape(segment.text or "")) for segment in ordered)
    return " ".join(text for text in texts if text)


def _name_pattern(name: str) -> Pattern[str]:
    body = r"\s+".join(re.escape(part) for part in name.split())
    # Names may end in punctuation ("Jr."), where \b never matches
    return re.compile(rf"(?<!\w){body}(?!\w)", re.IGNORECASE)


def _subject_patterns(subject_name: str) -> Tuple[Pattern[str], ...]:
    parts = subject_name.split()
    if not parts:
        return ()
    full = _name_pattern(subject_name)
    if len(parts) == 1:
        return (full,)
    return (full, _name_pattern(parts[-1]))


class TranscriptContextExtractor:
    """Finds subject mentions in a transcript and scores their context."""

    def __init__(
        self,
        scorer: Optional[SentimentScorer] = None,
        config: Optional[TranscriptConfig] = None,
        splitter: Optional[SentenceSplitter] = None,
    ) -> None:
        self.scorer = scorer or SentimentScorer()
        self.config = config or TranscriptConfig()
        self.splitter = splitter or PunctuationSentenceSplitter()

    def extract(self, transcript: Optional[str], subject_name: Optional[str]) -> SubjectContext:
        """
        Locate sentences naming the subject (full name or surname).

        Args:
            transcript: Full transcript text
            subject_name: Person to look for, e.g. "Patrick Mahomes"

        Returns:
            SubjectContext with one MentionContext per matching sentence;
            overlapping windows are kept as separate records
        """
        patterns = _subject_patterns((subject_name or "").strip())
        if not transcript or not patterns:
            return SubjectContext(count=0)

        sentences = self.splitter.split(transcript)
        radius = self.config.context_radius
        mentions: List[MentionContext] = []

        for index, sentence in enumerate(sentences):
            if not any(pattern.search(sentence) for pattern in patterns):
                continue
            start = max(0, index - radius)
            end = min(len(sentences), index + radius + 1)
            context = " ".join(sentences[start:end])
            mentions.append(
                MentionContext(
                    sentence_index=index,
                    context=context,
                    sentiment=self.scorer.score(context),
                )
            )

        return SubjectContext(count=len(mentions), mentions=tuple(mentions))

    def analyze(self, transcript: Optional[str], subject_name: Optional[str] = None) -> TranscriptAnalysis:
        """
        Full transcript analysis: document sentiment, word count and subject context.

        An empty transcript is reported as unavailable rather than raised.
        """
        text = normalize_text(transcript)
        if not text:
            return TranscriptAnalysis.unavailable("No transcript text")

        analysis = TranscriptAnalysis(
            available=True,
            text=text,
            word_count=len(text.split()),
            sentiment=self.scorer.score(text),
            subject_context=self.extract(text, subject_name) if subject_name else None,
        )
        logger.debug(
            "Transcript analyzed: %d words, %d subject mention(s)",
            analysis.word_count,
            analysis.subject_context.count if analysis.subject_context else 0,
        )
        return analysis

    def analyze_segments(
        self, segments: Iterable[CaptionSegment], subject_name: Optional[str] = None
    ) -> TranscriptAnalysis:
        """Analyze caption segments; no segments means the transcript is unavailable."""
        segments = list(segments or [])
        if not segments:
            return TranscriptAnalysis.unavailable("No captions available")
        return self.analyze(join_caption_segments(segments), subject_name)


__all__ = [
    "SentenceSplitter",
    "PunctuationSentenceSplitter",
    "TranscriptContextExtractor",
    "join_caption_segments",
]
