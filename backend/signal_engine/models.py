"""
File: signal_engine/models.py
Internal data structures produced and consumed by the analysis engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union


JsonDict = Dict[str, Any]
Timestamp = Union[datetime, str, None]

NATIONAL = "national"
LOCAL = "local"
OTHER = "other"


@dataclass
class RawArticle:
    """Article as supplied by a news fetcher; not owned by the engine."""

    title: str
    description: str
    source_name: str
    url: str
    published_at: Timestamp = None

    @classmethod
    def from_payload(cls, payload: JsonDict) -> "RawArticle":
        """Build from a NewsAPI-shaped dict: title, description, source{name}, url, publishedAt."""
        source = payload.get("source") or {}
        source_name = source.get("name", "") if isinstance(source, dict) else str(source)
        return cls(
            title=payload.get("title") or "",
            description=payload.get("description") or "",
            source_name=source_name or "",
            url=payload.get("url") or "",
            published_at=payload.get("publishedAt"),
        )


@dataclass(frozen=True)
class SentimentResult:
    score: int
    comparative: float
    label: str
    tokens: int = 0
    positive_words: Tuple[str, ...] = ()
    negative_words: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoredArticle:
    title: str
    description: str
    source_name: str
    url: str
    published_at: Optional[datetime]  # None when the raw timestamp was malformed
    sentiment: SentimentResult
    source_type: str  # "national" | "local" | "other"
    has_injury_keywords: bool


@dataclass(frozen=True)
class BucketCount:
    count: int
    percentage: float


@dataclass(frozen=True)
class SentimentBreakdown:
    positive: BucketCount
    neutral: BucketCount
    negative: BucketCount


@dataclass(frozen=True)
class OverallSentiment:
    score: float
    label: str


@dataclass(frozen=True)
class SourceSentiment:
    count: int
    avg_sentiment: float
    label: str


@dataclass(frozen=True)
class SourceComparison:
    national: SourceSentiment
    local: SourceSentiment
    difference: float  # local - national

    @property
    def comparable(self) -> bool:
        """Only meaningful when both sides have coverage."""
        return self.national.count > 0 and self.local.count > 0


@dataclass(frozen=True)
class AggregateAnalysis:
    total: int
    breakdown: SentimentBreakdown
    overall_sentiment: OverallSentiment
    source_comparison: SourceComparison

    @classmethod
    def empty(cls) -> "AggregateAnalysis":
        zero = BucketCount(count=0, percentage=0.0)
        neutral_side = SourceSentiment(count=0, avg_sentiment=0.0, label="Neutral")
        return cls(
            total=0,
            breakdown=SentimentBreakdown(positive=zero, neutral=zero, negative=zero),
            overall_sentiment=OverallSentiment(score=0.0, label="Neutral"),
            source_comparison=SourceComparison(
                national=neutral_side, local=neutral_side, difference=0.0
            ),
        )


@dataclass(frozen=True)
class AlertArticle:
    title: str
    source: str
    url: str
    published_at: datetime
    hours_ago: int


@dataclass(frozen=True)
class InjuryAlert:
    count: int
    most_recent: AlertArticle
    articles: Tuple[ScoredArticle, ...] = ()
    detected: bool = True


@dataclass
class NewsReport:
    """Combined result of the news pipeline for one subject."""

    articles: List[ScoredArticle] = field(default_factory=list)
    analysis: Optional[AggregateAnalysis] = None
    injury_alert: Optional[InjuryAlert] = None


@dataclass
class RawMediaItem:
    """Video/audio metadata. duration_seconds is None until full details are fetched."""

    video_id: str
    title: str
    description: str = ""
    channel_id: str = ""
    channel_title: str = ""
    duration_seconds: Optional[int] = None
    published_at: Timestamp = None
    url: str = ""

    @property
    def has_details(self) -> bool:
        return self.duration_seconds is not None


@dataclass(frozen=True)
class PodcastClassification:
    is_podcast: bool
    score: int
    signals: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CaptionSegment:
    text: str
    offset: float = 0.0


@dataclass(frozen=True)
class MentionContext:
    sentence_index: int
    context: str
    sentiment: SentimentResult


@dataclass(frozen=True)
class SubjectContext:
    count: int
    mentions: Tuple[MentionContext, ...] = ()


@dataclass
class TranscriptAnalysis:
    available: bool
    error: Optional[str] = None
    text: str = ""
    word_count: int = 0
    sentiment: Optional[SentimentResult] = None
    subject_context: Optional[SubjectContext] = None

    @classmethod
    def unavailable(cls, reason: str) -> "TranscriptAnalysis":
        return cls(available=False, error=reason)


@dataclass
class AnalyzedVideo:
    """A video with its content-type verdict and, for podcasts, transcript analysis."""

    item: RawMediaItem
    classification: PodcastClassification
    transcript: Optional[TranscriptAnalysis] = None


@dataclass
class PodcastEpisode:
    podcast_name: str
    title: str
    description: str
    link: str
    published_at: Optional[datetime] = None


@dataclass
class RedditPost:
    title: str
    subreddit: str
    url: str
    score: int = 0
    num_comments: int = 0
    published_at: Optional[datetime] = None


@dataclass
class TrackingReport:
    """Everything gathered for one subject; sources without credentials stay None."""

    subject: str
    news: Optional[NewsReport] = None
    videos: Optional[List[AnalyzedVideo]] = None
    podcasts: List[PodcastEpisode] = field(default_factory=list)
    reddit: List[RedditPost] = field(default_factory=list)


@dataclass(frozen=True)
class CrisisAlert:
    """A subject drawing heavy, negative coverage."""

    subject: str
    sentiment: float
    article_count: int
    severity: int
    has_injury_alert: bool = False


@dataclass(frozen=True)
class SentimentMover:
    subject: str
    sentiment: float
    article_count: int
    direction: str  # "positive" or "negative"


@dataclass(frozen=True)
class InjuryWatch:
    subject: str
    count: int
    hours_ago: int


@dataclass(frozen=True)
class SummaryStats:
    total_subjects: int
    subjects_with_data: int
    total_articles: int
    avg_sentiment: float


@dataclass(frozen=True)
class WeeklySummary:
    """Cross-subject digest of a batch of news reports."""

    stats: SummaryStats
    crisis_alerts: Tuple[CrisisAlert, ...] = ()
    top_positive: Tuple[SentimentMover, ...] = ()
    top_negative: Tuple[SentimentMover, ...] = ()
    injuries: Tuple[InjuryWatch, ...] = ()


__all__ = [
    "JsonDict",
    "Timestamp",
    "NATIONAL",
    "LOCAL",
    "OTHER",
    "RawArticle",
    "SentimentResult",
    "ScoredArticle",
    "BucketCount",
    "SentimentBreakdown",
    "OverallSentiment",
    "SourceSentiment",
    "SourceComparison",
    "AggregateAnalysis",
    "AlertArticle",
    "InjuryAlert",
    "NewsReport",
    "RawMediaItem",
    "PodcastClassification",
    "CaptionSegment",
    "MentionContext",
    "SubjectContext",
    "TranscriptAnalysis",
    "AnalyzedVideo",
    "PodcastEpisode",
    "RedditPost",
    "CrisisAlert",
    "SentimentMover",
    "InjuryWatch",
    "SummaryStats",
    "WeeklySummary",
    "TrackingReport",
]
