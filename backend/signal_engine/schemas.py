# signal_engine/schemas.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from signal_engine.models import CaptionSegment, RawMediaItem
from signal_engine.utils import parse_iso8601_duration

SentimentLabel = Literal["Very Positive", "Positive", "Neutral", "Negative", "Very Negative"]


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# --- requests ---------------------------------------------------------------

class SourceIn(BaseModel):
    name: str = ""


class ArticleIn(BaseModel):
    title: str = ""
    description: Optional[str] = ""
    source: SourceIn = Field(default_factory=SourceIn)
    url: str = ""
    publishedAt: Optional[str] = None           # ISO-8601; malformed values never alert


class NewsAnalysisRequest(BaseModel):
    articles: List[ArticleIn] = Field(default_factory=list)
    now: Optional[datetime] = None               # alert window end, defaults to server time


class MediaItemIn(BaseModel):
    video_id: str = ""
    title: str = ""
    description: str = ""
    channel_id: str = ""
    channel_title: str = ""
    duration: Optional[str] = None               # ISO-8601 duration, e.g. "PT45M"
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    published_at: Optional[str] = None

    def to_item(self) -> RawMediaItem:
        seconds = self.duration_seconds
        if seconds is None:
            seconds = parse_iso8601_duration(self.duration)
        return RawMediaItem(
            video_id=self.video_id,
            title=self.title,
            description=self.description,
            channel_id=self.channel_id,
            channel_title=self.channel_title,
            duration_seconds=seconds,
            published_at=self.published_at,
        )


class CaptionSegmentIn(BaseModel):
    text: str
    offset: float = 0.0

    def to_segment(self) -> CaptionSegment:
        return CaptionSegment(text=self.text, offset=self.offset)


class TranscriptRequest(BaseModel):
    subject_name: str = Field(..., min_length=1)
    transcript: Optional[str] = None
    segments: Optional[List[CaptionSegmentIn]] = None


class SubjectArticlesIn(BaseModel):
    name: str = Field(..., min_length=1)
    articles: List[ArticleIn] = Field(default_factory=list)


class WeeklySummaryRequest(BaseModel):
    subjects: List[SubjectArticlesIn] = Field(default_factory=list)
    now: Optional[datetime] = None


# --- responses --------------------------------------------------------------

class SentimentOut(_FromAttributes):
    score: int
    comparative: float
    label: SentimentLabel
    tokens: int = 0
    positive_words: List[str] = Field(default_factory=list)
    negative_words: List[str] = Field(default_factory=list)


class ScoredArticleOut(_FromAttributes):
    title: str
    description: str = ""
    source_name: str
    url: str
    published_at: Optional[datetime] = None
    sentiment: SentimentOut
    source_type: Literal["national", "local", "other"]
    has_injury_keywords: bool


class BucketOut(_FromAttributes):
    count: int
    percentage: float


class BreakdownOut(_FromAttributes):
    positive: BucketOut
    neutral: BucketOut
    negative: BucketOut


class OverallSentimentOut(_FromAttributes):
    score: float
    label: SentimentLabel


class SourceSentimentOut(_FromAttributes):
    count: int
    avg_sentiment: float
    label: SentimentLabel


class SourceComparisonOut(_FromAttributes):
    national: SourceSentimentOut
    local: SourceSentimentOut
    difference: float
    comparable: bool


class AggregateAnalysisOut(_FromAttributes):
    total: int
    breakdown: BreakdownOut
    overall_sentiment: OverallSentimentOut
    source_comparison: SourceComparisonOut


class AlertArticleOut(_FromAttributes):
    title: str
    source: str
    url: str
    published_at: datetime
    hours_ago: int


class InjuryAlertOut(_FromAttributes):
    detected: bool
    count: int
    most_recent: AlertArticleOut


class NewsReportResponse(_FromAttributes):
    articles: List[ScoredArticleOut] = Field(default_factory=list)
    analysis: Optional[AggregateAnalysisOut] = None
    injury_alert: Optional[InjuryAlertOut] = None


class PodcastClassificationResponse(_FromAttributes):
    is_podcast: bool
    score: int
    signals: List[str] = Field(default_factory=list)


class MentionOut(_FromAttributes):
    sentence_index: int
    context: str
    sentiment: SentimentOut


class SubjectContextOut(_FromAttributes):
    count: int
    mentions: List[MentionOut] = Field(default_factory=list)


class TranscriptAnalysisResponse(_FromAttributes):
    available: bool
    error: Optional[str] = None
    word_count: int = 0
    sentiment: Optional[SentimentOut] = None
    subject_context: Optional[SubjectContextOut] = None


class MediaItemOut(_FromAttributes):
    video_id: str
    title: str
    channel_id: str = ""
    channel_title: str = ""
    duration_seconds: Optional[int] = None
    url: str = ""


class AnalyzedVideoOut(_FromAttributes):
    item: MediaItemOut
    classification: PodcastClassificationResponse
    transcript: Optional[TranscriptAnalysisResponse] = None


class PodcastEpisodeOut(_FromAttributes):
    podcast_name: str
    title: str
    link: str
    published_at: Optional[datetime] = None


class RedditPostOut(_FromAttributes):
    title: str
    subreddit: str
    url: str
    score: int = 0
    num_comments: int = 0
    published_at: Optional[datetime] = None


class TrackingResponse(_FromAttributes):
    subject: str
    news: Optional[NewsReportResponse] = None
    videos: Optional[List[AnalyzedVideoOut]] = None
    podcasts: List[PodcastEpisodeOut] = Field(default_factory=list)
    reddit: List[RedditPostOut] = Field(default_factory=list)


class CrisisAlertOut(_FromAttributes):
    subject: str
    sentiment: float
    article_count: int
    severity: int
    has_injury_alert: bool


class SentimentMoverOut(_FromAttributes):
    subject: str
    sentiment: float
    article_count: int
    direction: Literal["positive", "negative"]


class InjuryWatchOut(_FromAttributes):
    subject: str
    count: int
    hours_ago: int


class SummaryStatsOut(_FromAttributes):
    total_subjects: int
    subjects_with_data: int
    total_articles: int
    avg_sentiment: float


class WeeklySummaryResponse(_FromAttributes):
    stats: SummaryStatsOut
    crisis_alerts: List[CrisisAlertOut] = Field(default_factory=list)
    top_positive: List[SentimentMoverOut] = Field(default_factory=list)
    top_negative: List[SentimentMoverOut] = Field(default_factory=list)
    injuries: List[InjuryWatchOut] = Field(default_factory=list)
