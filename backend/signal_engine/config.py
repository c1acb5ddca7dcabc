"""
Engine configuration with environment variable support.

Lexical tables and scoring weights are module-level constants; components
receive them through the config dataclasses below so tests can swap in
controlled vocabularies.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Pattern, Tuple

from pydantic_settings import BaseSettings

from signal_engine.errors import ConfigurationError


class Settings(BaseSettings):
    NEWSAPI_KEY: str = ""
    YOUTUBE_API_KEY: str = ""
    REDDIT_USER_AGENT: str = "media-signal-tracker/0.1"
    ALERT_WINDOW_HOURS: int = 48
    NEWS_LOOKBACK_DAYS: int = 7
    MAX_VIDEOS: int = 5
    HTTP_TIMEOUT: float = 15.0
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    PORT: int = 8000


settings = Settings(_env_file=".env", _env_file_encoding="utf-8")


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable with fallback."""
    try:
        return int(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_list(key: str, default: Tuple[str, ...], separator: str = ",") -> Tuple[str, ...]:
    """Get list value from environment variable with fallback."""
    value = os.getenv(key)
    if not value:
        return default
    return tuple(item.strip() for item in value.split(separator) if item.strip())


# Sentiment: tokens that invert the weight of the token that follows them
NEGATORS: FrozenSet[str] = frozenset({
    "not", "no", "never", "nor", "neither", "non",
    "cant", "can't", "dont", "don't", "doesnt", "doesn't",
    "isnt", "isn't", "arent", "aren't", "wasnt", "wasn't",
    "werent", "weren't", "wont", "won't", "didnt", "didn't",
    "hasnt", "hasn't", "havent", "haven't", "hadnt", "hadn't",
    "shouldnt", "shouldn't", "couldnt", "couldn't", "wouldnt", "wouldn't",
    "aint", "ain't",
})

# Source classification. Hyphens are compared as spaces, so slugs match names.
NATIONAL_SOURCES: Tuple[str, ...] = (
    "espn", "fox-sports", "bleacher-report", "cbs-sports",
    "nfl-news", "usa-today", "sports-illustrated", "the-athletic",
    "nbc-sports", "yahoo-sports",
)
LOCAL_SOURCE_KEYWORDS: Tuple[str, ...] = (
    "tribune", "times", "post", "journal", "gazette",
    "chronicle", "herald", "news", "press",
)

# Injury detection. One high-priority hit flags a text; medium-priority
# terms are ambiguous and need MEDIUM_MIN_MATCHES distinct hits.
HIGH_PRIORITY_INJURY_KEYWORDS: Tuple[str, ...] = (
    "torn", "tear", "tore", "acl", "mcl", "achilles",
    "broken", "fracture", "fractured", "surgery",
    "injured reserve", "out for season", "season-ending",
    "ruled out", "sidelined",
)
MEDIUM_PRIORITY_INJURY_KEYWORDS: Tuple[str, ...] = (
    "injury", "injured", "hurt", "concussion", "ir",
    "week-to-week", "day-to-day", "questionable", "doubtful",
)
MEDIUM_MIN_MATCHES = 2
DEFAULT_ALERT_WINDOW_HOURS = 48

# Content-type classification
LONG_FORM_CHANNEL_IDS: Tuple[str, ...] = (
    "UCxcTeAKWJca6XyJ37_ZoKIQ",  # NFL
    "UCxdQI43w4AgkXwEHhPj6Zhg",  # Pat McAfee Show
    "UCFR2oaNj02WnXkOgLH0iqOA",  # Good Morning Football
    "UCqFMzb-4AUf6WAIbl132QKA",  # Around the NFL
    "UCmEKLdY0dHyS8udUMx2VWPg",  # NFL Network
)

LONG_FORM_TITLE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\b(?:ep|episode)\.?\s*#?\d+", re.IGNORECASE),
    re.compile(r"#\d+\b"),
    re.compile(r"\bpodcast\b", re.IGNORECASE),
    re.compile(r"\bfull show\b", re.IGNORECASE),
    re.compile(r"\binterview\b", re.IGNORECASE),
    re.compile(r"\bdiscussion\b", re.IGNORECASE),
    # "with <Capitalized Name>"; the name itself must be capitalised
    re.compile(r"\b(?:with|With|WITH)\s+[A-Z][\w'.-]*(?:\s+[A-Z][\w'.-]*)*"),
)
SHORT_FORM_TITLE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\bhighlights?\b", re.IGNORECASE),
    re.compile(r"\bclips?\b", re.IGNORECASE),
    re.compile(r"\brecap\b", re.IGNORECASE),
    re.compile(r"\b\d+\s+minutes?\s+of\b", re.IGNORECASE),
    re.compile(r"\btop\s+\d+\b", re.IGNORECASE),
    re.compile(r"\bbest\s+(?:plays|moments)\b", re.IGNORECASE),
)
LONG_FORM_DESCRIPTION_KEYWORDS: Tuple[str, ...] = ("podcast", "full episode")

# Duration and channel identity are the hardest signals to game, so they
# carry the most weight; text patterns only support them.
LONG_FORM_MIN_SECONDS = 1800
DURATION_WEIGHT = 3
CHANNEL_WEIGHT = 3
TITLE_PATTERN_WEIGHT = 2
DESCRIPTION_WEIGHT = 1
SHORT_FORM_PENALTY = -2
PODCAST_SCORE_THRESHOLD = 4

# Transcript context: sentences on each side of a mention
CONTEXT_RADIUS = 1

# Podcast RSS feeds searched for episode mentions
PODCAST_FEEDS: Tuple[Tuple[str, str], ...] = (
    ("Around the NFL", "http://feeds.megaphone.fm/aroundthenfl"),
    ("The Pat McAfee Show", "https://feeds.megaphone.fm/thepatmcafeeshow"),
    ("NFL Fantasy Football Podcast", "https://feeds.megaphone.fm/nflfantasyfootball"),
    ("Good Morning Football", "https://feeds.megaphone.fm/goodmorningfootball"),
    ("NFL: The Insiders", "https://feeds.megaphone.fm/nfltheinsiders"),
)

# Subreddits searched for discussion threads
REDDIT_SUBREDDITS: Tuple[str, ...] = (
    "nfl", "fantasyfootball", "DynastyFF", "NFLstatheads", "NFLNoobs",
)

# Weekly summary: a crisis is negative coverage at volume. Severity gives
# up to 50 points per unit of average sentiment and up to 50 for volume,
# saturating at SEVERITY_VOLUME_CAP articles.
CRISIS_SENTIMENT_THRESHOLD = -0.3
CRISIS_MIN_ARTICLES = 5
SEVERITY_VOLUME_CAP = 20
TOP_MOVERS = 3

# HTTP Client Configuration
USER_AGENT = "Media-Signal-Tracker/1.0"
HTTP_HEADERS = {"User-Agent": USER_AGENT, "Accept": "application/json"}


@dataclass(frozen=True)
class SentimentConfig:
    negators: FrozenSet[str] = NEGATORS


@dataclass(frozen=True)
class SourceConfig:
    national_sources: Tuple[str, ...] = NATIONAL_SOURCES
    local_keywords: Tuple[str, ...] = LOCAL_SOURCE_KEYWORDS


@dataclass(frozen=True)
class InjuryConfig:
    high_priority: Tuple[str, ...] = HIGH_PRIORITY_INJURY_KEYWORDS
    medium_priority: Tuple[str, ...] = MEDIUM_PRIORITY_INJURY_KEYWORDS
    medium_min_matches: int = MEDIUM_MIN_MATCHES
    window_hours: int = DEFAULT_ALERT_WINDOW_HOURS


@dataclass(frozen=True)
class PodcastConfig:
    long_form_channels: FrozenSet[str] = frozenset(LONG_FORM_CHANNEL_IDS)
    long_form_title_patterns: Tuple[Pattern[str], ...] = LONG_FORM_TITLE_PATTERNS
    short_form_title_patterns: Tuple[Pattern[str], ...] = SHORT_FORM_TITLE_PATTERNS
    description_keywords: Tuple[str, ...] = LONG_FORM_DESCRIPTION_KEYWORDS
    min_duration_seconds: int = LONG_FORM_MIN_SECONDS
    duration_weight: int = DURATION_WEIGHT
    channel_weight: int = CHANNEL_WEIGHT
    title_weight: int = TITLE_PATTERN_WEIGHT
    description_weight: int = DESCRIPTION_WEIGHT
    short_form_penalty: int = SHORT_FORM_PENALTY
    threshold: int = PODCAST_SCORE_THRESHOLD


@dataclass(frozen=True)
class TranscriptConfig:
    context_radius: int = CONTEXT_RADIUS


@dataclass(frozen=True)
class SummaryConfig:
    crisis_sentiment: float = CRISIS_SENTIMENT_THRESHOLD
    crisis_min_articles: int = CRISIS_MIN_ARTICLES
    severity_volume_cap: int = SEVERITY_VOLUME_CAP
    top_movers: int = TOP_MOVERS


@dataclass(frozen=True)
class EngineConfig:
    """Top-level configuration handed to every engine component."""

    sentiment: SentimentConfig = field(default_factory=SentimentConfig)
    sources: SourceConfig = field(default_factory=SourceConfig)
    injury: InjuryConfig = field(default_factory=InjuryConfig)
    podcast: PodcastConfig = field(default_factory=PodcastConfig)
    transcript: TranscriptConfig = field(default_factory=TranscriptConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)


def load_engine_config(app_settings: Optional[Settings] = None) -> EngineConfig:
    """Build the engine configuration, applying environment overrides."""

    app_settings = app_settings or settings

    window_hours = app_settings.ALERT_WINDOW_HOURS
    if window_hours <= 0:
        raise ConfigurationError(f"ALERT_WINDOW_HOURS must be positive, got {window_hours}")

    threshold = _get_env_int("PODCAST_SCORE_THRESHOLD", PODCAST_SCORE_THRESHOLD)
    channels = _get_env_list("LONG_FORM_CHANNEL_IDS", LONG_FORM_CHANNEL_IDS)

    return EngineConfig(
        sources=SourceConfig(
            national_sources=_get_env_list("NATIONAL_SOURCES", NATIONAL_SOURCES),
            local_keywords=_get_env_list("LOCAL_SOURCE_KEYWORDS", LOCAL_SOURCE_KEYWORDS),
        ),
        injury=InjuryConfig(window_hours=window_hours),
        podcast=PodcastConfig(long_form_channels=frozenset(channels), threshold=threshold),
    )


__all__ = [
    "Settings",
    "settings",
    "SentimentConfig",
    "SourceConfig",
    "InjuryConfig",
    "PodcastConfig",
    "TranscriptConfig",
    "SummaryConfig",
    "EngineConfig",
    "load_engine_config",
]
