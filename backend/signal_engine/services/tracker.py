"""
Subject tracking: fetch every source for one person and run the engine on it.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from signal_engine.config import EngineConfig, Settings, load_engine_config, settings
from signal_engine.core.aggregator import ArticleAggregator
from signal_engine.core.content_type import ContentTypeClassifier
from signal_engine.core.sentiment import SentimentScorer
from signal_engine.core.transcript import TranscriptContextExtractor
from signal_engine.models import AnalyzedVideo, NewsReport, TrackingReport
from signal_engine.sources.collector import collect_news
from signal_engine.sources.news_api import NewsApiFetcher
from signal_engine.sources.podcasts import PodcastFeedFetcher
from signal_engine.sources.reddit import RedditFetcher
from signal_engine.sources.youtube import YouTubeFetcher

logger = logging.getLogger(__name__)


class MediaSignalTracker:
    """Coordinates the fetch layer and the analysis engine for a subject."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        app_settings: Optional[Settings] = None,
        news_fetcher: Optional[NewsApiFetcher] = None,
        youtube_fetcher: Optional[YouTubeFetcher] = None,
        podcast_fetcher: Optional[PodcastFeedFetcher] = None,
        reddit_fetcher: Optional[RedditFetcher] = None,
    ) -> None:
        self.settings = app_settings or settings
        self.config = config or load_engine_config(self.settings)

        timeout = self.settings.HTTP_TIMEOUT
        # Sources without credentials are disabled rather than failing every call
        if news_fetcher is None and self.settings.NEWSAPI_KEY:
            news_fetcher = NewsApiFetcher(self.settings.NEWSAPI_KEY, timeout=timeout)
        if youtube_fetcher is None and self.settings.YOUTUBE_API_KEY:
            youtube_fetcher = YouTubeFetcher(self.settings.YOUTUBE_API_KEY, timeout=timeout)

        self.news_fetcher = news_fetcher
        self.youtube_fetcher = youtube_fetcher
        self.podcast_fetcher = podcast_fetcher or PodcastFeedFetcher(timeout=timeout)
        self.reddit_fetcher = reddit_fetcher or RedditFetcher(self.settings.REDDIT_USER_AGENT, timeout=timeout)

        scorer = SentimentScorer(self.config.sentiment)
        self.aggregator = ArticleAggregator(self.config, scorer=scorer)
        self.classifier = ContentTypeClassifier(self.config.podcast)
        self.extractor = TranscriptContextExtractor(scorer, self.config.transcript)

    async def track_news(self, subject: str, now: Optional[datetime] = None) -> Optional[NewsReport]:
        """News sentiment, source comparison and breaking-injury alert; None when disabled."""
        if self.news_fetcher is None:
            logger.info("News tracking disabled (no NEWSAPI_KEY)")
            return None

        articles = await collect_news(self.news_fetcher, subject, self.settings.NEWS_LOOKBACK_DAYS)
        return self.aggregator.analyze(articles, now)

    async def track_videos(self, subject: str) -> Optional[List[AnalyzedVideo]]:
        """
        Search videos (globally and per long-form channel), classify them and
        analyze transcripts of the long-form ones.

        Returns None when YouTube tracking is disabled.
        """
        if self.youtube_fetcher is None:
            logger.info("YouTube tracking disabled (no YOUTUBE_API_KEY)")
            return None

        stubs = await self.youtube_fetcher.search_all(
            subject,
            self.settings.MAX_VIDEOS,
            channel_ids=sorted(self.config.podcast.long_form_channels),
        )
        items = await self.youtube_fetcher.hydrate(stubs)

        results: List[AnalyzedVideo] = []
        for item in items:
            if not item.has_details:
                logger.warning("Skipping video %s: details unavailable", item.video_id)
                continue

            classification = self.classifier.classify(item)
            analyzed = AnalyzedVideo(item=item, classification=classification)

            if classification.is_podcast:
                segments = await self.youtube_fetcher.fetch_transcript(item.video_id)
                analyzed.transcript = self.extractor.analyze_segments(segments, subject)

            results.append(analyzed)

        return results

    async def track(self, subject: str, now: Optional[datetime] = None) -> TrackingReport:
        """
        Gather every source for a subject concurrently.

        Args:
            subject: Person to track
            now: Alert window end; defaults to the current time

        Returns:
            TrackingReport; disabled sources are None, failed fetches empty
        """
        subject = subject.strip()
        logger.info("Tracking %s", subject)

        news, videos, podcasts, reddit = await asyncio.gather(
            self.track_news(subject, now),
            self.track_videos(subject),
            self.podcast_fetcher.search(subject),
            self.reddit_fetcher.search_all(subject),
        )

        return TrackingReport(
            subject=subject,
            news=news,
            videos=videos,
            podcasts=podcasts,
            reddit=reddit,
        )


__all__ = ["MediaSignalTracker"]
