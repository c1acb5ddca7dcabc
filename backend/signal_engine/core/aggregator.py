"""
Article aggregation: per-article scoring plus batch-level breakdowns.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from signal_engine.config import EngineConfig
from signal_engine.core.injury import BreakingAlertDetector, InjuryKeywordDetector
from signal_engine.core.sentiment import SentimentScorer, sentiment_label
from signal_engine.core.sources import SourceClassifier
from signal_engine.models import (
    LOCAL,
    NATIONAL,
    AggregateAnalysis,
    BucketCount,
    JsonDict,
    NewsReport,
    OverallSentiment,
    RawArticle,
    ScoredArticle,
    SentimentBreakdown,
    SourceComparison,
    SourceSentiment,
)
from signal_engine.utils import extract_domain_from_url, parse_timestamp, round_half_away

logger = logging.getLogger(__name__)

ArticleInput = Union[RawArticle, JsonDict]


def _mean(values: Sequence[int]) -> float:
    return sum(values) / len(values) if values else 0.0


def _bucket(count: int, total: int) -> BucketCount:
    return BucketCount(count=count, percentage=round_half_away(count / total * 100, 1))


class ArticleAggregator:
    """Scores a batch of articles and summarises the coverage."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        scorer: Optional[SentimentScorer] = None,
        classifier: Optional[SourceClassifier] = None,
        injury_detector: Optional[InjuryKeywordDetector] = None,
        alert_detector: Optional[BreakingAlertDetector] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.scorer = scorer or SentimentScorer(self.config.sentiment)
        self.classifier = classifier or SourceClassifier(self.config.sources)
        self.injury_detector = injury_detector or InjuryKeywordDetector(self.config.injury)
        self.alert_detector = alert_detector or BreakingAlertDetector(self.config.injury)

    def score_article(self, article: ArticleInput) -> ScoredArticle:
        """
        Score and classify a single article.

        The sentiment and injury checks both run on title + description. When
        the publisher name is missing, the URL's domain stands in for it.
        """
        if not isinstance(article, RawArticle):
            article = RawArticle.from_payload(article)

        title = article.title or ""
        description = article.description or ""
        text = f"{title} {description}".strip()

        source_name = article.source_name or ""
        source_type = self.classifier.classify(source_name or extract_domain_from_url(article.url))

        return ScoredArticle(
            title=title,
            description=description,
            source_name=source_name,
            url=article.url or "",
            published_at=parse_timestamp(article.published_at),
            sentiment=self.scorer.score(text),
            source_type=source_type,
            has_injury_keywords=self.injury_detector.detect(text),
        )

    def summarize(self, scored: Sequence[ScoredArticle]) -> AggregateAnalysis:
        """
        Compute breakdown, overall sentiment and national/local comparison.

        Buckets use the sign of the integer score; a score of exactly zero is
        neutral whatever its comparative value.
        """
        total = len(scored)
        if total == 0:
            return AggregateAnalysis.empty()

        scores = [article.sentiment.score for article in scored]
        positive = sum(1 for score in scores if score > 0)
        negative = sum(1 for score in scores if score < 0)
        neutral = total - positive - negative

        average = _mean(scores)

        national_scores = [a.sentiment.score for a in scored if a.source_type == NATIONAL]
        local_scores = [a.sentiment.score for a in scored if a.source_type == LOCAL]
        national_avg = _mean(national_scores)
        local_avg = _mean(local_scores)

        return AggregateAnalysis(
            total=total,
            breakdown=SentimentBreakdown(
                positive=_bucket(positive, total),
                neutral=_bucket(neutral, total),
                negative=_bucket(negative, total),
            ),
            overall_sentiment=OverallSentiment(
                score=round_half_away(average, 2),
                label=sentiment_label(average),
            ),
            source_comparison=SourceComparison(
                national=SourceSentiment(
                    count=len(national_scores),
                    avg_sentiment=round_half_away(national_avg, 2),
                    label=sentiment_label(national_avg),
                ),
                local=SourceSentiment(
                    count=len(local_scores),
                    avg_sentiment=round_half_away(local_avg, 2),
                    label=sentiment_label(local_avg),
                ),
                difference=round_half_away(local_avg - national_avg, 2),
            ),
        )

    def aggregate(
        self, articles: Iterable[ArticleInput]
    ) -> Tuple[List[ScoredArticle], AggregateAnalysis]:
        """
        Score every article and summarise the batch.

        Args:
            articles: RawArticle objects or NewsAPI-shaped dicts

        Returns:
            (scored articles in input order, aggregate analysis)
        """
        scored = [self.score_article(article) for article in articles or []]
        logger.debug("Aggregated %d article(s)", len(scored))
        return scored, self.summarize(scored)

    def analyze(
        self,
        articles: Iterable[ArticleInput],
        now: Optional[datetime] = None,
    ) -> NewsReport:
        """
        Run the full news pipeline: aggregate, then look for a breaking injury alert.

        An empty batch yields an empty report with no analysis and no alert.
        """
        scored, analysis = self.aggregate(articles)
        if not scored:
            return NewsReport()

        return NewsReport(
            articles=scored,
            analysis=analysis,
            injury_alert=self.alert_detector.detect_alert(scored, now),
        )


__all__ = ["ArticleAggregator"]
