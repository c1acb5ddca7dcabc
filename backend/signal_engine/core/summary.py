"""
Weekly summary: cross-subject analytics over a batch of news reports.

Given one NewsReport per tracked subject, pick out the subjects in a
coverage crisis, the strongest positive and negative sentiment, and the
subjects with a live injury alert.
"""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Tuple

from signal_engine.config import SummaryConfig
from signal_engine.models import (
    AggregateAnalysis,
    CrisisAlert,
    InjuryWatch,
    NewsReport,
    SentimentMover,
    SummaryStats,
    WeeklySummary,
)
from signal_engine.utils import round_half_away

logger = logging.getLogger(__name__)


def _analysis(report: Optional[NewsReport]) -> Optional[AggregateAnalysis]:
    if report is None or report.analysis is None or report.analysis.total == 0:
        return None
    return report.analysis


class WeeklySummaryGenerator:
    """Builds the weekly digest from per-subject news reports."""

    def __init__(self, config: Optional[SummaryConfig] = None) -> None:
        self.config = config or SummaryConfig()

    def severity(self, sentiment: float, volume: int) -> int:
        """
        Crisis severity: |sentiment| * 50 plus up to 50 points for volume.

        Args:
            sentiment: Average sentiment score of the subject's coverage
            volume: Number of articles

        Returns:
            Rounded severity; 100 or more for very negative, heavy coverage
        """
        volume_share = min(volume / self.config.severity_volume_cap, 1.0)
        return int(round_half_away(abs(sentiment) * 50 + volume_share * 50, 0))

    def crisis_alerts(self, reports: Mapping[str, Optional[NewsReport]]) -> List[CrisisAlert]:
        """Subjects with negative average sentiment and high volume, most severe first."""
        alerts: List[CrisisAlert] = []

        for subject, report in reports.items():
            analysis = _analysis(report)
            if analysis is None:
                continue

            sentiment = analysis.overall_sentiment.score
            if sentiment >= self.config.crisis_sentiment:
                continue
            if analysis.total <= self.config.crisis_min_articles:
                continue

            alerts.append(
                CrisisAlert(
                    subject=subject,
                    sentiment=sentiment,
                    article_count=analysis.total,
                    severity=self.severity(sentiment, analysis.total),
                    has_injury_alert=report.injury_alert is not None,
                )
            )

        alerts.sort(key=lambda alert: alert.severity, reverse=True)
        return alerts

    def top_movers(
        self, reports: Mapping[str, Optional[NewsReport]]
    ) -> Tuple[List[SentimentMover], List[SentimentMover]]:
        """
        The most extreme sentiment on each side.

        Subjects with exactly neutral coverage are not movers.

        Returns:
            (top_positive, top_negative), each most extreme first
        """
        movers: List[SentimentMover] = []

        for subject, report in reports.items():
            analysis = _analysis(report)
            if analysis is None or analysis.overall_sentiment.score == 0:
                continue
            sentiment = analysis.overall_sentiment.score
            movers.append(
                SentimentMover(
                    subject=subject,
                    sentiment=sentiment,
                    article_count=analysis.total,
                    direction="positive" if sentiment > 0 else "negative",
                )
            )

        movers.sort(key=lambda mover: abs(mover.sentiment), reverse=True)
        limit = self.config.top_movers
        positive = [m for m in movers if m.direction == "positive"][:limit]
        negative = [m for m in movers if m.direction == "negative"][:limit]
        return positive, negative

    def injuries(self, reports: Mapping[str, Optional[NewsReport]]) -> List[InjuryWatch]:
        """Subjects with a breaking injury alert, freshest first."""
        watch = [
            InjuryWatch(
                subject=subject,
                count=report.injury_alert.count,
                hours_ago=report.injury_alert.most_recent.hours_ago,
            )
            for subject, report in reports.items()
            if report is not None and report.injury_alert is not None
        ]
        watch.sort(key=lambda item: item.hours_ago)
        return watch

    def stats(self, reports: Mapping[str, Optional[NewsReport]]) -> SummaryStats:
        with_data = [report for report in reports.values() if report is not None]
        analyses = [a for a in (_analysis(report) for report in with_data) if a is not None]

        if analyses:
            mean = sum(a.overall_sentiment.score for a in analyses) / len(analyses)
        else:
            mean = 0.0

        return SummaryStats(
            total_subjects=len(reports),
            subjects_with_data=len(with_data),
            total_articles=sum(a.total for a in analyses),
            avg_sentiment=round_half_away(mean, 2),
        )

    def generate(self, reports: Mapping[str, Optional[NewsReport]]) -> WeeklySummary:
        """
        Build the full weekly summary.

        Args:
            reports: News report per subject name, in display order; None
                marks a subject with no data this week

        Returns:
            WeeklySummary
        """
        top_positive, top_negative = self.top_movers(reports)
        summary = WeeklySummary(
            stats=self.stats(reports),
            crisis_alerts=tuple(self.crisis_alerts(reports)),
            top_positive=tuple(top_positive),
            top_negative=tuple(top_negative),
            injuries=tuple(self.injuries(reports)),
        )
        logger.info(
            "Weekly summary: %d subject(s), %d crisis alert(s)",
            summary.stats.total_subjects,
            len(summary.crisis_alerts),
        )
        return summary


__all__ = ["WeeklySummaryGenerator"]
