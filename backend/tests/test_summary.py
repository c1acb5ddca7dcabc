from dataclasses import replace
from datetime import timedelta

import pytest

from signal_engine.config import SummaryConfig
from signal_engine.core.aggregator import ArticleAggregator
from signal_engine.core.sentiment import sentiment_label
from signal_engine.core.summary import WeeklySummaryGenerator
from signal_engine.models import (
    AggregateAnalysis,
    AlertArticle,
    InjuryAlert,
    NewsReport,
    OverallSentiment,
)

from conftest import NOW


def _report(sentiment, total, alert_hours=None):
    analysis = replace(
        AggregateAnalysis.empty(),
        total=total,
        overall_sentiment=OverallSentiment(score=sentiment, label=sentiment_label(sentiment)),
    )
    alert = None
    if alert_hours is not None:
        article = AlertArticle(
            title="Tore his ACL",
            source="ESPN",
            url="https://espn.com/acl",
            published_at=NOW - timedelta(hours=alert_hours),
            hours_ago=alert_hours,
        )
        alert = InjuryAlert(count=1, most_recent=article)
    return NewsReport(analysis=analysis, injury_alert=alert)


@pytest.fixture
def generator():
    return WeeklySummaryGenerator()


@pytest.mark.parametrize(
    "sentiment,volume,expected",
    [(-1.0, 20, 100), (-0.5, 10, 50), (-0.4, 40, 70), (-2.0, 6, 115), (0.0, 0, 0)],
)
def test_severity(generator, sentiment, volume, expected):
    assert generator.severity(sentiment, volume) == expected


def test_crisis_needs_negative_sentiment_and_volume(generator):
    reports = {
        "Negative but quiet": _report(-1.5, 5),
        "Loud but mild": _report(-0.3, 30),
        "Crisis": _report(-0.5, 6),
        "Bigger crisis": _report(-1.2, 25, alert_hours=3),
        "No data": None,
    }
    alerts = generator.crisis_alerts(reports)

    assert [a.subject for a in alerts] == ["Bigger crisis", "Crisis"]
    assert alerts[0].severity == 110
    assert alerts[0].has_injury_alert is True
    assert alerts[1].severity == 40
    assert alerts[1].has_injury_alert is False


def test_top_movers_split_by_direction(generator):
    reports = {
        "A": _report(0.5, 3),
        "B": _report(-2.0, 3),
        "C": _report(3.1, 3),
        "D": _report(0.0, 9),
        "E": _report(1.2, 3),
        "F": _report(0.9, 3),
        "G": _report(-0.1, 3),
    }
    positive, negative = generator.top_movers(reports)

    assert [m.subject for m in positive] == ["C", "E", "F"]
    assert [m.subject for m in negative] == ["B", "G"]
    assert all(m.direction == "negative" for m in negative)


def test_injuries_freshest_first(generator):
    reports = {"Old": _report(0.0, 2, alert_hours=30), "New": _report(0.0, 2, alert_hours=2), "Fine": _report(1.0, 2)}
    assert [w.subject for w in generator.injuries(reports)] == ["New", "Old"]


def test_stats(generator):
    reports = {"A": _report(1.0, 4), "B": _report(-2.0, 6), "C": NewsReport(), "D": None}
    stats = generator.stats(reports)

    assert stats.total_subjects == 4
    assert stats.subjects_with_data == 3
    assert stats.total_articles == 10
    assert stats.avg_sentiment == -0.5


def test_empty_batch(generator):
    summary = generator.generate({})
    assert summary.stats.total_subjects == 0
    assert summary.stats.avg_sentiment == 0.0
    assert summary.crisis_alerts == ()
    assert summary.top_positive == () and summary.top_negative == ()


def test_configured_thresholds():
    generator = WeeklySummaryGenerator(SummaryConfig(crisis_min_articles=1, top_movers=1))
    reports = {"A": _report(-0.5, 2), "B": _report(-1.0, 2)}
    summary = generator.generate(reports)

    assert [a.subject for a in summary.crisis_alerts] == ["B", "A"]
    assert [m.subject for m in summary.top_negative] == ["B"]


def test_generate_from_aggregated_reports(scorer, make_article):
    aggregator = ArticleAggregator(scorer=scorer)
    bad_week = [make_article(f"Terrible loss {i}", source="Denver Post", hours_ago=i + 1) for i in range(6)]
    good_week = [make_article("Great win", hours_ago=5)]
    reports = {
        "Struggling": aggregator.analyze(bad_week, NOW),
        "Thriving": aggregator.analyze(good_week, NOW),
    }

    summary = WeeklySummaryGenerator().generate(reports)

    assert summary.stats.total_articles == 7
    assert [a.subject for a in summary.crisis_alerts] == ["Struggling"]
    assert summary.crisis_alerts[0].sentiment == -5.0
    assert [m.subject for m in summary.top_positive] == ["Thriving"]
