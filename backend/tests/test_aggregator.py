import pytest

from signal_engine.core.aggregator import ArticleAggregator


@pytest.fixture
def aggregator(scorer):
    return ArticleAggregator(scorer=scorer)


def test_national_vs_local_example(aggregator, make_article):
    articles = [
        make_article("great night", source="ESPN"),            # +3, national
        make_article("bad night", source="Detroit Free Press"),  # -1, local
    ]
    scored, analysis = aggregator.aggregate(articles)

    assert [a.source_type for a in scored] == ["national", "local"]
    assert analysis.total == 2
    assert analysis.overall_sentiment.score == 1.0
    assert analysis.overall_sentiment.label == "Positive"

    comparison = analysis.source_comparison
    assert comparison.national.count == 1
    assert comparison.national.avg_sentiment == 3.0
    assert comparison.national.label == "Very Positive"
    assert comparison.local.avg_sentiment == -1.0
    assert comparison.local.label == "Negative"
    assert comparison.difference == -4.0
    assert comparison.comparable is True


def test_breakdown_counts_and_percentages(aggregator, make_article):
    articles = [
        make_article("great"),
        make_article("good"),
        make_article("bad"),
        make_article("nothing here"),
        make_article("win"),
        make_article("loss"),
    ]
    _, analysis = aggregator.aggregate(articles)
    breakdown = analysis.breakdown

    assert (breakdown.positive.count, breakdown.neutral.count, breakdown.negative.count) == (3, 1, 2)
    assert breakdown.positive.percentage == 50.0
    assert breakdown.neutral.percentage == 16.7
    assert breakdown.negative.percentage == 33.3
    counts = breakdown.positive.count + breakdown.neutral.count + breakdown.negative.count
    assert counts == analysis.total
    total_pct = breakdown.positive.percentage + breakdown.neutral.percentage + breakdown.negative.percentage
    assert total_pct == pytest.approx(100, abs=0.1)


def test_zero_score_is_neutral_even_with_mixed_words(aggregator, make_article):
    # good(+2) + loss(-2) cancels out
    _, analysis = aggregator.aggregate([make_article("good loss")])
    assert analysis.breakdown.neutral.count == 1
    assert analysis.overall_sentiment.label == "Neutral"


def test_title_and_description_are_combined(aggregator, make_article):
    scored, _ = aggregator.aggregate([make_article("great", description="terrible loss")])
    assert scored[0].sentiment.score == 3 - 3 - 2


def test_empty_batch(aggregator):
    scored, analysis = aggregator.aggregate([])
    assert scored == []
    assert analysis.total == 0
    assert analysis.breakdown.positive.percentage == 0.0
    assert analysis.overall_sentiment.label == "Neutral"
    assert analysis.source_comparison.comparable is False


def test_missing_side_averages_to_zero(aggregator, make_article):
    _, analysis = aggregator.aggregate([make_article("great", source="ESPN")])
    comparison = analysis.source_comparison
    assert comparison.local.count == 0
    assert comparison.local.avg_sentiment == 0.0
    assert comparison.difference == -3.0
    assert comparison.comparable is False


def test_accepts_newsapi_payloads(aggregator):
    payload = {
        "title": "great comeback",
        "description": None,
        "source": {"id": None, "name": "Chicago Tribune"},
        "url": "https://example.com/a",
        "publishedAt": "2024-11-10T12:00:00Z",
    }
    scored, _ = aggregator.aggregate([payload])
    assert scored[0].source_type == "local"
    assert scored[0].published_at.isoformat() == "2024-11-10T12:00:00+00:00"
    assert scored[0].description == ""


def test_missing_source_name_falls_back_to_url_domain(aggregator, make_article):
    article = make_article("win", source="", url="https://www.espn.com/nfl/story")
    scored, _ = aggregator.aggregate([article])
    assert scored[0].source_type == "national"


def test_malformed_timestamp_is_kept_but_unparsed(aggregator, make_article):
    scored, _ = aggregator.aggregate([make_article("great", published_at="not a date")])
    assert scored[0].published_at is None


def test_analyze_builds_report_with_alert(aggregator, make_article, now):
    articles = [
        make_article("Receiver tore his ACL", hours_ago=3),
        make_article("great practice", hours_ago=1),
        make_article("he is questionable", hours_ago=2),
    ]
    report = aggregator.analyze(articles, now)

    assert len(report.articles) == 3
    assert [a.has_injury_keywords for a in report.articles] == [True, False, False]
    assert report.analysis.total == 3
    assert report.injury_alert.count == 1
    assert report.injury_alert.most_recent.hours_ago == 3


def test_analyze_empty_batch_has_no_analysis(aggregator, now):
    report = aggregator.analyze([], now)
    assert report.articles == []
    assert report.analysis is None
    assert report.injury_alert is None
