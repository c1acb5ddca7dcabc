from datetime import datetime, timedelta, timezone

import pytest

from signal_engine.core.sentiment import SentimentScorer
from signal_engine.models import RawArticle

NOW = datetime(2024, 11, 10, 18, 0, tzinfo=timezone.utc)

# Small controlled vocabulary so aggregate numbers are easy to reason about
LEXICON = {
    "great": 3,
    "good": 2,
    "win": 1,
    "bad": -1,
    "loss": -2,
    "terrible": -3,
}


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def scorer():
    return SentimentScorer(lexicon=LEXICON)


@pytest.fixture
def make_article():
    def _make(title="", description="", source="ESPN", hours_ago=1.0, url=None, published_at=None):
        if published_at is None:
            published_at = (NOW - timedelta(hours=hours_ago)).isoformat()
        return RawArticle(
            title=title,
            description=description,
            source_name=source,
            url=url if url is not None else f"https://example.com/{abs(hash(title)) % 10_000}",
            published_at=published_at,
        )

    return _make
