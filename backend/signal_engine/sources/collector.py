"""
News collection: fetch, order and de-duplicate articles before analysis.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List

from signal_engine.models import RawArticle
from signal_engine.sources.news_api import NewsApiFetcher
from signal_engine.utils import parse_timestamp

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def deduplicate_articles(items: Iterable[RawArticle]) -> List[RawArticle]:
    """
    Remove duplicate articles based on URL and title.

    Args:
        items: Iterable of RawArticle objects

    Returns:
        List of unique RawArticle objects, first occurrence kept
    """
    seen_urls: set[str] = set()
    seen_titles: set[str] = set()
    unique_items: List[RawArticle] = []

    for item in items:
        # Normalize URL by removing query parameters
        url_key = (item.url or "").split("?")[0]

        if url_key and url_key in seen_urls:
            continue

        # Syndicated copies share the headline
        title = (item.title or "").strip().lower()
        if title and title in seen_titles:
            continue

        seen_urls.add(url_key)
        seen_titles.add(title)
        unique_items.append(item)

    return unique_items


async def collect_news(
    fetcher: NewsApiFetcher,
    subject: str,
    lookback_days: int,
    limit: int | None = None,
) -> List[RawArticle]:
    """
    Collect articles for a subject.

    Args:
        fetcher: Configured NewsAPI fetcher
        subject: Person to search for
        lookback_days: Number of days to look back
        limit: Maximum number of articles to return (all when None)

    Returns:
        Unique articles sorted by publication date (newest first; unparseable
        dates last)
    """
    articles = await fetcher.fetch(subject, lookback_days)

    articles.sort(key=lambda item: parse_timestamp(item.published_at) or _OLDEST, reverse=True)

    unique_items = deduplicate_articles(articles)

    if limit is not None:
        return unique_items[:limit]
    return unique_items
