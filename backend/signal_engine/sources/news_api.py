"""
NewsAPI fetcher for articles mentioning a subject.
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Optional

import httpx

from signal_engine.config import HTTP_HEADERS
from signal_engine.models import RawArticle
from signal_engine.sources.common import clean_text
from signal_engine.utils import now_utc

logger = logging.getLogger(__name__)

# NewsAPI placeholder for articles withdrawn by the publisher
REMOVED_MARKER = "[Removed]"


class NewsApiFetcher:
    """Fetches recent articles from the NewsAPI /v2/everything endpoint."""

    BASE_URL = "https://newsapi.org/v2/everything"

    def __init__(
        self,
        api_key: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        query_suffix: str = "NFL",
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport
        self.query_suffix = query_suffix

    async def fetch(self, subject: str, lookback_days: int = 7) -> List[RawArticle]:
        """
        Fetch articles for a subject.

        Args:
            subject: Person to search for (e.g. 'Patrick Mahomes')
            lookback_days: Number of days to look back

        Returns:
            List of RawArticle objects, newest first; empty on any fetch error
        """
        from_date = (now_utc() - timedelta(days=lookback_days)).date().isoformat()
        params = {
            "q": f"{subject} {self.query_suffix}".strip(),
            "language": "en",
            "sortBy": "publishedAt",
            "from": from_date,
            "apiKey": self.api_key,
        }

        try:
            async with httpx.AsyncClient(
                headers=HTTP_HEADERS, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.BASE_URL, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("NewsAPI request failed for %s: %s", subject, e)
            return []

        articles: List[RawArticle] = []

        for payload in data.get("articles") or []:
            title = clean_text(payload.get("title"))

            # Skip entries without a usable headline
            if not title or title == REMOVED_MARKER:
                continue

            articles.append(RawArticle.from_payload({**payload, "title": title}))

        logger.info("NewsAPI returned %d article(s) for %s", len(articles), subject)
        return articles
