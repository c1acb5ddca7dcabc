"""
File: signal_engine/sources/reddit.py
Reddit search JSON fetcher (unauthenticated). For production, prefer OAuth API.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Set

import httpx

from signal_engine.config import REDDIT_SUBREDDITS
from signal_engine.models import RedditPost
from signal_engine.utils import normalize_text

logger = logging.getLogger(__name__)


class RedditFetcher:
    def __init__(
        self,
        user_agent: str,
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.headers = {"User-Agent": user_agent}
        self.timeout = timeout
        self.transport = transport

    async def search(
        self, subject: str, subreddit: Optional[str] = "nfl", limit: int = 10
    ) -> List[RedditPost]:
        """Newest posts matching a subject; empty on any fetch error."""
        params = {
            "q": subject,
            "sort": "new",
            "limit": limit,
            "restrict_sr": "true" if subreddit else "false",
        }
        if subreddit:
            url = f"https://www.reddit.com/r/{subreddit}/search.json"
        else:
            url = "https://www.reddit.com/search.json"

        try:
            async with httpx.AsyncClient(
                headers=self.headers, timeout=self.timeout, transport=self.transport
            ) as client:
                r = await client.get(url, params=params)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Reddit search failed for %s: %s", subject, e)
            return []

        posts: List[RedditPost] = []
        for child in data.get("data", {}).get("children", []):
            p = child.get("data", {})
            created_utc = p.get("created_utc")
            dt = datetime.fromtimestamp(created_utc, tz=timezone.utc) if created_utc else None

            title = normalize_text(p.get("title", ""))
            permalink = p.get("permalink", "")
            link = f"https://www.reddit.com{permalink}" if permalink else p.get("url", "")

            if not title or not link:
                continue

            posts.append(
                RedditPost(
                    title=title,
                    subreddit=p.get("subreddit", "") or (subreddit or ""),
                    url=link,
                    score=int(p.get("score", 0) or 0),
                    num_comments=int(p.get("num_comments", 0) or 0),
                    published_at=dt,
                )
            )

        return posts[:limit]

    async def search_all(
        self, subject: str, subreddits: Sequence[str] = REDDIT_SUBREDDITS, limit: int = 10
    ) -> List[RedditPost]:
        """Search each subreddit concurrently; posts cross-posted to several appear once."""
        batches = await asyncio.gather(
            *(self.search(subject, subreddit=name, limit=limit) for name in subreddits)
        )

        seen: Set[str] = set()
        posts: List[RedditPost] = []
        for batch in batches:
            for post in batch:
                if post.url in seen:
                    continue
                seen.add(post.url)
                posts.append(post)
        return posts
