"""
Podcast RSS fetcher: finds recent episodes that mention a subject.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence, Tuple

import feedparser
import httpx

from signal_engine.config import HTTP_HEADERS, PODCAST_FEEDS
from signal_engine.models import PodcastEpisode
from signal_engine.sources.common import clean_text, name_terms, strip_html
from signal_engine.utils import parse_timestamp

logger = logging.getLogger(__name__)


class PodcastFeedFetcher:
    """Searches a fixed set of podcast RSS feeds for episode mentions."""

    def __init__(
        self,
        feeds: Sequence[Tuple[str, str]] = PODCAST_FEEDS,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        recent_episodes: int = 20,
        max_matches: int = 5,
    ) -> None:
        self.feeds = tuple(feeds)
        self.timeout = timeout
        self.transport = transport
        self.recent_episodes = recent_episodes
        self.max_matches = max_matches

    async def _fetch_feed(self, client: httpx.AsyncClient, name: str, url: str) -> List[PodcastEpisode]:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Podcast feed %s unavailable: %s", name, e)
            return []

        feed = feedparser.parse(response.content)
        episodes: List[PodcastEpisode] = []

        for entry in feed.entries[: self.recent_episodes]:
            title = strip_html(entry.get("title"))
            if not title:
                continue
            enclosure = next(
                (link.get("href") for link in entry.get("links", []) if link.get("rel") == "enclosure"),
                "",
            )
            episodes.append(
                PodcastEpisode(
                    podcast_name=name,
                    title=title,
                    description=strip_html(entry.get("summary") or entry.get("description")),
                    link=clean_text(entry.get("link")) or enclosure or "",
                    published_at=parse_timestamp(entry.get("published")),
                )
            )

        return episodes

    async def search(self, subject: str) -> List[PodcastEpisode]:
        """
        Find episodes whose title or description mentions any token of the subject's name.

        Args:
            subject: Person to search for

        Returns:
            Matching episodes, at most ``max_matches`` per podcast, feed order
        """
        terms = name_terms(subject)
        if not terms:
            return []

        async with httpx.AsyncClient(
            headers=HTTP_HEADERS, timeout=self.timeout, transport=self.transport, follow_redirects=True
        ) as client:
            feeds = await asyncio.gather(
                *(self._fetch_feed(client, name, url) for name, url in self.feeds)
            )

        matches: List[PodcastEpisode] = []
        for episodes in feeds:
            found = [
                episode
                for episode in episodes
                if any(term in episode.title.lower() or term in episode.description.lower() for term in terms)
            ]
            matches.extend(found[: self.max_matches])

        return matches
