"""
YouTube Data API fetcher: video search, full video details and captions.

Search results are stubs without a duration. They must go through
``hydrate`` before the content-type classifier can score them.
"""
from __future__ import annotations

import asyncio
import logging
import xml.etree.ElementTree as ET
from typing import Dict, Iterable, List, Optional, Sequence, Set

import httpx

from signal_engine.config import HTTP_HEADERS, LONG_FORM_CHANNEL_IDS
from signal_engine.models import CaptionSegment, JsonDict, RawMediaItem
from signal_engine.sources.common import clean_text
from signal_engine.utils import parse_iso8601_duration

logger = logging.getLogger(__name__)

# videos.list accepts at most 50 ids per call
DETAILS_BATCH_SIZE = 50


def _video_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


class YouTubeFetcher:
    """Fetches video metadata and caption tracks."""

    API_URL = "https://www.googleapis.com/youtube/v3"
    TIMEDTEXT_URL = "https://www.youtube.com/api/timedtext"

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

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(headers=HTTP_HEADERS, timeout=self.timeout, transport=self.transport)

    async def search(
        self,
        subject: str,
        max_results: int = 5,
        channel_id: Optional[str] = None,
    ) -> List[RawMediaItem]:
        """
        Search videos mentioning a subject.

        Args:
            subject: Person to search for
            max_results: Maximum number of results
            channel_id: Restrict the search to one channel

        Returns:
            Stub RawMediaItems (duration unknown); empty on any fetch error
        """
        params = {
            "part": "snippet",
            "q": f"{subject} {self.query_suffix}".strip(),
            "type": "video",
            "maxResults": max_results,
            "key": self.api_key,
        }
        if channel_id:
            params["channelId"] = channel_id

        try:
            async with self._client() as client:
                response = await client.get(f"{self.API_URL}/search", params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("YouTube search failed for %s: %s", subject, e)
            return []

        items: List[RawMediaItem] = []
        for entry in data.get("items") or []:
            video_id = (entry.get("id") or {}).get("videoId")
            if not video_id:
                continue
            items.append(self._from_snippet(video_id, entry.get("snippet") or {}))

        return items

    async def search_all(
        self,
        subject: str,
        max_results: int = 5,
        channel_ids: Sequence[str] = LONG_FORM_CHANNEL_IDS,
        per_channel: int = 3,
    ) -> List[RawMediaItem]:
        """
        Global search plus a search inside each long-form channel.

        Args:
            subject: Person to search for
            max_results: Maximum results of the global search
            channel_ids: Channels searched individually
            per_channel: Maximum results per channel

        Returns:
            Stub RawMediaItems, global results first, each video once
        """
        batches = await asyncio.gather(
            self.search(subject, max_results),
            *(self.search(subject, per_channel, channel_id=channel_id) for channel_id in channel_ids),
        )

        seen: Set[str] = set()
        items: List[RawMediaItem] = []
        for batch in batches:
            for item in batch:
                if item.video_id in seen:
                    continue
                seen.add(item.video_id)
                items.append(item)
        return items

    async def fetch_details(self, video_ids: Iterable[str]) -> Dict[str, RawMediaItem]:
        """
        Fetch full details (including duration) for a set of videos.

        Returns:
            Mapping of video id to detailed RawMediaItem; ids the API does not
            return are absent
        """
        ids = [vid for vid in dict.fromkeys(video_ids) if vid]
        details: Dict[str, RawMediaItem] = {}

        async with self._client() as client:
            for start in range(0, len(ids), DETAILS_BATCH_SIZE):
                batch = ids[start : start + DETAILS_BATCH_SIZE]
                params = {
                    "part": "snippet,contentDetails",
                    "id": ",".join(batch),
                    "key": self.api_key,
                }
                try:
                    response = await client.get(f"{self.API_URL}/videos", params=params)
                    response.raise_for_status()
                    data = response.json()
                except (httpx.HTTPError, ValueError) as e:
                    logger.warning("YouTube details request failed for %d video(s): %s", len(batch), e)
                    continue

                for entry in data.get("items") or []:
                    video_id = entry.get("id")
                    if not video_id:
                        continue
                    item = self._from_snippet(video_id, entry.get("snippet") or {})
                    item.duration_seconds = parse_iso8601_duration(
                        (entry.get("contentDetails") or {}).get("duration")
                    )
                    details[video_id] = item

        return details

    async def hydrate(self, items: List[RawMediaItem]) -> List[RawMediaItem]:
        """
        Replace search stubs with fully detailed items.

        Items already carrying a duration are kept as they are; stubs whose
        details cannot be fetched are returned unchanged (still without a
        duration) so the caller can skip them explicitly.
        """
        missing = [item.video_id for item in items if not item.has_details]
        if not missing:
            return list(items)

        details = await self.fetch_details(missing)
        hydrated: List[RawMediaItem] = []
        for item in items:
            if item.has_details:
                hydrated.append(item)
            else:
                hydrated.append(details.get(item.video_id, item))
        return hydrated

    async def fetch_transcript(self, video_id: str, language: str = "en") -> List[CaptionSegment]:
        """
        Fetch the caption track for a video.

        Returns:
            Caption segments in offset order; empty when the video has no
            captions in the requested language or the request fails
        """
        params = {"lang": language, "v": video_id}

        try:
            async with self._client() as client:
                response = await client.get(self.TIMEDTEXT_URL, params=params)
                response.raise_for_status()
                body = response.text
        except httpx.HTTPError as e:
            logger.warning("Caption request failed for %s: %s", video_id, e)
            return []

        if not body.strip():
            return []

        try:
            root = ET.fromstring(body)
        except ET.ParseError as e:
            logger.warning("Malformed caption track for %s: %s", video_id, e)
            return []

        segments: List[CaptionSegment] = []
        for node in root.iter("text"):
            try:
                offset = float(node.get("start", 0.0))
            except ValueError:
                offset = 0.0
            segments.append(CaptionSegment(text="".join(node.itertext()), offset=offset))

        return segments

    @staticmethod
    def _from_snippet(video_id: str, snippet: JsonDict) -> RawMediaItem:
        return RawMediaItem(
            video_id=video_id,
            title=clean_text(snippet.get("title")),
            description=clean_text(snippet.get("description")),
            channel_id=snippet.get("channelId") or "",
            channel_title=clean_text(snippet.get("channelTitle")),
            published_at=snippet.get("publishedAt"),
            url=_video_url(video_id),
        )
