import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from raisewatch.core.errors import StatisticsFetchError, UpstreamApiError
from raisewatch.core.values import ApiKeyCredential, ChannelId, VideoId

log = logging.getLogger(__name__)

BASE_URL = "https://www.googleapis.com/youtube/v3"
PARTS = ",".join(["snippet", "statistics"])


@dataclass(frozen=True)
class VideoStatistics:
    video_id: VideoId
    title: str
    like_count: int


@dataclass(frozen=True)
class ChannelStatistics:
    channel_id: ChannelId
    title: str
    subscriber_count: int


class StatisticsSource(Protocol):
    async def fetch_video_statistics(self, video_id: VideoId) -> VideoStatistics: ...

    async def fetch_channel_statistics(self, channel_id: ChannelId) -> ChannelStatistics: ...


class YouTubeDataClient:
    def __init__(self, credential: ApiKeyCredential, http: Optional[httpx.AsyncClient] = None, timeout: float = 10):
        self._key = credential.value
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout)

    async def fetch_video_statistics(self, video_id: VideoId) -> VideoStatistics:
        params = {
            "id": video_id.value,
            "key": self._key,
            "part": PARTS,
        }
        item = await self._first_item("videos", params)
        try:
            return VideoStatistics(
                video_id=video_id,
                title=item["snippet"]["title"],
                like_count=int(item["statistics"]["likeCount"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StatisticsFetchError("Failed to get like count via YouTube videos API.") from e

    async def fetch_channel_statistics(self, channel_id: ChannelId) -> ChannelStatistics:
        params = {
            "key": self._key,
            "part": PARTS,
        }
        if channel_id.is_handle:
            params["forHandle"] = channel_id.value
        else:
            params["id"] = channel_id.value
        item = await self._first_item("channels", params)
        try:
            return ChannelStatistics(
                channel_id=channel_id,
                title=item["snippet"]["title"],
                subscriber_count=int(item["statistics"]["subscriberCount"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StatisticsFetchError("Failed to get subscriber count via YouTube channels API.") from e

    async def _first_item(self, resource: str, params: Dict[str, str]) -> Dict[str, Any]:
        try:
            r = await self._http.get(f"{BASE_URL}/{resource}", params=params)
        except httpx.HTTPError as e:
            raise StatisticsFetchError(f"Request to YouTube {resource} API failed: {e}") from e
        try:
            data = r.json()
        except ValueError as e:
            raise StatisticsFetchError(
                f"YouTube {resource} API returned a non-JSON body (status {r.status_code})"
            ) from e
        if isinstance(data, dict) and "error" in data:
            raise _upstream_error(resource, data["error"])
        if r.is_error:
            raise StatisticsFetchError(f"YouTube {resource} API returned status {r.status_code}")
        items = data.get("items") if isinstance(data, dict) else None
        if not items:
            raise StatisticsFetchError(f"YouTube {resource} API returned no items")
        return items[0]

    async def aclose(self):
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()


def _upstream_error(resource: str, payload: Any) -> UpstreamApiError:
    if not isinstance(payload, dict):
        return UpstreamApiError(f"YouTube {resource} API returned an error: {payload}")
    code = payload.get("code")
    reason = None
    errors = payload.get("errors") or []
    if errors and isinstance(errors[0], dict):
        reason = errors[0].get("reason")
    message = payload.get("message") or "unknown error"
    log.debug("Upstream error from %s code=%s reason=%s", resource, code, reason)
    return UpstreamApiError(f"YouTube {resource} API returned an error: {message}", code=code, reason=reason)
