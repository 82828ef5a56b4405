import logging
import re

from bs4 import BeautifulSoup

from raisewatch.core.errors import LiveVideoResolutionError
from raisewatch.core.values import ChannelId, VideoId
from raisewatch.youtube.page_fetcher import PageSource

log = logging.getLogger(__name__)

WATCH_URL = re.compile(r"^https://www\.youtube\.com/watch\?v=(.+)$")


def live_page_url(channel_id: ChannelId) -> str:
    # @handle and UC... ids live under different paths
    if channel_id.is_handle:
        return f"https://www.youtube.com/{channel_id.value}/live"
    return f"https://www.youtube.com/channel/{channel_id.value}/live"


def extract_live_video_id(html: str) -> VideoId:
    soup = BeautifulSoup(html, "html.parser")
    link = soup.find("link", rel="canonical")
    if link is None:
        raise LiveVideoResolutionError("Given channel doesn't have streaming or upcoming live.")
    href = link.get("href")
    if href is None:
        raise LiveVideoResolutionError("<link> element doesn't have href. YouTube DOM may have changed.")
    m = WATCH_URL.match(href)
    if m is None:
        raise LiveVideoResolutionError(
            "This channel has no live-streaming or upcoming live, or the canonical href format has changed."
        )
    return VideoId(m.group(1))


async def resolve_live_video_id(channel_id: ChannelId, pages: PageSource) -> VideoId:
    url = live_page_url(channel_id)
    try:
        body = await pages.fetch_page_text(url)
    except Exception as e:
        log.debug("Live page fetch failed url=%s error=%s", url, e)
        raise LiveVideoResolutionError("Failed to get videoId via scraping YouTube page.") from e
    video_id = extract_live_video_id(body)
    log.info("Resolved live video %s for channel %s", video_id, channel_id)
    return video_id
