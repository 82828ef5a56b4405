import asyncio
import json
import logging
import sys
from typing import List, Optional, Sequence

from prometheus_client import start_http_server

from raisewatch.config.settings import KNOWN_METRICS, settings
from raisewatch.core.counts import TrackedCount
from raisewatch.core.values import ApiKeyCredential, ChannelId, SafePollingInterval
from raisewatch.youtube.api_client import YouTubeDataClient
from raisewatch.youtube.page_fetcher import PageFetcher
from raisewatch.youtube.poller import LikeCountPoller, RaisedEventPoller, SubscriberCountPoller

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record):
        base = {
            'time': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'msg': record.getMessage(),
        }
        if record.exc_info:
            base['exc'] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(log_format: str = "plain", level: str = "INFO"):
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if log_format == 'json' else logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper())


class ChannelWatcher:
    """Independent per-metric pollers sharing one channel and one set of HTTP clients."""

    def __init__(self, channel_id: str, interval_ms: int, credential: str,
                 metrics: Sequence[str] = KNOWN_METRICS, timeout: float = 10):
        unknown = [m for m in metrics if m not in KNOWN_METRICS]
        if unknown:
            raise ValueError(f"unknown metrics {unknown}")
        if not metrics:
            raise ValueError("at least one metric must be watched")
        self.channel_id = ChannelId(channel_id)
        interval = SafePollingInterval(interval_ms)
        self.api = YouTubeDataClient(ApiKeyCredential(credential), timeout=timeout)
        self.pages = PageFetcher(timeout=timeout)
        self.pollers: List[RaisedEventPoller] = []
        for metric in dict.fromkeys(metrics):
            if metric == "likes":
                poller = LikeCountPoller(self.channel_id, interval, self.api, self.pages)
            else:
                poller = SubscriberCountPoller(self.channel_id, interval, self.api)
            _attach_log_listeners(poller)
            self.pollers.append(poller)

    async def start(self) -> int:
        results = await asyncio.gather(*(p.start() for p in self.pollers))
        return sum(1 for ok in results if ok)

    async def wait(self):
        await asyncio.gather(*(p.wait() for p in self.pollers if p.active))

    def close(self):
        for p in self.pollers:
            p.close()

    async def aclose(self):
        self.close()
        await self.api.aclose()
        await self.pages.aclose()


def _attach_log_listeners(poller: RaisedEventPoller):
    metric = poller.metric

    def on_start():
        current = poller.current()
        log.info("[%s] start: %s", metric, _describe(current) if current else poller.channel_id)

    def on_end():
        log.info("[%s] end", metric)

    def on_error(err: Exception):
        log.error("[%s] error: %s", metric, err)

    def on_raised(previous: TrackedCount, current: TrackedCount):
        log.info("[%s] raised: %s -> %d", metric, _describe(previous), current.value)

    poller.on("start", on_start)
    poller.on("end", on_end)
    poller.on("error", on_error)
    poller.on("raised", on_raised)


def _describe(count: TrackedCount) -> str:
    return f"{count.title} ({count.owner}) = {count.value}"


async def main(channel_id: Optional[str] = None, interval_ms: Optional[int] = None,
               credential: Optional[str] = None, metrics: Optional[Sequence[str]] = None) -> int:
    configure_logging(settings.log_format, settings.log_level)
    channel_id = channel_id or settings.channel_id
    credential = credential or settings.youtube_api_key
    if not channel_id or not credential:
        log.error("CHANNEL_ID and API_KEY must be set")
        return 2
    if settings.metrics_port:
        start_http_server(settings.metrics_port)
    watcher = ChannelWatcher(
        channel_id,
        interval_ms or settings.poll_interval_ms,
        credential,
        metrics or settings.watch_metrics,
        timeout=settings.http_timeout_sec,
    )
    try:
        started = await watcher.start()
        if not started:
            log.error("Nothing to watch on %s", channel_id)
            return 1
        await watcher.wait()
        return 0
    finally:
        await watcher.aclose()

if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
