import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from raisewatch.core.counts import EntityId, LikeCount, SubscriberCount, TrackedCount
from raisewatch.core.errors import ProgrammingFault, RaiseWatchError, StatisticsFetchError, TrackerNotSeededError
from raisewatch.core.values import (
    ApiKeyCredential,
    ChannelId,
    DisplayTitle,
    PollingInterval,
    SafePollingInterval,
    VideoId,
)
from raisewatch.metrics.registry import (
    last_poll_timestamp,
    poll_duration_seconds,
    poll_errors_total,
    pollers_active,
    raised_events_total,
    tracked_count,
)
from raisewatch.youtube.api_client import StatisticsSource, YouTubeDataClient
from raisewatch.youtube.events import EventEmitter
from raisewatch.youtube.live_page import resolve_live_video_id
from raisewatch.youtube.page_fetcher import PageFetcher, PageSource
from raisewatch.youtube.tracker import CountTracker, LikeCountTracker, SubscriberCountTracker

log = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class RaisedEventPoller(EventEmitter):
    """Samples one metric of one channel on a fixed interval.

    Emits ``start`` and ``end`` around a run, ``error`` for every failed
    resolution or sample, and ``raised(previous, current)`` whenever a sample
    is strictly greater than the best value seen so far. A failed tick is
    reported and the next one is scheduled as usual.
    """

    metric = ""
    fetch_failure_message = "Failed to get statistics via YouTube Data API."

    def __init__(self, channel_id: ChannelId, interval: PollingInterval, api: StatisticsSource, sleep: Sleep = asyncio.sleep):
        super().__init__()
        self.channel_id = channel_id
        self.interval = interval
        self.api = api
        self._sleep = sleep
        self._tracker: Optional[CountTracker] = None
        self._active = False
        self._run_id = 0
        self._task: Optional[asyncio.Task] = None
        self._owned: List = []

    @property
    def active(self) -> bool:
        return self._active

    def current(self) -> Optional[TrackedCount]:
        return self._tracker.current() if self._tracker else None

    async def _resolve_target(self) -> EntityId:
        raise NotImplementedError

    async def _fetch(self, target: EntityId) -> TrackedCount:
        raise NotImplementedError

    def _new_tracker(self, seed: TrackedCount) -> CountTracker:
        raise NotImplementedError

    async def _sample(self, target: EntityId) -> TrackedCount:
        try:
            return await self._fetch(target)
        except (RaiseWatchError, ProgrammingFault):
            raise
        except Exception as e:
            raise StatisticsFetchError(self.fetch_failure_message) from e

    async def start(self) -> bool:
        if self._active:
            return True
        try:
            target = await self._resolve_target()
            seed = await self._sample(target)
        except RaiseWatchError as e:
            log.warning("Start failed metric=%s channel=%s error=%s", self.metric, self.channel_id, e)
            self.emit("error", e)
            return False
        if self._active:
            # a concurrent start() won the race
            return True

        self._tracker = self._new_tracker(seed)
        self._active = True
        self._run_id += 1
        self._task = asyncio.create_task(self._run(self._run_id))
        pollers_active.labels(metric=self.metric).inc()
        tracked_count.labels(metric=self.metric, channel=str(self.channel_id)).set(self._tracker.current().value)
        log.info("Watching %s of %s (%s) every %sms", self.metric, self.channel_id, seed.title, self.interval.milliseconds)
        self.emit("start")
        return True

    def close(self):
        if not self._active:
            return
        self._active = False
        pollers_active.labels(metric=self.metric).dec()
        log.info("Stopped watching %s of %s", self.metric, self.channel_id)
        self.emit("end")

    async def wait(self):
        """Wait for the current sampling loop to finish; re-raises faults."""
        if self._task is not None:
            await self._task

    async def aclose(self):
        self.close()
        for resource in self._owned:
            await resource.aclose()
        self._owned = []

    async def _run(self, run_id: int):
        while True:
            await self._sleep(self.interval.seconds)
            if not self._active or run_id != self._run_id:
                return
            await self._execute(run_id)

    async def _execute(self, run_id: Optional[int] = None):
        if not self._active:
            return
        if self._tracker is None:
            raise TrackerNotSeededError("Sampling tick ran before the tracker was seeded.")
        if run_id is None:
            run_id = self._run_id

        channel = str(self.channel_id)
        target = self._tracker.current().owner
        with poll_duration_seconds.labels(metric=self.metric).time():
            try:
                sample = await self._sample(target)
            except RaiseWatchError as e:
                if run_id != self._run_id:
                    return
                poll_errors_total.labels(metric=self.metric, channel=channel).inc()
                log.warning("Sample failed metric=%s channel=%s error=%s", self.metric, channel, e)
                self.emit("error", e)
                return
        if run_id != self._run_id:
            # restarted while this tick was in flight; the sample belongs to the old run
            log.debug("Dropping sample of a previous run metric=%s channel=%s", self.metric, channel)
            return
        last_poll_timestamp.labels(metric=self.metric, channel=channel).set_to_current_time()

        previous = self._tracker.current()
        if self._tracker.update(sample):
            raised_events_total.labels(metric=self.metric, channel=channel).inc()
            tracked_count.labels(metric=self.metric, channel=channel).set(sample.value)
            log.info("%s of %s raised %d -> %d", self.metric, channel, previous.value, sample.value)
            self.emit("raised", previous, sample)


class LikeCountPoller(RaisedEventPoller):
    metric = "likes"
    fetch_failure_message = "Failed to get like count via YouTube videos API."

    def __init__(self, channel_id: ChannelId, interval: PollingInterval, api: StatisticsSource, pages: PageSource, sleep: Sleep = asyncio.sleep):
        super().__init__(channel_id, interval, api, sleep=sleep)
        self.pages = pages

    @classmethod
    def create(cls, channel_id: str, interval_ms: int, credential: str, timeout: float = 10) -> "LikeCountPoller":
        cid, interval, key = ChannelId(channel_id), SafePollingInterval(interval_ms), ApiKeyCredential(credential)
        api = YouTubeDataClient(key, timeout=timeout)
        pages = PageFetcher(timeout=timeout)
        poller = cls(cid, interval, api, pages)
        poller._owned = [api, pages]
        return poller

    async def _resolve_target(self) -> VideoId:
        return await resolve_live_video_id(self.channel_id, self.pages)

    async def _fetch(self, target: VideoId) -> LikeCount:
        stats = await self.api.fetch_video_statistics(target)
        return LikeCount(target, DisplayTitle(stats.title), stats.like_count)

    def _new_tracker(self, seed: LikeCount) -> LikeCountTracker:
        return LikeCountTracker(seed)


class SubscriberCountPoller(RaisedEventPoller):
    metric = "subscribers"
    fetch_failure_message = "Failed to get subscriber count via YouTube channels API."

    @classmethod
    def create(cls, channel_id: str, interval_ms: int, credential: str, timeout: float = 10) -> "SubscriberCountPoller":
        cid, interval, key = ChannelId(channel_id), SafePollingInterval(interval_ms), ApiKeyCredential(credential)
        api = YouTubeDataClient(key, timeout=timeout)
        poller = cls(cid, interval, api)
        poller._owned = [api]
        return poller

    async def _resolve_target(self) -> ChannelId:
        return self.channel_id

    async def _fetch(self, target: ChannelId) -> SubscriberCount:
        stats = await self.api.fetch_channel_statistics(target)
        return SubscriberCount(target, DisplayTitle(stats.title), stats.subscriber_count)

    def _new_tracker(self, seed: SubscriberCount) -> SubscriberCountTracker:
        return SubscriberCountTracker(seed)
