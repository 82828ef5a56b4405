import asyncio

from raisewatch.youtube.api_client import ChannelStatistics, VideoStatistics


async def settle(rounds: int = 20):
    for _ in range(rounds):
        await asyncio.sleep(0)


class ManualClock:
    """Stands in for asyncio.sleep; timers only fire on advance()."""

    def __init__(self):
        self.sleeps = []
        self._pending = []

    async def sleep(self, seconds):
        fut = asyncio.get_running_loop().create_future()
        self.sleeps.append(seconds)
        self._pending.append(fut)
        await fut

    @property
    def armed(self):
        return sum(1 for f in self._pending if not f.done())

    async def advance(self):
        await settle()
        pending, self._pending = self._pending, []
        for fut in pending:
            if not fut.done():
                fut.set_result(None)
        await settle()


class FakeStatistics:
    """Replays scripted counts; an exception in the script is raised instead."""

    def __init__(self, likes=(0,), subscribers=(0,), video_title="video title", channel_title="channel title"):
        self._likes = list(likes)
        self._subscribers = list(subscribers)
        self.video_title = video_title
        self.channel_title = channel_title
        self.video_calls = []
        self.channel_calls = []

    async def fetch_video_statistics(self, video_id):
        self.video_calls.append(video_id)
        value = self._likes[(len(self.video_calls) - 1) % len(self._likes)]
        if isinstance(value, BaseException):
            raise value
        return VideoStatistics(video_id, self.video_title, value)

    async def fetch_channel_statistics(self, channel_id):
        self.channel_calls.append(channel_id)
        value = self._subscribers[(len(self.channel_calls) - 1) % len(self._subscribers)]
        if isinstance(value, BaseException):
            raise value
        return ChannelStatistics(channel_id, self.channel_title, value)


class FakePages:
    def __init__(self, html="", error=None):
        self.html = html
        self.error = error
        self.urls = []

    async def fetch_page_text(self, url):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.html


def live_html(href='https://www.youtube.com/watch?v=abc123'):
    if href is None:
        link = '<link rel="canonical">'
    else:
        link = f'<link rel="canonical" href="{href}">'
    return f"<html><head><title>live</title>{link}</head><body></body></html>"


class EventLog:
    """Collects notifications from a poller."""

    def __init__(self, emitter):
        self.starts = 0
        self.ends = 0
        self.errors = []
        self.raised = []
        emitter.on("start", self._on_start)
        emitter.on("end", self._on_end)
        emitter.on("error", self.errors.append)
        emitter.on("raised", lambda previous, current: self.raised.append((previous, current)))

    def _on_start(self):
        self.starts += 1

    def _on_end(self):
        self.ends += 1
