"""Counts bound to the video or channel they were sampled from."""

from dataclasses import dataclass, field
from typing import Union

from raisewatch.core.errors import IdentityMismatchError
from raisewatch.core.values import ChannelId, DisplayTitle, VideoId, validate_count

EntityId = Union[VideoId, ChannelId]


@dataclass(frozen=True)
class TrackedCount:
    owner: EntityId
    title: DisplayTitle = field(compare=False)
    value: int

    def __post_init__(self):
        validate_count(self.value)

    def check(self, candidate: "TrackedCount") -> bool:
        """Return True when ``candidate`` is strictly greater than this count.

        Both counts must belong to the same entity; anything else means the
        caller polled the wrong target and raises IdentityMismatchError.
        """
        if type(candidate) is not type(self) or candidate.owner != self.owner:
            raise IdentityMismatchError(
                f"Different owner is detected: {self.owner} != {candidate.owner}"
            )
        return self.value < candidate.value


@dataclass(frozen=True)
class LikeCount(TrackedCount):
    owner: VideoId
    title: DisplayTitle = field(compare=False)
    value: int

    @property
    def video_id(self) -> VideoId:
        return self.owner

    @property
    def video_title(self) -> DisplayTitle:
        return self.title


@dataclass(frozen=True)
class SubscriberCount(TrackedCount):
    owner: ChannelId
    title: DisplayTitle = field(compare=False)
    value: int

    @property
    def channel_id(self) -> ChannelId:
        return self.owner

    @property
    def channel_title(self) -> DisplayTitle:
        return self.title
