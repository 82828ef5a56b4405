import pytest

from raisewatch.core.counts import LikeCount, SubscriberCount
from raisewatch.core.errors import IdentityMismatchError, ProgrammingFault
from raisewatch.core.values import ChannelId, DisplayTitle, VideoId


def likes(value, video="abc", title="video"):
    return LikeCount(VideoId(video), DisplayTitle(title), value)


def test_check_is_strictly_greater():
    assert likes(1).check(likes(2))
    assert not likes(2).check(likes(2))
    assert not likes(3).check(likes(2))


def test_check_ignores_title():
    assert likes(1, title="old").check(likes(2, title="new"))
    assert likes(1, title="old") == likes(1, title="new")


def test_check_across_videos_is_a_fault():
    with pytest.raises(IdentityMismatchError):
        likes(1, video="abc").check(likes(100, video="xyz"))


def test_check_across_kinds_is_a_fault():
    channel = SubscriberCount(ChannelId("abc"), DisplayTitle("channel"), 5)
    with pytest.raises(ProgrammingFault):
        likes(1).check(channel)


def test_invalid_value_rejected():
    with pytest.raises(ValueError):
        likes(-1)


def test_accessors():
    count = SubscriberCount(ChannelId("@ch"), DisplayTitle("channel"), 7)
    assert count.channel_id == ChannelId("@ch")
    assert str(count.channel_title) == "channel"
    assert likes(3).video_id == VideoId("abc")
    assert str(likes(3).video_title) == "video"
