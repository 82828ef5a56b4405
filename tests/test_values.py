import logging

import pytest

from raisewatch.core.values import (
    MAX_SAFE_INTEGER,
    ApiKeyCredential,
    ChannelId,
    DisplayTitle,
    PollingInterval,
    SafePollingInterval,
    VideoId,
    validate_count,
)

VALID_KEY = "abcdefghijABCDEFGHIJ0123456789-_-_-_-_-"


def test_ids_compare_by_value():
    assert VideoId("abc") == VideoId("abc")
    assert ChannelId("UCabc") != ChannelId("@abc")
    assert str(VideoId("abc")) == "abc"


def test_empty_ids_rejected():
    with pytest.raises(ValueError):
        VideoId("")
    with pytest.raises(ValueError):
        ChannelId("")


def test_handle_detection():
    assert ChannelId("@SomeChannel").is_handle
    assert not ChannelId("UC1234567890").is_handle


def test_display_title_is_plain_text():
    assert str(DisplayTitle("stream")) == "stream"


@pytest.mark.parametrize("value", [0, 1, MAX_SAFE_INTEGER])
def test_valid_counts(value):
    assert validate_count(value) == value


def test_negative_count_rejected():
    with pytest.raises(ValueError, match="non-negative"):
        validate_count(-1)


def test_unsafe_count_rejected():
    with pytest.raises(ValueError, match="too large"):
        validate_count(MAX_SAFE_INTEGER + 1)


@pytest.mark.parametrize("value", [True, 1.5, "3"])
def test_non_integer_count_rejected(value):
    with pytest.raises(ValueError):
        validate_count(value)


def test_polling_interval():
    interval = PollingInterval(1500)
    assert interval.seconds == 1.5
    with pytest.raises(ValueError):
        PollingInterval(0)
    with pytest.raises(ValueError):
        PollingInterval(-10)


def test_safe_polling_interval_floor():
    assert SafePollingInterval(10000).milliseconds == 10000
    with pytest.raises(ValueError, match="10 seconds"):
        SafePollingInterval(9999)


def test_credential_accepts_usual_key():
    assert ApiKeyCredential(VALID_KEY).value == VALID_KEY


def test_credential_bounds():
    with pytest.raises(ValueError):
        ApiKeyCredential("")
    with pytest.raises(ValueError):
        ApiKeyCredential("a" * 65)
    assert ApiKeyCredential("a" * 64).value == "a" * 64


def test_unusual_credential_only_warns(caplog):
    with caplog.at_level(logging.WARNING):
        credential = ApiKeyCredential("not a usual key")
    assert credential.value == "not a usual key"
    assert "39 character" in caplog.text


def test_credential_repr_hides_key():
    assert VALID_KEY not in repr(ApiKeyCredential(VALID_KEY))
