import logging
import re
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTERVAL_MS = 10 * 1000
MAX_CREDENTIAL_LENGTH = 64

# unofficial, Google never documented the key format
_API_KEY_SHAPE = re.compile(r"^[0-9A-Za-z_-]{39}$")


def validate_count(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"count must be an integer, got {value!r}")
    if value < 0:
        raise ValueError("value must be non-negative.")
    if value > MAX_SAFE_INTEGER:
        raise ValueError("value is too large.")
    return value


@dataclass(frozen=True)
class VideoId:
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("video id must not be empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ChannelId:
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("channel id must not be empty")

    @property
    def is_handle(self) -> bool:
        return self.value.startswith("@")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DisplayTitle:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PollingInterval:
    milliseconds: int

    def __post_init__(self):
        if isinstance(self.milliseconds, bool) or not isinstance(self.milliseconds, int):
            raise ValueError(f"interval must be an integer number of milliseconds, got {self.milliseconds!r}")
        if self.milliseconds <= 0:
            raise ValueError("interval must be positive.")

    @property
    def seconds(self) -> float:
        return self.milliseconds / 1000


@dataclass(frozen=True)
class SafePollingInterval(PollingInterval):
    def __post_init__(self):
        super().__post_init__()
        if self.milliseconds < MIN_SAFE_INTERVAL_MS:
            raise ValueError("interval must be equal or greater than 10 seconds.")


@dataclass(frozen=True)
class ApiKeyCredential:
    value: str = field(repr=False)

    def __post_init__(self):
        if not self.value:
            raise ValueError("YouTube API key must not be empty.")
        if len(self.value) > MAX_CREDENTIAL_LENGTH:
            raise ValueError(f"YouTube API key must be at most {MAX_CREDENTIAL_LENGTH} characters.")
        if not _API_KEY_SHAPE.match(self.value):
            log.warning("YouTube API key does not look like a usual 39 character key; using it anyway")
