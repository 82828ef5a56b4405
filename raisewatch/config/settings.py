from typing import List, Optional
import re
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

KNOWN_METRICS = ("likes", "subscribers")


def parse_metrics(raw: str) -> List[str]:
    parts = re.split(r"[,\n\s]+", raw.strip()) if raw else []
    metrics = [p.lower() for p in (s.strip() for s in parts) if p]
    unknown = [m for m in metrics if m not in KNOWN_METRICS]
    if unknown:
        raise ValueError(f"unknown metrics {unknown}; expected any of {list(KNOWN_METRICS)}")
    # keep order, drop duplicates
    return list(dict.fromkeys(metrics))


class Settings(BaseSettings):
    youtube_api_key: Optional[str] = Field(default=None, alias="API_KEY")
    channel_id: Optional[str] = Field(default=None, alias="CHANNEL_ID")
    poll_interval_ms: int = Field(default=30000, alias="POLL_INTERVAL_MS")
    watch_metrics_raw: str = Field(default="likes,subscribers", alias="WATCH_METRICS")
    http_timeout_sec: float = Field(default=10, alias="HTTP_TIMEOUT_SEC")
    log_format: str = Field(default="plain", alias="LOG_FORMAT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    metrics_port: int = Field(default=9100, alias="METRICS_PORT")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True)

    @field_validator("watch_metrics_raw")
    @classmethod
    def _valid_metrics(cls, v: str) -> str:
        parse_metrics(v)
        return v

    @field_validator("log_format")
    @classmethod
    def _valid_log_format(cls, v: str) -> str:
        if v not in ("plain", "json"):
            raise ValueError("LOG_FORMAT must be 'plain' or 'json'")
        return v

    @property
    def watch_metrics(self) -> List[str]:
        return parse_metrics(self.watch_metrics_raw)

settings = Settings()
