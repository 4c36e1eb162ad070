"""Shared configuration utilities."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar, Callable, Generic

import yaml
from dotenv import load_dotenv

load_dotenv()

T = TypeVar('T')


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


class ConfigSingleton(Generic[T]):
    """Lazily loaded process-wide value with get/set/reset accessors.

    Settings and tag tables each keep one; tests swap values in with set
    and drop them with reset so the next get reloads.
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._value: T | None = None
        self._loader = loader

    def get(self) -> T:
        if self._value is None:
            if self._loader is None:
                raise RuntimeError("Nothing set and no loader configured")
            self._value = self._loader()
        return self._value

    def set(self, value: T) -> None:
        self._value = value

    def reset(self) -> None:
        """Forget the current value; the loader runs again on next get()."""
        self._value = None


@dataclass(frozen=True)
class Settings:
    """Runtime settings shared by both enrichment stages."""

    aws_region: str = "us-east-1"
    request_timeout: float = 10.0
    user_agent: str = "feed-enrich/1.0"
    image_retry_attempts: int = 5
    image_retry_wait_max: float = 30.0
    tag_tables_path: str = ""
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.image_retry_attempts < 1:
            raise ValueError(
                f"Invalid image_retry_attempts: {self.image_retry_attempts}. Must be >= 1"
            )
        if self.request_timeout <= 0:
            raise ValueError(f"Invalid request_timeout: {self.request_timeout}. Must be > 0")


def load_settings() -> Settings:
    """Build settings from environment variables."""
    return Settings(
        aws_region=os.environ.get("AWS_REGION", "us-east-1"),
        request_timeout=float(os.environ.get("REQUEST_TIMEOUT", "10")),
        user_agent=os.environ.get("USER_AGENT", "feed-enrich/1.0"),
        image_retry_attempts=int(os.environ.get("IMAGE_RETRY_ATTEMPTS", "5")),
        image_retry_wait_max=float(os.environ.get("IMAGE_RETRY_WAIT_MAX", "30")),
        tag_tables_path=os.environ.get("TAG_TABLES_PATH", ""),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )


_settings = ConfigSingleton(load_settings)
get_settings = _settings.get
set_settings = _settings.set
reset_settings = _settings.reset
