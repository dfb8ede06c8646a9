"""Environment-driven settings for the record provider and table."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "PAGED_SELECTION_"

DEFAULT_API_URL = "https://api.artic.edu/api/v1"
DEFAULT_PAGE_SIZE = 12
DEFAULT_TIMEOUT = 20.0
DEFAULT_FIELDS = (
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
)


def _env(name: str) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}{name}")


def _env_int(name: str, fallback: int) -> int:
    value = _env(name)
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def _env_float(name: str, fallback: float) -> float:
    value = _env(name)
    if value is None:
        return fallback
    try:
        parsed = float(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


@dataclass(frozen=True, slots=True)
class Settings:
    """Where records come from and how many of them make up one page."""

    api_base_url: str = DEFAULT_API_URL
    page_size: int = DEFAULT_PAGE_SIZE
    request_timeout: float = DEFAULT_TIMEOUT
    fields: tuple[str, ...] = DEFAULT_FIELDS

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        object.__setattr__(self, "api_base_url", self.api_base_url.rstrip("/"))

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_base_url=_env("API_URL") or DEFAULT_API_URL,
            page_size=_env_int("PAGE_SIZE", DEFAULT_PAGE_SIZE),
            request_timeout=_env_float("TIMEOUT", DEFAULT_TIMEOUT),
        )


__all__ = ["ENV_PREFIX", "Settings"]
