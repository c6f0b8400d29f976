"""
Export configuration.

An ExportConfig is built once per export and passed down explicitly, so
concurrent exports never share mutable settings.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_BASE_URL = "https://api.teamtailor.com/v1"
DEFAULT_PAGE_SIZE = 30
DEFAULT_API_VERSION = "20210218"
DEFAULT_TIMEOUT = 15
DEFAULT_MAX_RETRIES = 3

# Value shipped in example .env files; treated as "not configured"
PLACEHOLDER_API_KEY = "your_api_key_here"


def has_usable_api_key(api_key: Optional[str]) -> bool:
    return bool(api_key and api_key.strip() and api_key.strip() != PLACEHOLDER_API_KEY)


def _parse_max_pages(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"TEAMTAILOR_MAX_PAGES must be an integer, got {raw!r}")
    if value < 1:
        raise ValueError(f"TEAMTAILOR_MAX_PAGES must be >= 1, got {value}")
    return value


@dataclass(frozen=True)
class ExportConfig:
    """Settings for one candidate export."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    max_pages: Optional[int] = None

    def __post_init__(self):
        if self.max_pages is not None and self.max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {self.max_pages}")

    @classmethod
    def from_env(cls, **overrides) -> "ExportConfig":
        """
        Build a config from TEAMTAILOR_* environment variables.

        Keyword overrides that are not None take precedence over the
        environment (e.g. values given on the command line).
        """
        config = cls(
            api_key=os.getenv("TEAMTAILOR_API_KEY", ""),
            base_url=os.getenv("TEAMTAILOR_BASE_URL") or DEFAULT_BASE_URL,
            max_pages=_parse_max_pages(os.getenv("TEAMTAILOR_MAX_PAGES")),
        )
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(config, **overrides)

    @property
    def candidates_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/candidates"
