"""Environment driven settings for :mod:`duplexprint`."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ConfigurationError

LOGGER = logging.getLogger("duplexprint.config")

ENV_PREFIX = "DUPLEXPRINT_"
_TRUTHY = {"1", "true", "yes", "on"}

DEFAULT_ODD_FILENAME = "odd_pages.pdf"
DEFAULT_EVEN_FILENAME = "even_pages.pdf"


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    value = environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigurationError(
            f"{ENV_PREFIX}{name} must be an integer, got {value!r}"
        ) from exc


def _env_filename(environ: Mapping[str, str], name: str, default: str) -> str:
    value = environ.get(ENV_PREFIX + name)
    if not value:
        return default
    return Path(value.strip()).name or default


@dataclass(frozen=True)
class DuplexSettings:
    """
    Settings shared by the working set and the command line.

    Attributes:
        max_workers: Thread pool size used to parse inputs; 1 parses sequentially
        odd_filename: Output name for the front-side pages
        even_filename: Output name for the back-side pages
        copy_metadata: Copy the first input's metadata into both outputs
        log_level: Level name passed to :func:`logging.basicConfig`
    """
    max_workers: int = 1
    odd_filename: str = DEFAULT_ODD_FILENAME
    even_filename: str = DEFAULT_EVEN_FILENAME
    copy_metadata: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ConfigurationError(
                f"max_workers must be at least 1, got {self.max_workers}"
            )
        if self.odd_filename == self.even_filename:
            raise ConfigurationError("Odd and even output names must differ")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DuplexSettings":
        """Build settings from ``DUPLEXPRINT_*`` environment variables."""

        env = os.environ if environ is None else environ
        settings = cls(
            max_workers=_env_int(env, "MAX_WORKERS", 1),
            odd_filename=_env_filename(env, "ODD_FILENAME", DEFAULT_ODD_FILENAME),
            even_filename=_env_filename(env, "EVEN_FILENAME", DEFAULT_EVEN_FILENAME),
            copy_metadata=_env_flag(env, "COPY_METADATA", False),
            log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or "WARNING").strip().upper(),
        )
        LOGGER.debug("Loaded settings from environment: %s", settings)
        return settings

    def with_overrides(self, **changes: object) -> "DuplexSettings":
        """Return a copy with every non-``None`` value in *changes* applied."""

        return replace(self, **{key: value for key, value in changes.items() if value is not None})


__all__ = [
    "DuplexSettings",
    "DEFAULT_ODD_FILENAME",
    "DEFAULT_EVEN_FILENAME",
]
