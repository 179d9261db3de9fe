"""Utility helpers for :mod:`duplexprint`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Configure package-wide logging."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("duplexprint").setLevel(level)


def ensure_path(path: PathLike) -> Path:
    """Return an absolute :class:`~pathlib.Path` for *path*, expanding ``~``."""

    return Path(path).expanduser().resolve(strict=False)


def is_pdf_name(filename: str) -> bool:
    return filename.lower().endswith(".pdf")


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500.0 B")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"


def pluralize_pages(count: int) -> str:
    return f"{count} {'page' if count == 1 else 'pages'}"


__all__ = [
    "PathLike",
    "configure_logging",
    "ensure_path",
    "is_pdf_name",
    "format_file_size",
    "pluralize_pages",
]
