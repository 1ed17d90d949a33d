"""
Validation of user-supplied settings.

Each validator returns the normalized value or raises ValueError with a
single human-readable message. The CLI wraps these in typer.BadParameter;
configuration loading calls them directly.
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

from .core.types import CATEGORY_KINDS

GEMINI_SCHEME = "gemini"


def parse_category_spec(value: str) -> tuple[str, str]:
    """Split a ``DIR:TYPE`` category option into its name and kind."""
    parts = value.split(":")
    if len(parts) != 2:
        raise ValueError(f"Bad category specification: {value}")
    name, kind = parts
    if kind not in CATEGORY_KINDS:
        raise ValueError(f"Not a valid category: {kind}")
    if not name:
        raise ValueError(f"Bad category specification: {value}")
    return name, kind


def validate_gemini_url(value: str) -> str:
    """Accept absolute gemini:// URLs without embedded credentials."""
    try:
        parts = urlsplit(value)
    except ValueError as exc:
        raise ValueError(str(exc)) from exc
    if not parts.scheme:
        raise ValueError("relative URL without a base")
    if parts.scheme != GEMINI_SCHEME:
        raise ValueError(f"Bad url scheme : {parts.scheme}")
    if parts.username or parts.password is not None:
        raise ValueError(f"user authentication not allowed in url {value}")
    if not parts.hostname:
        raise ValueError(f"empty host in url {value}")
    return value


def validate_directory(value: str | Path) -> Path:
    path = Path(value)
    if not path.is_dir():
        raise ValueError(f"Invalid directory: {value}")
    return path


def validate_limit(value: int | str) -> int:
    """Parse the maximum number of entries as a non-negative integer."""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid number of entries: {value}") from None
    if limit < 0:
        raise ValueError(f"Invalid number of entries: {value}")
    return limit
