"""
Filesystem metadata queries for capsule content files.

Every check reads the filesystem at call time; nothing is cached, so the
state of the disk when a stage runs is the source of truth.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
import os
import stat

CONTENT_EXTENSIONS = (".gmi", ".gemini")
INDEX_NAMES = ("index.gemini", "index.gmi")


class TimeSource(str, Enum):
    """Which filesystem timestamp stands in for an article's update time."""

    MTIME = "mtime"
    CTIME = "ctime"


def is_index_file(path: Path | str) -> bool:
    """Return True if *path* names a reserved index file (case-sensitive)."""
    return Path(path).name in INDEX_NAMES


def is_file(path: Path | str) -> bool:
    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except OSError:
        return False


def is_world_readable(path: Path | str) -> bool:
    try:
        return bool(os.stat(path).st_mode & stat.S_IROTH)
    except OSError:
        return False


def mtime(path: Path | str) -> datetime:
    """Last modification time of *path* as an aware UTC datetime."""
    return _to_utc(os.stat(path).st_mtime)


def ctime(path: Path | str) -> datetime:
    """Status change time of *path* as an aware UTC datetime."""
    return _to_utc(os.stat(path).st_ctime)


def file_time(path: Path | str, source: TimeSource) -> datetime:
    if source is TimeSource.MTIME:
        return mtime(path)
    return ctime(path)


def _to_utc(timestamp: float) -> datetime:
    # Feed timestamps carry whole seconds only.
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
