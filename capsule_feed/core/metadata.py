"""
Metadata extraction for discovered articles.

Turns an ArticleCandidate into an ArticleEntry by inferring three things:
- the title, from the first heading line or from the file/directory name
- the canonical URL, by joining the path relative to the site root onto the
  base URL
- the update time, from a YYYY-MM-DD stamp in the name or from the
  filesystem

Read failures are not caught here; they abort the run.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import re
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from .fsmeta import TimeSource, file_time
from .types import ArticleCandidate, ArticleEntry

HEADING_MARKER = "#"

_DATE_PREFIX_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})[-_\s]*")


def extract_heading(path: Path | str, default: str) -> str:
    """Return the text of the first heading line of *path*, or *default*.

    Only the first line starting with a heading marker counts; its markers
    and surrounding whitespace are stripped.
    """
    with open(path, encoding="utf-8", errors="replace") as handle:
        for line in handle:
            if line.startswith(HEADING_MARKER):
                return line.lstrip(HEADING_MARKER).strip()
    return default


def date_from_name(name: str) -> datetime | None:
    """Parse a leading YYYY-MM-DD stamp as midnight UTC.

    Returns None when *name* carries no stamp. A stamp that is not a real
    calendar date raises ValueError.
    """
    match = _DATE_PREFIX_RE.match(name)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError as exc:
        raise ValueError(f"Invalid date stamp in {name!r}: {exc}") from exc


def default_title(name: str, clean_title: bool = False) -> str:
    """Derive a title from a file or directory name.

    A leading date stamp and the separators after it are dropped, unless
    nothing would be left. With *clean_title*, underscores become spaces.
    """
    title = _DATE_PREFIX_RE.sub("", name, count=1) or name
    if clean_title:
        title = title.replace("_", " ")
    return title


def join_url(base_url: str, reference: str) -> str:
    """Resolve the relative *reference* against *base_url*.

    Only the path component is joined, so the result does not depend on
    which schemes urllib knows to be hierarchical. Query and fragment of
    the base are dropped.
    """
    parts = urlsplit(base_url)
    path = urljoin(parts.path or "/", reference)
    return urlunsplit(parts._replace(path=path, query="", fragment=""))


def resolve_url(base_url: str, path: Path, site_root: Path) -> str:
    """Join the root-relative location of *path* onto *base_url*."""
    relative = Path(path).relative_to(site_root)
    return join_url(base_url, quote(relative.as_posix()))


def resolve_updated(candidate: ArticleCandidate, time_source: TimeSource) -> datetime:
    stamped = date_from_name(candidate.category.date_source(candidate.path))
    if stamped is not None:
        return stamped
    return file_time(candidate.path, time_source)


def extract(
    candidate: ArticleCandidate,
    site_root: Path,
    base_url: str,
    time_source: TimeSource = TimeSource.CTIME,
    clean_title: bool = False,
) -> ArticleEntry:
    """Build the feed entry for one candidate.

    Args:
        candidate: Discovered article
        site_root: Root directory of the site
        base_url: Base URL of the feed and its entries
        time_source: Filesystem time used when the name carries no date
        clean_title: Replace underscores with spaces in derived titles

    Returns:
        ArticleEntry whose id and link are the canonical URL
    """
    url = resolve_url(base_url, candidate.path, site_root)
    fallback = default_title(candidate.category.title_source(candidate.path), clean_title)
    return ArticleEntry(
        id=url,
        link=url,
        title=extract_heading(candidate.path, fallback),
        updated=resolve_updated(candidate, time_source),
        path=candidate.path,
    )
