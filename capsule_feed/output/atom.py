"""
Atom document assembly and serialization.

This module builds the FeedDocument from the ranked entries and renders it
through a Jinja2 template. Element order follows the Atom layout expected by
feed readers: feed metadata first, then one <entry> per article, most recent
first.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .. import __version__
from ..config import AppConfig
from ..core.fsmeta import INDEX_NAMES, is_file, is_world_readable
from ..core.metadata import extract_heading
from ..core.types import ArticleEntry, Author, FeedDocument

GENERATOR_NAME = "capsule-feed"
GENERATOR_URI = "https://pypi.org/project/capsule-feed/"
TEMPLATE_NAME = "atom.xml"


def atom_date(value: datetime) -> str:
    """Format an aware datetime as an RFC 3339 UTC timestamp."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def feed_title(site_root: Path, clean_title: bool = False) -> str:
    """Derive the feed title from the site root.

    The first heading of a world-readable root index file wins; the name of
    the directory itself is the fallback.
    """
    fallback = site_root.name.replace("_", " ") if clean_title else site_root.name
    for name in INDEX_NAMES:
        index_path = site_root / name
        if is_file(index_path) and is_world_readable(index_path):
            return extract_heading(index_path, fallback)
    return fallback


def build_feed(cfg: AppConfig, entries: list[ArticleEntry], title: str | None = None) -> FeedDocument:
    """Assemble the feed document for already ranked *entries*.

    *title* takes precedence over both the configured title and the one
    derived from the site root. An empty string is an explicit title, not an
    unset one; the same holds for the subtitle.

    Raises ValueError when *entries* is empty; an empty feed is never built.
    """
    if not entries:
        raise ValueError("Cannot build a feed without entries")

    base_url = cfg.base_url()
    if title is None:
        title = cfg.feed.title
    if title is None:
        title = feed_title(cfg.site_root(), cfg.feed.clean_title)
    author = Author(name=cfg.feed.author or None, email=cfg.feed.email or None)
    return FeedDocument(
        id=base_url,
        title=title,
        subtitle=cfg.feed.subtitle,
        author=None if author.is_empty() else author,
        generator=GENERATOR_NAME,
        generator_uri=GENERATOR_URI,
        generator_version=__version__,
        rights=cfg.feed.rights,
        self_link=base_url,
        alternate_link=base_url,
        updated=entries[0].updated,
        entries=list(entries),
    )


def render_feed(document: FeedDocument) -> str:
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent.parent / "templates")),
        autoescape=select_autoescape(["xml"]),
        keep_trailing_newline=True,
    )
    env.filters["atom_date"] = atom_date
    template = env.get_template(TEMPLATE_NAME)
    return template.render(feed=document)


def write_feed(document: FeedDocument, output_path: Path) -> Path:
    """Render *document* to *output_path*, replacing any existing file."""
    output_path.write_text(render_feed(document), encoding="utf-8")
    return output_path


def assemble_and_write(
    cfg: AppConfig, entries: list[ArticleEntry], title: str | None = None
) -> Path | None:
    """Build and write the feed; returns None and writes nothing if *entries* is empty."""
    if not entries:
        return None
    document = build_feed(cfg, entries, title=title)
    return write_feed(document, cfg.site_root() / cfg.feed.output)
