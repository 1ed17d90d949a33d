"""
Pipeline orchestration for capsule-feed.

This module coordinates one linear pass over the site:
1. Discover articles in every configured category
2. Extract title, URL and update time for each article
3. Rank by update time and keep the most recent ones
4. Assemble the Atom document and write it under the site root

Any I/O error aborts the run before the output file is touched; writing is
the last step.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from .config import AppConfig
from .core.discovery import discover_all
from .core.metadata import extract, join_url
from .core.selector import select
from .output.atom import assemble_and_write, feed_title
from .utils.logging import log_event, setup_logging


@dataclass
class RunStats:
    """Counts collected during a run.

    Attributes:
        categories: Number of configured categories
        candidates: World-readable articles found across all categories
        selected: Entries written to the feed
    """

    categories: int = 0
    candidates: int = 0
    selected: int = 0


def run_pipeline(cfg: AppConfig, console: Console | None = None) -> Path | None:
    """Run the complete feed generation pipeline.

    Args:
        cfg: Application configuration, already merged with CLI options
        console: Rich console for log output (creates default if None)

    Returns:
        Path to the written feed, or None when there was nothing to publish
    """
    site_root = cfg.site_root()
    base_url = cfg.base_url()
    categories = cfg.category_assignment()
    time_source = cfg.time_source()
    limit = cfg.limit()
    logger = setup_logging(cfg.logging, site_root, console or Console())
    stats = RunStats(categories=len(categories))

    log_event(
        logger,
        f"root dir: {site_root}, n: {limit}, output: {cfg.feed.output}, "
        f"base: {base_url}, categories: {dict(cfg.site.categories)}",
        event="run_start",
        root=str(site_root),
        limit=limit,
        output=cfg.feed.output,
        base_url=base_url,
        time_source=time_source.value,
    )

    title = cfg.feed.title
    if title is None:
        title = feed_title(site_root, cfg.feed.clean_title)
    log_event(
        logger,
        f'Generating feed "{title}", which should be served from {join_url(base_url, cfg.feed.output)}',
        event="feed_start",
        title=title,
    )

    candidates = discover_all(categories, site_root)
    stats.candidates = len(candidates)
    entries = [
        extract(candidate, site_root, base_url, time_source, cfg.feed.clean_title)
        for candidate in candidates
    ]

    ranked = select(entries, limit)
    if ranked is None:
        log_event(logger, "No world-readable gemini content found! :(", event="no_content")
        return None
    if not ranked:
        log_event(logger, "Entry limit is 0, nothing to publish", event="no_content", candidates=stats.candidates)
        return None

    for entry in ranked:
        log_event(
            logger,
            f"Adding {entry.path} with title {entry.title}",
            event="entry_added",
            source=str(entry.path),
            title=entry.title,
            updated=entry.updated.isoformat(),
        )
    stats.selected = len(ranked)

    output_path = site_root / cfg.feed.output
    log_event(logger, f"outputting to {output_path}", event="feed_write", output=str(output_path))
    output_path = assemble_and_write(cfg, ranked, title=title)

    log_event(
        logger,
        "Run complete",
        event="run_complete",
        categories=stats.categories,
        candidates=stats.candidates,
        selected=stats.selected,
    )
    return output_path
