"""
Article discovery inside category directories.

A category directory is globbed with the patterns of its Category variant;
matches are kept when the variant accepts them as articles and when they are
world-readable regular files at the time of the scan.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .fsmeta import is_file, is_world_readable
from .types import ArticleCandidate, Category

logger = logging.getLogger("capsule_feed.discovery")


def discover(category_name: str, category: Category, site_root: Path) -> set[ArticleCandidate]:
    """Collect the articles of one category.

    Args:
        category_name: Category directory name, relative to the site root
        category: Layout rules for that directory
        site_root: Root directory of the site

    Returns:
        Set of candidates; no ordering is implied
    """
    category_root = Path(site_root) / category_name
    if not category_root.is_dir():
        logger.warning("Category directory not found: %s", category_root)
        return set()

    candidates: set[ArticleCandidate] = set()
    for pattern in category.patterns:
        for path in category_root.glob(pattern):
            if not category.is_article(path, category_root):
                continue
            if not (is_file(path) and is_world_readable(path)):
                logger.debug("Skipping unreadable or irregular file %s", path)
                continue
            candidates.add(ArticleCandidate(path=path, category_name=category_name, category=category))
    return candidates


def discover_all(categories: dict[str, Category], site_root: Path) -> list[ArticleCandidate]:
    """Merge the articles of every category in configuration order.

    Candidates of one category are sorted by path so that repeated runs over
    the same tree produce the same merge order.
    """
    merged: list[ArticleCandidate] = []
    for name, category in categories.items():
        found = sorted(discover(name, category, site_root), key=lambda c: str(c.path))
        logger.debug("Category %s (%s): %d article(s)", name, category.kind, len(found))
        merged.extend(found)
    return merged
