"""Ranking and truncation of extracted entries."""

from __future__ import annotations

from .types import ArticleEntry


def select(entries: list[ArticleEntry], limit: int) -> list[ArticleEntry] | None:
    """Return the *limit* most recently updated entries, newest first.

    The sort is stable: entries sharing an update time keep their merge
    order. Returns None when there is nothing to rank at all, which is
    distinct from an empty list produced by ``limit == 0``.
    """
    if not entries:
        return None
    ranked = sorted(entries, key=lambda entry: entry.updated, reverse=True)
    return ranked[: max(limit, 0)]
