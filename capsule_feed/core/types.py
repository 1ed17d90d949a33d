"""
Core data types for capsule-feed.

This module defines the structures handed from stage to stage:
- Category: how articles are laid out inside a category directory
- ArticleCandidate: a discovered, world-readable content file
- ArticleEntry: an article resolved to feed-ready metadata
- FeedDocument: the aggregate written out as an Atom document
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .fsmeta import CONTENT_EXTENSIONS, is_index_file


@dataclass(frozen=True)
class Category(ABC):
    """Layout rules for one category directory.

    Subclasses decide which files under the category root are articles, which
    name a default title comes from, and which name may carry a date stamp.
    """

    kind: str = ""
    patterns: tuple[str, ...] = ()

    @abstractmethod
    def is_article(self, path: Path, category_root: Path) -> bool:
        """Return True if a pattern match at *path* is an article."""
        raise NotImplementedError

    @abstractmethod
    def title_source(self, path: Path) -> str:
        """Return the name the default title is derived from."""
        raise NotImplementedError

    @abstractmethod
    def date_source(self, path: Path) -> str:
        """Return the name checked for a leading YYYY-MM-DD stamp."""
        raise NotImplementedError


@dataclass(frozen=True)
class FlatCategory(Category):
    """Articles are the content files directly inside the category directory."""

    kind: str = "flat"
    patterns: tuple[str, ...] = tuple(f"*{ext}" for ext in CONTENT_EXTENSIONS)

    def is_article(self, path: Path, category_root: Path) -> bool:
        return not is_index_file(path)

    def title_source(self, path: Path) -> str:
        return path.stem

    def date_source(self, path: Path) -> str:
        return path.name


@dataclass(frozen=True)
class TreeCategory(Category):
    """Each subdirectory is one article, represented by its index file.

    The index file at the category root is the landing page and never an
    article.
    """

    kind: str = "tree"
    patterns: tuple[str, ...] = tuple(f"**/*{ext}" for ext in CONTENT_EXTENSIONS)

    def is_article(self, path: Path, category_root: Path) -> bool:
        if not is_index_file(path):
            return False
        return len(path.relative_to(category_root).parts) > 1

    def title_source(self, path: Path) -> str:
        return path.parent.name

    def date_source(self, path: Path) -> str:
        return path.parent.name


CATEGORY_KINDS: dict[str, type[Category]] = {
    "flat": FlatCategory,
    "tree": TreeCategory,
}


def category_from_kind(kind: str) -> Category:
    """Build the Category variant named by *kind* ("flat" or "tree")."""
    try:
        return CATEGORY_KINDS[kind]()
    except KeyError:
        raise ValueError(f"Not a valid category: {kind}") from None


@dataclass(frozen=True)
class ArticleCandidate:
    """A world-readable content file found during discovery.

    Attributes:
        path: Location of the file under the site root
        category_name: Directory name of the owning category
        category: Layout rules of the owning category
    """

    path: Path
    category_name: str
    category: Category


@dataclass
class ArticleEntry:
    """Feed-ready metadata for one article.

    Attributes:
        id: Stable identifier, equal to the canonical link
        link: Canonical URL of the article
        title: Human-readable title
        updated: Resolved update time (timezone-aware, UTC)
        path: Source file, kept for reporting
    """

    id: str
    link: str
    title: str
    updated: datetime
    path: Path | None = None


@dataclass
class Author:
    name: str | None = None
    email: str | None = None

    def is_empty(self) -> bool:
        return not self.name and not self.email


@dataclass
class FeedDocument:
    """The Atom document as written to disk.

    Entries are kept in rank order, most recent first; ``updated`` mirrors
    the first entry.
    """

    id: str
    title: str
    self_link: str
    alternate_link: str
    updated: datetime
    generator: str
    generator_uri: str
    generator_version: str
    rights: str
    subtitle: str | None = None
    author: Author | None = None
    entries: list[ArticleEntry] = field(default_factory=list)
