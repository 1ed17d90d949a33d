"""
Core feed-assembly logic.

This package contains the data types and the discovery, extraction and
ranking stages, independent of the command line and of serialization.
"""

from .types import (
    ArticleCandidate,
    ArticleEntry,
    Author,
    Category,
    FeedDocument,
    FlatCategory,
    TreeCategory,
    category_from_kind,
)
from .fsmeta import TimeSource, is_index_file
from .discovery import discover, discover_all
from .metadata import extract, extract_heading
from .selector import select

__all__ = [
    "ArticleCandidate",
    "ArticleEntry",
    "Author",
    "Category",
    "FeedDocument",
    "FlatCategory",
    "TreeCategory",
    "category_from_kind",
    "TimeSource",
    "is_index_file",
    "discover",
    "discover_all",
    "extract",
    "extract_heading",
    "select",
]
