"""Tests for title, URL and update-time inference."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

import urllib.parse

import pytest

from capsule_feed.core.fsmeta import TimeSource
from capsule_feed.core.metadata import (
    date_from_name,
    default_title,
    extract,
    extract_heading,
    join_url,
    resolve_url,
)
from capsule_feed.core.types import ArticleCandidate, FlatCategory, TreeCategory

BASE = "gemini://example.org/"


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    os.chmod(path, 0o644)
    return path


def _set_mtime(path: Path, when: datetime) -> None:
    stamp = when.timestamp()
    os.utime(path, (stamp, stamp))


def test_first_heading_wins(tmp_path: Path):
    path = _write(
        tmp_path / "post.gmi",
        "Some intro text\n=> gemini://elsewhere.org link\n# Hello World\n## Second heading\n",
    )

    assert extract_heading(path, "fallback") == "Hello World"


def test_heading_markers_and_whitespace_are_stripped(tmp_path: Path):
    path = _write(tmp_path / "post.gmi", "###   Deep   heading  \n")

    assert extract_heading(path, "fallback") == "Deep   heading"


def test_heading_scan_stops_at_first_marker_line(tmp_path: Path):
    path = _write(tmp_path / "post.gmi", "#\n# Real title\n")

    assert extract_heading(path, "fallback") == ""


def test_missing_heading_returns_default(tmp_path: Path):
    path = _write(tmp_path / "post.gmi", "no heading here\n  # indented is not a heading\n")

    assert extract_heading(path, "fallback") == "fallback"


def test_unreadable_file_raises(tmp_path: Path):
    with pytest.raises(OSError):
        extract_heading(tmp_path / "vanished.gmi", "fallback")


@pytest.mark.parametrize(
    ("name", "clean", "expected"),
    [
        ("2023-05-01-my-post", False, "my-post"),
        ("2023-05-01_my_post", True, "my post"),
        ("2023-05-01 spaced", False, "spaced"),
        ("2023-05-01__-mixed", False, "mixed"),
        ("plain_name", False, "plain_name"),
        ("plain_name", True, "plain name"),
        ("2023-05-01", False, "2023-05-01"),
    ],
)
def test_default_title(name: str, clean: bool, expected: str):
    assert default_title(name, clean) == expected


def test_date_from_name():
    assert date_from_name("2022-01-02-note.gmi") == datetime(2022, 1, 2, tzinfo=timezone.utc)
    assert date_from_name("note-2022-01-02.gmi") is None
    assert date_from_name("202-01-02.gmi") is None


def test_date_from_name_rejects_impossible_dates():
    with pytest.raises(ValueError, match="Invalid date stamp"):
        date_from_name("2022-13-40-note.gmi")


def test_resolve_url_nested_and_root_level(tmp_path: Path):
    assert resolve_url(BASE, tmp_path / "news" / "post.gmi", tmp_path) == "gemini://example.org/news/post.gmi"
    assert resolve_url(BASE, tmp_path / "post.gmi", tmp_path) == "gemini://example.org/post.gmi"


def test_resolve_url_keeps_base_path_and_quotes(tmp_path: Path):
    url = resolve_url("gemini://example.org/~alice/", tmp_path / "log" / "a b.gmi", tmp_path)

    assert url == "gemini://example.org/~alice/log/a%20b.gmi"


def test_join_url_leaves_urllib_scheme_registries_alone():
    assert "gemini" not in urllib.parse.uses_relative
    assert "gemini" not in urllib.parse.uses_netloc


@pytest.mark.parametrize(
    ("base", "reference", "expected"),
    [
        ("gemini://example.org", "atom.xml", "gemini://example.org/atom.xml"),
        ("gemini://example.org/blog/index.gmi", "atom.xml", "gemini://example.org/blog/atom.xml"),
        ("gemini://example.org:1965/a/?q=1#top", "b.gmi", "gemini://example.org:1965/a/b.gmi"),
    ],
)
def test_join_url_resolves_against_base_path(base, reference, expected):
    assert join_url(base, reference) == expected


def test_resolve_url_outside_root_is_fatal(tmp_path: Path):
    with pytest.raises(ValueError):
        resolve_url(BASE, Path("/elsewhere/post.gmi"), tmp_path)


def test_extract_flat_entry_uses_heading_and_url(tmp_path: Path):
    path = _write(tmp_path / "news" / "post.gmi", "# Hello World\nbody\n")
    _set_mtime(path, datetime(2021, 6, 1, 12, 30, tzinfo=timezone.utc))
    candidate = ArticleCandidate(path=path, category_name="news", category=FlatCategory())

    entry = extract(candidate, tmp_path, BASE, TimeSource.MTIME)

    assert entry.id == entry.link == "gemini://example.org/news/post.gmi"
    assert entry.title == "Hello World"
    assert entry.updated == datetime(2021, 6, 1, 12, 30, tzinfo=timezone.utc)


def test_date_in_name_takes_precedence_over_filesystem_time(tmp_path: Path):
    path = _write(tmp_path / "gemlog" / "2022-01-02-note.gmi", "just text\n")
    _set_mtime(path, datetime(2024, 3, 3, 8, 0, tzinfo=timezone.utc))
    candidate = ArticleCandidate(path=path, category_name="gemlog", category=FlatCategory())

    entry = extract(candidate, tmp_path, BASE, TimeSource.MTIME)

    assert entry.updated == datetime(2022, 1, 2, 0, 0, tzinfo=timezone.utc)
    assert entry.title == "note"


def test_tree_entry_uses_directory_for_title_and_date(tmp_path: Path):
    path = _write(tmp_path / "notes" / "2020-02-29_leap_day" / "index.gmi", "no heading\n")
    candidate = ArticleCandidate(path=path, category_name="notes", category=TreeCategory())

    entry = extract(candidate, tmp_path, BASE, TimeSource.MTIME, clean_title=True)

    assert entry.title == "leap day"
    assert entry.updated == datetime(2020, 2, 29, tzinfo=timezone.utc)
    assert entry.link == "gemini://example.org/notes/2020-02-29_leap_day/index.gmi"


def test_clean_title_never_touches_authored_headings(tmp_path: Path):
    path = _write(tmp_path / "gemlog" / "some_file.gmi", "# keep_the_underscores\n")
    candidate = ArticleCandidate(path=path, category_name="gemlog", category=FlatCategory())

    entry = extract(candidate, tmp_path, BASE, TimeSource.MTIME, clean_title=True)

    assert entry.title == "keep_the_underscores"


def test_tree_date_ignores_file_name(tmp_path: Path):
    path = _write(tmp_path / "notes" / "topic" / "index.gmi", "# Topic\n")
    _set_mtime(path, datetime(2019, 9, 9, 9, 9, 9, tzinfo=timezone.utc))
    candidate = ArticleCandidate(path=path, category_name="notes", category=TreeCategory())

    entry = extract(candidate, tmp_path, BASE, TimeSource.MTIME)

    assert entry.updated == datetime(2019, 9, 9, 9, 9, 9, tzinfo=timezone.utc)
