"""
Configuration management using YAML files and dataclasses.

This module defines the configuration dataclasses and loads them from an
optional YAML file with defaults. Configuration sections:
- SiteConfig: site root, base URL and category layout
- FeedConfig: feed metadata and selection settings
- LoggingConfig: logging behavior
- AppConfig: root configuration container

Command-line options are applied on top of the loaded values by the CLI.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .core.fsmeta import TimeSource
from .core.types import Category, category_from_kind
from .validation import parse_category_spec, validate_directory, validate_gemini_url, validate_limit

DEFAULT_RIGHTS = "All rights reserved"


@dataclass
class SiteConfig:
    """Where the content lives and how it is published.

    Attributes:
        directory: Root directory of the site
        base_url: gemini:// URL the feed and its entries are served from
        categories: Category directory name mapped to "flat" or "tree"
    """

    directory: str | None = None
    base_url: str | None = None
    categories: dict[str, str] = field(default_factory=dict)


@dataclass
class FeedConfig:
    """Configuration for the generated feed.

    Attributes:
        limit: Maximum number of entries
        output: Output file name, relative to the site root
        title: Feed title override; derived from the site when unset
        subtitle: Optional feed subtitle
        author: Optional author name
        email: Optional author email
        rights: Rights statement embedded in every feed
        clean_title: Replace underscores with spaces in derived titles
        time_source: "ctime" or "mtime", used when a name carries no date
    """

    limit: int = 10
    output: str = "atom.xml"
    title: str | None = None
    subtitle: str | None = None
    author: str | None = None
    email: str | None = None
    rights: str = DEFAULT_RIGHTS
    clean_title: bool = False
    time_source: str = TimeSource.CTIME.value


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to the console
        quiet: Suppress informational console output
        file: Whether to log to a file
        format: Log file format ("jsonl" or "plain")
        filename: Log file path; relative paths resolve against the site root
    """

    level: str = "INFO"
    console: bool = True
    quiet: bool = False
    file: bool = False
    format: str = "plain"
    filename: str = "capsule-feed.log"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    site: SiteConfig = field(default_factory=SiteConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def site_root(self) -> Path:
        if not self.site.directory:
            raise ValueError("Missing site directory")
        return validate_directory(self.site.directory).resolve()

    def base_url(self) -> str:
        if not self.site.base_url:
            raise ValueError("Missing base URL")
        return validate_gemini_url(self.site.base_url)

    def category_assignment(self) -> dict[str, Category]:
        """Build the category mapping, preserving configuration order."""
        if not self.site.categories:
            raise ValueError("At least one category is required")
        return {name: category_from_kind(kind) for name, kind in self.site.categories.items()}

    def time_source(self) -> TimeSource:
        try:
            return TimeSource(self.feed.time_source)
        except ValueError:
            raise ValueError(f"Invalid time source: {self.feed.time_source}") from None

    def limit(self) -> int:
        return validate_limit(self.feed.limit)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(raw).__name__}")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _categories_from_raw(raw: Any) -> dict[str, str]:
    """Accept categories as a name-to-kind mapping or a list of DIR:TYPE strings."""
    if not raw:
        return {}
    if isinstance(raw, dict):
        return {str(name): str(kind) for name, kind in raw.items()}
    if isinstance(raw, list):
        return dict(parse_category_spec(str(value)) for value in raw)
    raise ValueError("categories must map a directory name to flat or tree")


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    site = dict(data["site"])
    site["categories"] = _categories_from_raw(site.get("categories"))
    return AppConfig(
        site=SiteConfig(**site),
        feed=FeedConfig(**data["feed"]),
        logging=LoggingConfig(**data["logging"]),
    )
