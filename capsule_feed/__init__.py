"""
capsule-feed - Atom feed generator for Gemini capsules.

This package scans the category directories of a Gemini site, picks the
most recently updated articles and writes an Atom document listing them.

Main entry point is the CLI via the `capsule-feed` command.

Example:
    $ capsule-feed -d ~/capsule -b gemini://example.org/ -c gemlog:flat -c notes:tree
"""

__all__ = ["__version__", "run_pipeline", "load_config", "AppConfig"]
__version__ = "0.1.0"

from .config import AppConfig, load_config
from .runner import run_pipeline
