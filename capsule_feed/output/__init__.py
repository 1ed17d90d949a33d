"""Atom document assembly and serialization."""

from .atom import assemble_and_write, build_feed, feed_title, render_feed, write_feed

__all__ = [
    "assemble_and_write",
    "build_feed",
    "feed_title",
    "render_feed",
    "write_feed",
]
