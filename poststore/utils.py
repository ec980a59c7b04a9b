"""Utility functions for poststore.

This module contains small helpers shared by the loader, extractors and CLI.
These include post id derivation, content file predicates, date handling and
string processing.

Key functions:
    derive_post_id: Map a content file name to its post id.
    is_content_file: Check if a path is a post source file.
    normalize_date: Turn a front-matter date value into an ISO-8601 string.
    parse_post_date: Parse an ISO-8601 date string into a sortable datetime.
    slugify: Convert a title to a file-name friendly slug.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date, datetime, timezone
from pathlib import Path

DEFAULT_EXTENSIONS = (".md",)


def derive_post_id(path: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> str:
    """Derive the post id from a content file name.

    The id is the file name with its matching content extension removed.

    Args:
        path: Path to the content file.
        extensions: Recognised content file suffixes.

    Returns:
        The post id.

    Examples:
        >>> derive_post_id(Path("posts/ssg-ssr.md"))
        'ssg-ssr'
    """
    name = path.name
    for ext in sorted(extensions, key=len, reverse=True):
        if name.lower().endswith(ext.lower()):
            return name[: -len(ext)]
    return path.stem


def is_content_file(path: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> bool:
    """Check if a path is a post source file.

    Hidden files and files whose id would be empty are never posts.

    Args:
        path: Path to check.
        extensions: Recognised content file suffixes.

    Returns:
        True if the path is a regular file with a content extension.
    """
    if path.name.startswith("."):
        return False
    name = path.name.lower()
    for ext in extensions:
        if name.endswith(ext.lower()) and len(name) > len(ext):
            return path.is_file()
    return False


def normalize_date(value: object) -> str:
    """Normalize a front-matter date value to an ISO-8601 string.

    YAML loads unquoted dates as date or datetime objects; those are written
    back in ISO form. Strings are validated and returned stripped.

    Args:
        value: Raw value from the front-matter mapping.

    Returns:
        ISO-8601 date string.

    Raises:
        ValueError: If the value is not a recognisable calendar date.
    """
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        text = value.strip()
        parse_post_date(text)
        return text
    raise ValueError(f"expected a date, got {type(value).__name__}")


def parse_post_date(text: str) -> datetime:
    """Parse an ISO-8601 date or datetime string for ordering.

    Date-only values map to midnight. Timezone-aware values are converted to
    UTC and made naive so every post compares on the same scale.

    Args:
        text: ISO-8601 date string.

    Returns:
        Naive datetime in UTC.

    Raises:
        ValueError: If the string is not ISO-8601.

    Examples:
        >>> parse_post_date("2021-01-02")
        datetime.datetime(2021, 1, 2, 0, 0)
    """
    if not text:
        raise ValueError("empty date")
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def slugify(name: str) -> str:
    """Convert a title or file name to a lowercase hyphenated slug.

    Args:
        name: Text to convert.

    Returns:
        URL-friendly slug, or an empty string when nothing is left.

    Examples:
        >>> slugify("Two Forms of Pre-rendering!")
        'two-forms-of-pre-rendering'
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", name)
    return cleaned.strip("-").lower()

