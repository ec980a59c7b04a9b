"""Post types and content discovery for poststore.

This module holds the immutable records the store hands out and the loader
that maps post ids to their source files.

Key classes:
- PostMetadata: Front-matter of one post plus its id.
- PostContent: Metadata plus the rendered HTML body.
- Heading: A heading collected for TOC generation.
- FileContentLoader: Implementation of the ContentLoader protocol for a
  directory of Markdown files.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .errors import StorageError
from .utils import DEFAULT_EXTENSIONS, derive_post_id, is_content_file, parse_post_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Heading:
    """Represents a heading extracted from markdown content for TOC generation.

    Attributes:
        id: Anchor ID for the heading (URL-friendly slug).
        text: The text content of the heading.
        level: Heading level (1-6).
    """

    id: str
    text: str
    level: int


@dataclass(frozen=True)
class PostMetadata:
    """Front-matter of a single post.

    Attributes:
        id: Post id derived from the file name.
        title: Non-empty post title.
        date: ISO-8601 date string.
        extra: Every other front-matter field, passed through verbatim.
    """

    id: str
    title: str
    date: str
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def published(self) -> datetime:
        """Return the date as a naive UTC datetime for ordering."""
        return parse_post_date(self.date)

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a single mapping of id, title, date and extra fields."""
        data = dict(self.extra)
        data.update(id=self.id, title=self.title, date=self.date)
        return data


@dataclass(frozen=True)
class PostContent:
    """A post ready for display.

    Attributes:
        metadata: Parsed front-matter.
        content_html: Body rendered to HTML.
        toc: Headings found in the body, in document order.
    """

    metadata: PostMetadata
    content_html: str
    toc: tuple[Heading, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = self.metadata.to_dict()
        data["content_html"] = self.content_html
        return data


class FileContentLoader:
    """Discovers post files in a content directory.

    Only the top level of the directory is scanned. Subdirectories, hidden
    files and files without a content extension are skipped.

    Attributes:
        content_dir: Directory holding the posts.
        extensions: Recognised content file suffixes.
    """

    def __init__(self, content_dir: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        """Initialize the content loader.

        Args:
            content_dir: Path to the content directory.
            extensions: File suffixes treated as posts.
        """
        self.content_dir = Path(content_dir)
        self.extensions = tuple(extensions)

    def iter_files(self) -> dict[str, Path]:
        """Map every post id to its source file.

        Returns:
            Dictionary of post id to path, in file name order.

        Raises:
            StorageError: If the directory is missing or unreadable, or two
                files map to the same id.
        """
        if not self.content_dir.exists():
            raise StorageError("content directory does not exist", self.content_dir)
        if not self.content_dir.is_dir():
            raise StorageError("content path is not a directory", self.content_dir)
        try:
            entries = sorted(self.content_dir.iterdir())
        except OSError as exc:
            raise StorageError(
                f"cannot read content directory: {exc.strerror or exc}", self.content_dir
            ) from exc

        files: dict[str, Path] = {}
        for path in entries:
            if not is_content_file(path, self.extensions):
                continue
            post_id = derive_post_id(path, self.extensions)
            if post_id in files:
                raise StorageError(
                    f"duplicate post id '{post_id}' ({files[post_id].name} and {path.name})",
                    self.content_dir,
                )
            files[post_id] = path
        logger.debug("Found %d posts in %s", len(files), self.content_dir)
        return files
