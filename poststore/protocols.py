"""Protocol definitions for poststore.

This module defines the interfaces (protocols) the store is assembled from.
PostStore depends on these abstractions, so a loader, extractor or renderer
can be swapped (for tests or a different content source) without touching
the store itself.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import Heading


@runtime_checkable
class ContentLoader(Protocol):
    """Protocol for discovering post source files.

    This separates file discovery from parsing and rendering.
    """

    @abstractmethod
    def iter_files(self) -> dict[str, Path]:
        """Map every post id to its source file.

        Returns:
            Dictionary of post id to path.

        Raises:
            StorageError: If the content directory cannot be listed or two
                files map to the same id.
        """
        ...


@runtime_checkable
class MetadataExtractor(Protocol):
    """Protocol for extracting post metadata from raw file content."""

    @abstractmethod
    def extract(self, content: str, path: Path) -> dict[str, Any]:
        """Extract metadata from content.

        Args:
            content: Raw file content.
            path: Path to the source file.

        Returns:
            Dictionary of extracted metadata.
        """
        ...


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for rendering a post body to HTML."""

    @abstractmethod
    def render(self, content: str) -> tuple[str, list[Heading]]:
        """Render body text to HTML.

        Args:
            content: Source body text.

        Returns:
            Tuple of (rendered HTML, list of headings for TOC).
        """
        ...
