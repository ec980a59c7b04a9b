"""Post store for poststore.

This module provides PostStore, the read-only index over a directory of
Markdown posts. Every call re-scans the directory and re-reads whatever
changed on disk, so results always reflect the files at the time of the
call.

Key operations:
- list_post_ids: Ids of all posts, one per content file.
- list_posts_sorted_by_date_desc: Metadata of all posts, newest first.
- get_post_data: Metadata plus rendered HTML for one post.
- route_params: Post ids shaped as static route parameters.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .collections import PostCollection
from .config import load_config
from .content import FileContentLoader, PostContent, PostMetadata
from .errors import NotFoundError, RenderError, StorageError
from .extractors import default_metadata_extractor
from .protocols import ContentLoader, ContentRenderer, MetadataExtractor
from .renderers import DEFAULT_PLUGINS, MarkdownRenderer
from .utils import DEFAULT_EXTENSIONS

logger = logging.getLogger(__name__)


class PostStore:
    """Read-only store of Markdown posts.

    The store keeps no state between calls apart from an optional parse
    cache keyed by each file's modification time and size. A file that
    changed on disk is always read again.

    Attributes:
        content_dir: Directory holding the posts.
        content_loader: Maps post ids to source files.
        metadata_extractor: Parses front-matter.
        renderer: Renders post bodies to HTML.
    """

    def __init__(
        self,
        content_dir: Path,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        plugins: Iterable[str] = DEFAULT_PLUGINS,
        cache: bool = True,
        content_loader: ContentLoader | None = None,
        metadata_extractor: MetadataExtractor | None = None,
        renderer: ContentRenderer | None = None,
    ):
        """Initialize the store.

        Args:
            content_dir: Path to the content directory.
            extensions: File suffixes treated as posts.
            plugins: Mistune plugins used by the default renderer.
            cache: Whether to reuse parsed files whose mtime and size are unchanged.
            content_loader: Optional custom content loader.
            metadata_extractor: Optional custom metadata extractor.
            renderer: Optional custom renderer.
        """
        self.content_dir = Path(content_dir)
        self.content_loader = content_loader or FileContentLoader(self.content_dir, extensions)
        self.metadata_extractor = metadata_extractor or default_metadata_extractor
        self.renderer = renderer or MarkdownRenderer(plugins)
        self._cache_enabled = cache
        self._cache: dict[Path, tuple[tuple[int, int], PostMetadata, str]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, project_root: Path) -> PostStore:
        """Create a store from the project's poststore.yaml.

        Args:
            project_root: Root directory of the project.

        Returns:
            Configured PostStore.
        """
        config = load_config(project_root)
        return cls(
            project_root / config["content_dir"],
            extensions=config["extensions"],
            plugins=config["markdown_plugins"],
            cache=config["cache"],
        )

    def list_post_ids(self) -> list[str]:
        """Return the id of every post.

        Callers must not rely on the order for display.

        Raises:
            StorageError: If the content directory cannot be listed.
        """
        return list(self.content_loader.iter_files())

    def route_params(self) -> list[dict[str, dict[str, str]]]:
        """Return post ids shaped as static route parameters.

        Returns:
            List like [{"params": {"id": "ssg-ssr"}}, ...].
        """
        return [{"params": {"id": post_id}} for post_id in self.list_post_ids()]

    def list_posts_sorted_by_date_desc(self) -> list[PostMetadata]:
        """Return metadata for every post, newest first.

        Posts sharing a date are ordered by id. Post bodies are not rendered.

        Raises:
            StorageError: If any post cannot be read or parsed.
        """
        files = self.content_loader.iter_files()
        self._evict(files.values())
        posts = [self._parse(post_id, path)[0] for post_id, path in files.items()]
        return list(PostCollection(posts).sorted())

    def get_post_data(self, post_id: str) -> PostContent:
        """Return metadata and rendered HTML for one post.

        Args:
            post_id: Id of the post.

        Returns:
            PostContent with the rendered body.

        Raises:
            NotFoundError: If no content file maps to the id.
            StorageError: If the file cannot be read or parsed.
            RenderError: If the body cannot be rendered.
        """
        path = self.content_loader.iter_files().get(post_id)
        if path is None:
            raise NotFoundError(post_id)
        metadata, body = self._parse(post_id, path)
        try:
            html, headings = self.renderer.render(body)
        except Exception as exc:
            raise RenderError(post_id, f"{type(exc).__name__}: {exc}") from exc
        logger.debug("Rendered post %s (%d bytes)", post_id, len(html))
        return PostContent(metadata=metadata, content_html=html, toc=tuple(headings))

    def _parse(self, post_id: str, path: Path) -> tuple[PostMetadata, str]:
        """Read and parse one post file.

        Args:
            post_id: Id of the post.
            path: Path to the source file.

        Returns:
            Tuple of (metadata, markdown body).
        """
        try:
            stat = path.stat()
        except OSError as exc:
            raise StorageError(f"cannot stat file: {exc.strerror or exc}", path) from exc
        key = (stat.st_mtime_ns, stat.st_size)

        if self._cache_enabled:
            with self._lock:
                cached = self._cache.get(path)
            if cached is not None and cached[0] == key:
                logger.debug("Cache hit for %s", path.name)
                return cached[1], cached[2]

        try:
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise StorageError(f"file is not valid UTF-8: {exc.reason}", path) from exc
        except OSError as exc:
            raise StorageError(f"cannot read file: {exc.strerror or exc}", path) from exc

        data: dict[str, Any] = self.metadata_extractor.extract(raw, path)
        metadata = PostMetadata(
            id=post_id, title=data["title"], date=data["date"], extra=data["extra"]
        )
        body = data["body"]

        if self._cache_enabled:
            with self._lock:
                self._cache[path] = (key, metadata, body)
        return metadata, body

    def _evict(self, live: Iterable[Path]) -> None:
        """Drop cache entries for files no longer in the content directory."""
        keep = set(live)
        with self._lock:
            for path in [p for p in self._cache if p not in keep]:
                del self._cache[path]
