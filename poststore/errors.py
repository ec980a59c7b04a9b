"""Exceptions raised by poststore.

All errors share the PostStoreError base so callers can catch the whole
family at once. None of them are recovered internally; the store surfaces
them to its caller.

Key classes:
- StorageError: The content directory or a content file cannot be used.
- NotFoundError: A post id has no corresponding content file.
- RenderError: Markdown rendering of a post body failed.
"""

from __future__ import annotations

from pathlib import Path


class PostStoreError(Exception):
    """Base class for every poststore error."""


class StorageError(PostStoreError):
    """Error reading or parsing the content directory.

    Attributes:
        message: Human-readable error message.
        path: Path of the offending file or directory, when known.
    """

    def __init__(self, message: str, path: Path | None = None):
        self.message = message
        self.path = path
        if path is not None:
            super().__init__(f"{path}: {message}")
        else:
            super().__init__(message)


class NotFoundError(PostStoreError):
    """Error raised when a post id has no content file.

    Attributes:
        post_id: The id that was requested.
    """

    def __init__(self, post_id: str):
        self.post_id = post_id
        super().__init__(f"Post '{post_id}' not found")


class RenderError(PostStoreError):
    """Error raised when a post body cannot be rendered to HTML.

    Attributes:
        post_id: Id of the post being rendered.
        message: Human-readable error message.
    """

    def __init__(self, post_id: str, message: str):
        self.post_id = post_id
        self.message = message
        super().__init__(f"Failed to render post '{post_id}': {message}")
