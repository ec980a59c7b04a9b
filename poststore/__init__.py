"""Poststore markdown post store.

This package reads a directory of Markdown posts with YAML front-matter,
lists them newest first and renders a single post's body to HTML on demand.
It is the content layer of a small static blog; page templates and routing
live in the callers.

The main entry point is PostStore in the store module. The CLI module wraps it
for use from a shell.
"""

__version__ = "0.1.0"

from .errors import NotFoundError, PostStoreError, RenderError, StorageError
from .store import PostStore

__all__ = [
    "NotFoundError",
    "PostStore",
    "PostStoreError",
    "RenderError",
    "StorageError",
    "__version__",
]
