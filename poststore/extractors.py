"""Front-matter extraction for poststore.

This module splits a post file into its YAML front-matter block and Markdown
body, and validates the fields every post must carry. It implements the
MetadataExtractor protocol.

Key names:
- extract_frontmatter: Split raw content into (mapping, body).
- FrontmatterExtractor: Parses and validates post metadata.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from .errors import StorageError
from .utils import normalize_date

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)

REQUIRED_FIELDS = ("title", "date")


class FrontmatterError(ValueError):
    """Raised when a front-matter block is absent or is not a YAML mapping."""


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).

    Raises:
        FrontmatterError: If there is no front-matter block, the YAML is
            invalid, or it does not hold a mapping.
    """
    text = text.lstrip("\ufeff")
    match = FRONTMATTER_RE.match(text)
    if not match:
        raise FrontmatterError("missing front-matter block")
    try:
        data = yaml.safe_load(match.group(1))
    except (yaml.YAMLError, ValueError) as exc:
        raise FrontmatterError(f"invalid YAML in front-matter: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"front-matter must be a mapping, got {type(data).__name__}"
        )
    return {str(key): value for key, value in data.items()}, text[match.end() :]


class FrontmatterExtractor:
    """Extracts and validates post metadata from front-matter.

    The title and date fields are required. The date is normalized to an
    ISO-8601 string; every other key is passed through untouched under
    'extra'.
    """

    def extract(self, content: str, path: Path) -> dict[str, Any]:
        """Extract metadata from content.

        Args:
            content: Raw file content.
            path: Path to the source file, used in error messages.

        Returns:
            Dictionary with 'title', 'date', 'extra' and 'body' keys.

        Raises:
            StorageError: If the front-matter is malformed or a required
                field is absent or invalid.
        """
        try:
            frontmatter, body = extract_frontmatter(content)
        except FrontmatterError as exc:
            raise StorageError(str(exc), path) from exc

        missing = [name for name in REQUIRED_FIELDS if name not in frontmatter]
        if missing:
            raise StorageError(
                f"missing required front-matter field(s): {', '.join(missing)}", path
            )

        title = self._title(frontmatter["title"], path)
        try:
            date = normalize_date(frontmatter["date"])
        except ValueError as exc:
            raise StorageError(f"invalid date {frontmatter['date']!r}: {exc}", path) from exc

        extra = {k: v for k, v in frontmatter.items() if k not in REQUIRED_FIELDS}
        return {"title": title, "date": date, "extra": extra, "body": body}

    def _title(self, value: Any, path: Path) -> str:
        """Validate the title field.

        Numeric YAML scalars are accepted and converted back to text.
        """
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            raise StorageError("title must be a non-empty string", path)
        return value.strip()


# Default extractor instance
default_metadata_extractor = FrontmatterExtractor()
