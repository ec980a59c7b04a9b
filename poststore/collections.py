from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .content import PostMetadata


class PostCollection(Sequence[PostMetadata]):
    """Lightweight helper for working with lists of post metadata."""

    def __init__(self, posts: Iterable[PostMetadata]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[PostMetadata]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        return self._posts[item]

    def ids(self) -> list[str]:
        return [p.id for p in self._posts]

    def sorted(self, reverse: bool = True) -> PostCollection:
        """Sort posts by date, then by id.

        Ids always sort ascending so posts sharing a date come out in a
        stable order whichever way the dates run.

        Args:
            reverse: If True (default), newest first. If False, oldest first.

        Returns:
            A new PostCollection with sorted posts.
        """
        by_id = sorted(self._posts, key=lambda p: p.id)
        return PostCollection(sorted(by_id, key=lambda p: p.published, reverse=reverse))

    def latest(self, count: int = 5) -> PostCollection:
        return PostCollection(self.sorted()[:count])

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"
