"""Keyed repository: the whole persistence layer of the core.

One repository is a single map keyed by participant id. There are no
secondary indices: lookups by anything other than the key iterate.
Swapping the backing store means providing another ``Repository``;
business logic never touches the underlying dict.
"""

from __future__ import annotations

from typing import Generic, Iterator, Optional, Protocol, TypeVar

T = TypeVar("T")


class Repository(Protocol[T]):
    """Get / put / iterate by key."""

    def get(self, key: str) -> Optional[T]: ...

    def put(self, key: str, value: T) -> None: ...

    def contains(self, key: str) -> bool: ...

    def items(self) -> Iterator[tuple[str, T]]: ...

    def values(self) -> list[T]: ...

    def __len__(self) -> int: ...


class InMemoryRepository(Generic[T]):
    """Dict-backed repository. Iteration follows insertion order."""

    def __init__(self) -> None:
        self._items: dict[str, T] = {}

    def get(self, key: str) -> Optional[T]:
        return self._items.get(key)

    def put(self, key: str, value: T) -> None:
        self._items[key] = value

    def contains(self, key: str) -> bool:
        return key in self._items

    def items(self) -> Iterator[tuple[str, T]]:
        # Snapshot so callers may put() while iterating
        return iter(list(self._items.items()))

    def values(self) -> list[T]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)
