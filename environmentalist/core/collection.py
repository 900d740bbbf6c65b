# environmentalist/core/collection.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, List, Optional, TypeVar

from environmentalist.runtime.concurrency import get_lock, with_lock

T = TypeVar("T")


def unique(items: Iterable[T]) -> List[T]:
    """
    Drop repeated items, keeping the first occurrence of each.

    Items are compared by equality rather than hash, so unhashable values such
    as lists or handlers with custom ``__eq__`` are supported.
    """
    result: List[T] = []
    for item in items:
        if item not in result:
            result.append(item)
    return result


def _as_items(items: Any) -> Iterable[Any]:
    if isinstance(items, str):
        return [items]
    return items


class OrderedUniqueList(Generic[T]):
    """
    An ordered sequence without duplicates whose mutations all return the
    sequence as it was before the call.

    Storage is delegated to ``_load``/``_store`` so subclasses can keep the
    value in another shape (see PathList, which keeps a joined string).
    """

    def __init__(self, items: Iterable[T] = (), lock: Optional[Any] = None) -> None:
        """
        :param items: Initial contents; duplicates are dropped.
        :param lock: Lock shared with other lists owned by the same
            environment. A private lock is created when omitted.
        """
        self._lock = lock if lock is not None else get_lock()
        self._items: List[T] = []
        self._store(unique(self._coerce(item) for item in _as_items(items)))

    def _coerce(self, item: Any) -> T:
        return item

    def _load(self) -> List[T]:
        return list(self._items)

    def _store(self, items: List[T]) -> None:
        self._items = list(items)

    def _update(self, compute) -> List[T]:
        with with_lock(self._lock):
            previous = self._load()
            self._store(unique(compute(previous)))
            return previous

    def list(self) -> List[T]:
        """Return a copy of the current items in order."""
        with with_lock(self._lock):
            return self._load()

    def append(self, *items: Any) -> List[T]:
        """
        Add items to the end, skipping any already present.

        :return: The items before the call.
        """
        added = [self._coerce(item) for item in items]
        return self._update(lambda current: current + added)

    def prepend(self, *items: Any) -> List[T]:
        """
        Add items to the front, in the order given. An item already present
        moves to its new front position.

        :return: The items before the call.
        """
        added = [self._coerce(item) for item in items]
        return self._update(lambda current: added + current)

    def remove(self, *items: Any) -> List[T]:
        """
        Remove every occurrence of the given items. Items not present are
        ignored.

        :return: The items before the call.
        """
        removed = [self._coerce(item) for item in items]
        return self._update(lambda current: [item for item in current if item not in removed])

    def replace(self, items: Iterable[Any]) -> List[T]:
        """
        Replace the whole sequence. A single string is one item, not a sequence of characters.

        :return: The items before the call.
        """
        replacement = [self._coerce(item) for item in _as_items(items)]
        return self._update(lambda current: replacement)

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self.list())

    def __contains__(self, item: Any) -> bool:
        return self._coerce(item) in self.list()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.list()!r})"
