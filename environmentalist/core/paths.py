# environmentalist/core/paths.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import os
import re
from typing import Any, Iterable, List, Optional, Union

from environmentalist.core.collection import OrderedUniqueList
from environmentalist.runtime.concurrency import with_lock

AUTOLOAD_EXTENSION_SEPARATOR = ","
INCLUDE_PATH_SEPARATOR = os.pathsep


class PathList(OrderedUniqueList[str]):
    """
    An ordered, duplicate-free list of strings kept as a single
    separator-joined value, in the manner of ``PATH``.

    Sequences passed to ``replace`` are deduplicated and joined; a string is
    stored exactly as given so callers can set the raw value.
    """

    def __init__(
        self,
        separator: str,
        initial: Union[str, Iterable[str]] = "",
        lock: Optional[Any] = None,
        split_pattern: Optional[str] = None,
    ) -> None:
        """
        :param separator: Character joining the entries.
        :param initial: Joined string or sequence of entries.
        :param lock: Lock shared with the owning environment.
        :param split_pattern: Regular expression used instead of the bare
            separator when reading entries back.
        """
        self.separator = separator
        self._split = re.compile(split_pattern) if split_pattern else None
        self._value = ""
        super().__init__(lock=lock)
        self.replace(initial)

    def _load(self) -> List[str]:
        if not self._value:
            return []
        if self._split is not None:
            return self._split.split(self._value)
        return self._value.split(self.separator)

    def _store(self, items: List[str]) -> None:
        self._value = self.separator.join(items)

    def replace(self, items: Union[str, Iterable[str]]) -> List[str]:
        """
        Replace the whole list.

        :param items: A sequence of entries (deduplicated) or a pre-joined
            string (stored verbatim).
        :return: The entries before the call.
        """
        if isinstance(items, str):
            with with_lock(self._lock):
                previous = self._load()
                self._value = items
                return previous
        return super().replace(items)

    @property
    def value(self) -> str:
        """The raw joined string."""
        with with_lock(self._lock):
            return self._value


class IncludePaths(PathList):
    """Search directories, joined with ``os.pathsep``."""

    def __init__(self, initial: Union[str, Iterable[str]] = "", lock: Optional[Any] = None) -> None:
        super().__init__(INCLUDE_PATH_SEPARATOR, initial, lock=lock)


class AutoloadExtensions(PathList):
    """Recognised filename extensions, joined with a comma. Whitespace around commas is ignored when reading."""

    def __init__(self, initial: Union[str, Iterable[str]] = "", lock: Optional[Any] = None) -> None:
        super().__init__(
            AUTOLOAD_EXTENSION_SEPARATOR,
            initial,
            lock=lock,
            split_pattern=r"\s*" + re.escape(AUTOLOAD_EXTENSION_SEPARATOR) + r"\s*",
        )
