# environmentalist/core/resolver.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
File resolution over directories, candidate fragments and extensions.

Candidates are enumerated directory-major: for each directory every fragment
is tried with every extension before moving on to the next directory. The
first regular file wins.
"""

import logging
import os
from typing import Iterable, Iterator, Optional, Sequence, Union

from environmentalist.interfaces.types import Directory, Extension, PathFragment, ResolvedPath

logger = logging.getLogger(__name__)


def candidates(
    fragments: Union[PathFragment, Sequence[PathFragment]],
    directories: Iterable[Directory],
    extensions: Iterable[Extension],
) -> Iterator[str]:
    """
    Yield every candidate path in search order.

    :param fragments: One fragment or a sequence of fragments.
    :param directories: Base directories, highest priority first.
    :param extensions: Extensions appended to each fragment, including the dot.
    """
    if isinstance(fragments, str):
        fragments = [fragments]
    fragments = list(fragments)
    extensions = list(extensions)
    for directory in directories:
        for fragment in fragments:
            for extension in extensions:
                yield os.path.join(directory, fragment + extension)


class Resolver:
    """
    Stateless resolver object, for callers that want to substitute the search
    strategy (e.g. a resolver backed by an in-memory file set in tests).
    """

    def candidates(
        self,
        fragments: Union[PathFragment, Sequence[PathFragment]],
        directories: Iterable[Directory],
        extensions: Iterable[Extension],
    ) -> Iterator[str]:
        return candidates(fragments, directories, extensions)

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def resolve(
        self,
        fragments: Union[PathFragment, Sequence[PathFragment]],
        directories: Iterable[Directory],
        extensions: Iterable[Extension],
    ) -> Optional[str]:
        for path in self.candidates(fragments, directories, extensions):
            if self.exists(path):
                logger.debug("Resolved %s", path)
                return path
        logger.debug("No file found for %r", fragments)
        return None

    def resolve_directory(
        self,
        fragments: Union[PathFragment, Sequence[PathFragment]],
        directories: Iterable[Directory],
    ) -> Optional[str]:
        """
        First ``directory/fragment`` that is an existing directory, searched in
        the same directory-major order as files.
        """
        if isinstance(fragments, str):
            fragments = [fragments]
        fragments = [fragment for fragment in fragments if fragment]
        for directory in directories:
            for fragment in fragments:
                path = os.path.join(directory, fragment)
                if os.path.isdir(path):
                    return path
        return None


_default_resolver = Resolver()


def resolve(
    fragments: Union[PathFragment, Sequence[PathFragment]],
    directories: Iterable[Directory],
    extensions: Iterable[Extension],
) -> ResolvedPath:
    """
    Return the first candidate that exists as a regular file, or None.
    """
    return _default_resolver.resolve(fragments, directories, extensions)
