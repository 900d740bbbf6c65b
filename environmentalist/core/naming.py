# environmentalist/core/naming.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Naming conventions map a hierarchical symbol name such as ``ActiveRecord\\Base``
or ``ActiveRecord::Base`` to a relative path fragment without extension.

    underscore("ActiveRecord\\Base")  -> "active_record/base"
    psr_0("Zend\\Db_Table")          -> "Zend/Db/Table"
"""

from __future__ import annotations

import os
import re
from typing import Any, Callable, Dict, List

from environmentalist.core.collection import OrderedUniqueList
from environmentalist.core.errors import ConfigurationError
from environmentalist.interfaces.types import NamingConventionRule, PathFragment

_NAMESPACE_SEPARATOR = re.compile(r"\\|::")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]+")
_UNDERSCORES = re.compile(r"_+")


def namespaces(name: str) -> List[str]:
    """Split a name on ``\\`` or ``::``, dropping empty segments."""
    return [segment for segment in _NAMESPACE_SEPARATOR.split(name) if segment]


def _underscore_segment(segment: str) -> str:
    path = _ACRONYM_BOUNDARY.sub(r"\1_\2", segment)
    path = _WORD_BOUNDARY.sub(r"\1_\2", path)
    path = _NON_ALPHANUMERIC.sub("_", path)
    return path.lower()


def underscore(name: str) -> PathFragment:
    """
    Lower-case, underscore separated path with one directory per namespace.

    :param name: Hierarchical symbol name.
    :return: Path fragment joined with ``os.sep``; empty for an empty name.
    """
    return os.sep.join(_underscore_segment(segment) for segment in namespaces(name))


def psr_0(name: str) -> PathFragment:
    """
    Case-preserving path where underscores in the last segment also become
    directories.

    :param name: Hierarchical symbol name.
    :return: Path fragment joined with ``os.sep``; empty for an empty name.
    """
    segments = namespaces(name)
    if not segments:
        return ""
    segments[-1] = _UNDERSCORES.sub(lambda match: os.sep, segments[-1])
    return os.sep.join(segments)


# Conventions that can be referred to by name from configuration.
CONVENTIONS: Dict[str, NamingConventionRule] = {
    "underscore": underscore,
    "psr_0": psr_0,
}


def convention_for(name: str) -> NamingConventionRule:
    """Look up a registered naming convention by name."""
    try:
        return CONVENTIONS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown naming convention '{name}'",
            key="naming_conventions",
            details={"available": sorted(CONVENTIONS)},
        ) from None


class NamingConventions(OrderedUniqueList[NamingConventionRule]):
    """
    Ordered registry of naming conventions. Each convention yields one
    candidate fragment per name, in registration order.
    """

    def _coerce(self, item: Any) -> NamingConventionRule:
        if isinstance(item, str):
            return convention_for(item)
        if not callable(item):
            raise ConfigurationError(f"Naming convention {item!r} is not callable", key="naming_conventions")
        return item

    def filenames_for(self, name: str) -> List[PathFragment]:
        """
        Apply every registered convention to ``name``.

        Two conventions that agree on a name produce the same fragment twice;
        the resolver tolerates that.
        """
        return [convention(name) for convention in self.list()]


def register_convention(name: str, convention: Callable[[str], str]) -> None:
    """Make ``convention`` available to configuration under ``name``."""
    CONVENTIONS[name] = convention
