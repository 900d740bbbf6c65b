# environmentalist/runtime/host.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Python host bindings.

The symbol loader is a meta path finder appended to ``sys.meta_path`` so the
standard finders always get the first chance at a module. Faults are Python
warnings: ``warnings.showwarning`` is replaced while an environment is
enabled and the displaced function becomes the handler chain's default.
"""

from __future__ import annotations

import importlib.abc
import importlib.util
import logging
import sys
import warnings
from importlib.machinery import ModuleSpec, SourceFileLoader
from types import ModuleType
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from environmentalist.core.errors import HostError
from environmentalist.core.events import FaultEvent
from environmentalist.core.naming import namespaces

if TYPE_CHECKING:
    from environmentalist.runtime.environment import Environment

logger = logging.getLogger(__name__)


def module_name_for(symbol: str) -> str:
    """Dotted module name for a hierarchical symbol (``A\\B`` or ``A::B`` -> ``A.B``)."""
    return ".".join(namespaces(symbol))


def symbol_for(module_name: str) -> str:
    """Hierarchical symbol for a dotted module name (``A.B`` -> ``A::B``)."""
    return "::".join(module_name.split("."))


class EnvironmentFinder(importlib.abc.MetaPathFinder):
    """
    Finds modules by asking an environment to locate the file for the
    module's name. A name that resolves only to a directory becomes a
    namespace package so its children can still be imported. Returns None for
    names it cannot resolve so other finders keep working.
    """

    def __init__(self, environment: "Environment") -> None:
        self.environment = environment

    def find_spec(self, fullname: str, path=None, target=None) -> Optional[ModuleSpec]:
        symbol = symbol_for(fullname)
        location = self.environment.locate(symbol)
        if location is not None:
            logger.debug("Found %s at %s", fullname, location)
            spec = ModuleSpec(fullname, SourceFileLoader(fullname, location), origin=location)
            spec.has_location = True
            # Children are found through this finder only, never by raw name
            # from the file's directory.
            spec.submodule_search_locations = []
            return spec

        directory = self.environment.locate_package(symbol)
        if directory is None:
            return None
        logger.debug("Found namespace %s at %s", fullname, directory)
        return ModuleSpec(fullname, None, is_package=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnvironmentFinder):
            return NotImplemented
        return self.environment is other.environment

    def __hash__(self) -> int:
        return id(self.environment)

    def __repr__(self) -> str:
        return f"EnvironmentFinder({self.environment!r})"


class ShowwarningHandler:
    """
    Adapts a ``warnings.showwarning``-style function to the Handler protocol so
    it can sit in a HandlerChain.
    """

    def __init__(self, showwarning: Callable[..., Any]) -> None:
        self.showwarning = showwarning

    def handle(self, event: FaultEvent) -> Any:
        self.showwarning(
            event.context.get("warning", event.message),
            event.severity,
            event.filename,
            event.lineno,
            event.context.get("file"),
            event.context.get("line"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShowwarningHandler):
            return NotImplemented
        return self.showwarning == other.showwarning

    def __hash__(self) -> int:
        return hash(self.showwarning)

    def __repr__(self) -> str:
        return f"ShowwarningHandler({self.showwarning!r})"


def _write_warning(event: FaultEvent) -> None:
    """The interpreter's own fallback: format the warning onto stderr."""
    if sys.stderr is None:
        return
    sys.stderr.write(
        warnings.formatwarning(
            event.context.get("warning", event.message),
            event.severity,
            event.filename,
            event.lineno,
            event.context.get("line"),
        )
    )


class PythonHost:
    """
    Installs environments into the running interpreter.
    """

    def __init__(self) -> None:
        self._finders: Dict[int, EnvironmentFinder] = {}
        self._initial_showwarning = warnings.showwarning

    def install_loader(self, environment: "Environment") -> None:
        finder = EnvironmentFinder(environment)
        if finder not in sys.meta_path:
            sys.meta_path.append(finder)
        self._finders[id(environment)] = finder
        logger.debug("Installed %r", finder)

    def uninstall_loader(self, environment: "Environment") -> None:
        finder = self._finders.pop(id(environment), None)
        if finder is not None and finder in sys.meta_path:
            sys.meta_path.remove(finder)
            logger.debug("Removed %r", finder)

    def install_fault_handler(self, callback: Callable[[FaultEvent], bool]) -> Optional[ShowwarningHandler]:
        previous = warnings.showwarning

        def showwarning(message, category, filename, lineno, file=None, line=None):
            event = FaultEvent.from_warning(message, category, filename, lineno, file, line)
            if not callback(event):
                _write_warning(event)

        warnings.showwarning = showwarning
        return ShowwarningHandler(previous) if previous is not None else None

    def restore_fault_handler(self, previous: Optional[ShowwarningHandler]) -> None:
        if previous is None:
            warnings.showwarning = self._initial_showwarning
        else:
            warnings.showwarning = previous.showwarning

    def load(self, name: str, path: str) -> ModuleType:
        """
        Execute the file at ``path`` as a module named after ``name`` and
        register it in ``sys.modules``.

        :raises HostError: If no module spec can be built for the file.
        """
        module_name = module_name_for(name) or name
        loader = SourceFileLoader(module_name, path)
        spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
        if spec is None:
            raise HostError(f"Cannot load {path} as module {module_name}", path=path)

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        logger.debug("Loaded %s from %s", module_name, path)
        return module
