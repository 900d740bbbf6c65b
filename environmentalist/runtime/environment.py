# environmentalist/runtime/environment.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence, Union

from environmentalist.config import (
    DEFAULT_AUTOLOAD_EXTENSIONS,
    DEFAULT_INCLUDE_PATHS,
    DEFAULT_NAMING_CONVENTIONS,
    EnvironmentConfig,
)
from environmentalist.core.events import FaultEvent
from environmentalist.core.handlers import HandlerChain
from environmentalist.core.naming import NamingConventions
from environmentalist.core.paths import AutoloadExtensions, IncludePaths
from environmentalist.core.resolver import Resolver
from environmentalist.interfaces.protocols import Handler, Host
from environmentalist.interfaces.types import PathFragment
from environmentalist.runtime.concurrency import get_lock, with_lock
from environmentalist.runtime.host import PythonHost

logger = logging.getLogger(__name__)


class Environment:
    """
    Owns the include paths, autoload extensions, naming conventions and fault
    handlers of one runtime and wires them into a host.

    A symbol request runs the name through every naming convention, resolves
    the candidates against the include paths and extensions, and asks the
    host to load the first file found. A fault runs through the handler
    chain.

    Example:
        env = Environment(include_paths=["lib"])
        env.naming_conventions.append("psr_0")
        with env:
            import ActiveRecord   # lib/active_record.py
    """

    def __init__(
        self,
        include_paths: Union[str, Iterable[str]] = tuple(DEFAULT_INCLUDE_PATHS),
        autoload_extensions: Union[str, Iterable[str]] = tuple(DEFAULT_AUTOLOAD_EXTENSIONS),
        naming_conventions: Iterable[Any] = tuple(DEFAULT_NAMING_CONVENTIONS),
        error_handlers: Iterable[Any] = (),
        host: Optional[Host] = None,
        resolver: Optional[Resolver] = None,
    ) -> None:
        """
        :param include_paths: Search directories, as a sequence or an
            ``os.pathsep`` joined string.
        :param autoload_extensions: Extensions, as a sequence or a comma
            joined string.
        :param naming_conventions: Callables or registered convention names.
        :param error_handlers: Handlers, callables or ``"module:function"``
            references.
        :param host: Host to install hooks into; the running interpreter if
            omitted.
        :param resolver: Resolver used to find files.
        """
        self._lock = get_lock()
        self.include_paths = IncludePaths(include_paths, lock=self._lock)
        self.autoload_extensions = AutoloadExtensions(autoload_extensions, lock=self._lock)
        self.naming_conventions = NamingConventions(naming_conventions, lock=self._lock)
        self.error_handlers = HandlerChain(error_handlers, lock=self._lock)
        self.host = host if host is not None else PythonHost()
        self.resolver = resolver or Resolver()
        self._enabled = False
        self._previous_fault_handler: Optional[Handler] = None

    @classmethod
    def from_config(cls, config: EnvironmentConfig, host: Optional[Host] = None) -> "Environment":
        """Build an environment from an EnvironmentConfig."""
        return cls(
            include_paths=config.include_paths,
            autoload_extensions=config.autoload_extensions,
            naming_conventions=config.naming_conventions,
            error_handlers=config.error_handlers,
            host=host,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def previous_fault_handler(self) -> Optional[Handler]:
        """The fault handler displaced by ``enable``, if any."""
        return self._previous_fault_handler

    def filenames_for(self, name: str) -> List[PathFragment]:
        """One candidate fragment per registered naming convention."""
        return self.naming_conventions.filenames_for(name)

    def resolve_include_path(self, fragments: Union[PathFragment, Sequence[PathFragment]]) -> Optional[str]:
        """
        First existing file for ``fragments`` under the current include paths
        and autoload extensions, or None.
        """
        with with_lock(self._lock):
            directories = self.include_paths.list()
            extensions = self.autoload_extensions.list()
        return self.resolver.resolve(fragments, directories, extensions)

    def locate(self, name: str) -> Optional[str]:
        """Path of the file that would be loaded for ``name``, or None."""
        return self.resolve_include_path(self.filenames_for(name))

    def locate_package(self, name: str) -> Optional[str]:
        """
        Directory standing for ``name`` when no file does, e.g.
        ``lib/active_record`` for ``ActiveRecord``, or None.
        """
        with with_lock(self._lock):
            directories = self.include_paths.list()
        return self.resolver.resolve_directory(self.filenames_for(name), directories)

    def on_symbol_requested(self, name: str) -> Optional[str]:
        """
        Load the file for ``name`` through the host if one can be found.

        Names that cannot be resolved are left alone so any other loader the
        host has can still claim them.

        :return: The loaded path, or None.
        """
        path = self.locate(name)
        if path is None:
            logger.debug("No file for %s", name)
            return None
        self.host.load(name, path)
        return path

    def on_fault(self, event: FaultEvent) -> bool:
        """
        Dispatch a fault through the handler chain.

        :return: False if nothing handled the event.
        """
        return self.error_handlers.dispatch(event)

    def enable(self) -> None:
        """
        Install the loader and fault hooks. Calling it again while enabled does
        nothing.
        """
        with with_lock(self._lock):
            if self._enabled:
                return
            self.host.install_loader(self)
            self._previous_fault_handler = self.host.install_fault_handler(self.on_fault)
            self.error_handlers.default = self._previous_fault_handler
            self._enabled = True
            logger.debug("Environment enabled")

    def disable(self) -> None:
        """
        Remove the loader and restore the fault handler that was active before
        ``enable``. The lists are kept as they are.
        """
        with with_lock(self._lock):
            if not self._enabled:
                return
            self.host.uninstall_loader(self)
            self.host.restore_fault_handler(self._previous_fault_handler)
            self.error_handlers.default = None
            self._previous_fault_handler = None
            self._enabled = False
            logger.debug("Environment disabled")

    def __enter__(self) -> "Environment":
        self.enable()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disable()

    def __repr__(self) -> str:
        return f"Environment(include_paths={self.include_paths.list()!r}, enabled={self._enabled})"


_default_environment: Optional[Environment] = None
_default_lock = get_lock()


def default_environment() -> Environment:
    """
    The process-wide environment, created from ``EnvironmentConfig.from_env()``
    on first use.
    """
    global _default_environment
    with with_lock(_default_lock):
        if _default_environment is None:
            _default_environment = Environment.from_config(EnvironmentConfig.from_env())
        return _default_environment
