"""environmentalist: runtime environment management for dynamically loaded code

Keeps the pieces of a runtime that decide where code is loaded from and who
hears about faults:

    - include paths searched for source files
    - autoload extensions recognised when searching
    - naming conventions turning a symbol name into a relative path
    - an ordered chain of fault handlers

An Environment owns one set of these lists. Enabling it installs a module
finder and a warnings hook into the interpreter; disabling it puts back
exactly what was there before.
"""

from environmentalist.config import EnvironmentConfig
from environmentalist.core.errors import (
    ConfigurationError,
    EnvironmentalistError,
    HandlerResolutionError,
    HostError,
)
from environmentalist.core.events import FaultEvent, SourceLocation
from environmentalist.core.handlers import CallableHandler, HandlerChain, NamedHandler, as_handler
from environmentalist.core.naming import NamingConventions, psr_0, underscore
from environmentalist.core.paths import AutoloadExtensions, IncludePaths, PathList
from environmentalist.core.resolver import Resolver, resolve
from environmentalist.interfaces.types import NOT_HANDLED
from environmentalist.runtime.environment import Environment, default_environment
from environmentalist.runtime.host import PythonHost

__version__ = "0.1.0"

__all__ = [
    # Facade
    "Environment",
    "EnvironmentConfig",
    "PythonHost",
    "default_environment",
    # Lists
    "PathList",
    "IncludePaths",
    "AutoloadExtensions",
    "NamingConventions",
    "HandlerChain",
    # Handlers and events
    "CallableHandler",
    "NamedHandler",
    "as_handler",
    "FaultEvent",
    "SourceLocation",
    "NOT_HANDLED",
    # Naming and resolution
    "underscore",
    "psr_0",
    "Resolver",
    "resolve",
    # Errors
    "EnvironmentalistError",
    "ConfigurationError",
    "HandlerResolutionError",
    "HostError",
]
