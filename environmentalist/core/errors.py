# environmentalist/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Optional


class EnvironmentalistError(Exception):
    """
    Base exception class for errors raised by the environment utilities.

    Resolution misses and declining handlers are normal results and never
    raise; only the configuration and host surfaces use this hierarchy.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(EnvironmentalistError):
    """
    Raised when configuration values or a configuration file are invalid.
    """

    def __init__(self, message: str, key: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.key = key


class HandlerResolutionError(EnvironmentalistError):
    """
    Raised when a named handler reference cannot be imported or is not callable.
    """

    def __init__(self, message: str, reference: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.reference = reference


class HostError(EnvironmentalistError):
    """
    Raised when the host environment refuses an operation, e.g. a resolved
    file cannot be turned into a module.
    """

    def __init__(self, message: str, path: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.path = path
