# environmentalist/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Environment configuration loaded from YAML files and process variables."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from environmentalist.core.errors import ConfigurationError
from environmentalist.core.paths import AUTOLOAD_EXTENSION_SEPARATOR, INCLUDE_PATH_SEPARATOR

ENV_CONFIG_FILE = "ENVIRONMENTALIST_CONFIG"
ENV_INCLUDE_PATH = "ENVIRONMENTALIST_INCLUDE_PATH"
ENV_AUTOLOAD_EXTENSIONS = "ENVIRONMENTALIST_AUTOLOAD_EXTENSIONS"
ENV_NAMING_CONVENTIONS = "ENVIRONMENTALIST_NAMING_CONVENTIONS"

DEFAULT_INCLUDE_PATHS = [os.curdir]
DEFAULT_AUTOLOAD_EXTENSIONS = [".py"]
DEFAULT_NAMING_CONVENTIONS = ["underscore"]

_COMMA = re.compile(r"\s*,\s*")


def _split(value: str, separator: str) -> List[str]:
    if not value:
        return []
    if separator == ",":
        return _COMMA.split(value.strip())
    return value.split(separator)


@dataclass
class EnvironmentConfig:
    """
    Initial contents of an environment's lists.

    Naming conventions are given by registered name (``underscore``,
    ``psr_0``) and error handlers by ``"module:function"`` reference; both
    are resolved when the environment is built.
    """

    include_paths: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_PATHS))
    autoload_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_AUTOLOAD_EXTENSIONS))
    naming_conventions: List[str] = field(default_factory=lambda: list(DEFAULT_NAMING_CONVENTIONS))
    error_handlers: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str = "<mapping>") -> "EnvironmentConfig":
        """
        Build a config from a mapping such as a parsed YAML document.

        :raises ConfigurationError: On unknown keys or values that are not a
            list of strings.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys in {source}: {', '.join(unknown)}",
                details={"source": source, "unknown": unknown},
            )

        values: Dict[str, List[str]] = {}
        for key, value in data.items():
            if isinstance(value, str):
                separator = INCLUDE_PATH_SEPARATOR if key == "include_paths" else AUTOLOAD_EXTENSION_SEPARATOR
                value = _split(value, separator)
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise ConfigurationError(
                    f"'{key}' in {source} must be a list of strings", key=key, details={"source": source}
                )
            values[key] = value
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "EnvironmentConfig":
        """
        Load a config from a YAML file. An empty file gives the defaults.

        :raises FileNotFoundError: If the file does not exist.
        :raises ConfigurationError: If the document is not a mapping or cannot
            be parsed.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping")
        return cls.from_mapping(data, source=str(config_path))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EnvironmentConfig":
        """
        Build a config from process variables.

        ``ENVIRONMENTALIST_CONFIG`` names a YAML file that is loaded first;
        ``ENVIRONMENTALIST_INCLUDE_PATH`` (``os.pathsep`` separated),
        ``ENVIRONMENTALIST_AUTOLOAD_EXTENSIONS`` and
        ``ENVIRONMENTALIST_NAMING_CONVENTIONS`` (comma separated) override it.
        """
        environ = os.environ if environ is None else environ

        config_file = environ.get(ENV_CONFIG_FILE)
        config = cls.from_yaml(config_file) if config_file else cls()

        if environ.get(ENV_INCLUDE_PATH):
            config.include_paths = _split(environ[ENV_INCLUDE_PATH], INCLUDE_PATH_SEPARATOR)
        if environ.get(ENV_AUTOLOAD_EXTENSIONS):
            config.autoload_extensions = _split(environ[ENV_AUTOLOAD_EXTENSIONS], AUTOLOAD_EXTENSION_SEPARATOR)
        if environ.get(ENV_NAMING_CONVENTIONS):
            config.naming_conventions = _split(environ[ENV_NAMING_CONVENTIONS], ",")
        return config
