# tests/unit/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from environmentalist.core.errors import (
    ConfigurationError,
    EnvironmentalistError,
    HandlerResolutionError,
    HostError,
)


@pytest.mark.parametrize("error_class", [ConfigurationError, HandlerResolutionError, HostError])
def test_error_hierarchy(error_class):
    assert issubclass(error_class, EnvironmentalistError)


def test_base_error():
    error = EnvironmentalistError("plain")
    assert error.message == "plain"
    assert str(error) == "plain"
    assert error.details == {}


def test_configuration_error():
    error = ConfigurationError("bad value", key="include_paths", details={"source": "env"})
    assert error.message == "bad value"
    assert error.key == "include_paths"
    assert error.details == {"source": "env"}


def test_handler_resolution_error():
    error = HandlerResolutionError("nope", "mod:fn")
    assert error.reference == "mod:fn"
    assert error.details == {}


def test_host_error():
    with pytest.raises(EnvironmentalistError) as exc_info:
        raise HostError("cannot load", path="/tmp/x.py")
    assert exc_info.value.path == "/tmp/x.py"
