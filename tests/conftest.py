# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import sys
from typing import Any, Callable, List, Optional, Tuple

import pytest

from environmentalist.core.events import FaultEvent, SourceLocation
from environmentalist.runtime.environment import Environment


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "integration: mark test as touching the running interpreter")


class FakeHost:
    """
    In-memory host recording what an Environment installs into it.

    ``fault_handler`` is whatever is currently installed; it starts out as
    the ``previous`` handler given to the constructor.
    """

    def __init__(self, previous: Optional[Any] = None) -> None:
        self.fault_handler: Optional[Any] = previous
        self.loaders: List[Environment] = []
        self.loaded: List[Tuple[str, str]] = []

    def install_loader(self, environment: Environment) -> None:
        self.loaders.append(environment)

    def uninstall_loader(self, environment: Environment) -> None:
        self.loaders.remove(environment)

    def install_fault_handler(self, callback: Callable[[FaultEvent], bool]) -> Optional[Any]:
        previous = self.fault_handler
        self.fault_handler = callback
        return previous

    def restore_fault_handler(self, previous: Optional[Any]) -> None:
        self.fault_handler = previous

    def load(self, name: str, path: str) -> None:
        self.loaded.append((name, path))


@pytest.fixture
def fake_host():
    """A host with no fault handler installed."""
    return FakeHost()


@pytest.fixture
def fault_event():
    """A generic fault for dispatch tests."""
    return FaultEvent(
        severity=UserWarning,
        message="something odd",
        source_location=SourceLocation("script.py", 12),
        context={"user": "test"},
    )


@pytest.fixture
def library(tmp_path):
    """
    An include directory with a couple of source files:

        lib/user.py
        lib/active_record/base.py
        lib/Zend/Db/Table.py
    """
    root = tmp_path / "lib"
    (root / "active_record").mkdir(parents=True)
    (root / "Zend" / "Db").mkdir(parents=True)
    (root / "user.py").write_text("NAME = 'user'\n")
    (root / "active_record" / "base.py").write_text("NAME = 'base'\n")
    (root / "Zend" / "Db" / "Table.py").write_text("NAME = 'table'\n")
    return root


@pytest.fixture
def environment(fake_host, library):
    """An Environment searching ``library`` and installed into a FakeHost."""
    return Environment(include_paths=[str(library)], host=fake_host)


@pytest.fixture
def isolated_meta_path(monkeypatch):
    """Let a test add finders to sys.meta_path without leaking them."""
    monkeypatch.setattr(sys, "meta_path", list(sys.meta_path))
    return sys.meta_path


@pytest.fixture
def make_host():
    """Factory for hosts that already have a fault handler installed."""
    return FakeHost


@pytest.fixture
def sys_modules():
    """Let a test register modules without leaking them."""
    before = set(sys.modules)
    yield sys.modules
    for name in set(sys.modules) - before:
        del sys.modules[name]
