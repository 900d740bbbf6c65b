# tests/unit/test_resolver.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import os

import pytest

from environmentalist.core.resolver import Resolver, candidates, resolve

# -----------------------------------------------------------------------------
# FIXTURES
# -----------------------------------------------------------------------------


@pytest.fixture
def roots(tmp_path):
    """Two include directories, ``a`` and ``b``, both empty."""
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.mkdir()
    b.mkdir()
    return str(a), str(b)


class MemoryResolver(Resolver):
    """Resolver backed by a set of paths instead of the filesystem."""

    def __init__(self, files):
        self.files = set(files)
        self.checked = []

    def exists(self, path):
        self.checked.append(path)
        return path in self.files


# -----------------------------------------------------------------------------
# RESOLUTION
# -----------------------------------------------------------------------------


def test_resolves_in_later_directory_and_extension(roots):
    a, b = roots
    target = os.path.join(b, "user.inc")
    open(target, "w").close()

    assert resolve(["user"], [a, b], [".php", ".inc"]) == target


def test_returns_none_when_nothing_exists(roots):
    assert resolve(["user"], list(roots), [".py"]) is None


def test_single_fragment_string(roots):
    a, _ = roots
    target = os.path.join(a, "user.py")
    open(target, "w").close()
    assert resolve("user", [a], [".py"]) == target


def test_directory_takes_precedence_over_fragment(roots):
    a, b = roots
    in_a = os.path.join(a, "second.py")
    in_b = os.path.join(b, "first.py")
    open(in_a, "w").close()
    open(in_b, "w").close()

    assert resolve(["first", "second"], [a, b], [".py"]) == in_a


def test_fragment_order_within_directory(roots):
    a, _ = roots
    open(os.path.join(a, "first.py"), "w").close()
    open(os.path.join(a, "second.py"), "w").close()

    assert resolve(["first", "second"], [a], [".py"]) == os.path.join(a, "first.py")


def test_extension_order_within_fragment(roots):
    a, _ = roots
    open(os.path.join(a, "user.inc"), "w").close()
    open(os.path.join(a, "user.py"), "w").close()

    assert resolve(["user"], [a], [".py", ".inc"]) == os.path.join(a, "user.py")


def test_directories_are_not_matches(roots):
    a, _ = roots
    os.mkdir(os.path.join(a, "user.py"))
    assert resolve(["user"], [a], [".py"]) is None


def test_nested_fragment(roots):
    a, _ = roots
    os.makedirs(os.path.join(a, "active_record"))
    target = os.path.join(a, "active_record", "base.py")
    open(target, "w").close()
    assert resolve([os.path.join("active_record", "base")], [a], [".py"]) == target


@pytest.mark.parametrize(
    "fragments,directories,extensions",
    [
        ([], ["a"], [".py"]),
        (["user"], [], [".py"]),
        (["user"], ["a"], []),
    ],
)
def test_empty_inputs_resolve_to_none(fragments, directories, extensions):
    assert resolve(fragments, directories, extensions) is None


# -----------------------------------------------------------------------------
# CANDIDATE ORDER
# -----------------------------------------------------------------------------


def test_candidates_are_directory_major():
    paths = list(candidates(["f1", "f2"], ["d1", "d2"], [".e1", ".e2"]))
    assert paths == [
        os.path.join("d1", "f1.e1"),
        os.path.join("d1", "f1.e2"),
        os.path.join("d1", "f2.e1"),
        os.path.join("d1", "f2.e2"),
        os.path.join("d2", "f1.e1"),
        os.path.join("d2", "f1.e2"),
        os.path.join("d2", "f2.e1"),
        os.path.join("d2", "f2.e2"),
    ]


def test_candidates_accept_generators():
    directories = (d for d in ["d1", "d2"])
    assert len(list(candidates(["f"], directories, iter([".py"])))) == 2


def test_resolver_stops_at_first_match():
    hit = os.path.join("d1", "f2.py")
    resolver = MemoryResolver({hit, os.path.join("d2", "f1.py")})

    assert resolver.resolve(["f1", "f2"], ["d1", "d2"], [".py"]) == hit
    assert resolver.checked == [os.path.join("d1", "f1.py"), hit]


# -----------------------------------------------------------------------------
# DIRECTORIES
# -----------------------------------------------------------------------------


def test_resolve_directory(roots):
    a, b = roots
    os.makedirs(os.path.join(b, "active_record"))
    assert Resolver().resolve_directory(["active_record"], [a, b]) == os.path.join(b, "active_record")


def test_resolve_directory_ignores_files_and_empty_fragments(roots):
    a, _ = roots
    open(os.path.join(a, "user"), "w").close()
    assert Resolver().resolve_directory(["user", ""], [a]) is None


def test_resolve_directory_is_directory_major(roots):
    a, b = roots
    os.mkdir(os.path.join(a, "second"))
    os.mkdir(os.path.join(b, "first"))
    assert Resolver().resolve_directory("first", [a, b]) == os.path.join(b, "first")
    assert Resolver().resolve_directory(["first", "second"], [a, b]) == os.path.join(a, "second")
