# environmentalist/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager


def get_lock() -> threading.RLock:
    """
    Lock guarding one environment's lists and hook state. It is re-entrant so
    a facade holding it can call into the lists it guards.
    """
    return threading.RLock()


@contextmanager
def with_lock(lock):
    """
    Hold ``lock`` for the body of the block. Every snapshot-then-commit
    mutation of a list runs inside one of these.
    """
    with lock:
        yield
