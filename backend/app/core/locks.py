"""
Locking helpers for the in-memory repositories and the order pipeline

Mutations on a single entity (stock of one product, status of one order)
are serialized with one lock per key; unrelated keys never contend.
"""
import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Iterator

from app.core.exceptions import PipelineAbandonedError


class KeyedLock:
    """Registry of ``threading.Lock`` objects, one per key"""

    def __init__(self):
        self._locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._registry_lock = threading.Lock()

    def _get(self, key: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks[key]

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block"""
        lock = self._get(key)
        with lock:
            yield


class CommitWindow:
    """
    One-shot gate between a worker that stores a result and the caller
    waiting for it

    ``commit()`` and ``close()`` take the same lock, so whichever runs first
    wins: either the result is stored and the caller reports it, or the
    caller has given up and the worker stores nothing.

    Usage:
        with window.commit():
            repo.append(order)
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._closed = False
        self._committed = False

    @property
    def committed(self) -> bool:
        return self._committed

    @contextmanager
    def commit(self) -> Iterator[None]:
        """
        Run the block as the commit step

        Raises:
            PipelineAbandonedError if the window was already closed
        """
        with self._lock:
            if self._closed:
                raise PipelineAbandonedError("Caller stopped waiting, result discarded")
            yield
            self._committed = True

    def close(self) -> bool:
        """
        Refuse every later commit

        Returns:
            False when a commit already went through
        """
        with self._lock:
            if self._committed:
                return False
            self._closed = True
            return True
