# classkit/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional


class _LockFactory:
    """
    Internal factory for producing threading.Lock instances, or potentially other
    concurrency primitives, if needed.
    """

    def create_lock(self) -> threading.Lock:
        """
        Return a new lock instance.
        """
        return threading.Lock()


def get_lock() -> threading.Lock:
    """
    Provide a new lock instance to be used for synchronization.
    """
    return _LockFactory().create_lock()


@contextmanager
def with_lock(lock: threading.Lock):
    """
    A convenience context manager that acquires the given lock upon entry and
    releases it upon exit, ensuring safe access to shared resources.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()


class ReadWriteLock:
    """
    Single-writer, multi-reader lock guarding the class registry.

    Definitions take the write side, lookups take the read side. The write
    side is re-entrant for the thread holding it, and that thread may also
    take the read side, so a singleton constructor running inside define()
    can call create() or define() again.

    New readers wait while a writer is waiting, so a steady stream of reads
    cannot starve definitions. A thread holding only the read side must not
    request the write side, nor take the read side again.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(get_lock())
        self._readers = 0
        self._writer: Optional[int] = None
        self._write_depth = 0
        self._writers_waiting = 0

    @property
    def write_owned(self) -> bool:
        """Whether the calling thread holds the write side."""
        return self._writer == threading.get_ident()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """
        Hold the read side for the duration of the with-block.
        """
        me = threading.get_ident()
        with self._condition:
            counted = self._writer != me
            if counted:
                while self._writer is not None or self._writers_waiting:
                    self._condition.wait()
                self._readers += 1
        try:
            yield
        finally:
            if counted:
                with self._condition:
                    self._readers -= 1
                    if not self._readers:
                        self._condition.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """
        Hold the write side for the duration of the with-block.
        """
        me = threading.get_ident()
        with self._condition:
            if self._writer == me:
                self._write_depth += 1
            else:
                self._writers_waiting += 1
                try:
                    while self._writer is not None or self._readers:
                        self._condition.wait()
                finally:
                    self._writers_waiting -= 1
                self._writer = me
                self._write_depth = 1
        try:
            yield
        finally:
            with self._condition:
                self._write_depth -= 1
                if not self._write_depth:
                    self._writer = None
                    self._condition.notify_all()


class NullLock:
    """
    Drop-in replacement for ReadWriteLock when the registry is confined to a
    single thread.
    """

    write_owned = False

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        yield

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        yield
