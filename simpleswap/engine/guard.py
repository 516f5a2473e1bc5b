"""Exclusive, non-blocking guard around mutating operations."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from simpleswap.errors import ReentrantCall


class ReentrancyGuard:
    """One mutating operation at a time, across every pool of the exchange.

    A second attempt to enter while the guard is held fails immediately with
    ReentrantCall instead of waiting. This covers both a capability calling
    back into the exchange mid-operation and a concurrent caller on another
    thread.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._operation: str | None = None

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @property
    def current_operation(self) -> str | None:
        """Name of the operation holding the guard, if any."""
        return self._operation

    @contextmanager
    def hold(self, operation: str) -> Iterator[None]:
        """Hold the guard for the duration of the block.

        Raises:
            ReentrantCall: If the guard is already held
        """
        if not self._lock.acquire(blocking=False):
            raise ReentrantCall(operation)
        self._operation = operation
        try:
            yield
        finally:
            self._operation = None
            self._lock.release()


__all__ = ["ReentrancyGuard"]
