"""A small synchronous signal/slot mechanism."""

from __future__ import annotations

import threading
from typing import Any, Callable


class Signal:
    """A list of callables that are invoked, in connection order, on emit."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []
        self._lock = threading.Lock()

    def connect(self, slot: Callable[..., Any]) -> None:
        """Register ``slot`` to be called on every emit."""
        if not callable(slot):
            raise TypeError("slot must be callable")
        with self._lock:
            self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove one registration of ``slot``; raise ValueError if absent."""
        with self._lock:
            try:
                self._slots.remove(slot)
            except ValueError:
                raise ValueError("slot is not connected to this signal") from None

    def emit(self, *args: Any) -> None:
        """Call every connected slot with ``args``."""
        with self._lock:
            slots = list(self._slots)
        for slot in slots:
            slot(*args)

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)