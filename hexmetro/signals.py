from __future__ import annotations

from typing import Callable, List


class Signal:
    """
    Minimal synchronous observer list.

    Listeners are called in connection order on the caller's stack; an
    exception in a listener propagates to whoever emitted.
    """

    def __init__(self) -> None:
        self._listeners: List[Callable[..., None]] = []

    def connect(self, fn: Callable[..., None]) -> None:
        if fn not in self._listeners:
            self._listeners.append(fn)

    def disconnect(self, fn: Callable[..., None]) -> None:
        if fn in self._listeners:
            self._listeners.remove(fn)

    def emit(self, *args) -> None:
        for fn in list(self._listeners):
            fn(*args)

    def __len__(self) -> int:
        return len(self._listeners)
