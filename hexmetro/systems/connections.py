from __future__ import annotations

from typing import Callable, Optional

from hexmetro.signals import Signal
from hexmetro.state.grid import GridModel
from hexmetro.state.lines import LineStore
from hexmetro.systems.mutations import count_connections


class ConnectionCounter:
    """
    Keeps the published connection count in step with a LineStore.

    Every `changed` from the store triggers a full recount; `updated` fires
    with the new value only when it differs from the previous one.
    """

    def __init__(
        self,
        store: LineStore,
        grid: GridModel,
        log: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.store = store
        self.grid = grid
        self._log = log or (lambda msg: None)
        self.updated = Signal()
        self.count = count_connections(store, grid)
        store.changed.connect(self.recount)

    def recount(self) -> int:
        new = count_connections(self.store, self.grid)
        if new != self.count:
            self._log(f"connections {self.count} -> {new}")
            self.count = new
            self.updated.emit(new)
        return new

    def detach(self) -> None:
        self.store.changed.disconnect(self.recount)
