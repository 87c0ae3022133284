"""
Pointer-driven line editor.

LineEditor is the single input-handling owner of the drawing session. It
takes plain pointer events in drawing-layer pixels (the scene converts from
pygame), drives PathDrawingSession and the mutation functions, and emits
`redraw` once per handled event.

    primary down   on endpoint -> extend that line
                   on station  -> new line
                   on line body -> recolor (no session)
    primary drag   grow / backtrack the path
    primary up     commit (>= 2 cells) or drop
    secondary down while drawing -> cancel
                   otherwise -> delete the cell from the first line through it,
                   repeated per newly entered cell while held
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Sequence, Union

from hexmetro.hexmath import AxialCoord, HexLayout, Vec2
from hexmetro.palette import DEFAULT_PALETTE, Color, PaletteColor
from hexmetro.signals import Signal
from hexmetro.state.grid import GridModel
from hexmetro.state.lines import LineStore
from hexmetro.systems import mutations
from hexmetro.systems.connections import ConnectionCounter
from hexmetro.systems.drawing import PathDrawingSession, begin_session


class Button(enum.IntEnum):
    # Same numbering as pygame mouse buttons.
    PRIMARY = 1
    SECONDARY = 3


@dataclass(frozen=True)
class PointerDown:
    pos: Vec2
    button: Button


@dataclass(frozen=True)
class PointerUp:
    pos: Vec2
    button: Button


@dataclass(frozen=True)
class PointerMove:
    pos: Vec2
    buttons: FrozenSet[Button] = frozenset()


PointerEvent = Union[PointerDown, PointerUp, PointerMove]


class LineEditor:
    def __init__(
        self,
        grid: GridModel,
        store: LineStore,
        layout: HexLayout,
        palette: Optional[Sequence[PaletteColor]] = None,
        *,
        line_width: Optional[int] = None,
        hit_epsilon: float = 4.0,
        allow_free_start: bool = False,
        log: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.grid = grid
        self.store = store
        self.layout = layout
        self.palette: List[PaletteColor] = list(palette or DEFAULT_PALETTE)
        self.line_width = line_width if line_width is not None else store.default_width
        self.hit_epsilon = hit_epsilon
        self.allow_free_start = allow_free_start
        self._log = log or (lambda msg: None)

        self.session: Optional[PathDrawingSession] = None
        self.hover: Optional[AxialCoord] = None
        self.selected_index: int = 0
        self.deleting: bool = False
        self._last_deleted: Optional[AxialCoord] = None

        self.counter = ConnectionCounter(store, grid, log=self._log)
        self.redraw = Signal()

    # ------------------------------------------------------------------ #
    # Read-only views

    @property
    def connections(self) -> int:
        return self.counter.count

    @property
    def selected_color(self) -> Color:
        return self.palette[self.selected_index].rgb

    @property
    def is_drawing(self) -> bool:
        return self.session is not None

    def preview_points(self) -> List[Vec2]:
        if self.session is None:
            return []
        return self.session.preview_points(self.layout)

    # ------------------------------------------------------------------ #
    # Commands

    def select_color(self, index: int) -> bool:
        if not 0 <= index < len(self.palette):
            return False
        if index != self.selected_index:
            self.selected_index = index
            self.redraw.emit()
        return True

    def cancel(self) -> None:
        if self.session is None:
            return
        self._log(f"cancel session at {self.session.anchor} ({len(self.session.path)} cells dropped)")
        self.session = None
        self.redraw.emit()

    # ------------------------------------------------------------------ #
    # Pointer input

    def handle(self, event: PointerEvent) -> None:
        if isinstance(event, PointerMove):
            self.pointer_move(event.pos, event.buttons)
        elif isinstance(event, PointerDown):
            self.pointer_down(event.pos, event.button)
        elif isinstance(event, PointerUp):
            self.pointer_up(event.pos, event.button)

    def pointer_down(self, pos: Vec2, button: Button) -> None:
        coord = self.layout.to_axial(*pos)
        if button == Button.SECONDARY:
            if self.session is not None:
                self.cancel()
                return
            self.deleting = True
            self._last_deleted = None
            self._delete_at(coord)
            self.redraw.emit()
            return
        if button != Button.PRIMARY or self.session is not None:
            return

        session = begin_session(self.grid, self.store, coord)
        if session is None:
            result = mutations.recolor_at(
                self.store, self.layout, pos[0], pos[1], self.selected_color, self.hit_epsilon
            )
            if result.changed:
                self._log(f"recolor line {result.line.line_id} -> {self.selected_color}")
                self.redraw.emit()
                return
            if self.allow_free_start:
                session = begin_session(self.grid, self.store, coord, allow_free_start=True)
        if session is None:
            self._log(f"pointer down at {coord}: no station or line endpoint")
            return

        session.pointer = pos
        self.session = session
        if session.is_extension:
            self._log(
                f"session at {coord}: extending line {session.extend_line.line_id} "
                f"from {session.extend_end.value}"
            )
        else:
            self._log(f"session at {coord}: new line")
        self.redraw.emit()

    def pointer_move(self, pos: Vec2, buttons: FrozenSet[Button] = frozenset()) -> None:
        coord = self.layout.to_axial(*pos)
        # hover, then path, then one redraw
        self.hover = coord if self.grid.is_within_bounds(coord) else None

        if self.session is not None:
            self.session.pointer = pos
            self.session.move_to(coord, allowed=self.grid.is_within_bounds)
        elif self.deleting:
            if Button.SECONDARY in buttons:
                self._delete_at(coord)
            else:
                # release was lost (focus change, outside the window)
                self.deleting = False
                self._last_deleted = None

        self.redraw.emit()

    def pointer_up(self, pos: Vec2, button: Button) -> None:
        if button == Button.SECONDARY:
            self.deleting = False
            self._last_deleted = None
            return
        if button != Button.PRIMARY or self.session is None:
            return

        session, self.session = self.session, None
        path = session.committed_path()
        if len(path) < 2:
            self._log(f"release at {session.anchor}: path too short, dropped")
            self.redraw.emit()
            return

        result = mutations.finalize(self.store, session, self.selected_color, self.line_width)
        if result.line is not None:
            self._log(f"{result.kind} line {result.line.line_id}: {len(result.line.points)} cells")
        self.redraw.emit()

    # ------------------------------------------------------------------ #

    def _delete_at(self, coord: AxialCoord) -> None:
        if coord == self._last_deleted:
            return
        self._last_deleted = coord
        result = mutations.delete_point(self.store, coord)
        if not result.changed:
            return
        msg = f"delete {coord}: {result.kind} line {result.line.line_id}"
        if result.new_lines:
            msg += f" (+ line {result.new_lines[0].line_id})"
        self._log(msg)
