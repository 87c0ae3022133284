from __future__ import annotations

import enum
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from hexmetro.hexmath import AxialCoord, HexLayout, Vec2
from hexmetro.signals import Signal

Color = Tuple[int, int, int]


class DegenerateLineError(ValueError):
    """A line was asked to hold fewer than two waypoints."""


class LineEnd(enum.Enum):
    START = "start"
    END = "end"


@dataclass(eq=False)
class Line:
    line_id: int
    points: List[AxialCoord]
    color: Color
    width: int

    @property
    def first(self) -> AxialCoord:
        return self.points[0]

    @property
    def last(self) -> AxialCoord:
        return self.points[-1]

    def end_of(self, coord: AxialCoord) -> Optional[LineEnd]:
        """Which end of the line sits on coord, if any (START wins on ties)."""
        if coord == self.points[0]:
            return LineEnd.START
        if coord == self.points[-1]:
            return LineEnd.END
        return None


@dataclass(frozen=True)
class LineSnapshot:
    """Read-only view of a line for renderers."""
    line_id: int
    points: Tuple[AxialCoord, ...]
    pixels: Tuple[Vec2, ...]
    color: Color
    width: int


def _checked(points: Sequence[AxialCoord]) -> List[AxialCoord]:
    pts = list(points)
    if len(pts) < 2:
        raise DegenerateLineError(f"A line needs at least 2 points (got {len(pts)})")
    if len(set(pts)) != len(pts):
        raise DegenerateLineError(f"Line waypoints repeat: {pts}")
    return pts


@dataclass
class LineStore:
    """
    Owns every persisted line, in creation order.

    Each successful mutation emits `changed` exactly once, after the store is
    consistent again. Mutations inside `batch()` share a single emit.
    """
    default_width: int = 8
    _lines: Dict[int, Line] = field(default_factory=dict, init=False)
    _next_id: int = field(default=1, init=False)
    changed: Signal = field(default_factory=Signal, init=False, repr=False)
    _batch_depth: int = field(default=0, init=False, repr=False)
    _batch_dirty: bool = field(default=False, init=False, repr=False)

    # -- queries ------------------------------------------------------------

    def all_lines(self) -> List[Line]:
        return list(self._lines.values())

    def get(self, line_id: int) -> Optional[Line]:
        return self._lines.get(line_id)

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, line: Line) -> bool:
        return self._lines.get(line.line_id) is line

    def lines_touching(self, coord: AxialCoord) -> List[Tuple[Line, bool, bool]]:
        out = []
        for line in self._lines.values():
            if coord in line.points:
                out.append((line, coord == line.first, coord == line.last))
        return out

    def endpoint_at(self, coord: AxialCoord) -> Optional[Tuple[Line, LineEnd]]:
        for line in self._lines.values():
            end = line.end_of(coord)
            if end is not None:
                return line, end
        return None

    def snapshot(self, layout: HexLayout) -> Tuple[LineSnapshot, ...]:
        return tuple(
            LineSnapshot(
                line_id=line.line_id,
                points=tuple(line.points),
                pixels=tuple(layout.to_pixel(p) for p in line.points),
                color=line.color,
                width=line.width,
            )
            for line in self._lines.values()
        )

    # -- mutation -----------------------------------------------------------

    def commit_new(
        self,
        points: Sequence[AxialCoord],
        color: Color,
        width: Optional[int] = None,
    ) -> Line:
        pts = _checked(points)
        line = Line(
            line_id=self._next_id,
            points=pts,
            color=color,
            width=self.default_width if width is None else width,
        )
        self._next_id += 1
        self._lines[line.line_id] = line
        self._notify()
        return line

    def update_points(self, line: Line, new_points: Sequence[AxialCoord]) -> None:
        pts = _checked(new_points)
        if line.line_id not in self._lines:
            raise KeyError(f"Line {line.line_id} is not in this store")
        line.points = pts
        self._notify()

    def recolor(self, line: Line, color: Color) -> None:
        if line.line_id not in self._lines:
            raise KeyError(f"Line {line.line_id} is not in this store")
        line.color = color
        self._notify()

    def remove(self, line: Line) -> None:
        if self._lines.pop(line.line_id, None) is not None:
            self._notify()

    @contextmanager
    def batch(self):
        """Coalesce the `changed` notifications of several mutations into one."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._batch_dirty:
                self._batch_dirty = False
                self.changed.emit()

    def _notify(self) -> None:
        if self._batch_depth:
            self._batch_dirty = True
            return
        self.changed.emit()
