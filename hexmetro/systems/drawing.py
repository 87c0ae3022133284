from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set

from hexmetro.hexmath import AxialCoord, HexLayout, Vec2
from hexmetro.state.grid import GridModel
from hexmetro.state.lines import Line, LineEnd, LineStore


@dataclass
class PathDrawingSession:
    """
    In-progress path while the primary pointer button is held.

    path[0] is always the anchor. When `extend_line` is set the path grows
    out of that line's `extend_end`; cells already on the line are blocked so
    the merged line cannot repeat a waypoint.
    """
    anchor: AxialCoord
    extend_line: Optional[Line] = None
    extend_end: Optional[LineEnd] = None
    path: List[AxialCoord] = field(default_factory=list)
    pointer: Optional[Vec2] = None
    blocked: Set[AxialCoord] = field(default_factory=set)

    def __post_init__(self) -> None:
        if not self.path:
            self.path = [self.anchor]
        if self.extend_line is not None:
            self.blocked = set(self.extend_line.points) - {self.anchor}

    @property
    def is_extension(self) -> bool:
        return self.extend_line is not None

    def move_to(
        self,
        coord: AxialCoord,
        allowed: Optional[Callable[[AxialCoord], bool]] = None,
    ) -> bool:
        """
        Apply one hovered cell. Returns True if the path changed.

        Hovering the second-to-last cell pops the last one (backtrack).
        Otherwise a cell that is new to the path is appended; revisits and
        blocked or disallowed cells leave the path unchanged.
        """
        if len(self.path) >= 2 and coord == self.path[-2]:
            self.path.pop()
            return True
        if coord == self.path[-1] or coord in self.path:
            return False
        if coord in self.blocked:
            return False
        if allowed is not None and not allowed(coord):
            return False
        self.path.append(coord)
        return True

    def committed_path(self) -> List[AxialCoord]:
        return list(self.path)

    def preview_points(self, layout: HexLayout) -> List[Vec2]:
        """Pixel path plus a trailing point at the live pointer (never committed)."""
        pts = [layout.to_pixel(c) for c in self.path]
        if self.pointer is not None:
            pts.append(self.pointer)
        return pts


def begin_session(
    grid: GridModel,
    store: LineStore,
    coord: AxialCoord,
    allow_free_start: bool = False,
) -> Optional[PathDrawingSession]:
    """
    Try to open a session at coord. A line endpoint takes precedence (the new
    path extends that line), then a station (a new line). Anything else is not
    a valid anchor and yields None, unless allow_free_start lets an in-bounds
    empty cell start a new line.
    """
    hit = store.endpoint_at(coord)
    if hit is not None:
        line, end = hit
        return PathDrawingSession(anchor=coord, extend_line=line, extend_end=end)
    if grid.station_at(coord) is not None:
        return PathDrawingSession(anchor=coord)
    if allow_free_start and grid.is_within_bounds(coord):
        return PathDrawingSession(anchor=coord)
    return None
