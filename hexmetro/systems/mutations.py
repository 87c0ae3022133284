"""
Line topology mutations: commit a drawing session, delete a point (trim or
split), recolor by hit-test, and the connection recount.

Every function here goes through LineStore, so each mutation publishes
`changed` and observers recount from scratch.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from hexmetro.hexmath import AxialCoord, HexLayout, point_segment_distance
from hexmetro.state.grid import GridModel
from hexmetro.state.lines import Color, Line, LineEnd, LineStore
from hexmetro.systems.drawing import PathDrawingSession


@dataclass
class MutationResult:
    """What a mutation did; `kind` is one of none|created|extended|deleted|trimmed|split|recolored."""
    kind: str = "none"
    line: Optional[Line] = None
    new_lines: List[Line] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.kind != "none"


def extended_points(
    line_points: Sequence[AxialCoord],
    path: Sequence[AxialCoord],
    end: LineEnd,
) -> List[AxialCoord]:
    """
    Merge a drawn path into an existing line. path[0] duplicates the line's
    endpoint and is dropped; growth from the start is reversed and prepended.
    Growth stops at the first cell that already belongs to the line.
    """
    existing = set(line_points)
    tail: List[AxialCoord] = []
    for c in path[1:]:
        if c in existing or c in tail:
            break
        tail.append(c)
    if end == LineEnd.END:
        return list(line_points) + tail
    return list(reversed(tail)) + list(line_points)


def split_points(
    points: Sequence[AxialCoord],
    index: int,
) -> Tuple[List[AxialCoord], List[AxialCoord]]:
    """Split at index; both halves keep points[index]."""
    return list(points[: index + 1]), list(points[index:])


def finalize(
    store: LineStore,
    session: PathDrawingSession,
    color: Color,
    width: Optional[int] = None,
) -> MutationResult:
    path = session.committed_path()
    if len(path) < 2:
        return MutationResult()

    line = session.extend_line
    if line is None:
        return MutationResult("created", store.commit_new(path, color, width))

    if line not in store:
        # The target vanished under the session; keep the drawing as its own line.
        return MutationResult("created", store.commit_new(path, color, width))

    merged = extended_points(line.points, path, session.extend_end or LineEnd.END)
    if len(merged) < 2:
        store.remove(line)
        return MutationResult("deleted", line)
    if merged == line.points:
        return MutationResult()
    store.update_points(line, merged)
    return MutationResult("extended", line)


def _shrink(store: LineStore, line: Line, remaining: List[AxialCoord]) -> MutationResult:
    if len(remaining) < 2:
        store.remove(line)
        return MutationResult("deleted", line)
    store.update_points(line, remaining)
    return MutationResult("trimmed", line)


def delete_point(store: LineStore, coord: AxialCoord) -> MutationResult:
    """
    Remove coord from the first line that passes through it.

    Endpoints trim the line; interior points split it in two, both halves
    keeping the clicked cell. Anything left with fewer than two points is
    deleted rather than stored.
    """
    touching = store.lines_touching(coord)
    if not touching:
        return MutationResult()
    line = touching[0][0]
    points = list(line.points)
    index = points.index(coord)
    last = len(points) - 1

    if len(points) == 2:
        store.remove(line)
        return MutationResult("deleted", line)
    if index == 0:
        return _shrink(store, line, points[1:])
    if index == last:
        return _shrink(store, line, points[:-1])

    part_a, part_b = split_points(points, index)
    with store.batch():
        if len(part_a) >= 2:
            store.update_points(line, part_a)
            result = MutationResult("split", line)
        else:
            store.remove(line)
            result = MutationResult("deleted", line)
        if len(part_b) >= 2:
            result.new_lines.append(store.commit_new(part_b, line.color, line.width))
    return result


def line_body_hit(
    store: LineStore,
    layout: HexLayout,
    px: float,
    py: float,
    epsilon: float,
) -> Optional[Line]:
    """
    Nearest line whose drawn body lies within width/2 + epsilon of (px, py),
    measured to the closest point on any of its segments.
    """
    best: Optional[Line] = None
    best_d = float("inf")
    for line in store.all_lines():
        pixels = [layout.to_pixel(c) for c in line.points]
        thresh = line.width / 2.0 + epsilon
        for a, b in zip(pixels, pixels[1:]):
            d = point_segment_distance((px, py), a, b)
            if d <= thresh and d < best_d:
                best, best_d = line, d
    return best


def recolor_at(
    store: LineStore,
    layout: HexLayout,
    px: float,
    py: float,
    color: Color,
    epsilon: float,
) -> MutationResult:
    line = line_body_hit(store, layout, px, py, epsilon)
    if line is None:
        return MutationResult()
    if line.color != color:
        store.recolor(line, color)
    return MutationResult("recolored", line)


def count_connections(store: LineStore, grid: GridModel) -> int:
    """Lines whose first and last waypoint are both stations; parallels count separately."""
    total = 0
    for line in store.all_lines():
        if len(line.points) < 2:
            continue
        if grid.station_at(line.first) is not None and grid.station_at(line.last) is not None:
            total += 1
    return total
