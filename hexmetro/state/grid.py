from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from hexmetro.hexmath import AxialCoord, HexLayout, hex_distance


class StationKind(enum.Enum):
    NORMAL = "normal"
    START = "start"
    END = "end"


class Orientation(enum.Enum):
    """Facing of a station sprite: one of the six hex directions, or none."""
    EAST = 0
    SOUTH_EAST = 1
    SOUTH_WEST = 2
    WEST = 3
    NORTH_WEST = 4
    NORTH_EAST = 5
    CENTER = 6


@dataclass(frozen=True)
class Station:
    coord: AxialCoord
    kind: StationKind = StationKind.NORMAL
    orientation: Orientation = Orientation.CENTER


# ---------------------------------------------------------------------------
# Bounds policies
# ---------------------------------------------------------------------------


class RadiusBounds:
    """Every cell within hex distance `radius` of the origin."""

    def __init__(self, radius: int) -> None:
        self.radius = max(0, int(radius))

    def contains(self, coord: AxialCoord) -> bool:
        return hex_distance(coord, AxialCoord(0, 0)) <= self.radius

    def cells(self) -> List[AxialCoord]:
        n = self.radius
        out = []
        for q in range(-n, n + 1):
            for r in range(max(-n, -q - n), min(n, -q + n) + 1):
                out.append(AxialCoord(q, r))
        return out


class RectBounds:
    """Axial rectangle: q_min..q_max x r_min..r_max, inclusive."""

    def __init__(self, q_min: int, q_max: int, r_min: int, r_max: int) -> None:
        self.q_min, self.q_max = min(q_min, q_max), max(q_min, q_max)
        self.r_min, self.r_max = min(r_min, r_max), max(r_min, r_max)

    def contains(self, coord: AxialCoord) -> bool:
        return self.q_min <= coord.q <= self.q_max and self.r_min <= coord.r <= self.r_max

    def cells(self) -> List[AxialCoord]:
        return [
            AxialCoord(q, r)
            for q in range(self.q_min, self.q_max + 1)
            for r in range(self.r_min, self.r_max + 1)
        ]


class ScreenMarginBounds:
    """
    Cells whose projected pixel centre lies at least `margin` px inside a
    width x height drawing layer.
    """

    def __init__(self, width: float, height: float, margin: float, layout: HexLayout) -> None:
        self.width = width
        self.height = height
        self.margin = margin
        self.layout = layout

    def contains(self, coord: AxialCoord) -> bool:
        x, y = self.layout.to_pixel(coord)
        m = self.margin
        return m <= x <= self.width - m and m <= y <= self.height - m

    def cells(self) -> List[AxialCoord]:
        # Candidate range from the layer corners, then filter exactly.
        corners = [(0, 0), (self.width, 0), (0, self.height), (self.width, self.height)]
        axial = [self.layout.to_axial(x, y) for x, y in corners]
        q_lo = min(c.q for c in axial) - 1
        q_hi = max(c.q for c in axial) + 1
        r_lo = min(c.r for c in axial) - 1
        r_hi = max(c.r for c in axial) + 1
        return [
            AxialCoord(q, r)
            for q in range(q_lo, q_hi + 1)
            for r in range(r_lo, r_hi + 1)
            if self.contains(AxialCoord(q, r))
        ]


def make_bounds(cfg, layout: HexLayout):
    kind = cfg.bounds_kind
    if kind == "radius":
        return RadiusBounds(cfg.grid_radius)
    if kind == "rect":
        return RectBounds(cfg.rect_q_min, cfg.rect_q_max, cfg.rect_r_min, cfg.rect_r_max)
    if kind == "screen":
        return ScreenMarginBounds(cfg.view_width, cfg.view_height, cfg.screen_margin, layout)
    raise ValueError(f"Unknown bounds kind: {kind!r}")


# ---------------------------------------------------------------------------
# GridModel
# ---------------------------------------------------------------------------


class GridModel:
    """Stations keyed by axial coordinate, inside a bounds policy."""

    def __init__(
        self,
        bounds,
        rng,
        placement_attempts: int = 500,
        log: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.bounds = bounds
        self.rng = rng
        self.placement_attempts = placement_attempts
        self._log = log or (lambda msg: None)
        self._stations: Dict[AxialCoord, Station] = {}
        self._cells: Optional[List[AxialCoord]] = None

    # -- queries ------------------------------------------------------------

    def is_within_bounds(self, coord: AxialCoord) -> bool:
        return self.bounds.contains(coord)

    def is_empty(self, coord: AxialCoord) -> bool:
        return coord not in self._stations

    def station_at(self, coord: AxialCoord) -> Optional[Station]:
        return self._stations.get(coord)

    def stations(self) -> List[Station]:
        return list(self._stations.values())

    def _station_of_kind(self, kind: StationKind) -> Optional[Station]:
        for st in self._stations.values():
            if st.kind == kind:
                return st
        return None

    def start_station(self) -> Optional[Station]:
        return self._station_of_kind(StationKind.START)

    def end_station(self) -> Optional[Station]:
        return self._station_of_kind(StationKind.END)

    def cells(self) -> List[AxialCoord]:
        if self._cells is None:
            self._cells = self.bounds.cells()
        return list(self._cells)

    # -- mutation -----------------------------------------------------------

    def place_station(
        self,
        kind: StationKind,
        orientation: Orientation,
        coord: AxialCoord,
    ) -> Optional[Station]:
        if not self.is_within_bounds(coord):
            self._log(f"place_station {kind.value} at {coord}: out of bounds")
            return None
        if not self.is_empty(coord):
            self._log(f"place_station {kind.value} at {coord}: occupied")
            return None
        if kind != StationKind.NORMAL and self._station_of_kind(kind) is not None:
            self._log(f"place_station {kind.value} at {coord}: {kind.value} already placed")
            return None
        station = Station(coord=coord, kind=kind, orientation=orientation)
        self._stations[coord] = station
        return station

    def random_empty_coord(self, min_separation: int = 0) -> Optional[AxialCoord]:
        """
        Sample random in-bounds cells until one is empty and at least
        min_separation (hex distance) from every station. Returns None once
        the attempt budget is spent; callers decide whether to relax and retry.
        """
        cells = self.cells()
        if not cells:
            return None
        for _ in range(self.placement_attempts):
            c = self.rng.choice(cells)
            if not self.is_empty(c):
                continue
            if min_separation > 0 and any(
                hex_distance(c, other) < min_separation for other in self._stations
            ):
                continue
            return c
        self._log(
            f"random_empty_coord: no cell after {self.placement_attempts} tries "
            f"(min_separation={min_separation})"
        )
        return None
