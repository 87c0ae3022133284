"""
Pointy-top hex grid math in axial coordinates.

Axial (q, r) with the implicit cube component s = -q - r. Pixel space has
+x to the right and +y downward; (0, 0) maps to the layout origin.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

Vec2 = Tuple[float, float]

SQRT3 = math.sqrt(3)


@dataclass(frozen=True)
class AxialCoord:
    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    def __add__(self, other: "AxialCoord") -> "AxialCoord":
        return AxialCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: "AxialCoord") -> "AxialCoord":
        return AxialCoord(self.q - other.q, self.r - other.r)

    def __iter__(self):
        yield self.q
        yield self.r

    def __repr__(self) -> str:
        return f"AxialCoord({self.q}, {self.r})"


# Neighbour offsets, clockwise from east.
HEX_DIRECTIONS: List[AxialCoord] = [
    AxialCoord(1, 0), AxialCoord(0, 1), AxialCoord(-1, 1),
    AxialCoord(-1, 0), AxialCoord(0, -1), AxialCoord(1, -1),
]


def axial_to_pixel(q: float, r: float, size: float) -> Vec2:
    x = size * (SQRT3 * q + (SQRT3 / 2.0) * r)
    y = size * (1.5 * r)
    return (x, y)


def cube_round(q: float, r: float) -> AxialCoord:
    """Round fractional axial coordinates to the nearest hex center."""
    s = -q - r

    rq, rr, rs = round(q), round(r), round(s)

    dq = abs(rq - q)
    dr = abs(rr - r)
    ds = abs(rs - s)

    if dq > dr and dq > ds:
        rq = -rr - rs
    elif dr > ds:
        rr = -rq - rs

    return AxialCoord(int(rq), int(rr))


def pixel_to_axial(x: float, y: float, size: float) -> AxialCoord:
    r = (2.0 / 3.0 * y) / size
    q = (SQRT3 / 3.0 * x - 1.0 / 3.0 * y) / size
    return cube_round(q, r)


def hex_distance(a: AxialCoord, b: AxialCoord) -> int:
    dq = a.q - b.q
    dr = a.r - b.r
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def hex_neighbors(c: AxialCoord) -> List[AxialCoord]:
    return [c + d for d in HEX_DIRECTIONS]


def hex_corners(center: Vec2, size: float) -> List[Vec2]:
    """Return pixel coords for the corners of a pointy-top hex at center."""
    cx, cy = center
    corners = []
    for i in range(6):
        angle = math.radians(30 + 60 * i)
        corners.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return corners


def point_segment_distance(p: Vec2, a: Vec2, b: Vec2) -> float:
    px, py = p
    x1, y1 = a
    x2, y2 = b
    dx, dy = x2 - x1, y2 - y1
    if dx == dy == 0:
        return math.hypot(px - x1, py - y1)
    t = ((px - x1) * dx + (py - y1) * dy) / float(dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))
    proj_x = x1 + t * dx
    proj_y = y1 + t * dy
    return math.hypot(px - proj_x, py - proj_y)


@dataclass(frozen=True)
class HexLayout:
    """Hex size plus the pixel position of axial (0, 0) in the drawing layer."""
    size: float
    origin: Vec2 = (0.0, 0.0)

    def to_pixel(self, coord: AxialCoord) -> Vec2:
        x, y = axial_to_pixel(coord.q, coord.r, self.size)
        return (x + self.origin[0], y + self.origin[1])

    def to_axial(self, x: float, y: float) -> AxialCoord:
        return pixel_to_axial(x - self.origin[0], y - self.origin[1], self.size)

    def corners(self, coord: AxialCoord) -> List[Vec2]:
        return hex_corners(self.to_pixel(coord), self.size)
