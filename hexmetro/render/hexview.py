"""Pygame renderer for the hex network: cells, lines, stations, drawing preview."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import pygame

from hexmetro.hexmath import AxialCoord, HexLayout, Vec2
from hexmetro.state.grid import Orientation, Station, StationKind
from hexmetro.state.lines import LineSnapshot

Color = Tuple[int, int, int]

# Orientation -> unit-ish pixel offset for the station's facing tick.
_FACING_VEC = {
    Orientation.EAST: (1.0, 0.0),
    Orientation.SOUTH_EAST: (0.5, 0.866),
    Orientation.SOUTH_WEST: (-0.5, 0.866),
    Orientation.WEST: (-1.0, 0.0),
    Orientation.NORTH_WEST: (-0.5, -0.866),
    Orientation.NORTH_EAST: (0.5, -0.866),
}


class HexRenderer:
    def __init__(self, width: int, height: int, caption: str = "hexmetro") -> None:
        pygame.init()
        self.width = width
        self.height = height
        self.surface_flags = pygame.RESIZABLE
        # render surface at native resolution; display may be larger in fullscreen
        self.surface = pygame.Surface((width, height))
        self.fullscreen = False
        self.display = pygame.display.set_mode((width, height), self.surface_flags)
        self.lb_off = (0, 0)  # letterbox offset when centering
        self.lb_scale = 1.0   # letterbox scale factor
        pygame.display.set_caption(caption)
        self.font = pygame.font.SysFont("consolas", 20)
        self.small_font = pygame.font.SysFont("consolas", 16)
        self.bg = (14, 16, 24)
        self.fg = (220, 230, 240)
        self.dim = (120, 130, 150)
        self.cell_color = (34, 40, 56)
        self.hover_color = (70, 90, 120)
        self.station_fill = (235, 235, 240)
        self.station_outline = (20, 20, 28)
        self.start_color = (120, 220, 140)
        self.end_color = (240, 120, 120)
        self.top_bar_height = 56
        self.quit_requested = False

    # ------------------------------------------------------------------ #
    # Display plumbing

    def _to_surface(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        """Convert display-space mouse coords to surface-space, accounting for letterbox and scale."""
        return (
            int((pos[0] - self.lb_off[0]) / max(1e-6, self.lb_scale)),
            int((pos[1] - self.lb_off[1]) / max(1e-6, self.lb_scale)),
        )

    def toggle_fullscreen(self) -> None:
        flags = self.display.get_flags()
        if flags & pygame.FULLSCREEN:
            self.display = pygame.display.set_mode((self.width, self.height), self.surface_flags)
            self.fullscreen = False
        else:
            self.display = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            self.fullscreen = True

    def handle_resize(self, w: int, h: int) -> None:
        if not self.fullscreen:
            self.display = pygame.display.set_mode((w, h), self.surface_flags)

    def clear(self) -> None:
        self.surface.fill(self.bg)

    def present(self) -> None:
        """Blit render surface to display with letterboxing (no stretch, aspect preserved)."""
        dw, dh = self.display.get_size()
        sw, sh = self.surface.get_size()
        scale = min(dw / sw, dh / sh)
        new_w = int(sw * scale)
        new_h = int(sh * scale)
        ox = max(0, (dw - new_w) // 2)
        oy = max(0, (dh - new_h) // 2)

        # Keep letterbox info for mouse unprojection.
        self.lb_off = (ox, oy)
        self.lb_scale = scale

        self.display.fill((0, 0, 0))
        if scale != 1.0:
            panel = pygame.transform.smoothscale(self.surface, (new_w, new_h))
        else:
            panel = self.surface
        self.display.blit(panel, (ox, oy))
        pygame.display.flip()

    def teardown(self) -> None:
        pygame.quit()

    # ------------------------------------------------------------------ #
    # Drawing

    def draw_cells(
        self,
        layout: HexLayout,
        cells: Iterable[AxialCoord],
        hover: Optional[AxialCoord] = None,
    ) -> None:
        inset = layout.size * 0.94
        for c in cells:
            cx, cy = layout.to_pixel(c)
            corners = [
                (cx + (x - cx) * inset / layout.size, cy + (y - cy) * inset / layout.size)
                for x, y in layout.corners(c)
            ]
            color = self.hover_color if c == hover else self.cell_color
            pygame.draw.polygon(self.surface, color, corners, 0 if c == hover else 1)

    def draw_polyline(self, points: Sequence[Vec2], color: Color, width: int) -> None:
        if len(points) < 2:
            return
        pts = [(int(x), int(y)) for x, y in points]
        pygame.draw.lines(self.surface, color, False, pts, max(1, width))
        # round the joints
        r = max(1, width // 2)
        for p in pts:
            pygame.draw.circle(self.surface, color, p, r)

    def draw_lines(self, snapshots: Iterable[LineSnapshot]) -> None:
        for snap in snapshots:
            self.draw_polyline(snap.pixels, snap.color, snap.width)

    def draw_preview(self, points: List[Vec2], color: Color, width: int) -> None:
        if len(points) < 2:
            return
        faded = tuple(int(c * 0.6 + 255 * 0.4) for c in color)
        self.draw_polyline(points, faded, max(2, width - 2))  # type: ignore[arg-type]

    def draw_stations(self, layout: HexLayout, stations: Iterable[Station]) -> None:
        radius = max(4, int(layout.size * 0.42))
        for st in stations:
            cx, cy = layout.to_pixel(st.coord)
            center = (int(cx), int(cy))
            outline = self.station_outline
            if st.kind == StationKind.START:
                outline = self.start_color
            elif st.kind == StationKind.END:
                outline = self.end_color
            pygame.draw.circle(self.surface, self.station_fill, center, radius)
            pygame.draw.circle(self.surface, outline, center, radius, 3)
            vec = _FACING_VEC.get(st.orientation)
            if vec is not None:
                tip = (int(cx + vec[0] * radius * 1.5), int(cy + vec[1] * radius * 1.5))
                pygame.draw.line(self.surface, outline, center, tip, 3)
