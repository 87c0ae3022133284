from __future__ import annotations

from typing import Tuple

import pygame

from hexmetro import mapgen
from hexmetro.editor import Button, LineEditor, PointerDown, PointerMove, PointerUp
from hexmetro.hexmath import HexLayout
from hexmetro.palette import load_palette
from hexmetro.state.grid import GridModel, make_bounds
from hexmetro.state.lines import LineStore
from hexmetro.ui.widgets import LabelWidget, WidgetContext

from .base import Scene


HELP_TEXT = (
    "Drag from a station or line end to draw | right-click a line cell to cut | "
    "click a line to recolor | 1-9 colour | Esc quit"
)

_PALETTE_KEYS = {
    pygame.K_1: 0, pygame.K_2: 1, pygame.K_3: 2,
    pygame.K_4: 3, pygame.K_5: 4, pygame.K_6: 5,
    pygame.K_7: 6, pygame.K_8: 7, pygame.K_9: 8,
}

_BUTTONS = {1: Button.PRIMARY, 3: Button.SECONDARY}


class NetworkScene(Scene):
    """
    The transit map: a populated hex grid plus the interactive line editor.

    Mouse events are mapped from display space to the drawing layer and fed
    to the LineEditor; rendering pulls line snapshots from the store and only
    rebuilds them after the editor asks for a redraw.
    """

    def __init__(self, cfg, rng, log=None, top_bar_height: int = 56) -> None:
        self.cfg = cfg
        self.log = log or (lambda msg: None)
        origin = (cfg.view_width / 2.0, (cfg.view_height + top_bar_height) / 2.0)
        self.layout = HexLayout(size=cfg.hex_size, origin=origin)

        self.grid = GridModel(
            make_bounds(cfg, self.layout),
            rng,
            placement_attempts=cfg.placement_attempts,
            log=self.log,
        )
        if not mapgen.populate_stations(self.grid, rng, cfg, log=self.log):
            self.log("network scene: grid is missing START or END")
        self.store = LineStore(default_width=cfg.line_width)
        self.editor = LineEditor(
            self.grid,
            self.store,
            self.layout,
            load_palette(),
            line_width=cfg.line_width,
            hit_epsilon=cfg.hit_epsilon,
            allow_free_start=cfg.allow_free_start,
            log=self.log,
        )
        self.editor.redraw.connect(self._invalidate)
        self._snapshots = None
        self.help_label = LabelWidget(HELP_TEXT, padding=8)

    def _invalidate(self) -> None:
        self._snapshots = None

    def _layer_pos(self, manager, pos: Tuple[int, int]) -> Tuple[int, int]:
        return manager.renderer._to_surface(pos)

    # ------------------------------------------------------------------ #

    def handle_event(self, event, manager) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                if self.editor.is_drawing:
                    self.editor.cancel()
                else:
                    manager.set_scene(None)
                return
            idx = _PALETTE_KEYS.get(event.key)
            if idx is not None:
                self.editor.select_color(idx)
            return

        if event.type == pygame.MOUSEBUTTONDOWN:
            button = _BUTTONS.get(event.button)
            if button is not None:
                self.editor.handle(PointerDown(self._layer_pos(manager, event.pos), button))
        elif event.type == pygame.MOUSEBUTTONUP:
            button = _BUTTONS.get(event.button)
            if button is not None:
                self.editor.handle(PointerUp(self._layer_pos(manager, event.pos), button))
        elif event.type == pygame.MOUSEMOTION:
            held = set()
            if event.buttons[0]:
                held.add(Button.PRIMARY)
            if event.buttons[2]:
                held.add(Button.SECONDARY)
            self.editor.handle(PointerMove(self._layer_pos(manager, event.pos), frozenset(held)))

    def render(self, renderer, manager) -> None:
        if self._snapshots is None:
            self._snapshots = self.store.snapshot(self.layout)

        renderer.clear()
        renderer.draw_cells(self.layout, self.grid.cells(), hover=self.editor.hover)
        renderer.draw_lines(self._snapshots)
        renderer.draw_preview(
            self.editor.preview_points(), self.editor.selected_color, self.editor.line_width
        )
        renderer.draw_stations(self.layout, self.grid.stations())

        surface = renderer.surface
        manager.draw_widget_layer("hud", surface=surface, editor=self.editor, scene=self)
        ctx = WidgetContext(surface=surface, editor=self.editor, scene=self, renderer=renderer)
        self.help_label.layout(ctx)
        self.help_label.rect.bottomleft = (0, surface.get_height())
        self.help_label.draw(ctx)

        renderer.present()
