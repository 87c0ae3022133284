# manager.py
from __future__ import annotations

from typing import List, Optional
import pygame

from hexmetro import config
from hexmetro.debuglog import DebugLog, null_log
from hexmetro.render.hexview import HexRenderer
from hexmetro.ui.status_header import StatusHeaderWidget
from hexmetro.ui.widgets import WidgetContext

from .base import Scene


class SceneManager:
    def __init__(
        self,
        cfg: config.GameConfig,
        renderer: HexRenderer,
        log: Optional[DebugLog] = None,
    ) -> None:
        self.cfg = cfg
        self.renderer = renderer
        self.log = log or null_log()

        self.scene_stack: List[Scene] = []

        self.widget_layers = {
            "hud": [StatusHeaderWidget()],
        }

    def draw_widget_layer(self, layer: str, *, surface, editor, scene=None) -> None:
        widgets = self.widget_layers.get(layer)
        if not widgets or editor is None:
            return
        ctx = WidgetContext(surface=surface, editor=editor, scene=scene, renderer=self.renderer)
        for w in widgets:
            w.layout(ctx)
            w.draw(ctx)

    # ------------------------------------------------------------------ #
    # Stack operations

    def set_scene(self, scene: Optional[Scene]) -> None:
        if scene is None:
            self.scene_stack.clear()
        else:
            self.scene_stack = [scene]
            scene.on_enter(self)

    # ------------------------------------------------------------------ #

    def run(self) -> None:
        while self.scene_stack:
            self._run_live_scene(self.scene_stack[-1])
        self.log("scene stack empty, leaving loop")

    def _run_live_scene(self, scene: Scene) -> None:
        renderer = self.renderer
        clock = pygame.time.Clock()

        # Drive events/update/render until the scene stack changes or the
        # app is quit.
        while self.scene_stack and self.scene_stack[-1] is scene:
            dt = clock.tick(60)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.set_scene(None)
                    return

                if event.type == pygame.VIDEORESIZE:
                    renderer.handle_resize(event.w, event.h)
                    continue

                # Global fullscreen toggle
                if event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                    renderer.toggle_fullscreen()
                    continue

                scene.handle_event(event, self)
                if not self.scene_stack or self.scene_stack[-1] is not scene:
                    return

            scene.update(dt, self)
            scene.render(renderer, self)

            if renderer.quit_requested:
                renderer.quit_requested = False
                self.set_scene(None)
                return
