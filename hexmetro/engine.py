from __future__ import annotations

"""
Engine entry point: owns pygame, the renderer and the scene stack.
"""

import pygame

from hexmetro import config, debuglog
from hexmetro.render.hexview import HexRenderer
from hexmetro.rng import new_rng
from hexmetro.scenes import NetworkScene, SceneManager


class Engine:
    def __init__(self, cfg: config.GameConfig) -> None:
        pygame.init()
        self.cfg = cfg
        self.log = debuglog.from_config(cfg)
        self.log.reset()
        self.rng = new_rng(cfg.seed)
        self.renderer = HexRenderer(cfg.view_width, cfg.view_height)
        self.manager = SceneManager(cfg, self.renderer, log=self.log)
        self.manager.set_scene(
            NetworkScene(cfg, self.rng, log=self.log, top_bar_height=self.renderer.top_bar_height)
        )

    def run(self) -> None:
        try:
            self.manager.run()
        finally:
            self.renderer.teardown()
