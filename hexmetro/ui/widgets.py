# hexmetro/ui/widgets.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import pygame


@dataclass
class WidgetContext:
    """
    Lightweight context passed into widget methods.

    - surface:  the logical surface the widget should draw into
    - editor:   the LineEditor whose state the HUD reports
    - scene:    the owning Scene (or None if not relevant)
    - renderer: the active HexRenderer
    """
    surface: pygame.Surface
    editor: object
    scene: object | None
    renderer: object


class Widget:
    """
    Minimal base class for UI widgets.

    Keeps a rect in surface coordinates and overridable layout / draw hooks.
    """

    def __init__(self) -> None:
        self.rect: pygame.Rect = pygame.Rect(0, 0, 0, 0)
        self.visible: bool = True

    def layout(self, ctx: WidgetContext) -> None:
        return None

    def draw(self, ctx: WidgetContext) -> None:
        return None


class LabelWidget(Widget):
    def __init__(
        self,
        text: str,
        *,
        color: Optional[tuple[int, int, int]] = None,
        font: Optional[pygame.font.Font] = None,
        padding: int = 0,
    ) -> None:
        super().__init__()
        self.text = text
        self.color = color
        self.font = font
        self.padding = padding

    def _font(self, ctx: WidgetContext) -> pygame.font.Font:
        return self.font or getattr(ctx.renderer, "small_font", getattr(ctx.renderer, "font"))

    def layout(self, ctx: WidgetContext) -> None:
        w, h = self._font(ctx).size(self.text)
        # If rect.x/rect.y were already chosen by a container, we leave them.
        self.rect.width = w + 2 * self.padding
        self.rect.height = h + 2 * self.padding
        super().layout(ctx)

    def draw(self, ctx: WidgetContext) -> None:
        if not self.visible:
            return
        color = self.color or getattr(ctx.renderer, "fg", (255, 255, 255))
        text_surf = self._font(ctx).render(self.text, True, color)
        ctx.surface.blit(text_surf, (self.rect.x + self.padding, self.rect.y + self.padding))
        super().draw(ctx)
