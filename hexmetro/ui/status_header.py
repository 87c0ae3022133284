# hexmetro/ui/status_header.py

from __future__ import annotations

import pygame

from hexmetro.ui.widgets import Widget, WidgetContext


class StatusHeaderWidget(Widget):
    """Top bar HUD: connection count, line count, and the colour palette.

    The selected palette swatch is outlined; its number key selects it.
    """

    swatch = 22

    def layout(self, ctx: WidgetContext) -> None:
        if self.rect.w == 0 and self.rect.h == 0:
            w = getattr(ctx.renderer, "width", ctx.surface.get_width())
            h = getattr(ctx.renderer, "top_bar_height", 56)
            self.rect = pygame.Rect(0, 0, w, h)
        super().layout(ctx)

    def draw(self, ctx: WidgetContext) -> None:
        if not self.visible:
            return

        editor = ctx.editor
        renderer = ctx.renderer
        if editor is None or renderer is None:
            return
        small_font = getattr(renderer, "small_font", None)
        if small_font is None:
            return

        fg = getattr(renderer, "fg", (220, 230, 240))
        dim = getattr(renderer, "dim", (120, 130, 150))

        x = self.rect.x + 12
        y = self.rect.y + 10

        conn_text = small_font.render(f"Connections {editor.connections}", True, fg)
        ctx.surface.blit(conn_text, (x, y))
        lines_text = small_font.render(f"Lines {len(editor.store)}", True, dim)
        ctx.surface.blit(lines_text, (x, y + conn_text.get_height() + 4))

        # --- palette, right-aligned ---
        n = len(editor.palette)
        gap = 8
        total_w = n * self.swatch + (n - 1) * gap
        sx = self.rect.right - total_w - 12
        sy = self.rect.y + (self.rect.height - self.swatch) // 2
        for i, col in enumerate(editor.palette):
            r = pygame.Rect(sx + i * (self.swatch + gap), sy, self.swatch, self.swatch)
            pygame.draw.rect(ctx.surface, col.rgb, r, border_radius=4)
            if i == editor.selected_index:
                pygame.draw.rect(ctx.surface, fg, r.inflate(6, 6), 2, border_radius=6)
            if i < 9:
                key = small_font.render(str(i + 1), True, dim)
                ctx.surface.blit(key, (r.centerx - key.get_width() // 2, r.bottom + 2))

        if editor.is_drawing:
            hint = small_font.render("drawing: right-click to cancel", True, dim)
            ctx.surface.blit(hint, (self.rect.centerx - hint.get_width() // 2, y))

        super().draw(ctx)
