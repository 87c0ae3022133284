from __future__ import annotations


# ---------------------------------------------------------------------------
# Base Scene
# ---------------------------------------------------------------------------


class Scene:
    """
    Abstract base for all scenes.

    The SceneManager drives the top scene through handle_event / update /
    render once per frame until the scene stack changes.
    """

    def on_enter(self, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        """Called once when the scene becomes the top of the stack."""
        return None

    def handle_event(self, event, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        """Process a single pygame event."""
        return None

    def update(self, dt_ms: int, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        """Advance scene state by dt_ms."""
        return None

    def render(self, renderer, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        """Draw the scene."""
        return None
