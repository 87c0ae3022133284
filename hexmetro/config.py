from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


default_seed = 12345

BOUNDS_KINDS = ("radius", "rect", "screen")


class ConfigError(ValueError):
    """Raised when a config overlay file cannot be read or does not fit GameConfig."""


@dataclass
class GameConfig:
    view_width: int = 1280
    view_height: int = 900
    hex_size: float = 28.0          # centre-to-corner, pixels
    seed: Optional[int] = default_seed

    # grid bounds: "radius" | "rect" | "screen"
    bounds_kind: str = "radius"
    grid_radius: int = 8
    rect_q_min: int = -10
    rect_q_max: int = 10
    rect_r_min: int = -7
    rect_r_max: int = 7
    screen_margin: float = 40.0     # px kept clear at the layer edge ("screen" bounds)

    # station population
    placement_attempts: int = 500
    station_count: int = 8
    station_min_separation: int = 2
    start_end_min_distance: int = 5

    # lines
    line_width: int = 8
    hit_epsilon: float = 4.0        # extra px around a line body for recolor clicks
    allow_free_start: bool = False  # pointer-down on an empty cell starts a line

    # debug
    debug: bool = True
    debug_log_path: Optional[str] = None


def _coerce(name: str, current: Any, value: Any) -> Any:
    if current is None or value is None:
        return value
    if isinstance(current, bool):
        if not isinstance(value, bool):
            raise ConfigError(f"{name}: expected true/false, got {value!r}")
        return value
    if isinstance(current, (int, float)) and not isinstance(value, (int, float)):
        raise ConfigError(f"{name}: expected a number, got {value!r}")
    if isinstance(current, float):
        return float(value)
    return value


def apply_overrides(cfg: GameConfig, data: Dict[str, Any]) -> GameConfig:
    """Overlay a plain mapping onto cfg in place and return it."""
    known = {f.name for f in fields(cfg)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    for key, value in data.items():
        setattr(cfg, key, _coerce(key, getattr(cfg, key), value))
    if cfg.bounds_kind not in BOUNDS_KINDS:
        raise ConfigError(
            f"bounds_kind must be one of {', '.join(BOUNDS_KINDS)} (got {cfg.bounds_kind!r})"
        )
    return cfg


def load_config(path: Path | str | None = None) -> GameConfig:
    """
    Build a GameConfig from defaults, overlaid with a YAML mapping if a path
    is given. A missing path argument just returns the defaults.
    """
    cfg = GameConfig()
    if path is None:
        return cfg
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
    return apply_overrides(cfg, data)
