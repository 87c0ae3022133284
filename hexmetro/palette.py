from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import List, Optional, Tuple

import yaml

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class PaletteColor:
    name: str
    rgb: Color


# ROYGBIV (wraps)
DEFAULT_PALETTE: List[PaletteColor] = [
    PaletteColor("red", (255, 0, 0)),
    PaletteColor("orange", (255, 165, 0)),
    PaletteColor("yellow", (255, 255, 0)),
    PaletteColor("green", (0, 128, 0)),
    PaletteColor("blue", (0, 0, 255)),
    PaletteColor("indigo", (75, 0, 130)),
    PaletteColor("violet", (238, 130, 238)),
]


def _palette_path() -> pathlib.Path:
    return pathlib.Path(__file__).resolve().parent / "content" / "palette.yaml"


def load_palette(path: Optional[pathlib.Path | str] = None) -> List[PaletteColor]:
    """
    Load line colours from YAML: a list of {name, rgb: [r, g, b]}. Entries
    without a usable rgb are skipped; a missing or empty file gives the
    built-in ROYGBIV list.
    """
    path = pathlib.Path(path) if path is not None else _palette_path()
    if not path.exists():
        return list(DEFAULT_PALETTE)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []
    out: List[PaletteColor] = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            continue
        rgb = entry.get("rgb")
        if not rgb or len(rgb) != 3:
            continue
        r, g, b = (max(0, min(255, int(v))) for v in rgb)
        out.append(PaletteColor(name=str(entry.get("name", f"color{i + 1}")), rgb=(r, g, b)))
    return out or list(DEFAULT_PALETTE)
