from __future__ import annotations

from typing import Callable, Optional

from hexmetro.hexmath import AxialCoord, hex_distance
from hexmetro.state.grid import GridModel, Orientation, StationKind

FACINGS = [o for o in Orientation if o != Orientation.CENTER]


def _place_far_from(
    grid: GridModel,
    kind: StationKind,
    rng,
    min_separation: int,
    away_from: Optional[AxialCoord],
    min_distance: int,
) -> bool:
    # random_empty_coord already enforces min_separation; the extra
    # away_from/min_distance check keeps START and END apart.
    for _ in range(grid.placement_attempts):
        c = grid.random_empty_coord(min_separation)
        if c is None:
            return False
        if away_from is not None and hex_distance(c, away_from) < min_distance:
            continue
        return grid.place_station(kind, rng.choice(FACINGS), c) is not None
    return False


def populate_stations(
    grid: GridModel,
    rng,
    cfg,
    log: Optional[Callable[[str], None]] = None,
) -> bool:
    """
    Place START, END and up to cfg.station_count NORMAL stations.

    START/END placement retries once with no separation constraints before
    giving up; returns False if either could not be placed. NORMAL stations
    that find no cell are skipped.
    """
    log = log or (lambda msg: None)

    if grid.start_station() is None:
        if not _place_far_from(grid, StationKind.START, rng, 0, None, 0):
            log("populate: could not place START")
            return False
    start = grid.start_station().coord

    if grid.end_station() is None:
        placed = _place_far_from(
            grid, StationKind.END, rng, cfg.station_min_separation, start, cfg.start_end_min_distance
        )
        if not placed:
            log("populate: END placement exhausted, relaxing distance")
            placed = _place_far_from(grid, StationKind.END, rng, 0, None, 0)
        if not placed:
            log("populate: could not place END")
            return False

    skipped = 0
    for _ in range(cfg.station_count):
        c = grid.random_empty_coord(cfg.station_min_separation)
        if c is None:
            skipped += 1
            continue
        grid.place_station(StationKind.NORMAL, rng.choice(list(Orientation)), c)
    if skipped:
        log(f"populate: skipped {skipped} normal station(s), no room")
    log(f"populate: {len(grid.stations())} stations")
    return True
