from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = Path(__file__).resolve().parent.parent / "debug.log"


class DebugLog:
    """
    Append-only debug log file. Each line is "[HH:MM:SS] message".

    A disabled log writes nothing. Write failures are ignored so a
    read-only checkout never breaks the frame loop.
    """

    def __init__(self, path: Path | str | None = None, enabled: bool = True) -> None:
        self.path = Path(path) if path is not None else DEFAULT_LOG_PATH
        self.enabled = enabled

    def reset(self) -> None:
        """Clear the log file (called once per run)."""
        if not self.enabled:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("", encoding="utf-8")
        except OSError:
            pass

    def __call__(self, msg: str) -> None:
        if not self.enabled:
            return
        try:
            with self.path.open("a", encoding="utf-8") as f:
                ts = time.strftime("%H:%M:%S")
                f.write(f"[{ts}] {msg}\n")
        except OSError:
            pass


def null_log() -> DebugLog:
    return DebugLog(enabled=False)


def from_config(cfg) -> DebugLog:
    path: Optional[str] = getattr(cfg, "debug_log_path", None)
    return DebugLog(path, enabled=bool(getattr(cfg, "debug", False)))
