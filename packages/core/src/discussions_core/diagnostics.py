"""Rotating on-disk diagnostic log.

One JSON file per reported error, named so that lexical order equals
creation order:

    error-<epoch milliseconds, 15 digits>-<sequence, 4 digits>.json

Only the newest ``keep`` files survive a write. Writing diagnostics must
never mask the error being reported, so every failure in here is logged at
DEBUG and swallowed.
"""

from __future__ import annotations

import itertools
import json
import logging
import os
import platform
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from discussions_core.errors import AppError

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".github-discussions" / "logs"
DEFAULT_KEEP = 10
_PREFIX = "error-"


class DiagnosticLog:
    def __init__(self, log_dir: str | Path = DEFAULT_LOG_DIR, keep: int = DEFAULT_KEEP):
        self.log_dir = Path(log_dir).expanduser()
        self.keep = keep
        self._seq = itertools.count()
        self._last_ms = 0

    def write(self, error: AppError) -> Path | None:
        """Persist ``error`` and prune old records. Returns the new file, or None on failure."""
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            path = self.log_dir / self._next_filename()
            record = {**error.to_dict(), "environment": _environment()}
            path.write_text(json.dumps(record, indent=2, default=str), encoding="utf-8")
            self._prune()
            return path
        except (OSError, TypeError, ValueError) as e:
            logger.debug("Could not write diagnostic log to %s: %s", self.log_dir, e)
            return None

    def records(self) -> list[Path]:
        """Return existing records, oldest first."""
        if not self.log_dir.is_dir():
            return []
        return sorted(p for p in self.log_dir.iterdir() if p.name.startswith(_PREFIX) and p.suffix == ".json")

    def _next_filename(self) -> str:
        # Never reuse or go back on a timestamp, even if the clock does.
        now_ms = max(int(time.time() * 1000), self._last_ms)
        self._last_ms = now_ms
        return f"{_PREFIX}{now_ms:015d}-{next(self._seq) % 10000:04d}.json"

    def _prune(self) -> None:
        records = self.records()
        for old in records[: max(len(records) - self.keep, 0)]:
            old.unlink()


def _environment() -> dict:
    return {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "cwd": os.getcwd(),
    }
