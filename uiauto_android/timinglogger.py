# uiauto_android/timinglogger.py
"""
@file timinglogger.py
@brief Opt-in timing logger for polling observability.
"""

from __future__ import annotations

import os
import sys
import threading
import time
from typing import Any, Dict, Optional

_LEVELS = {"DEBUG": 10, "INFO": 20, "ERROR": 40}
_STATUS_LEVELS = {"debug": 10, "info": 20, "success": 20, "error": 40}


class TimingLogger:
    """Thread-safe timing logger writing key=value lines to stderr and/or a file."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._console = True
        self._file_path: Optional[str] = None
        self._level = "INFO"

    def configure(
        self,
        *,
        console: bool = True,
        file_path: Optional[str] = None,
        level: str = "INFO",
    ) -> None:
        """Configure logger settings."""
        level = (level or "INFO").upper()
        if level not in _LEVELS:
            raise ValueError(f"Unknown timing log level: {level}")
        with self._lock:
            self._console = bool(console)
            self._file_path = file_path
            self._level = level

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def format_line(
        self,
        event: str,
        description: Optional[str],
        status: str,
        metadata: Dict[str, Any],
    ) -> str:
        parts = [
            f"[{status.lower()}]",
            "[timing]",
            f"time={time.strftime('%H:%M:%S')}",
            f"event={event}",
        ]
        if description:
            parts.append(f"description={description}")
        for key, value in metadata.items():
            parts.append(f"{key}={value}")
        return " ".join(parts)

    def log(
        self,
        *,
        event: str,
        description: Optional[str] = None,
        status: str = "info",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Emit a timing event if enabled and at or above the configured level."""
        if not self._enabled:
            return
        if _STATUS_LEVELS.get(status.lower(), 20) < _LEVELS[self._level]:
            return

        line = self.format_line(event, description, status, metadata or {})

        with self._lock:
            if self._console:
                print(line, file=sys.stderr, flush=True)
            if self._file_path:
                self._write_file(line)

    def _write_file(self, line: str) -> None:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self._file_path)) or ".", exist_ok=True)
            with open(self._file_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError:
            pass


TIMING_LOGGER = TimingLogger()
