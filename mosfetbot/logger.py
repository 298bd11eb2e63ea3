"""A file logger that stamps each line with time, step and player."""

from __future__ import annotations

import functools
import time
from typing import TextIO


class Logger:
    """Appends log lines to a file once logging has been enabled."""

    def __init__(self) -> None:
        self.step_id = "init"
        self.player_name = "Unknown"
        self._file: TextIO | None = None

    def set_player_name(self, name: str) -> None:
        self.player_name = name

    def set_step_id(self, step_id: str) -> None:
        self.step_id = step_id

    def enable_logging(self, filename: str) -> None:
        """Open ``filename`` for appending unless a log file is already open."""
        if self._file is None:
            self._file = open(filename, "a", encoding="utf-8")

    def is_debug_enabled(self) -> bool:
        return self._file is not None

    def log(self, message: str) -> None:
        """Write one line; does nothing while logging is disabled."""
        if self._file is None:
            return
        now = time.time()
        stamp = time.strftime("%M:%S", time.localtime(now))
        millis = int(now * 1000) % 1000
        self._file.write(
            f"{stamp}.{millis:03d} : {self.step_id} : {self.player_name} - {message}\n"
        )
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@functools.lru_cache(maxsize=None)
def get_logger() -> Logger:
    """Return the process-wide logger."""
    return Logger()