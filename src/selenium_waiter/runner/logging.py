"""Structured per-wait logging."""

from __future__ import annotations

import json
import pathlib
import sys
import time
from typing import Any

from selenium_waiter.waits.polling import WaitResult


class StepLogger:
    """Append-only JSON-lines log of every wait a Waiter runs."""

    def __init__(self, path: str | pathlib.Path | None = None, echo: bool = False):
        self._log_path = pathlib.Path(path) if path else None
        self.echo = echo
        self._fh = None
        self.step_count = 0

    @property
    def path(self) -> pathlib.Path | None:
        return self._log_path

    def open(self) -> None:
        if self._log_path is None:
            return
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = open(self._log_path, "a", encoding="utf-8")

    def close(self) -> None:
        if self._fh:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> StepLogger:
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def log_wait(
        self,
        operation: str,
        target: str,
        timeout: float,
        result: WaitResult | None = None,
        error: str | None = None,
        attempts: int | None = None,
    ) -> dict[str, Any]:
        self.step_count += 1
        entry = {
            "step": self.step_count,
            "timestamp": time.time(),
            "operation": operation,
            "target": target,
            "timeout": timeout,
            "attempts": result.attempts if result else attempts,
            "elapsed_s": round(result.elapsed_s, 3) if result else None,
            "outcome": result.outcome.value if result else "timeout",
            "error": error,
        }
        line = json.dumps(entry, ensure_ascii=False, default=str)
        if self._fh:
            self._fh.write(line + "\n")
            self._fh.flush()
        if self.echo:
            print(line, file=sys.stderr)
        return entry

    def read_last_n(self, n: int = 20) -> list[dict[str, Any]]:
        if self._log_path is None or not self._log_path.exists():
            return []
        lines = self._log_path.read_text(encoding="utf-8").strip().splitlines()
        return [json.loads(l) for l in lines[-n:]]
