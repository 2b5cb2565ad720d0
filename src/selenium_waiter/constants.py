"""Global constants."""

from __future__ import annotations

import pathlib


def _find_project_root() -> pathlib.Path:
    """Find the project root (directory containing waiter.json or .git).

    Search order:
      1. Walk up from cwd
      2. Walk up from the package source directory (editable install)
    Fallback: cwd
    """
    markers = ("waiter.json", "waiter.yaml", ".git")

    def _search(start: pathlib.Path) -> pathlib.Path | None:
        for d in [start, *start.parents]:
            if any((d / m).exists() for m in markers):
                return d
        return None

    found = _search(pathlib.Path.cwd())
    if found:
        return found

    pkg_dir = pathlib.Path(__file__).resolve().parent  # src/selenium_waiter/
    found = _search(pkg_dir)
    if found:
        return found

    return pathlib.Path.cwd()


PROJECT_ROOT = _find_project_root()

# Timeout presets in seconds. They document intent only; every wait runs
# through the same polling loop.
TINY_TIMEOUT = 10
TIMEOUT = 30
MEDIUM_TIMEOUT = 60
LONG_TIMEOUT = 120

DEFAULT_POLL_MS = 500

CONFIG_FILE = str(PROJECT_ROOT / "waiter.json")

READY_STATE_SCRIPT = "return document.readyState"
JQUERY_IDLE_SCRIPT = "return jQuery.active == 0"
