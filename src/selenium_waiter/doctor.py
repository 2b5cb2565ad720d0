"""Doctor command — validates the runtime environment for selenium-waiter."""

from __future__ import annotations

import importlib
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from selenium_waiter.config import WaiterConfig, load_config
from selenium_waiter.core.errors import ConfigError

MIN_PYTHON = (3, 9)


@dataclass
class CheckResult:
    name: str
    passed: bool
    message: str
    hint: Optional[str] = None


@dataclass
class DoctorReport:
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    def add(self, result: CheckResult) -> None:
        self.checks.append(result)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def check_python_version() -> CheckResult:
    """Verify that the running Python meets the minimum version requirement."""
    current = sys.version_info[:2]
    ok = current >= MIN_PYTHON
    ver_str = f"{current[0]}.{current[1]}"
    min_str = f"{MIN_PYTHON[0]}.{MIN_PYTHON[1]}"
    if ok:
        return CheckResult(
            name="Python version",
            passed=True,
            message=f"Python {ver_str} ✓ (>= {min_str} required)",
        )
    return CheckResult(
        name="Python version",
        passed=False,
        message=f"Python {ver_str} is too old (need >= {min_str})",
        hint=f"Install Python {min_str}+ from https://python.org/downloads/",
    )


def check_selenium() -> CheckResult:
    """Check that the selenium bindings import and report their version."""
    try:
        selenium = importlib.import_module("selenium")
    except ImportError as exc:
        return CheckResult(
            name="Selenium",
            passed=False,
            message=f"selenium could not be imported: {exc}",
            hint="Install it with: pip install selenium",
        )
    version = getattr(selenium, "__version__", "unknown")
    return CheckResult(
        name="Selenium",
        passed=True,
        message=f"selenium {version} ✓",
    )


def load_checked_config(
    config_path: Optional[str] = None,
) -> Tuple[CheckResult, Optional[WaiterConfig]]:
    """Validate the waiter config file (or the built-in defaults).

    Returns the check together with the loaded config, which is None when
    the check failed.
    """
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        return CheckResult(
            name="Config",
            passed=False,
            message=str(exc),
            hint="Fix the file or regenerate it with `selenium-waiter init`.",
        ), None
    t = config.timeouts
    source = f"'{config_path}'" if config_path else "defaults"
    return CheckResult(
        name="Config",
        passed=True,
        message=(
            f"Config {source} is valid ✓ (default {t.default_s}s, poll {t.poll_ms}ms)"
        ),
    ), config


def check_log_path(log_path: Optional[str] = None) -> CheckResult:
    """Verify that the directory holding the wait log is writable."""
    if log_path is None:
        return CheckResult(
            name="Wait log",
            passed=True,
            message="No wait log configured (skipped)",
        )

    p = Path(log_path).parent
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass  # reported below

    if p.exists() and os.access(p, os.W_OK):
        return CheckResult(
            name="Wait log",
            passed=True,
            message=f"'{p}' is writable ✓",
        )
    if not p.exists():
        return CheckResult(
            name="Wait log",
            passed=False,
            message=f"'{p}' does not exist and could not be created",
            hint=f"Create the directory manually: mkdir -p \"{p}\"",
        )
    return CheckResult(
        name="Wait log",
        passed=False,
        message=f"'{p}' exists but is not writable",
        hint=f"Fix permissions: chmod u+w \"{p}\"",
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def run_doctor(
    config_path: Optional[str] = None,
    log_path: Optional[str] = None,
) -> DoctorReport:
    """Run all environment checks and return a :class:`DoctorReport`."""
    report = DoctorReport()

    report.add(check_python_version())
    report.add(check_selenium())
    config_check, config = load_checked_config(config_path)
    report.add(config_check)
    if log_path is None and config is not None:
        log_path = config.log.path
    report.add(check_log_path(log_path))

    return report
