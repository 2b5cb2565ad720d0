"""CLI entry point — click-based commands."""

from __future__ import annotations

import sys
from typing import Optional

import click

from selenium_waiter import __version__
from selenium_waiter.config import PRESETS, ensure_default, load_config
from selenium_waiter.constants import CONFIG_FILE
from selenium_waiter.core.errors import ConfigError
from selenium_waiter.doctor import run_doctor

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_DOCTOR_FAILURE = 10


@click.group()
@click.version_option(version=__version__, prog_name="selenium-waiter")
def main() -> None:
    """selenium-waiter — poll page conditions for Selenium tests."""


# ── init ──────────────────────────────────────────────────────────

@main.command()
@click.option(
    "--config", "config_path", default=CONFIG_FILE, show_default=True, metavar="FILE",
    help="Where to write the config (.json, .yaml or .yml).",
)
def init(config_path: str) -> None:
    """Write a default waiter config file."""
    if ensure_default(config_path):
        click.echo(f"Created {config_path}")
    else:
        click.echo(f"{config_path} already exists; left unchanged.")


# ── presets ───────────────────────────────────────────────────────

@main.command()
@click.option(
    "--config", "config_path", default=None, metavar="FILE",
    help="Config file to read. Defaults to waiter.json when present.",
)
def presets(config_path: Optional[str]) -> None:
    """Show the timeout presets and polling interval."""
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    for name in PRESETS:
        click.echo(f"  {name:<8} {config.timeouts.preset(name)}s")
    click.echo(f"  {'poll':<8} {config.timeouts.poll_ms}ms")


# ── doctor ────────────────────────────────────────────────────────

@main.command()
@click.option(
    "--config", "config_path", default=None, metavar="FILE",
    help="Config file to validate.",
)
@click.option(
    "--log-path", default=None, metavar="FILE",
    help="Wait log file whose directory must be writable.",
)
def doctor(config_path: Optional[str], log_path: Optional[str]) -> None:
    """Validate the environment setup for selenium-waiter.

    Exits with code 0 when all checks pass, or 10 when one or more fail.
    """
    report = run_doctor(config_path=config_path, log_path=log_path)

    _print_report(report)

    if report.passed:
        click.echo("\n✅  All checks passed — environment is ready.")
        sys.exit(EXIT_OK)
    else:
        click.echo(
            "\n❌  One or more checks failed. Fix the issues above and re-run "
            "`selenium-waiter doctor`.",
            err=True,
        )
        sys.exit(EXIT_DOCTOR_FAILURE)


def _print_report(report) -> None:
    """Pretty-print the doctor report to stdout."""
    click.echo(f"selenium-waiter doctor — environment check\n{'─' * 45}")
    for check in report.checks:
        icon = "✓" if check.passed else "✗"
        click.echo(f"  [{icon}] {check.name}: {check.message}")
        if check.hint:
            click.echo(f"       ↳ {check.hint}")
