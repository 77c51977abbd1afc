"""``auth0-org-cli doctor``: offline environment diagnostics.

Gathers interpreter, library and configuration facts and renders a Rich
table summarising whether an assignment run could start.  No network
call is made and secrets are never printed.
"""

from __future__ import annotations

import platform
import sys
from importlib import metadata
from pathlib import Path

from rich.console import Console
from rich.table import Table

from auth0_org_cli.cli import exit_codes
from auth0_org_cli.cli.console import console as default_console
from auth0_org_cli.cli.console import escape
from auth0_org_cli.config import Settings, load_settings
from auth0_org_cli.exceptions import ConfigurationError
from auth0_org_cli.version import __version__

OK = "[green]OK[/green]"
FAIL = "[red]FAIL[/red]"

Check = tuple[str, str, str]

_LIBRARIES: tuple[str, ...] = (
    "httpx",
    "pydantic",
    "pydantic-settings",
    "python-dotenv",
    "questionary",
    "rich",
)


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _tool_version_check() -> Check:
    return "auth0-org-cli", __version__, OK


def _python_version_check() -> Check:
    ok = sys.version_info[:2] >= (3, 10)
    return "Python", platform.python_version(), OK if ok else f"{FAIL} (>=3.10 required)"


def _library_check(distribution: str) -> Check:
    try:
        return distribution, metadata.version(distribution), OK
    except metadata.PackageNotFoundError:
        return distribution, "NOT INSTALLED", FAIL


def _credential_mode(settings: Settings) -> str:
    if settings.management_token is not None:
        return "static management token"
    return f"client credentials ({settings.client_id})"


def _config_checks(env_file: str | Path | None) -> list[Check]:
    """Domain and credential rows; values are validated, secrets hidden."""
    try:
        settings = load_settings(env_file)
    except ConfigurationError as exc:
        return [("Configuration", str(exc), FAIL)]
    return [
        ("AUTH0_DOMAIN", settings.domain, OK),
        ("Credentials", _credential_mode(settings), OK),
        ("Timeout", f"{settings.timeout:g}s", OK),
    ]


def collect_checks(env_file: str | Path | None = ".env") -> list[Check]:
    checks = [_tool_version_check(), _python_version_check()]
    checks.extend(_library_check(name) for name in _LIBRARIES)
    checks.extend(_config_checks(env_file))
    return checks


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(env_file: str | Path | None = ".env", *, console: Console | None = None) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all checks pass,
        :data:`exit_codes.GENERAL_ERROR` if any check fails.
    """
    out = console or default_console
    checks = collect_checks(env_file)

    table = Table(
        title="auth0-org-cli doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=14)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape(value), status)

    out.print()
    out.print(table)
    out.print()

    if any(status.startswith(FAIL) for _, _, status in checks):
        out.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    out.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
