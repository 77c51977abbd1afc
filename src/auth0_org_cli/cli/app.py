"""CLI application entry point and command routing for auth0-org-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~auth0_org_cli.exceptions.OrgCliError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; all work is delegated to the core
  workflow and the infrastructure transport.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from auth0_org_cli.cli import exit_codes
from auth0_org_cli.cli.console import console, escape
from auth0_org_cli.config import DEFAULT_ENV_FILE
from auth0_org_cli.core.workflow import WorkflowOutcome
from auth0_org_cli.exceptions import ConfigurationError, InvalidInputError, OrgCliError
from auth0_org_cli.utils.log import configure_logging
from auth0_org_cli.version import __version__

logger = logging.getLogger(__name__)

COMMANDS: tuple[str, ...] = ("setup", "doctor")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``auth0-org-cli <email>``: interactive assignment of one user
    * ``auth0-org-cli setup``: write a .env file interactively
    * ``auth0-org-cli doctor``: environment diagnostics
    * ``auth0-org-cli --version``
    """
    parser = argparse.ArgumentParser(
        prog="auth0-org-cli",
        description="Assign an Auth0 user to organizations with roles.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    parser.add_argument(
        "--env-file",
        default=DEFAULT_ENV_FILE,
        help="Path of the .env file holding AUTH0_* settings (default: %(default)s).",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Email address of the user to assign, or 'setup' / 'doctor'.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_assign(email: str, env_file: str) -> int:
    """Run the interactive assignment workflow for *email*.

    Flow:
    1. Validate the email (no I/O).
    2. Load settings and build the HTTP transport.
    3. Drive the workflow with the terminal prompter and reporter.
    4. Map the workflow outcome to an exit code.
    """
    from auth0_org_cli.cli.prompts import QuestionaryPrompter
    from auth0_org_cli.cli.report import ConsoleReporter
    from auth0_org_cli.config import load_settings
    from auth0_org_cli.core.directory_service import DirectoryService
    from auth0_org_cli.core.email import is_valid_email
    from auth0_org_cli.core.workflow import AssignmentWorkflow
    from auth0_org_cli.infra.management_api import ManagementApiClient

    if not is_valid_email(email):
        raise InvalidInputError(
            f"Invalid email format: {email.strip() or '(empty)'}",
            hint="Usage: auth0-org-cli <email>",
        )

    settings = load_settings(env_file)
    logger.info("Using tenant %s", settings.domain)

    with ManagementApiClient(settings) as api:
        workflow = AssignmentWorkflow(
            DirectoryService(api),
            QuestionaryPrompter(),
            ConsoleReporter(),
        )
        result = workflow.run(email)

    logger.info("Workflow finished: %s", result.outcome.value)
    if result.outcome is WorkflowOutcome.USER_NOT_FOUND:
        return exit_codes.GENERAL_ERROR
    return exit_codes.SUCCESS


def _handle_setup(env_file: str) -> int:
    from auth0_org_cli.cli.setup_env import run_setup

    return run_setup(env_file)


def _handle_doctor(env_file: str) -> int:
    from auth0_org_cli.cli.doctor import run_doctor

    return run_doctor(env_file)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the auth0-org-cli CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.target is None:
        parser.print_usage(sys.stderr)
        console.print("[bold red]Error:[/bold red] an email address is required.")
        return exit_codes.USAGE_ERROR

    target: str = args.target
    command = target.strip().lower()

    if command == "setup":
        return _handle_setup(args.env_file)
    if command == "doctor":
        return _handle_doctor(args.env_file)

    return _handle_assign(target, args.env_file)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def exit_code_for(exc: OrgCliError) -> int:
    """Pick the process exit code for a known error."""
    if isinstance(exc, InvalidInputError):
        return exit_codes.USAGE_ERROR
    if isinstance(exc, ConfigurationError):
        return exit_codes.CONFIGURATION_ERROR
    return exit_codes.GENERAL_ERROR


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except OrgCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_code_for(exc))
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unhandled exception", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
