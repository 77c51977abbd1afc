"""Presentation of workflow progress and results.

Two halves:

* ``render_*`` functions: pure transforms from domain values to Rich
  markup strings.  No I/O, easy to assert on.
* :class:`ConsoleReporter` satisfies the core ``WorkflowReporter``
  protocol by printing those strings on a Rich console.

No business logic lives here.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console

from auth0_org_cli.cli.console import console as default_console
from auth0_org_cli.cli.console import escape
from auth0_org_cli.core.models import (
    AssignmentReport,
    AssignmentRequest,
    Identity,
    Organization,
    Role,
)

RULE = "━" * 50
NO_ROLES_MARKER = "No specific roles (default member access)"


# ---------------------------------------------------------------------------
# Pure renderers
# ---------------------------------------------------------------------------

def organization_text(organization: Organization) -> str:
    """``"Display Name (org_id)"`` without markup."""
    return f"{organization.label} ({organization.id})"


def role_text(role: Role) -> str:
    """``"name - description"``; the description part is optional."""
    if role.description:
        return f"{role.name} - {role.description}"
    return role.name


def render_loaded_counts(organizations: Sequence[Organization], roles: Sequence[Role]) -> list[str]:
    return [
        f"[green]✓ Loaded {len(organizations)} organizations[/green]",
        f"[green]✓ Loaded {len(roles)} roles[/green]",
        "[green]✓ Initialization complete![/green]\n",
    ]


def render_identity_found(identity: Identity) -> str:
    return f"[green]✓ Found user: {escape(identity.label)} ({escape(identity.id)})[/green]"


def render_identity_not_found(email: str) -> str:
    return f"[yellow]⚠ No user found with email: {escape(email)}[/yellow]"


def render_review(request: AssignmentRequest) -> list[str]:
    """Build the review block shown before confirmation."""
    identity = request.identity
    lines = [
        "\n[cyan]📋 Review Assignment Details:[/cyan]",
        RULE,
        "[bold]User:[/bold]",
        f"  • Name: {escape(identity.display_name or 'N/A')}",
        f"  • Email: {escape(identity.email)}",
        f"  • User ID: {escape(identity.id)}",
        "",
        "[bold]Organizations:[/bold]",
    ]
    lines.extend(f"  • {escape(organization_text(org))}" for org in request.organizations)
    lines.append("")
    lines.append("[bold]Roles:[/bold]")
    if request.roles:
        lines.extend(f"  • {escape(role_text(role))}" for role in request.roles)
    else:
        lines.append(f"  • {NO_ROLES_MARKER}")
    lines.append(RULE)
    return lines


def render_progress(organization: Organization) -> str:
    return f"[dim]Adding user to {escape(organization.label)}...[/dim]"


def render_success(organization: Organization) -> str:
    return f"[green]✓ Successfully added to {escape(organization.label)}[/green]"


def render_failure(organization: Organization, detail: str) -> str:
    return f"[red]✗ Failed to add to {escape(organization.label)}:[/red] {escape(detail)}"


def render_tally(report: AssignmentReport) -> list[str]:
    """Final summary; the failure line only appears when something failed."""
    lines = [
        "\n[cyan]📊 Assignment Summary:[/cyan]",
        f"[green]✓ Successful assignments: {report.succeeded}[/green]",
    ]
    if report.failed:
        lines.append(f"[red]✗ Failed assignments: {report.failed}[/red]")
    lines.append("[blue]🎉 Process complete![/blue]")
    return lines


# ---------------------------------------------------------------------------
# Console reporter
# ---------------------------------------------------------------------------

class ConsoleReporter:
    """Print workflow events with Rich.

    Parameters
    ----------
    console:
        Target console; defaults to the shared stderr console.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console: Console = console or default_console

    def _print(self, *lines: str) -> None:
        for line in lines:
            self._console.print(line)

    def initializing(self) -> None:
        self._print(
            "[blue]🔄 Initializing Auth0 Organization Membership CLI...[/blue]",
            "[dim]Loading organizations and roles...[/dim]",
        )

    def reference_data_loaded(
        self, organizations: Sequence[Organization], roles: Sequence[Role],
    ) -> None:
        self._print(*render_loaded_counts(organizations, roles))

    def resolving_user(self, email: str) -> None:
        self._print(f"[dim]Looking up user: {escape(email)}[/dim]")

    def identity_found(self, identity: Identity) -> None:
        self._print(render_identity_found(identity))

    def identity_not_found(self, email: str) -> None:
        self._print(
            render_identity_not_found(email),
            "[red]Error: User not found. Cannot proceed with assignment.[/red]",
        )

    def no_organizations_available(self) -> None:
        self._print("[yellow]No organizations available.[/yellow]")

    def no_roles_available(self) -> None:
        self._print(
            "[yellow]No roles available. The user will be added without specific roles.[/yellow]",
        )

    def no_organizations_selected(self) -> None:
        self._print("[yellow]No organizations selected. Exiting.[/yellow]")

    def review(self, request: AssignmentRequest) -> None:
        self._print(*render_review(request))

    def cancelled(self) -> None:
        self._print("[yellow]❌ Assignment cancelled. No changes were made.[/yellow]")

    def assignment_started(self, organization: Organization) -> None:
        self._print(render_progress(organization))

    def assignment_succeeded(self, organization: Organization) -> None:
        self._print(render_success(organization))

    def assignment_failed(self, organization: Organization, detail: str) -> None:
        self._print(render_failure(organization, detail))

    def finished(self, report: AssignmentReport) -> None:
        self._print(*render_tally(report))
