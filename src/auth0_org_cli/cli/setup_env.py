"""``auth0-org-cli setup``: interactive ``.env`` creation.

Asks for the tenant domain and machine-to-machine credentials, writes
them with python-dotenv, then lists the Management API scopes the
application must be granted.
"""

from __future__ import annotations

from pathlib import Path

import questionary
from dotenv import set_key
from rich.console import Console

from auth0_org_cli.cli import exit_codes
from auth0_org_cli.cli.console import console as default_console
from auth0_org_cli.cli.console import escape
from auth0_org_cli.config import strip_domain

REQUIRED_SCOPES: tuple[str, ...] = (
    "read:users",
    "read:organizations",
    "create:organization_members",
    "create:organization_member_roles",
    "read:roles",
)


def _ask_required(message: str, *, secret: bool = False) -> str:
    prompt = questionary.password if secret else questionary.text
    answer = prompt(message).unsafe_ask()
    return (answer or "").strip()


def run_setup(env_file: str | Path = ".env", *, console: Console | None = None) -> int:
    """Collect credentials interactively and write them to *env_file*.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when the file was written or left
        untouched on purpose, :data:`exit_codes.GENERAL_ERROR` when a
        required value was not provided.
    """
    out = console or default_console
    path = Path(env_file)

    out.print("\n[bold]🚀 Auth0 Organization CLI Setup[/bold]\n")
    out.print("This will write your Auth0 credentials to a .env file.\n")

    if path.exists():
        out.print(f"[green]✅ {escape(str(path))} already exists![/green]")
        overwrite = questionary.confirm(
            "Do you want to overwrite it?", default=False,
        ).unsafe_ask()
        if not overwrite:
            out.print("Setup cancelled. Your existing .env file is unchanged.")
            return exit_codes.SUCCESS

    domain = strip_domain(_ask_required("🌐 Auth0 Domain (e.g., your-tenant.auth0.com):"))
    if not domain:
        out.print("[red]❌ Domain is required. Setup cancelled.[/red]")
        return exit_codes.GENERAL_ERROR

    client_id = _ask_required("🔑 Auth0 Client ID:")
    if not client_id:
        out.print("[red]❌ Client ID is required. Setup cancelled.[/red]")
        return exit_codes.GENERAL_ERROR

    client_secret = _ask_required("🔒 Auth0 Client Secret:", secret=True)
    if not client_secret:
        out.print("[red]❌ Client Secret is required. Setup cancelled.[/red]")
        return exit_codes.GENERAL_ERROR

    default_audience = f"https://{domain}/api/v2/"
    audience = (
        questionary.text(
            f"🎯 Auth0 Audience (default: {default_audience}):",
            default=default_audience,
        ).unsafe_ask()
        or default_audience
    ).strip()

    path.write_text(
        "# Auth0 Management API credentials (machine-to-machine application)\n",
        encoding="utf-8",
    )
    for key, value in (
        ("AUTH0_DOMAIN", domain),
        ("AUTH0_CLIENT_ID", client_id),
        ("AUTH0_CLIENT_SECRET", client_secret),
        ("AUTH0_AUDIENCE", audience),
    ):
        set_key(str(path), key, value, quote_mode="never")

    out.print(f"\n[green]✅ Configuration saved to {escape(str(path))}![/green]")
    out.print("\n[bold]📋 Required Auth0 Setup:[/bold]")
    out.print("   1. Go to Auth0 Dashboard → Applications → Machine to Machine Applications")
    out.print("   2. Create or select an application")
    out.print("   3. Authorize it for the Management API with these scopes:")
    for scope in REQUIRED_SCOPES:
        out.print(f"      • {scope}")
    out.print("\n[bold]🎉 Setup complete![/bold] You can now run:")
    out.print("   auth0-org-cli your.email@example.com")
    return exit_codes.SUCCESS
