"""Allow ``python -m auth0_org_cli`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m auth0_org_cli`` behaves identically to the
``auth0-org-cli`` console script.
"""

from __future__ import annotations

from auth0_org_cli.cli.app import cli

if __name__ == "__main__":
    cli()
