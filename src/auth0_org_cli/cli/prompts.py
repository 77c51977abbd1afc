"""Interactive selection UI for the assignment workflow.

This module is responsible for:

* Building checkbox choices for organizations and roles.
* Asking for the final yes/no confirmation.

All prompts use ``unsafe_ask`` so that Ctrl+C surfaces as
``KeyboardInterrupt`` and reaches the CLI error boundary instead of
being mistaken for an empty selection.
"""

from __future__ import annotations

from collections.abc import Sequence

import questionary

from auth0_org_cli.cli.report import organization_text, role_text
from auth0_org_cli.core.models import AssignmentRequest, Organization, Role


# ---------------------------------------------------------------------------
# Choice builders (pure)
# ---------------------------------------------------------------------------

def build_organization_choices(organizations: Sequence[Organization]) -> list[questionary.Choice]:
    return [
        questionary.Choice(title=organization_text(org), value=org)
        for org in organizations
    ]


def build_role_choices(roles: Sequence[Role]) -> list[questionary.Choice]:
    return [questionary.Choice(title=role_text(role), value=role) for role in roles]


# ---------------------------------------------------------------------------
# Prompter
# ---------------------------------------------------------------------------

class QuestionaryPrompter:
    """Terminal implementation of the core ``SelectionPrompter`` protocol."""

    def select_organizations(
        self, organizations: Sequence[Organization],
    ) -> list[Organization]:
        selected = questionary.checkbox(
            "Select organizations to add the user to:",
            choices=build_organization_choices(organizations),
            instruction="(space to toggle, enter to confirm; none selected exits)",
        ).unsafe_ask()
        return list(selected or [])

    def select_roles(self, roles: Sequence[Role]) -> list[Role]:
        selected = questionary.checkbox(
            "Select roles to assign to the user:",
            choices=build_role_choices(roles),
            instruction="(none selected means member-only access)",
        ).unsafe_ask()
        return list(selected or [])

    def confirm(self, request: AssignmentRequest) -> bool:
        count = len(request.organizations)
        noun = "organization" if count == 1 else "organizations"
        answer = questionary.confirm(
            f"Add {request.identity.email} to {count} {noun}?",
            default=False,
        ).unsafe_ask()
        return answer is True
