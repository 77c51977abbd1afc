"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
layer must satisfy.  Core code depends ONLY on these protocols, never
on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from auth0_org_cli.core.models import (
    AssignmentReport,
    AssignmentRequest,
    Identity,
    Organization,
    Role,
)


class ManagementProvider(Protocol):
    """Contract for the raw identity-management transport.

    Methods return provider-specific JSON-like records.  Implementations
    should raise :class:`~auth0_org_cli.exceptions.RemoteApiError`; any
    other exception is normalized by the directory gateway.
    """

    def get_users_by_email(self, email: str) -> list[dict[str, Any]]:
        """Return every user record whose email equals *email*."""
        ...  # pragma: no cover

    def get_organizations(self) -> list[dict[str, Any]]:
        """Return the first page of organizations."""
        ...  # pragma: no cover

    def get_roles(self) -> list[dict[str, Any]]:
        """Return the first page of roles."""
        ...  # pragma: no cover

    def add_organization_members(
        self,
        organization_id: str,
        user_ids: Sequence[str],
    ) -> None:
        """Register *user_ids* as members of *organization_id* in one call."""
        ...  # pragma: no cover

    def add_organization_member_roles(
        self,
        organization_id: str,
        user_id: str,
        role_ids: Sequence[str],
    ) -> None:
        """Attach *role_ids* to an existing member within an organization."""
        ...  # pragma: no cover


class SelectionPrompter(Protocol):
    """Interactive selection steps of the assignment workflow.

    Rendering is the implementation's business; the workflow only sees
    the selected items.
    """

    def select_organizations(
        self, organizations: Sequence[Organization],
    ) -> list[Organization]:
        ...  # pragma: no cover

    def select_roles(self, roles: Sequence[Role]) -> list[Role]:
        ...  # pragma: no cover

    def confirm(self, request: AssignmentRequest) -> bool:
        ...  # pragma: no cover


class WorkflowReporter(Protocol):
    """Status sink for the assignment workflow (no business logic)."""

    def initializing(self) -> None: ...  # pragma: no cover

    def reference_data_loaded(
        self, organizations: Sequence[Organization], roles: Sequence[Role],
    ) -> None: ...  # pragma: no cover

    def resolving_user(self, email: str) -> None: ...  # pragma: no cover

    def identity_found(self, identity: Identity) -> None: ...  # pragma: no cover

    def identity_not_found(self, email: str) -> None: ...  # pragma: no cover

    def no_organizations_available(self) -> None: ...  # pragma: no cover

    def no_roles_available(self) -> None: ...  # pragma: no cover

    def no_organizations_selected(self) -> None: ...  # pragma: no cover

    def review(self, request: AssignmentRequest) -> None: ...  # pragma: no cover

    def cancelled(self) -> None: ...  # pragma: no cover

    def assignment_started(self, organization: Organization) -> None: ...  # pragma: no cover

    def assignment_succeeded(self, organization: Organization) -> None: ...  # pragma: no cover

    def assignment_failed(
        self, organization: Organization, detail: str,
    ) -> None: ...  # pragma: no cover

    def finished(self, report: AssignmentReport) -> None: ...  # pragma: no cover
