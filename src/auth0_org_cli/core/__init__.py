"""Core / service layer: domain models, rules and orchestration.

Rules
-----
* No ``print()`` calls and no terminal rendering.
* No direct network I/O; remote calls go through ``ManagementProvider``.
* No imports from ``cli`` or ``infra``.
"""

from auth0_org_cli.core.directory_service import DirectoryService
from auth0_org_cli.core.models import (
    AssignmentOutcome,
    AssignmentReport,
    AssignmentRequest,
    Identity,
    MemberAssignment,
    Organization,
    Role,
)
from auth0_org_cli.core.protocols import ManagementProvider, SelectionPrompter, WorkflowReporter
from auth0_org_cli.core.workflow import (
    AssignmentWorkflow,
    WorkflowOutcome,
    WorkflowResult,
    WorkflowState,
)

__all__: list[str] = [
    "AssignmentOutcome",
    "AssignmentReport",
    "AssignmentRequest",
    "AssignmentWorkflow",
    "DirectoryService",
    "Identity",
    "ManagementProvider",
    "MemberAssignment",
    "Organization",
    "Role",
    "SelectionPrompter",
    "WorkflowOutcome",
    "WorkflowReporter",
    "WorkflowResult",
    "WorkflowState",
]
