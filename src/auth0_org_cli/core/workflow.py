"""Interactive assignment workflow: a linear, single-pass state machine.

The workflow drives :class:`~auth0_org_cli.core.directory_service.DirectoryService`
calls, asks a :class:`~auth0_org_cli.core.protocols.SelectionPrompter`
for the operator's choices and reports every step to a
:class:`~auth0_org_cli.core.protocols.WorkflowReporter`.  It never talks
to the terminal itself and never decides process exit codes.

States
------
START → INITIALIZING → RESOLVING_USER → SELECTING_ORGANIZATIONS →
SELECTING_ROLES → REVIEWING → EXECUTING → DONE

Error policy
------------
* Failures while initializing or resolving the user propagate and end
  the run.
* Failures while executing are caught per organization and recorded in
  the :class:`~auth0_org_cli.core.models.AssignmentReport`; they never
  stop the remaining organizations.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar

from auth0_org_cli.core.directory_service import DirectoryService
from auth0_org_cli.core.email import is_valid_email
from auth0_org_cli.core.models import (
    AssignmentOutcome,
    AssignmentReport,
    AssignmentRequest,
    Identity,
    MemberAssignment,
    Organization,
    Role,
)
from auth0_org_cli.core.protocols import SelectionPrompter, WorkflowReporter
from auth0_org_cli.exceptions import InvalidInputError, OrgCliError

logger = logging.getLogger(__name__)

_ItemT = TypeVar("_ItemT", Organization, Role)


class WorkflowState(enum.IntEnum):
    """Workflow steps, ordered; transitions only ever move forward."""

    START = 0
    INITIALIZING = 1
    RESOLVING_USER = 2
    SELECTING_ORGANIZATIONS = 3
    SELECTING_ROLES = 4
    REVIEWING = 5
    EXECUTING = 6
    DONE = 7


class WorkflowOutcome(enum.Enum):
    """How a run that did not raise ended."""

    COMPLETED = "completed"
    NO_ORGANIZATIONS_SELECTED = "no_organizations_selected"
    CANCELLED = "cancelled"
    USER_NOT_FOUND = "user_not_found"

    @property
    def is_success(self) -> bool:
        """``True`` for completed runs and deliberate no-ops."""
        return self is not WorkflowOutcome.USER_NOT_FOUND


@dataclass(frozen=True, slots=True)
class WorkflowResult:
    outcome: WorkflowOutcome
    request: AssignmentRequest | None = None
    report: AssignmentReport | None = None


class AssignmentWorkflow:
    """Run the assign-user-to-organizations flow for one email address.

    Parameters
    ----------
    service:
        Gateway to the remote identity service.
    prompter:
        Source of the operator's selections and confirmation.
    reporter:
        Sink for progress and result messages.
    """

    def __init__(
        self,
        service: DirectoryService,
        prompter: SelectionPrompter,
        reporter: WorkflowReporter,
    ) -> None:
        self._service = service
        self._prompter = prompter
        self._reporter = reporter
        self._state = WorkflowState.START
        self._organizations: list[Organization] = []
        self._roles: list[Role] = []

    @property
    def state(self) -> WorkflowState:
        return self._state

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, email: str) -> WorkflowResult:
        """Drive the workflow to completion.

        Raises
        ------
        InvalidInputError
            If *email* is malformed (checked before any remote call).
        RemoteApiError
            If reference data or the user cannot be loaded.
        AmbiguousResultError
            If more than one user matches *email*.
        """
        if not is_valid_email(email):
            raise InvalidInputError(
                f"Invalid email format: {email.strip() or '(empty)'}",
                hint="Expected something like jane.doe@example.com",
            )

        self._load_reference_data()

        identity = self._resolve_user(email)
        if identity is None:
            return WorkflowResult(WorkflowOutcome.USER_NOT_FOUND)

        organizations = self._select_organizations()
        if not organizations:
            self._reporter.no_organizations_selected()
            return WorkflowResult(WorkflowOutcome.NO_ORGANIZATIONS_SELECTED)

        roles = self._select_roles()
        request = AssignmentRequest(
            identity=identity,
            organizations=tuple(organizations),
            roles=tuple(roles),
        )

        if not self._review(request):
            self._reporter.cancelled()
            return WorkflowResult(WorkflowOutcome.CANCELLED, request=request)

        report = self._execute(request)

        self._advance(WorkflowState.DONE)
        self._reporter.finished(report)
        return WorkflowResult(WorkflowOutcome.COMPLETED, request=request, report=report)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _load_reference_data(self) -> None:
        self._advance(WorkflowState.INITIALIZING)
        self._reporter.initializing()
        self._organizations = self._service.list_organizations()
        self._roles = self._service.list_roles()
        self._reporter.reference_data_loaded(self._organizations, self._roles)

    def _resolve_user(self, email: str) -> Identity | None:
        self._advance(WorkflowState.RESOLVING_USER)
        self._reporter.resolving_user(email.strip())
        identity = self._service.find_single_by_email(email)
        if identity is None:
            self._reporter.identity_not_found(email.strip())
        else:
            self._reporter.identity_found(identity)
        return identity

    def _select_organizations(self) -> list[Organization]:
        self._advance(WorkflowState.SELECTING_ORGANIZATIONS)
        if not self._organizations:
            self._reporter.no_organizations_available()
            return []
        return _unique(self._prompter.select_organizations(self._organizations))

    def _select_roles(self) -> list[Role]:
        self._advance(WorkflowState.SELECTING_ROLES)
        if not self._roles:
            self._reporter.no_roles_available()
            return []
        return _unique(self._prompter.select_roles(self._roles))

    def _review(self, request: AssignmentRequest) -> bool:
        self._advance(WorkflowState.REVIEWING)
        self._reporter.review(request)
        return self._prompter.confirm(request) is True

    def _execute(self, request: AssignmentRequest) -> AssignmentReport:
        """Assign the identity to each organization, one at a time."""
        self._advance(WorkflowState.EXECUTING)
        member = MemberAssignment(
            identity_id=request.identity.id,
            role_ids=request.role_ids,
        )

        outcomes: list[AssignmentOutcome] = []
        for organization in request.organizations:
            self._reporter.assignment_started(organization)
            try:
                self._service.assign(organization.id, [member])
            except OrgCliError as exc:
                logger.warning("Assignment to %s failed: %s", organization.id, exc)
                self._reporter.assignment_failed(organization, str(exc))
                outcomes.append(
                    AssignmentOutcome(organization, succeeded=False, error_detail=str(exc)),
                )
                continue
            self._reporter.assignment_succeeded(organization)
            outcomes.append(AssignmentOutcome(organization, succeeded=True))

        return AssignmentReport(outcomes=tuple(outcomes))

    # ------------------------------------------------------------------
    # State bookkeeping
    # ------------------------------------------------------------------

    def _advance(self, state: WorkflowState) -> None:
        if state <= self._state:
            raise RuntimeError(
                f"Illegal workflow transition {self._state.name} -> {state.name}",
            )
        logger.debug("Workflow %s -> %s", self._state.name, state.name)
        self._state = state


def _unique(items: Iterable[_ItemT]) -> list[_ItemT]:
    """Drop repeated picks while keeping first-seen order."""
    seen: set[str] = set()
    result: list[_ItemT] = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        result.append(item)
    return result
