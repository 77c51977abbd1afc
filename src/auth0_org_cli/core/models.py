"""Domain models for auth0-org-cli.

All models are **frozen** dataclasses: immutable, request-scoped value
objects.  Nothing here is persisted; they carry zero I/O and no
dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Identity:
    """A resolved user record returned by the remote lookup."""

    id: str
    """Remote user identifier (e.g. ``auth0|64f1...``)."""

    email: str
    """Primary email address as stored remotely."""

    display_name: str | None = None
    """Human-readable name, or ``None`` when the profile has none."""

    @property
    def label(self) -> str:
        return self.display_name or self.email


@dataclass(frozen=True, slots=True)
class Organization:
    """A named grouping entity a user can be a member of."""

    id: str
    name: str
    display_name: str | None = None

    @property
    def label(self) -> str:
        return self.display_name or self.name


@dataclass(frozen=True, slots=True)
class Role:
    """A named permission bundle attachable to an organization member."""

    id: str
    name: str
    description: str | None = None


# ---------------------------------------------------------------------------
# Assignment plan and results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MemberAssignment:
    """One member entry of a batched organization assignment.

    An empty ``role_ids`` tuple means plain membership with no role
    attachment.
    """

    identity_id: str
    role_ids: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AssignmentRequest:
    """The unexecuted plan built up during the workflow.

    ``organizations`` holds no duplicates and keeps the operator's
    selection order.
    """

    identity: Identity
    organizations: tuple[Organization, ...]
    roles: tuple[Role, ...] = ()

    @property
    def role_ids(self) -> tuple[str, ...]:
        return tuple(role.id for role in self.roles)


@dataclass(frozen=True, slots=True)
class AssignmentOutcome:
    """Result of assigning the identity to a single organization."""

    organization: Organization
    succeeded: bool
    error_detail: str | None = None


@dataclass(frozen=True, slots=True)
class AssignmentReport:
    """Ordered per-organization outcomes with tally helpers."""

    outcomes: tuple[AssignmentOutcome, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.succeeded

    @property
    def failures(self) -> tuple[AssignmentOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.succeeded)

    def __len__(self) -> int:
        return len(self.outcomes)
