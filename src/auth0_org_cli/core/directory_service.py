"""Directory gateway: the single boundary between workflow and remote API.

It depends on a :class:`~auth0_org_cli.core.protocols.ManagementProvider`
injected at construction time (dependency inversion), keeping the core
free of any transport imports.

Guarantees
----------
* Emails are validated before, and normalized exactly once for, any
  remote lookup.
* Only :class:`~auth0_org_cli.exceptions.OrgCliError` subclasses escape;
  every provider failure surfaces as a
  :class:`~auth0_org_cli.exceptions.RemoteApiError`.
* Raw-record parsing is deterministic and stateless.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from auth0_org_cli.core.email import normalize_email
from auth0_org_cli.core.models import Identity, MemberAssignment, Organization, Role
from auth0_org_cli.core.protocols import ManagementProvider
from auth0_org_cli.exceptions import (
    AmbiguousResultError,
    InvalidInputError,
    OrgCliError,
    RemoteApiError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DirectoryService:
    """Uniform, typed access to users, organizations and roles.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`ManagementProvider` protocol.
    """

    def __init__(self, provider: ManagementProvider) -> None:
        self._provider: ManagementProvider = provider

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_by_email(self, email: str) -> list[Identity]:
        """Return all identities registered under *email*.

        No match yields an empty list, not an error.

        Raises
        ------
        InvalidInputError
            If *email* is empty or malformed (no remote call is made).
        RemoteApiError
            If the lookup fails remotely.
        """
        normalized = normalize_email(email)
        raw = self._call(self._provider.get_users_by_email, normalized)
        return [self._parse_identity(entry) for entry in _records(raw)]

    def find_single_by_email(self, email: str) -> Identity | None:
        """Return the one identity for *email*, or ``None`` when absent.

        Raises
        ------
        AmbiguousResultError
            If two or more identities share the email address.
        """
        identities = self.find_by_email(email)
        if len(identities) > 1:
            raise AmbiguousResultError(
                f"Aborting: {len(identities)} users found with the email "
                f"address {email.strip().lower()}",
                hint="Merge or remove the duplicate accounts, then retry.",
            )
        return identities[0] if identities else None

    def list_organizations(self) -> list[Organization]:
        raw = self._call(self._provider.get_organizations)
        return [self._parse_organization(entry) for entry in _records(raw, "id")]

    def list_roles(self) -> list[Role]:
        raw = self._call(self._provider.get_roles)
        return [self._parse_role(entry) for entry in _records(raw, "id")]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def assign(
        self,
        organization_id: str,
        members: Sequence[MemberAssignment],
    ) -> None:
        """Add *members* to an organization, then attach their roles.

        All members are registered in a single batched call.  Afterwards
        one role-attachment call is made per member with a non-empty
        role list, in input order.

        Not atomic: if a role attachment fails, the membership added
        by the batch call stays in place and later members are skipped.

        Raises
        ------
        InvalidInputError
            If *organization_id* is blank or *members* is empty.
        RemoteApiError
            On the first failing remote call.
        """
        if not organization_id.strip():
            raise InvalidInputError("Organization id must not be empty.")
        if not members:
            raise InvalidInputError("At least one member is required.")

        user_ids = [member.identity_id for member in members]
        logger.debug("Adding %d member(s) to organization %s", len(user_ids), organization_id)
        self._call(self._provider.add_organization_members, organization_id, user_ids)

        for member in members:
            if not member.role_ids:
                continue
            logger.debug(
                "Attaching %d role(s) to %s in organization %s",
                len(member.role_ids),
                member.identity_id,
                organization_id,
            )
            self._call(
                self._provider.add_organization_member_roles,
                organization_id,
                member.identity_id,
                list(member.role_ids),
            )

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(func: Callable[..., T], *args: Any) -> T:
        """Call the provider and ensure only our exceptions escape."""
        try:
            return func(*args)
        except OrgCliError:
            # Already one of ours.
            raise
        except Exception as exc:
            raise RemoteApiError.from_error(exc) from exc

    # ------------------------------------------------------------------
    # Raw-record → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_identity(raw: dict[str, Any]) -> Identity:
        return Identity(
            id=str(raw.get("user_id", "")),
            email=str(raw.get("email", "")),
            display_name=_optional_str(raw.get("name")) or _optional_str(raw.get("nickname")),
        )

    @staticmethod
    def _parse_organization(raw: dict[str, Any]) -> Organization:
        return Organization(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            display_name=_optional_str(raw.get("display_name")),
        )

    @staticmethod
    def _parse_role(raw: dict[str, Any]) -> Role:
        return Role(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            description=_optional_str(raw.get("description")),
        )


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------

def _records(raw: object, required: str | None = None) -> list[dict[str, Any]]:
    """Keep only dict entries of a provider list result.

    With *required*, entries whose value for that key is missing or blank
    are dropped as well.
    """
    if not isinstance(raw, list):
        return []
    records = [entry for entry in raw if isinstance(entry, dict)]
    if required is None:
        return records
    kept = [entry for entry in records if str(entry.get(required) or "").strip()]
    if len(kept) < len(records):
        logger.warning("Ignored %d record(s) without %r", len(records) - len(kept), required)
    return kept


def _optional_str(value: object) -> str | None:
    """Return *value* as a string, or ``None`` when missing or blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
