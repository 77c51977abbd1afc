"""Email address rules shared by the CLI entry and the directory gateway.

Pure functions only.  The remote service stores emails lowercased, so
every lookup goes through :func:`normalize_email` exactly once.
"""

from __future__ import annotations

import re

from auth0_org_cli.exceptions import InvalidInputError

# local-part@domain.tld with no whitespace and a single '@'.
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    """Return ``True`` when *email* (trimmed) passes the syntactic check."""
    return bool(_EMAIL_PATTERN.match(email.strip()))


def normalize_email(email: str) -> str:
    """Trim, validate and lowercase *email*.

    Raises
    ------
    InvalidInputError
        If *email* is empty or fails the syntactic check.
    """
    stripped = email.strip()
    if not stripped:
        raise InvalidInputError("Email address must not be empty.")
    if not _EMAIL_PATTERN.match(stripped):
        raise InvalidInputError(
            f"Invalid email address: {stripped}",
            hint="Expected something like jane.doe@example.com",
        )
    return stripped.lower()
