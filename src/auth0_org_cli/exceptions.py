"""Custom exception hierarchy for auth0-org-cli.

All exceptions that cross layer boundaries must inherit from
:class:`OrgCliError`.  Raw transport exceptions (e.g. from httpx) must
NEVER propagate beyond the infrastructure layer or the directory
gateway. They are folded into a :class:`RemoteApiError` first.

Hierarchy
---------
OrgCliError
├── InvalidInputError
├── ConfigurationError
├── RemoteApiError
└── AmbiguousResultError
"""

from __future__ import annotations

from collections.abc import Mapping


class OrgCliError(Exception):
    """Base exception for all auth0-org-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input / configuration -------------------------------------------------

class InvalidInputError(OrgCliError):
    """Raised when a command-line argument (usually the email) is malformed."""


class ConfigurationError(OrgCliError):
    """Raised when the service domain or credentials are missing or invalid."""


# --- Remote service --------------------------------------------------------

DEFAULT_REMOTE_MESSAGE = "Remote API Error"


class RemoteApiError(OrgCliError):
    """Normalized failure reported by the remote identity service.

    Whatever shape the underlying error had, upstream layers only ever
    see ``status_code`` (optional) and the formatted ``message``.
    """

    def __init__(
        self,
        detail: str,
        status_code: int | None = None,
        *,
        hint: str | None = None,
    ) -> None:
        if status_code is not None:
            message = f"Remote API Error ({status_code}): {detail or DEFAULT_REMOTE_MESSAGE}"
        else:
            message = f"Remote API: {detail}"
        super().__init__(message, hint=hint or remediation_hint(status_code))
        self.status_code: int | None = status_code
        self.detail: str = detail
        self.message: str = message

    @classmethod
    def from_error(cls, error: object) -> RemoteApiError:
        """Fold an arbitrary error value into a :class:`RemoteApiError`.

        Accepts mappings and objects exposing ``statusCode`` /
        ``status_code`` and ``message``, bare strings, and anything else
        (which is stringified).
        """
        if isinstance(error, RemoteApiError):
            return error

        status = _lookup(error, "statusCode", "status_code")
        message = _lookup(error, "message")

        if isinstance(status, int) and not isinstance(status, bool):
            return cls(str(message) if message else DEFAULT_REMOTE_MESSAGE, status)
        if message:
            return cls(str(message))
        text = str(error)
        if not text and isinstance(error, BaseException):
            text = type(error).__name__
        return cls(text)


class AmbiguousResultError(OrgCliError):
    """Raised when more than one identity matches a single email address."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _lookup(source: object, *names: str) -> object | None:
    """Return the first non-``None`` key or attribute among *names*."""
    if isinstance(source, (str, bytes)):
        return None
    for name in names:
        if isinstance(source, Mapping):
            value = source.get(name)
        else:
            value = getattr(source, name, None)
        if value is not None:
            return value
    return None


def remediation_hint(status_code: int | None) -> str | None:
    """Suggest a fix for a remote failure based on its HTTP status."""
    if status_code is None:
        return None
    if status_code == 401:
        return (
            "The credential was rejected. Check AUTH0_MANAGEMENT_TOKEN "
            "(tokens expire) or the client id / secret."
        )
    if status_code == 403:
        return (
            "The credential lacks a required scope. Grant the Management API "
            "scopes listed by `auth0-org-cli setup`."
        )
    if status_code == 404:
        return "The user, organization or role no longer exists. Check the email and retry."
    if status_code == 409:
        return "The user is already a member of this organization."
    if status_code == 429 or status_code >= 500:
        return "The service is busy or temporarily unavailable. Retry in a moment."
    return None
