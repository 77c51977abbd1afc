"""httpx-backed implementation of :class:`~auth0_org_cli.core.protocols.ManagementProvider`.

This module is the **only** place in the codebase that imports ``httpx``.
Every HTTP error response and transport failure is caught here and
re-raised as :class:`~auth0_org_cli.exceptions.RemoteApiError`, so nothing
raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx

from auth0_org_cli.config import Settings
from auth0_org_cli.exceptions import RemoteApiError
from auth0_org_cli.version import __version__

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v2"
TOKEN_PATH = "/oauth/token"


class ManagementApiClient:
    """Concrete :class:`ManagementProvider` for the Auth0 Management API v2.

    Usage::

        with ManagementApiClient(load_settings()) as api:
            users = api.get_users_by_email("jane@example.com")

    When the settings carry no static management token, a bearer token
    is obtained once through the client-credentials grant and reused for
    the lifetime of the client.

    Parameters
    ----------
    settings:
        Tenant domain, credentials and timeout.
    transport:
        Optional httpx transport; tests pass an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._client = httpx.Client(
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
            headers={
                "Accept": "application/json",
                "User-Agent": f"auth0-org-cli/{__version__}",
            },
        )
        self._access_token: str | None = (
            settings.management_token.get_secret_value()
            if settings.management_token is not None
            else None
        )

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> ManagementApiClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def get_users_by_email(self, email: str) -> list[dict[str, Any]]:
        payload = self._request("GET", "/users-by-email", params={"email": email})
        return _unwrap_list(payload, "users")

    def get_organizations(self) -> list[dict[str, Any]]:
        payload = self._request("GET", "/organizations")
        return _unwrap_list(payload, "organizations")

    def get_roles(self) -> list[dict[str, Any]]:
        payload = self._request("GET", "/roles")
        return _unwrap_list(payload, "roles")

    def add_organization_members(
        self,
        organization_id: str,
        user_ids: Sequence[str],
    ) -> None:
        self._request(
            "POST",
            f"/organizations/{_segment(organization_id)}/members",
            json={"members": list(user_ids)},
        )

    def add_organization_member_roles(
        self,
        organization_id: str,
        user_id: str,
        role_ids: Sequence[str],
    ) -> None:
        self._request(
            "POST",
            f"/organizations/{_segment(organization_id)}/members/{_segment(user_id)}/roles",
            json={"roles": list(role_ids)},
        )

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def access_token(self) -> str:
        """Return the bearer token, exchanging client credentials if needed."""
        if self._access_token is None:
            self._access_token = self._exchange_client_credentials()
        return self._access_token

    def _exchange_client_credentials(self) -> str:
        settings = self._settings
        if settings.client_id is None or settings.client_secret is None:
            raise RemoteApiError("No management token or client credentials configured.")

        logger.info("Requesting Management API token for client %s", settings.client_id)
        response = self._send(
            "POST",
            TOKEN_PATH,
            json={
                "grant_type": "client_credentials",
                "client_id": settings.client_id,
                "client_secret": settings.client_secret.get_secret_value(),
                "audience": settings.token_audience,
            },
        )
        payload = _json_or_none(response)
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise RemoteApiError("Token endpoint returned no access_token.", response.status_code)
        return token

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send an authenticated Management API request and decode JSON."""
        response = self._send(
            method,
            f"{API_PREFIX}{path}",
            params=params,
            json=json,
            headers={"Authorization": f"Bearer {self.access_token()}"},
        )
        return _json_or_none(response)

    def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        logger.debug("API %s %s", method, url)
        try:
            response = self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.TimeoutException as exc:
            raise RemoteApiError(f"timeout after {self._settings.timeout:g}s ({method} {url})") from exc
        except httpx.HTTPError as exc:
            raise RemoteApiError.from_error(exc) from exc

        logger.debug("API %s %s -> %d", method, url, response.status_code)
        if response.is_error:
            raise _error_from_response(response)
        return response


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def _segment(value: str) -> str:
    """Quote a path segment; user ids contain ``|``."""
    return quote(value, safe="")


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _unwrap_list(payload: Any, key: str) -> list[dict[str, Any]]:
    """Accept a bare JSON array or an ``{key: [...]}`` envelope."""
    if isinstance(payload, dict):
        payload = payload.get(key)
    if not isinstance(payload, list):
        return []
    return [entry for entry in payload if isinstance(entry, dict)]


def _error_from_response(response: httpx.Response) -> RemoteApiError:
    """Map an error response to :class:`RemoteApiError`.

    Management API errors look like ``{"statusCode": 404, "error": "Not
    Found", "message": "..."}``; the token endpoint uses ``error`` and
    ``error_description``.
    """
    body = _json_or_none(response)
    detail: str | None = None
    if isinstance(body, dict):
        for key in ("message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                detail = value
                break
    if detail is None:
        detail = response.reason_phrase or response.text.strip()
    return RemoteApiError(detail, response.status_code)
