"""Infrastructure layer: the Auth0 Management API over HTTP.

Every raw httpx exception must be caught here and re-raised as a
:class:`~auth0_org_cli.exceptions.RemoteApiError`.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from auth0_org_cli.infra.management_api import ManagementApiClient

__all__: list[str] = ["ManagementApiClient"]
