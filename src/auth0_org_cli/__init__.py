"""auth0-org-cli: assign Auth0 users to organizations with roles.

Thin interactive layer over the Auth0 Management API v2 with a strict
core / infra / cli layering.
"""

from auth0_org_cli.version import __version__

__all__: list[str] = ["__version__"]
