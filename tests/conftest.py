"""Shared pytest fixtures and configuration for the auth0-org-cli test suite.

Guidelines
----------
* No network access in any test; the transport is an httpx MockTransport
  or a mocked provider.
* No real terminal; questionary is patched at the CLI boundary.
* Tests must not depend on the caller's AUTH0_* environment or .env file.
"""

from __future__ import annotations

from pathlib import Path

import pytest

_ENV_KEYS = (
    "AUTH0_DOMAIN",
    "AUTH0_MANAGEMENT_TOKEN",
    "AUTH0_CLIENT_ID",
    "AUTH0_CLIENT_SECRET",
    "AUTH0_AUDIENCE",
    "AUTH0_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Clear AUTH0_* variables and run from an empty directory."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
