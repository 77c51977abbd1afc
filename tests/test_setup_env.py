"""Tests for the interactive ``setup`` command (cli/setup_env.py)."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from dotenv import dotenv_values
from rich.console import Console

from auth0_org_cli.cli import exit_codes
from auth0_org_cli.cli.setup_env import REQUIRED_SCOPES, run_setup


def _console() -> Console:
    return Console(record=True, width=120, color_system=None)


def _answers(mod: MagicMock, text: list[str], password: str = "", confirm: bool = False) -> None:
    """Queue answers for questionary.text / password / confirm prompts."""
    texts: Iterator[str] = iter(text)
    mod.text.side_effect = lambda *a, **k: MagicMock(unsafe_ask=MagicMock(return_value=next(texts)))
    mod.password.return_value.unsafe_ask.return_value = password
    mod.confirm.return_value.unsafe_ask.return_value = confirm


@pytest.fixture()
def questionary_mock() -> Iterator[MagicMock]:
    with patch("auth0_org_cli.cli.setup_env.questionary") as mod:
        yield mod


class TestRunSetup:
    def test_writes_env_file(self, tmp_path: Path, questionary_mock: MagicMock) -> None:
        env_file = tmp_path / ".env"
        _answers(questionary_mock, ["tenant.auth0.com", "cid", ""], password="s3cret")
        console = _console()

        code = run_setup(env_file, console=console)

        assert code == exit_codes.SUCCESS
        assert dotenv_values(env_file) == {
            "AUTH0_DOMAIN": "tenant.auth0.com",
            "AUTH0_CLIENT_ID": "cid",
            "AUTH0_CLIENT_SECRET": "s3cret",
            "AUTH0_AUDIENCE": "https://tenant.auth0.com/api/v2/",
        }
        output = console.export_text()
        assert all(scope in output for scope in REQUIRED_SCOPES)
        assert "s3cret" not in output

    def test_custom_audience(self, tmp_path: Path, questionary_mock: MagicMock) -> None:
        env_file = tmp_path / ".env"
        _answers(questionary_mock, ["tenant.auth0.com", "cid", "https://api.example.com/"], password="x")

        run_setup(env_file, console=_console())

        assert dotenv_values(env_file)["AUTH0_AUDIENCE"] == "https://api.example.com/"

    @pytest.mark.parametrize(
        ("texts", "password", "message"),
        [
            ([""], "", "Domain is required"),
            (["tenant.auth0.com", ""], "", "Client ID is required"),
            (["tenant.auth0.com", "cid"], "", "Client Secret is required"),
        ],
    )
    def test_missing_required_value_cancels(
        self,
        tmp_path: Path,
        questionary_mock: MagicMock,
        texts: list[str],
        password: str,
        message: str,
    ) -> None:
        env_file = tmp_path / ".env"
        _answers(questionary_mock, texts, password=password)
        console = _console()

        code = run_setup(env_file, console=console)

        assert code == exit_codes.GENERAL_ERROR
        assert message in console.export_text()
        assert not env_file.exists()

    def test_existing_file_kept_when_declined(self, tmp_path: Path, questionary_mock: MagicMock) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("AUTH0_DOMAIN=keep.auth0.com\n", encoding="utf-8")
        _answers(questionary_mock, [], confirm=False)

        code = run_setup(env_file, console=_console())

        assert code == exit_codes.SUCCESS
        assert env_file.read_text(encoding="utf-8") == "AUTH0_DOMAIN=keep.auth0.com\n"
        questionary_mock.text.assert_not_called()

    def test_existing_file_replaced_when_confirmed(self, tmp_path: Path, questionary_mock: MagicMock) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("AUTH0_MANAGEMENT_TOKEN=old\n", encoding="utf-8")
        _answers(questionary_mock, ["new.auth0.com", "cid", ""], password="pw", confirm=True)

        run_setup(env_file, console=_console())

        values = dotenv_values(env_file)
        assert values["AUTH0_DOMAIN"] == "new.auth0.com"
        assert "AUTH0_MANAGEMENT_TOKEN" not in values

    def test_domain_scheme_and_slash_stripped(self, tmp_path: Path, questionary_mock: MagicMock) -> None:
        env_file = tmp_path / ".env"
        _answers(questionary_mock, ["https://tenant.auth0.com/", "cid", ""], password="pw")

        run_setup(env_file, console=_console())

        values = dotenv_values(env_file)
        assert values["AUTH0_DOMAIN"] == "tenant.auth0.com"
        assert values["AUTH0_AUDIENCE"] == "https://tenant.auth0.com/api/v2/"
        default = questionary_mock.text.call_args_list[-1].kwargs["default"]
        assert default == "https://tenant.auth0.com/api/v2/"
