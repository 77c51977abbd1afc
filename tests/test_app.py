"""Tests for command routing and the top-level error boundary (cli/app.py)."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from auth0_org_cli.cli import exit_codes
from auth0_org_cli.cli.app import _handle_assign, cli, exit_code_for, main
from auth0_org_cli.core.workflow import WorkflowOutcome, WorkflowResult
from auth0_org_cli.exceptions import (
    AmbiguousResultError,
    ConfigurationError,
    InvalidInputError,
    RemoteApiError,
)


@pytest.fixture()
def configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTH0_DOMAIN", "tenant.auth0.com")
    monkeypatch.setenv("AUTH0_MANAGEMENT_TOKEN", "tok")


@pytest.fixture()
def recording_console() -> Iterator[Console]:
    console = Console(record=True, width=120, color_system=None)
    with patch("auth0_org_cli.cli.app.console", console):
        yield console


def _patched_workflow(outcome: WorkflowOutcome) -> MagicMock:
    workflow_cls = MagicMock()
    workflow_cls.return_value.run.return_value = WorkflowResult(outcome)
    return workflow_cls


class TestMainRouting:
    def test_missing_target_is_usage_error(self, recording_console: Console) -> None:
        assert main([]) == exit_codes.USAGE_ERROR
        assert "email address is required" in recording_console.export_text()

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "auth0-org-cli 1.0.0" in capsys.readouterr().out

    def test_doctor_dispatch(self) -> None:
        with patch("auth0_org_cli.cli.app._handle_doctor", return_value=0) as handler:
            assert main(["doctor", "--env-file", "other.env"]) == 0
        handler.assert_called_once_with("other.env")

    def test_setup_dispatch_is_case_insensitive(self) -> None:
        with patch("auth0_org_cli.cli.app._handle_setup", return_value=0) as handler:
            assert main([" Setup "]) == 0
        handler.assert_called_once_with(".env")

    def test_email_dispatch(self) -> None:
        with patch("auth0_org_cli.cli.app._handle_assign", return_value=1) as handler:
            assert main(["jane@example.com"]) == 1
        handler.assert_called_once_with("jane@example.com", ".env")


class TestHandleAssign:
    def test_invalid_email_checked_before_config(self) -> None:
        with patch("auth0_org_cli.config.load_settings") as load:
            with pytest.raises(InvalidInputError, match="Invalid email format") as exc_info:
                _handle_assign("not-an-email", ".env")
        load.assert_not_called()
        assert exc_info.value.hint == "Usage: auth0-org-cli <email>"

    def test_missing_configuration(self) -> None:
        with pytest.raises(ConfigurationError):
            _handle_assign("jane@example.com", ".env")

    @pytest.mark.parametrize(
        ("outcome", "expected"),
        [
            (WorkflowOutcome.COMPLETED, exit_codes.SUCCESS),
            (WorkflowOutcome.CANCELLED, exit_codes.SUCCESS),
            (WorkflowOutcome.NO_ORGANIZATIONS_SELECTED, exit_codes.SUCCESS),
            (WorkflowOutcome.USER_NOT_FOUND, exit_codes.GENERAL_ERROR),
        ],
    )
    def test_outcome_to_exit_code(
        self, configured: None, outcome: WorkflowOutcome, expected: int,
    ) -> None:
        workflow_cls = _patched_workflow(outcome)
        with (
            patch("auth0_org_cli.infra.management_api.ManagementApiClient") as client_cls,
            patch("auth0_org_cli.core.workflow.AssignmentWorkflow", workflow_cls),
        ):
            assert _handle_assign("Jane@Example.com", ".env") == expected

        client_cls.return_value.__exit__.assert_called_once()
        workflow_cls.return_value.run.assert_called_once_with("Jane@Example.com")


class TestExitCodeFor:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (InvalidInputError("bad"), exit_codes.USAGE_ERROR),
            (ConfigurationError("missing"), exit_codes.CONFIGURATION_ERROR),
            (RemoteApiError("denied", 403), exit_codes.GENERAL_ERROR),
            (AmbiguousResultError("two users"), exit_codes.GENERAL_ERROR),
        ],
    )
    def test_mapping(self, exc: Exception, expected: int) -> None:
        assert exit_code_for(exc) == expected  # type: ignore[arg-type]


class TestErrorBoundary:
    def _run(self, side_effect: object) -> int:
        with patch("auth0_org_cli.cli.app.main", side_effect=side_effect):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        return exc_info.value.code  # type: ignore[return-value]

    def test_success_code_passed_through(self, recording_console: Console) -> None:
        assert self._run([0]) == exit_codes.SUCCESS

    def test_configuration_error_with_hint(self, recording_console: Console) -> None:
        code = self._run(ConfigurationError("AUTH0_DOMAIN is required.", hint="Run setup"))
        assert code == exit_codes.CONFIGURATION_ERROR
        output = recording_console.export_text()
        assert "Error: AUTH0_DOMAIN is required." in output
        assert "Hint: Run setup" in output

    def test_remote_error(self, recording_console: Console) -> None:
        code = self._run(RemoteApiError("Unauthorized", 401))
        assert code == exit_codes.GENERAL_ERROR
        assert "Remote API Error (401): Unauthorized" in recording_console.export_text()

    def test_invalid_input(self, recording_console: Console) -> None:
        assert self._run(InvalidInputError("bad")) == exit_codes.USAGE_ERROR

    def test_keyboard_interrupt(self, recording_console: Console) -> None:
        assert self._run(KeyboardInterrupt) == exit_codes.KEYBOARD_INTERRUPT
        assert "Aborted by user." in recording_console.export_text()

    def test_unexpected_error(self, recording_console: Console) -> None:
        assert self._run(RuntimeError("boom")) == exit_codes.UNEXPECTED_ERROR
        output = recording_console.export_text()
        assert "Unexpected error." in output
        assert "RuntimeError: boom" in output
