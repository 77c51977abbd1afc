"""Tests for the interactive prompts (cli/prompts.py).

``questionary`` is replaced with a mock so no terminal is needed; the
tests check the mapping between choices offered and items returned.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from _helpers import identity, org

from auth0_org_cli.cli.prompts import (
    QuestionaryPrompter,
    build_organization_choices,
    build_role_choices,
)
from auth0_org_cli.core.models import AssignmentRequest, Organization, Role


class FakeChoice:
    def __init__(self, title: str, value: object) -> None:
        self.title = title
        self.value = value


def _questionary(answer: object) -> MagicMock:
    mod = MagicMock()
    mod.Choice = FakeChoice
    mod.checkbox.return_value.unsafe_ask.return_value = answer
    mod.confirm.return_value.unsafe_ask.return_value = answer
    return mod


class TestChoiceBuilders:
    def test_organization_titles_and_values(self) -> None:
        orgs = [Organization("org_1", "acme", "Acme"), Organization("org_2", "beta")]
        choices = build_organization_choices(orgs)
        assert [c.title for c in choices] == ["Acme (org_1)", "beta (org_2)"]
        assert [c.value for c in choices] == orgs

    def test_role_titles(self) -> None:
        choices = build_role_choices([Role("r1", "Admin", "All"), Role("r2", "Viewer")])
        assert [c.title for c in choices] == ["Admin - All", "Viewer"]


class TestQuestionaryPrompter:
    def test_select_organizations_returns_picked(self) -> None:
        picked = [org("org_2")]
        mod = _questionary(picked)
        with patch("auth0_org_cli.cli.prompts.questionary", mod):
            result = QuestionaryPrompter().select_organizations([org("org_1"), org("org_2")])
        assert result == picked
        choices = mod.checkbox.call_args.kwargs["choices"]
        assert len(choices) == 2

    def test_select_roles_empty(self) -> None:
        with patch("auth0_org_cli.cli.prompts.questionary", _questionary([])):
            assert QuestionaryPrompter().select_roles([Role("r", "R")]) == []

    def test_none_answer_is_empty_selection(self) -> None:
        with patch("auth0_org_cli.cli.prompts.questionary", _questionary(None)):
            assert QuestionaryPrompter().select_roles([Role("r", "R")]) == []

    @pytest.mark.parametrize(("answer", "expected"), [(True, True), (False, False), (None, False)])
    def test_confirm(self, answer: object, expected: bool) -> None:
        mod = _questionary(answer)
        request = AssignmentRequest(identity=identity(), organizations=(org("a"),))
        with patch("auth0_org_cli.cli.prompts.questionary", mod):
            assert QuestionaryPrompter().confirm(request) is expected
        assert mod.confirm.call_args.kwargs["default"] is False

    def test_ctrl_c_propagates(self) -> None:
        mod = _questionary(None)
        mod.checkbox.return_value.unsafe_ask.side_effect = KeyboardInterrupt
        with patch("auth0_org_cli.cli.prompts.questionary", mod):
            with pytest.raises(KeyboardInterrupt):
                QuestionaryPrompter().select_organizations([org("a")])

    def test_confirm_asks_a_single_question(self) -> None:
        mod = _questionary(True)
        request = AssignmentRequest(identity=identity(), organizations=(org("a"), org("b")))
        with patch("auth0_org_cli.cli.prompts.questionary", mod):
            QuestionaryPrompter().confirm(request)
        message = mod.confirm.call_args.args[0]
        assert message == "Add jane@example.com to 2 organizations?"
        assert message.count("?") == 1
