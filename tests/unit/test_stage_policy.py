"""
Stage transition policy tests
"""

import pytest

from hiretrack.core.errors import InvalidTransitionError, UnknownStageError
from hiretrack.domain.stage import (
    Stage,
    TERMINAL_STAGES,
    TRANSITIONS,
    get_valid_next_stages,
    is_terminal,
    is_valid_transition,
)

NON_TERMINAL = [Stage.APPLIED, Stage.SCREENING, Stage.INTERVIEW, Stage.OFFER]


class TestIsValidTransition:
    @pytest.mark.parametrize(
        "current,nxt",
        [
            ("Applied", "Screening"),
            ("Screening", "Interview"),
            ("Interview", "Offer"),
            ("Offer", "Hired"),
        ],
    )
    def test_forward_edges_allowed(self, current, nxt):
        assert is_valid_transition(current, nxt) is True

    @pytest.mark.parametrize("current", NON_TERMINAL)
    def test_rejection_allowed_from_every_non_terminal_stage(self, current):
        assert is_valid_transition(current, "Rejected") is True

    @pytest.mark.parametrize("stage", list(Stage))
    def test_self_transition_never_allowed(self, stage):
        assert is_valid_transition(stage, stage) is False
        assert is_valid_transition(stage.value.lower(), stage.value.upper()) is False

    @pytest.mark.parametrize("terminal", [Stage.HIRED, Stage.REJECTED])
    @pytest.mark.parametrize("target", list(Stage))
    def test_terminal_stages_have_no_outgoing_edges(self, terminal, target):
        assert is_valid_transition(terminal, target) is False

    def test_forward_skip_rejected(self):
        assert is_valid_transition("Applied", "Offer") is False
        assert is_valid_transition("Applied", "Hired") is False
        assert is_valid_transition("Screening", "Offer") is False
        assert is_valid_transition("Interview", "Hired") is False

    def test_backward_rejected(self):
        assert is_valid_transition("Screening", "Applied") is False
        assert is_valid_transition("Offer", "Interview") is False
        assert is_valid_transition("Hired", "Offer") is False

    def test_case_insensitive(self):
        assert is_valid_transition("applied", "screening") == is_valid_transition("APPLIED", "SCREENING")
        assert is_valid_transition("SCREENING", "INTERVIEW") is True
        assert is_valid_transition("  interview ", "Offer") is True

    def test_unknown_names_are_invalid_not_errors(self):
        assert is_valid_transition("InvalidStage", "Screening") is False
        assert is_valid_transition("Applied", "Onboarding") is False
        assert is_valid_transition(None, "Screening") is False
        assert is_valid_transition("", "") is False


class TestGetValidNextStages:
    @pytest.mark.parametrize(
        "current,expected",
        [
            ("Applied", {Stage.SCREENING, Stage.REJECTED}),
            ("Screening", {Stage.INTERVIEW, Stage.REJECTED}),
            ("Interview", {Stage.OFFER, Stage.REJECTED}),
            ("Offer", {Stage.HIRED, Stage.REJECTED}),
        ],
    )
    def test_next_stages(self, current, expected):
        assert get_valid_next_stages(current) == expected

    @pytest.mark.parametrize("stage", ["Hired", "Rejected", "InvalidStage", "", None])
    def test_empty_for_terminal_and_unknown(self, stage):
        assert get_valid_next_stages(stage) == frozenset()

    def test_table_matches_policy(self):
        for current, targets in TRANSITIONS.items():
            for target in Stage:
                assert is_valid_transition(current, target) is (target in targets)

    def test_terminal_set(self):
        assert TERMINAL_STAGES == {Stage.HIRED, Stage.REJECTED}
        assert is_terminal("hired") is True
        assert is_terminal(Stage.OFFER) is False


class TestStageParse:
    def test_parse_normalizes(self):
        assert Stage.parse(" screening ") is Stage.SCREENING
        assert Stage.parse(Stage.OFFER) is Stage.OFFER

    def test_parse_unknown_fails_fast(self):
        with pytest.raises(UnknownStageError) as exc:
            Stage.parse("Onboarding")
        assert exc.value.attempted == "Onboarding"
        assert isinstance(exc.value, InvalidTransitionError)

    def test_parse_reports_current_stage(self):
        with pytest.raises(UnknownStageError) as exc:
            Stage.parse("Onboarding", current=Stage.OFFER)
        assert exc.value.context == {"current": "OFFER", "attempted": "Onboarding"}

    def test_label(self):
        assert Stage.HIRED.label == "Hired"
