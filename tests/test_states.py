from __future__ import annotations

import pytest

from flows.errors import StateNotFoundError
from flows.states import (
    match_state,
    state_for_api,
    state_for_file,
    resolve_slug,
    state_from_slug,
    to_slug,
)


class TestMatchState:
    def test_exact_match(self) -> None:
        assert match_state("BIHAR", ["BIHAR", "ODISHA"]) == "BIHAR"

    def test_lower_request_resolves_upper_value(self) -> None:
        assert match_state("bihar", {"BIHAR"}) == "BIHAR"

    def test_upper_request_resolves_lower_value(self) -> None:
        assert match_state("BIHAR", {"bihar"}) == "bihar"

    def test_spaces_to_underscores(self) -> None:
        assert match_state("West Bengal", ["West_Bengal"]) == "West_Bengal"

    def test_underscores_to_spaces(self) -> None:
        assert match_state("WEST__BENGAL", ["WEST BENGAL"]) == "WEST BENGAL"

    def test_priority_prefers_upper_over_lower(self) -> None:
        # Both variants are stored; the upper-cased rule fires first.
        assert match_state("Bihar", ["bihar", "BIHAR"]) == "BIHAR"

    def test_exact_beats_every_variant(self) -> None:
        assert match_state("Bihar", ["BIHAR", "Bihar"]) == "Bihar"

    def test_request_is_trimmed(self) -> None:
        assert match_state("  ODISHA ", ["ODISHA"]) == "ODISHA"

    def test_not_found_reports_request_and_sample(self) -> None:
        available = [f"STATE_{i}" for i in range(15)]

        with pytest.raises(StateNotFoundError) as ctx:
            match_state("Goa", available)

        assert ctx.value.requested == "Goa"
        assert len(ctx.value.sample) == 10
        assert "Goa" in str(ctx.value)

    def test_mixed_case_and_separator_drift_is_not_matched(self) -> None:
        # Only one transformation is applied per attempt.
        with pytest.raises(StateNotFoundError):
            match_state("west_bengal", ["WEST BENGAL"])

    def test_empty_request_is_not_found(self) -> None:
        with pytest.raises(StateNotFoundError):
            match_state("   ", ["BIHAR"])


class TestStateNameHelpers:
    def test_slug_round_trip(self) -> None:
        assert to_slug("West Bengal") == "west-bengal"
        assert state_from_slug("west-bengal") == "West Bengal"

    def test_slug_resolves_to_listed_state(self) -> None:
        states = ["BIHAR", "ODISHA", "WEST BENGAL"]
        assert resolve_slug(to_slug("WEST BENGAL"), states) == "WEST BENGAL"
        assert resolve_slug("odisha", states) == "ODISHA"

    def test_unknown_or_missing_slug(self) -> None:
        assert resolve_slug("goa", ["BIHAR"]) is None
        assert resolve_slug(None, ["BIHAR"]) is None
        assert resolve_slug("", ["BIHAR"]) is None

    def test_api_and_file_forms(self) -> None:
        assert state_for_api(" Odisha ") == "ODISHA"
        assert state_for_file("West Bengal") == "WEST_BENGAL"
