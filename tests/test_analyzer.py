"""Tests for input state and the live analyzer."""

import math

import pytest

from stoplight.analyzer import StoplightAnalyzer
from stoplight.models import (
    AMOUNT_FIELDS,
    Category,
    InputState,
    Mode,
    WidgetSettings,
    coerce_amount,
)


class TestInputState:
    """Tests for InputState mutators."""

    def test_initial_state(self) -> None:
        state = InputState()
        assert state.mode is Mode.REHAB_REQUIRED
        assert all(getattr(state, name) is None for name in AMOUNT_FIELDS)

    def test_load_example_keeps_mode(self) -> None:
        state = InputState(mode=Mode.NO_REHAB)
        state.load_example()
        assert state.mode is Mode.NO_REHAB
        assert state.arv_amount == 200000
        assert state.no_rehab_value == 100000
        assert state.rehab_amount == 10000
        assert state.purchase_amount == 80000

    def test_clear_is_idempotent(self, example_state: InputState) -> None:
        example_state.set_mode("no_rehab")
        example_state.clear()
        once = example_state.copy()
        example_state.clear()
        assert example_state == once
        assert example_state.mode is Mode.NO_REHAB
        assert all(getattr(example_state, name) is None for name in AMOUNT_FIELDS)

    def test_set_field_accepts_small_and_negative(self) -> None:
        state = InputState()
        state.set_field("rehab_amount", -500)
        state.set_field("purchase_amount", 5)
        assert state.rehab_amount == -500
        assert state.purchase_amount == 5

    def test_set_field_unknown_name(self) -> None:
        with pytest.raises(ValueError):
            InputState().set_field("price", 1000)

    def test_set_mode_unknown(self) -> None:
        with pytest.raises(ValueError):
            InputState().set_mode("flip")

    def test_set_mode_accepts_dashes(self) -> None:
        state = InputState()
        state.set_mode("no-rehab")
        assert state.mode is Mode.NO_REHAB

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, None),
            ("", None),
            ("   ", None),
            ("abc", None),
            (math.nan, None),
            (math.inf, None),
            (True, None),
            ("200000", 200000.0),
            ("$200,000", 200000.0),
            (" 80000.50 ", 80000.5),
            (10000, 10000.0),
            (10**400, None),
        ],
    )
    def test_coerce_amount(self, raw, expected) -> None:
        assert coerce_amount(raw) == expected


class TestStoplightAnalyzer:
    """Tests for recomputation, observers and instance isolation."""

    def test_starts_with_no_outcome(self, analyzer: StoplightAnalyzer) -> None:
        assert analyzer.outcome.category is Category.NO_OUTCOME_YET
        assert analyzer.derived.depth is None

    def test_default_mode_from_settings(self) -> None:
        analyzer = StoplightAnalyzer(settings=WidgetSettings(default_mode=Mode.NO_REHAB))
        assert analyzer.mode is Mode.NO_REHAB

    def test_load_example_recomputes(self, analyzer: StoplightAnalyzer) -> None:
        snapshot = analyzer.load_example()
        assert snapshot is analyzer.snapshot
        assert analyzer.outcome.category is Category.FULLY_FUNDABLE
        assert analyzer.derived.total_loan_amount == pytest.approx(114000)

    def test_each_field_edit_recomputes(self, analyzer: StoplightAnalyzer) -> None:
        analyzer.set_field("arv_amount", 200000)
        analyzer.set_field("rehab_amount", 10000)
        assert analyzer.outcome.reason == "missing_inputs"
        analyzer.set_field("purchase_amount", 120000)
        assert analyzer.outcome.category is Category.FUNDABLE_WITH_DOWNPAYMENT
        analyzer.set_field("purchase_amount", 140000)
        assert analyzer.outcome.category is Category.NOT_FUNDABLE
        analyzer.set_field("purchase_amount", "")
        assert analyzer.outcome.category is Category.NO_OUTCOME_YET

    def test_clear_removes_outcome(self, analyzer: StoplightAnalyzer) -> None:
        analyzer.load_example()
        analyzer.clear()
        assert analyzer.outcome.category is Category.NO_OUTCOME_YET
        assert analyzer.mode is Mode.REHAB_REQUIRED

    def test_mode_switch_preserves_fields(self, analyzer: StoplightAnalyzer) -> None:
        analyzer.set_field("arv_amount", 200000)
        analyzer.set_field("rehab_amount", 10000)
        analyzer.set_field("purchase_amount", 120000)
        before = analyzer.outcome

        analyzer.set_mode(Mode.NO_REHAB)
        assert analyzer.outcome.category is Category.NO_OUTCOME_YET
        assert analyzer.inputs.purchase_amount == 120000

        analyzer.set_field("no_rehab_value", 100000)
        assert analyzer.outcome.category is Category.NO_REHAB_FUNDED

        analyzer.set_mode(Mode.REHAB_REQUIRED)
        assert analyzer.outcome == before
        assert analyzer.inputs.no_rehab_value == 100000

    def test_listener_sees_committed_snapshot(self, analyzer: StoplightAnalyzer) -> None:
        seen = []

        def listener(snapshot) -> None:
            assert analyzer.snapshot is snapshot
            seen.append(snapshot.outcome.category)

        analyzer.subscribe(listener)
        analyzer.load_example()
        analyzer.set_mode("no_rehab")
        analyzer.clear()
        assert seen == [
            Category.FULLY_FUNDABLE,
            Category.NO_REHAB_FUNDED,
            Category.NO_OUTCOME_YET,
        ]

    def test_unsubscribe(self, analyzer: StoplightAnalyzer) -> None:
        calls = []
        unsubscribe = analyzer.subscribe(calls.append)
        analyzer.load_example()
        unsubscribe()
        unsubscribe()
        analyzer.clear()
        assert len(calls) == 1

    def test_bad_field_leaves_state_untouched(self, analyzer: StoplightAnalyzer) -> None:
        calls = []
        analyzer.subscribe(calls.append)
        analyzer.load_example()
        before = analyzer.snapshot
        with pytest.raises(ValueError):
            analyzer.set_field("price", 1)
        assert analyzer.snapshot is before
        assert len(calls) == 1

    def test_inputs_is_a_copy(self, analyzer: StoplightAnalyzer) -> None:
        analyzer.load_example()
        inputs = analyzer.inputs
        inputs.clear()
        assert analyzer.inputs.arv_amount == 200000
        assert analyzer.outcome.category is Category.FULLY_FUNDABLE

    def test_instances_are_independent(self) -> None:
        first = StoplightAnalyzer()
        second = StoplightAnalyzer()
        first.load_example()
        assert second.outcome.category is Category.NO_OUTCOME_YET
        assert second.inputs.arv_amount is None

    def test_outcome_matches_fresh_evaluation(self, analyzer: StoplightAnalyzer) -> None:
        steps = [
            ("arv_amount", 250000),
            ("rehab_amount", 25000),
            ("purchase_amount", 100000),
            ("purchase_amount", 130000),
            ("rehab_amount", 0),
        ]
        for name, value in steps:
            analyzer.set_field(name, value)
            fresh = StoplightAnalyzer(state=analyzer.inputs)
            assert analyzer.outcome == fresh.outcome
            assert analyzer.derived == fresh.derived
