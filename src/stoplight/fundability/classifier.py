"""Fundability decision: bucket a scenario by depth into a stoplight category."""

from __future__ import annotations

from ..models import Category, DerivedValues, FundabilityOutcome, InputState, Mode

MIN_LOAN_AMOUNT = 10000
FULLY_FUNDABLE_MAX_DEPTH = 80
FUNDABLE_MAX_DEPTH = 100


class FundabilityClassifier:
    """
    Maps derived values (plus the active mode) to a FundabilityOutcome.
    Guards run first; any failing guard means there is nothing to show yet.
    """

    def classify(self, state: InputState, derived: DerivedValues) -> FundabilityOutcome:
        if state.mode is Mode.NO_REHAB:
            return self._classify_no_rehab(derived)
        return self._classify_rehab(state, derived)

    def _classify_rehab(self, state: InputState, derived: DerivedValues) -> FundabilityOutcome:
        reason = self._rehab_guard(state, derived)
        if reason is not None:
            return FundabilityOutcome(category=Category.NO_OUTCOME_YET, reason=reason)

        depth = derived.depth
        if depth <= FULLY_FUNDABLE_MAX_DEPTH:
            return FundabilityOutcome(
                category=Category.FULLY_FUNDABLE,
                as_is_value=derived.as_is_value,
                purchase_draw=derived.purchase_draw,
                rehab_amount=state.rehab_amount,
                total_loan_amount=derived.total_loan_amount,
                depth=depth,
            )
        if depth <= FUNDABLE_MAX_DEPTH:
            return FundabilityOutcome(
                category=Category.FUNDABLE_WITH_DOWNPAYMENT,
                as_is_value=derived.as_is_value,
                downpayment_needed_amount=derived.downpayment_needed_amount,
                purchase_draw=derived.purchase_draw,
                rehab_amount=state.rehab_amount,
                total_loan_amount=derived.total_loan_amount,
                depth=depth,
            )
        return FundabilityOutcome(
            category=Category.NOT_FUNDABLE,
            as_is_value=derived.as_is_value,
            depth=depth,
        )

    def _rehab_guard(self, state: InputState, derived: DerivedValues) -> str | None:
        """Return why no outcome can be shown, or None when all guards pass."""
        if derived.total_loan_amount is None:
            return "missing_inputs"
        if derived.total_loan_amount <= MIN_LOAN_AMOUNT:
            return "loan_below_minimum"
        if state.rehab_amount is None or state.rehab_amount <= 0:
            return "rehab_not_positive"
        if state.purchase_amount is None:
            return "missing_inputs"
        if state.purchase_amount <= MIN_LOAN_AMOUNT:
            return "purchase_below_minimum"
        if derived.depth is None:
            return "as_is_not_positive"
        return None

    def _classify_no_rehab(self, derived: DerivedValues) -> FundabilityOutcome:
        loan = derived.no_rehab_loan_amount
        if loan is None:
            return FundabilityOutcome(category=Category.NO_OUTCOME_YET, reason="missing_inputs")
        if loan <= MIN_LOAN_AMOUNT:
            return FundabilityOutcome(category=Category.NO_OUTCOME_YET, reason="loan_below_minimum")
        return FundabilityOutcome(category=Category.NO_REHAB_FUNDED, no_rehab_loan_amount=loan)


def classify(state: InputState, derived: DerivedValues) -> FundabilityOutcome:
    """Shortcut for ``FundabilityClassifier().classify(state, derived)``."""
    return FundabilityClassifier().classify(state, derived)
