"""Derived loan quantities for a rehab / no-rehab scenario."""

from __future__ import annotations

import logging
import math

from ..models import DerivedValues, InputState

logger = logging.getLogger(__name__)

# Fixed lending policy
AS_IS_ARV_RATE = 0.7
PURCHASE_DRAW_RATE = 0.8
NO_REHAB_LOAN_RATE = 0.7


def _finite(value: float) -> float | None:
    """Drop results that overflowed to an infinity."""
    if not math.isfinite(value):
        logger.debug("derived value overflowed: %r", value)
        return None
    return value


class DerivationEngine:
    """
    Pure formulas over the current inputs.
    Any formula with an unset input, or whose result is not finite, yields None.
    """

    def derive(self, state: InputState) -> DerivedValues:
        """Compute every derived value from a fresh read of ``state``."""
        as_is = self._as_is_value(state.arv_amount, state.rehab_amount)
        purchase_draw = self._purchase_draw(as_is)
        return DerivedValues(
            as_is_value=as_is,
            purchase_draw=purchase_draw,
            total_loan_amount=self._total_loan_amount(purchase_draw, state.rehab_amount),
            downpayment_needed_amount=self._downpayment_needed(state.purchase_amount, purchase_draw),
            depth=self._depth(state.purchase_amount, as_is),
            no_rehab_loan_amount=self._no_rehab_loan_amount(state.no_rehab_value),
        )

    def _as_is_value(self, arv: float | None, rehab: float | None) -> float | None:
        """70% of ARV less the rehab budget."""
        if arv is None or rehab is None:
            return None
        return _finite(AS_IS_ARV_RATE * arv - rehab)

    def _purchase_draw(self, as_is: float | None) -> float | None:
        if as_is is None:
            return None
        return _finite(PURCHASE_DRAW_RATE * as_is)

    def _total_loan_amount(self, purchase_draw: float | None, rehab: float | None) -> float | None:
        if purchase_draw is None or rehab is None:
            return None
        return _finite(purchase_draw + rehab)

    def _downpayment_needed(self, purchase: float | None, purchase_draw: float | None) -> float | None:
        """Negative when the purchase draw already covers the price."""
        if purchase is None or purchase_draw is None:
            return None
        return _finite(purchase - purchase_draw)

    def _depth(self, purchase: float | None, as_is: float | None) -> float | None:
        """Purchase price as a percentage of as-is value."""
        if purchase is None or as_is is None:
            return None
        if as_is <= 0:
            logger.debug("depth suppressed: as-is value %.2f is not positive", as_is)
            return None
        # ratio first: 100 * purchase can overflow for very large amounts
        return _finite(100 * (purchase / as_is))

    def _no_rehab_loan_amount(self, value: float | None) -> float | None:
        if value is None:
            return None
        return _finite(NO_REHAB_LOAN_RATE * value)


def derive_values(state: InputState) -> DerivedValues:
    """Shortcut for ``DerivationEngine().derive(state)``."""
    return DerivationEngine().derive(state)
