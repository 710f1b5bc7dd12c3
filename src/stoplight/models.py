"""Data models for scenario inputs, derived values and fundability outcomes."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any


class Mode(str, Enum):
    """Scenario variant shown by the widget."""

    REHAB_REQUIRED = "rehab_required"
    NO_REHAB = "no_rehab"


class Category(str, Enum):
    """Fundability outcome tag."""

    FULLY_FUNDABLE = "fully_fundable"
    FUNDABLE_WITH_DOWNPAYMENT = "fundable_with_downpayment"
    NOT_FUNDABLE = "not_fundable"
    NO_REHAB_FUNDED = "no_rehab_funded"
    NO_OUTCOME_YET = "no_outcome_yet"


AMOUNT_FIELDS: tuple[str, ...] = (
    "arv_amount",
    "rehab_amount",
    "purchase_amount",
    "no_rehab_value",
)

# Demo scenario behind the "Show Example" button
EXAMPLE_SCENARIO: dict[str, float] = {
    "arv_amount": 200000.0,
    "no_rehab_value": 100000.0,
    "rehab_amount": 10000.0,
    "purchase_amount": 80000.0,
}


def coerce_amount(value: Any) -> float | None:
    """Turn raw field input into a float, or None when the field is unset.

    Behaves like a browser number input: blank or unparseable text, NaN,
    infinities and integers too large for a float all read as an empty
    field.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip().replace(",", "").lstrip("$").strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(amount) or math.isinf(amount):
        return None
    return amount


def coerce_mode(mode: Mode | str) -> Mode:
    """Accept a Mode or its string value (dashes allowed)."""
    if isinstance(mode, Mode):
        return mode
    key = str(mode).strip().lower().replace("-", "_")
    try:
        return Mode(key)
    except ValueError:
        choices = ", ".join(m.value for m in Mode)
        raise ValueError(f"Unknown mode {mode!r}; expected one of: {choices}") from None


@dataclass
class InputState:
    """Raw widget inputs. Every amount is None until the user supplies it."""

    mode: Mode = Mode.REHAB_REQUIRED
    arv_amount: float | None = None
    rehab_amount: float | None = None
    purchase_amount: float | None = None
    no_rehab_value: float | None = None

    def set_mode(self, mode: Mode | str) -> None:
        self.mode = coerce_mode(mode)

    def set_field(self, name: str, value: Any) -> None:
        """Set one monetary field; empty input clears it. No bounds checks."""
        if name not in AMOUNT_FIELDS:
            raise ValueError(
                f"Unknown field {name!r}; expected one of: {', '.join(AMOUNT_FIELDS)}"
            )
        setattr(self, name, coerce_amount(value))

    def load_example(self) -> None:
        for name, value in EXAMPLE_SCENARIO.items():
            setattr(self, name, value)

    def clear(self) -> None:
        for name in AMOUNT_FIELDS:
            setattr(self, name, None)

    def copy(self) -> InputState:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "arv_amount": self.arv_amount,
            "rehab_amount": self.rehab_amount,
            "purchase_amount": self.purchase_amount,
            "no_rehab_value": self.no_rehab_value,
        }


@dataclass(frozen=True)
class DerivedValues:
    """Quantities derived from InputState. None means not computable yet."""

    as_is_value: float | None = None
    purchase_draw: float | None = None
    total_loan_amount: float | None = None
    downpayment_needed_amount: float | None = None
    depth: float | None = None
    no_rehab_loan_amount: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class FundabilityOutcome:
    """Tagged fundability result plus the values its panel displays.

    Only the payload fields relevant to ``category`` are populated; the rest
    stay None.
    """

    category: Category
    as_is_value: float | None = None
    purchase_draw: float | None = None
    rehab_amount: float | None = None
    total_loan_amount: float | None = None
    downpayment_needed_amount: float | None = None
    depth: float | None = None
    no_rehab_loan_amount: float | None = None
    reason: str | None = None

    @property
    def has_panel(self) -> bool:
        return self.category is not Category.NO_OUTCOME_YET

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"category": self.category.value}
        for f in fields(self):
            if f.name == "category":
                continue
            value = getattr(self, f.name)
            if value is not None:
                data[f.name] = value
        return data


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Inputs, derived values and outcome captured after one mutation."""

    inputs: InputState
    derived: DerivedValues
    outcome: FundabilityOutcome

    def to_dict(self) -> dict[str, Any]:
        return {
            "inputs": self.inputs.to_dict(),
            "derived": self.derived.to_dict(),
            "outcome": self.outcome.to_dict(),
        }


@dataclass
class WidgetSettings:
    """Widget behaviour settings (from config)."""

    default_mode: Mode = Mode.REHAB_REQUIRED


@dataclass
class DisplaySettings:
    """Presentation settings (from config)."""

    currency_symbol: str = "$"
    decimals: int = 2
    show_depth: bool = True
