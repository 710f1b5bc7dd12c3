"""Derivation engine and fundability classifier."""

from .classifier import (
    FULLY_FUNDABLE_MAX_DEPTH,
    FUNDABLE_MAX_DEPTH,
    MIN_LOAN_AMOUNT,
    FundabilityClassifier,
    classify,
)
from .derivation import DerivationEngine, derive_values

__all__ = [
    "DerivationEngine",
    "FundabilityClassifier",
    "derive_values",
    "classify",
    "MIN_LOAN_AMOUNT",
    "FULLY_FUNDABLE_MAX_DEPTH",
    "FUNDABLE_MAX_DEPTH",
]
