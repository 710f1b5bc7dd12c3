"""Stoplight analyzer: rehab-loan fundability calculator."""

from .analyzer import StoplightAnalyzer
from .models import (
    AnalysisSnapshot,
    Category,
    DerivedValues,
    FundabilityOutcome,
    InputState,
    Mode,
)

__all__ = [
    "StoplightAnalyzer",
    "AnalysisSnapshot",
    "Category",
    "DerivedValues",
    "FundabilityOutcome",
    "InputState",
    "Mode",
]

__version__ = "0.1.0"
