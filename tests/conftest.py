"""Pytest fixtures."""

import pytest

from stoplight.analyzer import StoplightAnalyzer
from stoplight.models import InputState, Mode


@pytest.fixture
def analyzer() -> StoplightAnalyzer:
    """Fresh analyzer with every amount unset."""
    return StoplightAnalyzer()


@pytest.fixture
def example_state() -> InputState:
    """Inputs after the example scenario is loaded."""
    state = InputState()
    state.load_example()
    return state


@pytest.fixture
def make_rehab_state():
    """Factory for rehab-required inputs."""

    def _make(arv=None, rehab=None, purchase=None) -> InputState:
        return InputState(
            mode=Mode.REHAB_REQUIRED,
            arv_amount=arv,
            rehab_amount=rehab,
            purchase_amount=purchase,
        )

    return _make
