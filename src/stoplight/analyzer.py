"""Live analyzer: one widget instance's inputs plus its current outcome."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .fundability import DerivationEngine, FundabilityClassifier
from .models import (
    AnalysisSnapshot,
    DerivedValues,
    FundabilityOutcome,
    InputState,
    Mode,
    WidgetSettings,
)

logger = logging.getLogger(__name__)

Listener = Callable[[AnalysisSnapshot], None]


class StoplightAnalyzer:
    """
    Owns the InputState of a single widget instance.

    Every mutator updates the inputs, recomputes derived values and the
    outcome, commits the new snapshot and only then notifies listeners.
    """

    def __init__(
        self,
        state: InputState | None = None,
        settings: WidgetSettings | None = None,
        engine: DerivationEngine | None = None,
        classifier: FundabilityClassifier | None = None,
    ) -> None:
        if state is None:
            mode = settings.default_mode if settings else Mode.REHAB_REQUIRED
            state = InputState(mode=mode)
        self._state = state
        self._engine = engine or DerivationEngine()
        self._classifier = classifier or FundabilityClassifier()
        self._listeners: list[Listener] = []
        self._snapshot = self._evaluate()

    # Read accessors

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def inputs(self) -> InputState:
        """Copy of the current inputs; mutate through the analyzer instead."""
        return self._state.copy()

    @property
    def snapshot(self) -> AnalysisSnapshot:
        return self._snapshot

    @property
    def derived(self) -> DerivedValues:
        return self._snapshot.derived

    @property
    def outcome(self) -> FundabilityOutcome:
        return self._snapshot.outcome

    # Mutators

    def set_mode(self, mode: Mode | str) -> AnalysisSnapshot:
        return self._mutate("set_mode", lambda s: s.set_mode(mode))

    def set_field(self, name: str, value: Any) -> AnalysisSnapshot:
        return self._mutate(f"set_field:{name}", lambda s: s.set_field(name, value))

    def load_example(self) -> AnalysisSnapshot:
        return self._mutate("load_example", lambda s: s.load_example())

    def clear(self) -> AnalysisSnapshot:
        return self._mutate("clear", lambda s: s.clear())

    # Observers

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for new snapshots. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _evaluate(self) -> AnalysisSnapshot:
        inputs = self._state.copy()
        derived = self._engine.derive(inputs)
        outcome = self._classifier.classify(inputs, derived)
        return AnalysisSnapshot(inputs=inputs, derived=derived, outcome=outcome)

    def _mutate(self, action: str, apply: Callable[[InputState], None]) -> AnalysisSnapshot:
        previous = self._snapshot.outcome.category
        apply(self._state)
        snapshot = self._evaluate()
        self._snapshot = snapshot
        logger.debug("%s -> %s", action, snapshot.inputs)
        if snapshot.outcome.category is not previous:
            logger.debug(
                "outcome changed: %s -> %s", previous.value, snapshot.outcome.category.value
            )
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot
