"""Interactive calculator session.

Holds the working state of one calculator (active solve mode, raw values,
selected units, latest outcome) and a newest-first history of saved results.
Every input change re-evaluates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from formulary.calc.engine import CalcEngine
from formulary.calc.models import CalculatorDefinition, HistoryEntry, Result, SolveMode
from formulary.calc.outcome import EvaluationOutcome
from formulary.calc.registry import NotFound

logger = logging.getLogger(__name__)

ResultFormatter = Callable[[Result], str]


def format_result(result: Result, precision: int = 2) -> str:
    """Render a result as "<value> <unit>" for history and display."""
    if isinstance(result.value, float):
        text = f"{result.value:.{precision}f}"
    else:
        text = result.value
    return f"{text} {result.unit}".strip()


class CalculatorSession:
    """Working state for one calculator."""

    def __init__(self, definition: CalculatorDefinition, engine: CalcEngine | None = None) -> None:
        self._definition = definition
        self._engine = engine or CalcEngine()
        self._history: list[HistoryEntry] = []
        self._mode_index = 0
        self._values: dict[str, Any] = {}
        self._units: dict[str, str] = {}
        self._outcome: EvaluationOutcome | None = None
        self.activate(0)

    @classmethod
    def open(
        cls, calculator_id: str, engine: CalcEngine | None = None
    ) -> CalculatorSession | NotFound:
        """Open a session for a registered calculator id."""
        engine = engine or CalcEngine()
        definition = engine.registry.get(calculator_id)
        if isinstance(definition, NotFound):
            return definition
        return cls(definition, engine)

    @property
    def definition(self) -> CalculatorDefinition:
        return self._definition

    @property
    def mode_index(self) -> int:
        return self._mode_index

    @property
    def mode(self) -> SolveMode:
        return self._definition.mode(self._mode_index)

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)

    @property
    def units(self) -> dict[str, str]:
        return dict(self._units)

    @property
    def outcome(self) -> EvaluationOutcome | None:
        return self._outcome

    @property
    def result(self) -> Result | None:
        return self._outcome.result if self._outcome is not None else None

    @property
    def history(self) -> list[HistoryEntry]:
        return list(self._history)

    def activate(self, mode_index: int) -> EvaluationOutcome:
        """Switch solve mode, reset values and units to defaults, and evaluate.

        Raises:
            IndexError: If mode_index is out of range.
        """
        mode = self._definition.mode(mode_index)
        self._mode_index = mode_index
        self._values = dict(self._engine.default_inputs(mode))
        self._units = self._engine.default_units(mode)
        return self.evaluate()

    def set_value(self, name: str, raw: Any) -> EvaluationOutcome:
        """Set one raw input value and re-evaluate.

        Raises:
            KeyError: If the active mode has no input called `name`.
        """
        if self.mode.input(name) is None:
            raise KeyError(f"Solve mode '{self.mode.target}' has no input '{name}'")
        self._values[name] = raw
        return self.evaluate()

    def set_unit(self, name: str, unit: str) -> EvaluationOutcome:
        """Select the unit of one input and re-evaluate.

        The raw value is kept as entered; it is reinterpreted in the new unit.

        Raises:
            KeyError: If the active mode has no input called `name`.
        """
        if self.mode.input(name) is None:
            raise KeyError(f"Solve mode '{self.mode.target}' has no input '{name}'")
        self._units[name] = unit
        return self.evaluate()

    def evaluate(
        self,
        values: Mapping[str, Any] | None = None,
        units: Mapping[str, str] | None = None,
    ) -> EvaluationOutcome:
        """Evaluate the active mode, optionally merging new values and units first."""
        if values:
            self._values.update(values)
        if units:
            self._units.update(units)
        self._outcome = self._engine.evaluate(
            self._definition, self._mode_index, self._values, self._units
        )
        return self._outcome

    def save_to_history(self, formatter: ResultFormatter = format_result) -> HistoryEntry | None:
        """Prepend the current result to the history.

        Returns:
            The saved entry, or None when there is no current result.
        """
        result = self.result
        if result is None:
            return None

        inputs_text = tuple(
            f"{spec.label}: {self._values.get(spec.name)} {self._units.get(spec.name, '')}".strip()
            for spec in self.mode.inputs
        )
        entry = HistoryEntry(
            title=f"{self._definition.title} ({self.mode.label})",
            result_text=formatter(result),
            inputs_text=inputs_text,
            saved_at=datetime.now(UTC),
        )
        self._history.insert(0, entry)
        logger.debug("Saved %s to history (%d entries)", self._definition.id, len(self._history))
        return entry

    def clear_history(self) -> None:
        self._history.clear()
