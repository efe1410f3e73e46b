"""Calculation engine.

CalcEngine turns raw user values into normalized formula inputs, invokes the
formula for the selected solve mode, and returns an EvaluationOutcome. No
exception raised while parsing, converting or computing escapes evaluate().
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from formulary.calc.models import Evaluable, InputKind, InputSpec, Result, SolveMode
from formulary.calc.outcome import (
    CalcError,
    CalcErrorKind,
    EvaluationOutcome,
    InvalidInputError,
)
from formulary.calc.registry import CalculatorRegistry, NotFound
from formulary.units import SCIENCE_UNITS, UnitConverter, UnitTable

logger = logging.getLogger(__name__)


def _parse_number(spec: InputSpec, raw: Any) -> float:
    if raw is None:
        raise InvalidInputError(spec.name, f"Missing value for '{spec.label}'")
    if isinstance(raw, bool):
        raise InvalidInputError(spec.name, f"'{spec.label}' must be a number")
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise InvalidInputError(spec.name, f"Missing value for '{spec.label}'")
        try:
            value = float(text)
        except ValueError:
            raise InvalidInputError(
                spec.name, f"'{spec.label}' must be a number, got {raw!r}"
            ) from None
    else:
        raise InvalidInputError(spec.name, f"'{spec.label}' must be a number")

    if not math.isfinite(value):
        raise InvalidInputError(spec.name, f"'{spec.label}' must be finite")
    return value


class CalcEngine:
    """Evaluates calculator solve modes.

    Numeric inputs are converted from the unit the user selected to the
    input's canonical unit before the formula runs. Text and select inputs
    pass through as strings.
    """

    def __init__(
        self,
        registry: CalculatorRegistry | None = None,
        units: UnitTable = SCIENCE_UNITS,
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Calculator registry used to resolve formulas. Defaults
                to the built-in catalog.
            units: Unit table used for input normalization.
        """
        if registry is None:
            from formulary.catalogs import get_default_registry

            registry = get_default_registry()
        self._registry = registry
        self._converter = UnitConverter(units)

    @property
    def registry(self) -> CalculatorRegistry:
        return self._registry

    @property
    def converter(self) -> UnitConverter:
        return self._converter

    def default_inputs(self, mode: SolveMode) -> dict[str, float | str]:
        """Working values for a freshly activated solve mode."""
        return {spec.name: spec.default_value for spec in mode.inputs}

    def default_units(self, mode: SolveMode) -> dict[str, str]:
        """Selected units for a freshly activated solve mode (the canonical ones)."""
        return {spec.name: spec.unit for spec in mode.inputs if spec.unit}

    def unit_choices(self, spec: InputSpec) -> tuple[str, ...]:
        """Units a user may pick for an input.

        Inputs without a unit, or whose unit is not in the table, only offer
        their canonical unit.
        """
        if spec.kind != InputKind.NUMBER or not spec.unit:
            return (spec.unit,) if spec.unit else ()
        return self._converter.table.compatible_units(spec.unit)

    def normalize_inputs(
        self,
        mode: SolveMode,
        values: Mapping[str, Any],
        units: Mapping[str, str] | None = None,
    ) -> dict[str, float | str]:
        """Parse raw values and convert them to canonical units.

        Args:
            mode: Solve mode whose inputs are being normalized.
            values: Raw values keyed by input name (numbers or strings).
            units: Selected unit per input name; missing entries mean the
                canonical unit.

        Returns:
            Normalized values keyed by input name.

        Raises:
            InvalidInputError: If a numeric value is missing or unparseable,
                or a select value is not one of the options.
        """
        units = units or {}
        normalized: dict[str, float | str] = {}

        for spec in mode.inputs:
            raw = values.get(spec.name)
            if spec.kind == InputKind.NUMBER:
                value = _parse_number(spec, raw)
                selected = units.get(spec.name) or spec.unit
                if spec.unit and selected != spec.unit:
                    value = self._converter.convert(value, selected, spec.unit)
                normalized[spec.name] = value
                continue

            text = str(spec.default_value) if raw is None else str(raw)
            if spec.kind == InputKind.SELECT and text not in spec.option_values:
                raise InvalidInputError(
                    spec.name, f"'{spec.label}' must be one of {list(spec.option_values)}"
                )
            normalized[spec.name] = text

        return normalized

    def evaluate(
        self,
        definition: Evaluable,
        mode_index: int,
        values: Mapping[str, Any],
        units: Mapping[str, str] | None = None,
    ) -> EvaluationOutcome:
        """Evaluate one solve mode of a calculator.

        Args:
            definition: Calculator to evaluate.
            mode_index: Index of the solve mode.
            values: Raw values keyed by input name.
            units: Selected unit per input name.

        Returns:
            EvaluationOutcome with a Result, or a CalcError describing why
            no result could be produced.
        """
        try:
            mode = definition.mode(mode_index)
        except IndexError as exc:
            return EvaluationOutcome.failure(CalcErrorKind.INVALID_INPUT, str(exc))

        formula = self._registry.resolve_formula(mode.formula_id)
        if formula is None:
            return EvaluationOutcome.failure(
                CalcErrorKind.NOT_FOUND, f"No formula registered for '{mode.formula_id}'"
            )

        try:
            normalized = self.normalize_inputs(mode, values, units)
        except InvalidInputError as exc:
            return EvaluationOutcome.failure(
                CalcErrorKind.INVALID_INPUT, exc.message, input_name=exc.input_name
            )

        try:
            result = formula(MappingProxyType(normalized))
        except Exception as exc:
            error = CalcError.from_exception(exc)
            logger.debug(
                "Formula %s failed (%s): %s", mode.formula_id, error.kind.value, error.message
            )
            return EvaluationOutcome(error=error)

        if not isinstance(result, Result):
            logger.warning(
                "Formula %s returned %s instead of a Result", mode.formula_id, type(result)
            )
            return EvaluationOutcome.failure(
                CalcErrorKind.COMPUTATION_DEGENERATE,
                f"Formula '{mode.formula_id}' produced no result",
            )

        if isinstance(result.value, float) and not math.isfinite(result.value):
            return EvaluationOutcome.failure(
                CalcErrorKind.COMPUTATION_DEGENERATE,
                f"{definition.title}: result is not a finite number",
            )

        return EvaluationOutcome.success(result)

    def evaluate_by_id(
        self,
        calculator_id: str,
        mode_index: int,
        values: Mapping[str, Any],
        units: Mapping[str, str] | None = None,
    ) -> EvaluationOutcome:
        """Look up a calculator in the registry and evaluate it."""
        definition = self._registry.get(calculator_id)
        if isinstance(definition, NotFound):
            return EvaluationOutcome.failure(
                CalcErrorKind.NOT_FOUND, f"Unknown calculator '{calculator_id}'"
            )
        return self.evaluate(definition, mode_index, values, units)
