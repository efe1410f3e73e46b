"""Tests for CalcEngine dispatch, input normalization and error mapping.

Tests cover:
- Unit normalization to canonical units before formulas run
- Numeric parsing (strings, blanks, non-finite values)
- Select validation and text pass-through
- Exception classification at the dispatch boundary
- Non-finite results, unknown calculators and bad mode indexes
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

import pytest

from formulary.calc import (
    CalcEngine,
    CalcErrorKind,
    CalculatorRegistry,
    DegenerateComputationError,
    Domain,
    FormulaRegistry,
    InvalidInputError,
    MultiModeCalculator,
    Result,
)
from formulary.catalogs.common import mode, num, select, text

FORMULAS = FormulaRegistry()


@FORMULAS.formula("sample.echo")
def _echo(v: Mapping[str, Any]) -> Result:
    return Result(value=v["length"], unit="m", steps=(f"choice={v['choice']}", v["note"]))


@FORMULAS.formula("sample.divide")
def _divide(v: Mapping[str, Any]) -> Result:
    return Result(value=v["a"] / v["b"])


@FORMULAS.formula("sample.sqrt")
def _sqrt(v: Mapping[str, Any]) -> Result:
    return Result(value=math.sqrt(v["a"]))


@FORMULAS.formula("sample.explicit")
def _explicit(v: Mapping[str, Any]) -> Result:
    if v["a"] < 0:
        raise InvalidInputError("a", "a must be non-negative")
    if v["a"] == 0:
        raise DegenerateComputationError("a is zero")
    return Result(value=v["a"])


@FORMULAS.formula("sample.overflow")
def _overflow(v: Mapping[str, Any]) -> Result:
    return Result(value=v["a"] * 1e308 * 10)


@FORMULAS.formula("sample.broken")
def _broken(v: Mapping[str, Any]) -> Result:
    return "not a result"  # type: ignore[return-value]


# fmt: off
SAMPLE = MultiModeCalculator(
    id="sample",
    title="Sample",
    category="Test",
    domain=Domain.PHYSICS,
    solve_modes=(
        mode(
            "sample", "echo", "Echo",
            num("length", "Length", "m", 1),
            select("choice", "Choice", [("a", "Option A"), ("b", "Option B")]),
            text("note", "Note", "hello"),
        ),
        mode("sample", "divide", "Divide", num("a", "A", default=1), num("b", "B", default=1)),
        mode("sample", "sqrt", "Square root", num("a", "A", default=4)),
        mode("sample", "explicit", "Explicit", num("a", "A", default=1)),
        mode("sample", "overflow", "Overflow", num("a", "A", default=1)),
        mode("sample", "broken", "Broken", num("a", "A", default=1)),
    ),
)
# fmt: on


@pytest.fixture
def sample_engine() -> CalcEngine:
    """Engine over a registry holding only the sample calculator."""
    registry = CalculatorRegistry()
    registry.register(SAMPLE, FORMULAS)
    return CalcEngine(registry=registry.freeze())


class TestNormalization:
    """Tests for parsing and unit conversion of raw values."""

    def test_converts_to_canonical_unit(self, sample_engine: CalcEngine) -> None:
        """A value entered in km reaches the formula in metres."""
        outcome = sample_engine.evaluate(
            SAMPLE, 0, {"length": "2.5", "choice": "a"}, {"length": "km"}
        )
        assert outcome.ok
        assert outcome.result is not None
        assert outcome.result.value == pytest.approx(2500.0)

    def test_unknown_unit_passes_through(self, sample_engine: CalcEngine) -> None:
        """An unrelated unit leaves the value unchanged."""
        outcome = sample_engine.evaluate(SAMPLE, 0, {"length": 3}, {"length": "kg"})
        assert outcome.result is not None
        assert outcome.result.value == 3.0

    def test_text_and_select_defaults(self, sample_engine: CalcEngine) -> None:
        """Missing text/select values fall back to their defaults."""
        outcome = sample_engine.evaluate(SAMPLE, 0, {"length": 1})
        assert outcome.result is not None
        assert outcome.result.steps == ("choice=a", "hello")

    def test_invalid_select_value(self, sample_engine: CalcEngine) -> None:
        """A select value outside its options is invalid input."""
        outcome = sample_engine.evaluate(SAMPLE, 0, {"length": 1, "choice": "z"})
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.INVALID_INPUT
        assert outcome.error.input_name == "choice"

    @pytest.mark.parametrize("raw", [None, "", "  ", "abc", "nan", "inf", True])
    def test_bad_numbers_are_invalid_input(self, sample_engine: CalcEngine, raw: Any) -> None:
        """Missing, blank, unparseable or non-finite numbers name the input."""
        outcome = sample_engine.evaluate(SAMPLE, 1, {"a": raw, "b": 1})
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.INVALID_INPUT
        assert outcome.error.input_name == "a"

    def test_min_max_are_hints_only(self, engine: CalcEngine, registry: CalculatorRegistry) -> None:
        """Values outside an input's min/max are not clamped."""
        definition = registry.get("molarity")
        outcome = engine.evaluate(definition, 0, {"n": -1, "v": 1})  # type: ignore[arg-type]
        assert outcome.result is not None
        assert outcome.result.value == pytest.approx(-1.0)

    def test_unit_choices(self, engine: CalcEngine) -> None:
        """Numeric inputs offer every unit of their dimension."""
        spec = num("v", "Volume", "L", 1)
        assert {"L", "mL", "m³", "gal"} <= set(engine.unit_choices(spec))
        assert engine.unit_choices(num("k", "Count")) == ()
        assert engine.unit_choices(num("x", "X", "widgets")) == ("widgets",)


class TestErrorMapping:
    """Tests for exception classification at the dispatch boundary."""

    def test_zero_division_is_degenerate(self, sample_engine: CalcEngine) -> None:
        """Division by zero becomes computation_degenerate."""
        outcome = sample_engine.evaluate(SAMPLE, 1, {"a": 1, "b": 0})
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.COMPUTATION_DEGENERATE

    def test_math_domain_error_is_invalid_input(self, sample_engine: CalcEngine) -> None:
        """math.sqrt of a negative number becomes invalid_input."""
        outcome = sample_engine.evaluate(SAMPLE, 2, {"a": -4})
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.INVALID_INPUT

    def test_explicit_invalid_input(self, sample_engine: CalcEngine) -> None:
        """InvalidInputError keeps its input name."""
        outcome = sample_engine.evaluate(SAMPLE, 3, {"a": -1})
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.INVALID_INPUT
        assert outcome.error.input_name == "a"
        assert outcome.error.message == "a must be non-negative"

    def test_explicit_degenerate(self, sample_engine: CalcEngine) -> None:
        """DegenerateComputationError maps to computation_degenerate."""
        outcome = sample_engine.evaluate(SAMPLE, 3, {"a": 0})
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.COMPUTATION_DEGENERATE

    def test_non_finite_result_is_degenerate(self, sample_engine: CalcEngine) -> None:
        """An infinite numeric result is never returned as a Result."""
        outcome = sample_engine.evaluate(SAMPLE, 4, {"a": 1})
        assert outcome.result is None
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.COMPUTATION_DEGENERATE

    def test_non_result_return_is_degenerate(self, sample_engine: CalcEngine) -> None:
        """A formula returning something other than a Result fails cleanly."""
        outcome = sample_engine.evaluate(SAMPLE, 5, {"a": 1})
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.COMPUTATION_DEGENERATE

    def test_mode_out_of_range(self, sample_engine: CalcEngine) -> None:
        """An out-of-range mode index is invalid input."""
        outcome = sample_engine.evaluate(SAMPLE, 99, {})
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.INVALID_INPUT

    def test_unknown_calculator(self, sample_engine: CalcEngine) -> None:
        """evaluate_by_id reports not_found for unknown ids."""
        outcome = sample_engine.evaluate_by_id("warp-drive", 0, {})
        assert not outcome.ok
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.NOT_FOUND

    def test_unregistered_formula(self, sample_engine: CalcEngine) -> None:
        """A definition whose formula is not in the engine's registry is not_found."""
        stray = SAMPLE.model_copy(update={"id": "stray"})
        engine = CalcEngine(registry=CalculatorRegistry())
        outcome = engine.evaluate(stray, 0, {"length": 1})
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.NOT_FOUND


class TestDefaultCatalogEvaluation:
    """End-to-end evaluation through the built-in catalog."""

    def test_molarity(self, engine: CalcEngine) -> None:
        """0.5 mol in 1 L is 0.5 M."""
        outcome = engine.evaluate_by_id("molarity", 0, {"n": 0.5, "v": 1})
        assert outcome.result is not None
        assert outcome.result.value == pytest.approx(0.5)
        assert outcome.result.unit == "M"

    def test_molarity_with_millilitres(self, engine: CalcEngine) -> None:
        """Volume entered in mL is converted to litres first."""
        outcome = engine.evaluate_by_id("molarity", 0, {"n": 0.5, "v": 500}, {"v": "mL"})
        assert outcome.result is not None
        assert outcome.result.value == pytest.approx(1.0)

    def test_ideal_gas_pressure(self, engine: CalcEngine) -> None:
        """1 mol at 298 K in 22.4 L is about 1.092 atm with R = 0.0821."""
        outcome = engine.evaluate_by_id("ideal-gas", 0, {"n": 1, "T": 298, "V": 22.4})
        assert outcome.result is not None
        assert outcome.result.value == pytest.approx(1.0922, rel=1e-3)

    def test_ideal_gas_temperature_in_celsius(self, engine: CalcEngine) -> None:
        """A temperature given in °C is shifted to kelvin before solving."""
        outcome = engine.evaluate_by_id(
            "ideal-gas", 0, {"n": 1, "T": 24.85, "V": 22.4}, {"T": "°C"}
        )
        assert outcome.result is not None
        assert outcome.result.value == pytest.approx(1.0922, rel=1e-3)

    def test_outcome_serializes(self, engine: CalcEngine) -> None:
        """Outcomes dump to plain JSON-compatible data."""
        outcome = engine.evaluate_by_id("molarity", 0, {"n": 0.5, "v": 1})
        data = outcome.model_dump(mode="json")
        assert data["error"] is None
        assert data["result"]["value"] == pytest.approx(0.5)
        assert data["result"]["diagram"]["kind"] == "beaker"


class TestDeterminism:
    """Repeated evaluation of the same request."""

    @pytest.mark.parametrize(
        ("calc_id", "values", "units"),
        [
            ("molarity", {"n": 0.5, "v": 500}, {"v": "mL"}),
            ("ideal-gas", {"n": 1, "T": 24.85, "V": 22.4}, {"T": "°C"}),
            ("molarity", {"n": 0.5, "v": 0}, {}),
        ],
    )
    def test_same_request_gives_equal_outcomes(
        self, engine: CalcEngine, calc_id: str, values: dict[str, Any], units: dict[str, str]
    ) -> None:
        """Evaluating twice with identical inputs yields equal outcomes, errors included."""
        first = engine.evaluate_by_id(calc_id, 0, values, units)
        second = engine.evaluate_by_id(calc_id, 0, values, units)
        assert first == second
        assert first.model_dump(mode="json") == second.model_dump(mode="json")

    def test_evaluation_does_not_mutate_inputs(self, engine: CalcEngine) -> None:
        """Caller-owned value and unit mappings are left untouched."""
        values = {"n": "0.5", "v": 500}
        units = {"v": "mL"}
        engine.evaluate_by_id("molarity", 0, values, units)
        assert values == {"n": "0.5", "v": 500}
        assert units == {"v": "mL"}
