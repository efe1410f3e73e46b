"""Tests for FormulaRegistry and CalculatorRegistry.

Tests cover:
- Registration and lookup, NotFound sentinel for unknown ids
- Fail-loud registration errors (duplicate id, missing formula, frozen)
- Category grouping in registration order
- The built-in catalog: unique ids, every formula resolvable
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest
from pydantic import ValidationError

from formulary.calc import (
    CalculatorRegistry,
    Domain,
    DuplicateCalculatorError,
    FlatCalculator,
    FormulaRegistry,
    MissingFormulaError,
    MultiModeCalculator,
    NotFound,
    RegistryFrozenError,
    Result,
    load_definition,
)
from formulary.catalogs import build_default_registry
from formulary.catalogs.common import mode, num


def _double(values: Mapping[str, Any]) -> Result:
    return Result(value=values["x"] * 2)


def _make_calculator(calculator_id: str = "doubler", category: str = "Test") -> MultiModeCalculator:
    return MultiModeCalculator(
        id=calculator_id,
        title="Doubler",
        category=category,
        domain=Domain.PHYSICS,
        solve_modes=(mode(calculator_id, "y", "y", num("x", "x", default=1)),),
    )


@pytest.fixture
def formulas() -> FormulaRegistry:
    """Formula registry with doubler formulas for a few ids."""
    reg = FormulaRegistry()
    for calculator_id in ("doubler", "doubler-2", "doubler-3"):
        reg.register(f"{calculator_id}.y", _double)
    return reg


class TestFormulaRegistry:
    """Tests for the formula function registry."""

    def test_register_and_get(self) -> None:
        """Registered formulas are retrievable by id."""
        reg = FormulaRegistry()
        reg.register("doubler.y", _double)
        assert "doubler.y" in reg
        assert reg.get("doubler.y") is _double
        assert reg.get("missing") is None
        assert len(reg) == 1

    def test_decorator_registers(self) -> None:
        """The formula decorator registers and returns the function unchanged."""
        reg = FormulaRegistry()

        @reg.formula("half.y")
        def _half(values: Mapping[str, Any]) -> Result:
            return Result(value=values["x"] / 2)

        assert reg.get("half.y") is _half
        assert "half.y" in reg
        assert len(reg) == 1

    def test_duplicate_formula_rejected(self) -> None:
        """A formula id can only be registered once."""
        reg = FormulaRegistry()
        reg.register("doubler.y", _double)
        with pytest.raises(ValueError, match="already registered"):
            reg.register("doubler.y", _double)

    def test_registered_formulas_are_immutable(self) -> None:
        """A failed re-registration leaves the original function in place."""
        reg = FormulaRegistry()
        reg.register("doubler.y", _double)
        with pytest.raises(ValueError):
            reg.register("doubler.y", lambda values: Result(value=0.0))
        assert reg.get("doubler.y") is _double


class TestCalculatorRegistry:
    """Tests for calculator registration and lookup."""

    def test_register_and_lookup(self, formulas: FormulaRegistry) -> None:
        """A registered calculator is found by id."""
        registry = CalculatorRegistry()
        calculator = _make_calculator()
        registry.register(calculator, formulas)

        assert "doubler" in registry
        assert registry.get("doubler") is calculator
        assert registry.resolve_formula("doubler.y") is _double
        assert registry.list_ids() == ["doubler"]

    def test_unknown_id_returns_not_found(self) -> None:
        """Lookup of an unknown id returns a falsy NotFound, never raises."""
        result = CalculatorRegistry().get("warp-drive")
        assert isinstance(result, NotFound)
        assert result.calculator_id == "warp-drive"
        assert not result

    def test_duplicate_id_rejected(self, formulas: FormulaRegistry) -> None:
        """Registering the same id twice fails loudly."""
        registry = CalculatorRegistry()
        registry.register(_make_calculator(), formulas)
        with pytest.raises(DuplicateCalculatorError) as exc_info:
            registry.register(_make_calculator(), formulas)
        assert exc_info.value.calculator_id == "doubler"

    def test_missing_formula_rejected(self) -> None:
        """A solve mode whose formula is not provided cannot be registered."""
        registry = CalculatorRegistry()
        with pytest.raises(MissingFormulaError) as exc_info:
            registry.register(_make_calculator(), FormulaRegistry())
        assert exc_info.value.formula_id == "doubler.y"
        assert "doubler" not in registry

    def test_plain_mapping_as_formula_source(self) -> None:
        """Formulas may also come from a plain dict."""
        registry = CalculatorRegistry()
        registry.register(_make_calculator(), {"doubler.y": _double})
        assert registry.resolve_formula("doubler.y") is _double

    def test_frozen_registry_rejects_registration(self, formulas: FormulaRegistry) -> None:
        """freeze() blocks further registration."""
        registry = CalculatorRegistry().freeze()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(_make_calculator(), formulas)

    def test_by_category_preserves_order(self, formulas: FormulaRegistry) -> None:
        """Categories and calculators keep registration order."""
        registry = CalculatorRegistry()
        registry.register_catalog(
            [
                _make_calculator("doubler", category="Mechanics"),
                _make_calculator("doubler-2", category="Optics"),
                _make_calculator("doubler-3", category="Mechanics"),
            ],
            formulas,
        )
        grouped = registry.by_category()
        assert list(grouped) == ["Mechanics", "Optics"]
        assert [d.id for d in grouped["Mechanics"]] == ["doubler", "doubler-3"]

    def test_definitions_filter_by_domain(self, formulas: FormulaRegistry) -> None:
        """definitions() filters by domain name or enum."""
        registry = CalculatorRegistry()
        registry.register(_make_calculator(), formulas)
        assert len(registry.definitions("physics")) == 1
        assert registry.definitions(Domain.FINANCE) == []


class TestDefinitionModels:
    """Tests for definition validation and the tagged union."""

    def test_flat_calculator_has_one_synthesized_mode(self) -> None:
        """A flat calculator exposes one mode targeting its own id."""
        flat = FlatCalculator(
            id="tip",
            title="Tip",
            category="Everyday",
            domain=Domain.EVERYDAY,
            inputs=(num("bill", "Bill", "$", default=50),),
            formula_id="tip.tip",
        )
        (only,) = flat.modes()
        assert only.target == "tip"
        assert flat.list_inputs()[0].name == "bill"

    def test_mode_index_out_of_range(self) -> None:
        """mode() raises IndexError for negative or too-large indexes."""
        calculator = _make_calculator()
        with pytest.raises(IndexError):
            calculator.mode(1)
        with pytest.raises(IndexError):
            calculator.mode(-1)

    def test_load_definition_dispatches_on_shape(self) -> None:
        """load_definition picks the model from the 'shape' discriminator."""
        data = _make_calculator().model_dump(mode="json")
        loaded = load_definition(data)
        assert isinstance(loaded, MultiModeCalculator)
        assert loaded == _make_calculator()

    def test_invalid_id_rejected(self) -> None:
        """Calculator ids must be URL-safe."""
        with pytest.raises(ValidationError):
            _make_calculator("Not Valid")

    def test_models_are_frozen(self) -> None:
        """Definitions are immutable."""
        calculator = _make_calculator()
        with pytest.raises(ValidationError):
            calculator.title = "Changed"  # type: ignore[misc]


class TestDefaultCatalog:
    """Tests for the built-in catalog."""

    def test_build_is_frozen_and_populated(self) -> None:
        """The default registry is frozen and holds every domain."""
        registry = build_default_registry()
        assert registry.frozen
        domains = {definition.domain for definition in registry.definitions()}
        assert domains == set(Domain)

    def test_every_mode_resolves(self, registry: CalculatorRegistry) -> None:
        """Every solve mode's formula is registered."""
        for definition in registry.definitions():
            for solve_mode in definition.modes():
                assert registry.resolve_formula(solve_mode.formula_id) is not None, (
                    definition.id,
                    solve_mode.target,
                )

    def test_ideal_gas_registered_once(self, registry: CalculatorRegistry) -> None:
        """The ideal gas calculator lives under chemistry only."""
        ideal_gas = registry.get("ideal-gas")
        assert not isinstance(ideal_gas, NotFound)
        assert ideal_gas.domain == Domain.CHEMISTRY

    @pytest.mark.parametrize(
        "calculator_id",
        ["kinematics", "molarity", "great-circle", "loan-payment", "bmi", "temperature-converter",
         "probability-distributions"],
    )
    def test_known_calculators_present(
        self, registry: CalculatorRegistry, calculator_id: str
    ) -> None:
        """A sample of calculators from each domain is registered."""
        assert calculator_id in registry
