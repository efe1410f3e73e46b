"""Tests for the physics, chemistry and geography catalogs.

Each test evaluates a calculator through the engine with known inputs and
checks the primary value against a hand-computed figure.
"""

from __future__ import annotations

from typing import Any

import pytest

from formulary.calc import CalcEngine, CalcError, CalcErrorKind, DiagramKind, Result
from formulary.catalogs.chemistry import ATOMIC_MASSES, molar_mass
from formulary.catalogs.geography import haversine_km, initial_bearing, to_dms


def _result(
    engine: CalcEngine,
    calculator_id: str,
    values: dict[str, Any],
    mode_index: int = 0,
    units: dict[str, str] | None = None,
) -> Result:
    outcome = engine.evaluate_by_id(calculator_id, mode_index, values, units)
    assert outcome.result is not None, outcome.error
    return outcome.result


def _error(
    engine: CalcEngine, calculator_id: str, values: dict[str, Any], mode_index: int = 0
) -> CalcError:
    outcome = engine.evaluate_by_id(calculator_id, mode_index, values)
    assert outcome.error is not None, outcome.result
    return outcome.error


class TestPhysics:
    """Tests for physics formulas."""

    def test_displacement(self, engine: CalcEngine) -> None:
        """s = ut + ½at²."""
        result = _result(engine, "kinematics", {"u": 0, "t": 10, "a": 2})
        assert result.value == pytest.approx(100.0)
        assert result.unit == "m"

    def test_ohms_law(self, engine: CalcEngine) -> None:
        """V = IR, with a circuit diagram."""
        result = _result(engine, "ohms-law", {"i": 2, "r": 10})
        assert result.value == pytest.approx(20.0)
        assert result.diagram is not None
        assert result.diagram.kind == DiagramKind.CIRCUIT

    def test_ohms_law_current_zero_resistance(self, engine: CalcEngine) -> None:
        """I = V/R with R = 0 is degenerate."""
        error = _error(engine, "ohms-law", {"v": 12, "r": 0}, mode_index=1)
        assert error.kind == CalcErrorKind.COMPUTATION_DEGENERATE

    def test_diffraction_angle(self, engine: CalcEngine) -> None:
        """532 nm through a 2 µm grating diffracts at about 15.4°."""
        result = _result(engine, "diffraction", {"d": 2, "lam": 532, "n": 1})
        assert result.value == pytest.approx(15.43, abs=0.01)
        assert result.unit == "deg"

    def test_diffraction_impossible_geometry(self, engine: CalcEngine) -> None:
        """sin θ > 1 yields a textual result, not an error."""
        result = _result(engine, "diffraction", {"d": 0.5, "lam": 600, "n": 1})
        assert result.value == "Impossible geometry"
        assert not result.is_numeric

    def test_half_life(self, engine: CalcEngine) -> None:
        """After one half-life half the sample remains."""
        result = _result(engine, "radioactive-decay", {"n0": 100, "half": 5730, "t": 5730})
        assert result.value == pytest.approx(50.0)

    def test_projectile_trajectory_samples(self, engine: CalcEngine) -> None:
        """A 45° launch from the ground travels v²/g."""
        result = _result(engine, "projectile-motion", {"v0": 20, "angle": 45, "h0": 0})
        assert result.value == pytest.approx(400 / 9.81, rel=1e-6)
        assert result.diagram is not None
        assert result.diagram.kind == DiagramKind.PROJECTILE


class TestChemistry:
    """Tests for chemistry formulas."""

    def test_moles_from_molarity(self, engine: CalcEngine) -> None:
        """n = M × V."""
        result = _result(engine, "molarity", {"M": 2, "v": 0.25}, mode_index=1)
        assert result.value == pytest.approx(0.5)
        assert result.unit == "mol"

    def test_ph(self, engine: CalcEngine) -> None:
        """pH of 1e-3 M H+ is 3."""
        result = _result(engine, "ph-calc", {"h": 1e-3})
        assert result.value == pytest.approx(3.0)

    def test_ph_rejects_non_positive_concentration(self, engine: CalcEngine) -> None:
        """log of zero concentration is invalid input on 'h'."""
        error = _error(engine, "ph-calc", {"h": 0})
        assert error.kind == CalcErrorKind.INVALID_INPUT
        assert error.input_name == "h"

    @pytest.mark.parametrize(
        ("mol_a", "mol_b", "expected"),
        [(2, 1, "Reactant B"), (1, 2, "Reactant A")],
    )
    def test_limiting_reagent(
        self, engine: CalcEngine, mol_a: float, mol_b: float, expected: str
    ) -> None:
        """The reactant with the lower mole/coefficient ratio limits."""
        result = _result(
            engine, "limiting-reagent", {"molA": mol_a, "coeffA": 1, "molB": mol_b, "coeffB": 1}
        )
        assert result.value == expected
        assert result.unit == "is Limiting"

    def test_molar_mass_mode(self, engine: CalcEngine) -> None:
        """The formula mode parses a chemical formula."""
        result = _result(engine, "moles-grams", {"formula": "H2O"}, mode_index=2)
        assert result.value == pytest.approx(18.015)
        assert result.unit == "g/mol"

    def test_molar_mass_mode_unknown_element(self, engine: CalcEngine) -> None:
        """Unknown elements are invalid input on the formula field."""
        error = _error(engine, "moles-grams", {"formula": "Xy2"}, mode_index=2)
        assert error.kind == CalcErrorKind.INVALID_INPUT
        assert error.input_name == "formula"


class TestMolarMass:
    """Tests for the chemical formula parser."""

    @pytest.mark.parametrize(
        ("formula", "expected"),
        [
            ("H2O", 2 * 1.008 + 15.999),
            ("NaCl", 22.990 + 35.45),
            ("Ca(OH)2", 40.078 + 2 * (15.999 + 1.008)),
            ("C6H12O6", 6 * 12.011 + 12 * 1.008 + 6 * 15.999),
            ("Fe 2 O3", 2 * 55.845 + 3 * 15.999),
        ],
    )
    def test_known_formulas(self, formula: str, expected: float) -> None:
        """Counts, groups and spaces are handled."""
        assert molar_mass(formula) == pytest.approx(expected)

    @pytest.mark.parametrize("formula", ["", "Ca(OH2", "CaOH)2", "h2o", "Qq"])
    def test_invalid_formulas(self, formula: str) -> None:
        """Empty, unbalanced, lowercase or unknown formulas raise ValueError."""
        with pytest.raises(ValueError):
            molar_mass(formula)

    def test_common_elements_present(self) -> None:
        """Common elements are present."""
        assert {"H", "C", "N", "O", "Na", "Cl"} <= set(ATOMIC_MASSES)


class TestGeography:
    """Tests for geography formulas."""

    def test_great_circle_new_york_london(self, engine: CalcEngine) -> None:
        """NYC to London is about 5570 km."""
        result = _result(
            engine,
            "great-circle",
            {"lat1": 40.7128, "lon1": -74.0060, "lat2": 51.5074, "lon2": -0.1278},
        )
        assert result.value == pytest.approx(5570, rel=5e-3)
        assert result.unit == "km"

    def test_haversine_zero_distance(self) -> None:
        """A point is zero km from itself."""
        assert haversine_km(10.0, 20.0, 10.0, 20.0) == pytest.approx(0.0)

    def test_initial_bearing_due_east_and_north(self) -> None:
        """Bearing along the equator is 90°, along a meridian 0°."""
        assert initial_bearing(0, 0, 0, 10) == pytest.approx(90.0)
        assert initial_bearing(0, 0, 10, 0) == pytest.approx(0.0)

    def test_dms_text(self, engine: CalcEngine) -> None:
        """Decimal degrees render as DMS text with hemispheres."""
        result = _result(engine, "lat-long-conv", {"lat": 40.7128, "lon": -74.0060})
        assert result.value == "40° 42' 46.08\" N, 74° 0' 21.60\" W"
        assert result.unit == "DMS"

    def test_to_dms_southern_hemisphere(self) -> None:
        assert to_dms(-33.5, True) == "33° 30' 0.00\" S"

    @pytest.mark.parametrize(
        ("dist", "speed", "start", "expected"),
        [(200, 100, 14, "16:00"), (150, 100, 23, "00:30")],
    )
    def test_eta_clock_time(
        self, engine: CalcEngine, dist: float, speed: float, start: float, expected: str
    ) -> None:
        """Arrival time is HH:MM text and wraps past midnight."""
        result = _result(
            engine, "eta-calculator", {"dist": dist, "speed": speed, "start": start}
        )
        assert result.value == expected

    def test_eta_zero_speed(self, engine: CalcEngine) -> None:
        """Zero speed is degenerate."""
        error = _error(engine, "eta-calculator", {"dist": 100, "speed": 0, "start": 1})
        assert error.kind == CalcErrorKind.COMPUTATION_DEGENERATE
