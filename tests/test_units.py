"""Tests for unit tables and conversion.

Tests cover:
- Linear and affine (temperature) conversions through the base unit
- Fail-open behaviour for unknown and cross-dimension units
- Table construction invariants (unique symbols, base unit present)
"""

from __future__ import annotations

import math

import pytest

from formulary.units import (
    EVERYDAY_UNITS,
    SCIENCE_UNITS,
    Dimension,
    DuplicateUnitError,
    UnitConverter,
    UnitDefinition,
    UnitTable,
    convert,
)


class TestLinearConversion:
    """Tests for scale-only dimensions."""

    @pytest.mark.parametrize(
        ("value", "from_unit", "to_unit", "expected"),
        [
            (1.0, "km", "m", 1000.0),
            (1.0, "mi", "km", 1.60934),
            (12.0, "in", "ft", 1.0),
            (1.0, "kg", "lb", 2.20462),
            (1.0, "gal", "l", 3.78541),
            (1.0, "h", "min", 60.0),
            (1.0, "ac", "m2", 4046.86),
        ],
    )
    def test_everyday_conversions(
        self, value: float, from_unit: str, to_unit: str, expected: float
    ) -> None:
        """Everyday table converts common units."""
        assert convert(value, from_unit, to_unit) == pytest.approx(expected, rel=1e-4)

    def test_science_table_pressure(self) -> None:
        """1 atm is 101.325 kPa in the science table."""
        assert SCIENCE_UNITS.convert(1.0, "atm", "kPa") == pytest.approx(101.325)

    def test_standard_gravity_is_not_grams(self) -> None:
        """'gₙ' is acceleration; 'g' stays a mass unit."""
        gravity = SCIENCE_UNITS.lookup_dimension("gₙ")
        grams = SCIENCE_UNITS.lookup_dimension("g")
        assert gravity is not None and gravity.name == "acceleration"
        assert grams is not None and grams.name == "mass"
        assert SCIENCE_UNITS.convert(1.0, "gₙ", "m/s²") == pytest.approx(9.80665)

    def test_radians_to_degrees(self) -> None:
        """pi rad is 180 degrees."""
        assert SCIENCE_UNITS.convert(math.pi, "rad", "deg") == pytest.approx(180.0)

    def test_round_trip_is_stable(self) -> None:
        """Converting there and back returns the original value."""
        there = EVERYDAY_UNITS.convert(42.0, "fl oz", "tbsp")
        assert EVERYDAY_UNITS.convert(there, "tbsp", "fl oz") == pytest.approx(42.0)


class TestAffineConversion:
    """Tests for temperature scales, which carry an offset."""

    @pytest.mark.parametrize(
        ("value", "from_unit", "to_unit", "expected"),
        [
            (0.0, "K", "F", -459.67),
            (491.67, "R", "C", 0.0),
            (-40.0, "C", "F", -40.0),
        ],
    )
    def test_everyday_temperature(
        self, value: float, from_unit: str, to_unit: str, expected: float
    ) -> None:
        """Temperature scales convert through kelvin."""
        assert convert(value, from_unit, to_unit) == pytest.approx(expected, abs=1e-9)

    @pytest.mark.parametrize(
        ("value", "from_unit", "to_unit", "expected"),
        [
            (100.0, "C", "F", 212.0),
            (212.0, "F", "C", 100.0),
            (32.0, "F", "C", 0.0),
            (0.0, "C", "F", 32.0),
            (0.0, "C", "K", 273.15),
            (273.15, "K", "C", 0.0),
        ],
    )
    def test_reference_points_are_exact(
        self, value: float, from_unit: str, to_unit: str, expected: float
    ) -> None:
        """Freezing and boiling points land on exact values, with no float residue."""
        assert convert(value, from_unit, to_unit) == expected

    def test_fahrenheit_is_anchored_at_freezing(self) -> None:
        """Fahrenheit maps its own 32 onto 273.15 K rather than offsetting from 0 K."""
        fahrenheit = EVERYDAY_UNITS.dimensions["temperature"].units["F"]
        assert fahrenheit.raw_anchor == 32.0
        assert fahrenheit.base_anchor == 273.15
        assert fahrenheit.to_base(32.0) == 273.15
        assert fahrenheit.from_base(273.15) == 32.0

    def test_science_temperature_uses_degree_symbols(self) -> None:
        """Science table spells Celsius and Fahrenheit with the degree sign."""
        assert SCIENCE_UNITS.convert(25.0, "°C", "K") == pytest.approx(298.15)
        charge = SCIENCE_UNITS.lookup_dimension("C")
        temperature = SCIENCE_UNITS.lookup_dimension("°C")
        assert charge is not None and charge.name == "charge"
        assert temperature is not None and temperature.name == "temperature"

    def test_temperature_difference_has_no_offset(self) -> None:
        """A 10 degree Celsius difference is 18 degrees Fahrenheit, not 50."""
        assert SCIENCE_UNITS.convert(10.0, "Δ°C", "Δ°F") == pytest.approx(18.0)

    def test_temperature_dimension_is_affine(self) -> None:
        """Temperature reports as affine, length does not."""
        assert EVERYDAY_UNITS.dimensions["temperature"].is_affine
        assert not EVERYDAY_UNITS.dimensions["length"].is_affine


class TestFailOpen:
    """Tests for identity pass-through."""

    def test_same_unit_is_identity(self) -> None:
        """Equal units return the value unchanged."""
        assert convert(3.5, "m", "m") == 3.5

    def test_unknown_unit_is_identity(self) -> None:
        """Unknown symbols pass the value through."""
        assert convert(3.5, "furlong", "m") == 3.5

    def test_cross_dimension_is_identity(self) -> None:
        """Units of different dimensions pass the value through."""
        assert convert(3.5, "kg", "m") == 3.5

    def test_can_convert(self) -> None:
        """can_convert reports whether a real conversion exists."""
        converter = UnitConverter(EVERYDAY_UNITS)
        assert converter.can_convert("km", "mi")
        assert not converter.can_convert("km", "kg")
        assert not converter.can_convert("km", "parsec")


class TestTableQueries:
    """Tests for lookup helpers."""

    def test_units_for_dimension(self) -> None:
        """units_for lists symbols in declaration order."""
        assert EVERYDAY_UNITS.units_for("temperature") == ("K", "C", "F", "R")
        assert EVERYDAY_UNITS.units_for("luminosity") == ()

    def test_compatible_units(self) -> None:
        """compatible_units lists the whole dimension, or just the unit itself."""
        assert "mph" in SCIENCE_UNITS.compatible_units("m/s")
        assert SCIENCE_UNITS.compatible_units("widgets") == ("widgets",)
        assert SCIENCE_UNITS.compatible_units("") == ()


class TestTableConstruction:
    """Tests for table invariants."""

    def test_duplicate_symbol_rejected(self) -> None:
        """A symbol may belong to only one dimension."""
        with pytest.raises(DuplicateUnitError) as exc_info:
            UnitTable(
                "broken",
                [
                    Dimension.linear("mass", "g", {"g": 1.0}),
                    Dimension.linear("acceleration", "m/s²", {"m/s²": 1.0, "g": 9.81}),
                ],
            )
        assert exc_info.value.symbol == "g"

    def test_duplicate_dimension_name_rejected(self) -> None:
        """Dimension names are unique within a table."""
        with pytest.raises(ValueError, match="declared twice"):
            UnitTable(
                "broken",
                [
                    Dimension.linear("length", "m", {"m": 1.0}),
                    Dimension.linear("length", "ft", {"ft": 1.0}),
                ],
            )

    def test_base_unit_must_exist(self) -> None:
        """A dimension's base unit must be one of its units."""
        with pytest.raises(ValueError, match="base unit"):
            Dimension.linear("length", "m", {"ft": 0.3048})

    def test_zero_scale_rejected(self) -> None:
        """A unit cannot have a zero scale factor."""
        with pytest.raises(ValueError, match="zero scale"):
            UnitDefinition("x", 0.0)

    def test_dimension_units_are_read_only(self) -> None:
        """Dimension unit maps cannot be mutated after construction."""
        dimension = Dimension.linear("length", "m", {"m": 1.0})
        with pytest.raises(TypeError):
            dimension.units["ft"] = UnitDefinition("ft", 0.3048)  # type: ignore[index]
