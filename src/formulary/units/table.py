"""Dimensional unit tables.

A UnitTable is a static registry of dimensions. Each dimension maps unit
symbols to an affine transform relative to one canonical base unit, anchored
at a reference point where the raw value `raw_anchor` equals `base_anchor`:

    base = (raw - raw_anchor) * scale_to_base + base_anchor
    raw  = (base - base_anchor) / scale_to_base + raw_anchor

Plain linear units anchor at 0 = 0. Affine units (temperature scales) anchor
at their freezing point, which keeps round figures exact (100 °C is 212 °F),
and always convert through the base.

Tables are built once at import time and expose no mutation API.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

logger = logging.getLogger(__name__)


class DuplicateUnitError(ValueError):
    """Raised when a unit symbol is declared in more than one dimension of a table."""

    def __init__(self, symbol: str, first: str, second: str) -> None:
        self.symbol = symbol
        self.first = first
        self.second = second
        super().__init__(
            f"Unit symbol '{symbol}' is declared in both '{first}' and '{second}'"
        )


@dataclass(frozen=True, slots=True)
class UnitDefinition:
    """One unit of a dimension.

    Attributes:
        symbol: Unit symbol as displayed and selected (e.g. "km", "°F").
        scale_to_base: Multiplicative factor to the dimension's base unit.
        raw_anchor: Value of this unit at the reference point (affine units only).
        base_anchor: Base-unit value of the same reference point.
        label: Optional human-readable name.
    """

    symbol: str
    scale_to_base: float
    raw_anchor: float = 0.0
    base_anchor: float = 0.0
    label: str = ""

    def __post_init__(self) -> None:
        if not self.symbol:
            raise ValueError("Unit symbol must be non-empty")
        if self.scale_to_base == 0:
            raise ValueError(f"Unit '{self.symbol}' has a zero scale factor")

    def to_base(self, value: float) -> float:
        return (value - self.raw_anchor) * self.scale_to_base + self.base_anchor

    def from_base(self, value: float) -> float:
        return (value - self.base_anchor) / self.scale_to_base + self.raw_anchor


@dataclass(frozen=True, eq=False)
class Dimension:
    """A named physical quantity with a canonical base unit.

    Attributes:
        name: Dimension name (e.g. "length", "temperature").
        base_unit: Symbol of the canonical base unit.
        units: Read-only mapping of symbol -> UnitDefinition.
    """

    name: str
    base_unit: str
    units: Mapping[str, UnitDefinition] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.base_unit not in self.units:
            raise ValueError(
                f"Dimension '{self.name}' base unit '{self.base_unit}' is not one of its units"
            )
        object.__setattr__(self, "units", MappingProxyType(dict(self.units)))

    @classmethod
    def linear(cls, name: str, base_unit: str, factors: Mapping[str, float]) -> Dimension:
        """Build a dimension whose units are all pure scale factors."""
        units = {symbol: UnitDefinition(symbol, factor) for symbol, factor in factors.items()}
        return cls(name=name, base_unit=base_unit, units=units)

    @property
    def is_affine(self) -> bool:
        return any(
            unit.raw_anchor * unit.scale_to_base != unit.base_anchor
            for unit in self.units.values()
        )

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(self.units)


class UnitTable:
    """Immutable registry of dimensions keyed by unit symbol.

    Invariant: every unit symbol belongs to at most one dimension.
    """

    def __init__(self, name: str, dimensions: Iterable[Dimension]) -> None:
        """Build the table and index unit symbols.

        Args:
            name: Table name, used in logs and the CLI.
            dimensions: Dimensions to include.

        Raises:
            DuplicateUnitError: If a symbol appears in two dimensions.
            ValueError: If two dimensions share a name.
        """
        self._name = name
        by_name: dict[str, Dimension] = {}
        by_symbol: dict[str, Dimension] = {}

        for dimension in dimensions:
            if dimension.name in by_name:
                raise ValueError(f"Dimension '{dimension.name}' declared twice in table '{name}'")
            by_name[dimension.name] = dimension
            for symbol in dimension.units:
                existing = by_symbol.get(symbol)
                if existing is not None:
                    raise DuplicateUnitError(symbol, existing.name, dimension.name)
                by_symbol[symbol] = dimension

        self._dimensions: Mapping[str, Dimension] = MappingProxyType(by_name)
        self._by_symbol: Mapping[str, Dimension] = MappingProxyType(by_symbol)

    @property
    def name(self) -> str:
        return self._name

    @property
    def dimensions(self) -> Mapping[str, Dimension]:
        return self._dimensions

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    def __repr__(self) -> str:
        return f"UnitTable(name={self._name!r}, dimensions={len(self._dimensions)})"

    def lookup_dimension(self, unit: str) -> Dimension | None:
        """Return the dimension a unit symbol belongs to, or None if unknown."""
        return self._by_symbol.get(unit)

    def units_for(self, dimension_name: str) -> tuple[str, ...]:
        """List the unit symbols of a dimension (empty if the dimension is unknown)."""
        dimension = self._dimensions.get(dimension_name)
        if dimension is None:
            return ()
        return dimension.symbols

    def compatible_units(self, unit: str) -> tuple[str, ...]:
        """List the units a value in `unit` can be converted to.

        Unknown units are only compatible with themselves.
        """
        dimension = self.lookup_dimension(unit)
        if dimension is None:
            return (unit,) if unit else ()
        return dimension.symbols

    def convert(self, value: float, from_unit: str, to_unit: str) -> float:
        """Convert a value between two units of the same dimension.

        Identity when the units are equal, unknown, or belong to different
        dimensions. No rounding is applied.

        Args:
            value: Raw value expressed in from_unit.
            from_unit: Source unit symbol.
            to_unit: Target unit symbol.

        Returns:
            The value expressed in to_unit.
        """
        if from_unit == to_unit:
            return value

        source = self._by_symbol.get(from_unit)
        target = self._by_symbol.get(to_unit)
        if source is None or target is None or source is not target:
            logger.debug(
                "No conversion %r -> %r in table %s; passing value through",
                from_unit,
                to_unit,
                self._name,
            )
            return value

        base = source.units[from_unit].to_base(value)
        return target.units[to_unit].from_base(base)
