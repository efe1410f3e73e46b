"""Unit conversion front-end.

`convert` is the pure conversion entry point used by callers that do not
care which table they hit; it defaults to the everyday table, so
`convert(100, "C", "F") == 212`.
"""

from __future__ import annotations

from formulary.units.catalog import EVERYDAY_UNITS
from formulary.units.table import UnitTable


class UnitConverter:
    """Converts values between units of one UnitTable.

    Fails open: unknown or unrelated units return the value unchanged.
    """

    def __init__(self, table: UnitTable = EVERYDAY_UNITS) -> None:
        self._table = table

    @property
    def table(self) -> UnitTable:
        return self._table

    def convert(self, value: float, from_unit: str, to_unit: str) -> float:
        return self._table.convert(value, from_unit, to_unit)

    def can_convert(self, from_unit: str, to_unit: str) -> bool:
        """True if both units are known and share a dimension."""
        source = self._table.lookup_dimension(from_unit)
        return source is not None and source is self._table.lookup_dimension(to_unit)


def convert(
    value: float,
    from_unit: str,
    to_unit: str,
    *,
    table: UnitTable = EVERYDAY_UNITS,
) -> float:
    """Convert a value between two units of the given table.

    Args:
        value: Value expressed in from_unit.
        from_unit: Source unit symbol.
        to_unit: Target unit symbol.
        table: Unit table to resolve symbols in. Defaults to EVERYDAY_UNITS.

    Returns:
        The converted value, or `value` unchanged if the units are unknown or
        belong to different dimensions.
    """
    return table.convert(value, from_unit, to_unit)
