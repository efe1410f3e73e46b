"""Dimensional unit tables and conversion.

This package provides:
- UnitTable / Dimension / UnitDefinition: static affine unit registries
- SCIENCE_UNITS / EVERYDAY_UNITS: the two built-in tables
- UnitConverter / convert: fail-open value conversion
"""

from formulary.units.catalog import EVERYDAY_UNITS, SCIENCE_UNITS
from formulary.units.converter import UnitConverter, convert
from formulary.units.table import Dimension, DuplicateUnitError, UnitDefinition, UnitTable

__all__ = [
    "EVERYDAY_UNITS",
    "SCIENCE_UNITS",
    "Dimension",
    "DuplicateUnitError",
    "UnitConverter",
    "UnitDefinition",
    "UnitTable",
    "convert",
]
