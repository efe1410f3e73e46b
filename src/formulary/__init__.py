"""Formulary: parametric scientific and financial calculators.

This package provides:
- units: dimensional unit tables and conversion
- calc: calculator definitions, formula registry and the evaluation engine
- catalogs: physics, chemistry, geography, finance, everyday, health and
  probability calculators
- rates: TTL-cached currency rate lookups
"""

__version__ = "0.1.0"
