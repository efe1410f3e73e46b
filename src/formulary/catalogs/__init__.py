"""Built-in calculator catalogs.

This package provides:
- One module per domain (physics, chemistry, geography, finance, everyday,
  health, probability, tech, trigonometry), each exposing CALCULATORS and a register function
- build_default_registry: a frozen registry holding every built-in calculator
- get_default_registry: the process-wide shared instance of that registry
"""

import logging

from formulary.calc.registry import CalculatorRegistry
from formulary.catalogs.chemistry import register_chemistry_calculators
from formulary.catalogs.everyday import register_everyday_calculators
from formulary.catalogs.finance import register_finance_calculators
from formulary.catalogs.geography import register_geography_calculators
from formulary.catalogs.health import register_health_calculators
from formulary.catalogs.physics import register_physics_calculators
from formulary.catalogs.probability import register_probability_calculators
from formulary.catalogs.tech import register_tech_calculators
from formulary.catalogs.trigonometry import register_trigonometry_calculators

logger = logging.getLogger(__name__)

_default_registry: CalculatorRegistry | None = None


def build_default_registry() -> CalculatorRegistry:
    """Build and freeze a registry containing every built-in catalog.

    Raises:
        DuplicateCalculatorError: If two catalogs declare the same id.
        MissingFormulaError: If a solve mode names an unregistered formula.
    """
    registry = CalculatorRegistry()
    register_physics_calculators(registry)
    register_chemistry_calculators(registry)
    register_geography_calculators(registry)
    register_finance_calculators(registry)
    register_everyday_calculators(registry)
    register_health_calculators(registry)
    register_probability_calculators(registry)
    register_tech_calculators(registry)
    register_trigonometry_calculators(registry)
    logger.info("Built default calculator registry with %d calculators", len(registry))
    return registry.freeze()


def get_default_registry() -> CalculatorRegistry:
    """Get the shared default registry, building it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry


__all__ = [
    "build_default_registry",
    "get_default_registry",
    "register_chemistry_calculators",
    "register_everyday_calculators",
    "register_finance_calculators",
    "register_geography_calculators",
    "register_health_calculators",
    "register_physics_calculators",
    "register_probability_calculators",
    "register_tech_calculators",
    "register_trigonometry_calculators",
]
