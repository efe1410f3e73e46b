"""Trigonometry calculators.

The unit circle: sine, cosine and tangent of an angle given in degrees.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Final

from formulary.calc.models import DiagramKind, Domain, MultiModeCalculator, Result, SolveMode
from formulary.calc.outcome import DegenerateComputationError
from formulary.calc.registry import CalculatorRegistry, FormulaRegistry
from formulary.catalogs.common import diagram, fmt, mode, num, to_rad

# Below this |cos θ| the tangent is treated as undefined.
TANGENT_POLE_TOLERANCE: Final[float] = 1e-12

FORMULAS = FormulaRegistry()
formula = FORMULAS.formula

Inputs = Mapping[str, Any]


def unit_circle_point(degrees: float) -> tuple[float, float, float]:
    """Radians, cosine and sine of an angle, with -0.0 folded to 0.0."""
    radians = to_rad(degrees)
    return radians, math.cos(radians) + 0.0, math.sin(radians) + 0.0


def _trig_result(degrees: float, value: float, unit: str) -> Result:
    radians, cos, sin = unit_circle_point(degrees)
    tan = "undefined" if abs(cos) < TANGENT_POLE_TOLERANCE else f"{sin / cos:.4f}"
    return Result(
        value=value,
        unit=unit,
        steps=(
            f"θ = {fmt(degrees)}° = {radians:.4f} rad",
            f"sin θ = {sin:.4f}",
            f"cos θ = {cos:.4f}",
            f"tan θ = {tan}",
        ),
        diagram=diagram(
            DiagramKind.UNIT_CIRCLE,
            {"angle": degrees, "x": cos, "y": sin},
        ),
    )


@formula("unit-circle-trig.sin")
def _sin(v: Inputs) -> Result:
    _, _, sin = unit_circle_point(v["angle"])
    return _trig_result(v["angle"], sin, "sin θ")


@formula("unit-circle-trig.cos")
def _cos(v: Inputs) -> Result:
    _, cos, _ = unit_circle_point(v["angle"])
    return _trig_result(v["angle"], cos, "cos θ")


@formula("unit-circle-trig.tan")
def _tan(v: Inputs) -> Result:
    _, cos, sin = unit_circle_point(v["angle"])
    if abs(cos) < TANGENT_POLE_TOLERANCE:
        raise DegenerateComputationError(f"tan is undefined at {fmt(v['angle'])}°")
    return _trig_result(v["angle"], sin / cos, "tan θ")


UNIT_CIRCLE = "Unit Circle"


def _calc(
    calc_id: str, title: str, category: str, description: str, icon: str, *modes: SolveMode
) -> MultiModeCalculator:
    return MultiModeCalculator(
        id=calc_id,
        title=title,
        category=category,
        domain=Domain.MATH,
        description=description,
        icon=icon,
        solve_modes=modes,
    )


# fmt: off
CALCULATORS: Final[tuple[MultiModeCalculator, ...]] = (
    _calc(
        "unit-circle-trig", "Unit Circle Trig", UNIT_CIRCLE,
        "Sine, cosine and tangent on the unit circle.", "circle",
        mode("unit-circle-trig", "sin", "Sine (sin θ)",
             num("angle", "Angle", "deg", 0, 0, 360, 1)),
        mode("unit-circle-trig", "cos", "Cosine (cos θ)",
             num("angle", "Angle", "deg", 0, 0, 360, 1)),
        mode("unit-circle-trig", "tan", "Tangent (tan θ)",
             num("angle", "Angle", "deg", 0, 0, 360, 1)),
    ),
)
# fmt: on


def register_trigonometry_calculators(registry: CalculatorRegistry) -> CalculatorRegistry:
    """Register all trigonometry calculators into a registry."""
    registry.register_catalog(CALCULATORS, FORMULAS)
    return registry
