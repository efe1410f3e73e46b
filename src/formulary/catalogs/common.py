"""Helpers for declaring calculator catalogs.

Catalog modules describe inputs and solve modes as data and keep the
arithmetic in module-private formula functions registered by id.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from formulary.calc.models import (
    Diagram,
    DiagramKind,
    InputKind,
    InputSpec,
    SelectOption,
    SolveMode,
)


def num(
    name: str,
    label: str,
    unit: str = "",
    default: float = 0.0,
    lo: float | None = None,
    hi: float | None = None,
    step: float | None = None,
) -> InputSpec:
    """Declare a numeric input."""
    return InputSpec(
        name=name,
        label=label,
        unit=unit,
        kind=InputKind.NUMBER,
        default_value=float(default),
        min=lo,
        max=hi,
        step=step,
    )


def select(
    name: str,
    label: str,
    options: Sequence[tuple[str, str]],
    default: str | None = None,
) -> InputSpec:
    """Declare a select input from (value, label) pairs.

    The first option is the default unless one is given.
    """
    choices = tuple(SelectOption(value=value, label=text) for value, text in options)
    return InputSpec(
        name=name,
        label=label,
        kind=InputKind.SELECT,
        default_value=default if default is not None else choices[0].value,
        options=choices,
    )


def text(name: str, label: str, default: str = "") -> InputSpec:
    """Declare a free-text input."""
    return InputSpec(name=name, label=label, kind=InputKind.TEXT, default_value=default)


def mode(calculator_id: str, target: str, label: str, *inputs: InputSpec) -> SolveMode:
    """Declare a solve mode whose formula id is "<calculator_id>.<target>"."""
    return SolveMode(
        target=target,
        label=label,
        inputs=inputs,
        formula_id=f"{calculator_id}.{target}",
    )


def fmt(value: float | int) -> str:
    """Compact number rendering for derivation steps."""
    return f"{value:g}"


def bars(*items: tuple[str, float, str]) -> Diagram:
    """Bar diagram from (label, value, color) triples."""
    return Diagram(
        kind=DiagramKind.BAR,
        data=[{"label": label, "value": value, "color": color} for label, value, color in items],
    )


def diagram(kind: DiagramKind, data: Any) -> Diagram:
    return Diagram(kind=kind, data=data)


def to_rad(degrees: float) -> float:
    return degrees * math.pi / 180


def to_deg(radians: float) -> float:
    return radians * 180 / math.pi


def donut(*items: tuple[str, float, str]) -> Diagram:
    """Donut (part-of-whole) diagram from (label, value, color) triples."""
    return Diagram(
        kind=DiagramKind.DONUT,
        data=[{"label": label, "value": value, "color": color} for label, value, color in items],
    )


def money(value: float) -> str:
    """Render a currency amount the way finance steps display it."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
