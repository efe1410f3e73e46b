"""Everyday unit converters and size charts.

The converters are flat calculators with a numeric value and two select
inputs whose option values are symbols of EVERYDAY_UNITS. Fuel economy is
the exception: L/100km is inversely related to miles per gallon, so it is
converted here rather than through the linear unit table.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final

from formulary.calc.models import DiagramKind, Domain, FlatCalculator, InputSpec, Result
from formulary.calc.outcome import InvalidInputError
from formulary.calc.registry import CalculatorRegistry, FormulaRegistry
from formulary.catalogs.common import diagram, fmt, num, select
from formulary.units import EVERYDAY_UNITS, UnitConverter

L100KM_MPG_US: Final[float] = 235.215
MPG_UK_PER_MPG_US: Final[float] = 1.20095
SPEED_GAUGE_MAX: Final[float] = 200.0
FUEL_GAUGE_MAX: Final[float] = 100.0

FUEL_UNITS: Final[tuple[str, ...]] = ("L/100km", "mpg_us", "mpg_uk")

FORMULAS = FormulaRegistry()
formula = FORMULAS.formula

Inputs = Mapping[str, Any]

_converter = UnitConverter(EVERYDAY_UNITS)


def _convert_checked(value: float, from_unit: str, to_unit: str) -> float:
    if not _converter.can_convert(from_unit, to_unit):
        raise InvalidInputError("to", f"Cannot convert {from_unit} to {to_unit}")
    return _converter.convert(value, from_unit, to_unit)


def fuel_to_mpg_us(value: float, unit: str) -> float:
    if unit == "mpg_us":
        return value
    if unit == "mpg_uk":
        return value / MPG_UK_PER_MPG_US
    if unit == "L/100km":
        return L100KM_MPG_US / value
    raise InvalidInputError("from", f"Unknown fuel economy unit: {unit}")


def mpg_us_to_fuel(mpg_us: float, unit: str) -> float:
    if unit == "mpg_us":
        return mpg_us
    if unit == "mpg_uk":
        return mpg_us * MPG_UK_PER_MPG_US
    if unit == "L/100km":
        return L100KM_MPG_US / mpg_us
    raise InvalidInputError("to", f"Unknown fuel economy unit: {unit}")


def _linear(v: Inputs, base_label: str, visual: DiagramKind = DiagramKind.TEXT_BOX) -> Result:
    value = v["value"]
    result = _convert_checked(value, v["from"], v["to"])
    dimension = EVERYDAY_UNITS.lookup_dimension(v["from"])
    base = dimension.units[v["from"]].to_base(value) if dimension is not None else value
    return Result(
        value=result,
        unit=v["to"],
        steps=(
            f"{fmt(value)} {v['from']} = {result:.6g} {v['to']}",
            f"Base: {base:.4f} {base_label}",
        ),
        diagram=diagram(visual, {"text": f"{result:.6g} {v['to']}"}),
    )


@formula("temperature-converter.temperature-converter")
def _temperature(v: Inputs) -> Result:
    result = _convert_checked(v["value"], v["from"], v["to"])
    freeze = _converter.convert(0.0, "C", v["to"])
    boil = _converter.convert(100.0, "C", v["to"])
    return Result(
        value=result,
        unit=v["to"],
        steps=(
            f"Freezing Point: {freeze:.1f} {v['to']}",
            f"Boiling Point: {boil:.1f} {v['to']}",
        ),
        diagram=diagram(DiagramKind.THERMOMETER, {"value": v["value"], "unit": v["from"]}),
    )


@formula("length-distance-converter.length-distance-converter")
def _length(v: Inputs) -> Result:
    return _linear(v, "meters")


@formula("weight-mass-converter.weight-mass-converter")
def _weight(v: Inputs) -> Result:
    return _linear(v, "grams")


@formula("time-duration-converter.time-duration-converter")
def _time(v: Inputs) -> Result:
    return _linear(v, "seconds")


@formula("area-converter.area-converter")
def _area(v: Inputs) -> Result:
    return _linear(v, "m²")


@formula("volume-capacity-converter.volume-capacity-converter")
def _volume(v: Inputs) -> Result:
    result = _convert_checked(v["value"], v["from"], v["to"])
    ml = _converter.convert(v["value"], v["from"], "ml")
    # Fill scale: cup, then litre, then gallon.
    if ml < 300:
        scale = 300.0
    elif ml < 1000:
        scale = 1000.0
    else:
        scale = 4000.0
    return Result(
        value=result,
        unit=v["to"],
        steps=(f"{fmt(v['value'])} {v['from']} = {result:.6g} {v['to']}", f"Base: {ml:.1f} mL"),
        diagram=diagram(DiagramKind.FILL, {"percent": min(100.0, ml / scale * 100)}),
    )


@formula("speed-fuel-converter.speed-fuel-converter")
def _speed_fuel(v: Inputs) -> Result:
    if v["type"] == "speed":
        result = _convert_checked(v["value"], v["from"], v["to"])
        note = "Standard speed conversion"
        gauge_max = SPEED_GAUGE_MAX
    else:
        if v["value"] == 0 and v["from"] == "L/100km":
            raise InvalidInputError("value", "Fuel consumption must be non-zero")
        result = mpg_us_to_fuel(fuel_to_mpg_us(v["value"], v["from"]), v["to"])
        note = f"Inverse relation: L/100km = {L100KM_MPG_US:g} / MPG(US)"
        gauge_max = FUEL_GAUGE_MAX
    return Result(
        value=result,
        unit=v["to"],
        steps=(f"{fmt(v['value'])} {v['from']} = {result:.2f} {v['to']}", note),
        diagram=diagram(DiagramKind.GAUGE, {"value": result, "max": gauge_max}),
    )


@formula("clothing-shoe-size.clothing-shoe-size")
def _shoe_size(v: Inputs) -> Result:
    size = v["size"]
    # Paris points from the US last length, plus two points of allowance.
    if v["type"] == "shoe_m":
        uk = size - 1
        eu = 1.27 * (size + 23) + 2
    else:
        uk = size - 2
        eu = 1.27 * (size + 21) + 2
    eu = round(eu * 2) / 2
    return Result(
        value=f"EU {fmt(eu)} / UK {fmt(uk)}",
        unit="Size",
        steps=(
            f"US Size: {fmt(size)}",
            f"Type: {'Men' if v['type'] == 'shoe_m' else 'Women'}'s",
        ),
        diagram=diagram(DiagramKind.TEXT_BOX, {"text": fmt(eu)}),
    )


TEMPERATURE = "Temperature"
LENGTH = "Length & Distance"
WEIGHT = "Weight & Mass"
VOLUME = "Volume & Capacity"
SPEED = "Speed & Fuel"
TOOLS = "Everyday Tools"

# fmt: off
TEMPERATURE_OPTIONS: Final = (
    ("C", "Celsius (°C)"), ("F", "Fahrenheit (°F)"), ("K", "Kelvin (K)"), ("R", "Rankine (°R)"),
)
LENGTH_OPTIONS: Final = (
    ("m", "Meters (m)"), ("km", "Kilometers (km)"), ("cm", "Centimeters (cm)"),
    ("mm", "Millimeters (mm)"), ("mi", "Miles (mi)"), ("yd", "Yards (yd)"),
    ("ft", "Feet (ft)"), ("in", "Inches (in)"), ("nm", "Nautical Miles (nm)"),
)
WEIGHT_OPTIONS: Final = (
    ("kg", "Kilograms (kg)"), ("g", "Grams (g)"), ("mg", "Milligrams (mg)"),
    ("t", "Metric Tons (t)"), ("lb", "Pounds (lb)"), ("oz", "Ounces (oz)"),
    ("st", "Stone (st)"), ("ct", "Carats (ct)"),
)
VOLUME_OPTIONS: Final = (
    ("l", "Liters (L)"), ("ml", "Milliliters (mL)"), ("m3", "Cubic Meters (m³)"),
    ("gal", "Gallons (US)"), ("gal_uk", "Gallons (UK)"), ("qt", "Quarts (US)"),
    ("pt", "Pints (US)"), ("cup", "Cups (US)"), ("fl oz", "Fluid Ounces (US)"),
    ("tbsp", "Tablespoons"), ("tsp", "Teaspoons"),
)
SPEED_FUEL_OPTIONS: Final = (
    ("km/h", "Kilometers/hour"), ("mph", "Miles/hour"), ("m/s", "Meters/second"),
    ("ft/s", "Feet/second"), ("kn", "Knots"),
    ("L/100km", "Liters/100 km"), ("mpg_us", "MPG (US)"), ("mpg_uk", "MPG (UK)"),
)
TIME_OPTIONS: Final = (
    ("s", "Seconds"), ("min", "Minutes"), ("h", "Hours"),
    ("d", "Days"), ("wk", "Weeks"), ("y", "Years"),
)
AREA_OPTIONS: Final = (
    ("m2", "Sq Meters (m²)"), ("km2", "Sq Kilometers (km²)"), ("ft2", "Sq Feet (ft²)"),
    ("in2", "Sq Inches (in²)"), ("yd2", "Sq Yards (yd²)"), ("ac", "Acres (ac)"),
    ("ha", "Hectares (ha)"),
)
# fmt: on


def _converter_inputs(
    label: str, options: Sequence[tuple[str, str]], source: str, target: str, default: float = 1
) -> tuple[InputSpec, ...]:
    return (
        num("value", label, "", default),
        select("from", "From Unit", options, source),
        select("to", "To Unit", options, target),
    )


def _flat(
    calc_id: str, title: str, category: str, description: str, icon: str, *inputs: InputSpec
) -> FlatCalculator:
    return FlatCalculator(
        id=calc_id,
        title=title,
        category=category,
        domain=Domain.EVERYDAY,
        description=description,
        icon=icon,
        inputs=inputs,
        formula_id=f"{calc_id}.{calc_id}",
    )


# fmt: off
CALCULATORS: Final[tuple[FlatCalculator, ...]] = (
    _flat(
        "temperature-converter", "Temperature Converter", TEMPERATURE,
        "Convert Celsius, Fahrenheit, Kelvin.", "thermometer",
        *_converter_inputs("Value", TEMPERATURE_OPTIONS, "C", "F", 25),
    ),
    _flat(
        "length-distance-converter", "Length & Distance", LENGTH,
        "Convert meters, feet, miles, etc.", "ruler",
        *_converter_inputs("Length", LENGTH_OPTIONS, "m", "ft"),
    ),
    _flat(
        "weight-mass-converter", "Weight & Mass", WEIGHT,
        "Convert kg, lbs, oz, grams.", "scale",
        *_converter_inputs("Weight", WEIGHT_OPTIONS, "kg", "lb"),
    ),
    _flat(
        "volume-capacity-converter", "Volume & Capacity", VOLUME,
        "Convert liters, gallons, cups.", "beaker",
        *_converter_inputs("Volume", VOLUME_OPTIONS, "l", "gal"),
    ),
    _flat(
        "speed-fuel-converter", "Speed & Fuel", SPEED,
        "Convert speed and efficiency.", "gauge",
        select("type", "Mode", (("speed", "Speed"), ("fuel", "Fuel Efficiency"))),
        *_converter_inputs("Value", SPEED_FUEL_OPTIONS, "km/h", "mph", 100),
    ),
    _flat(
        "time-duration-converter", "Time & Duration", TOOLS,
        "Convert seconds, hours, days.", "clock",
        *_converter_inputs("Duration", TIME_OPTIONS, "h", "min"),
    ),
    _flat(
        "area-converter", "Area Converter", TOOLS,
        "Acres, hectares, sq meters.", "map",
        *_converter_inputs("Area", AREA_OPTIONS, "m2", "ft2"),
    ),
    _flat(
        "clothing-shoe-size", "Clothing & Shoe Size", TOOLS,
        "US, UK, EU Size Chart.", "shirt",
        select("type", "Item Type", (("shoe_m", "Men's Shoes"), ("shoe_w", "Women's Shoes"))),
        num("size", "US Size", "", 9, 4, 15, 0.5),
    ),
)
# fmt: on


def register_everyday_calculators(registry: CalculatorRegistry) -> CalculatorRegistry:
    """Register all everyday calculators into a registry."""
    registry.register_catalog(CALCULATORS, FORMULAS)
    return registry
