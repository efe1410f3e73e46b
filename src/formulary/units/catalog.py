"""Static unit tables.

SCIENCE_UNITS backs the physics, chemistry, geography and health calculators
(SI-style symbols: "°C", "µF", "Ω", ...). EVERYDAY_UNITS backs the everyday
converters and the module-level `convert` helper (plain symbols: "C", "F",
"nm" for nautical mile, "fl oz", ...).

The two tables are separate because some symbols mean different things in
each context ("C" is coulomb in science and Celsius in everyday use, "nm" is
nanometre versus nautical mile).
"""

from __future__ import annotations

import math
from typing import Final

from formulary.units.table import Dimension, UnitDefinition, UnitTable

ZERO_CELSIUS_K: Final[float] = 273.15
FAHRENHEIT_SCALE: Final[float] = 5.0 / 9.0
FAHRENHEIT_FREEZING: Final[float] = 32.0
STANDARD_GRAVITY: Final[float] = 9.80665
DEGREES_PER_RADIAN: Final[float] = 180.0 / math.pi


def _temperature(celsius: str, fahrenheit: str, rankine: str | None = None) -> Dimension:
    units = [
        UnitDefinition("K", 1.0, label="kelvin"),
        UnitDefinition(celsius, 1.0, base_anchor=ZERO_CELSIUS_K, label="degree Celsius"),
        UnitDefinition(
            fahrenheit,
            FAHRENHEIT_SCALE,
            raw_anchor=FAHRENHEIT_FREEZING,
            base_anchor=ZERO_CELSIUS_K,
            label="degree Fahrenheit",
        ),
    ]
    if rankine is not None:
        units.append(UnitDefinition(rankine, FAHRENHEIT_SCALE, label="degree Rankine"))
    return Dimension(name="temperature", base_unit="K", units={u.symbol: u for u in units})


SCIENCE_UNITS: Final[UnitTable] = UnitTable(
    "science",
    [
        Dimension.linear(
            "length",
            "m",
            {
                "m": 1.0,
                "cm": 0.01,
                "mm": 0.001,
                "km": 1000.0,
                "ft": 0.3048,
                "in": 0.0254,
                "mi": 1609.34,
                "nm": 1e-9,
                "µm": 1e-6,
                "AU": 1.496e11,
            },
        ),
        Dimension.linear(
            "mass",
            "kg",
            {"kg": 1.0, "g": 0.001, "mg": 1e-6, "lb": 0.453592, "oz": 0.0283495, "t": 1000.0},
        ),
        Dimension.linear(
            "time",
            "s",
            {
                "s": 1.0,
                "ms": 0.001,
                "min": 60.0,
                "hr": 3600.0,
                "h": 3600.0,
                "d": 86400.0,
                "yrs": 3.154e7,
            },
        ),
        Dimension.linear(
            "velocity",
            "m/s",
            {"m/s": 1.0, "km/h": 0.277778, "mph": 0.44704, "ft/s": 0.3048, "kn": 0.514444},
        ),
        # "gₙ" (standard gravity) keeps "g" free for grams.
        Dimension.linear(
            "acceleration", "m/s²", {"m/s²": 1.0, "ft/s²": 0.3048, "gₙ": STANDARD_GRAVITY}
        ),
        Dimension.linear("force", "N", {"N": 1.0, "kN": 1000.0, "lbf": 4.44822, "dyne": 1e-5}),
        Dimension.linear(
            "energy",
            "J",
            {"J": 1.0, "kJ": 1000.0, "cal": 4.184, "kcal": 4184.0, "eV": 1.602e-19, "kWh": 3.6e6},
        ),
        Dimension.linear("power", "W", {"W": 1.0, "kW": 1000.0, "hp": 745.7}),
        Dimension.linear(
            "pressure",
            "Pa",
            {
                "Pa": 1.0,
                "kPa": 1000.0,
                "atm": 101325.0,
                "bar": 100000.0,
                "psi": 6894.76,
                "mmHg": 133.322,
            },
        ),
        _temperature("°C", "°F"),
        Dimension.linear(
            "temperature_difference", "ΔK", {"ΔK": 1.0, "Δ°C": 1.0, "Δ°F": FAHRENHEIT_SCALE}
        ),
        Dimension.linear("charge", "C", {"C": 1.0, "mC": 1e-3, "µC": 1e-6, "nC": 1e-9}),
        Dimension.linear("voltage", "V", {"V": 1.0, "kV": 1000.0, "mV": 0.001}),
        Dimension.linear("current", "A", {"A": 1.0, "mA": 0.001, "µA": 1e-6}),
        Dimension.linear("resistance", "Ω", {"Ω": 1.0, "kΩ": 1000.0, "MΩ": 1e6}),
        Dimension.linear(
            "capacitance", "F", {"F": 1.0, "mF": 1e-3, "µF": 1e-6, "nF": 1e-9, "pF": 1e-12}
        ),
        Dimension.linear("inductance", "H", {"H": 1.0, "mH": 1e-3, "µH": 1e-6}),
        Dimension.linear("frequency", "Hz", {"Hz": 1.0, "kHz": 1e3, "MHz": 1e6, "GHz": 1e9}),
        Dimension.linear("angle", "deg", {"deg": 1.0, "°": 1.0, "rad": DEGREES_PER_RADIAN}),
        Dimension.linear("area", "m²", {"m²": 1.0, "cm²": 1e-4, "km²": 1e6, "ft²": 0.092903}),
        Dimension.linear(
            "volume", "m³", {"m³": 1.0, "L": 0.001, "mL": 1e-6, "gal": 0.00378541}
        ),
        Dimension.linear("density", "kg/m³", {"kg/m³": 1.0, "g/cm³": 1000.0, "g/mL": 1000.0}),
        Dimension.linear("amount", "mol", {"mol": 1.0, "mmol": 1e-3}),
        Dimension.linear("concentration", "M", {"M": 1.0, "mM": 1e-3, "µM": 1e-6}),
    ],
)

EVERYDAY_UNITS: Final[UnitTable] = UnitTable(
    "everyday",
    [
        _temperature("C", "F", rankine="R"),
        Dimension.linear(
            "length",
            "m",
            {
                "m": 1.0,
                "km": 1000.0,
                "cm": 0.01,
                "mm": 0.001,
                "mi": 1609.34,
                "yd": 0.9144,
                "ft": 0.3048,
                "in": 0.0254,
                "nm": 1852.0,
            },
        ),
        Dimension.linear(
            "mass",
            "g",
            {
                "g": 1.0,
                "kg": 1000.0,
                "mg": 0.001,
                "t": 1e6,
                "lb": 453.592,
                "oz": 28.3495,
                "st": 6350.29,
                "ct": 0.2,
            },
        ),
        Dimension.linear(
            "volume",
            "ml",
            {
                "ml": 1.0,
                "l": 1000.0,
                "m3": 1e6,
                "cm3": 1.0,
                "gal": 3785.41,
                "qt": 946.353,
                "pt": 473.176,
                "cup": 236.588,
                "fl oz": 29.5735,
                "tbsp": 14.7868,
                "tsp": 4.92892,
                "gal_uk": 4546.09,
            },
        ),
        Dimension.linear(
            "speed",
            "m/s",
            {"m/s": 1.0, "km/h": 0.277778, "mph": 0.44704, "ft/s": 0.3048, "kn": 0.514444},
        ),
        Dimension.linear(
            "time",
            "s",
            {"s": 1.0, "min": 60.0, "h": 3600.0, "d": 86400.0, "wk": 604800.0, "y": 31536000.0},
        ),
        Dimension.linear(
            "area",
            "m2",
            {
                "m2": 1.0,
                "cm2": 0.0001,
                "km2": 1e6,
                "ft2": 0.092903,
                "in2": 0.00064516,
                "yd2": 0.836127,
                "ac": 4046.86,
                "ha": 10000.0,
            },
        ),
    ],
)
