"""Chemistry calculators.

Solutions, gas laws, acids and bases, thermochemistry, lab tools,
stoichiometry, electrochemistry and quick converters.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Final

from formulary.calc.models import DiagramKind, Domain, MultiModeCalculator, Result
from formulary.calc.outcome import InvalidInputError
from formulary.calc.registry import CalculatorRegistry, FormulaRegistry
from formulary.catalogs.common import bars, diagram, fmt, mode, num, text

GAS_CONSTANT_L_ATM: Final[float] = 0.0821
GAS_CONSTANT_J: Final[float] = 8.314
FARADAY: Final[float] = 96485.0
NERNST_SLOPE_298K: Final[float] = 0.0592

ATOMIC_MASSES: Final[Mapping[str, float]] = {
    "H": 1.008,
    "He": 4.003,
    "Li": 6.94,
    "Be": 9.012,
    "B": 10.81,
    "C": 12.011,
    "N": 14.007,
    "O": 15.999,
    "F": 18.998,
    "Ne": 20.180,
    "Na": 22.990,
    "Mg": 24.305,
    "Al": 26.982,
    "Si": 28.085,
    "P": 30.974,
    "S": 32.06,
    "Cl": 35.45,
    "K": 39.098,
    "Ca": 40.078,
    "Fe": 55.845,
    "Cu": 63.546,
    "Zn": 65.38,
    "Ag": 107.87,
    "Au": 196.97,
    "Pb": 207.2,
}

_FORMULA_TOKEN = re.compile(r"([A-Z][a-z]?)(\d*)|(\()|(\))(\d*)")

FORMULAS = FormulaRegistry()
formula = FORMULAS.formula

Inputs = Mapping[str, Any]


def molar_mass(chemical_formula: str) -> float:
    """Molar mass in g/mol of a formula such as "H2O" or "Ca(OH)2".

    Raises:
        ValueError: If the formula is empty, unbalanced, or uses an element
            missing from ATOMIC_MASSES.
    """
    compact = chemical_formula.replace(" ", "")
    if not compact:
        raise ValueError("Chemical formula is empty")

    stack: list[float] = [0.0]
    pos = 0
    while pos < len(compact):
        match = _FORMULA_TOKEN.match(compact, pos)
        if match is None:
            raise ValueError(f"Unexpected character {compact[pos]!r} in {chemical_formula!r}")
        element, count, open_paren, close_paren, group_count = match.groups()
        if element:
            if element not in ATOMIC_MASSES:
                raise ValueError(f"Unknown element '{element}'")
            stack[-1] += ATOMIC_MASSES[element] * int(count or 1)
        elif open_paren:
            stack.append(0.0)
        elif close_paren:
            if len(stack) == 1:
                raise ValueError(f"Unbalanced ')' in {chemical_formula!r}")
            group = stack.pop()
            stack[-1] += group * int(group_count or 1)
        pos = match.end()

    if len(stack) != 1:
        raise ValueError(f"Unbalanced '(' in {chemical_formula!r}")
    return stack[0]


# Solutions


@formula("molarity.M")
def _molarity(v: Inputs) -> Result:
    return Result(
        value=v["n"] / v["v"],
        unit="M",
        steps=("M = n / V", f"M = {fmt(v['n'])} mol / {fmt(v['v'])} L"),
        diagram=diagram(
            DiagramKind.BEAKER,
            {"fill": 0.8, "particles": min(20, v["n"] * 10), "label": "Solute"},
        ),
    )


@formula("molarity.n")
def _moles_from_molarity(v: Inputs) -> Result:
    return Result(
        value=v["M"] * v["v"],
        unit="mol",
        steps=("n = M × V", f"n = {fmt(v['M'])} M × {fmt(v['v'])} L"),
        diagram=diagram(
            DiagramKind.BEAKER,
            {"fill": 0.8, "particles": min(20, v["M"] * 10), "label": "Solute"},
        ),
    )


@formula("dilution.v2")
def _dilution(v: Inputs) -> Result:
    v2 = v["c1"] * v["v1"] / v["c2"]
    return Result(
        value=v2,
        unit="mL",
        steps=(
            "C₁V₁ = C₂V₂",
            f"V₂ = ({fmt(v['c1'])} × {fmt(v['v1'])}) / {fmt(v['c2'])}",
            f"Add {v2 - v['v1']:.2f} mL of solvent",
        ),
        diagram=diagram(DiagramKind.BEAKER, {"fill": 0.9, "particles": 10, "label": "Diluted"}),
    )


@formula("percent-conc.ww")
def _percent_mass(v: Inputs) -> Result:
    return Result(
        value=v["m_solute"] / v["m_total"] * 100,
        unit="%",
        steps=(
            "% w/w = (mass solute / total mass) * 100",
            f"% = ({fmt(v['m_solute'])} / {fmt(v['m_total'])}) * 100",
        ),
        diagram=diagram(DiagramKind.BEAKER, {"fill": 0.5, "particles": 15, "label": "Solution"}),
    )


@formula("solution-prep.mass")
def _solution_mass(v: Inputs) -> Result:
    return Result(
        value=v["c"] * v["v"] * v["mw"],
        unit="g",
        steps=(
            "Mass = Molarity × Volume × MW",
            f"Mass = {fmt(v['c'])} × {fmt(v['v'])} × {fmt(v['mw'])}",
        ),
        diagram=diagram(DiagramKind.BEAKER, {"fill": 0.5, "particles": 20, "label": "Add Solid"}),
    )


# Gas laws


@formula("ideal-gas.P")
def _ideal_gas_pressure(v: Inputs) -> Result:
    pressure = v["n"] * GAS_CONSTANT_L_ATM * v["T"] / v["V"]
    return Result(
        value=pressure,
        unit="atm",
        steps=(
            "PV = nRT",
            f"P = ({fmt(v['n'])} × {GAS_CONSTANT_L_ATM} × {fmt(v['T'])}) / {fmt(v['V'])}",
        ),
        diagram=diagram(
            DiagramKind.GAS,
            {"n": v["n"], "v": v["V"], "t": v["T"], "p": pressure, "maxV": 50},
        ),
    )


@formula("ideal-gas.V")
def _ideal_gas_volume(v: Inputs) -> Result:
    volume = v["n"] * GAS_CONSTANT_L_ATM * v["T"] / v["P"]
    return Result(
        value=volume,
        unit="L",
        steps=(
            "V = nRT / P",
            f"V = ({fmt(v['n'])} × {GAS_CONSTANT_L_ATM} × {fmt(v['T'])}) / {fmt(v['P'])}",
        ),
        diagram=diagram(
            DiagramKind.GAS,
            {"n": v["n"], "v": volume, "t": v["T"], "p": v["P"], "maxV": 100},
        ),
    )


@formula("combined-gas.v2")
def _combined_gas(v: Inputs) -> Result:
    v2 = v["p1"] * v["v1"] * v["t2"] / (v["p2"] * v["t1"])
    return Result(
        value=v2,
        unit="L",
        steps=(
            "P1V1/T1 = P2V2/T2",
            "V2 = (P1*V1*T2) / (P2*T1)",
            f"V2 = ({fmt(v['p1'])}*{fmt(v['v1'])}*{fmt(v['t2'])}) "
            f"/ ({fmt(v['p2'])}*{fmt(v['t1'])})",
        ),
        diagram=diagram(DiagramKind.GAS, {"p": v["p2"], "v": v2, "t": v["t2"], "maxV": 20}),
    )


@formula("boyles-law.v2")
def _boyle(v: Inputs) -> Result:
    v2 = v["p1"] * v["v1"] / v["p2"]
    return Result(
        value=v2,
        unit="L",
        steps=(
            "P1V1 = P2V2",
            "V2 = (P1 * V1) / P2",
            f"V2 = ({fmt(v['p1'])} * {fmt(v['v1'])}) / {fmt(v['p2'])}",
        ),
        diagram=diagram(
            DiagramKind.GAS,
            {"p": v["p2"], "v": v2, "t": 300, "maxV": max(v["v1"], v2) * 1.5},
        ),
    )


@formula("charles-law.v2")
def _charles(v: Inputs) -> Result:
    v2 = v["v1"] * v["t2"] / v["t1"]
    return Result(
        value=v2,
        unit="L",
        steps=(
            "V1/T1 = V2/T2",
            "V2 = (V1 * T2) / T1",
            f"V2 = ({fmt(v['v1'])} * {fmt(v['t2'])}) / {fmt(v['t1'])}",
        ),
        diagram=diagram(
            DiagramKind.GAS,
            {"p": 1, "v": v2, "t": v["t2"], "maxV": max(v["v1"], v2) * 1.5},
        ),
    )


# Acids and bases


@formula("ph-calc.ph")
def _ph(v: Inputs) -> Result:
    if v["h"] <= 0:
        raise InvalidInputError("h", "[H+] must be positive")
    ph = -math.log10(v["h"])
    return Result(
        value=ph,
        unit="pH",
        steps=("pH = -log[H+]", f"pH = -log({fmt(v['h'])})"),
        diagram=diagram(DiagramKind.PH_SCALE, {"ph": ph}),
    )


@formula("poh-calc.poh")
def _poh(v: Inputs) -> Result:
    if v["oh"] <= 0:
        raise InvalidInputError("oh", "[OH-] must be positive")
    poh = -math.log10(v["oh"])
    return Result(
        value=poh,
        unit="pOH",
        steps=("pOH = -log[OH-]", f"pOH = -log({fmt(v['oh'])})"),
        diagram=diagram(DiagramKind.PH_SCALE, {"ph": 14 - poh}),
    )


@formula("buffer.ph")
def _buffer(v: Inputs) -> Result:
    ph = v["pka"] + math.log10(v["base"] / v["acid"])
    return Result(
        value=ph,
        unit="pH",
        steps=(
            "pH = pKa + log([A-]/[HA])",
            f"pH = {fmt(v['pka'])} + log({fmt(v['base'])}/{fmt(v['acid'])})",
        ),
        diagram=diagram(DiagramKind.PH_SCALE, {"ph": ph}),
    )


@formula("ka-pka.pka")
def _pka(v: Inputs) -> Result:
    pka = -math.log10(v["ka"])
    return Result(
        value=pka,
        unit="pKa",
        steps=("pKa = -log(Ka)", f"pKa = -log({fmt(v['ka'])})"),
        diagram=bars(("pKa", pka, "#a855f7")),
    )


@formula("ka-pka.ka")
def _ka(v: Inputs) -> Result:
    ka = 10 ** -v["pka"]
    return Result(
        value=ka,
        unit="Ka",
        steps=("Ka = 10^(-pKa)", f"Ka = 10^(-{fmt(v['pka'])})", f"Ka = {ka:.4e}"),
        diagram=bars(("-log(Ka)", v["pka"], "#a855f7")),
    )


# Thermochemistry


@formula("specific-heat.q")
def _specific_heat(v: Inputs) -> Result:
    q = v["m"] * v["c"] * v["dt"]
    return Result(
        value=q,
        unit="J",
        steps=("q = mcΔT", f"q = {fmt(v['m'])} × {fmt(v['c'])} × {fmt(v['dt'])}"),
        diagram=bars(("Heat Energy (J)", q, "#ef4444")),
    )


@formula("gibbs.dg")
def _gibbs(v: Inputs) -> Result:
    ds_kj = v["ds"] / 1000
    dg = v["dh"] - v["t"] * ds_kj
    spontaneous = "spontaneous" if dg < 0 else "non-spontaneous"
    return Result(
        value=dg,
        unit="kJ/mol",
        steps=(
            "ΔG = ΔH - TΔS",
            f"ΔG = {fmt(v['dh'])} - {fmt(v['t'])} * ({fmt(v['ds'])}/1000)",
            f"Reaction is {spontaneous}",
        ),
        diagram=bars(
            ("ΔH", v["dh"], "#f59e0b"),
            ("-TΔS", -v["t"] * ds_kj, "#3b82f6"),
            ("ΔG", dg, "#10b981" if dg < 0 else "#ef4444"),
        ),
    )


@formula("arrhenius.k")
def _arrhenius(v: Inputs) -> Result:
    k = v["A"] * math.exp(-(v["Ea"] * 1000) / (GAS_CONSTANT_J * v["T"]))
    return Result(
        value=k,
        unit="/s",
        steps=(
            "k = A * exp(-Ea/RT)",
            f"k = {fmt(v['A'])} * exp(-{fmt(v['Ea'] * 1000)} / (8.314 * {fmt(v['T'])}))",
            f"k = {k:.3e}",
        ),
        diagram=diagram(DiagramKind.ENERGY_PROFILE, {"ea": v["Ea"], "dh": -20}),
    )


# Lab tools


@formula("beer-lambert.A")
def _absorbance(v: Inputs) -> Result:
    absorbance = v["eps"] * v["l"] * v["c"]
    return Result(
        value=absorbance,
        unit="Abs",
        steps=("A = εlc", f"A = {fmt(v['eps'])} × {fmt(v['l'])} × {fmt(v['c'])}"),
        diagram=diagram(DiagramKind.BEER_LAMBERT, {"abs": absorbance, "c": v["c"]}),
    )


@formula("density.rho")
def _density(v: Inputs) -> Result:
    rho = v["m"] / v["v"]
    return Result(
        value=rho,
        unit="g/mL",
        steps=("ρ = m / V", f"ρ = {fmt(v['m'])} / {fmt(v['v'])}"),
        diagram=bars(("Density", rho, "#6366f1")),
    )


# Stoichiometry


@formula("moles-grams.grams")
def _moles_to_grams(v: Inputs) -> Result:
    mass = v["n"] * v["mw"]
    return Result(
        value=mass,
        unit="g",
        steps=("mass = n × MW", f"mass = {fmt(v['n'])} × {fmt(v['mw'])}"),
        diagram=bars(("Mass (g)", mass, "#10b981")),
    )


@formula("moles-grams.moles")
def _grams_to_moles(v: Inputs) -> Result:
    moles = v["m"] / v["mw"]
    return Result(
        value=moles,
        unit="mol",
        steps=("n = mass / MW", f"n = {fmt(v['m'])} / {fmt(v['mw'])}"),
        diagram=bars(("Moles", moles, "#3b82f6")),
    )


@formula("moles-grams.molar-mass")
def _formula_mass(v: Inputs) -> Result:
    try:
        mw = molar_mass(v["formula"])
    except ValueError as exc:
        raise InvalidInputError("formula", str(exc)) from exc
    return Result(
        value=mw,
        unit="g/mol",
        steps=(
            "MW = Σ (atomic mass × count)",
            f"MW({v['formula']}) = {mw:.3f} g/mol",
        ),
        diagram=bars(("Molar Mass", mw, "#10b981")),
    )


@formula("yield.pct")
def _percent_yield(v: Inputs) -> Result:
    return Result(
        value=v["actual"] / v["theo"] * 100,
        unit="%",
        steps=(
            "% Yield = (Actual / Theoretical) * 100",
            f"% = ({fmt(v['actual'])} / {fmt(v['theo'])}) * 100",
        ),
        diagram=bars(("Actual", v["actual"], "#10b981"), ("Theoretical", v["theo"], "#94a3b8")),
    )


@formula("limiting-reagent.lr")
def _limiting_reagent(v: Inputs) -> Result:
    ratio_a = v["molA"] / v["coeffA"]
    ratio_b = v["molB"] / v["coeffB"]
    a_limits = ratio_a < ratio_b
    return Result(
        value="Reactant A" if a_limits else "Reactant B",
        unit="is Limiting",
        steps=(
            f"Ratio A = {fmt(v['molA'])}/{fmt(v['coeffA'])} = {ratio_a:.2f}",
            f"Ratio B = {fmt(v['molB'])}/{fmt(v['coeffB'])} = {ratio_b:.2f}",
            "Lowest ratio determines limiting reagent.",
        ),
        diagram=bars(
            ("Ratio A", ratio_a, "#ef4444" if a_limits else "#94a3b8"),
            ("Ratio B", ratio_b, "#94a3b8" if a_limits else "#ef4444"),
        ),
    )


# Electrochemistry


@formula("nernst.E")
def _nernst(v: Inputs) -> Result:
    potential = v["e0"] - NERNST_SLOPE_298K / v["n"] * math.log10(v["q"])
    return Result(
        value=potential,
        unit="V",
        steps=(
            "E = E⁰ - (0.0592/n)logQ",
            f"E = {fmt(v['e0'])} - (0.0592/{fmt(v['n'])})log({fmt(v['q'])})",
        ),
        diagram=diagram(DiagramKind.CELL, {"e": potential, "e0": v["e0"]}),
    )


@formula("electrolysis.m")
def _electrolysis(v: Inputs) -> Result:
    moles = v["i"] * v["t"] / (v["n"] * FARADAY)
    mass = moles * v["mw"]
    return Result(
        value=mass,
        unit="g",
        steps=(
            "n(mol) = It / nF",
            "mass = n(mol) * MW",
            f"mass = ({fmt(v['i'])}*{fmt(v['t'])} / {fmt(v['n'])}*96485) * {fmt(v['mw'])}",
        ),
        diagram=bars(("Deposited Mass", mass, "#f59e0b")),
    )


# Converters


@formula("temp-conv.c_to_others")
def _celsius_to_others(v: Inputs) -> Result:
    fahrenheit = v["c"] * 9 / 5 + 32
    kelvin = v["c"] + 273.15
    return Result(
        value=fahrenheit,
        unit="°F",
        steps=(
            "F = C × 9/5 + 32",
            "K = C + 273.15",
            f"{fahrenheit:.1f}°F / {kelvin:.1f}K",
        ),
        diagram=bars(("Celsius", v["c"], "#3b82f6"), ("Fahrenheit", fahrenheit, "#ef4444")),
    )


@formula("pressure-conv.atm_to_others")
def _atm_to_others(v: Inputs) -> Result:
    kpa = v["atm"] * 101.325
    mmhg = v["atm"] * 760
    return Result(
        value=kpa,
        unit="kPa",
        steps=(
            "1 atm = 101.325 kPa",
            "1 atm = 760 mmHg",
            f"{kpa:.1f} kPa / {mmhg:.0f} mmHg",
        ),
        diagram=bars(("ATM", v["atm"], "#6366f1"), ("Bar", v["atm"] * 1.01325, "#10b981")),
    )


@formula("energy-conv.j_to_others")
def _joules_to_others(v: Inputs) -> Result:
    cal = v["j"] / 4.184
    ev = v["j"] / 1.602e-19
    return Result(
        value=cal,
        unit="cal",
        steps=(
            "1 cal = 4.184 J",
            "1 eV = 1.602e-19 J",
            f"{cal:.1f} cal / {ev:.2e} eV",
        ),
        diagram=bars(("Joules", v["j"], "#10b981"), ("Calories", cal, "#f59e0b")),
    )


SOLUTIONS = "Solutions & Conc."
GAS_LAWS = "Gas Laws"
ACIDS = "Acids & Bases"
THERMOCHEMISTRY = "Thermochemistry"
LAB = "Lab Tools"
STOICHIOMETRY = "Stoichiometry"
ELECTROCHEMISTRY = "Electrochemistry"
CONVERTERS = "Converters"


def _calc(
    calc_id: str, title: str, category: str, description: str, icon: str, *modes: Any
) -> MultiModeCalculator:
    return MultiModeCalculator(
        id=calc_id,
        title=title,
        category=category,
        domain=Domain.CHEMISTRY,
        description=description,
        icon=icon,
        solve_modes=modes,
    )


# fmt: off
CALCULATORS: Final[tuple[MultiModeCalculator, ...]] = (
    _calc(
        "molarity", "Molarity Calculator", SOLUTIONS,
        "Calculate Molarity, Moles, or Volume.", "flask-conical",
        mode(
            "molarity", "M", "Molarity (M)",
            num("n", "Moles Solute", "mol", 0.5, 0, None, 0.01),
            num("v", "Volume Solution", "L", 1, 0.001, None, 0.01),
        ),
        mode(
            "molarity", "n", "Moles (n)",
            num("M", "Molarity", "M", 0.5, 0, None, 0.01),
            num("v", "Volume", "L", 1, 0, None, 0.01),
        ),
    ),
    _calc(
        "dilution", "Dilution Calculator", SOLUTIONS, "C₁V₁ = C₂V₂", "test-tube",
        mode(
            "dilution", "v2", "Final Volume (V₂)",
            num("c1", "Initial Conc (C₁)", "M", 10),
            num("v1", "Initial Vol (V₁)", "mL", 50),
            num("c2", "Final Conc (C₂)", "M", 1),
        ),
    ),
    _calc(
        "percent-conc", "Percent Concentration", SOLUTIONS,
        "Calculate % w/w or % v/v.", "droplets",
        mode(
            "percent-conc", "ww", "% Mass (w/w)",
            num("m_solute", "Mass Solute", "g", 5),
            num("m_total", "Total Mass", "g", 100),
        ),
    ),
    _calc(
        "solution-prep", "Solution Preparation", SOLUTIONS,
        "Calculate mass required for a solution.", "scale",
        mode(
            "solution-prep", "mass", "Mass Required",
            num("v", "Volume", "L", 1, 0.1),
            num("c", "Concentration", "M", 0.5),
            num("mw", "Molar Mass", "g/mol", 58.44),
        ),
    ),
    _calc(
        "ideal-gas", "Ideal Gas Law", GAS_LAWS, "PV = nRT", "wind",
        mode(
            "ideal-gas", "P", "Pressure (P)",
            num("n", "Moles", "mol", 1),
            num("T", "Temp", "K", 298),
            num("V", "Volume", "L", 22.4),
        ),
        mode(
            "ideal-gas", "V", "Volume (V)",
            num("n", "Moles", "mol", 1),
            num("T", "Temp", "K", 298),
            num("P", "Pressure", "atm", 1),
        ),
    ),
    _calc(
        "combined-gas", "Combined Gas Law", GAS_LAWS, "P1V1/T1 = P2V2/T2", "wind",
        mode(
            "combined-gas", "v2", "Solve for V2",
            num("p1", "P1", "atm", 1),
            num("v1", "V1", "L", 5),
            num("t1", "T1", "K", 300),
            num("p2", "P2", "atm", 2),
            num("t2", "T2", "K", 300),
        ),
    ),
    _calc(
        "boyles-law", "Boyle's Law", GAS_LAWS, "Pressure vs Volume (Const T).", "wind",
        mode(
            "boyles-law", "v2", "Final Volume (V2)",
            num("p1", "Initial Pressure (P1)", "atm", 1),
            num("v1", "Initial Volume (V1)", "L", 10),
            num("p2", "Final Pressure (P2)", "atm", 2),
        ),
    ),
    _calc(
        "charles-law", "Charles's Law", GAS_LAWS, "Volume vs Temp (Const P).", "thermometer",
        mode(
            "charles-law", "v2", "Final Volume (V2)",
            num("v1", "Initial Volume (V1)", "L", 10),
            num("t1", "Initial Temp (T1)", "K", 300),
            num("t2", "Final Temp (T2)", "K", 600),
        ),
    ),
    _calc(
        "ph-calc", "pH Calculator", ACIDS, "Calculate pH from [H+].", "test-tube",
        mode(
            "ph-calc", "ph", "pH from [H+]",
            num("h", "[H+] Conc", "M", 0.0001, 0, None, 1e-7),
        ),
    ),
    _calc(
        "poh-calc", "pOH Calculator", ACIDS, "Calculate pOH from [OH-].", "test-tube",
        mode(
            "poh-calc", "poh", "pOH from [OH-]",
            num("oh", "[OH-] Conc", "M", 0.0001, 0, None, 1e-7),
        ),
    ),
    _calc(
        "buffer", "Buffer Calculator", ACIDS, "Henderson-Hasselbalch Equation.", "layers",
        mode(
            "buffer", "ph", "Buffer pH",
            num("pka", "pKa", "", 4.76),
            num("base", "[Base]", "M", 0.1),
            num("acid", "[Acid]", "M", 0.1),
        ),
    ),
    _calc(
        "ka-pka", "Ka ↔ pKa Converter", ACIDS, "Convert between Ka and pKa.", "arrow-right-left",
        mode("ka-pka", "pka", "Calculate pKa", num("ka", "Ka", "", 0.0000174)),
        mode("ka-pka", "ka", "Calculate Ka", num("pka", "pKa", "", 4.76)),
    ),
    _calc(
        "specific-heat", "Specific Heat", THERMOCHEMISTRY, "q = mcΔT", "flame",
        mode(
            "specific-heat", "q", "Heat (q)",
            num("m", "Mass", "g", 100),
            num("c", "Specific Heat", "J/g°C", 4.18),
            num("dt", "ΔT", "Δ°C", 20),
        ),
    ),
    _calc(
        "gibbs", "Gibbs Free Energy", THERMOCHEMISTRY, "ΔG = ΔH - TΔS", "zap",
        mode(
            "gibbs", "dg", "ΔG (Spontaneity)",
            num("dh", "ΔH (Enthalpy)", "kJ/mol", -100),
            num("ds", "ΔS (Entropy)", "J/mol·K", 50),
            num("t", "Temp", "K", 298),
        ),
    ),
    _calc(
        "arrhenius", "Arrhenius Equation", THERMOCHEMISTRY,
        "Rate constant & Activation Energy.", "flame",
        mode(
            "arrhenius", "k", "Rate Constant (k)",
            num("A", "Freq. Factor (A)", "/s", 1e13),
            num("Ea", "Activation E", "kJ/mol", 50),
            num("T", "Temp", "K", 298),
        ),
    ),
    _calc(
        "beer-lambert", "Beer-Lambert Law", LAB, "A = εlc (Absorbance)", "microscope",
        mode(
            "beer-lambert", "A", "Absorbance (A)",
            num("eps", "Molar Absorptivity (ε)", "L/mol·cm", 1500),
            num("l", "Path Length (l)", "cm", 1),
            num("c", "Concentration (c)", "M", 0.0005),
        ),
    ),
    _calc(
        "density", "Density Calculator", LAB, "ρ = m/V", "scale",
        mode(
            "density", "rho", "Density (ρ)",
            num("m", "Mass", "g", 10),
            num("v", "Volume", "mL", 2),
        ),
    ),
    _calc(
        "moles-grams", "Moles ↔ Grams", STOICHIOMETRY, "Convert using atomic mass.", "atom",
        mode(
            "moles-grams", "grams", "To Grams",
            num("n", "Moles", "mol", 2),
            num("mw", "Molar Mass", "g/mol", 18.015),
        ),
        mode(
            "moles-grams", "moles", "To Moles",
            num("m", "Mass", "g", 36.03),
            num("mw", "Molar Mass", "g/mol", 18.015),
        ),
        mode(
            "moles-grams", "molar-mass", "Molar Mass from Formula",
            text("formula", "Chemical Formula", "H2O"),
        ),
    ),
    _calc(
        "yield", "Percent Yield", STOICHIOMETRY, "Actual vs Theoretical Yield.", "scale",
        mode(
            "yield", "pct", "Percent Yield",
            num("actual", "Actual Yield", "g", 45),
            num("theo", "Theoretical", "g", 50),
        ),
    ),
    _calc(
        "limiting-reagent", "Limiting Reagent", STOICHIOMETRY, "Find limiting reactant.", "scale",
        mode(
            "limiting-reagent", "lr", "Limiting Reactant",
            num("molA", "Moles A", "mol", 5),
            num("coeffA", "Coeff A", "", 1),
            num("molB", "Moles B", "mol", 3),
            num("coeffB", "Coeff B", "", 1),
        ),
    ),
    _calc(
        "nernst", "Nernst Equation", ELECTROCHEMISTRY, "Calculate Cell Potential.", "zap",
        mode(
            "nernst", "E", "Cell Potential (E)",
            num("e0", "Standard E⁰", "V", 1.10),
            num("n", "Electrons (n)", "", 2),
            num("q", "Reaction Quotient (Q)", "", 0.01),
        ),
    ),
    _calc(
        "electrolysis", "Electrolysis (Faraday)", ELECTROCHEMISTRY,
        "Mass deposited by electrolysis.", "zap",
        mode(
            "electrolysis", "m", "Mass Deposited",
            num("i", "Current", "A", 5),
            num("t", "Time", "s", 600),
            num("mw", "Molar Mass", "g/mol", 63.55),
            num("n", "Electrons (n)", "", 2),
        ),
    ),
    _calc(
        "temp-conv", "Temperature", CONVERTERS, "C, F, K conversion.", "thermometer",
        mode("temp-conv", "c_to_others", "From Celsius", num("c", "Celsius", "°C", 25)),
    ),
    _calc(
        "pressure-conv", "Pressure", CONVERTERS, "atm, kPa, mmHg, bar.", "wind",
        mode("pressure-conv", "atm_to_others", "From ATM", num("atm", "Pressure", "atm", 1)),
    ),
    _calc(
        "energy-conv", "Energy Converter", CONVERTERS, "Joules, Calories, eV.", "zap",
        mode("energy-conv", "j_to_others", "From Joules", num("j", "Energy", "J", 1000)),
    ),
)
# fmt: on


def register_chemistry_calculators(registry: CalculatorRegistry) -> CalculatorRegistry:
    """Register all chemistry calculators into a registry."""
    registry.register_catalog(CALCULATORS, FORMULAS)
    return registry
