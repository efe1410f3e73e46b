"""Physics calculators.

Mechanics, fluids, electricity and magnetism, waves, optics,
thermodynamics, modern physics and astronomy. Inputs are declared in the
units the formulas expect; the engine converts user-selected units first.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Final

from formulary.calc.models import DiagramKind, Domain, MultiModeCalculator, Result
from formulary.calc.registry import CalculatorRegistry, FormulaRegistry
from formulary.catalogs.common import bars, diagram, fmt, mode, num, to_deg, to_rad

G_EARTH: Final[float] = 9.81
GRAVITATIONAL_CONSTANT: Final[float] = 6.674e-11
SPEED_OF_LIGHT: Final[float] = 3e8
COULOMB_CONSTANT: Final[float] = 8.99e9
PLANCK: Final[float] = 6.626e-34
VACUUM_PERMEABILITY: Final[float] = 4 * math.pi * 1e-7
ASTRONOMICAL_UNIT_M: Final[float] = 1.496e11
SECONDS_PER_YEAR: Final[float] = 365.25 * 24 * 3600
SOLAR_RADIUS_M: Final[float] = 6.96e8
SOLAR_LUMINOSITY_W: Final[float] = 3.828e26
STEFAN_BOLTZMANN: Final[float] = 5.67e-8
HEARING_THRESHOLD: Final[float] = 1e-12

FORMULAS = FormulaRegistry()
formula = FORMULAS.formula

Inputs = Mapping[str, Any]


# Mechanics


@formula("kinematics.s")
def _displacement(v: Inputs) -> Result:
    s = v["u"] * v["t"] + 0.5 * v["a"] * v["t"] ** 2
    return Result(
        value=s,
        unit="m",
        steps=(
            "s = ut + ½at²",
            f"s = ({fmt(v['u'])})({fmt(v['t'])}) + 0.5({fmt(v['a'])})({fmt(v['t'])})²",
        ),
        diagram=bars(("Distance", s, "#3b82f6")),
    )


@formula("kinematics.v")
def _final_velocity(v: Inputs) -> Result:
    final = v["u"] + v["a"] * v["t"]
    return Result(
        value=final,
        unit="m/s",
        steps=("v = u + at", f"v = {fmt(v['u'])} + ({fmt(v['a'])})({fmt(v['t'])})"),
        diagram=bars(("Final Velocity", final, "#ef4444")),
    )


@formula("pendulum.t")
def _pendulum_period(v: Inputs) -> Result:
    period = 2 * math.pi * math.sqrt(v["l"] / v["g"])
    return Result(
        value=period,
        unit="s",
        steps=("T = 2π√(L/g)", f"T = 2π√({fmt(v['l'])}/{fmt(v['g'])})"),
        diagram=diagram(DiagramKind.PENDULUM, {"l": v["l"], "t": period}),
    )


@formula("torque.tau")
def _torque(v: Inputs) -> Result:
    tau = v["r"] * v["f"] * math.sin(to_rad(v["theta"]))
    return Result(
        value=tau,
        unit="Nm",
        steps=(
            "τ = r F sin(θ)",
            f"τ = {fmt(v['r'])} * {fmt(v['f'])} * sin({fmt(v['theta'])}°)",
        ),
        diagram=diagram(DiagramKind.TORQUE, {"f": v["f"], "r": v["r"], "theta": v["theta"]}),
    )


@formula("work-power.w")
def _work(v: Inputs) -> Result:
    work = v["f"] * v["d"] * math.cos(to_rad(v["theta"]))
    return Result(
        value=work,
        unit="J",
        steps=("W = Fd cos(θ)", f"W = {fmt(v['f'])} * {fmt(v['d'])} * cos({fmt(v['theta'])})"),
        diagram=bars(("Work Done", work, "#10b981")),
    )


@formula("work-power.p")
def _power(v: Inputs) -> Result:
    power = v["w"] / v["t"]
    return Result(
        value=power,
        unit="W",
        steps=("P = W / t", f"P = {fmt(v['w'])} / {fmt(v['t'])}"),
        diagram=bars(("Power", power, "#f59e0b")),
    )


@formula("circular-motion.fc")
def _centripetal_force(v: Inputs) -> Result:
    return Result(
        value=v["m"] * v["v"] ** 2 / v["r"],
        unit="N",
        steps=("Fc = mv²/r", f"Fc = {fmt(v['m'])} * {fmt(v['v'])}² / {fmt(v['r'])}"),
        diagram=diagram(DiagramKind.ORBIT, {"v": v["v"], "r": v["r"]}),
    )


@formula("projectile-motion.range")
def _projectile(v: Inputs) -> Result:
    """Trajectory of a projectile launched from height h0 over flat ground.

    The diagram carries 21 evenly spaced (x, y) samples of the flight.
    """
    rad = to_rad(v["angle"])
    vx = v["v0"] * math.cos(rad)
    vy = v["v0"] * math.sin(rad)
    t_flight = (vy + math.sqrt(vy * vy + 2 * G_EARTH * v["h0"])) / G_EARTH
    distance = vx * t_flight
    h_max = v["h0"] + vy * vy / (2 * G_EARTH)

    points = []
    for i in range(21):
        t = t_flight / 20 * i
        points.append({"x": vx * t, "y": v["h0"] + vy * t - 0.5 * G_EARTH * t * t})

    return Result(
        value=distance,
        unit="m",
        steps=(
            f"Vy = {fmt(v['v0'])}sin({fmt(v['angle'])}) = {vy:.1f} m/s",
            f"Vx = {fmt(v['v0'])}cos({fmt(v['angle'])}) = {vx:.1f} m/s",
            f"Time = {t_flight:.2f} s",
            f"Max Height = {h_max:.2f} m",
        ),
        diagram=diagram(
            DiagramKind.PROJECTILE, {"points": points, "range": distance, "h_max": h_max}
        ),
    )


@formula("newtons-second.force")
def _newton_force(v: Inputs) -> Result:
    force = v["m"] * v["a"]
    return Result(
        value=force,
        unit="N",
        steps=("F = m * a", f"F = {fmt(v['m'])} * {fmt(v['a'])}"),
        diagram=bars(("Force", force, "#6366f1")),
    )


# Fluid mechanics


@formula("buoyancy.fb")
def _buoyant_force(v: Inputs) -> Result:
    fb = v["rho"] * v["v"] * v["g"]
    return Result(
        value=fb,
        unit="N",
        steps=("Fb = ρ V g", f"Fb = {fmt(v['rho'])} * {fmt(v['v'])} * {fmt(v['g'])}"),
        diagram=diagram(DiagramKind.BUOYANCY, {"rho": v["rho"], "v": v["v"], "fb": fb}),
    )


@formula("hydrostatic-pressure.p")
def _hydrostatic_pressure(v: Inputs) -> Result:
    kpa = v["rho"] * v["g"] * v["h"] / 1000
    return Result(
        value=kpa,
        unit="kPa",
        steps=("P = ρgh", f"P = {fmt(v['rho'])} * {fmt(v['g'])} * {fmt(v['h'])} (Pa)"),
        diagram=bars(("Pressure", kpa, "#06b6d4")),
    )


@formula("continuity-equation.q")
def _flow_rate(v: Inputs) -> Result:
    q = v["a"] * v["v"]
    return Result(
        value=q,
        unit="m³/s",
        steps=("Q = A * v", f"Q = {fmt(v['a'])} * {fmt(v['v'])}"),
        diagram=diagram(DiagramKind.FLOW, {"a": v["a"], "v": v["v"], "q": q}),
    )


# Electricity and magnetism


@formula("electric-power.p-vi")
def _power_vi(v: Inputs) -> Result:
    p = v["v"] * v["i"]
    return Result(
        value=p,
        unit="W",
        steps=("P = V * I", f"P = {fmt(v['v'])} * {fmt(v['i'])}"),
        diagram=bars(("Power (W)", p, "#f59e0b")),
    )


@formula("electric-power.p-ir")
def _power_ir(v: Inputs) -> Result:
    p = v["i"] ** 2 * v["r"]
    return Result(
        value=p,
        unit="W",
        steps=("P = I²R", f"P = ({fmt(v['i'])})² * {fmt(v['r'])}"),
        diagram=bars(("Power (W)", p, "#ef4444")),
    )


@formula("voltage-divider.vout")
def _voltage_divider(v: Inputs) -> Result:
    vout = v["vin"] * v["r2"] / (v["r1"] + v["r2"])
    return Result(
        value=vout,
        unit="V",
        steps=(
            "Vout = Vin * R2 / (R1 + R2)",
            f"Vout = {fmt(v['vin'])} * {fmt(v['r2'])} / ({fmt(v['r1'])} + {fmt(v['r2'])})",
        ),
        diagram=diagram(
            DiagramKind.VOLTAGE_DIVIDER,
            {"vin": v["vin"], "r1": v["r1"], "r2": v["r2"], "vout": vout},
        ),
    )


@formula("transformer.vs")
def _transformer(v: Inputs) -> Result:
    vs = v["vp"] * v["ns"] / v["np"]
    return Result(
        value=vs,
        unit="V",
        steps=(
            "Vs/Vp = Ns/Np",
            "Vs = Vp * (Ns/Np)",
            f"Vs = {fmt(v['vp'])} * ({fmt(v['ns'])}/{fmt(v['np'])})",
        ),
        diagram=diagram(
            DiagramKind.TRANSFORMER, {"vp": v["vp"], "vs": vs, "np": v["np"], "ns": v["ns"]}
        ),
    )


@formula("lc-resonance.f")
def _lc_resonance(v: Inputs) -> Result:
    inductance = v["l"] * 1e-3
    capacitance = v["c"] * 1e-6
    f = 1 / (2 * math.pi * math.sqrt(inductance * capacitance))
    return Result(
        value=f,
        unit="Hz",
        steps=("f = 1 / (2π√LC)", f"f = 1 / (2π * √({fmt(v['l'])}mH * {fmt(v['c'])}µF))"),
        diagram=diagram(DiagramKind.LC_CIRCUIT, {"f": f, "l": v["l"], "c": v["c"]}),
    )


@formula("ohms-law.voltage")
def _ohms_voltage(v: Inputs) -> Result:
    volts = v["i"] * v["r"]
    return Result(
        value=volts,
        unit="V",
        steps=("V = I * R", f"V = {fmt(v['i'])} * {fmt(v['r'])}"),
        diagram=diagram(DiagramKind.CIRCUIT, {"v": volts, "i": v["i"], "r": v["r"]}),
    )


@formula("ohms-law.current")
def _ohms_current(v: Inputs) -> Result:
    amps = v["v"] / v["r"]
    return Result(
        value=amps,
        unit="A",
        steps=("I = V / R", f"I = {fmt(v['v'])} / {fmt(v['r'])}"),
        diagram=diagram(DiagramKind.CIRCUIT, {"v": v["v"], "i": amps, "r": v["r"]}),
    )


@formula("resistors.series")
def _series(v: Inputs) -> Result:
    return Result(
        value=v["r1"] + v["r2"],
        unit="Ω",
        steps=("Req = R1 + R2", f"Req = {fmt(v['r1'])} + {fmt(v['r2'])}"),
        diagram=diagram(DiagramKind.RESISTOR, {"r1": v["r1"], "r2": v["r2"], "mode": "series"}),
    )


@formula("resistors.parallel")
def _parallel(v: Inputs) -> Result:
    req = v["r1"] * v["r2"] / (v["r1"] + v["r2"])
    return Result(
        value=req,
        unit="Ω",
        steps=(
            "1/Req = 1/R1 + 1/R2",
            f"Req = ({fmt(v['r1'])}*{fmt(v['r2'])}) / ({fmt(v['r1'])}+{fmt(v['r2'])})",
        ),
        diagram=diagram(
            DiagramKind.RESISTOR, {"r1": v["r1"], "r2": v["r2"], "mode": "parallel"}
        ),
    )


@formula("electric-field.e")
def _electric_field(v: Inputs) -> Result:
    r = v["r"] / 100
    e = COULOMB_CONSTANT * v["q"] * 1e-6 / (r * r)
    return Result(
        value=e,
        unit="N/C",
        steps=("E = kQ / r²", f"E = (9e9 * {fmt(v['q'])}e-6) / ({fmt(v['r'])}e-2)²"),
        diagram=diagram(DiagramKind.FORCES, {"m1": v["q"], "m2": 0, "type": "field"}),
    )


@formula("coulombs-law.force")
def _coulomb_force(v: Inputs) -> Result:
    r = v["r"] / 100
    force = 8.987e9 * abs(v["q1"] * 1e-6 * v["q2"] * 1e-6) / (r * r)
    return Result(
        value=force,
        unit="N",
        steps=(
            "F = k|q1q2|/r²",
            f"F = 9e9 * |{fmt(v['q1'])}μ * {fmt(v['q2'])}μ| / ({fmt(v['r'])}cm)²",
        ),
        diagram=diagram(DiagramKind.FORCES, {"m1": v["q1"], "m2": v["q2"], "type": "charge"}),
    )


@formula("capacitance.q")
def _capacitor_charge(v: Inputs) -> Result:
    q = v["c"] * v["v"]
    return Result(
        value=q,
        unit="µC",
        steps=("Q = CV", f"Q = {fmt(v['c'])}µF * {fmt(v['v'])}V"),
        diagram=bars(("Charge Stored", q, "#f59e0b")),
    )


@formula("magnetic-force.f")
def _magnetic_force(v: Inputs) -> Result:
    force = v["q"] * 1e-3 * v["v"] * v["b"] * math.sin(to_rad(v["theta"]))
    return Result(
        value=force,
        unit="N",
        steps=(
            "F = qvB sin(θ)",
            f"F = {fmt(v['q'])}m * {fmt(v['v'])} * {fmt(v['b'])} * sin({fmt(v['theta'])})",
        ),
        diagram=bars(("Force", force, "#8b5cf6")),
    )


@formula("magnetic-field-wire.b")
def _wire_field(v: Inputs) -> Result:
    b = VACUUM_PERMEABILITY * v["i"] / (2 * math.pi * v["r"] / 100)
    return Result(
        value=b * 1e6,
        unit="µT",
        steps=("B = μ₀I / 2πr", f"B = (4πe-7 * {fmt(v['i'])}) / (2π * {fmt(v['r'])}e-2)"),
        diagram=diagram(DiagramKind.ORBIT, {"r": v["r"], "v": 0}),
    )


# Waves and sound


@formula("wave-properties.v")
def _wave_speed(v: Inputs) -> Result:
    return Result(
        value=v["f"] * v["lam"],
        unit="m/s",
        steps=("v = fλ", f"v = {fmt(v['f'])} * {fmt(v['lam'])}"),
        diagram=diagram(DiagramKind.WAVE, {"f": v["f"], "lam": v["lam"]}),
    )


@formula("wave-properties.f")
def _wave_frequency(v: Inputs) -> Result:
    f = v["v"] / v["lam"]
    return Result(
        value=f,
        unit="Hz",
        steps=("f = v / λ", f"f = {fmt(v['v'])} / {fmt(v['lam'])}"),
        diagram=diagram(DiagramKind.WAVE, {"f": f, "lam": v["lam"]}),
    )


@formula("doppler-effect.fobs")
def _doppler(v: Inputs) -> Result:
    fobs = v["fs"] * (v["v"] + v["vo"]) / (v["v"] - v["vs"])
    return Result(
        value=fobs,
        unit="Hz",
        steps=(
            "f_obs = fs * (v + vo) / (v - vs)",
            f"f_obs = {fmt(v['fs'])} * ({fmt(v['v'])}+{fmt(v['vo'])}) "
            f"/ ({fmt(v['v'])}-{fmt(v['vs'])})",
        ),
        diagram=diagram(DiagramKind.DOPPLER, {"vs": v["vs"], "v": v["v"]}),
    )


@formula("sound-decibels.db")
def _decibels(v: Inputs) -> Result:
    db = 10 * math.log10(v["i"] / HEARING_THRESHOLD)
    return Result(
        value=db,
        unit="dB",
        steps=("β = 10 log(I/I₀)", f"β = 10 log({fmt(v['i'])}/1e-12)"),
        diagram=bars(("Decibels", db, "#3b82f6")),
    )


# Light and optics


@formula("diffraction.theta")
def _diffraction(v: Inputs) -> Result:
    """First-order (or n-th order) grating angle from d sin θ = nλ.

    Returns a textual value when no such angle exists.
    """
    ratio = v["n"] * v["lam"] * 1e-9 / (v["d"] * 1e-6)
    if ratio > 1:
        return Result(
            value="Impossible geometry",
            unit="deg",
            steps=("Impossible geometry (sin θ > 1)",),
        )
    theta = to_deg(math.asin(ratio))
    return Result(
        value=theta,
        unit="deg",
        steps=("d sinθ = nλ", f"θ = arcsin({fmt(v['n'])}*{fmt(v['lam'])}nm / {fmt(v['d'])}µm)"),
        diagram=diagram(DiagramKind.INTERFERENCE, {"lam": v["lam"], "d": v["d"]}),
    )


@formula("lens-equation.di")
def _lens(v: Inputs) -> Result:
    di = 1 / (1 / v["f"] - 1 / v["do"])
    return Result(
        value=di,
        unit="cm",
        steps=(
            "1/f = 1/do + 1/di",
            f"1/{fmt(v['f'])} = 1/{fmt(v['do'])} + 1/di",
            f"di = {di:.2f}",
        ),
        diagram=diagram(DiagramKind.LENS, {"f": v["f"], "do": v["do"], "di": di}),
    )


@formula("snells-law.angle2")
def _snell(v: Inputs) -> Result:
    sin_t2 = v["n1"] / v["n2"] * math.sin(to_rad(v["theta1"]))
    # Total internal reflection is reported as a grazing 90°.
    theta2 = 90.0 if sin_t2 > 1 else to_deg(math.asin(sin_t2))
    return Result(
        value=theta2,
        unit="deg",
        steps=("n₁sin(θ₁) = n₂sin(θ₂)", f"θ₂ = arcsin({sin_t2:.3f})"),
        diagram=diagram(
            DiagramKind.RAY,
            {"n1": v["n1"], "n2": v["n2"], "theta1": v["theta1"], "theta2": theta2},
        ),
    )


# Thermodynamics


@formula("thermal-expansion.dl")
def _thermal_expansion(v: Inputs) -> Result:
    dl = v["l"] * v["alpha"] * 1e-6 * v["dt"]
    return Result(
        value=dl * 1000,
        unit="mm",
        steps=("ΔL = α L ΔT", f"ΔL = {fmt(v['alpha'])}e-6 * {fmt(v['l'])} * {fmt(v['dt'])}"),
        diagram=bars(
            ("Orig", v["l"] * 1000, "#94a3b8"),
            ("Expanded", v["l"] * 1000 + dl * 1000, "#ef4444"),
        ),
    )


@formula("heat-transfer.q")
def _heat(v: Inputs) -> Result:
    q = v["m"] * v["c"] * v["dt"]
    return Result(
        value=q,
        unit="J",
        steps=("Q = m c ΔT", f"Q = {fmt(v['m'])} * {fmt(v['c'])} * {fmt(v['dt'])}"),
        diagram=bars(("Energy (J)", q, "#ef4444")),
    )


# Modern physics


@formula("mass-energy.e")
def _rest_energy(v: Inputs) -> Result:
    e = v["m"] * SPEED_OF_LIGHT**2
    return Result(
        value=e,
        unit="J",
        steps=("E = mc²", f"E = {fmt(v['m'])} * (3e8)²"),
        diagram=bars(("Rest Energy", e, "#8b5cf6")),
    )


@formula("radioactive-decay.n")
def _decay(v: Inputs) -> Result:
    remaining = v["n0"] * 0.5 ** (v["t"] / v["half"])
    return Result(
        value=remaining,
        unit="g",
        steps=(
            "N = N₀(1/2)^(t/t½)",
            f"N = {fmt(v['n0'])} * 0.5^({fmt(v['t'])}/{fmt(v['half'])})",
        ),
        diagram=diagram(DiagramKind.DECAY, {"n0": v["n0"], "half": v["half"], "t": v["t"]}),
    )


@formula("photon-energy.e")
def _photon(v: Inputs) -> Result:
    return Result(
        value=PLANCK * v["f"] * 1e14,
        unit="J",
        steps=("E = hf", f"E = 6.626e-34 * {fmt(v['f'])}e14"),
        diagram=diagram(DiagramKind.WAVE, {"f": v["f"], "lam": 1}),
    )


@formula("length-contraction.l")
def _length_contraction(v: Inputs) -> Result:
    beta = v["v"] / 100
    factor = 1 - beta * beta
    length = v["l0"] * math.sqrt(factor)
    return Result(
        value=length,
        unit="m",
        steps=("L = L₀√(1 - v²/c²)", f"L = {fmt(v['l0'])} * √({fmt(factor)})"),
        diagram=bars(("Rest Length", v["l0"], "#94a3b8"), ("Observed Length", length, "#ef4444")),
    )


@formula("time-dilation.t")
def _time_dilation(v: Inputs) -> Result:
    beta = v["v"] / 100
    gamma = 1 / math.sqrt(1 - beta * beta)
    dilated = v["t0"] * gamma
    return Result(
        value=dilated,
        unit="s",
        steps=(
            f"γ = 1 / √(1 - v²/c²) = {gamma:.4f}",
            f"t' = γt₀ = {gamma:.4f} * {fmt(v['t0'])}",
        ),
        diagram=bars(("Proper Time", v["t0"], "#94a3b8"), ("Dilated Time", dilated, "#8b5cf6")),
    )


# Astronomy


@formula("gravitational-force.f")
def _gravity(v: Inputs) -> Result:
    r = v["r"] * 1000
    force = GRAVITATIONAL_CONSTANT * v["m1"] * 1e24 * v["m2"] / (r * r)
    return Result(
        value=force,
        unit="N",
        steps=(
            "F = GMm/r²",
            f"F = (6.67e-11 * {fmt(v['m1'])}e24 * {fmt(v['m2'])}) / ({fmt(v['r'])}e3)²",
        ),
        diagram=diagram(DiagramKind.FORCES, {"m1": 100, "m2": 10, "type": "mass"}),
    )


@formula("escape-velocity.v")
def _escape_velocity(v: Inputs) -> Result:
    ve = math.sqrt(2 * GRAVITATIONAL_CONSTANT * v["m"] * 1e24 / (v["r"] * 1000))
    return Result(
        value=ve,
        unit="m/s",
        steps=("v = √(2GM/R)", f"v = √((2 * 6.67e-11 * {fmt(v['m'])}e24) / {fmt(v['r'])}e3)"),
        diagram=diagram(DiagramKind.ORBIT, {"v": ve, "r": v["r"]}),
    )


@formula("orbital-velocity.v")
def _orbital_velocity(v: Inputs) -> Result:
    mass = v["m"] * 1e24
    radius = v["r"] * 1000
    speed = math.sqrt(GRAVITATIONAL_CONSTANT * mass / radius)
    return Result(
        value=speed,
        unit="m/s",
        steps=(
            "v = √(GM / r)",
            f"v = √({GRAVITATIONAL_CONSTANT} * {mass:.2e} / {radius:.2e})",
        ),
        diagram=diagram(DiagramKind.ORBIT, {"r": v["r"], "v": speed}),
    )


@formula("keplers-third-law.t")
def _kepler(v: Inputs) -> Result:
    a = v["a"] * ASTRONOMICAL_UNIT_M
    period = math.sqrt(4 * math.pi**2 * a**3 / (GRAVITATIONAL_CONSTANT * v["m"] * 1e24))
    return Result(
        value=period / SECONDS_PER_YEAR,
        unit="years",
        steps=("T² = (4π²/GM)a³", "T = √(...) / sec_in_year"),
        diagram=diagram(DiagramKind.ORBIT, {"r": v["a"] * 1000, "v": 0}),
    )


@formula("star-luminosity.l")
def _luminosity(v: Inputs) -> Result:
    radius = v["r"] * SOLAR_RADIUS_M
    watts = 4 * math.pi * radius**2 * STEFAN_BOLTZMANN * v["t"] ** 4
    relative = watts / SOLAR_LUMINOSITY_W
    return Result(
        value=relative,
        unit="L_sun",
        steps=("L = 4πR²σT⁴", f"L/L☉ = {relative:.2f}"),
        diagram=diagram(DiagramKind.STAR, {"r": v["r"], "t": v["t"]}),
    )


MECHANICS = "Mechanics"
FLUIDS = "Fluid Mechanics"
ELECTRICITY = "Electricity & Magnetism"
WAVES = "Waves & Sound"
OPTICS = "Light & Optics"
THERMO = "Thermodynamics"
MODERN = "Modern Physics"
ASTRONOMY = "Astronomy"


def _calc(
    calc_id: str, title: str, category: str, description: str, icon: str, *modes: Any
) -> MultiModeCalculator:
    return MultiModeCalculator(
        id=calc_id,
        title=title,
        category=category,
        domain=Domain.PHYSICS,
        description=description,
        icon=icon,
        solve_modes=modes,
    )


# fmt: off
CALCULATORS: Final[tuple[MultiModeCalculator, ...]] = (
    _calc(
        "kinematics", "Motion Equations", MECHANICS,
        "Solve for displacement, velocity, acceleration, or time.", "move",
        mode(
            "kinematics", "s", "Displacement (s)",
            num("u", "Initial Velocity", "m/s", 0, 0, 100, 0.1),
            num("t", "Time", "s", 10, 0.1, 100, 0.1),
            num("a", "Acceleration", "m/s²", 9.8, -50, 50, 0.1),
        ),
        mode(
            "kinematics", "v", "Final Velocity (v)",
            num("u", "Initial Velocity", "m/s", 0, 0, 100, 0.1),
            num("a", "Acceleration", "m/s²", 9.8, -50, 50, 0.1),
            num("t", "Time", "s", 5, 0.1, 100, 0.1),
        ),
    ),
    _calc(
        "pendulum", "Simple Pendulum", MECHANICS, "Period of a simple pendulum.", "timer",
        mode(
            "pendulum", "t", "Period (T)",
            num("l", "Length", "m", 1, 0.1, 100, 0.1),
            num("g", "Gravity", "m/s²", 9.81, 1, 30, 0.1),
        ),
    ),
    _calc(
        "torque", "Torque", MECHANICS, "Moment of force.", "rotate-ccw",
        mode(
            "torque", "tau", "Torque (τ)",
            num("f", "Force", "N", 50, 1, 1000, 1),
            num("r", "Lever Arm", "m", 0.5, 0.1, 10, 0.1),
            num("theta", "Angle", "deg", 90, 0, 180, 1),
        ),
    ),
    _calc(
        "work-power", "Work & Power", MECHANICS,
        "Calculate mechanical work and power output.", "activity",
        mode(
            "work-power", "w", "Work (W)",
            num("f", "Force", "N", 50, 1, 1000, 1),
            num("d", "Distance", "m", 10, 1, 1000, 1),
            num("theta", "Angle", "deg", 0, 0, 90, 1),
        ),
        mode(
            "work-power", "p", "Power (P)",
            num("w", "Work", "J", 1000, 1, 50000, 10),
            num("t", "Time", "s", 10, 1, 600, 1),
        ),
    ),
    _calc(
        "circular-motion", "Circular Motion", MECHANICS,
        "Centripetal force and acceleration.", "orbit",
        mode(
            "circular-motion", "fc", "Centripetal Force",
            num("m", "Mass", "kg", 10, 0.1, 1000, 0.1),
            num("v", "Velocity", "m/s", 20, 1, 100, 0.1),
            num("r", "Radius", "m", 50, 1, 500, 1),
        ),
    ),
    _calc(
        "projectile-motion", "Projectile Motion", MECHANICS,
        "Calculate range, height, and time of flight.", "wind",
        mode(
            "projectile-motion", "range", "Calculate Trajectory",
            num("v0", "Initial Velocity", "m/s", 50, 1, 200, 1),
            num("angle", "Launch Angle", "deg", 45, 1, 89, 1),
            num("h0", "Initial Height", "m", 0, 0, 100, 1),
        ),
    ),
    _calc(
        "newtons-second", "Newton's Second Law", MECHANICS, "F = ma", "scale",
        mode(
            "newtons-second", "force", "Solve for Force (F)",
            num("m", "Mass", "kg", 10, 0.1, 1000, 0.1),
            num("a", "Acceleration", "m/s²", 9.8, 0, 100, 0.1),
        ),
    ),
    _calc(
        "buoyancy", "Buoyancy", FLUIDS, "Archimedes' Principle.", "droplets",
        mode(
            "buoyancy", "fb", "Buoyant Force (Fb)",
            num("rho", "Fluid Density", "kg/m³", 1000, 1, 2000, 10),
            num("v", "Displaced Vol", "m³", 1, 0.01, 100, 0.01),
            num("g", "Gravity", "m/s²", 9.81, 1, 30, 0.1),
        ),
    ),
    _calc(
        "hydrostatic-pressure", "Hydrostatic Pressure", FLUIDS,
        "Pressure at depth in a fluid.", "scale",
        mode(
            "hydrostatic-pressure", "p", "Pressure (P)",
            num("rho", "Density", "kg/m³", 1000, 1, 2000, 10),
            num("h", "Depth", "m", 10, 1, 11000, 1),
            num("g", "Gravity", "m/s²", 9.81, 1, 30, 0.1),
        ),
    ),
    _calc(
        "continuity-equation", "Flow Rate", FLUIDS, "Flow continuity Q = Av.", "waves",
        mode(
            "continuity-equation", "q", "Flow Rate (Q)",
            num("a", "Area", "m²", 0.5, 0.01, 10, 0.01),
            num("v", "Velocity", "m/s", 2, 0.1, 100, 0.1),
        ),
    ),
    _calc(
        "electric-power", "Electric Power", ELECTRICITY,
        "Calculate power using V, I, or R.", "zap",
        mode(
            "electric-power", "p-vi", "Power (P = VI)",
            num("v", "Voltage", "V", 120, 1, 240, 1),
            num("i", "Current", "A", 2, 0.1, 20, 0.1),
        ),
        mode(
            "electric-power", "p-ir", "Power (P = I²R)",
            num("i", "Current", "A", 5, 0.1, 20, 0.1),
            num("r", "Resistance", "Ω", 10, 1, 1000, 1),
        ),
    ),
    _calc(
        "voltage-divider", "Voltage Divider", ELECTRICITY,
        "Calculate output voltage across R2.", "cpu",
        mode(
            "voltage-divider", "vout", "Output Voltage (Vout)",
            num("vin", "Input Voltage", "V", 12, 1, 100, 0.1),
            num("r1", "Resistor 1", "Ω", 1000, 1, 10000, 10),
            num("r2", "Resistor 2", "Ω", 2000, 1, 10000, 10),
        ),
    ),
    _calc(
        "transformer", "Transformer Equation", ELECTRICITY,
        "Calculate voltage or turns ratio.", "zap",
        mode(
            "transformer", "vs", "Secondary Voltage (Vs)",
            num("vp", "Primary Voltage", "V", 120, 1, 10000, 10),
            num("np", "Primary Turns", "", 500, 1, 5000, 1),
            num("ns", "Secondary Turns", "", 100, 1, 5000, 1),
        ),
    ),
    _calc(
        "lc-resonance", "LC Resonance", ELECTRICITY,
        "Resonant frequency of LC circuit.", "radio",
        mode(
            "lc-resonance", "f", "Frequency (f)",
            num("l", "Inductance", "mH", 10, 0.1, 1000, 0.1),
            num("c", "Capacitance", "µF", 10, 0.1, 1000, 0.1),
        ),
    ),
    _calc(
        "ohms-law", "Ohm's Law", ELECTRICITY, "Voltage, Current, and Resistance.", "zap",
        mode(
            "ohms-law", "voltage", "Solve for Voltage (V)",
            num("i", "Current", "A", 2, 0.1, 100, 0.1),
            num("r", "Resistance", "Ω", 10, 1, 1000, 1),
        ),
        mode(
            "ohms-law", "current", "Solve for Current (I)",
            num("v", "Voltage", "V", 12, 1, 240, 1),
            num("r", "Resistance", "Ω", 100, 1, 1000, 1),
        ),
    ),
    _calc(
        "resistors", "Resistors in Circuit", ELECTRICITY,
        "Series and Parallel combinations.", "cpu",
        mode(
            "resistors", "series", "Series Equivalent",
            num("r1", "Resistor 1", "Ω", 100, 1, 1000, 1),
            num("r2", "Resistor 2", "Ω", 220, 1, 1000, 1),
        ),
        mode(
            "resistors", "parallel", "Parallel Equivalent",
            num("r1", "Resistor 1", "Ω", 100, 1, 1000, 1),
            num("r2", "Resistor 2", "Ω", 100, 1, 1000, 1),
        ),
    ),
    _calc(
        "electric-field", "Electric Field", ELECTRICITY,
        "Field strength from a point charge.", "zap",
        mode(
            "electric-field", "e", "Field Strength (E)",
            num("q", "Charge", "µC", 10, 0.1, 1000, 0.1),
            num("r", "Distance", "cm", 10, 1, 100, 1),
        ),
    ),
    _calc(
        "coulombs-law", "Coulomb's Law", ELECTRICITY,
        "Electric force between two charges.", "zap",
        mode(
            "coulombs-law", "force", "Electric Force (Fe)",
            num("q1", "Charge 1", "µC", 10, -100, 100, 0.1),
            num("q2", "Charge 2", "µC", -5, -100, 100, 0.1),
            num("r", "Distance", "cm", 10, 1, 100, 0.1),
        ),
    ),
    _calc(
        "capacitance", "Capacitance", ELECTRICITY, "Charge stored in a capacitor.", "battery",
        mode(
            "capacitance", "q", "Charge (Q)",
            num("c", "Capacitance", "µF", 100, 0.1, 1000, 1),
            num("v", "Voltage", "V", 12, 1, 100, 1),
        ),
    ),
    _calc(
        "magnetic-force", "Magnetic Force", ELECTRICITY, "Force on a moving charge.", "magnet",
        mode(
            "magnetic-force", "f", "Force (F)",
            num("q", "Charge", "mC", 1, 0.1, 100, 0.1),
            num("v", "Velocity", "m/s", 50, 1, 1000, 1),
            num("b", "B-Field", "T", 1, 0.1, 10, 0.1),
            num("theta", "Angle", "deg", 90, 0, 90, 1),
        ),
    ),
    _calc(
        "magnetic-field-wire", "Magnetic Field (Wire)", ELECTRICITY,
        "B-field around a current-carrying wire.", "magnet",
        mode(
            "magnetic-field-wire", "b", "Magnetic Field (B)",
            num("i", "Current", "A", 10, 0.1, 1000, 0.1),
            num("r", "Distance", "cm", 5, 1, 100, 0.1),
        ),
    ),
    _calc(
        "wave-properties", "Wave Properties", WAVES,
        "Frequency, Wavelength, and Speed.", "waves",
        mode(
            "wave-properties", "v", "Wave Speed (v)",
            num("f", "Frequency", "Hz", 50, 1, 1000, 1),
            num("lam", "Wavelength", "m", 2, 0.1, 100, 0.1),
        ),
        mode(
            "wave-properties", "f", "Frequency (f)",
            num("v", "Wave Speed", "m/s", 340, 1, 5000, 1),
            num("lam", "Wavelength", "m", 1, 0.1, 100, 0.1),
        ),
    ),
    _calc(
        "doppler-effect", "Doppler Effect", WAVES, "Frequency shift of sound.", "radio",
        mode(
            "doppler-effect", "fobs", "Observed Freq (f_obs)",
            num("fs", "Source Freq", "Hz", 440, 100, 10000, 10),
            num("v", "Speed of Sound", "m/s", 343, 300, 360, 1),
            num("vs", "Source Speed", "m/s", 20, 0, 300, 1),
            num("vo", "Observer Speed", "m/s", 0, 0, 300, 1),
        ),
    ),
    _calc(
        "sound-decibels", "Sound Level (dB)", WAVES,
        "Calculate decibel level from intensity.", "volume",
        mode(
            "sound-decibels", "db", "Sound Level (β)",
            num("i", "Intensity", "W/m²", 1e-6, 0, 100, 1e-12),
        ),
    ),
    _calc(
        "diffraction", "Diffraction Grating", OPTICS,
        "Calculate angle of constructive interference.", "eye",
        mode(
            "diffraction", "theta", "Angle (θ)",
            num("d", "Slit Spacing", "µm", 2, 0.1, 100, 0.1),
            num("lam", "Wavelength", "nm", 532, 380, 750, 1),
            num("n", "Order (n)", "", 1, 1, 10, 1),
        ),
    ),
    _calc(
        "lens-equation", "Lens Equation", OPTICS, "Focal length and image distance.", "eye",
        mode(
            "lens-equation", "di", "Image Distance (di)",
            num("f", "Focal Length", "cm", 10, 1, 100, 0.1),
            num("do", "Object Dist", "cm", 20, 1, 100, 0.1),
        ),
    ),
    _calc(
        "snells-law", "Snell's Law", OPTICS, "Calculate refraction angle of light.", "lightbulb",
        mode(
            "snells-law", "angle2", "Refraction Angle",
            num("n1", "Index n1", "", 1.0, 1, 3, 0.01),
            num("n2", "Index n2", "", 1.5, 1, 3, 0.01),
            num("theta1", "Inc Angle", "deg", 30, 0, 89, 1),
        ),
    ),
    _calc(
        "thermal-expansion", "Thermal Expansion", THERMO,
        "Length change due to temperature.", "thermometer",
        mode(
            "thermal-expansion", "dl", "Change in Length (ΔL)",
            num("l", "Orig Length", "m", 10, 1, 1000, 1),
            num("alpha", "Coeff (x10⁻⁶)", "/K", 12, 1, 100, 1),
            num("dt", "Change in T", "Δ°C", 100, 1, 500, 1),
        ),
    ),
    _calc(
        "heat-transfer", "Specific Heat", THERMO, "Q = mcΔT calculation.", "flame",
        mode(
            "heat-transfer", "q", "Heat Energy (Q)",
            num("m", "Mass", "kg", 1, 0.1, 100, 0.1),
            num("c", "Specific Heat", "J/kgK", 4186, 100, 5000, 10),
            num("dt", "Change in Temp", "Δ°C", 50, 1, 1000, 1),
        ),
    ),
    _calc(
        "mass-energy", "E = mc²", MODERN, "Mass-energy equivalence.", "atom",
        mode(
            "mass-energy", "e", "Energy (E)",
            num("m", "Mass", "kg", 0.001, 1e-7, 1, 1e-7),
        ),
    ),
    _calc(
        "radioactive-decay", "Radioactive Decay", MODERN,
        "Calculate remaining isotope amount.", "atom",
        mode(
            "radioactive-decay", "n", "Remaining Amount (N)",
            num("n0", "Initial Amount", "g", 100, 1, 1000, 1),
            num("half", "Half-Life", "yrs", 5730, 1, 10000, 1),
            num("t", "Time Elapsed", "yrs", 5730, 1, 50000, 100),
        ),
    ),
    _calc(
        "photon-energy", "Photon Energy", MODERN, "Energy of a photon from frequency.", "lightbulb",
        mode(
            "photon-energy", "e", "Energy (E)",
            num("f", "Frequency", "x10¹⁴ Hz", 4.5, 1, 100, 0.1),
        ),
    ),
    _calc(
        "length-contraction", "Length Contraction", MODERN,
        "Relativistic length effects.", "move",
        mode(
            "length-contraction", "l", "Contracted Length (L)",
            num("l0", "Rest Length", "m", 100, 1, 1000, 1),
            num("v", "Velocity (%c)", "%", 80, 0, 99.9, 0.1),
        ),
    ),
    _calc(
        "time-dilation", "Time Dilation", MODERN, "Relativistic time effects.", "timer",
        mode(
            "time-dilation", "t", "Dilated Time (t')",
            num("t0", "Proper Time", "s", 10, 1, 100, 1),
            num("v", "Velocity (%c)", "%", 50, 0, 99.9, 0.1),
        ),
    ),
    _calc(
        "gravitational-force", "Gravity Force", ASTRONOMY,
        "Newton's Law of Gravitation.", "orbit",
        mode(
            "gravitational-force", "f", "Force (F)",
            num("m1", "Mass 1", "x10²⁴kg", 5.97, 0.1, 1000, 0.1),
            num("m2", "Mass 2", "kg", 1000, 1, 10000, 10),
            num("r", "Distance", "km", 6371, 6000, 100000, 100),
        ),
    ),
    _calc(
        "escape-velocity", "Escape Velocity", ASTRONOMY, "Speed to break orbit.", "rocket",
        mode(
            "escape-velocity", "v", "Velocity (ve)",
            num("m", "Mass", "x10²⁴kg", 5.97, 0.1, 1000, 0.1),
            num("r", "Radius", "km", 6371, 1000, 100000, 100),
        ),
    ),
    _calc(
        "orbital-velocity", "Orbital Velocity", ASTRONOMY,
        "Velocity required to stay in orbit.", "orbit",
        mode(
            "orbital-velocity", "v", "Orbital Velocity",
            num("m", "Mass", "x10²⁴kg", 5.97, 0.1, 1000, 0.1),
            num("r", "Orbit Radius", "km", 6700, 2000, 100000, 100),
        ),
    ),
    _calc(
        "keplers-third-law", "Kepler's Third Law", ASTRONOMY,
        "Orbital period vs Radius.", "orbit",
        mode(
            "keplers-third-law", "t", "Period (T)",
            num("m", "Central Mass", "x10²⁴kg", 1989000, 0.1, 2000000, 0.1),
            num("a", "Semi-major Axis", "AU", 1, 0.1, 100, 0.1),
        ),
    ),
    _calc(
        "star-luminosity", "Star Luminosity", ASTRONOMY,
        "Brightness based on size and temp.", "sun",
        mode(
            "star-luminosity", "l", "Luminosity (L)",
            num("r", "Radius", "R_sun", 1, 0.1, 1000, 0.1),
            num("t", "Temperature", "K", 5778, 1000, 50000, 100),
        ),
    ),
)
# fmt: on


def register_physics_calculators(registry: CalculatorRegistry) -> CalculatorRegistry:
    """Register all physics calculators into a registry."""
    registry.register_catalog(CALCULATORS, FORMULAS)
    return registry
