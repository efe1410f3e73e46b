"""Health and fitness calculators.

Body measurements are entered in kg and cm; the engine converts other
selected units (lb, in, ...) before the formulas run.
"""

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Mapping
from typing import Any, Final

from formulary.calc.models import DiagramKind, Domain, FlatCalculator, InputSpec, Result
from formulary.calc.outcome import InvalidInputError
from formulary.calc.registry import CalculatorRegistry, FormulaRegistry
from formulary.catalogs.common import bars, diagram, donut, fmt, num, select

SEDENTARY_FACTOR: Final[float] = 1.2
ACTIVE_FACTOR: Final[float] = 1.55
CALORIE_ADJUSTMENT: Final[float] = 500.0
WATER_L_PER_KG: Final[float] = 0.033
WATER_L_PER_30_MIN: Final[float] = 0.35
VO2_RATIO_FACTOR: Final[float] = 15.3

KCAL_PER_GRAM_PROTEIN: Final[int] = 4
KCAL_PER_GRAM_CARBS: Final[int] = 4
KCAL_PER_GRAM_FAT: Final[int] = 9

# plan -> (protein, carbs, fat) share of calories
MACRO_PLANS: Final[Mapping[str, tuple[float, float, float]]] = {
    "balanced": (0.30, 0.40, 0.30),
    "lowcarb": (0.40, 0.25, 0.35),
    "highprot": (0.40, 0.35, 0.25),
    "keto": (0.25, 0.05, 0.70),
}

# (exclusive lower bound, label), best first
VO2_CATEGORIES: Final[tuple[tuple[float, str], ...]] = (
    (55.0, "Elite"),
    (45.0, "Excellent"),
    (35.0, "Good"),
    (30.0, "Fair"),
    (-math.inf, "Poor"),
)

GESTATION_DAYS: Final[int] = 280
STANDARD_CYCLE_DAYS: Final[int] = 28
OVULATION_DAY: Final[int] = 14

SLEEP_CYCLE_MINUTES: Final[int] = 90
FALL_ASLEEP_MINUTES: Final[int] = 15
SLEEP_CYCLE_OPTIONS: Final[tuple[int, ...]] = (4, 5, 6)
RECOMMENDED_SLEEP_CYCLES: Final[int] = 5

# (upper bound, label, color)
BMI_CATEGORIES: Final[tuple[tuple[float, str, str], ...]] = (
    (18.5, "Underweight", "#3b82f6"),
    (25.0, "Normal", "#10b981"),
    (30.0, "Overweight", "#f59e0b"),
    (math.inf, "Obese", "#ef4444"),
)

# (upper bound, label) per sex
BODY_FAT_CATEGORIES: Final[Mapping[str, tuple[tuple[float, str], ...]]] = {
    "male": (
        (6.0, "Essential Fat"),
        (14.0, "Athletes"),
        (18.0, "Fitness"),
        (25.0, "Average"),
        (math.inf, "Obese"),
    ),
    "female": (
        (14.0, "Essential Fat"),
        (21.0, "Athletes"),
        (25.0, "Fitness"),
        (32.0, "Average"),
        (math.inf, "Obese"),
    ),
}

FORMULAS = FormulaRegistry()
formula = FORMULAS.formula

Inputs = Mapping[str, Any]


def mifflin_st_jeor(weight_kg: float, height_cm: float, age: float, gender: str) -> float:
    """Basal metabolic rate in kcal/day (Mifflin-St Jeor)."""
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return bmr + 5 if gender == "male" else bmr - 161


def bmi_category(bmi: float) -> tuple[str, str]:
    for upper, label, color in BMI_CATEGORIES:
        if bmi < upper:
            return label, color
    return BMI_CATEGORIES[-1][1], BMI_CATEGORIES[-1][2]


@formula("bmi.bmi")
def _bmi(v: Inputs) -> Result:
    height_m = v["height"] / 100
    bmi = v["weight"] / (height_m * height_m)
    category, color = bmi_category(bmi)
    return Result(
        value=bmi,
        unit="BMI",
        steps=(
            "BMI = weight / height²",
            f"Weight: {fmt(v['weight'])} kg, Height: {fmt(v['height'])} cm",
            f"Category: {category}",
        ),
        diagram=diagram(DiagramKind.BMI_SCALE, {"value": bmi, "color": color}),
    )


@formula("bmr.bmr")
def _bmr(v: Inputs) -> Result:
    bmr = mifflin_st_jeor(v["weight"], v["height"], v["age"], v["gender"])
    return Result(
        value=bmr,
        unit="kcal/day",
        steps=(
            "Based on Mifflin-St Jeor Equation",
            f"Sedentary TDEE: {round(bmr * SEDENTARY_FACTOR)} kcal",
        ),
        diagram=bars(
            ("BMR (Coma)", bmr, "#3b82f6"),
            ("Sedentary", bmr * SEDENTARY_FACTOR, "#10b981"),
            ("Active", bmr * ACTIVE_FACTOR, "#f59e0b"),
        ),
    )


@formula("body-fat.body-fat")
def _body_fat(v: Inputs) -> Result:
    gender = v["gender"]
    male = gender == "male"
    girth = v["waist"] - v["neck"] if male else v["waist"] + v["hip"] - v["neck"]
    if girth <= 0:
        raise InvalidInputError("waist", "Waist must exceed neck circumference")
    if male:
        density = 1.0324 - 0.19077 * math.log10(girth) + 0.15456 * math.log10(v["height"])
    else:
        density = 1.29579 - 0.35004 * math.log10(girth) + 0.22100 * math.log10(v["height"])
    body_fat = max(2.0, 495 / density - 450)
    category = next(label for upper, label in BODY_FAT_CATEGORIES[gender] if body_fat < upper)
    return Result(
        value=body_fat,
        unit="%",
        steps=("Method: US Navy Tape Measure", f"Category: {category}"),
        diagram=diagram(
            DiagramKind.GAUGE,
            {
                "value": body_fat,
                "max": 50,
                "zones": [6, 14, 18, 25],
                "colors": ["#3b82f6", "#10b981", "#f59e0b", "#ef4444"],
            },
        ),
    )


@formula("daily-calories.daily-calories")
def _daily_calories(v: Inputs) -> Result:
    bmr = mifflin_st_jeor(v["weight"], v["height"], v["age"], v["gender"])
    tdee = bmr * float(v["activity"])
    return Result(
        value=tdee,
        unit="kcal",
        steps=(
            f"Basal Metabolic Rate: {round(bmr)} kcal",
            f"To Lose Weight (-500): {round(tdee - CALORIE_ADJUSTMENT)} kcal",
            f"To Gain Weight (+500): {round(tdee + CALORIE_ADJUSTMENT)} kcal",
        ),
        diagram=bars(
            ("Cut", tdee - CALORIE_ADJUSTMENT, "#f59e0b"),
            ("Maintain", tdee, "#3b82f6"),
            ("Bulk", tdee + CALORIE_ADJUSTMENT, "#10b981"),
        ),
    )


@formula("water-intake.water-intake")
def _water_intake(v: Inputs) -> Result:
    base = v["weight"] * WATER_L_PER_KG
    extra = v["activity"] / 30 * WATER_L_PER_30_MIN
    liters = round((base + extra) * 10) / 10
    return Result(
        value=liters,
        unit="L",
        steps=(f"Base Needs: {base:.1f} L", f"Activity Add-on: {extra:.1f} L"),
        diagram=diagram(DiagramKind.FILL, {"value": liters}),
    )


@formula("heart-rate.heart-rate")
def _heart_rate(v: Inputs) -> Result:
    max_hr = 220 - v["age"]
    reserve = max_hr - v["resting"]
    z2, z3, z4, z5 = (round(v["resting"] + share * reserve) for share in (0.6, 0.7, 0.8, 0.9))
    return Result(
        value=f"{z3}-{z4}",
        unit="bpm (Zone 3)",
        steps=(
            f"Max HR: {fmt(max_hr)} bpm",
            f"Fat Burn (Z2): {z2} bpm",
            f"Cardio (Z3): {z3} bpm",
            f"Peak (Z5): {z5} bpm",
        ),
        diagram=bars(
            ("Warmup", z2, "#94a3b8"),
            ("Fat Burn", z3, "#3b82f6"),
            ("Cardio", z4, "#10b981"),
            ("Hardcore", z5, "#ef4444"),
        ),
    )


@formula("one-rep-max.one-rep-max")
def _one_rep_max(v: Inputs) -> Result:
    orm = v["weight"] * (1 + v["reps"] / 30)
    return Result(
        value=orm,
        unit="kg",
        steps=(
            "Epley: 1RM = w × (1 + reps / 30)",
            f"5 Rep Max (~87%): {round(orm * 0.87)} kg",
            f"8 Rep Max (~80%): {round(orm * 0.80)} kg",
            f"12 Rep Max (~70%): {round(orm * 0.70)} kg",
        ),
        diagram=bars(
            ("100% (1RM)", orm, "#ef4444"),
            ("90% (3RM)", orm * 0.9, "#f59e0b"),
            ("80% (8RM)", orm * 0.8, "#3b82f6"),
            ("70% (12RM)", orm * 0.7, "#10b981"),
        ),
    )


@formula("macros.macros")
def _macros(v: Inputs) -> Result:
    protein, carbs, fat = MACRO_PLANS[v["plan"]]
    protein_g = round(v["calories"] * protein / KCAL_PER_GRAM_PROTEIN)
    carbs_g = round(v["calories"] * carbs / KCAL_PER_GRAM_CARBS)
    fat_g = round(v["calories"] * fat / KCAL_PER_GRAM_FAT)
    return Result(
        value=f"{protein_g}g P / {carbs_g}g C / {fat_g}g F",
        unit="Macros",
        steps=(
            f"Protein: {protein * 100:.0f}% ({protein_g}g)",
            f"Carbs: {carbs * 100:.0f}% ({carbs_g}g)",
            f"Fats: {fat * 100:.0f}% ({fat_g}g)",
        ),
        diagram=donut(
            ("Protein", protein_g * KCAL_PER_GRAM_PROTEIN, "#f43f5e"),
            ("Carbs", carbs_g * KCAL_PER_GRAM_CARBS, "#3b82f6"),
            ("Fats", fat_g * KCAL_PER_GRAM_FAT, "#fbbf24"),
        ),
    )


@formula("vo2-max.vo2-max")
def _vo2_max(v: Inputs) -> Result:
    max_hr = 220 - v["age"]
    vo2 = VO2_RATIO_FACTOR * max_hr / v["resting"]
    category = next(label for lower, label in VO2_CATEGORIES if vo2 > lower)
    return Result(
        value=vo2,
        unit="ml/kg/min",
        steps=(
            "Uth-Sørensen: VO2max = 15.3 × (MaxHR / RestHR)",
            f"Max HR Est: {fmt(max_hr)} bpm",
            f"Category: {category}",
        ),
        diagram=diagram(
            DiagramKind.GAUGE,
            {
                "value": vo2,
                "max": 70,
                "zones": [30, 38, 46, 54],
                "colors": ["#ef4444", "#f59e0b", "#3b82f6", "#10b981"],
            },
        ),
    )


def _whole(v: Inputs, name: str) -> int:
    value = v[name]
    if not float(value).is_integer():
        raise InvalidInputError(name, f"{name} must be a whole number")
    return int(value)


@formula("due-date.due-date")
def _due_date(v: Inputs) -> Result:
    year, month, day = _whole(v, "year"), _whole(v, "month"), _whole(v, "day")
    try:
        lmp = dt.date(year, month, day)
    except ValueError as exc:
        raise InvalidInputError("day", f"Not a calendar date: {exc}") from exc
    adjustment = v["cycle"] - STANDARD_CYCLE_DAYS
    due = lmp + dt.timedelta(days=GESTATION_DAYS + adjustment)
    conception = lmp + dt.timedelta(days=OVULATION_DAY + adjustment)
    return Result(
        value=due.isoformat(),
        unit="Due Date",
        steps=(
            "Naegele's rule: LMP + 280 days, shifted by cycle length − 28",
            f"Cycle adjustment: {adjustment:+g} days",
            f"Estimated conception: {conception.isoformat()}",
        ),
        diagram=diagram(
            DiagramKind.TIMELINE,
            {"total": 40, "start": lmp.isoformat(), "end": due.isoformat()},
        ),
    )


def blood_pressure_category(systolic: float, diastolic: float) -> tuple[str, str]:
    """AHA category and display color for a reading; the worse of the two numbers wins."""
    if systolic > 180 or diastolic > 120:
        return "Hypertensive Crisis", "#991b1b"
    if systolic >= 140 or diastolic >= 90:
        return "Hypertension 2", "#ef4444"
    if systolic >= 130 or diastolic >= 80:
        return "Hypertension 1", "#f97316"
    if systolic >= 120:
        return "Elevated", "#eab308"
    return "Normal", "#10b981"


@formula("blood-pressure.blood-pressure")
def _blood_pressure(v: Inputs) -> Result:
    category, color = blood_pressure_category(v["sys"], v["dia"])
    return Result(
        value=f"{fmt(v['sys'])}/{fmt(v['dia'])}",
        unit="mmHg",
        steps=(
            f"Category: {category}",
            "Normal: <120 and <80",
            "Elevated: 120-129 and <80",
            "High Stage 1: 130-139 or 80-89",
            "High Stage 2: ≥140 or ≥90",
        ),
        diagram=diagram(
            DiagramKind.GAUGE,
            {
                "value": v["sys"],
                "max": 200,
                "zones": [120, 130, 140, 180],
                "colors": ["#10b981", "#eab308", "#f97316", "#ef4444"],
                "color": color,
            },
        ),
    )


@formula("sleep.sleep")
def _sleep(v: Inputs) -> Result:
    hour = _whole(v, "hour")
    minute = _whole(v, "minute")
    if not 0 <= hour <= 23:
        raise InvalidInputError("hour", "Hour must be between 0 and 23")
    if not 0 <= minute <= 59:
        raise InvalidInputError("minute", "Minute must be between 0 and 59")
    wake_times: dict[int, str] = {}
    for cycles in SLEEP_CYCLE_OPTIONS:
        total = hour * 60 + minute + cycles * SLEEP_CYCLE_MINUTES + FALL_ASLEEP_MINUTES
        wake_times[cycles] = f"{total // 60 % 24:02d}:{total % 60:02d}"
    return Result(
        value=wake_times[RECOMMENDED_SLEEP_CYCLES],
        unit="Best Wake Time",
        steps=tuple(
            f"{cycles * SLEEP_CYCLE_MINUTES / 60:.1f} hours ({cycles} cycles): {wake}"
            for cycles, wake in wake_times.items()
        ),
        diagram=bars(
            *(
                (f"{cycles} Cycles", cycles * SLEEP_CYCLE_MINUTES / 60, color)
                for cycles, color in zip(
                    SLEEP_CYCLE_OPTIONS, ("#94a3b8", "#3b82f6", "#8b5cf6"), strict=True
                )
            )
        ),
    )


BODY = "Body Metrics"
NUTRITION = "Nutrition & Calories"
FITNESS = "Fitness & Performance"
PREGNANCY = "Pregnancy & Women"
GENERAL = "General Health"

GENDER_OPTIONS: Final = (("male", "Male"), ("female", "Female"))
# fmt: off
ACTIVITY_OPTIONS: Final = (
    ("1.2", "Sedentary (Office job)"),
    ("1.375", "Light Exercise (1-2 days)"),
    ("1.55", "Moderate Exercise (3-5 days)"),
    ("1.725", "Heavy Exercise (6-7 days)"),
    ("1.9", "Athlete (2x per day)"),
)
PLAN_OPTIONS: Final = (
    ("balanced", "Balanced (30P/40C/30F)"),
    ("lowcarb", "Low Carb (40P/25C/35F)"),
    ("highprot", "High Protein (40P/35C/25F)"),
    ("keto", "Keto (25P/5C/70F)"),
)
# fmt: on


def _flat(
    calc_id: str, title: str, category: str, description: str, icon: str, *inputs: InputSpec
) -> FlatCalculator:
    return FlatCalculator(
        id=calc_id,
        title=title,
        category=category,
        domain=Domain.HEALTH,
        description=description,
        icon=icon,
        inputs=inputs,
        formula_id=f"{calc_id}.{calc_id}",
    )


# fmt: off
CALCULATORS: Final[tuple[FlatCalculator, ...]] = (
    _flat(
        "bmi", "BMI Calculator", BODY,
        "Body Mass Index based on height and weight.", "scale",
        num("weight", "Weight", "kg", 70),
        num("height", "Height", "cm", 175),
    ),
    _flat(
        "bmr", "BMR Calculator", BODY,
        "Basal Metabolic Rate (Mifflin-St Jeor).", "flame",
        select("gender", "Gender", GENDER_OPTIONS),
        num("age", "Age", "yrs", 30),
        num("weight", "Weight", "kg", 70),
        num("height", "Height", "cm", 175),
    ),
    _flat(
        "body-fat", "Body Fat Percentage", BODY,
        "US Navy Method estimation.", "person-standing",
        select("gender", "Gender", GENDER_OPTIONS),
        num("height", "Height", "cm", 178),
        num("waist", "Waist", "cm", 85),
        num("neck", "Neck", "cm", 38),
        num("hip", "Hip (Females)", "cm", 95),
    ),
    _flat(
        "daily-calories", "Daily Calorie Needs", NUTRITION,
        "Calculate TDEE based on activity.", "utensils",
        select("gender", "Gender", GENDER_OPTIONS, "female"),
        num("age", "Age", "yrs", 28),
        num("weight", "Weight", "kg", 65),
        num("height", "Height", "cm", 165),
        select("activity", "Activity Level", ACTIVITY_OPTIONS, "1.375"),
    ),
    _flat(
        "water-intake", "Water Intake", NUTRITION,
        "Daily hydration recommendation.", "glass-water",
        num("weight", "Weight", "kg", 70),
        num("activity", "Activity", "min", 30),
    ),
    _flat(
        "heart-rate", "Target Heart Rate", FITNESS,
        "Training zones based on age.", "heart",
        num("age", "Age", "yrs", 30),
        num("resting", "Resting HR", "bpm", 70),
    ),
    _flat(
        "one-rep-max", "1RM Calculator", FITNESS,
        "Estimate max lift (Epley Formula).", "activity",
        num("weight", "Weight Lifted", "kg", 60),
        num("reps", "Repetitions", "", 8, hi=12),
    ),
    _flat(
        "macros", "Macro Nutrients", NUTRITION,
        "Protein, Carb, and Fat breakdown.", "utensils",
        num("calories", "Daily Calories", "kcal", 2000),
        select("plan", "Diet Plan", PLAN_OPTIONS),
    ),
    _flat(
        "vo2-max", "VO2 Max (Estimate)", FITNESS,
        "Resting HR estimate method.", "wind",
        num("age", "Age", "yrs", 30),
        num("resting", "Resting HR", "bpm", 60),
    ),
    _flat(
        "due-date", "Pregnancy Due Date", PREGNANCY,
        "Estimated date of delivery (Naegele).", "baby",
        num("month", "LMP Month", "", 1, 1, 12, 1),
        num("day", "LMP Day", "", 1, 1, 31, 1),
        num("year", "LMP Year", "", 2024, step=1),
        num("cycle", "Cycle Length", "days", 28, 20, 45, 1),
    ),
    _flat(
        "blood-pressure", "Blood Pressure", GENERAL,
        "Check BP category.", "heart",
        num("sys", "Systolic (Upper)", "mmHg", 120),
        num("dia", "Diastolic (Lower)", "mmHg", 80),
    ),
    _flat(
        "sleep", "Sleep Calculator", GENERAL,
        "Wake up times based on cycles.", "moon",
        num("hour", "Bedtime Hour", "", 23, 0, 23, 1),
        num("minute", "Bedtime Minute", "", 0, 0, 59, 1),
    ),
)
# fmt: on


def register_health_calculators(registry: CalculatorRegistry) -> CalculatorRegistry:
    """Register all health calculators into a registry."""
    registry.register_catalog(CALCULATORS, FORMULAS)
    return registry
