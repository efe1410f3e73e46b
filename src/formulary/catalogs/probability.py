"""Probability distribution calculator (normal, binomial, Poisson).

Each solve mode evaluates one distribution at a query point. The result value
is the density (PDF) or mass (PMF); the cumulative probability is reported in
the steps and in the diagram payload alongside the plotted curve.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Final

from formulary.calc.models import Diagram, DiagramKind, Domain, MultiModeCalculator, Result
from formulary.calc.outcome import InvalidInputError
from formulary.calc.registry import CalculatorRegistry, FormulaRegistry
from formulary.catalogs.common import diagram, fmt, mode, num

CURVE_POINTS: Final[int] = 41
CURVE_SIGMAS: Final[float] = 4.0

FORMULAS = FormulaRegistry()
formula = FORMULAS.formula

Inputs = Mapping[str, Any]


def normal_pdf(x: float, mu: float, sigma: float) -> float:
    return math.exp(-0.5 * ((x - mu) / sigma) ** 2) / (sigma * math.sqrt(2 * math.pi))


def normal_cdf(x: float, mu: float, sigma: float) -> float:
    return 0.5 * (1 + math.erf((x - mu) / (sigma * math.sqrt(2))))


def binomial_pmf(k: int, n: int, p: float) -> float:
    if k < 0 or k > n:
        return 0.0
    return math.comb(n, k) * p**k * (1 - p) ** (n - k)


def binomial_cdf(k: int, n: int, p: float) -> float:
    if k < 0:
        return 0.0
    if k >= n:
        return 1.0
    return sum(binomial_pmf(i, n, p) for i in range(k + 1))


def poisson_pmf(k: int, lam: float) -> float:
    if k < 0:
        return 0.0
    # Log space keeps large k from overflowing lam**k and k!.
    return math.exp(k * math.log(lam) - lam - math.lgamma(k + 1))


def poisson_cdf(k: int, lam: float) -> float:
    if k < 0:
        return 0.0
    return sum(poisson_pmf(i, lam) for i in range(k + 1))


def _distribution(
    pdf: float, cdf: float, x: float, points: list[dict[str, float]], discrete: bool
) -> Diagram:
    return diagram(
        DiagramKind.DISTRIBUTION,
        {"x": x, "pdf": pdf, "cdf": cdf, "discrete": discrete, "points": points},
    )


@formula("probability-distributions.normal")
def _normal(v: Inputs) -> Result:
    mu, sigma, x = v["mean"], v["sd"], v["x"]
    if sigma <= 0:
        raise InvalidInputError("sd", "Standard deviation must be positive")
    pdf = normal_pdf(x, mu, sigma)
    cdf = normal_cdf(x, mu, sigma)
    start = mu - CURVE_SIGMAS * sigma
    step = 2 * CURVE_SIGMAS * sigma / (CURVE_POINTS - 1)
    points = [
        {"x": start + i * step, "y": normal_pdf(start + i * step, mu, sigma)}
        for i in range(CURVE_POINTS)
    ]
    return Result(
        value=pdf,
        unit="",
        steps=(
            "f(x) = exp(−½((x−μ)/σ)²) / (σ√(2π))",
            f"Normal(μ={fmt(mu)}, σ={fmt(sigma)}) at x={fmt(x)}",
            f"PDF = {pdf:.6f}",
            f"CDF P(X ≤ x) = {cdf:.6f}",
        ),
        diagram=_distribution(pdf, cdf, x, points, discrete=False),
    )


@formula("probability-distributions.binomial")
def _binomial(v: Inputs) -> Result:
    n = int(v["n"])
    p = v["p"]
    if n < 0 or n != v["n"]:
        raise InvalidInputError("n", "Number of trials must be a non-negative integer")
    if not 0 <= p <= 1:
        raise InvalidInputError("p", "Probability must be between 0 and 1")
    k = math.floor(v["x"])
    pmf = binomial_pmf(k, n, p)
    cdf = binomial_cdf(k, n, p)
    points = [{"x": float(i), "y": binomial_pmf(i, n, p)} for i in range(n + 1)]
    return Result(
        value=pmf,
        unit="",
        steps=(
            "P(X=k) = C(n,k)·pᵏ·(1−p)ⁿ⁻ᵏ",
            f"Binomial(n={n}, p={fmt(p)}) at k={k}",
            f"P(X = k) = {pmf:.6f}",
            f"P(X ≤ k) = {cdf:.6f}",
        ),
        diagram=_distribution(pmf, cdf, float(k), points, discrete=True),
    )


@formula("probability-distributions.poisson")
def _poisson(v: Inputs) -> Result:
    lam = v["rate"]
    if lam <= 0:
        raise InvalidInputError("rate", "Rate must be positive")
    k = math.floor(v["x"])
    pmf = poisson_pmf(k, lam)
    cdf = poisson_cdf(k, lam)
    upper = max(k, math.ceil(lam + CURVE_SIGMAS * math.sqrt(lam)))
    points = [{"x": float(i), "y": poisson_pmf(i, lam)} for i in range(upper + 1)]
    return Result(
        value=pmf,
        unit="",
        steps=(
            "P(X=k) = λᵏ·e^(−λ) / k!",
            f"Poisson(λ={fmt(lam)}) at k={k}",
            f"P(X = k) = {pmf:.6f}",
            f"P(X ≤ k) = {cdf:.6f}",
        ),
        diagram=_distribution(pmf, cdf, float(k), points, discrete=True),
    )


CALC_ID = "probability-distributions"

# fmt: off
CALCULATORS: Final[tuple[MultiModeCalculator, ...]] = (
    MultiModeCalculator(
        id=CALC_ID,
        title="Probability Distributions",
        category="Statistics",
        domain=Domain.PROBABILITY,
        description="Calculate PDF and CDF for Normal, Binomial, and Poisson distributions.",
        icon="bar-chart",
        solve_modes=(
            mode(
                CALC_ID, "normal", "Normal",
                num("mean", "Mean (μ)", "", 0),
                num("sd", "Standard Deviation (σ)", "", 1, lo=0),
                num("x", "Query Point (x)", "", 0),
            ),
            mode(
                CALC_ID, "binomial", "Binomial",
                num("n", "Trials (n)", "", 10, lo=0, step=1),
                num("p", "Success Probability (p)", "", 0.5, 0, 1, 0.01),
                num("x", "Successes (k)", "", 0, lo=0, step=1),
            ),
            mode(
                CALC_ID, "poisson", "Poisson",
                num("rate", "Rate (λ)", "", 5, lo=0),
                num("x", "Occurrences (k)", "", 0, lo=0, step=1),
            ),
        ),
    ),
)
# fmt: on


def register_probability_calculators(registry: CalculatorRegistry) -> CalculatorRegistry:
    """Register the probability calculators into a registry."""
    registry.register_catalog(CALCULATORS, FORMULAS)
    return registry
