"""Personal finance, business and banking calculators.

Every finance calculator is flat: one input list, one formula. Monetary
values are unit-less dollars; rates are entered as annual percentages.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Final

from formulary.calc.models import DiagramKind, Domain, FlatCalculator, InputSpec, Result
from formulary.calc.outcome import DegenerateComputationError, InvalidInputError
from formulary.calc.registry import CalculatorRegistry, FormulaRegistry
from formulary.catalogs.common import bars, diagram, donut, fmt, money, num

DTI_HEALTHY_LIMIT: Final[float] = 36.0
DTI_MAX_LIMIT: Final[float] = 43.0

# 2024 US federal brackets for a single filer: (upper bound, marginal rate).
INCOME_TAX_BRACKETS_2024: Final[tuple[tuple[float, float], ...]] = (
    (11_600.0, 0.10),
    (47_150.0, 0.12),
    (100_525.0, 0.22),
    (191_950.0, 0.24),
    (math.inf, 0.32),
)

HOUSING_INCOME_SHARE: Final[float] = 0.28
AFFORDABILITY_RATE: Final[float] = 6.5
AFFORDABILITY_YEARS: Final[int] = 30
SAFE_WITHDRAWAL_RATE: Final[float] = 0.04
FIRE_MAX_YEARS: Final[int] = 100
RENTAL_DOWN_PAYMENT_SHARE: Final[float] = 0.2
OPTION_CONTRACT_SIZE: Final[int] = 100
LIQUIDATION_BUFFER: Final[float] = 0.01

# Short-term gains are taxed as ordinary income, simplified to one rate.
SHORT_TERM_GAINS_RATE: Final[float] = 0.22
LONG_TERM_GAINS_BRACKETS: Final[tuple[tuple[float, float], ...]] = (
    (47_000.0, 0.0),
    (518_000.0, 0.15),
    (math.inf, 0.20),
)

FORMULAS = FormulaRegistry()
formula = FORMULAS.formula

Inputs = Mapping[str, Any]


def amortized_payment(principal: float, monthly_rate: float, months: float) -> float:
    """Level payment that retires ``principal`` over ``months`` periods.

    A zero rate degenerates to straight division of the principal.
    """
    if months <= 0:
        raise DegenerateComputationError("Loan term must be positive")
    if monthly_rate == 0:
        return principal / months
    growth = (1 + monthly_rate) ** months
    return principal * monthly_rate * growth / (growth - 1)


def present_value(payment: float, rate: float, periods: float) -> float:
    """Principal that a level ``payment`` retires over ``periods``; inverse of amortized_payment."""
    if rate == 0:
        return payment * periods
    growth = (1 + rate) ** periods
    return payment * (growth - 1) / (rate * growth)


def future_value(principal: float, contribution: float, rate: float, periods: float) -> float:
    """Balance after ``periods`` of compounding with a contribution at the end of each one."""
    growth = (1 + rate) ** periods
    if rate == 0:
        return principal + contribution * periods
    return principal * growth + contribution * (growth - 1) / rate


def progressive_tax(
    income: float,
    brackets: tuple[tuple[float, float], ...] = INCOME_TAX_BRACKETS_2024,
) -> float:
    """Tax owed on ``income`` under marginal ``brackets``."""
    tax = 0.0
    lower = 0.0
    for upper, rate in brackets:
        if income <= lower:
            break
        tax += (min(income, upper) - lower) * rate
        lower = upper
    return tax


@formula("loan-payment.loan-payment")
def _loan_payment(v: Inputs) -> Result:
    principal = v["amount"]
    r = v["rate"] / 100 / 12
    n = v["years"] * 12
    monthly = amortized_payment(principal, r, n)
    total = monthly * n
    interest = total - principal
    return Result(
        value=monthly,
        unit="$/mo",
        steps=(
            "M = P·r·(1+r)ⁿ / ((1+r)ⁿ − 1)",
            f"r = {fmt(v['rate'])}% / 12 = {r:.6f}, n = {fmt(n)} months",
            f"Total Payment: {money(total)}",
            f"Total Interest: {money(interest)}",
        ),
        diagram=donut(("Principal", principal, "#10b981"), ("Interest", interest, "#f43f5e")),
    )


@formula("car-loan.car-loan")
def _car_loan(v: Inputs) -> Result:
    loan = max(0.0, v["price"] - v["down"] - v["tradein"])
    r = v["rate"] / 100 / 12
    n = v["months"]
    monthly = amortized_payment(loan, r, n)
    interest = monthly * n - loan
    return Result(
        value=monthly,
        unit="$/mo",
        steps=(
            f"Loan Amount: {money(loan)}",
            f"Total Interest: {money(interest)}",
            f"Total Cost: {money(v['price'] + interest)}",
        ),
        diagram=donut(
            ("Principal", loan, "#3b82f6"),
            ("Interest", interest, "#f43f5e"),
            ("Down/Trade", v["down"] + v["tradein"], "#10b981"),
        ),
    )


@formula("mortgage.mortgage")
def _mortgage(v: Inputs) -> Result:
    principal = v["price"] - v["down"]
    r = v["rate"] / 100 / 12
    n = v["years"] * 12
    pi = amortized_payment(principal, r, n)
    monthly_tax = v["tax"] / 12
    monthly_ins = v["insurance"] / 12
    total = pi + monthly_tax + monthly_ins
    return Result(
        value=total,
        unit="$/mo",
        steps=(
            f"Loan Amount: {money(principal)}",
            f"Principal & Interest: {money(pi)}",
            f"Tax + Insurance: {money(monthly_tax + monthly_ins)}",
            f"Total Interest Paid: {money(pi * n - principal)}",
        ),
        diagram=donut(
            ("Principal & Interest", pi, "#3b82f6"),
            ("Property Tax", monthly_tax, "#f59e0b"),
            ("Insurance", monthly_ins, "#10b981"),
        ),
    )


@formula("debt-to-income.debt-to-income")
def _debt_to_income(v: Inputs) -> Result:
    debt = v["mortgage"] + v["cards"] + v["loans"] + v["other"]
    dti = debt / v["income"] * 100
    if dti < DTI_HEALTHY_LIMIT:
        status = "Excellent"
    elif dti < DTI_MAX_LIMIT:
        status = "Manageable"
    else:
        status = "High Risk"
    return Result(
        value=dti,
        unit="%",
        steps=(
            f"Total Monthly Debt: {money(debt)}",
            f"DTI = {money(debt)} / {money(v['income'])} × 100",
            f"Status: {status}",
        ),
        diagram=bars(
            ("Your DTI", dti, "#3b82f6"),
            ("Healthy Limit", DTI_HEALTHY_LIMIT, "#10b981"),
            ("Max Limit", DTI_MAX_LIMIT, "#ef4444"),
        ),
    )


@formula("compound-interest.compound-interest")
def _compound_interest(v: Inputs) -> Result:
    r = v["rate"] / 100 / 12
    years = v["years"]
    n = years * 12
    fv_lump = v["principal"] * (1 + r) ** n
    fv_series = v["monthly"] * ((1 + r) ** n - 1) / r if r else v["monthly"] * n
    total = fv_lump + fv_series
    contributed = v["principal"] + v["monthly"] * n

    balances: list[int] = []
    principals: list[int] = []
    balance = v["principal"]
    invested = v["principal"]
    for year in range(int(years) + 1):
        balances.append(round(balance))
        principals.append(round(invested))
        if year < years:
            for _ in range(12):
                balance = (balance + v["monthly"]) * (1 + r)
                invested += v["monthly"]

    return Result(
        value=total,
        unit="$",
        steps=(
            "FV = P(1+r)ⁿ + PMT·((1+r)ⁿ − 1)/r",
            f"Principal Invested: {money(contributed)}",
            f"Interest Earned: {money(total - contributed)}",
        ),
        diagram=diagram(
            DiagramKind.LINE,
            {
                "labels": list(range(len(balances))),
                "series": [
                    {"label": "Total Balance", "data": balances, "color": "#10b981"},
                    {"label": "Principal", "data": principals, "color": "#94a3b8"},
                ],
            },
        ),
    )


@formula("roi.roi")
def _roi(v: Inputs) -> Result:
    profit = v["returned"] - v["invested"]
    roi = profit / v["invested"] * 100
    annualized = (
        ((v["returned"] / v["invested"]) ** (1 / v["time"]) - 1) * 100 if v["time"] > 0 else 0.0
    )
    return Result(
        value=roi,
        unit="%",
        steps=(
            "ROI = (Returned − Invested) / Invested × 100",
            f"Profit: {money(profit)}",
            f"Annualized ROI: {annualized:.2f}%",
        ),
        diagram=bars(
            ("Invested", v["invested"], "#94a3b8"),
            ("Returned", v["returned"], "#10b981"),
        ),
    )


@formula("cagr.cagr")
def _cagr(v: Inputs) -> Result:
    cagr = ((v["end"] / v["start"]) ** (1 / v["years"]) - 1) * 100
    return Result(
        value=cagr,
        unit="%",
        steps=(
            "CAGR = (End / Start)^(1/years) − 1",
            f"Over {fmt(v['years'])} years",
            f"Total Profit: {money(v['end'] - v['start'])}",
        ),
        diagram=bars(("Start", v["start"], "#94a3b8"), ("End", v["end"], "#3b82f6")),
    )


@formula("savings-goal.savings-goal")
def _savings_goal(v: Inputs) -> Result:
    needed = v["goal"] - v["current"]
    monthly = needed / v["months"] if needed > 0 else 0.0
    return Result(
        value=monthly,
        unit="$/mo",
        steps=(f"Total to Save: {money(needed)}", f"Total Goal: {money(v['goal'])}"),
        diagram=donut(("Have", v["current"], "#10b981"), ("Need", needed, "#ef4444")),
    )


@formula("profit-margin.profit-margin")
def _profit_margin(v: Inputs) -> Result:
    profit = v["price"] - v["cost"]
    margin = profit / v["price"] * 100
    markup = profit / v["cost"] * 100
    return Result(
        value=margin,
        unit="%",
        steps=(f"Profit: {money(profit)}", f"Markup: {markup:.2f}%"),
        diagram=donut(("Cost", v["cost"], "#ef4444"), ("Profit", profit, "#10b981")),
    )


@formula("break-even.break-even")
def _break_even(v: Inputs) -> Result:
    contribution = v["price"] - v["variable"]
    if contribution <= 0:
        raise DegenerateComputationError("Price per unit must exceed variable cost per unit")
    units = math.ceil(v["fixed"] / contribution)
    revenue = units * v["price"]
    return Result(
        value=float(units),
        unit="units",
        steps=(
            "Units = ⌈Fixed / (Price − Variable)⌉",
            f"Contribution per unit: {money(contribution)}",
            f"Revenue Needed: {money(revenue)}",
        ),
        diagram=bars(
            ("Revenue", revenue, "#10b981"),
            ("Total Cost", v["fixed"] + units * v["variable"], "#ef4444"),
        ),
    )


@formula("sales-tax.sales-tax")
def _sales_tax(v: Inputs) -> Result:
    tax = v["amount"] * v["tax"] / 100
    total = v["amount"] + tax
    return Result(
        value=total,
        unit="$",
        steps=(f"Tax Amount: {money(tax)}", f"Total = {money(v['amount'])} + {money(tax)}"),
        diagram=donut(("Price", v["amount"], "#3b82f6"), ("Tax", tax, "#f59e0b")),
    )


@formula("income-tax.income-tax")
def _income_tax(v: Inputs) -> Result:
    income = v["income"]
    tax = progressive_tax(income)
    effective = tax / income * 100 if income > 0 else 0.0
    return Result(
        value=tax,
        unit="$",
        steps=(
            "2024 single-filer brackets: 10%, 12%, 22%, 24%, 32%",
            f"Effective Rate: {effective:.1f}%",
            f"Net Income: {money(income - tax)}",
        ),
        diagram=donut(("Net Pay", income - tax, "#10b981"), ("Tax", tax, "#ef4444")),
    )


@formula("cap-rate.cap-rate")
def _cap_rate(v: Inputs) -> Result:
    noi = v["income"] - v["expenses"]
    cap_rate = noi / v["price"] * 100
    return Result(
        value=cap_rate,
        unit="%",
        steps=("Cap Rate = NOI / Price × 100", f"NOI: {money(noi)}"),
        diagram=bars(("Income", v["income"], "#10b981"), ("Expenses", v["expenses"], "#ef4444")),
    )


@formula("currency-converter.currency-converter")
def _currency_converter(v: Inputs) -> Result:
    converted = v["amount"] * v["rate"]
    return Result(
        value=converted,
        unit="",
        steps=(f"{fmt(v['amount'])} × {fmt(v['rate'])} = {converted:.2f}",),
        diagram=bars(("Original", v["amount"], "#94a3b8"), ("Converted", converted, "#3b82f6")),
    )


@formula("apy-vs-apr.apy-vs-apr")
def _apy_vs_apr(v: Inputs) -> Result:
    r = v["apr"] / 100
    n = v["compound"]
    if n <= 0:
        raise DegenerateComputationError("Compounding periods must be positive")
    apy = ((1 + r / n) ** n - 1) * 100
    return Result(
        value=apy,
        unit="%",
        steps=("APY = (1 + APR/n)ⁿ − 1", f"Difference: {apy - v['apr']:.2f}%"),
        diagram=bars(("APR", v["apr"], "#94a3b8"), ("APY", apy, "#10b981")),
    )


@formula("cd-calculator.cd-calculator")
def _cd(v: Inputs) -> Result:
    r = v["rate"] / 100 / 12
    fv = v["deposit"] * (1 + r) ** v["months"]
    interest = fv - v["deposit"]
    return Result(
        value=fv,
        unit="$",
        steps=(
            f"FV = {money(v['deposit'])} × (1 + {r:.6f})^{fmt(v['months'])}",
            f"Interest Earned: {money(interest)}",
        ),
        diagram=donut(("Principal", v["deposit"], "#3b82f6"), ("Interest", interest, "#10b981")),
    )


@formula("bank-fee.bank-fee")
def _bank_fee(v: Inputs) -> Result:
    annual = (v["monthly"] + v["atm"]) * 12
    total = annual * v["years"]
    return Result(
        value=total,
        unit="$",
        steps=(f"Annual Cost: {money(annual)}", f"Over {fmt(v['years'])} years"),
        diagram=bars(
            ("Monthly Fee", v["monthly"] * 12 * v["years"], "#ef4444"),
            ("ATM Fees", v["atm"] * 12 * v["years"], "#f59e0b"),
        ),
    )


@formula("refinance.refinance")
def _refinance(v: Inputs) -> Result:
    new_payment = amortized_payment(v["newAmount"], v["newRate"] / 100 / 12, v["newTerm"] * 12)
    savings = v["currentPayment"] - new_payment
    if savings > 0:
        break_even = f"Break-even: {v['costs'] / savings:.1f} months"
    else:
        break_even = "Break-even: N/A"
    return Result(
        value=savings,
        unit="$/mo",
        steps=(
            f"New Payment: {money(new_payment)}",
            break_even,
            f"Annual Savings: {money(savings * 12)}",
        ),
        diagram=bars(
            ("Current", v["currentPayment"], "#94a3b8"),
            ("New", new_payment, "#10b981"),
        ),
    )


@formula("credit-card-payoff.credit-card-payoff")
def _credit_card_payoff(v: Inputs) -> Result:
    balance = v["balance"]
    r = v["rate"] / 100 / 12
    monthly_interest = balance * r
    if v["payment"] <= monthly_interest:
        return Result(
            value="Never Pay Off",
            steps=(
                "Payment too low to cover interest.",
                f"Min interest: {money(monthly_interest)}",
            ),
            diagram=bars(("Interest", monthly_interest, "#ef4444")),
        )
    if r == 0:
        months = balance / v["payment"]
    else:
        months = -math.log(1 - r * balance / v["payment"]) / math.log(1 + r)
    total_paid = months * v["payment"]
    interest = total_paid - balance
    return Result(
        value=float(math.ceil(months)),
        unit="months",
        steps=(
            "n = −ln(1 − r·B / P) / ln(1 + r)",
            f"Time to Payoff: {months / 12:.1f} years",
            f"Total Interest: {money(interest)}",
            f"Total Paid: {money(total_paid)}",
        ),
        diagram=donut(("Principal", balance, "#3b82f6"), ("Interest", interest, "#ef4444")),
    )


@formula("debt-snowball.debt-snowball")
def _debt_snowball(v: Inputs) -> Result:
    total = v["debt1"] + v["debt2"]
    minimums = v["pay1"] + v["pay2"]
    monthly = minimums + v["extra"]
    if monthly <= 0:
        raise DegenerateComputationError("Total monthly payment must be positive")
    months = total / monthly
    return Result(
        value=float(math.ceil(months)),
        unit="months",
        steps=(
            "Interest is not modelled across multiple debts",
            f"Total Debt: {money(total)}",
            f"Monthly Attack: {money(monthly)} ({money(v['extra'])}/mo extra)",
            f"Debt-free in {months / 12:.1f} years",
        ),
        diagram=bars(
            ("Snowball Payment", monthly, "#10b981"),
            ("Min Payments", minimums, "#94a3b8"),
        ),
    )


@formula("home-equity.home-equity")
def _home_equity(v: Inputs) -> Result:
    debt = v["mortgage"] + v["liens"]
    equity = v["value"] - debt
    ltv = debt / v["value"] * 100
    return Result(
        value=equity,
        unit="$",
        steps=(f"Equity = {money(v['value'])} − {money(debt)}", f"LTV Ratio: {ltv:.1f}%"),
        diagram=donut(("Equity", equity, "#10b981"), ("Debt", debt, "#ef4444")),
    )


@formula("house-affordability.house-affordability")
def _house_affordability(v: Inputs) -> Result:
    max_payment = v["income"] / 12 * HOUSING_INCOME_SHARE - v["debt"]
    loan = max(
        0.0,
        present_value(max_payment, AFFORDABILITY_RATE / 100 / 12, AFFORDABILITY_YEARS * 12),
    )
    price = loan + v["down"]
    return Result(
        value=price,
        unit="$",
        steps=(
            f"Max Monthly Payment: {money(max_payment)} (28% of income less debts)",
            f"Assumes a {AFFORDABILITY_YEARS}-year fixed loan at {fmt(AFFORDABILITY_RATE)}%",
            f"Loan Amount: {money(loan)}",
        ),
        diagram=bars(("Loan", loan, "#3b82f6"), ("Down Payment", v["down"], "#10b981")),
    )


@formula("investment-growth.investment-growth")
def _investment_growth(v: Inputs) -> Result:
    growth = 1 + v["rate"] / 100
    final = v["initial"] * growth ** v["years"]
    points = [round(v["initial"] * growth**year) for year in range(int(v["years"]) + 1)]
    return Result(
        value=final,
        unit="$",
        steps=(
            "FV = P(1 + r)ⁿ",
            f"Total Growth: {money(final - v['initial'])}",
            f"Multiplier: {final / v['initial']:.2f}x",
        ),
        diagram=diagram(
            DiagramKind.LINE,
            {
                "labels": list(range(len(points))),
                "series": [{"label": "Value", "data": points, "color": "#8b5cf6"}],
            },
        ),
    )


@formula("dividend.dividend")
def _dividend(v: Inputs) -> Result:
    dividend_yield = v["dividend"] / v["price"] * 100
    annual_income = v["dividend"] * v["shares"]
    return Result(
        value=dividend_yield,
        unit="%",
        steps=("Yield = Dividend / Price × 100", f"Annual Income: {money(annual_income)}"),
        diagram=bars(
            ("Share Price", v["price"], "#94a3b8"),
            ("Dividend", v["dividend"], "#10b981"),
        ),
    )


@formula("stock-profit.stock-profit")
def _stock_profit(v: Inputs) -> Result:
    cost = v["shares"] * v["buy"]
    revenue = v["shares"] * v["sell"]
    profit = revenue - cost - v["comm"]
    return Result(
        value=profit,
        unit="$",
        steps=(
            f"Revenue {money(revenue)} − Cost {money(cost)} − Commission {money(v['comm'])}",
            f"ROI: {profit / cost * 100:.2f}%",
        ),
        diagram=bars(("Cost", cost, "#ef4444"), ("Revenue", revenue, "#10b981")),
    )


@formula("irr.irr")
def _irr(v: Inputs) -> Result:
    irr = ((v["final"] / v["initial"]) ** (1 / v["years"]) - 1) * 100
    return Result(
        value=irr,
        unit="%",
        steps=(
            "IRR = (Final / Initial)^(1/years) − 1",
            f"Total Profit: {money(v['final'] - v['initial'])}",
        ),
        diagram=bars(("Initial", v["initial"], "#94a3b8"), ("Final", v["final"], "#10b981")),
    )


@formula("risk-reward.risk-reward")
def _risk_reward(v: Inputs) -> Result:
    risk = v["entry"] - v["stop"]
    if risk <= 0:
        raise InvalidInputError("stop", "Stop loss must be below the entry price")
    reward = v["target"] - v["entry"]
    ratio = reward / risk
    return Result(
        value=ratio,
        unit="reward/risk",
        steps=(
            f"Ratio: 1 : {ratio:.2f}",
            f"Risk: {money(risk)}",
            f"Reward: {money(reward)}",
            f"Upside: {reward / v['entry'] * 100:.2f}%",
        ),
        diagram=bars(("Risk", risk, "#ef4444"), ("Reward", reward, "#10b981")),
    )


@formula("dollar-cost-averaging.dollar-cost-averaging")
def _dollar_cost_averaging(v: Inputs) -> Result:
    buys = [(v[f"shares{i}"], v[f"price{i}"]) for i in (1, 2, 3)]
    total_shares = sum(shares for shares, _ in buys)
    if total_shares == 0:
        raise DegenerateComputationError("No shares were bought")
    total_cost = sum(shares * price for shares, price in buys)
    average = total_cost / total_shares
    colors = ("#60a5fa", "#34d399", "#f472b6")
    slices = [
        (f"Buy {i}", shares * price, color)
        for i, ((shares, price), color) in enumerate(zip(buys, colors, strict=True), start=1)
        if shares * price > 0
    ]
    return Result(
        value=average,
        unit="$/share",
        steps=(f"Total Shares: {fmt(total_shares)}", f"Total Invested: {money(total_cost)}"),
        diagram=donut(*slices),
    )


@formula("monthly-budget.monthly-budget")
def _monthly_budget(v: Inputs) -> Result:
    expenses = v["needs"] + v["wants"] + v["savings"]
    remaining = v["income"] - expenses
    shares = {name: v[name] / v["income"] * 100 for name in ("needs", "wants", "savings")}
    return Result(
        value=remaining,
        unit="$",
        steps=(
            f"Total Expenses: {money(expenses)}",
            "Surplus" if remaining >= 0 else "Deficit",
            f"Needs: {shares['needs']:.0f}% (target 50%)",
            f"Wants: {shares['wants']:.0f}% (target 30%)",
            f"Savings: {shares['savings']:.0f}% (target 20%)",
        ),
        diagram=donut(
            ("Needs", v["needs"], "#f59e0b"),
            ("Wants", v["wants"], "#ec4899"),
            ("Savings", v["savings"], "#10b981"),
            ("Remaining", max(0.0, remaining), "#cbd5e1"),
        ),
    )


@formula("retirement-savings.retirement-savings")
def _retirement_savings(v: Inputs) -> Result:
    years = max(1.0, v["retireAge"] - v["currentAge"])
    r = v["rate"] / 100 / 12
    fv = future_value(v["savings"], v["monthly"], r, years * 12)
    income = fv * SAFE_WITHDRAWAL_RATE / 12
    marks = list(range(0, int(years) + 1, 5))
    if marks[-1] != years:
        marks.append(years)
    balances = [round(future_value(v["savings"], v["monthly"], r, m * 12)) for m in marks]
    return Result(
        value=fv,
        unit="$",
        steps=(
            f"Saving for {fmt(years)} years until age {fmt(v['retireAge'])}",
            f"Safe Monthly Income (4% Rule): {money(income)}",
        ),
        diagram=diagram(
            DiagramKind.LINE,
            {
                "labels": [v["currentAge"] + m for m in marks],
                "series": [{"label": "Savings Balance", "data": balances, "color": "#3b82f6"}],
            },
        ),
    )


@formula("fire-calculator.fire-calculator")
def _fire_calculator(v: Inputs) -> Result:
    target = v["expenses"] / (v["withdrawal"] / 100)
    balance = v["savings"]
    years = 0
    while balance < target and years < FIRE_MAX_YEARS:
        balance = balance * (1 + v["rate"] / 100) + v["contribution"]
        years += 1
    steps = (f"FIRE Number: {money(target)}", f"Withdrawal rate: {fmt(v['withdrawal'])}%")
    chart = bars(("Current", v["savings"], "#10b981"), ("Target", target, "#3b82f6"))
    if balance < target:
        return Result(value=f"Over {FIRE_MAX_YEARS} years", steps=steps, diagram=chart)
    return Result(value=float(years), unit="years", steps=steps, diagram=chart)


@formula("net-worth.net-worth")
def _net_worth(v: Inputs) -> Result:
    assets = v["realestate"] + v["investments"] + v["cash"]
    liabilities = v["mortgage"] + v["loans"]
    steps = [f"Total Assets: {money(assets)}", f"Total Liabilities: {money(liabilities)}"]
    if assets > 0:
        steps.append(f"Debt Ratio: {liabilities / assets * 100:.1f}%")
    return Result(
        value=assets - liabilities,
        unit="$",
        steps=tuple(steps),
        diagram=bars(("Assets", assets, "#10b981"), ("Liabilities", liabilities, "#f43f5e")),
    )


@formula("401k.401k")
def _401k(v: Inputs) -> Result:
    own = v["salary"] * v["contrib"] / 100
    employer = v["salary"] * v["match"] / 100
    annual = own + employer
    r = v["rate"] / 100
    balances = [round(future_value(0.0, annual, r, year)) for year in range(int(v["years"]) + 1)]
    fv = future_value(0.0, annual, r, v["years"])
    return Result(
        value=fv,
        unit="$",
        steps=(
            f"Your Contribution: {money(own)}/yr",
            f"Employer Match: {money(employer)}/yr",
            f"Annual Saving: {money(annual)}",
        ),
        diagram=diagram(
            DiagramKind.LINE,
            {
                "labels": list(range(len(balances))),
                "series": [{"label": "Balance", "data": balances, "color": "#10b981"}],
            },
        ),
    )


@formula("pension.pension")
def _pension(v: Inputs) -> Result:
    annual = v["years"] * v["salary"] * v["multiplier"] / 100
    return Result(
        value=annual / 12,
        unit="$/mo",
        steps=(
            "Pension = Years × Salary × Multiplier",
            f"Annual Pension: {money(annual)}",
            f"Replacement Rate: {v['years'] * v['multiplier']:.2f}%",
        ),
        diagram=bars(("Salary", v["salary"], "#94a3b8"), ("Pension", annual, "#10b981")),
    )


@formula("emergency-fund.emergency-fund")
def _emergency_fund(v: Inputs) -> Result:
    total = v["expenses"] * v["months"]
    return Result(
        value=total,
        unit="$",
        steps=(f"Based on {fmt(v['months'])} months of expenses",),
        diagram=bars(("1 Month", v["expenses"], "#94a3b8"), ("Target", total, "#10b981")),
    )


@formula("capital-gains-tax.capital-gains-tax")
def _capital_gains_tax(v: Inputs) -> Result:
    if v["term"] < 1:
        rate = SHORT_TERM_GAINS_RATE
        basis = "Short term (ordinary income, simplified)"
    else:
        rate = next(r for upper, r in LONG_TERM_GAINS_BRACKETS if v["income"] < upper)
        basis = "Long term"
    tax = v["profit"] * rate
    return Result(
        value=tax,
        unit="$",
        steps=(basis, f"Rate Applied: {rate * 100:g}%", f"Net Profit: {money(v['profit'] - tax)}"),
        diagram=donut(("Keep", v["profit"] - tax, "#10b981"), ("Tax", tax, "#ef4444")),
    )


@formula("business-valuation.business-valuation")
def _business_valuation(v: Inputs) -> Result:
    valuation = v["profit"] * v["multiple"]
    return Result(
        value=valuation,
        unit="$",
        steps=(
            f"Based on {fmt(v['multiple'])}x EBITDA",
            f"Profit Margin: {v['profit'] / v['revenue'] * 100:.1f}%",
        ),
        diagram=bars(("Revenue", v["revenue"], "#94a3b8"), ("Valuation", valuation, "#3b82f6")),
    )


@formula("cac.cac")
def _cac(v: Inputs) -> Result:
    spend = v["marketing"] + v["sales"]
    return Result(
        value=spend / v["customers"],
        unit="$/customer",
        steps=(f"Total Spend: {money(spend)}", f"New Customers: {fmt(v['customers'])}"),
        diagram=donut(("Marketing", v["marketing"], "#f472b6"), ("Sales", v["sales"], "#60a5fa")),
    )


@formula("clv.clv")
def _clv(v: Inputs) -> Result:
    annual = v["value"] * v["freq"]
    lifetime = annual * v["years"]
    return Result(
        value=lifetime,
        unit="$",
        steps=("CLV = Purchase × Frequency × Lifespan", f"Annual Value: {money(annual)}"),
        diagram=bars(("1 Purchase", v["value"], "#94a3b8"), ("Lifetime", lifetime, "#10b981")),
    )


@formula("depreciation.depreciation")
def _depreciation(v: Inputs) -> Result:
    depreciable = v["cost"] - v["salvage"]
    return Result(
        value=depreciable / v["life"],
        unit="$/yr",
        steps=(
            "Straight line: (Cost − Salvage) / Life",
            f"Total Depreciable: {money(depreciable)}",
        ),
        diagram=bars(("Cost", v["cost"], "#3b82f6"), ("Salvage", v["salvage"], "#10b981")),
    )


@formula("payroll.payroll")
def _payroll(v: Inputs) -> Result:
    taxes = v["salary"] * v["tax"] / 100
    total = v["salary"] + taxes + v["benefits"]
    return Result(
        value=total,
        unit="$",
        steps=(
            f"Taxes: {money(taxes)}",
            f"Benefits: {money(v['benefits'])}",
            f"Overhead: {(total - v['salary']) / v['salary'] * 100:.1f}%",
        ),
        diagram=donut(
            ("Salary", v["salary"], "#3b82f6"),
            ("Tax/Benefits", taxes + v["benefits"], "#f59e0b"),
        ),
    )


@formula("rental-property-roi.rental-property-roi")
def _rental_property_roi(v: Inputs) -> Result:
    monthly = v["rent"] - v["expenses"]
    annual = monthly * 12
    cash_on_cash = annual / (v["purchase"] * RENTAL_DOWN_PAYMENT_SHARE) * 100
    return Result(
        value=annual,
        unit="$/yr",
        steps=(
            f"Monthly Cash Flow: {money(monthly)}",
            f"Est. Cash on Cash: {cash_on_cash:.1f}% (assuming 20% down)",
        ),
        diagram=bars(
            ("Rent Income", v["rent"] * 12, "#10b981"),
            ("Expenses", v["expenses"] * 12, "#ef4444"),
        ),
    )


@formula("brrrr.brrrr")
def _brrrr(v: Inputs) -> Result:
    total_cost = v["purchase"] + v["rehab"]
    new_loan = v["arv"] * v["refi"] / 100
    cash_out = new_loan - total_cost
    return Result(
        value=cash_out,
        unit="$",
        steps=(
            "Cash Out" if cash_out > 0 else f"{money(abs(cash_out))} Left In",
            f"Total Project Cost: {money(total_cost)}",
            f"New Loan: {money(new_loan)}",
            f"Created Equity: {money(v['arv'] - new_loan)}",
        ),
        diagram=bars(("Total Cost", total_cost, "#94a3b8"), ("New Loan", new_loan, "#10b981")),
    )


@formula("cash-on-cash.cash-on-cash")
def _cash_on_cash(v: Inputs) -> Result:
    coc = v["cashflow"] / v["invested"] * 100
    steps = [f"Monthly Income: {money(v['cashflow'] / 12)}"]
    if v["cashflow"] > 0:
        steps.append(f"Recoup Investment in: {v['invested'] / v['cashflow']:.1f} years")
    return Result(
        value=coc,
        unit="%",
        steps=tuple(steps),
        diagram=bars(
            ("Invested", v["invested"], "#94a3b8"),
            ("Cash Flow", v["cashflow"], "#10b981"),
        ),
    )


@formula("crypto-profit.crypto-profit")
def _crypto_profit(v: Inputs) -> Result:
    coins = v["invested"] / v["buyPrice"]
    gross = coins * v["sellPrice"]
    fees = (v["invested"] + gross) * v["fees"] / 100
    net = gross - v["invested"] - fees
    return Result(
        value=net,
        unit="$",
        steps=(
            f"Coins Bought: {coins:.8g}",
            f"Total Fees: {money(fees)}",
            f"ROI: {net / v['invested'] * 100:.2f}%",
        ),
        diagram=bars(
            ("Invested", v["invested"], "#94a3b8"),
            ("Final Value", gross - fees, "#10b981" if net > 0 else "#ef4444"),
        ),
    )


@formula("crypto-staking.crypto-staking")
def _crypto_staking(v: Inputs) -> Result:
    rewards = v["amount"] * v["apy"] / 100 / 365 * v["days"]
    worth = rewards * v["price"]
    steps = [f"Value: {money(worth)}"]
    if v["days"] > 0:
        steps.append(f"Daily Earnings: {money(worth / v['days'])}")
    return Result(
        value=rewards,
        unit="coins",
        steps=tuple(steps),
        diagram=bars(
            ("Principal", v["amount"] * v["price"], "#3b82f6"),
            ("Rewards", worth, "#10b981"),
        ),
    )


@formula("mining-profitability.mining-profitability")
def _mining_profitability(v: Inputs) -> Result:
    power_cost = v["power"] / 1000 * 24 * v["cost"]
    profit = v["revenue"] - power_cost
    return Result(
        value=profit,
        unit="$/day",
        steps=(f"Power Cost: {money(power_cost)}/day", f"Monthly: {money(profit * 30)}"),
        diagram=donut(("Power Cost", power_cost, "#ef4444"), ("Profit", profit, "#10b981")),
    )


@formula("options-profit.options-profit")
def _options_profit(v: Inputs) -> Result:
    size = v["contracts"] * OPTION_CONTRACT_SIZE
    cost = size * v["premium"]
    gross = max(0.0, v["price"] - v["strike"]) * size
    return Result(
        value=gross - cost,
        unit="$",
        steps=(
            f"Cost Basis: {money(cost)}",
            f"Break Even: {money(v['strike'] + v['premium'])}",
        ),
        diagram=bars(("Premium Cost", cost, "#ef4444"), ("Exit Value", gross, "#10b981")),
    )


@formula("margin-trading.margin-trading")
def _margin_trading(v: Inputs) -> Result:
    if v["leverage"] < 1:
        raise InvalidInputError("leverage", "Leverage must be at least 1x")
    position = v["collateral"] * v["leverage"]
    liquidation = v["entry"] * (1 - 1 / v["leverage"] + LIQUIDATION_BUFFER)
    return Result(
        value=position,
        unit="$",
        steps=(
            f"Buying Power: {fmt(v['leverage'])}x",
            f"Est. Liquidation (long): {money(liquidation)}",
        ),
        diagram=donut(
            ("Your Money", v["collateral"], "#10b981"),
            ("Borrowed", position - v["collateral"], "#f59e0b"),
        ),
    )


LOANS = "Loans"
INVESTING = "Investing"
SAVINGS = "Savings"
BUSINESS = "Business"
REAL_ESTATE = "Real Estate"
BANKING = "Banking"
RETIREMENT = "Retirement"
CRYPTO = "Crypto"
TRADING = "Trading"


def _flat(
    calc_id: str, title: str, category: str, description: str, icon: str, *inputs: InputSpec
) -> FlatCalculator:
    return FlatCalculator(
        id=calc_id,
        title=title,
        category=category,
        domain=Domain.FINANCE,
        description=description,
        icon=icon,
        inputs=inputs,
        formula_id=f"{calc_id}.{calc_id}",
    )


# fmt: off
CALCULATORS: Final[tuple[FlatCalculator, ...]] = (
    _flat(
        "loan-payment", "Loan Payment Calculator", LOANS,
        "Calculate your monthly payment and total interest breakdown.", "credit-card",
        num("amount", "Loan Amount", "$", 20000, 1000, 1000000, 1000),
        num("rate", "Interest Rate (APR)", "%", 5.5, 0.1, 30, 0.1),
        num("years", "Loan Term", "yrs", 5, 1, 30),
    ),
    _flat(
        "car-loan", "Auto Loan Calculator", LOANS,
        "Estimate car payments including trade-in and down payment.", "car",
        num("price", "Vehicle Price", "$", 35000, 5000),
        num("down", "Down Payment", "$", 5000),
        num("tradein", "Trade-In Value", "$", 2000),
        num("rate", "Interest Rate", "%", 6.0),
        num("months", "Term (Months)", "", 60, 12, 84, 12),
    ),
    _flat(
        "mortgage", "Mortgage Calculator", LOANS,
        "Monthly house payment including taxes and insurance.", "home",
        num("price", "Home Price", "$", 300000, 50000, step=5000),
        num("down", "Down Payment", "$", 60000, 0, step=1000),
        num("rate", "Interest Rate", "%", 6.5, step=0.1),
        num("years", "Loan Term", "yrs", 30, 10, 40, 5),
        num("tax", "Annual Property Tax", "$", 3500),
        num("insurance", "Annual Insurance", "$", 1200),
    ),
    _flat(
        "debt-to-income", "Debt-to-Income Ratio", LOANS,
        "Check your loan eligibility.", "scale",
        num("income", "Monthly Gross Income", "$", 5000),
        num("mortgage", "Rent / Mortgage", "$", 1200),
        num("cards", "Credit Card Minimums", "$", 150),
        num("loans", "Student/Car Loans", "$", 350),
        num("other", "Other Debt", "$", 0),
    ),
    _flat(
        "compound-interest", "Compound Interest", INVESTING,
        "See how your money grows with monthly contributions.", "trending-up",
        num("principal", "Initial Deposit", "$", 5000),
        num("monthly", "Monthly Contribution", "$", 200),
        num("rate", "Annual Interest Rate", "%", 7, step=0.1),
        num("years", "Years to Grow", "yrs", 20, hi=50),
    ),
    _flat(
        "roi", "ROI Calculator", INVESTING,
        "Return on investment, total and annualized.", "percent",
        num("invested", "Amount Invested", "$", 1000),
        num("returned", "Amount Returned", "$", 1500),
        num("time", "Time Period (Years)", "yrs", 1),
    ),
    _flat(
        "cagr", "CAGR Calculator", INVESTING,
        "Compound annual growth rate.", "trending-up",
        num("start", "Start Value", "$", 1000),
        num("end", "End Value", "$", 2500),
        num("years", "Number of Years", "yrs", 5),
    ),
    _flat(
        "savings-goal", "Savings Goal", SAVINGS,
        "How much to save monthly to reach a goal.", "piggy-bank",
        num("goal", "Goal Amount", "$", 10000),
        num("months", "Time (Months)", "", 12),
        num("current", "Current Savings", "$", 0),
    ),
    _flat(
        "profit-margin", "Profit Margin Calculator", BUSINESS,
        "Calculate Gross and Net Profit Margins.", "briefcase",
        num("cost", "Cost of Goods", "$", 50),
        num("price", "Selling Price", "$", 100),
    ),
    _flat(
        "break-even", "Break-Even Analysis", BUSINESS,
        "Determine units to sell to cover costs.", "activity",
        num("fixed", "Fixed Costs", "$", 10000),
        num("price", "Price per Unit", "$", 50),
        num("variable", "Variable Cost/Unit", "$", 20),
    ),
    _flat(
        "sales-tax", "Sales Tax Calculator", BUSINESS,
        "Calculate final price with tax.", "coins",
        num("amount", "Pre-Tax Amount", "$", 100),
        num("tax", "Tax Rate", "%", 8.25),
    ),
    _flat(
        "income-tax", "Income Tax Estimator", BUSINESS,
        "Estimate federal tax liability (Simplified US brackets).", "building",
        num("income", "Taxable Income", "$", 60000),
    ),
    _flat(
        "cap-rate", "Cap Rate Calculator", REAL_ESTATE,
        "Capitalization Rate for rental properties.", "home",
        num("price", "Property Price", "$", 250000),
        num("income", "Annual Gross Income", "$", 30000),
        num("expenses", "Annual Expenses", "$", 10000),
    ),
    _flat(
        "currency-converter", "Simple Currency Converter", BANKING,
        "Convert amount using a custom rate.", "coins",
        num("amount", "Amount", "", 100),
        num("rate", "Exchange Rate", "", 0.92),
    ),
    _flat(
        "apy-vs-apr", "APY vs APR", BANKING,
        "Convert Interest Rate (APR) to Yield (APY).", "percent",
        num("apr", "APR %", "%", 5),
        num("compound", "Compounds/Year", "", 12),
    ),
    _flat(
        "cd-calculator", "CD Calculator", BANKING,
        "Certificate of Deposit returns.", "landmark",
        num("deposit", "Deposit Amount", "$", 10000),
        num("rate", "APY %", "%", 4.5),
        num("months", "Term (Months)", "", 12),
    ),
    _flat(
        "bank-fee", "Bank Fee Analyzer", BANKING,
        "See how much fees cost you over time.", "coins",
        num("monthly", "Monthly Fee", "$", 12),
        num("atm", "ATM Fees/Mo", "$", 5),
        num("years", "Years", "yrs", 5),
    ),
    _flat(
        "refinance", "Mortgage Refinance", LOANS,
        "Check if refinancing will save you money.", "home",
        num("currentPayment", "Current Monthly P&I", "$", 1800),
        num("newAmount", "New Loan Amount", "$", 250000),
        num("newRate", "New Interest Rate", "%", 5.5, step=0.1),
        num("newTerm", "New Term (Years)", "yrs", 30, 1, 40),
        num("costs", "Closing Costs", "$", 4000),
    ),
    _flat(
        "credit-card-payoff", "Credit Card Payoff", LOANS,
        "Find out how long it will take to pay off debt.", "credit-card",
        num("balance", "Card Balance", "$", 5000),
        num("rate", "Interest Rate", "%", 18.9, step=0.1),
        num("payment", "Monthly Payment", "$", 150),
    ),
    _flat(
        "debt-snowball", "Debt Snowball", LOANS,
        "Calculate payoff for multiple debts using the snowball method.", "coins",
        num("debt1", "Debt 1 (Smallest)", "$", 2000),
        num("pay1", "Debt 1 Payment", "$", 100),
        num("debt2", "Debt 2", "$", 5000),
        num("pay2", "Debt 2 Payment", "$", 150),
        num("extra", "Extra Money", "$", 200),
    ),
    _flat(
        "home-equity", "Home Equity", LOANS,
        "Calculate how much equity you have in your home.", "home",
        num("value", "Home Value", "$", 450000),
        num("mortgage", "Mortgage Balance", "$", 320000),
        num("liens", "Other Liens", "$", 0),
    ),
    _flat(
        "house-affordability", "House Affordability", LOANS,
        "How much house can you afford?", "home",
        num("income", "Annual Income", "$", 80000),
        num("down", "Down Payment", "$", 40000),
        num("debt", "Monthly Debts", "$", 500),
    ),
    _flat(
        "investment-growth", "Investment Growth", INVESTING,
        "Project the future value of your portfolio.", "trending-up",
        num("initial", "Starting Balance", "$", 10000),
        num("years", "Years", "yrs", 10, hi=50),
        num("rate", "Annual Return", "%", 8, step=0.1),
    ),
    _flat(
        "dividend", "Dividend Yield", INVESTING,
        "Calculate dividend yield and payout.", "coins",
        num("price", "Share Price", "$", 150),
        num("dividend", "Annual Dividend", "$", 5),
        num("shares", "Shares Owned", "", 100),
    ),
    _flat(
        "stock-profit", "Stock Profit Calculator", INVESTING,
        "Calculate your profit or loss from a stock trade.", "trending-up",
        num("shares", "Number of Shares", "", 50),
        num("buy", "Buy Price", "$", 100),
        num("sell", "Sell Price", "$", 120),
        num("comm", "Commission", "$", 5),
    ),
    _flat(
        "irr", "Internal Rate of Return", INVESTING,
        "Simplified IRR for a single payout investment.", "percent",
        num("initial", "Initial Investment", "$", 10000),
        num("final", "Final Value", "$", 15000),
        num("years", "Years Held", "yrs", 5),
    ),
    _flat(
        "risk-reward", "Risk/Reward Ratio", INVESTING,
        "Calculate potential risk vs reward for a trade.", "activity",
        num("entry", "Entry Price", "$", 100),
        num("stop", "Stop Loss", "$", 90),
        num("target", "Target Price", "$", 130),
    ),
    _flat(
        "dollar-cost-averaging", "DCA Calculator", INVESTING,
        "Average cost per share over multiple buys.", "pie-chart",
        num("shares1", "Buy 1 Shares", "", 10),
        num("price1", "Buy 1 Price", "$", 50),
        num("shares2", "Buy 2 Shares", "", 15),
        num("price2", "Buy 2 Price", "$", 45),
        num("shares3", "Buy 3 Shares", "", 0),
        num("price3", "Buy 3 Price", "$", 0),
    ),
    _flat(
        "monthly-budget", "Simple Monthly Budget", RETIREMENT,
        "Compare income vs expenses.", "wallet",
        num("income", "Monthly Income (Net)", "$", 4000),
        num("needs", "Needs (Rent, Food)", "$", 2000),
        num("wants", "Wants (Fun, Shop)", "$", 1000),
        num("savings", "Savings/Debt", "$", 500),
    ),
    _flat(
        "retirement-savings", "Retirement Planner", RETIREMENT,
        "Estimate savings needed for retirement.", "piggy-bank",
        num("currentAge", "Current Age", "yrs", 30, hi=80),
        num("retireAge", "Retirement Age", "yrs", 65, hi=90),
        num("savings", "Current Savings", "$", 50000),
        num("monthly", "Monthly Saving", "$", 1000),
        num("rate", "Annual Return", "%", 7, step=0.1),
    ),
    _flat(
        "fire-calculator", "FIRE Calculator", RETIREMENT,
        "Financial Independence, Retire Early.", "flame",
        num("expenses", "Annual Expenses", "$", 40000),
        num("savings", "Current Portfolio", "$", 100000),
        num("contribution", "Annual Savings", "$", 25000),
        num("rate", "Return Rate", "%", 7, step=0.1),
        num("withdrawal", "Withdrawal Rate", "%", 4, step=0.1),
    ),
    _flat(
        "net-worth", "Net Worth Calculator", RETIREMENT,
        "Calculate your total net worth.", "wallet",
        num("realestate", "Real Estate Value", "$", 300000),
        num("investments", "Investments", "$", 50000),
        num("cash", "Cash/Savings", "$", 10000),
        num("mortgage", "Mortgage Debt", "$", 200000),
        num("loans", "Other Loans", "$", 15000),
    ),
    _flat(
        "401k", "401(k) Planner", RETIREMENT,
        "Estimate 401(k) growth with employer match.", "landmark",
        num("salary", "Annual Salary", "$", 75000),
        num("contrib", "Contribution %", "%", 6),
        num("match", "Employer Match %", "%", 3),
        num("rate", "Annual Return", "%", 7, step=0.1),
        num("years", "Years to Grow", "yrs", 30, hi=50),
    ),
    _flat(
        "pension", "Pension Estimator", RETIREMENT,
        "Estimate defined benefit pension payout.", "landmark",
        num("years", "Years of Service", "yrs", 25),
        num("salary", "High Avg Salary", "$", 80000),
        num("multiplier", "Multiplier %", "%", 2.0, step=0.1),
    ),
    _flat(
        "emergency-fund", "Emergency Fund", RETIREMENT,
        "Calculate how much cash you need for emergencies.", "shield",
        num("expenses", "Monthly Expenses", "$", 3000),
        num("months", "Months Coverage", "", 6),
    ),
    _flat(
        "capital-gains-tax", "Capital Gains Tax", BUSINESS,
        "Estimate tax on investment profits.", "building",
        num("profit", "Total Profit", "$", 10000),
        num("term", "Years Held (<1 = Short Term)", "yrs", 2),
        num("income", "Annual Income", "$", 70000),
    ),
    _flat(
        "business-valuation", "Business Valuation", BUSINESS,
        "Estimate business value using earnings multiplier.", "briefcase",
        num("revenue", "Annual Revenue", "$", 500000),
        num("profit", "Annual Profit (EBITDA)", "$", 100000),
        num("multiple", "Industry Multiplier", "", 3.5, step=0.1),
    ),
    _flat(
        "cac", "Customer Acquisition Cost", BUSINESS,
        "Cost to acquire a new customer.", "briefcase",
        num("marketing", "Marketing Spend", "$", 5000),
        num("sales", "Sales Spend", "$", 3000),
        num("customers", "New Customers", "", 50),
    ),
    _flat(
        "clv", "Customer Lifetime Value", BUSINESS,
        "Total revenue expected from a customer.", "briefcase",
        num("value", "Avg Purchase Value", "$", 100),
        num("freq", "Purchases per Year", "", 4),
        num("years", "Customer Lifespan", "yrs", 3),
    ),
    _flat(
        "depreciation", "Asset Depreciation", BUSINESS,
        "Straight-line depreciation of an asset.", "activity",
        num("cost", "Asset Cost", "$", 20000),
        num("salvage", "Salvage Value", "$", 2000),
        num("life", "Useful Life (Years)", "yrs", 5),
    ),
    _flat(
        "payroll", "Payroll Calculator", BUSINESS,
        "Estimate employer cost for an employee.", "building",
        num("salary", "Gross Salary", "$", 60000),
        num("tax", "Employer Tax %", "%", 7.65),
        num("benefits", "Benefits (Annual)", "$", 5000),
    ),
    _flat(
        "rental-property-roi", "Rental Property ROI", REAL_ESTATE,
        "Detailed return analysis for rentals.", "home",
        num("purchase", "Purchase Price", "$", 200000),
        num("rent", "Monthly Rent", "$", 2000),
        num("expenses", "Monthly Expenses", "$", 800),
    ),
    _flat(
        "brrrr", "BRRRR Calculator", REAL_ESTATE,
        "Buy, Rehab, Rent, Refinance, Repeat strategy.", "home",
        num("purchase", "Purchase Price", "$", 100000),
        num("rehab", "Rehab Costs", "$", 30000),
        num("arv", "After Repair Value", "$", 180000),
        num("refi", "Refinance % of ARV", "%", 75),
    ),
    _flat(
        "cash-on-cash", "Cash on Cash Return", REAL_ESTATE,
        "Return on actual cash invested.", "percent",
        num("cashflow", "Annual Cash Flow", "$", 6000),
        num("invested", "Total Cash Invested", "$", 40000),
    ),
    _flat(
        "crypto-profit", "Crypto Profit Calculator", CRYPTO,
        "Calculate profit from buying and selling crypto.", "coins",
        num("invested", "Amount Invested", "$", 1000),
        num("buyPrice", "Buy Price (Coin)", "$", 50000),
        num("sellPrice", "Sell Price (Coin)", "$", 65000),
        num("fees", "Fees (%)", "%", 0.1, step=0.01),
    ),
    _flat(
        "crypto-staking", "Crypto Staking Rewards", CRYPTO,
        "Calculate staking rewards over time.", "coins",
        num("amount", "Amount Staked", "", 10),
        num("price", "Coin Price", "$", 2000),
        num("apy", "APY %", "%", 5),
        num("days", "Duration (Days)", "", 30),
    ),
    _flat(
        "mining-profitability", "Mining Profitability", CRYPTO,
        "Est. profit based on revenue vs power cost.", "cpu",
        num("revenue", "Daily Revenue", "$", 15),
        num("power", "Power (Watts)", "", 1200),
        num("cost", "Cost per kWh", "$", 0.12, step=0.01),
    ),
    _flat(
        "options-profit", "Options Profit Calculator", TRADING,
        "Simple call option profit estimator.", "trending-up",
        num("contracts", "Contracts (100x)", "", 1),
        num("premium", "Premium Paid", "$", 2.50, step=0.05),
        num("strike", "Strike Price", "$", 150),
        num("price", "Exit Stock Price", "$", 160),
    ),
    _flat(
        "margin-trading", "Margin Trading", TRADING,
        "Calculate leverage position and liquidation.", "activity",
        num("collateral", "Collateral", "$", 1000),
        num("leverage", "Leverage (x)", "", 5, lo=1),
        num("entry", "Entry Price", "$", 50000),
    ),
)
# fmt: on


def register_finance_calculators(registry: CalculatorRegistry) -> CalculatorRegistry:
    """Register all finance calculators into a registry."""
    registry.register_catalog(CALCULATORS, FORMULAS)
    return registry
