"""Formulary calculation core.

This package provides:
- Calculator definition models (multi-mode and flat) and the Result protocol
- CalculatorRegistry / FormulaRegistry for static catalogs
- CalcEngine for unit-normalized, error-safe evaluation
- CalculatorSession for interactive state and history
"""

from formulary.calc.engine import CalcEngine
from formulary.calc.models import (
    CalculatorDefinition,
    Diagram,
    DiagramKind,
    Domain,
    Evaluable,
    FlatCalculator,
    HistoryEntry,
    InputKind,
    InputSpec,
    MultiModeCalculator,
    Result,
    SelectOption,
    SolveMode,
    load_definition,
)
from formulary.calc.outcome import (
    CalcError,
    CalcErrorKind,
    DegenerateComputationError,
    EvaluationOutcome,
    InvalidInputError,
)
from formulary.calc.registry import (
    CalculatorRegistry,
    DuplicateCalculatorError,
    FormulaFn,
    FormulaRegistry,
    MissingFormulaError,
    NotFound,
    RegistryFrozenError,
)
from formulary.calc.session import CalculatorSession, format_result

__all__ = [
    "CalcEngine",
    "CalcError",
    "CalcErrorKind",
    "CalculatorDefinition",
    "CalculatorRegistry",
    "CalculatorSession",
    "DegenerateComputationError",
    "Diagram",
    "DiagramKind",
    "Domain",
    "DuplicateCalculatorError",
    "EvaluationOutcome",
    "Evaluable",
    "FlatCalculator",
    "FormulaFn",
    "FormulaRegistry",
    "HistoryEntry",
    "InputKind",
    "InputSpec",
    "InvalidInputError",
    "MissingFormulaError",
    "MultiModeCalculator",
    "NotFound",
    "RegistryFrozenError",
    "Result",
    "SelectOption",
    "SolveMode",
    "format_result",
    "load_definition",
]
