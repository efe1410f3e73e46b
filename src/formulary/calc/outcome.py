"""Evaluation outcomes and the calculation error taxonomy.

Every failure that crosses the engine boundary is carried as data
(`EvaluationOutcome.error`) rather than raised.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator

from formulary.calc.models import Result


class CalcErrorKind(StrEnum):
    """Kinds of calculation failure."""

    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    COMPUTATION_DEGENERATE = "computation_degenerate"
    EXTERNAL_UNAVAILABLE = "external_unavailable"


class InvalidInputError(ValueError):
    """Raised by a formula or the engine when an input cannot be used.

    Converted to CalcErrorKind.INVALID_INPUT at the engine boundary.
    """

    def __init__(self, input_name: str | None, message: str) -> None:
        self.input_name = input_name
        self.message = message
        super().__init__(message)


class DegenerateComputationError(ArithmeticError):
    """Raised by a formula whose inputs make the computation undefined.

    Converted to CalcErrorKind.COMPUTATION_DEGENERATE at the engine boundary.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CalcError(BaseModel):
    """A calculation failure carried as data."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: CalcErrorKind
    message: str
    input_name: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> CalcError:
        """Classify an exception raised while computing a result.

        ArithmeticError (division by zero, overflow, domain errors signalled
        as DegenerateComputationError) maps to COMPUTATION_DEGENERATE. Value,
        type and key errors map to INVALID_INPUT. Anything else is treated
        as a degenerate computation.
        """
        if isinstance(exc, InvalidInputError):
            return cls(
                kind=CalcErrorKind.INVALID_INPUT, message=exc.message, input_name=exc.input_name
            )
        if isinstance(exc, ArithmeticError):
            return cls(
                kind=CalcErrorKind.COMPUTATION_DEGENERATE,
                message=str(exc) or type(exc).__name__,
            )
        if isinstance(exc, KeyError):
            name = str(exc.args[0]) if exc.args else None
            return cls(
                kind=CalcErrorKind.INVALID_INPUT, message=f"Missing input: {name}", input_name=name
            )
        if isinstance(exc, (ValueError, TypeError)):
            return cls(kind=CalcErrorKind.INVALID_INPUT, message=str(exc) or type(exc).__name__)
        return cls(
            kind=CalcErrorKind.COMPUTATION_DEGENERATE,
            message=f"{type(exc).__name__}: {exc}",
        )


class EvaluationOutcome(BaseModel):
    """Either a Result or a CalcError, never both."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    result: Result | None = None
    error: CalcError | None = None

    @model_validator(mode="after")
    def validate_exclusive(self) -> EvaluationOutcome:
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of result or error must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def success(cls, result: Result) -> EvaluationOutcome:
        return cls(result=result)

    @classmethod
    def failure(
        cls, kind: CalcErrorKind, message: str, input_name: str | None = None
    ) -> EvaluationOutcome:
        return cls(error=CalcError(kind=kind, message=message, input_name=input_name))
