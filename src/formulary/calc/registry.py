"""Calculator and formula registries.

FormulaRegistry maps formula ids ("<calculator-id>.<target>") to pure
functions. CalculatorRegistry pairs calculator definitions with the formulas
their solve modes reference and answers lookups by id or category.

Both are populated once at startup; a frozen CalculatorRegistry rejects
further registration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from formulary.calc.models import CalculatorDefinition, Domain, Result

logger = logging.getLogger(__name__)

FormulaFn = Callable[[Mapping[str, Any]], Result]


class DuplicateCalculatorError(ValueError):
    """Raised when a calculator id is registered twice."""

    def __init__(self, calculator_id: str) -> None:
        self.calculator_id = calculator_id
        super().__init__(f"Calculator '{calculator_id}' is already registered")


class MissingFormulaError(LookupError):
    """Raised when a solve mode references a formula that is not provided."""

    def __init__(self, calculator_id: str, formula_id: str) -> None:
        self.calculator_id = calculator_id
        self.formula_id = formula_id
        super().__init__(
            f"Calculator '{calculator_id}' references unknown formula '{formula_id}'"
        )


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a frozen registry."""


@dataclass(frozen=True)
class NotFound:
    """Sentinel returned by a lookup for an unknown calculator id.

    Falsy, so `if not registry.get(...)` reads naturally.
    """

    calculator_id: str

    def __bool__(self) -> bool:
        return False


class FormulaRegistry:
    """Registry of formula functions keyed by formula id.

    Formulas are immutable once registered.
    """

    def __init__(self) -> None:
        self._formulas: dict[str, FormulaFn] = {}

    def __contains__(self, formula_id: object) -> bool:
        return formula_id in self._formulas

    def __len__(self) -> int:
        return len(self._formulas)

    def register(self, formula_id: str, fn: FormulaFn) -> None:
        """Register a formula function.

        Args:
            formula_id: Unique id, conventionally "<calculator-id>.<target>".
            fn: Pure function from normalized inputs to a Result.

        Raises:
            ValueError: If a formula with this id is already registered.
        """
        if formula_id in self._formulas:
            raise ValueError(f"Formula '{formula_id}' already registered")
        self._formulas[formula_id] = fn

    def formula(self, formula_id: str) -> Callable[[FormulaFn], FormulaFn]:
        """Decorator form of register()."""

        def decorator(fn: FormulaFn) -> FormulaFn:
            self.register(formula_id, fn)
            return fn

        return decorator

    def get(self, formula_id: str) -> FormulaFn | None:
        return self._formulas.get(formula_id)


class CalculatorRegistry:
    """Static catalog of calculator definitions and their formulas.

    Invariants:
    - calculator ids are unique
    - every solve mode's formula_id resolves to a registered formula
    - listing order is registration order
    """

    def __init__(self) -> None:
        self._definitions: dict[str, CalculatorDefinition] = {}
        self._formulas = FormulaRegistry()
        self._frozen = False

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, calculator_id: object) -> bool:
        return calculator_id in self._definitions

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> CalculatorRegistry:
        """Reject any further registration."""
        self._frozen = True
        return self

    def register(
        self,
        definition: CalculatorDefinition,
        formulas: FormulaRegistry | Mapping[str, FormulaFn],
    ) -> None:
        """Register one calculator and the formulas its solve modes reference.

        Args:
            definition: The calculator definition.
            formulas: Formula source; only ids referenced by the definition's
                solve modes are taken from it.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
            DuplicateCalculatorError: If the id is already registered.
            MissingFormulaError: If a referenced formula is not available.
        """
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register '{definition.id}': registry is frozen")
        if definition.id in self._definitions:
            raise DuplicateCalculatorError(definition.id)

        resolved: dict[str, FormulaFn] = {}
        for mode in definition.modes():
            fn = formulas.get(mode.formula_id) or self._formulas.get(mode.formula_id)
            if fn is None:
                raise MissingFormulaError(definition.id, mode.formula_id)
            resolved[mode.formula_id] = fn

        for formula_id, fn in resolved.items():
            if formula_id not in self._formulas:
                self._formulas.register(formula_id, fn)
        self._definitions[definition.id] = definition
        logger.debug("Registered calculator %s (%d modes)", definition.id, len(resolved))

    def register_catalog(
        self,
        definitions: Iterable[CalculatorDefinition],
        formulas: FormulaRegistry | Mapping[str, FormulaFn],
    ) -> None:
        """Register several calculators sharing one formula source."""
        for definition in definitions:
            self.register(definition, formulas)

    def get(self, calculator_id: str) -> CalculatorDefinition | NotFound:
        """Look up a calculator by id.

        Returns:
            The definition, or a NotFound sentinel for unknown ids.
        """
        definition = self._definitions.get(calculator_id)
        if definition is None:
            return NotFound(calculator_id)
        return definition

    def resolve_formula(self, formula_id: str) -> FormulaFn | None:
        return self._formulas.get(formula_id)

    def list_ids(self) -> list[str]:
        return list(self._definitions)

    def definitions(self, domain: Domain | str | None = None) -> list[CalculatorDefinition]:
        """List definitions in registration order, optionally for one domain."""
        if domain is None:
            return list(self._definitions.values())
        wanted = Domain(domain)
        return [d for d in self._definitions.values() if d.domain == wanted]

    def by_category(
        self, domain: Domain | str | None = None
    ) -> dict[str, list[CalculatorDefinition]]:
        """Group definitions by category, preserving first-seen category order."""
        grouped: dict[str, list[CalculatorDefinition]] = {}
        for definition in self.definitions(domain):
            grouped.setdefault(definition.category, []).append(definition)
        return grouped
