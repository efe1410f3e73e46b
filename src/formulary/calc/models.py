"""Calculator definition and result models.

A calculator is either multi-mode (several SolveModes, each solving for a
different target variable) or flat (one fixed input list). Both shapes expose
the same `Evaluable` surface so the engine can drive them uniformly.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

CALCULATOR_ID_PATTERN = r"^[a-z0-9][a-z0-9-]*$"
INPUT_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


class Domain(StrEnum):
    """Top-level catalog domains."""

    PHYSICS = "physics"
    CHEMISTRY = "chemistry"
    GEOGRAPHY = "geography"
    FINANCE = "finance"
    EVERYDAY = "everyday"
    HEALTH = "health"
    PROBABILITY = "probability"
    TECH = "tech"
    MATH = "math"


class InputKind(StrEnum):
    """How an input value is entered and parsed."""

    NUMBER = "number"
    TEXT = "text"
    SELECT = "select"


class DiagramKind(StrEnum):
    """Closed set of diagram payload kinds a renderer may receive."""

    PROJECTILE = "projectile"
    CIRCUIT = "circuit"
    RAY = "ray"
    CHART = "chart"
    ORBIT = "orbit"
    BAR = "bar"
    WAVE = "wave"
    FORCES = "forces"
    LENS = "lens"
    GAS = "gas"
    RESISTOR = "resistor"
    STAR = "star"
    INTERFERENCE = "interference"
    DECAY = "decay"
    TRANSFORMER = "transformer"
    LC_CIRCUIT = "lc-circuit"
    VOLTAGE_DIVIDER = "voltage-divider"
    BUOYANCY = "buoyancy"
    PENDULUM = "pendulum"
    TORQUE = "torque"
    DOPPLER = "doppler"
    FLOW = "flow"
    BEAKER = "beaker"
    TITRATION = "titration"
    PH_SCALE = "ph-scale"
    ENERGY = "energy"
    CELL = "cell"
    BEER_LAMBERT = "beer-lambert"
    ENERGY_PROFILE = "energy-profile"
    GLOBE = "globe"
    COMPASS = "compass"
    SUN_PATH = "sun-path"
    ELEVATION = "elevation"
    TRIANGLE = "triangle"
    WIND = "wind"
    LEVELING = "leveling"
    THERMOMETER = "thermometer"
    FILL = "fill"
    GAUGE = "gauge"
    TEXT_BOX = "text-box"
    DONUT = "donut"
    LINE = "line"
    BMI_SCALE = "bmi-scale"
    DISTRIBUTION = "distribution"
    TIMELINE = "timeline"
    BINARY = "binary"
    CALENDAR = "calendar"
    COLOR_PREVIEW = "color-preview"
    CONTRAST = "contrast"
    PALETTE = "palette"
    GRADIENT = "gradient"
    JSON_VIEWER = "json-viewer"
    REGEX_MATCH = "regex-match"
    CHMOD = "chmod"
    UNIT_CIRCLE = "unit-circle"


class SelectOption(BaseModel):
    """One choice of a select input."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str = Field(..., min_length=1)
    value: str


class InputSpec(BaseModel):
    """A single named input of a solve mode.

    min/max/step are presentation hints only; the engine does not clamp.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., pattern=INPUT_NAME_PATTERN)
    label: str = Field(..., min_length=1)
    unit: str = Field(default="", description="Canonical unit the formula expects")
    kind: InputKind = InputKind.NUMBER
    default_value: float | str = 0.0
    min: float | None = None
    max: float | None = None
    step: float | None = None
    options: tuple[SelectOption, ...] = ()

    @field_validator("default_value", mode="before")
    @classmethod
    def coerce_int_default(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("default_value cannot be a boolean")
        if isinstance(v, int):
            return float(v)
        return v

    @model_validator(mode="after")
    def validate_kind(self) -> InputSpec:
        if self.kind == InputKind.NUMBER and not isinstance(self.default_value, float):
            raise ValueError(f"Numeric input '{self.name}' needs a numeric default")
        if self.kind == InputKind.SELECT:
            if not self.options:
                raise ValueError(f"Select input '{self.name}' has no options")
            if str(self.default_value) not in self.option_values:
                raise ValueError(
                    f"Select input '{self.name}' default {self.default_value!r} is not an option"
                )
        return self

    @property
    def option_values(self) -> tuple[str, ...]:
        return tuple(option.value for option in self.options)


class SolveMode(BaseModel):
    """One way of solving a calculator: a target variable and its inputs.

    `formula_id` names the pure function in the calculator registry that
    computes the target, conventionally "<calculator-id>.<target>".
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    target: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    inputs: tuple[InputSpec, ...] = ()
    formula_id: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_unique_inputs(self) -> SolveMode:
        names = [spec.name for spec in self.inputs]
        if len(names) != len(set(names)):
            raise ValueError(f"Solve mode '{self.target}' declares an input twice")
        return self

    def input(self, name: str) -> InputSpec | None:
        for spec in self.inputs:
            if spec.name == name:
                return spec
        return None


class _CalculatorBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., pattern=CALCULATOR_ID_PATTERN)
    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, description="Sub-category within the domain")
    domain: Domain
    description: str = ""
    icon: str = Field(default="", description="Opaque icon name for renderers")

    def modes(self) -> tuple[SolveMode, ...]:
        raise NotImplementedError

    def mode(self, index: int) -> SolveMode:
        """Return the solve mode at `index`.

        Raises:
            IndexError: If the index is out of range (negative indexes included).
        """
        modes = self.modes()
        if index < 0 or index >= len(modes):
            raise IndexError(f"Calculator '{self.id}' has no solve mode {index}")
        return modes[index]

    def list_inputs(self, mode_index: int = 0) -> tuple[InputSpec, ...]:
        return self.mode(mode_index).inputs


class MultiModeCalculator(_CalculatorBase):
    """Calculator with one or more solve modes (e.g. P, V or T of a gas law)."""

    shape: Literal["multi_mode"] = "multi_mode"
    solve_modes: tuple[SolveMode, ...] = Field(..., min_length=1)

    def modes(self) -> tuple[SolveMode, ...]:
        return self.solve_modes


class FlatCalculator(_CalculatorBase):
    """Calculator with a single fixed input list and one formula."""

    shape: Literal["flat"] = "flat"
    inputs: tuple[InputSpec, ...] = ()
    formula_id: str = Field(..., min_length=1)

    def modes(self) -> tuple[SolveMode, ...]:
        return (
            SolveMode(
                target=self.id,
                label=self.title,
                inputs=self.inputs,
                formula_id=self.formula_id,
            ),
        )


CalculatorDefinition = Annotated[
    MultiModeCalculator | FlatCalculator, Field(discriminator="shape")
]

_DEFINITION_ADAPTER: TypeAdapter[MultiModeCalculator | FlatCalculator] = TypeAdapter(
    CalculatorDefinition
)


def load_definition(data: Any) -> MultiModeCalculator | FlatCalculator:
    """Validate an externally authored calculator definition (dict or JSON-like).

    Raises:
        pydantic.ValidationError: If the payload is not a valid definition.
    """
    return _DEFINITION_ADAPTER.validate_python(data)


@runtime_checkable
class Evaluable(Protocol):
    """Uniform surface the engine needs from any calculator shape."""

    id: str
    title: str

    def modes(self) -> tuple[SolveMode, ...]: ...

    def mode(self, index: int) -> SolveMode: ...

    def list_inputs(self, mode_index: int = 0) -> tuple[InputSpec, ...]: ...


class Diagram(BaseModel):
    """Structured diagram payload; `data` is opaque to the engine."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: DiagramKind
    data: Any = None


class Result(BaseModel):
    """Output of one evaluation.

    `value` is a number or, for classification and formatted outputs, text.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: float | str
    unit: str = ""
    steps: tuple[str, ...] = ()
    diagram: Diagram | None = None

    @field_validator("value", mode="before")
    @classmethod
    def coerce_numeric(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("Result value cannot be a boolean")
        if isinstance(v, int):
            return float(v)
        return v

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, float)


class HistoryEntry(BaseModel):
    """A saved result in a session's history."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    result_text: str
    inputs_text: tuple[str, ...] = ()
    saved_at: datetime
