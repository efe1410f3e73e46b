"""Tests for CalculatorSession state and history."""

from __future__ import annotations

import pytest

from formulary.calc import CalcEngine, CalcErrorKind, CalculatorSession, NotFound, Result
from formulary.calc.session import format_result


@pytest.fixture
def session(engine: CalcEngine) -> CalculatorSession:
    """A session on the molarity calculator."""
    opened = CalculatorSession.open("molarity", engine)
    assert isinstance(opened, CalculatorSession)
    return opened


class TestActivation:
    """Tests for opening sessions and switching solve modes."""

    def test_open_evaluates_defaults(self, session: CalculatorSession) -> None:
        """Opening a session evaluates the first mode with default values."""
        assert session.mode_index == 0
        assert session.values == {"n": 0.5, "v": 1.0}
        assert session.result is not None
        assert session.result.value == pytest.approx(0.5)

    def test_open_unknown_calculator(self, engine: CalcEngine) -> None:
        """Opening an unknown id returns NotFound."""
        assert isinstance(CalculatorSession.open("warp-drive", engine), NotFound)

    def test_activate_resets_values_and_units(self, session: CalculatorSession) -> None:
        """Switching modes discards the previous mode's values and units."""
        session.set_unit("v", "mL")
        outcome = session.activate(1)
        assert session.mode.target == "n"
        assert session.values == {"M": 0.5, "v": 1.0}
        assert session.units == {"M": "M", "v": "L"}
        assert outcome.result is not None
        assert outcome.result.unit == "mol"

    def test_activate_out_of_range(self, session: CalculatorSession) -> None:
        """activate raises IndexError for an unknown mode and keeps state."""
        with pytest.raises(IndexError):
            session.activate(7)
        assert session.mode_index == 0

    def test_values_do_not_leak_between_modes(self, session: CalculatorSession) -> None:
        """A value typed in one mode is not carried into the next one."""
        session.set_value("v", 5.0)
        session.activate(1)
        assert session.values["v"] == 1.0
        session.set_value("v", 7.0)
        session.activate(0)
        assert session.values == {"n": 0.5, "v": 1.0}
        assert session.result is not None
        assert session.result.value == pytest.approx(0.5)


class TestInputChanges:
    """Tests for value and unit changes."""

    def test_set_value_reevaluates(self, session: CalculatorSession) -> None:
        """Each value change produces a fresh outcome."""
        outcome = session.set_value("n", "2")
        assert outcome.result is not None
        assert outcome.result.value == pytest.approx(2.0)

    def test_set_unit_reinterprets_raw_value(self, session: CalculatorSession) -> None:
        """Changing the unit keeps the raw number and reinterprets it."""
        outcome = session.set_unit("v", "mL")
        assert outcome.result is not None
        assert outcome.result.value == pytest.approx(500.0)

    def test_invalid_value_keeps_session_usable(self, session: CalculatorSession) -> None:
        """A bad value yields an error outcome and clears the result."""
        outcome = session.set_value("v", "")
        assert outcome.error is not None
        assert outcome.error.kind == CalcErrorKind.INVALID_INPUT
        assert session.result is None
        assert session.set_value("v", 2).ok

    def test_unknown_input_name(self, session: CalculatorSession) -> None:
        """Setting an input the mode does not declare raises KeyError."""
        with pytest.raises(KeyError):
            session.set_value("pressure", 1)
        with pytest.raises(KeyError):
            session.set_unit("pressure", "atm")

    def test_evaluate_merges_values(self, session: CalculatorSession) -> None:
        """evaluate() accepts a batch of values and units."""
        outcome = session.evaluate({"n": 1, "v": 250}, {"v": "mL"})
        assert outcome.result is not None
        assert outcome.result.value == pytest.approx(4.0)


class TestHistory:
    """Tests for saving results."""

    def test_save_prepends_newest_first(self, session: CalculatorSession) -> None:
        """Saved entries are newest first."""
        first = session.save_to_history()
        session.set_value("n", 1)
        second = session.save_to_history()

        history = session.history
        assert [entry.result_text for entry in history] == ["1.00 M", "0.50 M"]
        assert history[0] == second
        assert history[1] == first
        assert history[0].title == "Molarity Calculator (Molarity (M))"
        assert history[0].inputs_text == ("Moles Solute: 1 mol", "Volume Solution: 1.0 L")

    def test_save_without_result(self, session: CalculatorSession) -> None:
        """Nothing is saved while the current outcome is an error."""
        session.set_value("v", 0)
        assert session.save_to_history() is None
        assert session.history == []

    def test_custom_formatter(self, session: CalculatorSession) -> None:
        """A formatter controls how the result is rendered."""
        entry = session.save_to_history(lambda r: f"{r.value:.4f}")
        assert entry is not None
        assert entry.result_text == "0.5000"

    def test_clear_history(self, session: CalculatorSession) -> None:
        """clear_history empties the list."""
        session.save_to_history()
        session.clear_history()
        assert session.history == []


class TestFormatResult:
    """Tests for the default result formatter."""

    def test_numeric(self) -> None:
        assert format_result(Result(value=3.14159, unit="m")) == "3.14 m"

    def test_textual(self) -> None:
        assert format_result(Result(value="Reactant A", unit="is Limiting")) == (
            "Reactant A is Limiting"
        )

    def test_no_unit(self) -> None:
        assert format_result(Result(value=2), precision=0) == "2"
