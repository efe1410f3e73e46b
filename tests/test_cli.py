"""Tests for the formulary CLI.

Tests cover:
1. list / show over the default catalog
2. evaluate with defaults, --set, --unit and failure outcomes (exit 1)
3. convert over the everyday and science unit tables
4. rates subcommands against a mocked rate API
5. usage and configuration errors (exit 2)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any

import httpx
import pytest

from formulary.cli import main
from formulary.config import ENV_RATE_MAX_RETRIES, FormularyConfig
from formulary.rates import FrankfurterClient, RateCache, RateService


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """main() configures logging; put the root logger back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, dict[str, Any]]:
    exit_code = main(list(argv))
    output = json.loads(capsys.readouterr().out)
    return exit_code, output


class TestCliCatalog:
    """Tests for list and show."""

    def test_list_all(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "list")

        assert exit_code == 0
        assert output["domain"] is None
        assert output["count"] == sum(len(items) for items in output["categories"].values())
        ids = {item["id"] for items in output["categories"].values() for item in items}
        assert {"molarity", "loan-payment", "bmi", "temperature-converter"} <= ids

    def test_list_domain(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "list", "--domain", "health")

        assert exit_code == 0
        domains = {item["domain"] for items in output["categories"].values() for item in items}
        assert domains == {"health"}

    def test_show(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "show", "molarity")

        assert exit_code == 0
        assert output["id"] == "molarity"
        assert output["title"] == "Molarity Calculator"

    def test_show_unknown(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "show", "flux-capacitor")

        assert exit_code == 1
        assert output["error"]["kind"] == "not_found"


class TestCliEvaluate:
    """Tests for the evaluate command."""

    def test_defaults(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Inputs not given on the command line use the mode defaults."""
        exit_code, output = _run(capsys, "evaluate", "molarity")

        assert exit_code == 0
        assert output["error"] is None
        assert output["result"]["value"] == pytest.approx(0.5)
        assert output["result"]["unit"] == "M"

    def test_set_and_unit(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Values given in another unit are normalized first."""
        exit_code, output = _run(
            capsys, "evaluate", "molarity", "--set", "n=1", "--set", "v=500", "--unit", "v=mL"
        )

        assert exit_code == 0
        assert output["result"]["value"] == pytest.approx(2.0)

    def test_second_mode(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(
            capsys, "evaluate", "molarity", "--mode", "1", "--set", "M=2", "--set", "v=0.25"
        )

        assert exit_code == 0
        assert output["result"]["value"] == pytest.approx(0.5)
        assert output["result"]["unit"] == "mol"

    def test_invalid_value(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "evaluate", "molarity", "--set", "n=lots")

        assert exit_code == 1
        assert output["result"] is None
        assert output["error"]["kind"] == "invalid_input"
        assert output["error"]["input_name"] == "n"

    def test_unknown_input_name(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A --set for an input the mode lacks is rejected instead of ignored."""
        exit_code, output = _run(capsys, "evaluate", "molarity", "--set", "zz=1")

        assert exit_code == 1
        assert output["result"] is None
        assert output["error"]["kind"] == "invalid_input"
        assert output["error"]["input_name"] == "zz"

    def test_unit_for_other_mode_input(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Units are checked against the selected mode, not the whole calculator."""
        exit_code, output = _run(capsys, "evaluate", "molarity", "--unit", "M=M")

        assert exit_code == 1
        assert output["error"]["kind"] == "invalid_input"
        assert output["error"]["input_name"] == "M"

    def test_degenerate(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "evaluate", "molarity", "--set", "v=0")

        assert exit_code == 1
        assert output["error"]["kind"] == "computation_degenerate"

    def test_unknown_calculator(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "evaluate", "flux-capacitor")

        assert exit_code == 1
        assert output["error"]["kind"] == "not_found"

    def test_mode_out_of_range(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "evaluate", "molarity", "--mode", "7")

        assert exit_code == 1
        assert output["error"]["kind"] == "invalid_input"

    def test_malformed_set(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--set without NAME=VALUE is a usage error."""
        assert main(["evaluate", "molarity", "--set", "n"]) == 2
        assert "NAME=VALUE" in capsys.readouterr().err


class TestCliConvert:
    """Tests for the convert command."""

    def test_everyday(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "convert", "1", "mi", "ft")

        assert exit_code == 0
        assert output["table"] == "everyday"
        assert output["converted"] == pytest.approx(5280.0, rel=1e-4)

    def test_science_temperature(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "convert", "0", "°C", "K", "--table", "science")

        assert exit_code == 0
        assert output["converted"] == pytest.approx(273.15)

    def test_incompatible_units(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(capsys, "convert", "1", "kg", "m")

        assert exit_code == 1
        assert output["error"]["kind"] == "invalid_input"


LATEST_EUR = {
    "amount": 1.0,
    "base": "EUR",
    "date": "2024-05-03",
    "rates": {"USD": 1.0765, "GBP": 0.8579},
}


def _patch_rate_service(monkeypatch: pytest.MonkeyPatch, handler: Any) -> None:
    """Route RateService.from_config through a MockTransport."""

    def from_config(config: FormularyConfig) -> RateService:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = FrankfurterClient(
            base_url=config.rate_base_url, max_retries=0, http_client=http_client
        )
        return RateService(client, RateCache(ttl_seconds=config.rate_cache_ttl_seconds))

    monkeypatch.setattr(RateService, "from_config", staticmethod(from_config))


class TestCliRates:
    """Tests for the rates command."""

    def test_latest(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=LATEST_EUR)

        _patch_rate_service(monkeypatch, handler)

        exit_code, output = _run(capsys, "rates", "latest", "eur")

        assert exit_code == 0
        assert output["base"] == "EUR"
        assert output["date"] == "2024-05-03"
        assert output["rates"]["USD"] == pytest.approx(1.0765)
        assert seen[0].url.params["from"] == "EUR"

    def test_historical(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={**LATEST_EUR, "date": "2020-01-02"})

        _patch_rate_service(monkeypatch, handler)

        exit_code, output = _run(capsys, "rates", "historical", "2020-01-02", "EUR", "USD")

        assert exit_code == 0
        assert output["date"] == "2020-01-02"
        assert seen == ["/2020-01-02"]

    def test_unavailable(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An unreachable rate API is reported as external_unavailable."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        _patch_rate_service(monkeypatch, handler)

        exit_code, output = _run(capsys, "rates", "latest", "EUR")

        assert exit_code == 1
        assert output["error"]["kind"] == "external_unavailable"

    def test_bad_date(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["rates", "trend", "2024-13-01", "2024-12-31", "EUR", "USD"]) == 2
        assert "YYYY-MM-DD" in capsys.readouterr().err


class TestCliUsage:
    """Tests for usage and configuration errors."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "usage: formulary" in capsys.readouterr().out

    def test_unknown_command(self) -> None:
        assert main(["frobnicate"]) == 2

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--version"]) == 0
        assert "formulary 0.1.0" in capsys.readouterr().out

    def test_invalid_config(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_RATE_MAX_RETRIES, "-1")

        assert main(["list"]) == 2
        assert ENV_RATE_MAX_RETRIES in capsys.readouterr().err

    def test_invalid_log_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--log-level", "chatty", "list"]) == 2
        assert "configuration error" in capsys.readouterr().err
