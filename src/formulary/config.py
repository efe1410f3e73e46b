"""Environment-driven configuration for Formulary.

Only the rate subsystem, logging and tracing are configurable; calculator
catalogs are static. Tracing reads its own FORMULARY_OTEL_* variables in
formulary.observability.tracing.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Final

ENV_RATE_CACHE_TTL_SECONDS: Final[str] = "FORMULARY_RATE_CACHE_TTL_SECONDS"
ENV_RATE_BASE_URL: Final[str] = "FORMULARY_RATE_BASE_URL"
ENV_RATE_TIMEOUT_SECONDS: Final[str] = "FORMULARY_RATE_TIMEOUT_SECONDS"
ENV_RATE_MAX_RETRIES: Final[str] = "FORMULARY_RATE_MAX_RETRIES"
ENV_LOG_LEVEL: Final[str] = "FORMULARY_LOG_LEVEL"

DEFAULT_RATE_CACHE_TTL_SECONDS: Final[int] = 600
DEFAULT_RATE_BASE_URL: Final[str] = "https://api.frankfurter.app"
DEFAULT_RATE_TIMEOUT_SECONDS: Final[float] = 10.0
DEFAULT_RATE_MAX_RETRIES: Final[int] = 1
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset(
    {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
)


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""


@dataclass(frozen=True)
class FormularyConfig:
    """Process configuration (immutable).

    Attributes:
        rate_cache_ttl_seconds: How long latest-rate lookups stay cached.
        rate_base_url: Base URL of the exchange-rate API.
        rate_timeout_seconds: Per-request HTTP timeout.
        rate_max_retries: Extra attempts after a failed rate request.
        log_level: Logging level name used by the CLI.
    """

    rate_cache_ttl_seconds: int = DEFAULT_RATE_CACHE_TTL_SECONDS
    rate_base_url: str = DEFAULT_RATE_BASE_URL
    rate_timeout_seconds: float = DEFAULT_RATE_TIMEOUT_SECONDS
    rate_max_retries: int = DEFAULT_RATE_MAX_RETRIES
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.rate_cache_ttl_seconds <= 0:
            raise ConfigError(
                f"{ENV_RATE_CACHE_TTL_SECONDS} must be a positive integer, "
                f"got {self.rate_cache_ttl_seconds}"
            )
        if not self.rate_base_url.startswith(("http://", "https://")):
            raise ConfigError(
                f"{ENV_RATE_BASE_URL} must be an http(s) URL, got '{self.rate_base_url}'"
            )
        if self.rate_timeout_seconds <= 0:
            raise ConfigError(
                f"{ENV_RATE_TIMEOUT_SECONDS} must be positive, got {self.rate_timeout_seconds}"
            )
        if self.rate_max_retries < 0:
            raise ConfigError(
                f"{ENV_RATE_MAX_RETRIES} must be a non-negative integer, "
                f"got {self.rate_max_retries}"
            )
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigError(
                f"{ENV_LOG_LEVEL} must be one of {sorted(VALID_LOG_LEVELS)}, "
                f"got '{self.log_level}'"
            )


def _raw(env_var: str) -> str | None:
    raw = os.environ.get(env_var)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _parse_positive_int(env_var: str, default: int) -> int:
    """Parse a positive integer from an environment variable.

    Raises:
        ConfigError: If the value is set but not a positive integer.
    """
    raw = _raw(env_var)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{env_var} must be a positive integer, got '{raw}'") from e
    if value <= 0:
        raise ConfigError(f"{env_var} must be a positive integer, got {value}")
    return value


def _parse_non_negative_int(env_var: str, default: int) -> int:
    raw = _raw(env_var)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{env_var} must be a non-negative integer, got '{raw}'") from e
    if value < 0:
        raise ConfigError(f"{env_var} must be a non-negative integer, got {value}")
    return value


def _parse_positive_float(env_var: str, default: float) -> float:
    """Parse a positive number from an environment variable.

    Raises:
        ConfigError: If the value is set but not a positive finite number.
    """
    raw = _raw(env_var)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{env_var} must be a positive number, got '{raw}'") from e
    if not value > 0 or value == float("inf"):
        raise ConfigError(f"{env_var} must be a positive number, got {value}")
    return value


def load_config() -> FormularyConfig:
    """Load configuration from environment variables.

    Environment variables:
        FORMULARY_RATE_CACHE_TTL_SECONDS: Latest-rate cache TTL (default: 600)
        FORMULARY_RATE_BASE_URL: Exchange-rate API (default: https://api.frankfurter.app)
        FORMULARY_RATE_TIMEOUT_SECONDS: HTTP timeout (default: 10)
        FORMULARY_RATE_MAX_RETRIES: Retries after the first attempt (default: 1)
        FORMULARY_LOG_LEVEL: CLI log level (default: WARNING)

    Returns:
        FormularyConfig with validated values.

    Raises:
        ConfigError: If any value is invalid.
    """
    return FormularyConfig(
        rate_cache_ttl_seconds=_parse_positive_int(
            ENV_RATE_CACHE_TTL_SECONDS, DEFAULT_RATE_CACHE_TTL_SECONDS
        ),
        rate_base_url=(_raw(ENV_RATE_BASE_URL) or DEFAULT_RATE_BASE_URL).rstrip("/"),
        rate_timeout_seconds=_parse_positive_float(
            ENV_RATE_TIMEOUT_SECONDS, DEFAULT_RATE_TIMEOUT_SECONDS
        ),
        rate_max_retries=_parse_non_negative_int(ENV_RATE_MAX_RETRIES, DEFAULT_RATE_MAX_RETRIES),
        log_level=(_raw(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level: str | None = None) -> None:
    """Send log records to stderr at the given level (or FORMULARY_LOG_LEVEL).

    Only entry points call this; library modules never install handlers.

    Raises:
        ConfigError: If the level name is not a standard logging level.
    """
    name = (level or _raw(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()
    if name not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"{ENV_LOG_LEVEL} must be one of {sorted(VALID_LOG_LEVELS)}, got '{name}'"
        )
    logging.basicConfig(level=name, format=LOG_FORMAT, stream=sys.stderr, force=True)
