"""
Runtime settings and logging setup.

Settings are read once from the environment and never change afterwards.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping

from safetell.errors import ConfigurationError

DEFAULT_TIMEOUT_MS = 30_000

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration consumed by the executor."""

    default_timeout_ms: int = DEFAULT_TIMEOUT_MS
    enable_validation: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """
        Build settings from environment variables.

        Reads SAFETELL_TIMEOUT_MS, SAFETELL_ENABLE_VALIDATION and
        SAFETELL_LOG_LEVEL (falling back to LOG_LEVEL).

        Raises:
            ConfigurationError: If a variable holds an unusable value.
        """
        env = os.environ if env is None else env

        timeout_raw = env.get("SAFETELL_TIMEOUT_MS")
        timeout_ms = DEFAULT_TIMEOUT_MS
        if timeout_raw:
            try:
                timeout_ms = int(timeout_raw)
            except ValueError:
                raise ConfigurationError(
                    f"SAFETELL_TIMEOUT_MS must be an integer, got {timeout_raw!r}"
                ) from None
            if timeout_ms <= 0:
                raise ConfigurationError(f"SAFETELL_TIMEOUT_MS must be positive, got {timeout_ms}")

        validation_raw = env.get("SAFETELL_ENABLE_VALIDATION", "true").strip().lower()
        if validation_raw in _TRUE:
            enable_validation = True
        elif validation_raw in _FALSE:
            enable_validation = False
        else:
            raise ConfigurationError(
                f"SAFETELL_ENABLE_VALIDATION must be a boolean, got {validation_raw!r}"
            )

        level = (env.get("SAFETELL_LOG_LEVEL") or env.get("LOG_LEVEL") or "INFO").upper()
        if level == "WARN":
            level = "WARNING"
        if level not in _LEVELS:
            raise ConfigurationError(f"Unknown log level: {level!r}")

        return cls(
            default_timeout_ms=timeout_ms,
            enable_validation=enable_validation,
            log_level=level,
        )


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Attach a stderr handler to the ``safetell`` logger.

    Stdout is left untouched so stdio-based tool hosts keep a clean channel.
    Calling this more than once replaces the previous handler.
    """
    logger = logging.getLogger("safetell")
    for handler in list(logger.handlers):
        if getattr(handler, "_safetell", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)-7s %(name)s: %(message)s")
    )
    handler._safetell = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
