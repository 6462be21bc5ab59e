"""
Settings for pdfbind.

Resolved with priority: environment variables > JSON config file >
built-in defaults. The config file defaults to ~/.pdfbind/config.json
and can be relocated with PDFBIND_CONFIG. A missing file is normal; a
corrupt file or an invalid value is logged and ignored.
"""

from __future__ import annotations

__all__ = [
    "Settings",
    "config_file_path",
    "load_raw_config",
    "load_settings",
]

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from .constants import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_STRICT_LIFETIMES,
    DEFAULT_WARN_SIZE_MB,
    ENV_CONFIG,
    ENV_STRICT_LIFETIMES,
    ENV_WARN_SIZE_MB,
)
from .errors import ConfigError

_logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class Settings:
    """Library-wide behaviour switches.

    Args:
        strict_lifetimes: Raise ``ClosedHandleError`` when a wrapper is used
            after its document or page was closed. Disabling removes the
            check, not the hazard.
        warn_size_mb: ``load_pdf_from_file`` logs a warning above this size.
    """

    strict_lifetimes: bool = DEFAULT_STRICT_LIFETIMES
    warn_size_mb: int = DEFAULT_WARN_SIZE_MB

    def __post_init__(self) -> None:
        if not isinstance(self.strict_lifetimes, bool):
            raise ConfigError(
                f"strict_lifetimes must be a boolean, got {self.strict_lifetimes!r}"
            )
        if isinstance(self.warn_size_mb, bool) or not isinstance(self.warn_size_mb, int):
            raise ConfigError(f"warn_size_mb must be an integer, got {self.warn_size_mb!r}")
        if self.warn_size_mb < 0:
            raise ConfigError(f"warn_size_mb must be non-negative, got {self.warn_size_mb}")


def config_file_path() -> Path:
    """Return the config file location (PDFBIND_CONFIG or the default)."""
    override = os.environ.get(ENV_CONFIG, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / DEFAULT_CONFIG_DIR / "config.json"


def load_raw_config(path: Path | None = None) -> dict[str, object]:
    """Load the raw config dict from disk, or {} if missing or unreadable."""
    config_path = path if path is not None else config_file_path()
    try:
        data: Any = json.loads(config_path.read_text(encoding="utf-8"))
        if isinstance(data, dict):
            return cast("dict[str, object]", data)
        _logger.warning("Config file %s is not a JSON object, ignoring", config_path)
    except FileNotFoundError:
        pass
    except json.JSONDecodeError as e:
        _logger.warning("Config file corrupted, ignoring: %s", e)
    except OSError as e:
        _logger.warning("Cannot read config file: %s", e)
    return {}


def _parse_bool(raw: str) -> bool | None:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def _parse_size(raw: str) -> int | None:
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value >= 0 else None


def load_settings(path: Path | None = None) -> Settings:
    """Resolve ``Settings`` from env vars, the config file and defaults."""
    data = load_raw_config(path)

    strict = DEFAULT_STRICT_LIFETIMES
    file_strict = data.get("strict_lifetimes")
    if isinstance(file_strict, bool):
        strict = file_strict
    elif file_strict is not None:
        _logger.warning("Invalid strict_lifetimes in config file: %r", file_strict)

    warn_size = DEFAULT_WARN_SIZE_MB
    file_size = data.get("warn_size_mb")
    if isinstance(file_size, int) and not isinstance(file_size, bool) and file_size >= 0:
        warn_size = file_size
    elif file_size is not None:
        _logger.warning("Invalid warn_size_mb in config file: %r", file_size)

    env_strict = os.environ.get(ENV_STRICT_LIFETIMES, "").strip()
    if env_strict:
        parsed_strict = _parse_bool(env_strict)
        if parsed_strict is None:
            _logger.warning("Invalid %s value %r, ignoring", ENV_STRICT_LIFETIMES, env_strict)
        else:
            strict = parsed_strict

    env_size = os.environ.get(ENV_WARN_SIZE_MB, "").strip()
    if env_size:
        parsed_size = _parse_size(env_size)
        if parsed_size is None:
            _logger.warning("Invalid %s value %r, ignoring", ENV_WARN_SIZE_MB, env_size)
        else:
            warn_size = parsed_size

    return Settings(strict_lifetimes=strict, warn_size_mb=warn_size)
