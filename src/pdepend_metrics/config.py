"""Configuration loading and management for pdepend-metrics.

The analyzer core only ever sees an already-validated ``AnalyzerConfig``.
Configuration sources are merged in priority order:
    1. Defaults (defined in AnalyzerConfig)
    2. Global config (~/.pdepend-metrics.toml)
    3. Project config (./pdepend-metrics.toml)
    4. Explicit config file
    5. Environment variables (PDEPEND_METRICS_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(suffixes=["*.php", ".inc"])
    >>> config.suffixes
    ('php', 'inc')
"""

from __future__ import annotations

import os
import re
import shlex
import shutil
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

ENV_PREFIX = "PDEPEND_METRICS_"

# Location used when no command is configured and pdepend is not on PATH.
BUNDLED_COMMAND = "vendor/bin/pdepend"

DEFAULT_TIMEOUT_SECONDS = 3600.0
DEFAULT_IDLE_TIMEOUT_SECONDS = 300.0

_SUFFIX_RE = re.compile(r"\.([^.]+)$")


class ConfigFieldError(ValueError):
    """A single AnalyzerConfig field failed validation."""

    def __init__(self, field_name: str, reason: str):
        super().__init__(f"{field_name} {reason}")
        self.field_name = field_name
        self.reason = reason


def normalize_suffixes(suffixes: Iterable[str]) -> tuple[str, ...]:
    """Reduce ``*.php``/``.php``/``php`` to ``php``, dropping empties and duplicates.

    Order of first occurrence is preserved.
    """
    result: list[str] = []
    for raw in suffixes:
        suffix = raw.strip()
        match = _SUFFIX_RE.search(suffix)
        if match:
            suffix = match.group(1)
        if suffix and suffix not in result:
            result.append(suffix)
    return tuple(result)


def default_command() -> str:
    """The executable used when ``command`` is not configured."""
    return shutil.which("pdepend") or BUNDLED_COMMAND


@dataclass(frozen=True)
class AnalyzerConfig:
    """Configuration for one PDepend run.

    Attributes:
        command: Executable (plus optional leading arguments) to run.
            None means :func:`default_command`.
        configuration_file: Path to a PDepend configuration file, passed through.
        suffixes: File extensions to analyze, normalized without ``*.``/``.``.
        excluded_dirs: Deprecated directory names passed as ``--ignore``.
        timeout_seconds: Overall wall-clock bound for the process.
        idle_timeout_seconds: Maximum silence between two output chunks.
        use_pty: Run the tool on a pseudo-terminal so its output is line-buffered.
    """

    command: Optional[str] = None
    configuration_file: Optional[str] = None
    suffixes: tuple[str, ...] = ("php",)
    excluded_dirs: tuple[str, ...] = field(default_factory=tuple)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    idle_timeout_seconds: float = DEFAULT_IDLE_TIMEOUT_SECONDS
    use_pty: bool = True

    def __post_init__(self) -> None:
        """Check field types, normalize list fields and validate bounds."""
        for name in ("command", "configuration_file"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigFieldError(name, f"expected a string, got {type(value).__name__}")

        for name in ("suffixes", "excluded_dirs"):
            value = getattr(self, name)
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise ConfigFieldError(name, "must be a list of strings")
            if not all(isinstance(item, str) for item in value):
                raise ConfigFieldError(name, "must contain only strings")

        for name in ("timeout_seconds", "idle_timeout_seconds"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigFieldError(name, f"expected a number, got {type(value).__name__}")
            if value <= 0:
                raise ConfigFieldError(name, "must be positive")

        if not isinstance(self.use_pty, bool):
            raise ConfigFieldError("use_pty", f"expected true/false, got {self.use_pty!r}")

        object.__setattr__(self, "suffixes", normalize_suffixes(self.suffixes))
        object.__setattr__(
            self,
            "excluded_dirs",
            tuple(d.strip() for d in self.excluded_dirs if d and d.strip()),
        )

        if self.command is not None:
            try:
                argv = shlex.split(self.command)
            except ValueError as e:
                raise ConfigFieldError("command", str(e)) from e
            if not argv:
                raise ConfigFieldError("command", "must not be empty")

    @property
    def executable(self) -> list[str]:
        """The command split into argv form."""
        return shlex.split(self.command or default_command())


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalyzerConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated AnalyzerConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".pdepend-metrics.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "pdepend-metrics.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    for key in ("suffixes", "excluded_dirs"):
        if key in merged:
            value = merged[key]
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise InvalidConfigError(key, value, "expected a list of strings")
            merged[key] = tuple(str(v) for v in value)

    unknown = sorted(set(merged) - set(AnalyzerConfig.__dataclass_fields__))
    if unknown:
        raise ConfigurationError(
            "Unknown configuration keys", details={"keys": ", ".join(unknown)}
        )

    try:
        return AnalyzerConfig(**merged)
    except ConfigFieldError as e:
        raise InvalidConfigError(e.field_name, merged.get(e.field_name), e.reason) from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from PDEPEND_METRICS_* environment variables.

    Tuple fields (suffixes, excluded_dirs) are comma-separated.
    """
    type_hints = get_type_hints(AnalyzerConfig)

    result: dict[str, Any] = {}

    for field_name in AnalyzerConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from e

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        type_hint = next(t for t in args if t is not type(None))

    if getattr(type_hint, "__origin__", None) is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is float:
        return float(value)

    return value


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file; a ``[pdepend]`` table is used when present."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e

    section = data.get("pdepend")
    if isinstance(section, dict):
        return section
    return data
