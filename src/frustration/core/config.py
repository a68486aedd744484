"""
Configuration for the Frustration Analysis.

Provides loading and merging of analysis configuration from YAML files,
programmatic overrides and environment variables.

Search order for the default file:
    1. FRUSTRATION_CONFIG environment variable
    2. config/frustration_defaults.yaml relative to the working directory
    3. config/frustration_defaults.yaml relative to the project root
"""

from __future__ import annotations

import os
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Dict, Any, Optional, Union

import yaml

from frustration.core.errors import ConfigError

logger = logging.getLogger(__name__)

INPUT_FORMATS = ("qubist", "qmasm", "qubo", "bqpjson")


# =============================================================================
# Configuration Dataclasses
# =============================================================================

@dataclass
class InputConfig:
    """Input file dialect."""
    format: str = "qubist"  # qubist | qmasm | qubo | bqpjson


@dataclass
class EnumerationConfig:
    """Elementary-cycle enumeration parameters."""
    all_cycles: bool = False            # Combine basic cycles into elementary cycles
    num_workers: int = 4                # Threads for superset pruning
    max_seconds: Optional[float] = None  # Wall-clock budget (None = unlimited)
    max_cycles: Optional[int] = None     # Cap on candidate cycles (None = unlimited)


@dataclass
class ReportConfig:
    """Report output parameters."""
    deterministic: bool = False         # Sorted edge visiting and sorted report sections
    precision: int = 6                  # Digits after the point in ratios
    summary_path: Optional[str] = None  # Append a JSONL summary record here


@dataclass
class FrustrationConfig:
    """
    Complete analysis configuration aggregating all subsections.
    """
    input: InputConfig = field(default_factory=InputConfig)
    enumeration: EnumerationConfig = field(default_factory=EnumerationConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "input": asdict(self.input),
            "enumeration": asdict(self.enumeration),
            "report": asdict(self.report),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FrustrationConfig:
        """Create from nested dictionary.

        Values are coerced to the field types (e.g. "8" -> 8 for an int
        field); values that cannot be coerced raise ConfigError.
        """
        sections = {name: _coerce_section(name, data.get(name)) for name in _FIELD_TYPES}
        try:
            return cls(
                input=InputConfig(**sections["input"]),
                enumeration=EnumerationConfig(**sections["enumeration"]),
                report=ReportConfig(**sections["report"]),
            )
        except TypeError as e:
            raise ConfigError(f"Unknown configuration key: {e}") from e


# =============================================================================
# Field Types
# =============================================================================

_FIELD_TYPES: Dict[str, Dict[str, type]] = {
    "input": {"format": str},
    "enumeration": {"all_cycles": bool, "num_workers": int, "max_seconds": float, "max_cycles": int},
    "report": {"deterministic": bool, "precision": int, "summary_path": str},
}

_NULLABLE = {
    ("enumeration", "max_seconds"),
    ("enumeration", "max_cycles"),
    ("report", "summary_path"),
}


def _coerce_value(kind: type, value: Any) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return _parse_bool(value)
    elif kind is int:
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            return int(value)
    elif kind is float:
        if isinstance(value, (int, float, str)) and not isinstance(value, bool):
            return float(value)
    elif isinstance(value, str):
        return value
    raise ValueError(f"expected {kind.__name__}")


def _coerce_section(name: str, values: Any) -> Dict[str, Any]:
    """Coerce one config section; unknown keys are passed through."""
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise ConfigError(f"Config section {name!r} must be a mapping", {"value": values})

    types = _FIELD_TYPES[name]
    coerced: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in types or (value is None and (name, key) in _NULLABLE):
            coerced[key] = value
            continue
        try:
            coerced[key] = _coerce_value(types[key], value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value for {name}.{key}: {e}", {"value": value}) from None
    return coerced


# =============================================================================
# Default Configuration Path
# =============================================================================

def get_default_config_path() -> Path:
    """
    Get path to the default configuration file.

    The returned path may not exist.
    """
    env_path = os.environ.get("FRUSTRATION_CONFIG")
    if env_path and Path(env_path).exists():
        return Path(env_path)

    cwd_path = Path("config/frustration_defaults.yaml")
    if cwd_path.exists():
        return cwd_path

    # src/frustration/core/ -> project root
    project_root = Path(__file__).parent.parent.parent.parent
    project_path = project_root / "config" / "frustration_defaults.yaml"
    if project_path.exists():
        return project_path

    return cwd_path


# =============================================================================
# Loading Functions
# =============================================================================

def load_config(
    path: Optional[Union[str, Path]] = None,
    use_defaults_on_error: bool = True
) -> FrustrationConfig:
    """
    Load analysis configuration from a YAML file.

    Args:
        path: Path to YAML config file. Uses default if None.
        use_defaults_on_error: If True, return defaults when the file is
                               missing or unreadable. If False, raise.

    Returns:
        FrustrationConfig with loaded values

    Raises:
        ConfigError: If loading fails and use_defaults_on_error=False

    Example:
        >>> config = load_config()
        >>> config.enumeration.num_workers
        4
    """
    path = get_default_config_path() if path is None else Path(path)

    if not path.exists():
        if use_defaults_on_error:
            logger.debug(f"Config file not found: {path}. Using defaults.")
            return FrustrationConfig()
        raise ConfigError("Config file not found", {"path": str(path)})

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping", {"path": str(path)})
        config = FrustrationConfig.from_dict(data)
    except (yaml.YAMLError, OSError, UnicodeDecodeError, ConfigError) as e:
        if use_defaults_on_error:
            logger.warning(f"Error loading config from {path}: {e}. Using defaults.")
            return FrustrationConfig()
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(f"Error loading config: {e}", {"path": str(path)}) from e

    logger.info(f"Loaded config from {path}")
    return config


# =============================================================================
# Merging Functions
# =============================================================================

_FLAT_KEYS = {
    "format": ("input", "format"),
    "all_cycles": ("enumeration", "all_cycles"),
    "num_workers": ("enumeration", "num_workers"),
    "max_seconds": ("enumeration", "max_seconds"),
    "max_cycles": ("enumeration", "max_cycles"),
    "deterministic": ("report", "deterministic"),
    "precision": ("report", "precision"),
    "summary_path": ("report", "summary_path"),
}


def merge_config(
    base: FrustrationConfig,
    overrides: Dict[str, Any]
) -> FrustrationConfig:
    """
    Merge override values into a base configuration.

    Overrides can be nested (e.g., {"enumeration": {"num_workers": 8}})
    or flat (e.g., {"num_workers": 8}). Flat keys whose value is None are
    ignored so that unset command-line options leave the base untouched.

    Example:
        >>> merged = merge_config(FrustrationConfig(), {"all_cycles": True})
        >>> merged.enumeration.all_cycles
        True
    """
    nested = {k: v for k, v in overrides.items() if k not in _FLAT_KEYS}
    merged = _deep_merge(base.to_dict(), nested)

    for key, (section, subkey) in _FLAT_KEYS.items():
        if overrides.get(key) is not None:
            merged[section][subkey] = overrides[key]

    return FrustrationConfig.from_dict(merged)


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def merge_from_environment(config: FrustrationConfig) -> FrustrationConfig:
    """
    Merge environment variable overrides into configuration.

    Supported environment variables:
    - FRUSTRATION_FORMAT: input.format
    - FRUSTRATION_ALL_CYCLES: enumeration.all_cycles
    - FRUSTRATION_WORKERS: enumeration.num_workers
    - FRUSTRATION_MAX_SECONDS: enumeration.max_seconds
    - FRUSTRATION_MAX_CYCLES: enumeration.max_cycles
    - FRUSTRATION_DETERMINISTIC: report.deterministic
    - FRUSTRATION_PRECISION: report.precision
    """
    overrides: Dict[str, Any] = {}

    env_mappings = {
        "FRUSTRATION_FORMAT": ("input", "format", str),
        "FRUSTRATION_ALL_CYCLES": ("enumeration", "all_cycles", _parse_bool),
        "FRUSTRATION_WORKERS": ("enumeration", "num_workers", int),
        "FRUSTRATION_MAX_SECONDS": ("enumeration", "max_seconds", float),
        "FRUSTRATION_MAX_CYCLES": ("enumeration", "max_cycles", int),
        "FRUSTRATION_DETERMINISTIC": ("report", "deterministic", _parse_bool),
        "FRUSTRATION_PRECISION": ("report", "precision", int),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                overrides.setdefault(section, {})[key] = converter(value)
                logger.debug(f"Applied env override: {env_var}={value}")
            except ValueError as e:
                logger.warning(f"Invalid value for {env_var}: {value}. Error: {e}")

    if overrides:
        return merge_config(config, overrides)
    return config


# =============================================================================
# Validation
# =============================================================================

def validate_config(config: FrustrationConfig) -> list[str]:
    """
    Validate configuration values.

    Returns:
        List of validation error messages. Empty if valid.
    """
    errors: list[str] = []

    if config.input.format not in INPUT_FORMATS:
        errors.append(f"input.format must be one of {', '.join(INPUT_FORMATS)}")

    if config.enumeration.num_workers < 1:
        errors.append("enumeration.num_workers must be positive")
    if config.enumeration.max_seconds is not None and config.enumeration.max_seconds <= 0:
        errors.append("enumeration.max_seconds must be positive")
    if config.enumeration.max_cycles is not None and config.enumeration.max_cycles < 1:
        errors.append("enumeration.max_cycles must be positive")

    if config.report.precision < 0:
        errors.append("report.precision must be non-negative")

    return errors


# =============================================================================
# Helper Functions
# =============================================================================

def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in overrides.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def get_default_config() -> FrustrationConfig:
    """
    Get default configuration.

    Loads the default file if present, then applies environment overrides.
    """
    config = load_config(use_defaults_on_error=True)
    config = merge_from_environment(config)
    return config
