"""
Converter configuration.

Settings come from three places, highest precedence first:

1. Environment variables (CSL2CFF_CFF_VERSION, CSL2CFF_MAP_TYPES,
   CSL2CFF_LOG_LEVEL)
2. A YAML file (csl2cff.yaml or .csl2cff.yaml in the base path, or an
   explicit path)
3. The dataclass defaults below

String values in the YAML file may reference environment variables with
${VAR_NAME} or ${VAR_NAME:default}.
"""

import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from cslcff.core.exceptions import ConfigValidationError
from cslcff.core.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILENAMES = ("csl2cff.yaml", ".csl2cff.yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ConverterConfig:
    """Settings that influence the CSL to CFF mapping."""

    # CFF version used for standalone output and for new documents
    cff_version: str = "1.2.0"
    message: str = (
        "If you use this software, please cite it using the metadata from this file."
    )
    # Translate known CSL item types into CFF reference types
    map_types: bool = False
    # Emit "- name: anonymous" for records without any author
    anonymous_authors: bool = True
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check field types and values.

        Raises:
            ConfigValidationError: If a value is unusable
        """
        for name in ("cff_version", "message", "log_level"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigValidationError(
                    f"'{name}' must be a string, got {type(value).__name__}",
                    field=name,
                    value=value,
                )
        for name in ("map_types", "anonymous_authors"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigValidationError(
                    f"'{name}' must be true or false, got {value!r}",
                    field=name,
                    value=value,
                )
        if not _VERSION_PATTERN.match(self.cff_version):
            raise ConfigValidationError(
                f"'cff_version' must look like 1.2.0, got {self.cff_version!r}",
                field="cff_version",
                value=self.cff_version,
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"'log_level' must be one of {', '.join(LOG_LEVELS)}",
                field="log_level",
                value=self.log_level,
            )


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all ${VAR} / ${VAR:default} references expanded
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigValidationError(
        f"Environment variable {name} must be a boolean, got {raw!r}",
        field=name,
        value=raw,
    )


def _apply_env_overrides(values: dict[str, Any]) -> dict[str, Any]:
    """Environment variables take precedence over config file values."""
    cff_version = os.environ.get("CSL2CFF_CFF_VERSION")
    if cff_version:
        values["cff_version"] = cff_version.strip()

    map_types = os.environ.get("CSL2CFF_MAP_TYPES")
    if map_types:
        values["map_types"] = _parse_bool("CSL2CFF_MAP_TYPES", map_types)

    log_level = os.environ.get("CSL2CFF_LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level.strip().upper()

    return values


def _coerce_file_values(raw: dict[str, Any]) -> dict[str, Any]:
    """Keep known keys, stringify YAML-typed versions, warn on the rest."""
    known = {f.name for f in fields(ConverterConfig)}
    values: dict[str, Any] = {}
    for key, value in raw.items():
        name = str(key).replace("-", "_")
        if name not in known:
            logger.warning("Ignoring unknown configuration key", key=key)
            continue
        # "cff_version: 1.2" would otherwise arrive as a float
        if name == "cff_version" and isinstance(value, (int, float)):
            value = str(value)
        values[name] = value
    return values


def find_config_file(base_path: Path) -> Optional[Path]:
    """Return the first config file found in base_path, if any."""
    for filename in CONFIG_FILENAMES:
        candidate = base_path / filename
        if candidate.is_file():
            return candidate
    return None


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> ConverterConfig:
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. Defaults to csl2cff.yaml in base_path.
        base_path: Directory searched for a config file. Defaults to cwd.

    Returns:
        ConverterConfig with all settings applied.

    Raises:
        ConfigValidationError: If the file is unreadable or a value is invalid
    """
    base_path = base_path or Path.cwd()
    if config_path is None:
        config_path = find_config_file(base_path)

    values: dict[str, Any] = {}
    if config_path is not None:
        try:
            raw = yaml.safe_load(Path(config_path).read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigValidationError(
                f"Could not read config file {config_path}: {e}"
            ) from e
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Config file {config_path} is not valid YAML: {e}"
            ) from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigValidationError(
                f"Config file {config_path} must contain a mapping",
                value=raw,
            )
        values = _coerce_file_values(expand_env_vars(raw))
        logger.debug("Loaded configuration file", path=config_path)

    values = _apply_env_overrides(values)
    return ConverterConfig(**values)
