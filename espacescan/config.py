"""
Config loading for espacescan.

Sources (in precedence order, highest first):
  1. Environment variables (ESPACESCAN_*)
  2. ~/.espacescan/config.toml
  3. Built-in defaults

Usage:
    from espacescan.config import load_config
    config = load_config()
    print(config.api.target)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import toml

from espacescan.exceptions import ConfigInvalidError

# Default config directory and file
DEFAULT_CONFIG_DIR = Path.home() / ".espacescan"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable → config key mapping
# Format: (env_var_name, dotted_config_path, type_converter)
_ENV_OVERRIDES: list[tuple[str, str, type]] = [
    ("ESPACESCAN_TARGET", "api.target", str),
    ("ESPACESCAN_API_KEY", "api.api_key", str),
    ("ESPACESCAN_HOST", "api.host", str),
    ("ESPACESCAN_TIMEOUT", "api.timeout", float),
    ("ESPACESCAN_OUTPUT_FORMAT", "output.default_format", str),
    ("ESPACESCAN_LOG_LEVEL", "logging.level", str),
]

VALID_TARGETS = {"mainnet", "testnet"}
VALID_FORMATS = {"json", "table", "text"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class APIConfig:
    """Explorer endpoint configuration."""

    target: str = "mainnet"         # mainnet | testnet
    api_key: str = ""
    host: str = ""                  # overrides the target's default host when set
    timeout: float = 30.0


@dataclass
class OutputConfig:
    """Output formatting defaults."""

    default_format: str = "json"    # json | table | text
    color: bool = True


@dataclass
class LoggingConfig:
    """Diagnostic logging. The library itself never configures handlers."""

    level: str = "WARNING"


@dataclass
class ESpaceScanConfig:
    """Full configuration object. Passed via Click context to all commands."""

    api: APIConfig = field(default_factory=APIConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None = None) -> ESpaceScanConfig:
    """
    Load configuration from TOML file + environment variable overrides.

    Args:
        path: Override config file path. If None, uses ESPACESCAN_CONFIG_PATH
              env var or default (~/.espacescan/config.toml).

    Returns:
        ESpaceScanConfig with all values resolved.

    Raises:
        ConfigInvalidError: Config file exists but is invalid TOML or values.
    """
    config_path = resolve_config_path(path)

    raw: dict = {}
    if config_path.exists():
        try:
            raw = toml.load(str(config_path))
        except toml.TomlDecodeError as e:
            raise ConfigInvalidError(f"Invalid TOML in {config_path}: {e}") from e

    config = _dict_to_config(raw)
    _apply_env_overrides(config)
    _validate_config(config)

    return config


def save_config(config: ESpaceScanConfig, path: str | None = None) -> Path:
    """
    Serialize ESpaceScanConfig to TOML and write to disk.

    Returns the path where config was written.
    """
    config_path = resolve_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "api": {
            "target": config.api.target,
            "api_key": config.api.api_key,
            "host": config.api.host,
            "timeout": config.api.timeout,
        },
        "output": {
            "default_format": config.output.default_format,
            "color": config.output.color,
        },
        "logging": {
            "level": config.logging.level,
        },
    }

    with open(config_path, "w") as f:
        toml.dump(data, f)

    return config_path


def get_default_config_path() -> Path:
    """Return the default config file path."""
    return DEFAULT_CONFIG_PATH


# ──────────────────────────────────────────────────────────────
# Private helpers
# ──────────────────────────────────────────────────────────────


def resolve_config_path(path: str | None) -> Path:
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get("ESPACESCAN_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def _dict_to_config(raw: dict) -> ESpaceScanConfig:
    """Build ESpaceScanConfig from raw TOML dict, applying defaults for missing keys."""
    config = ESpaceScanConfig()

    api = raw.get("api", {})
    config.api.target = api.get("target", "mainnet")
    config.api.api_key = api.get("api_key", "")
    config.api.host = api.get("host", "")
    try:
        config.api.timeout = float(api.get("timeout", 30.0))
    except (TypeError, ValueError) as e:
        raise ConfigInvalidError(f"api.timeout must be a number: {e}") from e

    output = raw.get("output", {})
    config.output.default_format = output.get("default_format", "json")
    config.output.color = bool(output.get("color", True))

    log = raw.get("logging", {})
    config.logging.level = str(log.get("level", "WARNING")).upper()

    return config


def _apply_env_overrides(config: ESpaceScanConfig) -> None:
    """Apply environment variable overrides to a loaded config."""
    if os.environ.get("ESPACESCAN_NO_COLOR"):
        config.output.color = False

    for env_var, dotted_key, converter in _ENV_OVERRIDES:
        val = os.environ.get(env_var)
        if val is None:
            continue
        section, key = dotted_key.split(".", 1)
        section_obj = getattr(config, section)
        try:
            setattr(section_obj, key, converter(val))
        except (ValueError, TypeError) as e:
            raise ConfigInvalidError(
                f"Invalid value for {env_var}={val!r}: {e}"
            ) from e

    config.logging.level = config.logging.level.upper()


def _validate_config(config: ESpaceScanConfig) -> None:
    """Validate config values. Raises ConfigInvalidError on invalid values."""
    if config.api.target not in VALID_TARGETS:
        raise ConfigInvalidError(
            f"api.target must be one of {sorted(VALID_TARGETS)}, got {config.api.target!r}"
        )
    if config.api.timeout <= 0:
        raise ConfigInvalidError(f"api.timeout must be positive, got {config.api.timeout}")
    if config.output.default_format not in VALID_FORMATS:
        raise ConfigInvalidError(
            f"output.default_format must be one of {sorted(VALID_FORMATS)}, "
            f"got {config.output.default_format!r}"
        )
    if config.logging.level not in VALID_LOG_LEVELS:
        raise ConfigInvalidError(
            f"logging.level must be one of {sorted(VALID_LOG_LEVELS)}, "
            f"got {config.logging.level!r}"
        )
