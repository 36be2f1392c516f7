from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from dotenv import load_dotenv
from jsonschema.exceptions import ValidationError

from ..models.canonical import DEFAULT_BATCH_SIZE, DEFAULT_SAMPLE_SIZE, MAX_SAMPLE_SIZE

"""Configuration loading.

Responsibilities:
- Load YAML config (default config/normalizer.yml)
- Validate against the packaged config_schema.json
- Apply defaults for optional keys
- Apply environment overrides (optionally read from .env)

Precedence: environment > YAML > defaults.
"""

__all__ = [
    "ConfigError",
    "NormalizerConfig",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "default_config",
    "apply_env_overrides",
    "load_env_file",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/normalizer.yml")

DEFAULTS: dict[str, Any] = {
    "source_directory": "./uploads",
    "output_directory": "./output",
    "output_prefix": "processed_",
    "sample_size": DEFAULT_SAMPLE_SIZE,
    "batch_size": DEFAULT_BATCH_SIZE,
    "large_file_threshold": 100,
}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class NormalizerConfig:
    source_directory: str
    output_directory: str = DEFAULTS["output_directory"]
    output_prefix: str = DEFAULTS["output_prefix"]
    sample_size: int = DEFAULT_SAMPLE_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE
    large_file_threshold: int = DEFAULTS["large_file_threshold"]


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build(data: Mapping[str, Any]) -> NormalizerConfig:
    merged = {**DEFAULTS, **data}
    return NormalizerConfig(**merged)


def default_config() -> NormalizerConfig:
    return _build({})


def load_config(path: Path) -> NormalizerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)
    return _build(data)


def _env_int(env: Mapping[str, str], name: str, low: int, high: int | None = None) -> int | None:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < low or (high is not None and value > high):
        bound = f"{low}..{high}" if high is not None else f">= {low}"
        raise ConfigError(f"{name} must be {bound}, got {value}")
    return value


def apply_env_overrides(cfg: NormalizerConfig, env: Mapping[str, str] | None = None) -> NormalizerConfig:
    """Overlay UPLOAD_DIR / OUTPUT_DIR / MAX_SAMPLE_SIZE / LARGE_FILE_THRESHOLD.

    Raises:
        ConfigError: a numeric override is not an integer or is out of range
    """
    env = os.environ if env is None else env
    changes: dict[str, Any] = {}
    if env.get("UPLOAD_DIR"):
        changes["source_directory"] = env["UPLOAD_DIR"]
    if env.get("OUTPUT_DIR"):
        changes["output_directory"] = env["OUTPUT_DIR"]
    sample = _env_int(env, "MAX_SAMPLE_SIZE", 1, MAX_SAMPLE_SIZE)
    if sample is not None:
        changes["sample_size"] = sample
    threshold = _env_int(env, "LARGE_FILE_THRESHOLD", 1)
    if threshold is not None:
        changes["large_file_threshold"] = threshold
    return replace(cfg, **changes) if changes else cfg


def load_env_file(path: Path, override: bool = False) -> bool:
    """Load a .env file with python-dotenv; returns False when it does not exist."""
    if not path.exists():
        return False
    return load_dotenv(dotenv_path=path, override=override)
