from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from context_env.config.models import EnvironmentConfig


class ConfigError(ValueError):
    # Raised for invalid environment config (fail fast).
    pass


def load_yaml_config(path: Path) -> dict[str, object]:
    # Returns the raw mapping; validation happens in parse_environment_config.
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def parse_environment_config(raw: object) -> EnvironmentConfig:
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    try:
        return EnvironmentConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def load_environment_config(path: Path) -> EnvironmentConfig:
    return parse_environment_config(load_yaml_config(path))
