from .loader import ConfigError, load_environment_config, load_yaml_config, parse_environment_config
from .models import ContextsConfig, EnvironmentConfig, SuiteConfig

__all__ = [
    "ConfigError",
    "ContextsConfig",
    "EnvironmentConfig",
    "SuiteConfig",
    "load_environment_config",
    "load_yaml_config",
    "parse_environment_config",
]
