from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "ContextEnvironmentHandler",
    "ContextFactoryRegistry",
    "GenericSuite",
    "InitializedContextEnvironment",
    "UninitializedContextEnvironment",
    "build_handler",
    "build_suites",
]

_EXPORTS = {
    "ContextEnvironmentHandler": "context_env.environment.handler",
    "InitializedContextEnvironment": "context_env.environment.environment",
    "UninitializedContextEnvironment": "context_env.environment.environment",
    "ContextFactoryRegistry": "context_env.context.factory",
    "GenericSuite": "context_env.suite",
    "build_handler": "context_env.wiring",
    "build_suites": "context_env.wiring",
}


def __getattr__(name: str) -> Any:
    # Lazy exports keep `import context_env` free of the pydantic/yaml config stack.
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(name)
    return getattr(import_module(module_name), name)
