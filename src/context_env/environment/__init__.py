from .environment import Environment, InitializedContextEnvironment, UninitializedContextEnvironment
from .handler import ContextEnvironmentHandler, EnvironmentHandler

__all__ = [
    "ContextEnvironmentHandler",
    "Environment",
    "EnvironmentHandler",
    "InitializedContextEnvironment",
    "UninitializedContextEnvironment",
]
