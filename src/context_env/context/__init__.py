from .argument import ArgumentResolver, ParameterArgumentResolver, ServiceArgumentResolver
from .class_resolver import AliasClassResolver, ClassResolver
from .factory import ContextFactory, ContextFactoryRegistry
from .initializer import ContextInitializer, InjectionInitializer
from .inject import Injected, inject

__all__ = [
    "AliasClassResolver",
    "ArgumentResolver",
    "ClassResolver",
    "ContextFactory",
    "ContextFactoryRegistry",
    "ContextInitializer",
    "Injected",
    "InjectionInitializer",
    "ParameterArgumentResolver",
    "ServiceArgumentResolver",
    "inject",
]
