from __future__ import annotations

import importlib
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from context_env.errors import HandlerFrozenError, UnknownContextClassError

# Context factories receive the resolved argument list as their single input.
ContextFactory = Callable[[Sequence[object]], object]


@dataclass(slots=True)
class ContextFactoryRegistry:
    """Maps canonical context identifiers to constructor callbacks.

    Explicit registrations win. When ``import_fallback`` is enabled, an
    unregistered identifier of the form ``package.module.Class`` or
    ``package.module:Class`` is imported and the class itself is used as the
    factory; anything that is not a class is rejected. The registry freezes
    together with the handler that owns it.
    """

    import_fallback: bool = True
    _factories: dict[str, ContextFactory] = field(default_factory=dict, init=False)
    _frozen: bool = field(default=False, init=False)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def register(self, identifier: str, factory: ContextFactory) -> None:
        # Later registration for the same identifier overrides the earlier one.
        if self._frozen:
            raise HandlerFrozenError(f"Cannot register context factory '{identifier}': registry is frozen")
        if not isinstance(identifier, str) or not identifier:
            raise ValueError("Context identifier must be a non-empty string")
        if not callable(factory):
            raise TypeError(f"Context factory for '{identifier}' must be callable")
        self._factories[identifier] = factory

    def has(self, identifier: str) -> bool:
        return identifier in self._factories

    def get(self, identifier: str) -> ContextFactory:
        if identifier in self._factories:
            return self._factories[identifier]
        if not self.import_fallback:
            raise UnknownContextClassError(identifier)
        return _import_class(identifier)

    def create(self, identifier: str, arguments: Sequence[object]) -> object:
        # The argument sequence is passed as one positional parameter, never spread.
        return self.get(identifier)(arguments)


def _import_class(identifier: str) -> type:
    module_name, attr_path = _split_identifier(identifier)
    if not module_name or not attr_path:
        raise UnknownContextClassError(identifier)
    try:
        target: object = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        # Only a missing context module means "unknown"; broken imports inside it propagate.
        if not _is_missing_module(module_name, exc.name):
            raise
        raise UnknownContextClassError(identifier) from exc
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise UnknownContextClassError(identifier) from exc
    if not isinstance(target, type):
        raise UnknownContextClassError(identifier)
    return target


def _is_missing_module(module_name: str, missing: str | None) -> bool:
    if not missing:
        return False
    return module_name == missing or module_name.startswith(missing + ".")


def _split_identifier(identifier: str) -> tuple[str, str]:
    if ":" in identifier:
        module_name, _, attr_path = identifier.partition(":")
        return module_name, attr_path
    module_name, _, attr_name = identifier.rpartition(".")
    return module_name, attr_name
