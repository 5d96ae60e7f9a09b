from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from context_env.errors import ContextNotFoundError
from context_env.suite import Suite


@runtime_checkable
class Environment(Protocol):
    # Every environment is bound to the suite it was built for.
    @property
    def suite(self) -> Suite:
        raise NotImplementedError("Environment.suite must be implemented")


@dataclass(frozen=True, slots=True)
class UninitializedContextEnvironment:
    # Built but not isolated: ordered canonical class identifiers, duplicates allowed.
    suite: Suite
    context_classes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "context_classes", tuple(self.context_classes))

    def has_context_classes(self) -> bool:
        return bool(self.context_classes)

    def has_context_class(self, identifier: str) -> bool:
        return identifier in self.context_classes

    def get_context_classes(self) -> tuple[str, ...]:
        return self.context_classes


@dataclass(frozen=True, slots=True)
class InitializedContextEnvironment:
    """Isolated environment holding constructed, initialized contexts.

    ``contexts[i]`` was built from ``context_classes[i]``; both tuples follow
    the order of the uninitialized environment they came from.
    """

    suite: Suite
    context_classes: tuple[str, ...] = ()
    contexts: tuple[object, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "context_classes", tuple(self.context_classes))
        object.__setattr__(self, "contexts", tuple(self.contexts))
        if len(self.context_classes) != len(self.contexts):
            raise ValueError("InitializedContextEnvironment requires one context per context class")

    def has_contexts(self) -> bool:
        return bool(self.contexts)

    def has_context_class(self, identifier: str) -> bool:
        return identifier in self.context_classes

    def get_context_classes(self) -> tuple[str, ...]:
        return self.context_classes

    def get_contexts(self) -> tuple[object, ...]:
        return self.contexts

    def get_context(self, identifier: str) -> object:
        # Duplicated identifiers resolve to the first context built for them.
        for class_identifier, context in zip(self.context_classes, self.contexts):
            if class_identifier == identifier:
                return context
        raise ContextNotFoundError(f"Environment for suite '{self.suite.name}' has no context '{identifier}'")


def initialized_from(
    environment: UninitializedContextEnvironment,
    contexts: Sequence[object],
) -> InitializedContextEnvironment:
    return InitializedContextEnvironment(
        suite=environment.suite,
        context_classes=environment.context_classes,
        contexts=tuple(contexts),
    )
