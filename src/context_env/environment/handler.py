from __future__ import annotations

import copy
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from context_env.context.argument import ArgumentResolver
from context_env.context.class_resolver import ClassResolver
from context_env.context.factory import ContextFactoryRegistry
from context_env.context.initializer import ContextInitializer
from context_env.environment.environment import (
    Environment,
    InitializedContextEnvironment,
    UninitializedContextEnvironment,
    initialized_from,
)
from context_env.errors import (
    ArgumentResolutionError,
    ClassResolutionError,
    ContextConstructionError,
    ContextInitializationError,
    EnvironmentIsolationError,
    HandlerFrozenError,
    UnknownContextClassError,
    stage_name,
)
from context_env.observability.logging import LogLevel, LogMessage, LogSink
from context_env.suite import Suite


@runtime_checkable
class EnvironmentHandler(Protocol):
    # Contract used by an environment manager to pick a handler for a suite.
    def supports_suite(self, suite: Suite) -> bool:
        raise NotImplementedError("EnvironmentHandler.supports_suite must be implemented")

    def build_environment(self, suite: Suite) -> Environment:
        raise NotImplementedError("EnvironmentHandler.build_environment must be implemented")

    def supports_environment_and_subject(self, environment: Environment, subject: object = None) -> bool:
        raise NotImplementedError("EnvironmentHandler.supports_environment_and_subject must be implemented")

    def isolate_environment(self, environment: Environment, subject: object = None) -> Environment:
        raise NotImplementedError("EnvironmentHandler.isolate_environment must be implemented")


class ContextEnvironmentHandler:
    """Builds and isolates context-based environments.

    Configuration (resolver chains, initializers and stored context
    arguments) is written during setup and frozen on the first
    ``build_environment`` / ``isolate_environment`` call, or explicitly via
    ``freeze()``. After that the handler only reads its state, so one
    instance can serve concurrent suites.
    """

    def __init__(
        self,
        factories: ContextFactoryRegistry | None = None,
        *,
        log_sink: LogSink | None = None,
    ) -> None:
        self._factories = factories if factories is not None else ContextFactoryRegistry()
        self._log_sink = log_sink
        self._class_resolvers: list[ClassResolver] = []
        self._argument_resolvers: list[ArgumentResolver] = []
        self._context_initializers: list[ContextInitializer] = []
        self._arguments: dict[str, list[object]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        # The factory registry is part of the frozen configuration.
        self._frozen = True
        self._factories.freeze()

    def register_class_resolver(self, resolver: ClassResolver) -> None:
        self._ensure_configurable("class resolver")
        self._class_resolvers.append(resolver)

    def register_argument_resolver(self, resolver: ArgumentResolver) -> None:
        self._ensure_configurable("argument resolver")
        self._argument_resolvers.append(resolver)

    def register_context_initializer(self, initializer: ContextInitializer) -> None:
        self._ensure_configurable("context initializer")
        self._context_initializers.append(initializer)

    def set_context_arguments(self, class_identifier: str, arguments: Sequence[object]) -> None:
        # Arguments are keyed by the canonical identifier, resolved right now.
        self._ensure_configurable(f"arguments for '{class_identifier}'")
        if not _is_sequence(arguments):
            raise TypeError(f"Context arguments for '{class_identifier}' must be a sequence")
        self._arguments[self.resolve_class(class_identifier)] = copy.deepcopy(list(arguments))

    def supports_suite(self, suite: Suite) -> bool:
        if suite.has_setting("context") and suite.get_setting("context") is not None:
            return True
        return suite.has_setting("contexts") and _is_sequence(suite.get_setting("contexts"))

    def build_environment(self, suite: Suite) -> UninitializedContextEnvironment:
        self.freeze()
        classes = tuple(self.resolve_class(identifier) for identifier in self._get_context_classes(suite))
        self._log("debug", "environment.built", suite=suite.name, context_classes=list(classes))
        return UninitializedContextEnvironment(suite=suite, context_classes=classes)

    def supports_environment_and_subject(self, environment: Environment, subject: object = None) -> bool:
        return isinstance(environment, UninitializedContextEnvironment)

    def isolate_environment(
        self,
        environment: Environment,
        subject: object = None,
    ) -> InitializedContextEnvironment:
        if not isinstance(environment, UninitializedContextEnvironment):
            raise EnvironmentIsolationError(
                f"ContextEnvironmentHandler does not support environment {type(environment).__name__}"
            )
        self.freeze()
        contexts: list[object] = []
        for class_identifier in environment.context_classes:
            arguments = self.resolve_class_arguments(class_identifier)
            contexts.append(self.initialize_context(class_identifier, arguments))
        self._log(
            "debug",
            "environment.isolated",
            suite=environment.suite.name,
            context_classes=list(environment.context_classes),
        )
        return initialized_from(environment, contexts)

    def resolve_class(self, identifier: str) -> str:
        # First resolver that supports the identifier wins; identity otherwise.
        for resolver in self._class_resolvers:
            try:
                if not resolver.supports_class(identifier):
                    continue
                resolved = resolver.resolve_class(identifier)
            except Exception as exc:  # noqa: BLE001 - wrap with chain stage context
                raise ClassResolutionError(identifier, stage_name(resolver), exc) from exc
            if not isinstance(resolved, str) or not resolved:
                raise ClassResolutionError(
                    identifier,
                    stage_name(resolver),
                    f"resolved to {resolved!r}, expected a non-empty string",
                )
            return resolved
        return identifier

    def resolve_class_arguments(self, class_identifier: str) -> list[object]:
        # Every isolation works on its own copy of the stored arguments.
        arguments: Sequence[object] = copy.deepcopy(self._arguments.get(class_identifier, []))
        for resolver in self._argument_resolvers:
            try:
                arguments = resolver.resolve_arguments(class_identifier, arguments)
            except Exception as exc:  # noqa: BLE001 - wrap with chain stage context
                raise ArgumentResolutionError(class_identifier, stage_name(resolver), exc) from exc
            if not _is_sequence(arguments):
                raise ArgumentResolutionError(
                    class_identifier,
                    stage_name(resolver),
                    f"returned {type(arguments).__name__}, expected an argument sequence",
                )
        return list(arguments)

    def initialize_context(self, class_identifier: str, arguments: Sequence[object]) -> object:
        try:
            context = self._factories.create(class_identifier, arguments)
        except UnknownContextClassError as exc:
            self._log("error", "context.unknown", context_class=class_identifier)
            raise ContextConstructionError(class_identifier, "unknown context class") from exc
        except Exception as exc:  # noqa: BLE001 - constructor failures surface with the class id
            self._log("error", "context.construction_failed", context_class=class_identifier, error=str(exc))
            raise ContextConstructionError(class_identifier, exc) from exc

        for initializer in self._context_initializers:
            try:
                initializer.initialize_context(context)
            except Exception as exc:  # noqa: BLE001 - wrap with chain stage context
                stage = stage_name(initializer)
                self._log(
                    "error",
                    "context.initialization_failed",
                    context_class=class_identifier,
                    stage=stage,
                    error=str(exc),
                )
                raise ContextInitializationError(class_identifier, stage, exc) from exc

        self._log("debug", "context.constructed", context_class=class_identifier, argument_count=len(arguments))
        return context

    def _get_context_classes(self, suite: Suite) -> Sequence[str]:
        if suite.has_setting("context") and suite.get_setting("context") is not None:
            return [suite.get_setting("context")]  # type: ignore[list-item]
        return suite.get_setting("contexts")  # type: ignore[return-value]

    def _ensure_configurable(self, what: str) -> None:
        if self._frozen:
            raise HandlerFrozenError(f"Cannot register {what}: handler configuration is frozen")

    def _log(self, level: LogLevel, message: str, **fields: object) -> None:
        if self._log_sink is None:
            return
        self._log_sink.emit(LogMessage(level=level, message=message, fields=fields))


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
