from __future__ import annotations

from collections.abc import Iterable, Mapping

from context_env.config.models import EnvironmentConfig
from context_env.context.argument import ParameterArgumentResolver, ServiceArgumentResolver
from context_env.context.class_resolver import AliasClassResolver
from context_env.context.factory import ContextFactoryRegistry
from context_env.context.initializer import ContextInitializer, InjectionInitializer
from context_env.environment.handler import ContextEnvironmentHandler
from context_env.observability.logging import LogSink
from context_env.suite import GenericSuite


def build_handler(
    config: EnvironmentConfig,
    *,
    factories: ContextFactoryRegistry | None = None,
    services: Mapping[str, object] | None = None,
    initializers: Iterable[ContextInitializer] = (),
    log_sink: LogSink | None = None,
) -> ContextEnvironmentHandler:
    """Create a handler configured from the ``contexts`` config section.

    Chain order: alias expansion, then ``%param%`` substitution, then
    ``@service`` references (only when ``services`` is given). Service
    injection runs before any extra ``initializers``. The handler is returned
    unfrozen so callers may still register their own stages.
    """
    handler = ContextEnvironmentHandler(factories, log_sink=log_sink)
    wiring = config.contexts

    if wiring.aliases:
        handler.register_class_resolver(AliasClassResolver(aliases=wiring.aliases))

    handler.register_argument_resolver(ParameterArgumentResolver(parameters=wiring.parameters))
    if services is not None:
        handler.register_argument_resolver(ServiceArgumentResolver(services=services))
        handler.register_context_initializer(InjectionInitializer(services=services))

    for initializer in initializers:
        handler.register_context_initializer(initializer)

    # Aliases are registered first so argument keys canonicalize through them.
    for class_identifier, arguments in wiring.arguments.items():
        handler.set_context_arguments(class_identifier, arguments)

    return handler


def build_suites(config: EnvironmentConfig) -> list[GenericSuite]:
    # Suites keep the order they were declared in.
    return [GenericSuite(name=name, settings=suite.settings()) for name, suite in config.suites.items()]
