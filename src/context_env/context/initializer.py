from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from context_env.context.inject import iter_injected_fields


@runtime_checkable
class ContextInitializer(Protocol):
    # Side-effecting hook applied to every freshly constructed context.
    def initialize_context(self, context: object) -> None:
        raise NotImplementedError("ContextInitializer.initialize_context must be implemented")


@dataclass(frozen=True, slots=True)
class InjectionInitializer:
    """Fills ``inject.service(...)`` markers on a context from a service mapping.

    Missing non-optional services raise ``KeyError``; the handler reports it
    as an initialization failure for the context class being isolated.
    """

    services: Mapping[str, object] = field(default_factory=dict)
    name: str = "injection"

    def initialize_context(self, context: object) -> None:
        for attr, injected in iter_injected_fields(context):
            resolved = injected.resolve(self.services)
            # Bypass frozen/slots via object.__setattr__.
            object.__setattr__(context, attr, resolved)
