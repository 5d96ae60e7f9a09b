from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClassResolver(Protocol):
    # Pure name transformer: turns a configured identifier into a canonical one.
    def supports_class(self, identifier: str) -> bool:
        raise NotImplementedError("ClassResolver.supports_class must be implemented")

    def resolve_class(self, identifier: str) -> str:
        raise NotImplementedError("ClassResolver.resolve_class must be implemented")


@dataclass(frozen=True, slots=True)
class AliasClassResolver:
    """Expands short context aliases into canonical identifiers.

    Only identifiers present in ``aliases`` are claimed; everything else is
    left for later resolvers in the chain (or passes through unchanged).
    """

    aliases: Mapping[str, str] = field(default_factory=dict)
    name: str = "aliases"

    def __post_init__(self) -> None:
        for alias, target in self.aliases.items():
            if not isinstance(alias, str) or not alias:
                raise ValueError("AliasClassResolver aliases must be non-empty strings")
            if not isinstance(target, str) or not target:
                raise ValueError(f"AliasClassResolver target for '{alias}' must be a non-empty string")
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))

    def supports_class(self, identifier: str) -> bool:
        return identifier in self.aliases

    def resolve_class(self, identifier: str) -> str:
        return self.aliases[identifier]
