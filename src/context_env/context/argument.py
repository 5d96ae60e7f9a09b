from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class ArgumentResolver(Protocol):
    # Pure transformer over the ordered constructor argument sequence of one class.
    def resolve_arguments(self, class_identifier: str, arguments: Sequence[object]) -> Sequence[object]:
        raise NotImplementedError("ArgumentResolver.resolve_arguments must be implemented")


_PLACEHOLDER = re.compile(r"%([A-Za-z0-9_.\-]+)%")
_TOKEN = re.compile(r"%%|%([A-Za-z0-9_.\-]+)%")


@dataclass(frozen=True, slots=True)
class ParameterArgumentResolver:
    """Substitutes ``%name%`` placeholders in string arguments.

    A string that is exactly one placeholder is replaced by the parameter
    value itself (keeping its type); placeholders embedded in a longer string
    are interpolated as text. ``%%`` is an escaped percent sign. Nested lists
    and mappings are walked recursively.
    """

    parameters: Mapping[str, object] = field(default_factory=dict)
    name: str = "parameters"

    def resolve_arguments(self, class_identifier: str, arguments: Sequence[object]) -> Sequence[object]:
        return [self._resolve_value(value) for value in arguments]

    def _resolve_value(self, value: object) -> object:
        if isinstance(value, str):
            return self._resolve_string(value)
        if isinstance(value, list):
            return [self._resolve_value(item) for item in value]
        if isinstance(value, dict):
            return {key: self._resolve_value(item) for key, item in value.items()}
        return value

    def _resolve_string(self, value: str) -> object:
        whole = _PLACEHOLDER.fullmatch(value)
        if whole is not None:
            return self._lookup(whole.group(1))

        def _substitute(match: re.Match[str]) -> str:
            if match.group(1) is None:
                return "%"
            return str(self._lookup(match.group(1)))

        return _TOKEN.sub(_substitute, value)

    def _lookup(self, key: str) -> object:
        if key not in self.parameters:
            raise KeyError(f"Unknown parameter: %{key}%")
        return self.parameters[key]


@dataclass(frozen=True, slots=True)
class ServiceArgumentResolver:
    # Replaces "@name" string arguments with collaborators from a service mapping.
    # "@@text" escapes a literal leading "@".
    services: Mapping[str, object] = field(default_factory=dict)
    name: str = "services"

    def resolve_arguments(self, class_identifier: str, arguments: Sequence[object]) -> Sequence[object]:
        return [self._resolve_value(value) for value in arguments]

    def _resolve_value(self, value: object) -> object:
        if not isinstance(value, str) or not value.startswith("@"):
            return value
        if value.startswith("@@"):
            return value[1:]
        service_name = value[1:]
        if service_name not in self.services:
            raise KeyError(f"Unknown service: {value}")
        return self.services[service_name]
