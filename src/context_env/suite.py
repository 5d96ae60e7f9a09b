from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from context_env.errors import SuiteSettingError


@runtime_checkable
class Suite(Protocol):
    # Read-only source of named settings for one suite run.
    @property
    def name(self) -> str:
        raise NotImplementedError("Suite.name must be implemented")

    def has_setting(self, key: str) -> bool:
        raise NotImplementedError("Suite.has_setting must be implemented")

    def get_setting(self, key: str) -> object:
        raise NotImplementedError("Suite.get_setting must be implemented")


@dataclass(frozen=True, slots=True)
class GenericSuite:
    # Suite backed by a plain settings mapping (copied and frozen on creation).
    name: str
    settings: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("GenericSuite.name must be a non-empty string")
        object.__setattr__(self, "settings", MappingProxyType(dict(self.settings)))

    def has_setting(self, key: str) -> bool:
        return key in self.settings

    def get_setting(self, key: str) -> object:
        if key not in self.settings:
            raise SuiteSettingError(f"Suite '{self.name}' has no setting '{key}'")
        return self.settings[key]
