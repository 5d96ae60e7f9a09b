from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Config models map the YAML sections that describe suites and context wiring.


class SuiteConfig(BaseModel):
    # Suite settings; unknown keys are kept as extra suite settings.
    model_config = ConfigDict(extra="allow")
    context: str | None = None
    contexts: list[str] | None = None

    @field_validator("context")
    @classmethod
    def _context_not_empty(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("context must be a non-empty string when provided")
        return value

    def settings(self) -> dict[str, object]:
        # Only explicitly given keys become suite settings, so "absent" stays absent.
        return self.model_dump(exclude_unset=True)


class ContextsConfig(BaseModel):
    # Handler-level context wiring shared by every suite.
    model_config = ConfigDict(extra="forbid")
    aliases: dict[str, str] = Field(default_factory=dict)
    arguments: dict[str, list[Any]] = Field(default_factory=dict)
    parameters: dict[str, Any] = Field(default_factory=dict)


class EnvironmentConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    suites: dict[str, SuiteConfig] = Field(default_factory=dict)
    contexts: ContextsConfig = Field(default_factory=ContextsConfig)
