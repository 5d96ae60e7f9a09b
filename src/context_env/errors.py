from __future__ import annotations


class ContextEnvironmentError(RuntimeError):
    # Base for failures raised while building or isolating context environments.
    def __init__(self, message: str, *, class_identifier: str | None = None) -> None:
        super().__init__(message)
        self.class_identifier = class_identifier


class _ChainStageError(ContextEnvironmentError):
    # Chain failures name the class identifier and the stage that failed.
    kind = "chain stage"

    def __init__(self, class_identifier: str, stage: str, cause: Exception | str) -> None:
        super().__init__(
            f"{self.kind} '{stage}' failed for context class '{class_identifier}': {cause}",
            class_identifier=class_identifier,
        )
        self.stage = stage
        self.cause = cause


class ClassResolutionError(_ChainStageError):
    kind = "Class resolver"


class ArgumentResolutionError(_ChainStageError):
    kind = "Argument resolver"


class ContextInitializationError(_ChainStageError):
    kind = "Context initializer"


class ContextConstructionError(ContextEnvironmentError):
    def __init__(self, class_identifier: str, cause: Exception | str) -> None:
        super().__init__(
            f"Failed to construct context '{class_identifier}': {cause}",
            class_identifier=class_identifier,
        )
        self.cause = cause


class EnvironmentIsolationError(ContextEnvironmentError):
    # Raised when a handler is asked to isolate an environment it did not build.
    pass


class HandlerFrozenError(ContextEnvironmentError):
    # Raised when handler configuration changes after the first build/isolate call.
    pass


class UnknownContextClassError(KeyError):
    # Raised by the factory registry for identifiers it cannot construct.
    pass


class ContextNotFoundError(KeyError):
    pass


class SuiteSettingError(KeyError):
    # Raised when a suite is asked for a setting it does not carry.
    pass


def stage_name(stage: object) -> str:
    # Chain stages may expose a human name; fall back to the class name.
    name = getattr(stage, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(stage).__name__
