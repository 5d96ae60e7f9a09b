from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal, Protocol, TextIO, get_args, runtime_checkable

LogLevel = Literal["debug", "info", "warning", "error"]


@dataclass(frozen=True, slots=True)
class LogMessage:
    """One structured record emitted while building or isolating environments.

    ``message`` is a dotted event name (``environment.built``,
    ``context.initialization_failed`` ...); ``fields`` carries the class
    identifier, suite and stage the event refers to.
    """

    level: LogLevel
    message: str
    fields: dict[str, object] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def __post_init__(self) -> None:
        if self.level not in get_args(LogLevel):
            raise ValueError(f"LogMessage.level must be one of: {list(get_args(LogLevel))}")
        if not self.message:
            raise ValueError("LogMessage.message must be a non-empty event name")

    def as_dict(self) -> dict[str, object]:
        return {
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
            "level": self.level,
            "message": self.message,
            "fields": self.fields,
        }

    def to_json(self) -> str:
        # Non-JSON field values (contexts, paths) are rendered with str().
        return json.dumps(self.as_dict(), separators=(",", ":"), ensure_ascii=False, default=str)


@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        raise NotImplementedError("LogSink.emit must be implemented")


class StreamLogSink:
    # Writes one JSON record per line to a text stream (stdout unless given).
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(message.to_json() + "\n")


class JsonlLogSink(StreamLogSink):
    # Appends records to a JSONL file; usable as a context manager.
    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(path.open("a", encoding="utf-8"))
        self.path = path

    def emit(self, message: LogMessage) -> None:
        super().emit(message)
        self._stream.flush()  # type: ignore[union-attr]

    def close(self) -> None:
        self._stream.close()  # type: ignore[union-attr]

    def __enter__(self) -> JsonlLogSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MemoryLogSink:
    # Keeps records in memory; handy for tests and diagnostics dumps.
    def __init__(self) -> None:
        self.messages: list[LogMessage] = []

    def emit(self, message: LogMessage) -> None:
        self.messages.append(message)

    def events(self, level: LogLevel | None = None) -> list[str]:
        return [m.message for m in self.messages if level is None or m.level == level]
