from .logging import JsonlLogSink, LogLevel, LogMessage, LogSink, MemoryLogSink, StreamLogSink

__all__ = ["JsonlLogSink", "LogLevel", "LogMessage", "LogSink", "MemoryLogSink", "StreamLogSink"]
