# smartadd/core/output.py
# Log levels, the LogRecord type & the registry core modules write through
# * No console or file access here; cli/output_manager.py renders records
# * Core modules call emit() on whatever manager the CLI registered

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol, runtime_checkable


class OutputLevel(IntEnum):
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


# * One log line: category tag, message, optional indented detail or JSON payload
@dataclass(frozen=True, slots=True)
class LogRecord:
    level: OutputLevel
    category: str
    message: str
    detail: str | None = None
    payload: Any = None
    has_payload: bool = False


@runtime_checkable
class OutputInterface(Protocol):
    @property
    def level(self) -> OutputLevel: ...

    def emit(self, record: LogRecord) -> None: ...

    def begin_run(self, label: str) -> None: ...

    def end_run(self) -> None: ...


# * Default until the CLI registers a real manager; drops everything
class NullOutputManager:
    @property
    def level(self) -> OutputLevel:
        return OutputLevel.NORMAL

    def emit(self, record: LogRecord) -> None:
        pass

    def begin_run(self, label: str) -> None:
        pass

    def end_run(self) -> None:
        pass


_output_manager: OutputInterface = NullOutputManager()


def set_output_manager(manager: OutputInterface) -> None:
    global _output_manager
    _output_manager = manager


def get_output_manager() -> OutputInterface:
    return _output_manager


# tests
def reset_output_manager() -> None:
    global _output_manager
    _output_manager = NullOutputManager()


def enabled_for(level: OutputLevel) -> bool:
    return get_output_manager().level >= level


_NO_DATA = object()


# * Build & emit a record; verbose/debug records are dropped early when filtered out
# NORMAL records always reach the manager so quiet runs still log them to file
def emit(
    level: OutputLevel,
    category: str,
    message: str,
    detail: str | None = None,
    data: Any = _NO_DATA,
) -> None:
    manager = get_output_manager()
    if level > OutputLevel.NORMAL and level > manager.level:
        return
    if data is _NO_DATA:
        manager.emit(LogRecord(level, category, message, detail))
    else:
        manager.emit(LogRecord(level, category, message, detail, data, has_payload=True))
