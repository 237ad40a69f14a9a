# smartadd/cli/output_manager.py
# Renders LogRecords to the rich console & mirrors them to an optional plain-text log file

from __future__ import annotations

import json
import time
from datetime import datetime
from pathlib import Path
from typing import IO, Optional

from ..core.output import LogRecord, OutputLevel
from ..smartadd_io.console import console

RULE = "-" * 60


# * Console + log file sink registered by init_verbose()
class OutputManager:
    def __init__(
        self,
        requested: OutputLevel = OutputLevel.NORMAL,
        *,
        dev_mode: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
    ) -> None:
        self.dev_mode = dev_mode
        # quiet wins; DEBUG only w/ dev_mode
        if quiet:
            self._level = OutputLevel.QUIET
        else:
            self._level = min(requested, OutputLevel.DEBUG if dev_mode else OutputLevel.VERBOSE)
        self._started = time.monotonic()
        self.log_path: Optional[Path] = None
        self._log: Optional[IO[str]] = None
        if log_file is not None:
            self._open_log(log_file)

    @property
    def level(self) -> OutputLevel:
        return self._level

    def emit(self, record: LogRecord) -> None:
        stamp = f"{time.monotonic() - self._started:.2f}s"
        if record.level <= self._level:
            self._print(record, stamp)
        # warnings reach the file even when the console is quiet
        if record.level <= max(self._level, OutputLevel.NORMAL):
            self._append(record, stamp)

    def _print(self, record: LogRecord, stamp: str) -> None:
        if record.level is OutputLevel.NORMAL:
            if record.category == "WARNING":
                console.print(f"[warning]Warning:[/] {record.message}")
            else:
                console.print(record.message)
        elif record.level is OutputLevel.DEBUG:
            console.print(f"[debug]\\[{record.category}][/] {record.message}")
        else:
            console.print(f"[dim][{stamp}][/] [bold cyan]\\[{record.category}][/] {record.message}")

        if record.detail:
            for line in record.detail.splitlines():
                console.print(f"  [dim]{line}[/]")
        if record.has_payload:
            text = _dump(record.payload)
            if text is None:
                console.print(repr(record.payload), markup=False)
            else:
                console.print_json(text)

    def _append(self, record: LogRecord, stamp: str) -> None:
        if self._log is None:
            return
        lines = [f"[{stamp}] [{record.category}] {record.message}"]
        if record.detail:
            lines += [f"  {line}" for line in record.detail.splitlines()]
        if record.has_payload:
            text = _dump(record.payload)
            lines += [f"  {line}" for line in (text or repr(record.payload)).splitlines()]
        self._write(*lines)

    # * Run markers make appended log files readable across invocations
    def begin_run(self, label: str) -> None:
        self._started = time.monotonic()
        mode = f"{self._level.name}, dev_mode" if self.dev_mode else self._level.name
        self._write("", RULE, f"{label} started {datetime.now().isoformat()} ({mode})", RULE)

    def end_run(self) -> None:
        self._write(RULE, f"finished {datetime.now().isoformat()}", RULE, "")
        self.close()

    def _open_log(self, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._log = open(path, "a", encoding="utf-8")
            self.log_path = path
        except OSError:
            # an unwritable log path must not stop the command
            self._log = None

    def _write(self, *lines: str) -> None:
        if self._log is None:
            return
        try:
            self._log.write("".join(f"{line}\n" for line in lines))
            self._log.flush()
        except OSError:
            self.close()

    def close(self) -> None:
        if self._log is not None:
            try:
                self._log.close()
            except OSError:
                pass
            self._log = None


def _dump(data: object) -> Optional[str]:
    try:
        return json.dumps(data, indent=2, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return None
