# smartadd/core/verbose.py
# --verbose trace of a run: generation calls, REST traffic, session transitions & workflow stages

from __future__ import annotations

from pathlib import Path
from typing import Any

from .output import OutputLevel, emit, enabled_for, get_output_manager, set_output_manager


# * Register a console OutputManager for this run
def init_verbose(
    enabled: bool = False,
    log_file: Path | None = None,
    dev_mode: bool = False,
    quiet: bool = False,
) -> None:
    from ..cli.output_manager import OutputManager

    if not enabled:
        requested = OutputLevel.NORMAL
    else:
        requested = OutputLevel.DEBUG if dev_mode else OutputLevel.VERBOSE
    set_output_manager(
        OutputManager(requested, dev_mode=dev_mode, quiet=quiet, log_file=log_file)
    )


def is_verbose_enabled() -> bool:
    return enabled_for(OutputLevel.VERBOSE)


def vlog(category: str, message: str, detail: str | None = None) -> None:
    emit(OutputLevel.VERBOSE, category, message, detail)


# warnings show at NORMAL level & always reach the log file
def log_warning(message: str, detail: str | None = None) -> None:
    emit(OutputLevel.NORMAL, "WARNING", message, detail)


def vlog_ai_request(
    backend: str,
    section_type: str,
    prompt_length: int,
    target: str | None = None,
) -> None:
    parts = [f"Section: {section_type}", f"Prompt: {prompt_length:,} chars"]
    if target:
        parts.append(f"Target: {target}")
    vlog("AI", f"Generate via {backend}", ", ".join(parts))


def vlog_ai_response(
    backend: str,
    success: bool,
    duration_ms: float | None = None,
    operation: str | None = None,
    error: str | None = None,
) -> None:
    took = f" in {duration_ms:.0f}ms" if duration_ms else ""
    if success:
        vlog("AI", f"Response from {backend}{took}", f"Operation: {operation or 'unknown'}")
    else:
        vlog("AI", f"[red]Error from {backend}[/]{took}", f"Error: {error}")


# * One line per REST call; status is None before the response arrives
def vlog_http(method: str, url: str, status: int | None = None) -> None:
    vlog("HTTP", f"{method} {url}" if status is None else f"{method} {url} -> {status}")


def vlog_file_read(path: Path | str, size: int | None = None) -> None:
    vlog("FILE", f"Read: {path}" + (f" ({size:,} bytes)" if size is not None else ""))


def vlog_file_write(path: Path | str, size: int | None = None) -> None:
    vlog("FILE", f"Write: {path}" + (f" ({size:,} bytes)" if size is not None else ""))


def vlog_stage(stage: str, description: str | None = None) -> None:
    vlog("STAGE", f"{stage}: {description}" if description else stage)


def vlog_transition(old: str, new: str, epoch: int) -> None:
    vlog("SESSION", f"{old} -> {new}", f"epoch={epoch}")


def vlog_config(key: str, value: Any) -> None:
    vlog("CONFIG", f"{key} = {value}")


def vlog_think(thought: str) -> None:
    vlog("THINK", thought)


# * Brackets one CLI run: sets up output, writes run start/end markers to the log file
class VerboseSession:
    def __init__(
        self,
        enabled: bool = False,
        log_file: Path | None = None,
        dev_mode: bool = False,
        quiet: bool = False,
        label: str = "smartadd",
    ):
        self.enabled = enabled
        self.log_file = log_file
        self.dev_mode = dev_mode
        self.quiet = quiet
        self.label = label

    def __enter__(self) -> "VerboseSession":
        init_verbose(self.enabled, self.log_file, self.dev_mode, self.quiet)
        get_output_manager().begin_run(self.label)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        get_output_manager().end_run()
