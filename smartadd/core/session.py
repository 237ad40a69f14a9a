# smartadd/core/session.py
# Prompt session state: status machine, active result & epoch used to discard stale generations

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .exceptions import SessionStateError
from .verbose import vlog_transition

if TYPE_CHECKING:
    from ..ai.types import GenerationResult


class SessionStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    PREVIEWING = "previewing"
    COMMITTING = "committing"


# * One AI-assisted add dialog: prompt text, status, proposal & epoch
@dataclass
class PromptSession:
    prompt_text: str = ""
    status: SessionStatus = SessionStatus.IDLE
    result: "GenerationResult | None" = None
    is_open: bool = False
    epoch: int = 0
    last_error: str | None = None

    def _transition(self, new: SessionStatus) -> None:
        old = self.status
        self.status = new
        vlog_transition(old.value, new.value, self.epoch)

    def _require(self, *allowed: SessionStatus, action: str) -> None:
        if self.status not in allowed:
            raise SessionStateError(f"Cannot {action} while session is {self.status.value}")

    # prompt edits only while idle
    def set_prompt(self, text: str) -> None:
        self._require(SessionStatus.IDLE, action="edit the prompt")
        self.prompt_text = text

    # dictation producers deliver the cumulative transcript
    def receive_transcript(self, text: str) -> None:
        self.set_prompt(text)

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    # * idle -> generating; returns the epoch the result must be tagged with
    def begin_generation(self) -> int:
        if self.status is SessionStatus.GENERATING:
            raise SessionStateError("A generation is already in progress")
        self._require(SessionStatus.IDLE, action="generate")
        self.last_error = None
        self._transition(SessionStatus.GENERATING)
        return self.epoch

    # * generating -> previewing; False when the result belongs to an older epoch
    def accept_result(self, epoch: int, result: "GenerationResult") -> bool:
        if epoch != self.epoch or self.status is not SessionStatus.GENERATING:
            return False
        self.result = result
        self._transition(SessionStatus.PREVIEWING)
        return True

    # generating -> idle (prompt retained)
    def fail_generation(self, epoch: int, message: str) -> bool:
        if epoch != self.epoch or self.status is not SessionStatus.GENERATING:
            return False
        self.last_error = message
        self._transition(SessionStatus.IDLE)
        return True

    def begin_commit(self) -> None:
        self._require(SessionStatus.PREVIEWING, action="confirm")
        if self.result is None:
            raise SessionStateError("Nothing to confirm")
        self.last_error = None
        self._transition(SessionStatus.COMMITTING)

    # committing -> previewing, proposal intact
    def fail_commit(self, message: str) -> None:
        self._require(SessionStatus.COMMITTING, action="fail a commit")
        self.last_error = message
        self._transition(SessionStatus.PREVIEWING)

    # committing -> idle; clears proposal & prompt, closes the dialog
    def finish_commit(self) -> None:
        self._require(SessionStatus.COMMITTING, action="finish a commit")
        self.reset(keep_prompt=False)
        self.close()

    # drop the active proposal without leaving the dialog (last pending entry deleted)
    def discard_result(self) -> None:
        self._require(SessionStatus.PREVIEWING, action="discard the result")
        self.result = None
        self._transition(SessionStatus.IDLE)

    # * Return to idle & bump the epoch so in-flight results are ignored
    def reset(self, keep_prompt: bool = True) -> None:
        if self.status is SessionStatus.COMMITTING and keep_prompt:
            raise SessionStateError("Cannot reset while a commit is in progress")
        self.result = None
        if not keep_prompt:
            self.prompt_text = ""
        self.epoch += 1
        if self.status is not SessionStatus.IDLE:
            self._transition(SessionStatus.IDLE)
