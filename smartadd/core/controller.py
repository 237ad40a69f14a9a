# smartadd/core/controller.py
# Reconciliation workflow: generate -> classify -> preview -> confirm/cancel -> persist -> invalidate

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal, Optional, Protocol, TYPE_CHECKING

from .curator import EntryListCurator
from .entities import Collection, Entity
from .exceptions import (
    EmptyPromptError,
    EntryValidationError,
    PartialCreateError,
    PersistenceError,
    SessionStateError,
    SmartAddError,
    UpdateTargetMissingError,
)
from .session import PromptSession, SessionStatus
from .verbose import vlog_stage, vlog_think
from ..ai.classify import classify_payload
from ..ai.intent import detect_update_intent
from ..ai.types import CreateResult, FieldChange, GenerationRequest, GenerationResult, UpdateResult

if TYPE_CHECKING:
    from ..ai.clients.base import BaseGenerationClient


# * Persistence surface the controller needs (RestStore implements it)
class EntryStore(Protocol):
    async def create(self, collection: Collection, entry: Entity) -> Entity: ...

    async def update(self, collection: Collection, entry_id: Any, body: Entity) -> Entity: ...


# * User-facing message emitted by controller operations
@dataclass(frozen=True, slots=True)
class Notification:
    level: Literal["success", "info", "warning", "error"]
    title: str
    message: str


InvalidateCallback = Callable[[Collection], Optional[Awaitable[None]]]
NotifyCallback = Callable[[Notification], None]


# * Drives one PromptSession against a single collection
class ReconciliationController:
    def __init__(
        self,
        collection: Collection,
        generator: "BaseGenerationClient",
        store: EntryStore,
        *,
        on_invalidate: InvalidateCallback | None = None,
        notify: NotifyCallback | None = None,
        refetch_delay: float = 0.5,
        strict_result_shape: bool = False,
        keyword_routing: bool = False,
        session: PromptSession | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.collection = collection
        self.generator = generator
        self.store = store
        self.on_invalidate = on_invalidate
        self.notify = notify
        self.refetch_delay = refetch_delay
        self.strict_result_shape = strict_result_shape
        self.keyword_routing = keyword_routing
        self.session = session or PromptSession()
        self.pending = EntryListCurator()
        self._sleep = sleep

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def result(self) -> GenerationResult | None:
        return self.session.result

    def _notify(self, level: Literal["success", "info", "warning", "error"], title: str, message: str) -> None:
        if self.notify is not None:
            self.notify(Notification(level, title, message))

    # * Open the AI dialog for this collection
    def open(self, prompt_text: str = "") -> None:
        self.session.open()
        if prompt_text:
            self.session.set_prompt(prompt_text)
        vlog_stage("Open", f"AI mode for {self.collection.name}")

    def set_prompt(self, text: str) -> None:
        self.session.set_prompt(text)

    def receive_transcript(self, text: str) -> None:
        self.session.receive_transcript(text)

    def _route(self, prompt: str) -> str | None:
        if not self.keyword_routing or not self.collection.generate_path:
            return None
        if detect_update_intent(prompt):
            return None
        vlog_think(f"No update keywords found; routing to {self.collection.generate_path}")
        return self.collection.generate_path

    # * Send the prompt & classify the response; None when the result went stale
    async def generate(self, prompt_text: str | None = None) -> GenerationResult | None:
        if self.session.status is not SessionStatus.IDLE:
            raise SessionStateError(
                f"Cannot generate while session is {self.session.status.value}"
            )
        if prompt_text is not None:
            self.session.set_prompt(prompt_text)

        prompt = self.session.prompt_text.strip()
        if not prompt:
            error = EmptyPromptError()
            self.session.last_error = str(error)
            self._notify("error", "Error", str(error))
            raise error

        request = GenerationRequest(prompt, self.collection.section_type, self._route(prompt))
        epoch = self.session.begin_generation()
        vlog_stage("Generate", f"{self.collection.section_type} (epoch {epoch})")

        try:
            payload = await self.generator.generate(request)
            result = classify_payload(
                payload, self.collection, strict=self.strict_result_shape
            )
        except asyncio.CancelledError:
            self.session.fail_generation(epoch, "Generation cancelled")
            raise
        except SmartAddError as e:
            if not self.session.fail_generation(epoch, str(e)):
                vlog_think(f"Discarding failure from stale generation (epoch {epoch})")
                return None
            self._notify("error", "Error", str(e))
            raise
        except Exception as e:
            self.session.fail_generation(epoch, f"Unexpected error: {e}")
            raise

        if not self.session.accept_result(epoch, result):
            vlog_think(f"Discarding stale generation result (epoch {epoch})")
            return None

        if isinstance(result, UpdateResult):
            self.pending.clear()
            self._notify(
                "info",
                "Update Detected",
                f"Found a matching {self.collection.entity_name.lower()} "
                f"({result.confidence:.0f}% confidence)",
            )
        else:
            self.pending.replace_all(result.entries)
            if result.degraded:
                self._notify(
                    "warning",
                    "Check Preview",
                    "The AI response had an unexpected format; review the entry before adding it",
                )
            else:
                self._notify(
                    "success",
                    "Success",
                    f"{self.collection.entity_name} information generated successfully!",
                )
        return result

    # * Confirm the active proposal (dispatches on its variant)
    async def confirm(self) -> list[Entity] | Entity:
        result = self.session.result
        if isinstance(result, UpdateResult):
            return await self.confirm_update()
        if isinstance(result, CreateResult):
            return await self.confirm_create()
        raise SessionStateError("Nothing to confirm")

    def _validate_entries(self, entries: list[Entity]) -> None:
        for i, entry in enumerate(entries):
            missing = self.collection.missing_fields(self.collection.apply_aliases(entry))
            if missing:
                label = self.collection.entity_name.lower()
                raise EntryValidationError(
                    f"{self.collection.entity_name} {i + 1} is missing required fields: "
                    f"{', '.join(missing)}. Please edit the {label} before adding it.",
                    index=i,
                    missing=missing,
                )

    # * POST every pending entry, one at a time; stops at the first failure
    async def confirm_create(self, entries: list[Entity] | None = None) -> list[Entity]:
        if self.session.status is not SessionStatus.PREVIEWING or not isinstance(
            self.session.result, CreateResult
        ):
            raise SessionStateError("No entries to add")
        entries = list(self.pending.entries if entries is None else entries)
        if not entries:
            raise SessionStateError("No entries to add")

        try:
            self._validate_entries(entries)
        except EntryValidationError as e:
            self.session.last_error = str(e)
            self._notify("error", "Error", str(e))
            raise

        self.session.begin_commit()
        created: list[Entity] = []
        for i, entry in enumerate(entries):
            body = self.collection.normalize_for_create(entry)
            try:
                created.append(await self.store.create(self.collection, body))
            except PersistenceError as e:
                message = (
                    f"Failed to add {self.collection.entity_name.lower()} {i + 1} of "
                    f"{len(entries)}: {e}."
                )
                if created:
                    message += (
                        f" {len(created)} of {len(entries)} entries may already have been added."
                    )
                error = PartialCreateError(
                    message,
                    created=created,
                    failed_index=i,
                    failed_entry=entry,
                    status_code=e.status_code,
                )
                self.session.fail_commit(str(error))
                self._notify("error", "Error", str(error))
                raise error from e
            except BaseException:
                self.session.fail_commit("Commit interrupted")
                raise

        n = len(created)
        noun = self.collection.entity_name if n == 1 else self.collection.plural_name
        await self._finish_commit(f"{n} {noun.lower()} added successfully")
        return created

    def _apply_changes(self, matched: Entity, changes: list[FieldChange]) -> Entity:
        updated = dict(matched)
        nested = updated.get("value")
        nested = dict(nested) if isinstance(nested, dict) else None
        for change in changes:
            # general-info settings keep their fields inside the `value` object
            if nested is not None and (
                change.field_name in nested or change.field_name not in updated
            ):
                nested[change.field_name] = change.new_value
            else:
                updated[change.field_name] = change.new_value
        if nested is not None:
            updated["value"] = nested
        return updated

    # * Apply every change to a copy of the matched record & PUT it
    async def confirm_update(
        self,
        matched_entry: Entity | None = None,
        changes: list[FieldChange] | None = None,
    ) -> Entity:
        result = self.session.result
        if self.session.status is not SessionStatus.PREVIEWING or not isinstance(
            result, UpdateResult
        ):
            raise SessionStateError("No update to apply")
        matched = result.matched_entry if matched_entry is None else matched_entry
        changes = result.changes if changes is None else changes

        entry_id = matched.get("id") if matched else None
        if entry_id is None or entry_id == "":
            error = UpdateTargetMissingError()
            self.session.last_error = str(error)
            self._notify("error", "Error", str(error))
            raise error

        body = self.collection.normalize_for_update(self._apply_changes(matched, changes))
        self.session.begin_commit()
        try:
            saved = await self.store.update(self.collection, entry_id, body)
        except PersistenceError as e:
            self.session.fail_commit(str(e))
            self._notify("error", "Error", str(e))
            raise
        except BaseException:
            self.session.fail_commit("Commit interrupted")
            raise

        await self._finish_commit(
            f"{self.collection.entity_name} updated successfully! Changes are now visible."
        )
        return saved

    # * success -> wait -> invalidate -> clear local proposal (in that order)
    async def _finish_commit(self, message: str) -> None:
        try:
            await self._sleep(self.refetch_delay)
            if self.on_invalidate is not None:
                outcome = self.on_invalidate(self.collection)
                if inspect.isawaitable(outcome):
                    await outcome
        finally:
            # the mutation already succeeded; the proposal must not be re-submitted
            self.pending.clear()
            self.session.finish_commit()
        self._notify("success", "Success", message)

    # * Discard everything & close the dialog; in-flight results are ignored
    def cancel(self) -> None:
        if self.session.status is SessionStatus.COMMITTING:
            raise SessionStateError("Cannot cancel while changes are being saved")
        self.pending.clear()
        self.session.reset(keep_prompt=False)
        self.session.close()
        vlog_stage("Cancel")

    # * Drop the proposal but keep the prompt for another attempt
    def regenerate(self) -> None:
        if self.session.status is SessionStatus.COMMITTING:
            raise SessionStateError("Cannot regenerate while changes are being saved")
        self.pending.clear()
        self.session.reset(keep_prompt=True)
        vlog_stage("Regenerate")

    # pending-list helpers (CREATE previews only)

    def _require_pending(self) -> None:
        if self.session.status is not SessionStatus.PREVIEWING or not isinstance(
            self.session.result, CreateResult
        ):
            raise SessionStateError("No pending entries to edit")

    def next_entry(self) -> int:
        return self.pending.next()

    def previous_entry(self) -> int:
        return self.pending.previous()

    def edit_current(self, entry: Entity) -> None:
        self._require_pending()
        self.pending.edit_current(entry)

    def update_current_field(self, field_name: str, value: Any) -> None:
        self._require_pending()
        self.pending.update_current_field(field_name, value)

    # * Remove the entry under the cursor; an emptied list clears the proposal
    def delete_current_entry(self) -> bool:
        self._require_pending()
        if self.pending.delete_current():
            self.session.discard_result()
            self._notify("info", "Info", "All entries removed. You can generate new ones.")
            return True
        self._notify("info", "Removed", "Entry removed from preview")
        return False
