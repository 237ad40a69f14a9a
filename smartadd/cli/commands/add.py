# smartadd/cli/commands/add.py
# Interactive AI add/update session for one collection

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, Optional

import readchar
import typer

from ..app import app
from ..decorators import handle_smartadd_error
from ..helpers import coerce_value, print_notification
from ...ai.clients.base import BaseGenerationClient
from ...ai.clients.factory import create_generation_client
from ...config.settings import SmartAddSettings, get_settings
from ...core.controller import ReconciliationController
from ...core.entities import Collection, get_collection
from ...core.exceptions import EntryValidationError, PartialCreateError, PersistenceError
from ...core.session import SessionStatus
from ...core.verbose import vlog_config
from ...persistence.client import RestStore
from ...persistence.credentials import Credentials
from ...smartadd_io.console import console
from ...smartadd_io.generics import read_text_safe
from ...ui.preview_input import PreviewAction, PreviewInputHandler
from ...ui.preview_renderer import PreviewRenderer

KeyReader = Callable[[], str]
LineReader = Callable[[str], str]


def _read_line(label: str) -> str:
    return typer.prompt(label, default="", show_default=False)


# * Build store & generation client for the configured backend (tests patch this)
def build_clients(
    settings: SmartAddSettings, credentials: Credentials
) -> tuple[RestStore, BaseGenerationClient]:
    store = RestStore(settings.api_base_url, credentials, timeout=settings.request_timeout)
    return store, create_generation_client(settings, credentials, store)


async def _refresh_list(store: RestStore, collection: Collection) -> None:
    records = await store.list(collection)
    console.print(f"[dim]Refreshed {collection.plural_name.lower()}: {len(records)} total[/]")


# pending list emptied by deletes: offer to regenerate or quit
async def _after_empty(read_key: KeyReader) -> bool:
    console.print("[dim][r] regenerate  [c] cancel[/]")
    while True:
        k = await asyncio.to_thread(read_key)
        if k.lower() == "r":
            return True
        if k.lower() in ("c", "q") or k in (readchar.key.ESC, readchar.key.CTRL_C):
            return False


# * Drive generate -> preview -> confirm until the session commits or is cancelled
async def drive_session(
    controller: ReconciliationController,
    *,
    auto_confirm: bool = False,
    read_key: KeyReader = readchar.readkey,
    read_line: LineReader = _read_line,
) -> bool:
    renderer = PreviewRenderer(controller.collection)

    while True:
        result = await controller.generate()
        if result is None:
            return False

        while controller.status is SessionStatus.PREVIEWING and controller.result is not None:
            console.print(renderer.render(controller.result, controller.pending))

            if auto_confirm:
                await controller.confirm()
                return True

            handler = PreviewInputHandler(controller.result.operation)
            action = handler.handle_key(await asyncio.to_thread(read_key))

            if action is PreviewAction.APPLY:
                try:
                    await controller.confirm()
                    return True
                except PartialCreateError as e:
                    # some entries were saved; a retry would add them twice
                    if e.created:
                        raise
                    continue
                except (EntryValidationError, PersistenceError):
                    # preview is intact; let the user fix or retry
                    continue
            elif action is PreviewAction.REGENERATE:
                controller.regenerate()
                break
            elif action is PreviewAction.CANCEL:
                controller.cancel()
                console.print("[dim]Cancelled[/]")
                return False
            elif action is PreviewAction.NEXT:
                controller.next_entry()
            elif action is PreviewAction.PREVIOUS:
                controller.previous_entry()
            elif action is PreviewAction.EDIT:
                field_name = read_line("Field").strip()
                if field_name:
                    controller.update_current_field(field_name, coerce_value(read_line("Value")))
            elif action is PreviewAction.DELETE:
                if controller.delete_current_entry():
                    if not await _after_empty(read_key):
                        controller.cancel()
                        return False
                    break


def _resolve_prompt(
    prompt: Optional[str], prompt_file: Optional[Path], transcript: Optional[str]
) -> str:
    if transcript is not None:
        return transcript
    if prompt_file is not None:
        return read_text_safe(prompt_file)
    return prompt or ""


@app.command()
@handle_smartadd_error
def add(
    ctx: typer.Context,
    section: str = typer.Argument(..., help="Collection to add to (see `smartadd sections`)"),
    prompt: Optional[str] = typer.Argument(None, help="What to add or change"),
    prompt_file: Optional[Path] = typer.Option(
        None, "--prompt-file", "-f", help="Read the prompt from a text file"
    ),
    transcript: Optional[str] = typer.Option(
        None, "--transcript", help="Dictated transcript; replaces the prompt text"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Confirm the preview without asking"),
) -> None:
    """Generate entries or an update from a prompt, preview it & save on confirm."""
    settings = get_settings(ctx)
    collection = get_collection(section)
    text = _resolve_prompt(prompt, prompt_file, transcript)

    auto_confirm = yes or not settings.interactive
    if not text.strip() and not auto_confirm:
        text = _read_line(f"Describe the {collection.entity_name.lower()} to add or change")

    credentials = Credentials.from_env(require_ai_key=settings.generation_backend == "openai")
    vlog_config("generation_backend", settings.generation_backend)
    vlog_config("api_base_url", settings.api_base_url)

    asyncio.run(_run(collection, settings, credentials, text, auto_confirm))


async def _run(
    collection: Collection,
    settings: SmartAddSettings,
    credentials: Credentials,
    text: str,
    auto_confirm: bool,
) -> bool:
    store, generator = build_clients(settings, credentials)
    try:
        controller = ReconciliationController(
            collection,
            generator,
            store,
            on_invalidate=lambda c: _refresh_list(store, c),
            notify=print_notification,
            refetch_delay=settings.refetch_delay,
            strict_result_shape=settings.strict_result_shape,
            keyword_routing=settings.keyword_routing,
        )
        controller.open(text)
        return await drive_session(controller, auto_confirm=auto_confirm)
    finally:
        await generator.aclose()
        await store.aclose()
