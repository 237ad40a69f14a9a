# smartadd/cli/commands/search.py
# Free-text search over the nested general-information corpus

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import typer

from ..app import app
from ..decorators import handle_smartadd_error
from ...config.settings import SmartAddSettings, get_settings
from ...core.exceptions import SearchError
from ...core.search import search_corpus
from ...persistence.client import RestStore
from ...persistence.credentials import Credentials
from ...smartadd_io.console import console
from ...smartadd_io.generics import read_json_safe
from ...ui.search_renderer import render_search_results


async def fetch_corpus(settings: SmartAddSettings, credentials: Credentials) -> Any:
    async with RestStore(
        settings.api_base_url, credentials, timeout=settings.request_timeout
    ) as store:
        return await store.fetch_json(settings.general_info_path)


def _load_corpus(ctx_settings: SmartAddSettings, data: Optional[Path]) -> dict[str, Any]:
    if data is not None:
        corpus = read_json_safe(data)
    else:
        corpus = asyncio.run(fetch_corpus(ctx_settings, Credentials.from_env()))
    if not isinstance(corpus, dict):
        raise SearchError(
            f"Search data must be a JSON object of sections, got {type(corpus).__name__}"
        )
    return corpus


@app.command()
@handle_smartadd_error
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Text to look for"),
    data: Optional[Path] = typer.Option(
        None, "--data", "-d", help="Search a JSON file instead of the admin API"
    ),
) -> None:
    """Search every general-information section; exact matches are listed first."""
    settings = get_settings(ctx)
    corpus = _load_corpus(settings, data)
    results = search_corpus(query, corpus)
    console.print(render_search_results(query, results))
