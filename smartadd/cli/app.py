# smartadd/cli/app.py
# Root Typer application: global flags, per-run settings & output setup, command registration
#
# ! Command modules are imported at the bottom; they decorate the `app` defined here.

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# .env supplies SMARTADD_ADMIN_TOKEN / SMARTADD_AI_API_KEY
load_dotenv()

from ..config.settings import settings_manager
from ..core.verbose import VerboseSession
from ..smartadd_io.console import apply_theme, console


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    help="AI-assisted add & update for admin collections.",
    context_settings={"help_option_names": ["--help", "-h"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Trace AI calls, REST traffic & session changes"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide warnings"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Append the trace to a file (implies --verbose)"
    ),
) -> None:
    # tests may inject settings through ctx.obj
    if ctx.obj is None:
        ctx.obj = settings_manager.load()
    settings = ctx.obj

    apply_theme(settings.theme)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()

    # closed w/ the context, so the log file gets its end marker on every exit path
    ctx.with_resource(
        VerboseSession(
            enabled=verbose or log_file is not None,
            log_file=log_file,
            dev_mode=settings.dev_mode,
            quiet=quiet,
            label=f"smartadd {ctx.invoked_subcommand}",
        )
    )


from .commands import add as _add  # noqa: F401, E402
from .commands import search as _search  # noqa: F401, E402
from .commands import sections as _sections  # noqa: F401, E402
from .commands import config as _config  # noqa: F401, E402
