# smartadd/smartadd_io/console.py
# Shared rich console behind a swappable proxy
# * Modules import `console` once; configure/reset swap the Console underneath it
# * The smartadd theme is re-applied when the console is swapped (reset drops it)

from __future__ import annotations

from typing import Any, Optional

from rich.console import Console
from rich.theme import Theme


class _ConsoleProxy:
    __slots__ = ("_target", "_theme")

    def __init__(self) -> None:
        self._target = Console()
        self._theme: Optional[Theme] = None

    def __getattr__(self, name: str) -> Any:
        return getattr(self._target, name)

    def _swap(self, target: Console, keep_theme: bool = True) -> Console:
        if not keep_theme:
            self._theme = None
        elif self._theme is not None:
            target.push_theme(self._theme)
        self._target = target
        return target

    def _use_theme(self, theme: Theme) -> None:
        self._theme = theme
        self._target.push_theme(theme)


console = _ConsoleProxy()


def get_console() -> Console:
    return console._target


# * Swap in a Console built from the given options (tests: width, record)
def configure_console(
    width: Optional[int] = None,
    force_terminal: Optional[bool] = None,
    record: bool = False,
    theme: Optional[Theme] = None,
) -> Console:
    options: dict[str, Any] = {"record": record}
    if width is not None:
        options["width"] = width
    if force_terminal is not None:
        options["force_terminal"] = force_terminal
    target = console._swap(Console(**options))
    if theme is not None:
        console._use_theme(theme)
    return target


def reset_console() -> Console:
    return console._swap(Console(), keep_theme=False)


# * Called once per run from the CLI callback w/ the configured theme name
def apply_theme(name: str = "default") -> None:
    from ..ui.theme import get_theme

    console._use_theme(get_theme(name))


__all__ = ["console", "get_console", "configure_console", "reset_console", "apply_theme"]
