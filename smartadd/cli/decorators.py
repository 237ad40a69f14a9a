# smartadd/cli/decorators.py
# CLI decorator mapping smartadd errors to Rich error lines & exit code 1

import functools
from typing import Callable, TypeVar, Any, cast

from ..core.debug import debug_error
from ..core.exceptions import (
    SmartAddError,
    ConfigurationError,
    JSONParsingError,
    SessionStateError,
    EmptyPromptError,
    GenerationServiceError,
    UnrecognizedResultShapeError,
    UpdateTargetMissingError,
    EntryValidationError,
    PartialCreateError,
    PersistenceError,
    ReconciliationError,
    SearchError,
    FileOperationError,
    format_error_message,
)

F = TypeVar("F", bound=Callable[..., Any])

# first match wins: subclasses must come before their bases
ERROR_LABELS: tuple[tuple[tuple[type[Exception], ...], str], ...] = (
    ((ConfigurationError,), "Configuration Error"),
    ((JSONParsingError,), "JSON Parsing Error"),
    ((SessionStateError,), "Session Error"),
    ((EmptyPromptError,), "Prompt Error"),
    ((GenerationServiceError, UnrecognizedResultShapeError), "Generation Error"),
    ((UpdateTargetMissingError, EntryValidationError), "Validation Error"),
    ((PartialCreateError,), "Partial Save Error"),
    ((PersistenceError,), "Save Error"),
    ((ReconciliationError,), "Workflow Error"),
    ((SearchError,), "Search Error"),
    ((FileOperationError,), "File Error"),
    ((SmartAddError,), "Error"),
)


def error_label(error: Exception) -> str:
    for types, label in ERROR_LABELS:
        if isinstance(error, types):
            return label
    return "Unexpected Error"


# * Decorator for smartadd CLI commands: one red "<Kind> Error: message" line, then exit 1
def handle_smartadd_error(func: F) -> F:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        # ! Lazy import to avoid circular dependencies
        from ..smartadd_io.console import console

        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not isinstance(e, SmartAddError):
                debug_error(e, func.__name__)
            console.print(format_error_message(error_label(e), str(e)))
            raise SystemExit(1) from e

    return cast(F, wrapper)
