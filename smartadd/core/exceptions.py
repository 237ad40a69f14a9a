# smartadd/core/exceptions.py
# Custom exception hierarchy for smartadd (pure - no I/O operations)

from pathlib import Path
from typing import Any


# * Format error message for display (pure string formatting, no I/O)
def format_error_message(error_type: str, message: str) -> str:
    return f"[red]{error_type}:[/] {message}"


# * Base exception for smartadd
class SmartAddError(Exception):
    pass


# * Configuration errors
class ConfigurationError(SmartAddError):
    pass


# * Settings value validation failed
class SettingsValidationError(ConfigurationError):
    def __init__(self, message: str, setting_name: str, value: Any):
        super().__init__(message)
        self.setting_name = setting_name
        self.value = value

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"setting_name={self.setting_name!r}, value={self.value!r})"
        )


# * Required credential not found in environment
class MissingCredentialError(ConfigurationError):
    def __init__(self, message: str, env_var: str):
        super().__init__(message)
        self.env_var = env_var

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, env_var={self.env_var!r})"


# * JSON parsing errors
class JSONParsingError(SmartAddError):
    pass


# * Operation not allowed in the current session status
class SessionStateError(SmartAddError):
    pass


# * Base error for the generate -> preview -> commit workflow
class ReconciliationError(SmartAddError):
    pass


# * Prompt was blank after trimming; no request is sent
class EmptyPromptError(ReconciliationError):
    def __init__(self, message: str = "Please enter a description or use voice input"):
        super().__init__(message)


# * AI generation call failed or returned a non-success status
class GenerationServiceError(ReconciliationError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"status_code={self.status_code!r})"
        )


# * Payload matched neither the CREATE nor the UPDATE shape (strict mode only)
class UnrecognizedResultShapeError(ReconciliationError):
    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


# * UPDATE result has no usable identifier on its matched entry
class UpdateTargetMissingError(ReconciliationError):
    def __init__(self, message: str = "No entry found to update"):
        super().__init__(message)


# * Candidate entry lacks fields its collection requires
class EntryValidationError(ReconciliationError):
    def __init__(self, message: str, index: int, missing: list[str]):
        super().__init__(message)
        self.index = index
        self.missing = missing

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"index={self.index!r}, missing={self.missing!r})"
        )


# * Create/update HTTP call failed
class PersistenceError(ReconciliationError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"status_code={self.status_code!r})"
        )


# * One of N create calls failed; earlier creates are not rolled back
class PartialCreateError(PersistenceError):
    def __init__(
        self,
        message: str,
        created: list[dict[str, Any]],
        failed_index: int,
        failed_entry: dict[str, Any],
        status_code: int | None = None,
    ):
        super().__init__(message, status_code)
        self.created = created
        self.failed_index = failed_index
        self.failed_entry = failed_entry

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"created={len(self.created)!r}, failed_index={self.failed_index!r})"
        )


# * Search corpus errors
class SearchError(SmartAddError):
    pass


# * Base error for file I/O operations
class FileOperationError(SmartAddError):
    def __init__(self, message: str, path: Path | str):
        super().__init__(message)
        self.path = Path(path) if isinstance(path, str) else path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, path={self.path!r})"


# * Failed to read file
class FileReadError(FileOperationError):
    pass
