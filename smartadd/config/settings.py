# smartadd/config/settings.py
# Configuration management for smartadd: backend endpoints, AI backend & workflow settings

from pathlib import Path
from typing import Dict, Any, Optional, cast
import typer
from dataclasses import dataclass, asdict

from ..smartadd_io.generics import read_json_safe, write_json_safe
from ..core.exceptions import FileReadError, JSONParsingError, SettingsValidationError

VALID_BACKENDS = {"http", "openai"}
VALID_THEMES = {"default", "mono"}


# * Default settings dataclass w/ endpoint, AI backend & session configuration
@dataclass
class SmartAddSettings:
    # admin API
    api_base_url: str = "http://localhost:5000"
    smart_generate_path: str = "/api/admin/ai-smart-generate"
    general_info_path: str = "/api/admin/general-info-all"

    # generation backend: "http" (admin smart endpoint) or "openai" (direct, OpenAI-compatible)
    generation_backend: str = "http"
    model: str = "gpt-4o-mini"
    # empty means the provider default
    ai_base_url: str = ""
    temperature: float = 0.3

    # network
    request_timeout: float = 60.0

    # wait before refetching after a commit (backing store is eventually consistent)
    refetch_delay: float = 0.5

    # raise instead of previewing payloads that match no known result shape
    strict_result_shape: bool = False

    # send prompts w/o update keywords to the per-collection create endpoint
    keyword_routing: bool = False

    # interactive preview (single-key input)
    interactive: bool = True

    # dev mode setting (enables debug output w/ --verbose)
    dev_mode: bool = False

    theme: str = "default"

    def __post_init__(self) -> None:
        if not isinstance(self.api_base_url, str) or not self.api_base_url.startswith(
            ("http://", "https://")
        ):
            raise ValueError(
                f"api_base_url must start with http:// or https://, got '{self.api_base_url}'"
            )

        for name in ("smart_generate_path", "general_info_path"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.startswith("/"):
                raise ValueError(f"{name} must be a path starting with '/', got '{value}'")

        if self.generation_backend not in VALID_BACKENDS:
            raise ValueError(
                f"generation_backend must be one of {sorted(VALID_BACKENDS)}, "
                f"got '{self.generation_backend}'"
            )

        # temperature validation (OpenAI-compatible range: 0.0-2.0)
        if isinstance(self.temperature, bool) or not isinstance(self.temperature, (int, float)):
            raise ValueError(
                f"temperature must be a number, got {type(self.temperature).__name__}"
            )
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(f"temperature must be 0.0-2.0, got {self.temperature}")

        if (
            isinstance(self.request_timeout, bool)
            or not isinstance(self.request_timeout, (int, float))
            or self.request_timeout <= 0
        ):
            raise ValueError(f"request_timeout must be > 0 seconds, got {self.request_timeout}")

        # refetch wait must stay non-zero
        if (
            isinstance(self.refetch_delay, bool)
            or not isinstance(self.refetch_delay, (int, float))
            or not 0.0 < self.refetch_delay <= 10.0
        ):
            raise ValueError(
                f"refetch_delay must be > 0 and <= 10 seconds, got {self.refetch_delay}"
            )

        # strict bool validation (no coercion)
        for name in ("strict_result_shape", "keyword_routing", "interactive", "dev_mode"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(
                    f"{name} must be a boolean (true/false), "
                    f"got {type(value).__name__}: {value}"
                )

        if self.theme not in VALID_THEMES:
            raise ValueError(f"theme must be one of {sorted(VALID_THEMES)}, got '{self.theme}'")


# * Settings management class w/ JSON persistence for loading, saving, & modifying settings
class SettingsManager:
    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or Path.home() / ".smartadd" / "config.json"
        self._settings: Optional[SmartAddSettings] = None

    # load settings from file or return defaults
    def load(self) -> SmartAddSettings:
        if self._settings is not None:
            return self._settings

        if self.config_path.exists():
            try:
                data = read_json_safe(self.config_path)
                self._settings = SmartAddSettings(**data)
            except (JSONParsingError, FileReadError, TypeError, ValueError) as e:
                typer.echo(f"Warning: Invalid config file {self.config_path}: {e}")
                typer.echo("Using default settings")
                self._settings = SmartAddSettings()
        else:
            self._settings = SmartAddSettings()

        return self._settings

    def save(self, settings: SmartAddSettings) -> None:
        write_json_safe(asdict(settings), self.config_path)
        self._settings = settings

    # get a specific setting value
    def get(self, key: str) -> Any:
        settings = self.load()
        return getattr(settings, key, None)

    # * Set a specific setting value; the whole dataclass is re-validated
    def set(self, key: str, value: Any) -> None:
        settings = self.load()
        if not hasattr(settings, key):
            raise ValueError(f"Unknown setting: {key}")

        data = asdict(settings)
        data[key] = value
        try:
            updated = SmartAddSettings(**data)
        except (TypeError, ValueError) as e:
            raise SettingsValidationError(str(e), key, value) from e
        self.save(updated)

    # reset to default settings
    def reset(self) -> None:
        self.save(SmartAddSettings())

    # list all settings as a dictionary
    def list_settings(self) -> Dict[str, Any]:
        return asdict(self.load())


# global settings manager instance
settings_manager = SettingsManager()


# * Retrieve settings preferring injected object from Typer context
def get_settings(
    ctx: typer.Context, provided: Optional[SmartAddSettings] = None
) -> SmartAddSettings:
    if provided is not None:
        return provided

    # search ctx, parent, & root for SmartAddSettings
    candidates: list[typer.Context] = [ctx]
    parent = cast(Optional[typer.Context], getattr(ctx, "parent", None))
    if parent is not None:
        candidates.append(parent)
    find_root = getattr(ctx, "find_root", None)
    root_ctx = (
        cast(Optional[typer.Context], find_root()) if callable(find_root) else None
    )
    if root_ctx is not None:
        candidates.append(root_ctx)

    for c in candidates:
        obj = getattr(c, "obj", None)
        if isinstance(obj, SmartAddSettings):
            return obj

    # fallback to loading from disk
    return settings_manager.load()
