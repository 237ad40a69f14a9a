# smartadd/persistence/credentials.py
# Bearer credential injected into the persistence & generation clients

from __future__ import annotations

import os
from dataclasses import dataclass

from ..config.env_validator import (
    REQUIRED_ENV_VARS,
    get_missing_env_message,
    validate_provider_env,
)
from ..core.exceptions import MissingCredentialError

ADMIN_TOKEN_ENV = REQUIRED_ENV_VARS["admin"]
AI_API_KEY_ENV = REQUIRED_ENV_VARS["openai"]


@dataclass(frozen=True)
class Credentials:
    token: str
    ai_api_key: str | None = None

    def __repr__(self) -> str:
        return f"Credentials(token='***', ai_api_key={'***' if self.ai_api_key else None!r})"

    # * Authorization header for admin endpoints
    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    # * Read credentials from the environment (.env is loaded by the CLI)
    @classmethod
    def from_env(cls, require_ai_key: bool = False) -> "Credentials":
        if not validate_provider_env("admin"):
            raise MissingCredentialError(get_missing_env_message("admin"), env_var=ADMIN_TOKEN_ENV)
        if require_ai_key and not validate_provider_env("openai"):
            raise MissingCredentialError(get_missing_env_message("openai"), env_var=AI_API_KEY_ENV)
        return cls(
            token=os.environ[ADMIN_TOKEN_ENV].strip(),
            ai_api_key=os.getenv(AI_API_KEY_ENV, "").strip() or None,
        )
