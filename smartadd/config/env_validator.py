# smartadd/config/env_validator.py
# Centralized environment variable registry for credentials

import os
from typing import Optional


# * Required environment variables by credential ID
REQUIRED_ENV_VARS: dict[str, str] = {
    "admin": "SMARTADD_ADMIN_TOKEN",
    "openai": "SMARTADD_AI_API_KEY",
}


def get_required_env_var(provider: str) -> Optional[str]:
    """Get the required environment variable name for a credential ID."""
    return REQUIRED_ENV_VARS.get(provider)


def validate_provider_env(provider: str) -> bool:
    """Check if the required environment variable is set for a credential ID.

    Returns True if:
    - The ID has no env requirement (e.g., the http generation backend)
    - The required env var is set & non-empty
    """
    var_name = REQUIRED_ENV_VARS.get(provider)
    if var_name is None:
        return True
    return bool(os.getenv(var_name, "").strip())


def get_missing_env_message(provider: str) -> str:
    """Generate error message for missing environment variable."""
    var_name = REQUIRED_ENV_VARS.get(provider)
    if var_name is None:
        return f"'{provider}' does not require a credential."
    return f"Missing {var_name} in environment or .env"
