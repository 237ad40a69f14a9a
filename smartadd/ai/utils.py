# smartadd/ai/utils.py
# Shared helpers for AI response text: fence stripping, JSON parsing & error message extraction

import json
import re
from dataclasses import dataclass
from typing import Any, Optional

# reasoning models may prefix the answer w/ a <think> block
_THINK_PREFIX = re.compile(r"^<think>.*?</think>\s*", re.DOTALL)
_FENCED = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL | re.IGNORECASE)

# error messages quote at most this much of the unparseable text
PARSE_ERROR_PREVIEW = 200


# * Raw backend call result handed from make_call() to BaseGenerationClient
@dataclass(slots=True)
class APICallContext:
    raw_text: str
    backend_name: str  # "http" or "openai"
    target: str  # endpoint path or model


def strip_markdown_code_blocks(text: str) -> str:
    text = _THINK_PREFIX.sub("", text.strip(), count=1).strip()
    fenced = _FENCED.match(text)
    return fenced.group(1).strip() if fenced else text


# * Returns (data, stripped_text, error_message); data is None when parsing failed
def parse_json(text: str) -> tuple[Optional[Any], str, str]:
    json_text = strip_markdown_code_blocks(text)
    try:
        return json.loads(json_text), json_text, ""
    except json.JSONDecodeError as e:
        preview = json_text[:PARSE_ERROR_PREVIEW]
        if len(json_text) > PARSE_ERROR_PREVIEW:
            preview += "..."
        return None, json_text, f"JSON parsing failed: {e}. Stripped text: {preview}"


# * Pull the human-readable {message} out of an error body, if any
def extract_service_message(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None
