# smartadd/smartadd_io/generics.py
# UTF-8 file helpers shared by settings, prompt files & search corpora

from pathlib import Path
from typing import Any, Union
import json

from ..core.exceptions import FileReadError, JSONParsingError
from ..core.verbose import vlog_file_read, vlog_file_write

# lines of context shown around a JSON syntax error
SNIPPET_CONTEXT = 2


def ensure_parent(path: Union[Path, str]) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def write_json_safe(obj: Any, path: Path) -> None:
    ensure_parent(path)
    content = json.dumps(obj, indent=2, ensure_ascii=False)
    path.write_text(content, encoding="utf-8")
    vlog_file_write(path, len(content))


def read_text_safe(path: Path) -> str:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise FileReadError(f"Cannot read {path}: {e}", path) from e
    vlog_file_read(path, len(text))
    return text


# * Numbered excerpt around the failing line, which is marked w/ ">>>"
def _error_snippet(text: str, error: json.JSONDecodeError) -> str:
    lines = text.split("\n")
    first = max(1, error.lineno - SNIPPET_CONTEXT)
    last = min(len(lines), error.lineno + SNIPPET_CONTEXT)
    return "\n".join(
        f"{'>>> ' if n == error.lineno else '    '}{n:3}: {lines[n - 1]}"
        for n in range(first, last + 1)
    )


def read_json_safe(path: Path) -> Any:
    text = read_text_safe(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONParsingError(
            f"Invalid JSON in {path}:\n{_error_snippet(text, e)}\nError: {e.msg}"
        ) from e
