"""Prompt file reader."""

import logging
from pathlib import Path

from speechgen.errors import ReadError

log = logging.getLogger("prompt")


def read_prompt(path) -> str:
    """Return the UTF-8 file's lines joined with newlines."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(f"could not read prompt file {path}: {exc}") from exc

    prompt = "\n".join(text.splitlines())
    if not prompt.strip():
        raise ReadError(f"prompt file {path} is empty")
    log.info("Prompt: %d chars from %s", len(prompt), path)
    return prompt
