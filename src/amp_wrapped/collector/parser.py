"""Parser for Amp thread files.

Amp stores every thread as a JSON file at:
    ~/.local/share/amp/threads/T-<id>.json

Each file is a JSON object with:
- id: Thread identifier (e.g., "T-0b6a2c3e-...")
- v: Format version
- created: Creation timestamp (milliseconds)
- messages: Array of message objects

Message objects contain:
- role: "user" or "assistant"
- usage (assistant only): {model, inputTokens, outputTokens,
  cacheReadInputTokens, credits, ...}
- fileMentions (user only): {files: [{uri, content}], mentions: [{uri}]}
"""

import json
import math
from collections.abc import Iterable, Iterator
from pathlib import Path

from amp_wrapped.logging import get_logger
from amp_wrapped.models import (
    UNKNOWN_MODEL,
    USAGE_DEFAULTS,
    ThreadMessage,
    ThreadRecord,
    ThreadUsage,
)

logger = get_logger("parser")


def _is_finite_number(value: object) -> bool:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _number(value: object, default: int | float) -> int | float:
    """Usage counts must be finite and non-negative."""
    if not _is_finite_number(value) or value < 0:
        return default
    return value


def parse_usage(data: dict) -> ThreadUsage:
    """Normalize a usage block, filling absent fields from USAGE_DEFAULTS."""
    values = {key: _number(data.get(key), default) for key, default in USAGE_DEFAULTS.items()}
    model = data.get("model")
    if not isinstance(model, str) or not model:
        model = UNKNOWN_MODEL

    return ThreadUsage(
        model=model,
        input_tokens=values["inputTokens"],
        output_tokens=values["outputTokens"],
        cache_read_input_tokens=values["cacheReadInputTokens"],
        credits=values["credits"],
    )


def _extract_file_uris(file_mentions: object) -> list[str]:
    if not isinstance(file_mentions, dict):
        return []

    files = file_mentions.get("files")
    if not isinstance(files, list):
        return []

    uris: list[str] = []
    for entry in files:
        if isinstance(entry, dict) and isinstance(entry.get("uri"), str):
            uris.append(entry["uri"])
    return uris


def parse_message(data: object) -> ThreadMessage | None:
    """Parse one message object; other roles and non-objects yield None."""
    if not isinstance(data, dict):
        return None

    role = data.get("role")
    if role not in ("user", "assistant"):
        return None

    usage = None
    if role == "assistant" and isinstance(data.get("usage"), dict):
        usage = parse_usage(data["usage"])

    file_uris = _extract_file_uris(data.get("fileMentions")) if role == "user" else []

    return ThreadMessage(role=role, usage=usage, file_uris=file_uris)


def parse_thread(raw: str | bytes, source: str | Path | None = None) -> ThreadRecord | None:
    """Parse raw thread file content into a ThreadRecord.

    Args:
        raw: File content
        source: Originating path, used for the fallback id and log messages

    Returns:
        ThreadRecord, or None if the content is not a usable thread
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug("Skipping malformed thread %s: %s", source, e)
        return None

    if not isinstance(data, dict):
        logger.debug("Skipping thread %s: not a JSON object", source)
        return None

    created = data.get("created")
    if not _is_finite_number(created):
        logger.debug("Skipping thread %s: missing creation time", source)
        return None

    raw_messages = data.get("messages", [])
    if not isinstance(raw_messages, list):
        logger.debug("Skipping thread %s: messages is not a list", source)
        return None

    thread_id = data.get("id")
    if not isinstance(thread_id, str) or not thread_id:
        thread_id = Path(source).stem if source is not None else ""

    messages = [msg for msg in (parse_message(m) for m in raw_messages) if msg is not None]

    return ThreadRecord(id=thread_id, created=int(created), messages=messages)


def parse_threads(pairs: Iterable[tuple[str | Path, str | bytes]]) -> Iterator[ThreadRecord]:
    """Parse (path, raw content) pairs, skipping any that fail."""
    skipped = 0
    for source, raw in pairs:
        record = parse_thread(raw, source)
        if record is None:
            skipped += 1
            continue
        yield record

    if skipped:
        logger.info("Skipped %d malformed thread files", skipped)
