import json
import re

# Mode names as the generator emits them
MODE_NAMES = ("multiple_choice", "true_false", "flashcard", "fill_blank", "qa")

_FENCE_RE = re.compile(r"```(?:json|JSON)?")


class MalformedPayload(ValueError):
    """Raised when raw generator output cannot be decoded as JSON."""


def sanitize_data(data):
    """Return the list of items carried by ``data``.

    Accepts a bare list, or an object wrapping one under any key (the
    first list-valued entry in key order wins). Everything else yields
    an empty list so callers never see ``None``.
    """
    if data is None:
        return []
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for value in data.values():
            if isinstance(value, list):
                return value
    return []


def load_payload(text):
    """Decode generator output, tolerating Markdown code fences."""
    if not isinstance(text, (str, bytes)):
        raise MalformedPayload(f"expected text, got {type(text).__name__}")
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedPayload(f"invalid JSON payload: {exc.msg}") from exc


def payload_mode(data):
    # Saved games look like {"mode": ..., "data": [...]}
    if isinstance(data, dict):
        mode = data.get("mode")
        if isinstance(mode, str) and mode.strip() in MODE_NAMES:
            return mode.strip()
    return None
