"""Correct-answer resolution for generated quiz items.

Generated items encode the right answer inconsistently: an option index,
a letter code, the literal option text, or for true/false statements any
boolean-like value. Everything here maps those encodings to one
canonical value without raising.
"""
import logging
import numbers

logger = logging.getLogger(__name__)

LETTER_INDEX = {"a": 0, "b": 1, "c": 2, "d": 3}
TRUE_WORDS = {"true", "1", "yes"}
# Checked in priority order
TRUE_FALSE_KEYS = ("is_correct", "correct_answer", "answer")


def _text(val) -> str:
    if val is None:
        return ""
    return val if isinstance(val, str) else str(val)


def option_texts(opts) -> list:
    """Flatten options given as a list or as a letter-keyed object."""
    if isinstance(opts, dict):
        return [_text(opts[k]) for k in sorted(opts.keys(), key=lambda x: str(x))]
    if isinstance(opts, (list, tuple)):
        return [_text(o) for o in opts]
    return []


def raw_correct_answer(item: dict):
    if "correct_answer" in item:
        return item["correct_answer"]
    return item.get("answer")


def _valid_index(val, options) -> bool:
    if isinstance(val, bool) or not isinstance(val, numbers.Real):
        return False
    if isinstance(val, numbers.Integral):
        return 0 <= val < len(options)
    return float(val).is_integer() and 0 <= val < len(options)


def resolve_correct_content(raw, options):
    """Return the text of the option ``raw`` designates, or None.

    Precedence: numeric index, letter a-d, exact case-insensitive text,
    then a two-way substring match where the first option in order wins.
    """
    if isinstance(raw, numbers.Real) and not isinstance(raw, bool):
        if _valid_index(raw, options):
            return options[int(raw)]
        return None
    if not isinstance(raw, str) or not raw.strip():
        return None

    wanted = raw.strip()
    idx = LETTER_INDEX.get(wanted.lower())
    if idx is not None and idx < len(options):
        return options[idx]

    lowered = wanted.lower()
    for opt in options:
        if opt and opt.strip().lower() == lowered:
            return opt
    for opt in options:
        if opt and (lowered in opt.lower() or opt.lower() in lowered):
            return opt
    return None


def normalize_bool(v) -> bool:
    if v is None:
        return False
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.strip().lower() in TRUE_WORDS
    if isinstance(v, numbers.Number):
        return v == 1
    return bool(v)


def true_false_value(item: dict) -> bool:
    """Normalized truth of a true/false statement item.

    The first key present wins, even when its value is null.
    """
    for key in TRUE_FALSE_KEYS:
        if key in item:
            return normalize_bool(item[key])
    logger.debug("true/false item has none of %s", ", ".join(TRUE_FALSE_KEYS))
    return False


def answers_match(given, expected) -> bool:
    """Fill-in-blank comparison: trimmed, case-insensitive equality."""
    expected = _text(expected).strip()
    if not expected:
        return False
    return _text(given).strip().lower() == expected.lower()
