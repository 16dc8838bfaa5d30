import logging
import random

from .answers import option_texts, raw_correct_answer, resolve_correct_content

logger = logging.getLogger(__name__)


def shuffle_options(item: dict, rng: random.Random = None) -> dict:
    """Return a copy of an MCQ item with its options shuffled.

    ``correct_answer`` is rewritten to the new position of the resolved
    correct option. When no option can be identified, a uniformly random
    index is used instead of always pointing at the first option.
    """
    rng = rng or random
    options = option_texts(item.get("options"))
    if not options:
        return item
    content = resolve_correct_content(raw_correct_answer(item), options)

    shuffled = list(options)
    rng.shuffle(shuffled)

    new_index = shuffled.index(content) if content else -1
    if new_index == -1:
        new_index = rng.randrange(len(shuffled))
        logger.debug(
            "unresolved correct answer %r, falling back to option %d",
            raw_correct_answer(item),
            new_index,
        )
    return {**item, "options": shuffled, "correct_answer": new_index}


def prepare_mcq(items, rng: random.Random = None) -> list:
    out = []
    for q in items:
        if not isinstance(q, dict):
            q = {"question": "" if q is None else str(q)}
        out.append(shuffle_options(q, rng))
    return out
