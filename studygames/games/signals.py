import json
import logging
from pathlib import Path

from django.conf import settings
from django.dispatch import Signal, receiver

logger = logging.getLogger(__name__)

# Sent after an answer is recorded: game, index, value, correct
answer_recorded = Signal()


def mistakes_path():
    path = getattr(settings, "STUDYGAMES_MISTAKES_PATH", None)
    return Path(path) if path else None


def load_mistakes() -> list:
    path = mistakes_path()
    if not path or not path.exists():
        return []
    try:
        txt = path.read_text(encoding="utf-8").strip()
        data = json.loads(txt) if txt else []
    except (OSError, ValueError) as exc:
        logger.warning("could not read mistakes from %s: %s", path, exc)
        return []
    return data if isinstance(data, list) else []


def append_mistake(obj: dict):
    path = mistakes_path()
    if not path:
        return
    items = load_mistakes()
    items.append(obj)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as exc:
        logger.warning("could not record mistake in %s: %s", path, exc)


@receiver(answer_recorded)
def log_answer(sender, game, index, value, correct, **kwargs):
    logger.info("game %s (%s) item %d answered %r: %s",
                game.id, game.mode, index, value, "correct" if correct else "wrong")


@receiver(answer_recorded)
def record_mistake(sender, game, index, value, correct, **kwargs):
    if correct:
        return
    append_mistake({"mode": game.mode, "item": game.items[index], "answer": value})
