"""Per-mode game rules and the view context each mode renders from.

Every mode works on the same :class:`~games.session.GameSession`; only
the state machine differs. Multiple-choice and true/false lock on the
first answer, fill-in-blank locks once correct, and flashcards and Q&A
only toggle between hidden and revealed.
"""
import logging
import random

from .answers import answers_match, normalize_bool, option_texts, true_false_value
from .session import GameSession, ItemState
from .shuffle import prepare_mcq

logger = logging.getLogger(__name__)

BLANK = "[BLANK]"
UPGRADE_TEXT = "(Upgrade to Pro to view)"


def _field(item, key, default=""):
    if isinstance(item, dict):
        val = item.get(key)
        if val is not None:
            return val
    return default


def score_and_streak(answers):
    # answers: list[bool] indicating correctness per answered item
    score = sum(1 for a in answers if a)
    streak = 0
    for a in reversed(answers):
        if a:
            streak += 1
        else:
            break
    longest = 0
    cur = 0
    for a in answers:
        if a:
            cur += 1
            longest = max(longest, cur)
        else:
            cur = 0
    return score, streak, longest


class GameMode:
    name = ""
    label = ""
    template = ""
    graded = True

    def prepare(self, items, rng=None) -> list:
        return list(items)

    def submit(self, game: GameSession, index: int, value):
        """Record an answer. Returns its correctness, or None for a no-op."""
        return None

    def is_correct(self, item, value) -> bool:
        return False

    def items_context(self, game: GameSession, premium: bool) -> list:
        return []

    def context(self, game: GameSession, premium: bool) -> dict:
        ctx = {"items": self.items_context(game, premium)}
        if self.graded:
            results = [
                self.is_correct(item, game.answer(i))
                for i, item in enumerate(game.items)
                if game.has_answer(i)
            ]
            score, streak, longest = score_and_streak(results)
            ctx["stats"] = {
                "answered": len(results),
                "total": len(game),
                "score": score,
                "streak": streak,
                "longest": longest,
            }
        return ctx

    def explanation(self, item, premium: bool) -> str:
        return _field(item, "explanation") if premium else UPGRADE_TEXT


class MultipleChoice(GameMode):
    name = "multiple_choice"
    label = "Multiple choice"
    template = "games/multiple_choice.html"

    def prepare(self, items, rng=None):
        return prepare_mcq(items, rng)

    def is_correct(self, item, value):
        return value is not None and value == _field(item, "correct_answer", None)

    def submit(self, game, index, value):
        if game.has_answer(index):
            return None
        try:
            choice = int(value)
        except (TypeError, ValueError):
            return None
        if not 0 <= choice < len(option_texts(_field(game.items[index], "options", []))):
            return None
        game.set_answer(index, choice)
        game.set_state(index, ItemState.ANSWERED)
        return self.is_correct(game.items[index], choice)

    def items_context(self, game, premium):
        out = []
        for i, q in enumerate(game.items):
            chosen = game.answer(i)
            answered = game.has_answer(i)
            correct_idx = _field(q, "correct_answer", None)
            options = []
            for j, text in enumerate(option_texts(_field(q, "options", []))):
                if not answered:
                    mark = ""
                elif j == correct_idx:
                    mark = "correct"
                elif j == chosen:
                    mark = "wrong"
                else:
                    mark = "muted"
                options.append({"index": j, "text": text, "mark": mark})
            out.append({
                "index": i,
                "question": _field(q, "question"),
                "options": options,
                "answered": answered,
                "is_correct": answered and chosen == correct_idx,
                "explanation": self.explanation(q, premium) if answered else "",
            })
        return out


class TrueFalse(GameMode):
    name = "true_false"
    label = "True / False"
    template = "games/true_false.html"

    def is_correct(self, item, value):
        truth = true_false_value(item) if isinstance(item, dict) else False
        return value is not None and value == truth

    def submit(self, game, index, value):
        if game.has_answer(index) or value is None:
            return None
        choice = normalize_bool(value)
        game.set_answer(index, choice)
        game.set_state(index, ItemState.ANSWERED)
        return self.is_correct(game.items[index], choice)

    def items_context(self, game, premium):
        out = []
        for i, item in enumerate(game.items):
            answered = game.has_answer(i)
            chosen = game.answer(i)
            truth = true_false_value(item) if isinstance(item, dict) else False
            buttons = []
            for value, text in ((True, "True"), (False, "False")):
                if not answered:
                    mark = ""
                elif truth is value:
                    mark = "correct"
                elif chosen is value:
                    mark = "wrong"
                else:
                    mark = "muted"
                buttons.append({"value": "true" if value else "false", "text": text, "mark": mark})
            out.append({
                "index": i,
                "statement": _field(item, "statement") or _field(item, "question") or "Unknown statement",
                "buttons": buttons,
                "answered": answered,
                "is_correct": answered and chosen == truth,
                "explanation": self.explanation(item, premium) if answered else "",
            })
        return out


class Flashcard(GameMode):
    name = "flashcard"
    label = "Flashcards"
    template = "games/flashcard.html"
    graded = False

    def flip(self, game):
        game.flipped = not game.flipped

    def step(self, game, delta: int):
        # Flip back first so the next card opens on its front
        game.flipped = False
        if len(game):
            game.card = (game.card + delta + len(game)) % len(game)

    def items_context(self, game, premium):
        card = game.items[game.card % len(game)] if len(game) else {}
        return [{
            "index": game.card,
            "front": _field(card, "front"),
            "back": _field(card, "back"),
            "flipped": game.flipped,
        }]

    def context(self, game, premium):
        ctx = super().context(game, premium)
        ctx["card"] = ctx["items"][0]
        ctx["position"] = game.card + 1
        ctx["total"] = len(game)
        return ctx


class FillBlank(GameMode):
    name = "fill_blank"
    label = "Fill in the blank"
    template = "games/fill_blank.html"

    def is_correct(self, item, value):
        return answers_match(value, _field(item, "hidden_word", None))

    def submit(self, game, index, value):
        if game.state(index, ItemState.PENDING) is ItemState.CORRECT:
            return None
        if not value or not str(value).strip():
            return None
        correct = self.is_correct(game.items[index], value)
        game.set_answer(index, str(value))
        game.set_state(index, ItemState.CORRECT if correct else ItemState.WRONG)
        return correct

    @staticmethod
    def parts(item):
        sentence = _field(item, "sentence_with_blank")
        if isinstance(sentence, str) and BLANK in sentence:
            before, after = sentence.split(BLANK, 1)
            return before, after
        return _field(item, "question") or "Broken question", ""

    def items_context(self, game, premium):
        out = []
        for i, item in enumerate(game.items):
            before, after = self.parts(item)
            out.append({
                "index": i,
                "before": before,
                "after": after,
                "value": game.answer(i) or "",
                "status": game.state(i, ItemState.PENDING).value,
                "hidden_word": _field(item, "hidden_word"),
            })
        return out


class QuestionAnswer(GameMode):
    name = "qa"
    label = "Q&A"
    template = "games/qa.html"
    graded = False

    def toggle(self, game, index):
        state = game.state(index, ItemState.HIDDEN)
        game.set_state(index, ItemState.HIDDEN if state is ItemState.REVEALED else ItemState.REVEALED)

    def items_context(self, game, premium):
        out = []
        for i, q in enumerate(game.items):
            points = _field(q, "key_points", [])
            out.append({
                "index": i,
                "question": _field(q, "question"),
                "suggested_answer": _field(q, "suggested_answer"),
                "key_points": points if isinstance(points, list) else [],
                "revealed": game.state(i, ItemState.HIDDEN) is ItemState.REVEALED,
            })
        return out


MODES = {m.name: m for m in (MultipleChoice(), TrueFalse(), Flashcard(), FillBlank(), QuestionAnswer())}


def start_game(mode: str, items, title="", rng: random.Random = None) -> GameSession:
    game_mode = MODES[mode]
    game = GameSession(mode, game_mode.prepare(items, rng), title=title)
    logger.info("started %s game %s with %d items", mode, game.id, len(game))
    return game
