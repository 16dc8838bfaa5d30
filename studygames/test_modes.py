# Run: pytest -q

import random

import pytest

from games.modes import MODES, UPGRADE_TEXT, FillBlank, score_and_streak, start_game
from games.session import GameSession, ItemState

MCQ = [
    {"question": "2 + 2?", "options": ["3", "4", "5"], "correct_answer": 1, "explanation": "Arithmetic."},
    {"question": "Capital of France?", "options": ["Paris", "Rome"], "correct_answer": "a", "explanation": "Paris."},
]
TF = [
    {"statement": "Water boils at 100 C at sea level.", "is_correct": "yes", "explanation": "At 1 atm."},
    {"question": "The Sun orbits the Earth.", "answer": 0, "explanation": "Heliocentrism."},
]
CARDS = [{"front": "a", "back": "A"}, {"front": "b", "back": "B"}, {"front": "c", "back": "C"}]
BLANKS = [
    {"sentence_with_blank": "WWII ended in [BLANK].", "hidden_word": " 1945 "},
    {"question": "Who wrote Hamlet?", "hidden_word": "Shakespeare"},
    {"sentence_with_blank": "No answer here [BLANK]."},
]
QA = [
    {"question": "Why?", "suggested_answer": "Because.", "key_points": ["one", "two"]},
    {"question": "How?", "suggested_answer": "Carefully."},
]


def _correct_index(game, i):
    return game.items[i]["correct_answer"]


def test_registry_uses_generator_mode_names():
    assert set(MODES) == {"multiple_choice", "true_false", "flashcard", "fill_blank", "qa"}


def test_mcq_first_answer_wins():
    game = start_game("multiple_choice", MCQ, rng=random.Random(1))
    mode = MODES["multiple_choice"]
    right = _correct_index(game, 0)
    wrong = (right + 1) % 3

    assert mode.submit(game, 0, str(wrong)) is False
    assert mode.submit(game, 0, str(right)) is None
    assert game.answer(0) == wrong
    assert game.state(0, ItemState.UNANSWERED) is ItemState.ANSWERED


@pytest.mark.parametrize("value", [None, "", "x", "7", "-1"])
def test_mcq_ignores_invalid_choices(value):
    game = start_game("multiple_choice", MCQ, rng=random.Random(1))
    assert MODES["multiple_choice"].submit(game, 0, value) is None
    assert not game.has_answer(0)


def test_mcq_context_marks_options_and_locks_explanation():
    game = start_game("multiple_choice", MCQ, rng=random.Random(2))
    mode = MODES["multiple_choice"]
    right = _correct_index(game, 0)
    wrong = (right + 1) % 3
    mode.submit(game, 0, wrong)

    ctx = mode.context(game, premium=False)
    first, second = ctx["items"]
    marks = {o["index"]: o["mark"] for o in first["options"]}
    assert marks[right] == "correct"
    assert marks[wrong] == "wrong"
    assert list(marks.values()).count("muted") == 1
    assert first["explanation"] == UPGRADE_TEXT
    assert first["is_correct"] is False
    assert second["answered"] is False
    assert all(o["mark"] == "" for o in second["options"])
    assert ctx["stats"] == {"answered": 1, "total": 2, "score": 0, "streak": 0, "longest": 0}

    assert mode.context(game, premium=True)["items"][0]["explanation"] == "Arithmetic."


def test_true_false_answers_and_lock():
    game = start_game("true_false", TF)
    mode = MODES["true_false"]
    assert mode.submit(game, 0, "true") is True
    assert mode.submit(game, 0, "false") is None
    assert mode.submit(game, 1, "false") is True
    assert game.answer(0) is True and game.answer(1) is False

    items = mode.context(game, premium=True)["items"]
    assert items[1]["statement"] == "The Sun orbits the Earth."
    assert [b["mark"] for b in items[1]["buttons"]] == ["muted", "correct"]
    assert items[0]["explanation"] == "At 1 atm."


def test_true_false_wrong_pick_is_marked():
    game = start_game("true_false", TF)
    mode = MODES["true_false"]
    assert mode.submit(game, 0, "false") is False
    buttons = mode.context(game, premium=False)["items"][0]["buttons"]
    assert [b["mark"] for b in buttons] == ["correct", "wrong"]


def test_true_false_missing_statement_gets_placeholder():
    game = start_game("true_false", [{"is_correct": True}])
    assert MODES["true_false"].context(game, False)["items"][0]["statement"] == "Unknown statement"


def test_flashcard_wraps_around():
    game = start_game("flashcard", CARDS)
    mode = MODES["flashcard"]
    game.card = 2
    mode.step(game, 1)
    assert game.card == 0
    mode.step(game, -1)
    assert game.card == 2


def test_flashcard_navigation_resets_flip():
    game = start_game("flashcard", CARDS)
    mode = MODES["flashcard"]
    mode.flip(game)
    assert mode.context(game, False)["card"]["flipped"] is True
    mode.step(game, 1)
    ctx = mode.context(game, False)
    assert ctx["card"] == {"index": 1, "front": "b", "back": "B", "flipped": False}
    assert (ctx["position"], ctx["total"]) == (2, 3)
    assert "stats" not in ctx


def test_fill_blank_retries_until_correct_then_locks():
    game = start_game("fill_blank", BLANKS)
    mode = MODES["fill_blank"]
    assert mode.submit(game, 0, "1944") is False
    assert game.state(0, ItemState.PENDING) is ItemState.WRONG
    assert mode.submit(game, 0, "1944") is False
    assert mode.submit(game, 0, "1945") is True
    assert game.state(0, ItemState.PENDING) is ItemState.CORRECT
    assert mode.submit(game, 0, "1946") is None
    assert game.answer(0) == "1945"


def test_fill_blank_empty_input_is_ignored():
    game = start_game("fill_blank", BLANKS)
    assert MODES["fill_blank"].submit(game, 0, "   ") is None
    assert game.state(0, ItemState.PENDING) is ItemState.PENDING


def test_fill_blank_without_hidden_word_is_always_wrong():
    game = start_game("fill_blank", BLANKS)
    assert MODES["fill_blank"].submit(game, 2, "anything") is False


def test_fill_blank_parts():
    assert FillBlank.parts(BLANKS[0]) == ("WWII ended in ", ".")
    assert FillBlank.parts(BLANKS[1]) == ("Who wrote Hamlet?", "")
    assert FillBlank.parts({}) == ("Broken question", "")


def test_qa_toggle_is_reversible():
    game = start_game("qa", QA)
    mode = MODES["qa"]
    mode.toggle(game, 1)
    items = mode.context(game, False)["items"]
    assert items[1]["revealed"] is True
    assert items[1]["key_points"] == []
    assert items[0]["revealed"] is False
    mode.toggle(game, 1)
    assert mode.context(game, False)["items"][1]["revealed"] is False


def test_game_session_round_trips_through_dict():
    game = start_game("fill_blank", BLANKS, title="History")
    MODES["fill_blank"].submit(game, 0, "1945")
    restored = GameSession.from_dict(game.to_dict())
    assert restored.id == game.id
    assert restored.title == "History"
    assert restored.answer(0) == "1945"
    assert restored.state(0, ItemState.PENDING) is ItemState.CORRECT


def test_score_and_streak():
    assert score_and_streak([]) == (0, 0, 0)
    assert score_and_streak([True, True, False, True]) == (3, 1, 2)
    assert score_and_streak([False, True, True, True]) == (3, 3, 3)
