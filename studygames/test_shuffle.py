# Run: pytest -q

import copy
import random
from collections import Counter

import pytest

from games.shuffle import prepare_mcq, shuffle_options


def _item(correct):
    return {
        "question": "Capital of Germany?",
        "options": ["Paris", "London", "Berlin", "Madrid"],
        "correct_answer": correct,
        "explanation": "Berlin.",
    }


@pytest.mark.parametrize("correct", [2, "c", "C", "berlin", " Berlin ", "Berl"])
def test_correct_index_follows_content(correct):
    rng = random.Random(7)
    for _ in range(1000):
        out = shuffle_options(_item(correct), rng)
        assert out["options"][out["correct_answer"]] == "Berlin"
        assert sorted(out["options"]) == ["Berlin", "London", "Madrid", "Paris"]


def test_input_is_not_mutated():
    item = _item("c")
    before = copy.deepcopy(item)
    out = shuffle_options(item, random.Random(1))
    assert item == before
    assert out is not item
    assert out["question"] == item["question"]
    assert out["explanation"] == item["explanation"]


def test_unresolved_answer_falls_back_uniformly():
    rng = random.Random(42)
    trials = 4000
    counts = Counter(shuffle_options(_item("xyz"), rng)["correct_answer"] for _ in range(trials))
    assert set(counts) == {0, 1, 2, 3}
    for idx in range(4):
        assert 0.8 * trials / 4 < counts[idx] < 1.2 * trials / 4


@pytest.mark.parametrize("correct", [None, 9, -1, ""])
def test_fallback_index_is_always_in_range(correct):
    rng = random.Random(3)
    for _ in range(200):
        out = shuffle_options(_item(correct), rng)
        assert 0 <= out["correct_answer"] < 4


def test_item_without_options_is_returned_as_is():
    item = {"question": "Broken", "correct_answer": 1}
    assert shuffle_options(item) is item


@pytest.mark.parametrize("options", ["A) Paris B) Rome", 42, True, [], {}])
def test_unusable_options_are_left_alone(options):
    item = {"question": "Broken", "options": options, "correct_answer": 0}
    assert shuffle_options(item, random.Random(0)) is item


@pytest.mark.parametrize("correct", [10**400, -(10**400)])
def test_huge_index_falls_back_in_range(correct):
    rng = random.Random(11)
    for _ in range(50):
        out = shuffle_options(_item(correct), rng)
        assert 0 <= out["correct_answer"] < 4


def test_letter_keyed_options_are_flattened():
    item = {"question": "?", "options": {"A": "Paris", "B": "London"}, "answer": "B"}
    out = shuffle_options(item, random.Random(5))
    assert isinstance(out["options"], list)
    assert out["options"][out["correct_answer"]] == "London"


def test_prepare_mcq_wraps_non_dict_items():
    out = prepare_mcq(["just text", None, _item(0)], random.Random(0))
    assert out[0] == {"question": "just text"}
    assert out[1] == {"question": ""}
    assert out[2]["options"][out[2]["correct_answer"]] == "Paris"
