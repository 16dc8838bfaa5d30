"""Printable worksheets for a game payload.

Graded modes print the questions followed by an answer key; flashcards
print as sheets of twelve fronts followed by the matching backs mirrored
left-to-right, so a duplex print lines each back up with its front.
"""
import random
from typing import Iterable

from jinja2 import Environment, select_autoescape

from .answers import option_texts, true_false_value
from .modes import MODES, UPGRADE_TEXT, FillBlank
from .sanitize import sanitize_data

LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
CARDS_PER_SHEET = 12
COLUMNS = 3

_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))

PAGE = _env.from_string("""
<!DOCTYPE html>
<html lang="en"><head><meta charset="utf-8"><title>{{ title }}</title>
<style>
  body { font-family: Georgia, serif; margin: 2cm; }
  ol.questions > li { margin-bottom: 1.2em; break-inside: avoid; }
  ol.choices { list-style: upper-alpha; }
  .blank { display: inline-block; min-width: 8em; border-bottom: 1px solid #000; }
  .key { break-before: page; }
  .sheet { display: grid; grid-template-columns: repeat(3, 1fr); grid-auto-rows: 6.5cm; break-after: page; }
  .sheet div { border: 1px dashed #999; padding: .5cm; display: flex; align-items: center; justify-content: center; text-align: center; }
</style></head>
<body>
<h1>{{ title }}</h1>
{% if mode == "flashcard" %}
  {% for batch in batches %}
  <section class="sheet">{% for c in batch.fronts %}<div>{{ c.front }}</div>{% endfor %}</section>
  <section class="sheet">{% for c in batch.backs %}<div>{{ c.back }}</div>{% endfor %}</section>
  {% endfor %}
{% else %}
  <ol class="questions">
  {% for q in questions %}
    <li>
      {% if mode == "fill_blank" %}{{ q.before }}<span class="blank"></span>{{ q.after }}
      {% else %}{{ q.text }}{% endif %}
      {% if q.choices %}<ol class="choices">{% for c in q.choices %}<li>{{ c }}</li>{% endfor %}</ol>{% endif %}
      {% if mode == "true_false" %}<p>True / False</p>{% endif %}
      {% if mode == "qa" %}<p style="height:4em"></p>{% endif %}
    </li>
  {% endfor %}
  </ol>
  <section class="key">
    <h2>Answer key</h2>
    <ol>
    {% for q in questions %}
      <li><strong>{{ q.answer }}</strong>
        {% if q.key_points %}<ul>{% for k in q.key_points %}<li>{{ k }}</li>{% endfor %}</ul>{% endif %}
        {% if q.explanation %}<br><em>{{ q.explanation }}</em>{% endif %}
      </li>
    {% endfor %}
    </ol>
  </section>
{% endif %}
</body></html>
""".strip())


def _chunk(it: Iterable, size: int):
    lst = list(it)
    for i in range(0, len(lst), size):
        yield lst[i : i + size]


def _backs_for_fronts(fronts: list) -> list:
    padded = list(fronts) + [{"front": "", "back": ""} for _ in range(max(0, CARDS_PER_SHEET - len(fronts)))]
    backs = []
    for row in _chunk(padded, COLUMNS):
        backs.extend(reversed(row))
    return backs


def flashcard_batches(items) -> list:
    cards = [
        {"front": str(c.get("front") or ""), "back": str(c.get("back") or "")}
        for c in items
        if isinstance(c, dict)
    ]
    batches = []
    for chunk in _chunk(cards, CARDS_PER_SHEET):
        fronts = chunk + [{"front": "", "back": ""} for _ in range(CARDS_PER_SHEET - len(chunk))]
        batches.append({"fronts": fronts, "backs": _backs_for_fronts(fronts)})
    return batches


def _letter(idx: int) -> str:
    # Same sequence as CSS upper-alpha: A..Z, AA, AB, ...
    label = ""
    n = idx + 1
    while n:
        n, rem = divmod(n - 1, len(LETTERS))
        label = LETTERS[rem] + label
    return label


def _question_rows(mode, items, premium):
    rows = []
    for q in items:
        if not isinstance(q, dict):
            continue
        explanation = (q.get("explanation") or "") if premium else UPGRADE_TEXT
        if mode == "multiple_choice":
            choices = option_texts(q.get("options"))
            idx = q.get("correct_answer")
            answer = "?"
            if isinstance(idx, int) and not isinstance(idx, bool) and 0 <= idx < len(choices):
                answer = f"{_letter(idx)}. {choices[idx]}"
            rows.append({"text": q.get("question") or "", "choices": choices, "answer": answer, "explanation": explanation})
        elif mode == "true_false":
            rows.append({
                "text": q.get("statement") or q.get("question") or "",
                "answer": "True" if true_false_value(q) else "False",
                "explanation": explanation,
            })
        elif mode == "fill_blank":
            before, after = FillBlank.parts(q)
            rows.append({"before": before, "after": after, "answer": q.get("hidden_word") or "?", "explanation": explanation})
        else:
            points = q.get("key_points")
            rows.append({
                "text": q.get("question") or "",
                "answer": q.get("suggested_answer") or "",
                "key_points": points if isinstance(points, list) else [],
            })
    return rows


def render_worksheet(raw, mode: str, title: str = "Worksheet", premium: bool = False,
                     rng: random.Random = None) -> str:
    """Render a payload as a standalone printable HTML page."""
    if mode not in MODES:
        raise ValueError(f"unknown mode: {mode}")
    items = MODES[mode].prepare(sanitize_data(raw), rng)
    if mode == "flashcard":
        return PAGE.render(title=title, mode=mode, batches=flashcard_batches(items))
    return PAGE.render(title=title, mode=mode, questions=_question_rows(mode, items, premium))
