import json
import logging
from pathlib import Path

from django.conf import settings
from django.http import Http404, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods, require_POST

from .answers import normalize_bool
from .modes import MODES, start_game
from .sanitize import MalformedPayload, load_payload, payload_mode, sanitize_data
from .session import is_premium, load_game, save_game
from .signals import answer_recorded, load_mistakes, mistakes_path

logger = logging.getLogger(__name__)


def _data_dir() -> Path:
    return Path(settings.STUDYGAMES_DATA_DIR)


def _decode(raw):
    """Decode raw generator text; undecodable text becomes an empty game."""
    if not isinstance(raw, (str, bytes)):
        return raw
    try:
        return load_payload(raw)
    except MalformedPayload as exc:
        logger.warning("%s", exc)
        return None


def _start(request, mode, raw, title=""):
    game = start_game(mode, sanitize_data(raw), title=title)
    save_game(request.session, game)
    return game


def _game_url(game, index=None):
    url = reverse("game", args=[game.id])
    return url if index is None else f"{url}#item-{index}"


def _get_game(request, game_id):
    game = load_game(request.session, game_id)
    if game is None:
        raise Http404("Game not found")
    return game


def _list_payload_files():
    base = _data_dir()
    if not base.exists():
        return []
    skip = mistakes_path().resolve() if mistakes_path() else None
    files = []
    for p in sorted(base.rglob("*.json")):
        if skip and p.resolve() == skip:
            continue
        try:
            mode = payload_mode(_decode(p.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError):
            mode = None
        modes = [mode] if mode else list(MODES)
        relpath = str(p.relative_to(base)).replace("\\", "/")
        files.append({
            "name": p.stem,
            "links": [
                {"label": MODES[m].label, "url": reverse("play", args=[m, relpath])}
                for m in modes
            ],
        })
    return files


# ---------- Pages ----------

def home(request):
    counts = {}
    for m in load_mistakes():
        if isinstance(m, dict) and m.get("mode") in MODES:
            counts[m["mode"]] = counts.get(m["mode"], 0) + 1
    ctx = {
        "files": _list_payload_files(),
        "mistakes": [
            {"label": MODES[m].label, "count": n, "url": reverse("mistakes", args=[m])}
            for m, n in counts.items()
        ],
        "premium": is_premium(request),
    }
    return render(request, "games/home.html", ctx)


def play(request, mode, fname):
    if mode not in MODES:
        raise Http404("Unknown mode")
    base = _data_dir().resolve()
    # Normalize and prevent path traversal
    target = (base / fname).resolve()
    if (
        target.suffix.lower() != ".json"
        or not target.is_file()
        or not target.is_relative_to(base)
    ):
        return redirect("home")
    raw = _decode(target.read_text(encoding="utf-8", errors="replace"))
    game = _start(request, mode, raw, title=target.stem)
    return redirect(_game_url(game))


def game_view(request, game_id):
    game = _get_game(request, game_id)
    mode = MODES[game.mode]
    base_ctx = {
        "game": game,
        "mode": mode,
        "premium": is_premium(request),
        "flip_back_ms": settings.STUDYGAMES_FLIP_BACK_MS,
    }
    if not len(game):
        return render(request, "games/error.html", base_ctx)
    ctx = {**base_ctx, **mode.context(game, base_ctx["premium"])}
    return render(request, mode.template, ctx)


def mistakes(request, mode):
    if mode not in MODES:
        raise Http404("Unknown mode")
    seen = set()
    items = []
    for m in load_mistakes():
        if not isinstance(m, dict) or m.get("mode") != mode:
            continue
        key = json.dumps(m.get("item"), sort_keys=True)
        if key not in seen:
            seen.add(key)
            items.append(m.get("item"))
    if not items:
        return redirect("home")
    game = _start(request, mode, items, title="Mistakes")
    return redirect(_game_url(game))


# ---------- State transitions ----------

def _item_index(request, game):
    try:
        index = int(request.POST.get("index"))
    except (TypeError, ValueError):
        return None
    return index if 0 <= index < len(game) else None


@require_POST
def answer(request, game_id):
    game = _get_game(request, game_id)
    index = _item_index(request, game)
    if index is None:
        return redirect(_game_url(game))
    correct = MODES[game.mode].submit(game, index, request.POST.get("value"))
    if correct is not None:
        save_game(request.session, game)
        answer_recorded.send(
            sender=MODES[game.mode].__class__,
            game=game,
            index=index,
            value=game.answer(index),
            correct=correct,
        )
    return redirect(_game_url(game, index))


@require_POST
def reveal(request, game_id):
    game = _get_game(request, game_id)
    index = _item_index(request, game)
    if index is not None and game.mode == "qa":
        MODES["qa"].toggle(game, index)
        save_game(request.session, game)
    return redirect(_game_url(game, index))


@require_POST
def flip(request, game_id):
    game = _get_game(request, game_id)
    if game.mode == "flashcard":
        MODES["flashcard"].flip(game)
        save_game(request.session, game)
    return redirect(_game_url(game))


def _step(request, game_id, delta):
    game = _get_game(request, game_id)
    if game.mode == "flashcard":
        MODES["flashcard"].step(game, delta)
        save_game(request.session, game)
    return redirect(_game_url(game))


@require_POST
def next_card(request, game_id):
    return _step(request, game_id, 1)


@require_POST
def prev_card(request, game_id):
    return _step(request, game_id, -1)


# ---------- API ----------

@csrf_exempt
@require_http_methods(["POST"])
def api_game(request):
    try:
        payload = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return JsonResponse({"ok": False, "error": "invalid json"}, status=400)
    if not isinstance(payload, dict):
        return JsonResponse({"ok": False, "error": "invalid payload"}, status=400)

    raw = _decode(payload.get("data"))
    mode = payload.get("mode") or payload_mode(raw)
    if not isinstance(mode, str) or mode not in MODES:
        return JsonResponse({"ok": False, "error": "unknown mode"}, status=400)
    if "is_premium" in payload:
        request.session["is_premium"] = normalize_bool(payload["is_premium"])

    title = payload.get("title")
    game = _start(request, mode, raw, title=title if isinstance(title, str) else "")
    return JsonResponse({"ok": True, "game": game.id, "items": len(game), "url": _game_url(game)})
