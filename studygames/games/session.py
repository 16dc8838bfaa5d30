import enum
import uuid

from django.conf import settings

SESSION_KEY = "games"


class ItemState(str, enum.Enum):
    UNANSWERED = "unanswered"
    ANSWERED = "answered"
    PENDING = "pending"
    WRONG = "wrong"
    CORRECT = "correct"
    HIDDEN = "hidden"
    REVEALED = "revealed"


class GameSession:
    """One started game: its items and the per-item interaction state.

    Stored as a plain dict in the user's session. Answer keys are the
    item index as a string since session data round-trips through JSON.
    """

    def __init__(self, mode, items, title="", game_id=None, answers=None,
                 states=None, card=0, flipped=False):
        self.id = game_id or uuid.uuid4().hex[:12]
        self.mode = mode
        self.title = title
        self.items = list(items)
        self.answers = dict(answers or {})
        self.states = dict(states or {})
        self.card = card
        self.flipped = flipped

    def __len__(self):
        return len(self.items)

    def answer(self, index):
        return self.answers.get(str(index))

    def has_answer(self, index) -> bool:
        return str(index) in self.answers

    def set_answer(self, index, value):
        self.answers[str(index)] = value

    def state(self, index, default: ItemState) -> ItemState:
        return ItemState(self.states.get(str(index), default.value))

    def set_state(self, index, state: ItemState):
        self.states[str(index)] = state.value

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "mode": self.mode,
            "title": self.title,
            "items": self.items,
            "answers": self.answers,
            "states": self.states,
            "card": self.card,
            "flipped": self.flipped,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameSession":
        return cls(
            data["mode"],
            data.get("items") or [],
            title=data.get("title", ""),
            game_id=data["id"],
            answers=data.get("answers"),
            states=data.get("states"),
            card=data.get("card", 0),
            flipped=data.get("flipped", False),
        )


def load_game(session, game_id):
    data = session.get(SESSION_KEY, {}).get(game_id)
    return GameSession.from_dict(data) if data else None


def save_game(session, game: GameSession):
    games = session.get(SESSION_KEY, {})
    games.pop(game.id, None)
    games[game.id] = game.to_dict()
    # Oldest games go first
    limit = max(1, settings.STUDYGAMES_MAX_GAMES)
    while len(games) > limit:
        games.pop(next(iter(games)))
    session[SESSION_KEY] = games
    session.modified = True


def is_premium(request) -> bool:
    value = request.session.get("is_premium")
    if value is None:
        return bool(settings.STUDYGAMES_PREMIUM)
    return bool(value)
