from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from games.answers import option_texts, raw_correct_answer, resolve_correct_content
from games.sanitize import MalformedPayload, load_payload, payload_mode, sanitize_data


class Command(BaseCommand):
    help = "Report how a generated game payload will be read: item count and unresolved answers"

    def add_arguments(self, parser):
        parser.add_argument("path", help="JSON payload file")
        parser.add_argument(
            "--mode",
            default=None,
            help="Game mode (default: the payload's own 'mode' key)",
        )

    def handle(self, *args, **opts):
        path = Path(opts["path"])
        try:
            raw = load_payload(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CommandError(f"cannot read {path}: {exc}")
        except MalformedPayload as exc:
            raise CommandError(f"{path}: {exc}")

        mode = opts["mode"] or payload_mode(raw) or "multiple_choice"
        items = sanitize_data(raw)
        if not items:
            self.stdout.write(self.style.ERROR(f"{path}: no items found"))
            return
        self.stdout.write(f"{path}: {len(items)} item(s), mode={mode}")

        if mode != "multiple_choice":
            return
        unresolved = 0
        for i, q in enumerate(items, start=1):
            if not isinstance(q, dict) or not q.get("options"):
                continue
            raw_answer = raw_correct_answer(q)
            if resolve_correct_content(raw_answer, option_texts(q["options"])) is None:
                unresolved += 1
                self.stdout.write(self.style.WARNING(
                    f"  question {i}: correct answer {raw_answer!r} matches no option"
                ))
        if unresolved:
            self.stdout.write(self.style.WARNING(f"{unresolved} unresolved answer(s) will get a random option"))
        else:
            self.stdout.write(self.style.SUCCESS("All correct answers resolved"))
