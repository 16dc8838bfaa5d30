from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from games.modes import MODES
from games.sanitize import MalformedPayload, load_payload, payload_mode
from games.worksheet import render_worksheet


class Command(BaseCommand):
    help = "Render a game payload as a printable HTML worksheet"

    def add_arguments(self, parser):
        parser.add_argument("path", help="JSON payload file")
        parser.add_argument("--mode", choices=sorted(MODES), default=None)
        parser.add_argument("--out", default=None, help="Output file (default: <path>.html)")
        parser.add_argument(
            "--premium",
            action="store_true",
            help="Include explanations in the answer key",
        )

    def handle(self, *args, **opts):
        path = Path(opts["path"])
        try:
            raw = load_payload(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CommandError(f"cannot read {path}: {exc}")
        except MalformedPayload as exc:
            raise CommandError(f"{path}: {exc}")

        mode = opts["mode"] or payload_mode(raw)
        if not mode:
            raise CommandError("payload has no 'mode'; pass --mode")
        out = Path(opts["out"]) if opts["out"] else path.with_suffix(".html")
        html = render_worksheet(raw, mode, title=path.stem, premium=opts["premium"])
        out.write_text(html, encoding="utf-8")
        self.stdout.write(self.style.SUCCESS(f"Wrote {out}"))
