from django.apps import AppConfig


class GamesConfig(AppConfig):
    name = "games"
    verbose_name = "Study games"

    def ready(self):
        # Connect the answer receivers
        from . import signals  # noqa: F401
