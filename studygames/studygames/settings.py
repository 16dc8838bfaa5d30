"""
Django settings for the studygames project.

Every value can be overridden from the environment; manage.py loads a
local .env file first for development.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-secret-change-me")
DEBUG = _env_bool("DJANGO_DEBUG", True)
ALLOWED_HOSTS = [h.strip() for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.sessions",
    "games",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "studygames.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.template.context_processors.csrf",
            ],
        },
    },
]

WSGI_APPLICATION = "studygames.wsgi.application"
ASGI_APPLICATION = "studygames.asgi.application"

# No database: games live in the session, sessions live in memory
DATABASES = {}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "studygames",
    }
}
SESSION_ENGINE = "django.contrib.sessions.backends.cache"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# ---------- Study games ----------

STUDYGAMES_DATA_DIR = Path(os.environ.get("STUDYGAMES_DATA_DIR", BASE_DIR / "games" / "data"))
# Entitlement used when the session carries no is_premium flag
STUDYGAMES_PREMIUM = _env_bool("STUDYGAMES_PREMIUM", False)
# Empty string disables mistake recording
STUDYGAMES_MISTAKES_PATH = os.environ.get("STUDYGAMES_MISTAKES_PATH", str(STUDYGAMES_DATA_DIR / "mistakes.json")) or None
STUDYGAMES_MAX_GAMES = int(os.environ.get("STUDYGAMES_MAX_GAMES", "5"))
STUDYGAMES_FLIP_BACK_MS = int(os.environ.get("STUDYGAMES_FLIP_BACK_MS", "300"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "[{levelname}] {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "games": {
            "handlers": ["console"],
            "level": os.environ.get("STUDYGAMES_LOG_LEVEL", "INFO").upper(),
            "propagate": False,
        },
    },
}
