"""Settings used by the pytest-django test run."""

from .base import *

DEBUG = False
SECRET_KEY = "test-secret-key-not-for-production"  # noqa: S105
ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    },
}

TEAMS_CONFIG = TeamsSettings(SEED_ON_STARTUP=False)
