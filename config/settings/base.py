"""
Shared settings for the World Cup standings service.

`local.py` and `test.py` start from here. Deployment-specific values come from
the environment (django-environ); the board's own knobs live in `TEAMS_CONFIG`
and are read from `TEAMS_*` variables by pydantic-settings.
"""

from pathlib import Path

import environ
from pydantic_settings import BaseSettings, SettingsConfigDict

from config.log import LOGGING

BASE_DIR = Path(__file__).resolve(strict=True).parent.parent.parent

env = environ.Env()
if env.bool("DJANGO_READ_DOT_ENV_FILE", default=False):
    env.read_env(str(BASE_DIR / ".env"))

# CORE
# ------------------------------------------------------------------------------
DEBUG = env.bool("DJANGO_DEBUG", False)
SECRET_KEY = env("DJANGO_SECRET_KEY", default=None)
ALLOWED_HOSTS = env.list("DJANGO_ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=["*"])

ROOT_URLCONF = "config.urls"
ASGI_APPLICATION = "config.asgi.application"
APPEND_SLASH = False

TIME_ZONE = "UTC"
USE_TZ = True
LANGUAGE_CODE = "en-us"
USE_I18N = False

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "apps.teams.apps.TeamsConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# STORAGE
# ------------------------------------------------------------------------------
# One local table of teams. SQLite beside the project unless DATABASE_URL is set.
DATABASES = {
    "default": env.db_url("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'worldcup.sqlite3'}"),
}
DATABASES["default"]["ATOMIC_REQUESTS"] = False
DATABASES["default"]["CONN_MAX_AGE"] = env.int("CONN_MAX_AGE", default=0)
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# TEAMS
# ------------------------------------------------------------------------------
class TeamsSettings(BaseSettings):
    SEED_PATH: Path = BASE_DIR / "apps" / "teams" / "data" / "seed.json"
    DEFAULT_IMAGE_NAME: str = "wenderland-flag"
    SKIP_INVALID_SEED_ROWS: bool = False
    SEED_ON_STARTUP: bool = True

    model_config = SettingsConfigDict(env_prefix="TEAMS_", frozen=True)


TEAMS_CONFIG = TeamsSettings()
