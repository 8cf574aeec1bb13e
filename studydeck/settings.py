"""
Django settings for the studydeck review scheduler.

Everything deployment specific is read from STUDYDECK_* environment variables.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name, default=False):
    return os.environ.get(name, str(default)).lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("STUDYDECK_SECRET_KEY", "dev-insecure-secret-key")
DEBUG = _env_flag("STUDYDECK_DEBUG", True)
ALLOWED_HOSTS = os.environ.get("STUDYDECK_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

# "development", "production" or "test"; selects the log renderer
STUDYDECK_ENVIRONMENT = os.environ.get("STUDYDECK_ENVIRONMENT", "development")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "scheduler.apps.SchedulerConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "studydeck.urls"
WSGI_APPLICATION = "studydeck.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("STUDYDECK_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = os.environ.get("STUDYDECK_TIME_ZONE", "UTC")
LANGUAGE_CODE = "en-us"
USE_I18N = False

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "EXCEPTION_HANDLER": "scheduler.api.exceptions.exception_handler",
}
