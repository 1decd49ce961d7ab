# packsite/settings/base.py
from __future__ import annotations
import os
from pathlib import Path

# Optionnel en dev, inerte si .env absent
from dotenv import find_dotenv, load_dotenv

_dotenv_path = find_dotenv(filename=os.getenv("DOTENV_FILE", ".env"), usecwd=True)
if _dotenv_path:
    load_dotenv(_dotenv_path, override=False)

BASE_DIR = Path(__file__).resolve().parents[2]

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return bool(default)
    return str(value).strip().lower() in _TRUE_VALUES


# --------------------------------------------------------------------------------------
# Clés & debug
# --------------------------------------------------------------------------------------
SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME_DEV_ONLY")
DEBUG = False  # Par défaut: sécurisé. Dev.py le passera à True.

ALLOWED_HOSTS: list[str] = [h for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h]

# --------------------------------------------------------------------------------------
# Apps
# --------------------------------------------------------------------------------------
DJANGO_APPS = [
    "django.contrib.staticfiles",
]

LOCAL_APPS = [
    "apps.packs.apps.PacksAppConfig",
]

INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

# --------------------------------------------------------------------------------------
# Middleware
# WhiteNoise doit être juste après SecurityMiddleware
# --------------------------------------------------------------------------------------
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "apps.packs.middleware.PackRenderStateMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "packsite.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "packsite.wsgi.application"

DATABASES: dict = {}

USE_I18N = False
USE_TZ = True

# --------------------------------------------------------------------------------------
# Static & packs
# Le bundler écrit dans public/packs/ (manifest.json inclus) ; WhiteNoise sert public/.
# --------------------------------------------------------------------------------------
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STATICFILES_DIRS = [BASE_DIR / "static"] if (BASE_DIR / "static").exists() else []

WHITENOISE_ROOT = BASE_DIR / "public"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"
    },
}

PACKS_CONFIG_PATH = os.getenv("PACKS_CONFIG_PATH", str(BASE_DIR / "configs" / "packs.yml"))
PACKS_ENV = os.getenv("PACKS_ENV", "production")
PACKS_ASSET_HOST = os.getenv("PACKS_ASSET_HOST", "")

# --------------------------------------------------------------------------------------
# Sécurité (par défaut sûrs; dev.py relâche)
# --------------------------------------------------------------------------------------
SECURE_SSL_REDIRECT = env_flag("SECURE_SSL_REDIRECT", default=True)
SECURE_REFERRER_POLICY = "same-origin"
X_FRAME_OPTIONS = "DENY"

# --------------------------------------------------------------------------------------
# Logging (propre, exploitable)
# --------------------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "[{levelname}] {name}: {message}", "style": "{"},
        "verbose": {"format": "{asctime} [{levelname}] {name} {module}:{lineno} — {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "verbose"},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django.request": {"handlers": ["console"], "level": "WARNING", "propagate": True},
    },
}

LOGGING["loggers"].update({
    "packs.config": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    "packs.manifest": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    "packs.resolver": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    "packs.helper": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
})

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
