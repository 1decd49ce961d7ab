# packsite/settings/test.py
from .dev import *  # noqa: F401,F403

PACKS_ENV = "test"

# Les tests écrivent leurs manifests dans des dossiers temporaires
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}
WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = False

LOGGING["root"]["level"] = "WARNING"
