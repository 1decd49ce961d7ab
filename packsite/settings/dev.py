# packsite/settings/dev.py
# export DJANGO_SETTINGS_MODULE=packsite.settings.dev

from .base import *

DEBUG = True

ALLOWED_HOSTS = ["127.0.0.1", "localhost", "testserver"]

# Dev: pas de redirection SSL forcée
SECURE_SSL_REDIRECT = False

# Dev: manifest relu à chaque requête (voir configs/packs.yml, section development)
PACKS_ENV = os.getenv("PACKS_ENV", "development")

WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = True

LOGGING["loggers"]["packs.manifest"]["level"] = os.getenv("PACKS_LOG_LEVEL", "DEBUG")
