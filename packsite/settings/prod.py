# packsite/settings/prod.py
from .base import *

DEBUG = False
PACKS_ENV = os.getenv("PACKS_ENV", "production")

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
