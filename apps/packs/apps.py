# apps/packs/apps.py
from django.apps import AppConfig
import logging

log = logging.getLogger("packs.apps")


class PacksAppConfig(AppConfig):
    name = "apps.packs"
    label = "packs"
    verbose_name = "Packs"

    def ready(self):
        # Enregistre les system checks et le reset sur setting_changed
        from . import checks, conf  # noqa: F401

        log.debug("PacksConfig ready")
