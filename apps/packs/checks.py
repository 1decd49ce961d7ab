from __future__ import annotations

from django.core.checks import Error, Warning, register

from .conf import build_config, config_path
from .exceptions import PacksConfigError


@register()
def packs_config_check(app_configs, **kwargs):
    path = config_path()
    if not path.exists():
        return [Warning(
            f"Packs configuration file not found: {path}",
            hint="Crée configs/packs.yml ou renseigne PACKS_CONFIG_PATH.",
            id="packs.W001",
        )]
    try:
        config = build_config(path)
    except PacksConfigError as exc:
        return [Error(str(exc), hint="Corrige le YAML (indentation en espaces).", id="packs.E001")]

    if not config.manifest_path.exists():
        # Pas bloquant : le bundler n'a peut-être pas encore tourné
        return [Warning(
            f"Manifest not found: {config.manifest_path}",
            hint="Lance le build du bundler ou vérifie public_output_path / manifest_path.",
            id="packs.W002",
        )]
    return []
