# apps/packs/conf.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver

from .exceptions import PacksConfigError

log = logging.getLogger("packs.config")

FALLBACK_ENV = "production"
DEFAULT_IMAGE_PREFIX = "static/"
_TRUE_VALUES = {"1", "true", "yes", "y", "on"}

_DEFAULTS: Dict[str, Any] = {
    "public_root_path": "public",
    "public_output_path": "packs",
    "cache_manifest": False,
    "asset_host": "",
    "image_prefix": DEFAULT_IMAGE_PREFIX,
    "dev_server": {"hmr": False, "inline_css": False},
}


@dataclass(frozen=True)
class PacksConfig:
    env: str
    config_path: Path
    public_root_path: Path
    public_output_path: str
    manifest_path: Path
    cache_manifest: bool
    asset_host: str
    image_prefix: str
    dev_server_hmr: bool
    dev_server_inline_css: bool

    @property
    def inlining_css(self) -> bool:
        """CSS is injected by the dev server (HMR), no <link> tags needed."""
        return self.dev_server_hmr and self.dev_server_inline_css


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in _TRUE_VALUES


def _base_dir() -> Path:
    return Path(getattr(settings, "BASE_DIR", Path.cwd()))


def config_path() -> Path:
    raw = getattr(settings, "PACKS_CONFIG_PATH", None)
    if raw:
        return Path(raw)
    return _base_dir() / "configs" / "packs.yml"


def current_env() -> str:
    return (os.getenv("PACKS_ENV") or getattr(settings, "PACKS_ENV", "") or "development").strip()


def parse_config_file(path: Path) -> Dict[str, Any]:
    """
    Charge le YAML complet (toutes les sections d'environnement).
    Lève PacksConfigError si le fichier est absent ou mal indenté.
    """
    if not path.exists():
        raise PacksConfigError(
            f"Packs configuration file not found {path}. "
            "Create it (see configs/packs.yml) or point PACKS_CONFIG_PATH at an existing file."
        )
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise PacksConfigError(
            f"YAML syntax error occurred while parsing {path}. "
            "Please note that YAML must be consistently indented using spaces. Tabs are not allowed. "
            f"Error: {exc}"
        ) from exc
    if not isinstance(payload, dict):
        raise PacksConfigError(f"{path}: expected a mapping of environments, got {type(payload).__name__}.")
    return payload


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def _section_for(payload: Dict[str, Any], env: str, path: Path) -> Dict[str, Any]:
    if env in payload:
        section = payload.get(env) or {}
    else:
        log.warning(
            "Packs config %s has no '%s' section, falling back to '%s'.", path, env, FALLBACK_ENV
        )
        section = payload.get(FALLBACK_ENV) or {}
    merged = _merge(_DEFAULTS, payload.get("default") or {})
    return _merge(merged, section)


def build_config(path: Optional[Path] = None, env: Optional[str] = None) -> PacksConfig:
    path = Path(path) if path else config_path()
    env = env or current_env()
    data = _section_for(parse_config_file(path), env, path)

    root = Path(data.get("public_root_path") or "public")
    if not root.is_absolute():
        root = _base_dir() / root
    output = str(data.get("public_output_path") or "packs").strip("/")

    manifest = data.get("manifest_path")
    if manifest:
        manifest_path = Path(manifest)
        if not manifest_path.is_absolute():
            manifest_path = _base_dir() / manifest_path
    else:
        manifest_path = root / output / "manifest.json"

    host = getattr(settings, "PACKS_ASSET_HOST", None) or data.get("asset_host") or ""
    dev_server = data.get("dev_server") or {}

    return PacksConfig(
        env=env,
        config_path=path,
        public_root_path=root,
        public_output_path=output,
        manifest_path=manifest_path,
        cache_manifest=_flag(data.get("cache_manifest")),
        asset_host=str(host).rstrip("/"),
        image_prefix=str(data.get("image_prefix") or DEFAULT_IMAGE_PREFIX),
        dev_server_hmr=_flag(dev_server.get("hmr")),
        dev_server_inline_css=_flag(dev_server.get("inline_css")),
    )


@lru_cache(maxsize=1)
def get_config() -> PacksConfig:
    config = build_config()
    log.debug("Packs config loaded from %s (env=%s)", config.config_path, config.env)
    return config


@receiver(setting_changed)
def _reset_on_setting_change(sender, setting, **kwargs) -> None:
    if setting.startswith("PACKS_"):
        from .instance import reset_instance

        reset_instance()
