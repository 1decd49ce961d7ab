# apps/packs/instance.py
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from .conf import PacksConfig, get_config
from .manifest import Manifest


@dataclass(frozen=True)
class PacksInstance:
    config: PacksConfig
    manifest: Manifest


@lru_cache(maxsize=1)
def get_instance() -> PacksInstance:
    """Process-wide instance; the manifest is shared read-only by every render."""
    config = get_config()
    return PacksInstance(
        config=config,
        manifest=Manifest(config.manifest_path, cache_manifest=config.cache_manifest),
    )


def reset_instance() -> None:
    get_instance.cache_clear()
    get_config.cache_clear()
