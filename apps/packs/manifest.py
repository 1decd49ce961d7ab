# apps/packs/manifest.py
from __future__ import annotations

import json
import logging
import posixpath
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import AssetNotFoundError, PacksConfigError

log = logging.getLogger("packs.manifest")

ENTRYPOINTS_KEY = "entrypoints"


class AssetType(str, Enum):
    SCRIPT = "script"
    STYLE = "style"
    IMAGE = "image"
    FAVICON = "favicon"

    @property
    def extension(self) -> Optional[str]:
        """Sous-espace du manifest ("js"/"css") ; None pour images et favicons."""
        return _EXTENSIONS.get(self)


_EXTENSIONS = {AssetType.SCRIPT: "js", AssetType.STYLE: "css"}

AssetTypeLike = Union[AssetType, str, None]


def _coerce_type(type_: AssetTypeLike) -> Optional[AssetType]:
    if type_ is None or isinstance(type_, AssetType):
        return type_
    value = str(type_).strip().lower()
    aliases = {"javascript": AssetType.SCRIPT, "js": AssetType.SCRIPT, "stylesheet": AssetType.STYLE, "css": AssetType.STYLE}
    return aliases.get(value) or AssetType(value)


def plain_name(name: Any) -> str:
    """Plain str copy of a pack name (template literals arrive as SafeString)."""
    return str.__str__(name) if isinstance(name, str) else str(name)


def full_pack_name(name: str, type_: AssetTypeLike) -> str:
    name = plain_name(name)
    asset_type = _coerce_type(type_)
    ext = asset_type.extension if asset_type else None
    if not ext or posixpath.splitext(name)[1]:
        return name
    return f"{name}.{ext}"


def entrypoint_name(name: str, type_: AssetTypeLike) -> str:
    name = plain_name(name)
    asset_type = _coerce_type(type_)
    ext = asset_type.extension if asset_type else None
    suffix = f".{ext}" if ext else ""
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return name


class Manifest:
    """
    Read-only view over the bundler's manifest.json.

    Two families of lookups:
    - ``lookup`` / ``lookup_pack_with_chunks`` return None when the entry is absent;
    - ``lookup_required`` / ``lookup_pack_with_chunks_required`` raise AssetNotFoundError.
    """

    def __init__(self, path: Union[str, Path], *, cache_manifest: bool = True):
        self.path = Path(path)
        self.cache_manifest = cache_manifest
        self._data: Optional[Dict[str, Any]] = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Manifest {self.path} cache={self.cache_manifest}>"

    # ------------- Chargement -----------------

    @property
    def data(self) -> Dict[str, Any]:
        if not self.cache_manifest:
            return self._load()
        if self._data is None:
            with self._lock:
                if self._data is None:
                    self._data = self._load()
        return self._data

    def refresh(self) -> Dict[str, Any]:
        with self._lock:
            self._data = self._load()
        return self._data

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            log.debug("Manifest %s missing; treating as empty", self.path)
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except ValueError as exc:
            raise PacksConfigError(f"Manifest {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise PacksConfigError(f"Manifest {self.path} must contain a JSON object.")
        log.debug("Manifest %s loaded (%d keys)", self.path, len(payload))
        return payload

    # ------------- Lookups -----------------

    def has(self, name: str, type_: AssetTypeLike = None) -> bool:
        asset_type = _coerce_type(type_)
        if asset_type is not None and asset_type.extension:
            if self.lookup_pack_with_chunks(name, asset_type) is not None:
                return True
        return self.lookup(name, asset_type) is not None

    def lookup(self, name: str, type_: AssetTypeLike = None) -> Optional[str]:
        entry = self.data.get(full_pack_name(name, type_))
        if isinstance(entry, dict):
            entry = entry.get("src")
        return str(entry) if entry else None

    def lookup_required(self, name: str, type_: AssetTypeLike = None) -> str:
        path = self.lookup(name, type_)
        if path is None:
            raise self._missing(full_pack_name(name, type_))
        return path

    def lookup_pack_with_chunks(self, name: str, type_: AssetTypeLike) -> Optional[List[str]]:
        asset_type = _coerce_type(type_)
        ext = asset_type.extension if asset_type else None
        if not ext:
            return None
        entrypoints = self.data.get(ENTRYPOINTS_KEY) or {}
        entry = entrypoints.get(entrypoint_name(name, asset_type)) or {}
        chunks = (entry.get("assets") or {}).get(ext)
        if chunks is None:
            return None
        return [str(c) for c in chunks]

    def lookup_pack_with_chunks_required(self, name: str, type_: AssetTypeLike) -> List[str]:
        chunks = self.lookup_pack_with_chunks(name, type_)
        if chunks is None:
            raise self._missing(full_pack_name(name, type_))
        return chunks

    def entrypoints(self) -> List[str]:
        return sorted((self.data.get(ENTRYPOINTS_KEY) or {}).keys())

    def _missing(self, name: str) -> AssetNotFoundError:
        dump = json.dumps(self.data, indent=2, sort_keys=True)
        message = (
            f"Can't find {name} in {self.path}. Possible causes:\n"
            "1. The bundler has not finished compiling, or was never run for this environment.\n"
            "2. The pack name is misspelled or uses a non-standard extension.\n"
            "3. public_output_path / manifest_path in the packs config point to another build.\n"
            f"Your manifest contains:\n{dump}"
        )
        return AssetNotFoundError(name, message, manifest_path=str(self.path))
