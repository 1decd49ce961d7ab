from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

SAMPLE_MANIFEST: Dict[str, Any] = {
    "application.js": "/packs/application-k344a6d59eef8632c9d1.js",
    "application.css": "/packs/application-dd6b1cd38bfa093df600.css",
    "calendar.js": "/packs/calendar-1016838bab065ae1e314.js",
    "fonts/fa-regular-400.woff2": "/packs/fonts/fa-regular-400-944fb546bd7018b07190a32244f67dc9.woff2",
    "static/logo.png": "/packs/static/logo-c38deda30895059837cf.png",
    "static/logo-2x.png": "/packs/static/logo-2x-7cca48e6cae66ec07b8e.png",
    "favicon.ico": "/packs/favicon-f0d1a5c1.ico",
    "integrity.js": {"src": "/packs/integrity-abc123.js", "integrity": "sha384-xyz"},
    "entrypoints": {
        "application": {
            "assets": {
                "js": ["/packs/runtime.abcd.js", "/packs/vendor.ffff.js", "/packs/application.k344.js"],
                "css": ["/packs/application.dd6b.css"],
            }
        },
        "calendar": {
            "assets": {
                "js": ["/packs/runtime.abcd.js", "/packs/calendar.1234.js"],
                "css": ["/packs/vendor.9999.css", "/packs/calendar.8c7c.css"],
            }
        },
        "map": {
            "assets": {
                "js": ["/packs/runtime.abcd.js", "/packs/map.5678.js"],
                "css": ["/packs/vendor.9999.css", "/packs/map.8c7c.css"],
            }
        },
        "vendor": {"assets": {"js": ["/packs/vendor.ffff.js"]}},
    },
}


class PacksFixture:
    """Temporary directory holding a manifest.json and a packs.yml pointing at it."""

    def __init__(self, manifest: Optional[Dict[str, Any]] = None, **config: Any):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.manifest_path = self.root / "public" / "packs" / "manifest.json"
        self.write_manifest(SAMPLE_MANIFEST if manifest is None else manifest)
        self.config_path = self.root / "packs.yml"
        self.write_config(**config)

    def write_manifest(self, payload: Dict[str, Any]) -> None:
        self.manifest_path.parent.mkdir(parents=True, exist_ok=True)
        self.manifest_path.write_text(json.dumps(payload), encoding="utf-8")

    def write_config(self, **overrides: Any) -> None:
        default = {"manifest_path": str(self.manifest_path), "cache_manifest": False}
        default.update(overrides)
        payload = {"default": default, "development": {}, "test": {}, "production": {}}
        self.config_path.write_text(yaml.safe_dump(payload), encoding="utf-8")

    def cleanup(self) -> None:
        self._tmp.cleanup()
