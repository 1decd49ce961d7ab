# apps/packs/renderers.py
from __future__ import annotations

import mimetypes
from pathlib import PurePosixPath
from typing import Any, Dict, Iterable, Optional

from django.forms.utils import flatatt
from django.templatetags.static import static
from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString, mark_safe

_REMOTE_PREFIXES = ("http://", "https://", "//", "data:")

_PRELOAD_AS = {
    ".js": "script",
    ".mjs": "script",
    ".css": "style",
    ".woff": "font",
    ".woff2": "font",
    ".ttf": "font",
    ".otf": "font",
    ".eot": "font",
    ".png": "image",
    ".jpg": "image",
    ".jpeg": "image",
    ".gif": "image",
    ".webp": "image",
    ".avif": "image",
    ".svg": "image",
    ".mp4": "video",
    ".webm": "video",
    ".mp3": "audio",
    ".json": "fetch",
}

_EXTRA_MIME = {".woff2": "font/woff2", ".woff": "font/woff", ".avif": "image/avif", ".webp": "image/webp"}


def normalize_attrs(options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Conversion data_* / aria_* en data-* / aria-* ; les valeurs None sont ignorées."""
    attrs: Dict[str, Any] = {}
    for key, value in (options or {}).items():
        if value is None:
            continue
        if key.startswith(("data_", "aria_")):
            key = key.replace("_", "-")
        attrs[key] = value
    return attrs


def _attrs(options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    # flatatt: True -> attribut booléen, False/None -> omis
    out: Dict[str, Any] = {}
    for key, value in normalize_attrs(options).items():
        if isinstance(value, bool):
            out[key] = value
        else:
            out[key] = str(value)
    return out


class AssetPathResolver:
    """Turn a manifest path into a servable reference, CDN host aware."""

    def __init__(self, asset_host: str = "", request=None):
        self.asset_host = (asset_host or "").rstrip("/")
        self.request = request

    def path(self, source: str, **options: Any) -> str:
        if source.startswith(_REMOTE_PREFIXES):
            return source
        reference = source if source.startswith("/") else static(source)
        host = options.get("host") or self.asset_host
        if host and reference.startswith("/") and not reference.startswith("//"):
            return f"{host.rstrip('/')}{reference}"
        return reference

    def url(self, source: str, **options: Any) -> str:
        reference = self.path(source, **options)
        if reference.startswith(_REMOTE_PREFIXES):
            return reference
        if self.request is not None:
            return self.request.build_absolute_uri(reference)
        return reference


class DjangoTagRenderer:
    """HTML for resolved asset paths, built with format_html (auto-escaped)."""

    def __init__(self, resolver: AssetPathResolver):
        self.resolver = resolver

    def javascript_include_tag(self, sources: Iterable[str], options: Optional[Dict[str, Any]] = None) -> SafeString:
        attrs = _attrs(options)
        return format_html_join(
            "\n",
            '<script src="{}"{}></script>',
            ((self.resolver.path(src), flatatt(attrs)) for src in sources),
        )

    def stylesheet_link_tag(self, sources: Iterable[str], options: Optional[Dict[str, Any]] = None) -> SafeString:
        attrs = {"rel": "stylesheet"}
        attrs.update(_attrs(options))
        return format_html_join(
            "\n",
            '<link href="{}"{} />',
            ((self.resolver.path(src), flatatt(attrs)) for src in sources),
        )

    def image_tag(self, source: str, options: Optional[Dict[str, Any]] = None) -> SafeString:
        attrs = _attrs(options)
        size = attrs.pop("size", None)
        if size:
            width, _, height = str(size).partition("x")
            attrs.setdefault("width", width)
            attrs.setdefault("height", height or width)
        return format_html('<img src="{}"{} />', self.resolver.path(source), flatatt(attrs))

    def favicon_link_tag(self, source: str, options: Optional[Dict[str, Any]] = None) -> SafeString:
        attrs = {"rel": "icon", "type": "image/x-icon"}
        attrs.update(_attrs(options))
        return format_html('<link href="{}"{} />', self.resolver.path(source), flatatt(attrs))

    def preload_link_tag(self, source: str, options: Optional[Dict[str, Any]] = None) -> SafeString:
        suffix = PurePosixPath(source.split("?", 1)[0]).suffix.lower()
        attrs: Dict[str, Any] = {"rel": "preload"}
        as_type = _PRELOAD_AS.get(suffix)
        if as_type:
            attrs["as"] = as_type
        mime = _EXTRA_MIME.get(suffix) or mimetypes.guess_type(f"file{suffix}")[0]
        if mime:
            attrs["type"] = mime
        if as_type == "font":
            attrs["crossorigin"] = "anonymous"
        attrs.update(_attrs(options))
        return format_html('<link href="{}"{} />', self.resolver.path(source), flatatt(attrs))


def join_groups(*groups: str) -> SafeString:
    """Concatène les groupes non vides, séparés par un saut de ligne."""
    return mark_safe("\n".join(str(g) for g in groups if g))
