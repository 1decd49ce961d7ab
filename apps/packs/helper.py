# apps/packs/helper.py
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from .conf import DEFAULT_IMAGE_PREFIX
from .exceptions import AssetNotFoundError, UnsupportedFeatureError
from .manifest import AssetType, Manifest
from .queues import RenderState
from .renderers import AssetPathResolver, join_groups

log = logging.getLogger("packs.helper")


class PackHelper:
    """
    Public entry points of a page render.

    Each call resolves logical names through the manifest, updates the
    render-scoped queues and hands physical paths to the tag renderer.
    """

    def __init__(
        self,
        manifest: Manifest,
        renderer: Any,
        *,
        state: Optional[RenderState] = None,
        resolver: Optional[AssetPathResolver] = None,
        image_prefix: str = DEFAULT_IMAGE_PREFIX,
        inlining_css: bool = False,
    ):
        self.manifest = manifest
        self.renderer = renderer
        self.state = state if state is not None else RenderState()
        self.resolver = resolver or getattr(renderer, "resolver", None) or AssetPathResolver()
        self.image_prefix = image_prefix
        self.inlining_css = inlining_css

    # ------------- Scripts -----------------

    def javascript_pack_tag(self, *names: str, defer: bool = True, **options: Any):
        """
        <script> tags for every chunk of the given entrypoints plus the queued ones.

            {% javascript_pack_tag 'calendar' 'map' data_turbo_track='reload' %}

        Call it once per page with every pack name; a second call raises DuplicateRenderError.
        """
        deferred, non_deferred = self.state.scripts.consume(self.manifest, names, defer=defer)
        deferred_html = self.renderer.javascript_include_tag(deferred, {**options, "defer": True})
        non_deferred_html = self.renderer.javascript_include_tag(non_deferred, {**options, "defer": False})
        return join_groups(deferred_html, non_deferred_html)

    def append_javascript_pack_tag(self, *names: str, defer: bool = True) -> None:
        self.state.scripts.append(names, defer=defer)

    def prepend_javascript_pack_tag(self, *names: str, defer: bool = True) -> None:
        self.state.scripts.prepend(names, defer=defer)

    # ------------- Styles -----------------

    def stylesheet_pack_tag(self, *names: str, **options: Any):
        if self.inlining_css:
            log.debug("CSS inlined by the dev server; skipping stylesheet_pack_tag(%s)", names)
            return ""
        sources = self.state.styles.consume(self.manifest, names)
        return self.renderer.stylesheet_link_tag(sources, options)

    def append_stylesheet_pack_tag(self, *names: str) -> None:
        self.state.styles.append(names)

    # ------------- Single assets -----------------

    def asset_pack_path(self, name: str, **options: Any) -> str:
        return self.resolver.path(self.manifest.lookup_required(name), **options)

    def asset_pack_url(self, name: str, **options: Any) -> str:
        return self.resolver.url(self.manifest.lookup_required(name), **options)

    def resolve_image(self, name: str) -> str:
        """
        Manifest path of an image; bare names live under the image prefix
        ("logo.png" -> "static/logo.png"), with one retry on the raw name.
        """
        prefixed = name if name.startswith(self.image_prefix) else f"{self.image_prefix}{name}"
        try:
            return self.manifest.lookup_required(prefixed, AssetType.IMAGE)
        except AssetNotFoundError:
            if prefixed == name:
                raise
            log.debug("Image %s not found under %s, retrying raw name", name, self.image_prefix)
            return self.manifest.lookup_required(name, AssetType.IMAGE)

    def image_pack_path(self, name: str, **options: Any) -> str:
        return self.resolver.path(self.resolve_image(name), **options)

    def image_pack_url(self, name: str, **options: Any) -> str:
        return self.resolver.url(self.resolve_image(name), **options)

    def image_pack_tag(self, name: str, **options: Any):
        srcset = options.get("srcset")
        if srcset and not isinstance(srcset, str):
            pairs = srcset.items() if isinstance(srcset, Mapping) else srcset
            options["srcset"] = self._srcset(pairs)
        return self.renderer.image_tag(self.resolve_image(name), options)

    def _srcset(self, items: Iterable) -> str:
        return ", ".join(f"{self.image_pack_path(src)} {size}" for src, size in items)

    def favicon_pack_tag(self, name: str, **options: Any):
        return self.renderer.favicon_link_tag(self.resolve_image(name), options)

    def preload_pack_asset(self, name: str, **options: Any):
        preload = getattr(self.renderer, "preload_link_tag", None)
        if not callable(preload):
            raise UnsupportedFeatureError(
                "preload_pack_asset requires a tag renderer with preload support (preload_link_tag)."
            )
        return preload(self.manifest.lookup_required(name), options)
