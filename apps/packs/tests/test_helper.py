from __future__ import annotations

from typing import Any, Dict, List, Tuple

from django.test import SimpleTestCase

from apps.packs.exceptions import (
    AssetNotFoundError,
    DuplicateRenderError,
    QueueAlreadyConsumedError,
    UnsupportedFeatureError,
)
from apps.packs.helper import PackHelper
from apps.packs.manifest import Manifest
from apps.packs.renderers import AssetPathResolver

from .utils import PacksFixture


class RecordingRenderer:
    """Minimal renderer: records calls and returns a readable summary."""

    def __init__(self) -> None:
        self.resolver = AssetPathResolver()
        self.calls: List[Tuple[str, Any, Dict[str, Any]]] = []

    def _record(self, kind: str, sources: Any, options: Dict[str, Any]) -> str:
        if isinstance(sources, str):
            sources = [sources]
        sources = list(sources)
        self.calls.append((kind, sources, dict(options)))
        return " ".join(f"{kind}:{src}" for src in sources)

    def javascript_include_tag(self, sources, options=None):
        return self._record("script", sources, options or {})

    def stylesheet_link_tag(self, sources, options=None):
        return self._record("style", sources, options or {})

    def image_tag(self, source, options=None):
        return self._record("img", source, options or {})

    def favicon_link_tag(self, source, options=None):
        return self._record("icon", source, options or {})

    def preload_link_tag(self, source, options=None):
        return self._record("preload", source, options or {})


class NoPreloadRenderer(RecordingRenderer):
    preload_link_tag = None


class ExplodingManifest(Manifest):
    @property
    def data(self):
        raise AssertionError("manifest must not be read")


class PackHelperScriptTests(SimpleTestCase):
    def setUp(self) -> None:
        self.fixture = PacksFixture()
        self.addCleanup(self.fixture.cleanup)
        self.renderer = RecordingRenderer()
        self.helper = PackHelper(Manifest(self.fixture.manifest_path), self.renderer)

    def test_non_deferred_render_of_two_packs(self) -> None:
        self.helper.javascript_pack_tag("calendar", "map", defer=False)
        (deferred_call, non_deferred_call) = self.renderer.calls
        self.assertEqual(deferred_call[1], [])
        self.assertTrue(deferred_call[2]["defer"])
        self.assertEqual(
            non_deferred_call[1],
            ["/packs/runtime.abcd.js", "/packs/calendar.1234.js", "/packs/map.5678.js"],
        )
        self.assertFalse(non_deferred_call[2]["defer"])

    def test_deferred_group_rendered_first_and_joined_by_newline(self) -> None:
        self.helper.append_javascript_pack_tag("vendor", defer=False)
        html = self.helper.javascript_pack_tag("calendar")
        deferred, non_deferred = html.split("\n")
        self.assertEqual(deferred, "script:/packs/runtime.abcd.js script:/packs/calendar.1234.js")
        self.assertEqual(non_deferred, "script:/packs/vendor.ffff.js")

    def test_options_forwarded_to_both_groups(self) -> None:
        self.helper.javascript_pack_tag("calendar", data_turbo_track="reload")
        for _, _, options in self.renderer.calls:
            self.assertEqual(options["data_turbo_track"], "reload")

    def test_deferred_append_subsumed_by_direct_non_deferred(self) -> None:
        self.helper.append_javascript_pack_tag("calendar")
        html = self.helper.javascript_pack_tag("calendar", defer=False)
        self.assertEqual(self.renderer.calls[0][1], [])
        self.assertNotIn("\n", html)

    def test_prepend_loads_before_direct_names(self) -> None:
        self.helper.prepend_javascript_pack_tag("map", defer=False)
        self.helper.javascript_pack_tag("calendar", defer=False)
        self.assertEqual(
            self.renderer.calls[1][1],
            ["/packs/runtime.abcd.js", "/packs/map.5678.js", "/packs/calendar.1234.js"],
        )

    def test_second_render_raises(self) -> None:
        self.helper.javascript_pack_tag("calendar")
        with self.assertRaises(DuplicateRenderError):
            self.helper.javascript_pack_tag("map")

    def test_append_after_render_raises(self) -> None:
        self.helper.javascript_pack_tag("calendar")
        with self.assertRaises(QueueAlreadyConsumedError):
            self.helper.append_javascript_pack_tag("map")
        self.assertTrue(self.helper.state.scripts_rendered)


class PackHelperStyleTests(SimpleTestCase):
    def setUp(self) -> None:
        self.fixture = PacksFixture()
        self.addCleanup(self.fixture.cleanup)
        self.renderer = RecordingRenderer()

    def test_requested_and_appended_merged(self) -> None:
        helper = PackHelper(Manifest(self.fixture.manifest_path), self.renderer)
        helper.append_stylesheet_pack_tag("map", "ghost")
        helper.stylesheet_pack_tag("calendar", media="screen")
        kind, sources, options = self.renderer.calls[0]
        self.assertEqual(kind, "style")
        self.assertEqual(
            sources,
            ["/packs/vendor.9999.css", "/packs/calendar.8c7c.css", "/packs/map.8c7c.css"],
        )
        self.assertEqual(options, {"media": "screen"})
        self.assertTrue(helper.state.styles_rendered)

    def test_inlining_css_short_circuits(self) -> None:
        helper = PackHelper(ExplodingManifest(self.fixture.manifest_path), self.renderer, inlining_css=True)
        helper.append_stylesheet_pack_tag("calendar")
        self.assertEqual(helper.stylesheet_pack_tag("application"), "")
        self.assertEqual(self.renderer.calls, [])
        self.assertFalse(helper.state.styles_rendered)


class PackHelperAssetTests(SimpleTestCase):
    def setUp(self) -> None:
        self.fixture = PacksFixture()
        self.addCleanup(self.fixture.cleanup)
        self.renderer = RecordingRenderer()
        self.helper = PackHelper(Manifest(self.fixture.manifest_path), self.renderer)

    def test_asset_pack_path(self) -> None:
        self.assertEqual(
            self.helper.asset_pack_path("calendar.js"),
            "/packs/calendar-1016838bab065ae1e314.js",
        )
        with self.assertRaises(AssetNotFoundError):
            self.helper.asset_pack_path("calendar.css")

    def test_image_bare_name_uses_prefix(self) -> None:
        self.assertEqual(
            self.helper.image_pack_path("logo.png"),
            "/packs/static/logo-c38deda30895059837cf.png",
        )

    def test_image_already_prefixed(self) -> None:
        self.assertEqual(
            self.helper.resolve_image("static/logo.png"),
            "/packs/static/logo-c38deda30895059837cf.png",
        )

    def test_image_falls_back_to_raw_name(self) -> None:
        self.assertEqual(self.helper.resolve_image("favicon.ico"), "/packs/favicon-f0d1a5c1.ico")

    def test_image_missing_everywhere(self) -> None:
        with self.assertRaises(AssetNotFoundError) as ctx:
            self.helper.resolve_image("ghost.png")
        self.assertEqual(ctx.exception.name, "ghost.png")

    def test_image_tag_srcset_mapping(self) -> None:
        self.helper.image_pack_tag("logo.png", alt="Logo", srcset={"logo-2x.png": "2x"})
        kind, sources, options = self.renderer.calls[0]
        self.assertEqual(kind, "img")
        self.assertEqual(sources, ["/packs/static/logo-c38deda30895059837cf.png"])
        self.assertEqual(options["srcset"], "/packs/static/logo-2x-7cca48e6cae66ec07b8e.png 2x")
        self.assertEqual(options["alt"], "Logo")

    def test_image_tag_srcset_pairs(self) -> None:
        self.helper.image_pack_tag("logo.png", srcset=[("logo-2x.png", "2x"), ("logo.png", "1x")])
        self.assertEqual(
            self.renderer.calls[0][2]["srcset"],
            "/packs/static/logo-2x-7cca48e6cae66ec07b8e.png 2x, /packs/static/logo-c38deda30895059837cf.png 1x",
        )

    def test_image_tag_srcset_string_passthrough(self) -> None:
        self.helper.image_pack_tag("logo.png", srcset="/x.png 2x")
        self.assertEqual(self.renderer.calls[0][2]["srcset"], "/x.png 2x")

    def test_favicon(self) -> None:
        self.helper.favicon_pack_tag("favicon.ico", rel="apple-touch-icon")
        kind, sources, options = self.renderer.calls[0]
        self.assertEqual((kind, sources), ("icon", ["/packs/favicon-f0d1a5c1.ico"]))
        self.assertEqual(options, {"rel": "apple-touch-icon"})

    def test_preload(self) -> None:
        self.helper.preload_pack_asset("fonts/fa-regular-400.woff2")
        self.assertEqual(
            self.renderer.calls[0][1],
            ["/packs/fonts/fa-regular-400-944fb546bd7018b07190a32244f67dc9.woff2"],
        )

    def test_preload_requires_renderer_support(self) -> None:
        helper = PackHelper(Manifest(self.fixture.manifest_path), NoPreloadRenderer())
        with self.assertRaises(UnsupportedFeatureError):
            helper.preload_pack_asset("fonts/fa-regular-400.woff2")
