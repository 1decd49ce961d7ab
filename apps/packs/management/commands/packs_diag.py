"""Dump the packs configuration and the manifest entrypoints for diagnostics."""
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from apps.packs.exceptions import PacksConfigError
from apps.packs.instance import get_instance
from apps.packs.manifest import AssetType


class Command(BaseCommand):
    help = "Inspect the packs configuration and the bundler manifest."

    def add_arguments(self, parser):
        parser.add_argument("--entry", help="Print the resolved chunks of one entrypoint.")

    def handle(self, *args, **options) -> None:
        try:
            instance = get_instance()
            entrypoints = instance.manifest.entrypoints()
        except PacksConfigError as exc:
            raise CommandError(str(exc)) from exc

        config = instance.config
        self.stdout.write("=== packs diagnostics ===")
        self.stdout.write(f"config: {config.config_path}")
        self.stdout.write(f"env: {config.env}")
        self.stdout.write(f"manifest: {config.manifest_path} (exists={config.manifest_path.exists()})")
        self.stdout.write(f"cache_manifest: {config.cache_manifest}")
        self.stdout.write(f"asset_host: {config.asset_host or '(none)'}")
        self.stdout.write(f"inlining_css: {config.inlining_css}")
        self.stdout.write(f"entrypoints: {', '.join(entrypoints) or '(none)'}")

        entry = options.get("entry")
        if entry:
            scripts = instance.manifest.lookup_pack_with_chunks(entry, AssetType.SCRIPT)
            styles = instance.manifest.lookup_pack_with_chunks(entry, AssetType.STYLE)
            if scripts is None and styles is None:
                raise CommandError(f"Unknown entrypoint '{entry}' in {config.manifest_path}")
            self.stdout.write(f"[{entry}] js:")
            for path in scripts or []:
                self.stdout.write(f"  {path}")
            self.stdout.write(f"[{entry}] css:")
            for path in styles or []:
                self.stdout.write(f"  {path}")
        self.stdout.write("=== end diagnostics ===")
