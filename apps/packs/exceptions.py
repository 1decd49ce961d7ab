"""Exceptions raised by the packs asset helpers."""
from __future__ import annotations

from typing import Optional


class PacksError(Exception):
    """Base class for packs errors."""


class PacksConfigError(PacksError):
    """Raised when the YAML configuration or the manifest file cannot be read."""


class AssetNotFoundError(PacksError, KeyError):
    """Raised when a required manifest lookup finds no entry."""

    def __init__(self, name: str, message: Optional[str] = None, *, manifest_path: str = ""):
        super().__init__(name)
        self.name = name
        self.manifest_path = manifest_path
        self.message = message or f"Asset '{name}' not found in manifest {manifest_path or '(unknown)'}."

    def __str__(self) -> str:
        return self.message


class QueueAlreadyConsumedError(PacksError):
    """Raised when a queue mutation runs after the matching render call."""

    def __init__(self, operation: str, render_operation: str):
        self.operation = operation
        self.render_operation = render_operation
        super().__init__(
            f"You can only call {operation} before {render_operation}. "
            f"Move the {operation} call above the {render_operation} call in the page templates."
        )


class DuplicateRenderError(PacksError):
    """Raised when javascript_pack_tag runs twice for the same page render."""

    def __init__(self, operation: str = "javascript_pack_tag"):
        self.operation = operation
        super().__init__(
            f"To prevent duplicated chunks on the page, you should call {operation} only once on the page. "
            f"Pass every pack name to a single call, e.g. {{% {operation} 'calendar' 'map' %}}."
        )


class UnsupportedFeatureError(PacksError):
    """Raised when the tag renderer lacks a capability required by a helper."""
