# apps/packs/queues.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .exceptions import DuplicateRenderError, QueueAlreadyConsumedError
from .manifest import AssetType, Manifest, plain_name
from .resolver import OrderedPathSet, resolve_optional, resolve_required

EMPTY = "empty"
ACCUMULATING = "accumulating"
CONSUMED = "consumed"

SCRIPT_RENDER = "javascript_pack_tag"
STYLE_RENDER = "stylesheet_pack_tag"


def _names(names: Iterable[str]) -> List[str]:
    if isinstance(names, str):
        return [plain_name(names)]
    return [plain_name(n) for n in names]


class ScriptTagQueue:
    """
    Two lanes of logical script names (deferred / non_deferred).
    Names may repeat here; duplicates are removed after expansion, on physical paths.
    """

    def __init__(self) -> None:
        self.deferred: List[str] = []
        self.non_deferred: List[str] = []
        self.state = EMPTY

    @property
    def consumed(self) -> bool:
        return self.state == CONSUMED

    def _lane(self, defer: bool) -> List[str]:
        return self.deferred if defer else self.non_deferred

    def _check_open(self, operation: str) -> None:
        if self.consumed:
            raise QueueAlreadyConsumedError(operation, SCRIPT_RENDER)

    def append(self, names: Iterable[str], *, defer: bool = True) -> None:
        self._check_open("append_javascript_pack_tag")
        self._lane(defer).extend(_names(names))
        self.state = ACCUMULATING

    def prepend(self, names: Iterable[str], *, defer: bool = True) -> None:
        self._check_open("prepend_javascript_pack_tag")
        lane = self._lane(defer)
        lane[:0] = _names(names)
        self.state = ACCUMULATING

    def consume(
        self,
        manifest: Manifest,
        names: Iterable[str] = (),
        *,
        defer: bool = True,
    ) -> Tuple[OrderedPathSet, OrderedPathSet]:
        """
        Transition to `consumed` and return (deferred, non_deferred) physical paths.
        A path present in both groups is kept in non_deferred only.
        """
        if self.consumed:
            raise DuplicateRenderError(SCRIPT_RENDER)
        # Les lanes ne sont modifiées qu'une fois les deux résolues
        direct = _names(names)
        deferred_names = self.deferred + direct if defer else list(self.deferred)
        non_deferred_names = list(self.non_deferred) if defer else self.non_deferred + direct
        non_deferred = resolve_required(manifest, non_deferred_names, AssetType.SCRIPT)
        deferred = resolve_required(manifest, deferred_names, AssetType.SCRIPT).difference(non_deferred)
        self.deferred, self.non_deferred = deferred_names, non_deferred_names
        self.state = CONSUMED
        return deferred, non_deferred


class StyleTagQueue:
    """Append-only list of logical style names."""

    def __init__(self) -> None:
        self.names: List[str] = []
        self.state = EMPTY

    @property
    def consumed(self) -> bool:
        return self.state == CONSUMED

    def append(self, names: Iterable[str]) -> None:
        if self.consumed:
            raise QueueAlreadyConsumedError("append_stylesheet_pack_tag", STYLE_RENDER)
        self.names.extend(_names(names))
        self.state = ACCUMULATING

    def consume(self, manifest: Manifest, names: Iterable[str] = ()) -> OrderedPathSet:
        # Les packs demandés explicitement doivent exister ; ceux ajoutés à la file sont optionnels.
        requested = resolve_required(manifest, _names(names), AssetType.STYLE)
        appended = resolve_optional(manifest, self.names, AssetType.STYLE)
        self.state = CONSUMED
        return requested.union(appended)


@dataclass
class RenderState:
    """Queues of one page render. Created lazily, dropped with the request."""

    _scripts: Optional[ScriptTagQueue] = field(default=None, repr=False)
    _styles: Optional[StyleTagQueue] = field(default=None, repr=False)

    @property
    def scripts(self) -> ScriptTagQueue:
        if self._scripts is None:
            self._scripts = ScriptTagQueue()
        return self._scripts

    @property
    def styles(self) -> StyleTagQueue:
        if self._styles is None:
            self._styles = StyleTagQueue()
        return self._styles

    @property
    def scripts_rendered(self) -> bool:
        return self._scripts is not None and self._scripts.consumed

    @property
    def styles_rendered(self) -> bool:
        return self._styles is not None and self._styles.consumed
