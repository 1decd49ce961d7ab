# apps/packs/resolver.py
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Set

from .manifest import AssetTypeLike, Manifest, plain_name

log = logging.getLogger("packs.resolver")


class OrderedPathSet:
    """
    Déduplication stable : conserve le premier ordre d'apparition.
    Liste + index d'appartenance pour des tests `in` en O(1).
    """

    def __init__(self, paths: Iterable[str] = ()):
        self._items: List[str] = []
        self._seen: Set[str] = set()
        self.extend(paths)

    def add(self, path: str) -> bool:
        if path in self._seen:
            return False
        self._seen.add(path)
        self._items.append(path)
        return True

    def extend(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.add(path)

    def difference(self, other: Iterable[str]) -> "OrderedPathSet":
        excluded = other._seen if isinstance(other, OrderedPathSet) else set(other)
        return OrderedPathSet(p for p in self._items if p not in excluded)

    def union(self, other: Iterable[str]) -> "OrderedPathSet":
        merged = OrderedPathSet(self._items)
        merged.extend(other)
        return merged

    def __contains__(self, path: object) -> bool:
        return path in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedPathSet):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"OrderedPathSet({self._items!r})"

    def to_list(self) -> List[str]:
        return list(self._items)


def resolve_required(manifest: Manifest, names: Iterable[str], type_: AssetTypeLike) -> OrderedPathSet:
    """Expand every entrypoint in order; the first unknown name raises AssetNotFoundError."""
    out = OrderedPathSet()
    for name in names:
        out.extend(manifest.lookup_pack_with_chunks_required(plain_name(name), type_))
    return out


def resolve_optional(manifest: Manifest, names: Iterable[str], type_: AssetTypeLike) -> OrderedPathSet:
    """Same as resolve_required, but unknown names contribute nothing."""
    out = OrderedPathSet()
    for name in names:
        chunks = manifest.lookup_pack_with_chunks(plain_name(name), type_)
        if chunks is None:
            log.debug("Optional pack %s (%s) not in manifest, skipped", name, type_)
            continue
        out.extend(chunks)
    return out
