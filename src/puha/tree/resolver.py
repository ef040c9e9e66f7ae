"""PathResolver — turns "Home/Bedroom/Closet" or a bare name into an identity.

A query containing "/" is a path walked from the root; its first segment is
the root's own name. Anything else is a bare name searched across the whole
tree. Ambiguity is never settled by picking the first match: the caller gets
every candidate path, tagged with its kind, and must ask again with a fuller
path or with the kind it wants.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from puha.tree.errors import (
    AmbiguousNameError,
    InvalidNameError,
    NotAnItemError,
    NotASpaceError,
    NotFoundError,
)
from puha.tree.models import PATH_SEPARATOR, ItemId, Node, NodeId, NodeKind, Space, SpaceId

if TYPE_CHECKING:
    from puha.tree.store import NodeStore


@dataclass(frozen=True)
class Unique:
    id: NodeId


@dataclass(frozen=True)
class Ambiguous:
    name: str
    paths: tuple[str, ...]
    kinds: tuple[NodeKind, ...] = ()


@dataclass(frozen=True)
class Absent:
    query: str


Resolution = Union[Unique, Ambiguous, Absent]


def split_path(query: str) -> list[str]:
    """Split a path into segments, ignoring leading/trailing separators."""
    stripped = query.strip(PATH_SEPARATOR)
    if not stripped:
        raise InvalidNameError(query, "path must name at least one node")
    segments = stripped.split(PATH_SEPARATOR)
    if any(not segment for segment in segments):
        raise InvalidNameError(query, "path contains an empty segment")
    return segments


class PathResolver:
    """Name and path lookups against a `NodeStore`."""

    def __init__(self, store: NodeStore) -> None:
        self.store = store

    def path_of(self, node_id: NodeId) -> str:
        return self.store.display(node_id)

    def candidate_paths(self, name: str, kind: NodeKind | None = None) -> Iterator[str]:
        """Full paths of every node called `name`, in pre-order."""
        for node in self._named(name, kind):
            yield self.path_of(node.id)

    def _named(self, name: str, kind: NodeKind | None = None) -> Iterator[Node]:
        for _, node in self.store.walk():
            if node.name == name and (kind is None or node.kind == kind):
                yield node

    # ── Lookup ───────────────────────────────────────────────

    def lookup(self, query: str, kind: NodeKind | None = None) -> Resolution:
        """Resolve `query` to a tagged result.

        Raises only for malformed queries (`InvalidNameError`) or when the
        query names a node of the wrong kind (`NotASpaceError`,
        `NotAnItemError`).
        """
        if PATH_SEPARATOR in query:
            return self._lookup_path(query, split_path(query), kind)
        if not query:
            raise InvalidNameError(query)
        return self._pick(query, list(self._named(query)), kind)

    def _lookup_path(self, query: str, segments: list[str], kind: NodeKind | None) -> Resolution:
        if self.store.root is None:
            return Absent(query)
        current: Space = self.store.get_space(self.store.root)
        if segments[0] != current.name:
            return Absent(query)

        for depth, segment in enumerate(segments[1:-1], start=1):
            child = self._child_space(current, segment)
            if child is None:
                if self._child_item(current, segment) is not None:
                    raise NotASpaceError(PATH_SEPARATOR.join(segments[: depth + 1]))
                return Absent(query)
            current = child

        if len(segments) == 1:
            return self._pick(query, [current], kind)
        terminal = segments[-1]
        matches: list[Node] = []
        space = self._child_space(current, terminal)
        if space is not None:
            matches.append(space)
        item = self._child_item(current, terminal)
        if item is not None:
            matches.append(item)
        return self._pick(query, matches, kind)

    def _child_space(self, parent: Space, name: str) -> Space | None:
        for child_id in parent.spaces:
            child = self.store.get_space(child_id)
            if child.name == name:
                return child
        return None

    def _child_item(self, parent: Space, name: str) -> Node | None:
        for item_id in parent.items:
            item = self.store.get_item(item_id)
            if item.name == name:
                return item
        return None

    def _pick(self, query: str, matches: list[Node], kind: NodeKind | None) -> Resolution:
        wanted = [node for node in matches if kind is None or node.kind == kind]
        if len(wanted) == 1:
            return Unique(wanted[0].id)
        if wanted:
            return Ambiguous(
                query,
                tuple(self.path_of(node.id) for node in wanted),
                tuple(node.kind for node in wanted),
            )
        if matches:
            found = self.path_of(matches[0].id)
            if kind == "space":
                raise NotASpaceError(found)
            raise NotAnItemError(found)
        return Absent(query)

    # ── Raising variants ─────────────────────────────────────

    def resolve(self, query: str, kind: NodeKind | None = None) -> NodeId:
        result = self.lookup(query, kind)
        if isinstance(result, Unique):
            return result.id
        if isinstance(result, Ambiguous):
            raise AmbiguousNameError(result.name, result.paths, result.kinds)
        raise NotFoundError(query, f"no {kind or 'node'} found at {query!r}")

    def resolve_space(self, query: str) -> SpaceId:
        return SpaceId(self.resolve(query, "space"))

    def resolve_item(self, query: str) -> ItemId:
        return ItemId(self.resolve(query, "item"))
