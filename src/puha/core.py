"""Inventory — the command-style API used by the CLI.

Responsibilities:
1. Resolve user-supplied paths and bare names to identities (PathResolver)
2. Apply the mutation (NodeStore), which validates every invariant
3. Render views of the tree (TreeRenderer)
4. Persist through whichever StateStorage the inventory was opened with
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from puha.tree.errors import NotFoundError, PersistenceError
from puha.tree.models import ItemId, NodeId, NodeKind, Space, SpaceId
from puha.tree.render import TreeRenderer
from puha.tree.resolver import PathResolver
from puha.tree.store import NodeStore

if TYPE_CHECKING:
    from puha.storage.base import StateStorage

logger = logging.getLogger(__name__)

# Sentinel distinguishing "leave unchanged" from an explicit None
UNSET: object = object()


class Inventory:
    """Path-addressed operations over a single tree."""

    def __init__(
        self,
        store: NodeStore | None = None,
        storage: StateStorage | None = None,
        *,
        indent: int = 2,
        show_descriptions: bool = False,
    ) -> None:
        self.store = store if store is not None else NodeStore()
        self.storage = storage
        self.resolver = PathResolver(self.store)
        self.renderer = TreeRenderer(self.store, indent=indent, show_descriptions=show_descriptions)

    @classmethod
    def open(cls, storage: StateStorage, **options) -> Inventory:
        """Load the tree from `storage` and keep it for later saves."""
        return cls(storage.load(), storage, **options)

    def save(self) -> None:
        if self.storage is None:
            raise PersistenceError("no storage configured for this inventory")
        self.storage.save(self.store)

    # ── Building ─────────────────────────────────────────────

    def create_root(self, name: str) -> SpaceId:
        replaced = not self.store.is_empty
        root_id = self.store.create_root(name)
        if replaced:
            logger.warning("Replaced the existing tree with new root %r", name)
        else:
            logger.info("Created root space %r", name)
        return root_id

    def add_space(self, parent_path: str, name: str) -> SpaceId:
        parent = self.resolver.resolve_space(parent_path)
        space_id = self.store.add_space(parent, name)
        logger.info("Added space %s", self.resolver.path_of(space_id))
        return space_id

    def add_item(self, parent_path: str, name: str, description: str | None = None) -> ItemId:
        parent = self.resolver.resolve_space(parent_path)
        item_id = self.store.add_item(parent, name, description)
        logger.info("Added item %s", self.resolver.path_of(item_id))
        return item_id

    # ── Editing ──────────────────────────────────────────────

    def rename(self, path: str, new_name: str, kind: NodeKind | None = None) -> NodeId:
        """Rename the node at `path`; `kind` picks between a space and an item
        that share the path."""
        node_id = self.resolver.resolve(path, kind)
        old_path = self.resolver.path_of(node_id)
        if isinstance(self.store.get(node_id), Space):
            self.store.rename_space(SpaceId(node_id), new_name)
        else:
            self.store.rename_item(ItemId(node_id), new_name)
        logger.info("Renamed %s to %r", old_path, new_name)
        return node_id

    def edit_item(
        self,
        path: str,
        name: str | None = None,
        description: str | None | object = UNSET,
    ) -> ItemId:
        """Rename an item and/or replace its description."""
        item_id = self.resolver.resolve_item(path)
        if name is not None:
            self.store.rename_item(item_id, name)
        if description is not UNSET:
            self.store.set_description(item_id, description)  # type: ignore[arg-type]
        logger.info("Edited item %s", self.resolver.path_of(item_id))
        return item_id

    # ── Moving ───────────────────────────────────────────────

    def move(self, path: str, new_parent_path: str, kind: NodeKind | None = None) -> NodeId:
        node_id = self.resolver.resolve(path, kind)
        new_parent = self.resolver.resolve_space(new_parent_path)
        if isinstance(self.store.get(node_id), Space):
            self.store.move_space(SpaceId(node_id), new_parent)
        else:
            self.store.move_item(ItemId(node_id), new_parent)
        logger.info("Moved %s to %s", path, self.resolver.path_of(node_id))
        return node_id

    def move_items(self, from_path: str, to_path: str, names: Iterable[str]) -> list[ItemId]:
        """Move the named items of one space into another, all or nothing."""
        source = self.resolver.resolve_space(from_path)
        target = self.resolver.resolve_space(to_path)
        by_name = {
            self.store.get_item(item_id).name: item_id
            for item_id in self.store.get_space(source).items
        }
        ids: list[ItemId] = []
        for name in names:
            if name not in by_name:
                raise NotFoundError(
                    name, f"no item {name!r} in {self.resolver.path_of(source)}"
                )
            ids.append(by_name[name])
        moved = self.store.move_items(ids, target)
        logger.info(
            "Moved %d item(s) from %s to %s",
            len(moved),
            self.resolver.path_of(source),
            self.resolver.path_of(target),
        )
        return moved

    # ── Removal ──────────────────────────────────────────────

    def remove(self, path: str, kind: NodeKind | None = None) -> NodeId:
        node_id = self.resolver.resolve(path, kind)
        old_path = self.resolver.path_of(node_id)
        if isinstance(self.store.get(node_id), Space):
            self.store.remove_space(SpaceId(node_id))
        else:
            self.store.remove_item(ItemId(node_id))
        logger.info("Removed %s", old_path)
        return node_id

    def dissolve_space(self, path: str) -> list[ItemId]:
        """Remove a space but keep its items, handing them to its parent."""
        space_id = self.resolver.resolve_space(path)
        old_path = self.resolver.path_of(space_id)
        rescued = self.store.dissolve_space(space_id)
        logger.info("Dissolved %s, %d item(s) moved up", old_path, len(rescued))
        return rescued

    # ── Views ────────────────────────────────────────────────

    def render_tree(self, path: str | None = None) -> str:
        if self.store.is_empty:
            raise NotFoundError("root", "the tree is empty; create a root space first")
        start = self.resolver.resolve_space(path) if path is not None else None
        return self.renderer.render(start)

    def list_contents(self, path: str) -> list[tuple[NodeKind, str]]:
        """One level of a space: its items, then its sub-spaces."""
        space = self.store.get_space(self.resolver.resolve_space(path))
        entries: list[tuple[NodeKind, str]] = [
            ("item", self.store.get_item(item_id).name) for item_id in space.items
        ]
        entries.extend(("space", self.store.get_space(child_id).name) for child_id in space.spaces)
        return entries

    def list_items(self, path: str) -> list[str]:
        space = self.store.get_space(self.resolver.resolve_space(path))
        return [self.store.get_item(item_id).name for item_id in space.items]
