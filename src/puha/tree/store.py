"""NodeStore — the arena that owns every space and item.

Records are kept in two identity-keyed tables and link to each other only by
identity (parent id, ordered child id lists). Callers never see a record;
reads return frozen `Space` / `Item` snapshots.

Every mutation validates completely before touching a record, so an operation
that raises leaves the store exactly as it was.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from puha.tree.errors import (
    CycleError,
    DuplicateNameError,
    NotAnItemError,
    NotASpaceError,
    NotFoundError,
    RootError,
)
from puha.tree.models import (
    PATH_SEPARATOR,
    Item,
    ItemId,
    Node,
    NodeId,
    Space,
    SpaceId,
    validate_name,
)


@dataclass
class _SpaceRecord:
    name: str
    parent: SpaceId | None
    spaces: list[SpaceId] = field(default_factory=list)
    items: list[ItemId] = field(default_factory=list)


@dataclass
class _ItemRecord:
    name: str
    parent: SpaceId
    description: str | None = None


class NodeStore:
    """Owns the tree: identities, records and structural invariants."""

    def __init__(self) -> None:
        self._spaces: dict[SpaceId, _SpaceRecord] = {}
        self._items: dict[ItemId, _ItemRecord] = {}
        self._root: SpaceId | None = None
        self._next_id = 1

    # ── Identity & record access ─────────────────────────────

    def _allocate(self) -> int:
        """Identities come from one counter and are never reused."""
        node_id = self._next_id
        self._next_id += 1
        return node_id

    def _space_record(self, space_id: NodeId) -> _SpaceRecord:
        record = self._spaces.get(space_id)
        if record is not None:
            return record
        if space_id in self._items:
            raise NotASpaceError(self.display(space_id))
        raise NotFoundError(space_id, f"no space with id {space_id}")

    def _item_record(self, item_id: NodeId) -> _ItemRecord:
        record = self._items.get(item_id)
        if record is not None:
            return record
        if item_id in self._spaces:
            raise NotAnItemError(self.display(item_id))
        raise NotFoundError(item_id, f"no item with id {item_id}")

    def _ensure_unique_space(
        self, parent_id: SpaceId, name: str, exclude: SpaceId | None = None
    ) -> None:
        for child_id in self._spaces[parent_id].spaces:
            if child_id != exclude and self._spaces[child_id].name == name:
                raise DuplicateNameError(name, "space", self.display(parent_id))

    def _ensure_unique_item(
        self, parent_id: SpaceId, name: str, exclude: ItemId | None = None
    ) -> None:
        for item_id in self._spaces[parent_id].items:
            if item_id != exclude and self._items[item_id].name == name:
                raise DuplicateNameError(name, "item", self.display(parent_id))

    # ── Read access ──────────────────────────────────────────

    @property
    def root(self) -> SpaceId | None:
        return self._root

    @property
    def is_empty(self) -> bool:
        return self._root is None

    def __len__(self) -> int:
        return len(self._spaces) + len(self._items)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._spaces or node_id in self._items

    def get(self, node_id: NodeId) -> Node:
        if node_id in self._spaces:
            return self.get_space(node_id)
        if node_id in self._items:
            return self.get_item(node_id)
        raise NotFoundError(node_id, f"no node with id {node_id}")

    def get_space(self, space_id: NodeId) -> Space:
        record = self._space_record(space_id)
        return Space(
            id=SpaceId(space_id),
            name=record.name,
            parent=record.parent,
            spaces=tuple(record.spaces),
            items=tuple(record.items),
        )

    def get_item(self, item_id: NodeId) -> Item:
        record = self._item_record(item_id)
        return Item(
            id=ItemId(item_id),
            name=record.name,
            parent=record.parent,
            description=record.description,
        )

    def ancestors(self, node_id: NodeId) -> Iterator[SpaceId]:
        """Yield the parent of `node_id`, its parent, and so on up to the root."""
        if node_id in self._items:
            current: SpaceId | None = self._items[node_id].parent
        else:
            current = self._space_record(node_id).parent
        while current is not None:
            yield current
            current = self._spaces[current].parent

    def path_names(self, node_id: NodeId) -> list[str]:
        """Names from the root down to `node_id`, inclusive."""
        node = self.get(node_id)
        names = [self._spaces[a].name for a in self.ancestors(node_id)]
        names.reverse()
        names.append(node.name)
        return names

    def display(self, node_id: NodeId) -> str:
        return PATH_SEPARATOR.join(self.path_names(node_id))

    def walk(self, start: SpaceId | None = None) -> Iterator[tuple[int, Node]]:
        """Pre-order `(depth, node)` pairs below `start` (default: the root).

        A space is followed by the subtrees of its child spaces, then by its
        own items, each in stored order.
        """
        if start is None:
            if self._root is None:
                return
            start = self._root
        self._space_record(start)

        stack: list[tuple[int, NodeId, bool]] = [(0, start, True)]
        while stack:
            depth, node_id, is_space = stack.pop()
            if not is_space:
                yield depth, self.get_item(node_id)
                continue
            space = self.get_space(node_id)
            yield depth, space
            for item_id in reversed(space.items):
                stack.append((depth + 1, item_id, False))
            for child_id in reversed(space.spaces):
                stack.append((depth + 1, child_id, True))

    def iter_spaces(self, start: SpaceId | None = None) -> Iterator[Space]:
        for _, node in self.walk(start):
            if isinstance(node, Space):
                yield node

    def iter_items(self, start: SpaceId | None = None) -> Iterator[Item]:
        for _, node in self.walk(start):
            if isinstance(node, Item):
                yield node

    # ── Creation ─────────────────────────────────────────────

    def create_root(self, name: str) -> SpaceId:
        """Discard the current tree and start a new one."""
        validate_name(name)
        self._spaces.clear()
        self._items.clear()
        root_id = SpaceId(self._allocate())
        self._spaces[root_id] = _SpaceRecord(name=name, parent=None)
        self._root = root_id
        return root_id

    def add_space(self, parent: SpaceId, name: str) -> SpaceId:
        validate_name(name)
        parent_record = self._space_record(parent)
        self._ensure_unique_space(parent, name)

        space_id = SpaceId(self._allocate())
        self._spaces[space_id] = _SpaceRecord(name=name, parent=parent)
        parent_record.spaces.append(space_id)
        return space_id

    def add_item(self, parent: SpaceId, name: str, description: str | None = None) -> ItemId:
        validate_name(name)
        parent_record = self._space_record(parent)
        self._ensure_unique_item(parent, name)

        item_id = ItemId(self._allocate())
        self._items[item_id] = _ItemRecord(name=name, parent=parent, description=description)
        parent_record.items.append(item_id)
        return item_id

    # ── Editing ──────────────────────────────────────────────

    def rename_space(self, space_id: SpaceId, new_name: str) -> None:
        validate_name(new_name)
        record = self._space_record(space_id)
        if record.name == new_name:
            return
        if record.parent is not None:
            self._ensure_unique_space(record.parent, new_name, exclude=space_id)
        record.name = new_name

    def rename_item(self, item_id: ItemId, new_name: str) -> None:
        validate_name(new_name)
        record = self._item_record(item_id)
        if record.name == new_name:
            return
        self._ensure_unique_item(record.parent, new_name, exclude=item_id)
        record.name = new_name

    def set_description(self, item_id: ItemId, description: str | None) -> None:
        self._item_record(item_id).description = description

    # ── Moving ───────────────────────────────────────────────

    def move_space(self, space_id: SpaceId, new_parent: SpaceId) -> None:
        record = self._space_record(space_id)
        target = self._space_record(new_parent)
        if new_parent == space_id or space_id in self.ancestors(new_parent):
            raise CycleError(self.display(space_id), self.display(new_parent))
        if record.parent == new_parent:
            return
        self._ensure_unique_space(new_parent, record.name)

        # The root always fails the cycle check above, so a parent exists.
        self._spaces[record.parent].spaces.remove(space_id)
        target.spaces.append(space_id)
        record.parent = new_parent

    def move_item(self, item_id: ItemId, new_parent: SpaceId) -> None:
        self.move_items([item_id], new_parent)

    def move_items(self, item_ids: Iterable[ItemId], new_parent: SpaceId) -> list[ItemId]:
        """Move several items into `new_parent` as one all-or-nothing step.

        Items already in `new_parent` stay where they are. Returns the ids
        that actually moved.
        """
        ids = list(dict.fromkeys(item_ids))
        records = [self._item_record(item_id) for item_id in ids]
        target = self._space_record(new_parent)

        moving = [(i, r) for i, r in zip(ids, records) if r.parent != new_parent]
        taken = {self._items[i].name for i in target.items}
        for _, record in moving:
            if record.name in taken:
                raise DuplicateNameError(record.name, "item", self.display(new_parent))
            taken.add(record.name)

        for item_id, record in moving:
            self._spaces[record.parent].items.remove(item_id)
            target.items.append(item_id)
            record.parent = new_parent
        return [item_id for item_id, _ in moving]

    # ── Removal ──────────────────────────────────────────────

    def _collect_subtree(self, space_id: SpaceId) -> tuple[list[SpaceId], list[ItemId]]:
        """Spaces under (and including) `space_id` in post-order, plus every
        item found in them, ordered by a pre-order visit of their spaces."""
        spaces: list[SpaceId] = []
        items: list[ItemId] = []
        stack: list[tuple[SpaceId, bool]] = [(space_id, False)]
        while stack:
            current, expanded = stack.pop()
            if expanded:
                spaces.append(current)
                continue
            stack.append((current, True))
            record = self._spaces[current]
            items.extend(record.items)
            for child_id in reversed(record.spaces):
                stack.append((child_id, False))
        return spaces, items

    def remove_space(self, space_id: SpaceId) -> None:
        """Delete a space with everything below it. Removing the root empties
        the store."""
        record = self._space_record(space_id)
        spaces, items = self._collect_subtree(space_id)

        if record.parent is None:
            self._root = None
        else:
            self._spaces[record.parent].spaces.remove(space_id)
        for item_id in items:
            del self._items[item_id]
        for doomed in spaces:
            del self._spaces[doomed]

    def remove_item(self, item_id: ItemId) -> None:
        record = self._item_record(item_id)
        self._spaces[record.parent].items.remove(item_id)
        del self._items[item_id]

    def dissolve_space(self, space_id: SpaceId) -> list[ItemId]:
        """Remove a space and its sub-spaces, handing all of their items to
        the removed space's parent. Returns the rescued item ids."""
        record = self._space_record(space_id)
        if record.parent is None:
            raise RootError("dissolve")
        parent_id = record.parent
        parent = self._spaces[parent_id]
        spaces, items = self._collect_subtree(space_id)

        taken = {self._items[i].name for i in parent.items}
        for item_id in items:
            name = self._items[item_id].name
            if name in taken:
                raise DuplicateNameError(name, "item", self.display(parent_id))
            taken.add(name)

        parent.spaces.remove(space_id)
        for item_id in items:
            self._items[item_id].parent = parent_id
            parent.items.append(item_id)
        for doomed in spaces:
            del self._spaces[doomed]
        return items
