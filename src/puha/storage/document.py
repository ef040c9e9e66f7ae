"""Conversion between a NodeStore and its plain document form.

Shape:
    {"version": 1,
     "root": {"name": "Home",
              "items": [{"name": "Book", "description": "Rust"}],
              "spaces": [{"name": "Bedroom", "items": [], "spaces": []}]}}

`"root": null` is an empty store. Loading replays the document through the
NodeStore operations, so a document only loads if every tree invariant holds.
Identities are not persisted; a loaded store assigns fresh ones in pre-order.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from puha.tree.errors import CorruptStateError, DuplicateNameError, InvalidNameError
from puha.tree.models import SpaceId
from puha.tree.store import NodeStore

FORMAT_VERSION = 1

T = TypeVar("T")


def dump_store(store: NodeStore) -> dict[str, Any]:
    if store.root is None:
        return {"version": FORMAT_VERSION, "root": None}
    return {"version": FORMAT_VERSION, "root": _dump_space(store, store.root)}


def _dump_space(store: NodeStore, space_id: SpaceId) -> dict[str, Any]:
    top = _space_entry(store, space_id)
    pending = [(space_id, top)]
    while pending:
        current, entry = pending.pop()
        for child_id in store.get_space(current).spaces:
            child = _space_entry(store, child_id)
            entry["spaces"].append(child)
            pending.append((child_id, child))
    return top


def _space_entry(store: NodeStore, space_id: SpaceId) -> dict[str, Any]:
    space = store.get_space(space_id)
    items = []
    for item_id in space.items:
        item = store.get_item(item_id)
        entry: dict[str, Any] = {"name": item.name}
        if item.description is not None:
            entry["description"] = item.description
        items.append(entry)
    return {"name": space.name, "items": items, "spaces": []}


def load_store(document: Any) -> NodeStore:
    """Rebuild a store from an untrusted document. Raises `CorruptStateError`."""
    data = _expect_object(document, "document")
    version = data.get("version")
    if version != FORMAT_VERSION:
        raise CorruptStateError("version", f"unsupported format version {version!r}")
    if "root" not in data:
        raise CorruptStateError("root", "missing")

    store = NodeStore()
    if data["root"] is None:
        return store

    root = _expect_object(data["root"], "root")
    root_id = _replay("root", store.create_root, _expect_name(root, "root"))

    pending: list[tuple[dict[str, Any], SpaceId, str]] = [(root, root_id, "root")]
    while pending:
        space, space_id, location = pending.pop()

        for index, raw in enumerate(_expect_list(space, "items", location)):
            where = f"{location}.items[{index}]"
            item = _expect_object(raw, where)
            description = item.get("description")
            if description is not None and not isinstance(description, str):
                raise CorruptStateError(f"{where}.description", "expected a string")
            _replay(where, store.add_item, space_id, _expect_name(item, where), description)

        children = []
        for index, raw in enumerate(_expect_list(space, "spaces", location)):
            where = f"{location}.spaces[{index}]"
            child = _expect_object(raw, where)
            child_id = _replay(where, store.add_space, space_id, _expect_name(child, where))
            children.append((child, child_id, where))
        pending.extend(reversed(children))

    return store


def _replay(location: str, operation: Callable[..., T], *args: Any) -> T:
    try:
        return operation(*args)
    except (InvalidNameError, DuplicateNameError) as exc:
        raise CorruptStateError(location, str(exc)) from exc


def _expect_object(value: Any, location: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise CorruptStateError(location, f"expected an object, got {type(value).__name__}")
    return value


def _expect_list(data: dict[str, Any], key: str, location: str) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise CorruptStateError(f"{location}.{key}", "expected a list")
    return value


def _expect_name(data: dict[str, Any], location: str) -> str:
    name = data.get("name")
    if not isinstance(name, str):
        raise CorruptStateError(f"{location}.name", "expected a string")
    return name
