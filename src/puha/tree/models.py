"""Identity types and read-only node snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, NewType, Union

from puha.tree.errors import InvalidNameError

SpaceId = NewType("SpaceId", int)
ItemId = NewType("ItemId", int)
NodeId = Union[SpaceId, ItemId]

NodeKind = Literal["space", "item"]

PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class Space:
    """Snapshot of a space. Child sequences are in stored (insertion) order."""

    id: SpaceId
    name: str
    parent: SpaceId | None = None
    spaces: tuple[SpaceId, ...] = ()
    items: tuple[ItemId, ...] = ()

    kind: ClassVar[NodeKind] = "space"

    @property
    def is_root(self) -> bool:
        return self.parent is None


@dataclass(frozen=True)
class Item:
    """Snapshot of an item."""

    id: ItemId
    name: str
    parent: SpaceId
    description: str | None = None

    kind: ClassVar[NodeKind] = "item"


Node = Union[Space, Item]


def validate_name(name: str) -> str:
    """Return `name` unchanged if usable as a node name, else raise."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidNameError(str(name))
    if PATH_SEPARATOR in name:
        raise InvalidNameError(name, f"name must not contain {PATH_SEPARATOR!r}")
    return name
