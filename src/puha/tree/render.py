"""Indented text rendering of a tree."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from puha.tree.models import Item, SpaceId

if TYPE_CHECKING:
    from puha.tree.store import NodeStore

ITEM_MARKER = "- "


class TreeRenderer:
    """Pre-order, depth-indented lines: a space, its sub-spaces, then its items."""

    def __init__(self, store: NodeStore, indent: int = 2, show_descriptions: bool = False) -> None:
        self.store = store
        self.indent = indent
        self.show_descriptions = show_descriptions

    def lines(self, start: SpaceId | None = None) -> Iterator[str]:
        for depth, node in self.store.walk(start):
            padding = " " * (self.indent * depth)
            if isinstance(node, Item):
                text = f"{ITEM_MARKER}{node.name}"
                if self.show_descriptions and node.description:
                    text += f": {node.description}"
                yield padding + text
            else:
                yield padding + node.name

    def render(self, start: SpaceId | None = None) -> str:
        return "\n".join(self.lines(start))
