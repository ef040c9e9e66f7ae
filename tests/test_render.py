"""Tests for tree rendering."""

from __future__ import annotations

import pytest

from puha.tree.render import TreeRenderer
from puha.tree.store import NodeStore


@pytest.fixture
def store() -> NodeStore:
    store = NodeStore()
    root = store.create_root("Home")
    bedroom = store.add_space(root, "Bedroom")
    store.add_item(bedroom, "Book", "Rust")
    store.add_item(root, "Keys")
    store.add_space(root, "Garage")
    return store


class TestTreeRenderer:
    def test_basic_scenario(self):
        store = NodeStore()
        home = store.create_root("Home")
        bedroom = store.add_space(home, "Bedroom")
        store.add_item(bedroom, "Book", "Rust")

        assert list(TreeRenderer(store).lines()) == ["Home", "  Bedroom", "    - Book"]

    def test_spaces_before_items(self, store: NodeStore):
        assert TreeRenderer(store).render() == "\n".join(
            ["Home", "  Bedroom", "    - Book", "  Garage", "  - Keys"]
        )

    def test_indent_width(self, store: NodeStore):
        lines = list(TreeRenderer(store, indent=4).lines())
        assert lines[1] == "    Bedroom"
        assert lines[2] == "        - Book"

    def test_descriptions(self, store: NodeStore):
        lines = list(TreeRenderer(store, show_descriptions=True).lines())
        assert "    - Book: Rust" in lines
        assert "  - Keys" in lines

    def test_subtree(self, store: NodeStore):
        bedroom = store.get_space(store.root).spaces[0]
        assert list(TreeRenderer(store).lines(bedroom)) == ["Bedroom", "  - Book"]

    def test_replayable(self, store: NodeStore):
        renderer = TreeRenderer(store)
        lines = renderer.lines()
        assert next(lines) == "Home"
        assert renderer.render().splitlines()[0] == "Home"
        assert len(list(lines)) == 4

    def test_empty_store(self):
        assert TreeRenderer(NodeStore()).render() == ""
