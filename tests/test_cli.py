"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from puha.__main__ import build_parser, main


@pytest.fixture
def state_file(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in ["PUHA_FILE", "PUHA_INDENT", "PUHA_LOG_LEVEL"]:
        monkeypatch.delenv(key, raising=False)
    return tmp_path / "space.json"


@pytest.fixture
def puha(state_file: Path):
    def run(*args: str) -> int:
        return main(["-f", str(state_file), *args])

    return run


class TestParser:
    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_move_items_takes_many(self):
        args = build_parser().parse_args(["move-items", "A", "B", "x", "y"])
        assert (args.source, args.to, args.items) == ("A", "B", ["x", "y"])


class TestCommands:
    def test_build_and_show(self, puha, capsys):
        assert puha("new-root", "Home") == 0
        assert puha("add-space", "Home", "Bedroom") == 0
        assert puha("add-item", "Bedroom", "Book", "Rust") == 0
        capsys.readouterr()

        assert puha("show-tree") == 0
        assert capsys.readouterr().out == "Home\n  Bedroom\n    - Book\n"

    def test_state_written_as_json(self, puha, state_file: Path):
        puha("new-root", "Home")
        puha("add-item", "Home", "Keys")
        document = json.loads(state_file.read_text(encoding="utf-8"))
        assert document["root"]["items"] == [{"name": "Keys"}]

    def test_default_file_in_cwd(self, state_file: Path):
        assert main(["new-root", "Home"]) == 0
        assert state_file.exists()

    def test_list(self, puha, capsys):
        puha("new-root", "Home")
        puha("add-space", "Home", "Bedroom")
        puha("add-item", "Home", "Keys")
        capsys.readouterr()

        puha("list", "Home")
        assert capsys.readouterr().out == "item: Keys\nspace: Bedroom\n"
        puha("list-items", "Home")
        assert capsys.readouterr().out == "Keys\n"

    def test_move_and_edit(self, puha, capsys):
        puha("new-root", "Home")
        puha("add-space", "Home", "Bedroom")
        puha("add-space", "Home", "Office")
        puha("add-item", "Bedroom", "Book")
        puha("add-item", "Bedroom", "Lamp")
        assert puha("move-items", "Bedroom", "Office", "Book", "Lamp") == 0
        assert puha("edit-item", "Lamp", "--name", "Desk lamp", "--description", "LED") == 0
        assert puha("edit-space", "Office", "Study") == 0
        assert puha("move-space", "Study", "Bedroom") == 0
        capsys.readouterr()

        puha("show-tree", "Bedroom")
        assert capsys.readouterr().out == "Bedroom\n  Study\n    - Book\n    - Desk lamp\n"

    def test_delete_and_dissolve(self, puha, capsys):
        puha("new-root", "Home")
        puha("add-space", "Home", "Bedroom")
        puha("add-space", "Bedroom", "Closet")
        puha("add-item", "Closet", "Shirt")
        puha("add-item", "Home", "Keys")
        assert puha("dissolve-space", "Bedroom") == 0
        assert puha("delete-item", "Keys") == 0
        capsys.readouterr()

        puha("show-tree")
        assert capsys.readouterr().out == "Home\n  - Shirt\n"

        assert puha("delete-space", "Home") == 0
        assert puha("show-tree") == 1


class TestErrors:
    def test_duplicate_exits_nonzero(self, puha, capsys):
        puha("new-root", "Home")
        puha("add-space", "Home", "Bedroom")
        capsys.readouterr()

        assert puha("add-space", "Home", "Bedroom") == 1
        assert "already exists" in capsys.readouterr().err

    def test_ambiguous_lists_candidates(self, puha, capsys):
        puha("new-root", "Home")
        puha("add-space", "Home", "Bedroom")
        puha("add-space", "Home", "Office")
        puha("add-item", "Bedroom", "Book")
        puha("add-item", "Office", "Book")
        capsys.readouterr()

        assert puha("delete-item", "Book") == 1
        err = capsys.readouterr().err
        assert "  Home/Bedroom/Book" in err
        assert "  Home/Office/Book" in err

    def test_failed_command_does_not_save(self, puha, state_file: Path):
        puha("new-root", "Home")
        before = state_file.read_text(encoding="utf-8")
        assert puha("add-item", "Garage", "Bike") == 1
        assert state_file.read_text(encoding="utf-8") == before

    def test_corrupt_file(self, puha, state_file: Path, capsys):
        state_file.write_text("{broken", encoding="utf-8")
        assert puha("show-tree") == 1
        assert "corrupt state" in capsys.readouterr().err

    def test_new_root_overwrites_corrupt_file(self, puha, state_file: Path):
        state_file.write_text("{broken", encoding="utf-8")
        assert puha("new-root", "Home") == 0
        assert json.loads(state_file.read_text(encoding="utf-8"))["root"]["name"] == "Home"


class TestSharedName:
    @pytest.fixture(autouse=True)
    def _boxes(self, puha, capsys):
        puha("new-root", "Home")
        puha("add-space", "Home", "Office")
        puha("add-space", "Home", "Box")
        puha("add-item", "Home", "Box")
        capsys.readouterr()

    def _listing(self, puha, capsys, space: str = "Home") -> list[str]:
        assert puha("list", space) == 0
        return capsys.readouterr().out.splitlines()

    def test_delete_item(self, puha, capsys):
        assert puha("delete-item", "Home/Box") == 0
        assert self._listing(puha, capsys) == ["space: Office", "space: Box"]

    def test_delete_space(self, puha, capsys):
        assert puha("delete-space", "Home/Box") == 0
        assert self._listing(puha, capsys) == ["item: Box", "space: Office"]

    def test_edit_space(self, puha, capsys):
        assert puha("edit-space", "Home/Box", "Crate") == 0
        assert self._listing(puha, capsys) == ["item: Box", "space: Office", "space: Crate"]

    def test_move_space(self, puha, capsys):
        assert puha("move-space", "Home/Box", "Office") == 0
        assert self._listing(puha, capsys, "Office") == ["space: Box"]
        assert self._listing(puha, capsys) == ["item: Box", "space: Office"]

    def test_generic_commands_take_kind(self, puha, capsys):
        assert puha("rename", "Home/Box", "Carton", "--kind", "item") == 0
        assert puha("move", "Home/Box", "Office", "--kind", "space") == 0
        assert self._listing(puha, capsys) == ["item: Carton", "space: Office"]

    def test_ambiguous_candidates_are_tagged(self, puha, capsys):
        assert puha("rename", "Home/Box", "Crate") == 1
        err = capsys.readouterr().err
        assert "  Home/Box (space)" in err
        assert "  Home/Box (item)" in err
