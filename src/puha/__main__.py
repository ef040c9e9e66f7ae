"""Entry point: python -m puha [-f FILE] <command> ...

Every command loads the tree from the state file, runs one Inventory
operation and, for commands that change the tree, writes it back.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from puha.config import PuhaConfig, load_config
from puha.core import UNSET, Inventory
from puha.storage.json_file import JsonFileStorage
from puha.tree.errors import AmbiguousNameError, PuhaError

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ── Command handlers ─────────────────────────────────────────
# Each returns the text to print, or None.

Handler = Callable[[Inventory, argparse.Namespace], "str | None"]


def _new_root(inv: Inventory, args: argparse.Namespace) -> None:
    inv.create_root(args.name)


def _show_tree(inv: Inventory, args: argparse.Namespace) -> str:
    return inv.render_tree(args.name)


def _add_item(inv: Inventory, args: argparse.Namespace) -> None:
    inv.add_item(args.space, args.item, args.description)


def _add_space(inv: Inventory, args: argparse.Namespace) -> None:
    inv.add_space(args.parent, args.child)


def _list_items(inv: Inventory, args: argparse.Namespace) -> str:
    return "\n".join(inv.list_items(args.space))


def _list(inv: Inventory, args: argparse.Namespace) -> str:
    return "\n".join(f"{kind}: {name}" for kind, name in inv.list_contents(args.space))


def _move_items(inv: Inventory, args: argparse.Namespace) -> None:
    inv.move_items(args.source, args.to, args.items)


def _move(inv: Inventory, args: argparse.Namespace) -> None:
    inv.move(args.path, args.to, args.kind)


def _move_space(inv: Inventory, args: argparse.Namespace) -> None:
    inv.move(args.path, args.to, "space")


def _edit_item(inv: Inventory, args: argparse.Namespace) -> None:
    if args.clear_description:
        description: str | None | object = None
    elif args.description is not None:
        description = args.description
    else:
        description = UNSET
    inv.edit_item(args.item, name=args.name, description=description)


def _rename(inv: Inventory, args: argparse.Namespace) -> None:
    inv.rename(args.path, args.new_name, args.kind)


def _edit_space(inv: Inventory, args: argparse.Namespace) -> None:
    inv.rename(args.path, args.new_name, "space")


def _delete_item(inv: Inventory, args: argparse.Namespace) -> None:
    inv.remove(args.path, "item")


def _delete_space(inv: Inventory, args: argparse.Namespace) -> None:
    inv.remove(args.path, "space")


def _dissolve_space(inv: Inventory, args: argparse.Namespace) -> None:
    inv.dissolve_space(args.space)


# name -> (handler, changes the tree)
_COMMANDS: dict[str, tuple[Handler, bool]] = {
    "new-root": (_new_root, True),
    "show-tree": (_show_tree, False),
    "add-item": (_add_item, True),
    "add-space": (_add_space, True),
    "list-items": (_list_items, False),
    "list": (_list, False),
    "move-items": (_move_items, True),
    "move-space": (_move_space, True),
    "move": (_move, True),
    "edit-item": (_edit_item, True),
    "edit-space": (_edit_space, True),
    "rename": (_rename, True),
    "delete-item": (_delete_item, True),
    "delete-space": (_delete_space, True),
    "dissolve-space": (_dissolve_space, True),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="puha", description="Organize belongings into nested spaces."
    )
    parser.add_argument("-f", "--file", type=Path, help="file storing the space tree")
    parser.add_argument("--log-level", help="logging level (default from config)")
    sub = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    p = sub.add_parser("new-root", help="create a new root space, replacing any tree")
    p.add_argument("name")

    p = sub.add_parser("show-tree", help="show a space and all of its children")
    p.add_argument("name", nargs="?")

    p = sub.add_parser("add-item", help="add an item to a space")
    p.add_argument("space")
    p.add_argument("item")
    p.add_argument("description", nargs="?")

    p = sub.add_parser("add-space", help="add a space to another space")
    p.add_argument("parent")
    p.add_argument("child")

    p = sub.add_parser("list-items", help="list all items in a space")
    p.add_argument("space")

    p = sub.add_parser("list", help="list the items and spaces in a space (one level)")
    p.add_argument("space")

    p = sub.add_parser("move-items", help="move one or more items to another space")
    p.add_argument("source", metavar="from")
    p.add_argument("to")
    p.add_argument("items", nargs="+")

    p = sub.add_parser("move-space", help="move a space and all its children")
    p.add_argument("path", metavar="space")
    p.add_argument("to")

    p = sub.add_parser("move", help="move a space or an item")
    p.add_argument("path")
    p.add_argument("to")
    p.add_argument(
        "--kind", choices=("space", "item"), help="what to move when both share the path"
    )

    p = sub.add_parser("edit-item", help="edit an item's name and/or description")
    p.add_argument("item")
    p.add_argument("--name")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--description")
    group.add_argument("--clear-description", action="store_true")

    p = sub.add_parser("edit-space", help="rename a space")
    p.add_argument("path", metavar="space")
    p.add_argument("new_name")

    p = sub.add_parser("rename", help="rename a space or an item")
    p.add_argument("path")
    p.add_argument("new_name")
    p.add_argument(
        "--kind", choices=("space", "item"), help="what to rename when both share the path"
    )

    p = sub.add_parser("delete-item", help="delete an item")
    p.add_argument("path", metavar="item")

    p = sub.add_parser("delete-space", help="delete a space with everything in it")
    p.add_argument("path", metavar="space")

    p = sub.add_parser("dissolve-space", help="delete a space, moving its items to the parent")
    p.add_argument("space")

    return parser


def run(args: argparse.Namespace, config: PuhaConfig) -> int:
    storage = JsonFileStorage(args.file or config.store.file, indent=config.store.indent)
    handler, mutating = _COMMANDS[args.command]
    options = {"indent": config.render.indent, "show_descriptions": config.render.descriptions}

    try:
        if args.command == "new-root":
            # A fresh root never needs the old file, which may be unreadable.
            inventory = Inventory(storage=storage, **options)
        else:
            inventory = Inventory.open(storage, **options)
        output = handler(inventory, args)
        if mutating:
            inventory.save()
    except AmbiguousNameError as exc:
        print(f"error: {exc.name!r} is ambiguous, use one of:", file=sys.stderr)
        for candidate in exc.labels:
            print(f"  {candidate}", file=sys.stderr)
        return 1
    except PuhaError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    _setup_logging(args.log_level or config.log_level)
    return run(args, config)


if __name__ == "__main__":
    sys.exit(main())
