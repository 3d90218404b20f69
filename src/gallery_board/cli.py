"""Command line access to the gallery (same storage as the web app)."""

from __future__ import annotations

import argparse
import sys

from .config import load_settings
from .errors import NotFoundError, ValidationError
from .logging import init_logging
from .storage import FileStorage
from .store import ItemStore
from .workflow import EditWorkflow, confirm_delete, rename_header


def build_parser():
    parser = argparse.ArgumentParser(prog="gallery-board", description="Manage the image gallery")
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("list", help="List items in display order")

    add = sub.add_parser("add", help="Add an image card at the end")
    add.add_argument("--title", required=True)
    add.add_argument("--url", required=True)

    edit = sub.add_parser("edit", help="Change title and/or URL of a card")
    edit.add_argument("--id", required=True)
    edit.add_argument("--title")
    edit.add_argument("--url")

    delete = sub.add_parser("delete", help="Delete a card")
    delete.add_argument("--id", required=True)
    delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    move = sub.add_parser("move", help="Move the card at one position to another (0-based)")
    move.add_argument("--from", dest="src", type=int, required=True)
    move.add_argument("--to", dest="dst", type=int, required=True)

    title = sub.add_parser("title", help="Rename the page heading")
    title.add_argument("--name", required=True)

    serve = sub.add_parser("serve", help="Run the web UI")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)
    serve.add_argument("--debug", action="store_true")
    return parser


def ask_yes_no(question: str) -> bool:
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def cli_main(argv, settings=None, storage=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings or load_settings()

    if args.cmd == "serve":
        from .app import create_app
        app = create_app(settings, storage)
        # one request at a time: store mutations stay strictly serialized
        app.run(host=args.host, port=args.port, debug=args.debug, threaded=False)
        return 0

    if args.cmd is None:
        parser.print_help()
        return 0

    store = ItemStore(storage or FileStorage(settings.data_dir), require_valid_url=settings.strict_urls).load()

    if args.cmd == "list":
        print(f"# {store.header_title}")
        for i, it in enumerate(store.items):
            print(f"{i}\t{it.id}\t{it.title}\t{it.image_url}")
        return 0

    if args.cmd in ("add", "edit"):
        workflow = EditWorkflow(store)
        try:
            draft = workflow.open_add() if args.cmd == "add" else workflow.open_edit(args.id)
        except NotFoundError:
            print("Item not found", file=sys.stderr); return 1
        if args.title is not None:
            workflow.set_title(args.title)
        if args.url is not None:
            workflow.set_image_url(args.url)
        item = workflow.submit()
        if item is None:
            print(draft.error or "Item not found", file=sys.stderr); return 1
        print(f"item={item.id}")
        return 0

    if args.cmd == "delete":
        if store.get(args.id) is None:
            print("Item not found", file=sys.stderr); return 1
        if args.yes:
            confirm = lambda item: True  # noqa: E731
        else:
            confirm = lambda item: ask_yes_no(f"Delete {item.title!r}?")  # noqa: E731
        if not confirm_delete(store, args.id, confirm):
            print("Cancelled.", file=sys.stderr); return 1
        return 0

    if args.cmd == "move":
        try:
            store.reorder(args.src, args.dst)
        except NotFoundError as e:
            print(str(e), file=sys.stderr); return 1
        return 0

    if args.cmd == "title":
        try:
            changed = rename_header(store, lambda current: args.name)
        except ValidationError as e:
            print(e.message, file=sys.stderr); return 1
        if not changed:
            print("Page title cannot be empty.", file=sys.stderr); return 1
        return 0

    parser.print_help()
    return 0


def main():
    settings = load_settings()
    init_logging(settings.log_level, settings.log_dir)
    sys.exit(cli_main(sys.argv[1:], settings))
