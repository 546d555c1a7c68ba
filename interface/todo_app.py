#!/usr/bin/env python3
"""
todo: terminal task list.

Bootstrap: resolves settings, configures logging, loads the store and hands
over to the chosen command.
"""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version

from application.task_store import TaskStore
from config import resolve_settings
from core import ParseError, PersistenceError, Task, ValidationError
from infrastructure.storage_factory import build_storage
from interface.cli_parser import build_parser as build_cli_parser
from interface.tui_app import cmd_tui
from interface.tui_themes import THEMES
from util.logging_setup import setup_logging

logger = logging.getLogger("todo_tui.app")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARSE = 2


def cmd_list(args) -> int:
    sys.stdout.write(args.store.tasks_into_string())
    return EXIT_OK


def cmd_add(args) -> int:
    args.store.add(Task(0, args.description, args.body))
    return EXIT_OK


def cmd_clear(args) -> int:
    args.store.clear()
    return EXIT_OK


def build_parser():
    """Build CLI argument parser."""
    return build_cli_parser(commands=sys.modules[__name__], themes=THEMES)


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        try:
            print(pkg_version("todo-tui"))
        except PackageNotFoundError:
            print("0.0.0")
        return EXIT_OK

    try:
        settings = resolve_settings(args.data_file, args.backend, args.tick_ms, args.theme)
    except ValueError as exc:
        print(f"todo: {exc}", file=sys.stderr)
        return EXIT_ERROR
    try:
        settings.data_file.parent.mkdir(parents=True, exist_ok=True)
        setup_logging(
            log_dir=settings.data_file.parent,
            level=logging.DEBUG if args.verbose else logging.INFO,
        )
    except OSError as exc:
        print(f"todo: cannot prepare {settings.data_file.parent}: {exc}", file=sys.stderr)
        return EXIT_ERROR

    store = TaskStore(build_storage(settings.backend, settings.data_file))
    try:
        store.load()
    except ParseError as exc:
        logger.error("Cannot parse %s: %s", settings.data_file, exc)
        print(f"todo: {settings.data_file}: {exc}", file=sys.stderr)
        return EXIT_PARSE
    except PersistenceError as exc:
        logger.error("Cannot load %s: %s", settings.data_file, exc)
        print(f"todo: {exc}", file=sys.stderr)
        return EXIT_ERROR

    args.store = store
    args.theme = settings.theme
    args.tick_interval = settings.tick_interval
    func = getattr(args, "func", None) or cmd_tui
    try:
        return func(args)
    except (ValidationError, PersistenceError) as exc:
        logger.error("Command failed: %s", exc)
        print(f"todo: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
