import argparse
from typing import Any, Mapping

from core import Backend


def build_parser(commands: Any, themes: Mapping[str, Any]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo",
        description="todo: terminal task list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data-file", dest="data_file", help="task file (default: ~/.local/share/todo-app/...)")
    parser.add_argument(
        "--backend",
        choices=[b.label for b in Backend],
        help="storage format: json (current) or lines (legacy)",
    )
    parser.add_argument("--theme", choices=list(themes.keys()), help="interface palette")
    parser.add_argument("--tick-ms", dest="tick_ms", type=int, help="redraw / animation tick in milliseconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging to the log file")
    parser.add_argument("--version", action="store_true", help="print version and exit")

    sub = parser.add_subparsers(dest="command", help="commands")

    tui_p = sub.add_parser("tui", help="run the interactive list (default)")
    tui_p.set_defaults(func=commands.cmd_tui)

    list_p = sub.add_parser("list", help="print tasks")
    list_p.set_defaults(func=commands.cmd_list)

    add_p = sub.add_parser("add", help="add a task")
    add_p.add_argument("description", help="task description")
    add_p.add_argument("--body", default="", help="free text body")
    add_p.set_defaults(func=commands.cmd_add)

    clear_p = sub.add_parser("clear", help="delete every task")
    clear_p.set_defaults(func=commands.cmd_clear)

    return parser
