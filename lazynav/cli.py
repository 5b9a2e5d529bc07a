"""Command-line front door for lazynav.

Parses CLI options, builds the terminal collaborators, and runs the picker
loop starting in the navigator, the search picker, or the rename prompt.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from .clipboard import SystemClipboard
from .collaborators import Document
from .commands import CommandHost, HostServices
from .config import load_navigator_config
from .localfs import LocalFileSystem
from .pins import PinStore
from .search import SubprocessRunner
from .store import JsonKeyValueStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Keyboard-driven file navigator and search launcher for the terminal."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Workspace folder. Defaults to the current directory.",
    )
    parser.add_argument("query", nargs="?", default=None, help="Initial input for the picker.")
    parser.add_argument("--file", metavar="FILE", help="Treat FILE as the active document.")
    parser.add_argument(
        "--write",
        action="store_true",
        help="Write mode: save the active document's text under the chosen name.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--search", action="store_true", help="Start in file name search.")
    mode.add_argument("--content", action="store_true", help="Start in file content search.")
    mode.add_argument("--rename", action="store_true", help="Rename the active document.")
    parser.add_argument("--log-file", metavar="PATH", help="Write debug logs to PATH.")
    return parser


def _load_document(file_arg: str | None, selection: str) -> Document | None:
    if not file_arg:
        return None
    path = Path(file_arg).absolute()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        text = ""
    except OSError as exc:
        raise SystemExit(f"Cannot read {path}: {exc}") from exc
    return Document(path=str(path), text=text, selection=selection)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and launch the terminal picker.

    A folder opened "in a new window" is printed to stdout on exit so shell
    wrappers can ``cd`` into it.
    """
    args = build_parser().parse_args(argv)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    workspace = Path(args.path or os.getcwd()).absolute()
    if not workspace.is_dir():
        raise SystemExit(f"Not a directory: {workspace}")
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("lazynav needs an interactive terminal.")

    # Imported here so --help works where termios is unavailable.
    from .tui import Screen, TerminalApp, TerminalController, TerminalPrompter, TerminalWorkbench

    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    screen = Screen(sys.stdout.fileno())
    workbench = TerminalWorkbench(
        [str(workspace)],
        _load_document(args.file, ""),
        disable_tui_mode=terminal.disable_tui_mode,
        enable_tui_mode=terminal.enable_tui_mode,
    )
    host = CommandHost(
        HostServices(
            fs=LocalFileSystem(),
            workbench=workbench,
            prompter=TerminalPrompter(screen.draw, lambda: app.read_blocking()),
            clipboard=SystemClipboard(),
            pins=PinStore(JsonKeyValueStore()),
            config=load_navigator_config(),
            runner=SubprocessRunner(),
        )
    )
    app = TerminalApp(host, workbench, terminal, screen)

    def start() -> None:
        if args.search or args.content:
            host.invoke_search(args.query, name_only=not args.content)
        elif args.rename:
            host.rename_current_or_focused()
        else:
            host.open_navigator(args.query, write=args.write)

    exit_path = app.run(start)
    if workbench.status:
        sys.stderr.write(workbench.status + "\n")
    if exit_path is not None:
        sys.stdout.write(exit_path + "\n")


if __name__ == "__main__":
    main()
