"""CLI argument parsing and start-mode routing tests.

The terminal pieces are patched out, so these run without a TTY.
"""

from __future__ import annotations

import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazynav import cli


class CliParserTests(unittest.TestCase):
    def test_defaults(self) -> None:
        args = cli.build_parser().parse_args([])
        self.assertIsNone(args.path)
        self.assertIsNone(args.query)
        self.assertFalse(args.write)
        self.assertFalse(args.search)

    def test_start_modes_are_mutually_exclusive(self) -> None:
        with mock.patch("sys.stderr"), self.assertRaises(SystemExit):
            cli.build_parser().parse_args(["--search", "--rename"])


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_main(self, argv: list[str], exit_path: str | None = None) -> tuple[mock.Mock, mock.Mock, mock.Mock]:
        stdin = mock.Mock()
        stdin.isatty.return_value = True
        stdin.fileno.return_value = 0
        stdout = mock.Mock()
        stdout.isatty.return_value = True
        stdout.fileno.return_value = 1
        with mock.patch.object(sys, "stdin", stdin), mock.patch.object(sys, "stdout", stdout), mock.patch(
            "lazynav.tui.TerminalController"
        ), mock.patch("lazynav.tui.Screen"), mock.patch("lazynav.tui.TerminalApp") as app_cls, mock.patch(
            "lazynav.cli.CommandHost"
        ) as host_cls, mock.patch("lazynav.cli.JsonKeyValueStore"):
            app_cls.return_value.run.side_effect = lambda start: (start(), exit_path)[1]
            cli.main(argv)
        return host_cls.return_value, app_cls, stdout

    def test_missing_directory_is_rejected(self) -> None:
        with self.assertRaises(SystemExit):
            cli.main([str(self.root / "nope")])

    def test_requires_terminal(self) -> None:
        stdin = mock.Mock()
        stdin.isatty.return_value = False
        with mock.patch.object(sys, "stdin", stdin), self.assertRaises(SystemExit):
            cli.main([str(self.root)])

    def test_default_mode_opens_navigator_with_query(self) -> None:
        host, _app_cls, stdout = self.run_main([str(self.root), "src/", "--write"])

        host.open_navigator.assert_called_once_with("src/", write=True)
        stdout.write.assert_not_called()

    def test_content_flag_starts_content_search(self) -> None:
        host, _app_cls, _stdout = self.run_main([str(self.root), "needle", "--content"])

        host.invoke_search.assert_called_once_with("needle", name_only=False)

    def test_rename_flag_starts_rename(self) -> None:
        target = self.root / "a.txt"
        target.write_text("x", encoding="utf-8")

        host, _app_cls, _stdout = self.run_main([str(self.root), "--rename", "--file", str(target)])

        host.rename_current_or_focused.assert_called_once_with()

    def test_folder_opened_in_new_window_is_printed(self) -> None:
        _host, _app_cls, stdout = self.run_main([str(self.root)], exit_path="/elsewhere")

        stdout.write.assert_called_once_with("/elsewhere\n")


class LoadDocumentTests(unittest.TestCase):
    def test_reads_existing_file_and_tolerates_missing_one(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            existing = Path(tmp) / "a.txt"
            existing.write_text("hello", encoding="utf-8")

            document = cli._load_document(str(existing), "sel")
            missing = cli._load_document(str(Path(tmp) / "new.txt"), "")

        self.assertEqual(document.text, "hello")
        self.assertEqual(document.selection, "sel")
        self.assertEqual(missing.text, "")
        self.assertIsNone(cli._load_document(None, ""))


if __name__ == "__main__":
    unittest.main()
