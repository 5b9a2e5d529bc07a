"""Tests for the command host that owns the navigator and search sessions."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazynav.collaborators import Document
from lazynav.commands import CommandHost, HostServices
from lazynav.config import NavigatorConfig
from lazynav.entries import Action, MenuAction, Synthetic
from lazynav.errors import FileSystemError
from lazynav.localfs import LocalFileSystem
from lazynav.pins import PinStore
from lazynav.store import MemoryKeyValueStore


class FakeWorkbench:
    def __init__(self) -> None:
        self.roots: list[str] = []
        self.document: Document | None = None
        self.errors: list[str] = []
        self.opened: list[str] = []

    def active_document(self) -> Document | None:
        return self.document

    def workspace_roots(self) -> list[str]:
        return list(self.roots)

    def open_file(self, path: str, *, beside: bool = False, line: int | None = None, untitled: bool = False) -> None:
        self.opened.append(path)

    def open_folder(self, path: str, new_window: bool = False) -> None:
        pass

    def show_error(self, message: str) -> None:
        self.errors.append(message)


def idle_process() -> mock.Mock:
    process = mock.Mock()
    process.stdout_lines.return_value = iter([])
    process.wait.return_value = (1, "")
    return process


class CommandHostTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "src").mkdir()
        (self.root / "src" / "app.py").write_text("print('hi')\n", encoding="utf-8")
        (self.root / "README.md").write_text("readme\n", encoding="utf-8")
        self.workbench = FakeWorkbench()
        self.prompter = mock.Mock()
        self.runner = mock.Mock()
        self.runner.spawn.side_effect = lambda stages, cwd: idle_process()
        self.config = NavigatorConfig(hide_ignored_files=False)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def make(self) -> CommandHost:
        return CommandHost(
            HostServices(
                fs=LocalFileSystem(),
                workbench=self.workbench,
                prompter=self.prompter,
                clipboard=mock.Mock(),
                pins=PinStore(MemoryKeyValueStore()),
                config=self.config,
                runner=self.runner,
            )
        )


class OpenNavigatorTests(CommandHostTestCase):
    def test_opens_in_active_document_folder_with_document_focused(self) -> None:
        self.workbench.document = Document(path=str(self.root / "src" / "app.py"))
        host = self.make()

        navigator = host.open_navigator()

        self.assertIs(host.navigator, navigator)
        self.assertEqual(host.current_path(), str(self.root / "src"))
        self.assertEqual(host.current_input_value(), "")
        self.assertEqual([item.name for item in navigator.picker.active_items], ["app.py"])

    def test_document_selection_becomes_initial_input(self) -> None:
        self.workbench.document = Document(path=str(self.root / "src" / "app.py"), selection="util.py")
        host = self.make()

        navigator = host.open_navigator()

        self.assertEqual(host.current_input_value(), "util.py")
        candidate = navigator.picker.active_items[0]
        self.assertIsInstance(candidate, Synthetic)
        self.assertEqual(candidate.name, "util.py")

    def test_falls_back_to_workspace_root(self) -> None:
        self.workbench.roots = [str(self.root)]
        host = self.make()

        host.open_navigator()

        self.assertEqual(host.current_path(), str(self.root))

    def test_untitled_document_is_not_a_location(self) -> None:
        self.workbench.roots = [str(self.root)]
        self.workbench.document = Document(path=str(self.root / "src" / "Untitled-1"), untitled=True)
        host = self.make()

        host.open_navigator()

        self.assertEqual(host.current_path(), str(self.root))

    def test_write_mode_offers_document_name(self) -> None:
        self.workbench.document = Document(path=str(self.root / "src" / "app.py"), text="x", selection="ignored")
        host = self.make()

        navigator = host.open_navigator_in_write_mode()

        self.assertTrue(navigator.write)
        self.assertEqual(host.current_input_value(), "")
        self.assertEqual(navigator.picker.active_items[0].description, "Create file")

    def test_reopening_replaces_previous_navigator(self) -> None:
        self.workbench.roots = [str(self.root)]
        host = self.make()
        first = host.open_navigator()

        second = host.open_navigator()

        self.assertTrue(first.disposed)
        self.assertIs(host.navigator, second)

    def test_disposing_navigator_clears_host_reference(self) -> None:
        self.workbench.roots = [str(self.root)]
        host = self.make()
        navigator = host.open_navigator()

        navigator.picker.hide()

        self.assertIsNone(host.navigator)
        self.assertIsNone(host.current_path())
        self.assertIsNone(host.current_input_value())


class SessionCommandTests(CommandHostTestCase):
    def test_commands_without_session_do_nothing(self) -> None:
        host = self.make()

        host.step_in()
        host.step_out()
        host.open_actions_menu()
        host.tab_complete()
        host.toggle_search_scope()
        host.toggle_search_mode()

        self.assertFalse(host.poll())
        self.assertIsNone(host.navigator)
        self.assertIsNone(host.search)

    def test_navigation_commands_forward_to_navigator(self) -> None:
        self.workbench.roots = [str(self.root)]
        host = self.make()
        navigator = host.open_navigator()
        navigator.picker.type_value("sr")

        host.tab_complete()
        self.assertEqual(host.current_input_value(), "src/")

        navigator.picker.set_active_items([navigator.items[1]])
        host.step_in()
        self.assertEqual(host.current_path(), str(self.root / "src"))

        host.step_out()
        self.assertEqual(host.current_path(), str(self.root))

        host.open_actions_menu()
        self.assertTrue(navigator.in_actions)


class RenameCommandTests(CommandHostTestCase):
    def test_renames_active_document_without_navigator(self) -> None:
        self.workbench.document = Document(path=str(self.root / "README.md"))
        self.prompter.show_input_box.return_value = "NOTES.md"
        host = self.make()

        host.rename_current_or_focused()

        self.prompter.show_input_box.assert_called_once_with("Enter the new file name", "README.md", (0, 6))
        self.assertTrue((self.root / "NOTES.md").exists())
        self.assertEqual(host.current_path(), str(self.root))
        self.assertEqual([item.name for item in host.navigator.picker.active_items], ["NOTES.md"])

    def test_renames_focused_entry_of_live_navigator(self) -> None:
        self.workbench.roots = [str(self.root)]
        self.prompter.show_input_box.return_value = "lib"
        host = self.make()
        navigator = host.open_navigator()
        navigator.picker.set_active_items([next(item for item in navigator.items if item.name == "src")])

        host.rename_current_or_focused()

        self.prompter.show_input_box.assert_called_once_with("Enter the new folder name", "src", (0, 3))
        self.assertTrue((self.root / "lib" / "app.py").exists())


class SearchCommandTests(CommandHostTestCase):
    def test_invoke_search_from_navigator_uses_its_folder_and_input(self) -> None:
        self.workbench.roots = [str(self.root)]
        host = self.make()
        navigator = host.open_navigator()
        navigator.picker.type_value("needle")

        session = host.invoke_search()

        self.assertIsNone(host.navigator)
        self.assertIs(host.search, session)
        self.assertEqual(session.dirs, [str(self.root)])
        self.assertEqual(session.picker.get_value(), "needle")
        self.runner.spawn.assert_called_once_with(
            (("rg", "--files", "."), ("rg", "-i", "needle")),
            str(self.root),
        )
        self.assertTrue(session.wait_until_settled(5.0))

    def test_invoke_search_without_navigator_uses_document_folder(self) -> None:
        self.workbench.document = Document(path=str(self.root / "src" / "app.py"), selection="")
        host = self.make()

        session = host.invoke_search(name_only=False)

        self.assertEqual(session.dirs, [str(self.root / "src")])
        self.assertFalse(session.name_only)
        self.runner.spawn.assert_not_called()

    def test_configured_search_tool_is_used(self) -> None:
        self.config = NavigatorConfig(hide_ignored_files=False, search_tool="rga")
        host = self.make()

        session = host.open_search([str(self.root)], name_only=False, initial_query="x")

        self.runner.spawn.assert_called_once_with((("rga", "-n", "-i", "x", "."),), str(self.root))
        self.assertTrue(session.wait_until_settled(5.0))

    def test_find_files_action_hands_over_to_search(self) -> None:
        self.workbench.roots = [str(self.root)]
        host = self.make()
        navigator = host.open_navigator()
        navigator.picker.set_active_items([next(item for item in navigator.items if item.name == "README.md")])
        navigator.actions()

        navigator.run_action(MenuAction("Find files in containing folder", Action.FIND_FILES))

        self.assertTrue(navigator.disposed)
        self.assertIsNone(host.navigator)
        self.assertEqual(host.search.dirs, [str(self.root)])
        self.assertTrue(host.search.name_only)

    def test_closing_search_clears_host_reference(self) -> None:
        host = self.make()
        session = host.open_search([str(self.root)])

        session.picker.hide()

        self.assertIsNone(host.search)
        self.assertFalse(host.poll())

    def test_invoke_search_reports_unreadable_location(self) -> None:
        self.workbench.roots = [str(self.root)]
        host = self.make()
        navigator = host.open_navigator()
        denied = FileSystemError("stat", str(self.root), PermissionError(13, "Permission denied"))

        with mock.patch.object(LocalFileSystem, "stat", side_effect=denied):
            session = host.invoke_search()

        self.assertIsNone(session)
        self.assertIs(host.navigator, navigator)
        self.assertIsNone(host.search)
        self.assertEqual(self.workbench.errors, [f"stat failed for {self.root}: Permission denied"])
        self.runner.spawn.assert_not_called()


if __name__ == "__main__":
    unittest.main()
