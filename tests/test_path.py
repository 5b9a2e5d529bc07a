"""Tests for the ``NavPath`` value type.

Covers prefix parsing for every root kind, render round-trips, and
segment push/pop behavior at the root boundary.
"""

from __future__ import annotations

import os
import unittest
from unittest import mock

from lazynav.path import (
    NavPath,
    RootKind,
    is_anchored_path,
    strip_trailing_separator,
)


class NavPathParseTests(unittest.TestCase):
    def test_render_round_trips_for_every_root_kind(self) -> None:
        cases = [
            "/usr/local/bin",
            "C:/Users/me",
            "~/projects/demo",
            "@/src/app",
            "$env:PROJECT_HOME/docs",
        ]
        environ = {"PROJECT_HOME": "/srv/project"}
        for text in cases:
            with self.subTest(text=text):
                path = NavPath.from_file_path(
                    text,
                    workspace_root="/work/space",
                    home="/home/me",
                    environ=environ,
                )
                again = NavPath.from_file_path(
                    path.render(),
                    workspace_root="/work/space",
                    home="/home/me",
                    environ=environ,
                )
                self.assertEqual(path, again)
                self.assertEqual(path.render(), text)

    def test_root_kinds_and_locations(self) -> None:
        home = NavPath.from_file_path("~/a", home="/home/me")
        self.assertIs(home.root.kind, RootKind.HOME)
        self.assertEqual(home.fs_path, "/home/me/a")

        workspace = NavPath.from_file_path("@", workspace_root="/work/space/")
        self.assertIs(workspace.root.kind, RootKind.WORKSPACE)
        self.assertEqual(workspace.fs_path, "/work/space")

        drive = NavPath.from_file_path("c:\\Users\\me")
        self.assertIs(drive.root.kind, RootKind.DRIVE)
        self.assertEqual(drive.fs_path, "C:/Users/me")

        env = NavPath.from_file_path("$env:DATA/x", environ={"DATA": "/var/data"})
        self.assertIs(env.root.kind, RootKind.ENV)
        self.assertEqual(env.fs_path, "/var/data/x")

    def test_relative_text_resolves_against_cwd(self) -> None:
        with mock.patch("lazynav.path.os.getcwd", return_value="/tmp/here"):
            path = NavPath.from_file_path("sub/file.txt")
        self.assertEqual(path.fs_path, "/tmp/here/sub/file.txt")
        self.assertIs(path.root.kind, RootKind.FILESYSTEM)

    def test_dot_dot_segments_step_up(self) -> None:
        path = NavPath.from_file_path("/a/b/../c/./d")
        self.assertEqual(path.segments, ["a", "c", "d"])
        self.assertEqual(path.append("../../e").fs_path, "/a/e")

    def test_unset_environment_variable_raises(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValueError):
                NavPath.from_file_path("$env:LAZYNAV_MISSING/x")


class NavPathSegmentTests(unittest.TestCase):
    def test_pop_at_root_returns_none_and_leaves_path_unchanged(self) -> None:
        path = NavPath.from_file_path("/")
        before = path.clone()

        self.assertIsNone(path.pop())
        self.assertIsNone(path.pop())
        self.assertEqual(path, before)
        self.assertTrue(path.at_top())

    def test_push_and_pop_are_inverse(self) -> None:
        path = NavPath.from_file_path("/a")
        path.push("b")
        self.assertEqual(path.fs_path, "/a/b")
        self.assertEqual(path.pop(), "b")
        self.assertEqual(path.fs_path, "/a")

    def test_append_returns_new_path(self) -> None:
        path = NavPath.from_file_path("/a")
        child = path.append("b/c")
        self.assertEqual(child.fs_path, "/a/b/c")
        self.assertEqual(path.fs_path, "/a")

    def test_absolute_reanchors_at_filesystem_root(self) -> None:
        path = NavPath.from_file_path("~/x", home="/home/me").absolute()
        self.assertIs(path.root.kind, RootKind.FILESYSTEM)
        self.assertEqual(path.segments, ["home", "me", "x"])
        self.assertIsNotNone(path.pop())

    def test_id_is_normalized_location(self) -> None:
        first = NavPath.from_file_path("~/x", home="/home/me")
        second = NavPath.from_file_path("/home/me/x")
        self.assertNotEqual(first, second)
        self.assertEqual(first.id, second.id)

    def test_display_prefers_workspace_then_home(self) -> None:
        path = NavPath.from_file_path("/home/me/work/src")
        self.assertEqual(path.display("/home/me/work", home="/home/me"), "@/src")
        self.assertEqual(path.display(None, home="/home/me"), "~/work/src")
        self.assertEqual(path.display(None, home="/elsewhere"), "/home/me/work/src")

    def test_relative_to(self) -> None:
        path = NavPath.from_file_path("/w/src/a.py")
        self.assertEqual(path.relative_to("/w"), "src/a.py")
        self.assertEqual(path.relative_to("/w/src/a.py"), "")
        self.assertIsNone(path.relative_to("/other"))


class PathTextHelperTests(unittest.TestCase):
    def test_is_anchored_path(self) -> None:
        for text in ("/x", "~", "@/a", "$env:HOME", "D:/", "d:\\x"):
            with self.subTest(text=text):
                self.assertTrue(is_anchored_path(text))
        for text in ("x", "src/a", "..", ""):
            with self.subTest(text=text):
                self.assertFalse(is_anchored_path(text))

    def test_strip_trailing_separator(self) -> None:
        self.assertEqual(strip_trailing_separator("sub/"), "sub")
        self.assertEqual(strip_trailing_separator("sub\\"), "sub")
        self.assertEqual(strip_trailing_separator("/"), "")
        self.assertIsNone(strip_trailing_separator("sub"))


if __name__ == "__main__":
    unittest.main()
