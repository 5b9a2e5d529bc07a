"""Tests for query tokenizing, result parsing, and input debouncing."""

from __future__ import annotations

import unittest

from lazynav.search import (
    Debouncer,
    SearchResult,
    content_search_command,
    history_entry,
    name_search_command,
    parse_content_line,
    parse_name_line,
    tokenize_query,
)


class TokenizeQueryTests(unittest.TestCase):
    def test_plain_word_gets_case_insensitive_flag(self) -> None:
        self.assertEqual(tokenize_query("foo"), ["-i", "foo"])

    def test_flag_argument_joins_following_words(self) -> None:
        self.assertEqual(tokenize_query("-i foo bar"), ["-i", "foo bar"])

    def test_glob_argument_is_passed_verbatim(self) -> None:
        self.assertEqual(tokenize_query("-g *.py foo"), ["-g", "*.py foo"])

    def test_type_argument_is_passed_verbatim(self) -> None:
        self.assertEqual(tokenize_query("-t py"), ["-t", "py"])

    def test_leading_word_keeps_implicit_flag_before_later_flags(self) -> None:
        self.assertEqual(tokenize_query("needle -t py"), ["-i", "needle", "-t", "py"])

    def test_quoted_flag_argument_loses_quotes(self) -> None:
        self.assertEqual(tokenize_query('-g "*.py" -w'), ["-g", "*.py", "-w"])

    def test_quoted_first_token_is_passed_without_quotes(self) -> None:
        self.assertEqual(tokenize_query('"two words" tail'), ["two words tail"])

    def test_every_flag_starts_a_new_argument(self) -> None:
        self.assertEqual(
            tokenize_query("needle --glob *.py -w"),
            ["-i", "needle", "--glob", "*.py", "-w"],
        )

    def test_dash_followed_by_non_letter_is_not_a_flag(self) -> None:
        self.assertEqual(tokenize_query("-1 x"), ["-i", "-1 x"])

    def test_blank_query_has_no_arguments(self) -> None:
        self.assertEqual(tokenize_query("   "), [])


class CommandShapeTests(unittest.TestCase):
    def test_content_search_is_single_stage_with_line_numbers(self) -> None:
        self.assertEqual(
            content_search_command("rg", tokenize_query("-i foo bar")),
            (("rg", "-n", "-i", "foo bar", "."),),
        )

    def test_name_search_lists_files_then_filters(self) -> None:
        self.assertEqual(
            name_search_command("rg", ["-i", "main"]),
            (("rg", "--files", "."), ("rg", "-i", "main")),
        )


class ParseContentLineTests(unittest.TestCase):
    def test_match_line_becomes_result(self) -> None:
        result = parse_content_line("./src/x.ts:12:foo bar baz", "/work")

        self.assertEqual(result.num, 12)
        self.assertEqual(result.line, 11)
        self.assertTrue(result.detail.endswith("src/x.ts"))
        self.assertEqual(result.detail, "/work/src/x.ts")
        self.assertEqual(result.label, "x.ts : 12")
        self.assertEqual(result.description, "foo bar baz")

    def test_colons_in_matched_text_are_kept(self) -> None:
        result = parse_content_line("a.py:3:    x = {'k': 1}", "/w")
        self.assertEqual(result.description, "x = {'k': 1}")

    def test_rows_without_positive_line_number_are_dropped(self) -> None:
        for line in ("a.py:0:text", "a.py:abc:text", "a.py", "Binary file a.bin matches"):
            with self.subTest(line=line):
                self.assertIsNone(parse_content_line(line, "/w"))

    def test_oversized_match_text_is_dropped(self) -> None:
        self.assertIsNone(parse_content_line("a.py:1:" + "x" * 1000, "/w"))
        self.assertIsNotNone(parse_content_line("a.py:1:" + "x" * 999, "/w"))


class ParseNameLineTests(unittest.TestCase):
    def test_relative_path_becomes_result(self) -> None:
        result = parse_name_line("./pkg/mod.py", "/work")

        self.assertEqual(result.label, "mod.py")
        self.assertEqual(result.detail, "/work/pkg/mod.py")
        self.assertIsNone(result.line)

    def test_blank_line_is_dropped(self) -> None:
        self.assertIsNone(parse_name_line("  ", "/work"))


class SearchResultTests(unittest.TestCase):
    def test_history_entry(self) -> None:
        entry = history_entry("needle")
        self.assertTrue(entry.is_history)
        self.assertEqual(entry.label, "needle")
        self.assertEqual(entry.description, "History")

    def test_results_are_always_shown(self) -> None:
        result = SearchResult(label="a", detail="/a")
        self.assertTrue(result.always_show)
        self.assertFalse(result.hidden)
        self.assertEqual(result.buttons, ())


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class DebouncerTests(unittest.TestCase):
    def test_burst_settles_to_last_value(self) -> None:
        clock = FakeClock()
        debouncer = Debouncer(0.1, clock)

        for value in ("f", "fo", "foo"):
            debouncer.push(value)
            clock.now += 0.05
            self.assertIsNone(debouncer.poll())

        clock.now += 0.1
        self.assertEqual(debouncer.poll(), "foo")
        self.assertIsNone(debouncer.poll())
        self.assertFalse(debouncer.pending)

    def test_time_remaining_and_cancel(self) -> None:
        clock = FakeClock()
        debouncer = Debouncer(0.1, clock)
        self.assertIsNone(debouncer.time_remaining())

        debouncer.push("x")
        clock.now += 0.04
        self.assertAlmostEqual(debouncer.time_remaining(), 0.06)

        debouncer.cancel()
        clock.now += 1.0
        self.assertIsNone(debouncer.poll())


if __name__ == "__main__":
    unittest.main()
