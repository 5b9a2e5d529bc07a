"""Turns typed search text into argument vectors for the search tool."""

from __future__ import annotations

import re

_FLAG_RE = re.compile(r"^--?[A-Za-z]")
_TOKEN_RE = re.compile(r'"[^"]*"|\S+')

Stages = tuple[tuple[str, ...], ...]


def is_flag(token: str) -> bool:
    return _FLAG_RE.match(token) is not None


def _is_quoted(token: str) -> bool:
    return len(token) >= 2 and token.startswith('"') and token.endswith('"')


def tokenize_query(value: str) -> list[str]:
    """Build search-tool arguments from ``value``.

    A flag takes the words after it as its argument, joined by spaces, so
    ``-g *.py foo`` becomes ``["-g", "*.py foo"]``. A leading plain word gets
    an implicit ``-i`` and the words after it join the pattern. Quoted words
    keep their spaces and lose the quotes.
    """
    args: list[str] = []
    for index, match in enumerate(_TOKEN_RE.finditer(value)):
        token = match.group(0)
        if is_flag(token):
            args.append(token)
        elif index == 0:
            if _is_quoted(token):
                args.append(token.replace('"', ""))
            else:
                args.extend(("-i", token))
        elif is_flag(args[-1]):
            args.append(token.replace('"', ""))
        else:
            args[-1] = f"{args[-1]} {token}"
    return args


def name_search_command(tool: str, args: list[str]) -> Stages:
    """List every file, then filter the listing by ``args``."""
    return ((tool, "--files", "."), (tool, *args))


def content_search_command(tool: str, args: list[str]) -> Stages:
    return ((tool, "-n", *args, "."),)
