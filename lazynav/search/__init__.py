"""File name and file content search."""

from .debounce import Debouncer
from .process import PipelineProcess, SubprocessRunner
from .query import content_search_command, is_flag, name_search_command, tokenize_query
from .results import MAX_DESC_LENGTH, SearchResult, history_entry, parse_content_line, parse_name_line
from .session import SCROLLBACK_LIMIT, SEARCH_DEBOUNCE_SECONDS, SearchDeps, SearchSession

__all__ = [
    "Debouncer",
    "MAX_DESC_LENGTH",
    "PipelineProcess",
    "SCROLLBACK_LIMIT",
    "SEARCH_DEBOUNCE_SECONDS",
    "SearchDeps",
    "SearchResult",
    "SearchSession",
    "SubprocessRunner",
    "content_search_command",
    "history_entry",
    "is_flag",
    "name_search_command",
    "parse_content_line",
    "parse_name_line",
    "tokenize_query",
]
