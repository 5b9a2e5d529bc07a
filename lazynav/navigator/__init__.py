"""Directory navigation picker."""

from .actions import ActionDispatcher
from .completion import AutoCompletion, completion_candidates
from .navigator import Navigator, NavigatorDeps, NavigatorMode

__all__ = [
    "ActionDispatcher",
    "AutoCompletion",
    "Navigator",
    "NavigatorDeps",
    "NavigatorMode",
    "completion_candidates",
]
