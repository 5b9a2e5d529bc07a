"""Public package surface for lazynav.

Exports ``main`` for programmatic CLI invocation.
The navigator core lives in ``lazynav.navigator`` and ``lazynav.search``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
