"""Public package surface for ghidralink.

Exports the link codec and ``main`` for programmatic CLI invocation.
Most implementation lives in ``ghidralink.runtime`` and ``ghidralink.workspace``.
"""

from __future__ import annotations

from .link_codec import NavigationLink, decode, encode


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["NavigationLink", "decode", "encode", "main"]
