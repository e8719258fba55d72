"""Runtime: listener, foreground executor, dispatcher, actions and host wiring.

``run_bridge`` is imported lazily so importing the lower-level pieces does
not pull in the terminal host.
"""

from __future__ import annotations

from .dispatcher import DispatchOutcome, NavigationDispatcher, NavigationDispatcherDeps
from .foreground import ForegroundExecutor
from .listener import DEFAULT_HOST, DEFAULT_PORT, LinkListener, ListenerState
from .plugin import LinkBridgeDeps, LinkBridgePlugin


def run_bridge(*args, **kwargs):
    """Lazily import the terminal host entrypoint."""
    from .app import run_bridge as _run_bridge

    return _run_bridge(*args, **kwargs)


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DispatchOutcome",
    "ForegroundExecutor",
    "LinkBridgeDeps",
    "LinkBridgePlugin",
    "LinkListener",
    "ListenerState",
    "NavigationDispatcher",
    "NavigationDispatcherDeps",
    "run_bridge",
]
