"""Client side of the link protocol: one line per connection, no reply."""

from __future__ import annotations

import socket

from .runtime.listener import DEFAULT_HOST, DEFAULT_PORT


def send_link(
    link: str,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    timeout: float = 2.0,
    encoding: str = "utf-8",
) -> None:
    """Deliver ``link`` to a running listener.

    Raises ``OSError`` when nothing listens on ``host:port``. Delivery is
    not acknowledged, so a rejected link is indistinguishable from success.
    """
    payload = link.rstrip("\r\n") + "\n"
    with socket.create_connection((host, port), timeout=timeout) as conn:
        conn.sendall(payload.encode(encoding))


__all__ = ["send_link"]
