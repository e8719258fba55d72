"""Background TCP listener for incoming ``ghidra://`` links.

Each connection carries one newline-terminated line and gets no reply.
Decoded links are handed to ``on_link``, which must only schedule work;
the listener thread never touches the workspace itself.
"""

from __future__ import annotations

import enum
import ipaddress
import logging
import socket
import threading
from collections.abc import Callable

from ..errors import BindFailure, DecodeError
from ..link_codec import NavigationLink, decode

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 24437


def is_loopback_host(host: str) -> bool:
    """Return whether ``host`` only accepts connections from this machine."""
    if host.lower() == "localhost":
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


class ListenerState(enum.Enum):
    UNBOUND = "unbound"
    BOUND = "bound"
    CLOSED = "closed"


class LinkListener:
    """Accept loop servicing one connection at a time on a daemon thread."""

    def __init__(
        self,
        on_link: Callable[[NavigationLink], None],
        port: int = DEFAULT_PORT,
        host: str = DEFAULT_HOST,
        encoding: str = "utf-8",
    ) -> None:
        self._on_link = on_link
        self._host = host
        self._requested_port = port
        self._encoding = encoding
        self._lock = threading.Lock()
        self._socket: socket.socket | None = None
        self._conn: socket.socket | None = None
        self._thread: threading.Thread | None = None
        self._closed = threading.Event()
        self._state = ListenerState.UNBOUND
        self._bound_port: int | None = None

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def port(self) -> int | None:
        """Port actually bound, or ``None`` before a successful ``start``."""
        return self._bound_port

    @property
    def thread(self) -> threading.Thread | None:
        return self._thread

    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def _bind(self) -> socket.socket:
        try:
            return socket.create_server((self._host, self._requested_port))
        except OSError as exc:
            raise BindFailure(self._host, self._requested_port, str(exc)) from exc

    def start(self) -> bool:
        """Bind the port and start the accept thread.

        Returns ``False`` when binding fails; the listener then stays inert.
        Calling ``start`` again after a successful start is a no-op.
        """
        with self._lock:
            if self._state is not ListenerState.UNBOUND:
                return self._state is ListenerState.BOUND
            try:
                server = self._bind()
            except BindFailure as exc:
                logger.error("link listener disabled: %s", exc)
                return False
            self._socket = server
            self._bound_port = server.getsockname()[1]
            self._state = ListenerState.BOUND
            self._thread = threading.Thread(
                target=self._serve,
                args=(server,),
                name="ghidralink-listener",
                daemon=True,
            )
            self._thread.start()
        logger.info("listening for links on %s:%d", self._host, self._bound_port)
        if not is_loopback_host(self._host):
            logger.warning("%s is not a loopback address; any host that can reach it may send links", self._host)
        return True

    def _serve(self, server: socket.socket) -> None:
        while not self._closed.is_set():
            try:
                conn, _peer = server.accept()
            except OSError as exc:
                if self._closed.is_set():
                    logger.info("listener socket closed, shutting down")
                    return
                logger.warning("accept failed: %s", exc)
                continue
            with conn:
                with self._lock:
                    if self._closed.is_set():
                        return
                    self._conn = conn
                try:
                    self._handle_connection(conn)
                except Exception:
                    logger.exception("failed handling link connection")
                finally:
                    with self._lock:
                        self._conn = None

    def _read_line(self, conn: socket.socket) -> str:
        with conn.makefile("r", encoding=self._encoding, errors="replace") as reader:
            return reader.readline()

    def _handle_connection(self, conn: socket.socket) -> None:
        try:
            line = self._read_line(conn)
        except OSError as exc:
            if not self._closed.is_set():
                logger.warning("failed reading link: %s", exc)
            return

        if self._closed.is_set():
            return
        text = line.strip()
        if not text:
            return
        logger.info("received link %s", text)
        try:
            link = decode(text)
        except DecodeError as exc:
            logger.warning("ignoring link: %s", exc)
            return
        self._on_link(link)

    def close(self) -> None:
        """Release the port and let the accept thread exit on its own.

        A blocked ``accept`` fails immediately, as does a read on a connection
        still in flight; a line completed after this call is discarded. This
        call does not wait for the thread. Links already handed to
        ``on_link`` are not retracted.
        """
        with self._lock:
            if self._state is ListenerState.CLOSED:
                return
            self._closed.set()
            self._state = ListenerState.CLOSED
            server = self._socket
            self._socket = None
            conn = self._conn
        if conn is not None:
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                # Peer already gone.
                pass
        if server is None:
            return
        try:
            server.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Not every platform allows shutdown on a listening socket.
            pass
        server.close()
        logger.info("link listener closed")


__all__ = ["DEFAULT_HOST", "DEFAULT_PORT", "ListenerState", "LinkListener", "is_loopback_host"]
