"""Error types raised by the link codec and listener.

Dispatch-level failures (missing artifact, missing navigation service,
unparseable address) are reported as outcomes, not exceptions.
"""

from __future__ import annotations


class LinkBridgeError(Exception):
    """Base class for ghidralink errors."""


class DecodeError(LinkBridgeError, ValueError):
    """A received line could not be decoded into a navigation link."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class MalformedUriError(DecodeError):
    """Text is not syntactically a URI."""


class WrongSchemeError(DecodeError):
    """URI scheme is missing or is not ``ghidra``."""


class MissingFieldError(DecodeError):
    """URI has no authority (artifact name) or no fragment (address)."""


class BindFailure(LinkBridgeError, OSError):
    """Listener could not bind its port."""

    def __init__(self, host: str, port: int, reason: str) -> None:
        super().__init__(f"cannot bind {host}:{port}: {reason}")
        self.host = host
        self.port = port


__all__ = [
    "LinkBridgeError",
    "DecodeError",
    "MalformedUriError",
    "WrongSchemeError",
    "MissingFieldError",
    "BindFailure",
]
