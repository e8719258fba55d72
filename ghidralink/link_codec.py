"""Encode and decode ``ghidra://<artifact>#<address>`` navigation links.

The artifact name travels as a percent-encoded URI authority and the address
as the fragment. The address stays an opaque string here; turning it into a
structured address is the opened artifact's job.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from .errors import MalformedUriError, MissingFieldError, WrongSchemeError

SCHEME = "ghidra"

# RFC 3986 reserved + unreserved characters plus the percent sign.
_URI_TEXT_RE = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class NavigationLink:
    """Decoded link: which artifact to open and where to put the cursor."""

    artifact_name: str
    address: str

    def to_uri(self) -> str:
        """Return the wire form of this link."""
        return encode(self.artifact_name, self.address)


def encode(artifact_name: str, address: str) -> str:
    """Build a link string for ``artifact_name`` at ``address``.

    The name is encoded as a single URL component so spaces, ``#``, ``:`` and
    ``/`` survive transport. Names that cannot be encoded as UTF-8 (lone
    surrogates from undecodable file names) are embedded unencoded.
    """
    try:
        encoded_name = quote(artifact_name, safe="", encoding="utf-8", errors="strict")
    except UnicodeEncodeError:
        encoded_name = artifact_name
    return f"{SCHEME}://{encoded_name}#{address}"


def _check_uri_syntax(raw: str) -> None:
    """Raise ``MalformedUriError`` unless ``raw`` only uses URI characters."""
    if not _URI_TEXT_RE.fullmatch(raw):
        raise MalformedUriError(f"illegal character in URI: {raw!r}", raw)
    if raw.count("#") > 1:
        raise MalformedUriError(f"more than one fragment separator: {raw!r}", raw)
    if _BAD_ESCAPE_RE.search(raw):
        raise MalformedUriError(f"malformed percent escape: {raw!r}", raw)


def decode(raw: str) -> NavigationLink:
    """Parse a received link string.

    Raises ``MalformedUriError`` for text that is not a URI,
    ``WrongSchemeError`` when the scheme is not ``ghidra`` (any case), and
    ``MissingFieldError`` when the authority or fragment is absent or empty.
    Percent escapes in both parts are decoded exactly once.
    """
    _check_uri_syntax(raw)
    try:
        parts = urlsplit(raw)
    except ValueError as exc:
        raise MalformedUriError(f"cannot parse URI {raw!r}: {exc}", raw) from exc

    if parts.scheme.lower() != SCHEME:
        raise WrongSchemeError(f"expected {SCHEME}:// link, got scheme {parts.scheme!r}", raw)

    artifact_name = unquote(parts.netloc)
    address = unquote(parts.fragment)
    if not artifact_name:
        raise MissingFieldError(f"link has no artifact name: {raw!r}", raw)
    if not address:
        raise MissingFieldError(f"link has no address: {raw!r}", raw)
    return NavigationLink(artifact_name=artifact_name, address=address)


__all__ = ["SCHEME", "NavigationLink", "encode", "decode"]
