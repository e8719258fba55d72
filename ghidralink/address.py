"""Address spaces and address parsing for opened artifacts."""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_SPACE_NAME = "ram"

_HEX_RE = re.compile(r"(?:0[xX])?([0-9A-Fa-f]+)")


@dataclass(frozen=True)
class AddressSpace:
    """Named flat address space with a fixed width in bits."""

    name: str = DEFAULT_SPACE_NAME
    size_bits: int = 64

    @property
    def max_offset(self) -> int:
        return (1 << self.size_bits) - 1

    def address(self, offset: int) -> Address:
        """Return an address in this space; ``offset`` must be in range."""
        if offset < 0 or offset > self.max_offset:
            raise ValueError(f"offset {offset:#x} outside address space {self.name!r}")
        return Address(space=self, offset=offset)

    def parse(self, text: str) -> Address | None:
        """Parse ``text`` into an address, or ``None`` when it names no address.

        Accepts bare hex (``00401000``), ``0x``-prefixed hex, and a leading
        ``<space>:`` or ``<space>::`` qualifier naming this space.
        """
        value = text.strip()
        if ":" in value:
            space_name, _sep, value = value.partition(":")
            if value.startswith(":"):
                value = value[1:]
            if space_name.strip().lower() != self.name.lower():
                return None
            value = value.strip()
        match = _HEX_RE.fullmatch(value)
        if match is None:
            return None
        offset = int(match.group(1), 16)
        if offset > self.max_offset:
            return None
        return Address(space=self, offset=offset)


@dataclass(frozen=True)
class Address:
    """One offset inside an address space."""

    space: AddressSpace
    offset: int

    def __str__(self) -> str:
        return f"{self.offset:08x}"


DEFAULT_ADDRESS_SPACE = AddressSpace()


__all__ = ["Address", "AddressSpace", "DEFAULT_ADDRESS_SPACE", "DEFAULT_SPACE_NAME"]
