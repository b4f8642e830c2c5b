"""The simple object code format: three segments and where they belong."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

NOFFMAGIC = 0xBADFAD

_WORD = 0xFFFFFFFF
_HEADER = struct.Struct("<10I")


@dataclass
class Segment:
    """Where a segment lives in the address space and in the file."""

    virtual_addr: int = 0
    in_file_addr: int = 0
    size: int = 0

    def _fields(self) -> tuple[int, int, int]:
        return (self.virtual_addr & _WORD, self.in_file_addr & _WORD, self.size & _WORD)


@dataclass
class NoffHeader:
    """Header of a NOFF file: code, initialised data and uninitialised data."""

    noff_magic: int = NOFFMAGIC
    code: Segment = field(default_factory=Segment)
    init_data: Segment = field(default_factory=Segment)
    uninit_data: Segment = field(default_factory=Segment)

    SIZE: ClassVar[int] = _HEADER.size

    def pack(self) -> bytes:
        return _HEADER.pack(
            self.noff_magic & _WORD,
            *self.code._fields(),
            *self.init_data._fields(),
            *self.uninit_data._fields(),
        )

    @classmethod
    def unpack(cls, data: bytes) -> NoffHeader:
        """Parse a header from the start of ``data``."""
        if len(data) < cls.SIZE:
            raise ValueError("data too short for a NOFF header")
        values = _HEADER.unpack_from(data)
        return cls(
            values[0],
            Segment(*values[1:4]),
            Segment(*values[4:7]),
            Segment(*values[7:10]),
        )