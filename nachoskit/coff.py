"""Reading and writing the MIPS little-endian COFF object format."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

MIPSELMAGIC = 0x0162
OMAGIC = 0o407
SOMAGIC = 0x0701

_FILE_HEADER = struct.Struct("<HHiiiHH")
_AOUT_HEADER = struct.Struct("<hh8I4II")
_SECTION_HEADER = struct.Struct("<8s6IHHi")


class CoffFormatError(ValueError):
    """Raised when data is not a usable COFF object file."""


def _require(data: bytes, size: int, offset: int = 0) -> None:
    if len(data) < offset + size:
        raise CoffFormatError("File is too short")


@dataclass
class FileHeader:
    """The COFF file header."""

    magic: int = MIPSELMAGIC
    nscns: int = 0
    timdat: int = 0
    symptr: int = 0
    nsyms: int = 0
    opthdr: int = 0
    flags: int = 0

    SIZE: ClassVar[int] = _FILE_HEADER.size

    @classmethod
    def unpack(cls, data: bytes) -> FileHeader:
        """Parse a file header from the start of ``data``."""
        _require(data, cls.SIZE)
        return cls(*_FILE_HEADER.unpack_from(data))

    def pack(self) -> bytes:
        return _FILE_HEADER.pack(
            self.magic, self.nscns, self.timdat, self.symptr,
            self.nsyms, self.opthdr, self.flags,
        )


@dataclass
class AoutHeader:
    """The COFF optional (system) header."""

    magic: int = OMAGIC
    vstamp: int = 0
    tsize: int = 0
    dsize: int = 0
    bsize: int = 0
    entry: int = 0
    text_start: int = 0
    data_start: int = 0
    bss_start: int = 0
    gprmask: int = 0
    cprmask: tuple[int, int, int, int] = (0, 0, 0, 0)
    gp_value: int = 0

    SIZE: ClassVar[int] = _AOUT_HEADER.size

    @classmethod
    def unpack(cls, data: bytes) -> AoutHeader:
        """Parse an optional header from the start of ``data``."""
        _require(data, cls.SIZE)
        values = _AOUT_HEADER.unpack_from(data)
        return cls(*values[:10], cprmask=tuple(values[10:14]), gp_value=values[14])

    def pack(self) -> bytes:
        if len(self.cprmask) != 4:
            raise ValueError("cprmask must hold four masks")
        return _AOUT_HEADER.pack(
            self.magic, self.vstamp, self.tsize, self.dsize, self.bsize,
            self.entry, self.text_start, self.data_start, self.bss_start,
            self.gprmask, *self.cprmask, self.gp_value,
        )


@dataclass
class SectionHeader:
    """A COFF section header."""

    name: str = ""
    paddr: int = 0
    vaddr: int = 0
    size: int = 0
    scnptr: int = 0
    relptr: int = 0
    lnnoptr: int = 0
    nreloc: int = 0
    nlnno: int = 0
    flags: int = 0

    SIZE: ClassVar[int] = _SECTION_HEADER.size

    @classmethod
    def unpack(cls, data: bytes) -> SectionHeader:
        """Parse a section header from the start of ``data``."""
        _require(data, cls.SIZE)
        raw_name, *rest = _SECTION_HEADER.unpack_from(data)
        name = raw_name.split(b"\0", 1)[0].decode("latin-1")
        return cls(name, *rest)

    def pack(self) -> bytes:
        raw_name = self.name.encode("latin-1")
        if len(raw_name) > 8:
            raise ValueError(f"section name longer than 8 bytes: {self.name!r}")
        return _SECTION_HEADER.pack(
            raw_name, self.paddr, self.vaddr, self.size, self.scnptr,
            self.relptr, self.lnnoptr, self.nreloc, self.nlnno, self.flags,
        )


@dataclass
class CoffFile:
    """A parsed COFF object: headers plus the raw file contents."""

    header: FileHeader
    aout: AoutHeader
    sections: list[SectionHeader]
    data: bytes = field(repr=False, default=b"")

    def section(self, name: str) -> SectionHeader | None:
        """Return the first section called ``name``, or None."""
        return next((s for s in self.sections if s.name == name), None)

    def section_data(self, section: SectionHeader) -> bytes:
        """Return the raw bytes of ``section`` as stored in the file."""
        _require(self.data, section.size, section.scnptr)
        return self.data[section.scnptr:section.scnptr + section.size]


def read_coff(data: bytes) -> CoffFile:
    """Parse a MIPS little-endian COFF file linked with no shared text.

    Raises CoffFormatError if the file is short or has the wrong magic numbers.
    """
    data = bytes(data)
    header = FileHeader.unpack(data)
    if header.magic != MIPSELMAGIC:
        raise CoffFormatError("File is not a MIPSEL COFF file")
    aout = AoutHeader.unpack(data[FileHeader.SIZE:])
    if aout.magic != OMAGIC:
        raise CoffFormatError("File is not a OMAGIC file")
    start = FileHeader.SIZE + AoutHeader.SIZE
    _require(data, header.nscns * SectionHeader.SIZE, start)
    sections = [
        SectionHeader.unpack(data[offset:offset + SectionHeader.SIZE])
        for offset in range(start, start + header.nscns * SectionHeader.SIZE,
                            SectionHeader.SIZE)
    ]
    return CoffFile(header, aout, sections, data)