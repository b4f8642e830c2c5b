"""Convert a COFF object file into a NOFF file."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from nachoskit.coff import CoffFormatError, read_coff
from nachoskit.noff import NoffHeader, Segment


class ConversionError(ValueError):
    """Raised when a COFF file has segments that NOFF cannot describe."""


def _log_section(log: TextIO | None, section) -> None:
    if log is not None:
        log.write(
            f'\t"{section.name}", filepos 0x{section.scnptr:x}, '
            f"mempos 0x{section.paddr:x}, size 0x{section.size:x}\n"
        )


def coff_to_noff(data: bytes, log: TextIO | None = None) -> bytes:
    """Return the NOFF file for the COFF file ``data``.

    Progress lines go to ``log`` if one is given.
    """
    coff = read_coff(data)
    sections = coff.sections
    if log is not None:
        log.write(f"numsections {len(sections)} \n")
        log.write(f"Loading {len(sections)} sections:\n")

    header = NoffHeader()
    body = bytearray()
    in_file = NoffHeader.SIZE
    for section in sections:
        _log_section(log, section)
        if section.size == 0:
            continue
        if section.name == ".text":
            header.code = Segment(section.paddr, in_file, section.size)
            body += coff.section_data(section)
            in_file += section.size
        elif section.name in (".data", ".rdata"):
            if header.init_data.size != 0:
                raise ConversionError("Can't handle both data and rdata")
            header.init_data = Segment(section.paddr, in_file, section.size)
            body += coff.section_data(section)
            in_file += section.size
        elif section.name in (".bss", ".sbss"):
            uninit = header.uninit_data
            if uninit.size != 0:
                if section.paddr == uninit.virtual_addr + uninit.size:
                    raise ConversionError("Can't handle both bss and sbss")
                uninit.size += section.size
            else:
                header.uninit_data = Segment(section.paddr, 0, section.size)
        else:
            raise ConversionError(f"Unknown segment type: {section.name}")
    return header.pack() + bytes(body)


def convert_file(source, destination, log: TextIO | None = None) -> None:
    """Convert the COFF file at ``source`` into a NOFF file at ``destination``.

    On a format error the destination is removed and the error re-raised.
    """
    data = Path(source).read_bytes()
    target = Path(destination)
    try:
        result = coff_to_noff(data, log)
    except (CoffFormatError, ConversionError):
        target.unlink(missing_ok=True)
        raise
    target.write_bytes(result)


def main(argv: list[str] | None = None) -> int:
    """Command line entry: coff2noff <coffFileName> <noffFileName>."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        sys.stderr.write("Usage: coff2noff <coffFileName> <noffFileName>\n")
        return 1
    try:
        convert_file(args[0], args[1], sys.stdout)
    except OSError as exc:
        sys.stderr.write(f"{exc.filename}: {exc.strerror}\n")
        return 1
    except (CoffFormatError, ConversionError) as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())