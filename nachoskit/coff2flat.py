"""Convert a COFF object file into a flat memory image."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from nachoskit.coff import CoffFormatError, read_coff

STACK_SIZE = 1024
_UNCOPIED = (".bss", ".sbss")


def coff_to_flat(data: bytes, log: TextIO | None = None) -> bytes:
    """Return a flat image of the COFF file ``data``.

    Sections other than .bss and .sbss are copied one after another, and the
    image is extended so that a zero word ends a stack of STACK_SIZE bytes
    above the highest section.
    """
    coff = read_coff(data)
    if log is not None:
        log.write(f"Loading {len(coff.sections)} sections:\n")
    image = bytearray()
    top = 0
    for section in coff.sections:
        if log is not None:
            log.write(
                f'\t"{section.name}", filepos 0x{section.scnptr:x}, '
                f"mempos 0x{section.paddr:x}, size 0x{section.size:x}\n"
            )
        top = max(top, section.paddr + section.size)
        if section.name not in _UNCOPIED:
            image += coff.section_data(section)
    if log is not None:
        log.write(f"Adding stack of size: {STACK_SIZE}\n")
    end_word = top + STACK_SIZE - 4
    if len(image) < end_word + 4:
        image.extend(bytes(end_word + 4 - len(image)))
    image[end_word:end_word + 4] = bytes(4)
    return bytes(image)


def convert_file(source, destination, log: TextIO | None = None) -> None:
    """Convert the COFF file at ``source`` into a flat file at ``destination``."""
    result = coff_to_flat(Path(source).read_bytes(), log)
    Path(destination).write_bytes(result)


def main(argv: list[str] | None = None) -> int:
    """Command line entry: coff2flat <coffFileName> <flatFileName>."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        sys.stderr.write("Usage: coff2flat <coffFileName> <flatFileName>\n")
        return 1
    try:
        convert_file(args[0], args[1], sys.stdout)
    except OSError as exc:
        sys.stderr.write(f"{exc.filename}: {exc.strerror}\n")
        return 1
    except CoffFormatError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())