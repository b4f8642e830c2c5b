"""Disassemble the text section of a COFF program."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

from nachoskit.coff import CoffFile, CoffFormatError, read_coff
from nachoskit.disassembler import disassemble
from nachoskit.loader import DEFAULT_FILENAME, load_program
from nachoskit.memory import Memory, MemoryError_

PROGRAM_NAME = "disasm"


def disassemble_program(coff: CoffFile, memory: Memory) -> Iterator[str]:
    """Yield one line per word of the text section, read from ``memory``
    starting at the memory's base address."""
    text = coff.section(".text")
    size = 0 if text is None else text.size
    pc = memory.offset
    for _ in range(0, size, 4):
        yield disassemble(memory.fetch(pc), pc)
        pc += 4


def main(argv: list[str] | None = None) -> int:
    """Command line entry: disasm [file]."""
    args = list(sys.argv[1:] if argv is None else argv)
    while args and args[0].startswith("-"):
        args.pop(0)
    filename = args[0] if args else DEFAULT_FILENAME
    try:
        data = Path(filename).read_bytes()
    except OSError:
        sys.stderr.write(f"{PROGRAM_NAME}: Could not open '{filename}'\n")
        return 0
    try:
        coff = read_coff(data)
    except CoffFormatError as exc:
        sys.stderr.write(f"{PROGRAM_NAME}: Load read error on {filename}: {exc}\n")
        return 0
    memory = Memory()
    try:
        load_program(coff, memory, sys.stdout)
        for line in disassemble_program(coff, memory):
            sys.stdout.write(line + "\n")
    except (MemoryError_, CoffFormatError) as exc:
        sys.stdout.write(f"{exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())