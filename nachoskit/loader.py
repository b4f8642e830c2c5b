"""Load a COFF program into simulated memory and run it."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from nachoskit.coff import CoffFile, CoffFormatError, read_coff
from nachoskit.interpreter import Machine, UnimplementedInstruction
from nachoskit.memory import MEMOFFSET, Memory, MemoryError_

PROGRAM_NAME = "interpret"
DEFAULT_FILENAME = "a.out"

LOADED_SECTIONS = (".text", ".rdata", ".data", ".sdata", ".sbss", ".bss")


@dataclass
class RunOptions:
    """Settings taken from the command line of the interpreter."""

    trace: bool = False
    trap_trace: bool = False
    reg_trace: bool = False
    nrows: int = 64
    assoc: int = 1
    linesize: int = 4
    rand: bool = False
    lrd: bool = False
    filename: str = DEFAULT_FILENAME
    program_args: list[str] = field(default_factory=lambda: [DEFAULT_FILENAME])


def _atoi(text: str) -> int:
    """Leading decimal integer of ``text``, or 0 if there is none."""
    text = text.strip()
    sign = 1
    if text[:1] in "+-" and text:
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if not ch.isdigit():
            break
        digits += ch
    return sign * int(digits) if digits else 0


def load_program(coff: CoffFile, memory: Memory, out: TextIO | None = None) -> None:
    """Copy the loadable sections of ``coff`` into ``memory`` at their addresses.

    A missing section is reported on ``out``; sections with no file data are
    left as they are. Raises MemoryError_ if a section ends beyond memory.
    """
    out = sys.stdout if out is None else out
    for name in LOADED_SECTIONS:
        section = coff.section(name)
        if section is None:
            out.write(f"{name[1:]} section header missing\n")
            continue
        if section.scnptr == 0:
            continue
        if section.vaddr + section.size - memory.offset >= memory.size:
            raise MemoryError_("MEMSIZE too small. Fix and recompile.")
        memory.load(section.vaddr, coff.section_data(section))


def parse_options(argv: Sequence[str]) -> RunOptions:
    """Parse interpreter flags and the program file name from ``argv``.

    ``-t`` traces instructions, ``-T`` traces system calls, ``-r`` dumps
    registers while tracing and ``-m`` takes four cache settings.
    """
    args = list(argv)
    options = RunOptions()
    while args and args[0].startswith("-"):
        flags = args.pop(0)[1:]
        for flag in flags:
            if flag == "t":
                options.trace = True
            elif flag == "T":
                options.trap_trace = True
            elif flag == "r":
                options.reg_trace = True
            elif flag == "m":
                if len(args) < 4:
                    raise ValueError("-m needs rows, associativity, line size and policy")
                rows, assoc, linesize, policy = args[:4]
                del args[:4]
                options.nrows = _atoi(rows)
                options.assoc = _atoi(assoc)
                options.linesize = _atoi(linesize)
                options.rand = policy.startswith("r")
                options.lrd = policy.startswith("lrd")
    if args:
        options.filename = args[0]
        options.program_args = args
    else:
        options.program_args = [DEFAULT_FILENAME]
    return options


def main(argv: list[str] | None = None) -> int:
    """Command line entry: interpret [-t] [-T] [-r] [-m n a l p] [file [args...]]."""
    args = sys.argv[1:] if argv is None else argv
    try:
        options = parse_options(args)
    except ValueError as exc:
        sys.stderr.write(f"{PROGRAM_NAME}: {exc}\n")
        return 1
    try:
        data = Path(options.filename).read_bytes()
    except OSError:
        sys.stderr.write(f"{PROGRAM_NAME}: Could not open '{options.filename}'\n")
        return 0
    try:
        coff = read_coff(data)
    except CoffFormatError as exc:
        sys.stderr.write(f"{PROGRAM_NAME}: Load read error on {options.filename}: {exc}\n")
        return 0
    memory = Memory()
    try:
        load_program(coff, memory, sys.stdout)
    except (MemoryError_, CoffFormatError) as exc:
        sys.stdout.write(f"{exc}\n")
        return 1
    machine = Machine(
        memory,
        out=sys.stdout,
        trace=options.trace,
        trap_trace=options.trap_trace,
        reg_trace=options.reg_trace,
    )
    try:
        return machine.run(MEMOFFSET, options.program_args)
    except UnimplementedInstruction as exc:
        sys.stderr.write(f"{exc}\n")
        return 2
    except MemoryError_ as exc:
        sys.stderr.write(f"{exc}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())