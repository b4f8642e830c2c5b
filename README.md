# nachoskit

Tools for little-endian MIPS object files and user programs, plus a few small
data-structure examples.

- **Object files** – read MIPS little-endian COFF files (`nachoskit.coff`),
  read and write the simple three-segment NOFF format (`nachoskit.noff`), and
  convert COFF to NOFF (`nachoskit.coff2noff`) or to a flat memory image
  (`nachoskit.coff2flat`).
- **Interpreter** – load a COFF executable into simulated memory and run it
  instruction by instruction (`nachoskit.memory`, `nachoskit.interpreter`,
  `nachoskit.loader`).
- **Disassembler** – decode MIPS instruction words into assembly text
  (`nachoskit.instruction`, `nachoskit.disassembler`, `nachoskit.disasmtool`).
- **Data structures** – a list of integers added to and taken from the front,
  and several stacks (`nachoskit.linkedlist`, `nachoskit.arraystack`,
  `nachoskit.templatestack`, `nachoskit.inheritstack`).

No third-party dependencies; Python 3.10 or later.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Command-line tools

### nachos-coff2noff

```
nachos-coff2noff program.coff program.noff
```

Writes a NOFF file: a header describing the code, initialised-data and
uninitialised-data segments, followed by the contents of `.text` and then
`.data` or `.rdata`. Sections of size zero are skipped. Any other non-empty
section, both a non-empty `.data` and `.rdata`, or a `.bss`/`.sbss` pair that
follow each other directly, is an error; the output file is then removed.
Progress lines are printed to standard output.

### nachos-coff2flat

```
nachos-coff2flat program.coff program.flat
```

Writes every section except `.bss` and `.sbss` one after another, then pads
the image so that it ends with a zero word 1024 bytes (`STACK_SIZE`) past the
end of the highest section.

### nachos-run

```
nachos-run [-t] [-T] [-r] [-m ROWS ASSOC LINESIZE POLICY] [program [args...]]
```

Loads the `.text`, `.rdata`, `.data`, `.sdata`, `.sbss` and `.bss` sections of
a COFF executable (default `a.out`) into a 16 MiB memory based at
`0x10000000`, lays out `argc`/`argv` on the stack, and runs from the base
address. Missing sections are reported and skipped.

- `-t` prints each instruction as it executes,
- `-T` traces system calls, dumping the registers before and after,
- `-r` dumps the registers after each traced instruction,
- `-m` takes four cache settings; they are parsed into `RunOptions` but do
  not change how the program runs.

Flags may be combined (`-tr`). The command's exit status is the program's
(the exit system call always gives 0; an unknown system call gives 2, as does
an unimplemented instruction).

### nachos-disasm

```
nachos-disasm program.coff
```

Loads the program the same way and prints one line per word of the text
section, starting at the memory base address. Leading flags are ignored; the
file defaults to `a.out`.

### Stack demonstrations

```
nachos-stack-demo
nachos-templatestack-demo
nachos-inheritstack-demo
```

Each pushes ten values starting at 17 (and, for the template demo, also
starting at `'a'`) and pops them back off, printing every step.

## Library use

### Decoding instructions

```python
from nachoskit.instruction import rs, rt, immed, normal_op_name
from nachoskit.disassembler import disassemble

word = 0x2402000A
print(normal_op_name(word >> 26))           # addiu
print(rt(word), rs(word), immed(word))      # 2 0 10
print(disassemble(word, 0x10000000, True))  # 10000000: 2402000a  \taddiu\tr2,0,0xa
```

`rd`, `rt`, `rs` and `shamt` extract register and shift fields; `immed`
sign-extends the 16-bit immediate; `off16` and `off26` give the branch and
jump offsets in bytes; `top4` keeps the top four bits of a word;
`extend(value, hibitmask)` sign-extends from any bit. `Opcode`, `SpecialOp`
and `BranchCond` enumerate the opcode fields; `normal_op_name` and
`special_op_name` give mnemonics (or the octal code for unassigned ones), and
`register_name` gives the printed name of a register (`"0"`, `"r1"`, ...,
`"gp"`, `"sp"`, `"r30"`, `"r31"`). `disassemble(word, pc, long_format=False)`
leaves out the address and raw word.

### Object files

```python
from pathlib import Path
from nachoskit.coff import read_coff
from nachoskit.coff2noff import coff_to_noff, convert_file
from nachoskit.noff import NoffHeader

coff = read_coff(Path("program.coff").read_bytes())
text = coff.section(".text")
code = coff.section_data(text)

noff = coff_to_noff(Path("program.coff").read_bytes())
header = NoffHeader.unpack(noff)
print(header.code.size, header.init_data.size, header.uninit_data.size)

convert_file("program.coff", "program.noff", None)
```

`read_coff` returns a `CoffFile` with `header`, `aout`, `sections` and the raw
`data`. `FileHeader`, `AoutHeader`, `SectionHeader` and `NoffHeader` each have
`unpack` and `pack` for their little-endian on-disk layout; a `NoffHeader`
holds three `Segment`s (`virtual_addr`, `in_file_addr`, `size`). Short input or
wrong magic numbers raise `CoffFormatError`; a file NOFF cannot describe
raises `ConversionError`. `coff_to_noff` and `coff_to_flat` write progress
lines to the `log` stream when one is given.

### Running programs

```python
from pathlib import Path
from nachoskit.coff import read_coff
from nachoskit.loader import load_program
from nachoskit.memory import Memory, MEMOFFSET
from nachoskit.interpreter import Machine

memory = Memory()
load_program(read_coff(Path("a.out").read_bytes()), memory)
status = Machine(memory, trace=False).run(MEMOFFSET, ["a.out"])
```

`Memory(size, offset)` offers word, halfword and byte loads and stores
(`fetch`, `sfetch`, `usfetch`, `cfetch`, `ucfetch`, `store`, `sstore`,
`cstore`) plus `load`, `read_bytes` and `read_cstring`. Accesses outside it
raise `MemoryError_`.

`Machine` executes one instruction with `step`, honouring the branch delay
slot, or runs until exit with `run(start_pc, argv)`, which returns the exit
status. `setup_args` lays out `argc`/`argv` 1024 bytes below the top of
memory; `dump_registers` writes the 32 registers to the output stream and
returns the text. `system_trap` handles exit, read, write, open, close,
break (17), lseek, ioctl (answered with 0), fstat and getpagesize, taking the
call number from `r2`, arguments from `r4`–`r6`, and putting the result in
`r1`; host errors give -1. Exit raises `ProgramExit` inside the machine;
`UnimplementedInstruction` is raised for unknown encodings, SWL, SWR and
coprocessor instructions. `ilog2` gives the bit length of a value taken as
unsigned 32-bit. `nachoskit.disasmtool.disassemble_program` yields the
disassembly of a loaded text section.

### Stacks and lists

```python
from nachoskit.linkedlist import IntList
from nachoskit.arraystack import BoundedStack, StackFullError
from nachoskit.templatestack import GenericStack, successor
from nachoskit.inheritstack import ArrayStack, ListStack

stack = BoundedStack(3)
stack.push(1)
stack.push(2)
print(stack.pop())   # 2
```

`BoundedStack(size)` and `GenericStack(size)` hold at most `size` items
(`size` must be at least 1) and raise `StackFullError` or `StackEmptyError`
on overflow or underflow. `ArrayStack` and `ListStack` share the abstract
`Stack` interface (`push`, `pop`, `full`, `empty`, `self_test`); a
`ListStack` is never full. `IntList` supports `prepend`, `remove` (raising
`IndexError` when empty), `empty`, `len()` and iteration from the front.
`successor` gives the next integer or the next character.

## What this package does not do

- It reads no relocation entries or symbol tables, and has no tool that
  dumps them.
- It handles little-endian objects only, and runs no floating-point or other
  coprocessor instructions.
- It runs single user programs on the host's files; it has no simulated
  disk, file system, threads or operating-system kernel.
- The cache settings given with `-m` are not used by any cache model.