"""An interpreter for little-endian MIPS user programs."""

from __future__ import annotations

import mmap
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from nachoskit.disassembler import disassemble
from nachoskit.instruction import (
    BranchCond,
    Opcode,
    SpecialOp,
    immed,
    rd,
    rs,
    rt,
    shamt,
)
from nachoskit.memory import Memory

_MASK = 0xFFFFFFFF

SYS_EXIT = 1
SYS_READ = 3
SYS_WRITE = 4
SYS_OPEN = 5
SYS_CLOSE = 6
SYS_SBREAK = 17
SYS_LSEEK = 19
SYS_IOCTL = 54
SYS_FSTAT = 62
SYS_GETPAGESIZE = 64


def _s32(value: int) -> int:
    value &= _MASK
    return value - (1 << 32) if value & 0x80000000 else value


def _u32(value: int) -> int:
    return value & _MASK


def _cdivmod(a: int, b: int) -> tuple[int, int]:
    if b == 0:
        raise ZeroDivisionError("integer division by zero")
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


class ProgramExit(Exception):
    """Raised when the simulated program ends, carrying its exit status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"program exited with status {status}")
        self.status = status


class UnimplementedInstruction(Exception):
    """Raised on an instruction the interpreter cannot execute."""

    def __init__(self, message: str, word: int, pc: int) -> None:
        super().__init__(message)
        self.word = word
        self.pc = pc


def ilog2(value: int) -> int:
    """Number of bits needed to hold ``value`` taken as unsigned 32-bit."""
    return _u32(value).bit_length()


class Machine:
    """Registers, memory and the fetch-execute loop of a MIPS processor."""

    def __init__(
        self,
        memory: Memory | None = None,
        *,
        out: TextIO | None = None,
        trace: bool = False,
        trap_trace: bool = False,
        reg_trace: bool = False,
    ) -> None:
        self.memory = Memory() if memory is None else memory
        self.out = sys.stdout if out is None else out
        self.trace = trace
        self.trap_trace = trap_trace
        self.reg_trace = reg_trace
        self.registers = [0] * 32
        self.hi = 0
        self.lo = 0
        self.pc = self.memory.offset
        self.npc = self.pc + 4
        self.icount = 0

    def _set(self, index: int, value: int) -> None:
        self.registers[index] = _s32(value)

    def setup_args(self, argv: Sequence[str | bytes]) -> None:
        """Set the stack pointer and lay out argc and argv on the stack."""
        mem = self.memory
        sp = mem.size - 1024 + mem.offset
        self.registers[29] = _s32(sp)
        mem.store(sp, len(argv))
        pointer = sp + 4
        strings = pointer + 32
        for arg in argv:
            raw = arg if isinstance(arg, bytes) else os.fsencode(arg)
            mem.load(strings, raw + b"\0")
            mem.store(pointer, strings)
            pointer += 4
            strings += len(raw) + 1

    def run(self, start_pc: int, argv: Sequence[str | bytes] = ()) -> int:
        """Run from ``start_pc`` until the program exits; return its status."""
        self.icount = 0
        self.pc = _u32(start_pc)
        self.npc = _u32(self.pc + 4)
        self.setup_args(argv)
        try:
            while True:
                self.step()
        except ProgramExit as done:
            return done.status

    def step(self) -> None:
        """Execute one instruction, honouring the branch delay slot."""
        self.icount += 1
        xpc = self.pc
        self.pc = self.npc
        self.npc = _u32(self.pc + 4)
        word = _u32(self.memory.fetch(xpc))
        self.registers[0] = 0
        if word != 0:
            self._execute(word, xpc)
        if self.trace:
            self.out.write(disassemble(word, xpc) + "\n")
            if self.reg_trace:
                self.dump_registers()

    def _branch(self, xpc: int, word: int) -> None:
        self.npc = _u32(xpc + 4 + (immed(word) << 2))

    def _execute(self, word: int, xpc: int) -> None:
        R = self.registers
        s, t = rs(word), rt(word)
        imm = immed(word)
        addr = _u32(R[s] + imm)
        mem = self.memory
        match word >> 26:
            case Opcode.SPECIAL:
                self._special(word, xpc)
            case Opcode.BCOND:
                self._bcond(word, xpc)
            case Opcode.J:
                self.npc = (xpc & 0xF0000000) | ((word & 0x03FFFFFF) << 2)
            case Opcode.JAL:
                self._set(31, xpc + 8)
                self.npc = (xpc & 0xF0000000) | ((word & 0x03FFFFFF) << 2)
            case Opcode.BEQ:
                if R[s] == R[t]:
                    self._branch(xpc, word)
            case Opcode.BNE:
                if R[s] != R[t]:
                    self._branch(xpc, word)
            case Opcode.BLEZ:
                if R[s] <= 0:
                    self._branch(xpc, word)
            case Opcode.BGTZ:
                if R[s] > 0:
                    self._branch(xpc, word)
            case Opcode.ADDI | Opcode.ADDIU:
                self._set(t, R[s] + imm)
            case Opcode.SLTI:
                self._set(t, int(R[s] < imm))
            case Opcode.SLTIU:
                self._set(t, int(_u32(R[s]) < _u32(imm)))
            case Opcode.ANDI:
                self._set(t, R[s] & imm)
            case Opcode.ORI:
                self._set(t, R[s] | imm)
            case Opcode.XORI:
                self._set(t, R[s] ^ imm)
            case Opcode.LUI:
                self._set(t, word << 16)
            case Opcode.LB:
                self._set(t, mem.cfetch(addr))
            case Opcode.LH:
                self._set(t, mem.sfetch(addr))
            case Opcode.LWL:
                self._set(t, R[t] | (mem.fetch(addr & 0xFFFFFFFC) << 8 * (addr & 3)))
            case Opcode.LW:
                self._set(t, mem.fetch(addr))
            case Opcode.LBU:
                self._set(t, mem.ucfetch(addr))
            case Opcode.LHU:
                self._set(t, mem.usfetch(addr))
            case Opcode.LWR:
                value = 0 if addr & 3 == 0 else R[t] & _s32(-1 << 8 * (addr & 3))
                value |= mem.fetch(addr & 0xFFFFFFFC) >> 8 * ((-addr) & 3)
                self._set(t, value)
            case Opcode.SB:
                mem.cstore(addr, R[t])
            case Opcode.SH:
                mem.sstore(addr, R[t])
            case Opcode.SW:
                mem.store(addr, R[t])
            case Opcode.SWL:
                raise UnimplementedInstruction("sorry, no SWL yet.", word, xpc)
            case Opcode.SWR:
                raise UnimplementedInstruction("sorry, no SWR yet.", word, xpc)
            case (Opcode.LWC0 | Opcode.LWC1 | Opcode.LWC2 | Opcode.LWC3
                  | Opcode.SWC0 | Opcode.SWC1 | Opcode.SWC2 | Opcode.SWC3
                  | Opcode.COP0 | Opcode.COP1 | Opcode.COP2 | Opcode.COP3):
                raise UnimplementedInstruction("Sorry, no coprocessors.", word, xpc)
            case _:
                raise UnimplementedInstruction("Unimplemented Instruction", word, xpc)

    def _special(self, word: int, xpc: int) -> None:
        R = self.registers
        s, t, d = rs(word), rt(word), rd(word)
        match word & 0x3F:
            case SpecialOp.SLL:
                self._set(d, R[t] << shamt(word))
            case SpecialOp.SRL:
                self._set(d, _u32(R[t]) >> shamt(word))
            case SpecialOp.SRA:
                self._set(d, R[t] >> shamt(word))
            case SpecialOp.SLLV:
                self._set(d, R[t] << (R[s] & 0x1F))
            case SpecialOp.SRLV:
                self._set(d, _u32(R[t]) >> (R[s] & 0x1F))
            case SpecialOp.SRAV:
                self._set(d, R[t] >> (R[s] & 0x1F))
            case SpecialOp.JR:
                self.npc = _u32(R[s])
            case SpecialOp.JALR:
                self.npc = _u32(R[s])
                self._set(d, xpc + 8)
            case SpecialOp.SYSCALL:
                self.system_trap()
            case SpecialOp.BREAK:
                self._system_break()
            case SpecialOp.MFHI:
                self._set(d, self.hi)
            case SpecialOp.MTHI:
                self.hi = R[s]
            case SpecialOp.MFLO:
                self._set(d, self.lo)
            case SpecialOp.MTLO:
                self.lo = R[s]
            case SpecialOp.MULT:
                self._multiply(R[s], R[t], signed=True)
            case SpecialOp.MULTU:
                self._multiply(R[s], R[t], signed=False)
            case SpecialOp.DIV:
                q, r = _cdivmod(R[s], R[t])
                self.lo, self.hi = _s32(q), _s32(r)
            case SpecialOp.DIVU:
                q, r = _cdivmod(_u32(R[s]), _u32(R[t]))
                self.lo, self.hi = _s32(q), _s32(r)
            case SpecialOp.ADD | SpecialOp.ADDU:
                self._set(d, R[s] + R[t])
            case SpecialOp.SUB | SpecialOp.SUBU:
                self._set(d, R[s] - R[t])
            case SpecialOp.AND:
                self._set(d, R[s] & R[t])
            case SpecialOp.OR:
                self._set(d, R[s] | R[t])
            case SpecialOp.XOR:
                self._set(d, R[s] ^ R[t])
            case SpecialOp.NOR:
                self._set(d, ~(R[s] | R[t]))
            case SpecialOp.SLT:
                self._set(d, int(R[s] < R[t]))
            case SpecialOp.SLTU:
                self._set(d, int(_u32(R[s]) < _u32(R[t])))
            case _:
                raise UnimplementedInstruction("Unimplemented Instruction", word, xpc)

    def _bcond(self, word: int, xpc: int) -> None:
        value = self.registers[rs(word)]
        match rt(word):
            case BranchCond.BLTZ:
                taken = value < 0
            case BranchCond.BGEZ:
                taken = value >= 0
            case BranchCond.BLTZAL:
                self._set(31, xpc + 8)
                taken = value < 0
            case BranchCond.BGEZAL:
                self._set(31, xpc + 8)
                taken = value >= 0
            case _:
                raise UnimplementedInstruction("Unimplemented Instruction", word, xpc)
        if taken:
            self._branch(xpc, word)

    def _multiply(self, t1: int, t2: int, signed: bool) -> None:
        # HI is the same approximation of the upper word the machine has always used.
        negative = False
        if signed:
            if t1 < 0:
                t1, negative = _s32(-t1), not negative
            if t2 < 0:
                t2, negative = _s32(-t2), not negative
        lo = _s32(t1 * t2)
        t1l, t1h = t1 & 0xFFFF, (t1 >> 16) & 0xFFFF
        t2l, t2h = t2 & 0xFFFF, (t2 >> 16) & 0xFFFF
        hi = _s32(t1h * t2h + (_s32(t1h * t2l) >> 16) + (_s32(t2h * t1l) >> 16))
        if negative:
            lo, hi = ~lo, ~hi
            lo = _s32(lo + 1)
            if lo == 0:
                hi = _s32(hi + 1)
        self.lo, self.hi = lo, hi

    def _system_break(self) -> None:
        if self.trap_trace:
            self.out.write("**breakpoint ")
        self.system_trap()

    def system_trap(self) -> None:
        """Carry out the system call numbered in r2 with arguments in r4..r6."""
        R = self.registers
        if self.trap_trace:
            self.out.write(f"**System call {R[2]}\n")
            self.dump_registers()
        number, o0, o1, o2 = R[2], R[4], R[5], R[6]
        mem = self.memory
        match number:
            case 1:  # exit
                self.out.flush()
                raise ProgramExit(0)
            case 3:  # read
                result = self._host(lambda: self._read(o0, o1, o2))
            case 4:  # write
                result = self._host(lambda: os.write(o0, mem.read_bytes(_u32(o1), max(o2, 0))))
            case 5:  # open
                result = self._host(lambda: os.open(mem.read_cstring(_u32(o0)), o1, o2))
            case 6:  # close
                result = 0
            case 17:  # sbreak
                result = (_cdivmod(o0, 8192)[0] + 1) * 8192
            case 19:  # lseek
                result = self._host(lambda: os.lseek(o0, o1, o2))
            case 54:  # ioctl: the host's answer is ignored
                result = 0
            case 62:  # fstat
                result = self._host(lambda: os.fstat(o1) and 0)
            case 64:  # getpagesize
                result = mmap.PAGESIZE
            case _:
                self.out.write(f"Unknown System call {number}\n")
                if not self.trap_trace:
                    self.dump_registers()
                raise ProgramExit(2)
        self._set(1, result)
        if self.trap_trace:
            self.out.write("**Afterwards:\n")
            self.dump_registers()

    def _read(self, fd: int, addr: int, count: int) -> int:
        if count < 0:
            raise OSError("negative read count")
        data = os.read(fd, count)
        self.memory.load(_u32(addr), data)
        return len(data)

    @staticmethod
    def _host(call) -> int:
        try:
            return call()
        except OSError:
            return -1

    def dump_registers(self) -> str:
        """Write the 32 registers, eight to a line, to ``out`` and return the text."""
        lines = []
        for first in range(0, 32, 8):
            words = "".join(f" {_u32(v):08x}" for v in self.registers[first:first + 8])
            lines.append(f"{first:2d}:{words}\n")
        text = "".join(lines)
        self.out.write(text)
        return text