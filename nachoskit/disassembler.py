"""Render MIPS instruction words as assembly text."""

from __future__ import annotations

from nachoskit.instruction import (
    NOP,
    WORD_MASK,
    BranchCond,
    Opcode,
    SpecialOp,
    immed,
    normal_op_name,
    off16,
    off26,
    rd,
    rs,
    rt,
    shamt,
    special_op_name,
    top4,
)

_REGISTER_NAMES = (
    ("0",)
    + tuple(f"r{i}" for i in range(1, 28))
    + ("gp", "sp", "r30", "r31")
)

_SHIFT_IMMEDIATE = {SpecialOp.SLL, SpecialOp.SRL, SpecialOp.SRA}
_SHIFT_VARIABLE = {SpecialOp.SLLV, SpecialOp.SRLV, SpecialOp.SRAV}
_RS_ONLY = {SpecialOp.JR, SpecialOp.JALR, SpecialOp.MFLO, SpecialOp.MTLO}
_RD_ONLY = {SpecialOp.MFHI, SpecialOp.MTHI}
_RS_RT = {SpecialOp.MULT, SpecialOp.MULTU, SpecialOp.DIV, SpecialOp.DIVU}
_THREE_REG = {
    SpecialOp.ADD, SpecialOp.ADDU, SpecialOp.SUB, SpecialOp.SUBU,
    SpecialOp.AND, SpecialOp.OR, SpecialOp.XOR, SpecialOp.NOR,
    SpecialOp.SLT, SpecialOp.SLTU,
}

_BRANCH_NAMES = {
    BranchCond.BLTZ: "bltz",
    BranchCond.BGEZ: "bgez",
    BranchCond.BLTZAL: "bltzal",
    BranchCond.BGEZAL: "bgezal",
}

_JUMPS = {Opcode.J, Opcode.JAL}
_COMPARE_BRANCHES = {Opcode.BEQ, Opcode.BNE}
_IMMEDIATE_ARITH = {
    Opcode.ADDI, Opcode.ADDIU, Opcode.SLTI, Opcode.SLTIU,
    Opcode.ANDI, Opcode.ORI, Opcode.XORI,
}
_MEMORY = {
    Opcode.LB, Opcode.LH, Opcode.LWL, Opcode.LW, Opcode.LBU, Opcode.LHU,
    Opcode.LWR, Opcode.SB, Opcode.SH, Opcode.SWL, Opcode.SW, Opcode.SWR,
    Opcode.LWC0, Opcode.LWC1, Opcode.LWC2, Opcode.LWC3,
    Opcode.SWC0, Opcode.SWC1, Opcode.SWC2, Opcode.SWC3,
}


def register_name(index: int) -> str:
    """Assembly name of general register ``index`` (0..31)."""
    if not 0 <= index < len(_REGISTER_NAMES):
        raise ValueError(f"register index out of range: {index}")
    return _REGISTER_NAMES[index]


def _hex(value: int) -> str:
    return f"{value & WORD_MASK:x}"


def _addr(value: int) -> str:
    return f"{value & WORD_MASK:08x}"


def _special(word: int) -> str:
    funct = word & 0x3F
    text = special_op_name(funct) + "\t"
    if funct in _SHIFT_IMMEDIATE:
        args = f"{register_name(rd(word))},{register_name(rt(word))},0x{_hex(shamt(word))}"
    elif funct in _SHIFT_VARIABLE:
        args = f"{register_name(rd(word))},{register_name(rt(word))},{register_name(rs(word))}"
    elif funct in _RS_ONLY:
        args = register_name(rs(word))
    elif funct in _RD_ONLY:
        args = register_name(rd(word))
    elif funct in _RS_RT:
        args = f"{register_name(rs(word))},{register_name(rt(word))}"
    elif funct in _THREE_REG:
        args = f"{register_name(rd(word))},{register_name(rs(word))},{register_name(rt(word))}"
    else:
        args = ""
    return text + args


def _bcond(word: int, pc: int) -> str:
    name = _BRANCH_NAMES.get(rt(word), "BCOND")
    return f"{name}\t{register_name(rs(word))},{_addr(off16(word) + pc + 4)}"


def _normal(word: int, opcode: int, pc: int) -> str:
    text = normal_op_name(opcode) + "\t"
    if opcode in _JUMPS:
        args = _addr(top4(pc) | off26(word))
    elif opcode in _COMPARE_BRANCHES:
        args = f"{register_name(rt(word))},{register_name(rs(word))},{_addr(off16(word) + pc + 4)}"
    elif opcode in _IMMEDIATE_ARITH:
        args = f"{register_name(rt(word))},{register_name(rs(word))},0x{_hex(immed(word))}"
    elif opcode == Opcode.LUI:
        args = f"{register_name(rt(word))},0x{_hex(immed(word))}"
    elif opcode in _MEMORY:
        args = f"{register_name(rt(word))},0x{_hex(immed(word))}({register_name(rs(word))})"
    else:
        args = ""
    return text + args


def disassemble(instruction: int, pc: int, long_format: bool = True) -> str:
    """Return one line of assembly for ``instruction`` located at ``pc``.

    In long format the line starts with the address and the raw word.
    """
    prefix = f"{_addr(pc)}: {_addr(instruction)}  " if long_format else ""
    word = instruction & WORD_MASK
    opcode = word >> 26
    if word == NOP:
        body = "nop"
    elif opcode == Opcode.SPECIAL:
        body = _special(word)
    elif opcode == Opcode.BCOND:
        body = _bcond(word, pc)
    else:
        body = _normal(word, opcode, pc)
    return prefix + "\t" + body