"""Instruction kinds, decoded instructions and the table of supported mnemonics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InstructionType(Enum):
    """Encoding format of an instruction."""

    R = "R"
    I = "I"  # noqa: E741
    J = "J"
    P = "P"
    UNKNOWN = "UNKNOWN"


@dataclass
class Instruction:
    """A decoded instruction as held in instruction memory.

    R-type uses rs, rt, rd, shamt and funct; I-type uses rs, rt and imm;
    J-type uses address; pseudo-instructions (P) use rt, is_label and either
    address (label operand) or imm (immediate operand).
    """

    opcode: int = 0
    type: InstructionType = InstructionType.R
    rs: int = 0
    rt: int = 0
    rd: int = 0
    shamt: int = 0
    funct: int = 0
    imm: int = 0
    address: int = 0
    is_label: bool = False


@dataclass(frozen=True)
class InstructionInfo:
    """Static description of a mnemonic."""

    name: str
    type: InstructionType
    opcode: int
    funct: int
    operand_count: int


INSTRUCTIONS: tuple[InstructionInfo, ...] = (
    InstructionInfo("add", InstructionType.R, 0x00, 0x20, 3),
    InstructionInfo("sub", InstructionType.R, 0x00, 0x22, 3),
    InstructionInfo("and", InstructionType.R, 0x00, 0x24, 3),
    InstructionInfo("or", InstructionType.R, 0x00, 0x25, 3),
    InstructionInfo("sll", InstructionType.R, 0x00, 0x00, 3),
    InstructionInfo("slt", InstructionType.R, 0x00, 0x2A, 3),
    InstructionInfo("mult", InstructionType.R, 0x00, 0x18, 2),
    InstructionInfo("addi", InstructionType.I, 0x08, 0x00, 3),
    InstructionInfo("slti", InstructionType.I, 0x0A, 0x00, 3),
    InstructionInfo("lui", InstructionType.I, 0x0F, 0x00, 2),
    InstructionInfo("lw", InstructionType.I, 0x23, 0x00, 2),
    InstructionInfo("sw", InstructionType.I, 0x2B, 0x00, 2),
    InstructionInfo("j", InstructionType.J, 0x02, 0x00, 1),
    InstructionInfo("li", InstructionType.P, 0x00, 0x00, 2),
    InstructionInfo("la", InstructionType.P, 0x00, 0x00, 2),
    InstructionInfo("syscall", InstructionType.R, 0x00, 0x0C, 0),
)

_BY_NAME = {info.name: info for info in INSTRUCTIONS}


def lookup_instruction(name: str) -> InstructionInfo | None:
    """Return the description of mnemonic ``name``, or None if unsupported."""
    return _BY_NAME.get(name)