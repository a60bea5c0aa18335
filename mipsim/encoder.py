"""Binary machine-code encoding of instructions."""

from __future__ import annotations

from collections.abc import Iterable

from mipsim.instructions import Instruction, InstructionType


def encode_instruction(instruction: Instruction) -> int:
    """Return the 32-bit machine word of an R, I or J instruction.

    Raises ValueError for pseudo-instructions, which have no encoding.
    """
    opcode = (instruction.opcode & 0xFF) << 26
    kind = instruction.type
    if kind is InstructionType.R:
        word = (
            opcode
            | (instruction.rs & 0xFF) << 21
            | (instruction.rt & 0xFF) << 16
            | (instruction.rd & 0xFF) << 11
            | (instruction.shamt & 0xFF) << 6
            | (instruction.funct & 0xFF)
        )
    elif kind is InstructionType.I:
        word = (
            opcode
            | (instruction.rs & 0xFF) << 21
            | (instruction.rt & 0xFF) << 16
            | (instruction.imm & 0xFFFF)
        )
    elif kind is InstructionType.J:
        word = opcode | (instruction.address & 0x03FFFFFF)
    else:
        raise ValueError("Nao foi possível codificar a pseudo-instrucao")
    return word & 0xFFFFFFFF


def encode_program(instructions: Iterable[Instruction]) -> list[int]:
    """Encode every encodable instruction, skipping pseudo-instructions."""
    encodable = (InstructionType.R, InstructionType.I, InstructionType.J)
    return [encode_instruction(inst) for inst in instructions if inst.type in encodable]


def format_binary(number: int) -> str:
    """Return the low 32 bits of ``number`` as a string of 0s and 1s."""
    return format(number & 0xFFFFFFFF, "032b")