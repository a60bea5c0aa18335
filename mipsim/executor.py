"""Instruction execution against registers and memory."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TextIO

from mipsim.instructions import Instruction, InstructionType
from mipsim.memory import Memory, MemoryAccessError
from mipsim.registers import RegisterFile

_V0 = 2
_A0 = 4


class ExecutionError(RuntimeError):
    """Raised when an instruction cannot be carried out."""


class Cpu:
    """Runs the program held in ``memory`` using ``registers``.

    Syscall output goes to ``out`` (standard output by default).
    """

    def __init__(
        self, memory: Memory, registers: RegisterFile, out: TextIO | None = None
    ) -> None:
        self.memory = memory
        self.registers = registers
        self.out = out if out is not None else sys.stdout
        self.pc = 0
        self._r_ops: dict[int, Callable[[Instruction], None]] = {
            0x20: self._add,
            0x22: self._sub,
            0x24: self._and,
            0x25: self._or,
            0x00: self._sll,
            0x2A: self._slt,
            0x18: self._mult,
            0x0C: self._syscall,
        }
        self._i_ops: dict[int, Callable[[Instruction], None]] = {
            0x08: self._addi,
            0x0A: self._slti,
            0x0F: self._lui,
            0x23: self._lw,
            0x2B: self._sw,
        }

    def _add(self, inst: Instruction) -> None:
        regs = self.registers
        regs[inst.rd] = regs[inst.rs] + regs[inst.rt]

    def _sub(self, inst: Instruction) -> None:
        regs = self.registers
        regs[inst.rd] = regs[inst.rs] - regs[inst.rt]

    def _mult(self, inst: Instruction) -> None:
        regs = self.registers
        regs[inst.rd] = regs[inst.rs] * regs[inst.rt]

    def _and(self, inst: Instruction) -> None:
        regs = self.registers
        regs[inst.rd] = regs[inst.rs] & regs[inst.rt]

    def _or(self, inst: Instruction) -> None:
        regs = self.registers
        regs[inst.rd] = regs[inst.rs] | regs[inst.rt]

    def _sll(self, inst: Instruction) -> None:
        regs = self.registers
        regs[inst.rd] = regs[inst.rt] << inst.shamt

    def _slt(self, inst: Instruction) -> None:
        regs = self.registers
        regs[inst.rd] = 1 if regs[inst.rs] < regs[inst.rt] else 0

    def _addi(self, inst: Instruction) -> None:
        regs = self.registers
        regs[inst.rt] = regs[inst.rs] + (inst.imm & 0xFFFF)

    def _slti(self, inst: Instruction) -> None:
        regs = self.registers
        regs[inst.rt] = 1 if regs[inst.rs] < (inst.imm & 0xFFFF) else 0

    def _lui(self, inst: Instruction) -> None:
        self.registers[inst.rt] = (inst.imm & 0xFFFF) << 16

    def _effective_address(self, inst: Instruction) -> int:
        return (self.registers[inst.rs] + (inst.imm & 0xFFFF)) & 0xFFFFFFFF

    def _lw(self, inst: Instruction) -> None:
        address = self._effective_address(inst)
        try:
            self.registers[inst.rt] = self.memory.load_word(address)
        except MemoryAccessError as exc:
            raise ExecutionError(
                f"Erro: Nao foi possível carregar a palavra da memoria no endereço {address}"
            ) from exc

    def _sw(self, inst: Instruction) -> None:
        address = self._effective_address(inst)
        try:
            self.memory.store_word(address, self.registers[inst.rt])
        except MemoryAccessError as exc:
            print(exc, file=sys.stderr)

    def _pseudo(self, inst: Instruction) -> None:
        self.registers[inst.rt] = inst.address if inst.is_label else inst.imm

    def _syscall(self, inst: Instruction) -> None:
        code = self.registers[_V0]
        if code == 1:
            print(self.registers[_A0], file=self.out)
        elif code == 4:
            try:
                text = self.memory.read_string(self.registers[_A0])
            except MemoryAccessError as exc:
                raise ExecutionError(str(exc)) from exc
            print(text, file=self.out)
        elif code == 10:
            print("Saindo do  programa..", file=self.out)
        else:
            raise ExecutionError(f"Erro: Syscall nao suportada {code}")

    def execute(self, instruction: Instruction) -> None:
        """Carry out one instruction; a jump sets ``pc`` to its target."""
        kind = instruction.type
        if kind is InstructionType.R:
            handler = self._r_ops.get(instruction.funct)
            if handler is None:
                raise ExecutionError(f"unsupported funct 0x{instruction.funct:02X}")
            handler(instruction)
        elif kind is InstructionType.I:
            handler = self._i_ops.get(instruction.opcode)
            if handler is None:
                raise ExecutionError(f"unsupported opcode 0x{instruction.opcode:02X}")
            handler(instruction)
        elif kind is InstructionType.J:
            self.pc = instruction.address & 0xFFFFFFFF
        elif kind is InstructionType.P:
            self._pseudo(instruction)

    def step(self) -> None:
        """Execute the instruction at ``pc`` and advance to the next one."""
        instruction = self.memory.instructions.get(self.pc) or Instruction()
        self.execute(instruction)
        if instruction.type is not InstructionType.J:
            self.pc += 1

    def run(self) -> None:
        """Execute until ``pc`` runs past the last loaded instruction."""
        while self.pc < self.memory.text_address:
            self.step()