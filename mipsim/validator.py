"""Operand classification, instruction building and data-directive handling."""

from __future__ import annotations

import re
from collections.abc import Sequence

from mipsim.instructions import Instruction, InstructionInfo, InstructionType, lookup_instruction
from mipsim.labels import LabelError, LabelTable
from mipsim.memory import Memory, MemoryAccessError
from mipsim.registers import register_index

DIRECTIVES = (".word", ".byte", ".half", ".float", ".double", ".space", ".ascii", ".asciiz")

_UNRESOLVED_LABEL = 0xFFFFFFFF
_WHOLE_LONG = re.compile(r"\s*[+-]?[0-9]+")
_LEADING_LONG = re.compile(r"\s*([+-]?[0-9]+)")


class AssemblyError(ValueError):
    """Raised when a source line cannot be assembled."""


def _is_ascii_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_ascii_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _split_address(operand: str | None) -> tuple[str, str] | None:
    """Split "offset(reg)" into its offset and register texts, checking lengths."""
    if operand is None:
        return None
    open_at = operand.find("(")
    close_at = operand.find(")")
    if open_at < 0 or close_at < 0:
        return None
    reg_len = close_at - open_at - 1
    if not 0 < reg_len < 8:
        return None
    if not 0 < open_at < 16:
        return None
    return operand[:open_at], operand[open_at + 1 : close_at]


def is_directive(token: str) -> bool:
    """True for a data directive such as ".word" (case-insensitive)."""
    return token.lower() in DIRECTIVES


def is_text_section(token: str) -> bool:
    """True for the ".text" section marker."""
    return token.lower() == ".text"


def is_data_section(token: str) -> bool:
    """True for the ".data" section marker (with or without a trailing colon)."""
    return token.lower() in (".data", ".data:")


def is_register(token: str) -> bool:
    """True for a register name such as "$t0"."""
    return register_index(token) is not None


def is_label(token: str | None) -> bool:
    """True for an identifier: a letter or '_' followed by letters, digits or '_'."""
    if not token:
        return False
    first = token[0]
    if not (_is_ascii_alpha(first) or first == "_"):
        return False
    return all(_is_ascii_alnum(char) or char == "_" for char in token)


def is_immediate(token: str) -> bool:
    """True for an optionally signed decimal integer."""
    digits = token[1:] if token[:1] in ("-", "+") else token
    return bool(digits) and all(char in "0123456789" for char in digits)


def is_address(token: str | None) -> bool:
    """True for a base-plus-offset operand such as "4($sp)"."""
    parts = _split_address(token)
    if parts is None:
        return False
    offset, reg = parts
    if register_index(reg) is None:
        return False
    return _WHOLE_LONG.fullmatch(offset) is not None


def is_operand(token: str | None) -> bool:
    """True for a token that is both a register and an immediate."""
    if token is None or not is_register(token):
        return False
    return is_immediate(token)


def extract_register(operand: str | None) -> int | None:
    """Return the register number inside "offset(reg)", or None."""
    parts = _split_address(operand)
    if parts is None:
        return None
    return register_index(parts[1])


def extract_offset(operand: str | None) -> int | None:
    """Return the offset of "offset(reg)", or None if the operand is malformed."""
    parts = _split_address(operand)
    if parts is None:
        return None
    match = _LEADING_LONG.match(parts[0])
    return int(match.group(1)) if match else 0


def validate_operands(info: InstructionInfo, operands: Sequence[str]) -> bool:
    """Check the operand count and the kind of each operand for ``info``."""
    ops = list(operands)
    if info.operand_count != len(ops):
        return False
    name = info.name
    kind = info.type
    if kind is InstructionType.R:
        if name == "sll":
            return is_register(ops[0]) and is_register(ops[1]) and is_immediate(ops[2])
        if name == "syscall":
            return True
        return all(is_register(op) for op in ops)
    if kind is InstructionType.I:
        if name in ("lw", "sw"):
            return is_register(ops[0]) and is_address(ops[1])
        if name == "lui":
            return is_register(ops[0]) and is_immediate(ops[1])
        return is_register(ops[0]) and is_register(ops[1]) and is_immediate(ops[2])
    if kind is InstructionType.J:
        return is_label(ops[0]) or is_immediate(ops[0])
    if kind is InstructionType.P:
        if name == "li":
            return is_register(ops[0]) and is_immediate(ops[1])
        return is_register(ops[0]) and is_label(ops[1])
    return False


def _label_address(labels: LabelTable, name: str) -> int:
    try:
        return labels.find(name)
    except LabelError:
        return _UNRESOLVED_LABEL


def _reg(name: str) -> int:
    index = register_index(name)
    return 0 if index is None else index


def build_instruction(
    info: InstructionInfo, operands: Sequence[str], labels: LabelTable
) -> Instruction:
    """Decode ``operands`` for ``info`` into an Instruction, resolving labels."""
    ops = list(operands)
    if not validate_operands(info, ops):
        raise AssemblyError("Instrução invalida")

    inst = Instruction(opcode=info.opcode, type=info.type)
    kind = info.type

    if kind is InstructionType.R:
        inst.funct = info.funct
        if info.name == "sll":
            inst.rd = _reg(ops[0])
            inst.rt = _reg(ops[1])
            inst.shamt = int(ops[2]) & 0xFF
        elif info.name == "mult":
            inst.rs = _reg(ops[0])
            inst.rt = _reg(ops[1])
        elif info.name != "syscall":
            inst.rd = _reg(ops[0])
            inst.rs = _reg(ops[1])
            inst.rt = _reg(ops[2])
    elif kind is InstructionType.I:
        if info.name in ("lw", "sw"):
            inst.rt = _reg(ops[0])
            inst.imm = (extract_offset(ops[1]) or 0) & 0xFFFF
            inst.rs = extract_register(ops[1]) or 0
        elif info.name == "lui":
            inst.rt = _reg(ops[0])
            inst.imm = int(ops[1]) & 0xFFFF
        else:
            inst.rs = _reg(ops[0])
            inst.rt = _reg(ops[1])
            inst.imm = int(ops[2]) & 0xFFFF
    elif kind is InstructionType.J:
        if is_label(ops[0]):
            inst.address = _label_address(labels, ops[0])
        else:
            inst.address = int(ops[0]) & 0xFFFFFFFF
    elif kind is InstructionType.P:
        inst.rt = _reg(ops[0])
        if is_label(ops[1]):
            inst.is_label = True
            inst.address = _label_address(labels, ops[1])
        else:
            inst.is_label = False
            inst.imm = int(ops[1]) & 0xFFFFFFFF
    else:
        raise AssemblyError("Instrução invalida")
    return inst


def validate_instruction(
    name: str, operands: Sequence[str], memory: Memory, labels: LabelTable
) -> Instruction:
    """Assemble one instruction and append it to instruction memory."""
    info = lookup_instruction(name)
    if info is None:
        raise AssemblyError(f"Erro: Instrução invalida: {name}")
    if not validate_operands(info, operands):
        raise AssemblyError(f"Operação invalida: {info.name}")
    inst = build_instruction(info, operands, labels)
    memory.store_instruction(memory.text_address, inst)
    memory.text_address += 1
    return inst


def validate_data(
    label_name: str | None, args: Sequence[str], memory: Memory, labels: LabelTable
) -> None:
    """Process a data-section line: a directive followed by its values."""
    args = list(args)
    if len(args) < 2:
        raise AssemblyError("Erro: Numeros de argumentos insuficientes.")
    directive = args[0]
    if not is_directive(directive):
        raise AssemblyError(f"Erro: diretiva invalida: {directive}")

    kind = directive.lower()
    if kind == ".word":
        remainder = memory.data_address % 4
        if remainder:
            memory.data_address += 4 - remainder
        for position, text in enumerate(args[1:]):
            if _WHOLE_LONG.fullmatch(text) is None:
                raise AssemblyError(f"Erro: valor invalido: {text}")
            try:
                memory.store_word(memory.data_address, int(text))
            except MemoryAccessError as exc:
                raise AssemblyError(str(exc)) from exc
            if position == 0 and label_name is not None:
                labels.add(label_name, memory.data_address)
            memory.data_address += 4
    elif kind == ".asciiz":
        if label_name is None:
            raise AssemblyError("Erro: .asciiz sem label")
        text = " ".join(args[1:])
        try:
            memory.store_string(memory.data_address, text)
        except MemoryAccessError as exc:
            raise AssemblyError(
                f"Error: Failed to store string at address 0x{memory.data_address:X}"
            ) from exc
        labels.add(label_name, memory.data_address)
        memory.data_address += len(text.encode("utf-8")) + 1
    else:
        raise AssemblyError(f"Erro: diretiva nao suportada: {directive}")