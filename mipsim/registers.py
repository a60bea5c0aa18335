"""The general-purpose register file."""

from __future__ import annotations

NUM_REGISTERS = 32

REGISTER_NAMES: tuple[str, ...] = (
    "$zero", "$at", "$v0", "$v1",
    "$a0", "$a1", "$a2", "$a3",
    "$t0", "$t1", "$t2", "$t3",
    "$t4", "$t5", "$t6", "$t7",
    "$s0", "$s1", "$s2", "$s3",
    "$s4", "$s5", "$s6", "$s7",
    "$t8", "$t9", "$k0", "$k1",
    "$gp", "$sp", "$fp", "$ra",
)

_INDEX = {name: number for number, name in enumerate(REGISTER_NAMES)}


def register_index(name: str) -> int | None:
    """Return the number of register ``name`` (e.g. "$t0"), or None."""
    return _INDEX.get(name)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


class RegisterFile:
    """Thirty-two signed 32-bit registers."""

    def __init__(self) -> None:
        self._values = [0] * NUM_REGISTERS

    def reset(self) -> None:
        """Set every register to zero."""
        self._values = [0] * NUM_REGISTERS

    def __getitem__(self, index: int) -> int:
        return self._values[index]

    def __setitem__(self, index: int, value: int) -> None:
        self._values[index] = _to_int32(value)

    def table(self) -> str:
        """Return the printable register table."""
        lines = ["Registrador ||| Valor"]
        lines.extend(
            f"| {name:<9} | {value:<10} |"
            for name, value in zip(REGISTER_NAMES, self._values)
        )
        return "\n".join(lines) + "\n"