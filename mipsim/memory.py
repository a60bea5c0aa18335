"""Data memory (byte addressed, big-endian words) and instruction memory."""

from __future__ import annotations

from mipsim.instructions import Instruction

DATA_MEM_SIZE = 0x200000
INST_MEM_SIZE = 0x100000


class MemoryAccessError(Exception):
    """Raised on an out-of-range or misaligned memory access."""


class Memory:
    """Simulated memory.

    ``instructions`` maps instruction addresses to instructions;
    ``text_address`` is the next free instruction slot and ``data_address``
    the next free byte of the data segment.
    """

    def __init__(self) -> None:
        self.data = bytearray(DATA_MEM_SIZE)
        self.instructions: dict[int, Instruction] = {}
        self.text_address = 0
        self.data_address = 0

    def reset(self) -> None:
        """Zero data and instruction memory; allocation cursors are kept."""
        self.data = bytearray(DATA_MEM_SIZE)
        self.instructions.clear()

    def clear_instructions(self) -> None:
        """Drop all instructions and rewind the text cursor."""
        self.instructions.clear()
        self.text_address = 0

    @staticmethod
    def _check_word(address: int) -> None:
        if not 0 <= address < DATA_MEM_SIZE - 3:
            raise MemoryAccessError(
                f"Violação de acesso a memória no endereço: 0x{address & 0xFFFFFFFF:X}"
            )
        if address % 4:
            raise MemoryAccessError(
                f"Acesso a memória desalinhado no endereço: 0x{address:X}"
            )

    def load_word(self, address: int) -> int:
        """Read the signed big-endian word at ``address``."""
        self._check_word(address)
        return int.from_bytes(self.data[address : address + 4], "big", signed=True)

    def store_word(self, address: int, value: int) -> None:
        """Write ``value`` as a big-endian word at ``address``."""
        self._check_word(address)
        self.data[address : address + 4] = (value & 0xFFFFFFFF).to_bytes(4, "big")

    def store_string(self, address: int, text: str) -> None:
        """Write ``text`` followed by a NUL byte at ``address``."""
        raw = text.encode("utf-8") + b"\0"
        if address < 0 or address + len(raw) > DATA_MEM_SIZE:
            raise MemoryAccessError(
                "Violação de acesso a memória: A string ultrapassa os limites da memória"
            )
        self.data[address : address + len(raw)] = raw

    def read_string(self, address: int) -> str:
        """Read the NUL-terminated string starting at ``address``."""
        if not 0 <= address < DATA_MEM_SIZE:
            raise MemoryAccessError(
                f"Violação de acesso a memória no endereço: 0x{address & 0xFFFFFFFF:X}"
            )
        end = self.data.find(b"\0", address)
        if end < 0:
            end = DATA_MEM_SIZE
        return self.data[address:end].decode("utf-8", errors="replace")

    def store_instruction(self, address: int, instruction: Instruction) -> None:
        """Place ``instruction`` at instruction slot ``address``."""
        if address > INST_MEM_SIZE:
            raise MemoryAccessError("Memória de instrução insuficiente")
        self.instructions[address] = instruction