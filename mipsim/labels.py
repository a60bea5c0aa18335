"""Symbol table mapping label names to addresses."""

from __future__ import annotations

MAX_LABELS = 500
MAX_LABEL_LENGTH = 100


class LabelError(LookupError):
    """Raised when a label cannot be added or found."""


class LabelTable:
    """Ordered collection of labels; the first entry of a name wins on lookup."""

    def __init__(self) -> None:
        self._entries: list[tuple[str, int]] = []

    def add(self, name: str, address: int) -> None:
        """Record ``name`` at ``address``; names are cut to 99 characters."""
        if len(self._entries) >= MAX_LABELS:
            raise LabelError("Maximo de labels.")
        self._entries.append((name[: MAX_LABEL_LENGTH - 1], address & 0xFFFFFFFF))

    def find(self, name: str) -> int:
        """Return the address of the first label called ``name``."""
        for entry_name, address in self._entries:
            if entry_name == name:
                return address
        raise LabelError(f"label not found: {name}")

    def listing(self) -> str:
        """Return one "name, 0xADDR" line per label."""
        return "".join(f"{name}, 0x{address:X}\n" for name, address in self._entries)

    def __len__(self) -> int:
        return len(self._entries)