"""Two-pass assembler that turns source lines into instruction and data memory."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable

from mipsim.labels import LabelTable
from mipsim.memory import Memory
from mipsim.validator import (
    is_data_section,
    is_text_section,
    validate_data,
    validate_instruction,
)

TEXT_SECTION = ".text"
DATA_SECTION = ".data"
MAX_OPERANDS = 4

_DELIMITERS = re.compile(r"[ \t,]+")


def clean_line(line: str) -> str:
    """Drop the line ending, any '#' comment and leading whitespace."""
    line = line.rstrip("\r\n")
    line = line.split("#", 1)[0]
    return line.lstrip()


class Assembler:
    """Assembles source into ``memory`` and records symbols in ``labels``.

    The first pass lays out the data segment and records every label; the
    second pass builds the instructions, so jumps may refer forward.
    """

    def __init__(self, memory: Memory, labels: LabelTable) -> None:
        self.memory = memory
        self.labels = labels
        self.section: str | None = None
        self.instruction_line = 0

    def _switch_section(self, token: str) -> bool:
        if is_data_section(token):
            self.section = DATA_SECTION
            return True
        if is_text_section(token):
            self.section = TEXT_SECTION
            return True
        return False

    def tokenize_line(self, line: str, first_pass: bool) -> None:
        """Process one cleaned source line during the given pass."""
        tokens = [token for token in _DELIMITERS.split(line) if token]
        if not tokens:
            return
        if self.section is None:
            self.section = TEXT_SECTION

        if self._switch_section(tokens[0]):
            return

        label: str | None = None
        if tokens[0].endswith(":"):
            label = tokens[0][:-1]
            tokens = tokens[1:]
            if first_pass and self.section == TEXT_SECTION:
                self.labels.add(label, self.instruction_line)

        if not tokens:
            if label is not None and first_pass and self.section == DATA_SECTION:
                self.labels.add(label, self.memory.data_address)
            return

        if self._switch_section(tokens[0]):
            return

        if self.section == DATA_SECTION:
            if first_pass:
                validate_data(label, tokens, self.memory, self.labels)
            return

        name, operands = tokens[0], tokens[1 : 1 + MAX_OPERANDS]
        if not first_pass:
            validate_instruction(name, operands, self.memory, self.labels)
        self.instruction_line += 1

    def assemble_lines(self, lines: Iterable[str]) -> None:
        """Assemble raw source lines (line endings and comments allowed)."""
        source = [clean_line(line) for line in lines]
        self.memory.reset()
        for first_pass in (True, False):
            self.section = None
            self.instruction_line = 0
            for line in source:
                self.tokenize_line(line, first_pass)

    def assemble_file(self, path: str | os.PathLike[str]) -> None:
        """Assemble the source file at ``path``; raises OSError if unreadable."""
        with open(path, encoding="utf-8") as handle:
            lines = handle.readlines()
        self.assemble_lines(lines)