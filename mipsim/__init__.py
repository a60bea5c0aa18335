"""A small MIPS assembler and simulator with an interactive text menu."""

__version__ = "0.1.0"
__all__ = [
    "assembler",
    "encoder",
    "executor",
    "instructions",
    "labels",
    "memory",
    "menu",
    "registers",
    "validator",
]