"""Interactive text menu and the simulator session it drives."""

from __future__ import annotations

import argparse
import os
import re
import sys
from typing import TextIO

from mipsim.assembler import Assembler
from mipsim.encoder import encode_program, format_binary
from mipsim.executor import Cpu, ExecutionError
from mipsim.instructions import Instruction
from mipsim.labels import LabelError, LabelTable
from mipsim.memory import Memory, MemoryAccessError
from mipsim.registers import RegisterFile
from mipsim.validator import AssemblyError

RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[34m"
MAGENTA = "\x1b[35m"
CYAN = "\x1b[36m"
RESET = "\x1b[0m"

_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_FATAL_ERRORS = (AssemblyError, LabelError, MemoryAccessError, ExecutionError)
_NOT_LOADED = "Erro: Carregue um arquivo primeiro."


class Simulator:
    """One loaded program together with its memory, registers and CPU."""

    def __init__(self, out: TextIO | None = None) -> None:
        self.out = out if out is not None else sys.stdout
        self.path: str | os.PathLike[str] | None = None
        self.has_run = False
        self._reset_state()

    def _reset_state(self) -> None:
        self.memory = Memory()
        self.labels = LabelTable()
        self.registers = RegisterFile()
        self.cpu = Cpu(self.memory, self.registers, self.out)

    @property
    def loaded(self) -> bool:
        """True once a program has been assembled successfully."""
        return self.path is not None

    def _require_loaded(self) -> None:
        if not self.loaded:
            raise RuntimeError(_NOT_LOADED)

    def load(self, path: str | os.PathLike[str]) -> None:
        """Assemble the file at ``path`` into fresh memory and registers."""
        self._reset_state()
        self.path = None
        self.has_run = False
        Assembler(self.memory, self.labels).assemble_file(path)
        self.path = path

    def execute(self) -> None:
        """Run the loaded program, reloading it first if it has already run."""
        self._require_loaded()
        if self.has_run:
            self.load(self.path)
        self.cpu.run()
        self.has_run = True

    def register_table(self) -> str:
        """Return the printable register table."""
        self._require_loaded()
        return self.registers.table()

    def binaries(self) -> str:
        """Return the machine code of the program, one 32-bit word per line."""
        self._require_loaded()
        program = (
            self.memory.instructions.get(address, Instruction())
            for address in range(self.memory.text_address)
        )
        return "".join(f"{format_binary(word)}\n" for word in encode_program(program))


def _parse_option(line: str) -> int:
    match = _LEADING_INT.match(line)
    return int(match.group(1)) if match else 0


def run_menu(stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """Run the interactive menu until the user quits; return the exit status."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    simulator = Simulator(stdout)

    def say(text: str, color: str) -> None:
        print(f"{color}{text}{RESET}", file=stdout)

    def clear() -> None:
        stdout.write(_CLEAR_SCREEN)

    def wait() -> None:
        stdout.write(f"\n{YELLOW}Pressione Enter para continuar...{RESET}")
        stdout.flush()
        stdin.readline()

    def not_loaded() -> None:
        say(_NOT_LOADED, RED)
        wait()

    path = ""
    while True:
        clear()
        print(f"{CYAN}========================================", file=stdout)
        print("              MENU PRINCIPAL            ", file=stdout)
        print(f"========================================{RESET}", file=stdout)
        for number, text in enumerate(
            (
                "Carregar arquivo",
                "Executar instruções",
                "Imprimir tabela de registradores",
                "Imprimir binários",
                "Sair",
            ),
            start=1,
        ):
            print(f"{GREEN}{number}.{RESET} {text}", file=stdout)
        print(f"{CYAN}========================================", file=stdout)
        stdout.write(f"Escolha uma opção: {MAGENTA}")
        stdout.flush()
        line = stdin.readline()
        stdout.write(RESET)
        if not line:
            return 0
        option = _parse_option(line)

        try:
            if option == 1:
                clear()
                stdout.write(f"{BLUE}Digite o diretório do arquivo: {RESET}")
                stdout.flush()
                path = stdin.readline()
                if path.endswith("\n"):
                    path = path[:-1]
                say(f"Carregando arquivo: {path}", YELLOW)
                try:
                    simulator.load(path)
                except OSError:
                    say("Erro ao carregar o arquivo.", RED)
                else:
                    say("Arquivo carregado \u2714", GREEN)
                wait()
            elif option == 2:
                if not simulator.loaded:
                    not_loaded()
                    continue
                clear()
                if simulator.has_run:
                    say(f"Recarregando arquivo: {path}", YELLOW)
                    try:
                        simulator.load(path)
                    except OSError:
                        say("Erro ao recarregar o arquivo.", RED)
                        wait()
                        continue
                    say("Arquivo recarregado \u2714", GREEN)
                say("Executando instruções...", YELLOW)
                simulator.execute()
                say("Instruções executadas.", GREEN)
                wait()
            elif option == 3:
                if not simulator.loaded:
                    not_loaded()
                    continue
                clear()
                stdout.write(simulator.register_table())
                wait()
            elif option == 4:
                if not simulator.loaded:
                    not_loaded()
                    continue
                clear()
                stdout.write(simulator.binaries())
                wait()
            elif option == 5:
                say("Saindo do programa...", MAGENTA)
                return 0
            else:
                say("Opção inválida. Tente novamente.", RED)
                wait()
        except _FATAL_ERRORS as exc:
            say(str(exc), RED)
            return 1


def main(argv: list[str] | None = None) -> int:
    """Start the interactive simulator menu."""
    parser = argparse.ArgumentParser(prog="mipsim", description="MIPS subset simulator")
    parser.parse_args(argv)
    return run_menu(sys.stdin, sys.stdout)