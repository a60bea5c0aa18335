# mipsim

A small MIPS assembler and simulator. It reads an assembly source file with
`.data` and `.text` sections and assembles it in two passes. The first pass lays
out the data segment and records labels. The second pass builds the
instructions, so a jump may name a label that comes later in the file. The
program then runs against a file of 32 signed 32-bit registers and a 2 MB
byte-addressed, big-endian data memory.

## Supported instructions

- R-type: `add`, `sub`, `and`, `or`, `sll`, `slt`, `mult`, `syscall`
- I-type: `addi`, `slti`, `lui`, `lw`, `sw`
- J-type: `j` (to a label or to an instruction number)
- Pseudo-instructions: `li` (register, immediate) and `la` (register, label)

Data directives: `.word` and `.asciiz`. `.word` aligns to 4 bytes and stores
one or more decimal values. `.asciiz` needs a label. It joins its remaining
tokens with single spaces and stores them NUL-terminated. Quotes are not
stripped, and a `#` always starts a comment. Other directives, such as `.byte`
and `.space`, are recognised but rejected.

Syscalls, selected by `$v0`:

| `$v0` | effect                                   |
|-------|------------------------------------------|
| 1     | print the integer in `$a0`               |
| 4     | print the string at the address in `$a0` |
| 10    | print an exit message                    |

Any other syscall code is an error.

## Installation

```
pip install .
```

## Usage

Start the interactive menu:

```
mipsim
```

The menu has these options:

1. Load an assembly file.
2. Execute the loaded instructions. Running a second time reloads the file first.
3. Print the register table.
4. Print the 32-bit binary encoding of every non-pseudo instruction.
5. Quit.

If a file cannot be read, the menu reports it and carries on. An assembly or
runtime error, such as an unknown instruction, a bad operand, a misaligned
`lw` or an unsupported syscall, is printed and ends the menu with exit
status 1.

## Example program

```
.data
msg: .asciiz Hello world
num: .word 42

.text
    la $a0, msg
    li $v0, 4
    syscall
    la $t0, num
    lw $a0, 0($t0)
    li $v0, 1
    syscall
    li $v0, 10
    syscall
```

## Using it from Python

```python
import io
from mipsim.menu import Simulator

out = io.StringIO()
sim = Simulator(out)
sim.load("program.s")
sim.execute()
print(out.getvalue())
print(sim.register_table())
print(sim.binaries())
```

`Simulator.load` raises `OSError` when the file cannot be read. It raises
`mipsim.validator.AssemblyError` for bad source. `Simulator.execute` raises
`mipsim.executor.ExecutionError` when an instruction cannot be carried out.

The parts can also be used on their own:

- `mipsim.assembler.Assembler` assembles into a `mipsim.memory.Memory` and a
  `mipsim.labels.LabelTable`.
- `mipsim.executor.Cpu` runs the program against a
  `mipsim.registers.RegisterFile`.
- `mipsim.encoder` turns instructions into machine words with
  `encode_instruction` and `encode_program`, and prints them with
  `format_binary`.

## What it does not do

- There are no branch instructions, and nothing beyond the list above.
- `mult` writes its product to register 0 instead of HI/LO.
- The data segment handles only `.word` and `.asciiz`.
- There is no stepping, breakpoint or memory-dump view in the menu.

## Development

```
pip install -e .[test]
pytest
```