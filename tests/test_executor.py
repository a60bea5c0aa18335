import io

import pytest

from mipsim.assembler import Assembler
from mipsim.executor import Cpu, ExecutionError
from mipsim.instructions import Instruction, InstructionType
from mipsim.labels import LabelTable
from mipsim.memory import Memory
from mipsim.registers import RegisterFile

R = InstructionType.R
I = InstructionType.I  # noqa: E741
P = InstructionType.P


@pytest.fixture
def memory():
    return Memory()


@pytest.fixture
def regs():
    return RegisterFile()


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def cpu(memory, regs, out):
    return Cpu(memory, regs, out)


def r_inst(funct, rd=10, rs=8, rt=9, shamt=0):
    return Instruction(type=R, funct=funct, rd=rd, rs=rs, rt=rt, shamt=shamt)


def test_add(cpu, regs):
    a, b = 7, 5
    regs[8], regs[9] = a, b
    cpu.execute(r_inst(0x20))
    assert regs[10] == a + b


def test_sub_wraps_to_int32(cpu, regs):
    regs[8], regs[9] = -(2**31), 1
    cpu.execute(r_inst(0x22))
    assert regs[10] == 2**31 - 1


def test_and_or(cpu, regs):
    a, b = 0b1100, 0b1010
    regs[8], regs[9] = a, b
    cpu.execute(r_inst(0x24, rd=10))
    cpu.execute(r_inst(0x25, rd=11))
    assert regs[10] == a & b
    assert regs[11] == a | b


def test_mult_writes_rd(cpu, regs):
    a, b = 6, -3
    regs[8], regs[9] = a, b
    cpu.execute(r_inst(0x18, rd=12))
    assert regs[12] == a * b


def test_slt_signed(cpu, regs):
    regs[8], regs[9] = -1, 1
    cpu.execute(r_inst(0x2A, rd=10))
    cpu.execute(r_inst(0x2A, rd=11, rs=9, rt=8))
    assert (regs[10], regs[11]) == (1, 0)


def test_sll(cpu, regs):
    regs[9] = 1
    cpu.execute(r_inst(0x00, rd=10, rt=9, shamt=4))
    assert regs[10] == 1 << 4


def test_addi_zero_extends_immediate(cpu, regs):
    cpu.execute(Instruction(type=I, opcode=0x08, rs=8, rt=9, imm=0xFFFF))
    assert regs[9] == 0xFFFF


def test_slti(cpu, regs):
    regs[8] = 3
    cpu.execute(Instruction(type=I, opcode=0x0A, rs=8, rt=9, imm=10))
    cpu.execute(Instruction(type=I, opcode=0x0A, rs=8, rt=10, imm=2))
    assert (regs[9], regs[10]) == (1, 0)


def test_lui(cpu, regs):
    cpu.execute(Instruction(type=I, opcode=0x0F, rt=9, imm=1))
    assert regs[9] == 1 << 16


def test_sw_then_lw_round_trip(cpu, regs, memory):
    value = -123456
    regs[8], regs[9] = 16, value
    cpu.execute(Instruction(type=I, opcode=0x2B, rs=8, rt=9, imm=4))
    cpu.execute(Instruction(type=I, opcode=0x23, rs=8, rt=10, imm=4))
    assert regs[10] == value
    assert memory.load_word(20) == value


def test_lw_misaligned_raises(cpu, regs):
    regs[8] = 2
    with pytest.raises(ExecutionError):
        cpu.execute(Instruction(type=I, opcode=0x23, rs=8, rt=9, imm=0))


def test_sw_out_of_range_reports_and_continues(cpu, regs, capsys):
    regs[8] = -4
    cpu.execute(Instruction(type=I, opcode=0x2B, rs=8, rt=9, imm=0))
    assert "Violação" in capsys.readouterr().err


def test_pseudo_label_and_immediate(cpu, regs):
    cpu.execute(Instruction(type=P, rt=4, is_label=True, address=64, imm=5))
    cpu.execute(Instruction(type=P, rt=5, is_label=False, address=64, imm=5))
    assert (regs[4], regs[5]) == (64, 5)


def test_syscall_print_int(memory, regs):
    stream = io.StringIO()
    regs[2], regs[4] = 1, -42
    Cpu(memory, regs, stream).execute(r_inst(0x0C))
    assert stream.getvalue() == "-42\n"


def test_syscall_print_string(memory, regs):
    stream = io.StringIO()
    memory.store_string(8, "hello")
    regs[2], regs[4] = 4, 8
    Cpu(memory, regs, stream).execute(r_inst(0x0C))
    assert stream.getvalue() == "hello\n"


def test_syscall_exit_message(memory, regs):
    stream = io.StringIO()
    regs[2] = 10
    Cpu(memory, regs, stream).execute(r_inst(0x0C))
    assert stream.getvalue() == "Saindo do  programa..\n"


def test_syscall_unsupported_raises(cpu, regs):
    regs[2] = 99
    with pytest.raises(ExecutionError, match="99"):
        cpu.execute(r_inst(0x0C))


def test_unknown_funct_raises(cpu):
    with pytest.raises(ExecutionError):
        cpu.execute(r_inst(0x3F))


def test_jump_sets_pc(cpu):
    target = 7
    cpu.execute(Instruction(type=InstructionType.J, opcode=0x02, address=target))
    assert cpu.pc == target


def test_run_skips_jumped_over_instruction(cpu, regs, memory):
    program = [
        Instruction(type=InstructionType.J, opcode=0x02, address=2),
        Instruction(type=P, rt=8, imm=1),
        Instruction(type=P, rt=9, imm=2),
    ]
    for address, inst in enumerate(program):
        memory.store_instruction(address, inst)
    memory.text_address = len(program)
    cpu.run()
    assert regs[8] == 0
    assert regs[9] == 2
    assert cpu.pc == memory.text_address


def test_assembled_program_prints_string(memory, regs, out):
    Assembler(memory, LabelTable()).assemble_lines(
        [".data", "msg: .asciiz hi there", ".text", "li $v0, 4", "la $a0, msg", "syscall"]
    )
    Cpu(memory, regs, out).run()
    assert out.getvalue() == "hi there\n"


def test_step_advances_pc(cpu, memory, regs):
    memory.store_instruction(0, Instruction(type=P, rt=8, imm=3))
    memory.text_address = 1
    cpu.step()
    assert cpu.pc == 1
    assert regs[8] == 3