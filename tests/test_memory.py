import pytest

from mipsim.instructions import Instruction, InstructionType
from mipsim.memory import DATA_MEM_SIZE, INST_MEM_SIZE, Memory, MemoryAccessError


def test_word_round_trip():
    mem = Memory()
    mem.store_word(8, 123456)
    assert mem.load_word(8) == 123456


def test_negative_word_round_trip():
    mem = Memory()
    mem.store_word(0, -1)
    assert mem.load_word(0) == -1
    assert bytes(mem.data[0:4]) == b"\xff\xff\xff\xff"


def test_words_are_big_endian():
    mem = Memory()
    mem.store_word(4, 0x01020304)
    assert bytes(mem.data[4:8]) == bytes([1, 2, 3, 4])


@pytest.mark.parametrize("address", [1, 2, 3, 6])
def test_misaligned_access_raises(address):
    mem = Memory()
    with pytest.raises(MemoryAccessError):
        mem.store_word(address, 1)
    with pytest.raises(MemoryAccessError):
        mem.load_word(address)


def test_out_of_range_access_raises():
    mem = Memory()
    mem.store_word(DATA_MEM_SIZE - 4, 9)
    assert mem.load_word(DATA_MEM_SIZE - 4) == 9
    with pytest.raises(MemoryAccessError):
        mem.load_word(DATA_MEM_SIZE)
    with pytest.raises(MemoryAccessError):
        mem.store_word(-4, 1)


def test_string_round_trip():
    mem = Memory()
    mem.store_string(10, "hello world")
    assert mem.read_string(10) == "hello world"
    assert mem.data[10 + len("hello world")] == 0


def test_string_past_end_raises():
    mem = Memory()
    with pytest.raises(MemoryAccessError):
        mem.store_string(DATA_MEM_SIZE - 3, "abc")
    mem.store_string(DATA_MEM_SIZE - 4, "abc")
    assert mem.read_string(DATA_MEM_SIZE - 4) == "abc"


def test_store_instruction_and_limit():
    mem = Memory()
    inst = Instruction(opcode=0x08, type=InstructionType.I, rt=8, imm=5)
    mem.store_instruction(3, inst)
    assert mem.instructions[3] is inst
    with pytest.raises(MemoryAccessError):
        mem.store_instruction(INST_MEM_SIZE + 1, inst)


def test_reset_keeps_cursors():
    mem = Memory()
    mem.store_word(0, 77)
    mem.store_instruction(0, Instruction())
    mem.data_address = 12
    mem.text_address = 1
    mem.reset()
    assert mem.load_word(0) == 0
    assert mem.instructions == {}
    assert (mem.data_address, mem.text_address) == (12, 1)


def test_clear_instructions_rewinds_text():
    mem = Memory()
    mem.store_instruction(0, Instruction())
    mem.text_address = 1
    mem.store_word(0, 5)
    mem.clear_instructions()
    assert mem.instructions == {}
    assert mem.text_address == 0
    assert mem.load_word(0) == 5