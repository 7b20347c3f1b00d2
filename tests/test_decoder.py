import pytest

from corevm.arena import Arena
from corevm.decoder import decode_arg_types, decode_command
from corevm.ops import DIR_SIZE, IND_SIZE, MEM_SIZE, ArgType, op_by_code

REG, DIR, IND = 1, 2, 3


def type_byte(*codes):
    value = 0
    for shift, code in zip((6, 4, 2), codes):
        value |= code << shift
    return value


def arena_with(code, at=0):
    arena = Arena()
    arena.load(at, code)
    return arena


def test_decode_arg_types():
    assert decode_arg_types(type_byte(REG, DIR, IND)) == (ArgType.REG, ArgType.DIR, ArgType.IND)
    assert decode_arg_types(0) == (ArgType(0), ArgType(0), ArgType(0))


def test_live():
    arena = arena_with(bytes([1]) + (42).to_bytes(4, "big"))
    command = decode_command(arena, 0)
    assert command.op.name == "live"
    assert command.args == (42,)
    assert command.next_pc == 1 + DIR_SIZE
    assert command.cycles == op_by_code(1).cycles - 1


def test_zjmp_uses_short_direct():
    arena = arena_with(bytes([9]) + (-5).to_bytes(2, "big", signed=True))
    command = decode_command(arena, 0)
    assert command.args == (-5,)
    assert command.next_pc == 1 + IND_SIZE


def test_add_registers_are_zero_based():
    arena = arena_with(bytes([4, type_byte(REG, REG, REG), 2, 3, 4]))
    command = decode_command(arena, 0)
    assert command.args == (1, 2, 3)
    assert command.arg_types == (ArgType.REG,) * 3
    assert command.next_pc == 5


def test_sti_argument_sizes():
    code = (
        bytes([11, type_byte(REG, DIR, DIR), 1])
        + (7).to_bytes(4, "big")
        + (-3).to_bytes(2, "big", signed=True)
    )
    command = decode_command(arena_with(code), 0)
    assert command.args == (0, 7, -3)
    assert command.next_pc == 3 + DIR_SIZE + IND_SIZE


def test_ld_indirect():
    code = bytes([2, type_byte(IND, REG)]) + (-8).to_bytes(2, "big", signed=True) + bytes([16])
    command = decode_command(arena_with(code), 0)
    assert command.arg_types == (ArgType.IND, ArgType.REG)
    assert command.args == (-8, 15)


@pytest.mark.parametrize("register", [0, 17])
def test_bad_register(register):
    arena = arena_with(bytes([16, type_byte(REG), register]))
    assert decode_command(arena, 0) is None


@pytest.mark.parametrize("opcode", [0, 17, 200])
def test_bad_opcode(opcode):
    assert decode_command(arena_with(bytes([opcode])), 0) is None


def test_bad_argument_types():
    arena = arena_with(bytes([4, type_byte(DIR, REG, REG), 1, 1, 1]))
    assert decode_command(arena, 0) is None


def test_missing_argument_type():
    arena = arena_with(bytes([4, type_byte(REG, REG), 1, 1, 1]))
    assert decode_command(arena, 0) is None


def test_negative_pc():
    assert decode_command(arena_with(bytes([1])), -1) is None


def test_wraps_around_memory_end():
    start = MEM_SIZE - 2
    arena = arena_with(bytes([1]) + (99).to_bytes(4, "big"), at=start)
    command = decode_command(arena, start)
    assert command.args == (99,)
    assert command.next_pc == (start + 1 + DIR_SIZE) % MEM_SIZE