"""Decoding instructions from arena memory."""

from __future__ import annotations

from dataclasses import dataclass

from .arena import Arena
from .ops import IND_SIZE, REG_NUMBER, ArgType, Op, arg_type_from_code, op_by_code


@dataclass(frozen=True)
class Command:
    """A decoded instruction; register arguments are zero-based indices."""

    op: Op
    arg_types: tuple[ArgType, ...]
    args: tuple[int, ...]
    next_pc: int

    @property
    def cycles(self) -> int:
        """Cycles to wait before the command executes."""
        return self.op.cycles - 1


def decode_arg_types(byte: int) -> tuple[ArgType, ArgType, ArgType]:
    """Split an argument type byte into three argument types."""
    first, second, third = (arg_type_from_code((byte >> shift) & 3) for shift in (6, 4, 2))
    return first, second, third


def _arg_size(op: Op, index: int, arg_type: ArgType) -> int:
    if op.code in (9, 12) or (op.code == 11 and index == 2 and arg_type == ArgType.DIR):
        return IND_SIZE
    return arg_type.size


def decode_command(arena: Arena, pc: int) -> Command | None:
    """Decode the instruction at `pc`, or return None if it is not valid.

    On None the caller is expected to move on by a single byte.
    """
    if pc < 0:
        return None
    try:
        op = op_by_code(arena[pc])
    except ValueError:
        return None
    size = len(arena)
    cursor = pc
    if op.has_type_code:
        cursor = (cursor + 1) % size
        arg_types = decode_arg_types(arena[cursor])[: op.arg_count]
        if any(not (actual & allowed) for actual, allowed in zip(arg_types, op.arg_types)):
            return None
    else:
        arg_types = (ArgType.DIR,)
    cursor = (cursor + 1) % size

    args = []
    for index, arg_type in enumerate(arg_types):
        width = _arg_size(op, index, arg_type)
        args.append(arena.read(cursor, width))
        cursor = (cursor + width) % size

    for index, arg_type in enumerate(arg_types):
        if arg_type == ArgType.REG:
            if not 1 <= args[index] <= REG_NUMBER:
                return None
            args[index] -= 1
    return Command(op, tuple(arg_types), tuple(args), cursor)