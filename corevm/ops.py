"""Machine constants and the instruction table of the virtual arena."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

IND_SIZE = 2
REG_SIZE = 4
DIR_SIZE = REG_SIZE

REG_CODE = 1
DIR_CODE = 2
IND_CODE = 3

MAX_ARGS_NUMBER = 4
MAX_PLAYERS = 4
MEM_SIZE = 4 * 1024
IDX_MOD = MEM_SIZE // 8
CHAMP_MAX_SIZE = MEM_SIZE // 6

COMMENT_CHAR = "#"
LABEL_CHAR = ":"
DIRECT_CHAR = "%"
SEPARATOR_CHAR = ","
LABEL_CHARS = "abcdefghijklmnopqrstuvwxyz_0123456789"
NAME_CMD_STRING = ".name"
COMMENT_CMD_STRING = ".comment"

REG_NUMBER = 16

CYCLE_TO_DIE = 1536
CYCLE_DELTA = 50
NBR_LIVE = 21
MAX_CHECKS = 10

PROG_NAME_LENGTH = 128
COMMENT_LENGTH = 2048
COREWAR_EXEC_MAGIC = 0xEA83F3


class ArgType(IntFlag):
    """Kinds of instruction arguments; combinations describe what an op accepts."""

    REG = 1
    DIR = 2
    IND = 4
    LAB = 8

    @property
    def size(self) -> int:
        """Number of bytes an argument of this kind takes in byte code."""
        return _TYPE_SIZES.get(self, 0)


_TYPE_SIZES = {ArgType.REG: 1, ArgType.DIR: DIR_SIZE, ArgType.IND: IND_SIZE}

_CODE_TO_TYPE = (ArgType(0), ArgType.REG, ArgType.DIR, ArgType.IND)


@dataclass(frozen=True)
class Op:
    """One entry of the instruction table."""

    name: str
    arg_count: int
    arg_types: tuple[ArgType, ...]
    code: int
    cycles: int
    description: str
    has_type_code: bool
    short_dir: bool


_R, _D, _I = ArgType.REG, ArgType.DIR, ArgType.IND

OPS: tuple[Op, ...] = (
    Op("live", 1, (_D,), 1, 10, "alive", False, False),
    Op("ld", 2, (_D | _I, _R), 2, 5, "load", True, False),
    Op("st", 2, (_R, _I | _R), 3, 5, "store", True, False),
    Op("add", 3, (_R, _R, _R), 4, 10, "addition", True, False),
    Op("sub", 3, (_R, _R, _R), 5, 10, "soustraction", True, False),
    Op("and", 3, (_R | _D | _I, _R | _I | _D, _R), 6, 6,
       "et (and  r1, r2, r3   r1&r2 -> r3", True, False),
    Op("or", 3, (_R | _I | _D, _R | _I | _D, _R), 7, 6,
       "ou  (or   r1, r2, r3   r1 | r2 -> r3", True, False),
    Op("xor", 3, (_R | _I | _D, _R | _I | _D, _R), 8, 6,
       "ou (xor  r1, r2, r3   r1^r2 -> r3", True, False),
    Op("zjmp", 1, (_D,), 9, 20, "jump if zero", False, True),
    Op("ldi", 3, (_R | _D | _I, _D | _R, _R), 10, 25, "load index", True, True),
    Op("sti", 3, (_R, _R | _D | _I, _D | _R), 11, 25, "store index", True, True),
    Op("fork", 1, (_D,), 12, 800, "fork", False, True),
    Op("lld", 2, (_D | _I, _R), 13, 10, "long load", True, False),
    Op("lldi", 3, (_R | _D | _I, _D | _R, _R), 14, 50, "long load index", True, True),
    Op("lfork", 1, (_D,), 15, 1000, "long fork", False, True),
    Op("aff", 1, (_R,), 16, 2, "aff", True, False),
)

_BY_CODE = {op.code: op for op in OPS}


def op_by_code(code: int) -> Op:
    """Return the operation with the given code; ValueError if there is none."""
    try:
        return _BY_CODE[code]
    except KeyError:
        raise ValueError(f"invalid operation code {code}") from None


def arg_type_from_code(code: int) -> ArgType:
    """Map a two-bit argument code from a type byte to its ArgType."""
    if not 0 <= code < len(_CODE_TO_TYPE):
        raise ValueError(f"invalid argument code {code}")
    return _CODE_TO_TYPE[code]