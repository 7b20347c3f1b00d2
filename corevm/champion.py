"""Reading compiled champion files."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass

from .ops import CHAMP_MAX_SIZE, COMMENT_LENGTH, COREWAR_EXEC_MAGIC, PROG_NAME_LENGTH


class ChampionError(Exception):
    """A champion file could not be read or is malformed."""


@dataclass(frozen=True)
class Champion:
    """Header fields and byte code of a compiled champion."""

    name: str
    comment: str
    code: bytes
    file_name: str = ""

    @property
    def size(self) -> int:
        return len(self.code)


def _text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _read_exact(stream: io.BytesIO, size: int, message: str) -> bytes:
    chunk = stream.read(size)
    if len(chunk) != size:
        raise ChampionError(message)
    return chunk


def parse_champion(data: bytes, name: str) -> Champion:
    """Parse the bytes of a champion file; `name` is used in error messages."""
    stream = io.BytesIO(data)
    magic = stream.read(4)
    if len(magic) != 4 or int.from_bytes(magic, "big") != COREWAR_EXEC_MAGIC:
        raise ChampionError(f"invalid COREWAR_EXEC_MAGIC of player {name}")
    prog_name = _read_exact(stream, PROG_NAME_LENGTH, f"invalid PROG_NAME_LENGTH {name}")
    _read_exact(stream, 4, f"invalid nulls after PROG_NAME_LENGTH {name}")
    size_bytes = _read_exact(stream, 4, f"invalid CHAMP_MAX_SIZE {name}")
    prog_size = int.from_bytes(size_bytes, "big")
    if prog_size > CHAMP_MAX_SIZE:
        raise ChampionError(f"invalid CHAMP_MAX_SIZE {name}")
    comment = _read_exact(stream, COMMENT_LENGTH, f"invalid COMMENT_LENGTH {name}")
    _read_exact(stream, 4, f"invalid nulls_after_COMMENT_LENGTH {name}")
    code = _read_exact(stream, prog_size, f"invalid header.prog_size {name}")
    return Champion(_text(prog_name), _text(comment), code, name)


def load_champion(path: str | os.PathLike[str]) -> Champion:
    """Read and parse the champion file at `path`."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as err:
        raise ChampionError("invalid fd") from err
    return parse_champion(data, os.fspath(path))