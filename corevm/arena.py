"""Circular memory of the virtual machine."""

from __future__ import annotations

from .ops import MEM_SIZE


def bytes_to_int(data: bytes) -> int:
    """Decode big-endian bytes into a signed 32-bit value.

    Two-byte values are sign-extended; other short values are not.
    """
    value = int.from_bytes(data, "big")
    if len(data) == 2 and data[0] & 0x80:
        value |= 0xFFFF0000
    value &= 0xFFFFFFFF
    if value & 0x80000000:
        value -= 1 << 32
    return value


class Arena:
    """MEM_SIZE bytes of memory whose addresses wrap around."""

    def __init__(self) -> None:
        self._memory = bytearray(MEM_SIZE)

    def __len__(self) -> int:
        return len(self._memory)

    def __getitem__(self, address: int) -> int:
        return self._memory[address % len(self._memory)]

    def __bytes__(self) -> bytes:
        return bytes(self._memory)

    def _store(self, address: int, data: bytes) -> None:
        size = len(self._memory)
        for offset, byte in enumerate(data):
            self._memory[(address + offset) % size] = byte

    def read(self, address: int, size: int) -> int:
        """Read `size` bytes starting at `address` as a signed integer."""
        length = len(self._memory)
        span = bytes(self._memory[(address + offset) % length] for offset in range(size))
        return bytes_to_int(span)

    def write_int(self, address: int, value: int) -> None:
        """Store `value` as four big-endian bytes starting at `address`."""
        self._store(address, (value & 0xFFFFFFFF).to_bytes(4, "big"))

    def load(self, address: int, code: bytes) -> None:
        """Copy a block of code into memory starting at `address`."""
        if len(code) > len(self._memory):
            raise ValueError("code does not fit in memory")
        self._store(address, code)