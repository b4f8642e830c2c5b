"""Little-endian main memory of the simulated MIPS machine."""

from __future__ import annotations

MEMSIZE = 1 << 24
MEMOFFSET = 0x10000000

_MASK = 0xFFFFFFFF


class MemoryError_(IndexError):
    """Raised when an access falls outside simulated memory."""


class Memory:
    """A block of ``size`` bytes mapped at address ``offset``."""

    def __init__(self, size: int = MEMSIZE, offset: int = MEMOFFSET) -> None:
        if size <= 0:
            raise ValueError(f"memory size must be positive, got {size}")
        self.size = size
        self.offset = offset
        self._data = bytearray(size)

    def _index(self, addr: int, length: int) -> int:
        index = (addr & _MASK) - self.offset
        if index < 0 or index + length > self.size:
            raise MemoryError_(f"address 0x{addr & _MASK:08x} is outside memory")
        return index

    def _read(self, addr: int, length: int, signed: bool) -> int:
        index = self._index(addr, length)
        return int.from_bytes(self._data[index:index + length], "little", signed=signed)

    def _write(self, addr: int, length: int, value: int) -> None:
        index = self._index(addr, length)
        mask = (1 << (8 * length)) - 1
        self._data[index:index + length] = (value & mask).to_bytes(length, "little")

    def fetch(self, addr: int) -> int:
        """Signed 32-bit word at ``addr``."""
        return self._read(addr, 4, True)

    def sfetch(self, addr: int) -> int:
        """Signed 16-bit halfword at ``addr``."""
        return self._read(addr, 2, True)

    def usfetch(self, addr: int) -> int:
        """Unsigned 16-bit halfword at ``addr``."""
        return self._read(addr, 2, False)

    def cfetch(self, addr: int) -> int:
        """Signed byte at ``addr``."""
        return self._read(addr, 1, True)

    def ucfetch(self, addr: int) -> int:
        """Unsigned byte at ``addr``."""
        return self._read(addr, 1, False)

    def store(self, addr: int, value: int) -> None:
        """Store the low 32 bits of ``value`` at ``addr``."""
        self._write(addr, 4, value)

    def sstore(self, addr: int, value: int) -> None:
        """Store the low 16 bits of ``value`` at ``addr``."""
        self._write(addr, 2, value)

    def cstore(self, addr: int, value: int) -> None:
        """Store the low 8 bits of ``value`` at ``addr``."""
        self._write(addr, 1, value)

    def load(self, addr: int, data: bytes) -> None:
        """Copy ``data`` into memory starting at ``addr``."""
        index = self._index(addr, len(data))
        self._data[index:index + len(data)] = data

    def read_bytes(self, addr: int, length: int) -> bytes:
        """Return ``length`` bytes starting at ``addr``."""
        if length < 0:
            raise ValueError(f"negative length: {length}")
        index = self._index(addr, length)
        return bytes(self._data[index:index + length])

    def read_cstring(self, addr: int) -> bytes:
        """Return the NUL-terminated string at ``addr``, without the NUL."""
        index = self._index(addr, 1)
        end = self._data.find(0, index)
        if end == -1:
            raise MemoryError_(f"string at 0x{addr & _MASK:08x} runs past the end of memory")
        return bytes(self._data[index:end])