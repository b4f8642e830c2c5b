import pytest

from nachoskit.memory import MEMOFFSET, MEMSIZE, Memory, MemoryError_


@pytest.fixture
def mem():
    return Memory(size=4096)


def test_word_round_trip(mem):
    for value in (0, 1, -1, 0x12345678, -0x7FFFFFFF):
        mem.store(MEMOFFSET + 8, value)
        assert mem.fetch(MEMOFFSET + 8) == value


def test_word_is_little_endian(mem):
    mem.store(MEMOFFSET, 0x12345678)
    assert mem.read_bytes(MEMOFFSET, 4) == b"\x78\x56\x34\x12"


def test_store_keeps_low_32_bits(mem):
    mem.store(MEMOFFSET, 0x1234 + (1 << 32))
    assert mem.fetch(MEMOFFSET) == 0x1234


def test_halfword_signed_and_unsigned(mem):
    mem.sstore(MEMOFFSET + 2, -300)
    assert mem.sfetch(MEMOFFSET + 2) == -300
    assert mem.usfetch(MEMOFFSET + 2) == mem.sfetch(MEMOFFSET + 2) & 0xFFFF


def test_byte_signed_and_unsigned(mem):
    mem.cstore(MEMOFFSET + 5, -5)
    assert mem.cfetch(MEMOFFSET + 5) == -5
    assert mem.ucfetch(MEMOFFSET + 5) == mem.cfetch(MEMOFFSET + 5) & 0xFF


def test_byte_store_leaves_neighbours(mem):
    mem.store(MEMOFFSET, 0)
    mem.cstore(MEMOFFSET + 1, 0x7F)
    assert mem.read_bytes(MEMOFFSET, 4) == bytes([0, 0x7F, 0, 0])


def test_load_and_read_bytes_round_trip(mem):
    data = bytes(range(40))
    mem.load(MEMOFFSET + 100, data)
    assert mem.read_bytes(MEMOFFSET + 100, len(data)) == data


def test_read_cstring_stops_at_nul(mem):
    mem.load(MEMOFFSET + 10, b"hello\0world\0")
    assert mem.read_cstring(MEMOFFSET + 10) == b"hello"
    assert mem.read_cstring(MEMOFFSET + 16) == b"world"


def test_read_cstring_without_terminator():
    small = Memory(size=4)
    small.load(MEMOFFSET, b"abcd")
    with pytest.raises(MemoryError_):
        small.read_cstring(MEMOFFSET)


@pytest.mark.parametrize("addr", [MEMOFFSET - 4, MEMOFFSET + 4096, MEMOFFSET + 4094])
def test_out_of_range_word(mem, addr):
    with pytest.raises(MemoryError_):
        mem.fetch(addr)


def test_out_of_range_is_index_error(mem):
    with pytest.raises(IndexError):
        mem.cstore(0, 1)


def test_negative_length_rejected(mem):
    with pytest.raises(ValueError):
        mem.read_bytes(MEMOFFSET, -1)


def test_default_memory_covers_last_word():
    mem = Memory()
    last = MEMOFFSET + MEMSIZE - 4
    mem.store(last, 77)
    assert mem.fetch(last) == 77
    with pytest.raises(MemoryError_):
        mem.fetch(MEMOFFSET + MEMSIZE)