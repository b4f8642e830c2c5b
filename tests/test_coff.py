import pytest

from nachoskit.coff import (
    MIPSELMAGIC,
    OMAGIC,
    AoutHeader,
    CoffFile,
    CoffFormatError,
    FileHeader,
    SectionHeader,
    read_coff,
)


def build_coff(specs, file_magic=MIPSELMAGIC, aout_magic=OMAGIC):
    header_len = FileHeader.SIZE + AoutHeader.SIZE + SectionHeader.SIZE * len(specs)
    headers = []
    body = bytearray()
    for name, paddr, payload in specs:
        if isinstance(payload, int):
            size, scnptr = payload, 0
        else:
            size, scnptr = len(payload), header_len + len(body)
            body += payload
        headers.append(SectionHeader(name=name, paddr=paddr, vaddr=paddr,
                                     size=size, scnptr=scnptr))
    return (
        FileHeader(magic=file_magic, nscns=len(specs)).pack()
        + AoutHeader(magic=aout_magic).pack()
        + b"".join(h.pack() for h in headers)
        + bytes(body)
    )


def test_file_header_round_trip():
    header = FileHeader(nscns=3, timdat=12345, symptr=400, nsyms=7, opthdr=56, flags=9)
    packed = header.pack()
    assert len(packed) == FileHeader.SIZE
    assert FileHeader.unpack(packed) == header


def test_file_header_magic_is_little_endian():
    assert FileHeader().pack()[:2] == b"\x62\x01"


def test_aout_header_round_trip():
    aout = AoutHeader(tsize=0x100, dsize=0x20, entry=0x400, cprmask=(1, 2, 3, 4), gp_value=77)
    packed = aout.pack()
    assert len(packed) == AoutHeader.SIZE
    assert AoutHeader.unpack(packed) == aout


def test_section_header_round_trip_and_name_trim():
    section = SectionHeader(name=".text", paddr=0x10, vaddr=0x10, size=0x40, scnptr=200, nreloc=2)
    packed = section.pack()
    assert len(packed) == SectionHeader.SIZE
    assert SectionHeader.unpack(packed) == section


def test_section_name_too_long():
    with pytest.raises(ValueError):
        SectionHeader(name=".toolongname").pack()


def test_unpack_short_data():
    with pytest.raises(CoffFormatError):
        FileHeader.unpack(b"\x00" * (FileHeader.SIZE - 1))


def test_read_coff_sections_and_data():
    text = b"\x01\x02\x03\x04\x05\x06\x07\x08"
    data = b"abcd"
    coff = read_coff(build_coff([(".text", 0, text), (".data", 8, data), (".bss", 12, 16)]))
    assert isinstance(coff, CoffFile)
    assert [s.name for s in coff.sections] == [".text", ".data", ".bss"]
    assert coff.section_data(coff.section(".text")) == text
    assert coff.section_data(coff.section(".data")) == data
    assert coff.section(".bss").size == 16
    assert coff.section(".rdata") is None


def test_read_coff_wrong_file_magic():
    with pytest.raises(CoffFormatError, match="MIPSEL"):
        read_coff(build_coff([], file_magic=0x0160))


def test_read_coff_wrong_aout_magic():
    with pytest.raises(CoffFormatError, match="OMAGIC"):
        read_coff(build_coff([], aout_magic=0o410))


def test_read_coff_truncated_section_table():
    image = build_coff([(".text", 0, b"1234")])
    cut = FileHeader.SIZE + AoutHeader.SIZE + 4
    with pytest.raises(CoffFormatError, match="too short"):
        read_coff(image[:cut])


def test_section_data_truncated():
    image = build_coff([(".text", 0, b"12345678")])
    coff = read_coff(image[:-3])
    with pytest.raises(CoffFormatError):
        coff.section_data(coff.section(".text"))