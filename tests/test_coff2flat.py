import io

import pytest

from nachoskit.coff import MIPSELMAGIC, OMAGIC, AoutHeader, CoffFormatError, FileHeader, SectionHeader
from nachoskit.coff2flat import STACK_SIZE, coff_to_flat, convert_file, main


def coff_image(sections, aout_magic=OMAGIC):
    start = FileHeader.SIZE + AoutHeader.SIZE + len(sections) * SectionHeader.SIZE
    table = bytearray()
    contents = bytearray()
    for name, paddr, payload in sections:
        stored = not isinstance(payload, int)
        table += SectionHeader(
            name=name, paddr=paddr, vaddr=paddr,
            size=len(payload) if stored else payload,
            scnptr=start + len(contents) if stored else 0,
        ).pack()
        if stored:
            contents += payload
    prefix = FileHeader(magic=MIPSELMAGIC, nscns=len(sections)).pack() + AoutHeader(magic=aout_magic).pack()
    return prefix + bytes(table) + bytes(contents)


PROGRAM = bytes(range(1, 9))
VALUES = b"data"


def test_image_layout():
    image = coff_to_flat(coff_image([(".text", 0, PROGRAM), (".data", 8, VALUES), (".bss", 12, 16)]))
    assert len(image) == 28 + STACK_SIZE
    assert image[:12] == PROGRAM + VALUES
    assert image[12:] == bytes(len(image) - 12)


def test_sbss_not_copied():
    image = coff_to_flat(coff_image([(".sbss", 0, 8), (".text", 8, PROGRAM)]))
    assert image[:8] == PROGRAM
    assert len(image) == 16 + STACK_SIZE


def test_end_word_overwrites_long_image():
    block = b"\xff" * 2000
    image = coff_to_flat(coff_image([(".text", 0, block), (".data", 0, block)]))
    end = 2000 + STACK_SIZE
    assert len(image) == 4000
    assert image[end - 4:end] == bytes(4)
    assert image[:end - 4] == b"\xff" * (end - 4)
    assert image[end:] == b"\xff" * (4000 - end)


def test_log_output():
    log = io.StringIO()
    coff_to_flat(coff_image([(".text", 0, PROGRAM)]), log)
    lines = log.getvalue().splitlines()
    assert lines[0] == "Loading 1 sections:"
    assert lines[-1] == f"Adding stack of size: {STACK_SIZE}"


def test_bad_aout_magic():
    with pytest.raises(CoffFormatError, match="OMAGIC"):
        coff_to_flat(coff_image([], aout_magic=0))


def test_convert_file(tmp_path):
    source = tmp_path / "prog.coff"
    source.write_bytes(coff_image([(".text", 0, PROGRAM)]))
    convert_file(source, tmp_path / "prog.flat")
    assert (tmp_path / "prog.flat").read_bytes()[:8] == PROGRAM


def test_main(tmp_path, capsys):
    source = tmp_path / "prog.coff"
    source.write_bytes(coff_image([(".text", 0, PROGRAM)]))
    flat = tmp_path / "prog.flat"
    assert main([str(source), str(flat)]) == 0
    assert len(flat.read_bytes()) == 8 + STACK_SIZE
    assert main([str(source)]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_bad_file(tmp_path):
    source = tmp_path / "bad.coff"
    source.write_bytes(b"\x00" * 4)
    assert main([str(source), str(tmp_path / "out")]) == 1