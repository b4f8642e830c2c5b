"""Little-endian MIPS object-file tools, interpreter and disassembler, with small stack and list structures."""

__version__ = "0.1.0"