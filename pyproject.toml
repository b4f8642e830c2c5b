[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nachoskit"
version = "0.1.0"
description = "Little-endian MIPS COFF and NOFF object tools, a MIPS user-program interpreter and disassembler, and small stack data structures"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "mips",
    "coff",
    "noff",
    "interpreter",
    "disassembler",
    "emulator",
    "object-file",
    "stack",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Software Development :: Disassemblers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nachos-coff2noff = "nachoskit.coff2noff:main"
nachos-coff2flat = "nachoskit.coff2flat:main"
nachos-run = "nachoskit.loader:main"
nachos-disasm = "nachoskit.disasmtool:main"
nachos-stack-demo = "nachoskit.arraystack:main"
nachos-templatestack-demo = "nachoskit.templatestack:main"
nachos-inheritstack-demo = "nachoskit.inheritstack:main"

[tool.hatch.build.targets.wheel]
packages = ["nachoskit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
