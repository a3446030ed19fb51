"""
DCPU-16 Assembler Toolkit
=========================

This package assembles source code for the DCPU-16, the fictional 16-bit
word-addressed CPU, into machine words ready for a virtual-CPU loader.

Main Components
---------------
- **assembler**: the DCPU-16 assembler (dcasm)
    Converts assembly source files (.dasm) into binary images (.bin)

- **cpu**: DCPU-16 definitions
    Register tables, mnemonic tables and operand codes

Quick Start
-----------
Assemble a program:
    >>> from dcpu16_asm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("hello.dasm")
    >>> asm.write_binary("hello.bin")

Or use the command-line tool:
    $ dcasm hello.dasm -o hello.bin

Reference Documentation
-----------------------
- DCPU-16 Specification v1.1: http://0x10c.com/doc/dcpu-16.txt
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from dcpu16_asm.assembler import Assembler, assemble, assemble_file
from dcpu16_asm.errors import (
    Dcpu16Error,
    AssemblerError,
    AssemblySyntaxError,
    UnknownMnemonicError,
    InvalidOperandError,
    UnresolvedOperandError,
    UnknownLabelError,
    SourceLocation,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    # Exception hierarchy
    "Dcpu16Error",
    "AssemblerError",
    "AssemblySyntaxError",
    "UnknownMnemonicError",
    "InvalidOperandError",
    "UnresolvedOperandError",
    "UnknownLabelError",
    "SourceLocation",
]
