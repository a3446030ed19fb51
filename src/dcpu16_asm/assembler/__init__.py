"""
DCPU-16 Assembler
=================

This package converts DCPU-16 assembly source into 16-bit machine words.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **Lexer**: Splits source lines into statements
- **OperandResolver**: Classifies operand tokens into addressing codes
- **InstructionEncoder**: Packs opcodes and operands into instruction words
- **AssemblySession**: Word buffer, label table and backfill engine

Assembly Process
----------------
Assembly is a single forward scan followed by a backfill pass:

1. **Scan**:
   - Tokenize each line into label, mnemonic and operands
   - Bind labels to the offset of the following instruction
   - Encode instructions; label references emit placeholders

2. **Backfill**:
   - Patch every placeholder with its label's final address
   - Fail with UnknownLabelError if a label was never defined

3. **Emit**:
   - Linearize the word buffer and append the zero-word padding

Example Usage
-------------
>>> from dcpu16_asm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble("SET A, 0x30")
[31745, 48, 0, 0]
"""

from dcpu16_asm.assembler.assembler import Assembler, assemble, assemble_file
from dcpu16_asm.assembler.lexer import Lexer, Statement, tokenize_line
from dcpu16_asm.assembler.operands import OperandResolver, OperandValue
from dcpu16_asm.assembler.encoder import (
    InstructionEncoder,
    DecodedWord,
    decode_word,
    encode_basic,
    encode_non_basic,
)
from dcpu16_asm.assembler.session import AssemblySession, Backfill, Unresolved

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Lexer
    "Lexer",
    "Statement",
    "tokenize_line",
    # Operands
    "OperandResolver",
    "OperandValue",
    # Encoder
    "InstructionEncoder",
    "DecodedWord",
    "decode_word",
    "encode_basic",
    "encode_non_basic",
    # Session
    "AssemblySession",
    "Backfill",
    "Unresolved",
]
