"""
DCPU-16 Instruction Set Definition
==================================

This module defines the fixed tables of the DCPU-16: register names,
stack pseudo-operands, mnemonic tables and the addressing-mode codes that
the assembler packs into instruction words.

The DCPU-16 is word-addressed: every address and offset counts 16-bit
words, never bytes.

Instruction Formats
-------------------
Basic instructions carry two operands in a single word:

    bbbbbbaaaaaaoooo
    b = (word >> 10) & 0x3f, a = (word >> 4) & 0x3f, o = word & 0xf

Non-basic instructions carry a single operand and keep the low nibble
zero so a consumer can tell the two formats apart:

    aaaaaaoooooo0000

Operand Codes
-------------
| Code        | Meaning                                       | Extra word |
|-------------|-----------------------------------------------|------------|
| 0x00-0x07   | register (A, B, C, X, Y, Z, I, J)             | no         |
| 0x08-0x0f   | [register]                                    | no         |
| 0x10-0x17   | [next word + register]                        | yes        |
| 0x18-0x1a   | POP, PEEK, PUSH                               | no         |
| 0x1b-0x1d   | SP, PC, O                                     | no         |
| 0x1e        | [next word]                                   | yes        |
| 0x1f        | next word (literal)                           | yes        |
| 0x20-0x3f   | literal 0x00-0x1f embedded in the code        | no         |

Reference
---------
- DCPU-16 Specification v1.1: http://0x10c.com/doc/dcpu-16.txt
"""

from typing import Optional


# =============================================================================
# Register and Pseudo-Operand Tables
# =============================================================================
# Table order is significant: the index of a name is added to a base code
# to form its operand code.
# =============================================================================

REGISTERS: tuple[str, ...] = ("A", "B", "C", "X", "Y", "Z", "I", "J")

# Reserved stack/control registers; never legal in [address] form
SPECIAL_REGISTERS: tuple[str, ...] = ("SP", "PC", "O")

# Stack pseudo-operands share codes 0x1b-0x1d with SPECIAL_REGISTERS
PROGRAM_OPS: tuple[str, ...] = ("POP", "PEEK", "PUSH", "SP", "PC", "O")


# =============================================================================
# Mnemonic Tables
# =============================================================================

# Basic opcodes are 1-based: SET = 0x1 ... IFB = 0xf
BASIC_OPCODES: tuple[str, ...] = (
    "SET", "ADD", "SUB", "MUL", "DIV", "MOD", "SHL", "SHR", "AND",
    "BOR", "XOR", "IFE", "IFN", "IFG", "IFB",
)

# Non-basic opcodes are 1-based as well: JSR = 0x01
NON_BASIC_OPCODES: tuple[str, ...] = ("JSR",)


# =============================================================================
# Operand Code Constants
# =============================================================================

REGISTER_BASE = 0x00
REGISTER_ADDRESS_BASE = 0x08
REGISTER_OFFSET_BASE = 0x10
PROGRAM_OP_BASE = 0x18
SPECIAL_REGISTER_BASE = 0x1B
NEXT_WORD_ADDRESS = 0x1E
NEXT_WORD_LITERAL = 0x1F
SHORT_LITERAL_BASE = 0x20
SHORT_LITERAL_MAX = 0x1F

OPERAND_MASK = 0x3F
OPCODE_MASK = 0x0F
WORD_MASK = 0xFFFF

# Signed 16-bit range accepted for numeric literals
LITERAL_MIN = -0x8000
LITERAL_MAX = 0x7FFF


# =============================================================================
# Lookup Functions
# =============================================================================

def find_index(table: tuple[str, ...], name: str) -> Optional[int]:
    """
    Return the position of name in table, or None if absent.

    Lookups are case-sensitive; DCPU-16 source uses upper-case
    register and mnemonic names.
    """
    try:
        return table.index(name)
    except ValueError:
        return None


def get_basic_opcode(mnemonic: str) -> Optional[int]:
    """Return the 1-based basic opcode for mnemonic, or None."""
    index = find_index(BASIC_OPCODES, mnemonic)
    return None if index is None else index + 1


def get_non_basic_opcode(mnemonic: str) -> Optional[int]:
    """Return the 1-based non-basic opcode for mnemonic, or None."""
    index = find_index(NON_BASIC_OPCODES, mnemonic)
    return None if index is None else index + 1

