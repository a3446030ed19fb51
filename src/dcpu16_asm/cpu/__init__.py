"""
DCPU-16 CPU Package
===================

Architecture definitions shared by the assembler stages: register and
mnemonic tables, operand-code constants and lookup helpers.

Usage:
    from dcpu16_asm.cpu import (
        REGISTERS,
        BASIC_OPCODES,
        get_basic_opcode,
    )
"""

from dcpu16_asm.cpu.dcpu16 import (
    # Register and pseudo-operand tables
    REGISTERS,
    SPECIAL_REGISTERS,
    PROGRAM_OPS,
    # Mnemonic tables
    BASIC_OPCODES,
    NON_BASIC_OPCODES,
    # Operand codes
    REGISTER_BASE,
    REGISTER_ADDRESS_BASE,
    REGISTER_OFFSET_BASE,
    PROGRAM_OP_BASE,
    SPECIAL_REGISTER_BASE,
    NEXT_WORD_ADDRESS,
    NEXT_WORD_LITERAL,
    SHORT_LITERAL_BASE,
    SHORT_LITERAL_MAX,
    OPERAND_MASK,
    OPCODE_MASK,
    WORD_MASK,
    LITERAL_MIN,
    LITERAL_MAX,
    # Lookup functions
    find_index,
    get_basic_opcode,
    get_non_basic_opcode,
)

__all__ = [
    "REGISTERS",
    "SPECIAL_REGISTERS",
    "PROGRAM_OPS",
    "BASIC_OPCODES",
    "NON_BASIC_OPCODES",
    "REGISTER_BASE",
    "REGISTER_ADDRESS_BASE",
    "REGISTER_OFFSET_BASE",
    "PROGRAM_OP_BASE",
    "SPECIAL_REGISTER_BASE",
    "NEXT_WORD_ADDRESS",
    "NEXT_WORD_LITERAL",
    "SHORT_LITERAL_BASE",
    "SHORT_LITERAL_MAX",
    "OPERAND_MASK",
    "OPCODE_MASK",
    "WORD_MASK",
    "LITERAL_MIN",
    "LITERAL_MAX",
    "find_index",
    "get_basic_opcode",
    "get_non_basic_opcode",
]
