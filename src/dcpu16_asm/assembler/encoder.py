"""
DCPU-16 Instruction Encoder
===========================

Packs an opcode and its resolved operands into machine words.

Word Formats
------------
Basic (two operands):

    word = (b << 10) | (a << 4) | opcode        opcode in 0x1-0xf

Non-basic (one operand, low nibble zero):

    word = (a << 10) | (opcode << 4)

The instruction word is followed by operand a's extra word, if any, and
then operand b's extra word, if any, so an instruction occupies one to
three words.

Example
-------
SET A, 0x30 encodes as b=0x1f (next word), a=0x00 (A), opcode=0x1:

    0x7C01 0x0030
"""

from dataclasses import dataclass
from typing import Optional

from dcpu16_asm.assembler.lexer import Statement
from dcpu16_asm.assembler.operands import OperandResolver, OperandValue
from dcpu16_asm.assembler.session import AssemblySession, Word
from dcpu16_asm.cpu import (
    BASIC_OPCODES,
    NON_BASIC_OPCODES,
    OPCODE_MASK,
    OPERAND_MASK,
    get_basic_opcode,
    get_non_basic_opcode,
)
from dcpu16_asm.errors import AssemblySyntaxError, UnknownMnemonicError


# =============================================================================
# Word Packing
# =============================================================================

def encode_basic(opcode: int, a: OperandValue, b: Optional[OperandValue] = None) -> list[Word]:
    """
    Encode a basic instruction.

    Args:
        opcode: 1-based basic opcode
        a: First operand
        b: Second operand; encoded as code 0 when absent

    Returns:
        Instruction word followed by any extra words
    """
    b_code = b.code if b is not None else 0
    words: list[Word] = [(b_code << 10) | (a.code << 4) | opcode]
    if a.has_extra_word:
        words.append(a.extra)
    if b is not None and b.has_extra_word:
        words.append(b.extra)
    return words


def encode_non_basic(opcode: int, a: OperandValue) -> list[Word]:
    """Encode a non-basic instruction and its optional extra word."""
    words: list[Word] = [(a.code << 10) | (opcode << 4)]
    if a.has_extra_word:
        words.append(a.extra)
    return words


@dataclass(frozen=True)
class DecodedWord:
    """
    Fields of an instruction word.

    For non-basic words, opcode is the non-basic opcode, a is its single
    operand and b is always 0.
    """
    basic: bool
    opcode: int
    a: int
    b: int

    @property
    def mnemonic(self) -> Optional[str]:
        """Mnemonic for opcode, or None if the opcode is unassigned."""
        table = BASIC_OPCODES if self.basic else NON_BASIC_OPCODES
        if 1 <= self.opcode <= len(table):
            return table[self.opcode - 1]
        return None


def decode_word(word: int) -> DecodedWord:
    """Split an instruction word into its format, opcode and operand codes."""
    opcode = word & OPCODE_MASK
    if opcode != 0:
        return DecodedWord(
            basic=True,
            opcode=opcode,
            a=(word >> 4) & OPERAND_MASK,
            b=(word >> 10) & OPERAND_MASK,
        )
    return DecodedWord(
        basic=False,
        opcode=(word >> 4) & OPERAND_MASK,
        a=(word >> 10) & OPERAND_MASK,
        b=0,
    )


# =============================================================================
# Instruction Encoder
# =============================================================================

class InstructionEncoder:
    """
    Encodes tokenized statements against an assembly session.

    Operands are resolved before the instruction is appended, so any label
    reference is anchored at the offset of this statement's instruction
    word. The caller appends the returned words to the session.
    """

    def __init__(self, session: AssemblySession):
        self.session = session

    def encode(self, stmt: Statement) -> list[Word]:
        """
        Encode one statement.

        Raises:
            UnknownMnemonicError: If the mnemonic is in neither opcode table
            AssemblySyntaxError: If a non-basic instruction has two operands
            InvalidOperandError: From operand resolution
            UnresolvedOperandError: From operand resolution
        """
        resolver = OperandResolver(self.session, stmt.location, stmt.source)

        opcode = get_basic_opcode(stmt.mnemonic)
        if opcode is not None:
            a = resolver.resolve(stmt.operand_a, stmt.operand_location(0))
            b = None
            if stmt.operand_b:
                b = resolver.resolve(stmt.operand_b, stmt.operand_location(1))
            return encode_basic(opcode, a, b)

        opcode = get_non_basic_opcode(stmt.mnemonic)
        if opcode is None:
            raise UnknownMnemonicError(
                stmt.mnemonic, location=stmt.location, source_line=stmt.source
            )

        if stmt.operand_b:
            raise AssemblySyntaxError(
                f"{stmt.mnemonic} takes a single operand",
                location=stmt.operand_location(1),
                source_line=stmt.source,
            )
        a = resolver.resolve(stmt.operand_a, stmt.operand_location(0))
        return encode_non_basic(opcode, a)
