# =============================================================================
# test_encoder.py - Instruction Encoder Unit Tests
# =============================================================================
# Tests for packing opcodes and operands into DCPU-16 instruction words.
#
# Test coverage includes:
#   - Basic and non-basic word formats
#   - Extra word ordering
#   - Decoding instruction words back into fields
#   - Unknown mnemonics and malformed non-basic instructions
# =============================================================================

import pytest
from dcpu16_asm.assembler.encoder import (
    InstructionEncoder,
    decode_word,
    encode_basic,
    encode_non_basic,
)
from dcpu16_asm.assembler.lexer import tokenize_line
from dcpu16_asm.assembler.operands import OperandValue
from dcpu16_asm.assembler.session import AssemblySession, Unresolved
from dcpu16_asm.cpu import BASIC_OPCODES, REGISTERS
from dcpu16_asm.errors import AssemblySyntaxError, UnknownMnemonicError


def encode(line: str, session: AssemblySession | None = None) -> list:
    """Helper to encode a single source line."""
    encoder = InstructionEncoder(session or AssemblySession())
    return encoder.encode(tokenize_line(line))


# =============================================================================
# Word Packing
# =============================================================================

class TestWordFormats:
    """Test the raw basic and non-basic formats."""

    def test_basic_word(self):
        words = encode_basic(1, OperandValue(0x00), OperandValue(0x1F, 0x30))
        assert words == [0x7C01, 0x0030]

    def test_basic_word_without_b(self):
        assert encode_basic(1, OperandValue(0x03)) == [0x0031]

    def test_extra_words_in_operand_order(self):
        words = encode_basic(1, OperandValue(0x1E, 0x1000), OperandValue(0x1F, 0x2000))
        assert words[1:] == [0x1000, 0x2000]

    def test_non_basic_word(self):
        words = encode_non_basic(1, OperandValue(0x1F, 0x1234))
        assert words == [0x7C10, 0x1234]

    def test_non_basic_low_nibble_is_zero(self):
        for code in range(0x40):
            assert encode_non_basic(1, OperandValue(code))[0] & 0xF == 0


# =============================================================================
# Statement Encoding
# =============================================================================

class TestEncodeStatements:
    """Test encoding complete statements."""

    def test_set_register_long_literal(self):
        assert encode("SET A, 0x30") == [0x7C01, 0x0030]

    def test_set_register_short_literal(self):
        assert encode("SET A, 1") == [0x8401]

    def test_register_to_register(self):
        # b=X (0x03), a=I (0x06), ADD=0x2
        assert encode("ADD I, X") == [(0x03 << 10) | (0x06 << 4) | 0x2]

    def test_offset_register_with_short_literal(self):
        words = encode("SET [0x1000+I], 5")
        assert words == [0x9561, 0x1000]
        assert decode_word(words[0]).a == 0x16
        assert decode_word(words[0]).b == 0x25

    def test_two_extra_words(self):
        assert encode("SET [0x1000+I], 0x2000") == [0x7D61, 0x1000, 0x2000]

    def test_pop_into_pc(self):
        assert encode("SET PC, POP") == [0x61C1]

    def test_jsr_label(self):
        session = AssemblySession()
        words = encode("JSR sub", session)
        assert words == [0x7C10, Unresolved("sub")]
        assert session.backfills[0].anchor == 0

    def test_jsr_register(self):
        assert encode("JSR A") == [0x0010]

    def test_unknown_mnemonic(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            encode("FOO A, 1")
        assert exc_info.value.mnemonic == "FOO"

    def test_unknown_mnemonic_checked_before_operands(self):
        session = AssemblySession()
        with pytest.raises(UnknownMnemonicError):
            encode("NOP label", session)
        assert session.backfills == []

    def test_mnemonics_are_case_sensitive(self):
        with pytest.raises(UnknownMnemonicError):
            encode("set A, 1")

    def test_non_basic_takes_one_operand(self):
        with pytest.raises(AssemblySyntaxError):
            encode("JSR A, B")


# =============================================================================
# Decoding
# =============================================================================

class TestDecode:
    """Instruction words split back into their fields."""

    def test_decode_basic(self):
        decoded = decode_word(0x7C01)
        assert decoded.basic
        assert decoded.mnemonic == "SET"
        assert (decoded.opcode, decoded.a, decoded.b) == (1, 0x00, 0x1F)

    def test_decode_non_basic(self):
        decoded = decode_word(0x7C10)
        assert not decoded.basic
        assert decoded.mnemonic == "JSR"
        assert decoded.a == 0x1F

    def test_decode_unassigned_non_basic(self):
        assert decode_word(0x0020).mnemonic is None

    @pytest.mark.parametrize("mnemonic", BASIC_OPCODES)
    @pytest.mark.parametrize("register", ["A", "Z", "J"])
    def test_literal_round_trip(self, mnemonic, register):
        """Encoding a literal-only line and decoding it recovers the operands."""
        words = encode(f"{mnemonic} {register}, 0x1234")
        decoded = decode_word(words[0])
        assert decoded.mnemonic == mnemonic
        assert REGISTERS[decoded.a] == register
        assert decoded.b == 0x1F
        assert words[1] == 0x1234

    @pytest.mark.parametrize("value", [0, 7, 31])
    def test_short_literal_round_trip(self, value):
        words = encode(f"SET B, {value}")
        assert len(words) == 1
        assert decode_word(words[0]).b - 0x20 == value
