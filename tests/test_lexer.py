# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the DCPU-16 line tokenizer.
#
# Test coverage includes:
#   - Comment stripping and blank lines
#   - Label definitions, mnemonics and operands
#   - Bracketed operands
#   - Source locations and operand columns
#   - Syntax errors
# =============================================================================

import pytest
from dcpu16_asm.assembler.lexer import Lexer, Statement, strip_comment, tokenize_line
from dcpu16_asm.errors import AssemblySyntaxError, SourceLocation


# =============================================================================
# Blank and Comment Lines
# =============================================================================

class TestSkippedLines:
    """Lines with nothing to assemble produce no statement."""

    def test_empty_line(self):
        assert tokenize_line("") is None

    def test_whitespace_only(self):
        assert tokenize_line("   \t  ") is None

    def test_comment_only(self):
        assert tokenize_line("; just a comment") is None

    def test_indented_comment(self):
        assert tokenize_line("    ; indented comment") is None

    def test_strip_comment(self):
        assert strip_comment("SET A, 1 ; set A") == "SET A, 1 "
        assert strip_comment("SET A, 1") == "SET A, 1"


# =============================================================================
# Statement Recognition
# =============================================================================

class TestStatements:
    """Test splitting lines into label, mnemonic and operands."""

    def test_two_operands(self):
        stmt = tokenize_line("SET A, 0x30")
        assert stmt.mnemonic == "SET"
        assert stmt.operand_a == "A"
        assert stmt.operand_b == "0x30"
        assert stmt.label is None

    def test_no_space_after_comma(self):
        stmt = tokenize_line("SET A,1")
        assert stmt.operand_a == "A"
        assert stmt.operand_b == "1"

    def test_single_operand(self):
        stmt = tokenize_line("JSR foo")
        assert stmt.mnemonic == "JSR"
        assert stmt.operand_a == "foo"
        assert stmt.operand_b is None

    def test_label_definition(self):
        stmt = tokenize_line(":loop SET A, 1")
        assert stmt.label == "loop"
        assert stmt.mnemonic == "SET"

    def test_label_with_digits_and_underscore(self):
        stmt = tokenize_line(":loop_2 SET A, 1")
        assert stmt.label == "loop_2"

    def test_leading_whitespace(self):
        stmt = tokenize_line("    SET X, [B]")
        assert stmt.mnemonic == "SET"
        assert stmt.operand_b == "[B]"

    def test_bracketed_first_operand(self):
        stmt = tokenize_line("SET [0x1000+I], 5")
        assert stmt.operand_a == "[0x1000+I]"
        assert stmt.operand_b == "5"

    def test_bracketed_operand_with_spaces(self):
        stmt = tokenize_line("SET [0x1000 + I], 5")
        assert stmt.operand_a == "[0x1000 + I]"

    def test_trailing_comment(self):
        stmt = tokenize_line("SET A, 1   ; load one")
        assert stmt.operand_b == "1"

    def test_trailing_whitespace(self):
        stmt = tokenize_line("JSR foo   ")
        assert stmt.operand_a == "foo"
        assert stmt.operand_b is None

    def test_source_is_kept(self):
        line = ":loop SET A, 1 ; comment"
        assert tokenize_line(line).source == line


# =============================================================================
# Syntax Errors
# =============================================================================

class TestSyntaxErrors:
    """Lines that do not match the statement grammar are fatal."""

    def test_label_without_instruction(self):
        with pytest.raises(AssemblySyntaxError):
            tokenize_line(":loop")

    def test_mnemonic_without_operand(self):
        with pytest.raises(AssemblySyntaxError):
            tokenize_line("SET")

    def test_single_character_label(self):
        """Label names need at least two characters."""
        with pytest.raises(AssemblySyntaxError):
            tokenize_line(":x SET A, 1")

    def test_non_ascii_label(self):
        with pytest.raises(AssemblySyntaxError):
            tokenize_line(":loop\u00e9 SET A, 1")

    def test_missing_comma(self):
        with pytest.raises(AssemblySyntaxError):
            tokenize_line("SET A 1")

    def test_error_names_line(self):
        with pytest.raises(AssemblySyntaxError) as exc_info:
            tokenize_line("1234 A, B")
        assert "1234 A, B" in str(exc_info.value)

    def test_error_location(self):
        location = SourceLocation("prog.dasm", 7, 1)
        with pytest.raises(AssemblySyntaxError) as exc_info:
            tokenize_line("SET", location)
        assert exc_info.value.location == location
        assert "prog.dasm:7:1" in str(exc_info.value)


# =============================================================================
# Lexer Class
# =============================================================================

class TestLexer:
    """Test multi-line tokenization."""

    def test_skips_blank_and_comment_lines(self):
        source = "; header\n\nSET A, 1\n   \nJSR foo ; call\n"
        statements = list(Lexer(source).tokenize())
        assert [s.mnemonic for s in statements] == ["SET", "JSR"]

    def test_line_numbers(self):
        source = "; header\nSET A, 1\n\nSET B, 2"
        statements = list(Lexer(source, "prog.dasm").tokenize())
        assert statements[0].location == SourceLocation("prog.dasm", 2, 1)
        assert statements[1].location == SourceLocation("prog.dasm", 4, 1)

    def test_first_line_number(self):
        statements = list(Lexer("SET A, 1", line_number=10).tokenize())
        assert statements[0].location.line == 10

    def test_operand_columns(self):
        stmt = list(Lexer("SET A, 0x30", "t.dasm").tokenize())[0]
        assert stmt.operand_location(0) == SourceLocation("t.dasm", 1, 5)
        assert stmt.operand_location(1) == SourceLocation("t.dasm", 1, 8)

    def test_error_reports_line(self):
        source = "SET A, 1\nSET"
        with pytest.raises(AssemblySyntaxError) as exc_info:
            list(Lexer(source).tokenize())
        assert exc_info.value.location.line == 2

    def test_statement_is_dataclass(self):
        stmt = tokenize_line("SET A, B")
        assert isinstance(stmt, Statement)
