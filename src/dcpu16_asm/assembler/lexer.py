"""
DCPU-16 Assembly Language Lexer
===============================

This module splits DCPU-16 assembly source into statements, one per
non-empty line. Each statement carries an optional label definition, a
mnemonic and one or two operand tokens; classifying the operands is left
to the operand resolver.

Statement Grammar
-----------------
    [ ':' LABEL ] WS MNEMONIC WS OPERAND1 [ ',' WS OPERAND2 ]

- LABEL: a letter followed by one or more word characters ("loop", "L1")
- MNEMONIC: letters only ("SET", "JSR")
- OPERAND1: a bracketed token ("[0x1000+I]") or a run of word characters
  and '+' ("A", "0x30", "4+J")
- OPERAND2: the remainder of the line after the comma

Comments start at the first ';' and run to the end of the line. Lines that
are empty once the comment is removed produce no statement.

Example
-------
>>> from dcpu16_asm.assembler.lexer import Lexer
>>> lexer = Lexer(":loop SET A, 0x30  ; load", "example.dasm")
>>> for stmt in lexer.tokenize():
...     print(stmt.label, stmt.mnemonic, stmt.operand_a, stmt.operand_b)
loop SET A 0x30
"""

from dataclasses import dataclass
from typing import Iterator, Optional
import re

from dcpu16_asm.errors import AssemblySyntaxError, SourceLocation


COMMENT_CHAR = ";"

# Labels need at least two characters: one letter, then one or more \w
IDENT_PATTERN = r"[A-Za-z]\w+"

STATEMENT_PATTERN = re.compile(
    r"^\s*(?::(?P<label>" + IDENT_PATTERN + r")\s+)?"
    r"(?P<mnemonic>[A-Za-z]+)\s+"
    r"(?P<operand_a>\[[^\]]*\]|[\w+]+)"
    r"\s*(?:,\s*(?P<operand_b>\S.*?))?\s*$",
    re.ASCII,
)


# =============================================================================
# Statement
# =============================================================================

@dataclass(frozen=True)
class Statement:
    """
    One tokenized source line.

    Attributes:
        mnemonic: Instruction name as written ("SET", "JSR")
        operand_a: First operand token
        operand_b: Second operand token, or None
        label: Label defined on this line, or None
        location: Source position of the line
        source: Original line text (comment included) for error messages
        operand_columns: 1-indexed columns of operand_a and operand_b
    """
    mnemonic: str
    operand_a: str
    operand_b: Optional[str] = None
    label: Optional[str] = None
    location: Optional[SourceLocation] = None
    source: Optional[str] = None
    operand_columns: tuple[int, int] = (1, 1)

    def operand_location(self, index: int = 0) -> Optional[SourceLocation]:
        """Location of operand 0 (a) or 1 (b), for pointing errors at it."""
        if self.location is None:
            return None
        return SourceLocation(
            self.location.filename, self.location.line, self.operand_columns[index]
        )


def strip_comment(line: str) -> str:
    """Remove everything from the first ';' onward."""
    index = line.find(COMMENT_CHAR)
    if index >= 0:
        return line[:index]
    return line


def tokenize_line(
    line: str,
    location: Optional[SourceLocation] = None,
) -> Optional[Statement]:
    """
    Split a single source line into a Statement.

    Args:
        line: Raw source text (without the trailing newline)
        location: Where the line came from, for error reporting

    Returns:
        The statement, or None for blank and comment-only lines

    Raises:
        AssemblySyntaxError: If the line does not match the statement grammar
    """
    text = strip_comment(line)
    if not text.strip():
        return None

    match = STATEMENT_PATTERN.match(text)
    if match is None:
        raise AssemblySyntaxError(
            f"invalid line: {line.strip()}",
            location=location,
            source_line=line,
        )

    # match.start() is -1 for an absent operand_b; clamp to column 1
    columns = (
        match.start("operand_a") + 1,
        max(match.start("operand_b") + 1, 1),
    )

    return Statement(
        mnemonic=match.group("mnemonic"),
        operand_a=match.group("operand_a"),
        operand_b=match.group("operand_b"),
        label=match.group("label"),
        location=location,
        source=line,
        operand_columns=columns,
    )


# =============================================================================
# Lexer Class
# =============================================================================

class Lexer:
    """
    Line-oriented tokenizer for DCPU-16 assembly source.

    Usage:
        lexer = Lexer(source, "program.dasm")
        for stmt in lexer.tokenize():
            ...
    """

    def __init__(self, source: str, filename: str = "<input>", line_number: int = 1):
        """
        Initialize the lexer.

        Args:
            source: Complete source text
            filename: Name used in error locations
            line_number: Number of the first line (1-indexed)
        """
        self._source = source
        self._filename = filename
        self._first_line = line_number

    def tokenize(self) -> Iterator[Statement]:
        """
        Yield one Statement per non-empty line, in source order.

        Raises:
            AssemblySyntaxError: On the first line that fails to parse
        """
        for offset, line in enumerate(self._source.splitlines()):
            location = SourceLocation(self._filename, self._first_line + offset, 1)
            stmt = tokenize_line(line, location)
            if stmt is not None:
                yield stmt
