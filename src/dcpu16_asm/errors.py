"""
DCPU-16 Assembler Error Hierarchy
=================================

This module defines the exception hierarchy for the assembler. All
exceptions inherit from Dcpu16Error, allowing callers to catch every
assembler error with a single except clause.

Exception Hierarchy
-------------------
Dcpu16Error (base)
└── AssemblerError (assembly-related)
    ├── AssemblySyntaxError - line does not match the statement grammar
    ├── UnknownMnemonicError - opcode not in the basic or non-basic table
    ├── InvalidOperandError - illegal addressing form or bad literal
    ├── UnresolvedOperandError - operand matches no addressing rule
    └── UnknownLabelError - label referenced but never defined

Every error is fatal: assembly either succeeds completely or produces
no output at all.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Dcpu16Error(Exception):
    """
    Base exception for all DCPU-16 assembler errors.

        try:
            assembler.assemble_file("program.dasm")
        except Dcpu16Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(Dcpu16Error):
    """
    Base exception for all assembly errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            loop.dasm:3:1: error: unknown label 'lopo'
                SET PC, lopo
                ^
            hint: did you mean 'loop'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    A source line does not match the statement grammar.

    Raised by the line tokenizer when a non-empty line cannot be split
    into an optional label, a mnemonic and at least one operand.

    Examples:
        - ":loop" on its own (no mnemonic)
        - "SET" (no operand)
        - ":x SET A, 1" (label names need at least two characters)
    """
    pass


class UnknownMnemonicError(AssemblerError):
    """
    The opcode is in neither the basic nor the non-basic mnemonic table.
    """

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        super().__init__(
            f"unknown mnemonic '{mnemonic}'",
            location=location,
            source_line=source_line,
        )


class InvalidOperandError(AssemblerError):
    """
    An operand was recognised but cannot be encoded.

    Raised when:
    - A reserved register (SP, PC, O) is used in [address] form
    - A numeric literal does not fit in a signed 16-bit word
    """

    def __init__(
        self,
        operand: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operand = operand
        self.reason = reason
        super().__init__(
            f"invalid operand '{operand}': {reason}",
            location=location,
            source_line=source_line,
        )


class UnresolvedOperandError(AssemblerError):
    """
    An operand token matches none of the addressing-mode rules.
    """

    def __init__(
        self,
        operand: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operand = operand
        super().__init__(
            f"cannot resolve operand '{operand}'",
            location=location,
            source_line=source_line,
        )


class UnknownLabelError(AssemblerError):
    """
    A label reference has no definition anywhere in the source.

    Raised during backfill, after the whole input has been scanned.
    Similarly-named labels are offered as a hint to catch typos.
    """

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_symbols: Optional[list[str]] = None,
    ):
        self.label = label
        self.similar_symbols = similar_symbols or []

        hint = None
        if self.similar_symbols:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_symbols[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown label '{label}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )
