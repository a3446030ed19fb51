"""
DCPU-16 Operand Resolver
========================

This module classifies a single operand token into a 6-bit addressing code
and, where the addressing mode needs one, an extra word that follows the
instruction.

Classification Order
--------------------
Token classes overlap ("SP" is both a reserved register and a stack
pseudo-operand, "x10" is both a hex literal and an identifier), so the
rules are tried in a fixed order and the first match wins:

1. Basic mnemonic name       SET             0x18 + table index
2. Bracketed form            [...]           re-resolve the inside as an address
3. General register          A / [A]         index / 0x08 + index
4. Reserved register         SP PC O         0x1b + index ([SP] is illegal)
5. Stack pseudo-operand      POP PEEK PUSH   0x18 + index
6. Numeric literal           0x30 / [0x30]   0x20 + v, 0x1f or 0x1e + word
7. Literal plus register     [0x1000+I]      0x10 + index + word
8. Label reference           loop            0x1f + placeholder, backfilled later

Anything left over raises UnresolvedOperandError.

Example
-------
>>> from dcpu16_asm.assembler.session import AssemblySession
>>> resolver = OperandResolver(AssemblySession())
>>> resolver.resolve("[0x1000+I]")
OperandValue(code=0x16, extra=0x1000)
"""

from dataclasses import dataclass
from typing import Callable, Optional
import re

from dcpu16_asm.assembler.session import AssemblySession, Word
from dcpu16_asm.cpu import (
    BASIC_OPCODES,
    LITERAL_MAX,
    LITERAL_MIN,
    NEXT_WORD_ADDRESS,
    NEXT_WORD_LITERAL,
    PROGRAM_OP_BASE,
    PROGRAM_OPS,
    REGISTER_ADDRESS_BASE,
    REGISTER_BASE,
    REGISTER_OFFSET_BASE,
    REGISTERS,
    SHORT_LITERAL_BASE,
    SHORT_LITERAL_MAX,
    SPECIAL_REGISTER_BASE,
    SPECIAL_REGISTERS,
    WORD_MASK,
    find_index,
)
from dcpu16_asm.errors import (
    InvalidOperandError,
    SourceLocation,
    UnresolvedOperandError,
)


# =============================================================================
# Token Patterns
# =============================================================================

LITERAL_GROUP = r"0?x[0-9a-fA-F]+|[0-9]+"

ADDRESS_PATTERN = re.compile(r"^\[\s*([\w+\s]+?)\s*\]$", re.ASCII)
LITERAL_PATTERN = re.compile(r"^(?:0?x([0-9a-fA-F]+)|([0-9]+))$")
IDENT_PATTERN = re.compile(r"^[A-Za-z]\w+$", re.ASCII)
OFFSET_REGISTER_PATTERN = re.compile(r"^(" + LITERAL_GROUP + r")\s*\+\s*(\w+)$", re.ASCII)


# =============================================================================
# Operand Value
# =============================================================================

@dataclass(frozen=True)
class OperandValue:
    """
    An encoded operand.

    Attributes:
        code: 6-bit addressing code (0x00-0x3f)
        extra: Word to append after the instruction word, or None
    """
    code: int
    extra: Optional[Word] = None

    @property
    def has_extra_word(self) -> bool:
        return self.extra is not None

    def __repr__(self) -> str:
        if self.extra is None:
            return f"OperandValue(code=0x{self.code:02x})"
        extra = f"0x{self.extra:04x}" if isinstance(self.extra, int) else repr(self.extra)
        return f"OperandValue(code=0x{self.code:02x}, extra={extra})"


def parse_literal(token: str) -> Optional[int]:
    """
    Parse a decimal or hex ("0x1F" / "x1F") literal.

    Returns:
        The value, or None if token is not a literal

    Raises:
        InvalidOperandError: If the value does not fit a signed 16-bit word
    """
    match = LITERAL_PATTERN.match(token)
    if match is None:
        return None

    if match.group(1) is not None:
        value = int(match.group(1), 16)
    else:
        value = int(match.group(2), 10)

    if not LITERAL_MIN <= value <= LITERAL_MAX:
        raise InvalidOperandError(token, "literal does not fit in a signed 16-bit word")
    return value


def parse_address(token: str) -> Optional[str]:
    """Return the inside of a bracketed token, or None if not bracketed."""
    match = ADDRESS_PATTERN.match(token)
    if match is None:
        return None
    return match.group(1)


# =============================================================================
# Operand Resolver
# =============================================================================

class OperandResolver:
    """
    Classifies operand tokens for one statement.

    Label references are recorded as backfill requests on the session,
    anchored at the session's current offset, so a resolver must be used
    before the statement's instruction word is appended.

    Attributes:
        session: The assembly session receiving backfill requests
    """

    def __init__(
        self,
        session: AssemblySession,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.session = session
        self._location = location
        self._operand_location = location
        self._source_line = source_line

        # Rules 3-8, in priority order
        self._classifiers: tuple[Callable[[str, bool], Optional[OperandValue]], ...] = (
            self._match_register,
            self._match_special_register,
            self._match_program_op,
            self._match_literal,
            self._match_offset_register,
            self._match_label,
        )

    def resolve(self, token: str, location: Optional[SourceLocation] = None) -> OperandValue:
        """
        Encode one operand token.

        Args:
            token: Operand text as written
            location: Position of the operand (defaults to the line)

        Raises:
            InvalidOperandError: For illegal address forms or bad literals
            UnresolvedOperandError: If no rule matches
        """
        location = location or self._location
        self._operand_location = location
        token = token.strip()
        try:
            return self._resolve(token, location)
        except InvalidOperandError as e:
            if e.location is not None:
                raise
            raise InvalidOperandError(
                e.operand, e.reason, location=location, source_line=self._source_line
            ) from None

    def _resolve(self, token: str, location: Optional[SourceLocation]) -> OperandValue:
        alias = find_index(BASIC_OPCODES, token)
        if alias is not None:
            return OperandValue(PROGRAM_OP_BASE + alias)

        is_address = False
        inner = parse_address(token)
        if inner is not None:
            token = inner
            is_address = True

        for classifier in self._classifiers:
            result = classifier(token, is_address)
            if result is not None:
                return result

        raise UnresolvedOperandError(
            f"[{token}]" if is_address else token,
            location=location,
            source_line=self._source_line,
        )

    # =========================================================================
    # Classifiers
    # =========================================================================
    # Each returns None when the token is not of its class.
    # =========================================================================

    def _match_register(self, token: str, is_address: bool) -> Optional[OperandValue]:
        index = find_index(REGISTERS, token)
        if index is None:
            return None
        base = REGISTER_ADDRESS_BASE if is_address else REGISTER_BASE
        return OperandValue(base + index)

    def _match_special_register(self, token: str, is_address: bool) -> Optional[OperandValue]:
        index = find_index(SPECIAL_REGISTERS, token)
        if index is None:
            return None
        if is_address:
            raise InvalidOperandError(f"[{token}]", f"{token} cannot be used as an address")
        return OperandValue(SPECIAL_REGISTER_BASE + index)

    def _match_program_op(self, token: str, is_address: bool) -> Optional[OperandValue]:
        index = find_index(PROGRAM_OPS, token)
        if index is None:
            return None
        return OperandValue(PROGRAM_OP_BASE + index)

    def _match_literal(self, token: str, is_address: bool) -> Optional[OperandValue]:
        value = parse_literal(token)
        if value is None:
            return None
        if not is_address and 0 <= value <= SHORT_LITERAL_MAX:
            return OperandValue(SHORT_LITERAL_BASE + value)
        code = NEXT_WORD_ADDRESS if is_address else NEXT_WORD_LITERAL
        return OperandValue(code, value & WORD_MASK)

    def _match_offset_register(self, token: str, is_address: bool) -> Optional[OperandValue]:
        match = OFFSET_REGISTER_PATTERN.match(token)
        if match is None:
            return None
        value = parse_literal(match.group(1))
        index = find_index(REGISTERS, match.group(2))
        if index is None:
            return None
        return OperandValue(REGISTER_OFFSET_BASE + index, value & WORD_MASK)

    def _match_label(self, token: str, is_address: bool) -> Optional[OperandValue]:
        if IDENT_PATTERN.match(token) is None:
            return None
        placeholder = self.session.request_backfill(
            token, location=self._operand_location, source_line=self._source_line
        )
        return OperandValue(NEXT_WORD_LITERAL, placeholder)
