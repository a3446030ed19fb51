"""
DCPU-16 Assembly Session
========================

This module holds the per-invocation state of one assembly run: the word
buffer, the label table and the list of pending backfill requests. A fresh
AssemblySession is built for every call to Assembler.assemble() and passed
explicitly to each stage, so no state leaks between runs.

Label Resolution
----------------
Labels are resolved in two phases:

1. **Scan**: as each line is processed, a label definition binds its name
   to the current buffer length (the offset of the instruction that follows
   the label). A reference to a label emits an Unresolved placeholder word
   and records a Backfill anchored at the referencing instruction word.

2. **Backfill**: once every line has been scanned, each Backfill looks up
   its label and patches the placeholder. The placeholder sits in one of
   the two slots after the anchor (an instruction has at most two extra
   words), so both slots are inspected and every placeholder found there
   is replaced with this label's address. Words that already hold a value
   are never touched. In `SET aa, bb` the request for aa comes first and
   fills both extra words with aa's address.

Because backfill only starts after the scan, a label that is defined more
than once resolves to its last definition everywhere.

Output Padding
--------------
emit() appends len(words) % 8 zero words to the buffer. This is the
loader-compatible rule; it only yields a multiple of 8 when the remainder
is 0 or 4.
"""

from dataclasses import dataclass, field
from difflib import get_close_matches
from typing import Optional, Union
import logging

from dcpu16_asm.errors import AssemblerError, SourceLocation, UnknownLabelError

logger = logging.getLogger(__name__)


# =============================================================================
# Buffer Element Types
# =============================================================================

@dataclass(frozen=True)
class Unresolved:
    """
    Placeholder for an extra word whose label address is not yet known.

    Kept as a distinct type rather than an out-of-range integer so it can
    never collide with a real 16-bit value.
    """
    label: str

    def __repr__(self) -> str:
        return f"Unresolved({self.label!r})"


Word = Union[int, Unresolved]


@dataclass(frozen=True)
class Backfill:
    """
    A deferred patch request.

    Attributes:
        anchor: Offset of the referencing instruction word
        label: Label name to look up
        location: Where the reference appears in the source
        source_line: Source text of the referencing line
    """
    anchor: int
    label: str
    location: Optional[SourceLocation] = None
    source_line: Optional[str] = None


@dataclass
class ListingEntry:
    """Words emitted for one source line."""
    offset: int
    length: int
    location: Optional[SourceLocation]
    source: str


# =============================================================================
# Assembly Session
# =============================================================================

@dataclass
class AssemblySession:
    """
    Mutable state of a single assembly run.

    Attributes:
        words: Word buffer; append-only while scanning
        labels: Label name -> word offset
        backfills: Pending patch requests, in recording order
        listing: One entry per assembled source line
    """
    words: list[Word] = field(default_factory=list)
    labels: dict[str, int] = field(default_factory=dict)
    backfills: list[Backfill] = field(default_factory=list)
    listing: list[ListingEntry] = field(default_factory=list)

    # Slots inspected after each backfill anchor
    BACKFILL_WINDOW = 2

    # Output rows are 8 words wide
    ROW_WORDS = 8

    @property
    def offset(self) -> int:
        """Offset of the next word to be emitted."""
        return len(self.words)

    # =========================================================================
    # Scan Phase
    # =========================================================================

    def define_label(self, name: str) -> int:
        """
        Bind name to the current offset.

        A repeated definition replaces the earlier binding.

        Returns:
            The offset the label now names
        """
        previous = self.labels.get(name)
        if previous is not None and previous != self.offset:
            logger.warning(
                f"label '{name}' redefined: ${previous:04X} -> ${self.offset:04X}"
            )
        self.labels[name] = self.offset
        logger.debug(f"label '{name}' = ${self.offset:04X}")
        return self.offset

    def request_backfill(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> Unresolved:
        """
        Record a reference to label and return its placeholder word.

        The request is anchored at the current offset, which is where the
        referencing instruction word is about to be written.
        """
        self.backfills.append(Backfill(self.offset, label, location, source_line))
        return Unresolved(label)

    def append(self, *words: Word) -> None:
        """Append words to the buffer."""
        self.words.extend(words)

    def record_listing(self, start: int, location: Optional[SourceLocation], source: str) -> None:
        """Note that words[start:offset] were produced by source."""
        self.listing.append(ListingEntry(start, self.offset - start, location, source))

    # =========================================================================
    # Backfill Phase
    # =========================================================================

    def resolve_backfills(self) -> None:
        """
        Patch every placeholder with its label's address.

        Requests are processed in recording order. Must only be called
        after the whole source has been scanned.

        Raises:
            UnknownLabelError: If a referenced label was never defined
        """
        for request in self.backfills:
            address = self.labels.get(request.label)
            if address is None:
                raise UnknownLabelError(
                    request.label,
                    location=request.location,
                    source_line=request.source_line,
                    similar_symbols=get_close_matches(request.label, list(self.labels)),
                )

            for index in range(request.anchor + 1, request.anchor + 1 + self.BACKFILL_WINDOW):
                if index >= len(self.words):
                    continue
                if isinstance(self.words[index], Unresolved):
                    self.words[index] = address
                    logger.debug(
                        f"backfilled '{request.label}' = ${address:04X} at ${index:04X}"
                    )

    # =========================================================================
    # Output
    # =========================================================================

    def emit(self, pad: bool = True) -> list[int]:
        """
        Linearize the word buffer into the final program.

        Args:
            pad: Append len(words) % 8 zero words

        Returns:
            List of 16-bit words

        Raises:
            AssemblerError: If a placeholder survived the backfill phase
        """
        program: list[int] = []
        for index, word in enumerate(self.words):
            if isinstance(word, Unresolved):
                raise AssemblerError(
                    f"unresolved reference to '{word.label}' at ${index:04X}"
                )
            program.append(word)

        if pad:
            padding = len(program) % self.ROW_WORDS
            program.extend([0] * padding)

        return program

    def get_symbols(self) -> dict[str, int]:
        """Return a copy of the label table."""
        return dict(self.labels)
