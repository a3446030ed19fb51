"""
DCPU-16 Assembler - Main Interface
==================================

This module provides the Assembler class, the primary interface for
assembling DCPU-16 source code. It runs the lexer and instruction encoder
over the source, resolves label references and produces the final list of
16-bit words.

Example Usage
-------------
>>> from dcpu16_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> code = asm.assemble('''
... :loop SET A, 1
...       SET PC, loop
... ''')
>>> [f"{w:04X}" for w in code[:3]]
['8401', '7DC1', '0000']
>>>
>>> asm.write_binary("loop.bin")

Command-Line Usage
------------------
    $ dcasm loop.dasm -o loop.bin -l loop.lst -s loop.sym
"""

from pathlib import Path
from typing import Optional
import logging

from dcpu16_asm.assembler.encoder import InstructionEncoder
from dcpu16_asm.assembler.lexer import Lexer
from dcpu16_asm.assembler.session import AssemblySession

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main DCPU-16 assembler class.

    Each call to assemble() builds a fresh AssemblySession, so an instance
    can be reused for several programs; only the results of the most recent
    run are kept for the get_*/write_* methods. An instance must not be
    shared between threads.

    Attributes:
        verbose: If True, log progress at INFO level instead of DEBUG
        pad_output: If True (default), apply the trailing zero-word padding
    """

    BYTE_ORDERS = ("big", "little")

    def __init__(self, verbose: bool = False, pad_output: bool = True):
        """
        Initialize the assembler.

        Args:
            verbose: Report progress at INFO level
            pad_output: Append len(code) % 8 zero words to the output
        """
        self._verbose = verbose
        self._pad_output = pad_output
        self._session: Optional[AssemblySession] = None
        self._code: list[int] = []

    def _log(self, message: str) -> None:
        logger.log(logging.INFO if self._verbose else logging.DEBUG, message)

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble(self, source: str, filename: str = "<input>") -> list[int]:
        """
        Assemble source code from a string.

        The pipeline is:
        1. Scan: tokenize each line, bind labels, encode instructions
        2. Backfill: patch every label reference
        3. Emit: linearize and pad the word buffer

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            Assembled program as a list of 16-bit words

        Raises:
            AssemblerError: If assembly fails; nothing is produced
        """
        session = AssemblySession()
        encoder = InstructionEncoder(session)

        statement_count = 0
        for stmt in Lexer(source, filename).tokenize():
            if stmt.label is not None:
                session.define_label(stmt.label)

            start = session.offset
            words = encoder.encode(stmt)
            session.append(*words)
            session.record_listing(start, stmt.location, stmt.source or "")
            statement_count += 1

        self._log(
            f"Scanned {statement_count} statements, {session.offset} words, "
            f"{len(session.backfills)} label references"
        )

        session.resolve_backfills()
        code = session.emit(pad=self._pad_output)

        self._session = session
        self._code = code
        self._log(f"Generated {len(code)} words")
        return code

    def assemble_file(self, filepath: str | Path) -> list[int]:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            Assembled program as a list of 16-bit words

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._log(f"Assembling {filepath}...")
        source = filepath.read_text(encoding="utf-8")
        return self.assemble(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> list[int]:
        """Return the words produced by the last assemble() call."""
        return list(self._code)

    def get_symbols(self) -> dict[str, int]:
        """
        Get the label table of the last run.

        Returns:
            Dictionary mapping label names to word offsets
        """
        if self._session is None:
            return {}
        return self._session.get_symbols()

    def to_bytes(self, byteorder: str = "big") -> bytes:
        """
        Serialize the program as a binary image.

        Args:
            byteorder: "big" (DCPU-16 loader convention) or "little"

        Raises:
            ValueError: For an unknown byte order
        """
        if byteorder not in self.BYTE_ORDERS:
            raise ValueError(f"byteorder must be one of {self.BYTE_ORDERS}, got {byteorder!r}")
        return b"".join(word.to_bytes(2, byteorder) for word in self._code)

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Listing with word offsets, generated words and source lines,
            followed by the label table
        """
        lines = []
        lines.append("DCPU-16 Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append("Addr  Code            Line  Source")
        lines.append("-" * 60)

        if self._session is not None:
            for entry in self._session.listing:
                words = self._code[entry.offset:entry.offset + entry.length]
                code = " ".join(f"{w:04X}" for w in words)
                line_no = entry.location.line if entry.location else 0
                lines.append(f"{entry.offset:04X}  {code:14s}  {line_no:4d}  {entry.source.strip()}")

        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for name, value in sorted(self.get_symbols().items()):
            lines.append(f"{name:20s} = ${value:04X}")
        return "\n".join(lines)

    def write_binary(self, filepath: str | Path, byteorder: str = "big") -> None:
        """
        Write the program as a raw binary image, two bytes per word.

        Args:
            filepath: Output file path
            byteorder: "big" (default) or "little"
        """
        data = self.to_bytes(byteorder)
        Path(filepath).write_bytes(data)
        self._log(f"Wrote {len(data)} bytes to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        Path(filepath).write_text(self.get_listing() + "\n", encoding="utf-8")
        self._log(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write the label table.

        Format: name address (one per line)
        """
        with open(filepath, "w", encoding="utf-8") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by dcasm\n")
            for name, value in sorted(self.get_symbols().items()):
                f.write(f"{name} ${value:04X}\n")
        self._log(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> list[int]:
    """
    Convenience function to assemble source code.

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler().assemble(source, filename)


def assemble_file(filepath: str | Path) -> list[int]:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
        FileNotFoundError: If source file not found
    """
    return Assembler().assemble_file(filepath)
