"""
dcasm - DCPU-16 Assembler Command-Line Interface
================================================

This module implements the command-line interface for the DCPU-16
assembler.

Usage Examples
--------------
Basic assembly:
    $ dcasm hello.dasm

With output file:
    $ dcasm hello.dasm -o hello.bin

Generate all output files:
    $ dcasm hello.dasm -o hello.bin -l hello.lst -s hello.sym

Print a hex dump instead of writing a binary:
    $ dcasm --hex hello.dasm
"""

from pathlib import Path
from typing import Optional
import logging

import click

from dcpu16_asm import __version__
from dcpu16_asm.assembler import Assembler
from dcpu16_asm.cli.errors import handle_cli_exception


# Words per row in --hex output
HEX_ROW_WORDS = 8


def format_hex_dump(code: list[int]) -> str:
    """Format words as rows of eight, each prefixed by its word offset."""
    rows = []
    for offset in range(0, len(code), HEX_ROW_WORDS):
        row = code[offset:offset + HEX_ROW_WORDS]
        rows.append(f"{offset:04x}: " + " ".join(f"{w:04x}" for w in row))
    return "\n".join(rows)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output binary file (default: input.bin)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--little-endian",
    is_flag=True,
    help="Write words low byte first (default: big-endian)",
)
@click.option(
    "--hex", "hex_dump",
    is_flag=True,
    help="Print a hex dump to stdout instead of writing a binary",
)
@click.option(
    "--no-pad",
    is_flag=True,
    help="Do not append zero-word padding to the output",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="dcasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    little_endian: bool,
    hex_dump: bool,
    no_pad: bool,
    verbose: bool,
) -> None:
    """
    Assemble DCPU-16 source code.

    INPUT_FILE is the assembly source file (.dasm) to assemble.

    \b
    Examples:
        dcasm hello.dasm              # Outputs hello.bin
        dcasm hello.dasm -o out.bin   # Specify output file
        dcasm --hex hello.dasm        # Print words to stdout
    """
    setup_logging(verbose)

    asm = Assembler(verbose=verbose, pad_output=not no_pad)
    byteorder = "little" if little_endian else "big"

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        code = asm.assemble_file(input_file)

        if hex_dump:
            click.echo(format_hex_dump(code))
        else:
            output_file = output if output is not None else input_file.with_suffix(".bin")
            asm.write_binary(output_file, byteorder=byteorder)
            if verbose:
                click.echo(f"Wrote {len(code)} words ({byteorder}-endian) to {output_file}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            click.echo(f"Assembly complete: {len(code)} words")
            click.echo(f"Defined {len(asm.get_symbols())} labels")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
