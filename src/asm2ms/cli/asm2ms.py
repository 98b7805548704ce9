"""
asm2ms - Assembler Command-Line Interface
=========================================

This module implements the command-line interface for the assembler.

Usage Examples
--------------
Assemble program.asm into program.ms in the current directory:
    $ asm2ms

With explicit input and output files:
    $ asm2ms boot.asm -o boot.ms

Also write a listing:
    $ asm2ms boot.asm -l boot.lst

Old record format without the " ; " separator:
    $ asm2ms --format bare

Defaults can also be set with the ASM2MS_INPUT, ASM2MS_OUTPUT,
ASM2MS_FORMAT and ASM2MS_NO_SYNC environment variables.
"""

from pathlib import Path
from typing import Optional
import logging
import sys

import click

from asm2ms import __version__
from asm2ms.assembler import Assembler
from asm2ms.cli.errors import ExitCode, handle_cli_exception
from asm2ms.config import AssemblerConfig, RecordFormat


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
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .ms file (default: program.ms)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-f", "--format", "record_format",
    type=click.Choice([f.value for f in RecordFormat], case_sensitive=False),
    default=None,
    help="Output record format. annotated: '<word> ; <source>' (default). "
         "bare: '<word><source>' with no separator.",
)
@click.option(
    "--sync/--no-sync",
    default=None,
    help="Flush the output file to disk before exiting. Default: enabled.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with an error status if any line was rejected",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="asm2ms")
def main(
    input_file: Optional[Path],
    output: Optional[Path],
    listing: Optional[Path],
    record_format: Optional[str],
    sync: Optional[bool],
    strict: bool,
    verbose: bool,
) -> None:
    """
    Assemble a source file into a .ms file.

    INPUT_FILE is the assembly source (default: program.asm).

    Each instruction becomes one line of the output: the encoded word in
    hex followed by the source line. Lines that cannot be assembled are
    reported and left out; the rest of the file is still assembled.

    \b
    Examples:
        asm2ms                      # program.asm -> program.ms
        asm2ms boot.asm -o boot.ms  # Specify files
        asm2ms --format bare        # No ' ; ' separator
    """
    setup_logging(verbose)

    config = AssemblerConfig.from_env()
    if input_file is not None:
        config.input_path = input_file
    if output is not None:
        config.output_path = output
    if record_format is not None:
        config.record_format = RecordFormat(record_format.lower())
    if sync is not None:
        config.sync = sync

    asm = Assembler(config)

    try:
        if verbose:
            click.echo(f"Assembling {config.input_path}...")

        asm.assemble_file(config.input_path)

        # Per-line errors do not stop the output from being written
        if asm.has_errors():
            click.echo(asm.get_error_report(), err=True)

        asm.write_output(config.output_path)
        if verbose:
            click.echo(
                f"Wrote {len(asm.get_records())} records "
                f"({len(asm.get_output())} bytes) to {config.output_path}"
            )

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    click.echo("Done")

    if strict and asm.has_errors():
        sys.exit(ExitCode.BUILD_ERROR)


if __name__ == "__main__":
    main()
