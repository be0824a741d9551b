"""
sctapeinfo - SC-3000 Tape Inspector Command-Line Interface
==========================================================

Decodes a tape WAV written by sctapewave, prints its header fields and
checks both record checksums.

Usage Examples
--------------
Show what a tape contains:
    $ sctapeinfo game.wav

Extract the program image again:
    $ sctapeinfo game.wav -o game.bin
"""

from pathlib import Path
from typing import Optional
import sys

import click

from sc_tapewave import __version__
from sc_tapewave.cli.errors import ExitCode, handle_cli_exception
from sc_tapewave.cli.sctapewave import setup_logging
from sc_tapewave.errors import OutputUnwritableError
from sc_tapewave.tape import decode_tape_file, describe_mode


def _status(valid: bool) -> str:
    return "OK" if valid else "BAD"


@click.command()
@click.argument("tape_file", type=click.Path(path_type=Path))
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the decoded program image to this file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="sctapeinfo")
def main(tape_file: Path, output: Optional[Path], verbose: bool) -> None:
    """
    Show the contents of an SC-3000 tape WAV file.

    TAPE_FILE must be a WAV file written by sctapewave. Exits with a
    non-zero status if the signal is malformed or a checksum is wrong.
    """
    setup_logging(verbose)

    try:
        image = decode_tape_file(tape_file)
        header = image.header

        click.echo(f"File:     {tape_file}")
        click.echo(f"Mode:     {describe_mode(header)}")
        click.echo(f"Name:     '{header.get_display_name()}'")
        click.echo(f"Length:   {header.program_length} bytes")
        click.echo(f"Header checksum: 0x{image.header_parity:02X} ({_status(image.header_valid)})")
        click.echo(f"Data checksum:   0x{image.data_parity:02X} ({_status(image.data_valid)})")

        if output is not None:
            try:
                output.write_bytes(image.program)
            except OSError as e:
                raise OutputUnwritableError(output, e.strerror or str(e)) from e
            click.echo(f"Wrote {len(image.program)} bytes to {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    if not image.is_valid:
        click.echo("Error: tape checksum mismatch.", err=True)
        sys.exit(ExitCode.ENCODE_ERROR)


if __name__ == "__main__":
    main()
