"""
sctapewave - SC-3000 Tape Encoder Command-Line Interface
========================================================

This module implements the command-line interface for the tape encoder.
It turns a raw program image into a WAV file that can be played into the
SC-3000's cassette input.

Usage Examples
--------------
Encode a machine-code program loaded and started at $9000:
    $ sctapewave --machine-code 9000 GAME game.bin game.wav

The start address is hexadecimal, with or without a 0x or $ prefix:
    $ sctapewave --machine-code 0xC000 DEMO demo.bin demo.wav

Verbose mode:
    $ sctapewave -v --machine-code 9000 GAME game.bin game.wav

BASIC tapes are not supported yet:
    $ sctapewave --basic HELLO hello.bas hello.wav
    Error: BASIC support not yet implemented.
"""

from pathlib import Path
from typing import Optional
import logging
import os

import click

from sc_tapewave import __version__
from sc_tapewave.cli.errors import handle_cli_exception
from sc_tapewave.config import DEFAULT_WAVE_FORMAT
from sc_tapewave.errors import (
    InputNotFoundError,
    InputUnreadableError,
    TapeArgumentError,
    UnsupportedModeError,
)
from sc_tapewave.tape import (
    MachineCode,
    TapeMode,
    expected_sample_count,
    validate_output_path,
    validate_program,
    validate_start_address,
    write_tape_file,
)
from sc_tapewave.tape.records import encode_name

logger = logging.getLogger(__name__)


# =============================================================================
# Argument Helpers
# =============================================================================

def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def parse_start_address(text: str) -> int:
    """
    Parse a hexadecimal start address.

    Accepts an optional 0x or $ prefix. The value must fit in 16 bits.

    Raises:
        TapeArgumentError: If text is not hexadecimal
        AddressOutOfRangeError: If the value is above 0xFFFF
    """
    value_str = text.strip()
    if value_str.startswith("$"):
        value_str = value_str[1:]
    elif value_str.lower().startswith("0x"):
        value_str = value_str[2:]
    try:
        address = int(value_str, 16)
    except ValueError:
        raise TapeArgumentError(f"Invalid start address '{text}': expected hexadecimal")
    validate_start_address(address)
    return address


def resolve_mode(start_address: Optional[str], basic: bool) -> TapeMode:
    """
    Build the tape mode from the --machine-code / --basic options.

    Raises:
        TapeArgumentError: If neither or both options are given
        UnsupportedModeError: If --basic is given
        AddressOutOfRangeError: If the start address is above 0xFFFF
    """
    if basic and start_address is not None:
        raise TapeArgumentError("--basic and --machine-code are mutually exclusive")
    if basic:
        raise UnsupportedModeError("BASIC")
    if start_address is None:
        raise TapeArgumentError("one of --machine-code <start-address> or --basic is required")
    return MachineCode(parse_start_address(start_address))


def read_program(input_file: Path) -> bytes:
    """
    Read a program image and check it fits on tape.

    Raises:
        InputNotFoundError: If the file does not exist
        InputUnreadableError: If the file cannot be read
        InputTooLargeError: If the file is longer than 65535 bytes
    """
    try:
        program = input_file.read_bytes()
    except FileNotFoundError as e:
        raise InputNotFoundError(input_file) from e
    except OSError as e:
        raise InputUnreadableError(input_file, e.strerror or str(e)) from e
    validate_program(program, input_file)
    logger.debug(f"Read {len(program)} bytes from {input_file}")
    return program


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument("name_on_tape")
@click.argument("input_file", type=click.Path(path_type=Path))
@click.argument("output_file", type=click.Path(path_type=Path))
@click.option(
    "--machine-code", "start_address",
    metavar="START_ADDRESS",
    help="Encode a machine-code program started at START_ADDRESS (hexadecimal)",
)
@click.option(
    "--basic",
    is_flag=True,
    help="Encode a BASIC program (not yet supported)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="sctapewave")
def main(
    name_on_tape: str,
    input_file: Path,
    output_file: Path,
    start_address: Optional[str],
    basic: bool,
    verbose: bool,
) -> None:
    """
    Encode a program as SC-3000 cassette tape audio.

    NAME_ON_TAPE is the name the SC-3000 shows while loading (up to 16
    characters; longer names are truncated). INPUT_FILE is the raw program
    image, at most 65535 bytes. OUTPUT_FILE must end in .wav.

    \b
    Examples:
        sctapewave --machine-code 9000 GAME game.bin game.wav
        sctapewave --machine-code 0xC000 DEMO demo.bin demo.wav
    """
    setup_logging(verbose)

    try:
        mode = resolve_mode(start_address, basic)
        validate_output_path(output_file)
        program = read_program(input_file)
        name = os.fsencode(name_on_tape)

        if verbose:
            click.echo(f"Encoding {input_file} ({len(program)} bytes)...")

        size = write_tape_file(output_file, program, name, mode)

        if verbose:
            samples = expected_sample_count(len(program), mode)
            click.echo(f"Name on tape: '{encode_name(name).decode('latin-1')}'")
            click.echo(f"Start address: ${mode.start_address:04X}")
            click.echo(f"Wrote {size} bytes to {output_file} ({samples / DEFAULT_WAVE_FORMAT.sample_rate:.2f} s of audio)")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
