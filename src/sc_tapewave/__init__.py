"""
SC-TapeWave - Cassette Tape Audio for the Sega SC-3000
======================================================

This package converts machine-code program images into WAV files that the
Sega SC-3000's cassette loader accepts, so programs built on a PC can be
played into a real machine or an emulator.

The SC-3000 records data as a frequency-shift keyed square wave: 2400 Hz
for a one bit, 1200 Hz for a zero bit, 1200 bits per second. Each program
is stored as a header record (name, length, start address) followed by a
data record, each with its own leader tone and checksum.

Main Components
---------------
- **tape**: Tape encoding engine
    Modulator, record assembler, WAV container and decoder

- **cli**: Command-line tools
    sctapewave (encode) and sctapeinfo (inspect)

Quick Start
-----------
Encode a program:
    >>> from pathlib import Path
    >>> from sc_tapewave import MachineCode, write_tape_file
    >>> program = Path("game.bin").read_bytes()
    >>> write_tape_file("game.wav", program, "GAME", MachineCode(0x9000))

Inspect a tape file:
    >>> from sc_tapewave import decode_tape_file
    >>> image = decode_tape_file("game.wav")
    >>> print(image.header.get_display_name(), image.is_valid)

Or use the command-line tools:
    $ sctapewave --machine-code 9000 GAME game.bin game.wav
    $ sctapeinfo game.wav

Version History
---------------
1.0.0 - Initial release with machine-code tape encoding and decoding
"""

__version__ = "1.0.0"
__author__ = "SC-TapeWave Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from sc_tapewave.config import (
    TapeTiming,
    WaveFormat,
    DEFAULT_TIMING,
    DEFAULT_WAVE_FORMAT,
)
from sc_tapewave.errors import (
    TapeWaveError,
    TapeArgumentError,
    UnsupportedModeError,
    AddressOutOfRangeError,
    InputTooLargeError,
    OutputExtensionError,
    TapeIOError,
    InputNotFoundError,
    InputUnreadableError,
    OutputUnwritableError,
    TapeFormatError,
    ContainerFormatError,
)
from sc_tapewave.tape import (
    KeyCode,
    MachineCode,
    Basic,
    TapeMode,
    TapeHeader,
    Checksum,
    BitstreamModulator,
    TapeAssembler,
    WaveWriter,
    TapeDecoder,
    TapeImage,
    encode_tape,
    write_tape_file,
    decode_tape,
    decode_tape_file,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Configuration
    "TapeTiming",
    "WaveFormat",
    "DEFAULT_TIMING",
    "DEFAULT_WAVE_FORMAT",
    # Exception hierarchy
    "TapeWaveError",
    "TapeArgumentError",
    "UnsupportedModeError",
    "AddressOutOfRangeError",
    "InputTooLargeError",
    "OutputExtensionError",
    "TapeIOError",
    "InputNotFoundError",
    "InputUnreadableError",
    "OutputUnwritableError",
    "TapeFormatError",
    "ContainerFormatError",
    # Tape engine
    "KeyCode",
    "MachineCode",
    "Basic",
    "TapeMode",
    "TapeHeader",
    "Checksum",
    "BitstreamModulator",
    "TapeAssembler",
    "WaveWriter",
    "TapeDecoder",
    "TapeImage",
    "encode_tape",
    "write_tape_file",
    "decode_tape",
    "decode_tape_file",
]
