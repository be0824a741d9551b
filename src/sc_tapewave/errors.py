"""
SC-TapeWave Error Hierarchy
===========================

This module defines the exception hierarchy for the whole toolkit.
All exceptions inherit from TapeWaveError, allowing callers to catch every
encoder, decoder and I/O failure with a single except clause.

Exception Hierarchy
-------------------
TapeWaveError (base)
├── TapeArgumentError - invalid request, detected before encoding starts
│   ├── UnsupportedModeError - BASIC tapes are not implemented
│   ├── AddressOutOfRangeError - start address does not fit in 16 bits
│   ├── InputTooLargeError - program does not fit the 16-bit length field
│   └── OutputExtensionError - output file is not a .wav file
├── TapeIOError - file access failures
│   ├── InputNotFoundError - input program does not exist
│   ├── InputUnreadableError - input program cannot be read
│   └── OutputUnwritableError - output WAV cannot be created or written
└── TapeFormatError - malformed tape signal (decoder)
    └── ContainerFormatError - malformed WAV container (decoder)

Design Philosophy
-----------------
None of these conditions is recoverable. Every error carries a one-line,
human-readable message that the command-line tools print verbatim.
"""

from pathlib import Path
from typing import Optional, Union


# =============================================================================
# Base Exception Class
# =============================================================================

class TapeWaveError(Exception):
    """
    Base exception for all SC-TapeWave errors.

        try:
            write_tape_file("game.wav", program, "GAME", MachineCode(0x9000))
        except TapeWaveError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Argument Exceptions
# =============================================================================

class TapeArgumentError(TapeWaveError):
    """Invalid arguments: wrong flags, missing mode, unparsable values."""
    pass


class UnsupportedModeError(TapeArgumentError):
    """
    The requested tape mode cannot be encoded.

    BASIC programs need tokenizing into the SC-3000 line format before
    they can be written to tape. That is not implemented, so selecting
    the BASIC mode fails before any audio is produced.
    """

    def __init__(self, mode_name: str = "BASIC"):
        self.mode_name = mode_name
        super().__init__(f"{mode_name} support not yet implemented")


class AddressOutOfRangeError(TapeArgumentError):
    """Start address does not fit in the tape's 16-bit start-address field."""

    def __init__(self, address: int):
        self.address = address
        shown = f"0x{address:x}" if address >= 0 else str(address)
        super().__init__(f"Start address '{shown}' is too high")


class InputTooLargeError(TapeArgumentError):
    """Program does not fit in the tape's 16-bit length field."""

    def __init__(self, length: int, source: Optional[Union[str, Path]] = None):
        self.length = length
        self.source = source
        what = f"Program '{source}'" if source is not None else "Program"
        super().__init__(
            f"{what} is too large ({length} bytes, maximum is 65535)"
        )


class OutputExtensionError(TapeArgumentError):
    """Output file name does not end in '.wav' (case-insensitive)."""

    def __init__(self, path: Union[str, Path]):
        self.path = path
        super().__init__(f"Output file '{path}' must have '.wav' extension")


# =============================================================================
# I/O Exceptions
# =============================================================================

class TapeIOError(TapeWaveError):
    """Base exception for file access failures."""
    pass


class InputNotFoundError(TapeIOError):
    """Input program file does not exist."""

    def __init__(self, path: Union[str, Path]):
        self.path = path
        super().__init__(f"Failed to open input file '{path}'")


class InputUnreadableError(TapeIOError):
    """
    Input program file exists but cannot be read.

    Raised for permission problems, directories given as input and
    other operating-system read failures.
    """

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = path
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to read input file '{path}'{detail}")


class OutputUnwritableError(TapeIOError):
    """
    Output WAV file cannot be created or was only partially written.

    A partially written output is never valid. The writer removes it
    before raising this error.
    """

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = path
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to write output file '{path}'{detail}")


# =============================================================================
# Decoder Exceptions
# =============================================================================

class TapeFormatError(TapeWaveError):
    """
    Malformed tape signal.

    Raised by the decoder when the sample stream does not follow the
    SC-3000 bit patterns or record framing.

    Attributes:
        offset: Sample offset where decoding failed (None if unknown)
    """

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at sample {offset})"
        super().__init__(message)


class ContainerFormatError(TapeFormatError):
    """
    Malformed WAV container.

    Raised when a file is missing the RIFF/WAVE tags, is truncated, or
    uses a sample format other than 8-bit mono PCM at 19200 Hz.
    """
    pass
