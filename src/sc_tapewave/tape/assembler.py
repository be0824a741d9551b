"""
Tape Frame Assembler
====================

This module sequences the modulator calls that make up one complete
SC-3000 tape file, and provides the library entry points that validate
a request and write it out as a WAV file.

Record Sequence
---------------
     1. Silence, 10 ms
     2. Leader, 3600 one-bits
     3. Header key code (0x26 machine code), checksum reset
     4. Name, 16 bytes
     5. Program length, big-endian
     6. Start address, big-endian (machine code only)
     7. Parity byte
     8. Dummy bytes 00 00
     9. Silence, 1 s
    10. Leader, 3600 one-bits
    11. Data key code (0x27 machine code), checksum reset
    12. Program bytes
    13. Parity byte
    14. Dummy bytes 00 00
    15. Silence, 10 ms

Usage
-----
    >>> from sc_tapewave.tape import MachineCode, encode_tape, write_tape_file
    >>> wav = encode_tape(b"\\x01\\x02", "TEST", MachineCode(0x8000))
    >>> write_tape_file("test.wav", b"\\x01\\x02", "TEST", MachineCode(0x8000))
"""

from pathlib import Path
from typing import Union
import io
import logging

from sc_tapewave.config import DEFAULT_TIMING, DEFAULT_WAVE_FORMAT, TapeTiming, WaveFormat
from sc_tapewave.errors import (
    AddressOutOfRangeError,
    InputTooLargeError,
    OutputExtensionError,
    OutputUnwritableError,
    UnsupportedModeError,
)
from sc_tapewave.tape.container import WaveWriter
from sc_tapewave.tape.modulator import (
    SAMPLES_PER_BIT,
    SAMPLES_PER_BYTE,
    BitstreamModulator,
)
from sc_tapewave.tape.records import (
    DUMMY_BYTES,
    MAX_PROGRAM_LENGTH,
    MAX_START_ADDRESS,
    NAME_LENGTH,
    Basic,
    MachineCode,
    TapeHeader,
    TapeMode,
    encode_name,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_program(program: bytes, source: Union[str, Path, None] = None) -> None:
    """
    Check that a program fits the 16-bit length field.

    Raises:
        InputTooLargeError: If the program is longer than 65535 bytes
    """
    if len(program) > MAX_PROGRAM_LENGTH:
        raise InputTooLargeError(len(program), source)


def validate_start_address(address: int) -> None:
    """
    Check that a start address fits the 16-bit start-address field.

    Raises:
        AddressOutOfRangeError: If the address is outside 0x0000-0xFFFF
    """
    if not 0 <= address <= MAX_START_ADDRESS:
        raise AddressOutOfRangeError(address)


def validate_mode(mode: TapeMode) -> None:
    """
    Check that a mode can be encoded.

    Raises:
        UnsupportedModeError: For BASIC tapes
        AddressOutOfRangeError: For machine code with a bad start address
    """
    if isinstance(mode, Basic):
        raise UnsupportedModeError(mode.name)
    validate_start_address(mode.start_address)


def validate_output_path(path: Union[str, Path]) -> None:
    """
    Check that the output file name ends in '.wav' (any case).

    A bare '.wav' file name is accepted.

    Raises:
        OutputExtensionError: For any other extension, or none
    """
    if not str(path).lower().endswith(".wav"):
        raise OutputExtensionError(path)


def expected_sample_count(
    program_length: int,
    mode: TapeMode,
    timing: TapeTiming = DEFAULT_TIMING,
    wave_format: WaveFormat = DEFAULT_WAVE_FORMAT,
) -> int:
    """
    Calculate how many samples a tape file will contain.

    Args:
        program_length: Program size in bytes
        mode: Tape mode (decides whether the start address is present)
        timing: Silence and leader lengths
        wave_format: Sample format the modulator writes with

    Returns:
        Total number of samples written by TapeAssembler.write_tape()
    """
    # key code + name + length + parity + dummies
    header_bytes = 1 + NAME_LENGTH + 2 + 1 + len(DUMMY_BYTES)
    if isinstance(mode, MachineCode):
        header_bytes += 2
    # key code + program + parity + dummies
    data_bytes = 1 + program_length + 1 + len(DUMMY_BYTES)

    silence = (wave_format.samples_for_ms(timing.lead_in_ms)
               + wave_format.samples_for_ms(timing.gap_ms)
               + wave_format.samples_for_ms(timing.lead_out_ms))
    leaders = (timing.header_leader_bits + timing.data_leader_bits) * SAMPLES_PER_BIT
    return silence + leaders + (header_bytes + data_bytes) * SAMPLES_PER_BYTE


# =============================================================================
# Tape Assembler
# =============================================================================

class TapeAssembler:
    """
    Writes one complete tape file through a BitstreamModulator.

    The assembler performs no bounds checking of its own beyond refusing
    BASIC tapes; use the validate_* helpers (or encode_tape() and
    write_tape_file(), which call them) for untrusted input.

    Attributes:
        modulator: The modulator receiving every bit and byte
        timing: Silence and leader lengths
    """

    def __init__(self, modulator: BitstreamModulator, timing: TapeTiming = DEFAULT_TIMING):
        self.modulator = modulator
        self.timing = timing

    def write_tape(self, program: bytes, name: Union[str, bytes], mode: TapeMode) -> None:
        """
        Write the header record and data record for one program.

        Args:
            program: Program image (at most 65535 bytes)
            name: Name on tape (truncated or space-padded to 16 bytes)
            mode: MachineCode with its start address

        Raises:
            UnsupportedModeError: If mode is Basic
        """
        if isinstance(mode, Basic):
            raise UnsupportedModeError(mode.name)

        header = TapeHeader(mode=mode, name=encode_name(name), program_length=len(program))

        self.modulator.write_silence(self.timing.lead_in_ms)
        header_parity = self._write_record(
            self.timing.header_leader_bits, mode.header_key, header.fields()
        )
        logger.debug(
            f"Header record: '{header.get_display_name()}', "
            f"{len(program)} bytes, parity 0x{header_parity:02X}"
        )

        self.modulator.write_silence(self.timing.gap_ms)
        data_parity = self._write_record(
            self.timing.data_leader_bits, mode.data_key, program
        )
        logger.debug(f"Data record: {len(program)} bytes, parity 0x{data_parity:02X}")

        self.modulator.write_silence(self.timing.lead_out_ms)

    def _write_record(self, leader_bits: int, key_code: int, payload: bytes) -> int:
        """
        Write leader, key code, payload, parity byte and dummy bytes.

        Returns:
            The parity byte written
        """
        modulator = self.modulator
        modulator.write_leader(leader_bits)
        modulator.write_byte(key_code)
        modulator.checksum.reset()

        modulator.write_bytes(payload)

        parity = modulator.checksum.parity()
        modulator.write_byte(parity)
        modulator.write_bytes(DUMMY_BYTES)
        return parity


# =============================================================================
# Convenience Functions
# =============================================================================

def _validate_request(program: bytes, mode: TapeMode) -> None:
    validate_mode(mode)
    validate_program(program)


def encode_tape(
    program: bytes,
    name: Union[str, bytes],
    mode: TapeMode,
    timing: TapeTiming = DEFAULT_TIMING,
) -> bytes:
    """
    Encode a program as a complete WAV file in memory.

    Args:
        program: Program image (at most 65535 bytes)
        name: Name on tape
        mode: MachineCode with its start address
        timing: Silence and leader lengths

    Returns:
        The WAV file contents

    Raises:
        UnsupportedModeError: If mode is Basic
        AddressOutOfRangeError: If the start address does not fit 16 bits
        InputTooLargeError: If the program is longer than 65535 bytes

    Example:
        >>> wav = encode_tape(bytes([0xC9]), "RET", MachineCode(0x9000))
    """
    _validate_request(program, mode)

    buffer = io.BytesIO()
    with WaveWriter(buffer) as wav:
        TapeAssembler(BitstreamModulator(wav), timing).write_tape(program, name, mode)
    return buffer.getvalue()


def write_tape_file(
    filepath: Union[str, Path],
    program: bytes,
    name: Union[str, bytes],
    mode: TapeMode,
    timing: TapeTiming = DEFAULT_TIMING,
) -> int:
    """
    Encode a program and stream it to a WAV file on disk.

    The file is created fresh (truncated if it exists). If writing fails
    part way, the incomplete file is removed.

    Args:
        filepath: Output path, must end in '.wav' (any case)
        program: Program image (at most 65535 bytes)
        name: Name on tape
        mode: MachineCode with its start address
        timing: Silence and leader lengths

    Returns:
        Number of bytes written

    Raises:
        OutputExtensionError: If filepath does not end in '.wav'
        UnsupportedModeError: If mode is Basic
        AddressOutOfRangeError: If the start address does not fit 16 bits
        InputTooLargeError: If the program is longer than 65535 bytes
        OutputUnwritableError: If the file cannot be created or written
    """
    filepath = Path(filepath)
    validate_output_path(filepath)
    _validate_request(program, mode)

    try:
        f = open(filepath, "wb")
    except OSError as e:
        raise OutputUnwritableError(filepath, e.strerror or str(e)) from e

    try:
        with f, WaveWriter(f) as wav:
            TapeAssembler(BitstreamModulator(wav), timing).write_tape(program, name, mode)
    except OSError as e:
        filepath.unlink(missing_ok=True)
        raise OutputUnwritableError(filepath, e.strerror or str(e)) from e
    size = wav.file_size

    logger.info(
        f"Wrote {filepath}: {len(program)} bytes of program, "
        f"{wav.data_size} samples"
    )
    return size
