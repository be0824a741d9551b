"""
Tape Decoder
============

This module reads a tape WAV produced by the encoder back into its header
and program, and verifies both record checksums.

The decoder is a verifier for this encoder's output, not a general tape
reader: it expects every bit to be one of the two exact 16-sample
patterns and silence to be exactly 0x80. Recordings of real tapes need
filtering and clock recovery and are out of scope.

Decoding walks the stream in the order the assembler writes it:

    silence -> leader -> header record -> silence -> leader -> data record

Usage
-----
    >>> from sc_tapewave.tape import decode_tape_file
    >>> image = decode_tape_file("game.wav")
    >>> image.header.get_display_name(), image.header.program_length
    ('GAME', 4096)
    >>> image.is_valid
    True
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union
import logging

from sc_tapewave.errors import InputNotFoundError, InputUnreadableError, TapeFormatError
from sc_tapewave.tape.checksum import verify_parity
from sc_tapewave.tape.container import HEADER_SIZE, parse_wave_header
from sc_tapewave.tape.modulator import (
    ONE_BIT_PATTERN,
    SAMPLE_SILENCE,
    SAMPLES_PER_BIT,
    ZERO_BIT_PATTERN,
)
from sc_tapewave.tape.records import (
    DUMMY_BYTES,
    NAME_LENGTH,
    KeyCode,
    MachineCode,
    TapeHeader,
    mode_from_key,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Decoded Tape
# =============================================================================

@dataclass(frozen=True)
class TapeImage:
    """
    A decoded tape file.

    Attributes:
        header: Mode, name and program length from the header record
        program: The data record payload
        header_parity: Parity byte stored after the header fields
        data_parity: Parity byte stored after the program
        header_valid: True if the header record checksum verifies
        data_valid: True if the data record checksum verifies
    """
    header: TapeHeader
    program: bytes
    header_parity: int
    data_parity: int
    header_valid: bool
    data_valid: bool

    @property
    def is_valid(self) -> bool:
        """True if both records verify."""
        return self.header_valid and self.data_valid


# =============================================================================
# Decoder
# =============================================================================

class TapeDecoder:
    """
    Demodulates an 8-bit sample stream into tape records.

    Attributes:
        samples: The raw sample data (WAV data chunk contents)
        position: Current sample offset
    """

    def __init__(self, samples: bytes):
        self.samples = samples
        self.position = 0

    # =========================================================================
    # Bit Level
    # =========================================================================

    def _skip_silence(self) -> int:
        start = self.position
        while (self.position < len(self.samples)
               and self.samples[self.position] == SAMPLE_SILENCE):
            self.position += 1
        return self.position - start

    def read_bit(self) -> int:
        """
        Read one 16-sample bit cell.

        Raises:
            TapeFormatError: If the cell is truncated or matches neither pattern
        """
        cell = self.samples[self.position:self.position + SAMPLES_PER_BIT]
        if cell == ONE_BIT_PATTERN:
            bit = 1
        elif cell == ZERO_BIT_PATTERN:
            bit = 0
        elif len(cell) < SAMPLES_PER_BIT:
            raise TapeFormatError("Unexpected end of tape", self.position)
        else:
            raise TapeFormatError("Unrecognized bit pattern", self.position)
        self.position += SAMPLES_PER_BIT
        return bit

    def read_byte(self) -> int:
        """
        Read one framed byte (start bit, 8 data bits LSB first, 2 stop bits).

        Raises:
            TapeFormatError: On a bad start or stop bit
        """
        offset = self.position
        if self.read_bit() != 0:
            raise TapeFormatError("Missing start bit", offset)
        value = 0
        for i in range(8):
            value |= self.read_bit() << i
        if self.read_bit() != 1 or self.read_bit() != 1:
            raise TapeFormatError("Missing stop bits", offset)
        return value

    def read_bytes(self, count: int) -> bytes:
        """Read count framed bytes."""
        return bytes(self.read_byte() for _ in range(count))

    def read_leader(self) -> int:
        """
        Skip silence and read a leader tone.

        Stops at the first zero bit (the key code's start bit) without
        consuming it.

        Returns:
            Number of leader bits read

        Raises:
            TapeFormatError: If no leader tone is found
        """
        self._skip_silence()
        count = 0
        while True:
            offset = self.position
            if self.read_bit() == 0:
                self.position = offset
                break
            count += 1
        if count == 0:
            raise TapeFormatError("Expected a leader tone", self.position)
        return count

    # =========================================================================
    # Record Level
    # =========================================================================

    def _read_trailer(self) -> int:
        parity = self.read_byte()
        offset = self.position
        if self.read_bytes(len(DUMMY_BYTES)) != DUMMY_BYTES:
            raise TapeFormatError("Expected two zero bytes after parity", offset)
        return parity

    def read_header(self) -> tuple[TapeHeader, int, bool]:
        """
        Read the header record.

        Returns:
            (header, stored parity byte, checksum valid)
        """
        leader = self.read_leader()
        offset = self.position
        key_code = self.read_byte()
        if not KeyCode.is_header(key_code):
            raise TapeFormatError(
                f"Expected header key code, got {KeyCode.get_name(key_code)}", offset
            )

        fields = bytearray(self.read_bytes(NAME_LENGTH + 2))
        name = bytes(fields[:NAME_LENGTH])
        program_length = (fields[NAME_LENGTH] << 8) | fields[NAME_LENGTH + 1]

        start_address = None
        if key_code == KeyCode.MACHINE_CODE_HEADER:
            address = self.read_bytes(2)
            fields.extend(address)
            start_address = (address[0] << 8) | address[1]

        parity = self._read_trailer()
        header = TapeHeader(
            mode=mode_from_key(key_code, start_address),
            name=name,
            program_length=program_length,
        )
        logger.debug(
            f"Header after {leader}-bit leader: {KeyCode.get_name(key_code)}, "
            f"'{header.get_display_name()}', {program_length} bytes"
        )
        return header, parity, verify_parity(bytes(fields), parity)

    def read_data(self, header: TapeHeader) -> tuple[bytes, int, bool]:
        """
        Read the data record that follows header.

        Returns:
            (program bytes, stored parity byte, checksum valid)
        """
        self.read_leader()
        offset = self.position
        key_code = self.read_byte()
        if not KeyCode.is_data(key_code):
            raise TapeFormatError(
                f"Expected data key code, got {KeyCode.get_name(key_code)}", offset
            )
        if key_code != header.mode.data_key:
            raise TapeFormatError(
                f"Expected {KeyCode.get_name(header.mode.data_key)} key code, "
                f"got {KeyCode.get_name(key_code)}", offset
            )
        program = self.read_bytes(header.program_length)
        parity = self._read_trailer()
        return program, parity, verify_parity(program, parity)

    def decode(self) -> TapeImage:
        """
        Decode the whole tape.

        Returns:
            The decoded TapeImage. Checksum failures are reported in the
            image rather than raised.

        Raises:
            TapeFormatError: If the signal or framing is malformed
        """
        self.position = 0
        header, header_parity, header_valid = self.read_header()
        program, data_parity, data_valid = self.read_data(header)

        self._skip_silence()
        if self.position != len(self.samples):
            raise TapeFormatError("Unexpected signal after data record", self.position)

        return TapeImage(
            header=header,
            program=program,
            header_parity=header_parity,
            data_parity=data_parity,
            header_valid=header_valid,
            data_valid=data_valid,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def decode_tape(data: bytes) -> TapeImage:
    """
    Decode a complete WAV file held in memory.

    Raises:
        ContainerFormatError: If the WAV header is invalid
        TapeFormatError: If the tape signal is malformed
    """
    header = parse_wave_header(data)
    if not header.is_consistent(len(data)):
        logger.warning(
            f"WAV size fields do not match file size "
            f"(riff={header.riff_size}, data={header.data_size}, file={len(data)})"
        )
    return TapeDecoder(data[HEADER_SIZE:]).decode()


def decode_tape_file(filepath: Union[str, Path]) -> TapeImage:
    """
    Decode a tape WAV file from disk.

    Raises:
        InputNotFoundError: If the file does not exist
        InputUnreadableError: If the file cannot be read
        ContainerFormatError: If the WAV header is invalid
        TapeFormatError: If the tape signal is malformed
    """
    filepath = Path(filepath)
    try:
        data = filepath.read_bytes()
    except FileNotFoundError as e:
        raise InputNotFoundError(filepath) from e
    except OSError as e:
        raise InputUnreadableError(filepath, e.strerror or str(e)) from e
    return decode_tape(data)


def describe_mode(header: TapeHeader) -> str:
    """Get a one-line description of a header's mode and address."""
    if isinstance(header.mode, MachineCode):
        return f"{header.mode.name}, start address 0x{header.mode.start_address:04X}"
    return header.mode.name
