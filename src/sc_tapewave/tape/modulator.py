"""
Bitstream Modulator
===================

This module turns tape bits and bytes into 8-bit unsigned PCM samples.

Bit Encoding
------------
The SC-3000 tape format is frequency-shift keyed. Every bit lasts 16
samples (1/1200 s at 19200 Hz):

    '1' = two cycles at 2400 Hz:  FF FF FF FF 00 00 00 00 FF FF FF FF 00 00 00 00
    '0' = one cycle at 1200 Hz:   FF FF FF FF FF FF FF FF 00 00 00 00 00 00 00 00

The square wave swings between 0xFF and 0x00, while silence sits at the
8-bit PCM mid-point 0x80. The wave is therefore not centred on the
silence level; the loader depends on this full swing.

Byte Framing
------------
Each byte is sent as an 11-bit frame:

    start bit (0), 8 data bits LSB first, 2 stop bits (1, 1)

which is 176 samples per byte.

Usage
-----
    import io
    from sc_tapewave.tape.modulator import BitstreamModulator

    sink = io.BytesIO()
    modulator = BitstreamModulator(sink)
    modulator.write_silence(10)    # 192 samples of 0x80
    modulator.write_byte(0x26)     # 176 samples, added to the checksum
"""

from typing import BinaryIO, Final, Optional

from sc_tapewave.config import DEFAULT_WAVE_FORMAT, WaveFormat
from sc_tapewave.tape.checksum import Checksum

# =============================================================================
# Sample Levels and Patterns
# =============================================================================

SAMPLE_HIGH: Final[int] = 0xFF
SAMPLE_LOW: Final[int] = 0x00
SAMPLE_SILENCE: Final[int] = 0x80

SAMPLES_PER_BIT: Final[int] = 16
BITS_PER_FRAME: Final[int] = 11
SAMPLES_PER_BYTE: Final[int] = SAMPLES_PER_BIT * BITS_PER_FRAME

_HIGH_X4: Final[bytes] = bytes([SAMPLE_HIGH] * 4)
_LOW_X4: Final[bytes] = bytes([SAMPLE_LOW] * 4)

ONE_BIT_PATTERN: Final[bytes] = _HIGH_X4 + _LOW_X4 + _HIGH_X4 + _LOW_X4
ZERO_BIT_PATTERN: Final[bytes] = _HIGH_X4 + _HIGH_X4 + _LOW_X4 + _LOW_X4


# =============================================================================
# Framing
# =============================================================================

def frame_bits(value: int) -> tuple[int, ...]:
    """
    Get the 11-bit frame for one byte.

    Args:
        value: Byte value (0-255)

    Returns:
        Start bit, eight data bits least-significant first, two stop bits

    Example:
        >>> frame_bits(0x01)
        (0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 1)
    """
    data_bits = tuple((value >> i) & 1 for i in range(8))
    return (0,) + data_bits + (1, 1)


def bit_samples(value: int) -> bytes:
    """Get the 16-sample pattern for one bit."""
    return ONE_BIT_PATTERN if value else ZERO_BIT_PATTERN


def byte_samples(value: int) -> bytes:
    """Get the 176-sample pattern for one framed byte."""
    return b"".join(bit_samples(bit) for bit in frame_bits(value))


# Every framed byte is one of 256 fixed patterns
_BYTE_TABLE: Final[tuple[bytes, ...]] = tuple(byte_samples(v) for v in range(256))


# =============================================================================
# Modulator
# =============================================================================

class BitstreamModulator:
    """
    Writes modulated tape bits to a binary sink.

    The modulator owns the checksum accumulator of the record currently
    being written. Every byte passed to write_byte() is added to it; the
    assembler decides when a record starts by calling checksum.reset().

    Attributes:
        sink: Binary stream receiving the samples
        checksum: Accumulator updated by every framed byte
        samples_written: Number of samples written so far
    """

    def __init__(
        self,
        sink: BinaryIO,
        checksum: Optional[Checksum] = None,
        wave_format: WaveFormat = DEFAULT_WAVE_FORMAT,
    ):
        self.sink = sink
        self.checksum = checksum if checksum is not None else Checksum()
        self.wave_format = wave_format
        self.samples_written = 0

    def _write(self, samples: bytes) -> None:
        self.sink.write(samples)
        self.samples_written += len(samples)

    def write_bit(self, value: int) -> None:
        """Write one bit (16 samples)."""
        self._write(bit_samples(value))

    def write_byte(self, value: int) -> None:
        """
        Write one framed byte (176 samples) and add it to the checksum.

        Args:
            value: Byte value (0-255)
        """
        self._write(_BYTE_TABLE[value])
        self.checksum.add(value)

    def write_bytes(self, data: bytes) -> None:
        """Write each byte of data through write_byte()."""
        for value in data:
            self.write_byte(value)

    def write_leader(self, bit_count: int) -> None:
        """
        Write a leader tone of bit_count one-bits.

        Leader bits are raw bits, not framed bytes, so they never touch
        the checksum.
        """
        self._write(ONE_BIT_PATTERN * bit_count)

    def write_silence(self, duration_ms: int) -> None:
        """
        Write duration_ms milliseconds of silence at the 0x80 mid-point.

        At 19200 Hz this is ``duration_ms * 192 // 10`` samples.
        """
        count = self.wave_format.samples_for_ms(duration_ms)
        self._write(bytes([SAMPLE_SILENCE]) * count)
