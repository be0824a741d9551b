"""
WAV Container
=============

This module wraps the modulator's sample stream in a RIFF/WAVE file.

File Layout
-----------
    Offset  Size    Description
    ------  ----    -----------
    0       4       "RIFF"
    4       4       RIFF size: file size - 8
    8       4       "WAVE"
    12      4       "fmt "
    16      4       Format chunk size (16)
    20      2       Format tag (1 = linear PCM)
    22      2       Channels (1)
    24      4       Sample rate (19200)
    28      4       Byte rate (19200)
    32      2       Block align (1)
    34      2       Bits per sample (8)
    36      4       "data"
    40      4       Data size: file size - 44
    44      n       Samples (unsigned 8-bit)

All integers are little-endian.

The two size fields are only known once the last sample is written.
WaveWriter writes zero placeholders, remembers where they are, and seeks
back to patch them when the block exits without an exception.
"""

from dataclasses import dataclass
from typing import BinaryIO, Final, Optional
import logging
import struct

from sc_tapewave.config import DEFAULT_WAVE_FORMAT, WaveFormat
from sc_tapewave.errors import ContainerFormatError

logger = logging.getLogger(__name__)


# =============================================================================
# Header Constants
# =============================================================================

HEADER_SIZE: Final[int] = 44
RIFF_SIZE_OFFSET: Final[int] = 4
DATA_SIZE_OFFSET: Final[int] = 40
FORMAT_CHUNK_SIZE: Final[int] = 16
FORMAT_PCM: Final[int] = 1

# "RIFF" <size> "WAVE" "fmt " <16> <fmt fields> "data" <size>
_HEADER_STRUCT: Final[struct.Struct] = struct.Struct("<4sI4s4sIHHIIHH4sI")


def build_wave_header(data_size: int, wave_format: WaveFormat = DEFAULT_WAVE_FORMAT) -> bytes:
    """
    Build the 44-byte header for data_size bytes of samples.

    Args:
        data_size: Size of the sample data in bytes
        wave_format: Sample format to describe

    Returns:
        The complete header
    """
    return _HEADER_STRUCT.pack(
        b"RIFF",
        HEADER_SIZE - 8 + data_size,
        b"WAVE",
        b"fmt ",
        FORMAT_CHUNK_SIZE,
        FORMAT_PCM,
        wave_format.channels,
        wave_format.sample_rate,
        wave_format.byte_rate,
        wave_format.block_align,
        wave_format.bits_per_sample,
        b"data",
        data_size,
    )


# =============================================================================
# Header Parsing
# =============================================================================

@dataclass(frozen=True)
class WaveHeader:
    """
    Decoded WAV header fields.

    Attributes:
        riff_size: Value of the RIFF size field
        wave_format: Sample format described by the fmt chunk
        data_size: Value of the data size field
    """
    riff_size: int
    wave_format: WaveFormat
    data_size: int

    def is_consistent(self, file_size: int) -> bool:
        """Check that both size fields agree with the actual file size."""
        return (self.riff_size == file_size - 8
                and self.data_size == file_size - HEADER_SIZE)


def parse_wave_header(
    data: bytes,
    expected_format: Optional[WaveFormat] = DEFAULT_WAVE_FORMAT,
) -> WaveHeader:
    """
    Parse and validate the 44-byte header at the start of data.

    Args:
        data: File contents (at least 44 bytes)
        expected_format: Format the file must use, or None to accept any
            8-bit mono PCM format

    Returns:
        The parsed WaveHeader

    Raises:
        ContainerFormatError: If the tags, chunk size or sample format
            are not what the encoder writes
    """
    if len(data) < HEADER_SIZE:
        raise ContainerFormatError(
            f"File too short for a WAV header: {len(data)} bytes"
        )

    (riff_tag, riff_size, wave_tag, fmt_tag, fmt_size, format_tag,
     channels, sample_rate, byte_rate, block_align, bits_per_sample,
     data_tag, data_size) = _HEADER_STRUCT.unpack_from(data)

    if riff_tag != b"RIFF" or wave_tag != b"WAVE":
        raise ContainerFormatError("Not a RIFF/WAVE file")
    if fmt_tag != b"fmt " or fmt_size != FORMAT_CHUNK_SIZE:
        raise ContainerFormatError("Missing or unsupported 'fmt ' chunk")
    if data_tag != b"data":
        raise ContainerFormatError("Missing 'data' chunk after format chunk")
    if format_tag != FORMAT_PCM:
        raise ContainerFormatError(f"Unsupported format tag {format_tag} (expected PCM)")
    if channels != 1 or bits_per_sample != 8:
        raise ContainerFormatError(
            f"Unsupported sample format: {channels} channel(s), "
            f"{bits_per_sample} bits (expected 8-bit mono)"
        )

    wave_format = WaveFormat(
        sample_rate=sample_rate,
        channels=channels,
        bits_per_sample=bits_per_sample,
    )
    if byte_rate != wave_format.byte_rate or block_align != wave_format.block_align:
        raise ContainerFormatError("Inconsistent byte rate or block alignment")
    if expected_format is not None and wave_format != expected_format:
        raise ContainerFormatError(
            f"Unsupported sample rate {sample_rate} Hz "
            f"(expected {expected_format.sample_rate} Hz)"
        )

    return WaveHeader(riff_size=riff_size, wave_format=wave_format, data_size=data_size)


# =============================================================================
# Streaming Writer
# =============================================================================

class WaveWriter:
    """
    Streams samples into a WAV container on a seekable sink.

    Entering the context writes the header with zero size fields. Leaving
    it normally seeks back and patches both sizes; leaving it with an
    exception patches nothing, so the output stays visibly incomplete.

    Example:
        >>> with open("tape.wav", "wb") as f, WaveWriter(f) as wav:
        ...     wav.write(samples)
    """

    def __init__(self, sink: BinaryIO, wave_format: WaveFormat = DEFAULT_WAVE_FORMAT):
        self.sink = sink
        self.wave_format = wave_format
        self._start = 0
        self._data_size = 0
        self._finalized = False

    def __enter__(self) -> "WaveWriter":
        self._start = self.sink.tell()
        self.sink.write(build_wave_header(0, self.wave_format))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.finalize()

    # The modulator only needs a write() method, so the writer itself
    # can serve as its sink.
    def write(self, samples: bytes) -> int:
        """Append samples to the data chunk."""
        written = self.sink.write(samples)
        self._data_size += len(samples)
        return written

    @property
    def data_size(self) -> int:
        """Bytes of sample data written so far."""
        return self._data_size

    @property
    def file_size(self) -> int:
        """Total container size once finalized."""
        return HEADER_SIZE + self._data_size

    def finalize(self) -> None:
        """Patch the RIFF and data size fields."""
        if self._finalized:
            return
        end = self.sink.tell()
        self.sink.seek(self._start + RIFF_SIZE_OFFSET)
        self.sink.write(struct.pack("<I", self.file_size - 8))
        self.sink.seek(self._start + DATA_SIZE_OFFSET)
        self.sink.write(struct.pack("<I", self._data_size))
        self.sink.seek(end)
        self._finalized = True
        logger.debug(f"Patched WAV sizes: {self.file_size} bytes total")
