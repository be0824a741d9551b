"""
WAV Container Unit Tests
========================

Test Categories
---------------
1. Header: field layout of the 44-byte header
2. Writer: placeholder and patching behaviour of WaveWriter
3. Parser: header validation
"""

import io
import struct

import pytest

from sc_tapewave.config import WaveFormat
from sc_tapewave.errors import ContainerFormatError
from sc_tapewave.tape import (
    HEADER_SIZE,
    WaveWriter,
    build_wave_header,
    encode_tape,
    parse_wave_header,
)


# =============================================================================
# Header Tests
# =============================================================================

class TestBuildWaveHeader:
    """Tests for build_wave_header()."""

    def test_layout(self):
        header = build_wave_header(100)
        assert len(header) == HEADER_SIZE == 44
        assert header[0:4] == b"RIFF"
        assert struct.unpack_from("<I", header, 4)[0] == 136
        assert header[8:16] == b"WAVEfmt "
        assert header[36:40] == b"data"
        assert struct.unpack_from("<I", header, 40)[0] == 100

    def test_format_chunk(self):
        """Linear PCM, mono, 19200 Hz, 19200 bytes/s, 1-byte blocks, 8 bits."""
        header = build_wave_header(0)
        fields = struct.unpack_from("<IHHIIHH", header, 16)
        assert fields == (16, 1, 1, 19200, 19200, 1, 8)


# =============================================================================
# Writer Tests
# =============================================================================

class TestWaveWriter:
    """Tests for WaveWriter."""

    def test_patches_sizes_on_exit(self):
        sink = io.BytesIO()
        with WaveWriter(sink) as wav:
            wav.write(b"\x80" * 10)
            wav.write(b"\xff" * 5)
        data = sink.getvalue()
        assert len(data) == 59
        assert struct.unpack_from("<I", data, 4)[0] == len(data) - 8
        assert struct.unpack_from("<I", data, 40)[0] == len(data) - 44
        assert wav.data_size == 15
        assert wav.file_size == 59

    def test_placeholder_until_finalized(self):
        sink = io.BytesIO()
        wav = WaveWriter(sink).__enter__()
        wav.write(b"\x80" * 8)
        assert struct.unpack_from("<I", sink.getvalue(), 40)[0] == 0
        wav.finalize()
        assert struct.unpack_from("<I", sink.getvalue(), 40)[0] == 8

    def test_not_patched_on_error(self):
        """An exception inside the block leaves the placeholders in place."""
        sink = io.BytesIO()
        with pytest.raises(RuntimeError):
            with WaveWriter(sink) as wav:
                wav.write(b"\x80" * 8)
                raise RuntimeError("write failed")
        data = sink.getvalue()
        assert struct.unpack_from("<I", data, 4)[0] == 36
        assert struct.unpack_from("<I", data, 40)[0] == 0

    def test_writes_continue_after_finalize_position(self):
        """Patching restores the stream position to the end."""
        sink = io.BytesIO()
        with WaveWriter(sink) as wav:
            wav.write(b"\x00" * 4)
        assert sink.tell() == 48

    def test_encoded_tape_sizes(self, sample_program, machine_code):
        for program in (b"", sample_program, bytes(1000)):
            data = encode_tape(program, "SIZE", machine_code)
            assert struct.unpack_from("<I", data, 4)[0] == len(data) - 8
            assert struct.unpack_from("<I", data, 40)[0] == len(data) - 44


# =============================================================================
# Parser Tests
# =============================================================================

class TestParseWaveHeader:
    """Tests for parse_wave_header()."""

    def test_round_trip(self):
        header = parse_wave_header(build_wave_header(1234))
        assert header.data_size == 1234
        assert header.riff_size == 1270
        assert header.wave_format == WaveFormat()
        assert header.is_consistent(44 + 1234)

    def test_too_short(self):
        with pytest.raises(ContainerFormatError, match="too short"):
            parse_wave_header(b"RIFF")

    def test_not_riff(self):
        data = bytearray(build_wave_header(0))
        data[0:4] = b"RIFX"
        with pytest.raises(ContainerFormatError, match="RIFF"):
            parse_wave_header(bytes(data))

    def test_wrong_sample_rate(self):
        data = build_wave_header(0, WaveFormat(sample_rate=44100))
        with pytest.raises(ContainerFormatError, match="44100"):
            parse_wave_header(data)
        assert parse_wave_header(data, expected_format=None).wave_format.sample_rate == 44100

    def test_wrong_sample_width(self):
        data = build_wave_header(0, WaveFormat(bits_per_sample=16))
        with pytest.raises(ContainerFormatError, match="8-bit mono"):
            parse_wave_header(data)

    def test_inconsistent_sizes(self):
        header = parse_wave_header(build_wave_header(10))
        assert not header.is_consistent(44 + 11)
