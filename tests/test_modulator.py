"""
Bitstream Modulator Unit Tests
==============================

Test Categories
---------------
1. Framing: start, data and stop bits of each byte
2. Patterns: the 16-sample bit cells
3. Modulator: samples written to the sink and checksum side effects
"""

import io

import pytest

from sc_tapewave.config import WaveFormat
from sc_tapewave.tape import (
    BitstreamModulator,
    Checksum,
    ONE_BIT_PATTERN,
    ZERO_BIT_PATTERN,
    SAMPLE_SILENCE,
    SAMPLES_PER_BIT,
    SAMPLES_PER_BYTE,
    bit_samples,
    byte_samples,
    frame_bits,
)


@pytest.fixture
def sink() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture
def modulator(sink: io.BytesIO) -> BitstreamModulator:
    return BitstreamModulator(sink)


# =============================================================================
# Framing Tests
# =============================================================================

class TestFrameBits:
    """Tests for frame_bits()."""

    def test_frame_length(self):
        """Every byte is framed as 11 bits."""
        for value in (0x00, 0x01, 0x7F, 0x80, 0xA5, 0xFF):
            assert len(frame_bits(value)) == 11

    def test_start_and_stop_bits(self):
        """Bit 1 is a zero start bit, bits 10-11 are one stop bits."""
        for value in range(256):
            bits = frame_bits(value)
            assert bits[0] == 0
            assert bits[9:] == (1, 1)

    def test_data_bits_lsb_first(self):
        """Bits 2-9 carry the byte least-significant bit first."""
        for value in range(256):
            bits = frame_bits(value)
            assert sum(bit << i for i, bit in enumerate(bits[1:9])) == value

    def test_known_frame(self):
        """0x26 = 0b00100110 is sent as 0 1 1 0 0 1 0 0."""
        assert frame_bits(0x26) == (0, 0, 1, 1, 0, 0, 1, 0, 0, 1, 1)


# =============================================================================
# Pattern Tests
# =============================================================================

class TestBitPatterns:
    """Tests for the 16-sample bit cells."""

    def test_one_bit_is_two_cycles(self):
        """A one bit is two full square-wave cycles."""
        high, low = b"\xff" * 4, b"\x00" * 4
        assert ONE_BIT_PATTERN == high + low + high + low

    def test_zero_bit_is_one_cycle(self):
        """A zero bit is one cycle stretched over the same 16 samples."""
        assert ZERO_BIT_PATTERN == b"\xff" * 8 + b"\x00" * 8

    def test_pattern_lengths(self):
        assert len(ONE_BIT_PATTERN) == SAMPLES_PER_BIT == 16
        assert len(ZERO_BIT_PATTERN) == SAMPLES_PER_BIT

    def test_bit_samples(self):
        assert bit_samples(1) == ONE_BIT_PATTERN
        assert bit_samples(0) == ZERO_BIT_PATTERN

    def test_byte_samples(self):
        """A framed byte is the concatenation of its 11 bit cells."""
        samples = byte_samples(0x5A)
        assert len(samples) == SAMPLES_PER_BYTE == 176
        cells = [samples[i:i + 16] for i in range(0, 176, 16)]
        assert cells == [bit_samples(bit) for bit in frame_bits(0x5A)]


# =============================================================================
# Modulator Tests
# =============================================================================

class TestBitstreamModulator:
    """Tests for BitstreamModulator."""

    def test_write_bit(self, modulator, sink):
        modulator.write_bit(1)
        modulator.write_bit(0)
        assert sink.getvalue() == ONE_BIT_PATTERN + ZERO_BIT_PATTERN
        assert modulator.samples_written == 32

    def test_write_byte_samples(self, modulator, sink):
        modulator.write_byte(0x26)
        assert sink.getvalue() == byte_samples(0x26)
        assert modulator.samples_written == 176

    def test_write_byte_updates_checksum(self, modulator):
        """Every framed byte is added to the active checksum."""
        modulator.write_byte(0x80)
        modulator.write_byte(0x90)
        assert modulator.checksum.total == 0x10  # wraps at 8 bits

    def test_shared_checksum(self, sink):
        """The modulator updates a checksum passed in by the caller."""
        checksum = Checksum()
        modulator = BitstreamModulator(sink, checksum)
        modulator.write_bytes(b"\x01\x02")
        assert checksum.total == 3

    def test_leader_does_not_touch_checksum(self, modulator, sink):
        """Leader bits are raw bits, not framed bytes."""
        modulator.write_leader(10)
        assert sink.getvalue() == ONE_BIT_PATTERN * 10
        assert modulator.checksum.total == 0

    @pytest.mark.parametrize("duration_ms, count", [
        (0, 0),
        (1, 19),
        (10, 192),
        (15, 288),
        (1000, 19200),
    ])
    def test_silence_sample_count(self, modulator, sink, duration_ms, count):
        """Silence of D ms is D * 192 // 10 samples of 0x80."""
        modulator.write_silence(duration_ms)
        data = sink.getvalue()
        assert len(data) == count == duration_ms * 192 // 10
        assert set(data) <= {SAMPLE_SILENCE}

    def test_silence_follows_sample_rate(self, sink):
        """Silence length is derived from the wave format's sample rate."""
        modulator = BitstreamModulator(sink, wave_format=WaveFormat(sample_rate=8000))
        modulator.write_silence(10)
        assert modulator.samples_written == 80
